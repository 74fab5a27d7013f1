"""Error types surfaced by modindex commands."""

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_NOT_FOUND = 2


class ModIndexError(Exception):
    """Base error. ``exit_code`` is the process status the CLI exits with."""

    exit_code = EXIT_USAGE


class UsageError(ModIndexError):
    """Incompatible or malformed options, detected before any lookup."""

    exit_code = EXIT_USAGE


class NotFound(ModIndexError):
    """A lookup that needs at least one entry found none."""

    exit_code = EXIT_NOT_FOUND

    def __init__(self, query: str):
        super().__init__(f"Symbol not found: {query}")
        self.query = query

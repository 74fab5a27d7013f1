"""Name trie for fast prefix completion within a module scope."""


class TrieNode:
    """Node in a trie data structure."""

    __slots__ = ("children", "entry_ids")

    def __init__(self):
        self.children: dict[str, "TrieNode"] = {}
        self.entry_ids: list[int] = []


class NameTrie:
    """Trie over the member names of one module.

    Names are case-sensitive: ``List`` and ``list`` are different
    identifiers.
    """

    def __init__(self):
        self.root = TrieNode()

    def add(self, name: str, entry_id: int):
        """Add a member name.

        Args:
            name: Short name of the member (e.g. "map").
            entry_id: Ordinal of the entry in the index.
        """
        node = self.root
        for char in name:
            if char not in node.children:
                node.children[char] = TrieNode()
            node = node.children[char]
        if entry_id not in node.entry_ids:
            node.entry_ids.append(entry_id)

    def search_prefix(self, prefix: str) -> list[int]:
        """Find all entries whose name starts with the given prefix.

        Args:
            prefix: Prefix to search for; an empty prefix matches every name.

        Returns:
            Matching entry ordinals, sorted (declaration order).
        """
        node = self.root
        for char in prefix:
            if char not in node.children:
                return []
            node = node.children[char]

        results: list[int] = []
        self._collect_ids(node, results)
        results.sort()
        return results

    def _collect_ids(self, node: TrieNode, results: list[int]):
        """Collect all entry ordinals under a trie node."""
        stack = [node]
        while stack:
            current = stack.pop()
            results.extend(current.entry_ids)
            stack.extend(current.children.values())

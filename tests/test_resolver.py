"""Tests for query resolution and the location fallback policy."""

from unittest.mock import MagicMock

import pytest

from modindex.config import QueryOptions, TieBreak
from modindex.errors import NotFound
from modindex.models import Entry, Kind, KindTag, Lazy, Location
from modindex.queries import QueryResolver, ResolveQuery, select_entry

IMPL = Location("a.ml", 10, 2)
SIG = Location("a.mli", 3, 0)


def make_entry(path=("A", "x"), tag=KindTag.VALUE, sig=None, impl=None, owner=None) -> Entry:
    return Entry(
        path=tuple(path),
        kind=Kind(tag, owner),
        location_sig=sig,
        loc_impl_cell=Lazy.of(impl),
    )


def make_provider(lookup=(), completions=()):
    provider = MagicMock()
    provider.lookup_all.return_value = list(lookup)
    provider.complete.return_value = list(completions)
    return provider


class TestResolveAll:
    def test_preserves_ambiguity(self):
        entries = [make_entry(("List", "map")), make_entry(("Option", "map"))]
        resolver = QueryResolver(make_provider(entries))
        assert resolver.resolve_all("map") == entries

    def test_empty_does_not_raise(self):
        resolver = QueryResolver(make_provider())
        assert resolver.resolve_all("nothing") == []

    def test_resolve_result(self):
        result = ResolveQuery(make_provider([make_entry()])).execute("A.x")
        assert result.found
        assert result.unique
        assert result.query == "A.x"


class TestResolveUnique:
    def test_not_found(self):
        resolver = QueryResolver(make_provider())
        with pytest.raises(NotFound) as excinfo:
            resolver.resolve_unique("Nope.x")
        assert excinfo.value.query == "Nope.x"
        assert excinfo.value.exit_code == 2

    def test_single(self):
        entry = make_entry()
        assert QueryResolver(make_provider([entry])).resolve_unique("A.x") is entry

    def test_first_is_default(self):
        entries = [make_entry(("A", "t"), KindTag.TYPE), make_entry(("A", "t"), KindTag.VALUE)]
        resolver = QueryResolver(make_provider(entries))
        assert resolver.resolve_unique("A.t") is entries[0]

    def test_kind_priority(self):
        entries = [
            make_entry(("A", "t"), KindTag.TYPE),
            make_entry(("A", "t"), KindTag.MODULE),
            make_entry(("A", "t"), KindTag.VALUE),
        ]
        resolver = QueryResolver(make_provider(entries), QueryOptions(tie_break=TieBreak.KIND))
        assert resolver.resolve_unique("A.t") is entries[2]

    def test_kind_priority_ties_keep_order(self):
        entries = [make_entry(("B", "x")), make_entry(("A", "x"))]
        assert select_entry(entries, TieBreak.KIND) is entries[0]

    @pytest.mark.parametrize("tie_break", list(TieBreak))
    def test_deterministic(self, tie_break):
        entries = [
            make_entry(("A", "t"), KindTag.TYPE),
            make_entry(("B", "t"), KindTag.EXCEPTION),
            make_entry(("C", "t"), KindTag.FIELD, owner="r"),
        ]
        picks = {id(select_entry(list(entries), tie_break)) for _ in range(5)}
        assert len(picks) == 1


class TestComplete:
    def test_passes_provider_order(self):
        entries = [make_entry(("List", "map")), make_entry(("List", "mapi"))]
        provider = make_provider(completions=entries)
        assert QueryResolver(provider).complete("List.ma") == entries
        provider.complete.assert_called_once_with("List.ma")

    def test_kind_filter(self):
        entries = [make_entry(("t",), KindTag.TYPE), make_entry(("x",), KindTag.VALUE)]
        options = QueryOptions(kinds=frozenset({KindTag.TYPE}))
        assert QueryResolver(make_provider(completions=entries), options).complete("") == entries[:1]


class TestResolveLocation:
    def test_interface_present(self):
        with_sig = make_entry(("A", "x"), sig=SIG, impl=IMPL)
        impl_only = make_entry(("B", "x"), impl=IMPL)
        resolver = QueryResolver(make_provider([with_sig, impl_only]))
        entries, interface = resolver.resolve_location("x", prefer_interface=True)
        assert entries == [with_sig]
        assert interface is True

    def test_interface_falls_back_to_implementation(self):
        impl_only = make_entry(impl=IMPL)
        resolver = QueryResolver(make_provider([impl_only, make_entry(("B", "x"))]))
        entries, interface = resolver.resolve_location("x", prefer_interface=True)
        assert entries == [impl_only]
        assert interface is False

    def test_implementation_falls_back_to_interface(self):
        sig_only = make_entry(sig=SIG)
        resolver = QueryResolver(make_provider([sig_only]))
        result = resolver.resolve_location("x", prefer_interface=False)
        assert result.entries == [sig_only]
        assert result.interface is True

    def test_implementation_present(self):
        both = make_entry(sig=SIG, impl=IMPL)
        result = QueryResolver(make_provider([both])).resolve_location("x", prefer_interface=False)
        assert result.entries == [both]
        assert result.interface is False

    def test_no_location(self):
        resolver = QueryResolver(make_provider([make_entry()]))
        result = resolver.resolve_location("x", prefer_interface=True)
        assert result.entries == []
        assert not result.found

    def test_no_match(self):
        result = QueryResolver(make_provider()).resolve_location("x", prefer_interface=False)
        assert not result.found

    def test_keyword_never_located(self):
        keyword = Entry(path=("match",), kind=Kind(KindTag.KEYWORD), loc_impl_cell=Lazy.of(IMPL))
        result = QueryResolver(make_provider([keyword])).resolve_location("match", prefer_interface=False)
        assert not result.found

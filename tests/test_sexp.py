"""Tests for the s-expression encoding."""

import pytest

from modindex.models import Entry, Kind, KindTag, Lazy
from modindex.output.sexp import SexpDecodeError, dumps, encode_entry, loads, quote, unquote


def make_entry(doc=None, **overrides) -> Entry:
    fields = dict(
        path=("String", "concat"),
        kind=Kind(KindTag.VALUE),
        type_cell=Lazy.of("string -> string list -> string"),
        doc_cell=Lazy.of(doc),
    )
    fields.update(overrides)
    return Entry(**fields)


class TestQuote:
    def test_plain(self):
        assert quote("map") == '"map"'

    def test_escapes(self):
        assert quote('a "b" \\ c') == '"a \\"b\\" \\\\ c"'
        assert quote("x\ny\tz") == '"x\\ny\\tz"'

    def test_control_chars_octal(self):
        assert quote("\x01") == '"\\001"'

    @pytest.mark.parametrize(
        "value",
        ['say "hi"', "back\\slash", "\\\"", "line\nbreak\r\n", "\x00\x1f\x7f", "unicode: λ → ∀", ""],
    )
    def test_round_trip(self, value):
        assert unquote(quote(value)) == value

    def test_unterminated(self):
        with pytest.raises(SexpDecodeError):
            unquote('"abc')

    def test_bad_escape(self):
        with pytest.raises(SexpDecodeError):
            unquote('"\\q"')


class TestEncode:
    def test_record_without_doc(self):
        assert encode_entry(make_entry()) == (
            '("String.concat" (:path . "String.concat")'
            ' (:type . "string -> string list -> string") (:kind . "val"))'
        )

    def test_record_with_doc(self):
        record = encode_entry(make_entry(doc="Joins."))
        assert record.endswith('(:kind . "val") (:doc . "Joins."))')

    def test_short_path_is_qualified(self):
        record = encode_entry(make_entry(access_path=("concat",)))
        assert record.startswith('("concat" (:path . "String.concat")')

    def test_empty_list(self):
        assert dumps([]) == "(\n)\n"

    def test_owner_kind(self):
        entry = make_entry(path=("Option", "None"), kind=Kind(KindTag.CONSTRUCTOR, "option"))
        assert '(:kind . "constr(option)")' in encode_entry(entry)


class TestDecode:
    def test_round_trip_doc_with_quotes_and_backslashes(self):
        doc = 'Joins with "sep", e.g. a path \\ separator.\nSecond line.'
        records = loads(dumps([make_entry(doc=doc), make_entry(path=("List", "map"))]))
        assert records == [
            {
                "name": "String.concat",
                "path": "String.concat",
                "type": "string -> string list -> string",
                "kind": "val",
                "doc": doc,
            },
            {
                "name": "List.map",
                "path": "List.map",
                "type": "string -> string list -> string",
                "kind": "val",
            },
        ]

    def test_empty(self):
        assert loads("(\n)\n") == []

    @pytest.mark.parametrize("text", ["", "(", '(("a" (:path . "b"))', '("a")', '(("a" (:path "b")))'])
    def test_malformed(self, text):
        with pytest.raises(SexpDecodeError):
            loads(text)

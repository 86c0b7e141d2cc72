import io

import pytest

from jhql.errors.errors import DecodeError, GrammarError, UnsupportedTypeError
from jhql.factory.compiler import compile_from_source
from jhql.query.query import ListQueryer, ObjectQueryer, TextQueryer
from jhql.util.decoding import decode, source_kind

query_text = '{"title": "text:/html/head/title", "items": {"_type": "list", "from": "//li", "select": "text:."}}'

expected = ObjectQueryer(
    {
        "title": TextQueryer(value="/html/head/title"),
        "items": ListQueryer(from_="//li", select=TextQueryer(value=".")),
    }
)


def test_text():
    assert compile_from_source(query_text) == expected


def test_bytes():
    assert compile_from_source(query_text.encode("utf-8")) == expected


def test_file(tmp_path):
    path = tmp_path / "query.json"
    path.write_text(query_text)
    assert compile_from_source(path) == expected


def test_streams():
    assert compile_from_source(io.StringIO(query_text)) == expected
    assert compile_from_source(io.BytesIO(query_text.encode("utf-8"))) == expected


def test_shorthand_document():
    assert compile_from_source('"text:."') == TextQueryer(value=".")


def test_key_order_kept():
    assert list(decode('{"b": 1, "a": 2}')) == ["b", "a"]


def test_malformed_json():
    with pytest.raises(DecodeError) as exc_info:
        compile_from_source('{"title": ')
    assert exc_info.value.__cause__ is not None


def test_missing_file(tmp_path):
    with pytest.raises(DecodeError, match="file"):
        compile_from_source(tmp_path / "missing.json")


def test_undecodable_bytes():
    with pytest.raises(DecodeError):
        compile_from_source(b"\xff\xfe\x00")


def test_grammar_error_is_not_decode_error():
    with pytest.raises(UnsupportedTypeError) as exc_info:
        compile_from_source('{"_type": "nope"}')
    assert not isinstance(exc_info.value, DecodeError)

    with pytest.raises(GrammarError):
        compile_from_source("42")


def test_source_kind(tmp_path):
    assert source_kind("{}") == "text"
    assert source_kind(b"{}") == "text"
    assert source_kind(tmp_path) == "file"
    assert source_kind(io.StringIO()) == "stream"


def test_deeply_nested_json():
    with pytest.raises(DecodeError):
        compile_from_source('{"a":' * 100000 + '"text:x"' + "}" * 100000)

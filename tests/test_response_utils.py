"""Tests for body parsing and tool payload helpers."""

import json

from utils.response_utils import dump_error, dump_result, robust_parse_text


def test_parses_json():
    assert robust_parse_text('[{"id": "a"}]') == [{"id": "a"}]


def test_parses_ndjson():
    assert robust_parse_text('{"a": 1}\n{"b": 2}\n') == [{"a": 1}, {"b": 2}]


def test_parses_leading_json_with_noise():
    assert robust_parse_text('{"message": "x"} trailing garbage') == {"message": "x"}


def test_returns_raw_text():
    assert robust_parse_text("<html>Bad gateway</html>") == "<html>Bad gateway</html>"


def test_dump_error_shapes():
    assert json.loads(dump_error(ValueError("bad"))) == {"error": "bad"}
    assert json.loads(dump_error(RuntimeError())) == {"error": "RuntimeError"}
    assert json.loads(dump_error("plain")) == {"error": "plain"}


def test_dump_result_keeps_unicode():
    assert "héllo" in dump_result({"message": "héllo"})

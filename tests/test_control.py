import pytest

from meshkit.collateral.control import (
    build_nested_map,
    dereference_map,
    emit_text,
    normalize_id,
    unquote_usage,
)


def test_dereference_map_complex_tree():
    mapping = {"1": "2", "3": "4", "0": "2", "2": "3", "5": "6"}
    assert dereference_map(mapping) == {
        "0": "4",
        "1": "4",
        "2": "4",
        "3": "4",
        "5": "6",
    }


def test_dereference_map_empty():
    assert dereference_map({}) == {}


def test_dereference_map_cycle_terminates():
    result = dereference_map({"a": "b", "b": "a"})
    assert set(result) == {"a", "b"}
    assert result["a"] == "a"
    assert result["b"] == "b"


def test_build_nested_map_configmap():
    flat = {
        "one.two.valuethree": "onetwovaluethree",
        "one.two.three.valuefour": "onetwothreevaluefour",
        "extra": "thing",
    }
    assert build_nested_map(flat) == {
        "one": {
            "two": {
                "valuethree": "onetwovaluethree",
                "three": {"valuefour": "onetwothreevaluefour"},
            }
        },
        "extra": "thing",
    }


def test_build_nested_map_conflict_raises():
    with pytest.raises(ValueError):
        build_nested_map({"a": "x", "a.b": "y"})


def test_normalize_id():
    assert normalize_id("istioctl proxy.config cluster") == "istioctl-proxy-config-cluster"


def test_unquote_usage_with_backquotes():
    assert unquote_usage("a `name` to show", "string") == ("name", "a name to show")


def test_unquote_usage_single_backquote_uses_type():
    assert unquote_usage("a `name to show", "string") == ("string", "a `name to show")


@pytest.mark.parametrize(
    "type_name, expected",
    [("bool", ""), ("float64", "float"), ("int64", "int"), ("uint64", "uint"), ("duration", "duration")],
)
def test_unquote_usage_type_names(type_name, expected):
    assert unquote_usage("plain usage", type_name) == (expected, "plain usage")


def test_emit_text_paragraphs_and_escaping():
    text = "first <para>\n\nsecond & 'third' \"q\""
    assert emit_text(text) == (
        "<p>first &lt;para&gt;</p>\n"
        "<p>second &amp; &#39;third&#39; &#34;q&#34;</p>\n"
    )
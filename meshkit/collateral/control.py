"""Helpers for generating documentation collateral for command-line tools."""

from __future__ import annotations

from typing import Any, Mapping

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "'": "&#39;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&#34;",
    }
)

_TYPE_PLACEHOLDERS = {
    "bool": "",
    "float64": "float",
    "int64": "int",
    "uint64": "uint",
}


def _escape(text: str) -> str:
    return text.translate(_HTML_ESCAPES)


def dereference_map(mapping: Mapping[str, str]) -> dict[str, str]:
    """Map every alias to the ultimate target at the end of its alias chain.

    The mapping is read as edges of a forest, each alias pointing to its
    target; the result points every alias at the root of its tree. A cycle
    stops the walk at the last name not yet visited.
    """
    result: dict[str, str] = {}
    for alias, target in mapping.items():
        seen = {alias}
        while target in mapping and target not in seen:
            seen.add(target)
            target = mapping[target]
        result[alias] = target
    return result


def build_nested_map(flat_map: Mapping[str, str]) -> dict[str, Any]:
    """Turn dotted keys into nested dictionaries.

    ``{"a.b": "x"}`` becomes ``{"a": {"b": "x"}}``. Raises ValueError when
    a key needs to descend through a name that already holds a value.
    """
    result: dict[str, Any] = {}
    for dotted_key, value in flat_map.items():
        *parents, leaf = dotted_key.split(".")
        current = result
        for part in parents:
            child = current.setdefault(part, {})
            if not isinstance(child, dict):
                raise ValueError(f"key {dotted_key!r} descends through the value at {part!r}")
            current = child
        current[leaf] = value
    return result


def normalize_id(identifier: str) -> str:
    """Make an HTML id from a command path by replacing spaces and dots with dashes."""
    return identifier.replace(" ", "-").replace(".", "-")


def unquote_usage(usage: str, type_name: str) -> tuple[str, str]:
    """Extract a back-quoted placeholder name from a flag's usage text.

    Given "a `name` to show" returns ("name", "a name to show"). Without a
    back-quoted pair the name is guessed from the flag's value type, and
    is empty for booleans.
    """
    start = usage.find("`")
    if start >= 0:
        end = usage.find("`", start + 1)
        if end >= 0:
            name = usage[start + 1 : end]
            return name, usage[:start] + name + usage[end + 1 :]
    return _TYPE_PLACEHOLDERS.get(type_name, type_name), usage


def emit_text(text: str) -> str:
    """Render text as HTML paragraphs, one per blank-line separated block."""
    return "".join(f"<p>{_escape(paragraph)}</p>\n" for paragraph in text.split("\n\n"))
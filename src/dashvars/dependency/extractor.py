"""Reference Extractor - find variable references inside a spec payload.

Variable spec payloads are owned by plugins that evolve independently, so the
extractor never interprets them. It walks the payload as a generic tree of
mappings, sequences and scalars, and pattern-matches every string value.

Recognized forms:
    $name            bare
    ${name}          delimited
    ${name:format}   delimited with a format suffix (suffix ignored)
    ${name.field}    delimited with a field path (path ignored)

Example:
    >>> sorted(extract_references({"expr": "sum by($job) (up{instance=~'${instance:regex}'})"}))
    ['instance', 'job']
    >>> extract_references({"expr": "label_replace(up, 'x', '$1', 'y', '(.*)')"})
    set()
"""

from collections.abc import Iterator, Mapping
from typing import Any

from ..constants import VARIABLE_NAME_PATTERN, VARIABLE_REFERENCE_PATTERN


def _is_variable_name(token: str) -> bool:
    """Reject all-digit captures ($1, ${42}) and anything not shaped like a name."""
    return VARIABLE_NAME_PATTERN.fullmatch(token) is not None


def iter_string_references(text: str) -> Iterator[str]:
    """
    Yield referenced names from a single string, in order of appearance.

    Duplicates are yielded every time they occur.

    Args:
        text: String to scan

    Yields:
        Candidate variable names
    """
    for match in VARIABLE_REFERENCE_PATTERN.finditer(text):
        token = match.group(1) or match.group(2)
        if token and _is_variable_name(token):
            yield token


def iter_references(payload: Any) -> Iterator[str]:
    """
    Walk a payload depth-first and yield every reference found in string values.

    Mapping keys are not scanned. Numbers, booleans, None and unknown object
    types produce nothing.

    Args:
        payload: Arbitrary nested structure (str | number | sequence | mapping)

    Yields:
        Candidate variable names in traversal order
    """
    # Explicit stack instead of recursion: payload depth is plugin-controlled.
    stack: list[Any] = [payload]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            yield from iter_string_references(item)
        elif isinstance(item, Mapping):
            stack.extend(reversed(list(item.values())))
        elif isinstance(item, (list, tuple)):
            stack.extend(reversed(item))


def extract_references(payload: Any) -> set[str]:
    """
    Return the distinct variable names referenced anywhere in a payload.

    Never raises: a malformed payload just yields an empty set.

    Args:
        payload: A variable spec payload

    Returns:
        Set of referenced names
    """
    return set(iter_references(payload))

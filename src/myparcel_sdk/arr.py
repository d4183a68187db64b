"""
Dot-notation access to decoded JSON trees.

A tree is whatever ``json.loads`` returns: dicts, lists and scalars.
``get`` walks it by a dotted path, ``pluck`` projects one field out of a
list of objects.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

Path = Union[str, int, None]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _step(node: Any, segment: str) -> Any:
    """Descend one level, raising KeyError when the segment is absent."""
    if isinstance(node, Mapping):
        return node[segment]

    if _is_sequence(node):
        try:
            index = int(segment)
        except ValueError:
            raise KeyError(segment)
        if index < 0:
            raise KeyError(segment)
        try:
            return node[index]
        except IndexError:
            raise KeyError(segment)

    raise KeyError(segment)


def get(tree: Any, key: Path = None, default: Any = None) -> Any:
    """
    Get an item from a JSON tree using "dot" notation.

    Args:
        tree: Decoded JSON value
        key: Dotted path such as ``"data.shipments.0.id"``; ``None`` returns the tree
        default: Returned when any segment of the path is missing

    Returns:
        The value at ``key`` or ``default``

    Example:
        >>> get({"data": {"ids": [{"id": 1}]}}, "data.ids.0.id")
        1
    """
    if key is None:
        return tree

    key = str(key)

    # A literal key containing dots takes precedence over path traversal
    if isinstance(tree, Mapping) and key in tree:
        return tree[key]

    node = tree
    for segment in key.split("."):
        try:
            node = _step(node, segment)
        except KeyError:
            return default

    return node


def pluck(items: Any, value: str, key: Optional[str] = None) -> Union[List[Any], Dict[Any, Any]]:
    """
    Pluck an array of values from a list of objects.

    Args:
        items: List of mappings (anything else yields an empty result)
        value: Dotted path of the field to collect from each element
        key: Optional dotted path used to key the result instead of listing it

    Returns:
        A list of values, or a dict of ``key -> value`` when ``key`` is given
    """
    if isinstance(items, Mapping):
        items = list(items.values())
    elif not _is_sequence(items):
        return {} if key is not None else []

    if key is None:
        return [get(item, value) for item in items]

    return {get(item, key): get(item, value) for item in items}

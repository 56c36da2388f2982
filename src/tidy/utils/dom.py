"""Tree helpers shared by the removal passes.

Removal always goes through ``Tag.extract()``: the detached subtree keeps its
internal parent links, so a node under a removed ancestor still has a parent
but that chain no longer ends at the document root.
"""

from __future__ import annotations

from bs4 import Tag


def is_attached(node: Tag, root: Tag) -> bool:
    """True if following parent links from ``node`` reaches ``root``."""
    current = node
    while current is not None:
        if current is root:
            return True
        current = current.parent
    return False


def snapshot_elements(root: Tag) -> list[Tag]:
    """All descendant elements of ``root`` in document (depth-first) order."""
    return list(root.find_all(True))


def class_string(tag: Tag) -> str:
    classes = tag.get("class")
    if classes is None:
        return ""
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def attr_string(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def element_count(root: Tag) -> int:
    return len(root.find_all(True))

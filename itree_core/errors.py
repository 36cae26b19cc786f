"""
Exceptions raised by the interactive tree core.

All of these signal programmer or input errors. None of them are transient and
none are retried.
"""

from __future__ import annotations


class TreeError(Exception):
    """Base class for interactive tree errors."""


class MalformedTreeError(TreeError):
    """A node is reachable twice (cycle or shared subtree) or has no key."""


class DuplicateKeyError(TreeError):
    """Two entries of one render set share the same key."""

    def __init__(self, key: str):
        super().__init__(f"Duplicate node key {key!r} in render set")
        self.key = key


class LayoutBoundsError(TreeError):
    """The drawable width or height is not positive."""

    def __init__(self, width: float, height: float):
        super().__init__(
            f"Drawable area must be positive, got width={width} height={height}"
        )
        self.width = width
        self.height = height

"""
Core enumerations for the interactive tree.

This module defines the visibility states a tree node can be in and the
groups a draw plan sorts nodes and links into.
"""

from enum import Enum, auto


class Visibility(Enum):
    """
    Expand/collapse state of a tree node.

    - EXPANDED: children are visible and take part in layout
    - COLLAPSED: children are stashed away and hidden from layout
    """

    EXPANDED = auto()
    """Descendants are held as visible children."""

    COLLAPSED = auto()
    """Descendants are held as hidden children."""


class DiffGroup(Enum):
    """
    Classification of a keyed entry when two render sets are reconciled.

    - ENTERING: present in the new render set only
    - UPDATING: present in both render sets
    - EXITING: present in the previous render set only
    """

    ENTERING = auto()
    """New entry; animates in from the anchor origin."""

    UPDATING = auto()
    """Continuing entry; animates from its previous to its new position."""

    EXITING = auto()
    """Removed entry; animates out toward the anchor."""

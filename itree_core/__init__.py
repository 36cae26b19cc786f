"""
Interactive Tree Core Package.

This package contains the algorithmic core of a collapsible tree diagram:

- Tree data model with explicit expanded/collapsed branch states
- Hierarchy builder deriving the visible nodes of a tree
- Tidy tree layout (Reingold-Tilford) with fixed-height depth bands
- Keyed enter/update/exit reconciliation producing declarative draw plans
- Expand/collapse state machine and the controller tying them together

Painting, animation interpolation and UI event plumbing live outside the core;
see `itree_anim` for presentation-boundary helpers.
"""

__version__ = "0.1.0"

from .enums import Visibility, DiffGroup
from .errors import TreeError, MalformedTreeError, DuplicateKeyError, LayoutBoundsError
from .config import TreeConfig, Margin
from .tree import TreeNode, Expanded, Collapsed
from .models import Anchor, DrawPlan, LayoutNode, LinkEdge, RenderSet
from .hierarchy import Hierarchy, build_hierarchy
from .layout import TreeLayout
from .reconcile import reconcile
from .visibility import VisibilityStateMachine
from .engine import InteractiveTree
from .compiler import compile_from_yaml, compile_from_file, compile_from_dict

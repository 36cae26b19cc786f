"""
YAML/dict compiler for interactive trees.

This module compiles a nested tree description into `TreeNode` objects.

YAML schema (minimal):

name: Top Level
children:
  - name: "Level 2: A"
    key: a            # optional, defaults to name
    collapsed: true   # optional, start with children hidden
    children:
      - name: Son of A
      - name: Daughter of A
  - name: "Level 2: B"

Notes:
- JSON is valid YAML, so JSON tree files compile through the same path.
- Entries without a name (and without a key) are rejected rather than skipped,
  because silently dropping a node would shift every sibling's layout slot.
"""

from __future__ import annotations

from typing import Any, Dict, List, Set, Tuple

import yaml

from .errors import MalformedTreeError
from .tree import Collapsed, Expanded, TreeNode


def _compile_node(spec: Any, path: str) -> TreeNode:
    """
    Compile one entry and everything below it without recursing.

    Each mapping may be compiled only once, so a YAML alias that refers back
    to an enclosing entry (or reuses a subtree) is rejected instead of looping.
    """
    roots: List[TreeNode] = []
    seen: Set[int] = set()
    stack: List[Tuple[Any, str, List[TreeNode]]] = [(spec, path, roots)]
    while stack:
        entry, where, siblings = stack.pop()
        if not isinstance(entry, dict):
            raise MalformedTreeError(f"Tree entry at {where} is not a mapping")
        if id(entry) in seen:
            raise MalformedTreeError(f"Tree entry at {where} appears more than once (cyclic or shared alias)")
        seen.add(id(entry))

        name = entry.get("name")
        key = entry.get("key")
        if name is None and key is None:
            raise MalformedTreeError(f"Tree entry at {where} has no name or key")
        name = str(name if name is not None else key)
        key = str(key) if key is not None else None

        children = entry.get("children", []) or []
        if not isinstance(children, list):
            raise MalformedTreeError(f"children of {name!r} must be a list")

        # Filled in as the children are popped, which happens in display order
        compiled: List[TreeNode] = []
        branch = Collapsed(compiled) if entry.get("collapsed") and children else Expanded(compiled)
        siblings.append(TreeNode(name=name, key=key, branch=branch))
        for i in range(len(children) - 1, -1, -1):
            stack.append((children[i], f"{where}/{i}", compiled))
    return roots[0]


def compile_from_dict(spec: Dict[str, Any]) -> TreeNode:
    """
    Compile a parsed dictionary into a `TreeNode` hierarchy.

    Args:
        spec: Parsed tree dictionary

    Returns:
        TreeNode: Root of the compiled tree

    Raises:
        MalformedTreeError: If an entry is not a mapping, lacks a name/key,
            has non-list children, or is reached twice through an alias
    """
    return _compile_node(spec, "root")


def compile_from_yaml(yaml_text: str) -> TreeNode:
    """Compile from YAML (or JSON) text into a `TreeNode`."""
    data = yaml.safe_load(yaml_text) or {}
    return compile_from_dict(data)


def compile_from_file(path: str) -> TreeNode:
    """Compile from a YAML or JSON file path into a `TreeNode`."""
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    return compile_from_yaml(txt)


def tree_to_dict(root: TreeNode) -> Dict[str, Any]:
    """Inverse of `compile_from_dict`; keys equal to names are omitted."""
    out: List[Dict[str, Any]] = []
    stack: List[Tuple[TreeNode, List[Dict[str, Any]]]] = [(root, out)]
    while stack:
        node, siblings = stack.pop()
        entry: Dict[str, Any] = {"name": node.name}
        if node.key != node.name:
            entry["key"] = node.key
        if node.hidden_children:
            entry["collapsed"] = True
        if node.descendants_holder:
            entry["children"] = []
            for child in reversed(node.descendants_holder):
                stack.append((child, entry["children"]))
        siblings.append(entry)
    return out[0]

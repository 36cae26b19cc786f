"""
Interactive tree presentation-boundary package.

This package provides:
- Presenter and interaction-source adapters around `itree_core.InteractiveTree`
- A frame compiler turning a draw plan into timed, eased frames
- Utilities for easing and vertical link paths
"""

__all__ = [
    # Subpackages will be imported lazily by users
]

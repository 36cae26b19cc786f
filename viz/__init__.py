"""
Visualization helpers for interactive trees.

Converts laid-out render sets into element lists for web graph widgets.
"""

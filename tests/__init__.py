"""
Tests Package.

This package contains test suites for the interactive tree, including unit
tests for the hierarchy builder, layout, reconciliation and visibility state
machine, and integration tests for full click-driven render passes.
"""

# Tests Package

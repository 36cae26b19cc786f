"""
Integration tests for the InteractiveTree controller.

These cover the full click -> toggle -> layout -> reconcile chain on the
sample tree `Top -> [A -> [Son, Daughter], B]` drawn on an 800x400 canvas.
"""

import pytest

from itree_core.config import Margin, TreeConfig
from itree_core.engine import InteractiveTree
from itree_core.enums import DiffGroup, Visibility
from itree_core.errors import DuplicateKeyError, LayoutBoundsError
from itree_core.models import Point, Segment
from itree_core.tree import Collapsed, Expanded, TreeNode

KX = 760.0 / 3.5


def build_sample_tree() -> TreeNode:
    return TreeNode('Top', branch=Expanded([
        TreeNode('A', branch=Expanded([TreeNode('Son'), TreeNode('Daughter')])),
        TreeNode('B'),
    ]))


def mounted_tree(**kw) -> InteractiveTree:
    tree = InteractiveTree(build_sample_tree(), **kw)
    tree.mount()
    return tree


class TestMount:
    def test_all_nodes_enter_from_root(self):
        tree = InteractiveTree(build_sample_tree())
        plan = tree.mount()

        assert [t.key for t in plan.entering] == ['Top', 'A', 'Son', 'Daughter', 'B']
        assert plan.updating == [] and plan.exiting == []
        root_start = Point(pytest.approx(2 * KX), 0.0)
        assert all(t.start == root_start for t in plan.entering)
        assert len(plan.entering_links) == 4
        assert all(l.start_edge.source == l.start_edge.target for l in plan.entering_links)

    def test_mount_records_render_set_and_anchor(self):
        tree = mounted_tree()
        assert tree.mounted
        assert list(tree.render_set.nodes) == ['Top', 'A', 'Son', 'Daughter', 'B']
        assert tree.anchor.key == 'Top'
        assert tree.anchor.y0 == 0.0
        assert tree.passes == 1

    def test_depth_banding_through_controller(self):
        tree = mounted_tree()
        for n in tree.render_set.nodes.values():
            assert n.y == n.depth * 60

    def test_invalid_margins_rejected_up_front(self):
        cfg = TreeConfig(width=40, height=400, margin=Margin(20, 20, 20, 20))
        with pytest.raises(LayoutBoundsError):
            InteractiveTree(build_sample_tree(), cfg)

    def test_duration_from_config(self):
        tree = InteractiveTree(build_sample_tree(), TreeConfig(duration=200))
        assert tree.mount().duration == 200


class TestCollapseScenario:
    def test_collapse_exits_children_into_parent(self):
        tree = mounted_tree()
        a_before = tree.render_set.nodes['A'].pos

        plan = tree.on_interaction('A')

        a_after = tree.render_set.nodes['A'].pos
        assert a_after == Point(pytest.approx(190.0), 60.0)
        assert sorted(plan.keys(DiffGroup.EXITING)) == ['Daughter', 'Son']
        for t in plan.exiting:
            assert t.end == a_after
        a = next(t for t in plan.updating if t.key == 'A')
        assert a.start == a_before
        assert a.end == a_after
        assert plan.entering == []

    def test_collapse_exits_links_into_parent(self):
        tree = mounted_tree()
        plan = tree.on_interaction('A')

        assert sorted(l.key for l in plan.exiting_links) == [('A', 'Daughter'), ('A', 'Son')]
        a_after = tree.render_set.nodes['A'].pos
        assert all(l.end_edge == Segment.degenerate(a_after) for l in plan.exiting_links)
        assert sorted(l.key for l in plan.updating_links) == [('Top', 'A'), ('Top', 'B')]

    def test_anchor_tracks_clicked_node(self):
        tree = mounted_tree()
        a_before = tree.render_set.nodes['A'].pos
        tree.on_interaction('A')

        assert tree.anchor.key == 'A'
        assert tree.anchor.origin == a_before
        assert tree.anchor.current == tree.render_set.nodes['A'].pos

    def test_re_expand_enters_children_from_parent(self):
        tree = mounted_tree()
        tree.on_interaction('A')
        a_at_click = tree.render_set.nodes['A'].pos

        plan = tree.on_interaction('A')

        assert [t.key for t in plan.entering] == ['Son', 'Daughter']
        assert all(t.start == a_at_click for t in plan.entering)
        assert all(l.start_edge == Segment.degenerate(a_at_click) for l in plan.entering_links)
        assert tree.render_set.nodes['Son'].pos == Point(pytest.approx(KX), 120.0)

    def test_round_trip_restores_keys_and_positions(self):
        tree = mounted_tree()
        before = tree.render_set.positions()
        tree.on_interaction('A')
        tree.on_interaction('A')
        assert tree.render_set.positions() == before

    def test_transitions_start_from_last_computed_targets(self):
        tree = mounted_tree()
        tree.on_interaction('A')
        targets = tree.render_set.positions()
        plan = tree.on_interaction('A')
        for t in plan.updating:
            assert (t.start.x, t.start.y) == targets[t.key]


class TestNoOpInteractions:
    def test_leaf_click(self):
        tree = mounted_tree()
        before = tree.render_set
        assert tree.on_interaction('Son') is None
        assert tree.render_set is before
        assert tree.passes == 1

    def test_unknown_key(self):
        tree = mounted_tree()
        assert tree.on_interaction('Nobody') is None

    def test_click_on_exited_node(self):
        tree = mounted_tree()
        tree.on_interaction('A')
        assert tree.on_interaction('Son') is None

    def test_click_before_mount_mounts_first(self):
        tree = InteractiveTree(build_sample_tree())
        plan = tree.on_interaction('A')
        assert tree.passes == 2
        assert sorted(plan.keys(DiffGroup.EXITING)) == ['Daughter', 'Son']


class TestFailedPass:
    def test_duplicate_key_reverts_toggle(self):
        root = TreeNode('r', branch=Expanded([
            TreeNode('a', branch=Collapsed([TreeNode('b')])),
            TreeNode('b'),
        ]))
        tree = InteractiveTree(root)
        tree.mount()
        before = tree.render_set

        with pytest.raises(DuplicateKeyError):
            tree.on_interaction('a')

        assert root.children[0].visibility == Visibility.COLLAPSED
        assert tree.render_set is before
        # The tree is still usable afterwards
        assert tree.on_interaction('b') is None


class TestBulkChanges:
    def test_collapse_all_exits_into_root(self):
        tree = mounted_tree()
        top_before = tree.render_set.nodes['Top'].pos

        plan = tree.collapse_all()

        top_after = tree.render_set.nodes['Top'].pos
        assert top_after == Point(pytest.approx(380.0), 0.0)
        assert sorted(plan.keys(DiffGroup.EXITING)) == ['Daughter', 'Son']
        assert all(t.end == top_after for t in plan.exiting)
        assert tree.anchor.key == 'Top'
        assert tree.anchor.origin == top_before

    def test_click_after_collapse_all_enters_children(self):
        tree = mounted_tree()
        tree.collapse_all()
        a_at_click = tree.render_set.nodes['A'].pos

        plan = tree.on_interaction('A')

        assert [t.key for t in plan.entering] == ['Son', 'Daughter']
        assert all(t.start == a_at_click for t in plan.entering)
        assert 'Son' not in plan.keys(DiffGroup.UPDATING)

    def test_expand_all_restores_layout(self):
        tree = mounted_tree()
        before = tree.render_set.positions()
        tree.collapse_all()

        plan = tree.expand_all()

        assert [t.key for t in plan.entering] == ['Son', 'Daughter']
        assert tree.render_set.positions() == before

    def test_collapse_to_depth_before_mount(self):
        tree = InteractiveTree(build_sample_tree())
        plan = tree.collapse_to_depth(1)

        assert tree.passes == 2
        assert sorted(plan.keys(DiffGroup.EXITING)) == ['Daughter', 'Son']
        assert sorted(tree.render_set.nodes) == ['A', 'B', 'Top']

    def test_no_change_returns_none(self):
        tree = mounted_tree()
        assert tree.expand_all() is None
        assert tree.passes == 1

    def test_failed_bulk_change_is_reverted(self):
        root = TreeNode('r', branch=Expanded([
            TreeNode('a', branch=Collapsed([TreeNode('b')])),
            TreeNode('b'),
        ]))
        tree = InteractiveTree(root)
        tree.mount()
        before = tree.render_set

        with pytest.raises(DuplicateKeyError):
            tree.expand_all()

        assert root.children[0].visibility == Visibility.COLLAPSED
        assert tree.render_set is before


class TestPresenter:
    def test_every_pass_is_forwarded(self):
        received = []

        class Sink:
            def render_frame(self, plan):
                received.append(plan)

        tree = InteractiveTree(build_sample_tree(), presenter=Sink())
        first = tree.mount()
        second = tree.on_interaction('A')
        tree.on_interaction('Son of nobody')

        assert received == [first, second]

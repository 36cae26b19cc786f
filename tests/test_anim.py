"""
Tests for the presentation-boundary helpers: easing, link paths and frame
compilation.
"""

import numpy as np
import pytest

from itree_core.engine import InteractiveTree
from itree_core.tree import Expanded, TreeNode
from itree_anim.script.compiler import NODE_RADIUS, compile_plan_to_frames
from itree_anim.utils.easing import ease_cubic_in_out, lerp, lerp_point
from itree_anim.utils.paths import link_vertical


def build_sample_tree() -> TreeNode:
    return TreeNode('Top', branch=Expanded([
        TreeNode('A', branch=Expanded([TreeNode('Son'), TreeNode('Daughter')])),
        TreeNode('B'),
    ]))


class TestEasing:
    def test_endpoints_and_midpoint(self):
        assert ease_cubic_in_out(0.0) == 0.0
        assert ease_cubic_in_out(1.0) == 1.0
        assert ease_cubic_in_out(0.5) == pytest.approx(0.5)
        assert ease_cubic_in_out(0.25) == pytest.approx(0.0625)

    def test_clamps_and_vectorizes(self):
        out = ease_cubic_in_out(np.array([-1.0, 0.0, 0.5, 1.0, 2.0]))
        assert out.tolist() == pytest.approx([0.0, 0.0, 0.5, 1.0, 1.0])

    def test_monotonic(self):
        ts = np.linspace(0, 1, 101)
        assert np.all(np.diff(ease_cubic_in_out(ts)) >= 0)

    def test_lerp(self):
        assert lerp(10, 20, 0.25) == 12.5
        assert lerp_point((0, 0), (10, 20), 0.5) == (5, 10)


class TestLinkPath:
    def test_vertical_bezier(self):
        assert link_vertical((100, 0), (50, 60)) == "M100,0C100,30 50,30 50,60"

    def test_rounds_float_noise(self):
        assert link_vertical((1 / 3, 0.0), (0.1 + 0.2, 10.0)) == "M0.333,0C0.333,5 0.3,5 0.3,10"

    def test_degenerate_edge(self):
        assert link_vertical((5, 5), (5, 5)) == "M5,5C5,5 5,5 5,5"


class TestCompilePlanToFrames:
    def test_frame_count_and_times(self):
        tree = InteractiveTree(build_sample_tree())
        frames = compile_plan_to_frames(tree.mount(), fps=60)
        assert len(frames) == 46
        assert frames[0].t == 0.0
        assert frames[-1].t == pytest.approx(750.0)
        assert frames[-1].progress == pytest.approx(1.0)

    def test_entering_nodes_grow_from_anchor(self):
        tree = InteractiveTree(build_sample_tree())
        plan = tree.mount()
        frames = compile_plan_to_frames(plan, fps=10)
        root_x = tree.render_set.nodes['Top'].x

        first, last = frames[0], frames[-1]
        for sprite in first.nodes.values():
            assert (sprite.x, sprite.y) == (pytest.approx(root_x), 0.0)
            assert sprite.radius == 0.0 and sprite.opacity == 0.0
        for key, sprite in last.nodes.items():
            n = tree.render_set.nodes[key]
            assert (sprite.x, sprite.y) == (pytest.approx(n.x), pytest.approx(n.y))
            assert sprite.radius == NODE_RADIUS and sprite.opacity == 1.0

    def test_exiting_nodes_dropped_after_last_frame(self):
        tree = InteractiveTree(build_sample_tree())
        tree.mount()
        plan = tree.on_interaction('A')
        frames = compile_plan_to_frames(plan, fps=20)

        assert 'Son' in frames[0].nodes
        assert frames[0].nodes['Son'].opacity == 1.0
        assert 'Son' in frames[-2].nodes
        assert 'Son' not in frames[-1].nodes
        assert ('A', 'Son') not in frames[-1].links
        assert set(frames[-1].nodes) == {'Top', 'A', 'B'}

    def test_links_follow_interpolated_endpoints(self):
        tree = InteractiveTree(build_sample_tree())
        plan = tree.mount()
        last = compile_plan_to_frames(plan, fps=5)[-1]
        top = tree.render_set.nodes['Top']
        b = tree.render_set.nodes['B']
        assert last.links[('Top', 'B')].path == link_vertical((top.x, top.y), (b.x, b.y))

    def test_frame_to_dict(self):
        tree = InteractiveTree(build_sample_tree())
        d = compile_plan_to_frames(tree.mount(), fps=5)[-1].to_dict()
        assert {n['key'] for n in d['nodes']} == {'Top', 'A', 'Son', 'Daughter', 'B'}
        assert all(set(l) == {'sourceKey', 'targetKey', 'd'} for l in d['links'])

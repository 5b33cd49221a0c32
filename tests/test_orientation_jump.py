#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Tests for path orientation normalization and reference jump detection.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging

import pandas as pd
import pytest

from loopweaver.analysis import (
    JumpEdge,
    detect_jump,
    is_majority_reverse,
    normalize_orientation,
    normalize_path,
    select_reference_jump,
)
from loopweaver.io_utils import read_gfa


class TestNormalizePath:
    """Test single-path orientation normalization."""

    def test_majority_reverse_flipped(self):
        nodes, orients = normalize_path([1, 2, 3], ["-", "-", "+"])

        assert nodes == [3, 2, 1]
        assert orients == ["-", "+", "+"]

    def test_majority_forward_unchanged(self):
        nodes, orients = normalize_path([1, 2, 3], ["+", "-", "+"])

        assert nodes == [1, 2, 3]
        assert orients == ["+", "-", "+"]

    def test_exact_half_unchanged(self):
        nodes, orients = normalize_path([1, 2], ["-", "+"])

        assert nodes == [1, 2]
        assert orients == ["-", "+"]

    def test_all_reverse(self):
        nodes, orients = normalize_path([4, 5, 6, 7], ["-"] * 4)

        assert nodes == [7, 6, 5, 4]
        assert orients == ["+"] * 4

    def test_empty_path(self):
        assert normalize_path([], []) == ([], [])
        assert not is_majority_reverse([])

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="differ in length"):
            normalize_path([1, 2], ["+"])


class TestNormalizeOrientation:
    """Test orientation normalization over a step table."""

    def test_reverse_path_renumbered(self, tandem_gfa):
        steps = normalize_orientation(read_gfa(tandem_gfa).steps)
        path = steps[steps["path_name"] == "HG2#2#chr1"]

        assert path["node_id"].tolist() == [1, 2, 3, 4, 7, 8, 9, 10, 11]
        assert set(path["orientation"]) == {"+"}
        assert path["step"].tolist() == list(range(9))
        assert path["reversed"].all()

    def test_forward_paths_untouched(self, tandem_gfa):
        graph = read_gfa(tandem_gfa)
        steps = normalize_orientation(graph.steps)
        path = steps[steps["path_name"] == "HG1#1#chr1"]

        assert path["node_id"].tolist() == graph.path_node_ids("HG1#1#chr1")
        assert not path["reversed"].any()

    def test_path_order_preserved(self, tandem_gfa):
        steps = normalize_orientation(read_gfa(tandem_gfa).steps)

        assert list(pd.unique(steps["path_name"])) == [
            "HG1#1#chr1", "HG1#2#chr1", "HG2#1#chr1", "HG2#2#chr1", "HG3#1#chr1",
        ]


class TestDetectJump:
    """Test largest-difference jump selection."""

    def test_backward_jump(self):
        jump = detect_jump([1, 2, 3, 4, 9, 3, 4, 5])

        assert (jump.from_node, jump.to_node) == (9, 3)
        assert jump.difference == 6
        assert jump.step == 4

    def test_tie_takes_first_occurrence(self):
        jump = detect_jump([10, 2, 20, 12, 30, 22])

        # diffs 8, 18, 8, 18, 8: first 18 is at step 1
        assert jump.step == 1
        assert (jump.from_node, jump.to_node) == (20, 2)

    def test_forward_jump_reported_with_from_greater(self, caplog):
        with caplog.at_level(logging.WARNING, logger="loopweaver.analysis.jump"):
            jump = detect_jump([10, 11, 12, 500, 501, 13, 14, 500, 501, 15])

        assert (jump.from_node, jump.to_node) == (500, 12)
        assert jump.difference == 488
        assert jump.step == 2
        assert "goes forward (12 -> 500)" in caplog.text

    def test_backward_jump_not_warned(self, caplog):
        with caplog.at_level(logging.WARNING, logger="loopweaver.analysis.jump"):
            detect_jump([1, 2, 3, 4, 9, 3, 4, 5])

        assert "goes forward" not in caplog.text

    def test_too_short(self):
        with pytest.raises(ValueError, match="at least two steps"):
            detect_jump([1])

    def test_constant_path(self):
        with pytest.raises(ValueError, match="never changes"):
            detect_jump([5, 5, 5])

    def test_jump_edge_order_enforced(self):
        with pytest.raises(ValueError, match="from_node > to_node"):
            JumpEdge(from_node=3, to_node=9)


class TestSelectReferenceJump:
    """Test reference path selection."""

    def test_default_first_path(self, tandem_gfa):
        steps = normalize_orientation(read_gfa(tandem_gfa).steps)
        jump = select_reference_jump(steps)

        assert jump.reference_path == "HG1#1#chr1"
        assert (jump.from_node, jump.to_node) == (9, 3)

    def test_named_path(self, tandem_gfa):
        steps = normalize_orientation(read_gfa(tandem_gfa).steps)
        jump = select_reference_jump(steps, "HG2#1#chr1")

        assert jump.reference_path == "HG2#1#chr1"
        assert (jump.from_node, jump.to_node) == (9, 3)

    def test_unknown_path(self, tandem_gfa):
        steps = read_gfa(tandem_gfa).steps

        with pytest.raises(KeyError):
            select_reference_jump(steps, "missing")

    def test_no_paths(self):
        empty = pd.DataFrame(columns=["path_name", "step", "node_id", "orientation"])

        with pytest.raises(ValueError, match="No paths"):
            select_reference_jump(empty)

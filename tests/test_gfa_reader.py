#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Tests for GFA node/path table reading.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from loopweaver.io_utils import (
    GFAFormatError,
    read_gfa,
    gfa_summary,
    parse_step_token,
    parse_path_name,
)


class TestStepTokens:
    """Test P-line step token parsing."""

    def test_forward_token(self):
        assert parse_step_token("12+") == (12, "+")

    def test_reverse_token(self):
        assert parse_step_token("7-") == (7, "-")

    def test_missing_orientation(self):
        with pytest.raises(GFAFormatError, match="invalid path step"):
            parse_step_token("12")

    def test_non_integer_node(self):
        with pytest.raises(GFAFormatError, match="non-integer"):
            parse_step_token("utg12+")

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_step_token("x")


class TestPathNames:
    """Test PanSN path name splitting."""

    def test_pansn_name(self):
        assert parse_path_name("HG002#1#chr6") == ("HG002", "1")

    def test_plain_name(self):
        assert parse_path_name("reference") == ("reference", None)


class TestReadGFA:
    """Test reading S and P records into tables."""

    def test_node_table(self, tandem_gfa):
        graph = read_gfa(tandem_gfa)

        assert graph.n_nodes == 11
        assert list(graph.nodes.columns) == ["node_id", "length"]
        lengths = graph.nodes.set_index("node_id")["length"]
        assert lengths[1] == 10
        assert lengths[9] == 1

    def test_length_tag_used_for_star_sequence(self, tandem_gfa):
        graph = read_gfa(tandem_gfa)

        lengths = graph.nodes.set_index("node_id")["length"]
        assert lengths[10] == 120

    def test_step_table(self, tandem_gfa):
        graph = read_gfa(tandem_gfa)

        assert graph.n_paths == 5
        assert graph.path_names[0] == "HG1#1#chr1"
        assert graph.path_node_ids("HG1#2#chr1") == [1, 2, 3, 4, 5, 6, 9, 10, 11]

    def test_orientations_kept(self, tandem_gfa):
        graph = read_gfa(tandem_gfa)

        reverse = graph.steps[graph.steps["path_name"] == "HG2#2#chr1"]
        assert set(reverse["orientation"]) == {"-"}
        assert reverse["step"].tolist() == list(range(9))

    def test_unknown_path(self, tandem_gfa):
        graph = read_gfa(tandem_gfa)

        with pytest.raises(KeyError):
            graph.path_node_ids("missing")

    def test_other_records_skipped(self, write_gfa):
        path = write_gfa(
            "H\tVN:Z:1.0\n"
            "# comment\n"
            "S\t1\tACGT\n"
            "L\t1\t+\t2\t+\t0M\n"
            "W\tsample\t1\tchr1\t0\t4\t>1\n"
            "P\tp1\t1+\t*\n"
        )
        graph = read_gfa(path)

        assert graph.n_nodes == 1
        assert graph.n_paths == 1

    def test_malformed_lines_skipped(self, write_gfa):
        path = write_gfa("S\t1\n" "S\t2\tAC\n" "P\tp1\n" "P\tp2\t2+\n")
        graph = read_gfa(path)

        assert graph.nodes["node_id"].tolist() == [2]
        assert graph.path_names == ["p2"]

    def test_non_integer_segment_rejected(self, write_gfa):
        path = write_gfa("S\tutg1\tACGT\n")

        with pytest.raises(GFAFormatError, match="line 1"):
            read_gfa(path)

    def test_non_integer_length_tag_rejected(self, write_gfa):
        path = write_gfa("S\t1\tACGT\n" "S\t2\t*\tLN:i:abc\n" "P\tp1\t1+,2+\t*\n")

        with pytest.raises(GFAFormatError, match="line 2: invalid LN tag"):
            read_gfa(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_gfa(tmp_path / "absent.gfa")

    def test_empty_file(self, write_gfa):
        graph = read_gfa(write_gfa(""))

        assert graph.n_nodes == 0
        assert graph.steps.empty


class TestGFASummary:
    """Test GFA record counting."""

    def test_counts(self, tandem_gfa):
        summary = gfa_summary(tandem_gfa)

        assert summary["version"] == "1.0"
        assert summary["segments"] == 11
        assert summary["links"] == 2
        assert summary["paths"] == 5
        assert summary["headers"] == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            gfa_summary(tmp_path / "absent.gfa")

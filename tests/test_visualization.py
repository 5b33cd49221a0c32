#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Tests for module analysis figures.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pandas as pd
import pytest

from loopweaver.visualization import ModuleVisualizer


@pytest.fixture
def scores():
    index = pd.MultiIndex.from_tuples([(f"p{i}", 1) for i in range(20)], names=["path_name", "module"])
    return pd.DataFrame({"PC1": range(20), "PC2": [v % 3 for v in range(20)]}, index=index, dtype=float)


class TestSampling:
    """Test scatter subsampling."""

    def test_small_frame_untouched(self, temp_output_dir):
        viz = ModuleVisualizer(temp_output_dir, max_points=50)
        frame = pd.DataFrame({"x": range(10)})

        assert viz.sample_points(frame) is frame

    def test_large_frame_subsampled(self, temp_output_dir):
        viz = ModuleVisualizer(temp_output_dir, max_points=5, random_state=1)
        frame = pd.DataFrame({"x": range(100)})
        sampled = viz.sample_points(frame)

        assert len(sampled) == 5
        assert sampled.index.is_monotonic_increasing
        assert sampled.equals(viz.sample_points(frame))


class TestPlots:
    """Test figure files are written."""

    def test_pca_plot(self, temp_output_dir, scores):
        viz = ModuleVisualizer(temp_output_dir)
        types = pd.Series([i % 2 for i in range(20)], index=scores.index, name="module_type")
        path = viz.plot_pca(scores, explained=[0.7, 0.2], hue=types)

        assert path.exists()
        assert path.suffix == ".png"

    def test_pca_plot_single_component(self, temp_output_dir, scores):
        viz = ModuleVisualizer(temp_output_dir, fmt="svg")
        path = viz.plot_pca(scores[["PC1"]], explained=[1.0])

        assert path.exists()
        assert path.suffix == ".svg"

    def test_modules_per_path_plot(self, temp_output_dir):
        viz = ModuleVisualizer(temp_output_dir)
        counts = pd.Series([0, 1, 1, 2, 3], name="n_modules")

        assert viz.plot_modules_per_path(counts).exists()

    def test_module_lengths_plot(self, temp_output_dir):
        viz = ModuleVisualizer(temp_output_dir)
        summary = pd.DataFrame({"length_bp": [1500, 1520, 3100, 2980]})

        assert viz.plot_module_lengths(summary).exists()

    def test_empty_inputs(self, temp_output_dir):
        viz = ModuleVisualizer(temp_output_dir)

        assert viz.plot_modules_per_path(pd.Series([], dtype="int64")).exists()
        assert viz.plot_module_lengths(pd.DataFrame(columns=["length_bp"])).exists()

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Module Visualizer — PCA scatter and module count/length histograms.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Sequence

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for batch runs
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

logger = logging.getLogger(__name__)

sns.set_style("whitegrid")
sns.set_context("paper", font_scale=1.2)


class ModuleVisualizer:
    """Writes module analysis figures to an output directory."""

    def __init__(
        self,
        output_dir: str | Path = "loopweaver_plots",
        fmt: str = "png",
        dpi: int = 150,
        max_points: int = 5000,
        random_state: int = 42,
    ):
        """
        Initialize visualizer.

        Args:
            output_dir: Directory to save figures
            fmt: Figure file format ('png', 'pdf', 'svg')
            dpi: Resolution for raster formats
            max_points: Scatter plots are subsampled above this many points
            random_state: Seed for subsampling
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.fmt = fmt
        self.dpi = dpi
        self.max_points = max_points
        self.random_state = random_state

    def _save(self, fig, name: str) -> Path:
        path = self.output_dir / f"{name}.{self.fmt}"
        fig.savefig(path, dpi=self.dpi, bbox_inches='tight')
        plt.close(fig)
        logger.info(f"Saved figure: {path}")
        return path

    def sample_points(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Random subsample of at most max_points rows, order preserved."""
        if len(frame) <= self.max_points:
            return frame
        logger.debug(f"Subsampling {len(frame)} points to {self.max_points} for plotting")
        return frame.sample(n=self.max_points, random_state=self.random_state).sort_index()

    def plot_pca(
        self,
        scores: pd.DataFrame,
        explained: Optional[Sequence[float]] = None,
        hue: Optional[pd.Series] = None,
        name: str = "module_pca",
    ) -> Path:
        """
        PC1 vs PC2 scatter of module traversals.

        Args:
            scores: PCA scores with 'PC1' and optionally 'PC2' columns
            explained: Explained variance ratio per component
            hue: Optional per-row labels (e.g. module type) for colouring
        """
        data = scores.reset_index(drop=True)
        if 'PC2' not in data.columns:
            data = data.assign(PC2=0.0)
        if hue is not None:
            data = data.assign(**{hue.name or 'group': hue.astype(str).to_numpy()})
        data = self.sample_points(data)

        fig, ax = plt.subplots(figsize=(7, 6))
        sns.scatterplot(
            data=data, x='PC1', y='PC2',
            hue=(hue.name or 'group') if hue is not None else None,
            palette='Set1' if hue is not None else None,
            s=40, alpha=0.8, edgecolor='black', linewidth=0.3, ax=ax,
        )

        if explained is not None and len(explained) > 0:
            ax.set_xlabel(f"PC1 ({explained[0] * 100:.1f}%)")
            if len(explained) > 1:
                ax.set_ylabel(f"PC2 ({explained[1] * 100:.1f}%)")
        ax.set_title("Module traversals: node presence/absence PCA")
        return self._save(fig, name)

    def plot_modules_per_path(self, counts: pd.Series, name: str = "modules_per_path") -> Path:
        """Histogram of the number of modules per haplotype path."""
        fig, ax = plt.subplots(figsize=(7, 5))
        max_count = int(counts.max()) if len(counts) else 0
        bins = [b - 0.5 for b in range(0, max_count + 2)]
        ax.hist(counts.to_numpy(), bins=bins, edgecolor='black', alpha=0.7)
        ax.set_xticks(range(0, max_count + 1))
        ax.set_xlabel("Modules per path")
        ax.set_ylabel("Paths")
        ax.set_title("Module copy number")
        return self._save(fig, name)

    def plot_module_lengths(self, summary: pd.DataFrame, name: str = "module_lengths") -> Path:
        """Histogram of module traversal lengths in bp."""
        fig, ax = plt.subplots(figsize=(7, 5))
        if len(summary):
            sns.histplot(data=summary, x='length_bp', bins=30, ax=ax)
        ax.set_xlabel("Module length (bp)")
        ax.set_ylabel("Module traversals")
        ax.set_title("Module length distribution")
        return self._save(fig, name)

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.

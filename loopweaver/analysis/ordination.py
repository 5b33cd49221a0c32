#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Ordination of module traversals — PCA on the membership matrix and
clustering of PC scores into module types.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

logger = logging.getLogger(__name__)


@dataclass
class PCAResult:
    """
    PCA of a membership matrix.

    Attributes:
        scores: Rows of the matrix projected on PC1..PCn (columns 'PC1', ...)
        explained_variance_ratio: Fraction of variance per component
        loadings: Node-by-component loadings
    """
    scores: pd.DataFrame
    explained_variance_ratio: np.ndarray
    loadings: pd.DataFrame

    @property
    def n_components(self) -> int:
        return self.scores.shape[1]

    def explained_percent(self) -> list[float]:
        return [round(float(v) * 100, 2) for v in self.explained_variance_ratio]


def run_pca(
    matrix: pd.DataFrame,
    n_components: int = 2,
    scale: bool = False,
    random_state: int = 42,
) -> PCAResult:
    """
    Project module traversals onto their principal components.

    Args:
        matrix: Membership matrix, one row per module traversal
        n_components: Components requested; capped at min(n_rows, n_cols)
        scale: Standardize node columns before PCA
        random_state: Seed for the SVD solver

    Raises:
        ValueError: With fewer than two rows or no columns.
    """
    n_rows, n_cols = matrix.shape
    if n_rows < 2:
        raise ValueError(f"PCA needs at least two module traversals, got {n_rows}")
    if n_cols == 0:
        raise ValueError("PCA needs at least one node column")
    if n_components < 1:
        raise ValueError(f"n_components must be positive, got {n_components}")

    n_components = min(n_components, n_rows, n_cols)
    X = matrix.to_numpy(dtype=float)
    if scale:
        X = StandardScaler().fit_transform(X)

    pca = PCA(n_components=n_components, random_state=random_state)
    scores = pca.fit_transform(X)

    pc_names = [f"PC{i + 1}" for i in range(n_components)]
    result = PCAResult(
        scores=pd.DataFrame(scores, index=matrix.index, columns=pc_names),
        explained_variance_ratio=pca.explained_variance_ratio_,
        loadings=pd.DataFrame(pca.components_.T, index=matrix.columns, columns=pc_names),
    )
    logger.info(f"PCA explained variance (%): {result.explained_percent()}")
    return result


def assign_module_types(scores: pd.DataFrame, n_types: int = 2, random_state: int = 42) -> pd.Series:
    """
    Cluster PC scores into module types.

    Type labels are ordered by cluster size, so type 0 is the most common.

    Raises:
        ValueError: If there are fewer rows than requested types.
    """
    if n_types < 1:
        raise ValueError(f"n_types must be positive, got {n_types}")
    if len(scores) < n_types:
        raise ValueError(f"Cannot form {n_types} module types from {len(scores)} traversals")

    kmeans = KMeans(n_clusters=n_types, n_init=10, random_state=random_state)
    raw = kmeans.fit_predict(scores.to_numpy(dtype=float))

    # Stable relabelling: larger clusters first, ties by first appearance
    counts = pd.Series(raw).value_counts(sort=False)
    first_seen = {label: i for i, label in reversed(list(enumerate(raw)))}
    order = sorted(counts.index, key=lambda label: (-counts[label], first_seen[label]))
    relabel = {old: new for new, old in enumerate(order)}

    types = pd.Series([relabel[label] for label in raw], index=scores.index, name='module_type')
    logger.info(f"Module types: {types.value_counts().sort_index().to_dict()}")
    return types

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.

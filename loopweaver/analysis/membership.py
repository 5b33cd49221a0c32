#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Module membership — node presence/absence per module traversal and
per-module summary statistics.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from typing import Optional

import pandas as pd

from ..io_utils.gfa_reader import parse_path_name

logger = logging.getLogger(__name__)

MODULE_INDEX = ['path_name', 'module']


def _module_steps(segments: pd.DataFrame) -> pd.DataFrame:
    return segments[segments['module'] > 0]


def build_membership_matrix(segments: pd.DataFrame, min_frequency: float = 0.0) -> pd.DataFrame:
    """
    Build the node presence/absence matrix of module segments.

    Args:
        segments: Segmented step table (output of segment_paths)
        min_frequency: Drop node columns present in a smaller fraction of rows

    Returns:
        DataFrame indexed by (path_name, module), one uint8 column per node id
    """
    if not 0.0 <= min_frequency <= 1.0:
        raise ValueError(f"min_frequency must be within [0, 1], got {min_frequency}")

    members = _module_steps(segments)[MODULE_INDEX + ['node_id']].drop_duplicates()
    if members.empty:
        logger.warning("No module segments found; membership matrix is empty")
        empty_index = pd.MultiIndex.from_arrays([[], []], names=MODULE_INDEX)
        return pd.DataFrame(index=empty_index, dtype='uint8')

    matrix = pd.crosstab(
        index=[members['path_name'], members['module']],
        columns=members['node_id'],
    ).clip(upper=1).astype('uint8')
    matrix = matrix.rename_axis(index=MODULE_INDEX, columns=None)
    matrix = matrix.reindex(columns=sorted(matrix.columns))

    if min_frequency > 0:
        keep = matrix.mean(axis=0) >= min_frequency
        logger.info(f"Dropping {int((~keep).sum())} nodes below frequency {min_frequency}")
        matrix = matrix.loc[:, keep]

    logger.info(f"Membership matrix: {matrix.shape[0]} modules x {matrix.shape[1]} nodes")
    return matrix


def summarize_modules(segments: pd.DataFrame, nodes: Optional[pd.DataFrame] = None) -> pd.DataFrame:
    """
    Summarize each module traversal.

    Columns: path_name, module, sample, haplotype, start_step, end_step,
    n_steps, n_nodes, length_bp (0 when no node lengths are given).
    """
    columns = MODULE_INDEX + ['sample', 'haplotype', 'start_step', 'end_step',
                              'n_steps', 'n_nodes', 'length_bp']
    steps = _module_steps(segments)
    if steps.empty:
        return pd.DataFrame(columns=columns)

    if nodes is not None and not nodes.empty:
        lengths = nodes.drop_duplicates('node_id').set_index('node_id')['length']
        steps = steps.assign(length=steps['node_id'].map(lengths).fillna(0).astype('int64'))
    else:
        steps = steps.assign(length=0)

    summary = steps.groupby(MODULE_INDEX, sort=False).agg(
        start_step=('step', 'min'),
        end_step=('step', 'max'),
        n_steps=('step', 'size'),
        n_nodes=('node_id', 'nunique'),
        length_bp=('length', 'sum'),
    ).reset_index()

    pansn = summary['path_name'].map(parse_path_name)
    summary['sample'] = [s for s, _ in pansn]
    summary['haplotype'] = [h for _, h in pansn]
    return summary[columns]


def modules_per_path(segments: pd.DataFrame) -> pd.Series:
    """Number of modules traversed by each path, 0 for all-flank paths."""
    all_paths = pd.unique(segments['path_name'])
    counts = _module_steps(segments).groupby('path_name', sort=False)['module'].nunique()
    counts = counts.reindex(all_paths, fill_value=0).astype('int64')
    return counts.rename_axis('path_name').rename('n_modules')

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.

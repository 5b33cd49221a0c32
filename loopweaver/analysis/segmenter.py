#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Path Segmenter — split haplotype paths into flank and module segments.

Each step is labelled by a three-way comparison against the reference
jump (from_node, to_node):

    - still before the first node >= to_node       -> 'flank'
    - to_node < node < from_node                   -> current module index
    - anything else                                -> 'flank', and the module
      index advances if the previous step was inside a module

A haplotype carrying three module copies therefore produces module
indices 1, 2 and 3, separated by flank steps.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from typing import Sequence, Union

import pandas as pd

from .jump import JumpEdge

logger = logging.getLogger(__name__)

FLANK = 'flank'

SegmentLabel = Union[str, int]


def segment_path(node_ids: Sequence[int], jump_from: int, jump_to: int) -> list[SegmentLabel]:
    """
    Label every step of one path as 'flank' or a module index.

    Args:
        node_ids: Ordered node ids, already oriented consistently
        jump_from: Larger node id of the reference jump
        jump_to: Smaller node id of the reference jump

    Returns:
        Labels parallel to node_ids
    """
    if jump_from <= jump_to:
        raise ValueError(f"jump_from must exceed jump_to, got ({jump_from}, {jump_to})")

    labels: list[SegmentLabel] = []
    module = 1
    previous: SegmentLabel = FLANK
    started = False

    for node in node_ids:
        if not started and node < jump_to:
            label: SegmentLabel = FLANK
        elif jump_to < node < jump_from:
            label = module
        else:
            if previous != FLANK:
                module += 1
            label = FLANK
        started = started or node >= jump_to
        labels.append(label)
        previous = label

    return labels


def segment_paths(steps: pd.DataFrame, jump: JumpEdge) -> pd.DataFrame:
    """
    Segment every path of a step table independently.

    Adds two columns: 'segment' ('flank' or the module index) and
    'module' (module index, 0 for flank steps).
    """
    frames = []
    for path_name, path in steps.groupby('path_name', sort=False):
        path = path.sort_values('step')
        labels = segment_path(path['node_id'].tolist(), jump.from_node, jump.to_node)
        path = path.assign(segment=pd.Series(labels, index=path.index, dtype=object))
        path['module'] = [0 if label == FLANK else label for label in labels]
        n_modules = path['module'].max() if len(path) else 0
        logger.debug(f"{path_name}: {len(path)} steps, {n_modules} module(s)")
        frames.append(path)

    if not frames:
        return steps.assign(segment=pd.Series(dtype=object), module=pd.Series(dtype='int64'))

    segments = pd.concat(frames, ignore_index=True)
    segments['module'] = segments['module'].astype('int64')
    logger.info(
        f"Segmented {len(frames)} paths into "
        f"{segments.loc[segments['module'] > 0, ['path_name', 'module']].drop_duplicates().shape[0]} module traversals"
    )
    return segments

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.

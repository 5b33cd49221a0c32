#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Path orientation normalization.

Haplotypes assembled on the opposite strand traverse the graph backwards.
A path whose steps are mostly reverse-oriented is reversed and its
orientation flags flipped, so every path is read in the same direction.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from typing import Sequence

import pandas as pd

logger = logging.getLogger(__name__)

FLIP = {'+': '-', '-': '+'}


def is_majority_reverse(orientations: Sequence[str]) -> bool:
    """True when strictly more than half of the steps are '-'."""
    n_reverse = sum(1 for o in orientations if o == '-')
    return n_reverse * 2 > len(orientations)


def normalize_path(
    node_ids: Sequence[int],
    orientations: Sequence[str],
) -> tuple[list[int], list[str]]:
    """
    Orient a single path consistently.

    Args:
        node_ids: Ordered node ids of the path
        orientations: Parallel '+'/'-' flags

    Returns:
        (node_ids, orientations), reversed and flipped when the path is
        majority reverse-oriented, otherwise unchanged.
    """
    if len(node_ids) != len(orientations):
        raise ValueError(
            f"node_ids and orientations differ in length ({len(node_ids)} vs {len(orientations)})"
        )

    if not is_majority_reverse(orientations):
        return list(node_ids), list(orientations)

    return list(reversed(node_ids)), [FLIP[o] for o in reversed(orientations)]


def normalize_orientation(steps: pd.DataFrame) -> pd.DataFrame:
    """
    Apply normalize_path to every path of a step table.

    Steps are renumbered from 0 in the new traversal order and a boolean
    'reversed' column records which paths were flipped.
    """
    frames = []
    n_reversed = 0

    for path_name, path in steps.groupby('path_name', sort=False):
        path = path.sort_values('step')
        node_ids, orientations = normalize_path(
            path['node_id'].tolist(), path['orientation'].tolist()
        )
        flipped = is_majority_reverse(path['orientation'].tolist())
        n_reversed += int(flipped)

        frames.append(pd.DataFrame({
            'path_name': path_name,
            'step': range(len(node_ids)),
            'node_id': node_ids,
            'orientation': orientations,
            'reversed': flipped,
        }))

    logger.info(f"Orientation normalized: {n_reversed} of {len(frames)} paths reversed")

    if not frames:
        return steps.assign(reversed=pd.Series(dtype=bool))
    return pd.concat(frames, ignore_index=True).astype({'node_id': 'int64', 'step': 'int64'})

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.

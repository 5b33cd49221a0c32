#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Reference jump detection.

In a graph built over a collapsed tandem duplication, node ids are roughly
topologically sorted, so the edge that loops from the end of a module back
to its start shows up as the largest node-id jump along a haplotype that
carries more than one module copy.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, asdict
from typing import Optional, Sequence

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JumpEdge:
    """
    Loop-back edge bounding the module region.

    Attributes:
        from_node: Larger node id of the pair (end of the module region)
        to_node: Smaller node id of the pair (start of the module region)
        step: Index of the first node of the pair in the reference path
        difference: Absolute node-id difference
        reference_path: Name of the path the jump was taken from
    """
    from_node: int
    to_node: int
    step: int = -1
    difference: int = 0
    reference_path: Optional[str] = None

    def __post_init__(self):
        if self.from_node <= self.to_node:
            raise ValueError(
                f"Jump must satisfy from_node > to_node, got ({self.from_node}, {self.to_node})"
            )

    def to_dict(self) -> dict:
        return asdict(self)


def detect_jump(node_ids: Sequence[int], reference_path: Optional[str] = None) -> JumpEdge:
    """
    Pick the adjacent step pair with the largest absolute id difference.

    Ties resolve to the first occurrence in traversal order.

    Args:
        node_ids: Ordered node ids of the reference path
        reference_path: Path name, recorded on the returned edge

    Returns:
        JumpEdge with from_node > to_node

    Raises:
        ValueError: If the path has fewer than two steps or no id change.
    """
    if len(node_ids) < 2:
        raise ValueError(f"Reference path needs at least two steps, got {len(node_ids)}")

    ids = np.asarray(node_ids, dtype=np.int64)
    diffs = np.abs(np.diff(ids))
    # argmax returns the first maximum
    step = int(np.argmax(diffs))
    difference = int(diffs[step])

    if difference == 0:
        raise ValueError("Reference path never changes node id; no jump to detect")

    a, b = int(ids[step]), int(ids[step + 1])
    if a < b:
        logger.warning(
            f"Largest jump in reference path goes forward ({a} -> {b}); "
            f"using ({max(a, b)}, {min(a, b)}) as loop boundaries"
        )

    jump = JumpEdge(
        from_node=max(a, b),
        to_node=min(a, b),
        step=step,
        difference=difference,
        reference_path=reference_path,
    )
    logger.info(f"Detected jump {jump.from_node} -> {jump.to_node} (difference {difference}) at step {step}")
    return jump


def select_reference_jump(steps: pd.DataFrame, reference_path: Optional[str] = None) -> JumpEdge:
    """
    Detect the jump on a named path, or on the first path in the table.

    Raises:
        KeyError: If reference_path is not present.
        ValueError: If the table holds no paths.
    """
    if steps.empty:
        raise ValueError("No paths available to select a reference jump")

    if reference_path is None:
        reference_path = steps['path_name'].iloc[0]
        logger.info(f"No reference path given; using first path '{reference_path}'")

    path = steps[steps['path_name'] == reference_path]
    if path.empty:
        raise KeyError(f"Reference path not found: {reference_path}")

    return detect_jump(path.sort_values('step')['node_id'].tolist(), reference_path=reference_path)

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.

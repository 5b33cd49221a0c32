#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Table Export — segment, membership and PCA tables as TSV, run summary JSON.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)


def write_table(frame: pd.DataFrame, output_path: str | Path, index: bool = False) -> Path:
    """
    Write a DataFrame as a tab-separated file.

    Args:
        frame: Table to write
        output_path: Destination TSV path
        index: Whether to write the index columns

    Returns:
        Path written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output_path, sep='\t', index=index)
    logger.info(f"Wrote {len(frame)} rows to {output_path}")
    return output_path


def write_segments_tsv(segments: pd.DataFrame, output_path: str | Path) -> Path:
    """Write segmented path steps, one row per (path_name, step)."""
    columns = [c for c in ('path_name', 'step', 'node_id', 'orientation', 'segment', 'module')
               if c in segments.columns]
    return write_table(segments[columns], output_path)


def write_membership_matrix(matrix: pd.DataFrame, output_path: str | Path) -> Path:
    """Write the module membership matrix with its (path_name, module) index."""
    return write_table(matrix, output_path, index=True)


def read_membership_matrix(matrix_path: str | Path) -> pd.DataFrame:
    """Read a membership matrix written by write_membership_matrix."""
    matrix = pd.read_csv(matrix_path, sep='\t', index_col=[0, 1])
    matrix.columns = [int(c) for c in matrix.columns]
    return matrix.astype('uint8')


def write_summary_json(summary: dict[str, Any], output_path: str | Path) -> Path:
    """Write run statistics as indented JSON."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(summary, f, indent=2, default=str)
    logger.info(f"Wrote analysis summary to {output_path}")
    return output_path

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.

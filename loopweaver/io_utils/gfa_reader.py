#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

GFA Reader — segment and path tables from GFA v1 pangenome graphs.

Only S-lines (nodes) and P-lines (haplotype paths) carry information for
module analysis. Every other record type is skipped.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

NODE_COLUMNS = ['node_id', 'length']
STEP_COLUMNS = ['path_name', 'step', 'node_id', 'orientation']
PANSN_DELIMITER = '#'


class GFAFormatError(ValueError):
    """Raised when a GFA record cannot be interpreted."""
    pass


# ============================================================================
#                           GRAPH TABLES
# ============================================================================

@dataclass
class GraphTables:
    """
    Flat tabular view of a pangenome graph.

    Attributes:
        nodes: One row per S-line (node_id, length)
        steps: One row per path step (path_name, step, node_id, orientation)
        source: File the tables were read from
    """
    nodes: pd.DataFrame
    steps: pd.DataFrame
    source: Optional[Path] = None

    @property
    def path_names(self) -> list[str]:
        """Path names in file order."""
        return list(pd.unique(self.steps['path_name']))

    @property
    def n_nodes(self) -> int:
        return len(self.nodes)

    @property
    def n_paths(self) -> int:
        return int(self.steps['path_name'].nunique())

    def path_node_ids(self, path_name: str) -> list[int]:
        """Return the ordered node ids of one path."""
        path = self.steps[self.steps['path_name'] == path_name]
        if path.empty:
            raise KeyError(f"Path not found in graph: {path_name}")
        return path.sort_values('step')['node_id'].tolist()


# ============================================================================
#                           RECORD PARSING
# ============================================================================

def parse_node_id(token: str, line_no: int = 0) -> int:
    """Convert a GFA segment name to an integer node id."""
    try:
        return int(token)
    except ValueError as e:
        raise GFAFormatError(
            f"GFA line {line_no}: non-integer node identifier '{token}'"
        ) from e


def parse_step_token(token: str, line_no: int = 0) -> tuple[int, str]:
    """
    Split a P-line step token into node id and orientation.

    Args:
        token: Step token such as '12+' or '7-'
        line_no: Source line number for error messages

    Returns:
        (node_id, orientation)

    Example:
        >>> parse_step_token('12+')
        (12, '+')
    """
    token = token.strip()
    if len(token) < 2 or token[-1] not in '+-':
        raise GFAFormatError(
            f"GFA line {line_no}: invalid path step '{token}' (expected <node><+|->)"
        )
    return parse_node_id(token[:-1], line_no), token[-1]


def _segment_length(parts: list[str], line_no: int = 0) -> int:
    sequence = parts[2]
    if sequence != '*':
        return len(sequence)
    for tag in parts[3:]:
        if tag.startswith('LN:i:'):
            try:
                return int(tag.split(':')[2])
            except ValueError:
                raise GFAFormatError(
                    f"GFA line {line_no}: invalid LN tag '{tag}' (expected LN:i:<integer>)"
                ) from None
    return 0


def parse_path_name(name: str) -> tuple[str, Optional[str]]:
    """
    Split a PanSN path name into sample and haplotype.

    'HG002#1#chr6' -> ('HG002', '1'). Names without the PanSN delimiter
    are returned whole with no haplotype.
    """
    fields = name.split(PANSN_DELIMITER)
    if len(fields) >= 2:
        return fields[0], fields[1]
    return name, None


# ============================================================================
#                           FILE READING
# ============================================================================

def read_gfa(gfa_path: str | Path) -> GraphTables:
    """
    Read nodes and paths from a GFA v1 file.

    Args:
        gfa_path: Path to the GFA file

    Returns:
        GraphTables with node and step tables

    Raises:
        FileNotFoundError: If gfa_path does not exist.
        GFAFormatError: On non-integer node ids, bad step tokens or LN tags.
    """
    gfa_path = Path(gfa_path)
    if not gfa_path.exists():
        raise FileNotFoundError(f"GFA file not found: {gfa_path}")

    logger.info(f"Reading graph from GFA: {gfa_path}")

    node_rows: list[tuple[int, int]] = []
    step_rows: list[tuple[str, int, int, str]] = []

    with open(gfa_path, 'r') as f:
        for line_no, raw_line in enumerate(f, 1):
            line = raw_line.rstrip('\n').rstrip('\r')
            if not line:
                continue

            parts = line.split('\t')
            record_type = parts[0]

            if record_type == 'S':
                if len(parts) < 3:
                    logger.warning(f"GFA line {line_no}: malformed S-line, skipping")
                    continue
                node_rows.append((parse_node_id(parts[1], line_no), _segment_length(parts, line_no)))

            elif record_type == 'P':
                if len(parts) < 3:
                    logger.warning(f"GFA line {line_no}: malformed P-line, skipping")
                    continue
                path_name = parts[1]
                tokens = [t for t in parts[2].split(',') if t and t != '*']
                for step, token in enumerate(tokens):
                    node_id, orientation = parse_step_token(token, line_no)
                    step_rows.append((path_name, step, node_id, orientation))

    nodes = pd.DataFrame(node_rows, columns=NODE_COLUMNS).astype({'node_id': 'int64', 'length': 'int64'})
    steps = pd.DataFrame(step_rows, columns=STEP_COLUMNS).astype(
        {'path_name': 'object', 'step': 'int64', 'node_id': 'int64', 'orientation': 'object'}
    )

    tables = GraphTables(nodes=nodes, steps=steps, source=gfa_path)
    logger.info(f"Loaded graph: {tables.n_nodes} nodes, {tables.n_paths} paths, {len(steps)} steps")
    return tables


def gfa_summary(gfa_path: str | Path) -> dict[str, object]:
    """
    Count GFA records by type.

    Returns:
        Dict with keys: 'version', 'headers', 'segments', 'links', 'paths', 'other'
    """
    gfa_path = Path(gfa_path)
    if not gfa_path.exists():
        raise FileNotFoundError(f"GFA file not found: {gfa_path}")

    stats: dict[str, object] = {
        'version': None,
        'headers': 0,
        'segments': 0,
        'links': 0,
        'paths': 0,
        'other': 0,
    }
    counters = {'H': 'headers', 'S': 'segments', 'L': 'links', 'P': 'paths'}

    with open(gfa_path, 'r') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            record_type = line.split('\t', 1)[0]
            key = counters.get(record_type, 'other')
            stats[key] += 1
            if record_type == 'H' and 'VN:Z:' in line:
                stats['version'] = line.split('VN:Z:')[1].split()[0]

    return stats

# LoopWeaver v0.1.0
# Any usage is subject to this software's license.

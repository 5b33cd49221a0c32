"""
LoopWeaver v0.1.0

I/O Module for LoopWeaver.

1. gfa_reader.py - GFA v1 node/path tables, PanSN path names
2. table_export.py - TSV and JSON output of analysis tables
"""

from .gfa_reader import (
    GFAFormatError,
    GraphTables,
    read_gfa,
    gfa_summary,
    parse_step_token,
    parse_node_id,
    parse_path_name,
)
from .table_export import (
    write_table,
    write_segments_tsv,
    write_membership_matrix,
    read_membership_matrix,
    write_summary_json,
)

__all__ = [
    # GFA input
    "GFAFormatError",
    "GraphTables",
    "read_gfa",
    "gfa_summary",
    "parse_step_token",
    "parse_node_id",
    "parse_path_name",
    # Table export
    "write_table",
    "write_segments_tsv",
    "write_membership_matrix",
    "read_membership_matrix",
    "write_summary_json",
]

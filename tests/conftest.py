#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoopWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from pathlib import Path
import tempfile
import shutil


# Graph layout:
#   left flank 1, 2 | module start 3 | interior 4..8 | module end 9 | right flank 10, 11
#   type A module interior: 4 5 6, type B module interior: 4 7 8
#   the loop-back edge is 9 -> 3
TANDEM_GFA = "\n".join([
    "H\tVN:Z:1.0",
    "S\t1\tACGTACGTAC",
    "S\t2\tGGCC",
    "S\t3\tTTA",
    "S\t4\tACGTACGT",
    "S\t5\tAAAAA",
    "S\t6\tCCCCCC",
    "S\t7\tGGGGGGG",
    "S\t8\tTT",
    "S\t9\tA",
    "S\t10\t*\tLN:i:120",
    "S\t11\tACGT",
    "L\t1\t+\t2\t+\t0M",
    "L\t9\t+\t3\t+\t0M",
    "P\tHG1#1#chr1\t1+,2+,3+,4+,5+,6+,9+,3+,4+,7+,8+,9+,10+,11+\t*",
    "P\tHG1#2#chr1\t1+,2+,3+,4+,5+,6+,9+,10+,11+\t*",
    "P\tHG2#1#chr1\t1+,2+,3+,4+,7+,8+,9+,3+,4+,7+,8+,9+,3+,4+,5+,6+,9+,10+,11+\t*",
    "P\tHG2#2#chr1\t11-,10-,9-,8-,7-,4-,3-,2-,1-\t*",
    "P\tHG3#1#chr1\t1+,2+,10+,11+\t*",
    "",
])

EXPECTED_MODULES_PER_PATH = {
    "HG1#1#chr1": 2,
    "HG1#2#chr1": 1,
    "HG2#1#chr1": 3,
    "HG2#2#chr1": 1,
    "HG3#1#chr1": 0,
}


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="loopweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def tandem_gfa(tmp_path):
    """Small graph with two module types and 0-3 module copies per path."""
    path = tmp_path / "tandem.gfa"
    path.write_text(TANDEM_GFA)
    return path


@pytest.fixture
def expected_module_counts():
    return dict(EXPECTED_MODULES_PER_PATH)


@pytest.fixture
def write_gfa(tmp_path):
    """Factory writing arbitrary GFA text to a temporary file."""
    def _write(text, name="graph.gfa"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write

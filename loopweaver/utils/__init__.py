"""
Utilities module for LoopWeaver.

This module provides pipeline orchestration for the module analysis:
- ModuleAnalysisPipeline: load, orient, segment, ordinate, export, plot
- AnalysisResult: everything a run produced
- configure_logging: console and per-run log file from the output.logging config section
"""

from .pipeline import (
    STEPS,
    ModuleAnalysisPipeline,
    AnalysisResult,
    configure_logging,
)

__all__ = [
    "STEPS",
    "ModuleAnalysisPipeline",
    "AnalysisResult",
    "configure_logging",
]

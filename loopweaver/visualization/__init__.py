"""
LoopWeaver v0.1.0

Visualization Module for LoopWeaver.
"""

from .plots import ModuleVisualizer

__all__ = ["ModuleVisualizer"]

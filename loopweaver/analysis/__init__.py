"""
LoopWeaver v0.1.0

Analysis Module for LoopWeaver.

1. orientation.py - consistent path orientation
2. jump.py - reference loop-back edge detection
3. segmenter.py - flank/module path segmentation
4. membership.py - node presence/absence matrix, module summaries
5. ordination.py - PCA and module-type clustering
"""

from .orientation import normalize_path, normalize_orientation, is_majority_reverse
from .jump import JumpEdge, detect_jump, select_reference_jump
from .segmenter import FLANK, segment_path, segment_paths
from .membership import build_membership_matrix, summarize_modules, modules_per_path
from .ordination import PCAResult, run_pca, assign_module_types

__all__ = [
    # Orientation
    "normalize_path",
    "normalize_orientation",
    "is_majority_reverse",
    # Jump detection
    "JumpEdge",
    "detect_jump",
    "select_reference_jump",
    # Segmentation
    "FLANK",
    "segment_path",
    "segment_paths",
    # Membership
    "build_membership_matrix",
    "summarize_modules",
    "modules_per_path",
    # Ordination
    "PCAResult",
    "run_pca",
    "assign_module_types",
]

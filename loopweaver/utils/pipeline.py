"""
LoopWeaver Module Analysis Pipeline.

Runs the complete module analysis on one GFA file:
- Load: node and path tables from S/P records
- Orient: reverse paths that traverse the graph backwards
- Jump: detect (or accept) the reference loop-back edge
- Segment: label every path step as flank or module
- Matrix: node presence/absence per module traversal
- Ordinate: PCA and module-type clustering
- Export: TSV tables and a JSON run summary
- Plot: PCA scatter and module histograms
"""

from pathlib import Path
from typing import Optional, Dict, Any, List, Union
import logging
import time
from dataclasses import dataclass, field

import pandas as pd

from ..io_utils import (
    GraphTables,
    read_gfa,
    write_table,
    write_segments_tsv,
    write_membership_matrix,
    write_summary_json,
)
from ..analysis import (
    JumpEdge,
    PCAResult,
    normalize_orientation,
    select_reference_jump,
    segment_paths,
    build_membership_matrix,
    summarize_modules,
    modules_per_path,
    run_pca,
    assign_module_types,
)
from ..config.schema import load_config
from ..version import __version__


STEPS = ['load', 'orient', 'jump', 'segment', 'matrix', 'ordinate', 'export', 'plot']


def configure_logging(config: Dict[str, Any], output_dir: Optional[Path] = None,
                      level: Optional[str] = None) -> Optional[Path]:
    """
    Configure console logging and the per-run log file.

    The console handler goes on the root logger. The log file handler goes
    on the 'loopweaver' logger and replaces any file handler left there by
    an earlier run, so every run writes its own log file.

    Args:
        config: Configuration dictionary
        output_dir: Directory for the log file (None = console only)
        level: Overrides the configured level when given

    Returns:
        Path of the log file, or None when no file is written
    """
    log_config = config['output']['logging']
    log_level = getattr(logging, level or log_config['level'])
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler()],
    )

    package_logger = logging.getLogger('loopweaver')
    package_logger.setLevel(log_level)
    for handler in list(package_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            package_logger.removeHandler(handler)
            handler.close()

    if output_dir is None or not log_config.get('log_file'):
        return None

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    log_path = output_dir / log_config['log_file']
    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(logging.Formatter(log_format))
    package_logger.addHandler(file_handler)
    return log_path


@dataclass
class AnalysisResult:
    """
    Result of a module analysis run.

    Attributes:
        graph: Node and step tables as read from the GFA
        steps: Orientation-normalized step table
        jump: Reference loop-back edge
        segments: Steps with 'segment' and 'module' columns
        matrix: Module membership matrix
        summary: Per-module summary table
        module_counts: Modules per path
        pca: PCA result (None with fewer than two module traversals)
        module_types: Module-type label per traversal (None when disabled)
        outputs: Files written, keyed by output name
        stats: Run statistics
    """
    graph: Optional[GraphTables] = None
    steps: Optional[pd.DataFrame] = None
    jump: Optional[JumpEdge] = None
    segments: Optional[pd.DataFrame] = None
    matrix: Optional[pd.DataFrame] = None
    summary: Optional[pd.DataFrame] = None
    module_counts: Optional[pd.Series] = None
    pca: Optional[PCAResult] = None
    module_types: Optional[pd.Series] = None
    outputs: Dict[str, str] = field(default_factory=dict)
    stats: Dict[str, Any] = field(default_factory=dict)


class ModuleAnalysisPipeline:
    """
    Coordinator for the module analysis of one pangenome graph.

    Steps run in a fixed order; each step reads what the previous steps
    stored on the AnalysisResult. Any exception aborts the run.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize pipeline.

        Args:
            config: Configuration dictionary (None = defaults)
        """
        self.config = config if config is not None else load_config()
        self.logger = logging.getLogger(__name__)
        self.result = AnalysisResult()
        self.gfa_path: Optional[Path] = None
        self.output_dir: Optional[Path] = None

    def run(self, gfa_path: Union[str, Path], output_dir: Optional[Union[str, Path]] = None) -> AnalysisResult:
        """
        Run the complete analysis.

        Args:
            gfa_path: Input GFA file
            output_dir: Directory for tables and figures (None = nothing written)

        Returns:
            AnalysisResult
        """
        self.gfa_path = Path(gfa_path)
        self.output_dir = Path(output_dir) if output_dir else None
        self.result = AnalysisResult()
        started = time.time()

        self.logger.info("=" * 60)
        self.logger.info(f"Starting LoopWeaver module analysis: {self.gfa_path}")
        self.logger.info("=" * 60)

        for i, step in enumerate(STEPS):
            self.logger.info(f"STEP {i + 1}/{len(STEPS)}: {step.upper()}")
            try:
                self._execute_step(step)
            except Exception as e:
                self.logger.error(f"Step {step} failed: {e}")
                raise

        self.result.stats['runtime_seconds'] = round(time.time() - started, 3)
        self.logger.info("Module analysis complete")
        return self.result

    def _execute_step(self, step: str):
        """Execute a single pipeline step."""
        if step == 'load':
            self._step_load()
        elif step == 'orient':
            self._step_orient()
        elif step == 'jump':
            self._step_jump()
        elif step == 'segment':
            self._step_segment()
        elif step == 'matrix':
            self._step_matrix()
        elif step == 'ordinate':
            self._step_ordinate()
        elif step == 'export':
            self._step_export()
        elif step == 'plot':
            self._step_plot()
        else:
            raise ValueError(f"Unknown step: {step}")

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _step_load(self):
        graph = read_gfa(self.gfa_path)
        if graph.steps.empty:
            raise ValueError(f"No paths (P-lines) found in {self.gfa_path}")
        self.result.graph = graph
        self.result.stats.update({
            'input': str(self.gfa_path),
            'n_nodes': graph.n_nodes,
            'n_paths': graph.n_paths,
            'n_steps': len(graph.steps),
        })

    def _step_orient(self):
        steps = self.result.graph.steps
        if self.config['orientation']['normalize']:
            steps = normalize_orientation(steps)
            self.result.stats['n_reversed_paths'] = int(
                steps.drop_duplicates('path_name')['reversed'].sum()
            )
        self.result.steps = steps

    def _step_jump(self):
        reference = self.config['reference']
        if reference.get('jump_from') is not None and reference.get('jump_to') is not None:
            jump = JumpEdge(from_node=int(reference['jump_from']), to_node=int(reference['jump_to']),
                            difference=int(reference['jump_from']) - int(reference['jump_to']))
            self.logger.info(f"Using configured jump {jump.from_node} -> {jump.to_node}")
        else:
            jump = select_reference_jump(self.result.steps, reference.get('path_name'))
        self.result.jump = jump
        self.result.stats['jump'] = jump.to_dict()

    def _step_segment(self):
        segments = segment_paths(self.result.steps, self.result.jump)
        counts = modules_per_path(segments)
        self.result.segments = segments
        self.result.module_counts = counts
        self.result.summary = summarize_modules(segments, self.result.graph.nodes)
        self.result.stats.update({
            'n_module_traversals': len(self.result.summary),
            'paths_without_modules': int((counts == 0).sum()),
            'max_modules_per_path': int(counts.max()) if len(counts) else 0,
        })

    def _step_matrix(self):
        matrix = build_membership_matrix(
            self.result.segments, min_frequency=self.config['matrix']['min_frequency']
        )
        self.result.matrix = matrix
        self.result.stats['matrix_shape'] = list(matrix.shape)

    def _step_ordinate(self):
        matrix = self.result.matrix
        if matrix.shape[0] < 2 or matrix.shape[1] == 0:
            self.logger.warning(
                f"Skipping PCA: membership matrix has shape {matrix.shape}"
            )
            return

        pca_config = self.config['pca']
        pca = run_pca(
            matrix,
            n_components=pca_config['n_components'],
            scale=pca_config['scale'],
            random_state=pca_config['random_state'],
        )
        self.result.pca = pca
        self.result.stats['explained_variance_percent'] = pca.explained_percent()

        types_config = self.config['module_types']
        if not types_config['enabled']:
            return
        if len(pca.scores) < types_config['n_types']:
            self.logger.warning(
                f"Skipping module typing: {len(pca.scores)} module traversals "
                f"for {types_config['n_types']} types"
            )
            return
        types = assign_module_types(
            pca.scores, n_types=types_config['n_types'], random_state=types_config['random_state']
        )
        self.result.module_types = types
        self.result.stats['module_type_counts'] = {
            int(k): int(v) for k, v in types.value_counts().sort_index().items()
        }

    def _step_export(self):
        if self.output_dir is None or not self.config['output']['write_tables']:
            return
        out = self.output_dir
        outputs = self.result.outputs
        outputs['segments'] = str(write_segments_tsv(self.result.segments, out / 'segments.tsv'))
        outputs['module_summary'] = str(write_table(self.result.summary, out / 'module_summary.tsv'))
        outputs['membership_matrix'] = str(
            write_membership_matrix(self.result.matrix, out / 'membership_matrix.tsv')
        )
        if self.result.pca is not None:
            scores = self.result.pca.scores
            if self.result.module_types is not None:
                scores = scores.join(self.result.module_types)
            outputs['pca_scores'] = str(write_table(scores, out / 'pca_scores.tsv', index=True))

        self.result.stats['version'] = __version__
        outputs['summary'] = str(write_summary_json(self.result.stats, out / 'analysis_summary.json'))

    def _step_plot(self):
        viz_config = self.config['visualization']
        if self.output_dir is None or not viz_config['enabled']:
            return

        from ..visualization import ModuleVisualizer

        viz = ModuleVisualizer(
            self.output_dir / 'plots',
            fmt=viz_config['format'],
            dpi=viz_config['dpi'],
            max_points=viz_config['max_points'],
            random_state=viz_config['random_state'],
        )
        outputs = self.result.outputs
        outputs['plot_modules_per_path'] = str(viz.plot_modules_per_path(self.result.module_counts))
        outputs['plot_module_lengths'] = str(viz.plot_module_lengths(self.result.summary))
        if self.result.pca is not None:
            outputs['plot_pca'] = str(viz.plot_pca(
                self.result.pca.scores,
                explained=self.result.pca.explained_variance_ratio,
                hue=self.result.module_types,
            ))

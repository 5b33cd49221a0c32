#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for LoopWeaver.

This module provides the main CLI entry point and all subcommands for
the LoopWeaver module analysis.
"""

import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.schema import load_config, save_config_template, validate_config, VALID_TEMPLATES


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    LoopWeaver: Pangenome Module Segmentation and Ordination

    Splits haplotype paths of a GFA pangenome graph at the loop-back edge of a
    collapsed tandem duplication and separates module types by PCA.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


def _log_level(ctx):
    if ctx.obj.get('VERBOSE'):
        return 'DEBUG'
    if ctx.obj.get('QUIET'):
        return 'WARNING'
    return None


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='loopweaver_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t', type=click.Choice(VALID_TEMPLATES), default='default',
              help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
        click.echo(f"✓ Configuration file created: {output}")
    except Exception as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
        errors = validate_config(config)
    except Exception as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except Exception as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    reference = config['reference']
    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    click.echo(f"  Reference path: {reference['path_name'] or '(first path)'}")
    if reference['jump_from'] is not None:
        click.echo(f"  Jump: {reference['jump_from']} -> {reference['jump_to']}")
    else:
        click.echo("  Jump: detected")
    click.echo(f"  Orientation normalization: {config['orientation']['normalize']}")
    click.echo(f"  Min node frequency: {config['matrix']['min_frequency']}")
    click.echo(f"  PCA components: {config['pca']['n_components']} (scale={config['pca']['scale']})")
    click.echo(f"  Module types: {config['module_types']['n_types'] if config['module_types']['enabled'] else 'off'}")
    click.echo(f"  Plots: {config['visualization']['format'] if config['visualization']['enabled'] else 'off'}")


# ============================================================================
# Graph Commands
# ============================================================================

@main.command()
@click.argument('gfa', type=click.Path(exists=True))
def stats(gfa):
    """Count records in a GFA file."""
    from .io_utils import gfa_summary

    try:
        summary = gfa_summary(gfa)
    except Exception as e:
        click.echo(f"✗ Error reading GFA: {e}", err=True)
        sys.exit(1)

    click.echo(f"GFA: {gfa}")
    click.echo(f"  Version:  {summary['version'] or 'unknown'}")
    click.echo(f"  Segments: {summary['segments']:,}")
    click.echo(f"  Links:    {summary['links']:,}")
    click.echo(f"  Paths:    {summary['paths']:,}")


@main.command()
@click.argument('gfa', type=click.Path(exists=True))
@click.option('--reference', '-r', default=None,
              help='Reference path name (default: first path in file)')
@click.option('--no-orient', is_flag=True, help='Skip orientation normalization')
@click.pass_context
def jump(ctx, gfa, reference, no_orient):
    """Detect the loop-back jump on a reference path."""
    from .io_utils import read_gfa
    from .analysis import normalize_orientation, select_reference_jump
    from .utils import configure_logging

    configure_logging(load_config(), level=_log_level(ctx) or 'WARNING')

    try:
        steps = read_gfa(gfa).steps
        if not no_orient:
            steps = normalize_orientation(steps)
        edge = select_reference_jump(steps, reference)
    except Exception as e:
        click.echo(f"✗ Jump detection failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"Reference path: {edge.reference_path}")
    click.echo(f"Jump: {edge.from_node} -> {edge.to_node} (difference {edge.difference}, step {edge.step})")


@main.command()
@click.argument('gfa', type=click.Path(exists=True))
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output TSV of labelled path steps')
@click.option('--reference', '-r', default=None,
              help='Reference path name (default: first path in file)')
@click.option('--jump-from', type=int, default=None, help='Explicit jump source (larger node id)')
@click.option('--jump-to', type=int, default=None, help='Explicit jump target (smaller node id)')
@click.option('--no-orient', is_flag=True, help='Skip orientation normalization')
@click.pass_context
def segment(ctx, gfa, output, reference, jump_from, jump_to, no_orient):
    """Label every path step as flank or module."""
    from .io_utils import read_gfa, write_segments_tsv
    from .analysis import (
        JumpEdge, normalize_orientation, select_reference_jump, segment_paths, modules_per_path,
    )
    from .utils import configure_logging

    if (jump_from is None) != (jump_to is None):
        click.echo("✗ Error: --jump-from and --jump-to must be given together", err=True)
        sys.exit(1)

    configure_logging(load_config(), level=_log_level(ctx))

    try:
        steps = read_gfa(gfa).steps
        if not no_orient:
            steps = normalize_orientation(steps)
        if jump_from is not None:
            edge = JumpEdge(from_node=jump_from, to_node=jump_to, difference=jump_from - jump_to)
        else:
            edge = select_reference_jump(steps, reference)
        segments = segment_paths(steps, edge)
        write_segments_tsv(segments, output)
    except Exception as e:
        click.echo(f"✗ Segmentation failed: {e}", err=True)
        sys.exit(1)

    counts = modules_per_path(segments)
    if not ctx.obj.get('QUIET'):
        click.echo(f"✓ Segmented {len(counts)} paths with jump {edge.from_node} -> {edge.to_node}")
        click.echo(f"  Module traversals: {int(counts.sum())}")
        click.echo(f"  Output: {output}")


@main.command()
@click.argument('gfa', type=click.Path(exists=True))
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output directory for tables and figures')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.option('--reference', '-r', default=None,
              help='Reference path name (default: first path in file)')
@click.option('--n-components', type=int, default=None, help='Number of principal components')
@click.option('--no-plots', is_flag=True, help='Skip figure generation')
@click.pass_context
def analyze(ctx, gfa, output, config_file, reference, n_components, no_plots):
    """
    Run the complete module analysis.

    Examples:
        loopweaver analyze graph.gfa -o results/

        loopweaver analyze graph.gfa -o results/ -r HG002#1#chr6 --no-plots
    """
    from .utils import ModuleAnalysisPipeline, configure_logging

    try:
        pipeline_config = load_config(Path(config_file) if config_file else None)
    except Exception as e:
        click.echo(f"✗ Error loading configuration: {e}", err=True)
        sys.exit(1)

    # Override config with command-line options
    if reference:
        pipeline_config['reference']['path_name'] = reference
    if n_components is not None:
        pipeline_config['pca']['n_components'] = n_components
    if no_plots:
        pipeline_config['visualization']['enabled'] = False

    errors = validate_config(pipeline_config)
    if errors:
        click.echo("✗ Configuration validation failed:", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    configure_logging(pipeline_config, Path(output), level=_log_level(ctx))

    try:
        result = ModuleAnalysisPipeline(pipeline_config).run(gfa, output)
    except Exception as e:
        click.echo(f"✗ Analysis failed: {e}", err=True)
        sys.exit(1)

    if not ctx.obj.get('QUIET'):
        stats = result.stats
        click.echo(f"✓ Analysis complete: {output}")
        click.echo(f"  Paths: {stats['n_paths']}  Nodes: {stats['n_nodes']}")
        click.echo(f"  Jump: {result.jump.from_node} -> {result.jump.to_node}")
        click.echo(f"  Module traversals: {stats['n_module_traversals']}")
        if result.pca is not None:
            click.echo(f"  Explained variance (%): {stats['explained_variance_percent']}")


@main.command()
def version():
    """Show version information."""
    click.echo(f"LoopWeaver v{__version__}")


if __name__ == '__main__':
    main()

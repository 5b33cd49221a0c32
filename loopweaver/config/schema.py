"""
LoopWeaver v0.1.0

Configuration schema for LoopWeaver.

Defines all available configuration parameters with defaults and validation.

Author: LoopWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Reference jump
    # ========================================================================
    'reference': {
        'path_name': None,  # None = first P-line in the file
        'jump_from': None,  # Set both to skip detection
        'jump_to': None,
    },

    # ========================================================================
    # Path orientation
    # ========================================================================
    'orientation': {
        'normalize': True,  # Reverse paths that are mostly '-' oriented
    },

    # ========================================================================
    # Membership matrix
    # ========================================================================
    'matrix': {
        'min_frequency': 0.0,  # Drop nodes seen in fewer module traversals
    },

    # ========================================================================
    # PCA / module types
    # ========================================================================
    'pca': {
        'n_components': 2,
        'scale': False,
        'random_state': 42,
    },
    'module_types': {
        'enabled': True,
        'n_types': 2,
        'random_state': 42,
    },

    # ========================================================================
    # Visualization
    # ========================================================================
    'visualization': {
        'enabled': True,
        'format': 'png',  # 'png', 'pdf', 'svg'
        'dpi': 150,
        'max_points': 5000,  # Subsample scatter plots above this
        'random_state': 42,
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'write_tables': True,
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': 'loopweaver.log',
        },
    },
}

VALID_TEMPLATES = ['default', 'exploratory', 'publication']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
VALID_FIGURE_FORMATS = ['png', 'pdf', 'svg']


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        with open(config_path) as f:
            user_config = yaml.safe_load(f) or {}

        # Deep merge user config into defaults
        config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'exploratory', 'publication')
    """
    if template not in VALID_TEMPLATES:
        raise ValueError(f"Unknown template: {template} (expected one of {VALID_TEMPLATES})")

    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'exploratory':
        config['pca']['n_components'] = 5
        config['module_types']['enabled'] = False
        config['output']['logging']['level'] = 'DEBUG'

    elif template == 'publication':
        config['matrix']['min_frequency'] = 0.05
        config['visualization']['format'] = 'pdf'
        config['visualization']['dpi'] = 300

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    # Explicit jump needs both ends, from > to
    reference = config.get('reference', {})
    jump_from, jump_to = reference.get('jump_from'), reference.get('jump_to')
    if (jump_from is None) != (jump_to is None):
        errors.append("reference.jump_from and reference.jump_to must be set together")
    elif jump_from is not None and not (_is_int(jump_from) and _is_int(jump_to)):
        errors.append(f"Invalid jump: node ids must be integers (got {jump_from!r}, {jump_to!r})")
    elif jump_from is not None and jump_from <= jump_to:
        errors.append(f"Invalid jump: jump_from ({jump_from}) must exceed jump_to ({jump_to})")

    min_frequency = config.get('matrix', {}).get('min_frequency', 0.0)
    if not _is_number(min_frequency):
        errors.append(f"Invalid matrix.min_frequency: {min_frequency!r} (must be a number)")
    elif not 0.0 <= min_frequency <= 1.0:
        errors.append(f"Invalid matrix.min_frequency: {min_frequency} (must be within [0, 1])")

    n_components = config.get('pca', {}).get('n_components', 2)
    if not isinstance(n_components, int) or n_components < 1:
        errors.append(f"Invalid pca.n_components: {n_components}")

    n_types = config.get('module_types', {}).get('n_types', 2)
    if not isinstance(n_types, int) or n_types < 1:
        errors.append(f"Invalid module_types.n_types: {n_types}")

    viz = config.get('visualization', {})
    if viz.get('format', 'png') not in VALID_FIGURE_FORMATS:
        errors.append(f"Invalid visualization.format: {viz.get('format')}")
    max_points = viz.get('max_points', 1)
    if not _is_int(max_points) or max_points < 1:
        errors.append(f"Invalid visualization.max_points: {viz.get('max_points')}")

    level = config.get('output', {}).get('logging', {}).get('level', 'INFO')
    if level not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    return errors

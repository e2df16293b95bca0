"""YAML export configuration with defaults."""

import copy
from pathlib import Path
from typing import Dict, Optional

import yaml

from osmlink.utils.logging_utils import get_logger
from .settings import Settings, settings as global_settings

logger = get_logger(__name__)


DEFAULT_CONFIG = {
    'templates': {
        'html': None,  # None = take the value from settings
        'latex': None,
    },
    'renderer': {
        'cache_dir': None,
        'tile_zoom': None,
        'canvas_width_px': None,
        'canvas_height_px': None,
        'stroke_color': None,
    },
}


def load_export_config(
    config_path: Optional[Path] = None,
    settings: Optional[Settings] = None,
) -> Dict:
    """Load export configuration, merging a YAML file over the defaults.

    Unset values are filled from ``settings``.

    Args:
        config_path: Optional path to a YAML file with ``templates`` and
            ``renderer`` sections
        settings: Settings supplying fallback values

    Returns:
        Configuration dict with every value populated
    """
    settings = settings or global_settings
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Export config not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            user_config = yaml.safe_load(f) or {}

        if not isinstance(user_config, dict):
            raise ValueError(f"Export config must be a mapping: {config_path}")

        # Deep update, one level
        for section, values in user_config.items():
            if section in config and isinstance(values, dict):
                config[section].update(values)
            else:
                config[section] = values

        logger.info(f"Loaded export config from {config_path}")

    templates = config['templates']
    if templates.get('html') is None:
        templates['html'] = settings.html_template
    if templates.get('latex') is None:
        templates['latex'] = settings.latex_template

    for key, value in config['renderer'].items():
        if value is None and hasattr(settings, key):
            config['renderer'][key] = getattr(settings, key)

    return config

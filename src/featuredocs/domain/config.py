from __future__ import annotations

"""
Configuration Domain Management.

Holds the default run configuration and loads optional JSON configuration
files that override it. The dictionary form drives the pipeline; it is
turned into ProcessorOptions once validated.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from featuredocs.domain.pipeline_models import DEFAULT_FEATURE_SUFFIX, ProcessorOptions

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_INPUT_DIR = "features"
DEFAULT_OUTPUT_DIR = "docs"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    base = os.getcwd()
    return {
        # IO Paths
        "input_path": os.path.join(base, DEFAULT_INPUT_DIR),
        "output_dir": os.path.join(base, DEFAULT_OUTPUT_DIR),
        "output_file": "",

        # Step resolution
        "steps": [],
        "add_implemented_tags": False,

        # Discovery
        "feature_suffix": DEFAULT_FEATURE_SUFFIX,

        # Reporting
        "print_tree": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a configuration file and merge it over the defaults.

    A missing path returns the defaults. An unreadable or non-object file
    is reported and ignored.

    Args:
        config_file: Optional path to a JSON configuration file.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()

    if not config_file:
        return config

    if not os.path.exists(config_file):
        logger.warning(f"Config file not found: {config_file}. Using defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{config_file}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    config.update(data)
    logger.debug(f"Configuration loaded from {config_file}")
    return config


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def options_from_config(config: Dict[str, Any]) -> ProcessorOptions:
    """
    Build the processor options out of a validated configuration.
    """
    return ProcessorOptions(
        steps=list(config.get("steps") or []),
        add_implemented_tags=bool(config.get("add_implemented_tags", False)),
        feature_suffix=config.get("feature_suffix") or DEFAULT_FEATURE_SUFFIX,
    )

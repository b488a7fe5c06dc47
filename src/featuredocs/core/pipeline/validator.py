from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper of the pipeline: makes sure the configuration dictionary
conforms to the expected schema. Handles type coercion, default value
injection and suffix normalization.
"""

import logging
from typing import Any, Dict, List, Tuple

from featuredocs.domain.config import get_default_config
from featuredocs.domain.pipeline_models import DEFAULT_FEATURE_SUFFIX

logger = logging.getLogger(__name__)

_STRING_FIELDS = ["input_path", "output_dir", "output_file", "feature_suffix"]
_BOOL_FIELDS = ["add_implemented_tags", "print_tree"]
_LIST_FIELDS = ["steps"]
_OPTIONAL_STRING_FIELDS = {"output_file"}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (CLI flags, JSON files) into strictly typed
    parameters and fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for name in _STRING_FIELDS:
        merged[name] = _as_str(
            merged.get(name), defaults.get(name, ""), name, warnings, strict,
            allow_empty=name in _OPTIONAL_STRING_FIELDS,
        )

    for name in _BOOL_FIELDS:
        merged[name] = _as_bool(merged.get(name), defaults.get(name, False), name, warnings, strict)

    for name in _LIST_FIELDS:
        merged[name] = _as_list_str(merged.get(name), name, warnings, strict)

    merged["feature_suffix"] = _normalize_suffix(merged["feature_suffix"], warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(
        value: Any,
        fallback: str,
        name: str,
        warnings: List[str],
        strict: bool,
        allow_empty: bool = False,
) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v or allow_empty else fallback

    msg = f"Invalid field '{name}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, name: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{name}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{name}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{name}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{name}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, name: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return []

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{name}' converted from CSV string to list.")
        return items

    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{name}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{name}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using an empty list.")
    return []


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_suffix(suffix: str, warnings: List[str], strict: bool) -> str:
    """Ensure the feature suffix is prefixed with a dot."""
    s = suffix.strip()
    if not s:
        return DEFAULT_FEATURE_SUFFIX
    if not s.startswith("."):
        if strict:
            raise ValueError(f"Invalid feature suffix '{suffix}': must start with '.'.")
        warnings.append(f"Feature suffix '{suffix}' corrected to '.{s}'.")
        s = "." + s
    return s

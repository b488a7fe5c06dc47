from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization and artifact persistence helpers shared by the
pipeline and the CLI.
"""

import json
import os
from typing import Any, Optional

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# PERSISTENCE API
# -----------------------------------------------------------------------------

def save_json(path: str, payload: Any) -> None:
    """
    Write a JSON document, creating parent directories as needed.

    Args:
        path: Target file path.
        payload: JSON-compatible data.

    Raises:
        OSError: The file or its parent directory cannot be written.
        TypeError: The payload is not JSON-compatible; nothing is written.
    """
    text = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"

    out_dir = os.path.dirname(os.path.abspath(path))
    os.makedirs(out_dir, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)

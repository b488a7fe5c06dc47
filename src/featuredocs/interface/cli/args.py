from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the featuredocs CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="featuredocs",
        description="Build a cross-referenced documentation tree from Gherkin feature files.",
    )

    # --- Path Management ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Feature directory to document (default: ./features).",
    )
    p.add_argument(
        "-o", "--output-dir",
        dest="output_dir",
        default=None,
        help="Output root mirrored by the tree's write paths (default: ./docs).",
    )
    p.add_argument(
        "--output-file",
        dest="output_file",
        default=None,
        help="Write the documentation tree as JSON to this file.",
    )
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file merged over the defaults.",
    )

    # --- Step Resolution ---
    p.add_argument(
        "--steps",
        dest="steps",
        default=None,
        help="Comma-separated step-definition files, directories or glob patterns.",
    )
    p.add_argument(
        "--implemented-tags",
        dest="add_implemented_tags",
        action="store_true",
        help="Tag steps and scenarios with 'Implemented' or 'Not Implemented'.",
    )

    # --- Discovery ---
    p.add_argument(
        "--suffix",
        dest="feature_suffix",
        default=None,
        help="Filename suffix of feature files (default: .feature).",
    )

    # --- Reporting ---
    p.add_argument(
        "--print-tree",
        action="store_true",
        help="Print a text preview of the documentation tree.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the documentation tree as JSON to stdout.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Flags left unset map to None and do not override the base configuration.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "output_dir": args.output_dir,
        "output_file": args.output_file,
        "feature_suffix": args.feature_suffix,
        "steps": _split_csv(args.steps),
    }

    if args.add_implemented_tags:
        overrides["add_implemented_tags"] = True
    if args.print_tree:
        overrides["print_tree"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of stripped items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]

from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration loading
and merging (defaults, JSON file, CLI overrides), pipeline execution and
result rendering.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from featuredocs.core.analysis.tree_renderer import render_tree
from featuredocs.core.pipeline.engine import run_pipeline
from featuredocs.core.pipeline.serializer import to_jsonable
from featuredocs.core.pipeline.validator import validate_config
from featuredocs.domain.config import load_config
from featuredocs.domain.pipeline_models import PipelineResult
from featuredocs.infra.fs import normalize_path
from featuredocs.infra.logging import LoggingConfig, configure_logging, get_logger
from featuredocs.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failed run, 2 bad input, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration...")

    base_conf = load_config(args.config_file)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    input_path = normalize_path(clean_conf.get("input_path", ""), os.getcwd())
    if not os.path.exists(input_path):
        msg = f"Input path does not exist: {input_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    logger.info(f"Documenting features in: {input_path}")
    try:
        result = run_pipeline(clean_conf)
    except KeyboardInterrupt:
        logger.warning("Run interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        msg = f"Documentation run aborted: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    if args.json_output and result.tree is not None:
        print(json.dumps(to_jsonable(result.tree), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result, print_tree=bool(clean_conf.get("print_tree")))

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of non-None override values into the base configuration.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult, print_tree: bool = False) -> None:
    """
    Print a terminal report of the run.

    Args:
        result: The pipeline result to render.
        print_tree: Also print the text preview of the tree.
    """
    if not result.ok or result.tree is None:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary

    if print_tree:
        print("\n".join(render_tree(result.tree.root)))
        print()

    print(f"Features: {summary.get('features', 0)} "
          f"({summary.get('implemented_features', 0)} implemented)")
    print(f"Scenarios: {summary.get('scenarios', 0)} "
          f"({summary.get('implemented_scenarios', 0)} implemented)")
    if summary.get("downgraded"):
        print(f"Unparsable feature files: {summary['downgraded']}")

    if result.tree.tags:
        print("Tags:")
        for tag in result.tree.tags:
            print(f"  - {tag.name}: {tag.count}")

    if result.output_file:
        print(f"Documentation tree written to: {result.output_file}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())

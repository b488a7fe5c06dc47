from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. CSV string parsing logic.
3. Unset flags never override the base configuration.
"""

from featuredocs.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_boolean_flags_mapping():
    overrides = args_to_overrides(parse_args(["--implemented-tags", "--print-tree"]))

    assert overrides["add_implemented_tags"] is True
    assert overrides["print_tree"] is True


def test_cli_unset_flags_map_to_none():
    overrides = args_to_overrides(parse_args([]))

    assert overrides["input_path"] is None
    assert overrides["steps"] is None
    assert "add_implemented_tags" not in overrides
    assert "print_tree" not in overrides


def test_cli_csv_steps_parsing():
    overrides = args_to_overrides(parse_args(["--steps", "steps/, tests/**/*_steps.py,"]))

    assert overrides["steps"] == ["steps/", "tests/**/*_steps.py"]


def test_cli_path_arguments():
    args = parse_args([
        "-i", "/tmp/features",
        "-o", "/tmp/docs",
        "--output-file", "/tmp/docs/tree.json",
        "--suffix", ".story",
    ])

    overrides = args_to_overrides(args)

    assert overrides["input_path"] == "/tmp/features"
    assert overrides["output_dir"] == "/tmp/docs"
    assert overrides["output_file"] == "/tmp/docs/tree.json"
    assert overrides["feature_suffix"] == ".story"


def test_cli_reporting_flags():
    args = parse_args(["--json", "--dump-config", "--debug", "--log-file", "run.log", "--config", "c.json"])

    assert args.json_output is True
    assert args.dump_config is True
    assert args.debug is True
    assert args.log_file == "run.log"
    assert args.config_file == "c.json"

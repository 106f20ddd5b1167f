from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Sub-command selection and shared flags.
2. Mapping of CLI options to configuration keys.
"""

import pytest

from codeminifier4ai.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_minify_arguments_mapping():
    args = parse_args(["minify", "-i", "/src/project", "-o", "out.txt", "a.js", "b.py"])

    assert args.command == "minify"
    assert args.files == ["a.js", "b.py"]
    assert args_to_overrides(args) == {
        "input_path": "/src/project",
        "output_path": "out.txt",
    }


def test_chunk_arguments_mapping():
    args = parse_args(["chunk", "--max-chars", "500", "--session", "s1", "--json"])

    overrides = args_to_overrides(args)

    assert args.json_output is True
    assert args.files == []
    assert overrides["max_chunk_chars"] == 500
    assert overrides["session_id"] == "s1"
    assert "input_path" not in overrides


def test_split_arguments_mapping():
    args = parse_args(["split", "unified.txt", "--size", "4000", "--overlap", "200"])

    assert args.file == "unified.txt"
    assert args_to_overrides(args) == {
        "context_chunk_size": 4000,
        "context_overlap": 200,
    }


def test_shared_flags_default_off():
    args = parse_args(["minify"])

    assert args.json_output is False
    assert args.use_defaults is False
    assert args.dump_config is False
    assert args.debug is False
    assert args.save_config is False
    assert args_to_overrides(args) == {}


def test_command_is_required():
    with pytest.raises(SystemExit):
        parse_args([])


def test_log_file_flag_forms():
    assert parse_args(["minify"]).log_file is None
    assert parse_args(["minify", "--log-file"]).log_file == ""
    assert parse_args(["minify", "--log-file", "run.log"]).log_file == "run.log"

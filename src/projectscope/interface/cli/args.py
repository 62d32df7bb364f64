from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the 'scan' and 'context' sub-commands and translates parsed
namespaces into configuration overrides understood by the domain layer.
"""

import argparse
from typing import Any, Dict, List, Optional

from projectscope.domain.constants import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_ENTRIES,
    DEFAULT_STRUCTURE_FILE_NAME,
    MAX_MAX_DEPTH,
    MAX_MAX_ENTRIES,
    STATE_DIR_NAME,
)

COMMAND_SCAN = "scan"
COMMAND_CONTEXT = "context"

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the projectscope CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="projectscope",
        description="Scan a codebase into a reusable project base and render it as LLM context.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    scan = sub.add_parser(COMMAND_SCAN, help="Walk a project and write its project base file.")
    _add_common_arguments(scan)

    # --- Path Management ---
    scan.add_argument(
        "-r", "--root",
        dest="root_directory",
        default=None,
        help="Project root to scan (default: current directory).",
    )
    scan.add_argument(
        "-o", "--output-dir",
        dest="output_directory",
        default=None,
        help=f"Directory for the project base file (default: {STATE_DIR_NAME}).",
    )

    # --- Walk Bounds ---
    scan.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        default=None,
        help=f"Maximum directory depth, 1-{MAX_MAX_DEPTH} (default: {DEFAULT_MAX_DEPTH}).",
    )
    scan.add_argument(
        "--max-entries",
        dest="max_entries_per_directory",
        type=int,
        default=None,
        help=f"Maximum entries recorded per directory, 1-{MAX_MAX_ENTRIES} (default: {DEFAULT_MAX_ENTRIES}).",
    )
    scan.add_argument(
        "--hidden",
        dest="include_hidden",
        action="store_true",
        help="Include dotfiles and dot-directories.",
    )
    scan.add_argument(
        "--ignore",
        default=None,
        help="Comma-separated extra names or relative paths to skip.",
    )

    # --- Manual Hints ---
    scan.add_argument(
        "--tech",
        dest="manual_tech_stack",
        default=None,
        help="Comma-separated technology labels to add to the tech stack.",
    )
    scan.add_argument(
        "--languages",
        dest="manual_languages",
        default=None,
        help="Comma-separated language hints for languages without files yet.",
    )
    scan.add_argument(
        "--description",
        dest="project_description",
        default=None,
        help="Project description overriding the manifest one.",
    )

    # --- Output ---
    scan.add_argument(
        "--print-tree",
        action="store_true",
        help="Print an ASCII preview of the scanned tree.",
    )
    scan.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the scan summary as JSON.",
    )

    ctx = sub.add_parser(COMMAND_CONTEXT, help="Render an existing project base as text context.")
    _add_common_arguments(ctx)
    ctx.add_argument(
        "-d", "--dir",
        dest="base_directory",
        default=STATE_DIR_NAME,
        help=f"Directory holding the project base file (default: {STATE_DIR_NAME}).",
    )
    ctx.add_argument(
        "--tokens",
        action="store_true",
        help="Append an estimated token count of the rendered context.",
    )

    return p


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--file",
        dest="structure_file_name",
        default=None,
        help=f"Project base file name (default: {DEFAULT_STRUCTURE_FILE_NAME}).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate a parsed 'scan' namespace into configuration overrides.

    Unset options map to None so the merge step keeps the base value.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "root_directory": args.root_directory,
        "output_directory": args.output_directory,
        "structure_file_name": args.structure_file_name,
        "max_depth": args.max_depth,
        "max_entries_per_directory": args.max_entries_per_directory,
        "project_description": args.project_description,
        "ignore": _split_csv(args.ignore),
        "manual_tech_stack": _split_csv(args.manual_tech_stack),
        "manual_languages": _split_csv(args.manual_languages),
    }
    if args.include_hidden:
        overrides["include_hidden"] = True
    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of trimmed items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]

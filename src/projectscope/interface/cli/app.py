from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merge and
validation, scan execution or project base rendering, and result output.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from projectscope.core.analysis.tree_renderer import render_tree_lines
from projectscope.core.processing.tokenizer import TokenizerService
from projectscope.core.project_base.context import build_project_base_context
from projectscope.core.project_base.reader import load_project_base
from projectscope.core.services.overview import run_overview
from projectscope.core.services.validator import validate_config
from projectscope.domain.config import get_default_config
from projectscope.domain.constants import DEFAULT_STRUCTURE_FILE_NAME
from projectscope.domain.errors import ProjectBaseError, ProjectScanError
from projectscope.domain.project_models import ScanResult
from projectscope.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from projectscope.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    try:
        if args.command == cli_args.COMMAND_CONTEXT:
            return _run_context(args)
        return _run_scan(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    finally:
        shutdown_logging()

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _run_scan(args: argparse.Namespace) -> int:
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(get_default_config(), overrides)

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration constraint: {w}")

    try:
        result = run_overview(clean_conf)
    except ProjectScanError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except OSError as e:
        logger.critical(f"Failed to write project base: {e}", exc_info=True)
        print(f"ERROR: Failed to write project base: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.json_output:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if args.print_tree and result.tree is not None:
        print()
        print("\n".join(render_tree_lines(result.tree)))

    return EXIT_OK


def _run_context(args: argparse.Namespace) -> int:
    file_name = args.structure_file_name or DEFAULT_STRUCTURE_FILE_NAME
    try:
        base, path = load_project_base(args.base_directory, file_name)
    except ProjectBaseError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    context = build_project_base_context(base)
    print(context)

    if args.tokens:
        metrics = TokenizerService().describe(context)
        print()
        print(f"Estimated tokens: {metrics['tokens']:,} ({metrics['characters']:,} characters)")

    logger.debug(f"Rendered context from {path}")
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge non-None overrides for known keys into the base config.

    Args:
        base: Default configuration.
        overrides: Values mapped from the command line.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: ScanResult) -> None:
    """Print the scan summary as a short terminal report."""
    overview = result.overview

    print(f"Project: {overview.get('projectName', '')}")
    if overview.get("description"):
        print(f"Description: {overview['description']}")

    stats = overview.get("stats", {})
    print(f"Files: {stats.get('totalFiles', 0)}  Directories: {stats.get('totalDirectories', 0)}")

    languages = overview.get("languages", [])
    if languages:
        print("Languages: " + ", ".join(f"{i['language']} ({i['count']})" for i in languages))

    tech = overview.get("techStack", [])
    if tech:
        print("Tech stack: " + ", ".join(sorted(tech)))

    if overview.get("packageManager"):
        print(f"Package manager: {overview['packageManager']}")

    print(f"Project base: {result.structure_file_relative_to_cwd}")

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for w in result.warnings:
            print(f"  - {w}")


if __name__ == "__main__":
    sys.exit(main())

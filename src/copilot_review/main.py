"""CLI entry point for copilot-review.

This module defines the Click-based command-line interface.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console

# Environment variables from ./.env must be visible before config is read
load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

from copilot_review import __version__  # noqa: E402
from copilot_review.cli.common import cli_error_handler  # noqa: E402
from copilot_review.cli.console import console, err_console  # noqa: E402
from copilot_review.cli.context import ExitCode  # noqa: E402
from copilot_review.cli.output import format_error  # noqa: E402
from copilot_review.config import load_config  # noqa: E402
from copilot_review.git import GitRepository  # noqa: E402
from copilot_review.logging import configure_logging, get_logger  # noqa: E402
from copilot_review.runner import ReviewPromptGenerator, RunInputs, RunStatus  # noqa: E402

EPILOG = """\b
Examples:
  copilot-review                     # Compare with develop branch
  copilot-review main                # Compare with main branch
  copilot-review feature/old-branch  # Compare with specific branch
  copilot-review main --keep-old     # Compare with main, keep old files
  copilot-review main --no-gitignore # Compare with main, skip .gitignore update
  copilot-review -h                  # Show help

\b
Features:
  • Generates code review prompts for VS Code Copilot
  • Creates PR description prompts
  • Smart batching for large changes
  • Automatic cleanup of old files
  • Automatic .gitignore management
  • File type analysis and categorization
"""

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


#: Queries that fail when the base branch does not exist
_BRANCH_RANGE_OPERATIONS = frozenset({"commits_between", "changed_files"})
_BRANCH_RANGE_HINT = "Check that the base branch '{}' exists (try: git fetch)"


def _resolve_log_level(verbose: int, quiet: bool, configured: str) -> int:
    """Pick the log level. Priority: quiet > verbose > config."""
    if quiet:
        return logging.ERROR
    if verbose > 0:
        return logging.INFO if verbose == 1 else logging.DEBUG
    return _VERBOSITY_LEVELS.get(configured, logging.WARNING)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EPILOG,
)
@click.version_option(version=__version__, prog_name="copilot-review")
@click.argument("base_branch", required=False, default=None)
@click.option(
    "-k",
    "--keep-old",
    is_flag=True,
    default=False,
    help="Keep old prompt files instead of cleaning them up.",
)
@click.option(
    "--no-gitignore",
    is_flag=True,
    default=False,
    help="Skip adding the prompt directory to .gitignore.",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./copilot-review.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase log verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress progress output (errors only).",
)
def cli(
    base_branch: str | None,
    keep_old: bool,
    no_gitignore: bool,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """🚀 Copilot Code Reviewer.

    Compare the current branch with BASE_BRANCH (default: develop) and write
    review prompts for VS Code Copilot into ./code-review-prompts/.
    """
    # Provisional setup so config loading logs go to stderr; refined below
    configure_logging(level=logging.ERROR if quiet else None)

    with cli_error_handler():
        config_path = Path(config_file) if config_file else None
        config = load_config(config_path)

        configure_logging(level=_resolve_log_level(verbose, quiet, config.verbosity))
        logger = get_logger(__name__)

        inputs = RunInputs(
            base_branch=base_branch or config.default_base_branch,
            skip_cleanup=keep_old,
            skip_gitignore=no_gitignore,
        )
        logger.debug("cli_invoked", base_branch=inputs.base_branch)

        generator = ReviewPromptGenerator(
            GitRepository(),
            config,
            console=Console(quiet=True) if quiet else console,
            err_console=Console(stderr=True, quiet=True) if quiet else err_console,
        )
        result = generator.run(inputs)

        if result.status is RunStatus.FATAL:
            operation = result.error.operation if result.error else None
            hint = None
            if operation in _BRANCH_RANGE_OPERATIONS:
                hint = _BRANCH_RANGE_HINT.format(inputs.base_branch)
            click.echo(
                format_error(
                    result.message,
                    details=[f"Operation: {operation}"] if operation else None,
                    suggestion=hint,
                ),
                err=True,
            )
            raise SystemExit(ExitCode.FAILURE)


if __name__ == "__main__":
    cli()

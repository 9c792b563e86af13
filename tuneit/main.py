"""Command-line entry point for the TuneIt salary pipeline."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from tuneit.config.environment import EnvironmentConfig
from tuneit.config.exceptions import ConfigurationError
from tuneit.config.loader import load_config
from tuneit.config.models import AppConfig
from tuneit.domain.models import JobPosting, SalaryDetails
from tuneit.jobs import JobIntakeError, JobIntakeService
from tuneit.logging import get_logger
from tuneit.logging.config import configure_logging
from tuneit.logging.context import log_context
from tuneit.persistence import (
    JobPostingRepository,
    PersistenceError,
    close_database,
    get_session,
    init_database,
)
from tuneit.salary import SalaryMarkdown, SalaryParser, local_markdown_fallback, to_salary_columns

logger = get_logger(__name__, component="cli")

STDIN = "-"


class InputError(Exception):
    """The command's input could not be read or has the wrong shape."""


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level and format.

    Args:
        config_path: Explicit configuration file, or None for the default lookup
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with log_level and log_format set

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override.upper()
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    if not env_config.log_format:
        env_config.log_format = app_config.logging.format

    return app_config, env_config


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tuneit",
        description="TuneIt - salary extraction and normalization for job descriptions",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    extract = commands.add_parser("extract", help="Extract the salary from a raw job posting")
    extract.add_argument("input", nargs="?", default=STDIN, help="Text file, or - for stdin")

    normalize = commands.add_parser("normalize", help="Normalize a JSON salary object")
    normalize.add_argument("input", nargs="?", default=STDIN, help="JSON file, or - for stdin")

    fmt = commands.add_parser(
        "format", help="Post-process formatted Markdown so it ends with a Salary section"
    )
    fmt.add_argument("input", nargs="?", default=STDIN, help="Raw job posting, or - for stdin")
    fmt.add_argument(
        "--formatted",
        type=Path,
        default=None,
        help="Markdown produced by the formatting model (default: local fallback)",
    )

    save = commands.add_parser("save", help="Format and store a job posting")
    save.add_argument("input", nargs="?", default=STDIN, help="Raw job posting, or - for stdin")
    save.add_argument("--formatted", type=Path, default=None, help="Formatted Markdown")

    search = commands.add_parser("search", help="Search stored job postings")
    search.add_argument("term", nargs="?", default="", help="Search term (blank lists all)")

    return parser


def read_input(source: str) -> str:
    """Read a file argument, or stdin for "-"."""
    if source == STDIN:
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read {source}: {e}") from e


def salary_result(parser: SalaryParser, salary: Optional[SalaryDetails]) -> Dict[str, Any]:
    """JSON document printed by extract and normalize."""
    return {
        "salary": salary.to_payload() if salary else None,
        "columns": dict(to_salary_columns(salary)),
        "label": parser.format_label(salary),
    }


def posting_result(parser: SalaryParser, posting: JobPosting) -> Dict[str, Any]:
    return {
        "id": posting.id,
        "company_name": posting.company_name,
        "job_title": posting.job_title,
        "salary": posting.salary.to_payload() if posting.salary else None,
        "label": parser.format_label(posting.salary),
    }


def run_extract(args: argparse.Namespace, parser: SalaryParser) -> Dict[str, Any]:
    text = read_input(args.input)
    return salary_result(parser, parser.extract(text))


def run_normalize(args: argparse.Namespace, parser: SalaryParser) -> Dict[str, Any]:
    raw = read_input(args.input)
    try:
        data = json.loads(raw) if raw.strip() else None
    except ValueError as e:
        raise InputError(f"Input is not valid JSON: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise InputError(f"Expected a JSON object, got {type(data).__name__}")

    return salary_result(parser, parser.normalize(data))


def run_format(args: argparse.Namespace, parser: SalaryParser) -> str:
    source_text = read_input(args.input).strip()
    if args.formatted is not None:
        markdown = read_input(str(args.formatted))
    elif source_text:
        markdown = local_markdown_fallback(source_text)
    else:
        raise InputError("No job description given")

    formatted = SalaryMarkdown(parser).build_formatted_response(markdown, source_text or None)
    return formatted.markdown


def run_save(
    args: argparse.Namespace, parser: SalaryParser, env_config: EnvironmentConfig
) -> Dict[str, Any]:
    description = read_input(args.input)
    formatted = read_input(str(args.formatted)) if args.formatted is not None else None

    init_database(env_config.database_url)
    try:
        with get_session() as session:
            service = JobIntakeService(JobPostingRepository(session), SalaryMarkdown(parser))
            posting = service.create_posting(description, formatted)
    finally:
        close_database()

    return posting_result(parser, posting)


def run_search(
    args: argparse.Namespace, parser: SalaryParser, env_config: EnvironmentConfig
) -> List[Dict[str, Any]]:
    init_database(env_config.database_url)
    try:
        with get_session() as session:
            service = JobIntakeService(JobPostingRepository(session), SalaryMarkdown(parser))
            postings = service.search(args.term)
    finally:
        close_database()

    return [posting_result(parser, posting) for posting in postings]


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the tuneit command.

    Returns:
        Exit code (0 for success, 1 for configuration or input errors).
    """
    args = build_arg_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
        )

        parser = SalaryParser(app_config.salary)

        with log_context(command=args.command):
            logger.debug(
                "Running command",
                extra={"event": "cli.command.starting", "config_path": str(args.config or "")},
            )

            if args.command == "extract":
                output: Any = run_extract(args, parser)
            elif args.command == "normalize":
                output = run_normalize(args, parser)
            elif args.command == "format":
                output = run_format(args, parser)
            elif args.command == "save":
                output = run_save(args, parser, env_config)
            else:
                output = run_search(args, parser, env_config)

        if isinstance(output, str):
            print(output)
        else:
            print(json.dumps(output, ensure_ascii=False, indent=2))
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except (InputError, JobIntakeError) as e:
        print(f"Input Error: {e}", file=sys.stderr)
        return 1
    except PersistenceError as e:
        print(f"Storage Error: {e}", file=sys.stderr)
        logger.error(
            f"Storage error: {e}",
            exc_info=True,
            extra={"event": "cli.storage.failed", "error_type": type(e).__name__},
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())

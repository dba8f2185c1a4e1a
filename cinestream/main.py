"""Command-line entry point for cinestream.

Reads an input document (users, movies, actions and an optional seeded
session), executes every action and writes the resulting JSON array to a
file or to stdout.
"""

import argparse
import sys
from pathlib import Path

import structlog

from cinestream import __version__
from cinestream.models import AppConfig
from cinestream.services.config import VALID_LOG_LEVELS, ConfigurationService
from cinestream.services.errors import AppError, get_error_service
from cinestream.services.logging import setup_logging
from cinestream.services.simulation import load_input, run_simulation, write_output


log = structlog.stdlib.get_logger()


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        input_path: Path,
        output: Path | None,
        config: Path | None,
        log_level: str | None,
        log_dir: Path | None,
    ) -> None:
        self.input_path: Path = input_path
        self.output: Path | None = output
        self.config: Path | None = config
        self.log_level: str | None = log_level
        self.log_dir: Path | None = log_dir


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="cinestream",
        description="Run client actions against the movie catalog simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cinestream input.json                     Print results to stdout
  cinestream input.json -o results.json     Write results to a file
  cinestream input.json --log-level DEBUG   Trace every action
        """
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    _ = parser.add_argument(
        "input",
        type=Path,
        help="Input JSON document with users, movies and actions"
    )

    _ = parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Where to write the result array (default: stdout)"
    )

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/cinestream/config.json)"
    )

    _ = parser.add_argument(
        "--log-level",
        choices=list(VALID_LOG_LEVELS),
        default=None,
        help="Override the configured logging level"
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: console only)"
    )

    ns = parser.parse_args(argv)

    return ParsedArgs(
        input_path=ns.input,
        output=ns.output,
        config=ns.config,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
    )


def run(args: ParsedArgs) -> int:
    """Load configuration and input, run the actions and write the output.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    # Configure logging before the config file is read so its warnings go to stderr
    _ = setup_logging(log_level=args.log_level or "INFO", log_dir=args.log_dir)

    config: AppConfig = ConfigurationService(config_path=args.config).load_config()
    log_level = args.log_level or config.log_level
    if log_level != (args.log_level or "INFO"):
        _ = setup_logging(log_level=log_level, log_dir=args.log_dir)

    log.info(
        "Starting cinestream",
        version=__version__,
        input=str(args.input_path),
        log_level=log_level,
    )

    try:
        simulation = load_input(args.input_path)
        output = run_simulation(simulation, config)
        text = write_output(output, args.output, indent=config.output_indent)
        if args.output is None:
            print(text)
        return 0

    except AppError as e:
        errors = get_error_service()
        friendly = errors.handle_error(e, operation="run", component="main")
        print(errors.create_user_message(friendly), file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    try:
        exit_code = run(args)

    except KeyboardInterrupt:
        log.info("Interrupted by user")
        exit_code = 130

    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    log.info("Exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

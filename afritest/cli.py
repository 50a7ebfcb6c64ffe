"""CLI entrypoints for afritest commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="afritest",
        description="AI-Powered Test Generation Tool",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze the project structure and generate tests.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument("path", help="Path to the project sources to analyze.")
    analyze_parser.add_argument(
        "--unit",
        action="store_true",
        help="Generate unit tests only.",
    )
    analyze_parser.add_argument(
        "--integration",
        action="store_true",
        help="Generate integration tests only.",
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output directory for generated tests (default: test).",
    )
    analyze_parser.add_argument(
        "--concurrency",
        type=_positive_int,
        default=None,
        help="Number of generation requests in flight at once (default: 1).",
    )

    architecture_parser = subparsers.add_parser(
        "architecture",
        help="Print naming-pattern heuristics for the project layout.",
    )
    _add_verbose_option(architecture_parser, suppress_default=True)
    architecture_parser.add_argument("path", help="Path to the project sources to inspect.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing analyze and architecture.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def _selected_suites(args: argparse.Namespace) -> tuple[bool, bool]:
    """Return (unit, integration); neither flag selects both."""
    unit = bool(args.unit)
    integration = bool(args.integration)
    if not unit and not integration:
        return True, True
    return unit, integration


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for afritest commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "analyze":
        unit, integration = _selected_suites(args)
        orchestrator = Orchestrator()
        try:
            outcome = orchestrator.run_analyze(
                args.path,
                unit=unit,
                integration=integration,
                output_dir=args.output,
                concurrency=args.concurrency,
            )
        except Exception as exc:
            parser.exit(
                1,
                f"Error during analysis and test generation: {exc}\nRun with --verbose for more details.\n",
            )
        if unit:
            print(f"Unit tests generated successfully ({len(outcome.unit_artifacts)} files)")
        if integration:
            print(
                "Integration tests generated successfully "
                f"({len(outcome.integration_artifacts)} files)"
            )
    elif args.command == "architecture":
        try:
            report = Orchestrator().run_architecture(args.path)
        except Exception as exc:
            parser.exit(1, f"Error during architecture analysis: {exc}\n")
        print(report.render())
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Error: Invalid command\n")


if __name__ == "__main__":
    main(sys.argv[1:])

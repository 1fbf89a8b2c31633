"""CLI entry point for weather-odds."""

import argparse
import logging
import sys
from pathlib import Path

from weather_odds.config import (
    DEFAULT_VARIABLE,
    DEFAULT_WINDOW,
    END_YEAR,
    START_YEAR,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather-odds",
        description="Historical probability of a weather variable exceeding a threshold",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # analyze subcommand
    analyze_parser = subparsers.add_parser("analyze", help="Run an exceedance analysis")
    analyze_parser.add_argument("--lat", type=float, required=True, help="Latitude (-90 to 90)")
    analyze_parser.add_argument("--lon", type=float, required=True, help="Longitude (-180 to 180)")
    analyze_parser.add_argument("--month", type=int, required=True, help="Target month (1-12)")
    analyze_parser.add_argument("--day", type=int, required=True, help="Target day of month")
    analyze_parser.add_argument("--window", type=int, default=DEFAULT_WINDOW, help="Days before/after the target date")
    analyze_parser.add_argument("--threshold", type=float, required=True, help="Exceedance threshold")
    analyze_parser.add_argument("--variable", default=DEFAULT_VARIABLE, help="Variable id (see 'variables')")
    analyze_parser.add_argument("--start-year", type=int, default=START_YEAR, help="First year analysed")
    analyze_parser.add_argument("--end-year", type=int, default=END_YEAR, help="Last year analysed")
    analyze_parser.add_argument("--interval", choices=["wald", "wilson"], default="wald", help="Confidence interval method")
    analyze_parser.add_argument("--format", choices=["text", "json", "csv"], default="text", help="Output format")
    analyze_parser.add_argument("--output", type=Path, help="Write output to a file instead of stdout")

    # variables subcommand
    variables_parser = subparsers.add_parser("variables", help="List supported variables")
    variables_parser.add_argument("--category", help="Only variables in this category")

    # serve subcommand
    subparsers.add_parser("serve", help="Start the FastAPI server")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        _serve()
    elif args.command == "analyze":
        _analyze(args)
    elif args.command == "variables":
        _variables(args)


def _serve() -> None:
    import os
    try:
        import uvicorn
        from weather_odds.api.app import create_app  # noqa: F401

        port = int(os.environ.get("PORT", "8000"))
        uvicorn.run("weather_odds.api.app:create_app", factory=True, host="0.0.0.0", port=port)
    except ImportError as e:
        print(f"Missing dependency: {e}", file=sys.stderr)
        sys.exit(1)


def _analyze(args: argparse.Namespace) -> None:
    from weather_odds.compute.analysis import run_analysis
    from weather_odds.errors import AnalysisError
    from weather_odds.export import result_to_csv, result_to_json
    from weather_odds.models import AnalysisRequest

    try:
        request = AnalysisRequest(
            latitude=args.lat,
            longitude=args.lon,
            month=args.month,
            day=args.day,
            window=args.window,
            threshold=args.threshold,
            variable=args.variable,
        )
        result = run_analysis(
            request,
            start_year=args.start_year,
            end_year=args.end_year,
            interval_method=args.interval,
        )
    except AnalysisError as e:
        print(f"Error ({e.error_code}): {e.message}", file=sys.stderr)
        sys.exit(1)

    if args.format == "json":
        output = result_to_json(result) + "\n"
    elif args.format == "csv":
        output = result_to_csv(result)
    else:
        output = _format_text(result)

    if args.output is not None:
        args.output.write_text(output, encoding="utf-8")
        logger.info("Wrote %s output to %s", args.format, args.output)
    else:
        sys.stdout.write(output)


def _variables(args: argparse.Namespace) -> None:
    from weather_odds.variables import WEATHER_VARIABLES, Category, get_variables_by_category

    if args.category:
        try:
            variables = get_variables_by_category(args.category)
        except ValueError:
            valid = ", ".join(c.value for c in Category)
            print(f"Error: category must be one of: {valid}", file=sys.stderr)
            sys.exit(1)
    else:
        variables = list(WEATHER_VARIABLES)

    for v in variables:
        print(f"{v.id:<12} {v.unit:<7} {v.category.value:<14} {v.name}")


def _format_text(result) -> str:
    meta = result.metadata
    low, high = result.confidence_interval
    p = result.percentiles
    lines = [
        f"Location:       {meta.latitude:.4f}, {meta.longitude:.4f}",
        f"Date window:    {meta.month:02d}-{meta.day:02d} ±{meta.window_days} days",
        f"Variable:       {meta.variable} > {meta.threshold:g}",
        f"Probability:    {result.probability:.1f}%",
        f"95% CI:         [{low:.1f}%, {high:.1f}%] ({meta.interval_method})",
        f"Years analyzed: {result.years_analyzed} ({meta.start_year}-{meta.end_year})",
        f"Percentiles:    p25={p.p25:.1f} p50={p.p50:.1f} p75={p.p75:.1f} p90={p.p90:.1f}",
    ]
    return "\n".join(lines) + "\n"


if __name__ == "__main__":
    main()

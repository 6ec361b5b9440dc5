"""CLI entry point for RetireFlow."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from .advisor import DEFAULT_MODEL, DEFAULT_TIMEOUT, analyze_plan
from .engine import run_simulation
from .report import render_report, render_summary, write_report
from .scenarios import active_scenario, clone_scenario, delete_scenario, get_scenario
from .schema import SchemaError, ScenarioFile, load_scenarios, save_scenarios
from .validate import validate_scenario_file


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="RetireFlow retirement projection")
    parser.add_argument("scenarios", help="Path to scenario JSON file")
    parser.add_argument("-o", "--output", default="report.html", help="Output HTML path")
    parser.add_argument("--scenario", help="Scenario id to project (default: the active scenario)")
    parser.add_argument("--start-year", type=int, help="Calendar year of the first projected year (default: this year)")
    parser.add_argument("--validate", action="store_true", help="Validate JSON only")
    parser.add_argument("--summary", action="store_true", help="Print text summary to stdout")
    parser.add_argument("--list", action="store_true", help="List scenarios and exit")
    parser.add_argument("--clone", metavar="ID", help="Clone a scenario into the file and exit")
    parser.add_argument("--name", help="Name for the cloned scenario")
    parser.add_argument("--delete", metavar="ID", help="Delete a scenario from the file and exit")
    parser.add_argument("--advise", action="store_true", help="Include a language-model assessment in the report")
    parser.add_argument("--model", default=DEFAULT_MODEL, help=f"Advisor model id (default: {DEFAULT_MODEL})")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Advisor request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_validation(errors: list[str], warnings: list[str]) -> None:
    for warning in warnings:
        print(f"WARNING: {warning}")
    for error in errors:
        print(f"ERROR: {error}", file=sys.stderr)


def _list_scenarios(scenario_file: ScenarioFile) -> None:
    for scenario in scenario_file.scenarios:
        marker = "*" if scenario.id == scenario_file.active_scenario_id else " "
        print(f"{marker} {scenario.id}  {scenario.name}  ({scenario.created_at or 'no timestamp'})")


def _edit_file(args: argparse.Namespace, scenario_file: ScenarioFile) -> int:
    try:
        if args.clone:
            clone = clone_scenario(scenario_file, args.clone, name=args.name)
            print(f"Cloned {args.clone} as {clone.id} ({clone.name})")
        if args.delete:
            removed = delete_scenario(scenario_file, args.delete)
            print(f"Deleted {removed.id} ({removed.name})")
    except KeyError as exc:
        print(f"Unknown scenario: {exc.args[0]}", file=sys.stderr)
        return 2
    save_scenarios(args.scenarios, scenario_file)
    return 0


def _project(args: argparse.Namespace, scenario_file: ScenarioFile) -> int:
    try:
        scenario = get_scenario(scenario_file, args.scenario) if args.scenario else active_scenario(scenario_file)
    except KeyError as exc:
        print(f"Unknown scenario: {exc.args[0]}", file=sys.stderr)
        return 2
    if scenario is None:
        print("No scenarios to project", file=sys.stderr)
        return 2

    result = run_simulation(scenario.settings, scenario.assets, scenario.income_streams, start_year=args.start_year)

    advice = None
    if args.advise:
        advice = analyze_plan(scenario.settings, result, model=args.model, timeout=args.timeout)

    write_report(args.output, render_report(scenario, result, source_path=args.scenarios, advice=advice))

    if args.summary:
        print(render_summary(scenario, result))
    print(f"Wrote report to {Path(args.output)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.name and not args.clone:
        print("--name requires --clone", file=sys.stderr)
        return 2

    try:
        scenario_file = load_scenarios(args.scenarios)
    except (SchemaError, OSError, ValueError) as exc:
        print(f"Failed to load scenarios: {exc}", file=sys.stderr)
        return 2

    validation = validate_scenario_file(scenario_file)
    _print_validation(validation.errors, validation.warnings)
    if not validation.is_valid:
        return 1

    if args.list:
        _list_scenarios(scenario_file)
        return 0

    if args.validate:
        print("Scenarios are valid.")
        return 0

    if args.clone or args.delete:
        return _edit_file(args, scenario_file)

    return _project(args, scenario_file)


if __name__ == "__main__":
    raise SystemExit(main())

"""
Command-line entry point for the EU sustainability applicability checker.

Commands:
  assess     --answers FILE [--report]   Assessment JSON (camelCase) on stdout
  questions  [--answers FILE]            Visible steps with resolved labels
  validate   --answers FILE              Check an answer file against the catalog

Answer files are flat JSON objects mapping question keys to option codes.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from config import Settings, configure_logging, load_settings
from graph import assessment_from_state, run_assessment
from tools.questions import can_advance, missing_required, resolve_step, visible_steps
from tools.report import build_report
from tools.validation import AnswerValidationError, drop_non_string_answers, validate_answers

logger = logging.getLogger("cli")


class ExitCode:
    OK = 0
    INPUT_INVALID = 10     # unreadable file, bad JSON, answers not in the catalog
    INTERNAL_ERROR = 20    # unexpected error


class InputError(Exception):
    """Answer file could not be read or is not a JSON object."""


def load_answers(path: str) -> dict[str, Any]:
    answers_path = Path(path)
    if not answers_path.exists():
        raise InputError(f"Answers file not found: {answers_path}")
    try:
        data = json.loads(answers_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InputError(f"Invalid JSON in {answers_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InputError(f"{answers_path} must contain a JSON object of question key -> option code")
    return data


def _checked_answers(path: Optional[str], settings: Settings) -> dict[str, Any]:
    if path is None:
        return {}
    answers = load_answers(path)
    if settings.strict_answers:
        return validate_answers(answers)
    return drop_non_string_answers(answers)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_assess(args: argparse.Namespace, settings: Settings) -> int:
    answers = _checked_answers(args.answers, settings)
    logger.info("Assessing %d answers from %s", len(answers), args.answers)

    final_state = run_assessment(answers)
    assessment = assessment_from_state(final_state)

    payload: dict[str, Any] = {"assessment": assessment.to_json_dict()}
    if args.report:
        payload["report"] = build_report(assessment, answers).model_dump(mode="json", by_alias=True,
                                                                          exclude_none=True)
    _print_json(payload)

    if settings.include_trace:
        for entry in final_state.get("pipeline_trace", []):
            print(f"[trace] {entry['agent']}: {entry['ms']} ms", file=sys.stderr)
    return ExitCode.OK


def cmd_questions(args: argparse.Namespace, settings: Settings) -> int:
    answers = _checked_answers(args.answers, settings)
    steps = []
    for step in visible_steps(answers):
        rendered = resolve_step(step, answers).model_dump(mode="json", by_alias=True, exclude_none=True)
        rendered["complete"] = can_advance(step, answers)
        rendered["missing"] = missing_required(step, answers)
        steps.append(rendered)
    _print_json({"steps": steps})
    return ExitCode.OK


def cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    answers = validate_answers(load_answers(args.answers))
    missing = [key for step in visible_steps(answers) for key in missing_required(step, answers)]
    _print_json({"valid": True, "answered": len(answers), "missing": missing})
    return ExitCode.OK


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eusq",
        description="Applicability checker for UNGPs, OECD Guidelines, CSRD/ESRS, EU Taxonomy and CSDDD",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0   OK              Command completed
  10  INPUT_INVALID   Answer file missing, malformed, or not in the catalog
  20  INTERNAL_ERROR  Unexpected error

Examples:
  eusq assess --answers answers.json --report
  eusq questions --answers partial.json
  eusq validate --answers answers.json
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    assess_parser = subparsers.add_parser("assess", help="Assess all five frameworks for an answer set")
    assess_parser.add_argument("--answers", "-a", required=True, help="Answers JSON file")
    assess_parser.add_argument("--report", action="store_true", help="Include the report summary")
    assess_parser.set_defaults(func=cmd_assess)

    questions_parser = subparsers.add_parser("questions", help="Show the currently visible question steps")
    questions_parser.add_argument("--answers", "-a", help="Answers JSON file (optional)")
    questions_parser.set_defaults(func=cmd_questions)

    validate_parser = subparsers.add_parser("validate", help="Validate an answers file against the catalog")
    validate_parser.add_argument("--answers", "-a", required=True, help="Answers JSON file")
    validate_parser.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    settings = load_settings()
    configure_logging(settings)

    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return ExitCode.INPUT_INVALID

    try:
        return args.func(args, settings)
    except (InputError, AnswerValidationError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return ExitCode.INPUT_INVALID
    except Exception as exc:
        logger.exception("Command %s failed", args.command)
        print(f"[ERROR] Unexpected error: {exc}", file=sys.stderr)
        return ExitCode.INTERNAL_ERROR


if __name__ == "__main__":
    sys.exit(main())

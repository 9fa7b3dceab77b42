"""
Command-line entrypoint for the calculator client.

This script:
- Runs a single calculation against the service (``calc``)
- Prints the recorded history (``history``)
- Keeps one form open for an interactive session (``interactive``)

All arithmetic happens on the service; this side only validates and displays.
"""

import argparse
import sys
from typing import Iterable, List, Literal, Optional, TextIO

from pydantic import AnyHttpUrl, BaseModel, Field, ValidationError

from lizzycalc_client.client.client import CalculatorClient
from lizzycalc_client.common.logger import configure_logging, logger
from lizzycalc_client.common.parser import OperandParser
from lizzycalc_client.form.controller import CalculatorForm, SubmitOutcome
from lizzycalc_client.form.view import render_form, render_history

INTERACTIVE_HELP = "Enter 'N1 OP N2', ':history', ':auto on|off' or ':quit'"


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    command : str
        Sub-command to run.
    base_url : AnyHttpUrl
        Base URL of the calculation service.
    timeout : float, optional
        Request timeout in seconds.
    """

    command: Literal["calc", "history", "interactive"]
    base_url: AnyHttpUrl
    timeout: Optional[float] = Field(default=None, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    number1: str = ""
    operation: str = "+"
    number2: str = ""
    refresh_history: bool = False


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its sub-commands."""
    parser = argparse.ArgumentParser(prog="lizzycalc", description="Calculator service client")
    parser.add_argument("--base-url", default="http://127.0.0.1:8080", help="Calculation service base URL")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("--log-level", default="WARNING", type=str.upper, help="Logging level")

    commands = parser.add_subparsers(dest="command", required=True)

    calc = commands.add_parser("calc", help="Run one calculation")
    calc.add_argument("number1", help="First operand")
    calc.add_argument("operation", help="One of + - * /")
    calc.add_argument("number2", help="Second operand")
    calc.add_argument(
        "--refresh-history",
        action="store_true",
        help="Load history after a successful calculation",
    )

    commands.add_parser("history", help="Show past calculations")
    commands.add_parser("interactive", help="Open an interactive calculator session")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return CliArgs(**vars(args))
    except ValidationError as exc:
        parser.error(str(exc))


def _print(lines: Iterable[str], out: TextIO) -> None:
    for line in lines:
        print(line, file=out)


def run_calc(form: CalculatorForm, cli_args: CliArgs, out: TextIO) -> int:
    """Run one submit cycle and print the form. Return the exit code."""
    form.set_auto_refresh(cli_args.refresh_history)
    operation = OperandParser.normalize_operation(cli_args.operation)
    outcome = form.submit(cli_args.number1, cli_args.number2, operation)
    _print(render_form(form.state), out)

    if form.history_refresh is not None:
        # One-shot command: wait for the background refresh before printing it
        form.history_refresh.result()
        _print(render_history(form.state), out)

    return 0 if outcome is SubmitOutcome.SUCCESS else 1


def run_history(form: CalculatorForm, out: TextIO) -> int:
    """Fetch and print the history. Always succeeds; failures show as an empty list."""
    form.fetch_history()
    _print(render_history(form.state), out)
    return 0


def run_interactive(form: CalculatorForm, lines: Iterable[str], out: TextIO) -> int:
    """
    Drive one form from a stream of user lines until ``:quit`` or end of input.

    :param CalculatorForm form: Form kept for the whole session
    :param lines: Input lines
    :param out: Where rendered output goes

    :return: Exit code
    :rtype: int
    """
    print(INTERACTIVE_HELP, file=out)
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        if line == ":quit":
            break
        if line == ":history":
            form.fetch_history()
            _print(render_history(form.state), out)
        elif line.startswith(":auto"):
            _, _, flag = line.partition(" ")
            if flag not in ("on", "off"):
                print(INTERACTIVE_HELP, file=out)
                continue
            form.set_auto_refresh(flag == "on")
            print(f"Auto-refresh {flag}", file=out)
        else:
            tokens = line.split()
            if len(tokens) != 3:
                print(INTERACTIVE_HELP, file=out)
                continue
            number1, operation, number2 = tokens
            operation = OperandParser.normalize_operation(operation)
            outcome = form.submit(number1, number2, operation)
            _print(render_form(form.state), out)
            if outcome is SubmitOutcome.SUCCESS and form.state.auto_refresh:
                form.history_refresh.result()
                _print(render_history(form.state), out)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the ``lizzycalc`` command.
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.log_level)
    logger.debug(f"⚙️ Arguments: {cli_args}")

    client = CalculatorClient(base_url=str(cli_args.base_url), timeout=cli_args.timeout)
    # The form owns the client and closes it on exit
    with CalculatorForm(client=client) as form:
        if cli_args.command == "calc":
            return run_calc(form, cli_args, sys.stdout)
        if cli_args.command == "history":
            return run_history(form, sys.stdout)
        return run_interactive(form, sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())

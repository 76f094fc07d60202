"""
RoboLang CLI Entrypoint.

This module provides the command-line interface for checking, formatting and running
RoboLang programs.

Features:
    - Read source from `.robo` files or inline strings.
    - Lex and parse the program, reporting syntax errors with trailing context.
    - Print the program as canonical source or as a JSON tree.
    - Run the program against a recording TraceRobot configured from the command line.

Example usage:
    robo patrol.robo
    robo -s "loop { move; turnL; }" --run --fuel 5
    robo patrol.robo -t json -o patrol.json
    robo -s "if (lt(wallDist, 2)) { turnR; }" --run --sensor wallDist=1

Functions:
    run_robo(source, is_string=False, target="robo", out=None, run=False, pretty=False, robot=None) -> Outcome | None:
        Executes the full pipeline (lex → parse → format → output/run).

    main(argv=None) -> None:
        Parses CLI arguments and invokes `run_robo`, mapping errors to exit codes.
"""

import argparse
import logging
import sys

from robo.robo_constants import DEFAULT_FUEL
from robo.robo_interpreter import Interpreter, Outcome
from robo.robo_lexer import tokenize
from robo.robo_parser import Parser, ParserFailure
from robo.robo_robot import NoSuchBarrel, RobotInterrupted, TraceRobot
from robo.robo_transpile import TARGETS, Transpiler

CONFIGURABLE_SENSORS = ("oppLR", "oppFB", "wallDist")


def run_robo(
    source: str,
    is_string: bool = False,
    target: str = "robo",
    out: str | None = None,
    run: bool = False,
    pretty: bool = False,
    robot: TraceRobot | None = None,
) -> Outcome | None:
    """
    Run the RoboLang toolchain: lex, parse, emit, and optionally execute.

    Args:
        source (str): The program text or path to a `.robo` file.
        is_string (bool): If True, treats `source` as program text instead of a file path.
        target (str): Output format ('robo' or 'json'). Defaults to 'robo'.
        out (str | None): Optional path to write the emitted text. If None, prints to stdout
            unless `run` is set.
        run (bool): If True, executes the program against `robot` and prints its action trace.
        pretty (bool): If True, prints banners around each section.
        robot (TraceRobot | None): The robot to drive; a default TraceRobot when omitted.

    Returns:
        The execution Outcome when `run` is set, otherwise None.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.robo'.
        ParserFailure: If the program text is not valid RoboLang.
        RobotInterrupted: If the robot aborts the run.
    """
    if not is_string and not source.endswith(".robo"):
        raise ValueError("Only .robo files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing
    tokens = tokenize(source)

    # 3. Parsing
    program = Parser(tokens).parse()

    # 4. Emitting
    code = Transpiler(target).transpile(program)
    banner = "=" * 20

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(code + "\n")
        if pretty:
            print(f"(wrote to {out})")
    elif not run:
        if pretty:
            print(f"{banner}\nProgram ({target})\n{banner}\n{code}\n{banner}")
        else:
            print(code)

    # 5. Optional execution
    if not run:
        return None

    robot = robot if robot is not None else TraceRobot()
    try:
        outcome = Interpreter(robot).run(program)
    finally:
        if pretty:
            print("<<< ACTIONS >>>")
        for call in robot.calls:
            print(call)
    if pretty:
        print(f"<<< {outcome.value.upper()} (fuel {robot.fuel()}) >>>")
    return outcome


def sensor_setting(text: str) -> tuple[str, int]:
    """Parse a `--sensor NAME=VALUE` argument."""
    name, sep, value = text.partition("=")
    if not sep or name not in CONFIGURABLE_SENSORS:
        raise argparse.ArgumentTypeError(
            f"expected NAME=VALUE with NAME in {', '.join(CONFIGURABLE_SENSORS)}"
        )
    try:
        return name, int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"sensor value must be an integer: {value!r}")


def barrel_setting(text: str) -> tuple[int, int]:
    """Parse a `--barrel LR,FB` argument."""
    try:
        lr, fb = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LR,FB integers, got {text!r}")
    return lr, fb


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="robo", description="Check, format and run RoboLang programs."
    )
    parser.add_argument("source", help="Filename or program text (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as program text"
    )
    parser.add_argument(
        "-t",
        "--target",
        choices=sorted(TARGETS),
        default="robo",
        help="Output format (default: robo)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-r", "--run", action="store_true", help="Run the program on a trace robot"
    )
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--fuel", type=int, default=DEFAULT_FUEL, help="Starting fuel (with --run)"
    )
    parser.add_argument(
        "--max-actions",
        type=int,
        default=None,
        metavar="N",
        help="Interrupt the run after N actions (with --run)",
    )
    parser.add_argument(
        "--sensor",
        type=sensor_setting,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Fixed sensor reading for oppLR, oppFB or wallDist (repeatable)",
    )
    parser.add_argument(
        "--barrel",
        type=barrel_setting,
        action="append",
        default=[],
        metavar="LR,FB",
        help="Add a barrel at the given bearings (repeatable)",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the RoboLang CLI.

    Exit status:
        0 on success (including a run that ends because the robot died),
        1 on a syntax error, an unreadable file or a query for a missing barrel,
        2 when the robot interrupts the run (argparse usage errors also exit 2).
    """
    args = build_arg_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    robot = TraceRobot(
        fuel=args.fuel,
        sensors=dict(args.sensor),
        barrels=args.barrel,
        max_actions=args.max_actions,
    )
    try:
        run_robo(
            source=args.source,
            is_string=args.string,
            target=args.target,
            out=args.out,
            run=args.run,
            pretty=args.pretty,
            robot=robot,
        )
    except ParserFailure as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError, NoSuchBarrel) as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        sys.exit(1)
    except RobotInterrupted as e:
        print(f"[halt] >>> {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()

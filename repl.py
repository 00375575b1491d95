import argparse
import logging
from typing import Optional, Sequence

try:
    import readline  # noqa: F401  line editing and history for input()
except ImportError:
    pass  # input() works without it, only editing is lost

from varcalc.runtime import Quit, evaluate
from varcalc.utils import format_number
from varcalc.variables import VarTable

logger = logging.getLogger(__name__)

# ":" cannot start a statement, so the command never shadows a variable
SHOW_VARIABLES_COMMAND = ":vars"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Calculator with variables. Enter 'q' to quit.")
    parser.add_argument("-d", "--debug", action="store_true", help="log tokens and recovered errors")
    parser.add_argument("-p", "--prompt", default="> ", help="input prompt (default: %(default)r)")
    return parser.parse_args(argv)


def show_variables(variables: VarTable) -> None:
    for var in variables:
        print(f"{var.label} = {format_number(var.value)}")


def run_line(code: str, variables: VarTable) -> bool:
    """Evaluates and prints one line, returns True if the session should end"""
    should_quit = False
    for result in evaluate(code, variables):
        if isinstance(result, Quit):
            should_quit = True
        else:
            print(result)
    return should_quit


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    variables = VarTable()

    while True:
        try:
            code = input(args.prompt).strip()
        except (EOFError, KeyboardInterrupt):
            print()
            logger.debug("Input closed, exiting")
            return 0

        if code == SHOW_VARIABLES_COMMAND:
            show_variables(variables)
            continue

        if run_line(code, variables):
            return 0


if __name__ == "__main__":
    raise SystemExit(main())

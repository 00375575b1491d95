import logging
from dataclasses import dataclass
from typing import Optional, Union

from varcalc.parser import statement
from varcalc.tokenizer import END_STATEMENT, NOOP, CalculatorError, Token, TokenizerError, TokenStream, TokenType
from varcalc.utils import format_number
from varcalc.variables import VarTable

logger = logging.getLogger(__name__)


@dataclass
class Number:
    value: float

    def __str__(self) -> str:
        return f"={format_number(self.value)}"


@dataclass
class Error:
    message: str
    cause: CalculatorError
    token: Optional[Token] = None

    def __str__(self) -> str:
        return f"Error: {self.message}"


@dataclass
class Quit:
    pass


Outcome = Union[Number, Error, Quit]


def _resynchronize(ts: TokenStream, error: CalculatorError) -> None:
    # the failed statement may already have read the ';' that ends it, keep that boundary
    boundary_read = END_STATEMENT in ts.injected or getattr(error, "found", None) == END_STATEMENT
    ts.drop_injected()
    if boundary_read:
        ts.put_back(END_STATEMENT)
    else:
        ts.discard_invalid()
    logger.debug("Skipped to position %d", ts.position)


def evaluate(code: str, variables: VarTable) -> list[Outcome]:
    """Evaluate every statement on a line, collecting one outcome per statement.

    A statement's value is only reported once a ';' or the end of the line is
    reached. A failed statement produces an `Error` and the rest of it is
    skipped, the statements after the next ';' are evaluated normally.
    """
    ts = TokenStream(code)
    pending: Optional[float] = None
    results: list[Outcome] = []

    while True:
        try:
            token = ts.peek()
        except TokenizerError as e:
            logger.debug("Tokenizer error: %s", e)
            results.append(Error(f"Error while reading input: {e}", cause=e))
            _resynchronize(ts, e)
            token = NOOP

        if token is None:
            if pending is not None:
                results.append(Number(pending))
            break
        elif token.type is TokenType.NOOP:
            continue
        elif token.type is TokenType.END_STATEMENT:
            ts.next()
            if pending is not None:
                results.append(Number(pending))
            pending = None
        elif token.type is TokenType.QUIT:
            ts.next()
            results.append(Quit())
        else:
            try:
                pending = statement(ts, variables)
            except CalculatorError as e:
                logger.debug("Statement starting with %s failed: %r", token, e)
                results.append(
                    Error(f"Error occurred while evaluating token of type {token}: {e}", cause=e, token=token)
                )
                _resynchronize(ts, e)

    return results

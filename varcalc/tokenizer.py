import enum
import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from varcalc.utils import PrintableEnum, format_number

logger = logging.getLogger(__name__)


class CalculatorError(Exception):
    pass


@dataclass
class TokenizerError(CalculatorError):
    pass


@dataclass
class InvalidSymbol(TokenizerError):
    char: str

    def __str__(self) -> str:
        return f"Invalid symbol: {self.char}"


@dataclass
class InvalidNumber(TokenizerError):
    text: str

    def __str__(self) -> str:
        return f"Invalid number: {self.text}"


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    SYMBOL = enum.auto()
    LET = enum.auto()
    NAME = enum.auto()
    END_STATEMENT = enum.auto()
    QUIT = enum.auto()
    NOOP = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Union[float, str, None] = None

    @classmethod
    def number(cls, value: float) -> "Token":
        return cls(TokenType.NUMBER, float(value))

    @classmethod
    def symbol(cls, char: str) -> "Token":
        return cls(TokenType.SYMBOL, char)

    @classmethod
    def name(cls, label: str) -> "Token":
        return cls(TokenType.NAME, label)

    def is_symbol(self, char: str) -> bool:
        return self.type is TokenType.SYMBOL and self.value == char

    def __str__(self) -> str:
        if self.type is TokenType.NUMBER:
            return f"Number({format_number(self.value)})"  # type: ignore
        elif self.type is TokenType.SYMBOL:
            return f"Symbol({self.value})"
        elif self.type is TokenType.NAME:
            return f"Name({self.value})"
        return {
            TokenType.LET: "Let",
            TokenType.END_STATEMENT: "EndStatement",
            TokenType.QUIT: "Quit",
            TokenType.NOOP: "Noop",
        }[self.type]


LET = Token(TokenType.LET)
END_STATEMENT = Token(TokenType.END_STATEMENT)
QUIT = Token(TokenType.QUIT)
NOOP = Token(TokenType.NOOP)

SYMBOLS = frozenset("+-*/!()=;q")

KEYWORD_LET = "let"


def _is_beginning_of_number(c: str) -> bool:
    return "0" <= c <= "9" or c == "."


def _is_valid_in_number(c: str, read_so_far: str) -> bool:
    # exponent may be signed: 1.23e-4
    if read_so_far.endswith(("e", "E")):
        return "0" <= c <= "9" or c in "+-"
    return "0" <= c <= "9" or c in ".eE"


class TokenStream:
    """Lazily tokenizes one line of input.

    Tokens pushed with `put_back` form a LIFO stack that is always drained
    before any more characters are read, which gives `peek` for free and lets
    the parser substitute a variable reference with its value.
    """

    def __init__(self, code: str):
        self.code = code
        self.pos = 0
        self.injected: list[Token] = []

    @property
    def position(self) -> int:
        return self.pos

    def next(self) -> Optional[Token]:
        if self.injected:
            return self.injected.pop()

        while self.pos < len(self.code) and self.code[self.pos].isspace():
            self.pos += 1
        if self.pos >= len(self.code):
            return None

        c = self._read_char()
        if _is_beginning_of_number(c):
            self.pos -= 1
            token: Optional[Token] = Token.number(self._read_number())
        elif c in SYMBOLS:
            if c == ";":
                # terminator at the very end of the line is swallowed
                token = END_STATEMENT if self.pos < len(self.code) else None
            elif c == "q":
                token = QUIT
            else:
                token = Token.symbol(c)
        elif c.isalpha():
            self.pos -= 1
            identifier = self._read_identifier()
            token = LET if identifier == KEYWORD_LET else Token.name(identifier)
        else:
            raise InvalidSymbol(c)

        logger.debug("Read token %s at %d", token, self.pos)
        return token

    def peek(self) -> Optional[Token]:
        token = self.next()
        if token is not None:
            self.put_back(token)
        return token

    def put_back(self, token: Token) -> None:
        self.injected.append(token)

    def discard_invalid(self) -> None:
        """Skip the rest of the current statement, up to (not including) the next ';'"""
        while self.pos < len(self.code) and self.code[self.pos] != ";":
            self.pos += 1

    def drop_injected(self) -> None:
        self.injected.clear()

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            if token is None:
                return
            yield token

    def _read_char(self) -> str:
        c = self.code[self.pos]
        self.pos += 1
        return c

    def _read_number(self) -> float:
        start = self.pos
        while self.pos < len(self.code) and _is_valid_in_number(self.code[self.pos], self.code[start : self.pos]):
            self.pos += 1
        text = self.code[start : self.pos]
        try:
            return float(text)
        except ValueError:
            raise InvalidNumber(text) from None

    def _read_identifier(self) -> str:
        start = self.pos
        while self.pos < len(self.code) and self.code[self.pos].isalnum():
            self.pos += 1
        return self.code[start : self.pos]


def tokenize(code: str) -> list[Token]:
    return list(TokenStream(code))

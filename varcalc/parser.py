import math
from dataclasses import dataclass
from typing import Optional

from varcalc.tokenizer import CalculatorError, Token, TokenStream, TokenType
from varcalc.variables import VarTable


@dataclass
class ParserError(CalculatorError):
    pass


def _describe(token: Optional[Token]) -> str:
    return "end of input" if token is None else str(token)


@dataclass
class ExpectedClosingParen(ParserError):
    found: Optional[Token]

    def __str__(self) -> str:
        return f"Expected closing parenthesis, found {_describe(self.found)}"


@dataclass
class UnexpectedToken(ParserError):
    found: Optional[Token]

    def __str__(self) -> str:
        return f"Expected a number, a variable or an opening parenthesis, found {_describe(self.found)}"


@dataclass
class UndefinedVariable(ParserError):
    name: str

    def __str__(self) -> str:
        return f"Undefined variable: {self.name}"


@dataclass
class AlreadyDefined(ParserError):
    name: str

    def __str__(self) -> str:
        return f"Variable {self.name} is already defined"


@dataclass
class AssignToUndefined(ParserError):
    name: str

    def __str__(self) -> str:
        return (
            f"Variable {self.name} is not defined. Use let to define it before assigning a value. "
            f"Example: 'let {self.name} = 5; {self.name}'"
        )


@dataclass
class ExpectedAssign(ParserError):
    name: str
    found: Optional[Token]

    def __str__(self) -> str:
        return f"Expected an = token after let {self.name}, found {_describe(self.found)}"


@dataclass
class ExpectedName(ParserError):
    found: Optional[Token]

    def __str__(self) -> str:
        return f"A name is expected after let, found {_describe(self.found)}"


def divide(a: float, b: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity and 0/0 is nan"""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def statement(ts: TokenStream, variables: VarTable) -> float:
    lookahead = ts.peek()
    if lookahead is not None and lookahead.type is TokenType.LET:
        ts.next()
        name_token = ts.next()
        if name_token is None or name_token.type is not TokenType.NAME:
            raise ExpectedName(found=name_token)
        label: str = name_token.value  # type: ignore
        if variables.contains(label):
            raise AlreadyDefined(label)
        assign_token = ts.next()
        if assign_token is None or not assign_token.is_symbol("="):
            raise ExpectedAssign(label, found=assign_token)
        value = expression(ts, variables)
        variables.store(label, value)
        return value

    elif lookahead is not None and lookahead.type is TokenType.NAME:
        ts.next()
        label = lookahead.value  # type: ignore
        after_name = ts.peek()
        if after_name is not None and after_name.is_symbol("="):
            ts.next()
            if not variables.contains(label):
                raise AssignToUndefined(label)
            value = expression(ts, variables)
            variables.store(label, value)
            return value

        value_or_none = variables.retrieve(label)
        if value_or_none is None:
            raise UndefinedVariable(label)
        # the value now stands where the name was, operators after it apply as usual
        ts.put_back(Token.number(value_or_none))
        return expression(ts, variables)

    return expression(ts, variables)


def expression(ts: TokenStream, variables: VarTable) -> float:
    value = term(ts, variables)
    while True:
        operator = ts.peek()
        if operator is None:
            break
        elif operator.is_symbol("+"):
            ts.next()
            value += term(ts, variables)
        elif operator.is_symbol("-"):
            ts.next()
            value -= term(ts, variables)
        else:
            break
    return value


def term(ts: TokenStream, variables: VarTable) -> float:
    value = primary(ts, variables)
    while True:
        operator = ts.peek()
        if operator is None:
            break
        elif operator.is_symbol("*"):
            ts.next()
            value *= primary(ts, variables)
        elif operator.is_symbol("/"):
            ts.next()
            value = divide(value, primary(ts, variables))
        else:
            break
    return value


def primary(ts: TokenStream, variables: VarTable) -> float:
    token = ts.next()
    if token is None:
        raise UnexpectedToken(found=None)
    elif token.type is TokenType.NUMBER:
        return token.value  # type: ignore
    elif token.is_symbol("("):
        value = expression(ts, variables)
        closing = ts.next()
        if closing is None or not closing.is_symbol(")"):
            raise ExpectedClosingParen(found=closing)
        return value
    elif token.is_symbol("-"):
        return -primary(ts, variables)
    elif token.is_symbol("+"):
        return primary(ts, variables)
    elif token.type is TokenType.NAME:
        value = variables.retrieve(token.value)  # type: ignore
        if value is None:
            raise UndefinedVariable(token.value)  # type: ignore
        return value
    else:
        raise UnexpectedToken(found=token)

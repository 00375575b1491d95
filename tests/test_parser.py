import math

import pytest

from varcalc.parser import (
    AlreadyDefined,
    AssignToUndefined,
    ExpectedAssign,
    ExpectedClosingParen,
    ExpectedName,
    ParserError,
    UndefinedVariable,
    UnexpectedToken,
    divide,
    expression,
    statement,
)
from varcalc.tokenizer import Token, TokenStream
from varcalc.variables import Variable, VarTable


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param("1", 1.0),
        pytest.param("-1", -1.0),
        pytest.param("1+2", 3.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("-(1+2)", -3.0),
        pytest.param("--5", 5.0),
        pytest.param("+-+2", -2.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("1 * 4 + 5", 9.0),
        pytest.param("1 + 4 * 5", 21.0),
        pytest.param("10 - 2 - 3", 5.0),
        pytest.param("10 / 5 / 2 / 2", 0.5),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24.0),
        pytest.param("2 + 3 * 4 - 5 / 2", 11.5),
        pytest.param("80225/+2", 40112.5),
        pytest.param("3 * (2 + y) / 2", 6.0),
        pytest.param("1.5e2 * y", 300.0),
    ],
)
def test_expression(code: str, expected: float) -> None:
    variables = VarTable([Variable("y", 2.0)])
    assert expression(TokenStream(code), variables) == expected


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param("1 / 0", math.inf),
        pytest.param("-1 / 0", -math.inf),
        pytest.param("1 / -0", -math.inf),
    ],
)
def test_division_by_zero_is_ieee(code: str, expected: float) -> None:
    assert expression(TokenStream(code), VarTable()) == expected


def test_zero_by_zero_is_nan() -> None:
    assert math.isnan(expression(TokenStream("0 / 0"), VarTable()))
    assert math.isnan(divide(math.nan, 0.0))


def test_expression_stops_before_unknown_token() -> None:
    ts = TokenStream("5 * 2 ) 3")
    assert expression(ts, VarTable()) == 10.0
    assert ts.next() == Token.symbol(")")


@pytest.mark.parametrize(
    "code, expected_error",
    [
        pytest.param("(1 + 2", ExpectedClosingParen(found=None)),
        pytest.param("(1 2)", ExpectedClosingParen(found=Token.number(2))),
        pytest.param("* 3", UnexpectedToken(found=Token.symbol("*"))),
        pytest.param("1 +", UnexpectedToken(found=None)),
        pytest.param("!", UnexpectedToken(found=Token.symbol("!"))),
        pytest.param("2 * z", UndefinedVariable("z")),
    ],
)
def test_expression_error(code: str, expected_error: ParserError) -> None:
    with pytest.raises(ParserError) as exc_info:
        expression(TokenStream(code), VarTable())
    assert exc_info.value == expected_error


def test_let_defines_variable() -> None:
    variables = VarTable()
    assert statement(TokenStream("let x = 2 * 3"), variables) == 6.0
    assert variables.retrieve("x") == 6.0


def test_let_does_not_redefine() -> None:
    variables = VarTable([Variable("x", 5.0)])
    with pytest.raises(AlreadyDefined) as exc_info:
        statement(TokenStream("let x = 10"), variables)
    assert exc_info.value.name == "x"
    assert variables.retrieve("x") == 5.0


@pytest.mark.parametrize(
    "code, expected_error",
    [
        pytest.param("let 5 = x", ExpectedName(found=Token.number(5))),
        pytest.param("let", ExpectedName(found=None)),
        pytest.param("let x 5", ExpectedAssign("x", found=Token.number(5))),
        pytest.param("let x", ExpectedAssign("x", found=None)),
        pytest.param("x = 3", AssignToUndefined("x")),
        pytest.param("x", UndefinedVariable("x")),
        pytest.param("x + 1", UndefinedVariable("x")),
    ],
)
def test_statement_error(code: str, expected_error: ParserError) -> None:
    variables = VarTable()
    with pytest.raises(ParserError) as exc_info:
        statement(TokenStream(code), variables)
    assert exc_info.value == expected_error
    assert len(variables) == 0


def test_assignment_overwrites() -> None:
    variables = VarTable([Variable("x", 5.0)])
    assert statement(TokenStream("x = x * 2"), variables) == 10.0
    assert variables.retrieve("x") == 10.0


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param("x", 5.0),
        pytest.param("x / -10", -0.5),
        pytest.param("x * x - 1", 24.0),
        pytest.param("x + 2 * 3", 11.0),
    ],
)
def test_bare_reference_joins_expression(code: str, expected: float) -> None:
    ts = TokenStream(code)
    assert statement(ts, VarTable([Variable("x", 5.0)])) == expected
    assert ts.next() is None


def test_assign_to_undefined_suggests_let() -> None:
    assert "Use let to define it" in str(AssignToUndefined("x"))

import pytest

from gstalgen.symbols import DataType, SymbolTable, VariableKind
from gstalgen.syntax import (
    ExprKind,
    Operator,
    Statement,
    StatementKind,
    binary,
    int_literal,
    real_literal,
    unary,
    variable,
)


@pytest.fixture
def table():
    t = SymbolTable()
    t.insert("i", DataType.INTEGER, VariableKind.SCALAR, 1)
    t.insert("r", DataType.REAL, VariableKind.SCALAR, 1)
    return t


def test_enum_values_fixed_by_format():
    assert int_literal(1).kind == 1
    assert real_literal(1.0).kind == 4
    assert unary(Operator(4), int_literal(1)).kind == 0
    assert unary(Operator(13), int_literal(1)).kind == 6
    assert binary(Operator(5), int_literal(1), int_literal(2)).kind == 5
    assert binary(Operator(0), int_literal(1), int_literal(2)).operator is Operator.ADD


def test_int_literal():
    e = int_literal(7)
    assert (e.kind, e.value, e.data_type) == (ExprKind.INT, 7, DataType.INTEGER)


def test_real_literal():
    e = real_literal(2.5)
    assert (e.kind, e.real_value, e.data_type) == (ExprKind.REAL, 2.5, DataType.REAL)


def test_variable_resolves_address_and_type(table):
    e = variable("r", table)
    assert e.kind is ExprKind.ID
    assert e.name == "r"
    assert e.address == table.lookup("r")
    assert e.data_type is DataType.REAL


def test_unknown_variable(table):
    e = variable("missing", table)
    assert e.address is None
    assert e.data_type is None


@pytest.mark.parametrize(
    "op, kind",
    [
        (Operator.ADD, ExprKind.OP),
        (Operator.DIV, ExprKind.OP),
        (Operator.LT, ExprKind.REL),
        (Operator.NE, ExprKind.REL),
        (Operator.AND, ExprKind.BOOL),
        (Operator.OR, ExprKind.BOOL),
    ],
)
def test_binary_kind(op, kind):
    e = binary(op, int_literal(1), int_literal(2))
    assert e.kind is kind
    assert e.operator is op
    assert e.data_type is DataType.INTEGER


def test_binary_promotes_to_real(table):
    e = binary(Operator.MUL, variable("i", table), variable("r", table))
    assert e.data_type is DataType.REAL
    assert e.left.name == "i"
    assert e.right.name == "r"


@pytest.mark.parametrize("op", [Operator.UMIN, Operator.NOT])
def test_binary_rejects_unary_operators(op):
    with pytest.raises(ValueError):
        binary(op, int_literal(1), int_literal(2))


def test_unary_minus_keeps_type():
    e = unary(Operator.UMIN, real_literal(1.5))
    assert e.kind is ExprKind.OP
    assert e.right.real_value == 1.5
    assert e.left is None
    assert e.data_type is DataType.REAL


def test_unary_not_is_boolean():
    e = unary(Operator.NOT, int_literal(0))
    assert e.kind is ExprKind.BOOL
    assert e.data_type is DataType.INTEGER


def test_unary_rejects_binary_operator():
    with pytest.raises(ValueError):
        unary(Operator.ADD, int_literal(1))


def test_statement_branches_are_independent():
    a = Statement(StatementKind.IF)
    b = Statement(StatementKind.IF)
    a.body.append(Statement(StatementKind.PRINT))
    assert len(a.body) == 1
    assert b.body == []
    assert b.orelse == []
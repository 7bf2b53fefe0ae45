"""Expression and statement trees handed to the GSTAL code generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from gstalgen.symbols import DataType, SymbolTable


class ExprKind(IntEnum):
    """Kind of an expression node."""

    OP = 0
    INT = 1
    ID = 2
    STRING = 3
    REAL = 4
    REL = 5
    BOOL = 6
    NEWLINE = 7
    PRINT = 8


class Operator(IntEnum):
    """Arithmetic, relational and boolean operators."""

    ADD = 0
    SUB = 1
    MUL = 2
    DIV = 3
    UMIN = 4
    LT = 5
    GT = 6
    AND = 7
    OR = 8
    LE = 9
    GE = 10
    NE = 11
    EQ = 12
    NOT = 13


class StatementKind(IntEnum):
    """Kind of a statement node."""

    ASSIGN = 1
    PRINT = 2
    READ = 3
    IF = 4
    IFELSE = 5


_ARITHMETIC = frozenset({Operator.ADD, Operator.SUB, Operator.MUL, Operator.DIV})
_RELATIONAL = frozenset(
    {Operator.LT, Operator.GT, Operator.LE, Operator.GE, Operator.EQ, Operator.NE}
)
_LOGICAL = frozenset({Operator.AND, Operator.OR})


@dataclass
class Expression:
    """A node of an expression tree."""

    kind: ExprKind
    operator: Optional[Operator] = None
    left: Optional[Expression] = None
    right: Optional[Expression] = None
    value: int = 0
    real_value: float = 0.0
    address: Optional[int] = None
    string_value: Optional[str] = None
    name: Optional[str] = None
    data_type: Optional[DataType] = None


@dataclass
class Statement:
    """A statement; if statements carry their branches as statement lists."""

    kind: StatementKind
    name: Optional[str] = None
    expression: Optional[Expression] = None
    body: list[Statement] = field(default_factory=list)
    orelse: list[Statement] = field(default_factory=list)


def int_literal(value: int) -> Expression:
    """An integer constant."""
    return Expression(ExprKind.INT, value=int(value), data_type=DataType.INTEGER)


def real_literal(value: float) -> Expression:
    """A real constant."""
    return Expression(ExprKind.REAL, real_value=float(value), data_type=DataType.REAL)


def variable(name: str, table: SymbolTable) -> Expression:
    """A reference to a declared variable, resolved against ``table``.

    An undeclared name yields a node without address or data type.
    """
    return Expression(
        ExprKind.ID,
        name=name,
        address=table.lookup(name),
        data_type=table.data_type_of(name),
    )


def _combined_type(left: Expression, right: Expression) -> DataType:
    if DataType.REAL in (left.data_type, right.data_type):
        return DataType.REAL
    return DataType.INTEGER


def binary(operator: Operator, left: Expression, right: Expression) -> Expression:
    """A two-operand node; its type is REAL when either operand is REAL."""
    operator = Operator(operator)
    if operator in _ARITHMETIC:
        kind = ExprKind.OP
    elif operator in _RELATIONAL:
        kind = ExprKind.REL
    elif operator in _LOGICAL:
        kind = ExprKind.BOOL
    else:
        raise ValueError(f"{operator.name} is not a binary operator")
    return Expression(
        kind,
        operator=operator,
        left=left,
        right=right,
        data_type=_combined_type(left, right),
    )


def unary(operator: Operator, operand: Expression) -> Expression:
    """A one-operand node (negation or logical not) of its operand's type."""
    operator = Operator(operator)
    if operator is Operator.UMIN:
        kind = ExprKind.OP
    elif operator is Operator.NOT:
        kind = ExprKind.BOOL
    else:
        raise ValueError(f"{operator.name} is not a unary operator")
    return Expression(
        kind, operator=operator, right=operand, data_type=operand.data_type
    )
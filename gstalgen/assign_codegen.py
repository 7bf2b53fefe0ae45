"""GSTAL code generation for programs made of assignment and print statements."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from gstalgen.codegen import MAX_INSTRUCTIONS, UNRESOLVED_ADDRESS, Instruction
from gstalgen.symbols import DataType, SymbolTable
from gstalgen.syntax import Expression, ExprKind, Operator, Statement, StatementKind

_ARITHMETIC = {
    Operator.ADD: ("ADI", "ADF"),
    Operator.SUB: ("SBI", "SBF"),
    Operator.MUL: ("MLI", "MLF"),
    Operator.DIV: ("DVI", "DVF"),
}

_RELATIONAL = {
    Operator.LT: ("LTI", "LTF"),
    Operator.GT: ("GTI", "GTF"),
    Operator.LE: ("LEI", "LEF"),
    Operator.GE: ("GEI", "GEF"),
    Operator.EQ: ("EQI", "EQF"),
    Operator.NE: ("NEI", "NEF"),
}


def _pick(opcodes: tuple[str, str], left: Expression, right: Expression) -> str:
    integer_op, real_op = opcodes
    if DataType.REAL in (left.data_type, right.data_type):
        return real_op
    return integer_op


def _operands(expr: Expression) -> tuple[Expression, Expression]:
    if expr.left is None or expr.right is None:
        raise ValueError(f"{expr.operator!r} needs two operands")
    return expr.left, expr.right


class AssignmentCodeGenerator:
    """Translates assignment and print statements into GSTAL instructions.

    Any statement that is not an assignment is treated as a print statement.
    """

    def __init__(self, table: SymbolTable) -> None:
        self.table = table
        self.instructions: list[Instruction] = []

    def _emit(self, opcode: str, operand: Optional[Union[int, float]] = None) -> None:
        if len(self.instructions) >= MAX_INSTRUCTIONS:
            raise OverflowError(
                f"program exceeds {MAX_INSTRUCTIONS} GSTAL instructions"
            )
        self.instructions.append(Instruction(opcode, operand))

    def generate(self, statements: Iterable[Statement]) -> list[Instruction]:
        """Append code for ``statements``; the first statement is preceded by ISP."""
        for statement in statements:
            if not self.instructions:
                self._emit("ISP", self.table.isp_size())
            expr = statement.expression
            if expr is None:
                raise ValueError(f"{statement.kind.name} statement has no expression")
            if statement.kind == StatementKind.ASSIGN:
                address = self.table.lookup(statement.name) if statement.name else None
                self._emit("LAA", UNRESOLVED_ADDRESS if address is None else address)
                self._expression(expr, statement)
                self._emit("STO")
            else:
                self._expression(expr, statement)
                if expr.data_type == DataType.REAL:
                    self._emit("PTF")
                if expr.data_type == DataType.INTEGER:
                    self._emit("PTI")
        return self.instructions

    def render(self) -> str:
        """Return the generated program as text, terminated by HLT."""
        lines = [instruction.render() for instruction in self.instructions]
        lines.append("HLT")
        return "\n".join(lines) + "\n"

    def _expression(self, expr: Expression, statement: Statement) -> None:
        kind = expr.kind
        if kind == ExprKind.INT:
            self._emit("LLI", expr.value)
        elif kind == ExprKind.REAL:
            self._emit("LLF", expr.real_value)
        elif kind == ExprKind.ID:
            address = UNRESOLVED_ADDRESS if expr.address is None else expr.address
            self._emit("LAA", address)
            if statement.kind == StatementKind.ASSIGN:
                self._emit("LOD")
        elif kind == ExprKind.OP:
            self._arithmetic(expr, statement)
        elif kind == ExprKind.REL:
            if expr.operator in _RELATIONAL:
                left, right = _operands(expr)
                self._expression(left, statement)
                self._expression(right, statement)
                self._emit(_pick(_RELATIONAL[expr.operator], left, right))
        elif kind == ExprKind.BOOL:
            if expr.operator in (Operator.AND, Operator.OR):
                left, right = _operands(expr)
                self._expression(left, statement)
                self._expression(right, statement)
                # Both connectives are evaluated as a product of 0/1 values.
                self._emit(_pick(("MLI", "MLF"), left, right))

    def _arithmetic(self, expr: Expression, statement: Statement) -> None:
        if expr.operator in _ARITHMETIC:
            left, right = _operands(expr)
            self._expression(left, statement)
            self._expression(right, statement)
            if left.data_type != right.data_type:
                self._emit("ITF")
            self._emit(_pick(_ARITHMETIC[expr.operator], left, right))
        elif expr.operator == Operator.UMIN:
            if expr.right is None:
                raise ValueError("unary minus needs an operand")
            self._expression(expr.right, statement)
            self._emit("NGI" if expr.right.data_type == DataType.INTEGER else "NGF")


def compile_assignments(statements: Iterable[Statement], table: SymbolTable) -> str:
    """Translate assignment and print statements into GSTAL program text."""
    generator = AssignmentCodeGenerator(table)
    generator.generate(statements)
    return generator.render()
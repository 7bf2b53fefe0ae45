"""GSTAL code generation for assignment, print, read and if statements."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from gstalgen.symbols import DataType, SymbolTable
from gstalgen.syntax import (
    Expression,
    ExprKind,
    Operator,
    Statement,
    StatementKind,
)

MAX_INSTRUCTIONS = 1000
UNRESOLVED_ADDRESS = -1

_ARITHMETIC_OPCODES = {
    Operator.ADD: ("ADI", "ADF"),
    Operator.SUB: ("SBI", "SBF"),
    Operator.MUL: ("MLI", "MLF"),
    Operator.DIV: ("DVI", "DVF"),
}

_RELATIONAL_OPCODES = {
    Operator.LT: ("LTI", "LTF"),
    Operator.GT: ("GTI", "GTF"),
    Operator.LE: ("LEI", "LEF"),
    Operator.GE: ("GEI", "GEF"),
    Operator.EQ: ("EQI", "EQF"),
    Operator.NE: ("NEI", "NEF"),
}


def _single_precision(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


@dataclass
class Instruction:
    """One GSTAL instruction with its optional operand."""

    opcode: str
    operand: Optional[Union[int, float]] = None

    def render(self) -> str:
        """Return the instruction as a line of GSTAL text, without newline."""
        if self.operand is None:
            return self.opcode
        if self.opcode == "LLF":
            return f"{self.opcode} {_single_precision(self.operand):f}"
        return f"{self.opcode} {self.operand}"


def _either_real(left: Optional[DataType], right: Optional[DataType]) -> bool:
    return left == DataType.REAL or right == DataType.REAL


class CodeGenerator:
    """Translates statement lists into GSTAL instructions."""

    def __init__(self, table: SymbolTable) -> None:
        self.table = table
        self.instructions: list[Instruction] = []

    def _emit(
        self, opcode: str, operand: Optional[Union[int, float]] = None
    ) -> Instruction:
        if len(self.instructions) >= MAX_INSTRUCTIONS:
            raise OverflowError(
                f"program exceeds {MAX_INSTRUCTIONS} GSTAL instructions"
            )
        instruction = Instruction(opcode, operand)
        self.instructions.append(instruction)
        return instruction

    def _address(self, name: str) -> int:
        address = self.table.lookup(name)
        return UNRESOLVED_ADDRESS if address is None else address

    def generate(self, statements: Iterable[Statement]) -> list[Instruction]:
        """Append code for ``statements``; the first call starts with ISP."""
        if not self.instructions:
            self._emit("ISP", self.table.isp_size())
        self._statements(statements)
        return self.instructions

    def render(self) -> str:
        """Return the generated program as text, terminated by HLT."""
        lines = [instruction.render() for instruction in self.instructions]
        lines.append("HLT")
        return "\n".join(lines) + "\n"

    # A statement that cannot be translated ends the current statement list.
    def _statements(self, statements: Iterable[Statement]) -> None:
        for statement in statements:
            if not self._statement(statement):
                return

    def _statement(self, statement: Statement) -> bool:
        kind = statement.kind
        if kind == StatementKind.ASSIGN:
            self._emit("LAA", self._address(statement.name))
            if statement.expression is None:
                return False
            self._expression(statement.expression, statement)
            self._emit("STO")
        elif kind == StatementKind.PRINT:
            expr = statement.expression
            if expr is None:
                return False
            if expr.data_type in (DataType.REAL, DataType.INTEGER) or expr.kind in (
                ExprKind.STRING,
                ExprKind.PRINT,
                ExprKind.NEWLINE,
            ):
                self._expression(expr, statement)
            else:
                return False
        elif kind in (StatementKind.IF, StatementKind.IFELSE):
            self._conditional(statement)
        elif kind == StatementKind.READ:
            if not statement.name:
                return False
            self._emit("LAA", self._address(statement.name))
            expr = statement.expression
            if expr is not None and expr.data_type == DataType.INTEGER:
                self._emit("INI")
            elif expr is not None and expr.data_type == DataType.REAL:
                self._emit("INF")
            else:
                return False
            self._emit("STO")
        return True

    def _conditional(self, statement: Statement) -> None:
        self._expression(statement.expression, statement)
        jump_if_false = self._emit("JPF", -1)
        self._statements(statement.body)
        if statement.kind == StatementKind.IFELSE:
            jump_to_end = self._emit("JMP", -1)
            jump_if_false.operand = len(self.instructions)
            self._statements(statement.orelse)
            jump_to_end.operand = len(self.instructions)
        else:
            jump_if_false.operand = len(self.instructions)

    def _expression(self, expr: Optional[Expression], statement: Statement) -> None:
        if expr is None:
            return
        kind = expr.kind
        if kind == ExprKind.INT:
            self._emit("LLI", expr.value)
        elif kind == ExprKind.REAL:
            self._emit("LLF", expr.real_value)
        elif kind == ExprKind.ID:
            if expr.address is None or expr.address < 0:
                return
            self._emit("LAA", expr.address)
            self._emit("LOD")
        elif kind == ExprKind.OP:
            self._arithmetic(expr, statement)
        elif kind == ExprKind.REL:
            self._relational(expr, statement)
        elif kind == ExprKind.BOOL:
            self._logical(expr, statement)
        elif kind == ExprKind.PRINT:
            self._print_item(expr, statement)
        elif kind == ExprKind.STRING:
            text = expr.string_value or ""
            # The surrounding quotation marks are not printed.
            for char in text[1:-1]:
                self._emit("LLI", ord(char))
                self._emit("PTC")
        elif kind == ExprKind.NEWLINE:
            self._emit("PTL")

    def _arithmetic(self, expr: Expression, statement: Statement) -> None:
        if expr.operator in _ARITHMETIC_OPCODES:
            if expr.left is None or expr.right is None:
                return
            left_type = expr.left.data_type
            right_type = expr.right.data_type
            self._expression(expr.left, statement)
            self._expression(expr.right, statement)
            if left_type != right_type and statement.kind != StatementKind.PRINT:
                if left_type == DataType.INTEGER:
                    self._emit("ITF")
                    self._emit("STO")
                elif DataType.INTEGER == right_type or DataType.REAL in (
                    left_type,
                    right_type,
                ):
                    self._emit("FTI")
                    self._emit("STO")
            integer_op, real_op = _ARITHMETIC_OPCODES[expr.operator]
            self._emit(real_op if _either_real(left_type, right_type) else integer_op)
        elif expr.operator == Operator.UMIN:
            if expr.right is None:
                return
            self._expression(expr.right, statement)
            self._emit("NGI" if expr.right.data_type == DataType.INTEGER else "NGF")

    def _relational(self, expr: Expression, statement: Statement) -> None:
        if expr.operator not in _RELATIONAL_OPCODES:
            return
        if expr.left is None or expr.right is None:
            return
        self._expression(expr.left, statement)
        self._expression(expr.right, statement)
        integer_op, real_op = _RELATIONAL_OPCODES[expr.operator]
        real = _either_real(expr.left.data_type, expr.right.data_type)
        self._emit(real_op if real else integer_op)

    def _logical(self, expr: Expression, statement: Statement) -> None:
        if expr.operator in (Operator.AND, Operator.OR):
            if expr.left is None or expr.right is None:
                return
            self._expression(expr.left, statement)
            self._expression(expr.right, statement)
            # Both connectives are evaluated as a product of 0/1 values.
            real = _either_real(expr.left.data_type, expr.right.data_type)
            self._emit("MLF" if real else "MLI")
        elif expr.operator == Operator.NOT:
            if expr.right is None:
                return
            self._expression(expr.right, statement)
            self._emit("NTF" if expr.right.data_type == DataType.REAL else "NTI")

    def _print_item(self, expr: Expression, statement: Statement) -> None:
        if expr.left is None or expr.right is None:
            return
        self._expression(expr.left, statement)
        self._expression(expr.right, statement)
        after_newline = self.instructions[-1].opcode == "PTL"
        if expr.right.data_type == DataType.INTEGER and not after_newline:
            self._emit("PTI")
        elif expr.right.data_type == DataType.REAL and not after_newline:
            self._emit("PTF")


def compile_program(statements: Iterable[Statement], table: SymbolTable) -> str:
    """Translate a statement list into GSTAL program text."""
    generator = CodeGenerator(table)
    generator.generate(statements)
    return generator.render()
# gstalgen

`gstalgen` turns the syntax tree of a small imperative language into
GSTAL, a textual instruction set for a simple stack machine. It has four
modules.

- `gstalgen.symbols` holds the `SymbolTable`, which gives each declared
  variable a stack address. It also defines the entry type `SymbolEntry`,
  the enums `DataType` (`INTEGER`, `REAL`) and `VariableKind`
  (`SCALAR`, `ARRAY`), and the exception `SymbolTableFullError`.
- `gstalgen.syntax` holds the tree types `Expression` and `Statement`, the
  enums `ExprKind`, `Operator` and `StatementKind`, and the helper functions
  `int_literal`, `real_literal`, `variable`, `binary` and `unary`.
- `gstalgen.codegen` holds `Instruction`, `CodeGenerator` and
  `compile_program`. They handle assignments, read and print statements,
  string and newline output, and `if` and `if`/`else` statements whose
  jumps are patched in after the branches are generated.
- `gstalgen.assign_codegen` holds `AssignmentCodeGenerator` and
  `compile_assignments`. This is a simpler generator for programs made of
  assignment and print statements only. It treats every statement that is
  not an assignment as a print statement.

## Installation

```
pip install .
```

## Example

```python
from gstalgen.symbols import SymbolTable, DataType, VariableKind
from gstalgen.syntax import Statement, StatementKind, Operator, int_literal, binary
from gstalgen.codegen import compile_program

table = SymbolTable(2000)
table.insert("x", DataType.INTEGER, VariableKind.SCALAR, 1)

program = [
    Statement(
        StatementKind.ASSIGN,
        name="x",
        expression=binary(Operator.ADD, int_literal(2), int_literal(3)),
    ),
]

print(compile_program(program, table), end="")
```

The output looks like this:

```
ISP 1
LAA 0
LLI 2
LLI 3
ADI
STO
HLT
```

## Symbol table

- `SymbolTable(capacity)` creates a table. The default capacity is 2000.
- `insert(name, data_type, kind, size)` places each variable at the next
  free address and returns its `SymbolEntry`. The next address then moves
  on by `size`.
- An empty name raises `ValueError`. Inserting past the capacity raises
  `SymbolTableFullError`.
- `lookup(name)` returns the address of the first variable with that name.
  `data_type_of(name)` returns its data type. Both return `None` for a name
  that was never declared.
- `isp_size()` returns the number of entries. The generators use this
  number as the operand of the opening `ISP` instruction.
- `format()` returns a listing with name, type, kind, size and address
  columns. `show()` prints that listing to standard output.
- `len(table)` gives the number of entries, and iterating over the table
  yields its entries in the order they were inserted.

## Building trees

- `variable(name, table)` resolves a name against a table. For an
  undeclared name it returns a node with no address and no data type.
- `binary` takes an arithmetic, relational or logical operator and picks
  the matching `ExprKind`. The result is `REAL` when either operand is
  `REAL`.
- `unary` takes `Operator.UMIN` or `Operator.NOT`, and the result has the
  type of its operand.
- Either helper raises `ValueError` if given an operator that does not fit.
- An `if` statement keeps its branches as statement lists in `body` and
  `orelse`.

## Generated code

Both generators render each instruction on its own line and end the
program with `HLT`.

- `LLF` operands are rounded to single precision and written with six
  decimal places.
- A program longer than 1000 instructions raises `OverflowError`.
- In `CodeGenerator`, a statement that cannot be translated silently ends
  the statement list it belongs to. An example is a read statement whose
  expression has no data type.
- `AssignmentCodeGenerator` raises `ValueError` for a statement without an
  expression, and for an operator node that is missing an operand.

## What this package does not do

The package does not read source text. It has no scanner, no parser and no
command-line program. You build the statement lists and expression trees
yourself with the classes and helpers in `gstalgen.syntax`. The package
also does not run the GSTAL code it produces.

## Running the tests

```
pip install .[test]
pytest
```
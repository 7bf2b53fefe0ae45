import pytest

from gstalgen.symbols import (
    DataType,
    SymbolEntry,
    SymbolTable,
    SymbolTableFullError,
    VariableKind,
)


def _table():
    table = SymbolTable()
    table.insert("a", DataType.INTEGER, VariableKind.SCALAR, 1)
    table.insert("b", DataType.REAL, VariableKind.ARRAY, 5)
    table.insert("c", DataType.INTEGER, VariableKind.SCALAR, 1)
    return table


def test_enum_values_fixed_by_format():
    table = SymbolTable()
    entry = table.insert("v", 1, 1, 3)
    assert entry.data_type is DataType.REAL
    assert entry.kind is VariableKind.ARRAY
    other = table.insert("w", 0, 0, 1)
    assert other.data_type is DataType.INTEGER
    assert other.kind is VariableKind.SCALAR
    assert table.data_type_of("w") == 0


def test_addresses_advance_by_size():
    table = _table()
    assert [e.address for e in table] == [0, 1, 6]


def test_insert_returns_entry():
    table = SymbolTable()
    entry = table.insert("x", DataType.REAL, VariableKind.SCALAR, 1)
    assert entry == SymbolEntry("x", DataType.REAL, VariableKind.SCALAR, 1, 0)


def test_lookup_and_data_type():
    table = _table()
    assert table.lookup("b") == 1
    assert table.data_type_of("b") is DataType.REAL
    assert table.data_type_of("c") is DataType.INTEGER


def test_missing_name_gives_none():
    table = _table()
    assert table.lookup("zz") is None
    assert table.data_type_of("zz") is None


def test_duplicate_name_lookup_returns_first():
    table = SymbolTable()
    table.insert("x", DataType.INTEGER, VariableKind.SCALAR, 1)
    table.insert("x", DataType.REAL, VariableKind.SCALAR, 1)
    assert table.lookup("x") == 0
    assert table.data_type_of("x") is DataType.INTEGER


def test_isp_size_counts_entries():
    table = _table()
    assert table.isp_size() == len(table) == 3


def test_empty_name_rejected():
    table = SymbolTable()
    with pytest.raises(ValueError):
        table.insert("", DataType.INTEGER, VariableKind.SCALAR, 1)
    with pytest.raises(ValueError):
        table.lookup("")


def test_capacity_enforced():
    table = SymbolTable(capacity=2)
    table.insert("a", DataType.INTEGER)
    table.insert("b", DataType.INTEGER)
    with pytest.raises(SymbolTableFullError):
        table.insert("c", DataType.INTEGER)
    assert len(table) == 2


def test_iteration_preserves_order():
    assert [e.name for e in _table()] == ["a", "b", "c"]


def test_show_prints_to_stdout(capsys):
    table = _table()
    table.show()
    assert capsys.readouterr().out == table.format()
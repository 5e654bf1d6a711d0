"""Tests for Schema and the column-oriented Table model."""

import pytest

from column_db.errors import (
    ColumnCountMismatchError,
    ColumnNotFoundError,
    StorageError,
    TypeCoercionError,
)
from column_db.schema import Schema, Table
from column_db.values import Float32, Int32, Text


@pytest.fixture
def users():
    schema = Schema.from_specs([("id", "int"), ("name", "text"), ("age", "int")])
    return Table.empty("users", schema)


class TestSchema:
    """Tests for Schema."""

    def test_from_specs_keeps_order(self):
        schema = Schema.from_specs([("b", "int"), ("a", "text")])
        assert schema.columns == ("b", "a")
        assert schema.types == {"b": "int", "a": "text"}
        assert schema.index_of("a") == 1

    def test_duplicate_columns_rejected(self):
        with pytest.raises(ValueError):
            Schema(columns=("a", "a"), types={"a": "int"})

    def test_columns_must_match_types(self):
        with pytest.raises(ValueError):
            Schema(columns=("a",), types={"a": "int", "b": "int"})

    def test_type_of_defaults_to_text(self):
        schema = Schema.from_specs([("a", "int")])
        assert schema.type_of("a") == "int"
        assert schema.type_of("missing") == "text"

    def test_index_of_unknown(self):
        with pytest.raises(ColumnNotFoundError):
            Schema.from_specs([("a", "int")]).index_of("b")


class TestTable:
    """Tests for Table."""

    def test_empty(self, users):
        assert users.columns_data == {"id": [], "name": [], "age": []}
        assert users.row_count == 0
        assert list(users.rows()) == []

    def test_no_columns_has_no_rows(self):
        table = Table.empty("nothing", Schema.from_specs([]))
        assert table.row_count == 0
        assert list(table.rows()) == []

    def test_append_row(self, users):
        row = users.append_row(["1", "Alice", "30"])
        users.append_row(["2", "Bob", "25"])

        assert row == (Int32(1), Text("Alice"), Int32(30))
        assert users.row_count == 2
        assert all(len(cells) == 2 for cells in users.columns_data.values())
        assert list(users.rows()) == [
            (Int32(1), Text("Alice"), Int32(30)),
            (Int32(2), Text("Bob"), Int32(25)),
        ]

    def test_append_row_arity_mismatch_leaves_table_unchanged(self, users):
        users.append_row(["1", "Alice", "30"])
        with pytest.raises(ColumnCountMismatchError):
            users.append_row(["2", "Bob"])
        with pytest.raises(ColumnCountMismatchError):
            users.append_row(["2", "Bob", "25", "extra"])
        assert all(len(cells) == 1 for cells in users.columns_data.values())

    def test_append_row_bad_value_leaves_table_unchanged(self, users):
        with pytest.raises(TypeCoercionError):
            users.append_row(["1", "Alice", "thirty"])
        assert all(cells == [] for cells in users.columns_data.values())

    def test_find_first_int(self, users):
        users.append_row(["1", "Alice", "30"])
        users.append_row(["2", "Bob", "25"])
        users.append_row(["2", "Carol", "41"])

        assert users.find_first_int("id", 2) == 1
        assert users.find_first_int("age", 41) == 2
        assert users.find_first_int("id", 9) is None

    def test_find_first_int_skips_non_integer_cells(self, users):
        users.append_row(["1", "7", "30"])
        assert users.find_first_int("name", 7) is None

    def test_find_first_int_unknown_column(self, users):
        with pytest.raises(ColumnNotFoundError):
            users.find_first_int("email", 1)

    def test_find_first_int_resolves_column_through_schema(self, users):
        users.columns_data["stray"] = [Int32(1)]
        with pytest.raises(ColumnNotFoundError, match="Column stray not found"):
            users.find_first_int("stray", 1)


class TestDocument:
    """Tests for the persisted JSON document."""

    def test_document_shape(self, users):
        users.append_row(["1", "Alice", "30"])
        assert users.to_document() == {
            "name": "users",
            "fields": {"id": "int", "name": "text", "age": "int"},
            "columns": ["id", "name", "age"],
            "data": {
                "id": [{"Integer32": 1}],
                "name": [{"String": "Alice"}],
                "age": [{"Integer32": 30}],
            },
        }

    def test_round_trip(self):
        table = Table.empty("m", Schema.from_specs([("x", "float"), ("y", "text")]))
        table.append_row(["1.1", "a"])
        table.append_row(["-2.5", "b"])

        restored = Table.from_document(table.to_document())

        assert restored.schema == table.schema
        assert restored.columns_data == table.columns_data
        assert restored.columns_data["x"][0] == Float32(1.1)

    def test_missing_key(self, users):
        doc = users.to_document()
        del doc["data"]
        with pytest.raises(StorageError):
            Table.from_document(doc)

    def test_inconsistent_fields(self, users):
        doc = users.to_document()
        doc["fields"]["extra"] = "int"
        with pytest.raises(StorageError):
            Table.from_document(doc)

    def test_unequal_columns(self, users):
        doc = users.to_document()
        doc["data"]["id"].append({"Integer32": 1})
        with pytest.raises(StorageError):
            Table.from_document(doc)

    def test_not_an_object(self):
        with pytest.raises(StorageError):
            Table.from_document([1, 2, 3])

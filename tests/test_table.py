from pathlib import Path

import pytest

from dynamodb_tools.errors import ConfigParseError, ConfigReadError, MissingFieldError
from dynamodb_tools.schema.table import AttrType, TableConfig, TableInfo

FIXTURES = Path(__file__).parent / "fixtures"


class TestTableConfig:
    def test_loads_dev_config(self):
        config = TableConfig.load_from_file(FIXTURES / "dev.yml")
        info = config.info

        assert config.table_name == "users"
        assert config.local_endpoint == "http://localhost:8000"
        assert config.delete_on_exit is True
        assert info is not None
        assert info.pk.name == "pk"
        assert info.pk.attr_type == AttrType.S
        assert info.sk.name == "sk"
        assert len(info.attrs) == 3
        assert info.gsis[0].name == "gsi1"
        assert info.gsis[0].attrs == ["email"]
        assert info.gsis[0].throughput.read == 5
        assert info.lsis[0].sk.attr_type == AttrType.N
        assert info.throughput.write == 5

    def test_prod_config_has_no_info(self):
        config = TableConfig.load_from_file(FIXTURES / "prod.yml")
        assert config.table_name == "users"
        assert config.info is None
        assert config.local_endpoint is None

    def test_delete_on_exit_requires_local_endpoint(self):
        # prod.yml asks for delete_on_exit but points at real DynamoDB
        config = TableConfig.load_from_file(FIXTURES / "prod.yml")
        assert config.delete_on_exit is False

        assert TableConfig("users", delete_on_exit=True).delete_on_exit is False
        assert TableConfig(
            "users", local_endpoint="http://localhost:8000", delete_on_exit=True
        ).delete_on_exit is True

    def test_optional_fields_default(self):
        config = TableConfig.load("table_name: users\n")
        assert config.delete_on_exit is False
        assert config.region is None
        assert config.info is None

    def test_unknown_keys_are_ignored(self):
        config = TableConfig.load("table_name: users\nowner: payments-team\n")
        assert config.table_name == "users"

    def test_region_is_read(self):
        config = TableConfig.load("table_name: users\nregion: eu-west-1\n")
        assert config.region == "eu-west-1"


class TestTableInfo:
    def test_loads_info_file(self):
        info = TableInfo.load_from_file(FIXTURES / "info.yml")
        assert info.table_name == "events"
        assert info.pk.name == "pk"
        assert info.pk.attr_type == AttrType.S
        assert info.sk.attr_type == AttrType.N

    def test_loads_from_string_with_defaults(self):
        info = TableInfo.load("table_name: t\npk: {name: id, type: B}\n")
        assert info.pk.attr_type == AttrType.B
        assert info.sk is None
        assert info.attrs == []
        assert info.gsis == []
        assert info.lsis == []
        assert info.throughput is None


class TestLoadErrors:
    @pytest.mark.parametrize("text, field", [
        (
            "table_name: users\nlocal_endpoint: http://localhost:8000\ndelete_on_exit: \"false\"\n",
            "delete_on_exit",
        ),
        ("table_name: 42\n", "table_name"),
        ("table_name: users\nregion: [eu-west-1]\n", "region"),
    ])
    def test_config_fields_are_type_checked(self, text, field):
        with pytest.raises(ConfigParseError) as exc_info:
            TableConfig.load(text)
        assert field in str(exc_info.value)

    def test_null_delete_on_exit_keeps_default(self):
        config = TableConfig.load(
            "table_name: users\nlocal_endpoint: http://localhost:8000\ndelete_on_exit:\n"
        )
        assert config.delete_on_exit is False

    def test_index_attrs_must_be_names(self):
        text = (
            "table_name: t\n"
            "pk: {name: pk, type: S}\n"
            "gsis:\n"
            "  - name: gsi1\n"
            "    pk: {name: email, type: S}\n"
            "    attrs: [{name: x}]\n"
        )
        with pytest.raises(ConfigParseError) as exc_info:
            TableInfo.load(text)
        assert "gsis[0].attrs[0]" in str(exc_info.value)

    @pytest.mark.parametrize("capacity", ["5.9", "true"])
    def test_throughput_must_be_whole_number(self, capacity):
        with pytest.raises(ConfigParseError) as exc_info:
            TableInfo.load(
                "table_name: t\npk: {name: id, type: S}\n"
                f"throughput: {{read: {capacity}, write: 1}}\n"
            )
        assert "throughput.read" in str(exc_info.value)

    def test_attribute_name_must_be_string(self):
        with pytest.raises(ConfigParseError) as exc_info:
            TableInfo.load("table_name: t\npk: {name: 7, type: S}\n")
        assert "pk.name" in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigReadError) as exc_info:
            TableConfig.load_from_file(tmp_path / "missing.yml")
        assert "missing.yml" in str(exc_info.value)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("table_name: [users\n")
        with pytest.raises(ConfigParseError) as exc_info:
            TableConfig.load_from_file(path)
        assert exc_info.value.path == str(path)

    def test_document_must_be_a_mapping(self):
        with pytest.raises(ConfigParseError):
            TableConfig.load("- users\n")

    def test_empty_document(self):
        with pytest.raises(ConfigParseError):
            TableConfig.load("")

    def test_unknown_attribute_type(self):
        with pytest.raises(ConfigParseError) as exc_info:
            TableInfo.load("table_name: t\npk: {name: id, type: X}\n")
        assert "pk.type" in str(exc_info.value)

    def test_non_numeric_throughput(self):
        with pytest.raises(ConfigParseError):
            TableInfo.load(
                "table_name: t\npk: {name: id, type: S}\nthroughput: {read: lots, write: 1}\n"
            )

    def test_missing_table_name(self):
        with pytest.raises(MissingFieldError) as exc_info:
            TableConfig.load("local_endpoint: http://localhost:8000\n")
        assert exc_info.value.field == "table_name"

    def test_missing_nested_field_names_its_path(self):
        text = (
            "table_name: users\n"
            "info:\n"
            "  table_name: users\n"
            "  pk: {name: pk, type: S}\n"
            "  gsis:\n"
            "    - name: gsi1\n"
        )
        with pytest.raises(MissingFieldError) as exc_info:
            TableConfig.load(text)
        assert exc_info.value.field == "info.gsis[0].pk"

    def test_lsi_requires_sort_key(self):
        text = (
            "table_name: t\n"
            "pk: {name: pk, type: S}\n"
            "lsis:\n"
            "  - name: lsi1\n"
            "    pk: {name: pk, type: S}\n"
        )
        with pytest.raises(MissingFieldError) as exc_info:
            TableInfo.load(text)
        assert exc_info.value.field == "lsis[0].sk"

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from dynamodb_tools.errors import ConfigParseError, ConfigReadError, MissingFieldError

_STRING_SOURCE = "<string>"


class AttrType(str, Enum):
    S = "S"
    N = "N"
    B = "B"


def _path(where: str, key: str) -> str:
    return f"{where}.{key}" if where else key


def _require(data: dict, key: str, where: str) -> Any:
    if data.get(key) is None:
        raise MissingFieldError(_path(where, key))
    return data[key]


def _string(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{where} must be a string, got {type(value).__name__}")
    return value


def _integer(value: Any, where: str) -> int:
    # bool is an int subclass; `read: true` is a typo, not a capacity
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{where} must be an integer, got {type(value).__name__}")
    return value


def _boolean(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{where} must be true or false, got {value!r}")
    return value


def _optional_string(data: dict, key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None or value == "":
        return None
    return _string(value, _path(where, key))


def _mapping(data: Any, where: str) -> dict:
    if not isinstance(data, dict):
        raise TypeError(f"{where or 'document'} must be a mapping, got {type(data).__name__}")
    return data


def _sequence(data: dict, key: str, where: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{_path(where, key)} must be a list, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Throughput:
    read: int
    write: int

    @classmethod
    def from_dict(cls, data: Any, where: str) -> "Throughput":
        data = _mapping(data, where)
        return cls(
            read=_integer(_require(data, "read", where), _path(where, "read")),
            write=_integer(_require(data, "write", where), _path(where, "write")),
        )


@dataclass(frozen=True)
class TableAttr:
    name: str
    attr_type: AttrType

    @classmethod
    def from_dict(cls, data: Any, where: str) -> "TableAttr":
        data = _mapping(data, where)
        raw_type = _string(_require(data, "type", where), _path(where, "type"))
        try:
            attr_type = AttrType(raw_type)
        except ValueError:
            raise ValueError(
                f"{_path(where, 'type')} must be one of S, N, B, got {raw_type!r}"
            ) from None
        return cls(
            name=_string(_require(data, "name", where), _path(where, "name")),
            attr_type=attr_type,
        )


@dataclass
class TableGsi:
    name: str
    pk: TableAttr
    sk: TableAttr | None = None
    attrs: list[str] = field(default_factory=list)
    throughput: Throughput | None = None

    @classmethod
    def from_dict(cls, data: Any, where: str) -> "TableGsi":
        data = _mapping(data, where)
        return cls(
            name=_string(_require(data, "name", where), _path(where, "name")),
            pk=TableAttr.from_dict(_require(data, "pk", where), f"{where}.pk"),
            sk=TableAttr.from_dict(data["sk"], f"{where}.sk") if data.get("sk") else None,
            attrs=[
                _string(a, f"{where}.attrs[{i}]")
                for i, a in enumerate(_sequence(data, "attrs", where))
            ],
            throughput=(
                Throughput.from_dict(data["throughput"], f"{where}.throughput")
                if data.get("throughput") else None
            ),
        )


@dataclass
class TableLsi:
    name: str
    # must be the same as the pk of the table
    pk: TableAttr
    sk: TableAttr
    attrs: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, where: str) -> "TableLsi":
        data = _mapping(data, where)
        return cls(
            name=_string(_require(data, "name", where), _path(where, "name")),
            pk=TableAttr.from_dict(_require(data, "pk", where), f"{where}.pk"),
            sk=TableAttr.from_dict(_require(data, "sk", where), f"{where}.sk"),
            attrs=[
                _string(a, f"{where}.attrs[{i}]")
                for i, a in enumerate(_sequence(data, "attrs", where))
            ],
        )


@dataclass
class TableInfo:
    """Declarative description of a table, translated into a CreateTable request."""

    table_name: str
    pk: TableAttr
    sk: TableAttr | None = None
    attrs: list[TableAttr] = field(default_factory=list)
    gsis: list[TableGsi] = field(default_factory=list)
    lsis: list[TableLsi] = field(default_factory=list)
    throughput: Throughput | None = None

    @classmethod
    def from_dict(cls, data: Any, where: str = "") -> "TableInfo":
        data = _mapping(data, where)
        prefix = f"{where}." if where else ""
        return cls(
            table_name=_string(
                _require(data, "table_name", where), f"{prefix}table_name"
            ),
            pk=TableAttr.from_dict(_require(data, "pk", where), f"{prefix}pk"),
            sk=TableAttr.from_dict(data["sk"], f"{prefix}sk") if data.get("sk") else None,
            attrs=[
                TableAttr.from_dict(a, f"{prefix}attrs[{i}]")
                for i, a in enumerate(_sequence(data, "attrs", where))
            ],
            gsis=[
                TableGsi.from_dict(g, f"{prefix}gsis[{i}]")
                for i, g in enumerate(_sequence(data, "gsis", where))
            ],
            lsis=[
                TableLsi.from_dict(lsi, f"{prefix}lsis[{i}]")
                for i, lsi in enumerate(_sequence(data, "lsis", where))
            ],
            throughput=(
                Throughput.from_dict(data["throughput"], f"{prefix}throughput")
                if data.get("throughput") else None
            ),
        )

    @classmethod
    def load(cls, text: str) -> "TableInfo":
        return _parse(text, _STRING_SOURCE, cls.from_dict)

    @classmethod
    def load_from_file(cls, path: str | Path) -> "TableInfo":
        return _parse(_read(path), str(path), cls.from_dict)


@dataclass
class TableConfig:
    """Where a table lives and, optionally, how to create it.

    Without ``info`` the connector binds to an existing table named
    ``table_name``. With ``info`` a fresh, uniquely named table is created.
    ``delete_on_exit`` only takes effect against a local endpoint.
    """

    table_name: str
    local_endpoint: str | None = None
    delete_on_exit: bool = False
    region: str | None = None
    info: TableInfo | None = None

    def __post_init__(self) -> None:
        if self.local_endpoint is None:
            self.delete_on_exit = False

    @classmethod
    def from_dict(cls, data: Any) -> "TableConfig":
        data = _mapping(data, "")
        return cls(
            table_name=_string(_require(data, "table_name", ""), "table_name"),
            local_endpoint=_optional_string(data, "local_endpoint", ""),
            delete_on_exit=_boolean(
                False if data.get("delete_on_exit") is None else data["delete_on_exit"],
                "delete_on_exit",
            ),
            region=_optional_string(data, "region", ""),
            info=TableInfo.from_dict(data["info"], "info") if data.get("info") else None,
        )

    @classmethod
    def load(cls, text: str) -> "TableConfig":
        return _parse(text, _STRING_SOURCE, cls.from_dict)

    @classmethod
    def load_from_file(cls, path: str | Path) -> "TableConfig":
        return _parse(_read(path), str(path), cls.from_dict)


def _read(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigReadError(str(path), e) from e


def _parse(text: str, source: str, build):
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(source, e) from e

    try:
        return build(document)
    except (TypeError, ValueError) as e:
        raise ConfigParseError(source, e) from e

from dataclasses import dataclass, field

import pytest

from dokit.columns import (
    EntityWithTotal,
    entity_with_total_mapper,
    field_names_by_column,
    row_mapper,
)


@dataclass
class User:
    id: int = 0
    name: str = ""


@dataclass
class UserEmbed(User):
    phone: str = ""


@dataclass
class Tagged:
    identifier: int = field(default=0, metadata={"db": "id"})
    Title: str = ""


class FromRow:
    def __init__(self, ident, name, addr):
        self.values = (ident, name, addr)

    @classmethod
    def from_row(cls, row):
        return cls(*row)


def test_field_names_user():
    assert field_names_by_column(User, ["id", "name"]) == ["id", "name"]


def test_field_names_user_embed():
    assert field_names_by_column(UserEmbed, ["id", "name", "phone"]) == ["id", "name", "phone"]


def test_field_names_tag_and_lowercase():
    assert field_names_by_column(Tagged, ["title", "id", "other"]) == ["Title", "identifier", None]


def test_field_names_mapper():
    names = field_names_by_column(User, ["ID", "NAME"], str.upper)
    assert names == ["id", "name"]


def test_field_names_description_entries():
    description = [("name", None, None, None, None, None, None)]
    assert field_names_by_column(User, description) == ["name"]


def test_field_names_not_dataclass():
    with pytest.raises(TypeError, match="cls must be a dataclass, but cls is int"):
        field_names_by_column(int, ["id"])


def test_row_mapper_dataclass():
    mapper = row_mapper(UserEmbed)
    user = mapper(["phone", "id", "name"], ("555", 7, "jd"))
    assert user == UserEmbed(id=7, name="jd", phone="555")
    assert mapper([], ()) == UserEmbed()


def test_row_mapper_unknown_column():
    with pytest.raises(ValueError, match="matches no field"):
        row_mapper(User)(["id", "age"], (1, 2))


def test_row_mapper_from_row():
    obj = row_mapper(FromRow)(["a", "b", "c"], (1, "jd", "home"))
    assert obj.values == (1, "jd", "home")


@pytest.mark.parametrize(
    "cls, value, expected",
    [(str, "jd", "jd"), (bytes, "jd", b"jd"), (int, "3", 3), (float, 1, 1.0)],
)
def test_row_mapper_scalars(cls, value, expected):
    assert row_mapper(cls)(["v"], (value,)) == expected


def test_row_mapper_scalar_column_count():
    with pytest.raises(ValueError, match="expected 1 column"):
        row_mapper(int)(["a", "b"], (1, 2))


def test_row_mapper_unsupported_type():
    with pytest.raises(TypeError):
        row_mapper(list)


def test_entity_with_total_mapper():
    mapper = entity_with_total_mapper(row_mapper(User))
    result = mapper(["id", "name", "total"], (1, "jd", 42))
    assert result == EntityWithTotal(inner=User(id=1, name="jd"), total=42)


def test_entity_with_total_mapper_scalar():
    mapper = entity_with_total_mapper(row_mapper(str))
    result = mapper(["name", "total"], ("jd", 3))
    assert result.inner == "jd"
    assert result.total == 3
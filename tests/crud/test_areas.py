import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from app.crud import areas
from app.errors import RecordNotFoundError
from app.models.orm.areas import Area as ORMArea
from app.utils.filters import AreaFilter


def _compile(clause):
    compiled = clause.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


def test_filter_clause():
    sql, params = _compile(
        areas._filter_clause(
            AreaFilter(
                env=["production", "staging"],
                user_id="user_1",
                application=["gfw"],
                status="saved",
                public=False,
            )
        )
    )

    assert "areas.env IN" in sql
    assert "areas.user_id =" in sql
    assert "areas.application IN" in sql
    assert "areas.status =" in sql
    assert "areas.public =" in sql
    assert sorted(params.values(), key=str) == sorted(
        ["production", "staging", "user_1", "gfw", "saved", False], key=str
    )


def test_filter_clause_only_env():
    sql, params = _compile(areas._filter_clause(AreaFilter(env=["production"])))

    assert "areas.env IN" in sql
    for column in ("user_id", "application", "status", "public"):
        assert f"areas.{column}" not in sql
    assert list(params.values()) == ["production"]


def test_order_by():
    columns = areas._order_by([("name", False), ("updated_at", True)])
    dialect = postgresql.dialect()

    assert [str(column.compile(dialect=dialect)) for column in columns] == [
        "areas.name ASC",
        "areas.updated_at DESC",
    ]


def test_saved_area_clause():
    area_id = uuid.uuid4()

    sql, params = _compile(areas._saved_area_clause("geostore", "abc123"))
    assert "areas.geostore =" in sql
    assert "areas.status =" in sql
    assert "areas.id !=" not in sql
    assert set(params.values()) == {"abc123", "saved"}

    sql, params = _compile(
        areas._saved_area_clause("geostore_data_api", "ref", exclude_id=area_id)
    )
    assert "areas.geostore_data_api =" in sql
    assert "areas.id !=" in sql
    assert area_id in params.values()

    with pytest.raises(AssertionError):
        areas._saved_area_clause("name", "A")


@pytest.mark.parametrize(
    "status, count", [("UPDATE 3", 3), ("UPDATE 0", 0), ("DELETE 12", 12)]
)
def test_row_count(status, count):
    assert areas._row_count(status) == count


@pytest.mark.asyncio
async def test_get_missing_area(monkeypatch):
    monkeypatch.setattr(ORMArea, "get", AsyncMock(return_value=None))

    with pytest.raises(RecordNotFoundError):
        await areas.get_area(uuid.uuid4())


@pytest.mark.asyncio
async def test_update_area(monkeypatch):
    row = MagicMock()
    row.update.return_value.apply = AsyncMock()
    monkeypatch.setattr(ORMArea, "get", AsyncMock(return_value=row))

    updated = await areas.update_area(uuid.uuid4(), name="New name")

    assert updated is row
    row.update.assert_called_once_with(name="New name")
    row.update.return_value.apply.assert_awaited_once()

    row.update.reset_mock()
    assert await areas.update_area(uuid.uuid4()) is row
    row.update.assert_not_called()

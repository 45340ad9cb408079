from typing import Any, Dict

from ..application import db


async def update_data(row: db.Model, input_data: Dict[str, Any]) -> db.Model:  # type: ignore
    """Merge updated fields with existing fields."""

    if not input_data:
        return row

    await row.update(**input_data).apply()

    return row

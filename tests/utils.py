import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.errors import RecordNotFoundError
from app.utils.filters import AreaFilter

# Column defaults of the areas table
AREA_DEFAULTS: Dict[str, Any] = {
    "name": None,
    "application": "gfw",
    "geostore": None,
    "geostore_data_api": None,
    "wdpaid": None,
    "user_id": None,
    "use": {},
    "env": "production",
    "iso": {},
    "admin": {},
    "datasets": [],
    "tags": [],
    "status": "pending",
    "public": False,
    "webhook_url": "",
    "email": "",
    "subscription_id": None,
    "language": "en",
    "template_id": None,
    "image": "",
}


class FakeAreaRepository:
    """In memory stand in for the areas table, with the same interface as
    app.crud.areas."""

    def __init__(self):
        self.rows: Dict[uuid.UUID, Dict[str, Any]] = dict()

    def add(self, **data) -> Dict[str, Any]:
        """Insert a row directly, bypassing the service."""
        now = datetime.utcnow()
        row = {
            **AREA_DEFAULTS,
            "id": uuid.uuid4(),
            "created_at": now,
            "updated_at": now,
            **data,
        }
        self.rows[row["id"]] = row
        return dict(row)

    @staticmethod
    def _matches(row: Dict[str, Any], area_filter: AreaFilter) -> bool:
        if row["env"] not in area_filter.env:
            return False
        if area_filter.user_id is not None and row["user_id"] != area_filter.user_id:
            return False
        if area_filter.application and row["application"] not in area_filter.application:
            return False
        if area_filter.status is not None and row["status"] != area_filter.status:
            return False
        if area_filter.public is not None and row["public"] != area_filter.public:
            return False
        return True

    async def count_areas(self, area_filter: AreaFilter) -> int:
        return len([r for r in self.rows.values() if self._matches(r, area_filter)])

    async def get_areas(
        self,
        area_filter: AreaFilter,
        size: Optional[int] = None,
        offset: int = 0,
        sort: Sequence[Tuple[str, bool]] = (("id", False),),
    ) -> List[Dict[str, Any]]:
        rows = [dict(r) for r in self.rows.values() if self._matches(r, area_filter)]
        for field, descending in reversed(list(sort)):
            rows.sort(key=lambda r: str(r[field] or ""), reverse=descending)
        end = None if size is None else offset + size
        return rows[offset:end]

    async def get_areas_by_geostores(self, geostores: List[str]) -> List[Dict[str, Any]]:
        return [dict(r) for r in self.rows.values() if r["geostore"] in geostores]

    async def get_area(self, area_id: uuid.UUID) -> Dict[str, Any]:
        if area_id not in self.rows:
            raise RecordNotFoundError(f"Area with id {area_id} does not exist")
        return dict(self.rows[area_id])

    async def create_area(self, **data) -> Dict[str, Any]:
        return self.add(**data)

    async def update_area(self, area_id: uuid.UUID, **data) -> Dict[str, Any]:
        await self.get_area(area_id)
        self.rows[area_id].update(data)
        return dict(self.rows[area_id])

    async def update_areas_by_geostores(self, geostores: List[str], **data) -> int:
        rows = [r for r in self.rows.values() if r["geostore"] in geostores]
        for row in rows:
            row.update(data)
        return len(rows)

    async def delete_area(self, area_id: uuid.UUID) -> Dict[str, Any]:
        row = await self.get_area(area_id)
        del self.rows[area_id]
        return row

    async def exists_saved_area(
        self, field: str, value: str, exclude_id: Optional[uuid.UUID] = None
    ) -> bool:
        return any(
            r[field] == value and r["status"] == "saved" and r["id"] != exclude_id
            for r in self.rows.values()
        )


def assert_jsend(json_response: Dict[str, Any], status: str = "success") -> None:
    assert json_response["status"] == status
    if status == "success":
        assert "data" in json_response
    else:
        assert "message" in json_response

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enum.areas import UserRole


class User(BaseModel):
    """Identity resolved from a bearer token by the RW API."""

    id: str
    role: str = UserRole.user.value
    email: Optional[str] = None
    name: Optional[str] = None
    extraUserData: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin.value

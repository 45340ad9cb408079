from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from sqlalchemy.engine.url import URL
from starlette.datastructures import Secret


class DatabaseURL(BaseModel):
    drivername: str = Field(..., alias="driver", description="The database driver.")
    host: str = Field("localhost", description="Server host.")
    port: Optional[Union[str, int]] = Field(None, description="Server access port.")
    username: Optional[str] = Field(None, alias="user", description="Username")
    password: Optional[Union[str, Secret]] = Field(None, description="Password")
    database: str = Field(..., description="Database name.")
    url: Optional[URL] = None

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    @model_validator(mode="after")
    def build_url(self):
        if isinstance(self.url, URL):
            return self
        fields = ("drivername", "host", "port", "username", "password", "database")
        args = {
            name: str(getattr(self, name))
            for name in fields
            if getattr(self, name) is not None
        }
        self.url = URL(**args)
        return self

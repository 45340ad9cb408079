import json
from pathlib import Path
from typing import List, Optional

from starlette.config import Config
from starlette.datastructures import CommaSeparatedStrings, Secret

from ..models.pydantic.database import DatabaseURL

# Read .env file, if exists
p: Path = Path(__file__).parents[2] / ".env"
config: Config = Config(p if p.exists() else None)

empty_db_secret = {
    "dbInstanceIdentifier": None,
    "dbname": "areas",
    "engine": None,
    "host": "localhost",
    "password": None,  # pragma: allowlist secret
    "port": 5432,
    "username": None,
}

empty_sa_secret = {"email": None, "token": None}

# As of writing, Fargate doesn't support to fetch secrets by key.
# Only entire secret object can be obtained.
DB_WRITER_SECRET = json.loads(
    config("DB_WRITER_SECRET", cast=str, default=json.dumps(empty_db_secret))
)
DB_READER_SECRET = json.loads(
    config("DB_READER_SECRET", cast=str, default=json.dumps(empty_db_secret))
)

SERVICE_ACCOUNT_SECRET = json.loads(
    config("SERVICE_ACCOUNT_SECRET", cast=str, default=json.dumps(empty_sa_secret))
)

ENV = config("ENV", cast=str, default="dev")

READER_USERNAME: Optional[str] = config(
    "DB_USER_RO", cast=str, default=DB_READER_SECRET["username"]
)
READER_PASSWORD: Optional[Secret] = config(
    "DB_PASSWORD_RO", cast=Secret, default=DB_READER_SECRET["password"]
)
READER_HOST: str = config("DB_HOST_RO", cast=str, default=DB_READER_SECRET["host"])
READER_PORT: int = config("DB_PORT_RO", cast=int, default=DB_READER_SECRET["port"])
READER_DBNAME = config("DATABASE_RO", cast=str, default=DB_READER_SECRET["dbname"])

WRITER_USERNAME: Optional[str] = config(
    "DB_USER", cast=str, default=DB_WRITER_SECRET["username"]
)
WRITER_PASSWORD: Optional[Secret] = config(
    "DB_PASSWORD", cast=Secret, default=DB_WRITER_SECRET["password"]
)
WRITER_HOST: str = config("DB_HOST", cast=str, default=DB_WRITER_SECRET["host"])
WRITER_PORT: int = config("DB_PORT", cast=int, default=DB_WRITER_SECRET["port"])
WRITER_DBNAME = config("DATABASE", cast=str, default=DB_WRITER_SECRET["dbname"])

DATABASE_CONFIG: DatabaseURL = DatabaseURL(
    drivername="asyncpg",
    username=READER_USERNAME,
    password=READER_PASSWORD,
    host=READER_HOST,
    port=READER_PORT,
    database=READER_DBNAME,
)

WRITE_DATABASE_CONFIG: DatabaseURL = DatabaseURL(
    drivername="asyncpg",
    username=WRITER_USERNAME,
    password=WRITER_PASSWORD,
    host=WRITER_HOST,
    port=WRITER_PORT,
    database=WRITER_DBNAME,
)

ALEMBIC_CONFIG: DatabaseURL = DatabaseURL(
    drivername="postgresql+psycopg2",
    username=WRITER_USERNAME,
    password=WRITER_PASSWORD,
    host=WRITER_HOST,
    port=WRITER_PORT,
    database=WRITER_DBNAME,
)

SQL_REQUEST_TIMEOUT = 58

API_PREFIX = config("API_PREFIX", cast=str, default="/v2")

AWS_REGION = config("AWS_REGION", cast=str, default="us-east-1")
S3_ENTRYPOINT_URL = config("S3_ENTRYPOINT_URL", cast=str, default=None)
AREA_IMAGE_BUCKET = config("AREA_IMAGE_BUCKET", cast=str, default="gfw-areas")
AREA_IMAGE_FOLDER = config("AREA_IMAGE_FOLDER", cast=str, default="areas")

RW_API_URL = config("RW_API_URL", cast=str, default="https://api.resourcewatch.org")
AUTH_TIMEOUT = config("AUTH_TIMEOUT", cast=float, default=10.0)
SERVICE_ACCOUNT_TOKEN = config(
    "SERVICE_ACCOUNT_TOKEN", cast=str, default=SERVICE_ACCOUNT_SECRET["token"]
)
MAIL_SERVICE_URL = config(
    "MAIL_SERVICE_URL", cast=str, default=f"{RW_API_URL}/v1/mail"
)

MBGL_RENDER_API_URL = config(
    "MBGL_RENDER_API_URL", cast=str, default="http://localhost:8080/render"
)
# Seconds to wait for the map renderer before giving up on the area image
RENDER_TIMEOUT = config("RENDER_TIMEOUT", cast=float, default=30.0)

FLAGSHIP_URL = config(
    "FLAGSHIP_URL", cast=str, default="https://www.globalforestwatch.org"
)

# Application of new areas, and the one updates fill in when it is missing
CREATE_APPLICATION = config("CREATE_APPLICATION", cast=str, default="ahw")
DEFAULT_APPLICATION = config("DEFAULT_APPLICATION", cast=str, default="gfw")
DEFAULT_ENV = "production"
DEFAULT_PAGE_SIZE = config("DEFAULT_PAGE_SIZE", cast=int, default=300)

SUPPORTED_LANG_CODES: List[str] = list(
    config("SUPPORTED_LANG_CODES", cast=CommaSeparatedStrings, default="en")
)
DEFAULT_LANG_CODE = config("DEFAULT_LANG_CODE", cast=str, default="en")

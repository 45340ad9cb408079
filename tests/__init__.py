from app.models.pydantic.authentication import User

USER_1 = User(id="user_1", role="USER", email="user_1@example.com", name="User 1")
USER_2 = User(id="user_2", role="USER", email="user_2@example.com", name="User 2")
ADMIN_1 = User(id="admin_1", role="ADMIN", email="admin@example.com", name="Admin")

GEOSTORE = "abc123"
OTHER_GEOSTORE = "def456"
GEOSTORE_DATA_API = "4f5c2a1e-8b0e-4d4c-9f00-2e2c3f9a1b77"
IMAGE_URL = "https://gfw-areas.s3.amazonaws.com/areas/abc123.png"

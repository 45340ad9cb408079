import pytest
from pydantic import ValidationError

from app.models.pydantic.areas import (
    AreaCreateIn,
    AreaUpdateByGeostoreIn,
    AreaUpdateIn,
)


def test_create_minimal():
    area = AreaCreateIn(name="A")

    assert area.geostore is None
    assert area.tags is None
    assert area.model_fields_set == {"name"}


def test_create_camel_case():
    area = AreaCreateIn.model_validate(
        {
            "name": "A",
            "geostoreDataApi": "ref",
            "webhookUrl": "https://hook",
            "subscriptionId": "sub",
            "templateId": "tpl",
            "env": "Staging",
            "unknown": 1,
        }
    )

    assert area.geostore_data_api == "ref"
    assert area.webhook_url == "https://hook"
    assert area.subscription_id == "sub"
    assert area.template_id == "tpl"
    assert area.env == "staging"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"name": ""},
        {"name": "x" * 101},
        {"name": "A", "geostore": "not-hex"},
        {"name": "A", "geostore": "abc123", "geostoreDataApi": "ref"},
        {"name": "A", "geostore": "abc123\n"},
        {"name": "A", "tags": ["no-dashes"]},
        {"name": "A", "tags": ["ok\n"]},
        {"name": "A", "public": "yes"},
        {"name": "A", "status": "done"},
        {"name": "A", "datasets": "[not json"},
    ],
)
def test_create_invalid(payload):
    with pytest.raises(ValidationError):
        AreaCreateIn.model_validate(payload)


def test_create_blank_geostore():
    area = AreaCreateIn.model_validate(
        {"name": "A", "geostore": "", "geostoreDataApi": "ref"}
    )

    assert area.geostore is None
    assert area.geostore_data_api == "ref"


def test_create_json_encoded_fields():
    area = AreaCreateIn.model_validate(
        {
            "name": "A",
            "datasets": '[{"slug": "umd_tree_cover_loss"}]',
            "iso": '{"country": "BRA", "region": 1}',
            "use": {"id": "u1", "name": "Mining"},
            "tags": ["Forest watch", "Amazônia_1"],
        }
    )

    assert area.datasets == [{"slug": "umd_tree_cover_loss"}]
    assert area.iso.country == "BRA"
    assert area.iso.region == 1
    assert area.use.name == "Mining"


def test_update_presence():
    area = AreaUpdateIn.model_validate({"public": False, "email": None})

    assert area.model_fields_set == {"public", "email"}
    assert area.public is False
    assert area.email is None


@pytest.mark.parametrize(
    "payload",
    [
        {"name": None},
        {"name": "A"},
        {"public": None},
        {"tags": None},
        {"env": None},
        {"geostore": "abc123", "geostoreDataApi": "ref"},
    ],
)
def test_update_invalid(payload):
    with pytest.raises(ValidationError):
        AreaUpdateIn.model_validate(payload)


def test_bulk_update():
    request = AreaUpdateByGeostoreIn.model_validate(
        {"geostores": ["abc123"], "update_params": {"public": True, "status": "saved"}}
    )

    assert request.update_params.model_fields_set == {"public", "status"}

    with pytest.raises(ValidationError):
        AreaUpdateByGeostoreIn.model_validate(
            {"geostores": ["abc123"], "update_params": {"geostore": "def456"}}
        )
    with pytest.raises(ValidationError):
        AreaUpdateByGeostoreIn.model_validate(
            {"geostores": ["abc123"], "update_params": {"public": None}}
        )

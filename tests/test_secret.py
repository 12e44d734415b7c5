import pytest

from gcpprovider.validation.secret import (
    SERVICE_ACCOUNT_JSON_FIELD,
    SecretValidationError,
    extract_service_account_project_id,
    validate_cloud_provider_secret,
)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {SERVICE_ACCOUNT_JSON_FIELD: b'{"foo": "bar"}'},
        {SERVICE_ACCOUNT_JSON_FIELD: b'{"project_id": "0my-project"}'},
        {SERVICE_ACCOUNT_JSON_FIELD: b'{"project_id": "my-project-"}'},
        {SERVICE_ACCOUNT_JSON_FIELD: b'{"project_id": "foo"}'},
        {SERVICE_ACCOUNT_JSON_FIELD: ('{"project_id": "%s"}' % ("a" * 31)).encode()},
    ],
    ids=["missing-field", "missing-project", "leading-digit", "trailing-hyphen", "too-short", "too-long"],
)
def test_invalid_secrets(data):
    with pytest.raises(SecretValidationError):
        validate_cloud_provider_secret(data)


def test_valid_secret():
    data = {SERVICE_ACCOUNT_JSON_FIELD: b'{"project_id": "my-project"}'}
    assert validate_cloud_provider_secret(data) == "my-project"


def test_missing_field_message():
    with pytest.raises(SecretValidationError, match='missing "serviceaccount.json" field'):
        validate_cloud_provider_secret({})


def test_extract_project_id():
    assert extract_service_account_project_id('{"project_id": "my-project"}') == "my-project"


def test_extract_project_id_rejects_bad_json():
    with pytest.raises(SecretValidationError):
        extract_service_account_project_id(b"not json")
"""Validation of cloud provider secrets."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping

SERVICE_ACCOUNT_JSON_FIELD = "serviceaccount.json"

_PROJECT_ID = re.compile(r"^(?P<project>[a-z][a-z0-9-]{4,28}[a-z0-9])$")


class SecretValidationError(ValueError):
    """Raised when a secret does not hold a usable service account."""


def extract_service_account_project_id(service_account_json: bytes | str) -> str:
    """Return the ``project_id`` of a service account JSON document."""
    try:
        document = json.loads(service_account_json)
    except (ValueError, TypeError) as exc:
        raise SecretValidationError(f"could not parse service account: {exc}") from exc
    if not isinstance(document, dict):
        raise SecretValidationError("service account must be a JSON object")
    project_id = document.get("project_id")
    if project_id is not None and not isinstance(project_id, str):
        raise SecretValidationError("service account project_id must be a string")
    if not project_id:
        raise SecretValidationError("no service account specified")
    return project_id


def validate_cloud_provider_secret(data: Mapping[str, bytes]) -> str:
    """Check that secret data holds a valid service account; return its project ID."""
    try:
        service_account_json = data[SERVICE_ACCOUNT_JSON_FIELD]
    except KeyError:
        raise SecretValidationError(f'missing "{SERVICE_ACCOUNT_JSON_FIELD}" field in secret') from None

    project_id = extract_service_account_project_id(service_account_json)
    if not _PROJECT_ID.fullmatch(project_id):
        raise SecretValidationError(
            f"service account project ID does not match the expected format '{_PROJECT_ID.pattern}'"
        )
    return project_id
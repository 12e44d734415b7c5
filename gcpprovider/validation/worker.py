"""Validation of the worker configuration."""

from __future__ import annotations

from collections.abc import Iterable

from gcpprovider.core import DataVolume
from gcpprovider.field import FieldError, Path, duplicate, not_supported, required
from gcpprovider.types import ServiceAccount, WorkerConfig

_LOCAL_SSD_INTERFACES = frozenset({"NVME", "SCSI"})


def validate_worker_config(
    worker_config: WorkerConfig | None, data_volumes: Iterable[DataVolume] | None
) -> list[FieldError]:
    """Validate a worker configuration against the data volumes of its pool."""
    errors: list[FieldError] = []
    interface_path = Path("volume", "localSSDInterface")

    for volume in data_volumes or ():
        if volume.type != "SCRATCH":
            continue
        interface = (
            worker_config.volume.local_ssd_interface
            if worker_config is not None and worker_config.volume is not None
            else None
        )
        if interface is None:
            errors.append(required(interface_path, "must be set when using SCRATCH volumes"))
        elif interface not in _LOCAL_SSD_INTERFACES:
            errors.append(not_supported(interface_path, interface, sorted(_LOCAL_SSD_INTERFACES)))

    if worker_config is not None:
        errors.extend(_validate_service_account(worker_config.service_account, Path("serviceAccount")))
    return errors


def _validate_service_account(account: ServiceAccount | None, path: Path) -> list[FieldError]:
    if account is None:
        return []
    errors: list[FieldError] = []
    if not account.email:
        errors.append(required(path.child("email"), "must be set when providing service account"))

    scopes_path = path.child("scopes")
    if not account.scopes:
        errors.append(required(scopes_path, "must have at least one scope"))
        return errors

    seen: set[str] = set()
    for position, scope in enumerate(account.scopes):
        if not scope:
            errors.append(required(scopes_path.index(position), "must not be empty"))
        elif scope in seen:
            errors.append(duplicate(scopes_path.index(position), scope))
        else:
            seen.add(scope)
    return errors
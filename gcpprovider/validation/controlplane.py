"""Validation of the control plane configuration."""

from __future__ import annotations

import re
from collections.abc import Collection, Mapping
from typing import NamedTuple

from gcpprovider.field import (
    FieldError,
    Path,
    forbidden,
    invalid,
    not_supported,
    required,
    validate_immutable_field,
)
from gcpprovider.types import ControlPlaneConfig


class _VersionRange(NamedTuple):
    added: str = ""
    removed: str = ""


# Kubernetes versions in which feature gates were introduced or removed.
_FEATURE_GATES: dict[str, _VersionRange] = {
    "APIListChunking": _VersionRange(added="1.8"),
    "APIPriorityAndFairness": _VersionRange(added="1.17"),
    "APIResponseCompression": _VersionRange(added="1.7"),
    "APIServerIdentity": _VersionRange(added="1.20"),
    "AllowInsecureBackendProxy": _VersionRange(added="1.17"),
    "AnyVolumeDataSource": _VersionRange(added="1.18"),
    "AppArmor": _VersionRange(),
    "BalanceAttachedNodeVolumes": _VersionRange(added="1.11"),
    "BlockVolume": _VersionRange(added="1.9", removed="1.22"),
    "BoundServiceAccountTokenVolume": _VersionRange(added="1.13"),
    "CPUManager": _VersionRange(added="1.8"),
    "CSIInlineVolume": _VersionRange(added="1.14"),
    "CSIMigration": _VersionRange(added="1.14"),
    "CSIMigrationGCE": _VersionRange(added="1.14"),
    "CSIMigrationGCEComplete": _VersionRange(added="1.17"),
    "CSIStorageCapacity": _VersionRange(added="1.19"),
    "CSIVolumeFSGroupPolicy": _VersionRange(added="1.19"),
    "CustomCPUCFSQuotaPeriod": _VersionRange(added="1.12"),
    "CustomResourceValidation": _VersionRange(removed="1.18"),
    "CustomResourceWebhookConversion": _VersionRange(added="1.13", removed="1.22"),
    "DynamicKubeletConfig": _VersionRange(added="1.4"),
    "EndpointSlice": _VersionRange(added="1.16"),
    "EphemeralContainers": _VersionRange(added="1.16"),
    "ExpandCSIVolumes": _VersionRange(added="1.14"),
    "ExpandInUsePersistentVolumes": _VersionRange(added="1.11"),
    "ExpandPersistentVolumes": _VersionRange(added="1.8"),
    "GenericEphemeralVolume": _VersionRange(added="1.19"),
    "HPAScaleToZero": _VersionRange(added="1.16"),
    "IPv6DualStack": _VersionRange(added="1.16"),
    "LocalStorageCapacityIsolation": _VersionRange(added="1.7"),
    "RotateKubeletServerCertificate": _VersionRange(added="1.7"),
    "ServerSideApply": _VersionRange(added="1.14"),
    "TTLAfterFinished": _VersionRange(added="1.12"),
    "VolumeSnapshotDataSource": _VersionRange(added="1.12", removed="1.22"),
}

_VERSION = re.compile(
    r"v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?"
)


def _parse_version(text: str) -> tuple[int, int, int]:
    match = _VERSION.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid semantic version {text!r}")
    return tuple(int(part or 0) for part in match.groups())  # type: ignore[return-value]


def _is_supported(feature_gate: str, version: str) -> bool:
    try:
        bounds = _FEATURE_GATES[feature_gate]
    except KeyError:
        raise ValueError(f"unknown feature gate {feature_gate}") from None
    if bounds.added and _parse_version(version) < _parse_version(bounds.added):
        return False
    if bounds.removed and _parse_version(version) >= _parse_version(bounds.removed):
        return False
    return True


def validate_feature_gates(
    feature_gates: Mapping[str, bool] | None, version: str, path: Path | None = None
) -> list[FieldError]:
    """Check that every feature gate is known and supported in ``version``."""
    root = path or Path()
    errors: list[FieldError] = []
    for gate in feature_gates or {}:
        try:
            supported = _is_supported(gate, version)
        except ValueError as exc:
            errors.append(invalid(root.child(gate), gate, str(exc)))
            continue
        if not supported:
            errors.append(forbidden(root.child(gate), f"not supported in Kubernetes version {version}"))
    return errors


def validate_control_plane_config(
    config: ControlPlaneConfig,
    allowed_zones: Collection[str],
    worker_zones: Collection[str],
    version: str,
    path: Path | None = None,
) -> list[FieldError]:
    """Validate a control plane configuration."""
    root = path or Path()
    zone_path = root.child("zone")
    errors: list[FieldError] = []

    if not config.zone:
        errors.append(required(zone_path, "must provide the name of a zone in this region"))
    elif config.zone not in allowed_zones:
        errors.append(not_supported(zone_path, config.zone, sorted(allowed_zones)))

    if config.zone not in worker_zones:
        errors.append(invalid(zone_path, config.zone, "must be part of at least one worker zone"))

    if config.cloud_controller_manager is not None:
        errors.extend(
            validate_feature_gates(
                config.cloud_controller_manager.feature_gates,
                version,
                root.child("cloudControllerManager", "featureGates"),
            )
        )
    return errors


def validate_control_plane_config_update(
    old_config: ControlPlaneConfig, new_config: ControlPlaneConfig, path: Path | None = None
) -> list[FieldError]:
    """Validate a change to a control plane configuration."""
    return validate_immutable_field(new_config.zone, old_config.zone, (path or Path()).child("zone"))
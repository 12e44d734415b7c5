"""Validation of the cluster-level settings that the provider depends on."""

from __future__ import annotations

from collections.abc import Sequence

import semver

from gcpprovider.core import CoreVolume, Networking, Worker, find_worker_by_name
from gcpprovider.field import (
    FieldError,
    Path,
    forbidden,
    internal_error,
    invalid,
    required,
    validate_immutable_field,
)

# Kubernetes version from which on volumes are handled by the CSI driver.
CSI_MIGRATION_KUBERNETES_VERSION = "1.18"


class AutoScalingError(ValueError):
    """Raised when a worker pool's minimum cannot cover all of its zones."""


def _parse_version(text: str) -> semver.Version:
    candidate = text[1:] if text.startswith("v") else text
    return semver.Version.parse(candidate, optional_minor_and_patch=True)


def validate_networking(networking: Networking, path: Path | None = None) -> list[FieldError]:
    """Check that the cluster's network settings name a nodes range."""
    if networking.nodes is None:
        return [required((path or Path()).child("nodes"), "a nodes CIDR must be provided for GCP shoots")]
    return []


def validate_workers(workers: Sequence[Worker] | None, path: Path | None = None) -> list[FieldError]:
    """Validate the worker pools of a cluster."""
    root = path or Path()
    errors: list[FieldError] = []

    try:
        csi_version = _parse_version(CSI_MIGRATION_KUBERNETES_VERSION)
    except ValueError as exc:
        return [internal_error(root, exc)]

    for position, worker in enumerate(workers or ()):
        worker_path = root.index(position)

        if worker.kubernetes is not None and worker.kubernetes.version is not None:
            version_path = worker_path.child("kubernetes", "version")
            try:
                version = _parse_version(worker.kubernetes.version)
            except ValueError as exc:
                errors.append(invalid(version_path, worker.kubernetes.version, str(exc)))
                return errors
            if version < csi_version:
                errors.append(
                    forbidden(
                        version_path,
                        f"cannot use kubelet version ({version}) lower than "
                        f"CSI migration version ({csi_version})",
                    )
                )

        if worker.volume is None:
            errors.append(required(worker_path.child("volume"), "must not be nil"))
        else:
            errors.extend(_validate_volume(worker.volume, worker_path.child("volume")))

        if not worker.zones:
            errors.append(required(worker_path.child("zones"), "at least one zone must be configured"))
            continue

        if worker.maximum != 0 and worker.minimum == 0:
            errors.append(
                forbidden(
                    worker_path.child("minimum"),
                    "minimum value must be > 0 if maximum value > 0 (auto scaling to 0 is not supported)",
                )
            )
    return errors


def validate_worker_auto_scaling(worker: Worker, path: str) -> None:
    """Raise if an autoscaled pool has fewer minimum machines than zones."""
    zones = len(worker.zones or ())
    if worker.maximum > 0 and worker.minimum < zones:
        raise AutoScalingError(
            f"{path} value must be >= {zones} (number of zones) if maximum value > 0 "
            "(auto scaling to 0 & from 0 is not supported)"
        )


def _validate_volume(volume: CoreVolume, path: Path) -> list[FieldError]:
    errors: list[FieldError] = []
    if volume.type is None:
        errors.append(required(path.child("type"), "must not be empty"))
    if not volume.volume_size:
        errors.append(required(path.child("size"), "must not be empty"))
    return errors


def _should_enforce_immutability(new: Sequence[str], old: Sequence[str]) -> bool:
    """True unless ``new`` only appends elements to ``old``."""
    if any(new_zone != old_zone for new_zone, old_zone in zip(new, old)):
        return True
    return len(new) < len(old)


def validate_workers_update(
    old_workers: Sequence[Worker] | None,
    new_workers: Sequence[Worker] | None,
    path: Path | None = None,
) -> list[FieldError]:
    """Validate changes to the worker pools of a cluster."""
    root = path or Path()
    errors: list[FieldError] = []
    for position, new_worker in enumerate(new_workers or ()):
        worker_path = root.index(position)
        old_worker = find_worker_by_name(old_workers, new_worker.name)
        new_zones = new_worker.zones or []

        if old_worker is not None and _should_enforce_immutability(new_zones, old_worker.zones or []):
            errors.extend(validate_immutable_field(new_zones, old_worker.zones, worker_path.child("zones")))

        if new_worker != old_worker:
            minimum_path = worker_path.child("minimum")
            try:
                validate_worker_auto_scaling(new_worker, str(minimum_path))
            except AutoScalingError as exc:
                errors.append(forbidden(minimum_path, str(exc)))
    return errors
"""Validation of the provider section of a cloud profile."""

from __future__ import annotations

import json
from collections.abc import Iterable

from gcpprovider.core import CoreMachineImage, ExpirableVersion
from gcpprovider.field import FieldError, Path, required
from gcpprovider.types import CloudProfileConfig, MachineImageVersion


def validate_cloud_profile_config(
    cp_config: CloudProfileConfig,
    machine_images: Iterable[CoreMachineImage] | None,
    path: Path | None = None,
) -> list[FieldError]:
    """Check that every offered image version has a provider image mapping."""
    errors: list[FieldError] = []
    images_path = (path or Path()).child("machineImages")

    for image in machine_images or ():
        for position, image_config in enumerate(cp_config.machine_images or ()):
            if image.name == image_config.name:
                errors.extend(
                    _validate_versions(
                        image_config.versions or (),
                        image.versions or (),
                        images_path.index(position).child("versions"),
                    )
                )
                break
        else:
            if image.versions:
                errors.append(
                    required(
                        images_path,
                        f"must provide an image mapping for image {json.dumps(image.name)}",
                    )
                )
    return errors


def _validate_versions(
    versions_config: Iterable[MachineImageVersion],
    versions: Iterable[ExpirableVersion],
    path: Path,
) -> list[FieldError]:
    configs = list(versions_config)
    errors: list[FieldError] = []
    for version in versions:
        for position, version_config in enumerate(configs):
            if version.version == version_config.version:
                if not version_config.image:
                    errors.append(required(path.index(position).child("image"), "must provide an image"))
                break
        else:
            errors.append(
                required(path, f"must provide an image mapping for version {json.dumps(version.version)}")
            )
    return errors
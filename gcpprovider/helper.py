"""Lookups over provider configuration and status."""

from __future__ import annotations

import json
from collections.abc import Iterable

from gcpprovider.types import (
    CloudProfileConfig,
    MachineImage,
    Subnet,
    SubnetPurpose,
)


class NotFoundError(LookupError):
    """Raised when a requested entry does not exist."""


def _quote(value: object) -> str:
    return json.dumps(str(value), ensure_ascii=False)


def find_subnet_by_purpose(subnets: Iterable[Subnet] | None, purpose: SubnetPurpose | str) -> Subnet:
    """Return the first subnet with the given purpose."""
    for subnet in subnets or ():
        if subnet.purpose == purpose:
            return subnet
    raise NotFoundError(f"cannot find subnet with purpose {_quote(purpose)}")


def find_machine_image(
    machine_images: Iterable[MachineImage] | None, name: str, version: str
) -> MachineImage:
    """Return the first machine image with the given name and version."""
    for machine_image in machine_images or ():
        if machine_image.name == name and machine_image.version == version:
            return machine_image
    raise NotFoundError(f"no machine image with name {_quote(name)}, version {_quote(version)} found")


def find_image_from_cloud_profile(
    cloud_profile_config: CloudProfileConfig | None, image_name: str, image_version: str
) -> str:
    """Return the provider image for a name and version from a cloud profile config."""
    if cloud_profile_config is not None:
        for machine_image in cloud_profile_config.machine_images or ():
            if machine_image.name != image_name:
                continue
            for version in machine_image.versions or ():
                if version.version == image_version:
                    return version.image
    raise NotFoundError(
        f"could not find an image for name {_quote(image_name)} in version {_quote(image_version)}"
    )
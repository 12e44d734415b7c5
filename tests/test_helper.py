import pytest

from gcpprovider.helper import (
    NotFoundError,
    find_image_from_cloud_profile,
    find_machine_image,
    find_subnet_by_purpose,
)
from gcpprovider.types import (
    CloudProfileConfig,
    MachineImage,
    MachineImages,
    MachineImageVersion,
    Subnet,
    SubnetPurpose,
)

PROFILE_IMAGE = "project/path/to/profile/image"
PURPOSE = "foo"
PURPOSE_WRONG = "baz"


def make_profile_machine_images(name, version):
    return [
        MachineImages(
            name=name,
            versions=[MachineImageVersion(version=version, image=PROFILE_IMAGE)],
        )
    ]


@pytest.mark.parametrize(
    "subnets",
    [None, [], [Subnet(name="bar", purpose=PURPOSE_WRONG)]],
    ids=["list is nil", "empty list", "entry not found"],
)
def test_find_subnet_by_purpose_missing(subnets):
    with pytest.raises(NotFoundError):
        find_subnet_by_purpose(subnets, PURPOSE)


def test_find_subnet_by_purpose_exists():
    result = find_subnet_by_purpose([Subnet(name="bar", purpose=PURPOSE)], PURPOSE)
    assert result == Subnet(name="bar", purpose=PURPOSE)


def test_find_subnet_by_purpose_returns_first_match():
    subnets = [
        Subnet(name="a", purpose=SubnetPurpose.INTERNAL),
        Subnet(name="b", purpose=SubnetPurpose.NODES),
        Subnet(name="c", purpose=SubnetPurpose.NODES),
    ]
    assert find_subnet_by_purpose(subnets, SubnetPurpose.NODES).name == "b"


def test_find_subnet_by_purpose_message():
    with pytest.raises(NotFoundError, match='cannot find subnet with purpose "foo"'):
        find_subnet_by_purpose([], PURPOSE)


@pytest.mark.parametrize(
    "images,name,version",
    [
        (None, "foo", "1.2.3"),
        ([], "foo", "1.2.3"),
        ([MachineImage(name="bar", version="1.2.3", image="image123")], "foo", "1.2.3"),
        ([MachineImage(name="bar", version="1.2.3", image="image123")], "foo", "1.2.4"),
    ],
    ids=["list is nil", "empty list", "entry not found (no name)", "entry not found (no version)"],
)
def test_find_machine_image_missing(images, name, version):
    with pytest.raises(NotFoundError):
        find_machine_image(images, name, version)


def test_find_machine_image_exists():
    images = [MachineImage(name="bar", version="1.2.3", image="image123")]
    result = find_machine_image(images, "bar", "1.2.3")
    assert result == MachineImage(name="bar", version="1.2.3", image="image123")


@pytest.mark.parametrize(
    "profile_images,image_name,version",
    [
        (None, "ubuntu", "1"),
        ([], "ubuntu", "1"),
        (make_profile_machine_images("debian", "1"), "ubuntu", "1"),
        (make_profile_machine_images("ubuntu", "2"), "ubuntu", "1"),
    ],
    ids=[
        "list is nil",
        "profile empty list",
        "profile entry not found (image does not exist)",
        "profile entry not found (version does not exist)",
    ],
)
def test_find_image_missing(profile_images, image_name, version):
    cfg = CloudProfileConfig(machine_images=profile_images)
    with pytest.raises(NotFoundError):
        find_image_from_cloud_profile(cfg, image_name, version)


def test_find_image_profile_entry():
    cfg = CloudProfileConfig(machine_images=make_profile_machine_images("ubuntu", "1"))
    assert find_image_from_cloud_profile(cfg, "ubuntu", "1") == PROFILE_IMAGE


def test_find_image_without_config():
    with pytest.raises(NotFoundError, match='could not find an image for name "ubuntu" in version "1"'):
        find_image_from_cloud_profile(None, "ubuntu", "1")
import copy

import pytest

from gcpprovider.field import ErrorType, Path
from gcpprovider.types import CloudControllerManagerConfig, ControlPlaneConfig
from gcpprovider.validation.controlplane import (
    validate_control_plane_config,
    validate_control_plane_config_update,
    validate_feature_gates,
)

ALLOWED_ZONES = {"zone1", "zone2", "some-zone"}
WORKER_ZONES = {"zone1", "zone2", "some-zone"}


@pytest.fixture
def control_plane():
    return ControlPlaneConfig(zone="some-zone")


def _summary(errors):
    return sorted((error.type.value, error.field) for error in errors)


def test_valid_configuration(control_plane):
    assert validate_control_plane_config(control_plane, ALLOWED_ZONES, WORKER_ZONES, "", None) == []


def test_zone_must_be_part_of_worker_zones(control_plane):
    control_plane.zone = ""
    errors = validate_control_plane_config(control_plane, ALLOWED_ZONES, {"zone3", "zone4"}, "", None)
    assert _summary(errors) == sorted(
        [(ErrorType.INVALID.value, "zone"), (ErrorType.REQUIRED.value, "zone")]
    )


def test_requires_zone_name(control_plane):
    control_plane.zone = ""
    errors = validate_control_plane_config(control_plane, ALLOWED_ZONES, WORKER_ZONES, "", None)
    assert _summary(errors) == sorted(
        [(ErrorType.REQUIRED.value, "zone"), (ErrorType.INVALID.value, "zone")]
    )


def test_requires_zone_of_region(control_plane):
    control_plane.zone = "bar"
    errors = validate_control_plane_config(control_plane, ALLOWED_ZONES, WORKER_ZONES, "", None)
    assert _summary(errors) == sorted(
        [(ErrorType.NOT_SUPPORTED.value, "zone"), (ErrorType.INVALID.value, "zone")]
    )


def test_invalid_ccm_feature_gates(control_plane):
    control_plane.cloud_controller_manager = CloudControllerManagerConfig(
        feature_gates={
            "AnyVolumeDataSource": True,
            "CustomResourceValidation": True,
            "Foo": True,
        }
    )
    errors = validate_control_plane_config(control_plane, ALLOWED_ZONES, WORKER_ZONES, "1.18.14", None)
    assert _summary(errors) == sorted(
        [
            (ErrorType.FORBIDDEN.value, "cloudControllerManager.featureGates.CustomResourceValidation"),
            (ErrorType.INVALID.value, "cloudControllerManager.featureGates.Foo"),
        ]
    )


def test_feature_gates_with_path():
    errors = validate_feature_gates({"Foo": False}, "1.20.0", Path("gates"))
    assert [(e.type, e.field, e.bad_value) for e in errors] == [(ErrorType.INVALID, "gates.Foo", "Foo")]


def test_feature_gates_empty():
    assert validate_feature_gates({}, "1.20.0", None) == []


def test_unchanged_config_update(control_plane):
    assert validate_control_plane_config_update(control_plane, control_plane, None) == []


def test_forbids_changing_zone(control_plane):
    new_control_plane = copy.deepcopy(control_plane)
    new_control_plane.zone = "foo"
    errors = validate_control_plane_config_update(control_plane, new_control_plane, None)
    assert _summary(errors) == [(ErrorType.INVALID.value, "zone")]
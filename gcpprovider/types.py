"""Provider-specific configuration and status types for GCP."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

GROUP_NAME = "gcp.provider.extensions.gardener.cloud"
INTERNAL_VERSION = "__internal"


def kind(kind: str) -> tuple[str, str]:
    """Qualify a kind with this API group, as ``(group, kind)``."""
    return (GROUP_NAME, kind)


def resource(resource: str) -> tuple[str, str]:
    """Qualify a resource with this API group, as ``(group, resource)``."""
    return (GROUP_NAME, resource)


class SubnetPurpose(str, enum.Enum):
    """What a subnet was created for."""

    NODES = "nodes"
    INTERNAL = "internal"

    def __str__(self) -> str:
        return self.value


# --- cloud profile -----------------------------------------------------------


@dataclass
class MachineImageVersion:
    """A version of a machine image and its provider-specific image path."""

    version: str = ""
    image: str = ""


@dataclass
class MachineImages:
    """Maps a logical image name and its versions to provider images."""

    name: str = ""
    versions: list[MachineImageVersion] = field(default_factory=list)


@dataclass
class CloudProfileConfig:
    """Provider configuration embedded into a cloud profile."""

    machine_images: list[MachineImages] = field(default_factory=list)


# --- control plane -----------------------------------------------------------


@dataclass
class CloudControllerManagerConfig:
    """Settings for the cloud-controller-manager."""

    feature_gates: dict[str, bool] = field(default_factory=dict)


@dataclass
class ControlPlaneConfig:
    """Settings for the control plane."""

    zone: str = ""
    cloud_controller_manager: CloudControllerManagerConfig | None = None


# --- infrastructure ----------------------------------------------------------


@dataclass
class CloudRouter:
    """A cloud router to reuse."""

    name: str = ""


@dataclass
class VPC:
    """A VPC and its related resources."""

    name: str = ""
    cloud_router: CloudRouter | None = None


@dataclass
class NatIPName:
    """Name of a user-provided external address for the NAT gateway."""

    name: str = ""


@dataclass
class NatIP:
    """A user-provided external address used by the NAT gateway."""

    ip: str = ""


@dataclass
class CloudNAT:
    """Cloud NAT settings."""

    min_ports_per_vm: int | None = None
    nat_ip_names: list[NatIPName] = field(default_factory=list)


@dataclass
class FlowLogs:
    """VPC flow log settings."""

    aggregation_interval: str | None = None
    flow_sampling: float | None = None
    metadata: str | None = None


@dataclass
class NetworkConfig:
    """Network ranges and related settings of the infrastructure."""

    vpc: VPC | None = None
    cloud_nat: CloudNAT | None = None
    internal: str | None = None
    worker: str = ""
    workers: str = ""
    flow_logs: FlowLogs | None = None


@dataclass
class Subnet:
    """A subnet that was created."""

    name: str = ""
    purpose: SubnetPurpose | str = ""


@dataclass
class NetworkStatus:
    """The current state of the infrastructure networks."""

    vpc: VPC = field(default_factory=VPC)
    subnets: list[Subnet] = field(default_factory=list)
    nat_ips: list[NatIP] = field(default_factory=list)


@dataclass
class InfrastructureConfig:
    """Infrastructure configuration."""

    networks: NetworkConfig = field(default_factory=NetworkConfig)


@dataclass
class InfrastructureStatus:
    """Resources created for the infrastructure."""

    networks: NetworkStatus = field(default_factory=NetworkStatus)
    service_account_email: str = ""


# --- worker -----------------------------------------------------------------


@dataclass
class Volume:
    """Settings for additional disks attached to machines."""

    local_ssd_interface: str | None = None


@dataclass
class ServiceAccount:
    """A service account and the scopes granted to it."""

    email: str = ""
    scopes: list[str] = field(default_factory=list)


@dataclass
class WorkerConfig:
    """Settings for worker nodes."""

    volume: Volume | None = None
    service_account: ServiceAccount | None = None


@dataclass
class MachineImage:
    """A machine image name and version mapped to a provider image."""

    name: str = ""
    version: str = ""
    image: str = ""


@dataclass
class WorkerStatus:
    """Resources used by the workers, such as the machine images in use."""

    machine_images: list[MachineImage] = field(default_factory=list)


KNOWN_TYPES = (
    CloudProfileConfig,
    InfrastructureConfig,
    InfrastructureStatus,
    ControlPlaneConfig,
    WorkerStatus,
    WorkerConfig,
)
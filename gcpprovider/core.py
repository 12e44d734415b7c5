"""Cluster-level types that the provider validation works on."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class ExpirableVersion:
    """A version that may carry an expiration date and a classification."""

    version: str = ""
    expiration_date: str | None = None
    classification: str | None = None


@dataclass
class CoreMachineImage:
    """A machine image offered by a cloud profile, with its versions."""

    name: str = ""
    versions: list[ExpirableVersion] = field(default_factory=list)


@dataclass
class CoreVolume:
    """The root volume of a worker's machines."""

    name: str | None = None
    type: str | None = None
    volume_size: str = ""
    encrypted: bool | None = None


@dataclass
class DataVolume:
    """An additional data volume attached to a worker's machines."""

    name: str = ""
    type: str | None = None
    volume_size: str = ""
    encrypted: bool | None = None


@dataclass
class WorkerKubernetes:
    """Kubernetes settings of a worker pool."""

    version: str | None = None


@dataclass
class ShootMachineImage:
    """The machine image used by a worker pool."""

    name: str = ""
    version: str | None = None


@dataclass
class Machine:
    """The machine type and image of a worker pool."""

    type: str = ""
    image: ShootMachineImage | None = None


@dataclass
class Worker:
    """A worker pool of a cluster."""

    name: str = ""
    machine: Machine = field(default_factory=Machine)
    maximum: int = 0
    minimum: int = 0
    zones: list[str] = field(default_factory=list)
    volume: CoreVolume | None = None
    data_volumes: list[DataVolume] = field(default_factory=list)
    kubernetes: WorkerKubernetes | None = None


@dataclass
class Networking:
    """Network ranges of a cluster."""

    type: str = ""
    nodes: str | None = None
    pods: str | None = None
    services: str | None = None


def find_worker_by_name(workers: Iterable[Worker] | None, name: str) -> Worker | None:
    """Return the first worker pool with the given name, or ``None``."""
    return next((worker for worker in workers or () if worker.name == name), None)
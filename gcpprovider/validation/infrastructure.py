"""Validation of the infrastructure configuration."""

from __future__ import annotations

from gcpprovider.cidr import CIDR, validate_cidr_is_canonical, validate_cidr_parse
from gcpprovider.field import (
    FieldError,
    Path,
    invalid,
    not_supported,
    required,
    validate_immutable_field,
)
from gcpprovider.types import InfrastructureConfig

AGGREGATION_INTERVALS = (
    "INTERVAL_5_SEC",
    "INTERVAL_30_SEC",
    "INTERVAL_1_MIN",
    "INTERVAL_5_MIN",
    "INTERVAL_15_MIN",
)
FLOW_LOG_METADATA = ("INCLUDE_ALL_METADATA",)


def _check_range(value: str, path: Path) -> tuple[CIDR, list[FieldError]]:
    cidr = CIDR(value, path)
    return cidr, validate_cidr_parse(cidr) + validate_cidr_is_canonical(path, value)


def validate_infrastructure_config(
    infra: InfrastructureConfig,
    nodes_cidr: str | None,
    pods_cidr: str | None,
    services_cidr: str | None,
    path: Path | None = None,
) -> list[FieldError]:
    """Validate an infrastructure configuration against the cluster's network ranges."""
    errors: list[FieldError] = []
    networks = infra.networks
    networks_path = (path or Path()).child("networks")

    nodes = CIDR(nodes_cidr) if nodes_cidr is not None else None
    pods = CIDR(pods_cidr) if pods_cidr is not None else None
    services = CIDR(services_cidr) if services_cidr is not None else None

    if not networks.worker and not networks.workers:
        errors.append(
            required(networks_path.child("workers"), "must specify the network range for the worker network")
        )

    worker_cidr: CIDR | None = None
    if networks.worker:
        worker_cidr, found = _check_range(networks.worker, networks_path.child("worker"))
        errors.extend(found)
    if networks.workers:
        worker_cidr, found = _check_range(networks.workers, networks_path.child("workers"))
        errors.extend(found)

    if networks.internal is not None:
        internal_cidr, found = _check_range(networks.internal, networks_path.child("internal"))
        errors.extend(found)
        for other in (pods, services, nodes, worker_cidr):
            if other is not None:
                errors.extend(other.validate_not_overlap(internal_cidr))

    if nodes is not None:
        errors.extend(nodes.validate_subset(worker_cidr))

    vpc = networks.vpc
    if vpc is not None:
        vpc_path = networks_path.child("vpc")
        if not vpc.name:
            errors.append(
                invalid(vpc_path.child("name"), vpc.name, "vpc name must not be empty when vpc key is provided")
            )
            if vpc.cloud_router is not None:
                errors.append(
                    invalid(
                        vpc_path.child("cloudRouter"),
                        vpc.cloud_router,
                        "cloud router can not be configured when the VPC name is not specified",
                    )
                )
        elif vpc.cloud_router is None:
            errors.append(
                invalid(vpc_path.child("cloudRouter"), None, "cloud router must be defined when reusing a VPC")
            )
        elif not vpc.cloud_router.name:
            errors.append(
                invalid(
                    vpc_path.child("cloudRouter", "name"),
                    vpc.cloud_router,
                    "cloud router name must be specified when reusing a VPC",
                )
            )

    flow_logs = networks.flow_logs
    if flow_logs is not None:
        flow_path = networks_path.child("flowLogs")
        if (
            flow_logs.aggregation_interval is None
            and flow_logs.flow_sampling is None
            and flow_logs.metadata is None
        ):
            errors.append(
                required(
                    flow_path,
                    "at least one VPC flow log parameter must be specified when VPC flow log section is provided",
                )
            )
        if flow_logs.aggregation_interval is not None and flow_logs.aggregation_interval not in AGGREGATION_INTERVALS:
            errors.append(
                not_supported(
                    flow_path.child("aggregationInterval"), flow_logs.aggregation_interval, AGGREGATION_INTERVALS
                )
            )
        if flow_logs.metadata is not None and flow_logs.metadata not in FLOW_LOG_METADATA:
            errors.append(not_supported(flow_path.child("metadata"), flow_logs.metadata, FLOW_LOG_METADATA))
        if flow_logs.flow_sampling is not None and not 0 <= flow_logs.flow_sampling <= 1:
            errors.append(
                invalid(flow_path.child("flowSampling"), flow_logs.flow_sampling, "must contain a valid value")
            )

    return errors


def validate_infrastructure_config_update(
    old_config: InfrastructureConfig, new_config: InfrastructureConfig, path: Path | None = None
) -> list[FieldError]:
    """Validate a change to an infrastructure configuration."""
    errors: list[FieldError] = []
    networks_path = (path or Path()).child("networks")
    vpc_path = networks_path.child("vpc")

    old_vpc = old_config.networks.vpc
    new_vpc = new_config.networks.vpc

    if old_vpc is not None and new_vpc is None:
        errors.extend(validate_immutable_field(new_vpc, old_vpc, vpc_path))

    if old_vpc is not None and new_vpc is not None:
        old_net, new_net = old_config.networks, new_config.networks
        errors.extend(validate_immutable_field(new_vpc.name, old_vpc.name, vpc_path.child("name")))
        errors.extend(
            validate_immutable_field(new_vpc.cloud_router, old_vpc.cloud_router, vpc_path.child("cloudRouter"))
        )
        errors.extend(validate_immutable_field(new_net.internal, old_net.internal, networks_path.child("internal")))
        errors.extend(validate_immutable_field(new_net.workers, old_net.workers, networks_path.child("workers")))
        errors.extend(validate_immutable_field(new_net.worker, old_net.worker, networks_path.child("worker")))

    return errors
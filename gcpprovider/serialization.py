"""Versioned wire format of the provider configuration and status types."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any, NamedTuple

import yaml

from gcpprovider.types import (
    GROUP_NAME,
    KNOWN_TYPES,
    VPC,
    CloudControllerManagerConfig,
    CloudNAT,
    CloudProfileConfig,
    CloudRouter,
    ControlPlaneConfig,
    FlowLogs,
    InfrastructureConfig,
    InfrastructureStatus,
    MachineImage,
    MachineImages,
    MachineImageVersion,
    NatIP,
    NatIPName,
    NetworkConfig,
    NetworkStatus,
    ServiceAccount,
    Subnet,
    SubnetPurpose,
    Volume,
    WorkerConfig,
    WorkerStatus,
)

VERSION = "v1alpha1"
API_VERSION = f"{GROUP_NAME}/{VERSION}"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class DecodeError(ValueError):
    """Raised when a document cannot be decoded into a known type."""


class _Omit(enum.Enum):
    NEVER = "never"
    NIL = "nil"
    EMPTY = "empty"


@dataclass(frozen=True)
class _ListOf:
    item: type


class _Field(NamedTuple):
    key: str
    attr: str
    kind: Any
    omit: _Omit = _Omit.NEVER


_STR = "string"
_INT32 = "int32"
_FLOAT = "float"
_BOOL_MAP = "boolmap"
_STR_LIST = "strlist"
_PURPOSE = "purpose"

_SCHEMAS: dict[type, tuple[_Field, ...]] = {
    MachineImageVersion: (
        _Field("version", "version", _STR),
        _Field("image", "image", _STR),
    ),
    MachineImages: (
        _Field("name", "name", _STR),
        _Field("versions", "versions", _ListOf(MachineImageVersion)),
    ),
    CloudProfileConfig: (
        _Field("machineImages", "machine_images", _ListOf(MachineImages)),
    ),
    CloudControllerManagerConfig: (
        _Field("featureGates", "feature_gates", _BOOL_MAP, _Omit.EMPTY),
    ),
    ControlPlaneConfig: (
        _Field("zone", "zone", _STR),
        _Field("cloudControllerManager", "cloud_controller_manager", CloudControllerManagerConfig, _Omit.NIL),
    ),
    CloudRouter: (
        _Field("name", "name", _STR, _Omit.EMPTY),
    ),
    VPC: (
        _Field("name", "name", _STR, _Omit.EMPTY),
        _Field("cloudRouter", "cloud_router", CloudRouter, _Omit.NIL),
    ),
    NatIPName: (
        _Field("name", "name", _STR),
    ),
    NatIP: (
        _Field("ip", "ip", _STR),
    ),
    CloudNAT: (
        _Field("minPortsPerVM", "min_ports_per_vm", _INT32, _Omit.NIL),
        _Field("natIPNames", "nat_ip_names", _ListOf(NatIPName), _Omit.EMPTY),
    ),
    FlowLogs: (
        _Field("aggregationInterval", "aggregation_interval", _STR, _Omit.NIL),
        _Field("flowSampling", "flow_sampling", _FLOAT, _Omit.NIL),
        _Field("metadata", "metadata", _STR, _Omit.NIL),
    ),
    NetworkConfig: (
        _Field("vpc", "vpc", VPC, _Omit.NIL),
        _Field("cloudNAT", "cloud_nat", CloudNAT, _Omit.NIL),
        _Field("internal", "internal", _STR, _Omit.NIL),
        _Field("worker", "worker", _STR),
        _Field("workers", "workers", _STR),
        _Field("flowLogs", "flow_logs", FlowLogs, _Omit.NIL),
    ),
    Subnet: (
        _Field("name", "name", _STR),
        _Field("purpose", "purpose", _PURPOSE),
    ),
    NetworkStatus: (
        _Field("vpc", "vpc", VPC),
        _Field("subnets", "subnets", _ListOf(Subnet)),
        _Field("natIPs", "nat_ips", _ListOf(NatIP), _Omit.EMPTY),
    ),
    InfrastructureConfig: (
        _Field("networks", "networks", NetworkConfig),
    ),
    InfrastructureStatus: (
        _Field("networks", "networks", NetworkStatus),
        _Field("serviceAccountEmail", "service_account_email", _STR),
    ),
    Volume: (
        _Field("interface", "local_ssd_interface", _STR, _Omit.NIL),
    ),
    ServiceAccount: (
        _Field("email", "email", _STR),
        _Field("scopes", "scopes", _STR_LIST),
    ),
    WorkerConfig: (
        _Field("volume", "volume", Volume, _Omit.NIL),
        _Field("serviceAccount", "service_account", ServiceAccount, _Omit.NIL),
    ),
    MachineImage: (
        _Field("name", "name", _STR),
        _Field("version", "version", _STR),
        _Field("image", "image", _STR),
    ),
    WorkerStatus: (
        _Field("machineImages", "machine_images", _ListOf(MachineImage), _Omit.EMPTY),
    ),
}

_TYPE_BY_KIND: dict[str, type] = {cls.__name__: cls for cls in KNOWN_TYPES}
_TYPE_META_KEYS = ("apiVersion", "kind")


class _StrictLoader(yaml.SafeLoader):
    """Safe loader that rejects duplicate mapping keys."""


def _construct_strict_mapping(loader: _StrictLoader, node: yaml.MappingNode, deep: bool = False) -> dict:
    loader.flatten_mapping(node)
    mapping: dict = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=True)
        try:
            seen = key in mapping
        except TypeError:
            raise yaml.constructor.ConstructorError(
                None, None, "found unhashable key", key_node.start_mark
            ) from None
        if seen:
            raise yaml.constructor.ConstructorError(
                None, None, f"duplicate key {key!r}", key_node.start_mark
            )
        mapping[key] = loader.construct_object(value_node, deep=True)
    return mapping


_StrictLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_strict_mapping
)


def _join(where: str, key: Any) -> str:
    return f"{where}.{key}" if where else str(key)


def _type_name(value: Any) -> str:
    return type(value).__name__


def _decode_value(kind: Any, value: Any, where: str) -> Any:
    if kind in (_STR, _PURPOSE):
        if not isinstance(value, str):
            raise DecodeError(f"{where}: expected a string, got {_type_name(value)}")
        if kind == _PURPOSE:
            try:
                return SubnetPurpose(value)
            except ValueError:
                return value
        return value
    if kind == _INT32:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError(f"{where}: expected an integer, got {_type_name(value)}")
        if not _INT32_MIN <= value <= _INT32_MAX:
            raise DecodeError(f"{where}: value {value} does not fit into a 32-bit integer")
        return value
    if kind == _FLOAT:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DecodeError(f"{where}: expected a number, got {_type_name(value)}")
        return float(value)
    if kind == _BOOL_MAP:
        if not isinstance(value, dict):
            raise DecodeError(f"{where}: expected a mapping, got {_type_name(value)}")
        gates: dict[str, bool] = {}
        for key, flag in value.items():
            if not isinstance(key, str):
                raise DecodeError(f"{where}: expected string keys, got {_type_name(key)}")
            if not isinstance(flag, bool):
                raise DecodeError(f"{_join(where, key)}: expected a boolean, got {_type_name(flag)}")
            gates[key] = flag
        return gates
    if kind == _STR_LIST:
        if not isinstance(value, list):
            raise DecodeError(f"{where}: expected a list, got {_type_name(value)}")
        items = []
        for position, item in enumerate(value):
            if item is None:
                items.append("")
            elif isinstance(item, str):
                items.append(item)
            else:
                raise DecodeError(f"{where}[{position}]: expected a string, got {_type_name(item)}")
        return items
    if isinstance(kind, _ListOf):
        if not isinstance(value, list):
            raise DecodeError(f"{where}: expected a list, got {_type_name(value)}")
        return [
            kind.item() if item is None else _decode_object(kind.item, item, f"{where}[{position}]")
            for position, item in enumerate(value)
        ]
    return _decode_object(kind, value, where)


def _decode_object(cls: type, value: Any, where: str, extra: tuple[str, ...] = ()) -> Any:
    if not isinstance(value, dict):
        raise DecodeError(f"{where or cls.__name__}: expected a mapping, got {_type_name(value)}")
    known = {spec.key: spec for spec in _SCHEMAS[cls]}
    kwargs: dict[str, Any] = {}
    for key, item in value.items():
        if key in extra:
            continue
        spec = known.get(key)
        if spec is None:
            raise DecodeError(f'unknown field "{_join(where, key)}"')
        if item is None:
            continue
        kwargs[spec.attr] = _decode_value(spec.kind, item, _join(where, key))
    return cls(**kwargs)


def _omitted(omit: _Omit, value: Any) -> bool:
    if omit is _Omit.NEVER:
        return False
    if value is None:
        return True
    if omit is _Omit.EMPTY:
        return isinstance(value, (str, list, tuple, dict)) and not value
    return False


def _encode_value(kind: Any, value: Any) -> Any:
    if value is None:
        return None
    if kind == _PURPOSE:
        return value.value if isinstance(value, enum.Enum) else value
    if kind == _FLOAT:
        return float(value)
    if kind == _BOOL_MAP:
        return dict(value)
    if kind == _STR_LIST:
        return list(value)
    if isinstance(kind, _ListOf):
        return [_encode_object(item) for item in value]
    if kind in (_STR, _INT32):
        return value
    return _encode_object(value)


def _encode_object(obj: Any) -> dict[str, Any]:
    try:
        fields = _SCHEMAS[type(obj)]
    except KeyError:
        raise TypeError(f"cannot encode object of type {_type_name(obj)}") from None
    out: dict[str, Any] = {}
    for spec in fields:
        value = getattr(obj, spec.attr)
        if _omitted(spec.omit, value):
            continue
        out[spec.key] = _encode_value(spec.kind, value)
    return out


def decode(data: bytes | str) -> Any:
    """Decode a YAML or JSON document of a known kind, rejecting unknown fields."""
    if isinstance(data, (bytes, bytearray)):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"document is not valid UTF-8: {exc}") from exc
    else:
        text = data
    try:
        doc = yaml.load(text, Loader=_StrictLoader)
    except yaml.YAMLError as exc:
        raise DecodeError(f"could not parse document: {exc}") from exc
    if doc is None:
        raise DecodeError("Object 'Kind' is missing in document")
    if not isinstance(doc, dict):
        raise DecodeError(f"expected a mapping at the top level, got {_type_name(doc)}")
    kind_name = doc.get("kind")
    if not isinstance(kind_name, str) or not kind_name:
        raise DecodeError("Object 'Kind' is missing in document")
    api_version = doc.get("apiVersion")
    cls = _TYPE_BY_KIND.get(kind_name)
    if api_version != API_VERSION or cls is None:
        raise DecodeError(f'no kind "{kind_name}" is registered for version "{api_version}"')
    return _decode_object(cls, doc, "", extra=_TYPE_META_KEYS)


def encode(obj: Any) -> bytes:
    """Encode a known object as a JSON document of the versioned API."""
    if type(obj) not in KNOWN_TYPES:
        raise TypeError(f"cannot encode object of type {_type_name(obj)}")
    doc: dict[str, Any] = {"kind": type(obj).__name__, "apiVersion": API_VERSION}
    doc.update(_encode_object(obj))
    return (json.dumps(doc, separators=(",", ":"), ensure_ascii=False) + "\n").encode("utf-8")


def _expect(obj: Any, cls: type) -> Any:
    if not isinstance(obj, cls):
        raise DecodeError(f"expected kind {cls.__name__}, got {type(obj).__name__}")
    return obj


def infrastructure_config_from_raw(raw: bytes | str | None) -> InfrastructureConfig:
    """Decode the provider config section of an infrastructure resource."""
    if raw is None:
        raise DecodeError("provider config is not set on the infrastructure resource")
    return _expect(decode(raw), InfrastructureConfig)


def cloud_profile_config_from_raw(raw: bytes | str | None, name: str) -> CloudProfileConfig | None:
    """Decode the provider config of the cloud profile called ``name``, if it has one."""
    if raw is None:
        return None
    try:
        return _expect(decode(raw), CloudProfileConfig)
    except DecodeError as exc:
        raise DecodeError(
            f"could not decode providerConfig of cloudProfile for '{name}': {exc}"
        ) from exc
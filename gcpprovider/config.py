"""Controller configuration of the GCP provider and how it is loaded."""

from __future__ import annotations

import argparse
import copy
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

import yaml

GROUP_NAME = "gcp.provider.extensions.config.gardener.cloud"
VERSION = "v1alpha1"
API_VERSION = f"{GROUP_NAME}/{VERSION}"
KIND = "ControllerConfiguration"

# Quantity syntax: a signed decimal number followed by an optional binary-SI,
# decimal-SI or exponent suffix.
_QUANTITY = re.compile(
    r"^[+-]?(\d+(\.\d*)?|\.\d+)"
    r"(Ki|Mi|Gi|Ti|Pi|Ei|[numkMGTPE]|[eE][+-]?\d+)?$"
)


class ConfigError(ValueError):
    """Raised when a controller configuration cannot be built or decoded."""


@dataclass
class ETCDStorage:
    """Storage settings for etcd-main volume claims."""

    class_name: str | None = None
    capacity: str | None = None


@dataclass
class ETCDBackup:
    """Backup settings for etcd."""

    schedule: str | None = None


@dataclass
class ETCD:
    """The etcd configuration."""

    storage: ETCDStorage = field(default_factory=ETCDStorage)
    backup: ETCDBackup = field(default_factory=ETCDBackup)


@dataclass
class ControllerConfiguration:
    """Configuration of the GCP provider controllers."""

    client_connection: dict[str, Any] | None = None
    etcd: ETCD = field(default_factory=ETCD)
    health_check_config: dict[str, Any] | None = None


def _mapping(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{where}: expected a mapping, got {type(value).__name__}")
    return value


def _string(value: Any, where: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{where}: expected a string, got {type(value).__name__}")
    return value


def _quantity(value: Any, where: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigError(f"{where}: expected a quantity, got {type(value).__name__}")
    text = value if isinstance(value, str) else str(value)
    if not _QUANTITY.match(text):
        raise ConfigError(f"{where}: quantities must match the regular expression '{_QUANTITY.pattern}'")
    return text


def _decode_etcd(value: Any) -> ETCD:
    if value is None:
        return ETCD()
    doc = _mapping(value, "etcd")
    storage_doc = doc.get("storage")
    backup_doc = doc.get("backup")
    storage = ETCDStorage()
    if storage_doc is not None:
        storage_doc = _mapping(storage_doc, "etcd.storage")
        storage = ETCDStorage(
            class_name=_string(storage_doc.get("className"), "etcd.storage.className"),
            capacity=_quantity(storage_doc.get("capacity"), "etcd.storage.capacity"),
        )
    backup = ETCDBackup()
    if backup_doc is not None:
        backup_doc = _mapping(backup_doc, "etcd.backup")
        backup = ETCDBackup(schedule=_string(backup_doc.get("schedule"), "etcd.backup.schedule"))
    return ETCD(storage=storage, backup=backup)


def _optional_mapping(value: Any, where: str) -> dict[str, Any] | None:
    if value is None:
        return None
    return dict(_mapping(value, where))


def load(data: bytes | str) -> ControllerConfiguration:
    """Decode a controller configuration document; empty input gives the defaults."""
    if not data:
        return ControllerConfiguration()
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigError(f"document is not valid UTF-8: {exc}") from exc
    try:
        doc = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ConfigError(f"could not parse document: {exc}") from exc
    if doc is None:
        raise ConfigError("Object 'Kind' is missing in document")
    doc = _mapping(doc, "document")
    kind_name = doc.get("kind")
    if not isinstance(kind_name, str) or not kind_name:
        raise ConfigError("Object 'Kind' is missing in document")
    api_version = doc.get("apiVersion")
    if api_version != API_VERSION or kind_name != KIND:
        raise ConfigError(f'no kind "{kind_name}" is registered for version "{api_version}"')
    return ControllerConfiguration(
        client_connection=_optional_mapping(doc.get("clientConnection"), "clientConnection"),
        etcd=_decode_etcd(doc.get("etcd")),
        health_check_config=_optional_mapping(doc.get("healthCheckConfig"), "healthCheckConfig"),
    )


def load_from_file(filename: str | Path) -> ControllerConfiguration:
    """Read and decode a controller configuration file."""
    return load(Path(filename).read_bytes())


@dataclass
class Config:
    """A completed controller configuration."""

    config: ControllerConfiguration

    def options(self) -> ControllerConfiguration:
        """Return an independent copy of the configuration."""
        return copy.deepcopy(self.config)

    def etcd_storage(self) -> ETCDStorage:
        """Return a copy of the etcd storage settings."""
        return copy.deepcopy(self.config.etcd.storage)

    def etcd_backup(self) -> ETCDBackup:
        """Return a copy of the etcd backup settings."""
        return copy.deepcopy(self.config.etcd.backup)

    def health_check_config(self, default: Any = None) -> Any:
        """Return the configured health check settings, or ``default`` when unset."""
        if self.config.health_check_config is not None:
            return copy.deepcopy(self.config.health_check_config)
        return default


@dataclass
class ConfigOptions:
    """Command line options that produce a controller configuration."""

    config_file_path: str = ""
    _config: Config | None = field(default=None, init=False, repr=False)

    def complete(self) -> None:
        """Load the configuration file named by the options."""
        if not self.config_file_path:
            raise ConfigError("config file path not set")
        self._config = Config(load_from_file(self.config_file_path))

    def completed(self) -> Config | None:
        """Return the completed configuration; ``None`` until ``complete`` succeeded."""
        return self._config

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Register ``--config-file`` on a parser, bound to these options."""
        options = self

        class _Store(argparse.Action):
            def __call__(
                self,
                parser: argparse.ArgumentParser,
                namespace: argparse.Namespace,
                values: str | Sequence[Any] | None,
                option_string: str | None = None,
            ) -> None:
                options.config_file_path = str(values)
                setattr(namespace, self.dest, values)

        parser.add_argument(
            "--config-file",
            dest="config_file_path",
            default=self.config_file_path,
            action=_Store,
            help="path to the controller manager configuration file",
        )
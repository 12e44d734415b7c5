"""CIDR ranges bound to field paths, and the checks between them."""

from __future__ import annotations

import ipaddress
import json
from typing import Union

from gcpprovider.field import FieldError, Path, invalid

_Interface = Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]
_Network = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def _parse(cidr: str) -> _Interface | None:
    _, sep, prefix = cidr.partition("/")
    if not sep or not (prefix.isascii() and prefix.isdigit()):
        return None
    try:
        return ipaddress.ip_interface(cidr)
    except ValueError:
        return None


class CIDR:
    """A CIDR string together with the field path it was given at."""

    __slots__ = ("cidr", "path", "_interface")

    def __init__(self, cidr: str, path: Path | None = None) -> None:
        self.cidr = cidr
        self.path = path
        self._interface = _parse(cidr)

    def __repr__(self) -> str:
        return f"CIDR({self.cidr!r}, {self.path!r})"

    @property
    def network(self) -> _Network | None:
        """The parsed network, or ``None`` when the CIDR does not parse."""
        return None if self._interface is None else self._interface.network

    @property
    def parse_error(self) -> str | None:
        """The parse error message, or ``None`` when the CIDR is valid."""
        if self._interface is None:
            return f"invalid CIDR address: {self.cidr}"
        return None

    def _label(self) -> str:
        name = "<nil>" if self.path is None else str(self.path)
        return f"{json.dumps(name, ensure_ascii=False)} ({json.dumps(self.cidr, ensure_ascii=False)})"

    def _comparable(self, other: CIDR | None) -> _Network | None:
        if other is None or other is self or self.network is None:
            return None
        return other.network

    def validate_not_overlap(self, *args: CIDR | None) -> list[FieldError]:
        """Return an error for every given range that overlaps this one."""
        errors: list[FieldError] = []
        own = self.network
        for other in args:
            other_net = self._comparable(other)
            if other_net is None or own is None:
                continue
            if other_net.network_address in own or own.network_address in other_net:
                errors.append(invalid(other.path, other.cidr, f"must not overlap with {self._label()}"))
        return errors

    def validate_subset(self, *args: CIDR | None) -> list[FieldError]:
        """Return an error for every given range that is not inside this one."""
        errors: list[FieldError] = []
        own = self.network
        for other in args:
            other_net = self._comparable(other)
            if other_net is None or own is None:
                continue
            if other_net.network_address not in own or other_net.broadcast_address not in own:
                errors.append(invalid(other.path, other.cidr, f"must be a subset of {self._label()}"))
        return errors


def validate_cidr_parse(*args: CIDR | None) -> list[FieldError]:
    """Return an error for every given CIDR that does not parse."""
    errors: list[FieldError] = []
    for cidr in args:
        if cidr is None:
            continue
        message = cidr.parse_error
        if message is not None:
            errors.append(invalid(cidr.path, cidr.cidr, message))
    return errors


def validate_cidr_is_canonical(path: Path | None, cidr: str) -> list[FieldError]:
    """Return an error if ``cidr`` parses but has host bits set."""
    if not cidr:
        return []
    interface = _parse(cidr)
    if interface is None:
        return []
    if interface.ip != interface.network.network_address:
        return [invalid(path, cidr, "must be valid canonical CIDR")]
    return []
"""Face URIs, face scopes and face states."""

from __future__ import annotations

import ipaddress
import os
import re
import socket
import stat
from contextlib import suppress
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

from ndnfwd.tlv import NdnError

_IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_DEV_PATTERN = re.compile(r"(?P<scheme>dev)://(?P<ifname>[A-Za-z0-9\-]+)")
_ETHERNET_PATTERN = re.compile(
    r"(?P<scheme>ether)://\[(?P<mac>(([0-9a-fA-F]){2}:){5}([0-9a-fA-F]){2}(?P<zone>\%[A-Za-z0-9])*)\]"
)
_FD_PATTERN = re.compile(r"(?P<scheme>fd)://(?P<fd>[0-9]+)")
_IPV4_PATTERN = re.compile(
    r"((25[0-4]|2[0-4][0-9]|1[0-9][0-9]|[0-9][0-9]|[0-9])\.){3}"
    r"(25[0-4]|2[0-4][0-9]|1[0-9][0-9]|[0-9][0-9]|[0-9])"
)
_MAC_PATTERN = re.compile(r"(([0-9a-fA-F]){2}:){5}([0-9a-fA-F]){2}")
_UDP_PATTERN = re.compile(
    r"(?P<scheme>udp[46]?)://\[?(?P<host>[0-9A-Za-z\:\.\-]+)"
    r"(%(?P<zone>[A-Za-z0-9\-]+))?\]?:(?P<port>[0-9]+)"
)
_UNIX_PATTERN = re.compile(r"(?P<scheme>unix)://(?P<path>[/\\A-Za-z0-9\:\.\-_]+)")
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_HEX_PATTERN = re.compile(r"[0-9a-fA-F]+")

_MAX_PORT = 0xFFFF
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_MAC_LENGTHS = (6, 8, 20)
_IPV6_LOOPBACK = ipaddress.IPv6Address("::1")


class Scope(IntEnum):
    """Whether a face leads to a local application or to another forwarder."""

    UNKNOWN = -1
    NON_LOCAL = 0
    LOCAL = 1


class State(IntEnum):
    """The operational state of a face."""

    UP = 0
    DOWN = 1
    ADMIN_DOWN = 2

    def __str__(self) -> str:
        return {State.UP: "Up", State.DOWN: "Down", State.ADMIN_DOWN: "AdminDown"}[self]


class UriType(IntEnum):
    """The kind of face a URI designates."""

    UNKNOWN = 0
    DEV = 1
    ETHERNET = 2
    FD = 3
    INTERNAL = 4
    NULL = 5
    UDP = 6
    UNIX = 7


class NotCanonicalError(NdnError):
    default_message = "URI could not be canonized"


def _parse_mac(text: str) -> bytes:
    """Parse a hardware address in colon, hyphen or dotted form."""
    if len(text) < 14:
        raise ValueError("hardware address too short")
    if text[2] in ":-":
        groups, width = text.split(text[2]), 2
        count = len(groups)
    elif text[4] == ".":
        groups, width = text.split("."), 4
        count = 2 * len(groups)
    else:
        raise ValueError("unrecognised hardware address format")
    if count not in _MAC_LENGTHS:
        raise ValueError("invalid hardware address length")
    if not all(len(group) == width and _HEX_PATTERN.fullmatch(group) for group in groups):
        raise ValueError("invalid hardware address digit")
    return bytes.fromhex("".join(groups))


def _format_mac(mac: bytes) -> str:
    return ":".join(f"{octet:02x}" for octet in mac)


def _parse_ip(text: str) -> Optional[_IPAddress]:
    if "%" in text:
        return None
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def _to4(ip: _IPAddress) -> Optional[ipaddress.IPv4Address]:
    if isinstance(ip, ipaddress.IPv4Address):
        return ip
    return ip.ipv4_mapped


def _is_loopback(ip: _IPAddress) -> bool:
    v4 = _to4(ip)
    if v4 is not None:
        return v4.is_loopback
    return ip == _IPV6_LOOPBACK


def _resolve(host: str) -> _IPAddress:
    if not host:
        raise NotCanonicalError()
    try:
        results = socket.getaddrinfo(host, None)
    except (OSError, UnicodeError, ValueError) as exc:
        raise NotCanonicalError() from exc
    if not results:
        raise NotCanonicalError()
    ip = _parse_ip(str(results[0][4][0]))
    if ip is None:
        raise NotCanonicalError()
    return ip


def _parse_int(text: str) -> Optional[int]:
    if not _INT_PATTERN.fullmatch(text):
        return None
    number = int(text)
    if number < _INT64_MIN or number > _INT64_MAX:
        return None
    return number


@dataclass
class FaceUri:
    """The URI of a face: a type, a scheme, a path and a port."""

    uri_type: UriType = UriType.UNKNOWN
    scheme: str = "unknown"
    path: str = ""
    port: int = 0

    @property
    def path_host(self) -> str:
        """The part of the path before any zone."""
        return self.path.split("%")[0]

    @property
    def path_zone(self) -> str:
        """The zone part of the path, or an empty string."""
        parts = self.path.split("%")
        return parts[1] if len(parts) >= 2 else ""

    def is_canonical(self) -> bool:
        """Return whether the URI is in canonical form."""
        kind = self.uri_type
        if kind == UriType.DEV:
            return self.scheme == "dev" and self.path != "" and self.port == 0
        if kind == UriType.ETHERNET:
            is_mac = _MAC_PATTERN.fullmatch(self.path) is not None
            return self.scheme == "ether" and is_mac and self.port == 0
        if kind == UriType.FD:
            fd = _parse_int(self.path)
            return self.scheme == "fd" and fd is not None and fd >= 0 and self.port == 0
        if kind == UriType.INTERNAL:
            return self.scheme == "internal" and self.path == "" and self.port == 0
        if kind == UriType.NULL:
            return self.scheme == "null" and self.path == "" and self.port == 0
        if kind == UriType.UDP:
            host = self.path_host
            ip = _parse_ip(host)
            if ip is None or self.port <= 0:
                return False
            looks_ipv4 = _IPV4_PATTERN.fullmatch(host) is not None
            return (self.scheme == "udp4" and _to4(ip) is not None) or (
                self.scheme == "udp6" and not looks_ipv4
            )
        if kind == UriType.UNIX:
            return self.scheme == "unix" and self.path != "" and self.port == 0
        return False

    def canonize(self) -> None:
        """Bring the URI into canonical form, raising NotCanonicalError if impossible."""
        kind = self.uri_type
        if kind in (UriType.DEV, UriType.FD):
            return
        if kind == UriType.ETHERNET:
            try:
                mac = _parse_mac(self.path.strip("[]"))
            except ValueError as exc:
                raise NotCanonicalError() from exc
            self.scheme = "ether"
            self.path = _format_mac(mac)
            self.port = 0
            return
        if kind == UriType.UDP:
            self._canonize_udp()
            return
        if kind == UriType.UNIX:
            self._canonize_unix()
            return
        raise NotCanonicalError()

    def _canonize_udp(self) -> None:
        host, zone = self.path, ""
        if "%" in self.path:
            host = self.path_host
            zone = "%" + self.path_zone
        ip = _parse_ip(host.strip("[]"))
        if ip is None:
            ip = _resolve(host)
        v4 = _to4(ip)
        if v4 is not None:
            self.scheme = "udp4"
            self.path = str(v4) + zone
        else:
            self.scheme = "udp6"
            self.path = str(ip) + zone

    def _canonize_unix(self) -> None:
        self.scheme = "unix"
        test_path = self.path if os.name == "nt" else "/" + self.path
        try:
            info = os.stat(test_path)
        except FileNotFoundError:
            pass
        except (OSError, ValueError) as exc:
            raise NotCanonicalError() from exc
        else:
            if stat.S_ISDIR(info.st_mode):
                raise NotCanonicalError()
        self.port = 0

    def _canonize_quietly(self) -> None:
        with suppress(NotCanonicalError):
            self.canonize()

    def scope(self) -> Scope:
        """Return the scope of the face the URI designates."""
        if not self.is_canonical():
            return Scope.UNKNOWN
        kind = self.uri_type
        if kind in (UriType.DEV, UriType.ETHERNET, UriType.NULL):
            return Scope.NON_LOCAL
        if kind == UriType.UDP:
            ip = _parse_ip(self.path)
            return Scope.LOCAL if ip is not None and _is_loopback(ip) else Scope.NON_LOCAL
        return Scope.LOCAL

    def __str__(self) -> str:
        kind = self.uri_type
        if kind == UriType.DEV:
            return f"dev://{self.path}"
        if kind == UriType.ETHERNET:
            return f"{self.scheme}://[{self.path}]"
        if kind == UriType.FD:
            return f"fd://{self.path}"
        if kind == UriType.INTERNAL:
            return "internal://"
        if kind == UriType.NULL:
            return "null://"
        if kind == UriType.UDP:
            if self.scheme == "udp6":
                return f"{self.scheme}://[{self.path}]:{self.port}"
            return f"{self.scheme}://{self.path}:{self.port}"
        if kind == UriType.UNIX:
            return f"{self.scheme}://{self.path}"
        return "unknown://"


def make_dev_face_uri(ifname: str) -> FaceUri:
    """Build the URI of a network-interface face."""
    uri = FaceUri(UriType.DEV, "dev", ifname, 0)
    uri._canonize_quietly()
    return uri


def make_ethernet_face_uri(mac: Union[bytes, str]) -> FaceUri:
    """Build the URI of an Ethernet face from a hardware address."""
    path = mac if isinstance(mac, str) else _format_mac(bytes(mac))
    uri = FaceUri(UriType.ETHERNET, "ether", path, 0)
    uri._canonize_quietly()
    return uri


def make_fd_face_uri(fd: int) -> FaceUri:
    """Build the URI of a file-descriptor face."""
    uri = FaceUri(UriType.FD, "fd", str(fd), 0)
    uri._canonize_quietly()
    return uri


def make_internal_face_uri() -> FaceUri:
    """Build the URI of the internal face."""
    return FaceUri(UriType.INTERNAL, "internal", "", 0)


def make_null_face_uri() -> FaceUri:
    """Build the URI of the null face."""
    uri = FaceUri(UriType.NULL, "null", "", 0)
    uri._canonize_quietly()
    return uri


def make_udp_face_uri(ip_version: int, host: str, port: int) -> FaceUri:
    """Build the URI of a UDP face."""
    uri = FaceUri(UriType.UDP, f"udp{ip_version}", host, port)
    uri._canonize_quietly()
    return uri


def make_unix_face_uri(path: str) -> FaceUri:
    """Build the URI of a Unix stream face."""
    uri = FaceUri(UriType.UNIX, "unix", path, 0)
    uri._canonize_quietly()
    return uri


def decode_uri_string(text: str) -> FaceUri:
    """Parse a face URI from a string, canonizing it where possible."""
    uri = FaceUri()
    scheme, separator, _ = text.partition(":")
    if not separator:
        return uri
    scheme = scheme.casefold()

    if scheme == "dev":
        uri.uri_type, uri.scheme = UriType.DEV, "dev"
        match = _DEV_PATTERN.fullmatch(text)
        if match is None:
            return uri
        uri.path = match["ifname"]
    elif scheme == "ether":
        uri.uri_type, uri.scheme = UriType.ETHERNET, "ether"
        match = _ETHERNET_PATTERN.fullmatch(text)
        if match is None:
            return uri
        uri.path = match["mac"]
    elif scheme == "fd":
        uri.uri_type, uri.scheme = UriType.FD, "fd"
        match = _FD_PATTERN.fullmatch(text)
        if match is None:
            return uri
        uri.path = match["fd"]
    elif scheme == "internal":
        uri.uri_type, uri.scheme = UriType.INTERNAL, "internal"
    elif scheme == "null":
        uri.uri_type, uri.scheme = UriType.NULL, "null"
    elif scheme in ("udp", "udp4", "udp6"):
        uri.uri_type, uri.scheme = UriType.UDP, "udp"
        match = _UDP_PATTERN.fullmatch(text)
        if match is None:
            return uri
        uri.path = match["host"]
        if match["zone"]:
            uri.path += "%" + match["zone"]
        port = int(match["port"])
        if port <= 0 or port > _MAX_PORT:
            return uri
        uri.port = port
    elif scheme == "unix":
        uri.uri_type, uri.scheme = UriType.UNIX, "unix"
        match = _UNIX_PATTERN.fullmatch(text)
        if match is None:
            return uri
        uri.path = match["path"]

    uri._canonize_quietly()
    return uri
"""Advertises this device on the local network and collects credentials from clients."""

from __future__ import annotations

import ipaddress
import logging
import socket
import struct
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from .server import BlobCredentials, DiscoveryConfig, DiscoveryError, DiscoveryServer

logger = logging.getLogger(__name__)

SERVICE_TYPE = "_spotify-connect._tcp"
TXT_RECORDS = ("VERSION=1.0", "CPath=/")

_MDNS_GROUP = "224.0.0.251"
_MDNS_PORT = 5353

_TYPE_A = 1
_TYPE_PTR = 12
_TYPE_TXT = 16
_TYPE_AAAA = 28
_TYPE_SRV = 33
_TYPE_ANY = 255
_CLASS_IN = 1
_CACHE_FLUSH = 0x8000
_RESPONSE_FLAGS = 0x8400
_TTL_HOST = 120
_TTL_OTHER = 4500

_LOCAL = (b"local",)
_SERVICE = tuple(label.encode() for label in SERVICE_TYPE.split(".")) + _LOCAL
_ENUMERATION = (b"_services", b"_dns-sd", b"_udp") + _LOCAL

IpAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def _encode_name(labels: Iterable[bytes]) -> bytes:
    out = bytearray()
    for label in labels:
        if not 0 < len(label) <= 63:
            raise DiscoveryError(f"invalid DNS label {label!r}")
        out.append(len(label))
        out += label
    out.append(0)
    return bytes(out)


def _read_name(packet: bytes, offset: int) -> tuple[tuple[bytes, ...], int]:
    """Read a possibly compressed name; labels come back lower-cased."""
    labels: list[bytes] = []
    end: int | None = None
    jumps = 0
    while True:
        if offset >= len(packet):
            raise ValueError("name runs past the packet")
        length = packet[offset]
        if length & 0xC0 == 0xC0:
            if offset + 1 >= len(packet):
                raise ValueError("truncated name pointer")
            if end is None:
                end = offset + 2
            offset = ((length & 0x3F) << 8) | packet[offset + 1]
            jumps += 1
            if jumps > 32:
                raise ValueError("name pointer loop")
            continue
        if length == 0:
            offset += 1
            break
        if offset + 1 + length > len(packet):
            raise ValueError("label runs past the packet")
        labels.append(packet[offset + 1 : offset + 1 + length].lower())
        offset += 1 + length
    return tuple(labels), end if end is not None else offset


def _lower(labels: tuple[bytes, ...]) -> tuple[bytes, ...]:
    return tuple(label.lower() for label in labels)


@dataclass(frozen=True)
class _ServiceRecords:
    """The DNS-SD records that describe this device, and answers to queries for them."""

    instance: str
    host: str
    port: int
    addresses: tuple[IpAddress, ...] = ()
    txt: tuple[str, ...] = TXT_RECORDS

    def __post_init__(self) -> None:
        for label in (self.instance, self.host):
            if not 0 < len(label.encode("utf-8")) <= 63:
                raise DiscoveryError(f"name {label!r} must be 1 to 63 bytes long")

    @property
    def instance_labels(self) -> tuple[bytes, ...]:
        return (self.instance.encode("utf-8"),) + _SERVICE

    @property
    def host_labels(self) -> tuple[bytes, ...]:
        return (self.host.encode("utf-8"),) + _LOCAL

    @staticmethod
    def _record(labels, rtype: int, ttl: int, rdata: bytes, unique: bool) -> bytes:
        rclass = _CLASS_IN | (_CACHE_FLUSH if unique else 0)
        return _encode_name(labels) + struct.pack(">HHIH", rtype, rclass, ttl, len(rdata)) + rdata

    def _ptr(self, goodbye: bool = False) -> bytes:
        ttl = 0 if goodbye else _TTL_OTHER
        return self._record(_SERVICE, _TYPE_PTR, ttl, _encode_name(self.instance_labels), False)

    def _srv(self, goodbye: bool = False) -> bytes:
        ttl = 0 if goodbye else _TTL_HOST
        rdata = struct.pack(">HHH", 0, 0, self.port) + _encode_name(self.host_labels)
        return self._record(self.instance_labels, _TYPE_SRV, ttl, rdata, True)

    def _txt(self, goodbye: bool = False) -> bytes:
        ttl = 0 if goodbye else _TTL_OTHER
        entries = [entry.encode("utf-8") for entry in self.txt]
        rdata = b"".join(bytes([len(entry)]) + entry for entry in entries)
        return self._record(self.instance_labels, _TYPE_TXT, ttl, rdata, True)

    def _address_records(self, qtype: int = _TYPE_ANY, goodbye: bool = False) -> list[bytes]:
        ttl = 0 if goodbye else _TTL_HOST
        records = []
        for address in self.addresses:
            rtype = _TYPE_A if address.version == 4 else _TYPE_AAAA
            if qtype in (rtype, _TYPE_ANY):
                records.append(self._record(self.host_labels, rtype, ttl, address.packed, True))
        return records

    def _records_for(self, labels: tuple[bytes, ...], qtype: int) -> list[bytes]:
        if labels == _ENUMERATION and qtype in (_TYPE_PTR, _TYPE_ANY):
            rdata = _encode_name(_SERVICE)
            return [self._record(_ENUMERATION, _TYPE_PTR, _TTL_OTHER, rdata, False)]
        if labels == _SERVICE and qtype in (_TYPE_PTR, _TYPE_ANY):
            return [self._ptr(), self._srv(), self._txt(), *self._address_records()]
        if labels == _lower(self.instance_labels):
            records = []
            if qtype in (_TYPE_SRV, _TYPE_ANY):
                records += [self._srv(), *self._address_records()]
            if qtype in (_TYPE_TXT, _TYPE_ANY):
                records.append(self._txt())
            return records
        if labels == _lower(self.host_labels):
            return self._address_records(qtype)
        return []

    @staticmethod
    def _packet(ident: int, records: list[bytes]) -> bytes:
        header = struct.pack(">HHHHHH", ident, _RESPONSE_FLAGS, 0, len(records), 0, 0)
        return header + b"".join(records)

    def answer(self, packet: bytes) -> bytes | None:
        """Return the response to a query packet, or ``None`` if it asks nothing of us."""
        if len(packet) < 12:
            return None
        try:
            ident, flags, qdcount = struct.unpack_from(">HHH", packet)
            if flags & 0x8000:
                return None
            offset = 12
            questions = []
            for _ in range(qdcount):
                labels, offset = _read_name(packet, offset)
                qtype, _qclass = struct.unpack_from(">HH", packet, offset)
                offset += 4
                questions.append((labels, qtype))
        except (struct.error, ValueError):
            return None

        records: list[bytes] = []
        for labels, qtype in questions:
            for record in self._records_for(labels, qtype):
                if record not in records:
                    records.append(record)
        if not records:
            return None
        return self._packet(ident, records)

    def announcement(self, goodbye: bool = False) -> bytes:
        """An unsolicited response holding every record; TTLs are zero for a goodbye."""
        records = [
            self._ptr(goodbye),
            self._srv(goodbye),
            self._txt(goodbye),
            *self._address_records(goodbye=goodbye),
        ]
        return self._packet(0, records)


class _MdnsResponder:
    """Answers multicast DNS queries for the service records in a background thread."""

    def __init__(self, records: _ServiceRecords, interfaces: list[ipaddress.IPv4Address]):
        self.records = records
        self.interfaces = interfaces
        self._sock: socket.socket | None = None
        self._thread: threading.Thread | None = None
        self._stop = threading.Event()

    def start(self) -> None:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            if hasattr(socket, "SO_REUSEPORT"):
                try:
                    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
                except OSError:
                    pass
            sock.bind(("", _MDNS_PORT))
            group = socket.inet_aton(_MDNS_GROUP)
            for interface in self.interfaces or [ipaddress.IPv4Address("0.0.0.0")]:
                sock.setsockopt(
                    socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, group + interface.packed
                )
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 255)
            sock.settimeout(0.5)
        except OSError as exc:
            sock.close()
            raise DiscoveryError(f"Setting up dns-sd failed: {exc}") from exc
        self._sock = sock
        self._thread = threading.Thread(target=self._serve, name="discovery-mdns", daemon=True)
        self._thread.start()
        self._send(self.records.announcement(), (_MDNS_GROUP, _MDNS_PORT))

    def _send(self, data: bytes, address: tuple[str, int]) -> None:
        if self._sock is None:
            return
        try:
            self._sock.sendto(data, address)
        except OSError as exc:
            logger.warning("could not send mDNS response: %s", exc)

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                data, source = self._sock.recvfrom(9000)
            except socket.timeout:
                continue
            except OSError:
                break
            reply = self.records.answer(data)
            if reply is None:
                continue
            # queries from a port other than 5353 get a direct unicast reply
            target = (_MDNS_GROUP, _MDNS_PORT) if source[1] == _MDNS_PORT else source
            self._send(reply, target)

    def close(self) -> None:
        if self._sock is None:
            return
        self._stop.set()
        self._send(self.records.announcement(goodbye=True), (_MDNS_GROUP, _MDNS_PORT))
        if self._thread is not None:
            self._thread.join()
        self._sock.close()
        self._sock = None
        self._thread = None


def _local_addresses() -> list[IpAddress]:
    try:
        infos = socket.getaddrinfo(socket.gethostname(), None)
    except OSError:
        infos = []
    found: list[IpAddress] = []
    for info in infos:
        address = ipaddress.ip_address(info[4][0].split("%")[0])
        if not address.is_loopback and address not in found:
            found.append(address)
    return found or [ipaddress.IPv4Address("127.0.0.1")]


def _host_label() -> str:
    return socket.gethostname().split(".")[0] or "spotlink"


class Discovery:
    """A running discovery service; iterating over it yields received credentials."""

    def __init__(self, server: DiscoveryServer, responder: Any) -> None:
        self.server = server
        self._responder = responder

    @classmethod
    def builder(cls, device_id: str, client_id: str, keys: Any) -> "Builder":
        """Start a builder for a device with the given ids and key exchange."""
        return Builder(device_id, client_id, keys)

    @property
    def port(self) -> int:
        return self.server.port

    def next_credentials(self, timeout: float | None = None) -> BlobCredentials:
        """Wait for the next credentials; raises TimeoutError if none arrive in time."""
        return self.server.next_credentials(timeout)

    def __iter__(self) -> Iterator[BlobCredentials]:
        return iter(self.server)

    def close(self) -> None:
        """Withdraw the advertisement and stop the HTTP server."""
        self._responder.close()
        self.server.close()

    def __enter__(self) -> "Discovery":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class Builder:
    """Collects the settings of a discovery service before it is launched."""

    def __init__(self, device_id: str, client_id: str, keys: Any) -> None:
        self.config = DiscoveryConfig(device_id=device_id, client_id=client_id)
        self.keys = keys
        self.listen_port = 0
        self.addresses: list[IpAddress] = []

    def name(self, name: str) -> "Builder":
        """Set the name shown to clients."""
        self.config.name = name
        return self

    def device_type(self, device_type: str) -> "Builder":
        """Set the device type clients show as an icon."""
        self.config.device_type = str(device_type)
        return self

    def zeroconf_ip(self, addresses: Iterable[Any]) -> "Builder":
        """Restrict advertising to these addresses; empty means all interfaces."""
        self.addresses = [ipaddress.ip_address(address) for address in addresses]
        return self

    def port(self, port: int) -> "Builder":
        """Set the HTTP port; 0 picks any free port."""
        if not 0 <= port <= 0xFFFF:
            raise DiscoveryError(f"invalid port {port}")
        self.listen_port = port
        return self

    def launch(self) -> Discovery:
        """Start the HTTP server and advertise it over multicast DNS."""
        server = DiscoveryServer(self.config, self.keys, self.listen_port)
        port = server.start()
        try:
            records = _ServiceRecords(
                instance=self.config.name,
                host=_host_label(),
                port=port,
                addresses=tuple(self.addresses or _local_addresses()),
            )
            interfaces = [a for a in self.addresses if isinstance(a, ipaddress.IPv4Address)]
            responder = _MdnsResponder(records, interfaces)
            responder.start()
        except BaseException:
            server.close()
            raise
        return Discovery(server, responder)
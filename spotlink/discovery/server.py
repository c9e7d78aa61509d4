"""HTTP endpoint that answers discovery requests from clients on the local network."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import logging
import queue
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import parse_qsl, urlsplit

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

logger = logging.getLogger(__name__)

_IV_LENGTH = 16
_MAC_LENGTH = 20


class DiscoveryError(Exception):
    """Setting up discovery or handling a discovery request failed."""


class ParamsError(DiscoveryError):
    """A required request parameter is missing."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Missing params for key {key}")
        self.key = key


class HmacError(DiscoveryError):
    """The encrypted blob is too short to hold its checksum."""

    def __init__(self, data: bytes) -> None:
        super().__init__(f"Creating SHA1 HMAC failed for base key {list(data)!r}")
        self.data = bytes(data)


@dataclass
class DiscoveryConfig:
    """What this device reports about itself to discovering clients."""

    device_id: str
    client_id: str
    name: str = "Spotlink"
    device_type: str = "Speaker"
    library_version: str = "0.1.0"


@dataclass(frozen=True)
class BlobCredentials:
    """Credentials received from a client: the decrypted blob for a user."""

    username: str
    auth_data: bytes
    device_id: str


def decrypt_blob(encrypted_blob: bytes, shared_key: bytes) -> bytes | None:
    """Check and decrypt a blob laid out as IV, ciphertext and SHA-1 HMAC.

    Returns ``None`` when the checksum does not match.
    """
    if len(encrypted_blob) < _IV_LENGTH + _MAC_LENGTH:
        raise HmacError(encrypted_blob)
    iv = encrypted_blob[:_IV_LENGTH]
    encrypted = encrypted_blob[_IV_LENGTH:-_MAC_LENGTH]
    cksum = encrypted_blob[-_MAC_LENGTH:]

    base_key = hashlib.sha1(shared_key).digest()[:16]
    checksum_key = hmac.new(base_key, b"checksum", hashlib.sha1).digest()
    encryption_key = hmac.new(base_key, b"encryption", hashlib.sha1).digest()

    mac = hmac.new(checksum_key, encrypted, hashlib.sha1).digest()
    if not hmac.compare_digest(mac, cksum):
        return None

    decryptor = Cipher(algorithms.AES(encryption_key[:16]), modes.CTR(iv)).decryptor()
    return decryptor.update(encrypted) + decryptor.finalize()


def _param(params: Mapping[str, str], key: str) -> str:
    try:
        return params[key]
    except KeyError:
        raise ParamsError(key) from None


def _b64decode(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DiscoveryError(f"invalid base64 data: {exc}") from exc


class RequestHandler:
    """Answers getInfo and addUser requests.

    ``keys`` provides ``public_key()`` and ``shared_secret(remote_key)`` for the
    key exchange with the client.
    """

    def __init__(self, config: DiscoveryConfig, keys: Any) -> None:
        self.config = config
        self.keys = keys
        self.username: str | None = None
        self.credentials: queue.Queue[BlobCredentials] = queue.Queue()

    def handle_get_info(self) -> dict[str, Any]:
        """Describe this device."""
        return {
            "status": 101,
            "statusString": "OK",
            "spotifyError": 0,
            "version": "2.9.0",
            "deviceID": self.config.device_id,
            "deviceType": self.config.device_type,
            "remoteName": self.config.name,
            "publicKey": base64.b64encode(self.keys.public_key()).decode("ascii"),
            "brandDisplayName": "spotlink",
            "modelDisplayName": "spotlink",
            "libraryVersion": self.config.library_version,
            "resolverVersion": "1",
            "groupStatus": "NONE",
            # "accesstoken" is documented, but clients then fail to connect
            "tokenType": "default",
            "clientID": self.config.client_id,
            "productID": 0,
            "scope": "streaming",
            "availability": "",
            "supported_drm_media_formats": [],
            "supported_capabilities": 1,
            "accountReq": "PREMIUM",
            "activeUser": self.username or "",
        }

    def handle_add_user(self, params: Mapping[str, str]) -> dict[str, Any]:
        """Decrypt the credentials a client sends and queue them."""
        username = _param(params, "userName")
        encrypted_blob = _param(params, "blob")
        client_key = _param(params, "clientKey")

        blob = _b64decode(encrypted_blob)
        shared_key = self.keys.shared_secret(_b64decode(client_key))

        decrypted = decrypt_blob(blob, shared_key)
        if decrypted is None:
            logger.warning("Login error for user %r: MAC mismatch", username)
            return {"status": 102, "spotifyError": 1, "statusString": "ERROR-MAC"}

        self.credentials.put(BlobCredentials(username, decrypted, self.config.device_id))
        return {"status": 101, "spotifyError": 0, "statusString": "OK"}

    def handle(self, method: str, query: str, body: bytes) -> tuple[int, bytes]:
        """Route a request; returns the HTTP status and the response body."""
        params = dict(parse_qsl(query, keep_blank_values=True))
        if method != "GET":
            logger.debug("%s %r", method, params)
        params.update(parse_qsl(body.decode("utf-8", errors="replace"), keep_blank_values=True))

        action = params.get("action")
        if method == "GET" and action == "getInfo":
            result = self.handle_get_info()
        elif method == "POST" and action == "addUser":
            result = self.handle_add_user(params)
        else:
            return 404, b""
        return 200, json.dumps(result, separators=(",", ":")).encode("utf-8")


class _HttpRequestHandler(BaseHTTPRequestHandler):
    def _dispatch(self) -> None:
        query = urlsplit(self.path).query
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            length = 0
        body = self.rfile.read(length) if length > 0 else b""
        try:
            status, payload = self.server.request_handler.handle(self.command, query, body)
        except Exception as exc:  # noqa: BLE001 - any failure ends this request only
            logger.error("could not handle discovery request: %s", exc)
            status, payload = 500, b""
        self.send_response(status)
        if payload:
            self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = do_OPTIONS = _dispatch

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.debug(format, *args)


class _HttpServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], request_handler: RequestHandler) -> None:
        self.request_handler = request_handler
        super().__init__(address, _HttpRequestHandler)


class DiscoveryServer:
    """Serves discovery requests in a background thread and collects credentials."""

    def __init__(
        self, config: DiscoveryConfig, keys: Any, port: int = 0, host: str = "0.0.0.0"
    ) -> None:
        self.handler = RequestHandler(config, keys)
        self.host = host
        self.port = port
        self._httpd: _HttpServer | None = None
        self._thread: threading.Thread | None = None

    def start(self) -> int:
        """Bind and start serving; returns the port actually listened on."""
        if self._httpd is not None:
            return self.port
        try:
            httpd = _HttpServer((self.host, self.port), self.handler)
        except OSError as exc:
            raise DiscoveryError(f"Setting up the HTTP server failed: {exc}") from exc
        self._httpd = httpd
        self.port = httpd.server_address[1]
        self._thread = threading.Thread(
            target=httpd.serve_forever, name="discovery-http", daemon=True
        )
        self._thread.start()
        logger.debug("Zeroconf server listening on %s:%d", self.host, self.port)
        return self.port

    def close(self) -> None:
        """Stop serving and release the socket."""
        if self._httpd is None:
            return
        logger.debug("Shutting down discovery server")
        self._httpd.shutdown()
        self._httpd.server_close()
        if self._thread is not None:
            self._thread.join()
        self._httpd = None
        self._thread = None

    def next_credentials(self, timeout: float | None = None) -> BlobCredentials:
        """Wait for the next credentials; raises TimeoutError if none arrive in time."""
        try:
            return self.handler.credentials.get(timeout=timeout)
        except queue.Empty:
            raise TimeoutError("no credentials received") from None

    def __iter__(self) -> Iterator[BlobCredentials]:
        while True:
            yield self.next_credentials()

    def __enter__(self) -> "DiscoveryServer":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
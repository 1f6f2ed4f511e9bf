"""HTTP 传输层：带证书公钥固定的异步 HTTP 客户端。

HTTP transport using httpx for async requests.

Provides:
- Connection options with explicit defaults
- Authentication and tenant header management
- TLS public-key pinning (see eventline.transport.pinning)
- Response classification into decoded values or RequestError
"""

from __future__ import annotations

import json
import ssl
import time
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Literal

import httpx

from eventline.errors import ErrorCode, RequestError
from eventline.telemetry import get_logger
from eventline.transport.auth import get_auth_header, resolve_token
from eventline.transport.pinning import (
    PUBLIC_KEY_PIN_SET,
    PinnedHTTPTransport,
    create_ssl_context,
)

logger = get_logger("eventline.transport")

DEFAULT_HOST = "api.eventline.net"
DEFAULT_PORT = 443
DEFAULT_SCHEME = "https"
DEFAULT_TIMEOUT = 30.0

PROJECT_ID_HEADER = "X-Eventline-Project-Id"

Verb = Literal["GET", "POST", "PUT", "DELETE"]
VERBS: frozenset[str] = frozenset({"GET", "POST", "PUT", "DELETE"})


_UA_VERSION: str | None = None


def _get_ua_version() -> str:
    """Get package version for User-Agent (cached)."""
    global _UA_VERSION
    if _UA_VERSION is None:
        try:
            _UA_VERSION = version("eventline")
        except PackageNotFoundError:
            _UA_VERSION = "0.1.0"
    return _UA_VERSION


@dataclass(frozen=True)
class ClientOptions:
    """Connection options for the Eventline API.

    Attributes:
        project_id: Project sent in the X-Eventline-Project-Id header
        host: API host name
        port: API port
        scheme: "https", or "http" for local servers (no pinning)
        token: API token; EVCLI_API_KEY is used when omitted
        timeout: Request timeout in seconds
        pins: Accepted public key fingerprints
        ca_file: CA bundle path; the certifi bundle is used when omitted
    """

    project_id: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    scheme: str = DEFAULT_SCHEME
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    pins: tuple[str, ...] = PUBLIC_KEY_PIN_SET
    ca_file: str | None = None

    def __post_init__(self) -> None:
        if not self.project_id:
            raise ValueError("project_id is required")
        if self.scheme not in ("http", "https"):
            raise ValueError(f"unsupported scheme {self.scheme!r}")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        # Accept any iterable of pins but store an immutable tuple.
        object.__setattr__(self, "pins", tuple(self.pins))

    @property
    def base_url(self) -> str:
        """Base address of the API, ``scheme://host:port``."""
        return f"{self.scheme}://{self.host}:{self.port}"


def is_json_media_type(content_type: str | None) -> bool:
    """Check whether a Content-Type header denotes JSON, ignoring parameters."""
    if not content_type:
        return False
    return content_type.split(";", 1)[0].strip().lower() == "application/json"


def classify_response(status: int | None, content_type: str | None, body: str) -> Any:
    """Turn a complete HTTP response into a decoded value.

    Args:
        status: HTTP status code
        content_type: Value of the Content-Type header
        body: Response body as text

    Returns:
        The parsed JSON value for JSON responses, the raw text otherwise

    Raises:
        RequestError: When the status is not 2xx or a JSON body is malformed
    """
    succeeded = status is not None and 200 <= status < 300

    if is_json_media_type(content_type):
        try:
            data = json.loads(body)
        except ValueError:
            raise RequestError(status, ErrorCode.INVALID_JSON, body, "invalid json body") from None

        if succeeded:
            return data

        fields = data if isinstance(data, dict) else {}
        code = fields.get("code")
        error_data = fields.get("data")
        message = fields.get("error")
        raise RequestError(
            status,
            code if isinstance(code, str) else ErrorCode.UNKNOWN_ERROR,
            error_data if error_data is not None else {},
            message if message is None or isinstance(message, str) else str(message),
        )

    if succeeded:
        return body
    raise RequestError(status, ErrorCode.UNKNOWN_ERROR, body)


def _caused_by(exc: BaseException, kind: type[BaseException]) -> bool:
    """Walk the exception chain looking for an instance of ``kind``."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, kind):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


class Client:
    """Authenticated client for the Eventline API.

    A client is a callable performing exactly one HTTP round trip per call,
    with no retry. It holds no connection between calls.

    Example:
        >>> client = create_client(ClientOptions(project_id="42"))
        >>> account = await client("GET", "/v0/accounts/id/42")
    """

    def __init__(
        self,
        options: ClientOptions,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            options: Connection options
            transport: Transport used instead of the pinned one, mainly for
                tests; it is closed at the end of every call, so it must
                tolerate repeated closing (httpx.MockTransport does)
        """
        self._options = options
        self._base_url = httpx.URL(options.base_url)
        self._timeout = httpx.Timeout(options.timeout)
        self._transport = transport

        self._ssl_context = None
        if transport is None and options.scheme == "https":
            self._ssl_context = create_ssl_context(options.ca_file)

        self._headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": f"eventline-sdk-python/{_get_ua_version()}",
            PROJECT_ID_HEADER: options.project_id,
        }
        self._headers.update(get_auth_header(resolve_token(options.token)))

    @property
    def options(self) -> ClientOptions:
        """Connection options the client was built with."""
        return self._options

    @property
    def base_url(self) -> str:
        """Base address requests are resolved against."""
        return str(self._base_url)

    @property
    def headers(self) -> dict[str, str]:
        """Default request headers (copy)."""
        return dict(self._headers)

    def _make_transport(self) -> httpx.AsyncBaseTransport:
        if self._transport is not None:
            return self._transport
        if self._ssl_context is not None:
            return PinnedHTTPTransport(self._ssl_context, self._options.pins)
        return httpx.AsyncHTTPTransport(
            trust_env=False,
            limits=httpx.Limits(max_connections=1, max_keepalive_connections=0),
        )

    async def __call__(self, verb: Verb, path: str, body: str | None = None) -> Any:
        return await self.request(verb, path, body)

    async def request(self, verb: Verb, path: str, body: str | None = None) -> Any:
        """Perform one API request.

        Args:
            verb: HTTP method (GET, POST, PUT, DELETE)
            path: Path, with optional query string, relative to the base URL
            body: Serialized JSON body

        Returns:
            Decoded response value

        Raises:
            RequestError: On any failure, HTTP-level or transport-level
        """
        if verb not in VERBS:
            raise ValueError(f"unsupported HTTP verb {verb!r}")

        url = self._base_url.join(path)
        headers = dict(self._headers)
        content = None
        if body is not None:
            content = body.encode("utf-8")
            headers["Content-Length"] = str(len(content))

        logger.debug("Request started", verb=verb, path=path)
        started = time.perf_counter()

        try:
            result = await self._send(verb, url, headers, content)
        except RequestError as e:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
            log = logger.warning if e.is_transport_error else logger.debug
            log(
                "Request failed",
                verb=verb,
                path=path,
                status=e.status,
                code=e.code,
                elapsed_ms=elapsed_ms,
            )
            raise

        logger.debug(
            "Request succeeded",
            verb=verb,
            path=path,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return result

    async def _send(
        self,
        verb: str,
        url: httpx.URL,
        headers: dict[str, str],
        content: bytes | None,
    ) -> Any:
        target = str(url)
        async with httpx.AsyncClient(
            transport=self._make_transport(),
            timeout=self._timeout,
            trust_env=False,
        ) as http:
            try:
                async with http.stream(verb, url, headers=headers, content=content) as response:
                    try:
                        await response.aread()
                    except (httpx.RemoteProtocolError, httpx.ReadError) as e:
                        raise RequestError(
                            None, ErrorCode.INCOMPLETE_RESPONSE, {}, "incomplete response"
                        ) from e

                    return classify_response(
                        response.status_code,
                        response.headers.get("content-type"),
                        response.text,
                    )
            except httpx.TimeoutException as e:
                raise RequestError(
                    None,
                    ErrorCode.TIMEOUT,
                    {"url": target},
                    f"request timed out after {self._options.timeout} seconds",
                ) from e
            except httpx.ConnectError as e:
                code = ErrorCode.TLS_ERROR if _caused_by(e, ssl.SSLError) else ErrorCode.CONNECTION_ERROR
                raise RequestError(None, code, {"url": target}, str(e) or "connection failed") from e
            except httpx.HTTPError as e:
                raise RequestError(
                    None, ErrorCode.TRANSPORT_ERROR, {"url": target}, str(e) or type(e).__name__
                ) from e


def create_client(
    options: ClientOptions | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    **fields: Any,
) -> Client:
    """Create a client bound to a set of connection options.

    Args:
        options: Connection options; built from ``fields`` when omitted
        transport: Optional replacement transport (see Client)
        **fields: ClientOptions fields, e.g. ``project_id="42"``

    Returns:
        Client callable
    """
    if options is None:
        options = ClientOptions(**fields)
    elif fields:
        raise TypeError("pass either options or option fields, not both")
    return Client(options, transport=transport)

from __future__ import annotations

import codecs
import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlencode

import requests

from connectors.utils import new_session

from .config import ConnectionParams
from .constants import LOGGED_PARAM_KEYS
from .errors import RemoteError, TransportError
from .events import debug, error, warn

SessionFactory = Callable[[], requests.Session]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"
DEFAULT_CHARSET = "utf-8"


def _identity(data: Any) -> Any:
    return data


def sanitize_params_for_logging(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    params = params or {}
    safe: Dict[str, Any] = {"param_keys": sorted(str(k) for k in params.keys())}
    for key in LOGGED_PARAM_KEYS:
        if key in params:
            safe[key] = str(params[key])
    return safe


def guess_charset(content_type: Optional[str]) -> str:
    """
    Codec name from the `charset` parameter of a Content-Type header.

    Falls back to utf-8 when the header is missing, has no charset, or names
    something Python cannot decode text with (unknown names, and byte-to-byte
    codecs such as base64 or rot13).
    """
    if not content_type:
        return DEFAULT_CHARSET

    for part in content_type.split(";")[1:]:
        key, sep, value = part.strip().partition("=")
        if not sep or key.strip().lower() != "charset":
            continue
        name = value.strip().strip("\"'")
        try:
            codec = codecs.lookup(name)
            b"".decode(codec.name)  # LookupError for codecs that are not text encodings
        except LookupError:
            warn("http.charset.fallback", charset=name, fallback=DEFAULT_CHARSET)
            return DEFAULT_CHARSET
        return codec.name
    return DEFAULT_CHARSET


def decode_body(content: bytes, content_type: Optional[str]) -> Any:
    """Bytes -> JSON value. Raises ValueError (UnicodeDecodeError / JSONDecodeError) on bad bodies."""
    text = content.decode(guess_charset(content_type))
    return json.loads(text)


@dataclass(frozen=True)
class RestRequest:
    """
    One logical exchange.

    method: "GET" (params, if any, go into the query) or "POST" (params are form-encoded into the body)
    path: relative to the api url
    decode: JSON value -> typed result; ValueError/TypeError/KeyError mean a malformed response
    """

    method: str
    path: str
    params: Optional[Dict[str, str]] = None
    decode: Callable[[Any], Any] = _identity
    stream: Optional[str] = None


class RestDelegate:
    """
    Retrying transport for read-only calls.

    Every non-2xx status is treated as transient: the whole exchange is re-issued
    on a fresh session after `retry_interval_s`, up to `retries` attempts in total,
    then RemoteError is raised. Connection failures and malformed bodies raise
    TransportError immediately.

    POSTs are retried too because the listing/search endpoints are reads that
    use POST for parameter size. This is not a generic idempotent-retry layer:
    routing a mutating call through it gives at-least-once delivery.
    """

    def __init__(self, cfg: ConnectionParams, *, session_factory: Optional[SessionFactory] = None) -> None:
        self._cfg = cfg
        self._base = cfg.api_url.rstrip("/") + "/"
        self._session_factory = session_factory or self._new_session

    @property
    def config(self) -> ConnectionParams:
        return self._cfg

    def _new_session(self) -> requests.Session:
        return new_session(
            user_agent=self._cfg.user_agent,
            proxy_uri=self._cfg.proxy_uri,
            proxy_user=self._cfg.proxy_user,
            proxy_password=self._cfg.proxy_password,
        )

    def url_for(self, path: str) -> str:
        return self._base + path.lstrip("/")

    def get(self, path: str, decode: Callable[[Any], Any] = _identity, *, stream: Optional[str] = None) -> Any:
        return self.execute(RestRequest("GET", path, decode=decode, stream=stream))

    def post(
        self,
        path: str,
        params: Optional[Dict[str, str]] = None,
        decode: Callable[[Any], Any] = _identity,
        *,
        stream: Optional[str] = None,
    ) -> Any:
        return self.execute(RestRequest("POST", path, params=dict(params or {}), decode=decode, stream=stream))

    def execute(self, request: RestRequest) -> Any:
        url = self.url_for(request.path)
        remaining = self._cfg.retries
        delay = self._cfg.retry_interval_s
        attempt = 0

        while True:
            attempt += 1
            remaining -= 1
            try:
                return self._exchange(request, url, attempt)
            except RemoteError as e:
                if remaining <= 0:
                    error(
                        "http.request.error",
                        stream=request.stream,
                        method=request.method,
                        url=url,
                        attempt=attempt,
                        status=e.status,
                        reason=e.reason,
                    )
                    raise
                warn(
                    "http.request.retry",
                    stream=request.stream,
                    method=request.method,
                    url=url,
                    attempt=attempt,
                    status=e.status,
                    reason=e.reason,
                    sleep_s=delay,
                )
                time.sleep(delay)

    def _send(self, session: requests.Session, request: RestRequest, url: str) -> requests.Response:
        timeout = (self._cfg.timeout_s, self._cfg.timeout_s)
        if request.method.upper() == "POST":
            return session.request(
                "POST",
                url,
                data=urlencode(request.params or {}),
                headers={"Content-Type": FORM_CONTENT_TYPE},
                timeout=timeout,
            )
        return session.request(request.method.upper(), url, params=request.params or None, timeout=timeout)

    def _exchange(self, request: RestRequest, url: str, attempt: int) -> Any:
        debug(
            "http.request.start",
            stream=request.stream,
            method=request.method,
            url=url,
            attempt=attempt,
            **sanitize_params_for_logging(request.params),
        )
        t0 = time.monotonic()

        with self._session_factory() as session:
            try:
                resp = self._send(session, request, url)
            except requests.RequestException as e:
                error(
                    "http.request.error",
                    stream=request.stream,
                    method=request.method,
                    url=url,
                    attempt=attempt,
                    error_type=type(e).__name__,
                    error=str(e)[:1000],
                )
                raise TransportError(f"{request.method} {url} failed: {e}", cause=e) from e

            try:
                elapsed_ms = int((time.monotonic() - t0) * 1000)
                if not 200 <= resp.status_code < 300:
                    raise RemoteError(resp.status_code, resp.reason or "")

                try:
                    # requests/urllib3 already inflated gzip bodies here
                    data = decode_body(resp.content, resp.headers.get("Content-Type"))
                    result = request.decode(data)
                except (requests.RequestException, ValueError, TypeError, KeyError) as e:
                    error(
                        "http.request.decode_error",
                        stream=request.stream,
                        method=request.method,
                        url=url,
                        attempt=attempt,
                        status=resp.status_code,
                        error_type=type(e).__name__,
                        error=str(e)[:1000],
                    )
                    raise TransportError(f"Malformed response from {url}: {e}", cause=e) from e

                size_info: Dict[str, Any] = {}
                if isinstance(data, list):
                    size_info["items_count"] = len(data)
                elif isinstance(data, dict):
                    size_info["keys_count"] = len(data)
                debug(
                    "http.request.ok",
                    stream=request.stream,
                    method=request.method,
                    url=url,
                    attempt=attempt,
                    status=resp.status_code,
                    elapsed_ms=elapsed_ms,
                    **size_info,
                )
                return result
            finally:
                resp.close()

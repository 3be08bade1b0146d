"""Scripted stand-ins for requests.Session / requests.Response."""
from __future__ import annotations

import gzip
import io
import json
from typing import Any, Dict, List, Optional, Union

import requests
from requests.structures import CaseInsensitiveDict
from urllib3.response import HTTPResponse


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        body: Union[bytes, str, Any] = b"[]",
        *,
        reason: str = "OK",
        headers: Optional[Dict[str, str]] = None,
    ):
        self.status_code = status_code
        self.reason = reason
        self.headers = CaseInsensitiveDict(headers or {"Content-Type": "application/json"})
        if isinstance(body, bytes):
            self.content = body
        elif isinstance(body, str):
            self.content = body.encode("utf-8")
        else:
            self.content = json.dumps(body).encode("utf-8")
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeSession:
    def __init__(self, owner: "ScriptedSessions"):
        self._owner = owner
        self.closed = False

    def __enter__(self) -> "FakeSession":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.closed = True

    def request(self, method: str, url: str, **kwargs: Any) -> Any:
        self._owner.calls.append({"method": method, "url": url, **kwargs})
        if not self._owner.outcomes:
            raise AssertionError(f"unexpected request: {method} {url}")
        outcome = self._owner.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        self._owner.responses.append(outcome)
        return outcome


class ScriptedSessions:
    """Session factory; every call hands out a fresh FakeSession answering from one shared script."""

    def __init__(self, *outcomes: Any):
        self.outcomes: List[Any] = list(outcomes)
        self.calls: List[Dict[str, Any]] = []
        self.sessions: List[FakeSession] = []
        self.responses: List[Any] = []

    def __call__(self) -> FakeSession:
        session = FakeSession(self)
        self.sessions.append(session)
        return session


def gzip_response(payload: Any, *, status_code: int = 200) -> requests.Response:
    """A real requests.Response over a gzip-encoded urllib3 body, inflated on first access to .content."""
    raw = HTTPResponse(
        body=io.BytesIO(gzip.compress(json.dumps(payload).encode("utf-8"))),
        headers={"Content-Type": "application/json; charset=utf-8", "Content-Encoding": "gzip"},
        status=status_code,
        preload_content=False,
        decode_content=True,
    )
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = "OK"
    resp.raw = raw
    resp.headers = CaseInsensitiveDict(dict(raw.headers))
    return resp


def station_json(n: int, **extra: Any) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "stationuuid": f"00000000-0000-0000-0000-{n:012d}",
        "name": f"Station {n}",
        "url": f"http://stream.example.test/{n}",
        "tags": "jazz,blues",
        "language": "english",
        "votes": n,
        "lastcheckok": 1,
    }
    row.update(extra)
    return row

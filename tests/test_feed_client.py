"""Unit tests for the feed client, using a stub session."""

from typing import Any

import pytest
import requests

from stormticker.feed_client import FeedClient, FeedClientError, is_feature_collection


class _Response:
    def __init__(self, status_code: int = 200, body: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self) -> Any:
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class _Session:
    def __init__(self, response: _Response | None = None, error: Exception | None = None) -> None:
        self.headers: dict[str, str] = {}
        self.response = response
        self.error = error
        self.calls: list[tuple[str, float]] = []

    def get(self, url: str, timeout: float) -> _Response:
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response

    def close(self) -> None:
        pass


def _client(session: _Session, timeout: float = 10) -> FeedClient:
    return FeedClient(timeout=timeout, session=session)  # type: ignore[arg-type]


class TestFetch:
    def test_returns_decoded_body(self) -> None:
        session = _Session(_Response(body={"type": "FeatureCollection", "features": []}))
        body = _client(session).fetch("http://feed")
        assert body == {"type": "FeatureCollection", "features": []}
        assert session.calls == [("http://feed", 10)]

    def test_sends_user_agent(self) -> None:
        session = _Session(_Response(body={}))
        _client(session)
        assert session.headers["User-Agent"] == "OBS-JSON-Parser/1.0"
        assert session.headers["Accept"] == "application/json"

    def test_non_2xx(self) -> None:
        session = _Session(_Response(status_code=503, text="Service Unavailable"))
        with pytest.raises(FeedClientError, match="503"):
            _client(session).fetch("http://feed")

    def test_timeout(self) -> None:
        session = _Session(error=requests.Timeout("read timed out"))
        with pytest.raises(FeedClientError, match="timeout of 5s exceeded"):
            _client(session, timeout=5).fetch("http://feed")

    def test_transport_error(self) -> None:
        session = _Session(error=requests.ConnectionError("connection refused"))
        with pytest.raises(FeedClientError, match="connection refused"):
            _client(session).fetch("http://feed")

    def test_bad_json(self) -> None:
        session = _Session(_Response(body=ValueError("Expecting value")))
        with pytest.raises(FeedClientError, match="Invalid JSON"):
            _client(session).fetch("http://feed")


class TestShapeCheck:
    def test_feature_collection(self) -> None:
        assert is_feature_collection({"type": "FeatureCollection", "features": []})

    def test_other_shapes(self) -> None:
        assert not is_feature_collection({"type": "Feature", "features": []})
        assert not is_feature_collection({"type": "FeatureCollection"})
        assert not is_feature_collection([1, 2, 3])
        assert not is_feature_collection(None)

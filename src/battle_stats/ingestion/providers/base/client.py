from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

import httpx

from .errors import DecodeError, TransportError

Json = dict[str, Any]


@dataclass
class BaseHttpClient:
    """
    Provider-agnostic HTTP client wrapper.

    - Uses a single underlying httpx.Client for connection pooling; the client is
      shared by the worker threads of one fan-out.
    - timeout_s bounds each request as a whole, not only each connect/read phase.
    - Maps every failure onto TransportError / DecodeError.
    """

    base_url: str
    timeout_s: float = 30.0
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.BaseTransport | None = None
    _monotonic: Callable[[], float] = field(default=time.monotonic, repr=False)

    def __post_init__(self) -> None:
        self._client = httpx.Client(
            timeout=httpx.Timeout(self.timeout_s),
            headers=dict(self.headers),
            transport=self.transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BaseHttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def url_for(self, path: str = "") -> str:
        # base_url may name the resource itself, so an empty path must not add a slash.
        if not path:
            return self.base_url
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")

    def get_json(
        self,
        path: str = "",
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        """
        Perform a GET and return the parsed JSON object.
        Raises TransportError on transport issues / non-2xx / a body that is still
        arriving after timeout_s, DecodeError on a bad body.
        """
        deadline = self._monotonic() + self.timeout_s
        url = self.url_for(path)
        chunks: list[bytes] = []
        try:
            with self._client.stream("GET", url, params=params, headers=headers) as resp:
                try:
                    resp.raise_for_status()
                except httpx.HTTPStatusError as e:
                    raise TransportError(
                        f"HTTP {resp.status_code} for GET {resp.request.url}"
                    ) from e

                for chunk in resp.iter_bytes():
                    chunks.append(chunk)
                    if self._monotonic() > deadline:
                        raise TransportError(
                            f"GET {resp.request.url} exceeded {self.timeout_s:g}s total deadline"
                        )
        except httpx.TransportError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        try:
            data = json.loads(b"".join(chunks))
        except ValueError as e:
            raise DecodeError("Response was not valid JSON.") from e

        if not isinstance(data, dict):
            raise DecodeError(f"Expected JSON object, got {type(data).__name__}")

        return data

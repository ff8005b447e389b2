"""Transport seam for the completion client.

Purpose:
    Define the single capability the client needs from an HTTP stack,
    ``send(request, *, stream) -> response``, and offer a factory for callers
    who do not bring their own client.

External dependencies:
    - ``httpx``: requests and responses are ``httpx.Request`` /
      ``httpx.Response`` objects, and any ``httpx.Client`` satisfies
      :class:`Transport` as-is (tests inject one backed by
      ``httpx.MockTransport``).

Lifecycle:
    - The completion client never constructs, pools, or retries a transport;
      it calls ``send`` exactly once per completion call and closes the
      returned response on every exit path.
    - ``build_httpx_client`` returns a fresh client; the caller owns it and
      should close it (it is a context manager).
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

import httpx

from ...config import ClientConfig


@runtime_checkable
class Transport(Protocol):
    """One blocking HTTP exchange.

    With ``stream=False`` the returned response body is fully read; with
    ``stream=True`` the body is read lazily and the caller must close the
    response.
    """

    def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:  # pragma: no cover - interface
        ...


def build_httpx_client(config: Optional[ClientConfig] = None) -> httpx.Client:
    """Return a new ``httpx.Client`` configured from ``config``.

    Only the timeout is taken from configuration (``timeout_seconds``). The
    client is not cached or shared.
    """
    cfg = config or ClientConfig()
    timeout = httpx.Timeout(cfg.timeout_seconds)

    # ``Client.send`` forwards prebuilt requests as-is, so the client-level
    # timeout has to be attached per request.
    def _apply_timeout(request: httpx.Request) -> None:
        request.extensions.setdefault("timeout", timeout.as_dict())

    return httpx.Client(timeout=timeout, event_hooks={"request": [_apply_timeout]})


__all__ = ["Transport", "build_httpx_client"]

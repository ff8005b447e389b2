"""HTTP transport seam (protocol plus ``httpx`` client factory)."""

from .client import Transport, build_httpx_client

__all__ = ["Transport", "build_httpx_client"]

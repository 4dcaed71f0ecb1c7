"""Transport abstractions."""
from __future__ import annotations

from abc import ABC, abstractmethod
import os
from typing import Any, Mapping, TYPE_CHECKING

if TYPE_CHECKING:
    import requests


class Transport(ABC):
    """Abstract transport interface."""

    @abstractmethod
    def post(
        self,
        url: str,
        headers: Mapping[str, str],
        json: Mapping[str, Any],
        timeout: float,
    ) -> "requests.Response":  # noqa: D401
        """Send a POST request."""
        raise NotImplementedError


class RequestsTransport(Transport):
    """Transport backed by a ``requests`` session with urllib3 retries.

    Args:
        retries: Total retry attempts on connection errors and 429/5xx
            responses. Defaults to ``OPENLANE_GQL_RETRIES`` or ``3``.
        backoff: Exponential backoff factor. Defaults to
            ``OPENLANE_GQL_BACKOFF`` or ``0.5`` seconds.
        jitter: Random jitter added to each backoff. Defaults to
            ``OPENLANE_GQL_JITTER`` or ``0.1`` seconds.
        force_close: Send ``Connection: close`` to disable keep-alives.
            Off by default: pagination issues back-to-back requests to one
            host, so the pooled connection is reused across pages.
    """

    def __init__(
        self,
        *,
        retries: int | None = None,
        backoff: float | None = None,
        jitter: float | None = None,
        force_close: bool = False,
    ) -> None:
        import requests
        from requests.adapters import HTTPAdapter
        from urllib3.util import Retry

        retry_total = retries if retries is not None else int(
            os.getenv("OPENLANE_GQL_RETRIES", "3")
        )
        backoff_factor = backoff if backoff is not None else float(
            os.getenv("OPENLANE_GQL_BACKOFF", "0.5")
        )
        backoff_jitter = jitter if jitter is not None else float(
            os.getenv("OPENLANE_GQL_JITTER", "0.1")
        )
        retry = Retry(
            total=retry_total,
            connect=retry_total,
            read=retry_total,
            backoff_factor=backoff_factor,
            backoff_jitter=backoff_jitter,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
            raise_on_status=False,
            respect_retry_after_header=True,
        )
        adapter = HTTPAdapter(max_retries=retry)
        http = requests.Session()
        http.mount("https://", adapter)
        http.mount("http://", adapter)
        if force_close:
            http.headers.setdefault("Connection", "close")
        self.retry = retry
        self._session = http

    def post(
        self,
        url: str,
        headers: Mapping[str, str],
        json: Mapping[str, Any],
        timeout: float,
    ) -> "requests.Response":
        return self._session.post(url, headers=headers, json=json, timeout=timeout)

"""Session object for the Openlane GraphQL API."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from .errors import MissingCredentialError
from .transport import RequestsTransport, Transport

DEFAULT_API_URL = "https://api.theopenlane.io"
TOKEN_ENV = "OPENLANE_API_TOKEN"
URL_ENV = "OPENLANE_API_URL"


@dataclass
class OpenlaneSession:
    """Authenticated handle on an Openlane GraphQL endpoint.

    The API token is an explicit value; use :meth:`from_env` to source it from
    the process environment.

    Attributes:
        api_token: Personal access token or API token sent as a bearer token
        api_url: Base URL of the Openlane API (default: https://api.theopenlane.io)
        transport: Transport implementation for HTTP requests (defaults to RequestsTransport)
    """

    api_token: str
    api_url: str = DEFAULT_API_URL
    transport: Transport = field(default_factory=RequestsTransport)
    graphql_url: str = field(init=False)

    def __post_init__(self) -> None:
        if not self.api_token or not self.api_token.strip():
            raise MissingCredentialError("an Openlane API token is required")
        self.api_url = self.api_url.strip().rstrip("/")
        self.graphql_url = f"{self.api_url}/query"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        transport: Transport | None = None,
    ) -> "OpenlaneSession":
        """Build a session from ``OPENLANE_API_TOKEN`` and ``OPENLANE_API_URL``.

        Raises:
            MissingCredentialError: If ``OPENLANE_API_TOKEN`` is unset or blank.
        """
        env = os.environ if environ is None else environ
        token = env.get(TOKEN_ENV, "").strip()
        if not token:
            raise MissingCredentialError(f"{TOKEN_ENV} environment variable is required")
        url = env.get(URL_ENV) or DEFAULT_API_URL
        if transport is None:
            return cls(token, url)
        return cls(token, url, transport=transport)

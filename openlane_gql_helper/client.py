"""Client helpers."""
from __future__ import annotations

import logging
import time
from typing import Any, Mapping

from .errors import OpenlaneGQLError
from .session import OpenlaneSession

logger = logging.getLogger(__name__)


def execute(
    session: OpenlaneSession,
    query: str,
    variables: Mapping[str, Any] | None = None,
    timeout: float = 30,
    retries: int = 2,
) -> dict[str, Any]:
    """Execute a GraphQL document against the Openlane API.

    Args:
        session: An authenticated OpenlaneSession instance
        query: The GraphQL document to execute
        variables: Optional mapping of variables for the document
        timeout: Request timeout in seconds (default: 30)
        retries: Number of retry attempts on 5xx responses (default: 2)

    Returns:
        dict: The parsed JSON response body

    Raises:
        OpenlaneGQLError: On transport failure, a non-200 status, an
            undecodable body or a GraphQL ``errors`` array

    Example:
        >>> session = OpenlaneSession(api_token)
        >>> result = execute(session, "{ self { id } }")
    """

    payload = {"query": query, "variables": dict(variables or {})}
    headers = {
        "Authorization": f"Bearer {session.api_token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    for attempt in range(retries + 1):
        try:
            resp = session.transport.post(
                session.graphql_url, headers=headers, json=payload, timeout=timeout
            )
        except Exception as exc:
            raise OpenlaneGQLError(str(exc)) from exc

        status = getattr(resp, "status_code", None)
        if status is None:
            raise OpenlaneGQLError("Transport response missing status_code")
        if status >= 500 and attempt < retries:
            logger.warning("Openlane returned HTTP %d, retrying (attempt %d)", status, attempt + 1)
            time.sleep(2 ** attempt)
            continue
        if status != 200:
            snippet = getattr(resp, "text", "")[:300]
            raise OpenlaneGQLError(snippet, status)
        try:
            data = resp.json()
        except Exception as exc:
            snippet = getattr(resp, "text", "")[:300]
            raise OpenlaneGQLError(snippet, status) from exc
        if not isinstance(data, dict):
            raise OpenlaneGQLError(f"malformed response: {str(data)[:200]}")
        if data.get("errors"):
            messages = [
                err.get("message", str(err)) if isinstance(err, dict) else str(err)
                for err in data["errors"]
            ]
            raise OpenlaneGQLError("; ".join(messages))
        return data
    # If loop exits without return, raise generic error
    raise OpenlaneGQLError("Max retries exceeded")

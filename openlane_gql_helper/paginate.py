"""Pagination helpers."""
from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from .controls import Control, ControlConnection, ControlOrder, ControlWhereInput, get_controls
from .errors import FetchError, OpenlaneGQLError
from .session import OpenlaneSession

logger = logging.getLogger(__name__)

PageFetcher = Callable[..., ControlConnection]


def cursor_pages(
    session: OpenlaneSession,
    where: Optional[ControlWhereInput] = None,
    order_by: Optional[ControlOrder] = None,
    page_size: int = 10,
    *,
    fetch_page: PageFetcher = get_controls,
    timeout: float = 30,
) -> Iterator[ControlConnection]:
    """
    Yield pages of a cursor-based connection, requesting the next page until
    `pageInfo.hasNextPage` is false.

    Pages are requested strictly one after another. Each request after the
    first passes the previous page's `endCursor` as `after`, untouched. The
    same `where`, `order_by` and `page_size` go out with every request.

    Args:
        session: Authenticated `OpenlaneSession`.
        where: Filter applied server-side to every page.
        order_by: Ordering applied server-side to every page.
        page_size: Items per page; must be a positive integer.
        fetch_page: Callable issuing one page request. Called as
            `fetch_page(session, page_size, cursor, where=..., order_by=..., timeout=...)`.
        timeout: Per-request timeout in seconds.

    Yields:
        ControlConnection: Each page, in server order.

    Raises:
        ValueError: If `page_size` is not a positive integer.
        FetchError: If any page request fails. Nothing further is requested.
    """
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise ValueError(f"page_size must be a positive integer, got {page_size!r}")

    cursor: str | None = None
    page_number = 0
    while True:
        page_number += 1
        try:
            page = fetch_page(
                session, page_size, cursor, where=where, order_by=order_by, timeout=timeout
            )
        except OpenlaneGQLError as exc:
            raise FetchError(page_number, cursor, exc) from exc
        yield page
        if not page.page_info.has_next_page:
            break
        if page.page_info.end_cursor is None:
            exc = OpenlaneGQLError("malformed response: hasNextPage set without endCursor")
            raise FetchError(page_number + 1, cursor, exc)
        cursor = page.page_info.end_cursor


def fetch_all(
    session: OpenlaneSession,
    where: Optional[ControlWhereInput] = None,
    order_by: Optional[ControlOrder] = None,
    page_size: int = 10,
    *,
    fetch_page: PageFetcher = get_controls,
    timeout: float = 30,
) -> list[Control]:
    """Fetch every control matching `where`, in `order_by` order.

    Either the complete list is returned or `FetchError` is raised; records
    gathered before a failing page are dropped.

    Example:
        >>> where = ControlWhereInput(reference_framework="SOC 2", system_owned=True)
        >>> controls = fetch_all(session, where, ControlOrder())
    """
    controls: list[Control] = []
    for page in cursor_pages(
        session, where, order_by, page_size, fetch_page=fetch_page, timeout=timeout
    ):
        controls.extend(page.nodes)
        logger.info(
            "Fetched page with %d controls (total so far: %d of %d)",
            len(page.edges),
            len(controls),
            page.total_count,
        )
    return controls

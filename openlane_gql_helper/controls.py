"""Typed ``GetControls`` collection query."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .client import execute
from .errors import OpenlaneGQLError
from .session import OpenlaneSession

GET_CONTROLS = """
query GetControls(
  $first: Int
  $last: Int
  $after: Cursor
  $before: Cursor
  $where: ControlWhereInput
  $orderBy: [ControlOrder!]
) {
  controls(
    first: $first
    last: $last
    after: $after
    before: $before
    where: $where
    orderBy: $orderBy
  ) {
    totalCount
    pageInfo {
      startCursor
      endCursor
      hasPreviousPage
      hasNextPage
    }
    edges {
      cursor
      node {
        id
        refCode
        title
        category
        description
        referenceFramework
      }
    }
  }
}
"""


class ControlOrderField(str, Enum):
    REF_CODE = "ref_code"
    CATEGORY = "category"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class OrderDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class ControlWhereInput:
    """Equality constraints on controls, combined with AND.

    Fields left as ``None`` are not sent.
    """

    reference_framework: Optional[str] = None
    system_owned: Optional[bool] = None
    category: Optional[str] = None
    ref_code: Optional[str] = None

    def to_variables(self) -> dict[str, Any]:
        values = {
            "referenceFramework": self.reference_framework,
            "systemOwned": self.system_owned,
            "category": self.category,
            "refCode": self.ref_code,
        }
        return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class ControlOrder:
    field: ControlOrderField = ControlOrderField.REF_CODE
    direction: OrderDirection = OrderDirection.ASC

    def to_variables(self) -> dict[str, str]:
        return {"field": self.field.value, "direction": self.direction.value}


@dataclass(frozen=True)
class Control:
    id: str
    ref_code: str
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    reference_framework: Optional[str] = None

    @classmethod
    def from_node(cls, node: Any) -> "Control":
        if (
            not isinstance(node, dict)
            or not isinstance(node.get("id"), str)
            or not isinstance(node.get("refCode"), str)
        ):
            raise OpenlaneGQLError(f"malformed response: invalid control node {str(node)[:200]}")
        return cls(
            id=node["id"],
            ref_code=node["refCode"],
            title=node.get("title"),
            category=node.get("category"),
            description=node.get("description"),
            reference_framework=node.get("referenceFramework"),
        )


@dataclass(frozen=True)
class PageInfo:
    has_next_page: bool
    end_cursor: Optional[str] = None
    has_previous_page: bool = False
    start_cursor: Optional[str] = None


@dataclass(frozen=True)
class ControlEdge:
    node: Control
    cursor: Optional[str] = None


@dataclass(frozen=True)
class ControlConnection:
    """One page of the ``controls`` connection."""

    total_count: int
    page_info: PageInfo
    edges: tuple[ControlEdge, ...] = field(default_factory=tuple)

    @property
    def nodes(self) -> list[Control]:
        return [edge.node for edge in self.edges]

    @classmethod
    def from_response(cls, data: Any) -> "ControlConnection":
        """Parse ``data.controls`` out of a GraphQL response body.

        Raises:
            OpenlaneGQLError: If the connection or any of its parts is missing.
        """
        payload = data.get("data") if isinstance(data, dict) else None
        if not isinstance(payload, dict):
            raise OpenlaneGQLError("malformed response: missing 'data'")
        conn = payload.get("controls")
        if not isinstance(conn, dict):
            raise OpenlaneGQLError("malformed response: missing 'controls' connection")
        for key in ("edges", "pageInfo", "totalCount"):
            if key not in conn:
                raise OpenlaneGQLError(f"malformed response: connection missing '{key}'")
        page_info = conn["pageInfo"]
        if not isinstance(page_info, dict) or not isinstance(conn["edges"], list):
            raise OpenlaneGQLError("malformed response: invalid 'pageInfo' or 'edges'")
        if not isinstance(conn["totalCount"], int):
            raise OpenlaneGQLError("malformed response: invalid 'totalCount'")
        has_next_page = page_info.get("hasNextPage")
        has_previous_page = page_info.get("hasPreviousPage", False)
        if not isinstance(has_next_page, bool) or not isinstance(has_previous_page, bool):
            raise OpenlaneGQLError("malformed response: invalid 'hasNextPage' or 'hasPreviousPage'")
        edges = []
        for edge in conn["edges"]:
            if not isinstance(edge, dict):
                raise OpenlaneGQLError("malformed response: invalid edge")
            edges.append(ControlEdge(Control.from_node(edge.get("node")), edge.get("cursor")))
        return cls(
            total_count=conn["totalCount"],
            page_info=PageInfo(
                has_next_page=has_next_page,
                end_cursor=page_info.get("endCursor"),
                has_previous_page=has_previous_page,
                start_cursor=page_info.get("startCursor"),
            ),
            edges=tuple(edges),
        )


def get_controls(
    session: OpenlaneSession,
    first: Optional[int] = None,
    after: Optional[str] = None,
    *,
    last: Optional[int] = None,
    before: Optional[str] = None,
    where: Optional[ControlWhereInput] = None,
    order_by: Optional[ControlOrder] = None,
    timeout: float = 30,
) -> ControlConnection:
    """Run ``GetControls`` once and return the page."""
    variables: dict[str, Any] = {
        "first": first,
        "last": last,
        "after": after,
        "before": before,
        "where": where.to_variables() if where is not None else None,
        "orderBy": [order_by.to_variables()] if order_by is not None else None,
    }
    data = execute(session, GET_CONTROLS, variables, timeout=timeout)
    return ControlConnection.from_response(data)

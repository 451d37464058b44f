"""
Request-scoped input to the option parser.

``QueryRequest`` carries the raw parameter map and the request path, plus a
``RequestProperties`` side channel the parser writes the parsed select/expand
clause into so later stages (serialization) can reuse it without parsing
``$expand`` again.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl, urlsplit

if TYPE_CHECKING:
    from .clauses import SelectExpandClause


class RequestProperties:
    """Per-request storage populated by the option parser."""

    __slots__ = ("_select_expand_clause",)

    def __init__(self) -> None:
        self._select_expand_clause: SelectExpandClause | None = None

    @property
    def select_expand_clause(self) -> SelectExpandClause | None:
        """The clause parsed from ``$select`` / ``$expand``, if any."""
        return self._select_expand_clause

    @select_expand_clause.setter
    def select_expand_clause(self, clause: SelectExpandClause) -> None:
        if self._select_expand_clause is not None:
            raise RuntimeError("select_expand_clause has already been set")
        self._select_expand_clause = clause


@dataclass(frozen=True)
class QueryRequest:
    """
    Raw query parameters of one incoming request.

    Attributes:
        query: Parameter name -> raw string value, as received.
        path: Request path; used to detect ``/$count`` requests.
        properties: Request-scoped storage written by the parser.
    """

    query: Mapping[str, str] = field(default_factory=dict)
    path: str = ""
    properties: RequestProperties = field(default_factory=RequestProperties)

    def __post_init__(self) -> None:
        if not isinstance(self.query, Mapping):
            raise TypeError("query must be a mapping of parameter name to value")

    @classmethod
    def from_url(cls, url: str) -> QueryRequest:
        """
        Build a request from a URL or bare query string.

        Blank values are kept (``$select=`` is a present-but-empty option).
        When a parameter repeats, the first value wins.
        """
        if "?" in url or url.startswith("/") or "://" in url:
            parts = urlsplit(url)
            path, query_string = parts.path, parts.query
        else:
            path, query_string = "", url
        query: dict[str, str] = {}
        for name, value in parse_qsl(query_string, keep_blank_values=True):
            query.setdefault(name, value)
        return cls(query=query, path=path)


def is_count_request(request: QueryRequest | None) -> bool:
    """Return ``True`` when the request addresses ``.../$count``."""
    if request is None or not request.path:
        return False
    last_segment = request.path.rstrip("/").rsplit("/", 1)[-1]
    return last_segment == "$count"

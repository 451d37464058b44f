"""QueryStringBuilder — QueryOptions -> query string (paging links)."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlencode

if TYPE_CHECKING:
    from .query_options import QueryOptions


class QueryStringBuilder:
    """Build a query string from the raw values of parsed query options."""

    def build(
        self,
        *,
        options: QueryOptions | None = None,
        top: int | None = None,
        skip: int | None = None,
    ) -> str:
        """
        Produce a query string, e.g. for a next-page link.

        Every raw option value is carried over verbatim except ``$top`` and
        ``$skip``, which come from the arguments and are left out when
        ``None``.
        """
        params: dict[str, str] = {}
        if options is not None:
            for name, value in options.raw_values.to_dict().items():
                if name not in ("$top", "$skip"):
                    params[name] = value
        if top is not None:
            params["$top"] = str(top)
        if skip is not None:
            params["$skip"] = str(skip)
        return urlencode(params, safe="$,/'()") if params else ""

    def build_url(
        self,
        base_url: str,
        *,
        options: QueryOptions | None = None,
        top: int | None = None,
        skip: int | None = None,
    ) -> str:
        """Append the query string to *base_url*, dropping any query it had."""
        query = self.build(options=options, top=top, skip=skip)
        base = base_url.split("?", 1)[0]
        return f"{base}?{query}" if query else base

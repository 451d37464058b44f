"""
Parser for ``$select`` and ``$expand``.

``$select`` is a comma-separated list of structural property names or ``*``.
``$expand`` is a comma-separated list of navigation properties, each
optionally followed by nested options in parentheses::

    orders($select=id,amount;$filter=amount gt 10;$orderby=amount desc;$top=5)
    manager($levels=3)

Errors inside nested options are reported against ``$expand``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..clauses import (
    ExpandItem,
    FilterClause,
    OrderByClause,
    SelectExpandClause,
)
from ..exceptions import FieldNotFoundError, GrammarSyntaxError
from ..utils import is_blank, parse_non_negative_integer, split_top_level
from .expression import ExpressionParser

if TYPE_CHECKING:
    from ..context import QueryContext
    from ..evaluator import MemoryOperatorRegistry
    from ..schema import NavigationProperty

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

NESTED_OPTIONS = frozenset(
    {"$select", "$expand", "$filter", "$orderby", "$top", "$skip", "$levels"}
)


class SelectExpandParser:
    """Build a :class:`SelectExpandClause` for one :class:`QueryContext`."""

    def __init__(self, context: QueryContext, registry: MemoryOperatorRegistry):
        self._context = context
        self._registry = registry

    def parse(
        self, raw_select: str | None, raw_expand: str | None
    ) -> SelectExpandClause:
        return self._parse(self._context, raw_select, raw_expand, "$select")

    # ------------------------------------------------------------------ #

    def _parse(
        self,
        context: QueryContext,
        raw_select: str | None,
        raw_expand: str | None,
        select_option: str,
    ) -> SelectExpandClause:
        selected, all_selected = self._parse_select(context, raw_select, select_option)
        expanded = self._parse_expand(context, raw_expand)
        return SelectExpandClause(
            selected=selected, all_selected=all_selected, expanded=expanded
        )

    def _split(self, text: str, separator: str, option: str) -> list[str]:
        try:
            return [part.strip() for part in split_top_level(text, separator)]
        except ValueError as exc:
            raise GrammarSyntaxError(str(exc), option) from exc

    # -- $select -------------------------------------------------------------

    def _parse_select(
        self, context: QueryContext, raw: str | None, option: str
    ) -> tuple[tuple[str, ...], bool]:
        if raw is None or is_blank(raw):
            return (), True
        element_type = context.element_type
        selected: list[str] = []
        all_selected = False
        for item in self._split(raw, ",", option):
            if not item:
                raise GrammarSyntaxError("Empty item in select list", option)
            if item == "*":
                all_selected = True
                continue
            if not _NAME_RE.fullmatch(item):
                raise GrammarSyntaxError(f"Invalid select item {item!r}", option)
            if element_type.find_property(item) is None:
                if element_type.find_navigation_property(item) is not None:
                    raise GrammarSyntaxError(
                        f"Navigation property {item!r} cannot be selected; "
                        f"use $expand",
                        option,
                    )
                raise FieldNotFoundError(
                    item, element_type.name, element_type.member_names(), option
                )
            if item not in selected:
                selected.append(item)
        if all_selected:
            return (), True
        return tuple(selected), False

    # -- $expand -------------------------------------------------------------

    def _parse_expand(
        self, context: QueryContext, raw: str | None
    ) -> tuple[ExpandItem, ...]:
        if raw is None or is_blank(raw):
            return ()
        items: list[ExpandItem] = []
        seen: set[str] = set()
        for text in self._split(raw, ",", "$expand"):
            if not text:
                raise GrammarSyntaxError("Empty item in expand list", "$expand")
            item = self._parse_expand_item(context, text)
            if item.navigation.name in seen:
                raise GrammarSyntaxError(
                    f"Navigation property {item.navigation.name!r} is expanded "
                    f"more than once",
                    "$expand",
                )
            seen.add(item.navigation.name)
            items.append(item)
        return tuple(items)

    def _parse_expand_item(self, context: QueryContext, text: str) -> ExpandItem:
        name, _, rest = text.partition("(")
        name = name.strip()
        nested_text: str | None = None
        if rest:
            if not rest.endswith(")"):
                raise GrammarSyntaxError(
                    f"Expected ')' after nested options of {name!r}", "$expand"
                )
            nested_text = rest[:-1]

        if name == "*":
            raise GrammarSyntaxError("Wildcard expansion is not supported", "$expand")
        navigation = self._resolve_navigation(context, name)
        target = context.for_navigation(navigation)
        options = self._parse_nested_options(nested_text)

        select_expand = self._parse(
            target, options.get("$select"), options.get("$expand"), "$expand"
        )
        filter_clause = None
        if "$filter" in options:
            node = ExpressionParser(
                options["$filter"], target, self._registry, "$expand"
            ).parse_filter()
            filter_clause = FilterClause(node, self._registry)
        orderby_clause = None
        if "$orderby" in options:
            nodes = ExpressionParser(
                options["$orderby"], target, self._registry, "$expand"
            ).parse_orderby()
            orderby_clause = OrderByClause(tuple(nodes), self._registry)
        top = self._nested_integer(options, "$top")
        skip = self._nested_integer(options, "$skip")

        item = ExpandItem(
            navigation,
            target,
            select_expand,
            filter=filter_clause,
            orderby=orderby_clause,
            top=top,
            skip=skip,
        )
        if "$levels" in options:
            item = self._apply_levels(context, item, options["$levels"])
        return item

    def _resolve_navigation(
        self, context: QueryContext, name: str
    ) -> NavigationProperty:
        element_type = context.element_type
        if not _NAME_RE.fullmatch(name):
            raise GrammarSyntaxError(f"Invalid expand item {name!r}", "$expand")
        navigation = element_type.find_navigation_property(name)
        if navigation is not None:
            return navigation
        if element_type.find_property(name) is not None:
            raise GrammarSyntaxError(
                f"Property {name!r} on type {element_type.name!r} is not a "
                f"navigation property and cannot be expanded",
                "$expand",
            )
        raise FieldNotFoundError(
            name, element_type.name, element_type.member_names(), "$expand"
        )

    def _parse_nested_options(self, text: str | None) -> dict[str, str]:
        if text is None:
            return {}
        if is_blank(text):
            raise GrammarSyntaxError("Empty nested expand options", "$expand")
        options: dict[str, str] = {}
        for part in self._split(text, ";", "$expand"):
            name, sep, value = part.partition("=")
            name = name.strip().lower()
            if not sep:
                raise GrammarSyntaxError(
                    f"Expected '=' in nested option {part!r}", "$expand"
                )
            if name not in NESTED_OPTIONS:
                raise GrammarSyntaxError(
                    f"Unknown nested option {name!r}", "$expand"
                )
            if name in options:
                raise GrammarSyntaxError(
                    f"Nested option {name!r} specified more than once", "$expand"
                )
            if is_blank(value) and name not in ("$select", "$expand"):
                raise GrammarSyntaxError(
                    f"Nested option {name!r} cannot be empty", "$expand"
                )
            options[name] = value.strip()
        return options

    @staticmethod
    def _nested_integer(options: dict[str, str], name: str) -> int | None:
        if name not in options:
            return None
        return parse_non_negative_integer("$expand", options[name])

    def _apply_levels(
        self, context: QueryContext, item: ExpandItem, raw_levels: str
    ) -> ExpandItem:
        if raw_levels.lower() == "max":
            raise GrammarSyntaxError("'$levels=max' is not supported", "$expand")
        levels = parse_non_negative_integer("$expand", raw_levels)
        if levels < 1:
            raise GrammarSyntaxError("'$levels' must be at least 1", "$expand")
        if item.navigation.target != context.element_type.name:
            raise GrammarSyntaxError(
                f"'$levels' requires a recursive navigation property; "
                f"{item.navigation.name!r} targets {item.navigation.target!r}",
                "$expand",
            )

        # Innermost level first; each outer level expands the same property
        # once more on top of the nested options.
        current = item
        for _ in range(levels - 1):
            inner = item.select_expand
            nested = SelectExpandClause(
                selected=inner.selected,
                all_selected=inner.all_selected,
                expanded=(*inner.expanded, current),
            )
            current = ExpandItem(
                item.navigation,
                item.context,
                nested,
                filter=item.filter,
                orderby=item.orderby,
                top=item.top,
                skip=item.skip,
            )
        return current

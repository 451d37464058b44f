"""RawQueryOptions — verbatim record of the recognised query option values."""

from __future__ import annotations

from dataclasses import dataclass, field, fields

from .allowed import canonical_option_name


@dataclass(frozen=True)
class RawQueryOptions:
    """
    Raw string of every recognised query option present in the request.

    Kept for auditing, link generation and presence checks that do not need
    a parsed value (``$format``, ``$skiptoken``, ...). ``None`` means the
    option was absent.

    Attributes:
        blank_options: Canonical names of options that were present with an
            empty or whitespace-only value.
    """

    filter: str | None = None
    orderby: str | None = None
    top: str | None = None
    skip: str | None = None
    select: str | None = None
    count: str | None = None
    expand: str | None = None
    format: str | None = None
    skiptoken: str | None = None
    deltatoken: str | None = None
    apply: str | None = None
    blank_options: frozenset[str] = field(default_factory=frozenset)

    def get(self, name: str) -> str | None:
        """Look up ``"$Filter"``, ``"$filter"`` or ``"filter"`` alike."""
        canonical = canonical_option_name(name)
        if canonical is None:
            return None
        value: str | None = getattr(self, canonical[1:])
        return value

    def is_present(self, name: str) -> bool:
        return self.get(name) is not None

    def to_dict(self) -> dict[str, str]:
        """Canonical name -> raw value for every present option."""
        result: dict[str, str] = {}
        for f in fields(self):
            if f.name == "blank_options":
                continue
            value = getattr(self, f.name)
            if value is not None:
                result[f"${f.name}"] = value
        return result

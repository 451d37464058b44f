"""Built-in functions: string, date/time and math."""

from __future__ import annotations

import datetime
import math
from typing import Any

from ..evaluator import MemoryFunction
from ..schema import PrimitiveKind

_STRING = (PrimitiveKind.STRING,)
_NUMBER = (PrimitiveKind.NUMBER,)

# ---------------------------------------------------------------------------
# String functions
# ---------------------------------------------------------------------------


class ContainsFunction(MemoryFunction):
    min_args = max_args = 2
    parameter_kinds = (_STRING, _STRING)
    return_kind = PrimitiveKind.BOOLEAN

    @property
    def name(self) -> str:
        return "contains"

    def invoke(self, *args: Any) -> Any:
        value, search = args
        if value is None or search is None:
            return False
        return str(search) in str(value)


class StartsWithFunction(MemoryFunction):
    min_args = max_args = 2
    parameter_kinds = (_STRING, _STRING)
    return_kind = PrimitiveKind.BOOLEAN

    @property
    def name(self) -> str:
        return "startswith"

    def invoke(self, *args: Any) -> Any:
        value, prefix = args
        if value is None or prefix is None:
            return False
        return str(value).startswith(str(prefix))


class EndsWithFunction(MemoryFunction):
    min_args = max_args = 2
    parameter_kinds = (_STRING, _STRING)
    return_kind = PrimitiveKind.BOOLEAN

    @property
    def name(self) -> str:
        return "endswith"

    def invoke(self, *args: Any) -> Any:
        value, suffix = args
        if value is None or suffix is None:
            return False
        return str(value).endswith(str(suffix))


class LengthFunction(MemoryFunction):
    parameter_kinds = (_STRING,)
    return_kind = PrimitiveKind.NUMBER

    @property
    def name(self) -> str:
        return "length"

    def invoke(self, *args: Any) -> Any:
        (value,) = args
        return None if value is None else len(value)


class IndexOfFunction(MemoryFunction):
    min_args = max_args = 2
    parameter_kinds = (_STRING, _STRING)
    return_kind = PrimitiveKind.NUMBER

    @property
    def name(self) -> str:
        return "indexof"

    def invoke(self, *args: Any) -> Any:
        value, search = args
        if value is None or search is None:
            return None
        return str(value).find(str(search))


class SubstringFunction(MemoryFunction):
    min_args = 2
    max_args = 3
    parameter_kinds = (_STRING, _NUMBER, _NUMBER)
    return_kind = PrimitiveKind.STRING

    @property
    def name(self) -> str:
        return "substring"

    def invoke(self, *args: Any) -> Any:
        if any(a is None for a in args):
            return None
        value, start = str(args[0]), max(0, int(args[1]))
        if len(args) == 3:
            return value[start : start + max(0, int(args[2]))]
        return value[start:]


class ToLowerFunction(MemoryFunction):
    parameter_kinds = (_STRING,)
    return_kind = PrimitiveKind.STRING

    @property
    def name(self) -> str:
        return "tolower"

    def invoke(self, *args: Any) -> Any:
        (value,) = args
        return None if value is None else str(value).lower()


class ToUpperFunction(MemoryFunction):
    parameter_kinds = (_STRING,)
    return_kind = PrimitiveKind.STRING

    @property
    def name(self) -> str:
        return "toupper"

    def invoke(self, *args: Any) -> Any:
        (value,) = args
        return None if value is None else str(value).upper()


class TrimFunction(MemoryFunction):
    parameter_kinds = (_STRING,)
    return_kind = PrimitiveKind.STRING

    @property
    def name(self) -> str:
        return "trim"

    def invoke(self, *args: Any) -> Any:
        (value,) = args
        return None if value is None else str(value).strip()


class ConcatFunction(MemoryFunction):
    min_args = max_args = 2
    parameter_kinds = (_STRING, _STRING)
    return_kind = PrimitiveKind.STRING

    @property
    def name(self) -> str:
        return "concat"

    def invoke(self, *args: Any) -> Any:
        left, right = args
        if left is None or right is None:
            return None
        return f"{left}{right}"


# ---------------------------------------------------------------------------
# Date/time functions
# ---------------------------------------------------------------------------


class _DatePartFunction(MemoryFunction):
    part: str = ""
    parameter_kinds = ((PrimitiveKind.DATE, PrimitiveKind.DATETIME),)
    return_kind = PrimitiveKind.NUMBER

    @property
    def name(self) -> str:
        return self.part

    def invoke(self, *args: Any) -> Any:
        (value,) = args
        if value is None:
            return None
        if self.part in ("hour", "minute", "second") and not isinstance(
            value, datetime.datetime | datetime.time
        ):
            return None
        return getattr(value, self.part, None)


class YearFunction(_DatePartFunction):
    part = "year"


class MonthFunction(_DatePartFunction):
    part = "month"


class DayFunction(_DatePartFunction):
    part = "day"


class HourFunction(_DatePartFunction):
    part = "hour"
    parameter_kinds = ((PrimitiveKind.DATETIME, PrimitiveKind.TIME),)


class MinuteFunction(_DatePartFunction):
    part = "minute"
    parameter_kinds = ((PrimitiveKind.DATETIME, PrimitiveKind.TIME),)


class SecondFunction(_DatePartFunction):
    part = "second"
    parameter_kinds = ((PrimitiveKind.DATETIME, PrimitiveKind.TIME),)


# ---------------------------------------------------------------------------
# Math functions
# ---------------------------------------------------------------------------


class RoundFunction(MemoryFunction):
    """Rounds half away from zero."""

    parameter_kinds = (_NUMBER,)
    return_kind = PrimitiveKind.NUMBER

    @property
    def name(self) -> str:
        return "round"

    def invoke(self, *args: Any) -> Any:
        (value,) = args
        if value is None:
            return None
        if value >= 0:
            return math.floor(value + 0.5)
        return math.ceil(value - 0.5)


class FloorFunction(MemoryFunction):
    parameter_kinds = (_NUMBER,)
    return_kind = PrimitiveKind.NUMBER

    @property
    def name(self) -> str:
        return "floor"

    def invoke(self, *args: Any) -> Any:
        (value,) = args
        return None if value is None else math.floor(value)


class CeilingFunction(MemoryFunction):
    parameter_kinds = (_NUMBER,)
    return_kind = PrimitiveKind.NUMBER

    @property
    def name(self) -> str:
        return "ceiling"

    def invoke(self, *args: Any) -> Any:
        (value,) = args
        return None if value is None else math.ceil(value)

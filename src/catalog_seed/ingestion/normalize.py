"""Declarative field coercion for seed rows.

Each target column is described by a FieldSpec: the source keys to try in
order, a parser, an optional validator and a default. A value that is
missing, unparseable or rejected by the validator is replaced by the default;
nothing here raises for a bad value except a missing required field.
"""

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

Parser = Callable[[str], Any]
Validator = Callable[[Any], bool]


class RowRejected(ValueError):
    """A row cannot be turned into a record (a required field is missing)."""


def parse_text(value: str) -> str:
    return value.strip()


def parse_int(value: str) -> int:
    """Parse an integer, accepting integral floats such as "12.0"."""
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        number = float(text)
        if not math.isfinite(number) or not number.is_integer():
            raise ValueError(f"Not an integer: {value!r}")
        return int(number)


def parse_float(value: str) -> float:
    number = float(value.strip())
    if not math.isfinite(number):
        raise ValueError(f"Not a finite number: {value!r}")
    return number


_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: str) -> str:
    """Parse an ISO 8601 timestamp and return it in canonical ISO form.

    Accepts the "2022-09-13 11:29:00 UTC" form found in warehouse exports, a
    trailing "Z", and fractional seconds of any precision (padded or cut to
    microseconds). Naive timestamps are taken as UTC.
    """
    text = value.strip()
    if text.endswith(" UTC"):
        text = text[: -len(" UTC")] + "+00:00"
    elif text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.isoformat(sep=" ")


def non_negative(value: float) -> bool:
    return value >= 0


def at_least(minimum: float) -> Validator:
    def check(value: float) -> bool:
        return value >= minimum

    return check


def within(low: float, high: float) -> Validator:
    def check(value: float) -> bool:
        return low <= value <= high

    return check


@dataclass(frozen=True)
class FieldSpec:
    """How one column of a record is derived from a raw CSV row.

    ``default`` may be a callable taking the record built so far, for
    placeholders derived from earlier fields (e.g. ``SKU-<id>``).
    """

    name: str
    sources: tuple[str, ...]
    parser: Parser = parse_text
    default: Any = None
    validator: Validator | None = None
    required: bool = False

    def raw_value(self, row: Mapping[str, str | None]) -> str | None:
        """Return the first non-blank value among the source keys."""
        for key in self.sources:
            value = row.get(key)
            if value is not None and value.strip() != "":
                return value
        return None

    def resolve_default(self, record: Mapping[str, Any]) -> Any:
        if callable(self.default):
            return self.default(record)
        return self.default

    def coerce(self, row: Mapping[str, str | None], record: Mapping[str, Any]) -> Any:
        raw = self.raw_value(row)
        if raw is None:
            if self.required:
                raise RowRejected(f"missing required field {self.name!r}")
            return self.resolve_default(record)
        try:
            value = self.parser(raw)
        except (ValueError, OverflowError):
            if self.required:
                raise RowRejected(f"invalid value {raw!r} for required field {self.name!r}")
            return self.resolve_default(record)
        if self.validator is not None and not self.validator(value):
            return self.resolve_default(record)
        return value


def column(name: str, *alternates: str, **options: Any) -> FieldSpec:
    """Build a FieldSpec whose primary source key is the column name itself."""
    return FieldSpec(name=name, sources=(name, *alternates), **options)


def normalize(fields: tuple[FieldSpec, ...], row: Mapping[str, str | None]) -> dict[str, Any]:
    """Apply every FieldSpec to a raw row, in declaration order."""
    record: dict[str, Any] = {}
    for spec in fields:
        record[spec.name] = spec.coerce(row, record)
    return record

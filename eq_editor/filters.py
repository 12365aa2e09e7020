from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Iterator, Union

HZ_RANGE = (20.0, 20_000.0)
DB_RANGE = (-25.0, 25.0)
Q_RANGE = (0.1, 20.0)

_TYPE_ALIASES = {
    "peaking": "peaking",
    "peak": "peaking",
    "peq": "peaking",
    "lowshelf": "lowshelf",
    "low-shelf": "lowshelf",
    "low_shelf": "lowshelf",
    "highshelf": "highshelf",
    "high-shelf": "highshelf",
    "high_shelf": "highshelf",
    "custom": "custom",
    "biquad": "custom",
}


@dataclass(frozen=True, slots=True)
class ParametricFilter:
    """Shared fields of the analytic shapes (center/corner frequency, gain, Q)."""

    kind: ClassVar[str] = ""

    id: int
    hz: float = 1000.0
    db: float = 0.0
    q: float = 1.0


@dataclass(frozen=True, slots=True)
class PeakingFilter(ParametricFilter):
    kind: ClassVar[str] = "peaking"


@dataclass(frozen=True, slots=True)
class LowShelfFilter(ParametricFilter):
    kind: ClassVar[str] = "lowshelf"


@dataclass(frozen=True, slots=True)
class HighShelfFilter(ParametricFilter):
    kind: ClassVar[str] = "highshelf"


@dataclass(frozen=True, slots=True)
class CustomFilter:
    """Normalized biquad coefficients (a0 is implicitly 1)."""

    kind: ClassVar[str] = "custom"

    id: int
    b0: float = 1.0
    b1: float = 0.0
    b2: float = 0.0
    a1: float = 0.0
    a2: float = 0.0


Filter = Union[PeakingFilter, LowShelfFilter, HighShelfFilter, CustomFilter]

_PARAMETRIC_TYPES: dict[str, type[ParametricFilter]] = {
    "peaking": PeakingFilter,
    "lowshelf": LowShelfFilter,
    "highshelf": HighShelfFilter,
}


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def is_shelf(filt: object) -> bool:
    return isinstance(filt, (LowShelfFilter, HighShelfFilter))


def sanitize_coefficient(value: Any) -> float:
    """Coerce a coefficient from user input; anything non-numeric or non-finite becomes 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def parse_filter_id(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Filter id must be a whole number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Filter id must be a whole number, got {value!r}") from exc
    if not number.is_integer():
        raise ValueError(f"Filter id must be a whole number, got {value!r}")
    return int(number)


def filter_from_dict(data: dict[str, Any]) -> Filter:
    if "type" not in data:
        raise ValueError("Filter definition must contain a 'type' field")
    if "id" not in data:
        raise ValueError("Filter definition must contain an 'id' field")
    raw_kind = str(data["type"]).strip().lower()
    kind = _TYPE_ALIASES.get(raw_kind)
    if kind is None:
        raise ValueError(f"Unsupported filter type: {raw_kind}")
    filter_id = parse_filter_id(data["id"])

    if kind == "custom":
        return CustomFilter(
            id=filter_id,
            b0=sanitize_coefficient(data.get("b0", 1.0)),
            b1=sanitize_coefficient(data.get("b1", 0.0)),
            b2=sanitize_coefficient(data.get("b2", 0.0)),
            a1=sanitize_coefficient(data.get("a1", 0.0)),
            a2=sanitize_coefficient(data.get("a2", 0.0)),
        )

    try:
        hz = float(data.get("hz", data.get("freq", 1000.0)))
        db = float(data.get("db", data.get("gain_db", 0.0)))
        q = float(data.get("q", 1.0))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Filter {filter_id} has a non-numeric parameter: {exc}") from exc
    for name, value in (("hz", hz), ("db", db), ("q", q)):
        if not math.isfinite(value):
            raise ValueError(f"Filter {filter_id} has a non-numeric parameter: {name}={value}")
    return _PARAMETRIC_TYPES[kind](
        id=filter_id,
        hz=clamp(hz, *HZ_RANGE),
        db=clamp(db, *DB_RANGE),
        q=clamp(q, *Q_RANGE),
    )


def filter_to_dict(filt: Filter) -> dict[str, Any]:
    if isinstance(filt, CustomFilter):
        return {
            "type": filt.kind,
            "id": filt.id,
            "b0": filt.b0,
            "b1": filt.b1,
            "b2": filt.b2,
            "a1": filt.a1,
            "a2": filt.a2,
        }
    return {"type": filt.kind, "id": filt.id, "hz": filt.hz, "db": filt.db, "q": filt.q}


class FilterSet:
    """Ordered mapping of filter id to filter plus the currently selected id."""

    def __init__(self, filters: Iterable[Filter] = (), selected_id: int | None = None) -> None:
        self._filters: dict[int, Filter] = {}
        for filt in filters:
            self.add(filt)
        self.selected_id: int | None = None
        if selected_id is not None:
            self.select(selected_id)

    @classmethod
    def from_dicts(cls, entries: Iterable[dict[str, Any]], selected_id: int | None = None) -> "FilterSet":
        return cls((filter_from_dict(entry) for entry in entries), selected_id=selected_id)

    def to_dicts(self) -> list[dict[str, Any]]:
        return [filter_to_dict(filt) for filt in self]

    def __iter__(self) -> Iterator[Filter]:
        return iter(list(self._filters.values()))

    def __len__(self) -> int:
        return len(self._filters)

    def __contains__(self, filter_id: object) -> bool:
        return filter_id in self._filters

    def ids(self) -> list[int]:
        return list(self._filters)

    def new_id(self) -> int:
        return max(self._filters, default=0) + 1

    def get(self, filter_id: int) -> Filter:
        try:
            return self._filters[filter_id]
        except KeyError:
            raise KeyError(f"Filter '{filter_id}' not found") from None

    def add(self, filt: Filter) -> None:
        if filt.id in self._filters:
            raise ValueError(f"Duplicate filter id {filt.id}")
        self._filters[filt.id] = filt

    def replace(self, filt: Filter) -> None:
        if filt.id not in self._filters:
            raise KeyError(f"Filter '{filt.id}' not found")
        self._filters[filt.id] = filt

    def remove(self, filter_id: int) -> Filter:
        removed = self.get(filter_id)
        del self._filters[filter_id]
        if self.selected_id == filter_id:
            self.selected_id = None
        return removed

    def select(self, filter_id: int | None) -> None:
        if filter_id is not None and filter_id not in self._filters:
            raise KeyError(f"Filter '{filter_id}' not found")
        self.selected_id = filter_id

    @property
    def selected(self) -> Filter | None:
        if self.selected_id is None:
            return None
        return self._filters.get(self.selected_id)

    def copy(self) -> "FilterSet":
        # Filters are frozen, so sharing instances between copies is safe.
        return FilterSet(self._filters.values(), selected_id=self.selected_id)

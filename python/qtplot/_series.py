"""Series — immutable named data held by a figure.

A series is either numeric (ordered ``(x, y)`` points for line and scatter
charts) or categorical (raw, possibly repeated labels for histograms).
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple, Union

Point = Tuple[float, float]

DEFAULT_SERIES_NAME = "Series"


def _to_points(data: Union[Iterable, "object"]) -> Tuple[Point, ...]:
    """Convert data to a tuple of ``(x, y)`` float pairs. Supports numpy ``(n, 2)`` arrays."""
    # numpy array path
    try:
        import numpy as np

        if isinstance(data, np.ndarray):
            if data.ndim != 2 or data.shape[1] != 2:
                raise ValueError(f"points array must have shape (n, 2), got {data.shape}")
            return tuple((x, y) for x, y in data.astype(np.float64).tolist())
    except ImportError:
        pass

    points = []
    for i, pair in enumerate(data):
        values = list(pair)
        if len(values) != 2:
            raise ValueError(f"point {i} must be an (x, y) pair, got {len(values)} values")
        points.append((float(values[0]), float(values[1])))
    return tuple(points)


def _to_labels(data: Iterable) -> Tuple[str, ...]:
    if isinstance(data, str):
        raise TypeError("labels must be a sequence of strings, not a single string")
    return tuple(str(v) for v in data)


def frequency_table(labels: Iterable[str]) -> List[Tuple[str, int]]:
    """Count occurrences of each distinct label.

    Categories come back in first-seen order, not sorted::

        >>> frequency_table(["b", "a", "b", "c", "a", "a"])
        [('b', 2), ('a', 3), ('c', 1)]
    """
    counts: Dict[str, int] = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    return list(counts.items())


class Series:
    """Base class for figure series. Use :class:`NumericSeries` or :class:`CategorySeries`."""

    __slots__ = ("_name",)

    kind = ""

    def __init__(self, name: Optional[str]) -> None:
        self._name = name

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def display_name(self) -> str:
        """Name shown in the legend; ``"Series"`` when unset or empty."""
        return self._name or DEFAULT_SERIES_NAME


class NumericSeries(Series):
    """Ordered ``(x, y)`` points. No sort or uniqueness constraint on x."""

    __slots__ = ("_points",)

    kind = "numeric"

    def __init__(self, name: Optional[str], points) -> None:
        super().__init__(name)
        self._points = _to_points(points)

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    def __len__(self) -> int:
        return len(self._points)

    def __eq__(self, other) -> bool:
        if not isinstance(other, NumericSeries):
            return NotImplemented
        return self._name == other._name and self._points == other._points

    def __hash__(self) -> int:
        return hash((self.kind, self._name, self._points))

    def __repr__(self) -> str:
        return f"NumericSeries(name={self._name!r}, points={len(self._points)})"


class CategorySeries(Series):
    """Raw category observations, counted into bars at display time."""

    __slots__ = ("_labels",)

    kind = "category"

    def __init__(self, name: Optional[str], labels: Iterable[str]) -> None:
        super().__init__(name)
        self._labels = _to_labels(labels)

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    def frequencies(self) -> List[Tuple[str, int]]:
        return frequency_table(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CategorySeries):
            return NotImplemented
        return self._name == other._name and self._labels == other._labels

    def __hash__(self) -> int:
        return hash((self.kind, self._name, self._labels))

    def __repr__(self) -> str:
        return f"CategorySeries(name={self._name!r}, labels={len(self._labels)})"

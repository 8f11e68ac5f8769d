"""
Weight algebra for path costs.

Path searches are generic over the cost domain. A weight algebra supplies the
additive identity, an "unreachable" sentinel that compares greater than any
achievable sum, the additive combination and the comparison, plus the text
conversion used by the network file format.

Three algebras are provided:
- ``FloatWeights``: travel times or distances as floats
- ``HopWeights``: integer hop counts
- ``DurationWeights``: ``datetime.timedelta`` travel times

Example:
    >>> algebra = FloatWeights()
    >>> algebra.add(algebra.zero, 2.5)
    2.5
    >>> algebra.less(2.5, algebra.unreachable)
    True
"""

import math
from abc import ABC, abstractmethod
from datetime import timedelta
from functools import cmp_to_key
from typing import Any, Generic, TypeVar

W = TypeVar("W")


def format_number(value: float) -> str:
    """
    Format a number independently of locale.

    Integral values are written without a fractional part, everything else
    uses Python's shortest round-tripping representation.
    """
    if isinstance(value, int):
        return str(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def parse_number(text: str) -> float:
    """
    Parse a finite decimal number.

    Raises:
        ValueError: If the text is not a number or is not finite
    """
    value = float(text.strip())
    if not math.isfinite(value):
        raise ValueError(f"Number must be finite: {text!r}")
    return value


class WeightAlgebra(ABC, Generic[W]):
    """Abstract cost domain used by the path searches."""

    @property
    @abstractmethod
    def zero(self) -> W:
        """Additive identity."""

    @property
    @abstractmethod
    def unreachable(self) -> W:
        """Sentinel greater than any achievable finite sum."""

    @abstractmethod
    def add(self, a: W, b: W) -> W:
        """Combine two costs."""

    def less(self, a: W, b: W) -> bool:
        """Strict total order on costs."""
        return a < b  # type: ignore[operator]

    def compare(self, a: W, b: W) -> int:
        """Three-way comparison derived from ``less``."""
        if self.less(a, b):
            return -1
        if self.less(b, a):
            return 1
        return 0

    def order_key(self, weight: W) -> Any:
        """
        Wrap a weight so that ``<`` on the result follows ``less``.

        Heaps and sorts go through this key, so costs without a native
        ordering still work.
        """
        return cmp_to_key(self.compare)(weight)

    def is_valid(self, weight: Any) -> bool:
        """Whether ``weight`` may be stored on a connection."""
        return True

    @abstractmethod
    def parse(self, text: str) -> W:
        """
        Parse a weight from its text form.

        Raises:
            ValueError: If the text does not hold a valid weight
        """

    @abstractmethod
    def format(self, weight: W) -> str:
        """Text form of a weight, inverse of ``parse``."""


class FloatWeights(WeightAlgebra[float]):
    """Non-negative float costs, unreachable is ``math.inf``."""

    @property
    def zero(self) -> float:
        return 0.0

    @property
    def unreachable(self) -> float:
        return math.inf

    def add(self, a: float, b: float) -> float:
        return a + b

    def is_valid(self, weight: Any) -> bool:
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            return False
        return math.isfinite(weight) and weight >= 0

    def parse(self, text: str) -> float:
        value = parse_number(text)
        if value < 0:
            raise ValueError(f"Weight must be non-negative: {text!r}")
        return value

    def format(self, weight: float) -> str:
        return format_number(weight)


class HopWeights(WeightAlgebra[int]):
    """
    Integer hop counts.

    Python integers are unbounded, so the sentinel is ``math.inf``, which
    compares greater than every integer.
    """

    @property
    def zero(self) -> int:
        return 0

    @property
    def unreachable(self) -> Any:
        return math.inf

    def add(self, a: int, b: int) -> int:
        return a + b

    def is_valid(self, weight: Any) -> bool:
        return isinstance(weight, int) and not isinstance(weight, bool) and weight >= 0

    def parse(self, text: str) -> int:
        value = int(text.strip())
        if value < 0:
            raise ValueError(f"Hop count must be non-negative: {text!r}")
        return value

    def format(self, weight: int) -> str:
        return str(weight)


class DurationWeights(WeightAlgebra[timedelta]):
    """
    Travel times as ``timedelta``.

    Sums saturate at ``timedelta.max``, which doubles as the sentinel. The text
    form is a number of seconds.
    """

    @property
    def zero(self) -> timedelta:
        return timedelta(0)

    @property
    def unreachable(self) -> timedelta:
        return timedelta.max

    def add(self, a: timedelta, b: timedelta) -> timedelta:
        try:
            return a + b
        except OverflowError:
            return timedelta.max

    def is_valid(self, weight: Any) -> bool:
        return isinstance(weight, timedelta) and timedelta(0) <= weight < timedelta.max

    def parse(self, text: str) -> timedelta:
        seconds = parse_number(text)
        if seconds < 0:
            raise ValueError(f"Duration must be non-negative: {text!r}")
        return timedelta(seconds=seconds)

    def format(self, weight: timedelta) -> str:
        return format_number(weight.total_seconds())

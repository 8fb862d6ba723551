"""Multiple seasonal-trend decomposition using Loess (MSTL).

Bandara, K., Hyndman, R. J., & Bergmeir, C. (2021).
MSTL: A Seasonal-Trend Decomposition Algorithm for Time Series with
Multiple Seasonal Patterns.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from .errors import ParameterError, SeriesError
from .stl import StlParams, strength


def _box_cox_value(value: float, lam: float) -> float:
    if lam == 0.0:
        if value > 0.0:
            return math.log(value)
        if value == 0.0:
            return -math.inf
        return math.nan
    try:
        powered = math.pow(value, lam)
    except ValueError:
        return math.nan
    return (powered - 1.0) / lam


def box_cox(values: Sequence[float], lam: float) -> list[float]:
    """Box-Cox transform of ``values``; a ``lam`` of 0 gives the natural log."""
    return [_box_cox_value(float(v), lam) for v in values]


@dataclass(frozen=True)
class MstlResult:
    """The components of an MSTL decomposition.

    ``seasonal`` holds one component per period, in the order the periods
    were given.
    """

    seasonal: list[list[float]]
    trend: list[float]
    remainder: list[float]

    def seasonal_strength(self) -> list[float]:
        """Strength of each seasonal component."""
        return [strength(component, self.remainder) for component in self.seasonal]

    def trend_strength(self) -> float:
        """Strength of the trend component."""
        return strength(self.trend, self.remainder)


@dataclass(frozen=True)
class MstlParams:
    """MSTL settings.

    ``lam`` enables a Box-Cox transform of the series before decomposing.
    ``seasonal_lengths`` gives one seasonal smoother length per period.
    """

    iterations: int = 2
    lam: float | None = None
    seasonal_lengths: tuple[int, ...] | None = None
    stl_params: StlParams = field(default_factory=StlParams)

    def __post_init__(self) -> None:
        if self.seasonal_lengths is not None:
            object.__setattr__(self, "seasonal_lengths", tuple(self.seasonal_lengths))

    def _check(self, n: int, periods: Sequence[int]) -> None:
        if any(p < 2 for p in periods):
            raise ParameterError("periods must be at least 2")
        for period in periods:
            if n < period * 2:
                raise SeriesError("series has less than two periods")
        if self.lam is not None and not 0.0 <= self.lam <= 1.0:
            raise ParameterError("lambda must be between 0 and 1")
        if self.seasonal_lengths is not None and len(self.seasonal_lengths) != len(periods):
            raise ParameterError("seasonal_lengths must have the same length as periods")
        if not periods:
            raise ParameterError("periods must not be empty")

    def _stl_for(self, index: int, rank: int) -> StlParams:
        if self.seasonal_lengths is not None:
            return replace(self.stl_params, seasonal_length=self.seasonal_lengths[index])
        if self.stl_params.seasonal_length is not None:
            return self.stl_params
        return replace(self.stl_params, seasonal_length=7 + 4 * (rank + 1))

    def fit(self, series: Sequence[float], periods: Sequence[int]) -> MstlResult:
        """Decompose ``series`` into one seasonal component per period."""
        y = [float(v) for v in series]
        periods = list(periods)
        self._check(len(y), periods)

        iterations = 1 if len(periods) == 1 else self.iterations
        if iterations < 1:
            raise ParameterError("iterations must be at least 1")

        # Fit shorter periods first while keeping results in the caller's order.
        order = sorted(range(len(periods)), key=periods.__getitem__)

        deseasonalized = box_cox(y, self.lam) if self.lam is not None else y
        seasonality: list[list[float]] = [[] for _ in periods]
        trend: list[float] = []

        for iteration in range(iterations):
            for rank, index in enumerate(order):
                if iteration > 0:
                    deseasonalized = [
                        d + s for d, s in zip(deseasonalized, seasonality[index])
                    ]
                result = self._stl_for(index, rank).fit(deseasonalized, periods[index])
                seasonality[index] = result.seasonal
                trend = result.trend
                deseasonalized = [
                    d - s for d, s in zip(deseasonalized, seasonality[index])
                ]

        remainder = [d - t for d, t in zip(deseasonalized, trend)]
        return MstlResult(seasonal=seasonality, trend=trend, remainder=remainder)


def decompose(series: Sequence[float], periods: Sequence[int]) -> MstlResult:
    """Decompose ``series`` with default MSTL settings."""
    return MstlParams().fit(series, periods)
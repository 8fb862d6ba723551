"""Seasonal-trend decomposition using Loess (STL) for a single period."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import ParameterError, SeriesError
from .stl_core import run_stl


def _variance(values: Sequence[float]) -> float:
    """Sample variance with an n - 1 denominator; NaN when undefined."""
    count = len(values)
    if count < 2:
        return math.nan
    mean = sum(values) / count
    return sum((v - mean) ** 2 for v in values) / (count - 1)


def strength(component: Sequence[float], remainder: Sequence[float]) -> float:
    """Strength of a component relative to the remainder, clamped at 0."""
    combined = [c + r for c, r in zip(component, remainder)]
    var_remainder = _variance(remainder)
    var_combined = _variance(combined)
    if math.isnan(var_remainder) or math.isnan(var_combined) or var_combined == 0.0:
        return 0.0
    value = 1.0 - var_remainder / var_combined
    if math.isnan(value):
        return 0.0
    return max(value, 0.0)


def _jump_for(length: int) -> int:
    return max(math.ceil(length / 10.0), 1)


def _check_degree(name: str, degree: int) -> None:
    if degree not in (0, 1):
        raise ParameterError(f"{name} must be 0 or 1")


@dataclass(frozen=True)
class StlResult:
    """The components of an STL decomposition."""

    seasonal: list[float]
    trend: list[float]
    remainder: list[float]
    weights: list[float]

    @property
    def resid(self) -> list[float]:
        """The remainder, under its other common name."""
        return self.remainder

    @property
    def nobs(self) -> int:
        """Number of observations decomposed."""
        return len(self.seasonal)

    def seasonal_strength(self) -> float:
        """Strength of the seasonal component."""
        return strength(self.seasonal, self.remainder)

    def trend_strength(self) -> float:
        """Strength of the trend component."""
        return strength(self.trend, self.remainder)


@dataclass(frozen=True)
class StlParams:
    """STL settings; any left as None are derived from the period and other settings."""

    seasonal_length: int | None = None
    trend_length: int | None = None
    low_pass_length: int | None = None
    seasonal_degree: int = 0
    trend_degree: int = 1
    low_pass_degree: int | None = None
    seasonal_jump: int | None = None
    trend_jump: int | None = None
    low_pass_jump: int | None = None
    inner_loops: int | None = None
    outer_loops: int | None = None
    robust: bool = False

    def fit(self, series: Sequence[float], period: int) -> StlResult:
        """Decompose ``series`` with the given seasonal ``period``."""
        y = [float(v) for v in series]
        n = len(y)
        if n < period * 2:
            raise SeriesError("series has less than two periods")

        seasonal_degree = self.seasonal_degree
        trend_degree = self.trend_degree
        low_pass_degree = (
            trend_degree if self.low_pass_degree is None else self.low_pass_degree
        )

        ns = 7 if self.seasonal_length is None else self.seasonal_length
        ns = max(ns, 3)
        if ns % 2 == 0:
            ns += 1

        np_ = max(period, 2)

        if self.trend_length is None:
            nt = math.ceil((1.5 * np_) / (1.0 - 1.5 / ns))
        else:
            nt = self.trend_length
        nt = max(nt, 3)
        if nt % 2 == 0:
            nt += 1

        if self.low_pass_length is None:
            nl = np_ + 1 if np_ % 2 == 0 else np_
        else:
            nl = self.low_pass_length

        inner = self.inner_loops
        if inner is None:
            inner = 2 if self.robust else 5
        outer = self.outer_loops
        if outer is None:
            outer = 15 if self.robust else 0

        ns_jump = _jump_for(ns) if self.seasonal_jump is None else self.seasonal_jump
        nt_jump = _jump_for(nt) if self.trend_jump is None else self.trend_jump
        nl_jump = _jump_for(nl) if self.low_pass_jump is None else self.low_pass_jump

        if ns < 3:
            raise ParameterError("seasonal_length must be at least 3")
        if nt < 3:
            raise ParameterError("trend_length must be at least 3")
        if nl < 3:
            raise ParameterError("low_pass_length must be at least 3")
        if np_ < 2:
            raise ParameterError("period must be at least 2")

        _check_degree("seasonal_degree", seasonal_degree)
        _check_degree("trend_degree", trend_degree)
        _check_degree("low_pass_degree", low_pass_degree)

        if ns % 2 != 1:
            raise ParameterError("seasonal_length must be odd")
        if nt % 2 != 1:
            raise ParameterError("trend_length must be odd")
        if nl % 2 != 1:
            raise ParameterError("low_pass_length must be odd")

        season, trend, weights = run_stl(
            y,
            np_,
            ns,
            nt,
            nl,
            seasonal_degree,
            trend_degree,
            low_pass_degree,
            ns_jump,
            nt_jump,
            nl_jump,
            inner,
            outer,
        )
        remainder = [v - s - t for v, s, t in zip(y, season, trend)]
        return StlResult(
            seasonal=season, trend=trend, remainder=remainder, weights=weights
        )


def decompose(series: Sequence[float], period: int) -> StlResult:
    """Decompose ``series`` with default STL settings."""
    return StlParams().fit(series, period)
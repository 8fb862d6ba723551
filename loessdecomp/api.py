"""High-level STL and MSTL entry points with statsmodels-style defaults."""

from __future__ import annotations

import math
from collections.abc import Sequence

from . import mstl as _mstl
from . import stl as _stl
from .mstl import MstlResult
from .stl import StlParams, StlResult


def _odd_at_least(value: int) -> int:
    return value + 1 if value % 2 == 0 else value


def _default_trend_length(seasonal: int, period: int) -> int:
    """Smallest odd trend window following the statsmodels rule, at least 3."""
    seasonal_len = _odd_at_least(seasonal)
    raw = math.ceil((1.5 * period) / (1.0 - 1.5 / seasonal_len))
    trend_len = _odd_at_least(max(raw, 0))
    return max(trend_len, 3)


class STL:
    """STL decomposition of one series with a fixed seasonal period."""

    def __init__(
        self,
        endog: Sequence[float],
        *,
        period: int | None = None,
        seasonal: int = 7,
        trend: int | None = None,
        low_pass: int | None = None,
        seasonal_deg: int = 1,
        trend_deg: int = 1,
        low_pass_deg: int = 1,
        robust: bool = False,
        seasonal_jump: int | None = 1,
        trend_jump: int | None = 1,
        low_pass_jump: int | None = 1,
    ) -> None:
        if period is None:
            raise ValueError("Period must be specified for ndarray input")
        data = [float(v) for v in endog]
        if len(data) < period * 2:
            raise ValueError(
                f"endog must have 2 complete cycles requires {period * 2} observations. "
                f"endog only has {len(data)} observation(s)"
            )
        self._data = data
        self._period = period
        self._seasonal = seasonal
        self._trend = trend
        self._low_pass = low_pass
        self._seasonal_deg = seasonal_deg
        self._trend_deg = trend_deg
        self._low_pass_deg = low_pass_deg
        self._robust = robust
        self._seasonal_jump = seasonal_jump
        self._trend_jump = trend_jump
        self._low_pass_jump = low_pass_jump

    @property
    def period(self) -> int:
        """The seasonal period."""
        return self._period

    @property
    def nobs(self) -> int:
        """Number of observations in the series."""
        return len(self._data)

    @property
    def seasonal(self) -> int:
        """Length of the seasonal smoother."""
        return self._seasonal

    def fit(
        self, inner_iter: int | None = None, outer_iter: int | None = None
    ) -> StlResult:
        """Decompose the series; iteration counts default from ``robust``."""
        trend_length = (
            self._trend
            if self._trend is not None
            else _default_trend_length(self._seasonal, self._period)
        )
        low_pass_length = (
            self._low_pass
            if self._low_pass is not None
            else _odd_at_least(self._period)
        )
        inner = inner_iter if inner_iter is not None else (2 if self._robust else 5)
        outer = outer_iter if outer_iter is not None else (15 if self._robust else 0)

        params = StlParams(
            seasonal_length=self._seasonal,
            trend_length=trend_length,
            low_pass_length=low_pass_length,
            seasonal_degree=self._seasonal_deg,
            trend_degree=self._trend_deg,
            low_pass_degree=self._low_pass_deg,
            seasonal_jump=1 if self._seasonal_jump is None else self._seasonal_jump,
            trend_jump=1 if self._trend_jump is None else self._trend_jump,
            low_pass_jump=1 if self._low_pass_jump is None else self._low_pass_jump,
            inner_loops=inner,
            outer_loops=outer,
            robust=self._robust,
        )
        return params.fit(self._data, self._period)


def stl_decompose(series: Sequence[float], period: int) -> StlResult:
    """STL decomposition with default settings."""
    return _stl.decompose(series, period)


def mstl_decompose(series: Sequence[float], periods: Sequence[int]) -> MstlResult:
    """MSTL decomposition with default settings."""
    return _mstl.decompose(series, periods)
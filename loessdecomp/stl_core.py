"""Core STL smoothing routines (seasonal-trend decomposition using Loess).

Cleveland, R. B., Cleveland, W. S., McRae, J. E., & Terpenning, I. (1990).
STL: A Seasonal-Trend Decomposition Procedure Based on Loess.
Journal of Official Statistics, 6(1), 3-33.
"""

from __future__ import annotations

import math
from collections.abc import Sequence


def _est(
    y: Sequence[float],
    n: int,
    length: int,
    degree: int,
    xs: float,
    nleft: int,
    nright: int,
    userw: bool,
    rw: Sequence[float],
) -> float | None:
    """Loess estimate at ``xs`` from the 1-based window [nleft, nright].

    Returns None when every weight in the window vanishes.
    """
    data_range = n - 1.0
    h = max(xs - nleft, nright - xs)
    if length > n:
        h += (length - n) // 2

    h9 = 0.999 * h
    h1 = 0.001 * h

    positions = range(nleft, nright + 1)
    weights = []
    total = 0.0
    for j in positions:
        r = abs(j - xs)
        w = 0.0
        if r <= h9:
            w = 1.0 if r <= h1 else (1.0 - (r / h) ** 3) ** 3
            if userw:
                w *= rw[j - 1]
            total += w
        weights.append(w)

    if total <= 0.0:
        return None

    weights = [w / total for w in weights]

    if h > 0.0 and degree > 0:
        center = sum(w * j for w, j in zip(weights, positions))
        slope = xs - center
        spread = sum(w * (j - center) ** 2 for w, j in zip(weights, positions))
        if math.sqrt(spread) > 0.001 * data_range:
            slope /= spread
            weights = [w * (slope * (j - center) + 1.0) for w, j in zip(weights, positions)]

    return sum(w * y[j - 1] for w, j in zip(weights, positions))


def _ess(
    y: Sequence[float],
    n: int,
    length: int,
    degree: int,
    jump: int,
    userw: bool,
    rw: Sequence[float],
) -> list[float]:
    """Loess-smooth ``y`` with a window of ``length``, evaluating every ``jump`` points."""
    ys = [0.0] * n
    if n < 2:
        ys[0] = y[0]
        return ys

    def fit_at(i: int, left: int, right: int) -> None:
        value = _est(y, n, length, degree, float(i), left, right, userw, rw)
        ys[i - 1] = y[i - 1] if value is None else value

    nleft = 0
    nright = 0
    newnj = min(jump, n - 1)

    if length >= n:
        nleft, nright = 1, n
        for i in range(1, n + 1, newnj):
            fit_at(i, nleft, nright)
    elif newnj == 1:
        nsh = (length + 1) // 2
        nleft, nright = 1, length
        for i in range(1, n + 1):
            if i > nsh and nright != n:
                nleft += 1
                nright += 1
            fit_at(i, nleft, nright)
    else:
        nsh = (length + 1) // 2
        for i in range(1, n + 1, newnj):
            if i < nsh:
                nleft, nright = 1, length
            elif i > n - nsh:
                nleft, nright = n - length + 1, n
            else:
                nleft, nright = i - nsh + 1, length + i - nsh
            fit_at(i, nleft, nright)

    if newnj != 1:
        for i in range(1, n - newnj + 1, newnj):
            delta = (ys[i + newnj - 1] - ys[i - 1]) / newnj
            for j in range(i + 1, i + newnj):
                ys[j - 1] = ys[i - 1] + delta * (j - i)
        k = ((n - 1) // newnj) * newnj + 1
        if k != n:
            fit_at(n, nleft, nright)
            if k != n - 1:
                delta = (ys[n - 1] - ys[k - 1]) / (n - k)
                for j in range(k + 1, n):
                    ys[j - 1] = ys[k - 1] + delta * (j - k)

    return ys


def moving_average(values: Sequence[float], length: int) -> list[float]:
    """Return the running means of every window of ``length`` consecutive values."""
    if length < 1 or length > len(values):
        raise ValueError("moving average length must be between 1 and the number of values")
    total = sum(values[:length])
    averages = [total / length]
    for old, new in zip(values, values[length:]):
        total = total - old + new
        averages.append(total / length)
    return averages


def _low_pass(values: Sequence[float], period: int) -> list[float]:
    """Apply the period, period and 3-point moving averages in turn."""
    return moving_average(moving_average(moving_average(values, period), period), 3)


def robustness_weights(y: Sequence[float], fit: Sequence[float]) -> list[float]:
    """Bisquare robustness weights from the residuals of ``fit`` against ``y``."""
    residuals = [abs(a - b) for a, b in zip(y, fit)]
    n = len(residuals)
    ordered = sorted(residuals)
    cmad = 3.0 * (ordered[(n - 1) // 2] + ordered[n // 2])  # six times the median
    c9 = 0.999 * cmad
    c1 = 0.001 * cmad

    def weight(r: float) -> float:
        if r <= c1:
            return 1.0
        if r <= c9:
            return (1.0 - (r / cmad) ** 2) ** 2
        return 0.0

    return [weight(r) for r in residuals]


def _seasonal_smooth(
    y: Sequence[float],
    n: int,
    period: int,
    length: int,
    degree: int,
    jump: int,
    userw: bool,
    rw: Sequence[float],
) -> list[float]:
    """Smooth each cycle-subseries, extending it by one point at each end."""
    season = [0.0] * (n + 2 * period)
    for j in range(period):
        sub = list(y[j::period])
        sub_weights = list(rw[j::period]) if userw else []
        k = len(sub)

        smoothed = _ess(sub, k, length, degree, jump, userw, sub_weights)

        first = _est(sub, k, length, degree, 0.0, 1, min(length, k), userw, sub_weights)
        if first is None:
            first = smoothed[0]
        last = _est(
            sub, k, length, degree, float(k + 1), max(1, k - length + 1), k, userw, sub_weights
        )
        if last is None:
            last = smoothed[-1]

        season[j::period] = [first, *smoothed, last]
    return season


def _inner_loop(
    y: Sequence[float],
    period: int,
    seasonal_length: int,
    trend_length: int,
    low_pass_length: int,
    seasonal_degree: int,
    trend_degree: int,
    low_pass_degree: int,
    seasonal_jump: int,
    trend_jump: int,
    low_pass_jump: int,
    inner_loops: int,
    userw: bool,
    rw: Sequence[float],
    season: list[float],
    trend: list[float],
) -> tuple[list[float], list[float]]:
    n = len(y)
    for _ in range(inner_loops):
        detrended = [a - b for a, b in zip(y, trend)]
        cycle = _seasonal_smooth(
            detrended, n, period, seasonal_length, seasonal_degree, seasonal_jump, userw, rw
        )
        low = _ess(
            _low_pass(cycle, period), n, low_pass_length, low_pass_degree, low_pass_jump, False, []
        )
        season = [c - lp for c, lp in zip(cycle[period:], low)]
        deseasonalized = [a - s for a, s in zip(y, season)]
        trend = _ess(deseasonalized, n, trend_length, trend_degree, trend_jump, userw, rw)
    return season, trend


def run_stl(
    y: Sequence[float],
    period: int,
    seasonal_length: int,
    trend_length: int,
    low_pass_length: int,
    seasonal_degree: int,
    trend_degree: int,
    low_pass_degree: int,
    seasonal_jump: int,
    trend_jump: int,
    low_pass_jump: int,
    inner_loops: int,
    outer_loops: int,
) -> tuple[list[float], list[float], list[float]]:
    """Run STL on ``y`` with fully resolved parameters.

    Returns the seasonal component, the trend component and the robustness
    weights, each as long as ``y``. Without outer loops every weight is 1.
    """
    values = [float(v) for v in y]
    n = len(values)
    season = [0.0] * n
    trend = [0.0] * n
    rw = [0.0] * n
    userw = False

    completed = 0
    while True:
        season, trend = _inner_loop(
            values,
            period,
            seasonal_length,
            trend_length,
            low_pass_length,
            seasonal_degree,
            trend_degree,
            low_pass_degree,
            seasonal_jump,
            trend_jump,
            low_pass_jump,
            inner_loops,
            userw,
            rw,
            season,
            trend,
        )
        completed += 1
        if completed > outer_loops:
            break
        fit = [t + s for t, s in zip(trend, season)]
        rw = robustness_weights(values, fit)
        userw = True

    if outer_loops == 0:
        rw = [1.0] * n

    return season, trend, rw
# loessdecomp

Seasonal-trend decomposition of time series using Loess. It needs nothing
beyond the standard library.

- **STL** splits a series into a seasonal component, a trend and a remainder.
- **MSTL** handles several seasonal periods at once and returns one seasonal
  component per period.

Inputs can be any sequence of numbers. Results hold plain Python lists of floats.

## Installation

```
pip install loessdecomp
```

## Quick start

```python
from loessdecomp.api import STL, stl_decompose, mstl_decompose

series = [5.0, 9.0, 2.0, 9.0, 0.0, 6.0, 3.0, 8.0, 5.0, 8.0, 7.0, 8.0, 8.0, 0.0, 2.0,
          5.0, 0.0, 5.0, 6.0, 7.0, 3.0, 6.0, 1.0, 4.0, 4.0, 4.0, 3.0, 7.0, 5.0, 8.0]

# Interface in the style of statsmodels
result = STL(series, period=7, seasonal=7, robust=True).fit()
print(result.seasonal[:5], result.trend[:5], result.resid[:5])
print(result.seasonal_strength(), result.trend_strength())

# Plain STL with default parameters
result = stl_decompose(series, 7)

# Several seasonal periods
multi = mstl_decompose(series, [6, 10])
print(len(multi.seasonal))  # one seasonal component per period
```

## The `STL` class

`loessdecomp.api.STL(endog, *, period, ...)` takes these keyword arguments:

- `seasonal`: the length of the seasonal smoother. The default is 7.
- `trend`: the length of the trend smoother. When it is not given, the length is
  the smallest odd number of at least `1.5 * period / (1 - 1.5 / seasonal)`, and
  never less than 3.
- `low_pass`: the length of the low-pass filter. When it is not given, it is the
  smallest odd number that is at least `period`.
- `seasonal_deg`, `trend_deg`, `low_pass_deg`: the degrees of the local
  polynomials. Each must be 0 or 1, and each defaults to 1.
- `robust`: whether robustness iterations are used.
- `seasonal_jump`, `trend_jump`, `low_pass_jump`: the skip values. Each
  defaults to 1.

`period` is required. If it is missing, or if the series holds fewer than two
full cycles, the constructor raises `ValueError`. The properties `period`,
`nobs` and `seasonal` report the settings.

`fit(inner_iter=None, outer_iter=None)` returns an `StlResult`. By default it
runs 5 inner loops and no outer loops. With `robust=True` the defaults are 2
inner loops and 15 outer loops.

## Finer control

```python
from loessdecomp.stl import StlParams, decompose
from loessdecomp.mstl import MstlParams

result = StlParams(seasonal_length=7, robust=True).fit(series, 7)
print(result.weights[:5], result.nobs)

multi = MstlParams(lam=0.5, iterations=2).fit(series, [6, 10])
```

`StlParams` is a frozen dataclass. Any setting left as `None` is worked out from
the period and the other settings. Note that its `seasonal_degree` defaults to 0.

`StlResult` holds these fields:

- `seasonal`, `trend` and `remainder`, with `resid` as another name for `remainder`.
- `weights`, the robustness weights. These are all 1.0 when no outer loops run.
- `nobs`.

`MstlParams` has these settings:

- `iterations`, which defaults to 2. It is forced to 1 when only one period is given.
- `lam`, an optional Box-Cox lambda between 0 and 1.
- `seasonal_lengths`, one seasonal smoother length per period.
- `stl_params`, an `StlParams` used for each inner STL fit.

Periods are fitted shortest first. The components in `MstlResult.seasonal` are
returned in the order the periods were given. `loessdecomp.mstl.box_cox` exposes
the transform on its own.

`loessdecomp.stl.decompose` and `loessdecomp.mstl.decompose` run with default
settings. The low-level routines `run_stl`, `moving_average` and
`robustness_weights` are in `loessdecomp.stl_core`.

## Errors

The series must contain at least two complete cycles of every period. Periods
must be at least 2, smoother lengths must be odd and at least 3, and degrees
must be 0 or 1. When these rules are broken, a fit raises
`loessdecomp.errors.ParameterError` or `loessdecomp.errors.SeriesError`. Both are
subclasses of `DecompositionError`, which is itself a `ValueError`.

## Strength measures

`seasonal_strength()` and `trend_strength()` report
`max(0, 1 - var(remainder) / var(component + remainder))`. For `MstlResult`,
`seasonal_strength()` returns one value per seasonal component. A value near 1
means a strong seasonal pattern or trend. When a variance is undefined or zero,
the result is 0.

## What it does not do

This is a library only. It has no command-line tool, and it does no plotting or
file input and output.
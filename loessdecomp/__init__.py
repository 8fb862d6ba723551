"""Seasonal-trend decomposition of time series using Loess (STL and MSTL)."""

__version__ = "0.1.4"
__all__ = ["api", "errors", "mstl", "stl", "stl_core"]
# scales.py
"""Radius scale and number formatting used for bubbles, tooltips and the legend."""

import math
from typing import Sequence, Tuple, Union

import numpy as np

from config import RADIUS_DOMAIN, RADIUS_RANGE

ArrayLike = Union[float, Sequence[float], np.ndarray]

SI_PREFIXES = {
    -24: "y", -21: "z", -18: "a", -15: "f", -12: "p", -9: "n", -6: "µ", -3: "m",
    0: "", 3: "k", 6: "M", 9: "G", 12: "T", 15: "P", 18: "E", 21: "Z", 24: "Y",
}


class SqrtScale:
    """
    Square-root scale mapping a value domain onto a radius range.

    Radii grow with the square root of the input, so circle area is
    proportional to the value. Like d3's ``scaleSqrt`` the scale extrapolates
    beyond the domain unless ``clamp`` is set. Negative inputs map as zero.
    """

    def __init__(
        self,
        domain: Tuple[float, float] = RADIUS_DOMAIN,
        range: Tuple[float, float] = RADIUS_RANGE,
        clamp: bool = False,
    ):
        self.domain = domain
        self.range = range
        self.clamp = clamp
        self._d0, self._d1 = math.sqrt(domain[0]), math.sqrt(domain[1])

    def __call__(self, value: ArrayLike) -> Union[float, np.ndarray]:
        values = np.sqrt(np.maximum(np.asarray(value, dtype=float), 0.0))
        span = self._d1 - self._d0
        t = (values - self._d0) / span if span else np.zeros_like(values)
        if self.clamp:
            t = np.clip(t, 0.0, 1.0)
        r0, r1 = self.range
        radii = r0 + t * (r1 - r0)
        if np.ndim(radii) == 0:
            return float(radii)
        return radii


def radius_scale() -> SqrtScale:
    """The bubble radius scale: 0-1000 cases onto 0-8 map units."""
    return SqrtScale(RADIUS_DOMAIN, RADIUS_RANGE)


def format_number(value: float) -> str:
    """Thousands-separated integer, e.g. 1234.6 -> '1,235'."""
    return f"{value:,.0f}"


def format_si(value: float, precision: int = 1) -> str:
    """
    Formats a number with an SI prefix, rounded to ``precision`` significant digits.

    Examples: 100 -> '100', 1000 -> '1k', 10000 -> '10k', 1500 -> '2k'.
    """
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    rounded = float(f"{abs(value):.{precision - 1}e}")
    exponent = math.floor(math.log10(rounded))
    prefix_exponent = max(-24, min(24, 3 * math.floor(exponent / 3)))
    scaled = rounded / 10 ** prefix_exponent
    decimals = max(0, precision - 1 - (exponent - prefix_exponent))
    return f"{sign}{scaled:.{decimals}f}{SI_PREFIXES[prefix_exponent]}"

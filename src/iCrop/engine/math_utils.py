"""Scalar helpers used by the layout, zoom and coordinate code."""

from __future__ import annotations

from ..errors import DivisionUndefined, InvalidInset


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)


def lerp(start: float, end: float, alpha: float) -> float:
    """Interpolate between *start* and *end*; *alpha* is clamped to ``[0, 1]``."""

    alpha = clamp(alpha, 0.0, 1.0)
    return start * (1.0 - alpha) + end * alpha


def inverse_lerp(start: float, end: float, value: float) -> float:
    """Return where *value* sits between *start* and *end*.

    Raises :class:`DivisionUndefined` for an empty range; zoom code maps that
    case to ``0``.
    """

    if start == end:
        raise DivisionUndefined(f"inverse_lerp over empty range [{start}, {end}]")
    return (value - start) / (end - start)


def distance(a: float, b: float) -> float:
    return abs(a - b)


def extrapolate_from_inset(base: float, inset_sum: float) -> float:
    """Return the full length of which *base* is the uncropped ``1 - inset_sum`` part."""

    if inset_sum < 0.0 or inset_sum >= 1.0:
        raise InvalidInset(f"inset sum {inset_sum!r} leaves no positive crop size")
    return base / (1.0 - inset_sum)


__all__ = ["clamp", "distance", "extrapolate_from_inset", "inverse_lerp", "lerp"]

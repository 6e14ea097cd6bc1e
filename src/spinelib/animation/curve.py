"""
Curves

Easing curves applied between two consecutive keyframes.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Optional, Sequence, Tuple

from ..config.settings import BEZIER_SEGMENTS
from ..core.color import Color
from ..core.errors import InvalidCurveDescriptor


class CurveType(Enum):
    """Keyframe easing kinds."""
    LINEAR = "linear"
    STEPPED = "stepped"
    BEZIER = "bezier"


def _clamp01(t: float) -> float:
    if t != t:  # NaN
        return 0.0
    return 0.0 if t < 0.0 else 1.0 if t > 1.0 else t


def bezier_table(cx1: float, cy1: float, cx2: float, cy2: float,
                 segments: int = BEZIER_SEGMENTS) -> Tuple[Tuple[float, float], ...]:
    """
    Sample a cubic Bezier easing curve with endpoints (0,0) and (1,1).

    Uses forward differencing, as the Spine runtimes do. The returned points
    are the interior samples; (0,0) and (1,1) are implied.

    Args:
        cx1, cy1: First control point (x is the time fraction, y the value fraction)
        cx2, cy2: Second control point
        segments: Number of curve segments

    Returns:
        ``segments - 1`` (x, y) samples in increasing parameter order
    """
    subdiv1 = 1.0 / segments
    subdiv2 = subdiv1 * subdiv1
    subdiv3 = subdiv2 * subdiv1
    pre1 = 3.0 * subdiv1
    pre2 = 3.0 * subdiv2
    pre4 = 6.0 * subdiv2
    pre5 = 6.0 * subdiv3
    tmp1x = -cx1 * 2.0 + cx2
    tmp1y = -cy1 * 2.0 + cy2
    tmp2x = (cx1 - cx2) * 3.0 + 1.0
    tmp2y = (cy1 - cy2) * 3.0 + 1.0

    dfx = cx1 * pre1 + tmp1x * pre2 + tmp2x * subdiv3
    dfy = cy1 * pre1 + tmp1y * pre2 + tmp2y * subdiv3
    ddfx = tmp1x * pre4 + tmp2x * pre5
    ddfy = tmp1y * pre4 + tmp2y * pre5
    dddfx = tmp2x * pre5
    dddfy = tmp2y * pre5

    points = []
    x, y = dfx, dfy
    for _ in range(segments - 1):
        points.append((x, y))
        dfx += ddfx
        dfy += ddfy
        ddfx += dddfx
        ddfy += dddfy
        x += dfx
        y += dfy
    return tuple(points)


@dataclass(frozen=True)
class Curve:
    """
    Easing curve of a keyframe, applied on the way to the next keyframe.

    ``control`` holds (cx1, cy1, cx2, cy2) for Bezier curves only.
    """

    kind: CurveType = CurveType.LINEAR
    control: Optional[Tuple[float, float, float, float]] = None
    _table: Tuple[Tuple[float, float], ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.kind is CurveType.BEZIER:
            if self.control is None or len(self.control) != 4:
                raise InvalidCurveDescriptor(self.control)
            object.__setattr__(self, "_table", bezier_table(*self.control))

    def percent(self, t: float) -> float:
        """
        Map a time fraction to a value fraction.

        Args:
            t: Normalized position between two keyframes (clamped to [0, 1])

        Returns:
            Eased fraction of the value change
        """
        t = _clamp01(t)
        if self.kind is CurveType.LINEAR:
            return t
        if self.kind is CurveType.STEPPED:
            return 0.0

        prev_x, prev_y = 0.0, 0.0
        for x, y in self._table:
            if x >= t:
                if x == prev_x:
                    return y
                return prev_y + (y - prev_y) * (t - prev_x) / (x - prev_x)
            prev_x, prev_y = x, y
        if prev_x >= 1.0:
            return 1.0
        # Last point is (1, 1)
        return prev_y + (1.0 - prev_y) * (t - prev_x) / (1.0 - prev_x)

    def __repr__(self):
        if self.kind is CurveType.BEZIER:
            return f"Curve(bezier{self.control})"
        return f"Curve({self.kind.value})"


LINEAR = Curve(CurveType.LINEAR)
STEPPED = Curve(CurveType.STEPPED)


def parse_curve(descriptor) -> Curve:
    """
    Build a curve from its document form.

    Args:
        descriptor: ``None`` or ``"linear"``, ``"stepped"``, or four numbers
            ``[cx1, cy1, cx2, cy2]``

    Raises:
        InvalidCurveDescriptor: For any other shape
    """
    if descriptor is None:
        return LINEAR
    if isinstance(descriptor, str):
        name = descriptor.lower()
        if name == CurveType.LINEAR.value:
            return LINEAR
        if name == CurveType.STEPPED.value:
            return STEPPED
        raise InvalidCurveDescriptor(descriptor)
    if isinstance(descriptor, Sequence):
        if len(descriptor) != 4:
            raise InvalidCurveDescriptor(descriptor)
        if not all(isinstance(v, Real) and not isinstance(v, bool) and math.isfinite(v)
                   for v in descriptor):
            raise InvalidCurveDescriptor(descriptor)
        return Curve(CurveType.BEZIER, tuple(float(v) for v in descriptor))
    raise InvalidCurveDescriptor(descriptor)


def lerp(start: float, end: float, p: float) -> float:
    # Exact at both ends: p == 0 gives start, p == 1 gives end
    return start * (1.0 - p) + end * p


def interpolate(curve: Curve, start, end, t: float):
    """
    Evaluate ``curve`` between two keyframe values.

    Args:
        curve: Curve of the earlier keyframe
        start: Value at the earlier keyframe (float, tuple of floats or Color)
        end: Value at the later keyframe, same shape as ``start``
        t: Normalized time between the keyframes

    Returns:
        Interpolated value with the same shape as ``start``
    """
    if curve.kind is CurveType.STEPPED:
        return start

    p = curve.percent(t)
    if isinstance(start, Color):
        return start.lerp(end, p)
    if isinstance(start, tuple):
        return tuple(lerp(a, b, p) for a, b in zip(start, end))
    return lerp(start, end, p)

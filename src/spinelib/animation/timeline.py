"""
Timelines

Per-property keyframe tracks and their evaluation at an elapsed time.
"""

import logging
from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Tuple

from ..config.settings import (
    DEFAULT_ROTATION,
    DEFAULT_SCALE,
    DEFAULT_TRANSLATION,
    TIME_EPSILON,
)
from ..core.color import Color
from ..core.document import BoneTimelineData, SlotTimelineData
from .curve import LINEAR, Curve, interpolate, parse_curve

logger = logging.getLogger(__name__)


class TimelineProperty(Enum):
    """Animated properties."""
    TRANSLATE = "translate"
    ROTATE = "rotate"
    SCALE = "scale"
    COLOR = "color"
    ATTACHMENT = "attachment"


@dataclass(frozen=True)
class Keyframe:
    """
    Single keyframe: a time, a value and the curve leading to the next keyframe.

    ``value`` is a float (rotation), an (x, y) tuple (translate/scale), a
    Color, or an attachment name (possibly None) for attachment tracks.
    """

    time: float
    value: Any
    curve: Curve = LINEAR

    def __repr__(self):
        return f"Keyframe(t={self.time:.3f}, v={self.value})"


def _sorted_keyframes(keyframes: Iterable[Keyframe], label: str) -> Tuple[Keyframe, ...]:
    keyframes = list(keyframes)
    times = [k.time for k in keyframes]
    if any(b < a for a, b in zip(times, times[1:])):
        logger.warning("Keyframes of %s are not in time order, sorting them", label)
        keyframes.sort(key=lambda k: k.time)
    return tuple(keyframes)


class Timeline:
    """
    Ordered keyframes for one property.

    Intervals are half-open: a time equal to a keyframe's time belongs to
    the interval that starts at that keyframe.
    """

    def __init__(self, target_property: TimelineProperty, keyframes: Iterable[Keyframe] = ()):
        """
        Initialize timeline.

        Args:
            target_property: Property animated by this timeline
            keyframes: Keyframes, expected in non-decreasing time order
        """
        self.target_property = target_property
        self.keyframes: Tuple[Keyframe, ...] = _sorted_keyframes(keyframes, target_property.value)
        self._times: Tuple[float, ...] = tuple(k.time for k in self.keyframes)

    def __len__(self):
        return len(self.keyframes)

    @property
    def max_time(self) -> float:
        return self._times[-1] if self._times else 0.0

    def interval(self, elapsed: float) -> Tuple[Optional[int], Optional[int]]:
        """
        Locate the keyframe interval containing ``elapsed``.

        Returns:
            ``(before, after)`` indices with ``times[before] <= elapsed < times[after]``;
            ``(0, None)`` before the first keyframe, ``(last, None)`` at or after
            the last one and ``(None, None)`` for an empty timeline.
        """
        if not self._times:
            return (None, None)
        if elapsed < self._times[0]:
            return (0, None)
        before = bisect_right(self._times, elapsed) - 1
        if before >= len(self._times) - 1:
            return (len(self._times) - 1, None)
        return (before, before + 1)

    def sample(self, elapsed: float, default=None):
        """
        Sample the timeline at a given time.

        Args:
            elapsed: Time in seconds
            default: Value returned when the timeline has no keyframes

        Returns:
            Interpolated value at this time
        """
        before, after = self.interval(elapsed)
        if before is None:
            return default
        k0 = self.keyframes[before]
        if after is None:
            return k0.value

        k1 = self.keyframes[after]
        span = k1.time - k0.time
        if span <= TIME_EPSILON:
            return k1.value
        return interpolate(k0.curve, k0.value, k1.value, (elapsed - k0.time) / span)

    def __repr__(self):
        return f"Timeline(property={self.target_property.value}, keyframes={len(self.keyframes)})"


class AttachmentTimeline(Timeline):
    """Attachment switches: the active name holds until the next keyframe."""

    def __init__(self, keyframes: Iterable[Keyframe] = ()):
        super().__init__(TimelineProperty.ATTACHMENT, keyframes)

    def sample(self, elapsed: float, default=None):
        before, _ = self.interval(elapsed)
        if before is None:
            return default
        return self.keyframes[before].value


@dataclass(frozen=True)
class BoneDelta:
    """Animated offsets for one bone: added translation, added rotation, multiplied scale."""

    translation: Tuple[float, float] = DEFAULT_TRANSLATION
    rotation: float = DEFAULT_ROTATION  # Degrees
    scale: Tuple[float, float] = DEFAULT_SCALE


class BoneTimeline:
    """Translate, rotate and scale timelines for one bone."""

    def __init__(self, bone_name: str, translate: Timeline = None, rotate: Timeline = None,
                 scale: Timeline = None):
        self.bone_name = bone_name
        self.translate = translate or Timeline(TimelineProperty.TRANSLATE)
        self.rotate = rotate or Timeline(TimelineProperty.ROTATE)
        self.scale = scale or Timeline(TimelineProperty.SCALE)

    @classmethod
    def from_data(cls, bone_name: str, data: BoneTimelineData) -> "BoneTimeline":
        """
        Build runtime timelines from document records.

        Raises:
            InvalidCurveDescriptor: If a keyframe curve is malformed
        """
        translate = Timeline(TimelineProperty.TRANSLATE, [
            Keyframe(k.time, (k.x, k.y), parse_curve(k.curve)) for k in data.translate
        ])
        rotate = Timeline(TimelineProperty.ROTATE, [
            Keyframe(k.time, k.angle, parse_curve(k.curve)) for k in data.rotate
        ])
        scale = Timeline(TimelineProperty.SCALE, [
            Keyframe(k.time, (k.x, k.y), parse_curve(k.curve)) for k in data.scale
        ])
        return cls(bone_name, translate, rotate, scale)

    @property
    def max_time(self) -> float:
        return max(self.translate.max_time, self.rotate.max_time, self.scale.max_time)

    def sample(self, elapsed: float) -> BoneDelta:
        return BoneDelta(
            translation=self.translate.sample(elapsed, DEFAULT_TRANSLATION),
            rotation=self.rotate.sample(elapsed, DEFAULT_ROTATION),
            scale=self.scale.sample(elapsed, DEFAULT_SCALE),
        )

    def __repr__(self):
        return (f"BoneTimeline(bone='{self.bone_name}', translate={len(self.translate)}, "
                f"rotate={len(self.rotate)}, scale={len(self.scale)})")


class SlotTimeline:
    """Attachment and color timelines for one slot."""

    def __init__(self, slot_name: str, attachment: AttachmentTimeline = None,
                 color: Timeline = None):
        self.slot_name = slot_name
        self.attachment = attachment or AttachmentTimeline()
        self.color = color or Timeline(TimelineProperty.COLOR)

    @classmethod
    def from_data(cls, slot_name: str, data: SlotTimelineData) -> "SlotTimeline":
        """
        Build runtime timelines from document records.

        Raises:
            InvalidColor: If a keyframe color is not valid hex
            InvalidCurveDescriptor: If a keyframe curve is malformed
        """
        attachment = AttachmentTimeline([Keyframe(k.time, k.name) for k in data.attachment])
        color = Timeline(TimelineProperty.COLOR, [
            Keyframe(k.time, Color.from_hex(k.color), parse_curve(k.curve)) for k in data.color
        ])
        return cls(slot_name, attachment, color)

    @property
    def max_time(self) -> float:
        return max(self.attachment.max_time, self.color.max_time)

    def attachment_name(self, elapsed: float, default: Optional[str]) -> Optional[str]:
        """Active attachment name; ``default`` when the slot has no attachment keys."""
        if not len(self.attachment):
            return default
        return self.attachment.sample(elapsed)

    def color_at(self, elapsed: float, default: Color) -> Color:
        return self.color.sample(elapsed, default)

    def __repr__(self):
        return (f"SlotTimeline(slot='{self.slot_name}', attachment={len(self.attachment)}, "
                f"color={len(self.color)})")

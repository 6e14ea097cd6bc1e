"""
Animation

Named set of bone and slot timelines with a precomputed duration.
"""

import math
from typing import Callable, Dict, Optional

from ..core.document import AnimationData
from .timeline import BoneTimeline, SlotTimeline


class Animation:
    """
    Complete animation with per-bone and per-slot timelines.

    Timelines are keyed by bone/slot index. The duration is the latest
    keyframe time over every timeline, computed once at construction.
    """

    def __init__(self, name: str, bone_timelines: Dict[int, BoneTimeline] = None,
                 slot_timelines: Dict[int, SlotTimeline] = None):
        """
        Initialize animation.

        Args:
            name: Animation name
            bone_timelines: bone index -> timelines
            slot_timelines: slot index -> timelines
        """
        self.name = name
        self.bone_timelines: Dict[int, BoneTimeline] = dict(bone_timelines or {})
        self.slot_timelines: Dict[int, SlotTimeline] = dict(slot_timelines or {})
        self.duration: float = max(
            [t.max_time for t in self.bone_timelines.values()]
            + [t.max_time for t in self.slot_timelines.values()],
            default=0.0,
        )

    @classmethod
    def from_data(cls, data: AnimationData, bone_index: Callable[[str], int],
                  slot_index: Callable[[str], int]) -> "Animation":
        """
        Build an animation from its document record.

        Raises:
            BoneNotFound: If a bone timeline names an unknown bone
            SlotNotFound: If a slot timeline names an unknown slot
            InvalidCurveDescriptor: If a keyframe curve is malformed
            InvalidColor: If a color keyframe is not valid hex
        """
        bones = {
            bone_index(name): BoneTimeline.from_data(name, timelines)
            for name, timelines in data.bones.items()
        }
        slots = {
            slot_index(name): SlotTimeline.from_data(name, timelines)
            for name, timelines in data.slots.items()
        }
        return cls(data.name, bones, slots)

    def bone_timeline(self, bone_index: int) -> Optional[BoneTimeline]:
        return self.bone_timelines.get(bone_index)

    def slot_timeline(self, slot_index: int) -> Optional[SlotTimeline]:
        return self.slot_timelines.get(slot_index)

    def wrap(self, elapsed: float) -> float:
        """
        Wrap an elapsed time into ``[0, duration)``.

        Raises:
            ValueError: If ``elapsed`` is not a finite number
        """
        if not math.isfinite(elapsed):
            raise ValueError(f"Elapsed time must be finite, got {elapsed}")
        if self.duration <= 0.0:
            return 0.0
        return elapsed % self.duration

    def __repr__(self):
        return (f"Animation(name='{self.name}', duration={self.duration:.2f}s, "
                f"bones={len(self.bone_timelines)}, slots={len(self.slot_timelines)})")

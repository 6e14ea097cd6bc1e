"""
Pose

Evaluated skeleton state: bone world transforms and the ordered sprites
a renderer should draw.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from pyrr import Matrix44

from ..core.color import Color
from ..core.errors import AttachmentNotFound
from ..core.srt import SRT, Vec2
from .animation import Animation
from .skin import Skin, find_attachment

# Unit quad corners: top-left, top-right, bottom-right, bottom-left
_UNIT_QUAD = np.array([
    [-1.0, 1.0, 0.0, 1.0],
    [1.0, 1.0, 0.0, 1.0],
    [1.0, -1.0, 0.0, 1.0],
    [-1.0, -1.0, 0.0, 1.0],
], dtype=np.float64)


@dataclass(frozen=True, eq=False)
class Sprite:
    """
    One image to draw.

    ``transform`` maps the unit quad ``[-1, 1] x [-1, 1]`` into skeleton
    space (row-major, row vectors).
    """

    slot: str
    attachment: str
    transform: Matrix44
    color: Color
    srt: SRT

    def __eq__(self, other):
        if not isinstance(other, Sprite):
            return NotImplemented
        return (self.slot == other.slot
                and self.attachment == other.attachment
                and self.color == other.color
                and self.srt == other.srt
                and np.array_equal(self.transform, other.transform))

    __hash__ = None

    def corners(self) -> Tuple[Vec2, Vec2, Vec2, Vec2]:
        """World-space corners: top-left, top-right, bottom-right, bottom-left."""
        points = _UNIT_QUAD @ np.asarray(self.transform)
        return tuple((float(p[0]), float(p[1])) for p in points)

    def __repr__(self):
        return f"Sprite(slot='{self.slot}', attachment='{self.attachment}', color={self.color})"


@dataclass(frozen=True)
class Pose:
    """World transform of every bone, in declaration order."""

    bones: Dict[str, SRT]

    def __getitem__(self, bone_name: str) -> SRT:
        return self.bones[bone_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.bones)

    def __len__(self):
        return len(self.bones)

    def world_matrices(self) -> Dict[str, Matrix44]:
        return {name: srt.to_matrix44() for name, srt in self.bones.items()}


def resolve_slot(slot, bone_srt: SRT, skin: Skin, default_skin: Optional[Skin],
                 animation: Optional[Animation], elapsed: float) -> Optional[Sprite]:
    """
    Resolve a slot's visible attachment, transform and tint.

    Args:
        slot: Slot to resolve
        bone_srt: World transform of the slot's bone
        skin: Requested skin
        default_skin: Fallback skin (may be None)
        animation: Animation being played, if any
        elapsed: Wrapped animation time

    Returns:
        Sprite, or None when the slot shows nothing at this time

    Raises:
        AttachmentNotFound: If the active attachment is in neither skin
    """
    timeline = animation.slot_timeline(slot.index) if animation is not None else None

    name = slot.attachment
    if timeline is not None:
        name = timeline.attachment_name(elapsed, slot.attachment)
    if name is None:
        return None

    attachment = find_attachment(skin, default_skin, slot.index, name)
    if attachment is None:
        raise AttachmentNotFound(slot.name, name)
    if not attachment.is_drawable:
        return None

    color = slot.color
    if timeline is not None:
        color = timeline.color_at(elapsed, slot.color)

    return Sprite(
        slot=slot.name,
        attachment=attachment.display_name,
        transform=attachment.local_matrix() @ bone_srt.to_matrix44(),
        color=color,
        srt=bone_srt,
    )


def compose_sprites(slots: Sequence, bone_srts: Sequence[SRT], skin: Skin,
                    default_skin: Optional[Skin], animation: Optional[Animation],
                    elapsed: float) -> List[Sprite]:
    """Collect sprites in slot order, bottom to top."""
    sprites = []
    for slot in slots:
        sprite = resolve_slot(slot, bone_srts[slot.bone_index], skin, default_skin,
                              animation, elapsed)
        if sprite is not None:
            sprites.append(sprite)
    return sprites

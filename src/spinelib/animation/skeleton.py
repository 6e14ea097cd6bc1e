"""
Skeleton

Bone hierarchy, slots, skins and animations loaded from a skeleton
document, plus pose evaluation at any point in time.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ..config.settings import DEFAULT_SCALE, DEFAULT_SKIN_NAME
from ..core.color import Color
from ..core.document import BoneData, SkeletonDocument, SlotData
from ..core.errors import (
    AnimationNotFound,
    BoneNotFound,
    CyclicHierarchy,
    InvalidDocument,
    SkinNotFound,
    SlotNotFound,
)
from ..core.srt import SRT
from .animation import Animation
from .pose import Pose, Sprite, compose_sprites
from .skin import Skin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bone:
    """
    Single bone in the hierarchy.

    ``setup`` is the bone's local setup pose relative to its parent. World
    transforms are not stored; they are computed per query.
    """

    name: str
    index: int
    parent_index: Optional[int]
    setup: SRT
    length: float = 0.0
    inherit_rotation: bool = True
    inherit_scale: bool = True

    @classmethod
    def from_data(cls, data: BoneData, index: int, parent_index: Optional[int]) -> "Bone":
        return cls(
            name=data.name,
            index=index,
            parent_index=parent_index,
            setup=SRT.from_degrees(data.scale_x, data.scale_y, data.rotation, data.x, data.y),
            length=data.length,
            inherit_rotation=data.inherit_rotation,
            inherit_scale=data.inherit_scale,
        )

    def __repr__(self):
        return f"Bone(name='{self.name}', index={self.index}, parent={self.parent_index})"


@dataclass(frozen=True)
class Slot:
    """Draw-order slot bound to one bone."""

    name: str
    index: int
    bone_index: int
    color: Color
    attachment: Optional[str] = None

    @classmethod
    def from_data(cls, data: SlotData, index: int, bone_index: int) -> "Slot":
        """
        Raises:
            InvalidColor: If the slot color is not valid hex
        """
        color = Color.from_hex(data.color) if data.color is not None else Color.white()
        return cls(data.name, index, bone_index, color, data.attachment)


def topological_order(parents: Sequence[Optional[int]], names: Sequence[str] = None) -> List[int]:
    """
    Order bone indices so every parent comes before its children.

    Repeatedly scans the unplaced bones and places those whose parent is a
    root or already placed. A pass that places nothing means the remaining
    bones can never resolve.

    Args:
        parents: Parent index per bone (None for roots)
        names: Bone names, used for the error message

    Returns:
        Bone indices in evaluation order

    Raises:
        CyclicHierarchy: If some parent links never resolve
    """
    placed = [False] * len(parents)
    order: List[int] = []
    pending = list(range(len(parents)))

    while pending:
        remaining = []
        for index in pending:
            parent = parents[index]
            if parent is None or (0 <= parent < len(parents) and placed[parent]):
                placed[index] = True
                order.append(index)
            else:
                remaining.append(index)
        if len(remaining) == len(pending):
            labels = [names[i] if names else str(i) for i in remaining]
            raise CyclicHierarchy(labels)
        pending = remaining

    return order


class Skeleton:
    """
    Loaded skeleton document.

    Immutable after construction; every query is a pure function of the
    skeleton and its arguments, so queries may run concurrently.
    """

    def __init__(self, bones: Sequence[Bone], slots: Sequence[Slot],
                 skins: Mapping[str, Skin], animations: Mapping[str, Animation],
                 name: str = "Skeleton"):
        """
        Initialize skeleton.

        Args:
            bones: Bones in declaration order (``index`` matches position)
            slots: Slots in draw order, bottom to top
            skins: Skins by name
            animations: Animations by name
            name: Skeleton name for debugging

        Raises:
            CyclicHierarchy: If the bone parents cannot be ordered
        """
        self.name = name
        self.bones: Tuple[Bone, ...] = tuple(bones)
        self.slots: Tuple[Slot, ...] = tuple(slots)
        self.skins: Dict[str, Skin] = dict(skins)
        self.animations: Dict[str, Animation] = dict(animations)
        self.order: Tuple[int, ...] = tuple(topological_order(
            [b.parent_index for b in self.bones], [b.name for b in self.bones]))
        self._bone_by_name = {b.name: b.index for b in self.bones}
        self._slot_by_name = {s.name: s.index for s in self.slots}

    @classmethod
    def from_document(cls, document: SkeletonDocument, name: str = "Skeleton") -> "Skeleton":
        """
        Build a skeleton from a parsed document.

        Raises:
            LoadError: Any load-time structural error; nothing is partially built
        """
        bones: List[Bone] = []
        bone_by_name: Dict[str, int] = {}
        for data in document.bones:
            parent_index = None
            if data.parent is not None:
                # Parents must be declared before their children
                if data.parent not in bone_by_name:
                    raise BoneNotFound(data.parent)
                parent_index = bone_by_name[data.parent]
            if data.name in bone_by_name:
                raise InvalidDocument(f"Duplicate bone name '{data.name}'", data.name)
            bone = Bone.from_data(data, len(bones), parent_index)
            bones.append(bone)
            bone_by_name[bone.name] = bone.index

        def bone_index(bone_name: str) -> int:
            if bone_name not in bone_by_name:
                raise BoneNotFound(bone_name)
            return bone_by_name[bone_name]

        slots: List[Slot] = []
        slot_by_name: Dict[str, int] = {}
        for data in document.slots:
            if data.name in slot_by_name:
                raise InvalidDocument(f"Duplicate slot name '{data.name}'", data.name)
            slot = Slot.from_data(data, len(slots), bone_index(data.bone))
            slots.append(slot)
            slot_by_name[slot.name] = slot.index

        def slot_index(slot_name: str) -> int:
            if slot_name not in slot_by_name:
                raise SlotNotFound(slot_name)
            return slot_by_name[slot_name]

        skins = {
            skin_name: Skin.from_data(skin_name, slot_attachments, slot_index)
            for skin_name, slot_attachments in document.skins.items()
        }
        animations = {
            anim_name: Animation.from_data(data, bone_index, slot_index)
            for anim_name, data in document.animations.items()
        }

        skeleton = cls(bones, slots, skins, animations, name=name)
        logger.debug("Loaded %r", skeleton)
        return skeleton

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def bone_names(self) -> List[str]:
        return [b.name for b in self.bones]

    def slot_names(self) -> List[str]:
        return [s.name for s in self.slots]

    def skin_names(self) -> List[str]:
        return list(self.skins)

    def animation_names(self) -> List[str]:
        return list(self.animations)

    def attachment_names(self) -> List[str]:
        """
        Every attachment image name across all skins, sorted and de-duplicated.

        Lets callers preload the images they will need.
        """
        return sorted({name for skin in self.skins.values() for name in skin.attachment_names()})

    def get_bone(self, name: str) -> Bone:
        index = self._bone_by_name.get(name)
        if index is None:
            raise BoneNotFound(name)
        return self.bones[index]

    def get_skin(self, name: str) -> Skin:
        skin = self.skins.get(name)
        if skin is None:
            raise SkinNotFound(name)
        return skin

    def get_animation(self, name: str) -> Animation:
        animation = self.animations.get(name)
        if animation is None:
            raise AnimationNotFound(name)
        return animation

    def animation_duration(self, name: str) -> float:
        """
        Duration of an animation in seconds.

        Raises:
            AnimationNotFound: If there is no such animation
        """
        return self.get_animation(name).duration

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _resolve_time(self, animation: Optional[Animation], elapsed: float) -> float:
        if animation is None:
            if not math.isfinite(elapsed):
                raise ValueError(f"Elapsed time must be finite, got {elapsed}")
            return elapsed
        return animation.wrap(elapsed)

    def bone_world_srts(self, animation: Optional[Animation], elapsed: float) -> List[SRT]:
        """
        Compute world transforms for all bones at an (already wrapped) time.

        Local pose = setup pose with the animation added in: translation and
        rotation add, scale multiplies. The world transform places the local
        pose in the parent's propagated transform. A bone with
        ``inherit_rotation`` (``inherit_scale``) off still rotates (scales)
        itself but does not pass its own rotation (scale) on to its children.

        Returns:
            World SRT per bone, indexed like ``self.bones``
        """
        count = len(self.bones)
        world: List[Optional[SRT]] = [None] * count
        propagated: List[Optional[SRT]] = [None] * count

        for index in self.order:
            bone = self.bones[index]
            setup = bone.setup
            x, y = setup.position
            sx, sy = setup.scale
            rotation = setup.rotation

            timeline = animation.bone_timeline(index) if animation is not None else None
            if timeline is not None:
                delta = timeline.sample(elapsed)
                x += delta.translation[0]
                y += delta.translation[1]
                rotation += math.radians(delta.rotation)
                sx *= delta.scale[0]
                sy *= delta.scale[1]

            if bone.parent_index is None:
                parent_rotation = 0.0
                parent_scale = DEFAULT_SCALE
                position = (x, y)
            else:
                parent = propagated[bone.parent_index]
                if parent is None:
                    raise BoneNotFound(self.bones[bone.parent_index].name)
                parent_rotation = parent.rotation
                parent_scale = parent.scale
                position = parent.transform((x, y))

            world[index] = SRT(
                (sx * parent_scale[0], sy * parent_scale[1]),
                parent_rotation + rotation,
                position,
            )

            passed_rotation = parent_rotation + (rotation if bone.inherit_rotation else 0.0)
            if bone.inherit_scale:
                passed_scale = (sx * parent_scale[0], sy * parent_scale[1])
            else:
                passed_scale = parent_scale
            if bone.inherit_rotation and bone.inherit_scale:
                propagated[index] = world[index]
            else:
                propagated[index] = SRT(passed_scale, passed_rotation, position)

        return world

    def pose(self, animation_name: Optional[str] = None, elapsed: float = 0.0) -> Pose:
        """
        World transform of every bone.

        Args:
            animation_name: Animation to apply, or None for the setup pose
            elapsed: Time in seconds, wrapped by the animation's duration

        Raises:
            AnimationNotFound: If the animation does not exist
        """
        animation = self.get_animation(animation_name) if animation_name is not None else None
        time = self._resolve_time(animation, elapsed)
        srts = self.bone_world_srts(animation, time)
        return Pose({bone.name: srts[bone.index] for bone in self.bones})

    def evaluate(self, skin_name: str, animation_name: Optional[str] = None,
                 elapsed: float = 0.0) -> List[Sprite]:
        """
        Calculate the sprites to draw and their transforms.

        Args:
            skin_name: Skin to draw with (the default skin fills in missing slots)
            animation_name: Animation to apply, or None for the setup pose
            elapsed: Time in seconds, wrapped by the animation's duration

        Returns:
            Sprites sorted bottom to top: each can cover the previous ones

        Raises:
            SkinNotFound: If the skin does not exist
            AnimationNotFound: If the animation does not exist
            AttachmentNotFound: If a slot's attachment is in neither skin
        """
        skin = self.get_skin(skin_name)
        animation = self.get_animation(animation_name) if animation_name is not None else None
        return self.calculate(skin.name, animation, self._resolve_time(animation, elapsed))

    def calculate(self, skin_name: str, animation: Optional[Animation], time: float) -> List[Sprite]:
        """
        Sprites for an animation at an exact time, without wrapping ``time``.

        Raises:
            SkinNotFound: If the skin does not exist
            AttachmentNotFound: If a slot's attachment is in neither skin
        """
        skin = self.get_skin(skin_name)
        default_skin = self.skins.get(DEFAULT_SKIN_NAME)
        srts = self.bone_world_srts(animation, time)
        return compose_sprites(self.slots, srts, skin, default_skin, animation, time)

    def sample(self, skin_name: str, animation_name: Optional[str],
               delta: float) -> Iterator[List[Sprite]]:
        """
        Evaluate at ``0, delta, 2*delta, ...`` up to the animation's duration.

        Times are not wrapped; iteration stops after the last time that does
        not exceed the duration. Without an animation only time 0 is produced.

        Raises:
            ValueError: If ``delta`` is not positive
        """
        if not delta > 0.0:
            raise ValueError(f"Sampling step must be positive, got {delta}")
        self.get_skin(skin_name)
        animation = self.get_animation(animation_name) if animation_name is not None else None
        duration = animation.duration if animation is not None else 0.0

        step = 0
        time = 0.0
        while time <= duration:
            yield self.calculate(skin_name, animation, time)
            step += 1
            time = step * delta

    def __repr__(self):
        return (f"Skeleton(name='{self.name}', bones={len(self.bones)}, slots={len(self.slots)}, "
                f"skins={len(self.skins)}, animations={len(self.animations)})")


def load_skeleton(document: Union[SkeletonDocument, Mapping], name: str = "Skeleton") -> Skeleton:
    """
    Load a skeleton from a parsed document or decoded Spine JSON.

    Raises:
        LoadError: If the document is structurally invalid
    """
    if not isinstance(document, SkeletonDocument):
        document = SkeletonDocument.from_dict(document)
    return Skeleton.from_document(document, name=name)

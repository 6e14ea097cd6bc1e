"""
Skin

Named attachment sets and the attachments they hold per slot.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

import numpy as np
from pyrr import Matrix44

from ..core.document import AttachmentData
from ..core.srt import SRT

logger = logging.getLogger(__name__)


class AttachmentType(Enum):
    """Attachment kinds; only regions produce sprites."""
    REGION = "region"
    REGION_SEQUENCE = "regionsequence"
    BOUNDING_BOX = "boundingbox"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "AttachmentType":
        try:
            return cls(value.lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class Attachment:
    """
    Drawable region attached to a slot.

    Its quad spans ``[-w/2, w/2] x [-h/2, h/2]`` before the local ``srt``
    places it relative to the slot's bone.
    """

    key: str
    name: Optional[str]
    kind: AttachmentType
    srt: SRT
    width: float
    height: float

    @classmethod
    def from_data(cls, data: AttachmentData) -> "Attachment":
        kind = AttachmentType.parse(data.type)
        if kind is AttachmentType.OTHER:
            logger.warning("Attachment '%s' has unsupported type '%s', it will not be drawn",
                           data.key, data.type)
        return cls(
            key=data.key,
            name=data.name,
            kind=kind,
            srt=SRT.from_degrees(data.scale_x, data.scale_y, data.rotation, data.x, data.y),
            width=data.width,
            height=data.height,
        )

    @property
    def display_name(self) -> str:
        """Image name: the explicit ``name`` or the key under which it is stored."""
        return self.name if self.name is not None else self.key

    @property
    def is_drawable(self) -> bool:
        return self.kind in (AttachmentType.REGION, AttachmentType.REGION_SEQUENCE)

    def local_matrix(self) -> Matrix44:
        """
        Transform from the unit quad ``[-1, 1] x [-1, 1]`` to bone space.

        Returns:
            Row-major 4x4 matrix: half-size scale, then the attachment SRT
        """
        half = Matrix44.from_scale([self.width / 2.0, self.height / 2.0, 1.0], dtype=np.float64)
        return half @ self.srt.to_matrix44()

    def __repr__(self):
        return f"Attachment(name='{self.display_name}', type={self.kind.value}, size={self.width}x{self.height})"


class Skin:
    """
    Skin maps slots to named attachment variants.

    Slots are stored by index; the same attachment key may appear under
    several slots.
    """

    def __init__(self, name: str):
        """
        Initialize skin.

        Args:
            name: Skin name
        """
        self.name = name
        self.slots: Dict[int, Dict[str, Attachment]] = {}

    @classmethod
    def from_data(cls, name: str, slots: Mapping[str, Mapping[str, AttachmentData]],
                  slot_index: Callable[[str], int]) -> "Skin":
        """
        Build a skin from document records.

        Args:
            name: Skin name
            slots: slot name -> attachment key -> record
            slot_index: Resolves a slot name to its index

        Raises:
            SlotNotFound: If the skin names an undeclared slot
        """
        skin = cls(name)
        for slot_name, attachments in slots.items():
            index = slot_index(slot_name)
            for key, data in attachments.items():
                skin.add_attachment(index, key, Attachment.from_data(data))
        return skin

    def add_attachment(self, slot_index: int, key: str, attachment: Attachment):
        self.slots.setdefault(slot_index, {})[key] = attachment

    def find(self, slot_index: int, key: str) -> Optional[Attachment]:
        """
        Find an attachment in this skin.

        Args:
            slot_index: Slot the attachment belongs to
            key: Attachment key

        Returns:
            Attachment if found, None otherwise
        """
        return self.slots.get(slot_index, {}).get(key)

    def attachments(self) -> Iterator[Tuple[int, str, Attachment]]:
        for slot_index, attachments in self.slots.items():
            for key, attachment in attachments.items():
                yield slot_index, key, attachment

    def attachment_names(self) -> List[str]:
        return [attachment.display_name for _, _, attachment in self.attachments()]

    def __repr__(self):
        count = sum(len(a) for a in self.slots.values())
        return f"Skin(name='{self.name}', slots={len(self.slots)}, attachments={count})"


def find_attachment(skin: Skin, default_skin: Optional[Skin], slot_index: int,
                    key: str) -> Optional[Attachment]:
    """Look an attachment up in ``skin`` first, then in the default skin."""
    attachment = skin.find(slot_index, key)
    if attachment is None and default_skin is not None and default_skin is not skin:
        attachment = default_skin.find(slot_index, key)
    return attachment

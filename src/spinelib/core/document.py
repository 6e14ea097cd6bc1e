"""
Skeleton Document

Lightweight descriptors mirroring the Spine JSON export schema. Field names
in the source mappings are the ones written by the Spine editor
(``scaleX``, ``inheritRotation``, ...); records expose snake_case attributes.
"""

import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Tuple

from ..config.settings import BONE_TRANSFORM_MODES, DEFAULT_COLOR_HEX
from .errors import InvalidDocument

logger = logging.getLogger(__name__)


def _number(data: Mapping[str, Any], key: str, default: float, record: str) -> float:
    """Utility to coerce a JSON number, rejecting strings, booleans, NaN and infinities."""

    value = data.get(key)
    if value is None:
        return float(default)
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidDocument(f"{record}: '{key}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidDocument(f"{record}: '{key}' must be finite, got {value!r}")
    return float(value)


def _name(data: Mapping[str, Any], record: str, key: str = "name") -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidDocument(f"{record}: missing '{key}'")
    return value


def _optional_str(data: Mapping[str, Any], key: str, record: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidDocument(f"{record}: '{key}' must be a string, got {value!r}")
    return value


def _mapping(value: Any, record: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidDocument(f"{record}: expected an object, got {type(value).__name__}")
    return value


def _list(value: Any, record: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidDocument(f"{record}: expected a list, got {type(value).__name__}")
    return value


def _curve(data: Mapping[str, Any]):
    """
    Normalize a keyframe curve to ``None``, a name, or ``[cx1, cy1, cx2, cy2]``.

    Spine 3.x writes Beziers as a number ``curve`` (cx1) plus ``c2``, ``c3``, ``c4``.
    """
    curve = data.get("curve")
    if isinstance(curve, Real) and not isinstance(curve, bool):
        return [curve, data.get("c2", 0.0), data.get("c3", 1.0), data.get("c4", 1.0)]
    return curve


# ---------------------------------------------------------------------------
# Setup pose records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BoneData:
    """Bone record: ``name``, ``parent``, ``length``, ``x``, ``y``, ``scaleX``, ``scaleY``, ``rotation``."""

    name: str
    parent: Optional[str] = None
    length: float = 0.0
    x: float = 0.0
    y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    inherit_rotation: bool = True
    inherit_scale: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BoneData":
        data = _mapping(data, "bone")
        name = _name(data, "bone")
        record = f"bone '{name}'"

        inherit_rotation = bool(data.get("inheritRotation", True))
        inherit_scale = bool(data.get("inheritScale", True))
        mode = data.get("transform")
        if mode is not None:
            if mode not in BONE_TRANSFORM_MODES:
                raise InvalidDocument(f"{record}: unknown transform mode {mode!r}")
            inherit_rotation, inherit_scale = BONE_TRANSFORM_MODES[mode]

        return cls(
            name=name,
            parent=_optional_str(data, "parent", record),
            length=_number(data, "length", 0.0, record),
            x=_number(data, "x", 0.0, record),
            y=_number(data, "y", 0.0, record),
            scale_x=_number(data, "scaleX", 1.0, record),
            scale_y=_number(data, "scaleY", 1.0, record),
            rotation=_number(data, "rotation", 0.0, record),
            inherit_rotation=inherit_rotation,
            inherit_scale=inherit_scale,
        )


@dataclass(frozen=True)
class SlotData:
    """Slot record: ``name``, ``bone``, ``color`` (hex), ``attachment``."""

    name: str
    bone: str
    color: Optional[str] = None
    attachment: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SlotData":
        data = _mapping(data, "slot")
        name = _name(data, "slot")
        record = f"slot '{name}'"
        return cls(
            name=name,
            bone=_name(data, record, key="bone"),
            color=_optional_str(data, "color", record),
            attachment=_optional_str(data, "attachment", record),
        )


@dataclass(frozen=True)
class AttachmentData:
    """Attachment record inside a skin, keyed by slot then attachment name."""

    key: str
    name: Optional[str] = None
    type: str = "region"
    x: float = 0.0
    y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    width: float = 0.0
    height: float = 0.0
    fps: Optional[float] = None
    mode: Optional[Any] = None
    extras: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, key: str, data: Mapping[str, Any]) -> "AttachmentData":
        record = f"attachment '{key}'"
        data = _mapping(data, record)
        known = {"name", "type", "x", "y", "scaleX", "scaleY", "rotation",
                 "width", "height", "fps", "mode"}
        extras = {k: v for k, v in data.items() if k not in known}
        fps = data.get("fps")
        return cls(
            key=key,
            name=_optional_str(data, "name", record),
            type=str(data.get("type", "region")),
            x=_number(data, "x", 0.0, record),
            y=_number(data, "y", 0.0, record),
            scale_x=_number(data, "scaleX", 1.0, record),
            scale_y=_number(data, "scaleY", 1.0, record),
            rotation=_number(data, "rotation", 0.0, record),
            width=_number(data, "width", 0.0, record),
            height=_number(data, "height", 0.0, record),
            fps=_number(data, "fps", 0.0, record) if fps is not None else None,
            mode=data.get("mode"),
            extras=extras,
        )


# ---------------------------------------------------------------------------
# Keyframe records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TranslateKeyData:
    time: float
    x: float = 0.0
    y: float = 0.0
    curve: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], record: str = "translate") -> "TranslateKeyData":
        data = _mapping(data, record)
        return cls(
            time=_number(data, "time", 0.0, record),
            x=_number(data, "x", 0.0, record),
            y=_number(data, "y", 0.0, record),
            curve=_curve(data),
        )


@dataclass(frozen=True)
class ScaleKeyData:
    time: float
    x: float = 1.0
    y: float = 1.0
    curve: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], record: str = "scale") -> "ScaleKeyData":
        data = _mapping(data, record)
        return cls(
            time=_number(data, "time", 0.0, record),
            x=_number(data, "x", 1.0, record),
            y=_number(data, "y", 1.0, record),
            curve=_curve(data),
        )


@dataclass(frozen=True)
class RotateKeyData:
    time: float
    angle: float = 0.0
    curve: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], record: str = "rotate") -> "RotateKeyData":
        data = _mapping(data, record)
        # Spine 3.8+ writes "value" instead of "angle"
        key = "angle" if "angle" in data else "value"
        return cls(
            time=_number(data, "time", 0.0, record),
            angle=_number(data, key, 0.0, record),
            curve=_curve(data),
        )


@dataclass(frozen=True)
class ColorKeyData:
    time: float
    color: str = DEFAULT_COLOR_HEX
    curve: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], record: str = "color") -> "ColorKeyData":
        data = _mapping(data, record)
        return cls(
            time=_number(data, "time", 0.0, record),
            color=_optional_str(data, "color", record) or DEFAULT_COLOR_HEX,
            curve=_curve(data),
        )


@dataclass(frozen=True)
class AttachmentKeyData:
    time: float
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], record: str = "attachment") -> "AttachmentKeyData":
        data = _mapping(data, record)
        return cls(
            time=_number(data, "time", 0.0, record),
            name=_optional_str(data, "name", record),
        )


# ---------------------------------------------------------------------------
# Animation records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BoneTimelineData:
    translate: Tuple[TranslateKeyData, ...] = ()
    rotate: Tuple[RotateKeyData, ...] = ()
    scale: Tuple[ScaleKeyData, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], record: str) -> "BoneTimelineData":
        data = _mapping(data, record)
        return cls(
            translate=tuple(TranslateKeyData.from_dict(k, f"{record} translate")
                            for k in _list(data.get("translate"), record)),
            rotate=tuple(RotateKeyData.from_dict(k, f"{record} rotate")
                         for k in _list(data.get("rotate"), record)),
            scale=tuple(ScaleKeyData.from_dict(k, f"{record} scale")
                        for k in _list(data.get("scale"), record)),
        )


@dataclass(frozen=True)
class SlotTimelineData:
    attachment: Tuple[AttachmentKeyData, ...] = ()
    color: Tuple[ColorKeyData, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], record: str) -> "SlotTimelineData":
        data = _mapping(data, record)
        return cls(
            attachment=tuple(AttachmentKeyData.from_dict(k, f"{record} attachment")
                             for k in _list(data.get("attachment"), record)),
            color=tuple(ColorKeyData.from_dict(k, f"{record} color")
                        for k in _list(data.get("color"), record)),
        )


@dataclass(frozen=True)
class AnimationData:
    """
    Animation record.

    ``events`` and ``draw_order`` are kept as raw records; they are not
    applied when evaluating a pose.
    """

    name: str
    bones: Dict[str, BoneTimelineData] = field(default_factory=dict)
    slots: Dict[str, SlotTimelineData] = field(default_factory=dict)
    events: Tuple[Any, ...] = ()
    draw_order: Tuple[Any, ...] = ()

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "AnimationData":
        record = f"animation '{name}'"
        data = _mapping(data, record)
        bones = {
            bone: BoneTimelineData.from_dict(timelines, f"{record} bone '{bone}'")
            for bone, timelines in _mapping(data.get("bones"), record).items()
        }
        slots = {
            slot: SlotTimelineData.from_dict(timelines, f"{record} slot '{slot}'")
            for slot, timelines in _mapping(data.get("slots"), record).items()
        }
        draw_order = data.get("drawOrder", data.get("draworder"))
        return cls(
            name=name,
            bones=bones,
            slots=slots,
            events=tuple(_list(data.get("events"), record)),
            draw_order=tuple(_list(draw_order, record)),
        )


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

def _skins(value: Any) -> Dict[str, Dict[str, Dict[str, AttachmentData]]]:
    # Spine 4.x writes skins as a list of {"name", "attachments"} objects
    if isinstance(value, list):
        value = {
            _name(_mapping(entry, "skin"), "skin"): _mapping(entry, "skin").get("attachments")
            for entry in value
        }

    skins: Dict[str, Dict[str, Dict[str, AttachmentData]]] = {}
    for skin_name, slots in _mapping(value, "skins").items():
        record = f"skin '{skin_name}'"
        skins[skin_name] = {
            slot_name: {
                key: AttachmentData.from_dict(key, attachment)
                for key, attachment in _mapping(attachments, f"{record} slot '{slot_name}'").items()
            }
            for slot_name, attachments in _mapping(slots, record).items()
        }
    return skins


@dataclass(frozen=True)
class SkeletonDocument:
    """Parsed skeleton document: bones, slots, skins and animations."""

    bones: Tuple[BoneData, ...] = ()
    slots: Tuple[SlotData, ...] = ()
    skins: Dict[str, Dict[str, Dict[str, AttachmentData]]] = field(default_factory=dict)
    animations: Dict[str, AnimationData] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SkeletonDocument":
        """
        Create a document from decoded Spine JSON.

        Raises:
            InvalidDocument: If a record has the wrong shape
        """
        data = _mapping(data, "document")
        known = {"skeleton", "bones", "slots", "skins", "animations", "events",
                 "ik", "transform", "path"}
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            logger.warning("Ignoring unknown document keys: %s", ", ".join(unknown))

        return cls(
            bones=tuple(BoneData.from_dict(b) for b in _list(data.get("bones"), "bones")),
            slots=tuple(SlotData.from_dict(s) for s in _list(data.get("slots"), "slots")),
            skins=_skins(data.get("skins")),
            animations={
                name: AnimationData.from_dict(name, animation)
                for name, animation in _mapping(data.get("animations"), "animations").items()
            },
            metadata=dict(_mapping(data.get("skeleton"), "skeleton")),
        )

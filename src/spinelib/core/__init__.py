"""Core value types, document model and errors"""
from .color import Color
from .srt import SRT
from .document import SkeletonDocument
from .errors import (
    SkeletonError,
    LoadError,
    CalculationError,
    BoneNotFound,
    SlotNotFound,
    CyclicHierarchy,
    InvalidCurveDescriptor,
    InvalidColor,
    InvalidDocument,
    SkinNotFound,
    AnimationNotFound,
    AttachmentNotFound,
)

__all__ = [
    "Color",
    "SRT",
    "SkeletonDocument",
    "SkeletonError",
    "LoadError",
    "CalculationError",
    "BoneNotFound",
    "SlotNotFound",
    "CyclicHierarchy",
    "InvalidCurveDescriptor",
    "InvalidColor",
    "InvalidDocument",
    "SkinNotFound",
    "AnimationNotFound",
    "AttachmentNotFound",
]

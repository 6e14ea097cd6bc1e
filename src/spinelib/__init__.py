"""
SpineLib - Spine skeleton loading and pose evaluation

Loads Spine JSON skeleton documents and evaluates them into ordered,
transformed sprites ready for a renderer.
"""

# Configuration
from .config.settings import *

# Core
from .core import (
    Color,
    SRT,
    SkeletonDocument,
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

# Animation
from .animation import Skeleton, Pose, Sprite, AnimationController, load_skeleton

# Loaders
from .loaders import Atlas, AtlasError, AtlasLoader, SkeletonLoader, SkeletonLoadResult, parse_atlas

__version__ = "0.1.0"
__all__ = [
    # Config (exported via *)
    # Core
    "Color",
    "SRT",
    "SkeletonDocument",
    # Errors
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
    # Animation
    "Skeleton",
    "Pose",
    "Sprite",
    "AnimationController",
    "load_skeleton",
    # Loaders
    "Atlas",
    "AtlasError",
    "AtlasLoader",
    "SkeletonLoader",
    "SkeletonLoadResult",
    "parse_atlas",
]

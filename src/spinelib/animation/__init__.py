"""
Animation System

Skeleton hierarchy, timelines, skins and pose evaluation for Spine skeletons.
"""

from .curve import Curve, CurveType, parse_curve
from .timeline import Keyframe, Timeline, AttachmentTimeline, BoneTimeline, SlotTimeline
from .animation import Animation
from .skin import Attachment, AttachmentType, Skin
from .pose import Pose, Sprite
from .skeleton import Bone, Slot, Skeleton, load_skeleton, topological_order
from .animation_controller import AnimationController

__all__ = [
    'Curve',
    'CurveType',
    'parse_curve',
    'Keyframe',
    'Timeline',
    'AttachmentTimeline',
    'BoneTimeline',
    'SlotTimeline',
    'Animation',
    'Attachment',
    'AttachmentType',
    'Skin',
    'Pose',
    'Sprite',
    'Bone',
    'Slot',
    'Skeleton',
    'load_skeleton',
    'topological_order',
    'AnimationController',
]

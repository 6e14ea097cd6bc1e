"""
Spine Runtime Settings

All configuration constants for skeleton loading and pose evaluation.
Modify these values to change runtime behavior.
"""

from pathlib import Path

# ============================================================================
# Project Paths
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent

# ============================================================================
# Skins
# ============================================================================

# Skin consulted when the requested skin has no attachment for a slot
DEFAULT_SKIN_NAME = "default"

# ============================================================================
# Colors
# ============================================================================

DEFAULT_COLOR_HEX = "FFFFFFFF"
DEFAULT_SLOT_COLOR = (255, 255, 255, 255)  # Opaque white RGBA

# ============================================================================
# Bone Setup Pose Defaults
# ============================================================================

DEFAULT_TRANSLATION = (0.0, 0.0)
DEFAULT_ROTATION = 0.0  # Degrees
DEFAULT_SCALE = (1.0, 1.0)

# Spine 3.x "transform" modes -> (inherit_rotation, inherit_scale)
BONE_TRANSFORM_MODES = {
    "normal": (True, True),
    "onlyTranslation": (False, False),
    "noRotationOrReflection": (False, True),
    "noScale": (True, False),
    "noScaleOrReflection": (True, False),
}

# ============================================================================
# Interpolation
# ============================================================================

# Number of segments in the sampled Bezier easing table.
# 10 is what the Spine runtimes use; higher values trade speed for precision.
BEZIER_SEGMENTS = 10

# Keyframe intervals narrower than this are treated as zero-width
TIME_EPSILON = 1e-9

# ============================================================================
# Playback
# ============================================================================

DEFAULT_SAMPLE_RATE = 30.0  # Samples per second for fixed-step sampling
DEFAULT_PLAYBACK_SPEED = 1.0

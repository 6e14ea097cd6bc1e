"""
SRT

Scale-Rotate-Translate: the compact 2D affine transform used for bones and
attachments, convertible to pyrr matrices.
"""

import math
from dataclasses import dataclass, field
from typing import Tuple

import numpy as np
from pyrr import Matrix44

Vec2 = Tuple[float, float]


@dataclass(frozen=True)
class SRT:
    """
    2D transform applied as scale, then rotation, then translation.

    Rotation is stored in radians; ``cos``/``sin`` are cached because every
    point transform needs them.
    """

    scale: Vec2 = (1.0, 1.0)
    rotation: float = 0.0
    position: Vec2 = (0.0, 0.0)
    cos: float = field(init=False, repr=False, compare=False)
    sin: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "cos", math.cos(self.rotation))
        object.__setattr__(self, "sin", math.sin(self.rotation))

    @classmethod
    def from_degrees(cls, scale_x: float, scale_y: float, rotation_deg: float,
                     x: float, y: float) -> "SRT":
        return cls((scale_x, scale_y), math.radians(rotation_deg), (x, y))

    @classmethod
    def identity(cls) -> "SRT":
        return cls()

    @property
    def rotation_degrees(self) -> float:
        return math.degrees(self.rotation)

    def transform(self, point: Vec2) -> Vec2:
        """Map a point from this transform's local space into its parent's space."""
        x = point[0] * self.scale[0]
        y = point[1] * self.scale[1]
        return (
            self.cos * x - self.sin * y + self.position[0],
            self.sin * x + self.cos * y + self.position[1],
        )

    def to_matrix3(self) -> np.ndarray:
        """3x3 row-major matrix for row vectors ``[x, y, 1] @ M``."""
        sx, sy = self.scale
        return np.array([
            [self.cos * sx, self.sin * sx, 0.0],
            [-self.sin * sy, self.cos * sy, 0.0],
            [self.position[0], self.position[1], 1.0],
        ], dtype=np.float64)

    def to_matrix44(self) -> Matrix44:
        """
        4x4 matrix in pyrr's row-major layout (translation in the last row).

        Compose a child into its parent with ``child.to_matrix44() @ parent_matrix``.
        """
        sx, sy = self.scale
        return Matrix44([
            [self.cos * sx, self.sin * sx, 0.0, 0.0],
            [-self.sin * sy, self.cos * sy, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [self.position[0], self.position[1], 0.0, 1.0],
        ], dtype=np.float64)

"""Loader utilities for skeleton and atlas files."""

from .atlas_loader import Atlas, AtlasError, AtlasLoader, AtlasPage, AtlasRegion, parse_atlas
from .skeleton_loader import SkeletonLoader, SkeletonLoadResult

__all__ = [
    'Atlas', 'AtlasError', 'AtlasLoader', 'AtlasPage', 'AtlasRegion', 'parse_atlas',
    'SkeletonLoader', 'SkeletonLoadResult',
]

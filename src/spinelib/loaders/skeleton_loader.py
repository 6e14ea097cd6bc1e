"""Skeleton loader for Spine JSON exports."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ..animation.skeleton import Skeleton
from ..config.settings import PROJECT_ROOT
from ..core.document import SkeletonDocument
from .atlas_loader import Atlas, AtlasLoader

logger = logging.getLogger(__name__)


@dataclass
class SkeletonLoadResult:
    """Result returned from :meth:`SkeletonLoader.load_with_atlas`."""

    skeleton: Skeleton
    atlas: Optional[Atlas] = None
    missing_regions: list = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class SkeletonLoader:
    """Load skeletons from Spine JSON files."""

    def _resolve(self, path: Path | str) -> Path:
        file_path = Path(path)
        if not file_path.is_absolute():
            file_path = PROJECT_ROOT / file_path
        return file_path.resolve()

    def load_document(self, path: Path | str) -> SkeletonDocument:
        """Read and parse a skeleton document from disk."""

        file_path = self._resolve(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Skeleton file not found: {file_path}")

        with file_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)

        return SkeletonDocument.from_dict(payload)

    def load(self, path: Path | str) -> Skeleton:
        """Load a skeleton from disk; the file stem becomes its name."""

        file_path = self._resolve(path)
        logger.info("Loading skeleton: %s", file_path)
        document = self.load_document(file_path)
        skeleton = Skeleton.from_document(document, name=file_path.stem)
        logger.info(
            "  Loaded %d bones, %d slots, %d skins, %d animations",
            len(skeleton.bones), len(skeleton.slots), len(skeleton.skins), len(skeleton.animations),
        )
        return skeleton

    def load_with_atlas(self, path: Path | str, atlas_path: Path | str | None = None) -> SkeletonLoadResult:
        """
        Load a skeleton and the atlas describing its images.

        The atlas defaults to the skeleton path with an ``.atlas`` suffix; it is
        skipped when that file does not exist.
        """

        file_path = self._resolve(path)
        document = self.load_document(file_path)
        skeleton = Skeleton.from_document(document, name=file_path.stem)

        atlas_file = self._resolve(atlas_path) if atlas_path is not None else file_path.with_suffix(".atlas")
        atlas = None
        missing = []
        if atlas_file.exists():
            atlas = AtlasLoader().load(atlas_file)
            missing = [name for name in skeleton.attachment_names() if atlas.find(name) is None]
            if missing:
                logger.warning("Atlas %s has no region for: %s", atlas_file.name, ", ".join(missing))
        elif atlas_path is not None:
            raise FileNotFoundError(f"Atlas file not found: {atlas_file}")

        return SkeletonLoadResult(
            skeleton=skeleton,
            atlas=atlas,
            missing_regions=missing,
            metadata=document.metadata,
        )

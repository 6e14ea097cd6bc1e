#!/usr/bin/env python3
"""
Spine Skeleton Diagnostic Tool

Loads a Spine JSON skeleton and reports:
- Bone hierarchy and world transforms
- Slots, skins and animations
- Sprites produced for a skin/animation at a given time
- Attachments with no region in the companion atlas

Usage:
    python debug_spine_skeleton.py path/to/skeleton.json --skin default --animation walk --time 0.25
"""

import argparse
import logging
import sys
from typing import Sequence

import numpy as np

from src.spinelib.config.settings import DEFAULT_SAMPLE_RATE, DEFAULT_SKIN_NAME
from src.spinelib.core.errors import SkeletonError
from src.spinelib.loaders import SkeletonLoader

logger = logging.getLogger(__name__)


class SkeletonDiagnostics:
    """Diagnostic tool for analyzing Spine skeletons."""

    def __init__(self):
        self.issues = []
        self.warnings = []

    def analyze(self, path: str, skin: str, animation: str = None, time: float = 0.0,
                sample: bool = False) -> bool:
        """Analyze a skeleton file and report issues."""
        print(f"Analyzing skeleton: {path}")
        print("=" * 60)

        try:
            result = SkeletonLoader().load_with_atlas(path)
        except FileNotFoundError as e:
            print(f"ERROR: {e}")
            return False
        except (SkeletonError, ValueError) as e:
            print(f"ERROR: Failed to load skeleton: {e}")
            return False

        skeleton = result.skeleton
        self._print_basic_info(skeleton, result.metadata)

        for name in result.missing_regions:
            self.warnings.append(f"Atlas has no region for attachment '{name}'")

        try:
            self._print_hierarchy(skeleton, animation, time)
            self._print_sprites(skeleton, skin, animation, time)
            if sample and animation is not None:
                self._print_samples(skeleton, skin, animation)
        except SkeletonError as e:
            self.issues.append(str(e))

        self._print_summary()
        return len(self.issues) == 0

    def _print_basic_info(self, skeleton, metadata):
        print("\nBasic Information:")
        if metadata:
            print(f"   Spine version: {metadata.get('spine', 'unknown')}")
        print(f"   Bones: {len(skeleton.bones)}")
        print(f"   Slots: {len(skeleton.slots)}")
        print(f"   Skins: {', '.join(skeleton.skin_names()) or '-'}")
        for name in skeleton.animation_names():
            print(f"   Animation '{name}': {skeleton.animation_duration(name):.3f}s")
        print(f"   Attachments: {len(skeleton.attachment_names())}")

        if not skeleton.bones:
            self.issues.append("Skeleton has no bones")
        if DEFAULT_SKIN_NAME not in skeleton.skins:
            self.warnings.append(f"Skeleton has no '{DEFAULT_SKIN_NAME}' skin")

    def _print_hierarchy(self, skeleton, animation, time):
        print("\nBone Hierarchy:")
        pose = skeleton.pose(animation, time)
        depth = {}
        for index in skeleton.order:
            bone = skeleton.bones[index]
            depth[index] = 0 if bone.parent_index is None else depth[bone.parent_index] + 1
            srt = pose[bone.name]
            indent = "   " + "  " * depth[index]
            print(f"{indent}{bone.name}: pos=({srt.position[0]:.2f}, {srt.position[1]:.2f}) "
                  f"rot={srt.rotation_degrees:.2f} scale=({srt.scale[0]:.3f}, {srt.scale[1]:.3f})")

            det = np.linalg.det(srt.to_matrix3()[:2, :2])
            if abs(det) < 1e-6:
                self.warnings.append(f"Bone '{bone.name}' has near-zero scale")

    def _print_sprites(self, skeleton, skin, animation, time):
        label = f"'{animation}' at {time:.3f}s" if animation else "setup pose"
        print(f"\nSprites ({skin}, {label}):")
        sprites = skeleton.evaluate(skin, animation, time)
        for sprite in sprites:
            corners = ", ".join(f"({x:.1f}, {y:.1f})" for x, y in sprite.corners())
            print(f"   {sprite.slot}: {sprite.attachment} color={sprite.color.to_hex()}")
            print(f"      corners: {corners}")
        if not sprites:
            print("   (nothing to draw)")

    def _print_samples(self, skeleton, skin, animation):
        delta = 1.0 / DEFAULT_SAMPLE_RATE
        frames = list(skeleton.sample(skin, animation, delta))
        print(f"\nSampled {len(frames)} frames at {DEFAULT_SAMPLE_RATE:.0f} fps")

    def _print_summary(self):
        print("\n" + "=" * 60)
        print("Analysis Summary:")

        if not self.issues and not self.warnings:
            print("   No issues found.")
            return
        if self.issues:
            print(f"   {len(self.issues)} Critical Issues:")
            for issue in self.issues:
                print(f"      - {issue}")
        if self.warnings:
            print(f"   {len(self.warnings)} Warnings:")
            for warning in self.warnings:
                print(f"      - {warning}")


def cli(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect a Spine skeleton and its evaluated sprites.")
    parser.add_argument("skeleton", help="Path to the skeleton JSON file.")
    parser.add_argument("--skin", default=DEFAULT_SKIN_NAME, help="Skin to evaluate.")
    parser.add_argument("--animation", help="Animation to apply (setup pose when omitted).")
    parser.add_argument("--time", type=float, default=0.0, help="Elapsed time in seconds.")
    parser.add_argument("--sample", action="store_true", help="Evaluate the whole animation at a fixed rate.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    diagnostics = SkeletonDiagnostics()
    success = diagnostics.analyze(args.skeleton, args.skin, args.animation, args.time, args.sample)
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(cli())

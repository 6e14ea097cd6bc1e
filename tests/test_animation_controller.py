"""Tests for AnimationController"""

import pytest

from src.spinelib.animation.animation_controller import AnimationController
from src.spinelib.core.errors import AnimationNotFound, SkinNotFound


def test_controller_initialization(walk_skeleton):
    """Test controller starts stopped at the setup pose"""
    controller = AnimationController(walk_skeleton)

    assert controller.current_animation is None
    assert controller.current_time == 0.0
    assert not controller.is_playing
    assert controller.sprites() == walk_skeleton.evaluate("default")


def test_controller_unknown_names(walk_skeleton):
    """Test unknown skins and animations"""
    with pytest.raises(SkinNotFound):
        AnimationController(walk_skeleton, skin="gold")

    controller = AnimationController(walk_skeleton)
    with pytest.raises(AnimationNotFound):
        controller.play("run")
    with pytest.raises(SkinNotFound):
        controller.set_skin("gold")


def test_controller_looping(walk_skeleton):
    """Looping playback wraps around the duration"""
    controller = AnimationController(walk_skeleton)
    controller.play("walk")

    controller.update(0.25)
    assert controller.current_time == pytest.approx(0.25)
    assert controller.sprites() == walk_skeleton.evaluate("default", "walk", 0.25)

    controller.update(1.0)
    assert controller.current_time == pytest.approx(0.25)
    assert controller.is_playing


def test_controller_play_once(walk_skeleton):
    """Non-looping playback stops on the last frame"""
    controller = AnimationController(walk_skeleton)
    controller.play("walk", loop=False)

    controller.update(1.5)
    assert controller.current_time == 1.0
    assert not controller.is_playing
    assert controller.sprites() == walk_skeleton.calculate("default", walk_skeleton.get_animation("walk"), 1.0)


def test_controller_pause_resume_stop(walk_skeleton):
    """Test pausing, resuming and stopping"""
    controller = AnimationController(walk_skeleton)
    controller.play("walk")
    controller.update(0.1)

    controller.pause()
    controller.update(0.5)
    assert controller.current_time == pytest.approx(0.1)

    controller.resume()
    controller.update(0.1)
    assert controller.current_time == pytest.approx(0.2)

    controller.stop()
    assert controller.current_animation is None
    controller.resume()
    assert not controller.is_playing


def test_controller_reverse_playback(walk_skeleton):
    """Negative speed plays backwards and wraps"""
    controller = AnimationController(walk_skeleton)
    controller.play("walk")
    controller.playback_speed = -1.0

    controller.update(0.25)
    assert controller.current_time == pytest.approx(0.75)


def test_controller_empty_animation(walk_skeleton):
    """An animation without keys finishes immediately"""
    controller = AnimationController(walk_skeleton)
    controller.play("idle")

    controller.update(0.1)
    assert controller.current_time == 0.0
    assert not controller.is_playing

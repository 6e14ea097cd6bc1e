"""Tests for skins and attachment resolution"""

import logging

import numpy as np
import pytest

from src.spinelib.animation.skeleton import load_skeleton
from src.spinelib.animation.skin import Attachment, AttachmentType, Skin, find_attachment
from src.spinelib.core.errors import AttachmentNotFound, CalculationError
from src.spinelib.core.srt import SRT


def _document():
    return {
        "bones": [{"name": "root"}],
        "slots": [
            {"name": "body", "bone": "root", "attachment": "body"},
            {"name": "hat", "bone": "root", "attachment": "hat"},
            {"name": "hitbox", "bone": "root", "attachment": "box"},
            {"name": "empty", "bone": "root"},
        ],
        "skins": {
            "default": {
                "body": {"body": {"width": 10, "height": 20}},
                "hat": {"hat": {"width": 4, "height": 4, "y": 12}},
                "hitbox": {"box": {"type": "boundingbox"}},
            },
            "red": {
                "hat": {"hat": {"name": "hat-red", "width": 6, "height": 4, "y": 12}},
            },
        },
        "animations": {
            "broken": {"slots": {"body": {"attachment": [{"time": 0, "name": "ghost"}]}}},
            "blink": {"slots": {"hat": {"attachment": [
                {"time": 0.0, "name": "hat"},
                {"time": 0.5, "name": None},
                {"time": 1.0, "name": "hat"},
            ]}}},
        },
    }


def test_default_skin_fallback():
    """Slots missing from the requested skin resolve from the default skin"""
    skeleton = load_skeleton(_document())
    sprites = skeleton.evaluate("red")

    assert [(s.slot, s.attachment) for s in sprites] == [("body", "body"), ("hat", "hat-red")]
    assert [s.attachment for s in skeleton.evaluate("default")] == ["body", "hat"]


def test_attachment_not_found():
    """An attachment in neither skin is a query error"""
    skeleton = load_skeleton(_document())

    with pytest.raises(AttachmentNotFound) as exc_info:
        skeleton.evaluate("default", "broken", 0.0)
    assert exc_info.value.slot == "body"
    assert exc_info.value.name == "ghost"
    assert isinstance(exc_info.value, CalculationError)

    assert len(skeleton.evaluate("default")) == 2


def test_attachment_timeline_hides_slot():
    """A keyframe without a name hides the slot"""
    skeleton = load_skeleton(_document())

    assert [s.slot for s in skeleton.evaluate("default", "blink", 0.25)] == ["body", "hat"]
    assert [s.slot for s in skeleton.evaluate("default", "blink", 0.75)] == ["body"]


def test_attachment_names_across_skins():
    """Names are collected from every skin, sorted and de-duplicated"""
    skeleton = load_skeleton(_document())
    assert skeleton.attachment_names() == ["body", "box", "hat", "hat-red"]


def test_missing_default_skin_is_allowed():
    """Test a document whose only skin is not named default"""
    document = _document()
    document["skins"] = {"red": document["skins"]["red"]}
    document["slots"] = [document["slots"][1]]
    document["animations"] = {}

    skeleton = load_skeleton(document)
    assert [s.attachment for s in skeleton.evaluate("red")] == ["hat-red"]


def test_attachment_quad():
    """Attachment offsets place the quad relative to its bone"""
    hat = load_skeleton(_document()).evaluate("default")[1]
    assert np.allclose(hat.corners(), [(-2.0, 14.0), (2.0, 14.0), (2.0, 10.0), (-2.0, 10.0)])


def test_unsupported_attachment_type(caplog):
    """Unknown attachment types are kept but never drawn"""
    document = _document()
    document["skins"]["default"]["body"]["body"]["type"] = "mesh"

    with caplog.at_level(logging.WARNING):
        skeleton = load_skeleton(document)

    assert "unsupported type" in caplog.text
    assert [s.slot for s in skeleton.evaluate("default")] == ["hat"]


def test_find_attachment_order():
    """Test lookup order: requested skin first, then default"""
    plain = Attachment("hat", None, AttachmentType.REGION, SRT(), 4.0, 4.0)
    fancy = Attachment("hat", "hat-gold", AttachmentType.REGION, SRT(), 4.0, 4.0)
    default = Skin("default")
    default.add_attachment(0, "hat", plain)
    gold = Skin("gold")
    gold.add_attachment(0, "hat", fancy)

    assert find_attachment(gold, default, 0, "hat") is fancy
    assert find_attachment(Skin("empty"), default, 0, "hat") is plain
    assert find_attachment(Skin("empty"), None, 0, "hat") is None
    assert find_attachment(gold, default, 1, "hat") is None
    assert plain.display_name == "hat"
    assert fancy.display_name == "hat-gold"
    assert AttachmentType.parse("RegionSequence") is AttachmentType.REGION_SEQUENCE
    assert AttachmentType.parse("clipping") is AttachmentType.OTHER

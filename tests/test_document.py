"""Tests for skeleton document parsing"""

import logging

import pytest

from src.spinelib.core.color import Color
from src.spinelib.core.document import (
    AnimationData,
    BoneData,
    RotateKeyData,
    SkeletonDocument,
    SlotData,
    TranslateKeyData,
)
from src.spinelib.core.errors import InvalidColor, InvalidDocument, LoadError


def test_bone_fields():
    """Spine field names map onto bone records"""
    bone = BoneData.from_dict({
        "name": "arm", "parent": "root", "length": 12, "x": 1.5, "y": -2,
        "scaleX": 2, "scaleY": 0.5, "rotation": 30, "inheritRotation": False,
    })

    assert bone.name == "arm"
    assert bone.parent == "root"
    assert (bone.length, bone.x, bone.y) == (12.0, 1.5, -2.0)
    assert (bone.scale_x, bone.scale_y, bone.rotation) == (2.0, 0.5, 30.0)
    assert bone.inherit_rotation is False
    assert bone.inherit_scale is True


def test_bone_defaults():
    """Test a bone with only a name"""
    bone = BoneData.from_dict({"name": "root"})
    assert bone.parent is None
    assert (bone.x, bone.y, bone.rotation) == (0.0, 0.0, 0.0)
    assert (bone.scale_x, bone.scale_y) == (1.0, 1.0)


@pytest.mark.parametrize("mode,expected", [
    ("normal", (True, True)),
    ("onlyTranslation", (False, False)),
    ("noRotationOrReflection", (False, True)),
    ("noScale", (True, False)),
    ("noScaleOrReflection", (True, False)),
])
def test_bone_transform_modes(mode, expected):
    """Spine 3.x transform modes set the inherit flags"""
    bone = BoneData.from_dict({"name": "b", "transform": mode})
    assert (bone.inherit_rotation, bone.inherit_scale) == expected


@pytest.mark.parametrize("record", [
    {},
    {"name": ""},
    {"name": "b", "x": "abc"},
    {"name": "b", "rotation": True},
    {"name": "b", "x": float("nan")},
    {"name": "b", "scaleY": float("-inf")},
    {"name": "b", "parent": 3},
    {"name": "b", "transform": "sideways"},
    ["name", "b"],
])
def test_bad_bone_records(record):
    """Malformed records are load errors"""
    with pytest.raises(InvalidDocument) as exc_info:
        BoneData.from_dict(record)
    assert isinstance(exc_info.value, LoadError)


def test_slot_requires_bone():
    """Test slot record validation"""
    slot = SlotData.from_dict({"name": "s", "bone": "root", "color": "FF0000FF", "attachment": "a"})
    assert (slot.bone, slot.color, slot.attachment) == ("root", "FF0000FF", "a")

    with pytest.raises(InvalidDocument):
        SlotData.from_dict({"name": "s"})


def test_rotate_value_alias():
    """Newer exports name the rotate key field 'value' instead of 'angle'"""
    assert RotateKeyData.from_dict({"time": 0.5, "angle": 45}).angle == 45.0
    assert RotateKeyData.from_dict({"time": 0.5, "value": 30}).angle == 30.0
    assert RotateKeyData.from_dict({}).time == 0.0


def test_legacy_curve_form():
    """Spine 3.x writes Bezier curves as curve plus c2, c3, c4"""
    key = TranslateKeyData.from_dict({"time": 0, "curve": 0.25, "c3": 0.75})
    assert key.curve == [0.25, 0.0, 0.75, 1.0]

    assert TranslateKeyData.from_dict({"time": 0, "curve": "stepped"}).curve == "stepped"
    assert TranslateKeyData.from_dict({"time": 0, "curve": [0.1, 0.2, 0.3, 0.4]}).curve == [0.1, 0.2, 0.3, 0.4]


def test_animation_record():
    """Test animation timelines and raw extras"""
    animation = AnimationData.from_dict("jump", {
        "bones": {"root": {"translate": [{"time": 0, "x": 1}, {"time": 1, "y": 2}]}},
        "slots": {"eye": {"attachment": [{"time": 0.2, "name": None}],
                          "color": [{"time": 0.4, "color": "00FF00FF"}]}},
        "events": [{"time": 0.5, "name": "step"}],
        "draworder": [{"time": 0.1}],
    })

    assert len(animation.bones["root"].translate) == 2
    assert animation.bones["root"].translate[1].y == 2.0
    assert animation.slots["eye"].attachment[0].name is None
    assert animation.slots["eye"].color[0].color == "00FF00FF"
    assert len(animation.events) == 1
    assert len(animation.draw_order) == 1


def test_skins_list_form():
    """Spine 4.x writes skins as a list"""
    document = SkeletonDocument.from_dict({
        "skins": [{"name": "default", "attachments": {"body": {"body": {"width": 5, "height": 7}}}}],
    })
    attachment = document.skins["default"]["body"]["body"]
    assert (attachment.width, attachment.height) == (5.0, 7.0)
    assert attachment.type == "region"


def test_attachment_extras():
    """Unknown attachment fields are kept as extras"""
    document = SkeletonDocument.from_dict({
        "skins": {"default": {"body": {"body": {"path": "images/body", "color": "FFFFFF80"}}}},
    })
    attachment = document.skins["default"]["body"]["body"]
    assert attachment.extras == {"path": "images/body", "color": "FFFFFF80"}


def test_document_metadata_and_unknown_keys(caplog):
    """Test the skeleton header and warnings for unknown keys"""
    with caplog.at_level(logging.WARNING):
        document = SkeletonDocument.from_dict({
            "skeleton": {"spine": "3.8.99", "hash": "abc"},
            "bones": [{"name": "root"}],
            "sounds": [],
        })

    assert document.metadata["spine"] == "3.8.99"
    assert len(document.bones) == 1
    assert "sounds" in caplog.text


def test_document_shape_errors():
    """Test top-level shape validation"""
    with pytest.raises(InvalidDocument):
        SkeletonDocument.from_dict({"bones": {"name": "root"}})
    with pytest.raises(InvalidDocument):
        SkeletonDocument.from_dict({"animations": []})
    with pytest.raises(InvalidDocument):
        SkeletonDocument.from_dict("bones")


def test_color_parsing():
    """Test hex color formats"""
    assert Color.from_hex("FF000080") == Color(255, 0, 0, 128)
    assert Color.from_hex("#00ff00") == Color(0, 255, 0, 255)
    assert Color.from_hex("0A0B0C0D").to_hex() == "0A0B0C0D"
    assert Color(255, 0, 0, 255).to_floats() == (1.0, 0.0, 0.0, 1.0)


@pytest.mark.parametrize("value", ["GG000000", "FFF", "FF 00 00", "", "FF0000FF00", None, 0xFF0000FF])
def test_bad_colors(value):
    """Malformed hex colors are load errors"""
    with pytest.raises(InvalidColor):
        Color.from_hex(value)

"""Shared skeleton documents for the test suite"""

import copy

import pytest

from src.spinelib.animation.skeleton import load_skeleton


# root -> torso -> head, one "walk" animation lasting one second
WALK_DOCUMENT = {
    "skeleton": {"spine": "3.8.99", "width": 40, "height": 60},
    "bones": [
        {"name": "root"},
        {"name": "torso", "parent": "root", "y": 10},
        {"name": "head", "parent": "torso", "y": 5},
    ],
    "slots": [
        {"name": "torso", "bone": "torso", "color": "FF000080", "attachment": "torso"},
        {"name": "head", "bone": "head", "attachment": "head"},
    ],
    "skins": {
        "default": {
            "torso": {"torso": {"width": 20, "height": 30}},
            "head": {"head": {"width": 10, "height": 10}},
        },
    },
    "animations": {
        "walk": {
            "bones": {
                "head": {
                    "rotate": [
                        {"time": 0.0, "angle": 0},
                        {"time": 0.5, "angle": 90},
                        {"time": 1.0, "angle": 0},
                    ],
                },
            },
            "slots": {
                "head": {
                    "color": [
                        {"time": 0.0, "color": "FFFFFFFF"},
                        {"time": 1.0, "color": "000000FF"},
                    ],
                },
            },
        },
        "idle": {},
    },
}


@pytest.fixture
def walk_document():
    return copy.deepcopy(WALK_DOCUMENT)


@pytest.fixture
def walk_skeleton(walk_document):
    return load_skeleton(walk_document, name="walk_test")

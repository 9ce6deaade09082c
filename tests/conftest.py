"""
Test configuration and fixtures for identicon rendering.

Profiles use a fixed MD5 hash so expected values can be worked out by hand.
"""

import os
import sys

import pytest

# Ensure repo root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from identicon.core import IdenticonCfg
from identicon.render.color_engine import ColorOracle
from identicon.render.sdk import Profile

# MD5 of "a"; hash[20] is '9' (57): circle matrix and spirograph
BASE_DIGEST = "0cc175b9c0f1b6a831c399e269772661"


def digest_with(overrides, base=BASE_DIGEST):
    """Copy of base with the characters at the given indices replaced."""
    chars = list(base)
    for index, char in overrides.items():
        chars[index] = char
    return "".join(chars)


def make_profile(full_name="Ann Lee", digest=BASE_DIGEST, name_parts=None):
    parts = tuple(full_name.split()) if name_parts is None else tuple(name_parts)
    return Profile(full_name=full_name, name_parts=parts, digest=digest)


@pytest.fixture
def default_cfg():
    """Built-in configuration, independent of any conf/ file."""
    return IdenticonCfg()


@pytest.fixture
def oracle():
    return ColorOracle()


@pytest.fixture
def ann_lee():
    return make_profile()


@pytest.fixture
def single_word():
    return make_profile(full_name="Ann")

"""Tests for the random value generators."""

import re
import string
from random import Random

import pytest

from contour_engine.services.detectors.randomizer import (
    QUICK_ACTIONS,
    detect_random,
    generate_password,
    regenerate,
    roll_dice,
)

UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def test_uuid():
    """uuid and guid produce version 4 identifiers."""
    for text in ("uuid", "generate guid"):
        result = detect_random(text)
        assert result is not None and result.type == "uuid"
        assert UUID_RE.match(result.value)


def test_password_contains_every_class():
    """Passwords include upper, lower, digit and symbol characters."""
    password = generate_password(12, Random(1))
    assert len(password) == 12
    assert any(c in string.ascii_uppercase for c in password)
    assert any(c in string.ascii_lowercase for c in password)
    assert any(c in string.digits for c in password)
    assert any(c in "!@#$%^&*_-+=?" for c in password)


def test_password_length_is_clamped():
    """Requested lengths are clamped to 4..128 and the label agrees."""
    short = detect_random("pw 2", Random(3))
    assert short is not None
    assert len(short.value) == 4
    assert short.label == "Password (4 chars)"
    default = detect_random("password", Random(3))
    assert default is not None and len(default.value) == 16


def test_dice_notation():
    """Dice notation honours count, sides and modifier."""
    result = detect_random("roll 2d6+3", Random(7))
    assert result is not None and result.type == "dice"
    assert result.label == "2d6+3"
    assert 5 <= int(result.value) <= 15
    assert result.detail is not None and result.detail.startswith("Rolls: [")
    simple = detect_random("dice", Random(7))
    assert simple is not None and simple.label == "1d6"


def test_roll_dice_bounds():
    """Counts and sides are clamped; many dice summarize the detail."""
    roll = roll_dice(500, 1, rng=Random(2))
    assert roll.count == 100 and roll.sides == 2
    assert all(1 <= r <= 2 for r in roll.rolls)
    assert roll.detail == "Sum of 100 rolls"
    assert roll_dice(1, 6, -2, Random(2)).notation == "1d6-2"


def test_coin_and_hex():
    """Coin flips and colors have the expected shapes."""
    coin = detect_random("flip a coin", Random(5))
    assert coin is not None and coin.value in ("Heads", "Tails")
    color = detect_random("random color", Random(5))
    assert color is not None and re.match(r"^#[0-9a-f]{6}$", color.value)


@pytest.mark.parametrize(
    "text, low, high",
    [
        ("random", 1, 100),
        ("random number 5 10", 5, 10),
        ("random between 1 and 6", 1, 6),
        ("rand 10-20", 10, 20),
        ("random from 9 to 3", 9, 3),
    ],
)
def test_number_ranges(text, low, high):
    """Number requests accept several range spellings."""
    result = detect_random(text, Random(11))
    assert result is not None and result.type == "number"
    assert result.label == f"Random ({low}-{high})"
    assert min(low, high) <= int(result.value) <= max(low, high)


def test_pick():
    """Picking needs at least two options."""
    result = detect_random("pick red, green or blue", Random(4))
    assert result is not None
    assert result.value in ("red", "green", "blue")
    assert result.detail == "red, green, blue"
    assert detect_random("pick red") is None


def test_regenerate_keeps_kind():
    """Regenerating keeps the label and stays within the original range."""
    original = detect_random("random 1 3", Random(8))
    assert original is not None
    again = regenerate(original, Random(9))
    assert again.label == original.label
    assert 1 <= int(again.value) <= 3
    dice = detect_random("3d4", Random(8))
    assert dice is not None
    rerolled = regenerate(dice, Random(1))
    assert rerolled.label == "3d4"
    assert 3 <= int(rerolled.value) <= 12


def test_quick_actions():
    """Quick actions cover the main generators."""
    assert set(QUICK_ACTIONS) == {"uuid", "password", "dice", "coin", "number", "hex"}
    assert QUICK_ACTIONS["number"]().label == "Random (1-100)"


def test_unrelated_text():
    """Ordinary text is not a random request."""
    assert detect_random("hello world") is None
    assert detect_random("") is None

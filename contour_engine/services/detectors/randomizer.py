"""Random value generators: UUIDs, passwords, dice, coins, numbers, colors and picks."""

from __future__ import annotations

import dataclasses
import re
import secrets
import string
import uuid
from random import Random
from typing import Callable, Optional

from contour_engine.core.models import RandomResult

_SYSTEM_RANDOM = secrets.SystemRandom()

_UPPER = string.ascii_uppercase
_LOWER = string.ascii_lowercase
_DIGITS = string.digits
_SYMBOLS = "!@#$%^&*_-+=?"

UUID_PATTERN = re.compile(r"^(?:generate\s+)?(?:uuid|guid)$", re.IGNORECASE)
PASSWORD_PATTERN = re.compile(r"^(?:generate\s+)?(?:password|pass|pw)(?:\s+(\d+))?$", re.IGNORECASE)
DICE_PATTERN = re.compile(r"^(?:roll\s+)?(\d{0,3})d(\d{1,4})(?:\s*([+-]\s*\d+))?$", re.IGNORECASE)
DICE_SIMPLE_PATTERN = re.compile(r"^(?:roll\s+)?dice$", re.IGNORECASE)
COIN_PATTERN = re.compile(
    r"^(?:flip\s+(?:a\s+)?coin|coin\s*flip|heads\s+or\s+tails|toss\s+(?:a\s+)?coin)$",
    re.IGNORECASE,
)
NUMBER_PATTERN = re.compile(
    r"^(?:random|rand)(?:\s+(?:number|num|int|integer))?"
    r"(?:\s+(?:between\s+|from\s+)?(\d+)(?:\s*-\s*|\s+(?:and|to)\s+|\s+)(\d+))?$",
    re.IGNORECASE,
)
HEX_PATTERN = re.compile(r"^random\s+(?:hex|color|colour)$", re.IGNORECASE)
PICK_PATTERN = re.compile(r"^(?:pick|choose|select)(?:\s+from)?\s+(.+)$", re.IGNORECASE)
_PICK_SPLIT = re.compile(r"[,|]|\s+or\s+")

_PASSWORD_LABEL = re.compile(r"\((\d+)")
_DICE_LABEL = re.compile(r"^(\d+)d(\d+)([+-]\d+)?$")
_RANGE_LABEL = re.compile(r"\((\d+)-(\d+)\)")


def generate_uuid() -> str:
    return str(uuid.uuid4())


def generate_password(length: int, rng: Random = _SYSTEM_RANDOM) -> str:
    """Password of ``length`` (clamped to 4..128) with every character class present."""
    length = max(4, min(128, length))
    alphabet = _UPPER + _LOWER + _DIGITS + _SYMBOLS
    chars = [rng.choice(_UPPER), rng.choice(_LOWER), rng.choice(_DIGITS), rng.choice(_SYMBOLS)]
    chars.extend(rng.choice(alphabet) for _ in range(length - 4))
    rng.shuffle(chars)
    return "".join(chars)


@dataclasses.dataclass(slots=True)
class DiceRoll:
    count: int
    sides: int
    modifier: int
    rolls: list[int]

    @property
    def total(self) -> int:
        return sum(self.rolls) + self.modifier

    @property
    def notation(self) -> str:
        suffix = f"+{self.modifier}" if self.modifier > 0 else (str(self.modifier) if self.modifier < 0 else "")
        return f"{self.count}d{self.sides}{suffix}"

    @property
    def detail(self) -> str:
        modifier = f" {'+' if self.modifier > 0 else ''}{self.modifier}" if self.modifier else ""
        if self.count <= 20:
            return f"Rolls: [{', '.join(str(r) for r in self.rolls)}]{modifier}"
        return f"Sum of {self.count} rolls{modifier}"


def roll_dice(count: int, sides: int, modifier: int = 0, rng: Random = _SYSTEM_RANDOM) -> DiceRoll:
    count = max(1, min(100, count))
    sides = max(2, min(1000, sides))
    rolls = [rng.randint(1, sides) for _ in range(count)]
    return DiceRoll(count=count, sides=sides, modifier=modifier, rolls=rolls)


def random_hex(rng: Random = _SYSTEM_RANDOM) -> str:
    return f"#{rng.randrange(0x1000000):06x}"


def _coin(rng: Random) -> str:
    return "Heads" if rng.random() < 0.5 else "Tails"


def _password(length: int, rng: Random) -> RandomResult:
    length = max(4, min(128, length))
    return RandomResult(
        type="password",
        value=generate_password(length, rng),
        label=f"Password ({length} chars)",
        detail=f"{length} characters with upper, lower, digits & symbols",
    )


def _dice(roll: DiceRoll) -> RandomResult:
    return RandomResult(type="dice", value=str(roll.total), label=roll.notation, detail=roll.detail)


def detect_random(text: str, rng: Random = _SYSTEM_RANDOM) -> Optional[RandomResult]:
    trimmed = text.strip()
    if not trimmed:
        return None

    if UUID_PATTERN.match(trimmed):
        return RandomResult(type="uuid", value=generate_uuid(), label="UUID v4")

    match = PASSWORD_PATTERN.match(trimmed)
    if match:
        return _password(int(match.group(1)) if match.group(1) else 16, rng)

    if DICE_SIMPLE_PATTERN.match(trimmed):
        return _dice(roll_dice(1, 6, rng=rng))

    match = DICE_PATTERN.match(trimmed)
    if match:
        count = int(match.group(1) or 0) or 1
        modifier = int(re.sub(r"\s", "", match.group(3))) if match.group(3) else 0
        return _dice(roll_dice(count, int(match.group(2)), modifier, rng))

    if COIN_PATTERN.match(trimmed):
        return RandomResult(type="coin", value=_coin(rng), label="Coin Flip")

    if HEX_PATTERN.match(trimmed):
        return RandomResult(type="hex", value=random_hex(rng), label="Random Color")

    match = NUMBER_PATTERN.match(trimmed)
    if match:
        low = int(match.group(1)) if match.group(1) else 1
        high = int(match.group(2)) if match.group(2) else 100
        value = rng.randint(min(low, high), max(low, high))
        return RandomResult(type="number", value=str(value), label=f"Random ({low}-{high})")

    match = PICK_PATTERN.match(trimmed)
    if match:
        items = [item.strip() for item in _PICK_SPLIT.split(match.group(1)) if item.strip()]
        if len(items) >= 2:
            return RandomResult(
                type="pick",
                value=rng.choice(items),
                label=f"Picked from {len(items)} options",
                detail=", ".join(items),
            )
    return None


def regenerate(previous: RandomResult, rng: Random = _SYSTEM_RANDOM) -> RandomResult:
    """Roll a fresh value of the same kind, keeping label and detail."""
    if previous.type == "uuid":
        return dataclasses.replace(previous, value=generate_uuid())
    if previous.type == "password":
        match = _PASSWORD_LABEL.search(previous.label)
        length = int(match.group(1)) if match else 16
        return dataclasses.replace(previous, value=generate_password(length, rng))
    if previous.type == "dice":
        match = _DICE_LABEL.match(previous.label)
        if not match:
            return previous
        modifier = int(match.group(3)) if match.group(3) else 0
        roll = roll_dice(int(match.group(1)), int(match.group(2)), modifier, rng)
        return dataclasses.replace(previous, value=str(roll.total), detail=roll.detail)
    if previous.type == "coin":
        return dataclasses.replace(previous, value=_coin(rng))
    if previous.type == "hex":
        return dataclasses.replace(previous, value=random_hex(rng))
    if previous.type == "number":
        match = _RANGE_LABEL.search(previous.label)
        low, high = (int(match.group(1)), int(match.group(2))) if match else (1, 100)
        return dataclasses.replace(previous, value=str(rng.randint(min(low, high), max(low, high))))
    if previous.type == "pick" and previous.detail:
        items = [item for item in previous.detail.split(", ") if item]
        if len(items) >= 2:
            return dataclasses.replace(previous, value=rng.choice(items))
    return previous


QUICK_ACTIONS: dict[str, Callable[[], RandomResult]] = {
    "uuid": lambda: RandomResult(type="uuid", value=generate_uuid(), label="UUID v4"),
    "password": lambda: _password(16, _SYSTEM_RANDOM),
    "dice": lambda: _dice(roll_dice(1, 6)),
    "coin": lambda: RandomResult(type="coin", value=_coin(_SYSTEM_RANDOM), label="Coin Flip"),
    "number": lambda: RandomResult(
        type="number", value=str(_SYSTEM_RANDOM.randint(1, 100)), label="Random (1-100)"
    ),
    "hex": lambda: RandomResult(type="hex", value=random_hex(), label="Random Color"),
}


__all__ = [
    "DiceRoll",
    "QUICK_ACTIONS",
    "detect_random",
    "generate_password",
    "generate_uuid",
    "random_hex",
    "regenerate",
    "roll_dice",
]

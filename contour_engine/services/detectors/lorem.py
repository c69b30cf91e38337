"""Lorem ipsum placeholder text."""

from __future__ import annotations

import re
import random
from typing import Optional

from contour_engine.core.models import LoremResult, LoremType

WORDS = (
    "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod tempor incididunt ut "
    "labore et dolore magna aliqua enim ad minim veniam quis nostrud exercitation ullamco laboris "
    "nisi aliquip ex ea commodo consequat duis aute irure in reprehenderit voluptate velit esse "
    "cillum fugiat nulla pariatur excepteur sint occaecat cupidatat non proident sunt culpa qui "
    "officia deserunt mollit anim id est laborum suspendisse potenti nullam ac tortor vitae purus "
    "faucibus ornare eget arcu dictum varius duis massa ultricies mi quis hendrerit nunc "
    "scelerisque viverra mauris pellentesque pulvinar elementum integer enim neque volutpat "
    "blandit cursus risus nec feugiat pretium nibh praesent semper feugiat nibh sed pulvinar "
    "proin gravida hendrerit lectus"
).split()

FIRST_SENTENCE = "Lorem ipsum dolor sit amet, consectetur adipiscing elit."

LIMITS: dict[LoremType, int] = {"words": 500, "sentences": 50, "paragraphs": 10}

LOREM_PATTERN = re.compile(
    r"^lorem(?:\s+ipsum)?(?:\s+(\d+)\s*(p(?:aragraphs?)?|s(?:entences?)?|w(?:ords?)?)?\s*)?$",
    re.IGNORECASE,
)
_TYPES: dict[str, LoremType] = {"p": "paragraphs", "s": "sentences", "w": "words"}


class LoremGenerator:
    """Random sentence and paragraph builder over a fixed vocabulary."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def word(self) -> str:
        return self._rng.choice(WORDS)

    def sentence(self, word_count: int = 0) -> str:
        count = word_count or 5 + self._rng.randrange(12)
        words = [self.word() for _ in range(count)]
        words[0] = words[0].capitalize()
        return " ".join(words) + "."

    def paragraph(self, sentence_count: int = 0) -> str:
        count = sentence_count or 3 + self._rng.randrange(4)
        return " ".join(self.sentence() for _ in range(count))

    def generate(self, kind: LoremType, count: int) -> LoremResult:
        count = max(1, min(count, LIMITS[kind]))
        if kind == "words":
            words = [self.word() for _ in range(count)]
            words[0] = "Lorem"
            if count > 1:
                words[1] = "ipsum"
            text = " ".join(words) + "."
            return LoremResult(text=text, word_count=count, paragraph_count=1, type=kind)

        if kind == "sentences":
            text = " ".join([FIRST_SENTENCE, *(self.sentence() for _ in range(count - 1))])
            return LoremResult(text=text, word_count=len(text.split()), paragraph_count=1, type=kind)

        paragraphs = [f"{FIRST_SENTENCE} {self.paragraph(3)}"]
        paragraphs.extend(self.paragraph() for _ in range(count - 1))
        text = "\n\n".join(paragraphs)
        return LoremResult(text=text, word_count=len(text.split()), paragraph_count=count, type=kind)


_GENERATOR = LoremGenerator()


def generate_lorem(kind: LoremType, count: int) -> LoremResult:
    return _GENERATOR.generate(kind, count)


def detect_lorem(text: str, generator: Optional[LoremGenerator] = None) -> Optional[LoremResult]:
    match = LOREM_PATTERN.match(text.strip())
    if not match:
        return None

    count = int(match.group(1)) if match.group(1) else 0
    if not count:
        return LoremResult(text="", word_count=0, paragraph_count=0, type="paragraphs", is_partial=True)

    kind = _TYPES[(match.group(2) or "p")[0].lower()]
    return (generator or _GENERATOR).generate(kind, min(count, LIMITS[kind]))


__all__ = ["LIMITS", "LoremGenerator", "detect_lorem", "generate_lorem"]

"""Core data objects shared across detectors, resolvers and the orchestrator."""

# pylint: disable=too-many-instance-attributes

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Callable, ClassVar, Literal, Optional, Union

from contour_engine.core.intents import IntentId, PanelMode


@dataclass(slots=True, frozen=True, kw_only=True)
class BaseResult:
    """Common shape of every intent result.

    ``is_partial`` marks input that is a recognized prefix of a valid pattern.
    A partial result is rendered as a placeholder and never carries an error.
    """

    intent: ClassVar[IntentId]

    is_partial: bool = False

    def __post_init__(self) -> None:
        if self.is_partial and getattr(self, "error", None):
            raise ValueError(f"{type(self).__name__} cannot be both partial and in error")


@dataclass(slots=True, frozen=True, kw_only=True)
class CalculatorResult(BaseResult):
    """Outcome of evaluating an arithmetic expression."""

    intent: ClassVar[IntentId] = IntentId.CALCULATOR

    expression: str
    result: float
    display_result: str


@dataclass(slots=True, frozen=True, kw_only=True)
class UnitResult(BaseResult):
    """Unit conversion between two units of the same category."""

    intent: ClassVar[IntentId] = IntentId.UNITS

    from_value: float
    from_unit: str
    from_label: str
    to_value: float
    to_unit: str
    to_label: str
    display: str


@dataclass(slots=True, frozen=True, kw_only=True)
class CurrencyResult(BaseResult):
    """Currency conversion; ``to_value`` stays empty until rates resolve."""

    intent: ClassVar[IntentId] = IntentId.CURRENCY

    from_value: float
    from_currency: str
    to_currency: str
    display: str
    to_value: Optional[float] = None
    rate: Optional[float] = None
    is_loading: bool = False
    error: Optional[str] = None


@dataclass(slots=True, frozen=True, kw_only=True)
class TimezoneResult(BaseResult):
    """Wall-clock time converted between two zones."""

    intent: ClassVar[IntentId] = IntentId.TIMEZONE

    from_time: str
    from_zone: str
    from_label: str
    to_time: str
    to_zone: str
    to_label: str
    display: str
    is_now: bool = False
    day_shift: int = 0


@dataclass(slots=True, frozen=True, kw_only=True)
class ColorResult(BaseResult):
    """A color expressed as hex, rgb and hsl."""

    intent: ClassVar[IntentId] = IntentId.COLOR

    hex: str
    rgb: tuple[int, int, int]
    hsl: tuple[int, int, int]
    display: str
    input: str
    css_color: str


DateOperation = Literal["until", "since", "from_now", "ago", "between"]


@dataclass(slots=True, frozen=True, kw_only=True)
class DateResult(BaseResult):
    """Day arithmetic relative to today or between two dates."""

    intent: ClassVar[IntentId] = IntentId.DATE

    display: str
    subtitle: str
    days: int
    type: DateOperation
    target_date: Optional[date] = None


@dataclass(slots=True, frozen=True, kw_only=True)
class TimerState(BaseResult):
    """Countdown state; ``remaining_seconds`` only decreases while running."""

    intent: ClassVar[IntentId] = IntentId.TIMER

    total_seconds: int
    remaining_seconds: int
    is_running: bool
    is_complete: bool
    label: str
    display: str
    progress: float


RandomType = Literal["number", "uuid", "password", "dice", "coin", "pick", "hex"]


@dataclass(slots=True, frozen=True, kw_only=True)
class RandomResult(BaseResult):
    """A generated random value together with how it was produced."""

    intent: ClassVar[IntentId] = IntentId.RANDOM

    type: RandomType
    value: str
    label: str
    detail: Optional[str] = None


@dataclass(slots=True, frozen=True, kw_only=True)
class WordCountResult(BaseResult):
    """Text statistics."""

    intent: ClassVar[IntentId] = IntentId.WORDCOUNT

    text: str
    characters: int
    characters_no_spaces: int
    words: int
    sentences: int
    paragraphs: int
    lines: int
    reading_time: str
    speaking_time: str


@dataclass(slots=True, frozen=True, kw_only=True)
class TranslationResult(BaseResult):
    """Text translation; ``translated_text`` stays empty until resolved."""

    intent: ClassVar[IntentId] = IntentId.TRANSLATOR

    source_text: str
    source_lang: str
    source_lang_code: str
    target_lang: str
    target_lang_code: str
    translated_text: Optional[str] = None
    is_loading: bool = False
    error: Optional[str] = None


@dataclass(slots=True, frozen=True)
class DictionaryDefinition:
    """One sense of a word."""

    definition: str
    example: Optional[str] = None


@dataclass(slots=True, frozen=True)
class DictionaryMeaning:
    """Definitions grouped under one part of speech."""

    part_of_speech: str
    definitions: tuple[DictionaryDefinition, ...] = ()
    synonyms: tuple[str, ...] = ()
    antonyms: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True, kw_only=True)
class DictionaryResult(BaseResult):
    """Word lookup; ``meanings`` stays empty until resolved."""

    intent: ClassVar[IntentId] = IntentId.DICTIONARY

    word: str
    meanings: tuple[DictionaryMeaning, ...] = ()
    phonetic: Optional[str] = None
    phonetic_audio: Optional[str] = None
    is_loading: bool = False
    error: Optional[str] = None


LoremType = Literal["paragraphs", "sentences", "words"]


@dataclass(slots=True, frozen=True, kw_only=True)
class LoremResult(BaseResult):
    """Generated placeholder text."""

    intent: ClassVar[IntentId] = IntentId.LOREM

    text: str
    word_count: int
    paragraph_count: int
    type: LoremType


@dataclass(slots=True, frozen=True, kw_only=True)
class JsonFormatResult(BaseResult):
    """Pretty-printed and minified JSON, or the parse error."""

    intent: ClassVar[IntentId] = IntentId.JSON_FORMAT

    input: str
    formatted: str
    minified: str
    is_valid: bool
    key_count: int = 0
    depth: int = 0
    error: Optional[str] = None


CodecMode = Literal["encode", "decode"]


@dataclass(slots=True, frozen=True, kw_only=True)
class Base64Result(BaseResult):
    """Base64 encode or decode outcome."""

    intent: ClassVar[IntentId] = IntentId.BASE64

    input: str
    encoded: str
    decoded: str
    mode: CodecMode
    error: Optional[str] = None

    @property
    def output(self) -> str:
        return self.encoded if self.mode == "encode" else self.decoded


@dataclass(slots=True, frozen=True, kw_only=True)
class UrlEncodeResult(BaseResult):
    """Percent-encoding outcome."""

    intent: ClassVar[IntentId] = IntentId.URL_ENCODE

    input: str
    encoded: str
    decoded: str
    mode: CodecMode
    error: Optional[str] = None

    @property
    def output(self) -> str:
        return self.encoded if self.mode == "encode" else self.decoded


@dataclass(slots=True, frozen=True, kw_only=True)
class HashResult(BaseResult):
    """Digests of the input text."""

    intent: ClassVar[IntentId] = IntentId.HASH

    input: str
    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None
    sha512: Optional[str] = None
    error: Optional[str] = None


@dataclass(slots=True, frozen=True)
class RegexMatch:
    """A single regex match inside the subject string."""

    match: str
    index: int
    length: int
    groups: Optional[dict[str, Optional[str]]] = None


@dataclass(slots=True, frozen=True, kw_only=True)
class RegexResult(BaseResult):
    """Matches of a pattern against a subject string."""

    intent: ClassVar[IntentId] = IntentId.REGEX

    pattern: str
    flags: str
    test_string: str
    matches: tuple[RegexMatch, ...] = ()
    is_valid: bool = True
    error: Optional[str] = None

    @property
    def match_count(self) -> int:
        return len(self.matches)


GraphFunction = Callable[[float], Optional[float]]


@dataclass(slots=True, frozen=True, kw_only=True)
class GraphResult(BaseResult):
    """A plottable equation in one variable."""

    intent: ClassVar[IntentId] = IntentId.GRAPH

    expression: str
    normalized: str
    function: Optional[GraphFunction] = field(default=None, repr=False, compare=False)


IntentResult = Union[
    CalculatorResult,
    UnitResult,
    CurrencyResult,
    TimezoneResult,
    ColorResult,
    DateResult,
    TimerState,
    RandomResult,
    WordCountResult,
    TranslationResult,
    DictionaryResult,
    LoremResult,
    JsonFormatResult,
    Base64Result,
    UrlEncodeResult,
    HashResult,
    RegexResult,
    GraphResult,
]


# --- Commands ---------------------------------------------------------------


class CommandCategory(str, Enum):
    """Grouping used when rendering the command palette."""

    CALCULATOR = "calculator"
    CONVERTER = "converter"
    UTILITY = "utility"
    SYSTEM = "system"
    SEARCH = "search"
    DEVELOPER = "developer"
    PRODUCTIVITY = "productivity"
    RECENTS = "recents"


@dataclass(slots=True, frozen=True)
class InlineAction:
    """Open a module inside the panel in focused mode."""

    handler: str
    type: ClassVar[str] = "inline"


@dataclass(slots=True, frozen=True)
class NavigateAction:
    """Navigate the host application to a route."""

    path: str
    type: ClassVar[str] = "navigate"


@dataclass(slots=True, frozen=True)
class ModeAction:
    """Switch the host application into a mode."""

    mode: str
    type: ClassVar[str] = "mode"


@dataclass(slots=True, frozen=True)
class ClipboardAction:
    """Generate a value and copy it."""

    handler: str
    type: ClassVar[str] = "clipboard"


@dataclass(slots=True, frozen=True)
class ExternalAction:
    """Open an external link."""

    url: str
    type: ClassVar[str] = "external"


CommandAction = Union[InlineAction, NavigateAction, ModeAction, ClipboardAction, ExternalAction]


@dataclass(slots=True, frozen=True)
class Command:
    """A slash command in the palette."""

    id: str
    name: str
    description: str
    icon: str
    category: CommandCategory
    keywords: tuple[str, ...]
    action: CommandAction


@dataclass(slots=True, frozen=True)
class CommandGroup:
    """Commands sharing a category, in render order."""

    category: CommandCategory
    label: str
    commands: tuple[Command, ...]


# --- Panel state ------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class ModuleData:
    """The live module: which intent, whether pinned, and its latest result."""

    intent: IntentId
    focused: bool = False
    result: Optional[IntentResult] = None


@dataclass(slots=True, frozen=True)
class PanelState:
    """Everything the rendering layer needs; replaced wholesale on change."""

    mode: PanelMode = PanelMode.HIDDEN
    active_module: Optional[ModuleData] = None
    commands: tuple[Command, ...] = ()
    command_query: str = ""
    selected_index: int = 0

    @property
    def is_visible(self) -> bool:
        return self.mode is not PanelMode.HIDDEN

    @property
    def is_focused(self) -> bool:
        return (
            self.mode is PanelMode.MODULE
            and self.active_module is not None
            and self.active_module.focused
        )


HIDDEN_PANEL = PanelState()


# --- Provider payloads ------------------------------------------------------


@dataclass(slots=True, frozen=True)
class TranslationPayload:
    """What a translation provider returns."""

    translated_text: str
    detected_lang: Optional[str] = None


@dataclass(slots=True, frozen=True)
class DictionaryEntry:
    """What a dictionary provider returns for a known word."""

    word: str
    meanings: tuple[DictionaryMeaning, ...] = ()
    phonetic: Optional[str] = None
    phonetic_audio: Optional[str] = None


# --- Serialization ----------------------------------------------------------


def to_jsonable(value: Any) -> Any:
    """Convert engine objects into plain JSON-compatible structures.

    Callables (compiled graph functions) are dropped, enums become their
    values and dates become ISO strings. Result objects gain an ``intent`` key.
    """

    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data: dict[str, Any] = {}
        intent = getattr(type(value), "intent", None)
        if isinstance(intent, IntentId):
            data["intent"] = intent.value
        action_type = getattr(type(value), "type", None)
        if isinstance(action_type, str):
            data["type"] = action_type
        for item in dataclasses.fields(value):
            attr = getattr(value, item.name)
            if callable(attr) and not dataclasses.is_dataclass(attr):
                continue
            data[item.name] = to_jsonable(attr)
        return data
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


__all__ = [
    "BaseResult",
    "CalculatorResult",
    "UnitResult",
    "CurrencyResult",
    "TimezoneResult",
    "ColorResult",
    "DateOperation",
    "DateResult",
    "TimerState",
    "RandomType",
    "RandomResult",
    "WordCountResult",
    "TranslationResult",
    "DictionaryDefinition",
    "DictionaryMeaning",
    "DictionaryResult",
    "LoremType",
    "LoremResult",
    "JsonFormatResult",
    "CodecMode",
    "Base64Result",
    "UrlEncodeResult",
    "HashResult",
    "RegexMatch",
    "RegexResult",
    "GraphFunction",
    "GraphResult",
    "IntentResult",
    "CommandCategory",
    "InlineAction",
    "NavigateAction",
    "ModeAction",
    "ClipboardAction",
    "ExternalAction",
    "CommandAction",
    "Command",
    "CommandGroup",
    "ModuleData",
    "PanelState",
    "HIDDEN_PANEL",
    "TranslationPayload",
    "DictionaryEntry",
    "to_jsonable",
]

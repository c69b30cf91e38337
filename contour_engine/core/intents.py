"""Intent identifiers and panel modes for the detection engine."""

from enum import Enum


class IntentId(str, Enum):
    """Enumeration of every structured interpretation a typed input can take."""

    CALCULATOR = "calculator"
    UNITS = "units"
    CURRENCY = "currency"
    TIMEZONE = "timezone"
    COLOR = "color"
    DATE = "date"
    TIMER = "timer"
    RANDOM = "random"
    WORDCOUNT = "wordcount"
    TRANSLATOR = "translator"
    DICTIONARY = "dictionary"
    LOREM = "lorem"
    JSON_FORMAT = "json-format"
    BASE64 = "base64"
    URL_ENCODE = "url-encode"
    HASH = "hash"
    REGEX = "regex"
    GRAPH = "graph"
    HELP = "help"


class PanelMode(str, Enum):
    """Top-level state of the panel."""

    HIDDEN = "hidden"
    COMMANDS = "commands"
    MODULE = "module"


# Intents whose results are completed by a network-backed resolver.
RESOLVABLE_INTENTS = frozenset({IntentId.CURRENCY, IntentId.TRANSLATOR, IntentId.DICTIONARY})


__all__ = ["IntentId", "PanelMode", "RESOLVABLE_INTENTS"]

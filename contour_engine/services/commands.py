"""Slash-command catalog, fuzzy search and the persisted recents list."""

# pylint: disable=missing-function-docstring

from __future__ import annotations

import dataclasses
import json
import re
from typing import Iterable, Optional, Sequence

from contour_engine.core.logging import get_logger
from contour_engine.core.models import (
    ClipboardAction,
    Command,
    CommandAction,
    CommandCategory,
    CommandGroup,
    InlineAction,
    ModeAction,
    NavigateAction,
)
from contour_engine.core.ports import PersistentKV

logger = get_logger(__name__)

RECENTS_KEY = "contour-recent-commands"
DEFAULT_MAX_RECENTS = 5


def _command(
    command_id: str,
    name: str,
    description: str,
    icon: str,
    category: CommandCategory,
    keywords: str,
    action: CommandAction,
) -> Command:
    return Command(command_id, name, description, icon, category, tuple(keywords.split(",")), action)


_C = CommandCategory

COMMANDS: tuple[Command, ...] = (
    _command("calculator", "Calculator", "Quick math calculations", "Calculator", _C.CALCULATOR,
             "math,calc,compute,add,subtract,multiply,divide", InlineAction("calculator")),
    _command("convert-units", "Unit Converter", "Convert between units (km, miles, kg, etc.)",
             "ArrowLeftRight", _C.CONVERTER,
             "convert,units,km,miles,celsius,fahrenheit,kg,pounds,meters,feet",
             InlineAction("unit-converter")),
    _command("convert-currency", "Currency Converter", "Convert between currencies", "DollarSign",
             _C.CONVERTER, "money,usd,eur,gbp,exchange,rate,forex", InlineAction("currency-converter")),
    _command("convert-timezone", "Timezone Converter", "Convert time between zones", "Globe",
             _C.CONVERTER, "time,zone,utc,est,pst,gmt,ist,world clock", InlineAction("timezone")),
    _command("convert-color", "Color Converter", "Convert between HEX, RGB, HSL", "Palette",
             _C.CONVERTER, "hex,rgb,hsl,color,colour,picker", InlineAction("color-converter")),
    _command("timer", "Timer", "Set a quick timer or stopwatch", "Timer", _C.UTILITY,
             "countdown,stopwatch,alarm,clock", InlineAction("timer")),
    _command("date-calc", "Date Calculator", "Calculate days between dates or add/subtract days",
             "Calendar", _C.UTILITY, "days,between,date,ago,from now,difference",
             InlineAction("date-calculator")),
    _command("random", "Random Generator", "Generate random numbers, UUIDs, passwords", "Shuffle",
             _C.UTILITY, "random,uuid,password,generate,dice,coin,flip", InlineAction("random")),
    _command("word-count", "Word Counter", "Count words, characters, and sentences", "Type",
             _C.UTILITY, "count,words,characters,length,text", InlineAction("word-count")),
    _command("translator", "Translator", "Translate text between languages", "Languages", _C.UTILITY,
             "translate,translation,language,bangla,spanish,french,hindi,japanese,korean,chinese,arabic",
             InlineAction("translator")),
    _command("dictionary", "Dictionary", "Look up word definitions, synonyms, and examples",
             "BookOpen", _C.UTILITY,
             "dictionary,define,meaning,definition,synonym,antonym,word,lookup",
             InlineAction("dictionary")),
    _command("json-format", "JSON Formatter", "Format and validate JSON", "Braces", _C.DEVELOPER,
             "json,format,prettify,validate,parse", InlineAction("json-format")),
    _command("base64", "Base64 Encode/Decode", "Encode or decode Base64 strings", "Lock",
             _C.DEVELOPER, "base64,encode,decode,encryption", InlineAction("base64")),
    _command("url-encode", "URL Encode/Decode", "Encode or decode URL strings", "Link", _C.DEVELOPER,
             "url,encode,decode,percent,uri", InlineAction("url-encode")),
    _command("hash", "Hash Generator", "Generate MD5, SHA-1, SHA-256 hashes", "Hash", _C.DEVELOPER,
             "hash,md5,sha,checksum,digest", InlineAction("hash")),
    _command("regex-test", "Regex Tester", "Test regular expressions live", "FileSearch",
             _C.DEVELOPER, "regex,regexp,pattern,match,test", InlineAction("regex")),
    _command("lorem", "Lorem Ipsum", "Generate placeholder text", "FileText", _C.DEVELOPER,
             "lorem,ipsum,placeholder,dummy,text", InlineAction("lorem")),
    _command("settings", "Settings", "Open app settings", "Settings", _C.SYSTEM,
             "settings,preferences,config,options", NavigateAction("/settings")),
    _command("history", "Chat History", "View past conversations", "History", _C.SYSTEM,
             "history,past,conversations,chats,previous", NavigateAction("/history")),
    _command("album", "Album", "View generated images", "Image", _C.SYSTEM,
             "album,gallery,images,photos,generated", NavigateAction("/album")),
    _command("memories", "Memories", "View saved memories", "Brain", _C.SYSTEM,
             "memories,saved,remember,notes", NavigateAction("/memories")),
    _command("help", "Help", "Get help and documentation", "HelpCircle", _C.SYSTEM,
             "help,docs,documentation,how,guide", NavigateAction("/help")),
    _command("web-coding", "Web Coding Mode", "Start a web coding session", "Code", _C.PRODUCTIVITY,
             "code,coding,web,html,css,javascript,programming", ModeAction("web-coding")),
    _command("music-compose", "Music Compose", "Compose music with AI", "Music", _C.PRODUCTIVITY,
             "music,compose,song,melody,audio", ModeAction("music-compose")),
    _command("healthcare", "TM Healthcare", "Health assistant mode", "HeartPulse", _C.PRODUCTIVITY,
             "health,healthcare,medical,fitness,wellness", ModeAction("tm-healthcare")),
    _command("copy-uuid", "Generate UUID", "Generate and copy a UUID", "Fingerprint", _C.UTILITY,
             "uuid,guid,unique,id,identifier", ClipboardAction("uuid")),
    _command("copy-timestamp", "Copy Timestamp", "Copy current Unix timestamp", "Clock", _C.UTILITY,
             "timestamp,unix,epoch,time,now", ClipboardAction("timestamp")),
)

CATEGORY_LABELS: dict[CommandCategory, str] = {
    _C.CALCULATOR: "Calculator",
    _C.CONVERTER: "Converters",
    _C.UTILITY: "Utilities",
    _C.SYSTEM: "System",
    _C.SEARCH: "Search",
    _C.DEVELOPER: "Developer",
    _C.PRODUCTIVITY: "Productivity",
    _C.RECENTS: "Recent",
}

_BY_ID = {command.id: command for command in COMMANDS}

_BOUNDARY = re.compile(r"[\s\-_]")


def find_command(command_id: str) -> Optional[Command]:
    return _BY_ID.get(command_id)


def fuzzy_score(query: str, target: str) -> int:
    """Subsequence score; zero unless every query character appears in order.

    Consecutive runs, word boundaries and a match at the very start are
    rewarded.
    """
    q = query.lower()
    t = target.lower()
    if not q:
        return 0

    qi = 0
    score = 0
    consecutive = 0
    for ti, char in enumerate(t):
        if qi >= len(q):
            break
        if char == q[qi]:
            score += 1 + consecutive
            if ti == 0 or _BOUNDARY.match(t[ti - 1]):
                score += 5
            if ti == 0:
                score += 3
            consecutive += 1
            qi += 1
        else:
            consecutive = 0
    return score if qi == len(q) else 0


def score_command(command: Command, query: str) -> int:
    lower = query.lower()
    name = command.name.lower()
    description = command.description.lower()

    if name == lower:
        score = 100
    elif name.startswith(lower):
        score = 80
    elif lower in name:
        score = 60
    else:
        score = fuzzy_score(lower, name) * 2

    score += 30 if lower in description else fuzzy_score(lower, description)

    # Only the first keyword that matches at all contributes.
    for keyword in command.keywords:
        if keyword.startswith(lower):
            score += 50
            break
        if lower in keyword:
            score += 20
            break
        keyword_score = fuzzy_score(lower, keyword)
        if keyword_score > 0:
            score += keyword_score
            break

    score += 40 if lower in command.id else fuzzy_score(lower, command.id)
    return score


class RecentCommands:
    """Most-recent-first list of used command ids, persisted as a JSON list."""

    def __init__(self, kv: Optional[PersistentKV] = None, max_entries: int = DEFAULT_MAX_RECENTS) -> None:
        self._kv = kv
        self._max_entries = max_entries

    def ids(self) -> list[str]:
        if self._kv is None:
            return []
        try:
            raw = self._kv.get(RECENTS_KEY)
        except OSError as exc:
            logger.warning("[commands] could not read recents: %s", exc)
            return []
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.warning("[commands] ignoring corrupt recents list")
            return []
        if not isinstance(parsed, list):
            return []
        return [item for item in parsed if isinstance(item, str)][: self._max_entries]

    def record(self, command_id: str) -> None:
        if self._kv is None:
            return
        recents = [item for item in self.ids() if item != command_id]
        recents.insert(0, command_id)
        try:
            self._kv.set(RECENTS_KEY, json.dumps(recents[: self._max_entries]))
        except OSError as exc:
            logger.warning("[commands] could not persist recents: %s", exc)

    def commands(self) -> list[Command]:
        """Known recent commands re-tagged into the recents category."""
        return [
            dataclasses.replace(command, category=CommandCategory.RECENTS)
            for command in (find_command(item) for item in self.ids())
            if command is not None
        ]


def search_commands(
    query: str,
    recents: Optional[RecentCommands] = None,
    catalog: Sequence[Command] = COMMANDS,
) -> list[Command]:
    """Empty query: recents then the whole catalog. Otherwise best score first."""
    if not query:
        recent = recents.commands() if recents is not None else []
        return [*recent, *catalog]

    scored = [(command, score_command(command, query)) for command in catalog]
    ranked = sorted((item for item in scored if item[1] > 0), key=lambda item: item[1], reverse=True)
    return [command for command, _ in ranked]


def group_by_category(commands: Iterable[Command]) -> list[CommandGroup]:
    """Group in order of first appearance, preserving order inside each group."""
    grouped: dict[CommandCategory, list[Command]] = {}
    for command in commands:
        grouped.setdefault(command.category, []).append(command)
    return [
        CommandGroup(category=category, label=CATEGORY_LABELS[category], commands=tuple(items))
        for category, items in grouped.items()
    ]


def flatten_groups(groups: Iterable[CommandGroup]) -> list[Command]:
    return [command for group in groups for command in group.commands]


__all__ = [
    "CATEGORY_LABELS",
    "COMMANDS",
    "RECENTS_KEY",
    "RecentCommands",
    "find_command",
    "flatten_groups",
    "fuzzy_score",
    "group_by_category",
    "score_command",
    "search_commands",
]

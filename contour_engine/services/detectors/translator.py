"""Translation request detection.

Recognizes ``translate X to L``, ``X in L`` and ``X to L``. The detector
only builds a loading placeholder; ``resolvers.resolve_translation`` fills
in the text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from contour_engine.core.models import TranslationResult


@dataclass(slots=True, frozen=True)
class Language:
    code: str
    name: str
    native_name: str
    aliases: tuple[str, ...]


def _lang(code: str, name: str, native: str, aliases: str) -> Language:
    return Language(code, name, native, tuple(aliases.split("|")))


LANGUAGES: tuple[Language, ...] = (
    _lang("en", "English", "English", "english|eng"),
    _lang("bn", "Bengali", "বাংলা", "bengali|bangla|bangali"),
    _lang("hi", "Hindi", "हिन्दी", "hindi"),
    _lang("es", "Spanish", "Español", "spanish|español|espanol"),
    _lang("fr", "French", "Français", "french|français|francais"),
    _lang("de", "German", "Deutsch", "german|deutsch"),
    _lang("it", "Italian", "Italiano", "italian|italiano"),
    _lang("pt", "Portuguese", "Português", "portuguese|português|portugues"),
    _lang("ru", "Russian", "Русский", "russian"),
    _lang("ja", "Japanese", "日本語", "japanese|nihongo"),
    _lang("ko", "Korean", "한국어", "korean"),
    _lang("zh", "Chinese", "中文", "chinese|mandarin|zhongwen"),
    _lang("ar", "Arabic", "العربية", "arabic"),
    _lang("tr", "Turkish", "Türkçe", "turkish|türkçe|turkce"),
    _lang("th", "Thai", "ไทย", "thai"),
    _lang("vi", "Vietnamese", "Tiếng Việt", "vietnamese"),
    _lang("nl", "Dutch", "Nederlands", "dutch|nederlands"),
    _lang("pl", "Polish", "Polski", "polish|polski"),
    _lang("uk", "Ukrainian", "Українська", "ukrainian"),
    _lang("sv", "Swedish", "Svenska", "swedish|svenska"),
    _lang("da", "Danish", "Dansk", "danish|dansk"),
    _lang("no", "Norwegian", "Norsk", "norwegian|norsk"),
    _lang("fi", "Finnish", "Suomi", "finnish|suomi"),
    _lang("el", "Greek", "Ελληνικά", "greek"),
    _lang("cs", "Czech", "Čeština", "czech"),
    _lang("ro", "Romanian", "Română", "romanian|romana"),
    _lang("hu", "Hungarian", "Magyar", "hungarian|magyar"),
    _lang("id", "Indonesian", "Bahasa Indonesia", "indonesian|bahasa"),
    _lang("ms", "Malay", "Bahasa Melayu", "malay|melayu"),
    _lang("tl", "Filipino", "Filipino", "filipino|tagalog"),
    _lang("sw", "Swahili", "Kiswahili", "swahili"),
    _lang("ta", "Tamil", "தமிழ்", "tamil"),
    _lang("te", "Telugu", "తెలుగు", "telugu"),
    _lang("ur", "Urdu", "اردو", "urdu"),
    _lang("fa", "Persian", "فارسی", "persian|farsi"),
    _lang("he", "Hebrew", "עברית", "hebrew"),
    _lang("mr", "Marathi", "मराठी", "marathi"),
    _lang("gu", "Gujarati", "ગુજરાતી", "gujarati"),
    _lang("kn", "Kannada", "ಕನ್ನಡ", "kannada"),
    _lang("ml", "Malayalam", "മലയാളം", "malayalam"),
    _lang("pa", "Punjabi", "ਪੰਜਾਬੀ", "punjabi"),
    _lang("ne", "Nepali", "नेपाली", "nepali"),
    _lang("si", "Sinhala", "සිංහල", "sinhala|sinhalese"),
    _lang("my", "Burmese", "ဗမာ", "burmese|myanmar"),
    _lang("km", "Khmer", "ខ្មែរ", "khmer|cambodian"),
    _lang("lo", "Lao", "ລາວ", "lao|laotian"),
    _lang("ka", "Georgian", "ქართული", "georgian"),
    _lang("am", "Amharic", "አማርኛ", "amharic"),
    _lang("af", "Afrikaans", "Afrikaans", "afrikaans"),
    _lang("sq", "Albanian", "Shqip", "albanian"),
    _lang("eu", "Basque", "Euskara", "basque"),
    _lang("ca", "Catalan", "Català", "catalan"),
    _lang("hr", "Croatian", "Hrvatski", "croatian"),
    _lang("sr", "Serbian", "Српски", "serbian"),
    _lang("sk", "Slovak", "Slovenčina", "slovak"),
    _lang("sl", "Slovenian", "Slovenščina", "slovenian"),
    _lang("bg", "Bulgarian", "Български", "bulgarian"),
    _lang("et", "Estonian", "Eesti", "estonian"),
    _lang("lv", "Latvian", "Latviešu", "latvian"),
    _lang("lt", "Lithuanian", "Lietuvių", "lithuanian"),
)

POPULAR_LANGUAGES = ("en", "bn", "hi", "es", "fr", "de", "ja", "ko", "zh", "ar", "pt", "ru")

_BY_CODE = {lang.code: lang for lang in LANGUAGES}

_NAMES = sorted({name for lang in LANGUAGES for name in (lang.name, *lang.aliases)}, key=len, reverse=True)
_LANG = "|".join(re.escape(name) for name in _NAMES)

TRANSLATE_PATTERN = re.compile(rf"^translate\s+(.+?)\s+(?:to|into)\s+({_LANG})\s*$", re.IGNORECASE)
IN_PATTERN = re.compile(rf"^(.+?)\s+in\s+({_LANG})\s*$", re.IGNORECASE)
TO_PATTERN = re.compile(rf"^(.+?)\s+to\s+({_LANG})\s*$", re.IGNORECASE)

# Quantities that belong to the unit and currency converters.
BLOCKLIST = re.compile(
    r"^\s*-?[\d.,]+\s*(km|mi|lb|kg|oz|g|m|cm|ft|in|usd|eur|gbp|jpy|inr|c|f|k)\b",
    re.IGNORECASE,
)
_NUMERIC_ONLY = re.compile(r"^[\d.,\s]+$")


def find_language(name: str) -> Optional[Language]:
    lowered = name.strip().lower()
    for lang in LANGUAGES:
        if lowered in (lang.name.lower(), lang.native_name.lower(), lang.code) or lowered in lang.aliases:
            return lang
    return None


def get_language_name(code: str) -> str:
    lang = _BY_CODE.get(code)
    return lang.name if lang else code.upper()


def get_language_list() -> list[dict[str, str]]:
    return [{"code": lang.code, "name": lang.name, "native_name": lang.native_name} for lang in LANGUAGES]


def detect_translation(text: str) -> Optional[TranslationResult]:
    trimmed = text.strip()
    if len(trimmed) < 3 or BLOCKLIST.match(trimmed):
        return None

    match = (
        TRANSLATE_PATTERN.match(trimmed)
        or IN_PATTERN.match(trimmed)
        or TO_PATTERN.match(trimmed)
    )
    if not match:
        return None

    source = match.group(1).strip()
    target = find_language(match.group(2))
    if not source or target is None or _NUMERIC_ONLY.match(source):
        return None

    return TranslationResult(
        source_text=source,
        source_lang="Auto",
        source_lang_code="auto",
        target_lang=target.name,
        target_lang_code=target.code,
        is_loading=True,
    )


def translate_direct(text: str, from_code: str, to_code: str) -> TranslationResult:
    """Loading placeholder for an explicit language pair."""
    source = _BY_CODE.get(from_code)
    target = _BY_CODE.get(to_code)
    return TranslationResult(
        source_text=text,
        source_lang=source.name if source else "Auto",
        source_lang_code=from_code,
        target_lang=target.name if target else to_code,
        target_lang_code=to_code,
        is_loading=True,
    )


__all__ = [
    "LANGUAGES",
    "Language",
    "POPULAR_LANGUAGES",
    "detect_translation",
    "find_language",
    "get_language_list",
    "get_language_name",
    "translate_direct",
]

"""Language reference data and year options for the filter pickers."""

from collections import namedtuple
from collections.abc import Mapping
from datetime import date
from functools import lru_cache
from typing import Optional, Tuple

from .config import YEAR_SPAN


Language = namedtuple("Language", ["code", "name"])


# ISO 639-1 code -> display name. Values may also be {"name": ..., "native": ...}
LANGUAGE_TABLE = {
    'af': 'Afrikaans',
    'am': 'Amharic',
    'ar': {'name': 'Arabic', 'native': 'العربية'},
    'az': 'Azerbaijani',
    'be': 'Belarusian',
    'bg': 'Bulgarian',
    'bn': 'Bengali',
    'bs': 'Bosnian',
    'ca': 'Catalan',
    'cs': 'Czech',
    'cy': 'Welsh',
    'da': 'Danish',
    'de': {'name': 'German', 'native': 'Deutsch'},
    'el': {'name': 'Greek', 'native': 'Ελληνικά'},
    'en': 'English',
    'eo': 'Esperanto',
    'es': {'name': 'Spanish', 'native': 'Español'},
    'et': 'Estonian',
    'eu': 'Basque',
    'fa': 'Persian',
    'fi': 'Finnish',
    'fr': {'name': 'French', 'native': 'Français'},
    'fy': 'Western Frisian',
    'ga': 'Irish',
    'gd': 'Scottish Gaelic',
    'gl': 'Galician',
    'he': 'Hebrew',
    'hi': 'Hindi',
    'hr': 'Croatian',
    'hu': 'Hungarian',
    'hy': 'Armenian',
    'id': 'Indonesian',
    'is': 'Icelandic',
    'it': {'name': 'Italian', 'native': 'Italiano'},
    'ja': {'name': 'Japanese', 'native': '日本語'},
    'ka': 'Georgian',
    'kk': 'Kazakh',
    'km': 'Khmer',
    'ko': 'Korean',
    'la': 'Latin',
    'lb': 'Luxembourgish',
    'lt': 'Lithuanian',
    'lv': 'Latvian',
    'mi': 'Maori',
    'mk': 'Macedonian',
    'mn': 'Mongolian',
    'ms': 'Malay',
    'mt': 'Maltese',
    'nb': 'Norwegian Bokmål',
    'nl': 'Dutch',
    'nn': 'Norwegian Nynorsk',
    'no': 'Norwegian',
    'oc': 'Occitan',
    'pl': 'Polish',
    'pt': {'name': 'Portuguese', 'native': 'Português'},
    'ro': 'Romanian',
    'ru': {'name': 'Russian', 'native': 'Русский'},
    'sa': 'Sanskrit',
    'sk': 'Slovak',
    'sl': 'Slovenian',
    'sq': 'Albanian',
    'sr': 'Serbian',
    'sv': 'Swedish',
    'sw': 'Swahili',
    'ta': 'Tamil',
    'te': 'Telugu',
    'th': 'Thai',
    'tl': 'Tagalog',
    'tr': 'Turkish',
    'uk': 'Ukrainian',
    'ur': 'Urdu',
    'uz': 'Uzbek',
    'vi': 'Vietnamese',
    'yi': 'Yiddish',
    'zh': {'name': 'Chinese', 'native': '中文'},
}


def _entry_name(value) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, Mapping):
        name = value.get('name')
        if isinstance(name, str):
            return name.strip()
    return ""


def build_language_list(table) -> Tuple[Language, ...]:
    """Turn a code -> name table into a name-sorted tuple of Language entries.

    Codes are lower-cased and the first occurrence of a code wins. Entries
    without a usable name are dropped, and anything that is not a mapping
    produces an empty tuple.
    """
    if not isinstance(table, Mapping):
        return ()

    seen = set()
    languages = []
    for code, value in table.items():
        if not isinstance(code, str) or not code.strip():
            continue
        code = code.strip().lower()
        name = _entry_name(value)
        if not name or code in seen:
            continue
        seen.add(code)
        languages.append(Language(code=code, name=name))

    languages.sort(key=lambda lang: (lang.name.casefold(), lang.code))
    return tuple(languages)


@lru_cache(maxsize=None)
def get_languages() -> Tuple[Language, ...]:
    """Sorted language list, built once per process"""
    return build_language_list(LANGUAGE_TABLE)


def find_language(code: Optional[str]) -> Optional[Language]:
    if not code:
        return None
    code = code.strip().lower()
    for lang in get_languages():
        if lang.code == code:
            return lang
    return None


def get_language_name(code: Optional[str]) -> str:
    """Display name for a code, falling back to the raw code for unknown values"""
    lang = find_language(code)
    if lang:
        return lang.name
    return code or ""


def year_options(today: Optional[date] = None) -> Tuple[int, ...]:
    """Selectable years, newest first, covering YEAR_SPAN years up to today"""
    current_year = (today or date.today()).year
    return tuple(current_year - i for i in range(YEAR_SPAN))

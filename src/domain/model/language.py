"""Language Value Object.

Encapsulates the language table shared by every dictionary: ISO 639-1
codes, English and native names, and the long form some sites use in
their URLs.
"""

from dataclasses import dataclass

from domain.model.errors import UnsupportedLanguageError


@dataclass(frozen=True)
class Language:
    """Immutable value object representing a supported language."""

    code: str
    name: str
    native: str
    long: str


@dataclass(frozen=True)
class LanguagePair:
    """A validated source/target pair of canonical short codes."""

    source: Language
    target: Language

    @property
    def key(self) -> str:
        return f"{self.source.code}-{self.target.code}"


# ── Language instances ────────────────────────────────────────

_LANGUAGE_TABLE: tuple[tuple[str, str, str], ...] = (
    ("en", "English", "English"),
    ("es", "Spanish", "Español"),
    ("fr", "French", "Français"),
    ("de", "German", "Deutsch"),
    ("it", "Italian", "Italiano"),
    ("pt", "Portuguese", "Português"),
    ("ru", "Russian", "Русский"),
    ("ar", "Arabic", "العربية"),
    ("zh", "Chinese", "中文"),
    ("ja", "Japanese", "日本語"),
    ("ko", "Korean", "한국어"),
    ("nl", "Dutch", "Nederlands"),
    ("pl", "Polish", "Polski"),
    ("sv", "Swedish", "Svenska"),
    ("no", "Norwegian", "Norsk"),
    ("da", "Danish", "Dansk"),
    ("fi", "Finnish", "Suomi"),
    ("cs", "Czech", "Čeština"),
    ("ro", "Romanian", "Română"),
    ("tr", "Turkish", "Türkçe"),
    ("he", "Hebrew", "עברית"),
    ("hi", "Hindi", "हिन्दी"),
    ("th", "Thai", "ไทย"),
    ("vi", "Vietnamese", "Tiếng Việt"),
    ("el", "Greek", "Ελληνικά"),
    ("hu", "Hungarian", "Magyar"),
    ("bg", "Bulgarian", "Български"),
    ("hr", "Croatian", "Hrvatski"),
    ("sk", "Slovak", "Slovenčina"),
    ("sl", "Slovenian", "Slovenščina"),
    ("et", "Estonian", "Eesti"),
    ("lv", "Latvian", "Latviešu"),
    ("lt", "Lithuanian", "Lietuvių"),
    ("mt", "Maltese", "Malti"),
)


# ── Registry ──────────────────────────────────────────────────

LANGUAGES: dict[str, Language] = {
    code: Language(code=code, name=name, native=native, long=name.lower())
    for code, name, native in _LANGUAGE_TABLE
}


def normalize_language_code(code: str | None) -> str | None:
    """Normalize a language code to its ISO 639-1 short form.

    Accepts the short code ("en"), the long form ("english") or the
    English name ("English"), case-insensitively.

    Returns None for unsupported or unknown codes.
    """
    if not code:
        return None
    lower = code.strip().lower()
    if lower in LANGUAGES:
        return lower
    for short, language in LANGUAGES.items():
        if language.long == lower or language.name.lower() == lower:
            return short
    return None


def get_language(code: str | None) -> Language | None:
    """Look up a Language by any accepted spelling of its code."""
    short = normalize_language_code(code)
    return LANGUAGES.get(short) if short else None


def get_language_name(code: str) -> str:
    """English name for a code, or the code itself when unknown."""
    language = get_language(code)
    return language.name if language else code


def get_supported_languages() -> list[str]:
    return list(LANGUAGES)


def get_alternatives(code: str | None) -> list[str]:
    """Spellings of a language code worth trying against a site.

    Returns [short, long] for a supported code, [] otherwise.
    """
    language = get_language(code)
    if language is None:
        return []
    return list(dict.fromkeys([language.code, language.long]))


def validate_pair(from_lang: str, to_lang: str) -> LanguagePair:
    """Validate and normalize a source/target pair.

    Raises:
        UnsupportedLanguageError: If either code is not recognized.
    """
    source = get_language(from_lang)
    if source is None:
        raise UnsupportedLanguageError(from_lang, role="source")
    target = get_language(to_lang)
    if target is None:
        raise UnsupportedLanguageError(to_lang, role="target")
    return LanguagePair(source=source, target=target)

"""Domain-level exceptions.

Services and adapters raise these errors to express contract violations
and transport failures. Route handlers catch them and map to HTTP status
codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ValidationError(DomainError):
    """Input violates a validation rule."""


class UnsupportedLanguageError(ValidationError):
    """Language code is not recognized."""

    def __init__(self, code: str, role: str = "source"):
        self.code = code
        self.role = role
        super().__init__(
            f"Unsupported {role} language: {code}. "
            "Try using ISO codes like 'en', 'es', 'fr'"
        )


class LanguagePairNotSupportedError(ValidationError):
    """Dictionary does not cover the requested language pair."""

    def __init__(self, from_lang: str, to_lang: str, dictionary: str):
        self.from_lang = from_lang
        self.to_lang = to_lang
        self.dictionary = dictionary
        super().__init__(f"Language pair {from_lang}-{to_lang} not supported by {dictionary}")


class DictionaryNotAvailableError(NotFoundError):
    """Dictionary key is not registered."""

    def __init__(self, key: str, available: list[str]):
        self.key = key
        self.available = available
        super().__init__(
            f'Dictionary "{key}" not available. Available: {", ".join(available)}'
        )


class NoCompatibleDictionaryError(DomainError):
    """No registered dictionary covers the language pair."""


class TranslationFailedError(DomainError):
    """Every compatible dictionary failed to produce a result."""


class FetchError(DomainError):
    """Fetching a page failed.

    ``kind`` is one of: network, not-found, rate-limit, server-error,
    timeout, unknown.
    """

    def __init__(self, message: str, kind: str = "unknown", url: str | None = None):
        self.kind = kind
        self.url = url
        super().__init__(message)

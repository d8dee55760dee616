"""
Language utilities for the content translation service
"""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import Request

SUPPORTED_LANGUAGES = ["en", "so", "ar"]
RTL_LANGUAGES = {"ar"}

_LANGUAGE_ALIASES: Dict[str, str] = {
    "eng": "en",
    "english": "en",
    "som": "so",
    "somali": "so",
    "ara": "ar",
    "arabic": "ar",
}

_LANGUAGE_NAMES: Dict[str, str] = {"en": "English", "so": "Somali", "ar": "Arabic"}


def get_supported_languages() -> List[str]:
    """
    Get list of supported languages.

    Returns:
        List of supported language codes
    """
    return list(SUPPORTED_LANGUAGES)


def get_default_language() -> str:
    """
    Get default (authoring) language.

    Returns:
        Default language code
    """
    return "en"


def canonical_language(lang: Optional[str]) -> Optional[str]:
    """
    Reduce a language tag to its primary subtag without rejecting unknown codes.

    Handles region codes (ar-SA -> ar), quality values ("so;q=0.8") and
    the aliases used by the site's language switcher ("eng" -> "en").
    Returns None for empty input.
    """
    if not lang:
        return None

    raw = str(lang).strip().lower()
    if ";" in raw:
        raw = raw.split(";", 1)[0].strip()
    if "-" in raw:
        raw = raw.split("-", 1)[0].strip()
    if "_" in raw:
        raw = raw.split("_", 1)[0].strip()
    if not raw:
        return None

    return _LANGUAGE_ALIASES.get(raw, raw)


def normalize_language(lang: Optional[str]) -> str:
    """
    Normalize language code to a supported one, falling back to the default.
    """
    canonical = canonical_language(lang)
    if canonical in SUPPORTED_LANGUAGES:
        return canonical
    return get_default_language()


def is_supported_language(lang: str) -> bool:
    return canonical_language(lang) in SUPPORTED_LANGUAGES


def is_same_language(left: Optional[str], right: Optional[str]) -> bool:
    """True when both tags name the same language (``eng`` and ``en-US`` match)."""
    canonical_left = canonical_language(left)
    return canonical_left is not None and canonical_left == canonical_language(right)


def _parse_accept_language_header(value: str) -> List[str]:
    """
    Parse Accept-Language into a list of language codes ordered by preference.

    Very small parser; we don't implement full RFC behavior, but we respect q=.
    """
    if not value:
        return []

    parts = [p.strip() for p in value.split(",") if p.strip()]
    weighted: List[tuple[float, str]] = []
    for part in parts:
        lang = part
        q = 1.0
        if ";" in part:
            lang, params = part.split(";", 1)
            lang = lang.strip()
            params = params.strip()
            if params.startswith("q="):
                try:
                    q = float(params[2:])
                except ValueError:
                    q = 1.0
        canonical = canonical_language(lang)
        if canonical:
            weighted.append((q, canonical))

    # Sort by q desc, stable otherwise
    weighted.sort(key=lambda item: item[0], reverse=True)
    return [lang for _, lang in weighted]


def get_accept_language(request: Request) -> str:
    """
    Get the preferred language from the request.

    Args:
        request: FastAPI request object

    Returns:
        Supported language code (e.g., 'en', 'so', 'ar')
    """
    # Explicit override (query param) beats header.
    query_lang = request.query_params.get("lang") or request.query_params.get("language")
    if query_lang:
        return normalize_language(query_lang)

    accept_language = request.headers.get("Accept-Language", "")
    for candidate in _parse_accept_language_header(accept_language):
        if candidate in SUPPORTED_LANGUAGES:
            return candidate

    return get_default_language()


def get_language_name(lang: str) -> str:
    """
    Get human-readable name for language code.
    """
    canonical = canonical_language(lang)
    return _LANGUAGE_NAMES.get(canonical or "", lang)


def is_rtl(lang: Optional[str]) -> bool:
    return canonical_language(lang) in RTL_LANGUAGES


def text_direction(lang: Optional[str]) -> str:
    """Value for the HTML ``dir`` attribute."""
    return "rtl" if is_rtl(lang) else "ltr"


def fallback_languages(lang: Optional[str]) -> List[str]:
    """
    Languages to try in order when a translation is missing.
    """
    primary = normalize_language(lang)
    out: List[str] = []
    for candidate in (primary, get_default_language()):
        if candidate not in out:
            out.append(candidate)
    return out

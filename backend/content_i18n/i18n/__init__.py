"""
Content i18n helpers (EN/SO/AR).

Design goals:
- Dynamic, API-sourced content is machine translated through a shared
  two-tier cache (PayloadTranslator, FieldTranslator, ContentTranslator)
- Hand-written UI labels come from a static catalog (t)
- Request-scoped language via ContextVar (set by middleware)
"""

from .catalog import get_messages, localize_data, localize_data_with_paths, pick_locale, t, tr_category
from .context import get_language, reset_language, set_language, translation_scope
from .eligibility import is_eligible
from .field_translator import ContentTranslator, FieldTranslator
from .payload_translator import PayloadTranslator, PendingLeaf

__all__ = [
    "ContentTranslator",
    "FieldTranslator",
    "PayloadTranslator",
    "PendingLeaf",
    "get_language",
    "get_messages",
    "is_eligible",
    "localize_data",
    "localize_data_with_paths",
    "pick_locale",
    "reset_language",
    "set_language",
    "t",
    "tr_category",
    "translation_scope",
]

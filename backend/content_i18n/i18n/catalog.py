"""
Static UI messages and structural localization.

Hand-written labels (navigation, pagination, buttons) and category keys are
resolved here without any network call. `localize_data` also resolves
embedded `{en, so, ar}` objects; `localize_data_with_paths` also reports which
leaves it resolved so the machine translator can skip them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Set, Tuple

from content_i18n.i18n.context import get_language
from content_i18n.i18n.payload_translator import LeafPath
from content_i18n.utils.language import fallback_languages, get_default_language, normalize_language

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "all": "All",
        "prev": "Prev",
        "next": "Next",
        "pageOf": "Page {page} of {total}",
        "featuredStory": "Featured Story",
        "latestStories": "Latest Stories",
        "readMore": "Read More",
        "readFullStory": "Read Full Story",
        "stayUpdated": "Stay Updated",
        "subscribe": "Subscribe",
        "close": "Close",
        "untitled": "Untitled",
        "newsDesk": "News Desk",
        "homeNav": "Home",
        "aboutNav": "About Us",
        "servicesNav": "Services",
        "brandsNav": "Brands",
        "packagesNav": "Packages",
        "portfolioNav": "Portfolio",
        "contactNav": "Contact",
        "faqsNav": "FAQs",
        "watchOurStory": "Watch Our Story",
    },
    "ar": {
        "all": "الكل",
        "prev": "السابق",
        "next": "التالي",
        "pageOf": "صفحة {page} من {total}",
        "featuredStory": "القصة المميزة",
        "latestStories": "أحدث القصص",
        "readMore": "اقرأ المزيد",
        "readFullStory": "اقرأ القصة كاملة",
        "stayUpdated": "ابقَ على اطلاع",
        "subscribe": "اشترك",
        "close": "إغلاق",
        "untitled": "بدون عنوان",
        "newsDesk": "قسم الأخبار",
        "homeNav": "الرئيسية",
        "aboutNav": "من نحن",
        "servicesNav": "الخدمات",
        "brandsNav": "العلامات التجارية",
        "packagesNav": "الباقات",
        "portfolioNav": "الأعمال",
        "contactNav": "اتصل بنا",
        "faqsNav": "الأسئلة الشائعة",
        "watchOurStory": "شاهد قصتنا",
    },
    "so": {
        "all": "Dhammaan",
        "prev": "Hore",
        "next": "Xiga",
        "pageOf": "Bogga {page} ee {total}",
        "featuredStory": "Sheekada La Xulay",
        "latestStories": "Sheekooyinka Ugu Dambeeya",
        "readMore": "Akhri Dheeraad",
        "readFullStory": "Akhri Sheekada Oo Dhan",
        "stayUpdated": "La Soco",
        "subscribe": "Ku Biir",
        "close": "Xir",
        "untitled": "Aan Cinwaan Lahayn",
        "newsDesk": "Qolka Wararka",
        "homeNav": "Hoyga",
        "aboutNav": "Nagu Saabsan",
        "servicesNav": "Adeegyada",
        "brandsNav": "Calaamadaha",
        "packagesNav": "Xirmooyinka",
        "portfolioNav": "Horyaal",
        "contactNav": "Nala Soo Xiriir",
        "faqsNav": "Su'aalaha",
        "watchOurStory": "Daawo Sheekadeenna",
    },
}

# Category values are stored as stable keys ("documentary"), never as labels.
CATEGORY_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "documentary": "Documentary",
        "digital-content": "Digital Content",
        "commercial": "Commercial",
        "streaming": "Streaming Content",
        "life-event": "Life Event",
        "web-series": "Web Series",
    },
    "so": {
        "documentary": "Dukumentari",
        "digital-content": "Nuxur Dijitaal",
        "commercial": "Xayeysiin",
        "streaming": "Nuxur Streaming",
        "life-event": "Dhacdo Nololeed",
        "web-series": "Taxane Web",
    },
    "ar": {
        "documentary": "الوثائقي",
        "digital-content": "المحتوى الرقمي",
        "commercial": "إعلان",
        "streaming": "محتوى البث",
        "life-event": "حدث الحياة",
        "web-series": "سلسلة الويب",
    },
}

_LOCALIZED_KEYS = ("en", "so", "ar")


def t(key: str, lang: Optional[str] = None, **params: Any) -> str:
    """
    Look up a static UI message.

    Falls back to English, then to the key itself. Uses the request-scoped
    language when ``lang`` is not given.
    """
    selected = normalize_language(lang) if lang else get_language()
    template = key
    for candidate in fallback_languages(selected):
        if key in MESSAGES[candidate]:
            template = MESSAGES[candidate][key]
            break
    if not params:
        return template
    try:
        return template.format(**params)
    except (KeyError, IndexError, ValueError):
        return template


def get_messages(lang: Optional[str] = None) -> Dict[str, str]:
    """Full message table for ``lang``, English filling any gaps."""
    selected = normalize_language(lang) if lang else get_language()
    merged = dict(MESSAGES[get_default_language()])
    merged.update(MESSAGES.get(selected, {}))
    return merged


def is_localized_object(value: Any) -> bool:
    """True for dicts shaped like ``{"en": "...", "so": "...", "ar": "..."}`` (any subset)."""
    if not isinstance(value, dict):
        return False
    return any(isinstance(value.get(code), str) for code in _LOCALIZED_KEYS)


def pick_locale(value: Any, locale: Optional[str]) -> str:
    """
    Resolve a plain string or localized object to one string.

    Falls back to English, then to an empty string.
    """
    if isinstance(value, dict):
        selected = normalize_language(locale)
        return value.get(selected) or value.get(get_default_language()) or ""
    if value is None:
        return ""
    return value


def tr_category(locale: Optional[str], category: Optional[str]) -> str:
    """Translate a category key to its label, falling back to English, then the key."""
    if not category:
        return ""
    for candidate in fallback_languages(locale):
        label = CATEGORY_LABELS[candidate].get(category)
        if label:
            return label
    return category


@dataclass(frozen=True)
class LocalizeOptions:
    localized_field_names: FrozenSet[str] = field(
        default_factory=lambda: frozenset({"title", "description", "text", "subtitle", "body", "content"})
    )
    category_field_names: FrozenSet[str] = field(default_factory=lambda: frozenset({"category"}))
    auto_detect_localized_objects: bool = True


def localize_data(data: Any, locale: Optional[str], options: Optional[LocalizeOptions] = None) -> Any:
    """
    Resolve localized objects and category keys anywhere in ``data``.

    Returns a new structure; plain strings are left for machine translation.
    """
    localized, _ = localize_data_with_paths(data, locale, options)
    return localized


def localize_data_with_paths(
    data: Any,
    locale: Optional[str],
    options: Optional[LocalizeOptions] = None,
) -> Tuple[Any, Set[LeafPath]]:
    """
    Same as ``localize_data``, also returning the paths of leaves already in ``locale``.

    A path is the tuple of keys and list indices from the root. Leaves that
    fell back to English are not included, so only those still need machine
    translation. Unknown category keys are identifiers and count as resolved.
    """
    opts = options or LocalizeOptions()
    selected = normalize_language(locale)
    resolved: Set[LeafPath] = set()

    def _pick(value: Dict[str, Any], path: LeafPath) -> str:
        if value.get(selected):
            resolved.add(path)
        return pick_locale(value, selected)

    def _category(value: str, path: LeafPath) -> str:
        if CATEGORY_LABELS[selected].get(value) or value not in CATEGORY_LABELS[get_default_language()]:
            resolved.add(path)
        return tr_category(selected, value)

    def _walk(node: Any, path: LeafPath) -> Any:
        if isinstance(node, (list, tuple)):
            return [_walk(child, path + (index,)) for index, child in enumerate(node)]
        if not isinstance(node, dict):
            return node

        out: Dict[str, Any] = {}
        for key, value in node.items():
            child_path = path + (key,)
            if key in opts.category_field_names and isinstance(value, str):
                out[key] = _category(value, child_path)
            elif key in opts.localized_field_names:
                # Named text fields are resolved or kept, never descended into
                out[key] = _pick(value, child_path) if is_localized_object(value) else value
            elif opts.auto_detect_localized_objects and is_localized_object(value):
                out[key] = _pick(value, child_path)
            else:
                out[key] = _walk(value, child_path)
        return out

    return _walk(data, ()), resolved

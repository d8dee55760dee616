"""
Dynamic translation of API-sourced JSON payloads.

A pass runs Walk -> Collect -> Translate-unique -> Fill:

1. Walk deep-clones the payload. Every eligible string leaf is looked up in
   the shared cache; hits are substituted immediately, misses keep their
   original text as a placeholder and are recorded as a PendingLeaf.
2. Collect groups pending leaves by source text, so a string that appears
   fifty times is translated once.
3. Translate-unique sends each distinct text to the transport (bounded
   concurrency) and writes the result to the cache.
4. Fill overwrites every placeholder with its translation, only after all
   transport calls have settled.

Payloads must be acyclic and JSON-like; a cycle makes the walk recurse
until the interpreter's recursion limit.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, AbstractSet, Any, Dict, List, Optional, Tuple, Union

from content_i18n.i18n.eligibility import DEFAULT_MIN_LENGTH, is_eligible
from content_i18n.services.translation_cache import TranslationCache
from content_i18n.services.translation_transport import (
    CancellationToken,
    TranslationResult,
    TranslationStatus,
    TranslationTransport,
)
from content_i18n.utils.language import canonical_language, get_default_language, is_same_language

if TYPE_CHECKING:
    from content_i18n.config.settings import ApplicationSettings

logger = logging.getLogger(__name__)

Container = Union[Dict[str, Any], List[Any]]
LeafPath = Tuple[Union[str, int], ...]


@dataclass
class PendingLeaf:
    """A placeholder slot in the clone awaiting its translation."""

    container: Container
    slot: Union[str, int]
    source_text: str
    original: str


@dataclass
class _Pass:
    target_locale: str
    min_length: int
    pending: List[PendingLeaf]
    skip_paths: AbstractSet[LeafPath]


def restore_whitespace(original: str, translated: str) -> str:
    """Put ``translated`` back between the leaf's original surrounding whitespace."""
    stripped = original.strip()
    if stripped == original:
        return translated
    start = original.find(stripped)
    return original[:start] + translated + original[start + len(stripped):]


class PayloadTranslator:
    """
    Translates string leaves of arbitrary JSON-like payloads.

    One instance per process; the cache it holds is shared with every
    FieldTranslator built on top of it.
    """

    def __init__(
        self,
        cache: TranslationCache,
        transport: TranslationTransport,
        *,
        default_locale: str = get_default_language(),
        source_locale: str = "auto",
        min_length: int = DEFAULT_MIN_LENGTH,
        max_concurrency: int = 8,
        pin_failures: bool = True,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.cache = cache
        self.transport = transport
        self.default_locale = default_locale
        self.source_locale = source_locale
        self.min_length = min_length
        self.max_concurrency = max_concurrency
        self.pin_failures = pin_failures

    def is_default_locale(self, locale: Optional[str]) -> bool:
        if not locale:
            return True
        return is_same_language(locale, self.default_locale)

    def cache_key(self, text: str, locale: str) -> str:
        return self.cache.key_for(text.strip(), canonical_language(locale) or locale)

    async def translate_payload(
        self,
        data: Any,
        target_locale: Optional[str],
        *,
        min_length: Optional[int] = None,
        source_locale: Optional[str] = None,
        cancel_token: Optional[CancellationToken] = None,
        skip_paths: Optional[AbstractSet[LeafPath]] = None,
    ) -> Any:
        """
        Return a deep copy of ``data`` with eligible string leaves translated.

        Same shape in, same shape out: key sets, sequence lengths and
        non-string scalars are untouched. Never raises on transport or
        cache failure; the worst case is the original text.

        ``skip_paths`` holds leaf paths (keys and list indices from the root)
        that are already in the target locale and are copied as-is.
        """
        if self.is_default_locale(target_locale):
            return copy.deepcopy(data)

        state = _Pass(
            target_locale=target_locale,
            min_length=self.min_length if min_length is None else min_length,
            pending=[],
            skip_paths=skip_paths or frozenset(),
        )
        root: List[Any] = [None]
        root[0] = await self._walk_slot(data, root, 0, state, ())

        if not state.pending:
            return root[0]

        groups: Dict[str, List[PendingLeaf]] = {}
        for leaf in state.pending:
            groups.setdefault(leaf.source_text, []).append(leaf)

        translations = await self._translate_unique(
            list(groups),
            target_locale,
            source_locale or self.source_locale,
            cancel_token,
        )

        for source_text, leaves in groups.items():
            translated = translations[source_text]
            for leaf in leaves:
                leaf.container[leaf.slot] = restore_whitespace(leaf.original, translated)

        logger.debug(
            f"Translated {len(groups)} unique strings across {len(state.pending)} leaves to {target_locale}"
        )
        return root[0]

    async def translate_text(
        self,
        text: Optional[str],
        target_locale: Optional[str],
        *,
        min_length: int = 1,
        source_locale: Optional[str] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """Translate a single string through the shared cache and transport."""
        if text is None or self.is_default_locale(target_locale):
            return text
        if not is_eligible(text, min_length):
            return text

        key = self.cache_key(text, target_locale)
        cached = await self.cache.get(key)
        if cached is not None:
            return restore_whitespace(text, cached)

        result = await self._translate_and_store(
            text.strip(), key, target_locale, source_locale or self.source_locale, cancel_token
        )
        return restore_whitespace(text, result.text)

    def lookup_cached(self, text: str, target_locale: Optional[str]) -> Optional[str]:
        """Synchronous fast-tier lookup used by reactive callers."""
        if self.is_default_locale(target_locale):
            return text
        cached = self.cache.peek(self.cache_key(text, target_locale))
        return restore_whitespace(text, cached) if cached is not None else None

    async def _walk_slot(
        self, value: Any, container: Container, slot: Union[str, int], state: _Pass, path: LeafPath
    ) -> Any:
        if isinstance(value, str):
            if path in state.skip_paths:
                return value
            return await self._resolve_leaf(value, container, slot, state)
        if isinstance(value, dict):
            out: Dict[str, Any] = {}
            for key, child in value.items():
                out[key] = await self._walk_slot(child, out, key, state, path + (key,))
            return out
        if isinstance(value, (list, tuple)):
            items: List[Any] = [None] * len(value)
            for index, child in enumerate(value):
                items[index] = await self._walk_slot(child, items, index, state, path + (index,))
            return items
        return value

    async def _resolve_leaf(self, value: str, container: Container, slot: Union[str, int], state: _Pass) -> str:
        if not is_eligible(value, state.min_length):
            return value

        source_text = value.strip()
        cached = await self.cache.get(self.cache_key(source_text, state.target_locale))
        if cached is not None:
            return restore_whitespace(value, cached)

        state.pending.append(PendingLeaf(container, slot, source_text, value))
        return value

    async def _translate_unique(
        self,
        texts: List[str],
        target_locale: str,
        source_locale: str,
        cancel_token: Optional[CancellationToken],
    ) -> Dict[str, str]:
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _one(text: str) -> TranslationResult:
            async with semaphore:
                return await self._translate_and_store(
                    text, self.cache_key(text, target_locale), target_locale, source_locale, cancel_token
                )

        results = await asyncio.gather(*(_one(text) for text in texts))
        return {text: result.text for text, result in zip(texts, results)}

    async def _translate_and_store(
        self,
        text: str,
        key: str,
        target_locale: str,
        source_locale: str,
        cancel_token: Optional[CancellationToken],
    ) -> TranslationResult:
        try:
            result = await self.transport.translate_result(text, target_locale, source_locale, cancel_token)
        except Exception as e:
            # A transport that breaks its never-raise contract still degrades to the original text
            logger.warning(f"Translation transport raised (fail-soft): {e}")
            result = TranslationResult(text, TranslationStatus.FAILED)
        if result.status == TranslationStatus.TRANSLATED or (
            result.status == TranslationStatus.FAILED and self.pin_failures
        ):
            await self.cache.set(key, result.text)
        return result


def create_payload_translator(
    settings: "ApplicationSettings",
    cache: TranslationCache,
    transport: TranslationTransport,
) -> PayloadTranslator:
    cfg = settings.translation
    return PayloadTranslator(
        cache,
        transport,
        default_locale=cfg.translation_default_locale,
        source_locale=cfg.translation_source_locale,
        min_length=cfg.translation_min_length,
        max_concurrency=cfg.translation_max_concurrency,
        pin_failures=cfg.translation_pin_failures,
    )

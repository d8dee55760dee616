"""
Reactive field and content translation.

A FieldTranslator holds one string (a title, a button label) for one
active locale and always has something to show:

- default locale: the input, synchronously
- fast-tier cache hit: the translation, synchronously
- miss: the input immediately, then the translation once a background
  task resolves it through the shared PayloadTranslator

A ContentTranslator does the same for a whole record (a service card, a
package with its feature list), resolving it with one translate_payload
pass instead of one request per field.

Every update bumps a generation counter; a background result is applied
only if its generation is still current, so a late answer for a previous
(input, locale) pair never overwrites the newer one.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from functools import partial
from typing import Any, Callable, Generic, Optional, TypeVar

from content_i18n.i18n.context import get_translation_memo
from content_i18n.i18n.eligibility import is_eligible
from content_i18n.i18n.payload_translator import PayloadTranslator, restore_whitespace

logger = logging.getLogger(__name__)

# Marks an update() argument that was not passed
_UNCHANGED: Any = object()

V = TypeVar("V")


class _ReactiveTranslation(Generic[V]):
    """Generation-guarded value shared by the field and content translators."""

    def __init__(self, translator: PayloadTranslator, on_change: Optional[Callable[[V], None]]) -> None:
        self.translator = translator
        self.on_change = on_change
        self._locale: Optional[str] = None
        self._value: Any = None
        self._generation = 0
        self._pending: Optional["asyncio.Future[Any]"] = None

    @property
    def value(self) -> V:
        return self._value

    @property
    def locale(self) -> Optional[str]:
        return self._locale

    @property
    def is_pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    async def wait(self) -> V:
        """Wait for the in-flight translation (if any) and return the settled value."""
        pending = self._pending
        generation = self._generation
        if pending is not None:
            result = await pending
            self._apply(generation, result)
        return self._value

    def _next_generation(self) -> None:
        self._generation += 1
        self._pending = None

    def _watch(self, task: "asyncio.Future[Any]") -> None:
        self._pending = task
        task.add_done_callback(partial(self._on_resolved, self._generation))

    def _on_resolved(self, generation: int, task: "asyncio.Future[Any]") -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"Background translation failed: {error}")
            return
        self._apply(generation, task.result())

    def _apply(self, generation: int, result: Any) -> None:
        if generation != self._generation or result is None:
            return
        self._set_value(self._settle(result))

    def _settle(self, result: Any) -> V:
        return result

    def _set_value(self, value: V) -> None:
        if value == self._value:
            return
        self._value = value
        if self.on_change is not None:
            self.on_change(value)


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop; value stays untranslated until next update")
        return None


class FieldTranslator(_ReactiveTranslation[str]):
    def __init__(
        self,
        text: Optional[str],
        locale: Optional[str],
        *,
        translator: PayloadTranslator,
        min_length: int = 1,
        on_change: Optional[Callable[[str], None]] = None,
    ) -> None:
        super().__init__(translator, on_change)
        self.min_length = min_length
        self._text: Optional[str] = None
        self._value = ""
        self.update(text, locale)

    @property
    def text(self) -> Optional[str]:
        return self._text

    def update(self, text: Optional[str] = _UNCHANGED, locale: Optional[str] = _UNCHANGED) -> str:
        """
        Re-derive the displayed value for a new text and/or locale.

        Omitted arguments keep their current value; an explicit None clears
        the text or selects the default locale. Returns the value to render
        right now; never suspends.
        """
        if text is not _UNCHANGED:
            self._text = text
        if locale is not _UNCHANGED:
            self._locale = locale

        self._next_generation()
        current = self._text or ""

        if not current.strip():
            self._set_value("")
            return self._value

        if self.translator.is_default_locale(self._locale) or not is_eligible(current, self.min_length):
            self._set_value(current)
            return self._value

        cached = self.translator.lookup_cached(current, self._locale)
        if cached is not None:
            self._set_value(cached)
            return self._value

        # Show the original while the translation is in flight
        self._set_value(current)
        self._schedule(current, self._locale)
        return self._value

    def _schedule(self, text: str, locale: str) -> None:
        loop = _running_loop()
        if loop is None:
            return

        memo = get_translation_memo()
        key = self.translator.cache_key(text, locale)
        task = memo.get(key) if memo is not None else None
        if task is None:
            task = loop.create_task(self.translator.translate_text(text.strip(), locale, min_length=self.min_length))
            if memo is not None:
                memo[key] = task

        self._watch(task)

    def _settle(self, result: str) -> str:
        return restore_whitespace(self._text or "", result)


class ContentTranslator(_ReactiveTranslation[Any]):
    """
    Reactive translation of a whole record.

    ``value`` is None for no content, a copy of the content for the default
    locale or while a pass is in flight, and the translated copy once the
    pass settles. The caller's object is never modified.
    """

    def __init__(
        self,
        content: Any,
        locale: Optional[str],
        *,
        translator: PayloadTranslator,
        min_length: int = 1,
        on_change: Optional[Callable[[Any], None]] = None,
    ) -> None:
        super().__init__(translator, on_change)
        self.min_length = min_length
        self._content: Any = None
        self.update(content, locale)

    @property
    def content(self) -> Any:
        return self._content

    def update(self, content: Any = _UNCHANGED, locale: Optional[str] = _UNCHANGED) -> Any:
        """Re-derive the displayed record; same argument rules as FieldTranslator.update."""
        if content is not _UNCHANGED:
            self._content = content
        if locale is not _UNCHANGED:
            self._locale = locale

        self._next_generation()
        if self._content is None:
            self._set_value(None)
            return self._value

        self._set_value(copy.deepcopy(self._content))
        if self.translator.is_default_locale(self._locale):
            return self._value

        loop = _running_loop()
        if loop is not None:
            self._watch(
                loop.create_task(
                    self.translator.translate_payload(self._content, self._locale, min_length=self.min_length)
                )
            )
        return self._value

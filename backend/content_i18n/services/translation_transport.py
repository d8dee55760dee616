"""
Machine translation transport (fail-soft).

One outbound HTTP request per call. This is the single boundary that shields
the rest of the pipeline from transport instability: on timeout, non-2xx
status, malformed body, network error or cancellation the original text is
returned and nothing is raised.

Providers:
- libretranslate: POST {q, source, target, format: "text"} -> {"translatedText": ...}
- mymemory: GET ?q=...&langpair=src|tgt -> {"responseData": {"translatedText": ...}}
- disabled: never calls out; every text comes back unchanged
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from content_i18n.utils.language import canonical_language, get_default_language, is_same_language

if TYPE_CHECKING:
    from content_i18n.config.settings import ApplicationSettings

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = {"libretranslate", "mymemory", "disabled"}


class TranslationStatus(str, Enum):
    TRANSLATED = "translated"
    FAILED = "failed"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class TranslationResult:
    text: str
    status: TranslationStatus

    @property
    def translated(self) -> bool:
        return self.status == TranslationStatus.TRANSLATED


class TranslationResponseError(ValueError):
    """The endpoint answered, but not with a usable translation."""


class CancellationToken:
    """
    Cooperative cancellation signal for a translation pass.

    Cancelling makes in-flight and future transport calls resolve to their
    original text instead of landing late with a stale translation.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


class TranslationTransport:
    """Thin, fail-soft wrapper around an external machine translation endpoint."""

    def __init__(
        self,
        *,
        provider: str = "libretranslate",
        endpoint_url: str = "https://libretranslate.de/translate",
        api_key: Optional[str] = None,
        timeout_s: float = 10.0,
        default_source: str = get_default_language(),
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        provider = (provider or "").strip().lower()
        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Unsupported translation provider: {provider}")

        self.provider = provider
        self.endpoint_url = endpoint_url
        self.api_key = api_key
        self.timeout_s = timeout_s
        # MyMemory has no auto-detection; "auto" falls back to this locale
        self.default_source = default_source
        self._client = client

    def is_enabled(self) -> bool:
        return self.provider != "disabled" and bool(self.endpoint_url)

    async def translate(
        self,
        text: str,
        target_locale: str,
        source_locale: str = "auto",
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:
        result = await self.translate_result(text, target_locale, source_locale, cancel_token)
        return result.text

    async def translate_result(
        self,
        text: str,
        target_locale: str,
        source_locale: str = "auto",
        cancel_token: Optional[CancellationToken] = None,
    ) -> TranslationResult:
        if not text or not text.strip() or not self.is_enabled():
            return TranslationResult(text, TranslationStatus.SKIPPED)
        if source_locale and source_locale != "auto" and is_same_language(source_locale, target_locale):
            return TranslationResult(text, TranslationStatus.SKIPPED)
        if cancel_token is not None and cancel_token.cancelled:
            return TranslationResult(text, TranslationStatus.CANCELLED)

        request = asyncio.ensure_future(self._request(text, target_locale, source_locale or "auto"))
        try:
            if cancel_token is None:
                translated = await request
            else:
                waiter = asyncio.ensure_future(cancel_token.wait())
                try:
                    await asyncio.wait({request, waiter}, return_when=asyncio.FIRST_COMPLETED)
                finally:
                    waiter.cancel()
                if not request.done():
                    request.cancel()
                    logger.debug(f"Translation to {target_locale} cancelled in flight")
                    return TranslationResult(text, TranslationStatus.CANCELLED)
                translated = request.result()
        except asyncio.CancelledError:
            request.cancel()
            raise
        except Exception as e:
            logger.warning(f"Translation request to {self.provider} failed (fail-soft): {e}")
            return TranslationResult(text, TranslationStatus.FAILED)

        return TranslationResult(translated, TranslationStatus.TRANSLATED)

    async def _request(self, text: str, target_locale: str, source_locale: str) -> str:
        if self._client is not None:
            return await self._send(self._client, text, target_locale, source_locale)
        async with httpx.AsyncClient(timeout=self.timeout_s) as client:
            return await self._send(client, text, target_locale, source_locale)

    async def _send(
        self,
        client: httpx.AsyncClient,
        text: str,
        target_locale: str,
        source_locale: str,
    ) -> str:
        target = canonical_language(target_locale) or target_locale
        source = canonical_language(source_locale) or "auto"

        if self.provider == "mymemory":
            if source == "auto":
                source = canonical_language(self.default_source) or "en"
            resp = await client.get(
                self.endpoint_url,
                params={"q": text, "langpair": f"{source}|{target}"},
                timeout=self.timeout_s,
            )
            resp.raise_for_status()
            data = resp.json()
            translated = ((data or {}).get("responseData") or {}).get("translatedText")
        else:
            body: Dict[str, Any] = {"q": text, "source": source, "target": target, "format": "text"}
            if self.api_key:
                body["api_key"] = self.api_key
            resp = await client.post(self.endpoint_url, json=body, timeout=self.timeout_s)
            resp.raise_for_status()
            data = resp.json()
            translated = data.get("translatedText") if isinstance(data, dict) else None

        if not isinstance(translated, str) or not translated.strip():
            raise TranslationResponseError(f"Unexpected {self.provider} response shape")
        return translated

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def shutdown(self) -> None:
        await self.aclose()


def create_translation_transport(settings: "ApplicationSettings") -> TranslationTransport:
    cfg = settings.translation
    return TranslationTransport(
        provider=cfg.translation_provider,
        endpoint_url=cfg.translation_endpoint_url,
        api_key=cfg.translation_api_key,
        timeout_s=cfg.translation_timeout_seconds,
        default_source=cfg.translation_default_locale,
    )

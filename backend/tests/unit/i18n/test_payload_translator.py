"""
Unit tests for PayloadTranslator (walk, dedupe, translate-unique, fill)
"""

import asyncio

import pytest

from content_i18n.i18n.catalog import localize_data_with_paths
from content_i18n.i18n.payload_translator import PayloadTranslator, restore_whitespace
from content_i18n.services.translation_cache import TranslationCache
from content_i18n.services.translation_transport import CancellationToken
from tests.utils.fakes import FailingDurableStore, FakeTransport, MemoryDurableStore


def _translator(transport, cache=None, **kwargs):
    cache = cache if cache is not None else TranslationCache()
    return PayloadTranslator(cache, transport, default_locale="en", **kwargs)


PAYLOAD = {
    "title": "Hello world",
    "views": 1200,
    "published": True,
    "rating": 4.5,
    "cover": None,
    "tags": ["Documentary", "Somalia"],
    "author": {"name": "News Desk", "links": [{"label": "Profile page", "href": "https://asal.tv/a"}]},
}


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("locale", ["en", "EN-us", "eng", None, ""])
async def test_default_locale_is_identity_with_no_calls(fake_transport, locale):
    translator = _translator(fake_transport)

    result = await translator.translate_payload(PAYLOAD, locale)

    assert result == PAYLOAD
    assert result is not PAYLOAD
    assert fake_transport.calls == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_shape_is_preserved(payload_translator):
    result = await payload_translator.translate_payload(PAYLOAD, "so")

    assert set(result) == set(PAYLOAD)
    assert result["views"] == 1200
    assert result["published"] is True
    assert result["rating"] == 4.5
    assert result["cover"] is None
    assert len(result["tags"]) == 2
    assert set(result["author"]) == {"name", "links"}
    assert set(result["author"]["links"][0]) == {"label", "href"}
    assert result["title"] == "[so] Hello world"
    assert result["tags"] == ["[so] Documentary", "[so] Somalia"]
    assert result["author"]["links"][0]["href"] == "https://asal.tv/a"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_input_is_not_mutated(payload_translator):
    payload = {"title": "Hello world", "items": [{"title": "Watch Now"}]}

    await payload_translator.translate_payload(payload, "ar")

    assert payload == {"title": "Hello world", "items": [{"title": "Watch Now"}]}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_second_pass_is_served_from_cache(payload_translator, fake_transport):
    first = await payload_translator.translate_payload({"title": "Hello"}, "so")
    second = await payload_translator.translate_payload({"title": "Hello"}, "so")

    assert first == second == {"title": "[so] Hello"}
    assert fake_transport.texts() == ["Hello"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_same_text_is_cached_per_locale(payload_translator, fake_transport):
    await payload_translator.translate_payload({"title": "Hello"}, "so")
    await payload_translator.translate_payload({"title": "Hello"}, "ar")

    assert [(text, locale) for text, locale, _ in fake_transport.calls] == [("Hello", "so"), ("Hello", "ar")]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_repeated_string_is_translated_once(payload_translator, fake_transport):
    payload = {"sections": [{"badge": "Featured"} for _ in range(10)]}

    result = await payload_translator.translate_payload(payload, "ar")

    assert fake_transport.texts() == ["Featured"]
    assert [section["badge"] for section in result["sections"]] == ["[ar] Featured"] * 10


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("locale", ["so", "ar"])
async def test_ineligible_strings_pass_through(payload_translator, fake_transport, locale):
    payload = {"image": "https://example.com/x.png", "body": "<p>hi</p>", "short": "ok", "blank": "   "}

    result = await payload_translator.translate_payload(payload, locale)

    assert result == payload
    assert fake_transport.calls == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_transport_that_raises_degrades_to_original():
    def _boom(text, locale):
        raise RuntimeError("network down")

    translator = _translator(FakeTransport(_boom))

    result = await translator.translate_payload({"title": "Hello"}, "ar")

    assert result == {"title": "Hello"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failures_are_pinned_by_default():
    transport = FakeTransport(lambda text, locale: None)
    translator = _translator(transport)

    assert await translator.translate_payload({"title": "Hello"}, "ar") == {"title": "Hello"}
    assert await translator.translate_payload({"title": "Hello"}, "ar") == {"title": "Hello"}

    assert transport.texts() == ["Hello"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failures_are_retried_when_pinning_is_disabled():
    transport = FakeTransport(lambda text, locale: None)
    translator = _translator(transport, pin_failures=False)

    await translator.translate_payload({"title": "Hello"}, "ar")
    await translator.translate_payload({"title": "Hello"}, "ar")

    assert transport.texts() == ["Hello", "Hello"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancelled_pass_returns_originals_and_caches_nothing(translation_cache):
    transport = FakeTransport()
    translator = _translator(transport, cache=translation_cache)
    token = CancellationToken()
    token.cancel()

    result = await translator.translate_payload({"title": "Hello"}, "so", cancel_token=token)

    assert result == {"title": "Hello"}
    assert translation_cache.get_stats()["memory_size"] == 0
    assert await translator.translate_payload({"title": "Hello"}, "so") == {"title": "[so] Hello"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_concurrency_is_bounded():
    transport = FakeTransport(delay=0.01)
    translator = _translator(transport, max_concurrency=2)

    result = await translator.translate_payload([f"Headline number {i}" for i in range(6)], "so")

    assert len(transport.calls) == 6
    assert transport.max_in_flight <= 2
    assert result[5] == "[so] Headline number 5"


@pytest.mark.unit
def test_max_concurrency_must_be_positive(fake_transport):
    with pytest.raises(ValueError):
        _translator(fake_transport, max_concurrency=0)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_surrounding_whitespace_is_kept(payload_translator, fake_transport):
    result = await payload_translator.translate_payload({"a": "  Hello  ", "b": "Hello"}, "so")

    assert result == {"a": "  [so] Hello  ", "b": "[so] Hello"}
    assert fake_transport.texts() == ["Hello"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_top_level_values(payload_translator):
    assert await payload_translator.translate_payload("Hello", "so") == "[so] Hello"
    assert await payload_translator.translate_payload(42, "so") == 42
    assert await payload_translator.translate_payload(None, "so") is None
    assert await payload_translator.translate_payload(("Hello", 1), "so") == ["[so] Hello", 1]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_min_length_override(payload_translator, fake_transport):
    result = await payload_translator.translate_payload({"label": "Hi"}, "so", min_length=1)

    assert result == {"label": "[so] Hi"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_source_locale_is_forwarded(payload_translator, fake_transport):
    await payload_translator.translate_payload({"title": "Hello"}, "so", source_locale="en")
    await payload_translator.translate_payload({"title": "Goodbye"}, "so")

    assert [call[2] for call in fake_transport.calls] == ["en", "auto"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_region_tags_share_cache_entries(payload_translator, fake_transport):
    await payload_translator.translate_payload({"title": "Hello"}, "ar")
    result = await payload_translator.translate_payload({"title": "Hello"}, "ar-SA")

    assert result == {"title": "[ar] Hello"}
    assert len(fake_transport.calls) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_durable_hit_avoids_transport():
    durable = MemoryDurableStore()
    warm = TranslationCache(durable)
    await warm.set(warm.key_for("Hello", "so"), "Soo dhawoow")

    transport = FakeTransport()
    cold = TranslationCache(durable)
    translator = _translator(transport, cache=cold)

    assert translator.cache is cold
    assert await translator.translate_payload({"title": "Hello"}, "so") == {"title": "Soo dhawoow"}
    assert transport.calls == []
    assert cold.get_stats()["durable_hits"] == 1
    assert cold.peek(cold.key_for("Hello", "so")) == "Soo dhawoow"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_broken_durable_tier_does_not_break_translation():
    transport = FakeTransport()
    durable = FailingDurableStore()
    translator = _translator(transport, cache=TranslationCache(durable))

    assert await translator.translate_payload({"title": "Hello"}, "so") == {"title": "[so] Hello"}
    assert await translator.translate_payload({"title": "Hello"}, "so") == {"title": "[so] Hello"}
    assert len(transport.calls) == 1
    assert durable.attempts > 0
    assert translator.cache.get_stats()["durable_errors"] == durable.attempts


@pytest.mark.unit
@pytest.mark.asyncio
async def test_end_to_end_arabic_homepage():
    answers = {"Welcome": "مرحبا", "Watch Now": "شاهد الآن"}
    transport = FakeTransport(lambda text, locale: answers[text])
    translator = _translator(transport)
    payload = {"heroTitle": "Welcome", "items": [{"title": "Watch Now"}, {"title": "Watch Now"}]}

    result = await translator.translate_payload(payload, "ar")

    assert result == {"heroTitle": "مرحبا", "items": [{"title": "شاهد الآن"}, {"title": "شاهد الآن"}]}
    assert len(transport.calls) == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_translate_text(payload_translator, fake_transport):
    assert await payload_translator.translate_text("  Hi  ", "so") == "  [so] Hi  "
    assert await payload_translator.translate_text("Hi", "en") == "Hi"
    assert await payload_translator.translate_text(None, "so") is None
    assert await payload_translator.translate_text("https://asal.tv", "so") == "https://asal.tv"
    assert await payload_translator.translate_text("Hi", "so") == "[so] Hi"
    assert fake_transport.texts() == ["Hi"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_lookup_cached_only_sees_fast_tier(payload_translator):
    assert payload_translator.lookup_cached("Hello", "so") is None
    assert payload_translator.lookup_cached("Hello", "en") == "Hello"

    await payload_translator.translate_text("Hello", "so")

    assert payload_translator.lookup_cached(" Hello ", "so") == " [so] Hello "


@pytest.mark.unit
@pytest.mark.asyncio
async def test_concurrent_passes_share_the_cache(payload_translator, fake_transport):
    results = await asyncio.gather(
        payload_translator.translate_payload({"title": "Hello"}, "so"),
        payload_translator.translate_payload({"heading": "Hello"}, "so"),
    )

    assert results == [{"title": "[so] Hello"}, {"heading": "[so] Hello"}]
    assert await payload_translator.translate_payload({"x": "Hello"}, "so") == {"x": "[so] Hello"}


@pytest.mark.unit
@pytest.mark.parametrize(
    "original,translated,expected",
    [
        ("Hello", "Salaan", "Salaan"),
        ("  Hello", "Salaan", "  Salaan"),
        ("Hello\n", "Salaan", "Salaan\n"),
        (" \tHello world ", "Salaan", " \tSalaan "),
    ],
)
def test_restore_whitespace(original, translated, expected):
    assert restore_whitespace(original, translated) == expected


@pytest.mark.unit
@pytest.mark.asyncio
async def test_localized_leaves_are_not_machine_translated(fake_transport):
    translator = _translator(fake_transport)
    data = {"title": {"en": "Hello there", "ar": "مرحبا بكم"}, "category": "documentary"}

    localized, resolved = localize_data_with_paths(data, "ar")
    result = await translator.translate_payload(localized, "ar", skip_paths=resolved)

    assert result == {"title": "مرحبا بكم", "category": "الوثائقي"}
    assert fake_transport.calls == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_english_fallback_leaves_are_still_translated(fake_transport):
    translator = _translator(fake_transport)
    data = {"title": {"en": "Hello there"}, "items": [{"title": {"en": "Ours", "so": "Kayaga"}}, "Watch Now"]}

    localized, resolved = localize_data_with_paths(data, "so")
    result = await translator.translate_payload(localized, "so", skip_paths=resolved)

    assert result == {"title": "[so] Hello there", "items": [{"title": "Kayaga"}, "[so] Watch Now"]}
    assert fake_transport.texts() == ["Hello there", "Watch Now"]

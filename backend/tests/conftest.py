from __future__ import annotations

import os

import pytest

from content_i18n.i18n.payload_translator import PayloadTranslator
from content_i18n.services.translation_cache import TranslationCache
from tests.utils.fakes import FakeTransport


def pytest_configure() -> None:
    """
    Unit defaults for the `backend/tests` suite.

    Normalize env here so "run one test file" behaves the same as the full
    suite run, without a .env file or a reachable translation endpoint.
    """
    os.environ.setdefault("TRANSLATION_PROVIDER", "disabled")
    os.environ.setdefault("TRANSLATION_CACHE_BACKEND", "memory")


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def translation_cache() -> TranslationCache:
    return TranslationCache()


@pytest.fixture
def payload_translator(translation_cache: TranslationCache, fake_transport: FakeTransport) -> PayloadTranslator:
    return PayloadTranslator(translation_cache, fake_transport, default_locale="en", min_length=3)

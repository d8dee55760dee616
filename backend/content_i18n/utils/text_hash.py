"""
Stable, compact cache keys for (text, locale) pairs.

The hash is 32-bit FNV-1a over the UTF-16 code units of the text, so keys
match the ones a browser computes with ``charCodeAt``. It is not a
cryptographic hash: two different strings can collide, in which case the
cached translation of one is shown for the other. That risk is accepted
because the worst outcome is one wrong label until the entry is replaced,
never corrupted data.
"""

from typing import Iterator

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
_MASK32 = 0xFFFFFFFF

DEFAULT_KEY_PREFIX = "dyn_tr_v1_"


def _utf16_units(text: str) -> Iterator[int]:
    for char in text:
        code = ord(char)
        if code > 0xFFFF:
            code -= 0x10000
            yield 0xD800 + (code >> 10)
            yield 0xDC00 + (code & 0x3FF)
        else:
            yield code


def fnv1a_32(text: str) -> int:
    """Single-pass 32-bit FNV-1a hash of ``text``."""
    h = FNV_OFFSET_BASIS
    for unit in _utf16_units(text):
        h ^= unit
        h = (h * FNV_PRIME) & _MASK32
    return h


def derive_cache_key(text: str, locale: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """
    Build the cache key for ``text`` translated into ``locale``.

    Format: ``<prefix><locale>_<hex hash>``. The locale is a namespace, so the
    same text in two locales never shares a key.
    """
    return f"{prefix}{locale}_{fnv1a_32(text):x}"

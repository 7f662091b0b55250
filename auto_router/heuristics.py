"""Quality and latency estimates for backends.

Two layers:

1. ``KNOWN_MODELS``: a curated registry keyed by exact lowercase
   ``provider/model``. Its rows carry the same values the substring rules
   give, so adding a model here never changes its score.
2. Substring heuristics on the same ``provider/model`` string. This is an
   approximation for anything the registry does not list (new releases,
   gateway-prefixed ids, local models). Matching is naive: "gemini" contains
   "mini", so every Gemini id rates as fast and the "mini" quality check
   fires before "flash".

Both scores are in [0, 1]. Latency is oriented so that higher means faster.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import NamedTuple


class ModelTraits(NamedTuple):
    quality: float
    latency: float


KNOWN_MODELS = MappingProxyType({
    "anthropic/claude-opus-4-6": ModelTraits(1.0, 0.3),
    "anthropic/claude-opus-4-1": ModelTraits(1.0, 0.3),
    "anthropic/claude-sonnet-4-6": ModelTraits(0.8, 0.7),
    "anthropic/claude-sonnet-4-20250514": ModelTraits(0.8, 0.7),
    "anthropic/claude-haiku-4-5": ModelTraits(0.5, 1.0),
    "anthropic/claude-haiku-3-5": ModelTraits(0.5, 1.0),
    "openai/gpt-4o": ModelTraits(0.85, 0.7),
    "openai/gpt-4o-mini": ModelTraits(0.5, 1.0),
    "openai/gpt-4.1": ModelTraits(0.85, 0.5),
    "openai/gpt-4.1-mini": ModelTraits(0.5, 1.0),
    "openai/gpt-4.1-nano": ModelTraits(0.5, 1.0),
    "google/gemini-2.5-pro": ModelTraits(0.85, 1.0),
    "google/gemini-2.5-flash": ModelTraits(0.5, 1.0),
})


def _key(provider: str, model: str) -> str:
    return f"{provider}/{model}".lower()


def _guess_quality(key: str) -> float:
    if "opus" in key:
        return 1.0
    if "sonnet" in key:
        return 0.8
    if "gpt-4o" in key and "mini" not in key:
        return 0.85
    if "gpt-4.1" in key and "mini" not in key and "nano" not in key:
        return 0.85
    if "gemini-2.5-pro" in key:
        return 0.85
    if "haiku" in key or "mini" in key or "nano" in key:
        return 0.5
    if "flash" in key:
        return 0.55
    return 0.6


def _guess_latency(key: str) -> float:
    if any(tag in key for tag in ("haiku", "flash", "mini", "nano")):
        return 1.0
    if "sonnet" in key or "gpt-4o" in key:
        return 0.7
    if "opus" in key:
        return 0.3
    return 0.5


def estimate_quality(provider: str, model: str) -> float:
    """Rough quality rating, independent of tier."""
    key = _key(provider, model)
    known = KNOWN_MODELS.get(key)
    return known.quality if known else _guess_quality(key)


def estimate_latency(provider: str, model: str) -> float:
    """Latency bucket: 1.0 fast, 0.3 slow."""
    key = _key(provider, model)
    known = KNOWN_MODELS.get(key)
    return known.latency if known else _guess_latency(key)

"""Backend reference parsing and short-name aliases.

Every place that turns a configured string into a ``ModelRef`` (tier
overrides, the classifier model, the hardcoded tier defaults) goes through
``parse_model_ref`` here.
"""

from __future__ import annotations

from auto_router.models import ModelRef

DEFAULT_PROVIDER = "anthropic"

# Short name → full provider/model reference.
# Keep sorted by short name for readability.
MODEL_ALIASES: dict[str, str] = {
    "claude": "anthropic/claude-sonnet-4-6",
    "deepseek": "deepseek/deepseek-chat",
    "flash": "google/gemini-2.5-flash",
    "gemini": "google/gemini-2.5-pro",
    "gpt4": "openai/gpt-4o",
    "gpt41": "openai/gpt-4.1",
    "gpt4mini": "openai/gpt-4o-mini",
    "gpt4o": "openai/gpt-4o",
    "haiku": "anthropic/claude-haiku-4-5",
    "nano": "openai/gpt-4.1-nano",
    "o1": "openai/o1",
    "o3": "openai/o3-mini",
    "opus": "anthropic/claude-opus-4-6",
    "r1": "deepseek/deepseek-r1",
    "sonnet": "anthropic/claude-sonnet-4-6",
}

# Normalized key → canonical alias key.
# Built once at import time for fast lookup.
_NORMALIZED: dict[str, str] = {}


def _normalize(s: str) -> str:
    """Strip hyphens, underscores, spaces, dots and lowercase."""
    return s.lower().replace("-", "").replace("_", "").replace(" ", "").replace(".", "")


def _build_normalized() -> None:
    """Populate the normalized lookup table."""
    _NORMALIZED.clear()
    for key in MODEL_ALIASES:
        _NORMALIZED[_normalize(key)] = key


_build_normalized()


def _alias_target(raw: str) -> str | None:
    lowered = raw.lower()
    if lowered in MODEL_ALIASES:
        return MODEL_ALIASES[lowered]
    key = _NORMALIZED.get(_normalize(raw))
    return MODEL_ALIASES[key] if key else None


def parse_model_ref(raw: str | None, default_provider: str = DEFAULT_PROVIDER) -> ModelRef | None:
    """Parse ``provider/model`` (or a bare model / alias) into a ModelRef.

    Bare names resolve through MODEL_ALIASES first (exact, then normalized);
    anything else without a slash is attributed to ``default_provider``.
    Only the first slash splits, so ``openrouter/anthropic/claude-opus`` keeps
    ``anthropic/claude-opus`` as the model. Returns None for empty or non-string
    input and for an empty provider/model half.
    """
    if not raw or not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None

    if "/" not in text:
        target = _alias_target(text)
        if target is None:
            return ModelRef(default_provider.strip().lower(), text)
        text = target

    provider, _, model = text.partition("/")
    provider = provider.strip().lower()
    model = model.strip()
    if not provider or not model:
        return None
    return ModelRef(provider, model)

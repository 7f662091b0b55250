"""LLM-based complexity classifier with a hard deadline.

One attempt, no retry. Any failure (unknown model, provider error, timeout,
unrecognised output) yields None so the caller can fall back to the rules.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping

from loguru import logger

from auto_router.aliases import parse_model_ref
from auto_router.models import ComplexityTier, LLMProvider

CLASSIFICATION_PROMPT = """Classify this user message into exactly one category: SIMPLE, MEDIUM, COMPLEX, or REASONING.

SIMPLE: greetings, yes/no, lookups, short factual questions
MEDIUM: summarization, code review, how-to guides, explanations
COMPLEX: architecture design, multi-file code generation, research synthesis
REASONING: math proofs, logic puzzles, algorithmic problems

Message: "{message}"

Category:"""

MAX_MESSAGE_CHARS = 500
MAX_OUTPUT_TOKENS = 10

# Scanned in order; first label found in the reply wins.
LABELS: tuple[tuple[str, ComplexityTier], ...] = (
    ("SIMPLE", "simple"),
    ("MEDIUM", "medium"),
    ("COMPLEX", "complex"),
    ("REASONING", "reasoning"),
)


def build_prompt(message: str) -> str:
    return CLASSIFICATION_PROMPT.replace("{message}", message[:MAX_MESSAGE_CHARS])


def parse_label(text: str | None) -> ComplexityTier | None:
    if not text:
        return None
    upper = text.strip().upper()
    for label, tier in LABELS:
        if label in upper:
            return tier
    return None


class LLMClassifier:
    """Asks a cheap model to label a message's complexity.

    ``providers`` maps provider name (the part before the slash in a model
    reference) to the LLMProvider that serves it.
    """

    def __init__(self, providers: Mapping[str, LLMProvider] | None = None) -> None:
        self._providers = dict(providers or {})

    async def classify(
        self,
        message: str,
        classifier_model: str,
        timeout_ms: int,
    ) -> ComplexityTier | None:
        ref = parse_model_ref(classifier_model)
        if ref is None:
            logger.warning(f"LLM classifier: cannot parse model '{classifier_model}'")
            return None
        provider = self._providers.get(ref.provider)
        if provider is None:
            logger.warning(f"LLM classifier: no provider registered for '{ref}'")
            return None

        messages = [{"role": "user", "content": build_prompt(message)}]
        start = time.monotonic()
        try:
            # wait_for cancels the in-flight call once the deadline passes.
            response = await asyncio.wait_for(
                provider.chat(
                    messages=messages,
                    model=ref.model,
                    max_tokens=MAX_OUTPUT_TOKENS,
                    temperature=0.0,
                ),
                timeout=timeout_ms / 1000,
            )
        except asyncio.TimeoutError:
            logger.warning(f"LLM classifier: {ref} timed out after {timeout_ms}ms")
            return None
        except Exception as e:
            latency_ms = int((time.monotonic() - start) * 1000)
            logger.warning(f"LLM classifier: {ref} failed in {latency_ms}ms: {e}")
            return None

        latency_ms = int((time.monotonic() - start) * 1000)
        if response.finish_reason == "error":
            logger.warning(f"LLM classifier: {ref} returned error ({latency_ms}ms): {(response.content or '')[:200]}")
            return None

        tier = parse_label(response.content)
        if tier is None:
            logger.debug(f"LLM classifier: unrecognised reply from {ref}: {response.content!r}")
        else:
            logger.debug(f"LLM classifier: {ref} → {tier} in {latency_ms}ms")
        return tier

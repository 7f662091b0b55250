"""AutoRouter: classify a task, then pick the backend that should run it.

Resolution order, first hit wins:
  1. Explicit tier override from config
  2. Best-scoring backend (declared providers + discovered catalog)
  3. Hardcoded per-tier default

Stage 3 always produces a reference, so ``resolve`` always returns a decision.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from loguru import logger

from auto_router.aliases import parse_model_ref
from auto_router.config import RouterConfig
from auto_router.llm_classifier import LLMClassifier
from auto_router.models import (
    CatalogEntry,
    ComplexityTier,
    LLMProvider,
    ModelRef,
    RouteDecision,
    Task,
)
from auto_router.rules import classify_by_rules
from auto_router.scoring import score_models

DEFAULT_TIERS = MappingProxyType({
    "simple": "anthropic/claude-haiku-3-5",
    "medium": "anthropic/claude-sonnet-4-20250514",
    "complex": "anthropic/claude-opus-4-6",
    "reasoning": "anthropic/claude-opus-4-6",
})

# Used only if a DEFAULT_TIERS entry fails to parse.
LAST_RESORT = ModelRef("anthropic", "claude-opus-4-6")

MAX_REPORTED_SCORES = 5


class AutoRouter:
    """Routes tasks to backends.

    Holds no per-request state; one instance can serve concurrent ``resolve``
    calls. ``providers`` is only needed for the LLM classifier.
    """

    def __init__(self, providers: Mapping[str, LLMProvider] | None = None) -> None:
        self._llm_classifier = LLMClassifier(providers)

    async def classify(self, task: Task, config: RouterConfig) -> ComplexityTier:
        """LLM classification when configured, rules otherwise or on failure."""
        if config.uses_remote_classifier:
            tier = await self._llm_classifier.classify(
                task.text, config.classifier_model, config.classifier_timeout_ms,
            )
            if tier is not None:
                return tier
            logger.info("LLM classifier gave no result, falling back to rules")
        return classify_by_rules(task.text, task.conversation_depth, task.tool_mentions)

    async def resolve(
        self,
        task: Task,
        config: RouterConfig,
        catalog: Sequence[CatalogEntry] | None = None,
    ) -> RouteDecision:
        tier = await self.classify(task, config)

        # --- Explicit override ---
        override = config.tiers.get(tier)
        if override:
            ref = parse_model_ref(override)
            if ref is not None:
                logger.info(f"Route: {tier} (override) → {ref}")
                return RouteDecision(tier, ref, "override")
            logger.warning(f"Router: ignoring unparseable {tier} override '{override}'")

        # --- Discovery + scoring ---
        if config.auto_discover and catalog:
            scores = score_models(tier, config, catalog, config.preference)
            if scores:
                best = scores[0]
                logger.info(
                    f"Route: {tier} (scored, {config.preference}) → {best.ref} "
                    f"score={best.score:.3f} candidates={len(scores)}"
                )
                return RouteDecision(tier, best.ref, "scored", tuple(scores[:MAX_REPORTED_SCORES]))
            logger.info(f"Router: no backend meets {tier} requirements, using default")

        # --- Hardcoded default ---
        ref = parse_model_ref(DEFAULT_TIERS[tier])
        if ref is None:
            logger.warning(f"Router: default for {tier} unparseable, using {LAST_RESORT}")
            ref = LAST_RESORT
        logger.info(f"Route: {tier} (default) → {ref}")
        return RouteDecision(tier, ref, "default")

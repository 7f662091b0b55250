"""Capability scoring: hard filters plus a weighted multi-factor score."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from types import MappingProxyType
from typing import NamedTuple

from loguru import logger

from auto_router.config import RouterConfig
from auto_router.heuristics import estimate_latency, estimate_quality
from auto_router.models import BackendDescriptor, CatalogEntry, ScoreResult


class TierRequirement(NamedTuple):
    min_context: int
    needs_reasoning: bool


class Weights(NamedTuple):
    capability: float
    cost: float
    quality: float
    latency: float


TIER_REQUIREMENTS = MappingProxyType({
    "simple": TierRequirement(min_context=4_000, needs_reasoning=False),
    "medium": TierRequirement(min_context=32_000, needs_reasoning=False),
    "complex": TierRequirement(min_context=100_000, needs_reasoning=False),
    "reasoning": TierRequirement(min_context=100_000, needs_reasoning=True),
})

WEIGHT_PRESETS = MappingProxyType({
    "balanced": Weights(capability=0.4, cost=0.3, quality=0.2, latency=0.1),
    "cost": Weights(capability=0.2, cost=0.5, quality=0.15, latency=0.15),
    "quality": Weights(capability=0.3, cost=0.1, quality=0.5, latency=0.1),
})

LARGE_CONTEXT = 100_000


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def capability_match(desc: BackendDescriptor, tier: str) -> float:
    score = 0.5
    if desc.context_window >= LARGE_CONTEXT:
        score += 0.2
    if desc.reasoning and tier == "reasoning":
        score += 0.3
    if "image" in desc.input_modalities:
        score += 0.1
    return _clamp(score)


def cost_efficiency(desc: BackendDescriptor) -> float:
    """Cheaper is better. Free or unknown-cost backends score 1.0."""
    per_mtok = desc.cost_input + desc.cost_output
    if per_mtok <= 0:
        return 1.0
    return _clamp(1.0 / (1.0 + per_mtok * 0.1))


def score_model(desc: BackendDescriptor, tier: str, preference: str = "balanced") -> ScoreResult | None:
    """Score one backend for a tier, or None if it fails a hard requirement."""
    reqs = TIER_REQUIREMENTS[tier]

    if desc.context_window < reqs.min_context:
        logger.debug(
            f"Scorer: {desc.provider}/{desc.id} excluded for {tier} "
            f"(context {desc.context_window} < {reqs.min_context})"
        )
        return None
    if reqs.needs_reasoning and not desc.reasoning:
        logger.debug(f"Scorer: {desc.provider}/{desc.id} excluded for {tier} (no reasoning)")
        return None

    cap = capability_match(desc, tier)
    cost = cost_efficiency(desc)
    quality = _clamp(estimate_quality(desc.provider, desc.id))
    latency = _clamp(estimate_latency(desc.provider, desc.id))

    w = WEIGHT_PRESETS.get(preference, WEIGHT_PRESETS["balanced"])
    total = (
        cap * w.capability
        + cost * w.cost
        + quality * w.quality
        + latency * w.latency
    )
    return ScoreResult(
        ref=desc.ref,
        score=total,
        capability_match=cap,
        cost_efficiency=cost,
        quality_rating=quality,
        latency_estimate=latency,
    )


def candidate_backends(
    config: RouterConfig,
    catalog: Iterable[CatalogEntry],
) -> list[BackendDescriptor]:
    """Declared backends in provider-map order, then unseen catalog entries in catalog order.

    A catalog entry whose (provider, id) is already declared is dropped; the
    declared descriptor is authoritative.
    """
    candidates: list[BackendDescriptor] = []
    seen: set[tuple[str, str]] = set()
    for provider_name, models in config.providers.items():
        for desc in models:
            candidates.append(desc)
            seen.add((provider_name, desc.id))
    for entry in catalog:
        key = (entry.provider, entry.id)
        if key in seen:
            continue
        seen.add(key)
        candidates.append(entry.to_descriptor())
    return candidates


def score_models(
    tier: str,
    config: RouterConfig,
    catalog: Sequence[CatalogEntry],
    preference: str | None = None,
) -> list[ScoreResult]:
    """Score every candidate for ``tier`` and rank best first.

    Ties keep candidate enumeration order (``sorted`` is stable).
    """
    pref = preference or config.preference
    scores = []
    for desc in candidate_backends(config, catalog):
        result = score_model(desc, tier, pref)
        if result is not None:
            scores.append(result)
    return sorted(scores, key=lambda s: s.score, reverse=True)

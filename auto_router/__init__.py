"""auto-router: complexity-based backend selection with scoring and layered fallback."""

from auto_router.aliases import parse_model_ref
from auto_router.config import RouterConfig, is_auto_model_enabled, load_router_config
from auto_router.llm_classifier import LLMClassifier
from auto_router.models import (
    BackendDescriptor,
    CatalogEntry,
    LLMProvider,
    LLMResponse,
    ModelRef,
    RouteDecision,
    ScoreResult,
    Task,
)
from auto_router.router import AutoRouter
from auto_router.rules import classify_by_rules
from auto_router.scoring import score_model, score_models

__all__ = [
    "AutoRouter",
    "BackendDescriptor",
    "CatalogEntry",
    "LLMClassifier",
    "LLMProvider",
    "LLMResponse",
    "ModelRef",
    "RouteDecision",
    "RouterConfig",
    "ScoreResult",
    "Task",
    "classify_by_rules",
    "is_auto_model_enabled",
    "load_router_config",
    "parse_model_ref",
    "score_model",
    "score_models",
]

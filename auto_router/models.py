"""Core data models for auto-router."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

ComplexityTier = Literal["simple", "medium", "complex", "reasoning"]
Preference = Literal["cost", "balanced", "quality"]
ClassifierMode = Literal["rules", "remote"]

TIERS: tuple[str, ...] = ("simple", "medium", "complex", "reasoning")
PREFERENCES: tuple[str, ...] = ("cost", "balanced", "quality")

DEFAULT_CATALOG_CONTEXT = 128_000
DEFAULT_CATALOG_MAX_TOKENS = 8_192


@dataclass(frozen=True)
class Task:
    """A single routing request: the user's text plus two conversation signals."""

    text: str
    conversation_depth: int = 0
    tool_mentions: int = 0

    def __post_init__(self) -> None:
        if self.conversation_depth < 0:
            raise ValueError(f"conversation_depth must be >= 0, got {self.conversation_depth}")
        if self.tool_mentions < 0:
            raise ValueError(f"tool_mentions must be >= 0, got {self.tool_mentions}")


@dataclass(frozen=True)
class ModelRef:
    """A parsed backend reference."""

    provider: str
    model: str

    def __str__(self) -> str:
        return f"{self.provider}/{self.model}"


@dataclass(frozen=True)
class BackendDescriptor:
    """Capability and cost metadata for one backend (costs in $ per million tokens)."""

    id: str
    provider: str
    context_window: int
    reasoning: bool = False
    input_modalities: tuple[str, ...] = ("text",)
    cost_input: float = 0.0
    cost_output: float = 0.0
    max_tokens: int = DEFAULT_CATALOG_MAX_TOKENS
    name: str | None = None

    @property
    def ref(self) -> ModelRef:
        return ModelRef(self.provider, self.id)

    @classmethod
    def from_dict(cls, provider: str, data: Mapping[str, Any]) -> "BackendDescriptor":
        """Build a descriptor from a provider's ``models`` entry in the host config.

        Accepts the host config's camelCase keys (``contextWindow``, ``maxTokens``)
        and a nested ``cost`` mapping with ``input`` / ``output``.
        """
        model_id = str(data.get("id", "")).strip()
        if not model_id:
            raise ValueError(f"Model definition under provider '{provider}' has no id")
        cost = data.get("cost") or {}
        return cls(
            id=model_id,
            provider=provider,
            context_window=int(data.get("contextWindow", DEFAULT_CATALOG_CONTEXT)),
            reasoning=bool(data.get("reasoning", False)),
            input_modalities=tuple(data.get("input") or ("text",)),
            cost_input=float(cost.get("input", 0.0)),
            cost_output=float(cost.get("output", 0.0)),
            max_tokens=int(data.get("maxTokens", DEFAULT_CATALOG_MAX_TOKENS)),
            name=data.get("name"),
        )


@dataclass(frozen=True)
class CatalogEntry:
    """A discovered backend with partial metadata."""

    id: str
    provider: str
    name: str | None = None
    reasoning: bool | None = None
    input_modalities: tuple[str, ...] | None = None
    context_window: int | None = None

    def to_descriptor(self) -> BackendDescriptor:
        """Synthetic descriptor: unknown cost is zero, unknown context is 128k."""
        return BackendDescriptor(
            id=self.id,
            provider=self.provider,
            context_window=(
                self.context_window if self.context_window is not None else DEFAULT_CATALOG_CONTEXT
            ),
            reasoning=bool(self.reasoning),
            input_modalities=self.input_modalities or ("text",),
            cost_input=0.0,
            cost_output=0.0,
            max_tokens=DEFAULT_CATALOG_MAX_TOKENS,
            name=self.name,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CatalogEntry":
        model_id = str(data.get("id", "")).strip()
        provider = str(data.get("provider", "")).strip()
        if not model_id or not provider:
            raise ValueError("Catalog entry must include non-empty 'id' and 'provider'.")
        modalities = data.get("input")
        context = data.get("contextWindow")
        return cls(
            id=model_id,
            provider=provider,
            name=data.get("name"),
            reasoning=data.get("reasoning"),
            input_modalities=tuple(modalities) if modalities else None,
            context_window=int(context) if context is not None else None,
        )


@dataclass(frozen=True)
class ScoreResult:
    """Per-backend scoring breakdown; every component is in [0, 1]."""

    ref: ModelRef
    score: float
    capability_match: float
    cost_efficiency: float
    quality_rating: float
    latency_estimate: float


@dataclass(frozen=True)
class RouteDecision:
    """Result of routing a task."""

    tier: str
    selected: ModelRef
    reason: str  # "override", "scored", "default"
    scores: tuple[ScoreResult, ...] | None = None


@dataclass
class LLMResponse:
    """Response from an LLM provider."""
    content: str | None
    finish_reason: str = "stop"


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    async def chat(
        self,
        messages: list[dict[str, Any]],
        model: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Send a chat completion request."""
        ...

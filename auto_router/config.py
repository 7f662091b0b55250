"""Router configuration snapshot.

The host application owns loading and schema validation; this module only
reads the two sections the router cares about and turns them into an
immutable ``RouterConfig``:

    agents.defaults.model = {"primary": "auto", "auto": {...}}
    models.providers      = {"<name>": {"models": [{...}, ...]}, ...}
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from loguru import logger

from auto_router.models import PREFERENCES, TIERS, BackendDescriptor

DEFAULT_CLASSIFIER_TIMEOUT_MS = 3000

# Config spellings → classifier mode. "llm" is what host configs write.
_CLASSIFIER_MODES = {"rules": "rules", "remote": "remote", "llm": "remote"}


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class RouterConfig:
    """Read-only routing settings for one or more resolve calls."""

    classifier: str = "rules"  # "rules" | "remote"
    classifier_model: str | None = None
    preference: str = "balanced"  # "cost" | "balanced" | "quality"
    tiers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    classifier_timeout_ms: int = DEFAULT_CLASSIFIER_TIMEOUT_MS
    auto_discover: bool = True
    providers: Mapping[str, tuple[BackendDescriptor, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        # Callers may hand in plain dicts/lists; store read-only copies.
        object.__setattr__(self, "tiers", _frozen(self.tiers))
        object.__setattr__(
            self,
            "providers",
            _frozen({name: tuple(models) for name, models in self.providers.items()}),
        )

    @property
    def uses_remote_classifier(self) -> bool:
        return self.classifier == "remote" and bool(self.classifier_model)

    @classmethod
    def from_dict(
        cls,
        auto: Mapping[str, Any] | None,
        providers: Mapping[str, Any] | None = None,
    ) -> "RouterConfig":
        """Build a config from the host's ``auto`` section and ``models.providers``.

        Bad values degrade to defaults with a warning rather than raising.
        """
        auto = auto or {}

        raw_mode = auto.get("classifier") or "rules"
        classifier = _CLASSIFIER_MODES.get(str(raw_mode).lower())
        if classifier is None:
            logger.warning(f"Router config: unknown classifier '{raw_mode}', using rules")
            classifier = "rules"

        preference = auto.get("preference") or "balanced"
        if preference not in PREFERENCES:
            logger.warning(f"Router config: unknown preference '{preference}', using balanced")
            preference = "balanced"

        tiers: dict[str, str] = {}
        for tier, ref in (auto.get("tiers") or {}).items():
            if tier not in TIERS:
                logger.warning(f"Router config: ignoring override for unknown tier '{tier}'")
                continue
            if ref:
                tiers[tier] = str(ref)

        timeout = auto.get("classifierTimeout")
        try:
            timeout_ms = int(timeout) if timeout is not None else DEFAULT_CLASSIFIER_TIMEOUT_MS
        except (TypeError, ValueError):
            logger.warning(f"Router config: bad classifierTimeout {timeout!r}, using default")
            timeout_ms = DEFAULT_CLASSIFIER_TIMEOUT_MS

        classifier_model = auto.get("classifierModel") or None
        if classifier_model is not None and not isinstance(classifier_model, str):
            logger.warning(f"Router config: ignoring non-string classifierModel {classifier_model!r}")
            classifier_model = None

        return cls(
            classifier=classifier,
            classifier_model=classifier_model,
            preference=preference,
            tiers=tiers,
            classifier_timeout_ms=timeout_ms,
            auto_discover=auto.get("autoDiscover") is not False,
            providers=_parse_providers(providers or {}),
        )


def _parse_providers(raw: Mapping[str, Any]) -> dict[str, tuple[BackendDescriptor, ...]]:
    parsed: dict[str, tuple[BackendDescriptor, ...]] = {}
    for name, provider_cfg in raw.items():
        models = []
        for entry in (provider_cfg or {}).get("models") or []:
            try:
                models.append(BackendDescriptor.from_dict(name, entry))
            except (TypeError, ValueError) as e:
                logger.warning(f"Router config: skipping model under '{name}': {e}")
        parsed[name] = tuple(models)
    return parsed


def _model_section(app_config: Mapping[str, Any]) -> Mapping[str, Any] | None:
    model = ((app_config.get("agents") or {}).get("defaults") or {}).get("model")
    if not isinstance(model, Mapping):
        return None
    return model


def is_auto_model_enabled(app_config: Mapping[str, Any]) -> bool:
    """True when the host config sets ``agents.defaults.model.primary`` to "auto"."""
    model = _model_section(app_config)
    return model is not None and model.get("primary") == "auto"


def load_router_config(app_config: Mapping[str, Any]) -> RouterConfig:
    """Extract a RouterConfig from a full host config mapping."""
    model = _model_section(app_config)
    auto = model.get("auto") if model is not None else None
    providers = (app_config.get("models") or {}).get("providers")
    return RouterConfig.from_dict(auto, providers)

import pytest

from auto_router.config import (
    DEFAULT_CLASSIFIER_TIMEOUT_MS,
    RouterConfig,
    is_auto_model_enabled,
    load_router_config,
)


def _app_config(auto=None, primary="auto"):
    return {
        "agents": {"defaults": {"model": {"primary": primary, "auto": auto or {}}}},
        "models": {
            "providers": {
                "anthropic": {
                    "models": [
                        {
                            "id": "claude-sonnet-4-6",
                            "reasoning": True,
                            "input": ["text", "image"],
                            "cost": {"input": 3, "output": 15},
                            "contextWindow": 200_000,
                            "maxTokens": 64_000,
                        },
                        {"name": "missing id"},
                    ]
                },
                "openai": {"models": [{"id": "gpt-4o-mini", "contextWindow": 128_000}]},
            }
        },
    }


def test_defaults():
    cfg = RouterConfig()
    assert cfg.classifier == "rules"
    assert cfg.preference == "balanced"
    assert cfg.classifier_timeout_ms == DEFAULT_CLASSIFIER_TIMEOUT_MS == 3000
    assert cfg.auto_discover is True
    assert not cfg.uses_remote_classifier


def test_from_dict_maps_host_keys():
    cfg = RouterConfig.from_dict({
        "classifier": "llm",
        "classifierModel": "openai/gpt-4.1-nano",
        "preference": "cost",
        "tiers": {"simple": "openai/gpt-4o-mini", "reasoning": "opus"},
        "classifierTimeout": 1500,
        "autoDiscover": False,
    })
    assert cfg.classifier == "remote"
    assert cfg.uses_remote_classifier
    assert cfg.preference == "cost"
    assert dict(cfg.tiers) == {"simple": "openai/gpt-4o-mini", "reasoning": "opus"}
    assert cfg.classifier_timeout_ms == 1500
    assert cfg.auto_discover is False


def test_remote_classifier_needs_a_model():
    assert not RouterConfig.from_dict({"classifier": "remote"}).uses_remote_classifier


def test_bad_values_fall_back_to_defaults():
    cfg = RouterConfig.from_dict({
        "classifier": "magic",
        "preference": "fastest",
        "tiers": {"trivial": "openai/gpt-4o-mini", "medium": ""},
        "classifierTimeout": "soon",
    })
    assert cfg.classifier == "rules"
    assert cfg.preference == "balanced"
    assert dict(cfg.tiers) == {}
    assert cfg.classifier_timeout_ms == 3000


def test_non_string_classifier_model_is_ignored():
    cfg = RouterConfig.from_dict({"classifier": "remote", "classifierModel": 42})
    assert cfg.classifier_model is None
    assert not cfg.uses_remote_classifier


def test_auto_discover_only_disabled_by_explicit_false():
    assert RouterConfig.from_dict({"autoDiscover": None}).auto_discover is True
    assert RouterConfig.from_dict({"autoDiscover": 0}).auto_discover is True


def test_config_is_read_only():
    cfg = RouterConfig(tiers={"simple": "haiku"})
    with pytest.raises(TypeError):
        cfg.tiers["simple"] = "opus"
    with pytest.raises(AttributeError):
        cfg.preference = "quality"


def test_load_router_config_reads_providers_in_order():
    cfg = load_router_config(_app_config({"preference": "quality"}))
    assert cfg.preference == "quality"
    assert list(cfg.providers) == ["anthropic", "openai"]

    sonnet, = cfg.providers["anthropic"]
    assert sonnet.id == "claude-sonnet-4-6"
    assert sonnet.reasoning is True
    assert sonnet.input_modalities == ("text", "image")
    assert (sonnet.cost_input, sonnet.cost_output) == (3.0, 15.0)
    assert cfg.providers["openai"][0].context_window == 128_000


def test_load_router_config_without_auto_section():
    cfg = load_router_config({"agents": {"defaults": {"model": "anthropic/claude-opus-4-6"}}})
    assert cfg == RouterConfig()


def test_is_auto_model_enabled():
    assert is_auto_model_enabled(_app_config())
    assert not is_auto_model_enabled(_app_config(primary="anthropic/claude-opus-4-6"))
    assert not is_auto_model_enabled({"agents": {"defaults": {"model": "auto"}}})
    assert not is_auto_model_enabled({})

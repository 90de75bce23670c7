"""Tests for environment settings and strategy files."""

import json

import pytest

from docpack.config import (
    SelectorSettings,
    load_settings,
    load_strategies_file,
    strategy_from_dict,
)
from docpack.selector.base import SelectionAlgorithm
from docpack.selector.knapsack import DEFAULT_CELL_WARNING
from docpack.utils.error_handling import ConfigurationError

ENV_VARS = [
    "DOCPACK_DEFAULT_STRATEGY",
    "DOCPACK_MAX_ITERATIONS",
    "DOCPACK_CONVERGENCE_THRESHOLD",
    "DOCPACK_OPTIMIZE_MAX_ITERATIONS",
    "DOCPACK_OPTIMIZE_THRESHOLD",
    "DOCPACK_KNAPSACK_CELL_WARNING",
    "DOCPACK_VALIDATE_RESULTS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadSettings:

    def test_defaults(self, clean_env):
        settings = load_settings()

        assert settings == SelectorSettings()
        assert settings.default_strategy == "hybrid"
        assert settings.max_iterations == 100
        assert settings.convergence_threshold == 0.01
        assert settings.optimize_max_iterations == 50
        assert settings.optimize_convergence_threshold == 0.001
        assert settings.knapsack_cell_warning == DEFAULT_CELL_WARNING
        assert settings.validate_results is True

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("DOCPACK_DEFAULT_STRATEGY", "efficiency")
        clean_env.setenv("DOCPACK_MAX_ITERATIONS", "25")
        clean_env.setenv("DOCPACK_CONVERGENCE_THRESHOLD", "0.05")
        clean_env.setenv("DOCPACK_VALIDATE_RESULTS", "off")

        settings = load_settings()

        assert settings.default_strategy == "efficiency"
        assert settings.max_iterations == 25
        assert settings.convergence_threshold == 0.05
        assert settings.validate_results is False

    def test_invalid_values_fall_back(self, clean_env, caplog):
        clean_env.setenv("DOCPACK_MAX_ITERATIONS", "many")
        clean_env.setenv("DOCPACK_OPTIMIZE_THRESHOLD", "tiny")
        clean_env.setenv("DOCPACK_VALIDATE_RESULTS", "maybe")

        settings = load_settings()

        assert settings.max_iterations == 100
        assert settings.optimize_convergence_threshold == 0.001
        assert settings.validate_results is True
        assert "DOCPACK_MAX_ITERATIONS" in caplog.text


class TestStrategyFiles:

    def test_camel_case_definition(self):
        strategy = strategy_from_dict("docs-lite", {
            "algorithm": "greedy",
            "description": "Lightweight",
            "criteria": {"priorityWeight": 0.5, "diversityWeight": 0.3},
            "constraints": {"balanceRequirement": 0.4, "requiredCategories": ["guide"]},
        })

        assert strategy.name == "docs-lite"
        assert strategy.algorithm is SelectionAlgorithm.GREEDY
        assert strategy.criteria.priority_weight == 0.5
        assert strategy.criteria.diversity_weight == 0.3
        assert strategy.criteria.quality_weight == 0.25
        assert strategy.constraints.required_categories == ("guide",)
        assert strategy.balance_requirement == 0.4

    def test_snake_case_definition(self):
        strategy = strategy_from_dict("s", {
            "algorithm": "knapsack",
            "criteria": {"quality_weight": 0.7},
        })
        assert strategy.criteria.quality_weight == 0.7

    @pytest.mark.parametrize("definition", [
        {},
        {"algorithm": "annealing"},
        {"algorithm": "greedy", "criteria": {"noveltyWeight": 1.0}},
        {"algorithm": "greedy", "criteria": {"priorityWeight": -1}},
        {"algorithm": "greedy", "constraints": {"balanceRequirement": 2}},
    ])
    def test_invalid_definitions(self, definition):
        with pytest.raises(ConfigurationError):
            strategy_from_dict("bad", definition)

    def test_load_file(self, tmp_path):
        path = tmp_path / "strategies.json"
        path.write_text(json.dumps({
            "strategies": {
                "one": {"algorithm": "greedy"},
                "two": {"algorithm": "multi-criteria", "criteria": {"qualityWeight": 0.9}},
            }
        }))

        strategies = load_strategies_file(path)

        assert [s.name for s in strategies] == ["one", "two"]
        assert strategies[1].algorithm is SelectionAlgorithm.MULTI_CRITERIA

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_strategies_file(tmp_path / "absent.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError):
            load_strategies_file(path)

    def test_missing_strategies_key(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"presets": {}}))

        with pytest.raises(ConfigurationError):
            load_strategies_file(str(path))

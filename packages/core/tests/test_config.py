"""Tests for configuration loading and normalization."""

import pytest

from revpick_core.config import load_config, parse_participation_checks, parse_selection_inputs
from revpick_core.errors import ConfigError


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["reviewers"] == []
    assert config["always_add"] == []
    assert config["min_reviewers"] == 2
    assert config["add_top_contributor"] is True
    assert config["selection_mode"] == "random"
    assert config["balanced_lookback"] == 10
    assert config["participation_checks"] == ["reviewers", "comments"]


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".revpick.yml"
    cfg.write_text("selection_mode: balanced\nmin_reviewers: 3\nreviewers:\n  - alice\n  - bob\n")
    config = load_config(config_path=str(cfg))
    assert config["selection_mode"] == "balanced"
    assert config["min_reviewers"] == 3
    assert config["reviewers"] == ["alice", "bob"]


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".revpick.yml"
    cfg.write_text("selection_mode: balanced\n")
    config = load_config(config_path=str(cfg), cli_overrides={"selection_mode": "random"})
    assert config["selection_mode"] == "random"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".revpick.yml"
    cfg.write_text("selection_mode: balanced\n")
    config = load_config(config_path=str(cfg), cli_overrides={"selection_mode": None})
    assert config["selection_mode"] == "balanced"


def test_empty_config_file_uses_defaults(tmp_path):
    cfg = tmp_path / ".revpick.yml"
    cfg.write_text("")
    config = load_config(config_path=str(cfg))
    assert config["min_reviewers"] == 2



def test_list_defaults_are_not_shared_reference(tmp_path):
    """Mutating one config's lists must not affect another."""
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["reviewers"].append("alice")
    config_a["participation_checks"].clear()
    assert config_b["reviewers"] == []
    assert config_b["participation_checks"] == ["reviewers", "comments"]


class TestParseSelectionInputs:
    def test_defaults(self):
        inputs = parse_selection_inputs({"reviewers": "alice,bob,charlie"})
        assert inputs.reviewer_list == ["alice", "bob", "charlie"]
        assert inputs.always_add == []
        assert inputs.min_reviewers == 2
        assert inputs.add_top_contributor is True
        assert inputs.selection_mode == "random"
        assert inputs.balanced_lookback == 10
        assert inputs.participation_checks == ["reviewers", "comments"]

    def test_all_custom_values(self):
        inputs = parse_selection_inputs(
            {
                "reviewers": "alice,bob,charlie,diana",
                "always_add": "alice,bob",
                "min_reviewers": "3",
                "add_top_contributor": "false",
                "selection_mode": "balanced",
                "balanced_lookback": "15",
                "participation_checks": "reviewers",
            }
        )
        assert inputs.reviewer_list == ["alice", "bob", "charlie", "diana"]
        assert inputs.always_add == ["alice", "bob"]
        assert inputs.min_reviewers == 3
        assert inputs.add_top_contributor is False
        assert inputs.selection_mode == "balanced"
        assert inputs.balanced_lookback == 15
        assert inputs.participation_checks == ["reviewers"]

    def test_yaml_lists_accepted(self):
        inputs = parse_selection_inputs({"reviewers": ["alice", " bob ", ""], "always_add": ["carol"]})
        assert inputs.reviewer_list == ["alice", "bob"]
        assert inputs.always_add == ["carol"]

    def test_whitespace_and_blank_entries_dropped(self):
        inputs = parse_selection_inputs({"reviewers": " alice , ,bob,"})
        assert inputs.reviewer_list == ["alice", "bob"]

    def test_missing_reviewers_raises(self):
        with pytest.raises(ConfigError):
            parse_selection_inputs({"reviewers": ""})

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_selection_inputs({})

    def test_non_numeric_counts_fall_back_to_defaults(self):
        inputs = parse_selection_inputs({"reviewers": "alice", "min_reviewers": "two", "balanced_lookback": "lots"})
        assert inputs.min_reviewers == 2
        assert inputs.balanced_lookback == 10

    def test_zero_lookback_falls_back_to_default(self):
        inputs = parse_selection_inputs({"reviewers": "alice", "balanced_lookback": 0})
        assert inputs.balanced_lookback == 10

    def test_zero_min_reviewers_allowed(self):
        inputs = parse_selection_inputs({"reviewers": "alice", "min_reviewers": 0})
        assert inputs.min_reviewers == 0

    def test_unknown_mode_becomes_random(self):
        inputs = parse_selection_inputs({"reviewers": "alice", "selection_mode": "roundrobin"})
        assert inputs.selection_mode == "random"

    def test_boolean_top_contributor(self):
        inputs = parse_selection_inputs({"reviewers": "alice", "add_top_contributor": False})
        assert inputs.add_top_contributor is False

    def test_scalar_checks_fall_back_to_both(self):
        inputs = parse_selection_inputs({"reviewers": "alice", "participation_checks": 5})
        assert inputs.participation_checks == ["reviewers", "comments"]

    def test_boolean_always_add_is_empty(self):
        inputs = parse_selection_inputs({"reviewers": "alice", "always_add": True})
        assert inputs.always_add == []

    def test_numeric_reviewer_handle_kept_as_string(self):
        inputs = parse_selection_inputs({"reviewers": 42, "always_add": 7})
        assert inputs.reviewer_list == ["42"]
        assert inputs.always_add == ["7"]

    def test_mapping_reviewers_treated_as_missing(self):
        with pytest.raises(ConfigError):
            parse_selection_inputs({"reviewers": {"alice": 1}})

    def test_scalar_values_from_yaml_file(self, tmp_path):
        cfg = tmp_path / ".revpick.yml"
        cfg.write_text("reviewers: [alice, bob]\nalways_add: true\nparticipation_checks: 5\n")
        inputs = parse_selection_inputs(load_config(config_path=str(cfg)))
        assert inputs.always_add == []
        assert inputs.participation_checks == ["reviewers", "comments"]


class TestParseParticipationChecks:
    def test_comma_separated(self):
        assert parse_participation_checks("reviewers,comments") == ["reviewers", "comments"]

    def test_invalid_checks_filtered(self):
        assert parse_participation_checks("reviewers,invalid,comments") == ["reviewers", "comments"]

    def test_defaults_to_both_when_nothing_valid(self):
        assert parse_participation_checks("invalid1,invalid2") == ["reviewers", "comments"]

    def test_single_check(self):
        assert parse_participation_checks(["comments"]) == ["comments"]

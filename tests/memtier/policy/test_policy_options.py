"""
Unit tests for the memtier policy options.
"""

import json

import pytest
from pydantic import ValidationError

from memtier.config.registry import ConfigRegistry, registry
from memtier.policy.duration import MINUTE, SECOND, Interval, MalformedInterval
from memtier.policy.hints import TopologyHint
from memtier.policy.options import (
    POLICY_DESCRIPTION,
    POLICY_PATH,
    PolicyOptions,
    default_options,
    opt,
    register_policy_options,
)


def assert_defaults(options):
    assert options.pin_cpu is True
    assert options.pin_memory is True
    assert options.prefer_isolated is True
    assert options.prefer_shared is False
    assert options.fake_hints == {}
    assert options.dirty_bit_scan_period == 0
    assert options.page_move_period == 0
    assert options.page_move_count == 0


def test_default_options():
    options = default_options()
    assert_defaults(options)
    assert options.fake_hints is not None
    assert options.dirty_bit_scan_period.disabled
    assert options.page_move_period.disabled


def test_default_options_are_independent():
    first, second = default_options(), default_options()
    assert first == second
    assert first is not second
    assert first.fake_hints is not second.fake_hints
    first.fake_hints["pod0"] = {"cpu": TopologyHint(cpus="0")}
    assert second.fake_hints == {}


def test_field_defaults_match_factory():
    assert PolicyOptions() == default_options()


def test_to_json_uses_wire_names_and_omits_empty_fake_hints():
    options = default_options()
    options.page_move_period = Interval(10 * SECOND)
    data = json.loads(options.to_json())
    assert data == {
        "PinCPU": True,
        "PinMemory": True,
        "PreferIsolatedCPUs": True,
        "PreferSharedCPUs": False,
        "DirtyBitScanPeriod": "0s",
        "PageMovePeriod": "10s",
        "PageMoveCount": 0,
    }


def test_to_json_includes_fake_hints_when_set():
    options = default_options()
    options.merge_fake_hints({"pod0": {"cpu": TopologyHint(provider="cpu", cpus="2")}})
    data = json.loads(options.to_json())
    assert data["FakeHints"] == {"pod0": {"cpu": {"Provider": "cpu", "CPUs": "2", "NUMAs": "", "Sockets": ""}}}


def test_from_json_applies_over_defaults():
    options = PolicyOptions.from_json('{"PinCPU": false, "PageMoveCount": 5, "PageMovePeriod": "10s"}')
    assert options.pin_cpu is False
    assert options.page_move_count == 5
    assert options.page_move_period == Interval(10 * SECOND)
    assert options.pin_memory is True
    assert options.prefer_isolated is True
    assert options.prefer_shared is False
    assert options.fake_hints == {}
    assert options.dirty_bit_scan_period == 0


def test_json_round_trip():
    options = default_options()
    options.prefer_shared = True
    options.dirty_bit_scan_period = Interval(90 * MINUTE)
    options.page_move_count = 64
    options.merge_fake_hints({"pod0": {"nvme0": TopologyHint(provider="nvme0", numas="1")}})
    assert PolicyOptions.from_json(options.to_json()) == options


def test_python_attribute_names_are_accepted():
    options = PolicyOptions.model_validate({"prefer_shared": True, "page_move_period": "1m"})
    assert options.prefer_shared is True
    assert options.page_move_period == Interval(MINUTE)


@pytest.mark.parametrize("period", [10, 1.5, True, "", "10"])
def test_interval_fields_reject_non_duration_values(period):
    with pytest.raises(ValidationError) as excinfo:
        PolicyOptions.model_validate({"PageMovePeriod": period})
    assert "invalid Interval" in str(excinfo.value)


def test_interval_error_surfaces_malformed_interval():
    with pytest.raises(ValidationError) as excinfo:
        PolicyOptions.from_json('{"DirtyBitScanPeriod": "soon"}')
    error = excinfo.value.errors()[0]
    assert error["loc"] == ("DirtyBitScanPeriod",)
    assert isinstance(error["ctx"]["error"], MalformedInterval)


def test_page_move_count_is_unsigned():
    with pytest.raises(ValidationError):
        PolicyOptions.model_validate({"PageMoveCount": -1})
    options = default_options()
    with pytest.raises(ValidationError):
        options.page_move_count = -1
    assert options.page_move_count == 0


def test_merge_fake_hints_keeps_existing_entries():
    options = default_options()
    h1 = {"cpu": TopologyHint(provider="cpu", cpus="0-1")}
    h2 = {"cpu": TopologyHint(provider="cpu", cpus="2-3")}
    options.merge_fake_hints({"a": h1})
    options.merge_fake_hints({"b": h2})
    assert options.fake_hints == {"a": h1, "b": h2}


def test_module_options_registered_at_import():
    assert registry.get(POLICY_PATH) is opt
    assert registry.describe()[POLICY_PATH] == POLICY_DESCRIPTION


def test_register_policy_options_with_custom_registry():
    custom = ConfigRegistry()
    instance = default_options()
    assert register_policy_options(custom, instance) is instance
    assert custom.get(POLICY_PATH) is instance

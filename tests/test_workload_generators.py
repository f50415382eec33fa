"""
Tests for workload generators.

Determinism, record shape and discriminating fields of the Basic, Packet and
Event workloads.
"""

from __future__ import annotations

import pytest

from kvbench.core.workload_generators import (
    BasicWorkload,
    EventWorkload,
    PacketWorkload,
    WorkloadType,
    create_workload,
    default_workloads,
)


ALL_WORKLOADS = [BasicWorkload(), PacketWorkload(), EventWorkload()]


class TestDeterminism:
    @pytest.mark.parametrize("workload", ALL_WORKLOADS, ids=lambda w: w.name)
    def test_same_index_same_record(self, workload) -> None:
        """generate(i) is identical across calls for every index in range."""
        for i in range(200):
            assert workload.generate(i) == workload.generate(i)

    @pytest.mark.parametrize("workload", ALL_WORKLOADS, ids=lambda w: w.name)
    def test_fresh_value_per_call(self, workload) -> None:
        """Mutating one generated value does not leak into the next call."""
        first = workload.generate(3).value
        second = workload.generate(3).value
        if isinstance(first, dict):
            assert first is not second
            first["tampered"] = True
            assert "tampered" not in workload.generate(3).value

    def test_fresh_generator_instances_agree(self) -> None:
        assert PacketWorkload().generate(42) == create_workload("packet").generate(42)


class TestBasicWorkload:
    def test_key_and_value(self) -> None:
        record = BasicWorkload().generate(7)
        assert record.key == "key7"
        assert record.value == "value7"

    def test_discriminator_is_whole_value(self) -> None:
        assert BasicWorkload().expected(199) == "value199"


class TestPacketWorkload:
    def test_fixed_fields(self) -> None:
        value = PacketWorkload().generate(5).value
        assert value == {
            "cmd": "publish",
            "topic": "hello/world",
            "payload": b"muahah",
            "qos": 5,
            "retain": True,
        }

    def test_only_qos_varies(self) -> None:
        workload = PacketWorkload()
        a = dict(workload.generate(1).value)
        b = dict(workload.generate(2).value)
        assert a.pop("qos") == 1
        assert b.pop("qos") == 2
        assert a == b

    def test_discriminator(self) -> None:
        assert PacketWorkload().discriminator({"qos": 11}) == 11


class TestEventWorkload:
    def test_nested_structure(self) -> None:
        value = EventWorkload().generate(9).value
        assert value["sequence"] == 9
        assert value["rooms"] == {}
        assert value["last_weather"]["when"] == 55967638.040533334
        what = value["last_weather"]["what"]
        assert what["city_name"] == "Melbourne, Victoria, AU"
        assert what["current_description_code"] is None
        assert what["forecast_description_code"] == "Sunny"

    def test_only_sequence_varies(self) -> None:
        workload = EventWorkload()
        a = dict(workload.generate(0).value)
        b = dict(workload.generate(150).value)
        assert (a.pop("sequence"), b.pop("sequence")) == (0, 150)
        assert a == b


class TestFactory:
    def test_create_by_string_and_enum(self) -> None:
        assert isinstance(create_workload("basic"), BasicWorkload)
        assert isinstance(create_workload(WorkloadType.EVENT), EventWorkload)

    def test_unknown_workload(self) -> None:
        with pytest.raises(ValueError, match="Unsupported workload"):
            create_workload("scan")

    def test_default_order(self) -> None:
        assert [w.name for w in default_workloads()] == ["Basic", "Packet", "Event"]

    def test_negative_index_rejected(self) -> None:
        with pytest.raises(ValueError):
            BasicWorkload().generate(-1)

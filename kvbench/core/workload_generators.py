"""
Workload Generators for Key-Value Benchmarking

This module provides deterministic workloads that map an integer index to a
Record:
- Basic: string values
- Packet: flat MQTT-style publish packets, ``qos`` varies per index
- Event: nested home-automation events, ``sequence`` varies per index

Generators hold no mutable state. Calling generate() twice with the same index
yields equal records, and every call builds a fresh value so no two records
share a mutable document.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List

from kvbench.models.records import Document, Record


class WorkloadType(str, Enum):
    """Types of benchmark workloads"""

    BASIC = "basic"
    PACKET = "packet"
    EVENT = "event"


class WorkloadGenerator(ABC):
    """
    Abstract base class for workload generators.

    Subclasses define the value written for each index and the discriminating
    field used to verify what a backend reads back.
    """

    workload_type: WorkloadType

    @property
    def name(self) -> str:
        return self.workload_type.value.capitalize()

    @staticmethod
    def key_for(index: int) -> str:
        return f"key{index}"

    def generate(self, index: int) -> Record:
        """Build the record for ``index``."""
        if index < 0:
            raise ValueError(f"Workload index must be non-negative, got {index}")
        return Record(key=self.key_for(index), value=self.value_for(index))

    @abstractmethod
    def value_for(self, index: int) -> Document:
        """Build the value written at ``index``."""
        pass

    @abstractmethod
    def discriminator(self, value: Document) -> Any:
        """
        Extract the field that varies with the record index.

        Raises:
            KeyError / TypeError: if ``value`` does not have the workload's shape
        """
        pass

    def expected(self, index: int) -> Any:
        """Discriminating field of the value written at ``index``."""
        return self.discriminator(self.value_for(index))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BasicWorkload(WorkloadGenerator):
    """``key{i} -> value{i}``; the whole string is compared on read."""

    workload_type = WorkloadType.BASIC

    def value_for(self, index: int) -> Document:
        return f"value{index}"

    def discriminator(self, value: Document) -> Any:
        return value


class PacketWorkload(WorkloadGenerator):
    """MQTT publish packet with a binary payload."""

    workload_type = WorkloadType.PACKET

    PAYLOAD = b"muahah"

    def value_for(self, index: int) -> Document:
        return {
            "cmd": "publish",
            "topic": "hello/world",
            "payload": self.PAYLOAD,
            "qos": index,
            "retain": True,
        }

    def discriminator(self, value: Document) -> Any:
        return value["qos"]


class EventWorkload(WorkloadGenerator):
    """Nested event document carrying a weather snapshot."""

    workload_type = WorkloadType.EVENT

    def value_for(self, index: int) -> Document:
        return {
            "name": "name",
            "sequence": index,
            "rooms": {},
            "last_weather": {
                "when": 55967638.040533334,
                "what": {
                    "degrees": 23.9,
                    "city_name": "Melbourne, Victoria, AU",
                    "forecast_low": 16,
                    "forecast_high": 24,
                    "forecast_sunset": "19:37",
                    "forecast_sunrise": "07:19",
                    "current_description_code": None,
                    "forecast_description_code": "Sunny",
                },
            },
        }

    def discriminator(self, value: Document) -> Any:
        return value["sequence"]


_WORKLOADS = {
    WorkloadType.BASIC: BasicWorkload,
    WorkloadType.PACKET: PacketWorkload,
    WorkloadType.EVENT: EventWorkload,
}


def create_workload(workload_type: WorkloadType | str) -> WorkloadGenerator:
    """
    Factory function to create a workload generator.

    Args:
        workload_type: WorkloadType or its string value

    Returns:
        WorkloadGenerator instance
    """
    try:
        return _WORKLOADS[WorkloadType(workload_type)]()
    except ValueError:
        raise ValueError(f"Unsupported workload type: {workload_type}") from None


def default_workloads() -> List[WorkloadGenerator]:
    """All workloads in reporting order."""
    return [create_workload(t) for t in WorkloadType]

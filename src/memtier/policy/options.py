# ./policy/options.py

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_serializer

from memtier.config.registry import ConfigRegistry, registry as default_registry
from memtier.policy.duration import Interval
from memtier.policy.hints import HintOverrideMap, Hints, merge_fake_hints, new_fake_hints
from memtier.utils.logger import setup_logger

logger = setup_logger(__name__)

POLICY_NAME = "memtier"
POLICY_DESCRIPTION = "Flexible policy supporting memory types including HBM and PMEM."
POLICY_PATH = "policy." + POLICY_NAME


class PolicyOptions(BaseModel):
    """
    Configurable parameters of the memtier policy.

    Attributes:
        pin_cpu (bool): Controls CPU pinning.
        pin_memory (bool): Controls memory pinning.
        prefer_isolated (bool): Prefer isolated CPUs for isolated allocations.
        prefer_shared (bool): Always prefer shared CPU allocation by default.
        fake_hints (HintOverrideMap): Forced topology hints per pod or container, for testing.
        dirty_bit_scan_period (Interval): Memory dirty bit scan cadence, zero disables scanning.
        page_move_period (Interval): Page migration cadence, zero disables migration.
        page_move_count (int): Pages moved per migration pass.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True, extra="ignore")

    pin_cpu: bool = Field(default=True, alias="PinCPU", description="Enable CPU pinning.")
    pin_memory: bool = Field(default=True, alias="PinMemory", description="Enable memory pinning.")
    prefer_isolated: bool = Field(
        default=True, alias="PreferIsolatedCPUs", description="Prefer isolated CPUs for isolated allocations."
    )
    prefer_shared: bool = Field(
        default=False, alias="PreferSharedCPUs", description="Prefer shared CPU allocation by default."
    )
    fake_hints: HintOverrideMap = Field(
        default_factory=new_fake_hints, alias="FakeHints", description="Fake topology hints for testing."
    )
    dirty_bit_scan_period: Interval = Field(
        default=Interval(0), alias="DirtyBitScanPeriod", description="Dirty bit scan period, 0 to disable."
    )
    page_move_period: Interval = Field(
        default=Interval(0), alias="PageMovePeriod", description="Page move period, 0 to disable."
    )
    page_move_count: NonNegativeInt = Field(
        default=0, alias="PageMoveCount", description="Number of pages to move per period."
    )

    @model_serializer(mode="wrap")
    def omit_empty_fake_hints(self, handler):
        data = handler(self)
        if not self.fake_hints:
            data.pop("FakeHints", None)
            data.pop("fake_hints", None)
        return data

    def merge_fake_hints(self, incoming: Mapping[str, Hints]) -> None:
        """Merge incoming fake hints into ours, replacing entries with the same key."""
        self.fake_hints = merge_fake_hints(self.fake_hints, incoming)
        logger.debug(f"Merged {len(incoming)} fake hint entries, {len(self.fake_hints)} in total")

    def to_json(self, **kwargs: Any) -> str:
        """Serialize using the wire field names."""
        return self.model_dump_json(by_alias=True, **kwargs)

    @classmethod
    def from_json(cls, text: str) -> "PolicyOptions":
        """Deserialize the wire form, unset fields keeping their defaults."""
        return cls.model_validate_json(text)


def default_options() -> PolicyOptions:
    """Return a new options instance, all initialized to defaults."""
    return PolicyOptions(
        pin_cpu=True,
        pin_memory=True,
        prefer_isolated=True,
        prefer_shared=False,
        fake_hints=new_fake_hints(),
        dirty_bit_scan_period=Interval(0),
        page_move_period=Interval(0),
        page_move_count=0,
    )


# Our runtime configuration.
opt = default_options()


def register_policy_options(
    registry: Optional[ConfigRegistry] = None, instance: Optional[PolicyOptions] = None
) -> PolicyOptions:
    """
    Register the policy options for configuration handling.

    Args:
        registry (Optional[ConfigRegistry]): Registry to register with, the process-wide one by default.
        instance (Optional[PolicyOptions]): Live instance to register, the module-level `opt` by default.

    Returns:
        PolicyOptions: The registered instance.
    """
    instance = opt if instance is None else instance
    (registry or default_registry).register(POLICY_PATH, POLICY_DESCRIPTION, instance, default_options)
    return instance


register_policy_options()

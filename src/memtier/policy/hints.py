# ./policy/hints.py

from typing import Dict, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field


class TopologyHint(BaseModel):
    """
    A topology hint as provided by the topology-hints subsystem.

    The fields are carried verbatim; nothing in this package interprets them.

    Attributes:
        provider (str): The device or resource the hint originates from.
        cpus (str): CPU set the hint points at.
        numas (str): NUMA nodes the hint points at.
        sockets (str): Sockets the hint points at.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    provider: str = Field(default="", alias="Provider", description="Hint provider.")
    cpus: str = Field(default="", alias="CPUs", description="Hinted CPUs.")
    numas: str = Field(default="", alias="NUMAs", description="Hinted NUMA nodes.")
    sockets: str = Field(default="", alias="Sockets", description="Hinted sockets.")


# Topology hints of a single container, keyed by provider.
Hints = Dict[str, TopologyHint]

# Forced hints, keyed by pod or container.
HintOverrideMap = Dict[str, Hints]


def new_fake_hints() -> HintOverrideMap:
    """Create a new, empty set of fake hints."""
    return {}


def merge_fake_hints(target: Optional[HintOverrideMap], incoming: Mapping[str, Hints]) -> HintOverrideMap:
    """
    Merge incoming fake hints into target.

    Every key of incoming is inserted into target, replacing any existing entry.
    A None target is replaced by a fresh map first.

    Args:
        target (Optional[HintOverrideMap]): The map to update in place, or None.
        incoming (Mapping[str, Hints]): The hints to merge.

    Returns:
        HintOverrideMap: The updated map; target itself unless it was None.
    """
    if target is None:
        target = new_fake_hints()
    for key, hints in incoming.items():
        target[key] = dict(hints)
    return target

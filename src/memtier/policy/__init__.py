from .duration import Interval, MalformedInterval, deserialize_interval, serialize_interval
from .hints import HintOverrideMap, Hints, TopologyHint, merge_fake_hints, new_fake_hints
from .options import POLICY_DESCRIPTION, POLICY_PATH, PolicyOptions, default_options, register_policy_options

__all__ = ["Interval", "MalformedInterval", "deserialize_interval", "serialize_interval",
           "HintOverrideMap", "Hints", "TopologyHint", "merge_fake_hints", "new_fake_hints",
           "POLICY_DESCRIPTION", "POLICY_PATH", "PolicyOptions", "default_options",
           "register_policy_options"]

"""Physical-machine (host) chaos: the action itself selects the fault family.

In canonical form the chosen action's parameters are nested under a key equal
to the action value::

    {"action": "network-delay", "network-delay": {...}, "address": [...], "duration": "30s"}

while the form keeps them as siblings of ``action``.  The editor shows the
family kind of the action (``NetworkChaos`` above) instead of
``PhysicalMachineChaos``.
"""

import logging
from typing import Any

from chaosflow.core.errors import StructuralError
from chaosflow.core.kinds.base import KindHandler

logger = logging.getLogger(__name__)

PHYSICAL_MACHINE_KIND = "PhysicalMachineChaos"

#: Host action → editor kind for the known actions.
ACTION_KINDS: dict[str, str] = {
    "clock": "TimeChaos",
    "disk-fill": "DiskChaos",
    "disk-read-payload": "DiskChaos",
    "disk-write-payload": "DiskChaos",
    "jvm-exception": "JVMChaos",
    "jvm-gc": "JVMChaos",
    "jvm-latency": "JVMChaos",
    "jvm-mysql": "JVMChaos",
    "jvm-return": "JVMChaos",
    "jvm-rule-data": "JVMChaos",
    "jvm-stress": "JVMChaos",
    "network-bandwidth": "NetworkChaos",
    "network-corrupt": "NetworkChaos",
    "network-delay": "NetworkChaos",
    "network-dns": "NetworkChaos",
    "network-down": "NetworkChaos",
    "network-duplicate": "NetworkChaos",
    "network-flood": "NetworkChaos",
    "network-loss": "NetworkChaos",
    "network-partition": "NetworkChaos",
    "network-port-occupied": "NetworkChaos",
    "process": "ProcessChaos",
    "stress-cpu": "StressChaos",
    "stress-mem": "StressChaos",
}

#: Action-name prefixes tried in order when the action is not in ACTION_KINDS.
#: Anything left over keeps the host kind.
ACTION_PREFIX_KINDS: tuple[tuple[str, str], ...] = (
    ("disk", "DiskChaos"),
    ("jvm", "JVMChaos"),
    ("network", "NetworkChaos"),
    ("process", "ProcessChaos"),
    ("stress", "StressChaos"),
)

#: Form fields that stay at the top level of the canonical spec.
_TOP_LEVEL_FIELDS = ("action", "address", "duration")
_DROPPED_FIELDS = ("selector", "mode")


def action_kind(action: str | None) -> str:
    """Return the editor kind for a host *action*."""
    if not action:
        return PHYSICAL_MACHINE_KIND
    if action in ACTION_KINDS:
        return ACTION_KINDS[action]
    for prefix, kind in ACTION_PREFIX_KINDS:
        if action.startswith(prefix):
            return kind
    return PHYSICAL_MACHINE_KIND


class PhysicalMachineChaosHandler(KindHandler):
    cluster_scoped = False

    def __init__(self, kind: str = PHYSICAL_MACHINE_KIND):
        super().__init__(kind)

    def to_canonical(self, spec: dict[str, Any]) -> dict[str, Any]:
        params = {
            key: value
            for key, value in spec.items()
            if key not in _TOP_LEVEL_FIELDS and key not in _DROPPED_FIELDS
        }
        action = spec.get("action")
        if not action:
            logger.warning("Host experiment has no action; parameters are left unnested")
            return {"address": spec.get("address"), "duration": spec.get("duration"), **params}

        return {
            "address": spec.get("address"),
            "action": action,
            action: params,
            "duration": spec.get("duration"),
        }

    def from_canonical(self, spec: dict[str, Any]) -> dict[str, Any]:
        action = spec.get("action")
        if not action:
            raise StructuralError("The required spec.action field is missing.")
        return {"action": action, **(spec.get(action) or {})}

    def display_kind(self, spec: dict[str, Any]) -> str:
        return action_kind(spec.get("action"))

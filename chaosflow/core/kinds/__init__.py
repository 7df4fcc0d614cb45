"""Experiment-kind handlers and the default registry."""

from chaosflow.core.kinds.base import BASIC_SPEC_FIELDS, KindHandler
from chaosflow.core.kinds.builtin import (
    HTTPChaosHandler,
    IOChaosHandler,
    KernelChaosHandler,
    NetworkChaosHandler,
    StressChaosHandler,
)
from chaosflow.core.kinds.physical import (
    ACTION_KINDS,
    ACTION_PREFIX_KINDS,
    PHYSICAL_MACHINE_KIND,
    PhysicalMachineChaosHandler,
    action_kind,
)
from chaosflow.core.kinds.registry import KindRegistrationError, KindRegistry


def build_default_registry() -> KindRegistry:
    """Return a registry holding every built-in kind handler."""
    registry = KindRegistry()
    for handler in (
        NetworkChaosHandler(),
        IOChaosHandler(),
        HTTPChaosHandler(),
        KernelChaosHandler(),
        StressChaosHandler(),
        PhysicalMachineChaosHandler(),
    ):
        registry.register(handler)
    return registry


__all__ = [
    "ACTION_KINDS",
    "ACTION_PREFIX_KINDS",
    "BASIC_SPEC_FIELDS",
    "PHYSICAL_MACHINE_KIND",
    "HTTPChaosHandler",
    "IOChaosHandler",
    "KernelChaosHandler",
    "KindHandler",
    "KindRegistrationError",
    "KindRegistry",
    "NetworkChaosHandler",
    "PhysicalMachineChaosHandler",
    "StressChaosHandler",
    "action_kind",
    "build_default_registry",
]

"""Tests for the kind handler registry."""
import pytest

from chaosflow.core.kinds import (
    KindHandler,
    KindRegistrationError,
    KindRegistry,
    action_kind,
    build_default_registry,
)
from chaosflow.core.models import ExperimentForm
from chaosflow.core.spec_codec import SpecCodec


class UpperPatternsHandler(KindHandler):
    def to_canonical(self, spec):
        return {**spec, "patterns": [p.upper() for p in spec.get("patterns", [])]}


def test_default_registry_kinds():
    assert build_default_registry().kinds() == [
        "HTTPChaos",
        "IOChaos",
        "KernelChaos",
        "NetworkChaos",
        "PhysicalMachineChaos",
        "StressChaos",
    ]


def test_unknown_kind_falls_back_to_pass_through():
    registry = KindRegistry()
    handler = registry.get("PodChaos")
    assert type(handler) is KindHandler
    assert handler.kind == "PodChaos"
    assert not registry.has("PodChaos")


def test_duplicate_registration_raises_error():
    registry = KindRegistry()
    registry.register(KindHandler("DNSChaos"))
    with pytest.raises(KindRegistrationError):
        registry.register(KindHandler("DNSChaos"))


def test_force_registration_replaces_handler():
    registry = KindRegistry()
    registry.register(KindHandler("DNSChaos"))
    replacement = UpperPatternsHandler("DNSChaos")
    registry.register(replacement, force=True)
    assert registry.get("DNSChaos") is replacement


def test_custom_handler_used_by_codec():
    registry = build_default_registry()
    registry.register(UpperPatternsHandler("DNSChaos"))
    codec = SpecCodec(registry=registry)
    form = ExperimentForm(
        kind="DNSChaos",
        metadata={"name": "dns"},
        spec={"action": "error", "patterns": ["google.com"], "selector": {"namespaces": ["a"]}},
    )
    assert codec.to_canonical(form)["spec"]["patterns"] == ["GOOGLE.COM"]


def test_base_handler_strips_basic_fields():
    spec = {"selector": {}, "mode": "one", "value": "1", "duration": "1m", "action": "pod-kill"}
    assert KindHandler("PodChaos").from_canonical(spec) == {"action": "pod-kill"}


def test_action_kind_lookup():
    assert action_kind("network-partition") == "NetworkChaos"
    assert action_kind("jvm-latency") == "JVMChaos"
    assert action_kind(None) == "PhysicalMachineChaos"


@pytest.mark.parametrize(
    "action,kind",
    [
        ("networkDelay", "NetworkChaos"),
        ("jvm-foo", "JVMChaos"),
        ("stress-io", "StressChaos"),
        ("disk-io", "DiskChaos"),
        ("process-stop", "ProcessChaos"),
        ("redis-stop", "PhysicalMachineChaos"),
    ],
)
def test_action_kind_prefix_fallback(action, kind):
    assert action_kind(action) == kind

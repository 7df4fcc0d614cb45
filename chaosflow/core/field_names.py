"""Experiment kind → canonical field-name lookup.

The canonical document nests a kind's spec under a camel-cased key, both in
workflow templates (``networkChaos: {...}``) and inside schedule wrappers.
"""

from typing import Dict

TEMPLATE_FIELD_NAMES: Dict[str, str] = {
    "AWSChaos": "awsChaos",
    "AzureChaos": "azureChaos",
    "BlockChaos": "blockChaos",
    "DNSChaos": "dnsChaos",
    "GCPChaos": "gcpChaos",
    "HTTPChaos": "httpChaos",
    "IOChaos": "ioChaos",
    "JVMChaos": "jvmChaos",
    "KernelChaos": "kernelChaos",
    "NetworkChaos": "networkChaos",
    "PhysicalMachineChaos": "physicalmachineChaos",
    "PodChaos": "podChaos",
    "StressChaos": "stressChaos",
    "TimeChaos": "timeChaos",
    "Schedule": "schedule",
    "Task": "task",
}


def field_name_for(kind: str) -> str:
    """Return the canonical field name for *kind*.

    Kinds missing from the table fall back to the kind with its first
    character lower-cased, which matches the generated names for simple kinds.
    """
    name = TEMPLATE_FIELD_NAMES.get(kind)
    if name:
        return name
    return kind[:1].lower() + kind[1:]

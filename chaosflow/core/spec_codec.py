"""Bidirectional codec between form-shaped and canonical experiment specs.

:class:`SpecCodec` turns the field bag the experiment editor holds into the
spec of a Chaos Mesh custom resource (``to_canonical`` / ``encode_spec``) and
turns an existing resource back into an editable model (``from_canonical``).

Encoding runs in a fixed order:

1. The execution environment picks the effective kind (host experiments are
   always ``PhysicalMachineChaos``).
2. Metadata labels/annotations and, for cluster experiments, the selector
   are converted from ``"key:value"`` lists to mappings.
3. Scheduling fields are split off when the experiment recurs.
4. The kind handler reshapes its own fields.
5. The result is wrapped in a ``Schedule`` when recurring, and the whole
   document is pruned of empty values.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from chaosflow.core.config import API_VERSION, DEFAULT_ENV, DEFAULT_NAMESPACE
from chaosflow.core.errors import StructuralError
from chaosflow.core.field_names import field_name_for
from chaosflow.core.kinds import PHYSICAL_MACHINE_KIND, KindRegistry, build_default_registry
from chaosflow.core.kv_codec import METADATA
from chaosflow.core.models import Env, ExperimentForm, ParsedExperiment, TemplateType
from chaosflow.core.sanitize import drop_none, prune_empty
from chaosflow.core.selectors import BASIC_SELECTOR, decode_selector, encode_selector

logger = logging.getLogger(__name__)

#: Fields lifted to the top of a Schedule wrapper.
SCHEDULE_FIELDS = ("schedule", "historyLimit", "concurrencyPolicy", "startingDeadlineSeconds")

_DEFAULT_REGISTRY = build_default_registry()


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


class SpecCodec:
    """Per-kind form ⇄ canonical transform.

    Example usage::

        codec = SpecCodec()
        document = codec.to_canonical(ExperimentForm(kind="PodChaos", spec=..., metadata=...))
        parsed = codec.from_canonical(document)
    """

    def __init__(self, registry: KindRegistry | None = None, api_version: str = API_VERSION):
        self.registry = registry or _DEFAULT_REGISTRY
        self.api_version = api_version

    # ------------------------------------------------------------------
    # form → canonical
    # ------------------------------------------------------------------

    @staticmethod
    def effective_kind(kind: str, env: Env | str) -> str:
        """Host experiments bypass the cluster taxonomy."""
        return kind if Env.parse(env) is Env.CLUSTER else PHYSICAL_MACHINE_KIND

    def encode_spec(
        self,
        kind: str,
        spec: dict[str, Any],
        env: Env | str = DEFAULT_ENV,
        in_schedule: bool = False,
    ) -> tuple[str, dict[str, Any]]:
        """Encode a form spec.

        Returns:
            ``(discriminator, canonical_spec)``.  The discriminator is
            ``Schedule`` for recurring experiments and the effective kind
            otherwise.  The spec is not pruned yet.
        """
        env = Env.parse(env)
        kind = self.effective_kind(kind, env)
        encoded = copy.deepcopy(spec)

        if env is Env.CLUSTER:
            if encoded.get("selector") is not None:
                encoded["selector"] = encode_selector(encoded["selector"])
            # address only applies to host experiments
            encoded.pop("address", None)

        scheduling: dict[str, Any] = {}
        if in_schedule:
            scheduling = {name: encoded.pop(name, None) for name in SCHEDULE_FIELDS}

        encoded = self.registry.get(kind).to_canonical(encoded)

        if in_schedule:
            return TemplateType.SCHEDULE, {**scheduling, "type": kind, field_name_for(kind): encoded}
        return kind, encoded

    def encode_metadata(
        self,
        metadata: dict[str, Any],
        spec: dict[str, Any],
        env: Env | str = DEFAULT_ENV,
    ) -> dict[str, Any]:
        """Default the namespace and encode labels/annotations."""
        encoded = copy.deepcopy(metadata)

        if not encoded.get("namespace"):
            namespaces: list[str] = []
            if Env.parse(env) is Env.CLUSTER:
                namespaces = (spec.get("selector") or {}).get("namespaces") or []
            encoded["namespace"] = namespaces[0] if namespaces else DEFAULT_NAMESPACE

        for key in ("labels", "annotations"):
            if encoded.get(key):
                encoded[key] = METADATA.encode(encoded[key])
            else:
                encoded.pop(key, None)

        return encoded

    def to_canonical(
        self,
        experiment: ExperimentForm,
        env: Env | str = DEFAULT_ENV,
        in_schedule: bool | None = None,
    ) -> dict[str, Any]:
        """Build the canonical document for a single experiment.

        Args:
            experiment: The form-shaped experiment.
            env: Execution environment (``"k8s"`` or ``"physic"``).
            in_schedule: Wrap the experiment in a ``Schedule``.  Defaults to
                ``experiment.scheduled``.

        Returns:
            The pruned document dict.
        """
        if in_schedule is None:
            in_schedule = experiment.scheduled

        metadata = self.encode_metadata(experiment.metadata, experiment.spec, env)
        discriminator, spec = self.encode_spec(experiment.kind, experiment.spec, env, in_schedule)
        logger.debug("Encoded %s experiment %r as %s", experiment.kind, metadata.get("name"), discriminator)

        return prune_empty(
            {
                "apiVersion": self.api_version,
                "kind": discriminator,
                "metadata": metadata,
                "spec": spec,
            }
        )

    # ------------------------------------------------------------------
    # canonical → form
    # ------------------------------------------------------------------

    def from_canonical(self, document: dict[str, Any]) -> ParsedExperiment:
        """Reconstruct an editable experiment from a canonical document.

        Raises:
            StructuralError: When ``kind``, ``metadata`` or ``spec`` is
                missing, a schedule lacks its inner experiment, or a cluster
                experiment has no ``spec.selector``.
        """
        if not isinstance(document, dict):
            raise StructuralError(f"Document must be a mapping, got {type(document).__name__}")

        kind = document.get("kind")
        metadata = document.get("metadata")
        spec = document.get("spec")
        if not kind or not isinstance(metadata, dict) or not isinstance(spec, dict):
            raise StructuralError("Fail to parse the document. Please check the kind, metadata, and spec fields.")

        spec = copy.deepcopy(spec)
        scheduling: dict[str, Any] = {}
        if kind == TemplateType.SCHEDULE:
            scheduling = {name: spec.get(name) for name in SCHEDULE_FIELDS}
            kind = spec.get("type")
            if not kind:
                raise StructuralError("The required spec.type field of the schedule is missing.")
            field_name = field_name_for(kind)
            if not spec.get(field_name):
                raise StructuralError(f"The required spec.{field_name} field of the schedule is missing.")
            spec = spec[field_name]

        handler = self.registry.get(kind)
        if handler.cluster_scoped and not spec.get("selector"):
            raise StructuralError("The required spec.selector field is missing.")

        basic = {
            "metadata": {
                **metadata,
                "labels": METADATA.decode(metadata.get("labels")),
                "annotations": METADATA.decode(metadata.get("annotations")),
            },
            "spec": {**self._basic_spec(spec, handler.cluster_scoped), **scheduling},
        }

        parsed = ParsedExperiment(
            kind=handler.display_kind(spec),
            basic=drop_none(basic),
            spec=drop_none(handler.from_canonical(spec)),
        )
        logger.debug("Parsed %s document as %s", document.get("kind"), parsed.kind)
        return parsed

    @staticmethod
    def _basic_spec(spec: dict[str, Any], cluster_scoped: bool) -> dict[str, Any]:
        selector = copy.deepcopy(BASIC_SELECTOR)
        if cluster_scoped:
            selector = decode_selector(spec.get("selector"))

        return {
            "selector": selector,
            "mode": _or_default(spec.get("mode"), "one"),
            "value": spec.get("value"),
            "address": _or_default(spec.get("address"), []),
            "duration": _or_default(spec.get("duration"), ""),
        }

"""Workflow construction: flattening the editable step tree into templates.

The canonical ``Workflow`` resource has no nesting.  Every step becomes one
entry of ``spec.templates`` and groups reference their children by name, so
:class:`TreeFlattener` walks the tree depth-first and emits each child before
the group that names it.  A synthetic ``entry`` template of type ``Serial``
heads the list and references the top-level steps.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from chaosflow.core.config import API_VERSION, DEFAULT_ENV, ENTRY_TEMPLATE_NAME
from chaosflow.core.errors import StructuralError
from chaosflow.core.field_names import field_name_for
from chaosflow.core.models import (
    CanonicalTemplate,
    Env,
    FlattenResult,
    ParsedExperiment,
    Step,
    StepType,
    TemplateType,
    WorkflowBasic,
)
from chaosflow.core.sanitize import prune_empty
from chaosflow.core.spec_codec import SpecCodec
from chaosflow.core.yaml_loader import dump_document

logger = logging.getLogger(__name__)

WORKFLOW_KIND = "Workflow"

_GROUP_TEMPLATE_TYPES = {
    StepType.SERIAL: TemplateType.SERIAL,
    StepType.PARALLEL: TemplateType.PARALLEL,
}

#: Template types that never hold an experiment.
CONTROL_TEMPLATE_TYPES = (
    TemplateType.SERIAL,
    TemplateType.PARALLEL,
    TemplateType.TASK,
    TemplateType.SUSPEND,
)


class TreeFlattener:
    """Flatten an editable step tree into canonical templates."""

    def __init__(self, codec: SpecCodec | None = None, env: Env | str = DEFAULT_ENV):
        self.codec = codec or SpecCodec()
        self.env = Env.parse(env)

    def flatten(self, steps: Sequence[Step], reserved: Iterable[str] = ()) -> FlattenResult:
        """Flatten *steps* (the top level of the tree).

        Args:
            steps: Top-level steps, in execution order.
            reserved: Names already taken by templates emitted elsewhere.

        Returns:
            The top-level names and the templates, children before parents.

        Raises:
            ValueError: When a step uses a reserved name. A parent would
                otherwise reference the reserved template instead.
        """
        reserved = set(reserved)
        clashes = sorted({node.name for step in steps for node in step.walk() if node.name in reserved})
        if clashes:
            raise ValueError("Reserved step name(s): " + ", ".join(clashes))

        result = FlattenResult(entry_children=[step.name for step in steps])
        seen = set(reserved)
        for step in steps:
            self._emit(step, result, seen)
        return result

    def _push(self, template: CanonicalTemplate, result: FlattenResult, seen: set[str]) -> None:
        if template.name in seen:
            logger.debug("Template %r already emitted; skipping duplicate", template.name)
            return
        seen.add(template.name)
        result.templates.append(template)

    def _emit(self, step: Step, result: FlattenResult, seen: set[str]) -> None:
        if step.type is StepType.SINGLE:
            self._push(self._single(step), result, seen)
        elif step.type is StepType.SUSPEND:
            self._push(
                CanonicalTemplate(name=step.name, template_type=TemplateType.SUSPEND, deadline=step.deadline),
                result,
                seen,
            )
        else:
            for child in step.children:
                self._emit(child, result, seen)
            self._push(self._group(step), result, seen)

    def _single(self, step: Step) -> CanonicalTemplate:
        experiment = step.experiment
        if experiment is None:
            raise ValueError(f"Step '{step.name}' of type single has no experiment")

        spec = dict(experiment.spec)
        deadline = spec.pop("duration", None)
        template_type, encoded = self.codec.encode_spec(experiment.kind, spec, self.env, experiment.scheduled)

        return CanonicalTemplate(
            name=step.name,
            template_type=template_type,
            deadline=deadline,
            fields={field_name_for(template_type): encoded},
        )

    @staticmethod
    def _group(step: Step) -> CanonicalTemplate:
        if step.type is StepType.CUSTOM:
            custom = step.custom
            return CanonicalTemplate(
                name=step.name,
                template_type=TemplateType.TASK,
                fields={
                    "task": {"container": custom.container if custom else None},
                    "conditionalBranches": custom.conditional_branches if custom else None,
                },
            )

        return CanonicalTemplate(
            name=step.name,
            template_type=_GROUP_TEMPLATE_TYPES[step.type],
            deadline=step.deadline,
            children=[child.name for child in step.children],
        )


def construct_workflow(
    basic: WorkflowBasic,
    steps: Sequence[Step],
    env: Env | str = DEFAULT_ENV,
    codec: SpecCodec | None = None,
) -> dict[str, Any]:
    """Build the canonical ``Workflow`` document for an editable tree.

    Empty strings and empty lists are pruned from the result; ``spec.entry``
    is always present.
    """
    flattened = TreeFlattener(codec, env).flatten(steps, reserved=(ENTRY_TEMPLATE_NAME,))
    entry = CanonicalTemplate(
        name=ENTRY_TEMPLATE_NAME,
        template_type=TemplateType.SERIAL,
        deadline=basic.deadline,
        children=flattened.entry_children,
    )
    logger.info(
        "Constructed workflow %r with %d templates",
        basic.name,
        len(flattened.templates) + 1,
    )

    document = prune_empty(
        {
            "apiVersion": (codec.api_version if codec else API_VERSION),
            "kind": WORKFLOW_KIND,
            "metadata": {"name": basic.name, "namespace": basic.namespace},
            "spec": {
                "entry": ENTRY_TEMPLATE_NAME,
                "templates": [entry.to_dict()] + [template.to_dict() for template in flattened.templates],
            },
        }
    )
    document.setdefault("spec", {})["entry"] = ENTRY_TEMPLATE_NAME
    return document


def dump_workflow(
    basic: WorkflowBasic,
    steps: Sequence[Step],
    env: Env | str = DEFAULT_ENV,
    codec: SpecCodec | None = None,
) -> str:
    """Return the YAML text of :func:`construct_workflow`."""
    return dump_document(construct_workflow(basic, steps, env=env, codec=codec))


def templates_from_document(document: dict[str, Any]) -> list[CanonicalTemplate]:
    """Read the flat template list of an existing ``Workflow`` document.

    Raises:
        StructuralError: When the document is not a workflow or has no
            ``spec.templates`` list.
    """
    if not isinstance(document, dict) or document.get("kind") != WORKFLOW_KIND:
        raise StructuralError("Fail to parse the workflow. The kind field must be 'Workflow'.")

    templates = (document.get("spec") or {}).get("templates")
    if not isinstance(templates, list):
        raise StructuralError("The required spec.templates field is missing.")

    return [CanonicalTemplate.from_dict(template) for template in templates]


def template_to_experiment(
    template: CanonicalTemplate,
    namespace: str | None = None,
    codec: SpecCodec | None = None,
) -> ParsedExperiment:
    """Turn an experiment (or schedule) template back into an editable model.

    The template deadline becomes the experiment duration again.

    Raises:
        ValueError: When *template* is a control-flow template.
        StructuralError: When the kind-keyed spec is missing or incomplete.
    """
    kind = template.template_type
    if kind in CONTROL_TEMPLATE_TYPES:
        raise ValueError(f"Template '{template.name}' of type {kind} holds no experiment")

    field_name = field_name_for(kind)
    spec = template.fields.get(field_name)
    if not isinstance(spec, dict):
        raise StructuralError(f"Template '{template.name}' is missing its {field_name} field.")

    spec = dict(spec)
    if template.deadline:
        if kind == TemplateType.SCHEDULE:
            inner_name = field_name_for(spec.get("type") or "")
            if isinstance(spec.get(inner_name), dict):
                spec[inner_name] = {**spec[inner_name], "duration": template.deadline}
        else:
            spec["duration"] = template.deadline

    metadata = {"name": template.name}
    if namespace:
        metadata["namespace"] = namespace

    return (codec or SpecCodec()).from_canonical({"kind": kind, "metadata": metadata, "spec": spec})

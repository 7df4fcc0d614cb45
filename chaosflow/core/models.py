"""Core data models for chaosflow workflows and experiments."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Env(Enum):
    """Execution environment an experiment targets."""

    CLUSTER = "k8s"
    HOST = "physic"

    @classmethod
    def parse(cls, value: "Env | str") -> "Env":
        if isinstance(value, cls):
            return value
        return cls.CLUSTER if value == cls.CLUSTER.value else cls.HOST


class StepType(Enum):
    """Node types of the editable workflow tree."""

    SINGLE = "single"
    SERIAL = "serial"
    PARALLEL = "parallel"
    CUSTOM = "custom"
    SUSPEND = "suspend"

    @property
    def is_leaf(self) -> bool:
        return self in (StepType.SINGLE, StepType.SUSPEND)


class TemplateType:
    """Discriminators written to ``templateType`` for non-experiment templates."""

    SERIAL = "Serial"
    PARALLEL = "Parallel"
    TASK = "Task"
    SUSPEND = "Suspend"
    SCHEDULE = "Schedule"


@dataclass
class ExperimentForm:
    """Form-shaped experiment attached to a ``single`` step.

    ``spec`` is the kind-specific field bag exactly as the editor holds it:
    ``"key:value"`` string lists, flat physical-machine action parameters and
    scheduling fields side by side with the experiment fields.
    """

    kind: str
    spec: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    scheduled: bool = False  # Recurring leaf, emitted inside a Schedule wrapper


@dataclass
class CustomTask:
    """Container task with conditional branches (``custom`` steps)."""

    container: dict[str, Any] = field(default_factory=dict)
    conditional_branches: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class Step:
    """Node of the editable workflow tree."""

    name: str
    type: StepType
    deadline: str | None = None
    children: list["Step"] = field(default_factory=list)
    experiment: ExperimentForm | None = None
    custom: CustomTask | None = None

    def __str__(self) -> str:
        return f"{self.type.value}:{self.name}"

    def walk(self):
        """Yield this step and all of its descendants, parents first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class WorkflowBasic:
    """Workflow-level metadata entered next to the step tree."""

    name: str
    namespace: str = ""
    deadline: str = ""


@dataclass
class CanonicalTemplate:
    """One entry of a workflow document's flat ``templates`` array."""

    name: str
    template_type: str
    deadline: str | None = None
    children: list[str] = field(default_factory=list)
    fields: dict[str, Any] = field(default_factory=dict)  # Kind-keyed spec, task, conditionalBranches

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "templateType": self.template_type,
            "deadline": self.deadline,
            "children": list(self.children),
        }
        data.update(self.fields)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CanonicalTemplate":
        known = {"name", "templateType", "deadline", "children"}
        return cls(
            name=data.get("name", ""),
            template_type=data.get("templateType", ""),
            deadline=data.get("deadline"),
            children=list(data.get("children") or []),
            fields={key: value for key, value in data.items() if key not in known},
        )


@dataclass
class FlattenResult:
    """Output of flattening an editable tree."""

    entry_children: list[str] = field(default_factory=list)
    templates: list[CanonicalTemplate] = field(default_factory=list)

    def names(self) -> list[str]:
        return [template.name for template in self.templates]


@dataclass
class ParsedExperiment:
    """Editable model reconstructed from a canonical experiment document."""

    kind: str
    basic: dict[str, Any]
    spec: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "basic": self.basic, "spec": self.spec}

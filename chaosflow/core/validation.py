"""Required-field checks for workflow trees before they are constructed.

These mirror the checks the editor runs on its forms.  They return error
strings instead of raising so callers can show every problem at once.
"""

from collections import Counter
from collections.abc import Sequence

from chaosflow.core.config import ENTRY_TEMPLATE_NAME
from chaosflow.core.models import Step, StepType, WorkflowBasic


def validate_workflow_basic(basic: WorkflowBasic) -> list[str]:
    errors = []
    if not basic.name:
        errors.append("The name is required")
    if not basic.deadline:
        errors.append("The deadline is required")
    return errors


def validate_steps(steps: Sequence[Step]) -> list[str]:
    """Validate every step of the tree.

    Duplicate names are reported here; :class:`~chaosflow.core.workflow.TreeFlattener`
    itself keeps the first definition and drops the rest.  The synthetic
    entry template owns its name, so no step may use it.
    """
    errors: list[str] = []
    all_steps = [node for step in steps for node in step.walk()]

    counts = Counter(node.name for node in all_steps if node.name)
    for name, count in counts.items():
        if count > 1:
            errors.append(f"Step name '{name}' is used {count} times")

    for node in all_steps:
        label = node.name or str(node)
        if not node.name:
            errors.append(f"Step '{label}': the name is required")
        elif node.name == ENTRY_TEMPLATE_NAME:
            errors.append(f"Step '{label}': the name is reserved")

        if node.type.is_leaf and node.children:
            errors.append(f"Step '{label}': {node.type.value} steps cannot have children")

        if node.type in (StepType.SERIAL, StepType.PARALLEL, StepType.SUSPEND) and not node.deadline:
            errors.append(f"Step '{label}': the deadline is required")

        if node.type is StepType.SINGLE:
            errors.extend(_validate_experiment(node, label))

        if node.type is StepType.CUSTOM:
            container = node.custom.container if node.custom else {}
            if not container.get("image"):
                errors.append(f"Step '{label}': the image is required")

    return errors


def _validate_experiment(step: Step, label: str) -> list[str]:
    experiment = step.experiment
    if experiment is None:
        return [f"Step '{label}': an experiment is required"]

    errors = []
    if not experiment.kind:
        errors.append(f"Step '{label}': the experiment kind is required")
    if experiment.scheduled:
        if not experiment.spec.get("schedule"):
            errors.append(f"Step '{label}': the schedule is required")
    elif not experiment.spec.get("duration"):
        errors.append(f"Step '{label}': the duration is required")
    return errors

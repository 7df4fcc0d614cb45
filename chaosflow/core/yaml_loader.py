"""YAML loading for canonical documents and editable workflow trees.

This module provides :class:`WorkflowTreeLoader`, which reads the editor's
step tree from YAML files or dicts, validates its structure and builds
:class:`~chaosflow.core.models.Step` objects, plus small helpers to read and
write canonical documents.

A tree file looks like::

    name: web-show
    namespace: chaos-testing
    deadline: 10m
    steps:
      - name: kill-web
        type: single
        experiment:
          kind: PodChaos
          spec: {action: pod-kill, duration: 30s, selector: {...}}
      - name: pause
        type: suspend
        deadline: 1m
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from chaosflow.core.models import CustomTask, ExperimentForm, Step, StepType, WorkflowBasic
from chaosflow.core.validation import validate_steps, validate_workflow_basic

logger = logging.getLogger(__name__)

#: Values accepted in a step's ``type`` field.
STEP_TYPES = tuple(step_type.value for step_type in StepType)


# ---------------------------------------------------------------------------
# Document helpers
# ---------------------------------------------------------------------------

def load_document(path: str) -> Any:
    """Load a YAML document from *path*.

    Raises:
        FileNotFoundError: When *path* does not exist.
        ValueError: On YAML parse failure.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"YAML document not found: {path}")

    with file_path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse YAML from {path}: {exc}") from exc


def dump_document(document: Any) -> str:
    """Serialize *document* to YAML, keeping key order."""
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True, default_flow_style=False)


def experiment_from_dict(data: Dict[str, Any]) -> ExperimentForm:
    """Build an :class:`ExperimentForm` from ``{kind, metadata, spec, scheduled}``."""
    if not isinstance(data, dict):
        raise ValueError(f"Experiment must be a mapping, got {type(data).__name__}")
    if not data.get("kind"):
        raise ValueError("Missing required field: 'kind'")
    return ExperimentForm(
        kind=data["kind"],
        spec=dict(data.get("spec") or {}),
        metadata=dict(data.get("metadata") or {}),
        scheduled=bool(data.get("scheduled", False)),
    )


# ---------------------------------------------------------------------------
# WorkflowTreeLoader
# ---------------------------------------------------------------------------

class WorkflowTreeLoader:
    """Load and validate editable workflow trees from YAML.

    All public methods are *static*.

    Example usage::

        basic, steps = WorkflowTreeLoader.load("workflow.yaml")

        # Validate without loading
        errors = WorkflowTreeLoader.validate("workflow.yaml")
    """

    @staticmethod
    def load(yaml_path: str, strict: bool = False) -> tuple[WorkflowBasic, List[Step]]:
        """Load a workflow tree from a YAML file.

        When *strict* is ``True`` the required-field checks of
        :func:`~chaosflow.core.validation.validate_steps` are promoted from
        warnings to errors.

        Raises:
            FileNotFoundError: When *yaml_path* does not exist.
            ValueError: On YAML parse failure, schema errors, or (in strict
                mode) validation warnings.
        """
        data = load_document(yaml_path)
        return WorkflowTreeLoader.load_from_dict(data, strict=strict)

    @staticmethod
    def load_from_dict(data: Dict[str, Any], strict: bool = False) -> tuple[WorkflowBasic, List[Step]]:
        """Load a workflow tree from an already-parsed dict."""
        errors = WorkflowTreeLoader._validate_dict(data)
        if errors:
            raise ValueError(
                "Workflow tree schema validation failed:\n"
                + "\n".join(f"  - {e}" for e in errors)
            )

        basic = WorkflowBasic(
            name=str(data.get("name", "")),
            namespace=str(data.get("namespace") or ""),
            deadline=str(data.get("deadline") or ""),
        )
        steps = [WorkflowTreeLoader._build_step(step) for step in data.get("steps") or []]

        warnings = validate_workflow_basic(basic) + validate_steps(steps)
        if strict and warnings:
            raise ValueError(
                "Workflow tree validation warnings (strict mode):\n"
                + "\n".join(f"  - {w}" for w in warnings)
            )
        for w in warnings:
            logger.warning("WorkflowTreeLoader: %s", w)

        return basic, steps

    @staticmethod
    def validate(yaml_path: str) -> List[str]:
        """Validate a YAML file and return a list of error strings."""
        path = Path(yaml_path)
        if not path.exists():
            return [f"File not found: {yaml_path}"]

        with path.open("r", encoding="utf-8") as fh:
            try:
                data = yaml.safe_load(fh)
            except yaml.YAMLError as exc:
                return [f"YAML parse error: {exc}"]

        return WorkflowTreeLoader._validate_dict(data)

    @staticmethod
    def validate_dict(data: Dict[str, Any]) -> List[str]:
        """Validate a workflow tree dict and return a list of error strings."""
        return WorkflowTreeLoader._validate_dict(data)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _build_step(data: Dict[str, Any]) -> Step:
        step_type = StepType(data["type"])

        experiment: Optional[ExperimentForm] = None
        if step_type is StepType.SINGLE:
            experiment = experiment_from_dict(data["experiment"])

        custom: Optional[CustomTask] = None
        if step_type is StepType.CUSTOM:
            custom_data = data.get("custom") or {}
            custom = CustomTask(
                container=dict(custom_data.get("container") or {}),
                conditional_branches=list(custom_data.get("conditionalBranches") or []),
            )

        return Step(
            name=str(data["name"]),
            type=step_type,
            deadline=data.get("deadline"),
            children=[WorkflowTreeLoader._build_step(child) for child in data.get("children") or []],
            experiment=experiment,
            custom=custom,
        )

    @staticmethod
    def _validate_dict(data: Any) -> List[str]:
        errors: List[str] = []

        if not isinstance(data, dict):
            errors.append(f"Workflow tree must be a mapping, got {type(data).__name__}")
            return errors

        if not data.get("name"):
            errors.append("Missing required field: 'name'")

        steps = data.get("steps")
        if steps is None:
            errors.append("Missing required field: 'steps'")
            return errors
        if not isinstance(steps, list):
            errors.append("'steps' must be a list")
            return errors

        for idx, step in enumerate(steps, start=1):
            WorkflowTreeLoader._validate_step(step, f"step_{idx}", errors)

        return errors

    @staticmethod
    def _validate_step(step: Any, fallback_label: str, errors: List[str]) -> None:
        if not isinstance(step, dict):
            errors.append(f"Step '{fallback_label}': must be a mapping, got {type(step).__name__}")
            return

        label = step.get("name") or fallback_label
        if not step.get("name"):
            errors.append(f"Step '{label}': missing required field 'name'")

        step_type = step.get("type")
        if step_type not in STEP_TYPES:
            errors.append(f"Step '{label}': 'type' must be one of {STEP_TYPES}, got {step_type!r}")
            return

        children = step.get("children")
        if children is not None and not isinstance(children, list):
            errors.append(f"Step '{label}': 'children' must be a list, got {type(children).__name__}")
            return

        if StepType(step_type).is_leaf:
            if children:
                errors.append(f"Step '{label}': {step_type} steps cannot have children")
        elif step_type != StepType.CUSTOM.value and children is None:
            errors.append(f"Step '{label}': {step_type} steps require 'children'")

        if step_type == StepType.SINGLE.value:
            experiment = step.get("experiment")
            if not isinstance(experiment, dict):
                errors.append(f"Step '{label}': single steps require an 'experiment' mapping")
            elif not experiment.get("kind"):
                errors.append(f"Step '{label}': 'experiment.kind' is required")
            elif not isinstance(experiment.get("spec") or {}, dict):
                errors.append(f"Step '{label}': 'experiment.spec' must be a mapping")

        if step_type == StepType.CUSTOM.value and not isinstance(step.get("custom") or {}, dict):
            errors.append(f"Step '{label}': 'custom' must be a mapping")

        for idx, child in enumerate(children or [], start=1):
            WorkflowTreeLoader._validate_step(child, f"{label}.{idx}", errors)

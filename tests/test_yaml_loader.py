"""Tests for WorkflowTreeLoader - YAML step trees with schema validation."""
import pytest
import yaml

from chaosflow.core.models import StepType
from chaosflow.core.yaml_loader import (
    WorkflowTreeLoader,
    dump_document,
    experiment_from_dict,
    load_document,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _minimal_dict(**overrides):
    """Return a minimal valid workflow tree dict."""
    base = {
        "name": "wf",
        "namespace": "chaos",
        "deadline": "10m",
        "steps": [
            {
                "name": "group",
                "type": "serial",
                "deadline": "5m",
                "children": [
                    {
                        "name": "kill",
                        "type": "single",
                        "experiment": {
                            "kind": "PodChaos",
                            "spec": {"action": "pod-kill", "duration": "30s", "selector": {"namespaces": ["a"]}},
                        },
                    },
                    {"name": "wait", "type": "suspend", "deadline": "1m"},
                ],
            },
            {
                "name": "task",
                "type": "custom",
                "custom": {
                    "container": {"name": "c", "image": "busybox"},
                    "conditionalBranches": [{"target": "wait", "expression": "true"}],
                },
                "children": [],
            },
        ],
    }
    base.update(overrides)
    return base


# ---------------------------------------------------------------------------
# load_from_dict
# ---------------------------------------------------------------------------

class TestLoadFromDict:
    def test_builds_tree(self):
        basic, steps = WorkflowTreeLoader.load_from_dict(_minimal_dict())
        assert basic.name == "wf"
        assert basic.namespace == "chaos"
        assert basic.deadline == "10m"

        group, task = steps
        assert group.type is StepType.SERIAL
        assert [child.name for child in group.children] == ["kill", "wait"]
        assert group.children[0].experiment.kind == "PodChaos"
        assert group.children[0].experiment.spec["duration"] == "30s"
        assert group.children[1].type is StepType.SUSPEND

        assert task.custom.container["image"] == "busybox"
        assert task.custom.conditional_branches == [{"target": "wait", "expression": "true"}]

    def test_scheduled_flag(self):
        data = _minimal_dict()
        experiment = data["steps"][0]["children"][0]["experiment"]
        experiment["scheduled"] = True
        experiment["spec"]["schedule"] = "@hourly"
        _, steps = WorkflowTreeLoader.load_from_dict(data)
        assert steps[0].children[0].experiment.scheduled is True

    def test_schema_errors_raise(self):
        data = _minimal_dict(steps=[{"name": "x", "type": "loop"}])
        with pytest.raises(ValueError, match="schema validation failed"):
            WorkflowTreeLoader.load_from_dict(data)

    def test_warnings_logged(self, caplog):
        data = _minimal_dict()
        del data["steps"][0]["deadline"]
        WorkflowTreeLoader.load_from_dict(data)
        assert "Step 'group': the deadline is required" in caplog.text

    def test_strict_promotes_warnings(self):
        data = _minimal_dict()
        del data["steps"][0]["deadline"]
        with pytest.raises(ValueError, match="strict mode"):
            WorkflowTreeLoader.load_from_dict(data, strict=True)


# ---------------------------------------------------------------------------
# validate_dict - error cases
# ---------------------------------------------------------------------------

class TestValidateDict:
    def test_valid_tree(self):
        assert WorkflowTreeLoader.validate_dict(_minimal_dict()) == []

    def test_not_a_mapping(self):
        errors = WorkflowTreeLoader.validate_dict(["steps"])
        assert errors == ["Workflow tree must be a mapping, got list"]

    def test_missing_name_and_steps(self):
        errors = WorkflowTreeLoader.validate_dict({})
        assert errors == ["Missing required field: 'name'", "Missing required field: 'steps'"]

    def test_unknown_type(self):
        errors = WorkflowTreeLoader.validate_dict(_minimal_dict(steps=[{"name": "x", "type": "loop"}]))
        assert len(errors) == 1
        assert "'type' must be one of" in errors[0]

    def test_leaf_with_children(self):
        steps = [{"name": "s", "type": "suspend", "children": [{"name": "t", "type": "suspend"}]}]
        errors = WorkflowTreeLoader.validate_dict(_minimal_dict(steps=steps))
        assert errors == ["Step 's': suspend steps cannot have children"]

    def test_group_requires_children(self):
        errors = WorkflowTreeLoader.validate_dict(_minimal_dict(steps=[{"name": "g", "type": "parallel"}]))
        assert errors == ["Step 'g': parallel steps require 'children'"]

    def test_single_requires_experiment_kind(self):
        steps = [{"name": "a", "type": "single", "experiment": {"spec": {}}}]
        errors = WorkflowTreeLoader.validate_dict(_minimal_dict(steps=steps))
        assert errors == ["Step 'a': 'experiment.kind' is required"]

    def test_nested_errors_use_parent_label(self):
        steps = [{"name": "g", "type": "serial", "children": ["oops"]}]
        errors = WorkflowTreeLoader.validate_dict(_minimal_dict(steps=steps))
        assert errors == ["Step 'g.1': must be a mapping, got str"]


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------

class TestFiles:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "tree.yaml"
        path.write_text(yaml.safe_dump(_minimal_dict()))
        basic, steps = WorkflowTreeLoader.load(str(path))
        assert basic.name == "wf"
        assert len(steps) == 2

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            WorkflowTreeLoader.load(str(tmp_path / "missing.yaml"))

    def test_validate_missing_file(self, tmp_path):
        path = tmp_path / "missing.yaml"
        assert WorkflowTreeLoader.validate(str(path)) == [f"File not found: {path}"]

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("steps: [unclosed")
        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_document(str(path))
        assert WorkflowTreeLoader.validate(str(path))[0].startswith("YAML parse error")

    def test_dump_keeps_key_order(self):
        text = dump_document({"apiVersion": "v1", "kind": "Workflow", "metadata": {"name": "wf"}})
        assert text.splitlines()[0] == "apiVersion: v1"
        assert text.splitlines()[1] == "kind: Workflow"


def test_experiment_from_dict():
    experiment = experiment_from_dict({"kind": "IOChaos", "metadata": {"name": "io"}, "spec": {"action": "fault"}})
    assert experiment.kind == "IOChaos"
    assert experiment.metadata == {"name": "io"}
    assert experiment.scheduled is False

    with pytest.raises(ValueError, match="'kind'"):
        experiment_from_dict({"spec": {}})

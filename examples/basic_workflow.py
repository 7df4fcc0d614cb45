"""
Basic Workflow Example - builds a Chaos Mesh workflow from an editable tree.

This example shows:
1. Describing a serial group with an experiment and a suspend step
2. Flattening it into a canonical Workflow document
3. Reading an experiment template back into form fields
"""
from chaosflow.core.models import ExperimentForm, Step, StepType, WorkflowBasic
from chaosflow.core.workflow import construct_workflow, template_to_experiment, templates_from_document
from chaosflow.core.yaml_loader import dump_document


def main():
    """Build and print a small workflow."""
    kill = Step(
        name="kill-nginx",
        type=StepType.SINGLE,
        experiment=ExperimentForm(
            kind="PodChaos",
            spec={
                "action": "pod-kill",
                "duration": "30s",
                "mode": "one",
                "selector": {"namespaces": ["default"], "labelSelectors": ["app:nginx"]},
            },
        ),
    )
    pause = Step(name="wait", type=StepType.SUSPEND, deadline="1m")
    group = Step(name="kill-and-wait", type=StepType.SERIAL, deadline="5m", children=[kill, pause])

    document = construct_workflow(WorkflowBasic(name="nginx-drill", namespace="default", deadline="10m"), [group])
    print(dump_document(document))

    for template in templates_from_document(document):
        if template.name == "kill-nginx":
            print(template_to_experiment(template, namespace="default").to_dict())


if __name__ == "__main__":
    main()

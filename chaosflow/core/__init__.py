"""Core codec components."""

from chaosflow.core.errors import StructuralError
from chaosflow.core.field_names import field_name_for
from chaosflow.core.kv_codec import KeyValueCodec
from chaosflow.core.models import (
    CanonicalTemplate,
    CustomTask,
    Env,
    ExperimentForm,
    FlattenResult,
    ParsedExperiment,
    Step,
    StepType,
    TemplateType,
    WorkflowBasic,
)
from chaosflow.core.sanitize import drop_none, prune_empty
from chaosflow.core.spec_codec import SCHEDULE_FIELDS, SpecCodec
from chaosflow.core.validation import validate_steps, validate_workflow_basic
from chaosflow.core.workflow import (
    TreeFlattener,
    construct_workflow,
    dump_workflow,
    template_to_experiment,
    templates_from_document,
)
from chaosflow.core.yaml_loader import WorkflowTreeLoader, dump_document, load_document

__all__ = [
    # Codec
    "SpecCodec",
    "SCHEDULE_FIELDS",
    "KeyValueCodec",
    "field_name_for",
    # Workflow
    "TreeFlattener",
    "construct_workflow",
    "dump_workflow",
    "templates_from_document",
    "template_to_experiment",
    # Validation
    "validate_steps",
    "validate_workflow_basic",
    # YAML
    "WorkflowTreeLoader",
    "load_document",
    "dump_document",
    # Sanitizing
    "prune_empty",
    "drop_none",
    # Errors
    "StructuralError",
    # Models
    "CanonicalTemplate",
    "CustomTask",
    "Env",
    "ExperimentForm",
    "FlattenResult",
    "ParsedExperiment",
    "Step",
    "StepType",
    "TemplateType",
    "WorkflowBasic",
]

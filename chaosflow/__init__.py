"""
chaosflow - Chaos Mesh workflow and experiment specification codec.

Converts between the editor's step tree / form fields and the canonical
Chaos Mesh custom-resource documents, in both directions.

Licensed under Apache 2.0
"""

__version__ = "0.1.0"

from chaosflow.core.errors import StructuralError
from chaosflow.core.kinds import KindHandler, KindRegistrationError, KindRegistry
from chaosflow.core.models import (
    CanonicalTemplate,
    CustomTask,
    Env,
    ExperimentForm,
    ParsedExperiment,
    Step,
    StepType,
    WorkflowBasic,
)
from chaosflow.core.spec_codec import SpecCodec
from chaosflow.core.workflow import TreeFlattener, construct_workflow, dump_workflow

__all__ = [
    # Version
    "__version__",
    # Core
    "SpecCodec",
    "TreeFlattener",
    "construct_workflow",
    "dump_workflow",
    # Kinds
    "KindHandler",
    "KindRegistry",
    "KindRegistrationError",
    # Models
    "CanonicalTemplate",
    "CustomTask",
    "Env",
    "ExperimentForm",
    "ParsedExperiment",
    "Step",
    "StepType",
    "WorkflowBasic",
    # Errors
    "StructuralError",
]

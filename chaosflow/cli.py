"""Command-line entry point for converting workflow and experiment documents."""

import argparse
import json
import logging
import sys

from chaosflow.core.config import DEFAULT_ENV
from chaosflow.core.errors import StructuralError
from chaosflow.core.spec_codec import SpecCodec
from chaosflow.core.workflow import dump_workflow, templates_from_document
from chaosflow.core.yaml_loader import (
    WorkflowTreeLoader,
    dump_document,
    experiment_from_dict,
    load_document,
)

logger = logging.getLogger(__name__)


def _construct(args) -> str:
    basic, steps = WorkflowTreeLoader.load(args.file, strict=args.strict)
    return dump_workflow(basic, steps, env=args.env)


def _templates(args) -> str:
    templates = templates_from_document(load_document(args.file))
    return dump_document([template.to_dict() for template in templates])


def _submit(args) -> str:
    experiment = experiment_from_dict(load_document(args.file))
    in_schedule = True if args.schedule else None
    return dump_document(SpecCodec().to_canonical(experiment, env=args.env, in_schedule=in_schedule))


def _parse(args) -> str:
    parsed = SpecCodec().from_canonical(load_document(args.file))
    if args.json:
        return json.dumps(parsed.to_dict(), indent=2)
    return dump_document(parsed.to_dict())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chaosflow", description="Chaos Mesh workflow codec")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # Workflow
    workflow_parser = subparsers.add_parser("workflow", help="Workflow documents")
    workflow_sub = workflow_parser.add_subparsers(dest="subcommand")

    construct_parser = workflow_sub.add_parser("construct", help="Convert a step tree to a Workflow document")
    construct_parser.add_argument("file", help="YAML step tree")
    construct_parser.add_argument("--env", default=DEFAULT_ENV, choices=["k8s", "physic"])
    construct_parser.add_argument("--strict", action="store_true", help="Fail on validation warnings")
    construct_parser.set_defaults(handler=_construct)

    templates_parser = workflow_sub.add_parser("templates", help="List the templates of a Workflow document")
    templates_parser.add_argument("file", help="Workflow YAML document")
    templates_parser.set_defaults(handler=_templates)

    # Experiment
    experiment_parser = subparsers.add_parser("experiment", help="Single experiment documents")
    experiment_sub = experiment_parser.add_subparsers(dest="subcommand")

    submit_parser = experiment_sub.add_parser("submit", help="Convert form fields to a canonical document")
    submit_parser.add_argument("file", help="YAML experiment form {kind, metadata, spec}")
    submit_parser.add_argument("--env", default=DEFAULT_ENV, choices=["k8s", "physic"])
    submit_parser.add_argument("--schedule", action="store_true", help="Wrap the experiment in a Schedule")
    submit_parser.set_defaults(handler=_submit)

    parse_parser = experiment_sub.add_parser("parse", help="Convert a canonical document to form fields")
    parse_parser.add_argument("file", help="Experiment or Schedule YAML document")
    parse_parser.add_argument("--json", action="store_true", help="Print JSON instead of YAML")
    parse_parser.set_defaults(handler=_parse)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0

    try:
        print(handler(args))
    except (StructuralError, ValueError, FileNotFoundError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

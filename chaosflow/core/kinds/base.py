"""Per-kind handler protocol for the spec codec."""

from typing import Any

#: Fields carried in the basic skeleton rather than the kind-specific spec.
BASIC_SPEC_FIELDS = ("selector", "mode", "value", "duration")


class KindHandler:
    """Form ⇄ canonical reshaping for one experiment kind.

    Handlers receive a spec that already went through the generic selector
    pass and must return a new mapping rather than mutate their argument.
    The base class is the pass-through used for kinds without special cases.
    """

    #: Kinds with ``cluster_scoped = True`` must carry ``spec.selector``.
    cluster_scoped = True

    def __init__(self, kind: str):
        self.kind = kind

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind!r})"

    def to_canonical(self, spec: dict[str, Any]) -> dict[str, Any]:
        return dict(spec)

    def from_canonical(self, spec: dict[str, Any]) -> dict[str, Any]:
        return {key: value for key, value in spec.items() if key not in BASIC_SPEC_FIELDS}

    def display_kind(self, spec: dict[str, Any]) -> str:
        """Kind shown in the editor for a canonical *spec* of this kind."""
        return self.kind

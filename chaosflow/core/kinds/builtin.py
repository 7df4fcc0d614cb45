"""Handlers for the cluster experiment kinds with irregular field layouts."""

from typing import Any

from chaosflow.core.kinds.base import KindHandler
from chaosflow.core.kv_codec import ATTRS, HEADERS, SELECTORS
from chaosflow.core.selectors import decode_selector, encode_selector


class NetworkChaosHandler(KindHandler):
    """Encodes the ``target`` selector the same way as the main selector."""

    def __init__(self, kind: str = "NetworkChaos"):
        super().__init__(kind)

    def to_canonical(self, spec):
        encoded = dict(spec)
        if not encoded.get("externalTargets"):
            encoded.pop("externalTargets", None)

        target = encoded.pop("target", None)
        # A target without a mode is an untouched form panel, not a real target.
        if target and target.get("mode"):
            encoded["target"] = {**target, "selector": encode_selector(target.get("selector"))}
        return encoded

    def from_canonical(self, spec):
        decoded = dict(spec)
        target = decoded.get("target")
        if target:
            # The target panel starts with no phase filter.
            decoded["target"] = {**target, "selector": decode_selector(target.get("selector"), default_phases=())}
        return super().from_canonical(decoded)


class IOChaosHandler(KindHandler):
    """``attrOverride`` attributes are an integer-valued mapping."""

    def __init__(self, kind: str = "IOChaos"):
        super().__init__(kind)

    def to_canonical(self, spec):
        encoded = dict(spec)
        if encoded.get("action") == "attrOverride":
            encoded["attr"] = ATTRS.encode(encoded.get("attr"))
        return encoded

    def from_canonical(self, spec):
        decoded = dict(spec)
        if decoded.get("attr"):
            decoded["attr"] = ATTRS.decode(decoded["attr"])
        return super().from_canonical(decoded)


class HTTPChaosHandler(KindHandler):
    """Headers and queries of the request, response, replace and patch blocks.

    Patch headers and queries are ordered ``[key, value]`` pairs since a patch
    may append the same name several times.
    """

    def __init__(self, kind: str = "HTTPChaos"):
        super().__init__(kind)

    def to_canonical(self, spec):
        encoded = dict(spec)
        encoded["request_headers"] = HEADERS.encode(encoded.get("request_headers"))
        if encoded.get("response_headers"):
            encoded["response_headers"] = HEADERS.encode(encoded["response_headers"])

        replace = encoded.get("replace")
        if replace:
            replace = dict(replace)
            if replace.get("headers"):
                replace["headers"] = HEADERS.encode(replace["headers"])
            if replace.get("queries"):
                replace["queries"] = SELECTORS.encode(replace["queries"])
            encoded["replace"] = replace

        patch = encoded.get("patch")
        if patch:
            patch = dict(patch)
            if patch.get("headers"):
                patch["headers"] = HEADERS.encode_pairs(patch["headers"])
            if patch.get("queries"):
                patch["queries"] = SELECTORS.encode_pairs(patch["queries"])
            encoded["patch"] = patch

        return encoded

    def from_canonical(self, spec):
        decoded = dict(spec)
        decoded["request_headers"] = HEADERS.decode(decoded.get("request_headers"))
        if isinstance(decoded.get("response_headers"), dict):
            decoded["response_headers"] = HEADERS.decode(decoded["response_headers"])

        replace = decoded.get("replace")
        if replace:
            decoded["replace"] = {
                **replace,
                "headers": HEADERS.decode(replace.get("headers")),
                "queries": SELECTORS.decode(replace.get("queries")),
            }

        patch = decoded.get("patch")
        if patch:
            decoded["patch"] = {
                **patch,
                "headers": HEADERS.decode_pairs(patch.get("headers")),
                "queries": SELECTORS.decode_pairs(patch.get("queries")),
            }

        return super().from_canonical(decoded)


class KernelChaosHandler(KindHandler):
    """Callchain frames always expose ``parameters`` and ``predicate`` to the form."""

    def __init__(self, kind: str = "KernelChaos"):
        super().__init__(kind)

    def from_canonical(self, spec):
        decoded = dict(spec)
        request = decoded.get("failKernRequest")
        if request:
            frames = [
                {**frame, "parameters": frame.get("parameters") or "", "predicate": frame.get("predicate") or ""}
                for frame in request.get("callchain") or []
            ]
            decoded["failKernRequest"] = {**request, "callchain": frames}
        return super().from_canonical(decoded)


#: Stressor panels the form always renders, with their empty values.
STRESSOR_DEFAULTS: dict[str, dict[str, Any]] = {
    "cpu": {"workers": 0, "load": 0, "options": []},
    "memory": {"workers": 0, "options": []},
}


class StressChaosHandler(KindHandler):
    """Stressor panels are defaulted on parse and dropped on emit when untouched.

    A panel counts as untouched only when every value is empty or zero, so a
    stressor with ``workers: 0`` and a load is still sent.
    """

    def __init__(self, kind: str = "StressChaos"):
        super().__init__(kind)

    def to_canonical(self, spec):
        encoded = dict(spec)
        stressors = encoded.get("stressors")
        if stressors:
            encoded["stressors"] = {
                name: dict(stressor)
                for name, stressor in stressors.items()
                if name not in STRESSOR_DEFAULTS or any((stressor or {}).values())
            }
        return encoded

    def from_canonical(self, spec):
        decoded = dict(spec)
        stressors = dict(decoded.get("stressors") or {})
        for name, defaults in STRESSOR_DEFAULTS.items():
            stressors[name] = {**defaults, **(stressors.get(name) or {})}
        decoded["stressors"] = stressors
        return super().from_canonical(decoded)


__all__ = [
    "HTTPChaosHandler",
    "IOChaosHandler",
    "KernelChaosHandler",
    "NetworkChaosHandler",
    "StressChaosHandler",
    "STRESSOR_DEFAULTS",
]

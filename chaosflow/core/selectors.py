"""Encoding of experiment selectors between form and canonical shape."""

from typing import Any

from chaosflow.core.kv_codec import SELECTORS, explode_pods, group_pods

#: Selector as the form renders it before anything is filled in.
BASIC_SELECTOR: dict[str, Any] = {
    "namespaces": [],
    "labelSelectors": [],
    "annotationSelectors": [],
    "podPhaseSelectors": ["all"],
    "pods": [],
}


def encode_selector(selector: dict[str, Any] | None) -> dict[str, Any]:
    """Return the canonical form of a form-shaped selector.

    Empty label/annotation lists and empty pod lists are omitted, and a phase
    filter of exactly ``["all"]`` is dropped because it means "no restriction".
    """
    encoded = dict(selector or {})

    for key in ("labelSelectors", "annotationSelectors"):
        if encoded.get(key):
            encoded[key] = SELECTORS.encode(encoded[key])
        else:
            encoded.pop(key, None)

    if encoded.get("podPhaseSelectors") == ["all"]:
        encoded.pop("podPhaseSelectors")

    if encoded.get("pods"):
        encoded["pods"] = group_pods(encoded["pods"])
    else:
        encoded.pop("pods", None)

    return encoded


def decode_selector(selector: dict[str, Any] | None, default_phases: tuple[str, ...] = ("all",)) -> dict[str, Any]:
    """Return the form shape of a canonical selector, filling form defaults.

    *default_phases* fills ``podPhaseSelectors`` when the document has none.
    """
    source = selector or {}
    decoded = {**BASIC_SELECTOR, **source}
    decoded["namespaces"] = list(source.get("namespaces") or [])
    decoded["labelSelectors"] = SELECTORS.decode(source.get("labelSelectors"))
    decoded["annotationSelectors"] = SELECTORS.decode(source.get("annotationSelectors"))
    decoded["podPhaseSelectors"] = list(source.get("podPhaseSelectors") or default_phases)
    decoded["pods"] = explode_pods(source.get("pods"))
    return decoded

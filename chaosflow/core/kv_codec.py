"""Two-way codec between ``"key:value"`` string lists and mappings.

Form fields such as labels, selectors, IO attributes and HTTP headers are
edited as repeatable text inputs holding ``"key:value"`` strings, while the
canonical document stores them as mappings (or, for patch headers and
queries, as ordered ``[key, value]`` pairs).  A single :class:`KeyValueCodec`
covers all of them; the instances at the bottom of the module are the
variants the codec actually uses.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def split_entry(entry: str) -> tuple[str, str | None]:
    """Split *entry* on its first ``:``.

    An entry without a separator, or with nothing after it, is returned whole
    as the key with a ``None`` value.
    """
    key, sep, value = entry.partition(":")
    if not sep or not value:
        return entry, None
    return key, value


@dataclass(frozen=True)
class KeyValueCodec:
    """Parametrized ``"key:value"`` ⇄ mapping codec.

    Attributes:
        join_with: Separator written between key and value when decoding a
            mapping back into strings.
        squeeze: When ``True`` all whitespace is removed before splitting
            (selectors, labels, queries).  When ``False`` only the key and the
            value are trimmed (HTTP headers, whose values may hold spaces).
        parse_value: Optional converter applied to each encoded value.
    """

    join_with: str = ":"
    squeeze: bool = True
    parse_value: Callable[[str], Any] | None = None

    def split(self, entry: str) -> tuple[str, Any]:
        text = _WHITESPACE.sub("", entry) if self.squeeze else entry
        key, value = split_entry(text)
        if value is None:
            logger.warning("Entry %r has no 'key:value' separator; value left empty", entry)
            return key.strip(), None
        if not self.squeeze:
            key, value = key.strip(), value.strip()
        if self.parse_value is not None:
            value = self.parse_value(value)
        return key, value

    def encode(self, entries: Iterable[str] | None) -> dict[str, Any]:
        """Encode a list of ``"key:value"`` strings into a mapping.

        Later entries win on duplicate keys.
        """
        encoded: dict[str, Any] = {}
        for entry in entries or []:
            key, value = self.split(entry)
            encoded[key] = value
        return encoded

    def encode_pairs(self, entries: Iterable[str] | None) -> list[list[Any]]:
        """Encode into ordered ``[key, value]`` pairs, keeping duplicates."""
        pairs: list[list[Any]] = []
        for entry in entries or []:
            key, value = self.split(entry)
            pairs.append([key] if value is None else [key, value])
        return pairs

    def decode(self, mapping: Mapping[str, Any] | None) -> list[str]:
        return [f"{key}{self.join_with}{value}" for key, value in (mapping or {}).items()]

    def decode_pairs(self, pairs: Iterable[Iterable[Any]] | None) -> list[str]:
        decoded = []
        for pair in pairs or []:
            key, *rest = list(pair)
            decoded.append(f"{key}{self.join_with}{rest[0]}" if rest else str(key))
        return decoded


def parse_int_lenient(value: str) -> Any:
    """Parse *value* as an integer, passing it through unchanged on failure."""
    try:
        return int(value, 10)
    except ValueError:
        logger.warning("Value %r is not an integer; passing it through unparsed", value)
        return value


def group_pods(entries: Iterable[str] | None) -> dict[str, list[str]]:
    """Group ``"namespace:pod"`` strings into ``{namespace: [pod, ...]}``."""
    grouped: dict[str, list[str]] = {}
    for entry in entries or []:
        namespace, _, name = entry.partition(":")
        grouped.setdefault(namespace.strip(), []).append(name.strip())
    return grouped


def explode_pods(grouped: Mapping[str, Iterable[str]] | None) -> list[str]:
    """Inverse of :func:`group_pods`, producing ``"namespace: pod"`` strings."""
    return [f"{namespace}: {pod}" for namespace, pods in (grouped or {}).items() for pod in pods]


#: metadata.labels / metadata.annotations.
METADATA = KeyValueCodec(join_with=":")

#: selector.labelSelectors / selector.annotationSelectors and HTTP queries.
SELECTORS = KeyValueCodec(join_with=": ")

#: HTTP headers keep inner whitespace in values.
HEADERS = KeyValueCodec(join_with=": ", squeeze=False)

#: IOChaos attrOverride attributes carry integer values.
ATTRS = KeyValueCodec(join_with=":", parse_value=parse_int_lenient)

"""
src/analytics/causality.py
──────────────────────────
Causal chain resolution for operator root-cause guidance.

Provides:
  - CausalityStore     : owns one CausalityGraph (default, imported or reset)
  - find_causal_chain(): upstream causes of a tag, cycle-safe
  - is_critical_link() : whether the cause side of a link is itself abnormal

Traversal rule: a tag is expanded at most once per call. The edges leading
into it are still recorded when it is reached, but anything upstream of a
tag that was already expanded through another path is not repeated. On a
diamond-shaped graph only the first-discovered path is expanded.
"""
from __future__ import annotations

import logging
from typing import Iterable, Protocol

from pydantic import ValidationError

from config.causality import DEFAULT_CAUSAL_LINKS, DEFAULT_GRAPH_VERSION
from config.settings import settings
from src.analytics.thresholds import is_abnormal
from src.data.models import CausalityGraph, CausalLink, TagData

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    """Durable string store the override graph is persisted to."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryKeyValue:
    """Dict-backed KeyValueBackend, for tests and throwaway stores."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


def default_graph() -> CausalityGraph:
    return CausalityGraph.model_validate({"version": DEFAULT_GRAPH_VERSION, "links": DEFAULT_CAUSAL_LINKS})


def parse_graph(config: CausalityGraph | dict | str) -> CausalityGraph:
    """
    Coerce an imported configuration into a CausalityGraph.

    Raises:
        ValueError: malformed JSON or a payload that does not describe a graph
            (pydantic.ValidationError is a ValueError subclass).
    """
    if isinstance(config, CausalityGraph):
        return config.model_copy(deep=True)
    if isinstance(config, str):
        return CausalityGraph.model_validate_json(config)
    return CausalityGraph.model_validate(config)


class CausalityStore:
    """
    Holder of the active causality graph.

    On construction the persisted override under `storage_key` is loaded;
    a missing or unreadable override leaves the default graph in place.
    """

    def __init__(
        self,
        backend: KeyValueBackend | None = None,
        storage_key: str = settings.CAUSALITY_STORAGE_KEY,
    ) -> None:
        self._backend: KeyValueBackend = backend if backend is not None else MemoryKeyValue()
        self._key = storage_key
        self._graph = self._load()

    def _load(self) -> CausalityGraph:
        stored = self._backend.get(self._key)
        if stored is None:
            return default_graph()
        try:
            return CausalityGraph.model_validate_json(stored)
        except ValidationError as exc:
            logger.warning("Ignoring unreadable causality override %r: %s", self._key, exc)
            return default_graph()

    @property
    def graph(self) -> CausalityGraph:
        return self._graph

    def import_graph(self, config: CausalityGraph | dict | str) -> CausalityGraph:
        """Replace the active graph wholesale and persist it."""
        graph = parse_graph(config)
        self._graph = graph
        self._backend.set(self._key, graph.model_dump_json(by_alias=True, exclude_none=True))
        logger.info("Imported causality graph v%s (%d links)", graph.version, len(graph.links))
        return graph

    def export_graph(self) -> CausalityGraph:
        return self._graph.model_copy(deep=True)

    def reset(self) -> None:
        """Back to the built-in graph; the persisted override is removed."""
        self._graph = default_graph()
        self._backend.delete(self._key)
        logger.info("Causality graph reset to default v%s", self._graph.version)

    def find_causal_chain(self, target_id: str) -> list[CausalLink]:
        return find_causal_chain(target_id, self._graph)


# ── Traversal ─────────────────────────────────────────────────────────────────


def _direct_causes(links: list[CausalLink], target_id: str) -> list[CausalLink]:
    return [link for link in links if link.to == target_id]


def find_causal_chain(
    target_id: str,
    graph: CausalityGraph,
    visited: set[str] | None = None,
) -> list[CausalLink]:
    """
    Collect every link upstream of `target_id`, depth first.

    The output order is: direct causes of the target, then for each of them
    (in graph order) its own chain. `visited` is shared across the whole walk
    and may be passed in to continue a previous traversal. Unknown targets
    give an empty list.
    """
    visited = set() if visited is None else visited
    if target_id in visited:
        return []
    visited.add(target_id)

    links = graph.links
    direct = _direct_causes(links, target_id)
    chain = list(direct)
    stack = [iter(direct)]

    while stack:
        link = next(stack[-1], None)
        if link is None:
            stack.pop()
            continue
        if link.from_ in visited:
            continue
        visited.add(link.from_)
        causes = _direct_causes(links, link.from_)
        chain.extend(causes)
        stack.append(iter(causes))

    return chain


def upstream_tag_ids(chain: Iterable[CausalLink]) -> list[str]:
    """Cause tags of a chain, first occurrence order, no duplicates."""
    return list(dict.fromkeys(link.from_ for link in chain))


def is_critical_link(link: CausalLink, tags: Iterable[TagData]) -> bool:
    """True when the cause tag is currently in warning or alarm."""
    cause = next((t for t in tags if t.id == link.from_), None)
    return cause is not None and is_abnormal(cause.status)

"""
src/analytics/fault_tree.py
───────────────────────────
Fault tree and bow-tie lookups for the causality page.

Provides:
  - FaultTreeLibrary        : the active fault trees (presets, replaceable, resettable)
  - fault_tree_tag_ids()    : every tag a tree mentions, top event first
  - fault_tree_chain()      : upstream causes of the top event inside one tree
  - get_bowties_for_area() / get_bowtie()
  - bowtie_columns()        : events grouped threat → consequence, top to bottom
  - abnormal_tag_ids()      : which of a set of tags is in warning or alarm
"""
from __future__ import annotations

import logging
from typing import Iterable

from config.fault_trees import BOWTIE_COLUMNS, DEFAULT_BOWTIES, DEFAULT_FAULT_TREES, BowTieEventType
from src.analytics.causality import find_causal_chain
from src.analytics.thresholds import is_abnormal
from src.data.models import BowTie, BowTieEvent, CausalityGraph, CausalLink, FaultTree, TagData

logger = logging.getLogger(__name__)


def default_fault_trees() -> list[FaultTree]:
    return [FaultTree.model_validate(tree) for tree in DEFAULT_FAULT_TREES]


def default_bowties() -> list[BowTie]:
    return [BowTie.model_validate(bowtie) for bowtie in DEFAULT_BOWTIES]


class FaultTreeLibrary:
    """
    Holder of the active fault trees, in insertion order.

    save() replaces a tree with the same id in place or appends a new one;
    reset() drops every change and goes back to the presets.
    """

    def __init__(self, trees: Iterable[FaultTree] | None = None) -> None:
        self._trees: list[FaultTree] = list(trees) if trees is not None else default_fault_trees()

    @property
    def trees(self) -> list[FaultTree]:
        return list(self._trees)

    def for_area(self, area_id: str) -> list[FaultTree]:
        return [tree for tree in self._trees if tree.area_id == area_id]

    def get(self, tree_id: str) -> FaultTree | None:
        return next((tree for tree in self._trees if tree.id == tree_id), None)

    def save(self, tree: FaultTree | dict) -> FaultTree:
        tree = FaultTree.model_validate(tree) if isinstance(tree, dict) else tree
        for i, existing in enumerate(self._trees):
            if existing.id == tree.id:
                self._trees[i] = tree
                logger.info("Replaced fault tree %s (%d links)", tree.id, len(tree.links))
                return tree
        self._trees.append(tree)
        logger.info("Added fault tree %s (%d links)", tree.id, len(tree.links))
        return tree

    def reset(self) -> None:
        self._trees = default_fault_trees()
        logger.info("Fault trees reset to %d presets", len(self._trees))


def fault_tree_tag_ids(tree: FaultTree) -> list[str]:
    """Top event, then every cause and effect in link order, no duplicates."""
    ids = [tree.top_event_tag_id]
    for link in tree.links:
        ids.extend((link.from_, link.to))
    return list(dict.fromkeys(ids))


def fault_tree_chain(tree: FaultTree) -> list[CausalLink]:
    """Links leading into the top event, with the same traversal as alarm root causes."""
    return find_causal_chain(tree.top_event_tag_id, CausalityGraph(links=tree.links))


# ── Bow-ties ──────────────────────────────────────────────────────────────────

_BOWTIES: list[BowTie] = default_bowties()


def get_bowties_for_area(area_id: str, bowties: Iterable[BowTie] | None = None) -> list[BowTie]:
    return [b for b in (_BOWTIES if bowties is None else bowties) if b.area_id == area_id]


def get_bowtie(bowtie_id: str, bowties: Iterable[BowTie] | None = None) -> BowTie | None:
    return next((b for b in (_BOWTIES if bowties is None else bowties) if b.id == bowtie_id), None)


def all_bowties() -> list[BowTie]:
    return list(_BOWTIES)


def bowtie_columns(bowtie: BowTie) -> dict[BowTieEventType, list[BowTieEvent]]:
    """Events per diagram column, left to right, each column sorted top to bottom."""
    columns: dict[BowTieEventType, list[BowTieEvent]] = {t: [] for t in BOWTIE_COLUMNS}
    for event in sorted(bowtie.events, key=lambda e: e.position.y):
        columns[event.type].append(event)
    return columns


def bowtie_tag_ids(bowtie: BowTie) -> list[str]:
    return list(dict.fromkeys(e.tag_id for e in bowtie.events if e.tag_id))


def abnormal_tag_ids(tag_ids: Iterable[str], tags: Iterable[TagData]) -> set[str]:
    """The subset of `tag_ids` currently in warning or alarm. Unknown ids are ignored."""
    wanted = set(tag_ids)
    return {t.id for t in tags if t.id in wanted and is_abnormal(t.status)}

"""
tests/test_causality.py
────────────────────────
Tests for causal chain traversal and the causality graph store.
"""
import json

import pytest

from src.analytics.causality import (
    CausalityStore,
    MemoryKeyValue,
    default_graph,
    find_causal_chain,
    is_critical_link,
    parse_graph,
    upstream_tag_ids,
)
from src.data.models import CausalityGraph, CausalLink


def _graph(*edges: tuple[str, str]) -> CausalityGraph:
    return CausalityGraph(links=[CausalLink(from_=a, to=b) for a, b in edges])


def _pairs(chain: list[CausalLink]) -> list[tuple[str, str]]:
    return [(link.from_, link.to) for link in chain]


class TestFindCausalChain:
    def test_default_reactor_temperature_chain(self):
        chain = find_causal_chain("TI-101", default_graph())
        assert _pairs(chain) == [("FI-101", "TI-101"), ("TI-201", "TI-101")]
        assert [link.contribution for link in chain] == [65, 30]

    def test_unknown_target(self):
        assert find_causal_chain("XX-999", default_graph()) == []

    def test_depth_first_order(self):
        graph = _graph(("A", "T"), ("B", "T"), ("C", "A"), ("D", "C"), ("E", "B"))
        assert _pairs(find_causal_chain("T", graph)) == [
            ("A", "T"), ("B", "T"), ("C", "A"), ("D", "C"), ("E", "B"),
        ]

    def test_two_node_cycle_terminates(self):
        graph = _graph(("A", "B"), ("B", "A"))
        assert _pairs(find_causal_chain("A", graph)) == [("B", "A"), ("A", "B")]

    def test_self_loop(self):
        graph = _graph(("A", "A"))
        assert _pairs(find_causal_chain("A", graph)) == [("A", "A")]

    def test_diamond_expands_shared_cause_once(self):
        # T ← A ← S, T ← B ← S, S ← R: R→S reported only through A
        graph = _graph(("A", "T"), ("B", "T"), ("S", "A"), ("S", "B"), ("R", "S"))
        assert _pairs(find_causal_chain("T", graph)) == [
            ("A", "T"), ("B", "T"), ("S", "A"), ("R", "S"), ("S", "B"),
        ]

    def test_visited_set_is_shared(self):
        graph = _graph(("A", "T"), ("B", "A"))
        visited = {"A"}
        assert _pairs(find_causal_chain("T", graph, visited)) == [("A", "T")]
        assert visited == {"A", "T"}

    def test_already_visited_target(self):
        graph = _graph(("A", "T"))
        assert find_causal_chain("T", graph, {"T"}) == []

    def test_every_link_points_upstream(self):
        chain = find_causal_chain("PI-301", default_graph())
        reached = {"PI-301"}
        for link in chain:
            assert link.to in reached
            reached.add(link.from_)


class TestUpstreamAndCritical:
    def test_upstream_ids_deduplicated(self):
        graph = _graph(("A", "T"), ("A", "B"), ("B", "T"))
        chain = find_causal_chain("T", graph)
        assert upstream_tag_ids(chain) == ["A", "B"]

    def test_critical_when_cause_abnormal(self, make_tag):
        link = CausalLink(from_="TI-101", to="TI-102")
        assert is_critical_link(link, [make_tag(545.0)])
        assert is_critical_link(link, [make_tag(480.0)])

    def test_not_critical_when_cause_normal(self, make_tag):
        link = CausalLink(from_="TI-101", to="TI-102")
        assert not is_critical_link(link, [make_tag(520.0)])

    def test_not_critical_when_cause_unknown(self, make_tag):
        link = CausalLink(from_="FI-999", to="TI-101")
        assert not is_critical_link(link, [make_tag(545.0)])


class TestParseGraph:
    def test_from_json_with_alias(self):
        graph = parse_graph('{"version": "2.0", "links": [{"from": "A", "to": "B", "contribution": 40}]}')
        assert graph.version == "2.0"
        assert graph.links[0].from_ == "A"
        assert graph.links[0].contribution == 40

    def test_missing_contribution_defaults(self):
        graph = parse_graph({"version": "2.0", "links": [{"from": "A", "to": "B"}]})
        assert graph.links[0].contribution == 50

    def test_malformed_json(self):
        with pytest.raises(ValueError):
            parse_graph("{not json")

    def test_wrong_shape(self):
        with pytest.raises(ValueError):
            parse_graph({"version": "2.0", "links": [{"to": "B"}]})


class TestCausalityStore:
    def test_starts_with_default(self):
        store = CausalityStore(MemoryKeyValue())
        assert store.graph == default_graph()

    def test_import_replaces_and_persists(self):
        backend = MemoryKeyValue()
        store = CausalityStore(backend, storage_key="graph")
        store.import_graph({"version": "2.0", "links": [{"from": "A", "to": "B", "contribution": 10}]})

        assert _pairs(store.find_causal_chain("B")) == [("A", "B")]
        assert store.find_causal_chain("TI-101") == []
        persisted = json.loads(backend.data["graph"])
        assert persisted["links"][0]["from"] == "A"

    def test_link_descriptions_persist_only_when_set(self):
        backend = MemoryKeyValue()
        store = CausalityStore(backend, storage_key="graph")
        store.import_graph({"links": [{"from": "A", "to": "B"}, {"from": "B", "to": "C", "description": "B heats C"}]})

        persisted = json.loads(backend.data["graph"])["links"]
        assert "description" not in persisted[0]
        assert persisted[1]["description"] == "B heats C"
        assert CausalityStore(backend, storage_key="graph").graph == store.graph

    def test_override_survives_restart(self):
        backend = MemoryKeyValue()
        CausalityStore(backend).import_graph({"version": "3.1", "links": []})
        assert CausalityStore(backend).graph.version == "3.1"

    def test_export_round_trip(self):
        store = CausalityStore(MemoryKeyValue())
        exported = store.export_graph()
        other = CausalityStore(MemoryKeyValue())
        other.import_graph(exported.model_dump_json(by_alias=True))
        assert other.graph == store.graph

    def test_export_is_a_copy(self):
        store = CausalityStore(MemoryKeyValue())
        exported = store.export_graph()
        exported.links.clear()
        assert len(store.graph.links) == len(default_graph().links)

    def test_reset_removes_override(self):
        backend = MemoryKeyValue()
        store = CausalityStore(backend, storage_key="graph")
        store.import_graph({"version": "2.0", "links": []})
        store.reset()
        assert store.graph == default_graph()
        assert "graph" not in backend.data

    def test_corrupt_override_falls_back_to_default(self, caplog):
        backend = MemoryKeyValue({"graph": "{broken"})
        with caplog.at_level("WARNING"):
            store = CausalityStore(backend, storage_key="graph")
        assert store.graph == default_graph()
        assert "unreadable causality override" in caplog.text

    def test_invalid_import_keeps_current_graph(self):
        store = CausalityStore(MemoryKeyValue())
        with pytest.raises(ValueError):
            store.import_graph("[1, 2, 3]")
        assert store.graph == default_graph()

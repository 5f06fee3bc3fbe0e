"""
tests/test_fault_tree.py
─────────────────────────
Tests for the preset fault trees, the fault tree library and bow-tie lookups.
"""
import pytest
from pydantic import ValidationError

from config.fault_trees import BOWTIE_COLUMNS, BowTieEventType
from config.tags import TAG_IDS
from src.analytics.causality import upstream_tag_ids
from src.analytics.fault_tree import (
    FaultTreeLibrary,
    abnormal_tag_ids,
    all_bowties,
    bowtie_columns,
    bowtie_tag_ids,
    default_fault_trees,
    fault_tree_chain,
    fault_tree_tag_ids,
    get_bowtie,
    get_bowties_for_area,
)
from src.data.models import BowTie, FaultTree


def _pairs(links) -> list[tuple[str, str]]:
    return [(link.from_, link.to) for link in links]


def _bowtie(**overrides) -> dict:
    fields = {
        "id": "bt-test",
        "name": "Test",
        "area_id": "reactor",
        "top_event_id": "te",
        "events": [
            {"id": "t", "type": "threat", "label": "Threat", "position": {"x": 8, "y": 50}},
            {"id": "te", "type": "top_event", "label": "Top", "tag_id": "TI-101", "position": {"x": 50, "y": 50}},
        ],
        "links": [{"from": "t", "to": "te"}],
    }
    fields.update(overrides)
    return fields


class TestPresets:
    def test_five_fault_trees(self):
        assert [t.id for t in default_fault_trees()] == [
            "ft-reactor-runaway",
            "ft-regenerator-overtemp",
            "ft-flue-gas-o2",
            "ft-fractionator-upset",
            "ft-overview-integrated",
        ]

    def test_fault_trees_reference_known_tags(self):
        for tree in default_fault_trees():
            assert set(fault_tree_tag_ids(tree)) <= set(TAG_IDS), tree.id

    def test_fault_tree_links_carry_descriptions(self):
        assert all(link.description for tree in default_fault_trees() for link in tree.links)

    def test_four_bowties(self):
        assert [(b.id, b.area_id) for b in all_bowties()] == [
            ("bt-reactor-runaway", "reactor"),
            ("bt-regenerator-fire", "regenerator"),
            ("bt-fractionator-flood", "fractionator"),
            ("bt-overview", "overview"),
        ]

    def test_bowties_reference_known_tags(self):
        for bowtie in all_bowties():
            assert set(bowtie_tag_ids(bowtie)) <= set(TAG_IDS), bowtie.id


class TestFaultTreeLookups:
    def test_tag_ids_top_event_first_no_duplicates(self):
        tree = FaultTreeLibrary().get("ft-reactor-runaway")
        assert fault_tree_tag_ids(tree) == ["TI-101", "FI-101", "PI-101", "TI-102", "TI-103", "LI-101"]

    def test_top_event_only_tree(self):
        tree = FaultTree(id="ft", name="Empty", area_id="reactor", top_event_tag_id="TI-101")
        assert fault_tree_tag_ids(tree) == ["TI-101"]
        assert fault_tree_chain(tree) == []

    def test_chain_leads_into_top_event(self):
        tree = FaultTreeLibrary().get("ft-reactor-runaway")
        chain = fault_tree_chain(tree)
        assert _pairs(chain) == [
            ("FI-101", "TI-101"),
            ("PI-101", "TI-101"),
            ("LI-101", "TI-101"),
            ("FI-101", "PI-101"),
        ]
        assert upstream_tag_ids(chain) == ["FI-101", "PI-101", "LI-101"]

    def test_chain_ignores_downstream_effects(self):
        tree = FaultTreeLibrary().get("ft-reactor-runaway")
        assert ("TI-101", "TI-102") not in _pairs(fault_tree_chain(tree))

    def test_for_area(self):
        library = FaultTreeLibrary()
        assert [t.id for t in library.for_area("regenerator")] == ["ft-regenerator-overtemp", "ft-flue-gas-o2"]
        assert [t.id for t in library.for_area("overview")] == ["ft-overview-integrated"]
        assert library.for_area("utilities") == []

    def test_unknown_id(self):
        assert FaultTreeLibrary().get("ft-nope") is None


class TestFaultTreeLibrary:
    def test_save_replaces_in_place(self):
        library = FaultTreeLibrary()
        emptied = library.get("ft-reactor-runaway").model_copy(update={"links": []})
        library.save(emptied)

        assert library.trees[0].id == "ft-reactor-runaway"
        assert library.trees[0].links == []
        assert len(library.trees) == 5

    def test_save_appends_new_tree(self):
        library = FaultTreeLibrary()
        added = library.save({
            "id": "ft-riser",
            "name": "Riser upset",
            "area_id": "reactor",
            "top_event_tag_id": "TI-102",
            "links": [{"from": "TI-101", "to": "TI-102", "contribution": 80}],
        })
        assert library.trees[-1] == added
        assert [t.id for t in library.for_area("reactor")] == ["ft-reactor-runaway", "ft-riser"]

    def test_save_rejects_malformed_tree(self):
        library = FaultTreeLibrary()
        with pytest.raises(ValidationError):
            library.save({"id": "ft-bad", "name": "Bad", "area_id": "reactor"})
        assert len(library.trees) == 5

    def test_reset_restores_presets(self, caplog):
        library = FaultTreeLibrary([])
        assert library.trees == []
        with caplog.at_level("INFO"):
            library.reset()
        assert library.trees == default_fault_trees()
        assert "Fault trees reset" in caplog.text

    def test_trees_is_a_copy(self):
        library = FaultTreeLibrary()
        library.trees.clear()
        assert len(library.trees) == 5


class TestBowTies:
    def test_for_area(self):
        assert [b.id for b in get_bowties_for_area("fractionator")] == ["bt-fractionator-flood"]
        assert get_bowties_for_area("utilities") == []

    def test_by_id(self):
        bowtie = get_bowtie("bt-regenerator-fire")
        assert bowtie.top_event_id == "te-regen"
        assert get_bowtie("bt-nope") is None

    def test_explicit_collection(self):
        custom = [BowTie.model_validate(_bowtie())]
        assert get_bowtie("bt-test", custom) is custom[0]
        assert get_bowtie("bt-reactor-runaway", custom) is None
        assert get_bowties_for_area("reactor", custom) == custom

    def test_columns_left_to_right_top_to_bottom(self):
        columns = bowtie_columns(get_bowtie("bt-reactor-runaway"))
        assert list(columns) == list(BOWTIE_COLUMNS)
        assert [e.id for e in columns[BowTieEventType.THREAT]] == ["t1", "t2", "t3", "t4"]
        assert [e.id for e in columns[BowTieEventType.TOP_EVENT]] == ["te-reactor"]
        assert [e.id for e in columns[BowTieEventType.CONSEQUENCE]] == ["c1", "c2", "c3"]

    def test_tag_ids(self):
        assert bowtie_tag_ids(get_bowtie("bt-reactor-runaway")) == ["FI-101", "TI-101", "PI-101"]
        assert bowtie_tag_ids(BowTie.model_validate(_bowtie(events=_bowtie()["events"][:1] + [
            {"id": "te", "type": "top_event", "label": "Top", "position": {"x": 50, "y": 50}},
        ]))) == []


class TestBowTieValidation:
    def test_missing_top_event(self):
        with pytest.raises(ValidationError):
            BowTie.model_validate(_bowtie(top_event_id="te-missing"))

    def test_top_event_must_have_top_event_type(self):
        with pytest.raises(ValidationError):
            BowTie.model_validate(_bowtie(top_event_id="t"))

    def test_dangling_link(self):
        with pytest.raises(ValidationError, match="t->ghost"):
            BowTie.model_validate(_bowtie(links=[{"from": "t", "to": "ghost"}]))

    def test_unknown_event_type(self):
        events = _bowtie()["events"] + [{"id": "x", "type": "hazard", "label": "X", "position": {"x": 1, "y": 1}}]
        with pytest.raises(ValidationError):
            BowTie.model_validate(_bowtie(events=events))


class TestAbnormalTags:
    def test_only_warning_or_alarm_tags(self, make_tag):
        tags = [make_tag(545.0, "TI-101"), make_tag(525.0, "FI-101"), make_tag(560.0, "PI-101")]
        assert abnormal_tag_ids(["TI-101", "FI-101", "PI-101"], tags) == {"TI-101", "PI-101"}

    def test_restricted_to_requested_ids(self, make_tag):
        tags = [make_tag(545.0, "TI-101"), make_tag(545.0, "TI-201")]
        assert abnormal_tag_ids(["TI-101", "XX-1"], tags) == {"TI-101"}

    def test_highlights_fault_tree_causes(self, make_tag):
        tree = FaultTreeLibrary().get("ft-reactor-runaway")
        tags = [make_tag(525.0, "TI-101"), make_tag(485.0, "LI-101")]
        assert abnormal_tag_ids(fault_tree_tag_ids(tree), tags) == {"LI-101"}

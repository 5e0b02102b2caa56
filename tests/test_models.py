"""
Tests for the core data models.

Tests cover:
- Category chains (building, nesting on export, round trip)
- Knowledge component identity
- Registry deduplication, ordering and snapshots
- Analysis result export shape
"""

import json

import pytest

from kcextract.models import (
    AnalysisResult,
    CategoryChain,
    KnowledgeComponent,
    KnowledgeComponentRegistry,
    ProgrammingLanguage,
    Video,
)


def make_component(kind, t=1, chain=("Statement", "Condition")):
    return KnowledgeComponent(
        token_kind=kind,
        display_value=kind.lower(),
        timestamp_url=f"https://youtu.be/x&t={t}",
        category_chain=CategoryChain(tuple(chain) + (kind,)),
    )


class TestProgrammingLanguage:
    """Test language names."""

    def test_export_name(self):
        """Languages export their lowercase names."""
        assert ProgrammingLanguage.CPP.export_name == "cpp"
        assert ProgrammingLanguage.PYTHON.export_name == "python"

    def test_from_name_is_case_insensitive(self):
        """Language lookup ignores case."""
        assert ProgrammingLanguage.from_name("cpp") is ProgrammingLanguage.CPP
        assert ProgrammingLanguage.from_name(" Java ") is ProgrammingLanguage.JAVA

    def test_from_name_rejects_unknown(self):
        """Unknown language names raise."""
        with pytest.raises(ValueError):
            ProgrammingLanguage.from_name("rust")


class TestCategoryChain:
    """Test the flat taxonomy path."""

    def test_wrap_builds_outward(self):
        """Wrapping adds parents around the leaf."""
        chain = CategoryChain.leaf("If").wrap("Condition").wrap("Statement")
        assert chain.names == ("Statement", "Condition", "If")
        assert chain.root == "Statement"
        assert chain.leaf_name == "If"
        assert str(chain) == "Statement -> Condition -> If"

    def test_to_dict_nests_children(self):
        """Chains serialize as nested name/child dicts."""
        chain = CategoryChain(("Statement", "Jump", "Return"))
        assert chain.to_dict() == {
            "name": "Statement",
            "child": {"name": "Jump", "child": {"name": "Return", "child": None}},
        }

    def test_from_dict_round_trip(self):
        """Chains survive a dict round trip."""
        chain = CategoryChain(("Declaration", "Declarator", "Pointer"))
        assert CategoryChain.from_dict(chain.to_dict()) == chain

    def test_empty_chain_rejected(self):
        """A chain needs at least one name."""
        with pytest.raises(ValueError):
            CategoryChain(())


class TestKnowledgeComponent:
    """Test component identity."""

    def test_equality_uses_token_kind_only(self):
        """Components compare by token kind alone."""
        first = make_component("If", t=1)
        later = make_component("If", t=9)
        assert first == later
        assert hash(first) == hash(later)
        assert first != make_component("Else")

    def test_to_dict_keys(self):
        """Components export the documented keys."""
        d = make_component("If", t=3).to_dict()
        assert d["token"] == "If"
        assert d["value"] == "if"
        assert d["timeStamp"] == "https://youtu.be/x&t=3"
        assert d["classification"]["name"] == "Statement"


class TestRegistry:
    """Test first-seen-wins deduplication."""

    def test_first_occurrence_kept(self):
        """The first occurrence of a kind is kept."""
        registry = KnowledgeComponentRegistry()
        assert registry.add(make_component("If", t=1))
        assert not registry.add(make_component("If", t=5))
        assert len(registry) == 1
        assert registry.get("If").timestamp_url.endswith("&t=1")

    def test_insertion_order(self):
        """Components keep insertion order."""
        registry = KnowledgeComponentRegistry()
        for kind in ("Return", "If", "For", "If"):
            registry.add(make_component(kind))
        assert registry.token_kinds == ["Return", "If", "For"]

    def test_snapshot_is_independent(self):
        """Snapshots do not change with the registry."""
        registry = KnowledgeComponentRegistry([make_component("If")])
        snap = registry.snapshot()
        registry.add(make_component("For"))
        assert "For" in registry
        assert "For" not in snap
        assert len(snap) == 1

    def test_contains_accepts_component(self):
        """Membership works with components and kind names."""
        registry = KnowledgeComponentRegistry([make_component("If")])
        assert make_component("If", t=7) in registry
        assert "Else" not in registry


class TestAnalysisResult:
    """Test result export."""

    def test_export_shape(self):
        """Results export language and components."""
        result = AnalysisResult(
            video=Video(url="https://youtu.be/x", title="C++ loops"),
            language=ProgrammingLanguage.CPP,
            knowledge_components=KnowledgeComponentRegistry([make_component("If")]),
        )
        d = result.to_dict()
        assert d["video"] == {"title": "C++ loops", "url": "https://youtu.be/x"}
        assert d["language"] == "cpp"
        assert [c["token"] for c in d["knowledgeComponents"]] == ["If"]

    def test_unresolved_language_is_null(self):
        """An unresolved language exports as null."""
        result = AnalysisResult(video=Video(url="u"))
        assert json.loads(result.to_json())["language"] is None

    def test_json_round_trip(self):
        """Results survive a JSON round trip."""
        result = AnalysisResult(
            video=Video(url="https://youtu.be/x", title="py"),
            language=ProgrammingLanguage.PYTHON,
            knowledge_components=KnowledgeComponentRegistry(
                [make_component("For"), make_component("While")]
            ),
        )
        restored = AnalysisResult.from_json(result.to_json())
        assert restored.language is ProgrammingLanguage.PYTHON
        assert restored.knowledge_components.token_kinds == ["For", "While"]
        assert restored.to_dict() == result.to_dict()

    def test_summary_mentions_language(self):
        """The summary names the language."""
        result = AnalysisResult(
            video=Video(url="u", title="Intro"),
            language=ProgrammingLanguage.JAVA,
            knowledge_components=KnowledgeComponentRegistry([make_component("If")]),
        )
        text = result.summary()
        assert "Java" in text
        assert "Statement: 1" in text

    def test_video_hint_falls_back_to_url(self):
        """An empty title falls back to the URL."""
        assert Video(url="https://x", title="").hint == "https://x"
        assert Video(url="https://x", title="T").hint == "T"

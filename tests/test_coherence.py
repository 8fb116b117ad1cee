"""Tests for questwright.analysis.coherence."""

from questwright.analysis.coherence import CoherenceAnalyzer
from questwright.models.content import parse_scenes
from questwright.models.report import SceneAnalysis


def _analysis(scene_id, **kwargs):
    return SceneAnalysis(scene_id=scene_id, title=scene_id.title(), **kwargs)


class TestBreadcrumbs:
    """Tests for breadcrumb strength rating."""

    def test_single_scene_has_none(self):
        """Test fewer than two scenes rate as none."""
        scenes = parse_scenes([{"id": "a", "exits": ["b"]}])
        assert CoherenceAnalyzer(scenes).breadcrumb_strength() == "none"

    def test_exits_are_strong(self, sample_scenes):
        """Test scenes that all declare exits or transitions rate strong."""
        assert CoherenceAnalyzer(sample_scenes).breadcrumb_strength() == "strong"

    def test_next_scene_pointers_are_weak(self):
        """Test loose next-scene pointers alone rate weak."""
        scenes = parse_scenes(
            [
                {"id": "a", "nextScene": "b"},
                {"id": "b", "nextScene": "c"},
                {"id": "c"},
            ]
        )
        assert CoherenceAnalyzer(scenes).breadcrumb_strength() == "weak"

    def test_narrative_mention_counts(self):
        """Test naming the next location in the narrative is a strong breadcrumb."""
        scenes = parse_scenes(
            [
                {"id": "a", "narrative": "Head to the Docks."},
                {"id": "b", "location": "Docks"},
            ]
        )
        assert CoherenceAnalyzer(scenes).breadcrumb_strength() == "strong"


class TestReferences:
    """Tests for forward and backward location references."""

    def test_forward_and_backward(self, sample_scenes):
        """Test location mentions in narratives are reported in both directions."""
        scenes = sample_scenes + parse_scenes(
            [{"id": "s4", "title": "Epilogue", "narrative": "You remember the Clinic."}]
        )
        analyzer = CoherenceAnalyzer(scenes)
        assert analyzer.forward_references() == [
            'Scene "The Clinic" mentions future location "Night Market"'
        ]
        assert analyzer.backward_references() == [
            'Scene "Epilogue" references past location "Clinic"'
        ]


class TestContinuityAndGaps:
    """Tests for NPC continuity and information gap detection."""

    def test_resurrected_npc(self):
        """Test an NPC defeated earlier and active later is reported."""
        scenes = parse_scenes(
            [
                {"id": "a", "title": "Fight", "npcs": [{"id": "boss", "name": "Boss", "state": "defeated"}]},
                {"id": "b", "title": "Later", "npcs": [{"id": "boss", "name": "Boss"}]},
            ]
        )
        issues = CoherenceAnalyzer(scenes).npc_continuity_issues()
        assert issues == ['NPC "Boss" was defeated in "Fight" but appears active in "Later"']

    def test_absent_npc_needs_review(self):
        """Test an absent NPC reappearing is flagged for review."""
        scenes = parse_scenes(
            [
                {"id": "a", "npcs": [{"id": "ro", "state": "absent"}]},
                {"id": "b", "npcs": [{"id": "ro"}]},
            ]
        )
        [issue] = CoherenceAnalyzer(scenes).npc_continuity_issues()
        assert "verify this is intentional" in issue

    def test_information_gaps(self):
        """Test undocumented hidden checks and silent irreversible triggers are gaps."""
        scenes = parse_scenes(
            [
                {
                    "id": "a",
                    "title": "Vault",
                    "challenges": [{"name": "Spot trap", "type": "hidden"}],
                    "triggers": [{"id": "collapse", "label": "Collapse", "irreversible": True}],
                }
            ]
        )
        gaps = CoherenceAnalyzer(scenes).information_gaps()
        assert gaps == [
            'Hidden check "Spot trap" in "Vault" has no description for GM',
            'Irreversible trigger "Collapse" in "Vault" has no narrative text',
        ]


class TestPacing:
    """Tests for pace classification and scoring."""

    def test_empty_adventure_is_neutral(self):
        """Test no scenes gives the neutral pace score."""
        assert CoherenceAnalyzer([]).pace_score() == 50

    def test_counts(self, sample_scenes):
        """Test scenes split into action, social and exploration."""
        # s1 and s2 have NPCs, s3 has none, nothing deals damage
        assert CoherenceAnalyzer(sample_scenes).pace_counts() == (0, 2, 1)

    def test_ideal_mix_scores_high(self):
        """Test a 3/4/3 mix scores 100."""
        raw = (
            [{"id": f"c{i}", "triggers": [{"id": "t", "damage": 1}]} for i in range(3)]
            + [{"id": f"n{i}", "npcs": [{"id": "x"}]} for i in range(4)]
            + [{"id": f"e{i}"} for i in range(3)]
        )
        assert CoherenceAnalyzer(parse_scenes(raw)).pace_score() == 100


class TestRecommendations:
    """Tests for recommendation derivation."""

    def test_dead_end_and_difficulty(self, sample_scenes):
        """Test dead ends and low pass rates produce recommendations."""
        analyses = [
            _analysis("s1", has_exit_path=False, checks_attempted=4, checks_passed=1),
            _analysis("s2", has_exit_path=True, wounds_taken=2),
        ]
        recs = CoherenceAnalyzer(sample_scenes, analyses).recommendations()
        by_type = {r.type: r for r in recs}
        assert by_type["dead_end"].priority == "high"
        assert by_type["difficulty"].scene == "s1"
        assert by_type["balance"].scene == "s2"

    def test_weak_breadcrumbs_recommended(self):
        """Test weak navigation yields a coherence recommendation."""
        scenes = parse_scenes([{"id": "a"}, {"id": "b"}])
        types = [r.type for r in CoherenceAnalyzer(scenes).recommendations()]
        assert "coherence" in types

    def test_analysis_is_repeatable(self, sample_scenes):
        """Test analyzing twice gives identical results."""
        analyzer = CoherenceAnalyzer(sample_scenes)
        assert analyzer.analyze() == analyzer.analyze()

"""Tests for GM knowledge extraction and critique validation."""

import pytest

from questwright.analysis import GMValidator, extract_knowledge
from questwright.analysis.knowledge import AdventureKnowledge, Mystery, NPCSecret
from questwright.models.content import parse_scenes
from questwright.models.report import ArchetypeFeedback, ArchetypeReport


def _feedback(description, feedback_type="missing_content", scene="s1"):
    return ArchetypeFeedback(
        scene=scene,
        type=feedback_type,
        description=description,
        suggestion="Fix it.",
        severity="medium",
    )


# =============================================================================
# Knowledge extraction
# =============================================================================


class TestExtractKnowledge:
    """Tests for building AdventureKnowledge from guide payloads."""

    def test_missing_guide_is_empty(self):
        """Test no guide yields empty knowledge."""
        assert extract_knowledge(None) == AdventureKnowledge()

    def test_full_guide(self, sample_guide):
        """Test themes, tone, NPC secrets and mysteries are extracted."""
        knowledge = extract_knowledge(sample_guide)
        assert knowledge.tone == "noir"
        assert knowledge.themes == ("Grief",)
        assert knowledge.npc_secrets["vance"].secret == "She sold the heart"
        assert knowledge.npc_secrets["vance"].reveal_condition == "Read the records"
        assert knowledge.mysteries[0].reveal_scene == "s3"

    def test_lore_mysteries_and_defaults(self):
        """Test mysteries under lore are merged and reveal conditions default."""
        guide = {
            "lore": {"mysteries": [{"question": "Why rain?", "isRedHerring": True}]},
            "content": {"npc_manifest": {"enemies": [{"id": "ro", "secret": "Informant"}]}},
        }
        knowledge = extract_knowledge(guide)
        assert knowledge.mysteries[0].is_red_herring
        assert knowledge.npc_secrets["ro"].reveal_condition == "Player discovery"

    def test_malformed_entries_skipped(self):
        """Test mysteries without a question are dropped."""
        knowledge = extract_knowledge({"mysteries": [{"answer": "none"}, {"question": "Who?"}]})
        assert [m.question for m in knowledge.mysteries] == ["Who?"]


# =============================================================================
# Critique validation
# =============================================================================


@pytest.fixture
def validator(sample_scenes, sample_guide):
    """Provide a validator over the sample adventure."""
    return GMValidator(extract_knowledge(sample_guide), sample_scenes)


class TestValidateCritique:
    """Tests for single-critique classification."""

    def test_delayed_reveal(self, validator):
        """Test a question answered in a later scene is a delayed reveal."""
        verdict = validator.validate_critique(_feedback("Who stole the heart?"), 0)
        assert verdict.status == "delayed_reveal"
        assert verdict.reveal_scene == "s3"
        assert "The End" in verdict.reasoning

    def test_already_revealed_is_not_delayed(self, validator):
        """Test the same question at or after the reveal scene is not delayed."""
        verdict = validator.validate_critique(_feedback("Who stole the heart?", scene="s3"), 2)
        assert verdict.status != "delayed_reveal"

    def test_question_mark_does_not_hide_keyword(self):
        """Test a mystery keyword ending in "?" still matches plain prose."""
        scenes = parse_scenes([{"id": f"S{i}"} for i in range(1, 8)])
        knowledge = AdventureKnowledge(mysteries=(Mystery(question="Why is X here?", reveal_scene="S7"),))
        verdict = GMValidator(knowledge, scenes).validate_critique(
            _feedback("Detective asked: what is X doing here", scene="S2"), 1
        )
        assert verdict.status == "delayed_reveal"
        assert verdict.reveal_scene == "S7"

    def test_red_herring(self, sample_scenes):
        """Test a red-herring mystery reports red_herring."""
        knowledge = AdventureKnowledge(
            mysteries=(Mystery(question="Is the fixer loyal?", reveal_scene="s2", is_red_herring=True),)
        )
        verdict = GMValidator(knowledge, sample_scenes).validate_critique(
            _feedback("Is the fixer hiding something?"), 0
        )
        assert verdict.status == "red_herring"

    def test_npc_secret(self, validator):
        """Test mentioning an NPC with a secret is an intentional mystery."""
        verdict = validator.validate_critique(_feedback("What does vance want?", "shallow_npc"), 0)
        assert verdict.status == "intentional_mystery"
        assert "She sold the heart" in verdict.reasoning

    def test_empty_public_info_does_not_match_everything(self, sample_scenes):
        """Test an NPC secret with no public info only matches by id."""
        knowledge = AdventureKnowledge(npc_secrets={"ro": NPCSecret(secret="Informant")})
        verdict = GMValidator(knowledge, sample_scenes).validate_critique(
            _feedback("The market has no description"), 0
        )
        assert verdict.status == "valid_issue"

    def test_player_agency_is_gm_discretion(self, validator):
        """Test unhandled betrayal attempts are left to the GM."""
        verdict = validator.validate_critique(
            _feedback("The Chaos Agent wanted to: Attempt to betray companion", "unhandled_action"),
            0,
        )
        assert verdict.status == "gm_discretion"

    def test_noir_tone_excuses_emotional_gap(self, validator):
        """Test emotional gaps are stylistic under a noir tone."""
        verdict = validator.validate_critique(_feedback("Nobody shows feelings", "emotional_gap"), 0)
        assert verdict.status == "gm_discretion"
        assert "noir" in verdict.reasoning

    def test_everything_else_is_valid(self, validator):
        """Test an unmatched critique is a valid issue."""
        verdict = validator.validate_critique(_feedback("Rooftop lacks detail"), 0)
        assert verdict.status == "valid_issue"


class TestValidatedReport:
    """Tests for validating a whole archetype report."""

    def test_buckets_and_attachment(self, validator):
        """Test every feedback item gets a validation and lands in one bucket."""
        report = ArchetypeReport(
            archetype="detective",
            feedback=[
                _feedback("Who stole the heart?"),
                _feedback("The Chaos Agent wanted to: Attempt to betray companion", "unhandled_action"),
                _feedback("Rooftop lacks detail"),
            ],
        )
        validated = validator.generate_validated_report(report)

        assert validated.total_critiques == 3
        assert validated.summary.intentional_design_count == 1
        assert validated.summary.gm_discretion_count == 1
        assert validated.summary.valid_issue_count == 1
        assert all(f.gm_validation is not None for f in report.feedback)

    def test_empty_report(self, validator):
        """Test an empty report validates to zero critiques."""
        validated = validator.generate_validated_report(ArchetypeReport(archetype="empath"))
        assert validated.total_critiques == 0
        assert validated.valid_issues == []

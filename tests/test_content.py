"""Tests for content normalization in questwright.models.content."""

import pytest
from pydantic import ValidationError

from questwright.models.config import SimulationConfig
from questwright.models.content import Challenge, Exit, NPCReference, Scene, parse_scenes


class TestNPCReference:
    """Tests for NPC canonicalization."""

    def test_hostile_state_becomes_flag(self):
        """Test "hostile" authored as a state becomes an active, hostile NPC."""
        npc = NPCReference.model_validate({"id": "g", "state": "Hostile"})
        assert npc.state == "active"
        assert npc.hostile

    def test_unknown_state_defaults_to_active(self):
        """Test an unrecognized state is treated as active."""
        assert NPCReference.model_validate({"id": "g", "state": "sleepy"}).state == "active"

    def test_name_defaults_to_id(self):
        """Test a missing name falls back to the id."""
        assert NPCReference.model_validate({"id": "ro"}).name == "ro"


class TestChallenge:
    """Tests for challenge aliases."""

    @pytest.mark.parametrize("key", ["dc", "DC", "difficulty"])
    def test_difficulty_aliases(self, key):
        """Test every difficulty spelling is accepted."""
        assert Challenge.model_validate({"skill": "Tech", key: 14}).difficulty == 14

    def test_camel_case_damage(self):
        """Test camelCase damage fields are accepted."""
        check = Challenge.model_validate({"failureDamage": 1, "criticalFailureDamage": 2})
        assert check.failure_damage == 1
        assert check.critical_failure_damage == 2

    def test_negative_damage_reads_as_none(self):
        """Test negative damage is clamped to zero instead of rejected."""
        check = Challenge.model_validate({"failure_damage": -1, "criticalFailureDamage": -3})
        assert check.failure_damage == 0
        assert check.critical_failure_damage == 0

    @pytest.mark.parametrize("raw,expected", [(12.7, 13), (11.2, 11), ("14", 14), ("9.6", 10)])
    def test_difficulty_rounded(self, raw, expected):
        """Test fractional and string difficulties become whole numbers."""
        assert Challenge.model_validate({"dc": raw}).difficulty == expected

    def test_non_numeric_difficulty_rejected(self):
        """Test a difficulty that is not a number still fails validation."""
        with pytest.raises(ValidationError):
            Challenge.model_validate({"dc": "hard"})

    def test_name_defaults_to_skill(self):
        """Test the name falls back to the skill."""
        assert Challenge.model_validate({"skill": "Stealth"}).name == "Stealth"


class TestScene:
    """Tests for scene canonicalization."""

    def test_loose_keys_are_normalized(self):
        """Test camelCase and alternate keys land in the canonical fields."""
        scene = Scene.model_validate(
            {
                "id": "s1",
                "nextScene": "s2",
                "checks": [{"skill": "Tech", "dc": 10}],
                "branches": {"left": {"to": "s3"}},
                "flags": {"adventure_start": True, "unused": False},
                "type": "combat",
            }
        )
        assert scene.next_scene == "s2"
        assert scene.challenges[0].difficulty == 10
        assert scene.transitions[0].target == "s3"
        assert scene.flags == ["adventure_start"]
        assert scene.scene_type == "combat"
        assert scene.title == "s1"

    def test_nulls_use_defaults(self):
        """Test explicit nulls are replaced by defaults."""
        scene = Scene.model_validate({"id": "s1", "npcs": None, "location": None})
        assert scene.npcs == []
        assert scene.location == ""

    def test_exit_from_string(self):
        """Test a bare string exit becomes a target."""
        assert Exit.model_validate("s9").target == "s9"

    def test_extra_fields_kept(self):
        """Test authored fields outside the model stay reachable."""
        npc = NPCReference.model_validate({"id": "ro", "motivation": "Money"})
        assert npc.extra_field("motivation") == "Money"
        assert npc.extra_field("secret") is None

    def test_string_environment_wrapped(self):
        """Test a bare environment string becomes a description entry."""
        scene = Scene.model_validate({"id": "s1", "environment": "Rain on neon"})
        assert scene.environment == {"description": "Rain on neon"}

    def test_negative_trigger_damage_clamped(self):
        """Test negative trigger damage is read as no damage."""
        scene = Scene.model_validate({"id": "s1", "triggers": [{"id": "t", "damage": -2}]})
        assert scene.triggers[0].damage == 0

    def test_helpers(self, sample_scenes):
        """Test has_flag, is_ending and get_npc."""
        first, _, last = sample_scenes
        assert first.has_flag("adventure_start")
        assert last.is_ending
        assert first.get_npc("vance").name == "Doc Vance"
        assert first.get_npc("nobody") is None


class TestParseScenes:
    """Tests for batch parsing."""

    def test_malformed_scenes_are_skipped(self):
        """Test scenes without an id are dropped and the rest keep their order."""
        scenes = parse_scenes([{"id": "a"}, {"title": "no id"}, {"id": "b"}])
        assert [s.id for s in scenes] == ["a", "b"]

    def test_loose_values_keep_their_scenes(self):
        """Test lenient field values are coerced so no scene is dropped."""
        scenes = parse_scenes(
            [
                {"id": "s1", "challenges": [{"skill": "Tech", "difficulty": 12.5}]},
                {"id": "s2", "challenges": [{"skill": "Brawl", "failureDamage": -1}]},
                {"id": "s3", "environment": "Rain on neon"},
            ]
        )
        assert [s.id for s in scenes] == ["s1", "s2", "s3"]
        assert scenes[0].challenges[0].difficulty == 12
        assert scenes[1].challenges[0].failure_damage == 0

    def test_accepts_scene_models(self, sample_scenes):
        """Test already-parsed scenes pass through."""
        assert parse_scenes(sample_scenes) == sample_scenes


class TestSimulationConfig:
    """Tests for configuration validation."""

    def test_defaults(self):
        """Test the default configuration."""
        config = SimulationConfig()
        assert config.max_scenes == 10
        assert config.player_max_wounds == 6
        assert config.loop_visit_threshold is None

    def test_rejects_unknown_enum(self):
        """Test an unknown dice mode fails validation."""
        with pytest.raises(ValidationError):
            SimulationConfig(dice_mode="weighted")

    def test_rejects_zero_wounds(self):
        """Test max wounds must be at least 1."""
        with pytest.raises(ValidationError):
            SimulationConfig(player_max_wounds=0)

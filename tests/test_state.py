"""Tests for questwright.models.state."""

import pytest
from pydantic import ValidationError

from questwright.models.content import NPCReference
from questwright.models.state import (
    DEFAULT_SKILL_BONUSES,
    NPCRegistry,
    NPCTracker,
    PlayerStateTracker,
    classify_npc_transition,
)


class TestPlayerStateTracker:
    """Tests for wound accounting and skill lookup."""

    def test_initial_state(self):
        """Test a new tracker starts unwounded with the default skills."""
        tracker = PlayerStateTracker(max_wounds=6)
        assert tracker.wounds == 0
        assert tracker.max_wounds == 6
        assert not tracker.is_dead
        assert tracker.snapshot().skill_bonuses == DEFAULT_SKILL_BONUSES

    def test_deal_wound_accumulates(self):
        """Test wounds add up and death is reached at max."""
        tracker = PlayerStateTracker(max_wounds=3)
        assert tracker.deal_wound(1) == 1
        assert tracker.deal_wound(1) == 2
        assert tracker.is_near_death
        tracker.deal_wound(1)
        assert tracker.is_dead

    @pytest.mark.parametrize("amount", [0, -2])
    def test_deal_wound_rejects_non_positive(self, amount):
        """Test dealing zero or negative wounds raises ValueError."""
        tracker = PlayerStateTracker(max_wounds=3)
        with pytest.raises(ValueError, match="must be positive"):
            tracker.deal_wound(amount)

    def test_heal_never_goes_negative(self):
        """Test healing clamps at zero wounds."""
        tracker = PlayerStateTracker(max_wounds=6)
        tracker.deal_wound(2)
        assert tracker.heal_wound(5) == 0

    def test_skill_bonus_is_case_sensitive(self):
        """Test skill lookup is exact and unknown skills give zero."""
        tracker = PlayerStateTracker(max_wounds=6)
        assert tracker.skill_bonus("Tech") == 6
        assert tracker.skill_bonus("tech") == 0
        assert tracker.skill_bonus("Piloting") == 0

    def test_snapshot_is_independent(self):
        """Test a snapshot does not change when the tracker does."""
        tracker = PlayerStateTracker(max_wounds=6)
        snapshot = tracker.snapshot()
        tracker.deal_wound(1)
        tracker.set_flag("met_vance")
        assert snapshot.wounds == 0
        assert snapshot.flags == set()
        assert tracker.has_flag("met_vance")


class TestNPCRegistry:
    """Tests for run-wide NPC tracking."""

    def test_first_sighting_returns_none(self):
        """Test the first sighting of an NPC has no previous state."""
        registry = NPCRegistry()
        assert registry.track(NPCReference(id="ro", name="Ro"), "s1") is None
        assert "ro" in registry
        assert registry.get("ro").last_seen_scene == "s1"

    def test_later_sighting_returns_previous_state(self):
        """Test re-tracking returns the prior state and stores the new one."""
        registry = NPCRegistry()
        registry.track(NPCReference(id="ro", state="defeated"), "s1")
        previous = registry.track(NPCReference(id="ro", state="active"), "s2")
        assert previous == "defeated"
        assert registry.get("ro").state == "active"
        assert registry.get("ro").last_seen_scene == "s2"
        assert len(registry) == 1

    def test_interact_untracked_npc(self):
        """Test interacting with an unknown NPC is a no-op that returns False."""
        registry = NPCRegistry()
        assert not registry.interact("ghost")

    def test_interact_counts(self):
        """Test interactions increment the NPC's counter."""
        registry = NPCRegistry()
        registry.track(NPCReference(id="ro"), "s1")
        registry.interact("ro")
        registry.interact("ro")
        assert registry.snapshot()[0].interaction_count == 2

    def test_disposition_bounds(self):
        """Test disposition is validated to -100..100."""
        with pytest.raises(ValidationError):
            NPCTracker(id="x", name="X", disposition=150)


class TestContinuityClassification:
    """Tests for NPC lifecycle transition verdicts."""

    def test_resurrection_is_violation(self):
        """Test defeated -> active is a violation."""
        assert classify_npc_transition("defeated", "active") == "violation"

    def test_reappearance_needs_review(self):
        """Test absent -> active needs review."""
        assert classify_npc_transition("absent", "active") == "review"

    def test_other_transitions_are_fine(self):
        """Test ordinary transitions produce no verdict."""
        assert classify_npc_transition("active", "defeated") is None
        assert classify_npc_transition("hidden", "active") is None

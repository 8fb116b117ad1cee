"""Tests for the content-index interface probe."""

import asyncio
import json

import pytest

from questwright.models.report import PlayerQuestion, QuestionContext
from questwright.probe import ContentIndexProbe
from questwright.probe.content_probe import extract_npc_name, first_name


def _question(question_type, query, scene_id="s1", npc_id=None):
    return PlayerQuestion(
        type=question_type,
        query=query,
        context=QuestionContext(scene_id=scene_id, npc_id=npc_id),
    )


class TestNameExtraction:
    """Tests for pulling NPC names out of templated questions."""

    @pytest.mark.parametrize(
        "query,name",
        [
            ("Who is Doc Vance?", "Doc Vance"),
            ("What does Ro want?", "Ro"),
            ("Why is Ro here?", "Ro"),
            ("Anything else", "Anything else"),
        ],
    )
    def test_extract_npc_name(self, query, name):
        """Test the name patterns."""
        assert extract_npc_name(query) == name

    def test_first_name(self):
        """Test first_name strips quotes and handles empty input."""
        assert first_name('"Doc" Vance') == "Doc"
        assert first_name("") == ""


class TestContentIndexProbe:
    """Tests for strategy-based lookups against scene data."""

    @pytest.fixture
    def probe(self, sample_scenes):
        """Provide a probe indexed over the sample adventure."""
        return ContentIndexProbe(sample_scenes)

    @pytest.mark.asyncio
    async def test_npc_in_scene(self, probe):
        """Test an NPC present in the scene is found in the scene list."""
        result = await probe.lookup(_question("npc_info", "Who is Doc Vance?", npc_id="vance"))
        assert result.found
        assert result.found_in == "Scene NPC list"
        assert result.search_path == ["Checking current scene for NPC"]
        assert result.interactions == 1

    @pytest.mark.asyncio
    async def test_npc_found_globally(self, probe):
        """Test an NPC from another scene is found through global search."""
        result = await probe.lookup(_question("npc_info", "Who is Ro?", scene_id="s3"))
        assert result.found_in == "Global search"
        assert result.interactions == 2

    @pytest.mark.asyncio
    async def test_environment(self, probe):
        """Test environment questions check the location section first."""
        result = await probe.lookup(_question("environment", "What do I smell?", scene_id="s1"))
        assert result.found_in == "Location section"

    @pytest.mark.asyncio
    async def test_next_steps(self, probe):
        """Test next steps fall through to transitions when there are no triggers."""
        result = await probe.lookup(_question("next_steps", "What now?", scene_id="s2"))
        assert result.found
        assert result.found_in == "Scene Transitions"

    @pytest.mark.asyncio
    async def test_unknown_type(self, probe):
        """Test question types without strategies are not found."""
        result = await probe.lookup(_question("item_info", "What is this?"))
        assert not result.found
        assert result.search_path == ["Unknown question type"]

    @pytest.mark.asyncio
    async def test_unindexed_scene(self, probe):
        """Test a question about an unknown scene is not found."""
        result = await probe.lookup(_question("npc_info", "Who is X?", scene_id="nowhere"))
        assert not result.found
        assert result.search_path == ["Scene not indexed: nowhere"]

    @pytest.mark.asyncio
    async def test_motivation_from_role(self, probe):
        """Test an NPC role counts as motivation detail."""
        result = await probe.lookup(
            _question("npc_motivation", "What does Ro want?", scene_id="s2", npc_id="ro")
        )
        assert result.found_in == "NPC detail (role)"

    @pytest.mark.asyncio
    async def test_prepare_indexes_scenes(self, sample_scenes):
        """Test scenes supplied through prepare() become searchable."""
        probe = ContentIndexProbe()
        await probe.prepare(sample_scenes)
        result = await probe.lookup(_question("location_detail", "Where am I?", scene_id="s3"))
        assert result.found_in == "Location section"

    @pytest.mark.asyncio
    async def test_strategy_timeout(self, probe):
        """Test a strategy that exceeds its timeout is skipped."""

        async def stalled(question, scene):
            await asyncio.sleep(1)
            return "never"

        async def quick(question, scene):
            return "Fallback"

        probe.strategy_timeout = 0.01
        probe.strategies["item_info"] = [("Stalled", stalled), ("Quick", quick)]
        result = await probe.lookup(_question("item_info", "What is this?"))
        assert result.found_in == "Fallback"
        assert "Stalled: timed out after 0.01s" in result.search_path


class TestDiagnostics:
    """Tests for diagnostic capture."""

    @pytest.mark.asyncio
    async def test_in_memory_capture(self, sample_scenes):
        """Test without a directory, only the name is kept."""
        probe = ContentIndexProbe(sample_scenes)
        assert await probe.capture_diagnostic("info-not-found-npc_info") is None
        assert probe.diagnostics[0].startswith("info-not-found-npc_info-")

    @pytest.mark.asyncio
    async def test_file_capture(self, sample_scenes, tmp_path):
        """Test with a directory, a JSON snapshot of the last scene is written."""
        probe = ContentIndexProbe(sample_scenes, diagnostics_dir=tmp_path / "diag")
        await probe.lookup(_question("npc_info", "Who is Doc Vance?"))
        path = await probe.capture_diagnostic("player-death")

        with open(path) as f:
            snapshot = json.load(f)
        assert snapshot["label"] == "player-death"
        assert snapshot["scene"]["id"] == "s1"

"""Shared pytest fixtures and markers for all tests."""

import pytest

from questwright.models.content import parse_scenes
from questwright.probe.base import InterfaceProbe, ProbeResult
from questwright.storage import InMemoryContentSource


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


class StubProbe(InterfaceProbe):
    """Probe with a fixed answer that records every call."""

    def __init__(self, found: bool = True, error: Exception | None = None):
        self.found = found
        self.error = error
        self.questions = []
        self.diagnostics = []
        self.prepared_with = None

    async def prepare(self, scenes):
        self.prepared_with = [scene.id for scene in scenes]

    async def lookup(self, question):
        self.questions.append(question)
        if self.error is not None:
            raise self.error
        return ProbeResult(
            found=self.found,
            found_in="stub" if self.found else None,
            search_path=["Checking stub"],
            interactions=1,
        )

    async def capture_diagnostic(self, label):
        self.diagnostics.append(label)
        return f"diagnostics/{label}.json"


@pytest.fixture
def sample_scene_dicts():
    """Provide a small three-scene adventure as raw content payloads."""
    return [
        {
            "id": "s1",
            "title": "The Clinic",
            "location": "Clinic",
            "narrative": "Doc Vance sends you toward the Night Market.",
            "flags": ["adventure_start"],
            "npcs": [{"id": "vance", "name": "Doc Vance", "role": "The Companion"}],
            "challenges": [{"id": "records", "skill": "Tech", "dc": 12, "required": True}],
            "triggers": [{"id": "alarm", "label": "Alarm", "text": "An alarm sounds."}],
            "environment": {"Visual": "Lamps", "Smell": "Antiseptic"},
            "exits": [{"target": "s2"}],
        },
        {
            "id": "s2",
            "title": "The Market",
            "location": "Night Market",
            "narrative": "Stalls everywhere.",
            "npcs": [{"id": "ro", "name": "Ro", "role": "Fixer", "hostile": True}],
            "challenges": [{"id": "tail", "skill": "Streetwise", "dc": 15, "failure_damage": 1}],
            "transitions": [{"to": "s3"}],
        },
        {
            "id": "s3",
            "title": "The End",
            "location": "Rooftop",
            "type": "ending",
            "narrative": "It is over.",
            "flags": ["adventure_end"],
        },
    ]


@pytest.fixture
def sample_scenes(sample_scene_dicts):
    """Provide the sample adventure as parsed Scene models."""
    return parse_scenes(sample_scene_dicts)


@pytest.fixture
def sample_guide():
    """Provide a GM guide with one mystery, one NPC secret and a noir tone."""
    return {
        "overview": {"tone": "noir", "themes": ["Grief"]},
        "content": {
            "npc_manifest": {
                "allies": [
                    {
                        "id": "vance",
                        "description": "Vance runs the clinic",
                        "secret": "She sold the heart",
                        "revealCondition": "Read the records",
                    }
                ]
            }
        },
        "mysteries": [
            {"question": "Who stole the prototype?", "answer": "Ro", "revealScene": "s3"},
        ],
    }


@pytest.fixture
def memory_source(sample_scene_dicts, sample_guide):
    """Provide an in-memory content source holding the sample adventure as "demo"."""
    source = InMemoryContentSource()
    source.add_adventure("demo", sample_scene_dicts, sample_guide)
    return source


@pytest.fixture
def make_probe():
    """Provide a factory for StubProbe instances."""
    return StubProbe

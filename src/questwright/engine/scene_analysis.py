"""Per-scene metric accumulation."""

from __future__ import annotations

from questwright.models.content import Scene
from questwright.models.report import SceneAnalysis


def has_exit_path(scene: Scene) -> bool:
    """Whether a scene has any way forward.

    A scene counts as having an exit path if it declares exits, transitions
    or a next-scene pointer, or if it is an ending scene.
    """
    return bool(scene.exits or scene.transitions or scene.next_scene or scene.is_ending)


class SceneAnalyzer:
    """Builds one SceneAnalysis at a time.

    ``begin`` opens a record, the ``record_*`` methods update it, and
    ``finish`` closes it and hands it back for appending to the run list.
    Recording without an open scene is a programming error.
    """

    def __init__(self) -> None:
        self._current: SceneAnalysis | None = None

    @property
    def current(self) -> SceneAnalysis | None:
        return self._current

    @property
    def active(self) -> bool:
        return self._current is not None

    def _require(self) -> SceneAnalysis:
        if self._current is None:
            raise RuntimeError("No scene in progress; call begin() first")
        return self._current

    def begin(self, scene: Scene) -> SceneAnalysis:
        self._current = SceneAnalysis(
            scene_id=scene.id,
            title=scene.title,
            triggers_available=len(scene.triggers),
            npcs_present=len(scene.npcs),
            has_exit_path=has_exit_path(scene),
        )
        return self._current

    def record_check(self, passed: bool) -> None:
        analysis = self._require()
        analysis.checks_attempted += 1
        if passed:
            analysis.checks_passed += 1

    def record_trigger(self) -> None:
        self._require().triggers_fired += 1

    def record_interaction(self) -> None:
        self._require().npcs_interacted += 1

    def record_wounds(self, amount: int) -> None:
        self._require().wounds_taken += amount

    def record_exit(self, target: str) -> None:
        self._require().exits_taken.append(target)

    def record_issue(self, text: str) -> None:
        self._require().issues.append(text)

    def finish(self, completed: bool = True) -> SceneAnalysis:
        """Close the open record.

        Args:
            completed: False when the run terminated mid-scene

        Returns:
            The finished SceneAnalysis
        """
        analysis = self._require()
        analysis.completed = completed
        self._current = None
        return analysis

"""Shared fixtures for slsb tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from slsb.config import AppConfig, BuildSettings
from slsb.models import (
    DEFAULT_EVENT,
    Node,
    Package,
    Position,
    Scene,
    Sex,
    Stage,
    StageExtra,
)

SceneFactory = Callable[..., Scene]


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ~/.slsb and SLSB_* settings out of the tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for key in ("SLSB_DEFAULT_AUTHOR", "SLSB_BUILD__OUTPUT_DIR", "SLSB_CONFIG_FILE"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        config_dir=tmp_path / "config",
        projects_dir=tmp_path / "projects",
        build=BuildSettings(),
    )


@pytest.fixture
def make_scene() -> SceneFactory:
    """Build a linear scene.

    ``stages`` is a list of stages, each a list of per-actor event lists.
    """

    def factory(
        name: str,
        races: list[str],
        stages: list[list[list[str]]],
        *,
        fixed_len: float = 0.0,
        anim_obj: str = "",
        has_warnings: bool = False,
    ) -> Scene:
        templates = [
            Position(event=[DEFAULT_EVENT], race=race, sex=Sex(female=i == 0, male=i != 0))
            for i, race in enumerate(races)
        ]
        stage_models = [
            Stage(
                positions=[
                    Position(event=events, race=races[n], anim_obj=anim_obj)
                    for n, events in enumerate(stage_events)
                ],
                tags=["test"],
                extra=StageExtra(fixed_len=fixed_len),
            )
            for stage_events in stages
        ]
        scene = Scene(
            name=name,
            positions=templates,
            stages=stage_models,
            has_warnings=has_warnings,
        )
        if stage_models:
            scene.root = stage_models[0].id
        next_id: str | None = None
        for stage in reversed(stage_models):
            scene.graph[stage.id] = Node(dest=[next_id] if next_id else [])
            next_id = stage.id
        return scene

    return factory


@pytest.fixture
def sample_package(make_scene: SceneFactory) -> Package:
    package = Package(name="TestPack", author="Tester", prefix="Tp01")
    package.save_scene(
        make_scene(
            "Missionary",
            ["Human", "Human"],
            [[["mis_a1_s1"], ["mis_a2_s1"]], [["mis_a1_s2"], ["mis_a2_s2"]]],
        )
    )
    package.save_scene(
        make_scene(
            "Doggy",
            ["Human", "Dog"],
            [[["dog_a1_s1"], ["dog_a2_s1"]]],
        )
    )
    return package


@pytest.fixture
def legacy_document() -> dict[str, object]:
    """A legacy list with one human and one creature animation."""
    return {
        "name": "LegacyPack",
        "animations": [
            {
                "name": "Threesome",
                "tags": "Vaginal, Oral ,MFF,",
                "stage": [{"number": 1, "timer": 7.5}],
                "actors": [
                    {
                        "type": "Female",
                        "stages": [{"id": "LP_3some_A1_S1"}, {"id": "LP_3some_A1_S2"}],
                    },
                    {
                        "type": "Male",
                        "stages": [{"id": "LP_3some_A2_S1"}, {"id": "LP_3some_A2_S2"}],
                    },
                    {
                        "type": "Female",
                        "stages": [{"id": "LP_3some_A3_S1"}, {"id": "LP_3some_A3_S2"}],
                    },
                ],
            },
            {
                "name": "Wolf Pack",
                "creature_race": "Wolves",
                "actors": [
                    {"type": "Female", "stages": [{"id": "LP_wolf_A1_S1"}]},
                    {"type": "CreatureMale", "stages": [{"id": "LP_wolf_A2_S1"}]},
                ],
            },
        ],
    }

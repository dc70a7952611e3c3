"""Tests for legacy (SLAL) document ingestion."""

from __future__ import annotations

import copy
import json
from typing import TYPE_CHECKING

import pytest

from slsb.errors import (
    ConsistencyError,
    LegacyFormatError,
    ProjectLoadError,
    UnknownRaceError,
    UnknownSexError,
)
from slsb.models import CURRENT_VERSION, DEFAULT_EVENT, Package, Sex
from slsb.pipeline.legacy import import_legacy, import_legacy_file, parse_legacy

if TYPE_CHECKING:
    from pathlib import Path


def _scene_named(package, name):
    return next(s for s in package.scenes.values() if s.name == name)


def test_three_actors_two_stages(legacy_document):
    package = import_legacy(legacy_document)
    scene = _scene_named(package, "Threesome")

    assert len(scene.stages) == 2
    assert all(len(stage.positions) == 3 for stage in scene.stages)
    first, second = scene.stages
    assert scene.root == first.id
    assert scene.graph[first.id].dest == [second.id]
    assert scene.graph[second.id].dest == []


def test_package_metadata_and_version(legacy_document):
    package = import_legacy(legacy_document)
    assert package.name == "LegacyPack"
    assert package.version == CURRENT_VERSION
    assert len(package.scenes) == 2


def test_events_sex_and_race(legacy_document):
    scene = _scene_named(import_legacy(legacy_document), "Threesome")
    first = scene.stages[0]
    assert [p.event for p in first.positions] == [
        ["LP_3some_A1_S1"],
        ["LP_3some_A2_S1"],
        ["LP_3some_A3_S1"],
    ]
    assert first.positions[0].sex == Sex(female=True)
    assert first.positions[1].sex == Sex(male=True)
    assert all(p.race == "Human" for p in first.positions)


def test_templates_built_by_migration(legacy_document):
    scene = _scene_named(import_legacy(legacy_document), "Wolf Pack")
    assert [p.race for p in scene.positions] == ["Human", "Wolf"]
    assert all(p.event == [DEFAULT_EVENT] for p in scene.positions)


def test_tags_shared_and_normalised(legacy_document):
    scene = _scene_named(import_legacy(legacy_document), "Threesome")
    assert scene.stages[0].tags == ["vaginal", "oral", "mff"]
    assert scene.stages[1].tags == scene.stages[0].tags


def test_missing_tags_give_empty_set(legacy_document):
    scene = _scene_named(import_legacy(legacy_document), "Wolf Pack")
    assert scene.stages[0].tags == []


def test_stage_timer_sets_fixed_length(legacy_document):
    scene = _scene_named(import_legacy(legacy_document), "Threesome")
    assert scene.stages[0].extra.fixed_len == 0.0
    assert scene.stages[1].extra.fixed_len == 7.5


def test_climax_only_on_last_stage(legacy_document):
    scene = _scene_named(import_legacy(legacy_document), "Threesome")
    assert not any(p.extra.climax for p in scene.stages[0].positions)
    assert all(p.extra.climax for p in scene.stages[1].positions)


def test_creature_race_falls_back_to_animation(legacy_document):
    scene = _scene_named(import_legacy(legacy_document), "Wolf Pack")
    creature = scene.stages[0].positions[1]
    assert creature.race == "Wolf"
    assert creature.sex == Sex(male=True)


def test_actor_race_overrides_animation(legacy_document):
    doc = copy.deepcopy(legacy_document)
    doc["animations"][1]["actors"][1]["race"] = "Dogs"
    scene = _scene_named(import_legacy(doc), "Wolf Pack")
    assert scene.stages[0].positions[1].race == "Dog"


def test_creature_female(legacy_document):
    doc = copy.deepcopy(legacy_document)
    doc["animations"][1]["actors"][1]["type"] = "CreatureFemale"
    scene = _scene_named(import_legacy(doc), "Wolf Pack")
    assert scene.stages[0].positions[1].sex == Sex(female=True)


def test_missing_type_defaults_to_male(legacy_document):
    doc = copy.deepcopy(legacy_document)
    del doc["animations"][0]["actors"][0]["type"]
    scene = _scene_named(import_legacy(doc), "Threesome")
    assert scene.stages[0].positions[0].sex == Sex(male=True)


def test_literal_type_value_means_male(legacy_document):
    doc = copy.deepcopy(legacy_document)
    doc["animations"][0]["actors"][0]["type"] = "Type"
    scene = _scene_named(import_legacy(doc), "Threesome")
    assert scene.stages[0].positions[0].sex == Sex(male=True)


def test_unknown_legacy_race_fails_whole_import(legacy_document):
    doc = copy.deepcopy(legacy_document)
    doc["animations"][1]["creature_race"] = "Unicorns"
    with pytest.raises(UnknownRaceError, match="Unicorns"):
        import_legacy(doc)


def test_creature_without_any_race_fails(legacy_document):
    doc = copy.deepcopy(legacy_document)
    del doc["animations"][1]["creature_race"]
    with pytest.raises(UnknownRaceError):
        import_legacy(doc)


def test_unknown_actor_type(legacy_document):
    doc = copy.deepcopy(legacy_document)
    doc["animations"][0]["actors"][2]["type"] = "Robot"
    with pytest.raises(UnknownSexError, match="robot"):
        import_legacy(doc)


def test_missing_field_reports_path(legacy_document):
    doc = copy.deepcopy(legacy_document)
    del doc["animations"][0]["actors"][1]["stages"][0]["id"]
    with pytest.raises(LegacyFormatError) as info:
        import_legacy(doc)
    assert info.value.path == "animations[0].actors[1].stages[0].id"


def test_missing_package_name():
    with pytest.raises(LegacyFormatError) as info:
        parse_legacy({"animations": []})
    assert info.value.path == "name"


def test_stage_count_mismatch(legacy_document):
    doc = copy.deepcopy(legacy_document)
    doc["animations"][0]["actors"][2]["stages"].pop()
    with pytest.raises(LegacyFormatError) as info:
        import_legacy(doc)
    assert info.value.path == "animations[0].actors[2].stages"


def test_animation_without_stages(legacy_document):
    doc = copy.deepcopy(legacy_document)
    for actor in doc["animations"][1]["actors"]:
        actor["stages"] = []
    with pytest.raises(ConsistencyError, match="no stages"):
        import_legacy(doc)


def test_animation_without_actors(legacy_document):
    doc = copy.deepcopy(legacy_document)
    doc["animations"][1]["actors"] = []
    with pytest.raises(LegacyFormatError, match="no actors"):
        import_legacy(doc)


def test_import_legacy_file(legacy_document, tmp_path: Path):
    path = tmp_path / "LegacyPack.json"
    path.write_text(json.dumps(legacy_document))
    package = import_legacy_file(path)
    assert len(package.scenes) == 2


def test_import_legacy_file_errors(tmp_path: Path):
    with pytest.raises(ProjectLoadError, match="cannot read"):
        import_legacy_file(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("[")
    with pytest.raises(ProjectLoadError, match="invalid JSON"):
        import_legacy_file(bad)


def test_null_type_means_male(legacy_document):
    doc = copy.deepcopy(legacy_document)
    doc["animations"][0]["actors"][0]["type"] = None
    scene = _scene_named(import_legacy(doc), "Threesome")
    assert scene.stages[0].positions[0].sex == Sex(male=True)


def test_negative_stage_timer_is_rejected(legacy_document):
    doc = copy.deepcopy(legacy_document)
    doc["animations"][0]["stage"] = [{"number": 0, "timer": -2.0}]
    with pytest.raises(LegacyFormatError) as info:
        import_legacy(doc)
    assert info.value.path == "animations[0].stage[0].timer"


def test_imported_package_round_trips(legacy_document, tmp_path: Path):
    package = import_legacy(legacy_document)
    path = package.save(tmp_path / "LegacyPack.slsb.json")
    loaded = Package.load(path)
    assert loaded.scenes == package.scenes

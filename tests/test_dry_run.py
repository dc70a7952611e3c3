"""Tests for dry-run build validation."""

from pathlib import Path

from slsb.models import Package, Scene
from slsb.pipeline.export import DryRunCheck, DryRunResult, validate_build


def test_dry_run_result_valid():
    result = DryRunResult(checks=[DryRunCheck(label="a", passed=True)])
    assert result.valid


def test_dry_run_result_invalid():
    result = DryRunResult(
        checks=[DryRunCheck(label="a", passed=True), DryRunCheck(label="b", passed=False)]
    )
    assert not result.valid


def test_validate_build_passes(sample_package: Package, tmp_path: Path, app_config):
    result = validate_build(sample_package, tmp_path, app_config=app_config)
    assert result.valid
    assert result.output_dir == tmp_path
    assert result.estimated_files == 4
    assert result.files[0] == tmp_path / "SKSE" / "SexLab" / "Registry" / "TestPack.slr"
    assert "2 scenes included" in result.checks[1].label


def test_validate_build_writes_nothing(sample_package: Package, tmp_path: Path, app_config):
    validate_build(sample_package, tmp_path / "out", app_config=app_config)
    assert not (tmp_path / "out").exists()


def test_validate_build_counts_excluded(sample_package: Package, tmp_path: Path, make_scene, app_config):
    sample_package.save_scene(make_scene("wip", ["Human"], [[["w"]]], has_warnings=True))
    result = validate_build(sample_package, tmp_path, app_config=app_config)
    assert result.valid
    assert result.checks[1].label == "2 scenes included, 1 excluded (warnings or no stages)"


def test_validate_build_reports_inconsistent_scene(sample_package: Package, tmp_path: Path, app_config):
    sample_package.save_scene(Scene(name="Empty"))
    result = validate_build(sample_package, tmp_path, app_config=app_config)
    assert not result.valid
    failed = [c for c in result.checks if not c.passed]
    assert failed[0].label == 'Scene "Empty" consistent'
    assert "0 stages" in failed[0].message
    assert result.estimated_files == 1


def test_validate_build_reports_unmapped_races(make_scene, tmp_path: Path, app_config):
    package = Package(name="Odd")
    package.save_scene(make_scene("s", ["Unicorn", "Human"], [[["u"], ["h"]]]))
    result = validate_build(package, tmp_path, app_config=app_config)
    assert not result.valid
    race_check = result.checks[-1]
    assert race_check.label == "Race folders available"
    assert race_check.message == "Unmapped: Unicorn"

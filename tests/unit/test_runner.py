"""Unit tests for the export runner and its configuration."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from slotsnap.audit import AuditLogger
from slotsnap.engine import ExportConfig, ExportResult, prepare_output_dir, run_export
from slotsnap.errors import ConfigurationError
from slotsnap.models import ContractIdentity

FOO = ContractIdentity("contracts/Foo.sol", "Foo")
BASE = ContractIdentity("@openzeppelin/contracts-upgradeable/proxy/Base.sol", "Base")

# ---------------------------------------------------------------------------
# ExportConfig
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_export_config_defaults() -> None:
    """Test ExportConfig default values."""
    config = ExportConfig()

    assert config.project_root == Path(".")
    assert config.artifacts_dir == Path("artifacts")
    assert config.output_dir == Path("storage_layout")
    assert config.library_prefix == "@openzeppelin/contracts-upgradeable"
    assert config.suppressed_prefixes == ("@openzeppelin",)
    assert config.include_empty_rows is False
    assert config.max_workers == 1


@pytest.mark.unit
def test_export_config_paths_relative_to_root(tmp_path: Path) -> None:
    """Test relative directories are anchored at the project root."""
    config = ExportConfig(project_root=tmp_path, artifacts_dir=Path("build"), output_dir="out")

    assert config.artifacts_path == (tmp_path / "build").resolve()
    assert config.output_path == (tmp_path / "out").resolve()


@pytest.mark.unit
def test_export_config_artifacts_path_falls_back_to_default(tmp_path: Path) -> None:
    """Test a cleared artifacts_dir still resolves to <root>/artifacts."""
    config = ExportConfig(project_root=tmp_path)
    config.artifacts_dir = None

    assert config.artifacts_path == (tmp_path / "artifacts").resolve()


@pytest.mark.unit
@pytest.mark.parametrize(
    ("kwargs", "match"),
    [
        ({"max_workers": 0}, "max_workers must be >= 1"),
        ({"library_prefix": ""}, "library_prefix must not be empty"),
    ],
    ids=["zero_workers", "empty_prefix"],
)
def test_export_config_validation(kwargs: dict, match: str) -> None:
    """Test ExportConfig rejects invalid parameters."""
    with pytest.raises(ValueError, match=match):
        ExportConfig(**kwargs)


@pytest.mark.unit
def test_export_config_to_dict() -> None:
    """Test to_dict is JSON serializable."""
    data = ExportConfig(suppressed_prefixes=["@a", "@b"]).to_dict()

    assert data["suppressed_prefixes"] == ["@a", "@b"]
    assert json.dumps(data)


@pytest.mark.unit
def test_export_result_to_dict_omits_table() -> None:
    """Test result serialization leaves out the table object."""
    data = ExportResult(success=False, error_message="boom").to_dict()

    assert "table" not in data
    assert data["error_message"] == "boom"


# ---------------------------------------------------------------------------
# prepare_output_dir
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_prepare_output_dir_creates_directory(tmp_path: Path) -> None:
    """Test the output directory is created inside the project."""
    out = prepare_output_dir(ExportConfig(project_root=tmp_path, output_dir=Path("a/b")))

    assert out.is_dir()
    assert out == (tmp_path / "a" / "b").resolve()


@pytest.mark.unit
@pytest.mark.parametrize("output_dir", ["../elsewhere", "/"], ids=["parent", "absolute"])
def test_prepare_output_dir_outside_root(tmp_path: Path, output_dir: str) -> None:
    """Test an output directory outside the project is a configuration error."""
    project = tmp_path / "project"
    project.mkdir()

    with pytest.raises(ConfigurationError, match="inside the project directory"):
        prepare_output_dir(ExportConfig(project_root=project, output_dir=Path(output_dir)))

    assert not (tmp_path / "elsewhere").exists()


# ---------------------------------------------------------------------------
# run_export
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_run_export_success(
    write_project: Callable[..., Path],
    make_build_info: Callable[..., dict[str, Any]],
    make_slot: Callable[..., dict[str, Any]],
) -> None:
    """Test a successful export writes output.json and reports counts."""
    doc = make_build_info(
        {
            (BASE.source_origin, "Base"): [make_slot(2, "_initialized")],
            (FOO.source_origin, "Foo"): [make_slot(2, "_initialized"), make_slot(3, "x", 1)],
        }
    )
    root = write_project({"a": doc}, [FOO, BASE])

    result = run_export(ExportConfig(project_root=root))

    assert result.success
    assert result.units_processed == 1
    assert result.contracts_catalogued == 2
    assert result.rows == 1
    assert result.variables == 1
    assert result.output_file == str((root / "storage_layout" / "output.json").resolve())
    data = json.loads(Path(result.output_file).read_text(encoding="utf-8"))
    assert data[0]["name"] == "Foo"
    assert [v["name"] for v in data[0]["stateVariables"]] == ["x"]


@pytest.mark.unit
def test_run_export_resolution_failure_writes_nothing(
    write_project: Callable[..., Path],
    make_build_info: Callable[..., dict[str, Any]],
    make_slot: Callable[..., dict[str, Any]],
) -> None:
    """Test a missing type descriptor fails the export with no output file."""
    doc = make_build_info({(FOO.source_origin, "Foo"): [make_slot(1, "x", type_ref="t_gone")]})
    root = write_project({"a": doc}, [FOO])

    result = run_export(ExportConfig(project_root=root))

    assert not result.success
    assert result.error_message is not None
    assert result.error_message.startswith("ResolutionFailure:")
    assert "t_gone" in result.error_message
    assert "build-info/a.json" in result.error_message
    assert result.output_file is None
    assert not (root / "storage_layout" / "output.json").exists()


@pytest.mark.unit
def test_run_export_configuration_error(tmp_path: Path) -> None:
    """Test an output directory outside the project fails before discovery."""
    result = run_export(ExportConfig(project_root=tmp_path, output_dir=Path("..")))

    assert not result.success
    assert result.error_message is not None
    assert result.error_message.startswith("ConfigurationError:")
    assert result.units_processed == 0


@pytest.mark.unit
def test_run_export_missing_artifacts(tmp_path: Path) -> None:
    """Test a project that was never compiled fails with a clear message."""
    result = run_export(ExportConfig(project_root=tmp_path))

    assert not result.success
    assert "Artifacts directory not found" in (result.error_message or "")


@pytest.mark.unit
def test_run_export_logs_events(
    write_project: Callable[..., Path],
    make_build_info: Callable[..., dict[str, Any]],
    make_slot: Callable[..., dict[str, Any]],
    tmp_path: Path,
) -> None:
    """Test the audit logger receives stage, unit and artifact events."""
    doc = make_build_info({(FOO.source_origin, "Foo"): [make_slot(1, "x")]})
    root = write_project({"a": doc}, [FOO])
    log_path = tmp_path / "events.jsonl"

    with AuditLogger(run_id="r", log_path=log_path) as logger:
        result = run_export(ExportConfig(project_root=root), logger=logger)

    assert result.success
    events = [json.loads(line) for line in log_path.read_text().splitlines()]
    names = [e["event"] for e in events]
    assert names[0] == "run_started"
    assert names[-1] == "run_finished"
    assert names.count("stage_started") == 3
    assert "artifact_written" in names
    unit_event = next(e for e in events if e["event"] == "unit_processed")
    assert unit_event["unit"] == "build-info/a.json"
    assert unit_event["data"] == {"excluded_slots": 0, "rows": 1, "variables": 1}


@pytest.mark.unit
def test_run_export_logs_failure(tmp_path: Path) -> None:
    """Test a failed export logs an error event and a failed run."""
    log_path = tmp_path / "log" / "events.jsonl"

    with AuditLogger(run_id="r", log_path=log_path) as logger:
        result = run_export(ExportConfig(project_root=tmp_path), logger=logger)

    assert not result.success
    events = [json.loads(line) for line in log_path.read_text().splitlines()]
    error = next(e for e in events if e["event"] == "error")
    assert error["level"] == "ERROR"
    assert error["data"]["exception_class"] == "FileNotFoundError"
    assert events[-1]["data"]["status"] == "failed"

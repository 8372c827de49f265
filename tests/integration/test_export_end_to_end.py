"""Integration tests for exporting a compiled Hardhat project.

Uses the artifacts tree under ``tests/fixtures/hardhat_project``: an
upgradeable ``Box`` built on OpenZeppelin's ``OwnableUpgradeable``, an
interface without storage, and a second compilation unit holding a plain
``Counter`` and a library without storage layout.
"""

import json
import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from slotsnap import export_storage_layout
from slotsnap.cli.main import cli
from slotsnap.engine import ExportConfig, run_export

_FIXTURE_PROJECT = Path(__file__).parent.parent / "fixtures" / "hardhat_project"

EXPECTED_OUTPUT = [
    {
        "name": "Box",
        "stateVariables": [
            {
                "name": "_value",
                "slot": "101",
                "offset": 0,
                "type": "t_uint256",
                "source": "contracts/Box.sol",
                "numberOfBytes": "32",
            },
            {
                "name": "balances",
                "slot": "102",
                "offset": 0,
                "type": "t_mapping(t_address,t_uint256)",
                "source": "contracts/Box.sol",
                "numberOfBytes": "32",
            },
        ],
    },
    {
        "name": "Counter",
        "stateVariables": [
            {
                "name": "count",
                "slot": "0",
                "offset": 0,
                "type": "t_uint256",
                "source": "contracts/Counter.sol",
                "numberOfBytes": "32",
            },
            {
                "name": "paused",
                "slot": "1",
                "offset": 0,
                "type": "t_bool",
                "source": "contracts/Counter.sol",
                "numberOfBytes": "1",
            },
            {
                "name": "admin",
                "slot": "1",
                "offset": 1,
                "type": "t_address",
                "source": "contracts/Counter.sol",
                "numberOfBytes": "20",
            },
        ],
    },
]


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Writable copy of the fixture project."""
    root = tmp_path / "hardhat_project"
    shutil.copytree(_FIXTURE_PROJECT, root)
    return root


@pytest.mark.integration
def test_export_fixture_project(project: Path) -> None:
    """Test the full export drops OpenZeppelin slots across the project."""
    result = run_export(ExportConfig(project_root=project))

    assert result.success, result.error_message
    assert result.error_message is None
    assert result.units_processed == 2
    assert result.contracts_catalogued == 7
    assert result.rows == 2
    assert result.variables == 5

    output_path = project / "storage_layout" / "output.json"
    assert Path(result.output_file) == output_path.resolve()
    with output_path.open(encoding="utf-8") as f:
        assert json.load(f) == EXPECTED_OUTPUT


@pytest.mark.integration
def test_export_fixture_project_with_empty_rows(project: Path) -> None:
    """Test the storage-less interface appears only when empty rows are kept."""
    result = export_storage_layout(project, include_empty_rows=True)

    data = json.loads(Path(result.output_file).read_text(encoding="utf-8"))

    # Math has no storage layout at all and is never reported
    assert [row["name"] for row in data] == ["Box", "IBox", "Counter"]
    assert data[1]["stateVariables"] == []


@pytest.mark.integration
def test_export_is_byte_identical_across_runs(project: Path) -> None:
    """Test repeated exports produce the same bytes, with or without threads."""
    output_path = project / "storage_layout" / "output.json"

    run_export(ExportConfig(project_root=project))
    first = output_path.read_bytes()
    run_export(ExportConfig(project_root=project, max_workers=4))
    second = output_path.read_bytes()

    assert first == second
    assert first.startswith(b'[\n  {\n    "name": "Box"')


@pytest.mark.integration
def test_cli_export_then_show(project: Path) -> None:
    """Test the CLI export and show commands against the fixture project."""
    runner = CliRunner()

    export_result = runner.invoke(cli, ["export", str(project), "--audit-log"])

    assert export_result.exit_code == 0, export_result.output
    assert "Wrote 2 contracts (5 state variables)" in export_result.output
    assert "_owner" not in export_result.output
    assert "__gap" not in export_result.output

    events_path = project / "storage_layout" / "events.jsonl"
    events = [json.loads(line) for line in events_path.read_text().splitlines()]
    units = [e["unit"] for e in events if e["event"] == "unit_processed"]
    assert units == ["build-info/2f1a6c0e9d.json", "build-info/9c3e07b4aa.json"]
    excluded = [e["data"]["excluded_slots"] for e in events if e["event"] == "unit_processed"]
    assert excluded == [5, 0]

    show_result = runner.invoke(cli, ["show", str(project / "storage_layout" / "output.json")])

    assert show_result.exit_code == 0
    assert "balances" in show_result.output
    assert "admin" in show_result.output

"""Integration tests for the command line entry point."""

import json
import logging
from pathlib import Path

import pytest
from mongomock import MongoClient

from tracklog import __main__ as cli
from tracklog.activities import Activity, ActivityType
from tracklog.storage import ActivityRepository, ActivityTypeRepository

CONFIG_DIR = Path(__file__).parent.parent.parent / "config"
TEST_CONFIG = ["--config", str(CONFIG_DIR / "test.yaml")]

pytestmark = pytest.mark.integration


class FakeStorage:
    """Stand-in for MongoStorageClient backed by a mongomock database."""

    def __init__(self, db) -> None:
        self.activity_types = ActivityTypeRepository(db["activity_types"])
        self.activities = ActivityRepository(db["activities"])

    def __enter__(self) -> "FakeStorage":
        return self

    def __exit__(self, *exc) -> None:
        pass


@pytest.fixture
def db():
    """Create a mock MongoDB database shared by every CLI call in a test."""
    return MongoClient()["tracklog_cli"]


@pytest.fixture
def gaming_id(db, monkeypatch: pytest.MonkeyPatch) -> str:
    """Seed a gaming toggle with a started session and route the CLI to it."""
    monkeypatch.setattr(cli, "MongoStorageClient", lambda *args, **kwargs: FakeStorage(db))

    storage = FakeStorage(db)
    type_id = storage.activity_types.create(
        ActivityType(
            id=None,
            name="gaming",
            toggle=True,
            start_label="Start gaming",
            end_label="Stop gaming",
        )
    )
    storage.activities.insert(
        Activity(type_id=type_id, timestamp=1, status="start", description="Game: Go")
    )
    return type_id


def stored_activities(db, type_id: str) -> list[Activity]:
    return [Activity.from_dict(doc) for doc in db["activities"].find({"type_id": type_id})]


class TestCLI:
    """Tests for main()."""

    def test_dry_run(self) -> None:
        """Test dry run loads config and exits cleanly."""
        assert cli.main([*TEST_CONFIG, "--dry-run"]) == 0

    def test_missing_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test missing config file exits with error."""
        assert cli.main(["--config", str(tmp_path / "nope.yaml"), "menu"]) == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_no_command(self) -> None:
        """Test running without a command is a usage error."""
        assert cli.main(TEST_CONFIG) == 2

    def test_logs_config_path(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test an explicit config file is logged instead of a profile."""
        caplog.set_level(logging.INFO)

        cli.main([*TEST_CONFIG, "--dry-run"])

        assert f"Config: {CONFIG_DIR / 'test.yaml'}" in caplog.text
        assert "Profile:" not in caplog.text

    def test_logs_profile(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the selected profile is logged when no config file is given."""
        caplog.set_level(logging.INFO)

        cli.main(["--profile", "test", "--dry-run"])

        assert "Profile: test" in caplog.text


class TestMenuCommand:
    """Tests for the menu subcommand."""

    def test_menu_v1(self, gaming_id: str, capsys: pytest.CaptureFixture[str]) -> None:
        """Test flat menu is printed one label per line."""
        assert cli.main([*TEST_CONFIG, "menu"]) == 0

        out = capsys.readouterr().out.splitlines()
        assert len(out) == 1
        assert out[0].startswith("Stop gaming (")

    def test_menu_v2_json(self, gaming_id: str, capsys: pytest.CaptureFixture[str]) -> None:
        """Test grouped menu JSON output."""
        assert cli.main([*TEST_CONFIG, "menu", "--v2", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["labels"][0].startswith("Stop gaming - Go (")
        assert data["ids"][0]["status"] == "end"
        assert data["ids"][0]["lastLogged"] == 1


class TestTypesCommand:
    """Tests for the types subcommands."""

    def test_add_single(self, db, gaming_id: str, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a toggle type is created from flags."""
        argv = [
            *TEST_CONFIG,
            "types",
            "add",
            "--name",
            "work",
            "--toggle",
            "--start-label",
            "Start work",
            "--end-label",
            "End work",
        ]

        assert cli.main(argv) == 0

        new_id = capsys.readouterr().out.strip()
        stored = FakeStorage(db).activity_types.get_by_id(new_id)
        assert stored is not None
        assert stored.toggle is True
        assert stored.end_label == "End work"

    def test_add_from_file(
        self, db, gaming_id: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test a JSON batch is created in order."""
        batch = tmp_path / "types.json"
        batch.write_text(
            json.dumps(
                [
                    {"name": "Water", "description": "Glass of water"},
                    {
                        "name": "reading",
                        "toggle": True,
                        "startLabel": "Start reading",
                        "endLabel": "End reading",
                    },
                ]
            )
        )

        assert cli.main([*TEST_CONFIG, "types", "add", "--file", str(batch)]) == 0

        assert len(capsys.readouterr().out.split()) == 2
        names = [t.name for t in FakeStorage(db).activity_types.find_all()]
        assert names == ["gaming", "Water", "reading"]

    def test_add_requires_name_or_file(self, gaming_id: str) -> None:
        """Test add without --name or --file is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main([*TEST_CONFIG, "types", "add", "--toggle"])

        assert exc_info.value.code == 2

    def test_list(self, gaming_id: str, capsys: pytest.CaptureFixture[str]) -> None:
        """Test types are listed with their IDs."""
        assert cli.main([*TEST_CONFIG, "types", "list"]) == 0

        assert capsys.readouterr().out.splitlines() == [f"{gaming_id}\tgaming\ttoggle"]

    def test_edit(self, db, gaming_id: str) -> None:
        """Test edit changes only the given fields."""
        argv = [*TEST_CONFIG, "types", "edit", gaming_id, "--start-label", "Play"]

        assert cli.main(argv) == 0

        stored = FakeStorage(db).activity_types.get_by_id(gaming_id)
        assert stored is not None
        assert stored.start_label == "Play"
        assert stored.end_label == "Stop gaming"

    def test_edit_unknown_type(self, gaming_id: str, capsys: pytest.CaptureFixture[str]) -> None:
        """Test editing a missing type fails."""
        argv = [*TEST_CONFIG, "types", "edit", "0123456789abcdef01234567", "--name", "x"]

        assert cli.main(argv) == 1
        assert "not found" in capsys.readouterr().err

    def test_edit_without_fields(self, gaming_id: str, capsys: pytest.CaptureFixture[str]) -> None:
        """Test edit with nothing to change is rejected."""
        assert cli.main([*TEST_CONFIG, "types", "edit", gaming_id]) == 2
        assert "Missing name" in capsys.readouterr().err

    def test_rm(self, db, gaming_id: str) -> None:
        """Test a type is deleted once."""
        assert cli.main([*TEST_CONFIG, "types", "rm", gaming_id]) == 0
        assert FakeStorage(db).activity_types.get_by_id(gaming_id) is None
        assert cli.main([*TEST_CONFIG, "types", "rm", gaming_id]) == 1


class TestLogCommand:
    """Tests for the log subcommand."""

    def test_log_next_action_from_menu(
        self, db, gaming_id: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test an 'id,status' menu entry logs that action and flips the menu."""
        cli.main([*TEST_CONFIG, "menu", "--json"])
        entry = json.loads(capsys.readouterr().out)["ids"][0]
        assert entry == f"{gaming_id},end"

        assert cli.main([*TEST_CONFIG, "log", entry]) == 0
        capsys.readouterr()

        latest = max(stored_activities(db, gaming_id), key=lambda a: a.timestamp)
        assert latest.status == "end"

        cli.main([*TEST_CONFIG, "menu"])
        assert capsys.readouterr().out.startswith("Start gaming (")

    def test_log_with_status_and_description(self, db, gaming_id: str) -> None:
        """Test explicit status and description are stored."""
        argv = [
            *TEST_CONFIG,
            "log",
            gaming_id,
            "--status",
            "start",
            "--description",
            "Game: Chess",
        ]

        assert cli.main(argv) == 0

        latest = max(stored_activities(db, gaming_id), key=lambda a: a.timestamp)
        assert latest.status == "start"
        assert latest.description == "Game: Chess"
        assert latest.timestamp > 1

    def test_log_plain_type_has_no_status(self, db, gaming_id: str) -> None:
        """Test non-toggle types are logged without a status."""
        water_id = FakeStorage(db).activity_types.create(ActivityType(id=None, name="Water"))

        assert cli.main([*TEST_CONFIG, "log", water_id, "--status", "start"]) == 0

        [logged] = stored_activities(db, water_id)
        assert logged.status is None

    def test_log_unknown_type(self, gaming_id: str, capsys: pytest.CaptureFixture[str]) -> None:
        """Test logging against a missing type fails."""
        assert cli.main([*TEST_CONFIG, "log", "0123456789abcdef01234567"]) == 1
        assert "not found" in capsys.readouterr().err

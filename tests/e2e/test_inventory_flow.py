"""E2E test: add → list → edit → log → delete flow against real files.

This is the happy path. If this doesn't work, nothing works.
"""

import json

import pytest
from unittest.mock import patch
from typer.testing import CliRunner

from junkyard.cli.app import app
from junkyard.core.config import SettingsManager
from junkyard.core.storage import STORAGE_KEY
from junkyard.models.settings import Settings

runner = CliRunner()


@pytest.fixture
def yard(tmp_path):
    """Isolated settings plus the path of the vehicle document."""
    config_dir = tmp_path / ".config" / "junkyard"
    data_dir = tmp_path / "data"
    manager = SettingsManager(config_dir=config_dir)
    manager.save(Settings(data_dir=data_dir))

    with (
        patch("junkyard.cli.commands.vehicles.SettingsManager", return_value=manager),
        patch("junkyard.cli.commands.settings.SettingsManager", return_value=manager),
        patch("junkyard.cli.app.setup_logging"),
    ):
        yield data_dir / f"{STORAGE_KEY}.json"


def read_document(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestInventoryFlow:
    def test_full_lifecycle(self, yard):
        # Add one of each type
        for args in (
            ["sedan", "-n", "Daily Driver", "-m", "42000"],
            ["coupe", "-n", "Weekend", "-m", "8000", "--doors", "2"],
            ["mini-van", "-n", "Family Van", "-m", "91000", "--doors", "3", "--door-config", "rrs"],
            ["motorcycle", "-n", "Bike", "-m", "12000", "--seat", "fixable"],
        ):
            result = runner.invoke(app, ["add", *args])
            assert result.exit_code == 0, result.output

        document = read_document(yard)
        assert document["version"] == 1
        assert [v["type"] for v in document["vehicles"]] == [
            "sedan",
            "coupe",
            "mini-van",
            "motorcycle",
        ]
        assert all(v["registration"]["status"] == "registered" for v in document["vehicles"])
        van = document["vehicles"][2]
        assert van["doorConfig"] == [
            {"sliding": False},
            {"sliding": False},
            {"sliding": True},
        ]

        # List
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "4 vehicle(s)" in result.output

        # Edit keeps registration and creation time
        sedan_before = document["vehicles"][0]
        result = runner.invoke(app, ["edit", "daily driver", "-m", "43000", "--engine", "fixable"])
        assert result.exit_code == 0, result.output
        sedan_after = read_document(yard)["vehicles"][0]
        assert sedan_after["mileage"] == 43000
        assert sedan_after["engineStatus"] == "fixable"
        assert sedan_after["registration"] == sedan_before["registration"]
        assert sedan_after["createdAt"] == sedan_before["createdAt"]

        # Registration log
        result = runner.invoke(app, ["log"])
        assert result.exit_code == 0
        assert "4 total" in result.output
        assert sedan_before["registration"]["registrationId"] in result.output

        # Delete
        result = runner.invoke(app, ["delete", "Bike", "--yes"])
        assert result.exit_code == 0
        assert [v["nickname"] for v in read_document(yard)["vehicles"]] == [
            "Daily Driver",
            "Weekend",
            "Family Van",
        ]

        # Reset
        result = runner.invoke(app, ["reset", "--yes"])
        assert result.exit_code == 0
        assert not yard.exists()

    def test_corrupt_file_recovers(self, yard):
        yard.parent.mkdir(parents=True)
        yard.write_text("{ definitely not json", encoding="utf-8")

        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No vehicles yet" in result.output
        assert not yard.exists()

        result = runner.invoke(app, ["add", "sedan", "-n", "Fresh", "-m", "1"])
        assert result.exit_code == 0
        assert len(read_document(yard)["vehicles"]) == 1

    def test_legacy_policy_flow(self, yard):
        result = runner.invoke(app, ["settings", "--legacy-limits"])
        assert result.exit_code == 0

        runner.invoke(app, ["add", "motorcycle", "-n", "Old Bike", "-m", "60000"])
        runner.invoke(app, ["add", "motorcycle", "-n", "New Bike", "-m", "100"])

        registrations = {
            v["nickname"]: v["registration"] for v in read_document(yard)["vehicles"]
        }
        assert registrations["Old Bike"]["status"] == "failed"
        assert "Motorcycle mileage (60,000)" in registrations["Old Bike"]["registrationError"]
        assert registrations["New Bike"]["status"] == "registered"

        result = runner.invoke(app, ["log", "--status", "failed"])
        assert "Old Bike" in result.output
        assert "New Bike" not in result.output

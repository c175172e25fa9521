"""Shared pytest fixtures for ennio tests."""

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from ennio.actions import CallableAction
from ennio.output import Output, Status


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for tests that call external tools."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        yield mock_run


@pytest.fixture
def make_action():
    """Factory for actions returning a fixed output and recording their calls."""

    def factory(name, output=None, calls=None):
        output = output if output is not None else Output(Status.CHANGED)

        def run(ctx):
            if calls is not None:
                calls.append(name)
            return output

        return CallableAction(name, run)

    return factory


@pytest.fixture
def sample_config(tmp_path):
    """Create a sample workflow file."""
    config_file = tmp_path / "ennio.yml"
    config_file.write_text(
        """
name: release
logging:
  level: WARNING
actions:
  - name: version
    type: bash
    script: echo 1.2.3
  - name: announce
    type: bash
    script: echo "Releasing ${version.stdout}"
"""
    )
    return config_file

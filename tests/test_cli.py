"""Tests for CLI commands using Typer's CliRunner."""

from ennio.cli import app


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_version_option(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_option(self, cli_runner):
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "run" in result.output
        assert "validate" in result.output


class TestValidateCommand:
    """Tests for validate command."""

    def test_valid_file(self, cli_runner, sample_config):
        result = cli_runner.invoke(app, ["validate", str(sample_config)])
        assert result.exit_code == 0
        assert "version" in result.output
        assert "announce" in result.output

    def test_invalid_file(self, cli_runner, tmp_path):
        config_file = tmp_path / "bad.yml"
        config_file.write_text("name: wf\n")
        result = cli_runner.invoke(app, ["validate", str(config_file)])
        assert result.exit_code == 1

    def test_missing_file(self, cli_runner, tmp_path):
        result = cli_runner.invoke(app, ["validate", str(tmp_path / "missing.yml")])
        assert result.exit_code == 1


class TestRunCommand:
    """Tests for run command with subprocess mocked."""

    def test_run_success(self, cli_runner, sample_config, mock_subprocess):
        result = cli_runner.invoke(app, ["run", str(sample_config)])
        assert result.exit_code == 0
        assert mock_subprocess.call_count == 2
        assert "All actions succeeded" in result.output

    def test_run_renders_references(self, cli_runner, sample_config, mock_subprocess):
        mock_subprocess.return_value.stdout = "1.2.3"
        cli_runner.invoke(app, ["run", str(sample_config)])
        last_argv = mock_subprocess.call_args_list[-1][0][0]
        assert last_argv == ["bash", "-ec", 'echo "Releasing 1.2.3"']

    def test_run_failure_exit_code(self, cli_runner, sample_config, mock_subprocess):
        mock_subprocess.return_value.returncode = 1
        result = cli_runner.invoke(app, ["run", str(sample_config)])
        assert result.exit_code == 1
        # Both actions still executed
        assert mock_subprocess.call_count == 2
        assert "Failed" in result.output

    def test_run_json(self, cli_runner, sample_config, mock_subprocess):
        result = cli_runner.invoke(app, ["run", "--json", str(sample_config)])
        assert result.exit_code == 0
        assert '"status": "changed"' in result.output
        assert '"exit_code": 0' in result.output

    def test_run_invalid_config(self, cli_runner, tmp_path):
        config_file = tmp_path / "bad.yml"
        config_file.write_text("name: [unclosed\n")
        result = cli_runner.invoke(app, ["run", str(config_file)])
        assert result.exit_code == 1

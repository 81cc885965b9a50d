"""
Unit tests for the command-line runner.
"""
from pathlib import Path

import pytest

from nanoreactor.__main__ import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Test default arguments."""
        args = build_parser().parse_args([])
        assert args.preset is None
        assert args.steps == 1000
        assert args.log_interval == 100
        assert args.log_level == "INFO"

    def test_rejects_unknown_preset(self) -> None:
        """Test that argparse validates preset choices."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--preset", "fusion"])


class TestMain:
    """Tests for headless runs."""

    def test_runs_preset(self, capsys: pytest.CaptureFixture) -> None:
        """Test a short run prints a summary."""
        code = main(["--preset", "water-formation", "--steps", "5", "--seed", "1",
                     "--log-level", "WARNING"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Step 5" in out
        assert "Species:" in out

    def test_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Test that settings come from the YAML file."""
        path = tmp_path / "run.yaml"
        path.write_text("simulation:\n  dt: 0.25\nsystem:\n  preset: organic-mix\n  seed: 3\n")
        code = main(["--config", str(path), "--steps", "4", "--log-level", "WARNING"])
        out = capsys.readouterr().out
        assert code == 0
        assert "time 1.0 fs" in out

    def test_invalid_config(self, tmp_path: Path) -> None:
        """Test exit code 2 for a bad configuration."""
        path = tmp_path / "bad.yaml"
        path.write_text("simulation:\n  dt: -1\n")
        assert main(["--config", str(path), "--steps", "1"]) == 2

    def test_missing_config_file(self, tmp_path: Path) -> None:
        """Test exit code 2 when the file does not exist."""
        assert main(["--config", str(tmp_path / "absent.yaml")]) == 2

    def test_negative_steps(self) -> None:
        """Test exit code 2 for a negative step count."""
        assert main(["--steps", "-3"]) == 2

"""Tests for the command line entry point."""

import pytest

from wavemap import __version__
from wavemap.config import ENV_PREFIX, GenerationSettings
from wavemap.core import GenerationFailedError
from wavemap.main import main, run_generation


@pytest.fixture
def cli_env(monkeypatch, tmp_path, isolated_logging):
    """Run the CLI from an empty directory with no WAVEMAP_* variables."""
    for name in ("WIDTH", "HEIGHT", "SEED", "RULES", "DISTRIBUTION", "GENERATOR"):
        monkeypatch.delenv(f"{ENV_PREFIX}{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def map_lines(output: str, height: int) -> list[str]:
    """The map block printed after the banner (version, log file, blank line)."""
    return output.splitlines()[3:3 + height]


class TestMain:
    """Test end-to-end CLI runs."""

    def test_prints_map(self, cli_env, tmp_path, capsys):
        """A run prints the banner, a map of the requested size and a legend."""
        code = main(["--width", "6", "--height", "4", "--seed", "1",
                     "--no-progress", "--log-dir", str(tmp_path / "logs")])
        out = capsys.readouterr().out

        assert code == 0
        assert out.startswith(f"wavemap v{__version__}")
        rows = map_lines(out, 4)
        assert len(rows) == 4
        assert all(len(row) == 6 and set(row) <= set("~:.^") for row in rows)
        assert "Size: 6x4  Seed: 1" in out
        assert "Legend:" in out
        assert (tmp_path / "logs" / "debug.log").exists()

    def test_same_seed_same_output_map(self, cli_env, tmp_path, capsys):
        """Two runs with the same flags print the same map."""
        args = ["--width", "8", "--height", "8", "--no-progress", "--log-dir", str(tmp_path)]
        main(args)
        first = map_lines(capsys.readouterr().out, 8)
        main(args)
        assert map_lines(capsys.readouterr().out, 8) == first

    @pytest.mark.parametrize("generator", ["perlin", "simplex"])
    def test_noise_generators(self, cli_env, tmp_path, capsys, generator):
        """Noise generators are selectable from the command line."""
        code = main(["--generator", generator, "--width", "5", "--height", "3",
                     "--no-progress", "--log-dir", str(tmp_path)])
        out = capsys.readouterr().out
        assert code == 0
        assert f"Generator: {generator}" in out

    def test_environment_settings(self, cli_env, tmp_path, capsys):
        """WAVEMAP_* variables apply when no flag is given."""
        cli_env.setenv("WAVEMAP_WIDTH", "3")
        cli_env.setenv("WAVEMAP_HEIGHT", "2")
        assert main(["--no-progress", "--log-dir", str(tmp_path)]) == 0
        assert "Size: 3x2" in capsys.readouterr().out

    def test_invalid_settings(self, cli_env, tmp_path, capsys):
        """Out-of-range values exit with code 1 and a message."""
        code = main(["--width", "0", "--log-dir", str(tmp_path)])
        assert code == 1
        assert "Invalid settings" in capsys.readouterr().err

    def test_unknown_choice(self, cli_env, tmp_path):
        """argparse rejects unknown rule names."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--rules", "strict", "--log-dir", str(tmp_path)])
        assert exc_info.value.code == 2


class TestRunGeneration:
    """Test a single generation run."""

    def test_progress_bar_does_not_touch_stdout(self, capsys):
        """The progress bar goes to stderr; stdout holds only the map report."""
        code = run_generation(GenerationSettings(width=4, height=4, seed=2), show_progress=True)
        captured = capsys.readouterr()
        assert code == 0
        assert "Collapsing" not in captured.out
        assert len(captured.out.splitlines()[0]) == 4

    def test_failure_exit_code(self, monkeypatch, capsys):
        """A failed generation is reported and exits with code 1."""
        def fail(settings, progress_callback=None):
            raise GenerationFailedError("no luck", seed=settings.seed)

        monkeypatch.setattr("wavemap.main.generate_terrain_grid", fail)
        code = run_generation(GenerationSettings(), show_progress=False)
        assert code == 1
        assert "Error: no luck" in capsys.readouterr().err

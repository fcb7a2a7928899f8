"""Integration tests for the fit command on synthetic spectra."""

import json

import numpy as np
import pytest
from typer.testing import CliRunner

from ltfit.cli.app import app
from ltfit.core.domain.config import LTFitConfig, OutputConfig
from ltfit.io.config import save_config
from ltfit.io.output import CURVE_FILE, SUMMARY_FILE


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fit_files(tmp_path, single_decay_fit_set, synthesize, with_start_values):
    """Spectrum file drawn with tau 180 ps and a configuration starting at 150 ps."""
    truth = with_start_values(single_decay_fit_set, {"tau_1": 180.0, "I_1": 1.0})
    spectrum = synthesize(truth)
    spectrum_path = tmp_path / "spectrum.dat"
    np.savetxt(spectrum_path, spectrum.counts, fmt="%d")

    config_path = tmp_path / "ltfit.toml"
    save_config(
        LTFitConfig(fit=single_decay_fit_set, output=OutputConfig(directory=tmp_path / "Fits")),
        config_path,
    )
    return spectrum_path, config_path, tmp_path / "Fits"


class TestFitCommand:
    """Test the fit command end to end."""

    def test_fit_writes_results(self, runner, fit_files):
        spectrum_path, config_path, output_dir = fit_files
        result = runner.invoke(app, ["fit", str(spectrum_path), "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        assert "Fit Summary" in result.output
        summary = json.loads((output_dir / SUMMARY_FILE).read_text())
        assert summary["ok"] is True
        tau = next(param for param in summary["parameters"] if param["name"] == "tau_1")
        assert tau["fit_value"] == pytest.approx(180.0, abs=1.0)
        assert (output_dir / CURVE_FILE).exists()
        assert (output_dir / "ltfit.log").exists()

    def test_overrides(self, runner, fit_files, tmp_path):
        """Command-line options should override the configuration."""
        spectrum_path, config_path, _ = fit_files
        output_dir = tmp_path / "override"
        result = runner.invoke(
            app,
            [
                "fit",
                str(spectrum_path),
                "-c",
                str(config_path),
                "-o",
                str(output_dir),
                "--max-runs",
                "1",
                "--format",
                "json",
                "--quiet",
            ],
        )

        assert result.exit_code == 0, result.output
        summary = json.loads((output_dir / SUMMARY_FILE).read_text())
        assert summary["n_runs"] == 1
        assert not (output_dir / CURVE_FILE).exists()

    def test_invalid_format(self, runner, fit_files):
        spectrum_path, config_path, _ = fit_files
        result = runner.invoke(app, ["fit", str(spectrum_path), "-c", str(config_path), "-f", "xlsx"])
        assert result.exit_code == 1
        assert "Invalid output format" in result.output

    def test_invalid_region_override(self, runner, fit_files):
        """A stop channel before the start channel should be rejected."""
        spectrum_path, config_path, _ = fit_files
        result = runner.invoke(
            app, ["fit", str(spectrum_path), "-c", str(config_path), "--start", "500", "--stop", "100"]
        )
        assert result.exit_code == 1

    def test_region_outside_spectrum(self, runner, fit_files):
        """The message should name the region that holds no data."""
        spectrum_path, config_path, _ = fit_files
        result = runner.invoke(
            app, ["fit", str(spectrum_path), "-c", str(config_path), "--start", "5000", "--stop", "6000"]
        )
        output = " ".join(result.output.split())
        assert result.exit_code == 1
        assert "[5000:6000] holds fewer than two channels" in output

    def test_empty_spectrum_file(self, runner, fit_files, tmp_path):
        """An empty spectrum file should be reported as such."""
        _, config_path, _ = fit_files
        empty = tmp_path / "empty.dat"
        empty.write_text("")
        result = runner.invoke(app, ["fit", str(empty), "-c", str(config_path)])
        output = " ".join(result.output.split())
        assert result.exit_code == 1
        assert "Spectrum file is empty" in output
        assert "region of interest" not in output

"""Tests for result files, logging setup and result tables."""

import json
import logging

import pytest

from ltfit.core.domain.parameters import GroupKind
from ltfit.core.domain.spectrum import LifetimeSpectrum
from ltfit.core.results.report import FitReport, ParameterResult, RunSummary
from ltfit.core.shared.exceptions import DataIOError
from ltfit.io.output import CURVE_FILE, SUMMARY_FILE, write_outputs
from ltfit.ui.console import console
from ltfit.ui.logging import close_logging, setup_logging
from ltfit.ui.tables import print_conflicts, print_parameters, print_report, print_run_history


@pytest.fixture
def report() -> FitReport:
    return FitReport(
        status=1,
        status_message="OK. Convergence in chi-square.",
        state="converged",
        start_chi_square=4.2,
        final_chi_square=1.05,
        n_data=3,
        n_free=2,
        dof=1,
        counts_in_roi=160.0,
        average_lifetime=182.5,
        average_lifetime_error=1.5,
        intensity_sum=1.0,
        intensity_sum_error=0.02,
        peak_to_background=None,
        spectral_centroid=210.0,
        time_zero=25.0,
        total_iterations=17,
        runs=[
            RunSummary(run_index=1, status=1, iterations=15, start_chi_square=4.2, final_chi_square=1.06),
            RunSummary(run_index=2, status=1, iterations=2, start_chi_square=1.06, final_chi_square=1.05),
        ],
        parameters=[
            ParameterResult(
                group=GroupKind.SAMPLE,
                name="tau_1",
                alias="tau_1",
                start_value=150.0,
                fit_value=182.5,
                fit_value_error=1.5,
                fixed=False,
            )
        ],
        fit_curve=[(10, 9.5), (11, 80.2), (12, 40.1)],
        residuals=[(10, 0.1), (11, -0.2), (12, 0.3)],
    )


@pytest.fixture
def spectrum() -> LifetimeSpectrum:
    return LifetimeSpectrum.from_counts([10, 80, 40, 30], first_channel=10)


class TestWriteOutputs:
    """Tests for write_outputs."""

    def test_summary_json(self, report, spectrum, tmp_path):
        """The summary should hold statistics and history but no curves."""
        written = write_outputs(report, spectrum, tmp_path, ["json"])

        assert written == [tmp_path / SUMMARY_FILE]
        payload = json.loads(written[0].read_text())
        assert payload["final_chi_square"] == 1.05
        assert payload["n_runs"] == 2
        assert payload["ok"] is True
        assert payload["peak_to_background"] is None
        assert payload["parameters"][0]["group"] == "sample"
        assert "fit_curve" not in payload

    def test_curve_csv(self, report, spectrum, tmp_path):
        """The curve file should hold one row per bin."""
        (path,) = write_outputs(report, spectrum, tmp_path / "nested", ["csv"])

        assert path.name == CURVE_FILE
        lines = path.read_text().splitlines()
        assert lines[0] == "channel,observed,model,residual"
        assert len(lines) == 4
        assert lines[1].startswith("10,10,9.5")

    def test_unknown_format(self, report, spectrum, tmp_path):
        with pytest.raises(DataIOError, match="Unknown output format"):
            write_outputs(report, spectrum, tmp_path, ["xlsx"])

    def test_unwritable_directory(self, report, spectrum, tmp_path):
        """An output path blocked by a file should raise DataIOError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(DataIOError):
            write_outputs(report, spectrum, blocker / "out", ["json"])


class TestSetupLogging:
    """Tests for setup_logging."""

    def teardown_method(self):
        close_logging()

    def test_text_log_file(self, tmp_path):
        log_file = tmp_path / "ltfit.log"
        logger = setup_logging(log_file)
        logging.getLogger("ltfit.core.fitting.driver").info("Run 1 finished")
        close_logging()

        content = log_file.read_text()
        assert "session started" in content
        assert "ltfit.core.fitting.driver | Run 1 finished" in content
        assert logger.name == "ltfit"

    def test_json_log_file(self, tmp_path):
        """Every line of a JSON log should be a JSON object."""
        log_file = tmp_path / "ltfit.json"
        setup_logging(log_file, log_format="json")
        logging.getLogger("ltfit.services").warning("Run cap reached")
        close_logging()

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert records[-1]["level"] == "WARNING"
        assert records[-1]["message"] == "Run cap reached"

    def test_handlers_replaced(self, tmp_path):
        """Repeated setup should not stack handlers."""
        setup_logging(tmp_path / "a.log")
        logger = setup_logging(tmp_path / "b.log")
        assert len(logger.handlers) == 1


class TestTables:
    """Tests for the result tables."""

    def test_report_tables(self, report):
        with console.capture() as capture:
            print_report(report)
            print_parameters(report)
            print_run_history(report)
        text = capture.get()
        assert "Fit Summary" in text
        assert "182.5" in text
        assert "n/a" in text
        assert "Run History" in text

    def test_conflicts_table(self):
        with console.capture() as capture:
            print_conflicts({"sample": ["tau_1", "I_1"]})
        assert "tau_1, I_1" in capture.get()

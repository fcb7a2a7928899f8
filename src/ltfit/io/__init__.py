"""File input and output for LTFit."""

from ltfit.io.config import generate_default_config, load_config, save_config
from ltfit.io.output import write_curve_csv, write_outputs, write_summary_json
from ltfit.io.spectrum import load_spectrum

__all__ = [
    "generate_default_config",
    "load_config",
    "load_spectrum",
    "save_config",
    "write_curve_csv",
    "write_outputs",
    "write_summary_json",
]

"""Configuration file loading and saving."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from ltfit.core.domain.config import LTFitConfig
from ltfit.core.shared.exceptions import ConfigError

# Fit results stored on the parameters
_RESULT_FIELDS = {
    "fit": {
        group: {"parameters": {"__all__": {"fit_value", "fit_value_error"}}}
        for group in ("source", "sample", "irf", "background")
    }
}


def load_config(path: Path) -> LTFitConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        LTFitConfig: Validated configuration object.

    Raises:
        ConfigError: If the file is missing, not valid TOML, or fails validation.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise ConfigError(msg)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc

    try:
        return LTFitConfig.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid configuration in {path}:\n{exc}"
        raise ConfigError(msg) from exc


def save_config(config: LTFitConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Fit results are not part of the configuration and are left out.

    Args:
        config: Configuration object to save.
        path: Path where to save the TOML file.
    """
    data = config.model_dump(mode="json", exclude_none=True, exclude=_RESULT_FIELDS)

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# LTFit Configuration File
# Generated automatically - edit as needed
# Times (tau, FWHM, mu) are in picoseconds, mu relative to start_channel.

[fit]
start_channel = 0
stop_channel = 999
channel_resolution = 25.0   # ps per channel
max_iterations = 200        # iteration cap of one solver run
max_runs = 20               # consecutive solver runs (1-20)
convergence_threshold = 1e-5

# Source correction: (tau, I) pairs
[[fit.source.parameters]]
name = "tau_source"
alias = "tau_s"
start_value = 385.0
fixed = true

[[fit.source.parameters]]
name = "I_source"
alias = "I_s"
start_value = 0.1
fixed = true

# Sample components: (tau, I) pairs
[[fit.sample.parameters]]
name = "tau_1"
alias = "tau_1"
start_value = 180.0
lower_bound = 50.0
upper_bound = 1000.0

[[fit.sample.parameters]]
name = "I_1"
alias = "I_1"
start_value = 0.9
lower_bound = 0.0

# Instrument response: (FWHM, mu, I) triples
[[fit.irf.parameters]]
name = "fwhm_1"
alias = "FWHM_1"
start_value = 230.0
lower_bound = 100.0
upper_bound = 500.0

[[fit.irf.parameters]]
name = "mu_1"
alias = "mu_1"
start_value = 2500.0

[[fit.irf.parameters]]
name = "I_irf_1"
alias = "I_irf_1"
start_value = 1.0
fixed = true

[[fit.background.parameters]]
name = "background"
alias = "B"
start_value = 5.0

[output]
directory = "Fits"
formats = ["json", "csv"]
log_format = "text"  # text or json
"""

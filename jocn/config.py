"""
Configuration for bulk surface forcing.

The two namelist toggles are read once at model initialization into an
immutable BulkForcingConfig, which is then passed into every forcing call.
Default options live in jocn/conf/config.yaml and are composed with Hydra.
"""

import logging
from pathlib import Path
from typing import NamedTuple, Optional, Sequence

from hydra import compose, initialize_config_dir
from omegaconf import DictConfig, OmegaConf

from jocn.equation_of_state import FreezingParameters

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent / "conf"

WIND_STRESS_OPTION = "config_use_bulk_wind_stress"
THICKNESS_FLUX_OPTION = "config_use_bulk_thickness_flux"


class MissingConfigOptionError(ValueError):
    """Raised when a required namelist option is absent from the registry."""

    def __init__(self, name: str):
        super().__init__(f"Missing required configuration option: {name}")
        self.name = name


class BulkForcingConfig(NamedTuple):
    """Toggles for the bulk forcing terms, constant for the whole run."""

    use_bulk_wind_stress: bool = True
    use_bulk_thickness_flux: bool = True

    @classmethod
    def default(cls) -> 'BulkForcingConfig':
        return cls()

    @classmethod
    def from_config(cls, cfg) -> 'BulkForcingConfig':
        """
        Build the toggles from a configuration registry.

        Options are looked up under a ``forcing`` section when the registry
        has one, otherwise at the top level.

        Args:
            cfg: OmegaConf DictConfig (or a plain mapping)

        Returns:
            BulkForcingConfig

        Raises:
            MissingConfigOptionError: if either option is absent or unset (``???``)
            ValueError: if an option is not a boolean
        """
        if not isinstance(cfg, DictConfig):
            cfg = OmegaConf.create(dict(cfg))
        node = cfg.forcing if "forcing" in cfg else cfg
        return cls(
            use_bulk_wind_stress=_get_bool_option(node, WIND_STRESS_OPTION),
            use_bulk_thickness_flux=_get_bool_option(node, THICKNESS_FLUX_OPTION),
        )


def _get_bool_option(node: DictConfig, name: str) -> bool:
    if name not in node or OmegaConf.is_missing(node, name):
        raise MissingConfigOptionError(name)
    value = node[name]
    if not isinstance(value, bool):
        raise ValueError(f"Configuration option {name} must be a boolean, got {value!r}")
    return value


def compose_config(overrides: Optional[Sequence[str]] = None) -> DictConfig:
    """
    Compose the packaged default configuration with optional overrides.

    Example:
        compose_config(["forcing.config_use_bulk_wind_stress=false"])
    """
    with initialize_config_dir(version_base=None, config_dir=str(CONFIG_DIR), job_name="jocn"):
        return compose(config_name="config", overrides=list(overrides or []))


def init_bulk_forcing(cfg: Optional[DictConfig] = None) -> BulkForcingConfig:
    """Initialize the bulk forcing module, using the packaged defaults when no registry is given."""
    if cfg is None:
        cfg = compose_config()
    config = BulkForcingConfig.from_config(cfg)
    logger.info(
        "Bulk forcing initialized: wind stress %s, thickness flux %s",
        "on" if config.use_bulk_wind_stress else "off",
        "on" if config.use_bulk_thickness_flux else "off",
    )
    return config


def init_freezing_parameters(cfg: Optional[DictConfig] = None) -> FreezingParameters:
    """
    Read the freezing point coefficients passed to the tracer forcing as ``freezing_params``.

    Uses the ``equation_of_state`` section of the registry, composing the
    packaged defaults when no registry is given.
    """
    if cfg is None:
        cfg = compose_config()
    if not isinstance(cfg, DictConfig):
        cfg = OmegaConf.create(dict(cfg))
    params = FreezingParameters.from_config(cfg)
    logger.info(
        "Open-ocean freezing temperature: %g + %g*S + %g*p + %g*p*S",
        params.open_ocean_coeff_0, params.open_ocean_coeff_S,
        params.open_ocean_coeff_p, params.open_ocean_coeff_pS,
    )
    return params

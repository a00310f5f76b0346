"""
Freezing temperature of seawater.

The freezing point is a linear function of salinity, pressure and their
product, with separate coefficients for the open ocean and for water inside
land-ice cavities.
"""

import jax
import jax.numpy as jnp
from typing import NamedTuple


class FreezingParameters(NamedTuple):
    """Coefficients of T_f = c0 + cS*S + cp*p + cpS*p*S (degC, PSU, Pa)."""

    open_ocean_coeff_0: float = -1.8
    open_ocean_coeff_S: float = 0.0
    open_ocean_coeff_p: float = 0.0
    open_ocean_coeff_pS: float = 0.0

    land_ice_cavity_coeff_0: float = 6.22e-2
    land_ice_cavity_coeff_S: float = -5.63e-2
    land_ice_cavity_coeff_p: float = -7.43e-8
    land_ice_cavity_coeff_pS: float = -1.74e-10

    @classmethod
    def default(cls) -> 'FreezingParameters':
        return cls()

    @classmethod
    def from_config(cls, cfg) -> 'FreezingParameters':
        """Read coefficients from the ``equation_of_state`` section, keeping defaults for absent keys."""
        section = cfg.get("equation_of_state") or {}
        defaults = cls()
        values = {}
        for region in ("open_ocean", "land_ice_cavity"):
            for term in ("0", "S", "p", "pS"):
                field = f"{region}_coeff_{term}"
                key = f"{region}_freezing_temperature_coeff_{term}"
                values[field] = float(section.get(key, getattr(defaults, field)))
        return cls(**values)


@jax.jit
def freezing_temperature(
    salinity: jnp.ndarray,
    pressure=0.0,
    in_land_ice_cavity=False,
    params: FreezingParameters = FreezingParameters.default()
) -> jnp.ndarray:
    """
    Compute the freezing temperature of seawater.

    Args:
        salinity: Salinity [PSU] (ncells,)
        pressure: Pressure [Pa], scalar or (ncells,)
        in_land_ice_cavity: Whether the water sits under land ice, scalar or (ncells,) mask
        params: Freezing point coefficients

    Returns:
        Freezing temperature [degC] (ncells,)
    """
    open_ocean = (params.open_ocean_coeff_0
                  + params.open_ocean_coeff_S * salinity
                  + params.open_ocean_coeff_p * pressure
                  + params.open_ocean_coeff_pS * pressure * salinity)
    cavity = (params.land_ice_cavity_coeff_0
              + params.land_ice_cavity_coeff_S * salinity
              + params.land_ice_cavity_coeff_p * pressure
              + params.land_ice_cavity_coeff_pS * pressure * salinity)
    return jnp.where(in_land_ice_cavity, cavity, open_ocean)

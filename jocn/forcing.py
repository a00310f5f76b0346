"""
Date: 10/18/2026
Surface flux fields supplied by the atmosphere and sea-ice components.

All fields are per cell. Heat fluxes are positive into the ocean (W/m^2),
mass fluxes are positive into the ocean (kg/m^2/s), wind stress is in N/m^2.
"""
import dataclasses
import logging

import jax.numpy as jnp
import tree_math

logger = logging.getLogger(__name__)


@tree_math.struct
class ForcingData:
    latent_heat_flux: jnp.ndarray
    sensible_heat_flux: jnp.ndarray
    long_wave_heat_flux_up: jnp.ndarray
    long_wave_heat_flux_down: jnp.ndarray
    sea_ice_heat_flux: jnp.ndarray
    short_wave_heat_flux: jnp.ndarray # penetrates below the surface layer

    rain_flux: jnp.ndarray
    snow_flux: jnp.ndarray
    evaporation_flux: jnp.ndarray
    sea_ice_fresh_water_flux: jnp.ndarray
    sea_ice_salinity_flux: jnp.ndarray # negative values extract salt from the ocean
    river_runoff_flux: jnp.ndarray
    ice_runoff_flux: jnp.ndarray

    wind_stress_zonal: jnp.ndarray
    wind_stress_meridional: jnp.ndarray

    @classmethod
    def zeros(cls, n_cells, **fields):
        """Forcing with every field zero except those given as keyword arguments."""
        names = [f.name for f in dataclasses.fields(cls)]
        unknown = set(fields) - set(names)
        if unknown:
            raise ValueError(f"Unknown forcing fields: {sorted(unknown)}")
        return cls(**{
            name: jnp.asarray(fields[name]) if fields.get(name) is not None else jnp.zeros((n_cells,))
            for name in names
        })

    @classmethod
    def from_dataset(cls, ds, missing="raise"):
        """
        Resolve the forcing fields from an xarray Dataset keyed by the MPAS names.

        Args:
            ds: Dataset with an ``nCells`` dimension
            missing: "raise" to fail on an absent field, "zeros" to fill it with zeros

        Returns:
            ForcingData
        """
        if missing not in ("zeros", "raise"):
            raise ValueError(f"Invalid value for missing: {missing}. Must be one of: zeros, raise")
        n_cells = ds.sizes["nCells"]
        fields = {}
        filled = []
        for name, mpas_name in MPAS_FIELD_NAMES.items():
            if mpas_name in ds:
                fields[name] = jnp.asarray(ds[mpas_name].values)
            elif missing == "raise":
                raise ValueError(f"Forcing field {mpas_name} not found in dataset")
            else:
                filled.append(mpas_name)
        if filled:
            logger.warning("Forcing fields not found in dataset, filled with zeros: %s", ", ".join(filled))
        return cls.zeros(n_cells, **fields)


# Python field name -> name of the field in the ocean model's forcing pool
MPAS_FIELD_NAMES = {
    "latent_heat_flux": "latentHeatFlux",
    "sensible_heat_flux": "sensibleHeatFlux",
    "long_wave_heat_flux_up": "longWaveHeatFluxUp",
    "long_wave_heat_flux_down": "longWaveHeatFluxDown",
    "sea_ice_heat_flux": "seaIceHeatFlux",
    "short_wave_heat_flux": "shortWaveHeatFlux",
    "rain_flux": "rainFlux",
    "snow_flux": "snowFlux",
    "evaporation_flux": "evaporationFlux",
    "sea_ice_fresh_water_flux": "seaIceFreshWaterFlux",
    "sea_ice_salinity_flux": "seaIceSalinityFlux",
    "river_runoff_flux": "riverRunoffFlux",
    "ice_runoff_flux": "iceRunoffFlux",
    "wind_stress_zonal": "windStressZonal",
    "wind_stress_meridional": "windStressMeridional",
}

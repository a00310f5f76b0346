"""
Bulk surface forcing for the ocean.

Converts atmosphere and sea-ice flux fields into the surface source terms
used by the momentum, thickness and tracer equations:

- edge-normal wind stress and cell-centred stress magnitude
- surface thickness (volume) flux and its river runoff part
- temperature and salinity surface fluxes, including the sea-ice salt
  limiter, and the penetrating short-wave temperature flux

Every routine returns updated copies of the accumulators it was given. The
accumulators collect contributions from several forcing sources within one
step, so values are added, never replaced, except for the runoff fields and
the penetrative flux which hold the current step's value only. Only owned
cells and edges are updated; halo entries pass through unchanged.
"""

import logging
from functools import partial
from typing import Optional, Tuple, Union

import jax
import jax.numpy as jnp

from jocn.config import BulkForcingConfig
from jocn.constants import (
    frz_fw, hflux_factor, latent_heat_fusion_mks, max_salt_removal, rho_sw, sflux_factor
)
from jocn.equation_of_state import FreezingParameters, freezing_temperature
from jocn.forcing import ForcingData
from jocn.mesh import MeshData
from jocn.timers import timer
from jocn.tracers import ActiveTracerIndices, TracerGroup, TracerSurfaceFluxes

logger = logging.getLogger(__name__)


def bulk_forcing_velocity(
    config: BulkForcingConfig,
    mesh: MeshData,
    forcing: ForcingData,
    surface_stress: jnp.ndarray,
    surface_stress_magnitude: jnp.ndarray
) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Add the bulk wind stress to the momentum forcing.

    Args:
        config: Bulk forcing toggles
        mesh: Mesh topology
        forcing: Surface forcing fields
        surface_stress: Edge-normal surface stress accumulator [N/m²] (nedges,)
        surface_stress_magnitude: Surface stress magnitude accumulator [N/m²] (ncells,)

    Returns:
        Tuple of (surface_stress, surface_stress_magnitude); the inputs
        themselves when wind stress forcing is off
    """
    if not config.use_bulk_wind_stress:
        return surface_stress, surface_stress_magnitude

    with timer("bulk_ws"):
        return _wind_stress_terms(mesh, forcing, surface_stress, surface_stress_magnitude)


@jax.jit
def _wind_stress_terms(mesh, forcing, surface_stress, surface_stress_magnitude):
    cell1 = mesh.cells_on_edge[0]
    cell2 = mesh.cells_on_edge[1]

    # Cell-centred stress averaged to the edge midpoint, then projected on the edge normal
    zonal_average = 0.5 * (forcing.wind_stress_zonal[cell1] + forcing.wind_stress_zonal[cell2])
    meridional_average = 0.5 * (forcing.wind_stress_meridional[cell1] + forcing.wind_stress_meridional[cell2])
    normal_stress = jnp.cos(mesh.angle_edge) * zonal_average + jnp.sin(mesh.angle_edge) * meridional_average

    surface_stress = jnp.where(mesh.owned_edges(), surface_stress + normal_stress, surface_stress)

    # Magnitude straight from the cell fields, independent of the edge projection
    magnitude = jnp.sqrt(forcing.wind_stress_zonal**2 + forcing.wind_stress_meridional**2)
    owned = mesh.owned_cells(surface_stress_magnitude.shape[0])
    surface_stress_magnitude = jnp.where(owned, surface_stress_magnitude + magnitude, surface_stress_magnitude)

    return surface_stress, surface_stress_magnitude


def bulk_forcing_thickness(
    config: BulkForcingConfig,
    mesh: MeshData,
    forcing: ForcingData,
    thickness_flux: jnp.ndarray,
    thickness_flux_runoff: jnp.ndarray
) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Add the surface mass fluxes to the thickness forcing.

    The runoff flux is assigned rather than accumulated: it always holds the
    current step's river runoff alone.

    Args:
        config: Bulk forcing toggles
        mesh: Mesh topology
        forcing: Surface forcing fields
        thickness_flux: Surface thickness flux accumulator [m/s] (ncells,)
        thickness_flux_runoff: Thickness flux due to river runoff [m/s] (ncells,)

    Returns:
        Tuple of (thickness_flux, thickness_flux_runoff)
    """
    if not config.use_bulk_thickness_flux:
        return thickness_flux, thickness_flux_runoff

    with timer("bulk_thick"):
        return _thickness_terms(mesh, forcing, thickness_flux, thickness_flux_runoff)


@jax.jit
def _thickness_terms(mesh, forcing, thickness_flux, thickness_flux_runoff):
    owned = mesh.owned_cells(thickness_flux.shape[0])
    mass_flux = (forcing.snow_flux + forcing.rain_flux + forcing.evaporation_flux
                 + forcing.sea_ice_fresh_water_flux + forcing.ice_runoff_flux)
    thickness_flux = jnp.where(owned, thickness_flux + mass_flux / rho_sw, thickness_flux)
    thickness_flux_runoff = jnp.where(owned, forcing.river_runoff_flux / rho_sw, thickness_flux_runoff)
    return thickness_flux, thickness_flux_runoff


def bulk_forcing_tracers(
    config: BulkForcingConfig,
    group: Union[TracerGroup, str],
    mesh: MeshData,
    forcing: ForcingData,
    tracer_group: jnp.ndarray,
    fluxes: TracerSurfaceFluxes,
    layer_thickness: jnp.ndarray,
    dt: float,
    indices: ActiveTracerIndices = ActiveTracerIndices(),
    penetrative_temperature_flux: Optional[jnp.ndarray] = None,
    freezing_params: FreezingParameters = FreezingParameters.default()
) -> Tuple[TracerSurfaceFluxes, Optional[jnp.ndarray]]:
    """
    Compute the bulk surface forcing of one tracer group.

    Only the active tracers have bulk forcing; for every other group the
    accumulators are returned unchanged. The call is timed under
    ``bulk_<group name>``.

    Args:
        config: Bulk forcing toggles
        group: Tracer group, or its pool name
        mesh: Mesh topology
        forcing: Surface forcing fields
        tracer_group: Tracer concentrations (ntracers, nlevels, ncells)
        fluxes: Surface flux accumulators of the group
        layer_thickness: Layer thickness [m] (nlevels, ncells)
        dt: Time step [s]
        indices: Positions of temperature and salinity in the group
        penetrative_temperature_flux: Short-wave temperature flux field [K m/s] (ncells,)
        freezing_params: Freezing point coefficients

    Returns:
        Tuple of (fluxes, penetrative_temperature_flux)
    """
    if isinstance(group, str):
        name = group.strip()
        group = TracerGroup.from_name(name)
    else:
        name = group.value

    with timer(f"bulk_{name}"):
        if group is TracerGroup.ACTIVE_TRACERS:
            return bulk_forcing_active_tracers(
                config, mesh, forcing, tracer_group, fluxes, layer_thickness, dt,
                indices=indices,
                penetrative_temperature_flux=penetrative_temperature_flux,
                freezing_params=freezing_params,
            )
        logger.debug("No bulk forcing for tracer group %s", name)
        return fluxes, penetrative_temperature_flux


def bulk_forcing_active_tracers(
    config: BulkForcingConfig,
    mesh: MeshData,
    forcing: ForcingData,
    tracer_group: jnp.ndarray,
    fluxes: TracerSurfaceFluxes,
    layer_thickness: jnp.ndarray,
    dt: float,
    indices: ActiveTracerIndices = ActiveTracerIndices(),
    penetrative_temperature_flux: Optional[jnp.ndarray] = None,
    freezing_params: FreezingParameters = FreezingParameters.default()
) -> Tuple[TracerSurfaceFluxes, jnp.ndarray]:
    """
    Compute the temperature and salinity surface fluxes.

    Heat fluxes are converted to temperature fluxes, with snow and ice runoff
    arriving at 0 degC and paying the latent heat of fusion. The sea-ice salt
    flux is limited so that one step never removes more than the salt held in
    the surface layer (capped at 4 PSU); the part that cannot be applied is
    booked in ``surface_flux_removed``. When bulk thickness forcing is on, the
    heat carried by the freshwater fluxes is added as well.

    Args:
        config: Bulk forcing toggles
        mesh: Mesh topology
        forcing: Surface forcing fields
        tracer_group: Active tracer concentrations (ntracers, nlevels, ncells)
        fluxes: Surface flux accumulators of the active tracers
        layer_thickness: Layer thickness [m] (nlevels, ncells), positive at the surface
        dt: Time step [s]
        indices: Positions of temperature and salinity in the group
        penetrative_temperature_flux: Short-wave temperature flux field [K m/s] (ncells,);
            a zero field is used when None
        freezing_params: Freezing point coefficients

    Returns:
        Tuple of (fluxes, penetrative_temperature_flux)
    """
    if penetrative_temperature_flux is None:
        penetrative_temperature_flux = jnp.zeros(tracer_group.shape[-1], dtype=fluxes.surface_flux.dtype)

    return _active_tracer_terms(
        mesh, forcing, tracer_group, fluxes, layer_thickness, dt,
        penetrative_temperature_flux, freezing_params,
        use_bulk_thickness_flux=config.use_bulk_thickness_flux,
        indices=indices,
    )


@partial(jax.jit, static_argnames=['use_bulk_thickness_flux', 'indices'])
def _active_tracer_terms(
    mesh, forcing, tracer_group, fluxes, layer_thickness, dt,
    penetrative_temperature_flux, freezing_params,
    use_bulk_thickness_flux, indices
):
    itemp, isalt = indices.temperature, indices.salinity
    owned = mesh.owned_cells(tracer_group.shape[-1])

    surface_temperature = tracer_group[itemp, 0, :]
    surface_salinity = tracer_group[isalt, 0, :]

    surface_flux = fluxes.surface_flux
    surface_flux_runoff = fluxes.surface_flux_runoff
    surface_flux_removed = fluxes.surface_flux_removed

    # Snow and ice runoff arrive at 0 degC and must be melted
    heat_flux = (forcing.latent_heat_flux + forcing.sensible_heat_flux
                 + forcing.long_wave_heat_flux_up + forcing.long_wave_heat_flux_down
                 + forcing.sea_ice_heat_flux
                 - (forcing.snow_flux + forcing.ice_runoff_flux) * latent_heat_fusion_mks)
    temperature_flux = surface_flux[itemp] + heat_flux * hflux_factor

    # A negative sea-ice salinity flux extracts salt, so the salt it needs is its negation
    salinity_flux = forcing.sea_ice_salinity_flux * sflux_factor
    required_salt = -salinity_flux * dt / layer_thickness[0]
    allowed_salt = jnp.minimum(max_salt_removal, surface_salinity)
    limited = allowed_salt < required_salt

    fraction = allowed_salt / jnp.where(limited, required_salt, 1.0)
    applied = jnp.where(limited, fraction * salinity_flux, salinity_flux)
    removed = (1.0 - fraction) * salinity_flux

    surface_flux = surface_flux.at[isalt].set(
        jnp.where(owned, surface_flux[isalt] + applied, surface_flux[isalt]))
    surface_flux_removed = surface_flux_removed.at[isalt].set(
        jnp.where(owned & limited, surface_flux_removed[isalt] + removed, surface_flux_removed[isalt]))

    # Freshwater fluxes carry heat at a temperature set by their source; they carry no salt.
    # Snow and ice runoff are at 0 degC and contribute nothing here.
    if use_bulk_thickness_flux:
        temperature_flux = temperature_flux + (
            (forcing.rain_flux + forcing.evaporation_flux) * surface_temperature / rho_sw)

        # Runoff is fresh water, so it is never colder than 0 degC
        runoff_flux = forcing.river_runoff_flux * jnp.maximum(surface_temperature, frz_fw) / rho_sw
        surface_flux_runoff = surface_flux_runoff.at[itemp].set(
            jnp.where(owned, runoff_flux, surface_flux_runoff[itemp]))

        melt_temperature = freezing_temperature(
            surface_salinity, pressure=0.0, in_land_ice_cavity=False, params=freezing_params)
        temperature_flux = temperature_flux + forcing.sea_ice_fresh_water_flux * melt_temperature / rho_sw

    surface_flux = surface_flux.at[itemp].set(
        jnp.where(owned, temperature_flux, surface_flux[itemp]))

    # Short wave penetrates below the surface layer and is distributed downstream
    penetrative_temperature_flux = jnp.where(
        owned, forcing.short_wave_heat_flux * hflux_factor, penetrative_temperature_flux)

    fluxes = TracerSurfaceFluxes(
        surface_flux=surface_flux,
        surface_flux_runoff=surface_flux_runoff,
        surface_flux_removed=surface_flux_removed,
    )
    return fluxes, penetrative_temperature_flux

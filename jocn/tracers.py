"""
Tracer groups, tracer indices and the tracer surface flux accumulators.

Tracer arrays are indexed (tracer, level, cell) and flux accumulators
(tracer, cell), matching the layout of the ocean model's tracer pools.
"""

import enum
from typing import NamedTuple

import jax.numpy as jnp
import tree_math


class TracerGroup(enum.Enum):
    """Tracer groups carried by the ocean model, keyed by their pool name."""
    ACTIVE_TRACERS = "activeTracers"
    DEBUG_TRACERS = "debugTracers"
    ECOSYS_TRACERS = "ecosysTracers"
    DMS_TRACERS = "DMSTracers"
    MACRO_MOLECULES_TRACERS = "MacroMoleculesTracers"
    CFC_TRACERS = "CFCTracers"
    IDEAL_AGE_TRACERS = "idealAgeTracers"
    TTD_TRACERS = "ttdTracers"
    # Any group name not listed above
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str) -> 'TracerGroup':
        """Resolve a tracer group from its pool name; unknown names map to OTHER."""
        try:
            return cls(name.strip())
        except ValueError:
            return cls.OTHER


class ActiveTracerIndices(NamedTuple):
    """Positions of the active tracers along the tracer axis."""
    temperature: int = 0
    salinity: int = 1


@tree_math.struct
class TracerSurfaceFluxes:
    surface_flux: jnp.ndarray # Surface flux of each tracer (ntracers, ncells)
    surface_flux_runoff: jnp.ndarray # Surface flux carried by river runoff (ntracers, ncells)
    surface_flux_removed: jnp.ndarray # Flux that could not be applied without driving the tracer negative (ntracers, ncells)

    @classmethod
    def zeros(cls, n_tracers, n_cells, surface_flux=None, surface_flux_runoff=None, surface_flux_removed=None):
        shape = (n_tracers, n_cells)
        return cls(
            surface_flux=surface_flux if surface_flux is not None else jnp.zeros(shape),
            surface_flux_runoff=surface_flux_runoff if surface_flux_runoff is not None else jnp.zeros(shape),
            surface_flux_removed=surface_flux_removed if surface_flux_removed is not None else jnp.zeros(shape),
        )

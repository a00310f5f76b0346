"""
Bulk surface forcing for an unstructured-mesh ocean model.

This package converts atmosphere and sea-ice flux fields into the surface
source terms of the momentum, thickness and tracer equations.
"""

from jocn.config import (
    BulkForcingConfig, MissingConfigOptionError, compose_config, init_bulk_forcing,
    init_freezing_parameters
)
from jocn.equation_of_state import FreezingParameters, freezing_temperature
from jocn.forcing import ForcingData
from jocn.mesh import MeshData
from jocn.surface_bulk_forcing import (
    bulk_forcing_active_tracers, bulk_forcing_thickness, bulk_forcing_tracers, bulk_forcing_velocity
)
from jocn.tracers import ActiveTracerIndices, TracerGroup, TracerSurfaceFluxes

__all__ = [
    # Configuration
    'BulkForcingConfig', 'MissingConfigOptionError', 'compose_config', 'init_bulk_forcing', 'init_freezing_parameters',

    # Data structures
    'MeshData', 'ForcingData', 'TracerGroup', 'ActiveTracerIndices', 'TracerSurfaceFluxes',
    'FreezingParameters',

    # Forcing
    'bulk_forcing_velocity', 'bulk_forcing_thickness', 'bulk_forcing_tracers',
    'bulk_forcing_active_tracers', 'freezing_temperature',
]

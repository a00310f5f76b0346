"""
Unit tests for tracer groups and tracer flux accumulators.
"""

import pytest
import jax.numpy as jnp

from jocn.tracers import ActiveTracerIndices, TracerGroup, TracerSurfaceFluxes


class TestTracerGroup:

    @pytest.mark.parametrize("name, group", [
        ("activeTracers", TracerGroup.ACTIVE_TRACERS),
        ("  activeTracers ", TracerGroup.ACTIVE_TRACERS),
        ("ecosysTracers", TracerGroup.ECOSYS_TRACERS),
        ("CFCTracers", TracerGroup.CFC_TRACERS),
        ("ActiveTracers", TracerGroup.OTHER),
        ("someNewTracers", TracerGroup.OTHER),
    ])
    def test_from_name(self, name, group):
        assert TracerGroup.from_name(name) is group

    def test_default_indices(self):
        indices = ActiveTracerIndices()
        assert indices.temperature == 0
        assert indices.salinity == 1
        assert hash(indices) == hash(ActiveTracerIndices(0, 1))


class TestTracerSurfaceFluxes:

    def test_zeros(self):
        fluxes = TracerSurfaceFluxes.zeros(2, 5)
        assert fluxes.surface_flux.shape == (2, 5)
        assert fluxes.surface_flux_runoff.shape == (2, 5)
        assert fluxes.surface_flux_removed.shape == (2, 5)

    def test_zeros_keeps_given_fields(self):
        surface_flux = jnp.ones((2, 5))
        fluxes = TracerSurfaceFluxes.zeros(2, 5, surface_flux=surface_flux)
        assert fluxes.surface_flux is surface_flux
        assert jnp.all(fluxes.surface_flux_removed == 0.0)

import unittest
import jax.numpy as jnp
import numpy as np
import xarray as xr


class TestForcingDataUnit(unittest.TestCase):

    def setUp(self):
        global ForcingData, MPAS_FIELD_NAMES
        from jocn.forcing import ForcingData, MPAS_FIELD_NAMES

    def test_zeros(self):
        forcing = ForcingData.zeros(5, rain_flux=jnp.ones(5))
        self.assertEqual(forcing.latent_heat_flux.shape, (5,))
        self.assertTrue(jnp.all(forcing.rain_flux == 1.0))
        self.assertTrue(jnp.all(forcing.snow_flux == 0.0))

    def test_unknown_field(self):
        with self.assertRaises(ValueError):
            ForcingData.zeros(3, not_a_flux=jnp.ones(3))

    def test_from_dataset(self):
        full = xr.Dataset({name: (("nCells",), np.ones(2)) for name in MPAS_FIELD_NAMES.values()})
        full["rainFlux"] = (("nCells",), np.array([1.0, 2.0]))
        forcing = ForcingData.from_dataset(full)
        np.testing.assert_allclose(forcing.rain_flux, [1.0, 2.0])
        self.assertTrue(jnp.all(forcing.sea_ice_salinity_flux == 1.0))

    def test_from_dataset_missing_field_raises_by_default(self):
        # Misspelled pool name
        ds = xr.Dataset({"shortwaveHeatFlux": (("nCells",), np.ones(3))})
        with self.assertRaises(ValueError) as ctx:
            ForcingData.from_dataset(ds)
        self.assertIn("latentHeatFlux", str(ctx.exception))

    def test_from_dataset_zero_fill_warns(self):
        ds = xr.Dataset({
            "rainFlux": (("nCells",), np.array([1.0, 2.0])),
            "windStressZonal": (("nCells",), np.array([0.1, 0.2])),
        })
        with self.assertLogs("jocn.forcing", level="WARNING") as logs:
            forcing = ForcingData.from_dataset(ds, missing="zeros")
        np.testing.assert_allclose(forcing.rain_flux, [1.0, 2.0])
        np.testing.assert_allclose(forcing.wind_stress_zonal, [0.1, 0.2])
        np.testing.assert_array_equal(forcing.snow_flux, [0.0, 0.0])
        self.assertIn("snowFlux", logs.output[0])
        self.assertNotIn("rainFlux", logs.output[0])

    def test_from_dataset_invalid_missing(self):
        ds = xr.Dataset({"rainFlux": (("nCells",), np.ones(2))})
        with self.assertRaises(ValueError):
            ForcingData.from_dataset(ds, missing="ignore")

import unittest
import jax
import jax.numpy as jnp
import numpy as np
import xarray as xr


class TestMeshUnit(unittest.TestCase):

    def setUp(self):
        global MeshData
        from jocn.mesh import MeshData

    def test_from_arrays(self):
        mesh = MeshData.from_arrays(jnp.array([[0, 1], [1, 2]]), jnp.zeros(2), 3)
        self.assertEqual(mesh.n_edges, 2)
        self.assertEqual(mesh.n_cells_owned, 3)
        self.assertEqual(mesh.n_edges_owned, 2)
        self.assertTrue(jnp.all(mesh.owned_cells(3)))
        self.assertTrue(jnp.all(mesh.owned_edges()))

    def test_owned_masks(self):
        mesh = MeshData.from_arrays(jnp.array([[0, 1, 2], [1, 2, 3]]), jnp.zeros(3), 4, n_cells_owned=2, n_edges_owned=1)
        np.testing.assert_array_equal(mesh.owned_cells(4), [True, True, False, False])
        np.testing.assert_array_equal(mesh.owned_edges(), [True, False, False])

    def test_owned_masks_under_jit(self):
        mesh = MeshData.from_arrays(jnp.array([[0], [1]]), jnp.zeros(1), 2, n_cells_owned=1)
        mask = jax.jit(lambda m: m.owned_cells(2))(mesh)
        np.testing.assert_array_equal(mask, [True, False])

    def test_bad_shapes(self):
        with self.assertRaises(ValueError):
            MeshData.from_arrays(jnp.array([0, 1]), jnp.zeros(1), 2)
        with self.assertRaises(ValueError):
            MeshData.from_arrays(jnp.array([[0, 1], [1, 2]]), jnp.zeros(3), 3)

    def test_from_dataset(self):
        ds = xr.Dataset(
            {
                "cellsOnEdge": (("nEdges", "TWO"), np.array([[1, 2], [2, 3]], dtype=np.int32)),
                "angleEdge": (("nEdges",), np.array([0.0, np.pi / 2])),
                "areaCell": (("nCells",), np.ones(3)),
            }
        )
        mesh = MeshData.from_dataset(ds, n_cells_owned=2)
        np.testing.assert_array_equal(mesh.cells_on_edge, [[0, 1], [1, 2]])
        np.testing.assert_allclose(mesh.angle_edge, [0.0, np.pi / 2])
        self.assertEqual(mesh.n_cells_owned, 2)
        self.assertEqual(mesh.n_edges_owned, 2)

    def test_from_dataset_rejects_missing_neighbour(self):
        ds = xr.Dataset(
            {
                "cellsOnEdge": (("nEdges", "TWO"), np.array([[1, 2], [3, 0]], dtype=np.int32)),
                "angleEdge": (("nEdges",), np.zeros(2)),
                "areaCell": (("nCells",), np.ones(3)),
            }
        )
        with self.assertRaises(ValueError):
            MeshData.from_dataset(ds)

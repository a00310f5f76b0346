"""
Date: 10/18/2026
Mesh topology needed by the surface forcing: edge-to-cell adjacency, edge
orientation, and the owned (non-halo) extents of the local partition.
"""
import jax.numpy as jnp
import tree_math


@tree_math.struct
class MeshData:
    cells_on_edge: jnp.ndarray # Zero-based indices of the two cells adjacent to each edge (2, nEdges)
    angle_edge: jnp.ndarray # Angle between the edge normal and local east (rad) (nEdges,)
    n_cells_owned: int # Cells this partition updates; the remainder are halo
    n_edges_owned: int # Edges this partition updates; the remainder are halo

    @classmethod
    def from_arrays(cls, cells_on_edge, angle_edge, n_cells, n_cells_owned=None, n_edges_owned=None):
        """
        Build mesh data from adjacency arrays.

        Args:
            cells_on_edge: Zero-based cell indices (2, nEdges)
            angle_edge: Edge normal angle (nEdges,)
            n_cells: Total number of cells including halo
            n_cells_owned: Owned cells, defaults to n_cells
            n_edges_owned: Owned edges, defaults to all edges
        """
        cells_on_edge = jnp.asarray(cells_on_edge, dtype=jnp.int32)
        angle_edge = jnp.asarray(angle_edge)
        if cells_on_edge.ndim != 2 or cells_on_edge.shape[0] != 2:
            raise ValueError(f"cells_on_edge must have shape (2, nEdges), got {cells_on_edge.shape}")
        if angle_edge.shape != cells_on_edge.shape[1:]:
            raise ValueError(f"angle_edge must have shape {cells_on_edge.shape[1:]}, got {angle_edge.shape}")
        return cls(
            cells_on_edge=cells_on_edge,
            angle_edge=angle_edge,
            n_cells_owned=n_cells if n_cells_owned is None else n_cells_owned,
            n_edges_owned=cells_on_edge.shape[1] if n_edges_owned is None else n_edges_owned,
        )

    @classmethod
    def from_dataset(cls, ds, n_cells_owned=None, n_edges_owned=None):
        """
        Build mesh data from an MPAS mesh held in an xarray Dataset.

        MPAS stores cellsOnEdge one-based with shape (nEdges, 2); it is
        transposed and shifted to zero-based here. Entries below 1 (boundary
        edges with a missing neighbour) are rejected.
        """
        cells_on_edge = jnp.asarray(ds["cellsOnEdge"].values)
        if jnp.any(cells_on_edge < 1):
            raise ValueError("cellsOnEdge must reference cells with one-based indices >= 1")
        cells_on_edge = cells_on_edge.T - 1
        angle_edge = jnp.asarray(ds["angleEdge"].values)
        return cls.from_arrays(
            cells_on_edge, angle_edge, ds.sizes["nCells"],
            n_cells_owned=n_cells_owned, n_edges_owned=n_edges_owned,
        )

    @property
    def n_edges(self):
        return self.angle_edge.shape[0]

    def owned_cells(self, n_cells) -> jnp.ndarray:
        """Boolean mask of owned cells for a cell field of length n_cells."""
        return jnp.arange(n_cells) < self.n_cells_owned

    def owned_edges(self) -> jnp.ndarray:
        """Boolean mask of owned edges."""
        return jnp.arange(self.n_edges) < self.n_edges_owned

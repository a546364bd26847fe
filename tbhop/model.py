"""
Tight-Binding Model Module

This module contains the TightBindingModel class, the data holder for a
periodic tight-binding system: lattice vectors, reciprocal vectors, orbital
positions and the sparse hopping table.

Every model is three dimensional. Lower dimensional systems are described by
adding a vacuum direction (a lattice vector with no hoppings along it).
"""

import copy
import numpy as np
from typing import Dict, Tuple, Sequence, Union

from .exceptions import DimensionError


HoppingKey = Tuple[int, int, int, int, int]


def compute_reciprocal_vectors(lattice_vectors: np.ndarray) -> np.ndarray:
    """
    Compute reciprocal lattice vectors from real-space lattice vectors.

    Uses the cross-product formula
        b1 = 2π (a2 × a3) / (a1 · (a2 × a3))
    and cyclic permutations, so that a_i · b_j = 2π δ_ij.

    Parameters
    ----------
    lattice_vectors : ndarray of shape (3, 3)
        Real-space lattice vectors stored in columns

    Returns
    -------
    reciprocal_vectors : ndarray of shape (3, 3)
        Reciprocal lattice vectors stored in columns

    Raises
    ------
    DimensionError
        If the lattice is not 3x3 or the unit cell has zero volume
    """
    lattice_vectors = np.asarray(lattice_vectors, dtype=float)
    if lattice_vectors.shape != (3, 3):
        raise DimensionError(
            f"lattice_vectors must have shape (3, 3), got {lattice_vectors.shape}"
        )

    a1 = lattice_vectors[:, 0]
    a2 = lattice_vectors[:, 1]
    a3 = lattice_vectors[:, 2]

    # Tolerance relative to |a1||a2||a3|, independent of the length unit
    volume = np.dot(a1, np.cross(a2, a3))
    if abs(volume) <= 1e-10 * np.prod(np.linalg.norm(lattice_vectors, axis=0)):
        raise DimensionError("lattice_vectors are linearly dependent (zero cell volume)")

    reciprocal_vectors = np.zeros((3, 3))
    reciprocal_vectors[:, 0] = 2 * np.pi * np.cross(a2, a3) / np.dot(a1, np.cross(a2, a3))
    reciprocal_vectors[:, 1] = 2 * np.pi * np.cross(a3, a1) / np.dot(a2, np.cross(a3, a1))
    reciprocal_vectors[:, 2] = 2 * np.pi * np.cross(a1, a2) / np.dot(a3, np.cross(a1, a2))

    return reciprocal_vectors


class TightBindingModel:
    """
    A periodic tight-binding model.

    Hoppings are stored as ⟨0n|H|Rm⟩: the amplitude from orbital m in the
    unit cell displaced by R to orbital n in the home cell. Orbital labels
    n and m are 1-based.

    Attributes
    ----------
    num_orbitals : int
        Number of orbitals per unit cell
    lattice_vectors : ndarray of shape (3, 3)
        Real-space lattice vectors stored in columns
    reciprocal_vectors : ndarray of shape (3, 3)
        Reciprocal lattice vectors stored in columns (includes the 2π factor)
    positions : ndarray of shape (3, num_orbitals)
        Orbital positions in fractional coordinates, stored in columns
    hoppings : dict
        Maps (n, m, R1, R2, R3) -> complex amplitude.
        Example: (1, 1, 1, 0, 0) -> 1.0 means the hopping from orbital 1
        in cell (1, 0, 0) to orbital 1 in the home cell is 1.0.

    Examples
    --------
    >>> lattice = np.array([[1.0, 0.5, 0.0],
    ...                     [0.0, np.sqrt(3) / 2, 0.0],
    ...                     [0.0, 0.0, 1.0]])
    >>> positions = np.array([[1/3, 2/3], [1/3, 2/3], [0.0, 0.0]])
    >>> graphene = TightBindingModel(lattice, positions)
    >>> graphene.set_hopping(1, 2, (0, 0, 0), -1.0)
    >>> graphene.set_hopping(2, 1, (1, 0, 0), -1.0)
    >>> graphene.set_hopping(2, 1, (0, 1, 0), -1.0)
    >>> graphene.eig([0.0, 0.0, 0.0])
    array([-3.,  3.])
    """

    def __init__(
        self,
        lattice_vectors: Union[np.ndarray, Sequence[Sequence[float]]],
        positions: Union[np.ndarray, Sequence[Sequence[float]]]
    ):
        """
        Initialize a model with no hoppings.

        Parameters
        ----------
        lattice_vectors : array_like of shape (3, 3)
            Lattice vectors provided in columns
        positions : array_like of shape (3, N) or (3,)
            Orbital positions in fractional coordinates, provided in columns.
            A single length-3 vector describes a one-orbital model.

        Raises
        ------
        DimensionError
            If either array has the wrong shape or the cell is degenerate
        """
        lattice_vectors = np.array(lattice_vectors, dtype=float)
        positions = np.array(positions, dtype=float)

        if positions.ndim == 1 and positions.shape == (3,):
            positions = positions.reshape(3, 1)
        if positions.ndim != 2 or positions.shape[0] != 3 or positions.shape[1] == 0:
            raise DimensionError(
                f"positions must have shape (3, N) with N >= 1, got {positions.shape}"
            )

        self.reciprocal_vectors = compute_reciprocal_vectors(lattice_vectors)
        self.lattice_vectors = lattice_vectors
        self.positions = positions
        self.num_orbitals = positions.shape[1]
        self.hoppings: Dict[HoppingKey, complex] = {}

    def __repr__(self) -> str:
        return (
            f"TightBindingModel(num_orbitals={self.num_orbitals}, "
            f"num_hoppings={len(self.hoppings)})"
        )

    def copy(self) -> "TightBindingModel":
        """Return an independent deep copy of the model."""
        return copy.deepcopy(self)

    def cartesian_positions(self) -> np.ndarray:
        """Orbital positions in Cartesian coordinates, stored in columns."""
        return self.lattice_vectors @ self.positions

    # ------------------------------------------------------------------
    # Thin wrappers around the module-level operations
    # ------------------------------------------------------------------

    def set_hopping(self, n: int, m: int, R, hopping: complex) -> None:
        """Set ⟨0n|H|Rm⟩ (and its (m, n, -R) partner). See hopping.set_hopping."""
        from .hopping import set_hopping
        set_hopping(self, n, m, R, hopping)

    def add_magnetic_field(self, B: float) -> None:
        """Apply a Landau-gauge Peierls phase in place. See hopping.add_magnetic_field."""
        from .hopping import add_magnetic_field
        add_magnetic_field(self, B)

    def make_supercell(self, ncells) -> "TightBindingModel":
        """Build a supercell model. See supercell.make_supercell."""
        from .supercell import make_supercell
        return make_supercell(self, ncells)

    def make_cluster(self) -> "TightBindingModel":
        """Build a cluster model. See supercell.make_cluster."""
        from .supercell import make_cluster
        return make_cluster(self)

    def hamiltonian(self, k) -> np.ndarray:
        """Bloch Hamiltonian H(k). See fourier.compute_hamiltonian."""
        from .fourier import compute_hamiltonian
        return compute_hamiltonian(self, k)

    def eig(self, k, return_vectors: bool = False):
        """Eigenvalues (and optionally eigenvectors) at k. See solver.calculate_eigen."""
        from .solver import calculate_eigen
        return calculate_eigen(self, k, return_vectors)

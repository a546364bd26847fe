"""
Tests for the Model Module

Tests cover:
- Construction and shape validation
- Reciprocal lattice vectors
- The graphene reference model
- Deep copies
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tbhop import (
    TightBindingModel,
    DimensionError,
    compute_reciprocal_vectors,
    compute_hamiltonian,
    calculate_eigen,
)


# ==============================================================================
# Test Fixtures
# ==============================================================================

def create_graphene() -> TightBindingModel:
    """Nearest-neighbour graphene built by hand."""
    lattice = np.array([
        [1.0, 0.5, 0.0],
        [0.0, np.sqrt(3) / 2, 0.0],
        [0.0, 0.0, 1.0],
    ])
    positions = np.array([
        [1 / 3, 2 / 3],
        [1 / 3, 2 / 3],
        [0.0, 0.0],
    ])
    graphene = TightBindingModel(lattice, positions)
    graphene.set_hopping(1, 2, [0, 0, 0], -1.0)
    graphene.set_hopping(2, 1, [1, 0, 0], -1.0)
    graphene.set_hopping(2, 1, [0, 1, 0], -1.0)
    return graphene


# ==============================================================================
# Construction
# ==============================================================================

class TestConstruction:
    """Test model construction and validation."""

    def test_orbital_count(self):
        """Number of orbitals follows the positions matrix."""
        graphene = create_graphene()
        assert graphene.num_orbitals == 2

    def test_empty_hopping_table(self):
        """A new model has no hoppings."""
        model = TightBindingModel(np.eye(3), np.zeros((3, 4)))
        assert model.num_orbitals == 4
        assert model.hoppings == {}

    def test_single_orbital_vector(self):
        """A length-3 position vector is a one-orbital model."""
        model = TightBindingModel(np.eye(3), [0.0, 0.0, 0.0])
        assert model.num_orbitals == 1
        assert model.positions.shape == (3, 1)

    def test_bad_lattice_shape(self):
        """Lattice vectors must be 3x3."""
        with pytest.raises(DimensionError, match="lattice_vectors"):
            TightBindingModel(np.eye(2), np.zeros((3, 1)))

    def test_bad_positions_shape(self):
        """Positions must be 3xN."""
        with pytest.raises(DimensionError, match="positions"):
            TightBindingModel(np.eye(3), np.zeros((2, 2)))

    def test_degenerate_lattice(self):
        """Linearly dependent lattice vectors are rejected."""
        lattice = np.array([
            [1.0, 2.0, 0.0],
            [0.0, 0.0, 0.0],
            [0.0, 0.0, 1.0],
        ])
        with pytest.raises(DimensionError, match="linearly dependent"):
            TightBindingModel(lattice, np.zeros((3, 1)))

    def test_dimension_error_is_value_error(self):
        """DimensionError can be caught as ValueError."""
        with pytest.raises(ValueError):
            TightBindingModel(np.eye(3), np.zeros((4, 1)))

    def test_inputs_are_copied(self):
        """Changing the caller's arrays does not change the model."""
        lattice = np.eye(3)
        positions = np.zeros((3, 1))
        model = TightBindingModel(lattice, positions)
        lattice[0, 0] = 5.0
        positions[0, 0] = 0.5
        assert model.lattice_vectors[0, 0] == 1.0
        assert model.positions[0, 0] == 0.0


# ==============================================================================
# Reciprocal Lattice
# ==============================================================================

class TestReciprocalVectors:
    """Test reciprocal lattice vectors."""

    def test_graphene_reciprocal_vectors(self):
        """Graphene reciprocal vectors match the closed form."""
        graphene = create_graphene()
        expected = np.array([
            [2 * np.pi, 0.0, 0.0],
            [-2 * np.pi * np.tan(np.pi / 6), 2 * np.pi / np.cos(np.pi / 6), 0.0],
            [0.0, 0.0, 2 * np.pi],
        ])
        assert np.allclose(graphene.reciprocal_vectors, expected)

    def test_duality(self):
        """a_i · b_j = 2π δ_ij for a generic lattice."""
        lattice = np.array([
            [2.0, 0.3, -0.4],
            [0.1, 1.5, 0.2],
            [0.0, -0.7, 3.1],
        ])
        reciprocal = compute_reciprocal_vectors(lattice)
        assert np.allclose(lattice.T @ reciprocal, 2 * np.pi * np.eye(3))

    def test_cubic(self):
        """Simple cubic lattice with constant a has b = 2π/a."""
        reciprocal = compute_reciprocal_vectors(np.eye(3) * 5.0)
        assert np.allclose(reciprocal, np.eye(3) * 2 * np.pi / 5.0)

    @pytest.mark.parametrize("scale", [1e-3, 1e-9, 1e6])
    def test_unit_scale(self, scale):
        """Lattices in any length unit are accepted and stay dual."""
        lattice = scale * np.array([
            [1.0, 0.5, 0.0],
            [0.0, np.sqrt(3) / 2, 0.0],
            [0.0, 0.0, 1.0],
        ])
        reciprocal = compute_reciprocal_vectors(lattice)
        assert np.allclose(lattice.T @ reciprocal, 2 * np.pi * np.eye(3))

        model = TightBindingModel(lattice, np.zeros((3, 1)))
        assert np.allclose(model.reciprocal_vectors, reciprocal)

    def test_small_degenerate_lattice(self):
        """A degenerate lattice is rejected at small length scales too."""
        lattice = 1e-6 * np.array([
            [1.0, 2.0, 0.0],
            [1.0, 2.0, 0.0],
            [0.0, 0.0, 1.0],
        ])
        with pytest.raises(DimensionError, match="linearly dependent"):
            compute_reciprocal_vectors(lattice)


# ==============================================================================
# Graphene Reference Model
# ==============================================================================

class TestGraphene:
    """Test the spectrum of nearest-neighbour graphene."""

    def test_gamma_eigenvalues(self):
        """Eigenvalues at Γ are -3 and 3."""
        graphene = create_graphene()
        eigenvalues = calculate_eigen(graphene, [0.0, 0.0, 0.0])
        assert np.allclose(eigenvalues, [-3.0, 3.0])

    def test_gamma_eigenvector(self):
        """H(Γ) v1 = -3 v1 for the lowest eigenvector."""
        graphene = create_graphene()
        H_gamma = compute_hamiltonian(graphene, [0.0, 0.0, 0.0])
        _, eigenvectors = calculate_eigen(graphene, [0.0, 0.0, 0.0], True)
        v1 = eigenvectors[:, 0]
        assert np.allclose(H_gamma @ v1, -3.0 * v1)

    def test_dirac_point(self):
        """The two bands touch at K = (1/3, 2/3, 0)."""
        graphene = create_graphene()
        eigenvalues = graphene.eig([1 / 3, 2 / 3, 0.0])
        assert np.allclose(eigenvalues, [0.0, 0.0], atol=1e-10)

    def test_method_wrappers(self):
        """Model methods agree with the module functions."""
        graphene = create_graphene()
        k = [0.2, 0.1, 0.0]
        assert np.allclose(graphene.hamiltonian(k), compute_hamiltonian(graphene, k))
        assert np.allclose(graphene.eig(k), calculate_eigen(graphene, k))


# ==============================================================================
# Copies
# ==============================================================================

class TestCopy:
    """Test deep copies."""

    def test_copy_is_independent(self):
        """Changing a copy does not change the original."""
        graphene = create_graphene()
        clone = graphene.copy()
        clone.set_hopping(1, 1, [0, 0, 0], 0.5)
        clone.positions[0, 0] = 0.0

        assert (1, 1, 0, 0, 0) not in graphene.hoppings
        assert np.isclose(graphene.positions[0, 0], 1 / 3)
        assert len(clone.hoppings) == len(graphene.hoppings) + 1

    def test_repr(self):
        """repr reports orbitals and hoppings."""
        graphene = create_graphene()
        assert repr(graphene) == "TightBindingModel(num_orbitals=2, num_hoppings=6)"


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])

"""
Unit tests for kpoints module

Tests k-point grid generation and high-symmetry k-paths.
"""

import sys
import os
import numpy as np
import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tbhop import DimensionError
from tbhop.kpoints import (
    generate_kpoint_grid,
    generate_kpath,
    fractional_to_cartesian,
)
from tbhop.presets import graphene


def test_kpoint_grid_generation():
    """Test k-point grid generation."""
    print("\nTest 1: K-Point Grid Generation")
    print("-" * 50)

    # Test case: 2x2x2 grid
    kpoints = generate_kpoint_grid((2, 2, 2))

    assert kpoints.shape == (8, 3), f"Expected (8, 3), got {kpoints.shape}"
    assert np.all(kpoints >= 0) and np.all(kpoints < 1), \
        "K-points outside [0, 1) range"
    assert np.allclose(kpoints[0], [0.0, 0.0, 0.0])

    for dim in range(3):
        assert len(np.unique(kpoints[:, dim])) == 2

    # Test case: 4x4x1 grid (2D sampling)
    kpoints = generate_kpoint_grid((4, 4, 1))
    assert kpoints.shape == (16, 3)
    assert np.all(kpoints[:, 2] == 0.0)

    unique_x = np.unique(kpoints[:, 0])
    assert np.isclose(unique_x[1] - unique_x[0], 0.25, atol=1e-10)

    print(f"  Generated {len(kpoints)} k-points for (4, 4, 1) grid")
    print("  PASSED")


def test_grid_completeness():
    """Test that k-point grid covers all required points."""
    print("\nTest 2: Grid Completeness")
    print("-" * 50)

    k_grid = (3, 3, 3)
    kpoints = generate_kpoint_grid(k_grid)

    assert len(kpoints) == 27, f"Expected 27 k-points, got {len(kpoints)}"

    unique_kpoints = np.unique(kpoints, axis=0)
    assert len(unique_kpoints) == len(kpoints), "Duplicate k-points found"

    for dim in range(3):
        unique_vals = np.sort(np.unique(kpoints[:, dim]))
        spacings = np.diff(unique_vals)
        assert np.allclose(spacings, spacings[0], atol=1e-10), \
            f"Inconsistent spacing in dimension {dim}"

    print(f"  All {len(kpoints)} k-points are unique")
    print("  PASSED")


def test_invalid_grid():
    """Test rejection of malformed grids."""
    print("\nTest 3: Invalid Grids")
    print("-" * 50)

    with pytest.raises(DimensionError):
        generate_kpoint_grid((2, 2))
    with pytest.raises(ValueError):
        generate_kpoint_grid((2, 0, 1))

    print("  PASSED")


def test_kpath_nodes():
    """Test that a k-path passes through its nodes."""
    print("\nTest 4: K-Path Nodes")
    print("-" * 50)

    nodes = [[0, 0, 0], [0.5, 0, 0], [1 / 3, 1 / 3, 0], [0, 0, 0]]
    kpoints, distances, node_indices = generate_kpath(nodes, num_points=20)

    assert kpoints.shape == (61, 3), f"Unexpected path shape {kpoints.shape}"
    assert node_indices == [0, 20, 40, 60]
    for idx, node in zip(node_indices, nodes):
        assert np.allclose(kpoints[idx], node), f"Node {node} missing at index {idx}"

    assert distances[0] == 0.0
    assert np.all(np.diff(distances) >= 0.0), "Path length must not decrease"

    # Fractional path length of the first segment is 0.5
    assert np.isclose(distances[20], 0.5)

    print(f"  Path with {len(kpoints)} k-points, ticks at {node_indices}")
    print("  PASSED")


def test_kpath_cartesian_distances():
    """Test path lengths measured with reciprocal vectors."""
    print("\nTest 5: Cartesian Path Length")
    print("-" * 50)

    model = graphene()
    nodes = [[0, 0, 0], [0.5, 0, 0]]
    _, distances, _ = generate_kpath(nodes, 10, model.reciprocal_vectors)

    # |b1| / 2 for graphene with a = 1 is 2π/√3
    expected = np.linalg.norm(model.reciprocal_vectors[:, 0]) / 2
    assert np.isclose(distances[-1], expected)
    assert np.isclose(expected, 2 * np.pi / np.sqrt(3))

    print(f"  Γ-M length: {distances[-1]:.6f}")
    print("  PASSED")


def test_kpath_validation():
    """Test k-path argument checks."""
    print("\nTest 6: K-Path Validation")
    print("-" * 50)

    with pytest.raises(ValueError):
        generate_kpath([[0, 0, 0]], 10)
    with pytest.raises(DimensionError):
        generate_kpath([[0, 0], [1, 1]], 10)
    with pytest.raises(ValueError):
        generate_kpath([[0, 0, 0], [1, 0, 0]], 0)

    print("  PASSED")


def test_fractional_to_cartesian():
    """Test conversion of fractional k-points."""
    print("\nTest 7: Fractional to Cartesian")
    print("-" * 50)

    model = graphene()
    B = model.reciprocal_vectors

    assert np.allclose(fractional_to_cartesian([1.0, 0.0, 0.0], B), B[:, 0])
    assert np.allclose(fractional_to_cartesian([0.0, 1.0, 0.0], B), B[:, 1])

    kpoints = generate_kpoint_grid((2, 2, 1))
    cartesian = fractional_to_cartesian(kpoints, B)
    assert cartesian.shape == kpoints.shape
    # k_cart · a_i = 2π k_frac_i
    assert np.allclose(cartesian @ model.lattice_vectors, 2 * np.pi * kpoints)

    print("  PASSED")


def run_all_tests():
    """Run all k-point tests."""
    print("\n" + "=" * 70)
    print("KPOINTS MODULE TESTS")
    print("=" * 70)

    tests = [
        test_kpoint_grid_generation,
        test_grid_completeness,
        test_invalid_grid,
        test_kpath_nodes,
        test_kpath_cartesian_distances,
        test_kpath_validation,
        test_fractional_to_cartesian,
    ]

    passed = 0
    failed = 0

    for test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print("\n" + "=" * 70)
    print(f"KPOINTS TESTS: {passed} passed, {failed} failed")
    print("=" * 70)

    return failed == 0


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)

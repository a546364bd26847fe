"""
Utility Functions Module

This module contains helper functions for reorganizing a hopping table
and printing summaries of models and calculations.
"""

import numpy as np
from typing import Dict, List, Tuple

# ==============================
# Data Conversion
# ==============================

def group_hoppings_by_displacement(
    model
) -> Dict[Tuple[int, int, int], np.ndarray]:
    """
    Collect the hopping table into dense real-space blocks H(R).

    Parameters
    ----------
    model : TightBindingModel
        The tight-binding model

    Returns
    -------
    real_space_matrices : dict
        Maps (R1, R2, R3) -> H(R), a complex ndarray of shape
        (num_orbitals, num_orbitals) with H(R)[n-1, m-1] = ⟨0n|H|Rm⟩
    """
    real_space_matrices = {}

    for label, hopping in model.hoppings.items():
        R_tuple = label[2:5]
        if R_tuple not in real_space_matrices:
            real_space_matrices[R_tuple] = np.zeros(
                (model.num_orbitals, model.num_orbitals), dtype=np.complex128
            )
        real_space_matrices[R_tuple][label[0] - 1, label[1] - 1] = hopping

    return real_space_matrices


def get_displacements(model) -> List[Tuple[int, int, int]]:
    """Sorted list of the distinct unit-cell displacements in the hopping table."""
    return sorted({label[2:5] for label in model.hoppings})


# ==============================
# Reporting
# ==============================

def print_model_summary(model) -> None:
    """Print a summary of a tight-binding model."""
    print("\n" + "=" * 70)
    print("Tight-Binding Model Summary")
    print("=" * 70)
    print(f"Number of orbitals: {model.num_orbitals}")
    print(f"Number of hoppings: {len(model.hoppings)}")

    print("\nLattice vectors (columns):")
    for row in model.lattice_vectors:
        print("  " + "  ".join(f"{x:12.6f}" for x in row))

    print("\nReciprocal vectors (columns):")
    for row in model.reciprocal_vectors:
        print("  " + "  ".join(f"{x:12.6f}" for x in row))

    blocks = group_hoppings_by_displacement(model)
    print(f"\nR-vectors: {len(blocks)}")
    for R_tuple in sorted(blocks):
        print(f"  {R_tuple}: {np.count_nonzero(blocks[R_tuple])} nonzero elements")

    print("=" * 70)


def print_calculation_info(
    num_kpoints: int,
    num_orbitals: int,
    return_vectors: bool = True
) -> None:
    """Print information about the calculation parameters and memory."""
    print("\n" + "=" * 70)
    print("Calculation Information")
    print("=" * 70)
    print(f"Number of k-points: {num_kpoints}")
    print(f"Number of orbitals: {num_orbitals}")

    bytes_per_complex = 16
    matrices_mb = num_kpoints * num_orbitals**2 * bytes_per_complex / 1e6
    eigenvalues_mb = num_kpoints * num_orbitals * 8 / 1e6
    eigenvectors_mb = matrices_mb if return_vectors else 0.0
    total_mb = matrices_mb + eigenvalues_mb + eigenvectors_mb

    print(f"\nEstimated memory usage:")
    print(f"  Matrices H(k):   {matrices_mb:.1f} MB")
    print(f"  Eigenvalues:     {eigenvalues_mb:.1f} MB")
    print(f"  Eigenvectors:    {eigenvectors_mb:.1f} MB")
    print(f"  Total:           {total_mb:.1f} MB")
    print("=" * 70)

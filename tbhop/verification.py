"""
Verification Module

This module contains functions for verifying the numerical accuracy
and physical consistency of computed quantities, including the
hopping-table symmetry and k-space properties.
"""

import numpy as np
import warnings
from typing import List, Tuple, Optional

# ==============================
# Basic Utility
# ==============================

def is_hermitian(matrix: np.ndarray, tol: float = 1e-10) -> bool:
    """Check if a matrix is Hermitian."""
    return np.allclose(matrix, matrix.conj().T, atol=tol)


# ==============================
# Real-Space Verification
# ==============================

def verify_hopping_symmetry(
    model,
    tol: float = 1e-10,
    verbose: bool = True
) -> bool:
    """
    Verify that every hopping (n, m, R) has its (m, n, -R) partner.

    Parameters
    ----------
    model : TightBindingModel
        The model to check
    tol : float
        Numerical tolerance for comparing partner values
    verbose : bool
        Whether to print detailed output

    Returns
    -------
    bool
        True if every partner exists and carries the same value.
    """
    if verbose:
        print("\n" + "-" * 60)
        print("VERIFYING HOPPING TABLE SYMMETRY")
        print("-" * 60)

    all_passed = True
    max_error = 0.0

    for label, hopping in model.hoppings.items():
        n, m, R1, R2, R3 = label
        partner = (m, n, -R1, -R2, -R3)

        if partner not in model.hoppings:
            if verbose:
                print(f"FAIL: partner {partner} missing for {label}")
            all_passed = False
            continue

        diff = abs(model.hoppings[partner] - hopping)
        max_error = max(max_error, diff)
        if diff > tol:
            if verbose:
                print(f"FAIL: {label}/{partner} values differ by {diff:.2e}")
            all_passed = False

    if verbose:
        print(f"  Number of hoppings: {len(model.hoppings)}")
        print(f"  Max partner mismatch: {max_error:.2e}")

    if not all_passed:
        warnings.warn("Hopping table is missing (m, n, -R) partners or has mismatched values")

    return all_passed


# ==============================
# K-Space Verification
# ==============================

def verify_hermiticity(
    H_k_list: List[np.ndarray],
    tol: float = 1e-10,
    verbose: bool = True
) -> float:
    """Verify that H(k) is Hermitian for all k-points. Returns the max deviation."""
    if verbose:
        print("\nVerifying Hermiticity of H(k)...")

    max_H_deviation = 0.0

    for H_k in H_k_list:
        H_deviation = np.max(np.abs(H_k - H_k.conj().T))
        max_H_deviation = max(max_H_deviation, H_deviation)

    if verbose:
        print(f"  Max H(k) Hermiticity deviation: {max_H_deviation:.2e}")

    if max_H_deviation > tol:
        warnings.warn(f"H(k) is not Hermitian within tolerance {tol}")

    return max_H_deviation


def verify_eigen_residual(
    H_k_list: List[np.ndarray],
    eigenvalues_list: List[np.ndarray],
    eigenvectors_list: List[Optional[np.ndarray]],
    tol: float = 1e-8,
    verbose: bool = True
) -> float:
    """
    Verify that H(k) v_i ≈ E_i v_i for every computed eigenpair.

    Returns
    -------
    float
        Maximum residual |H v - E v| over all k-points and bands.
        k-points without eigenvectors are skipped.
    """
    if verbose:
        print("\nVerifying eigenpair residuals...")

    max_residual = 0.0

    for k_idx, (H_k, eigenvalues, eigenvectors) in enumerate(
        zip(H_k_list, eigenvalues_list, eigenvectors_list)
    ):
        if eigenvectors is None:
            continue
        residual = np.max(np.abs(H_k @ eigenvectors - eigenvectors * eigenvalues))
        max_residual = max(max_residual, residual)

        if residual > tol:
            warnings.warn(f"Eigenpair residual {residual:.2e} at k-point {k_idx}")

    if verbose:
        print(f"  Max residual |H v - E v|: {max_residual:.2e}")

    return max_residual


def verify_eigenvalue_sorting(
    eigenvalues_list: List[np.ndarray],
    verbose: bool = True
) -> bool:
    """Verify that eigenvalues are sorted in ascending order at each k-point."""
    if verbose:
        print("\nVerifying eigenvalue sorting...")

    all_sorted = True

    for k_idx, eigenvalues in enumerate(eigenvalues_list):
        if not np.all(eigenvalues[:-1] <= eigenvalues[1:]):
            all_sorted = False
            if verbose:
                print(f"  Warning: Eigenvalues at k-point {k_idx} are not sorted")

    if verbose and all_sorted:
        print("  ✓ All eigenvalues are properly sorted")

    return all_sorted


def verify_energy_range(
    eigenvalues_list: List[np.ndarray],
    verbose: bool = True
) -> Tuple[float, float]:
    """Check the energy range of computed eigenvalues."""
    if not eigenvalues_list:
        return 0.0, 0.0

    all_eigenvalues = np.concatenate(eigenvalues_list)
    E_min = np.min(all_eigenvalues)
    E_max = np.max(all_eigenvalues)

    if verbose:
        print("\nEnergy range:")
        print(f"  Minimum eigenvalue: {E_min:.6f}")
        print(f"  Maximum eigenvalue: {E_max:.6f}")
        print(f"  Energy span: {E_max - E_min:.6f}")

    return E_min, E_max


def run_all_verifications(
    eigenvalues_list: List[np.ndarray],
    eigenvectors_list: List[Optional[np.ndarray]],
    H_k_list: List[np.ndarray],
    verbose: bool = True
) -> dict:
    """Run all k-space verification checks and return results."""
    results = {}

    max_H_dev = verify_hermiticity(H_k_list, verbose=verbose)
    results['hermiticity'] = {'H_deviation': max_H_dev}

    max_residual = verify_eigen_residual(
        H_k_list, eigenvalues_list, eigenvectors_list, verbose=verbose
    )
    results['residual'] = {'max_residual': max_residual}

    sorting_ok = verify_eigenvalue_sorting(eigenvalues_list, verbose=verbose)
    results['eigenvalue_sorting'] = {'sorted': sorting_ok}

    E_min, E_max = verify_energy_range(eigenvalues_list, verbose=verbose)
    results['energy_range'] = {'E_min': E_min, 'E_max': E_max}

    return results

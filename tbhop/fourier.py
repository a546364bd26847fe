"""
Fourier Transform Module

This module contains functions for folding a model's hopping table into the
Bloch Hamiltonian H(k) using the phase factor e^(i 2π k·R).
"""

import numpy as np
from typing import Sequence

from .exceptions import DimensionError


def validate_kpoint(k_point: Sequence[float]) -> np.ndarray:
    """Return k as a float array of shape (3,), or raise DimensionError."""
    k_point = np.asarray(k_point, dtype=float)
    if k_point.shape != (3,):
        raise DimensionError(f"k must have 3 components, got shape {k_point.shape}")
    return k_point


def compute_hamiltonian(model, k_point: Sequence[float]) -> np.ndarray:
    """
    Calculate the Bloch Hamiltonian of a model at a k-point.

    Computes:
        H(k)[n, m] = Σ_R e^(i 2π k·R) ⟨0n|H|Rm⟩

    Parameters
    ----------
    model : TightBindingModel
        The tight-binding model
    k_point : array_like of shape (3,)
        k-point in fractional (reciprocal lattice) coordinates

    Returns
    -------
    H_k : ndarray of shape (num_orbitals, num_orbitals)
        Complex Hamiltonian at k

    Raises
    ------
    DimensionError
        If k_point does not have 3 components

    Notes
    -----
    Several hoppings between the same pair of orbitals (different R) are
    summed, not overwritten.

    Examples
    --------
    >>> H_gamma = compute_hamiltonian(graphene, [0.0, 0.0, 0.0])
    >>> H_gamma.shape
    (2, 2)
    """
    k_point = validate_kpoint(k_point)
    H_k = np.zeros((model.num_orbitals, model.num_orbitals), dtype=np.complex128)

    for label, hopping in model.hoppings.items():
        R = np.array(label[2:5])
        phase = np.exp(2j * np.pi * np.dot(k_point, R))
        H_k[label[0] - 1, label[1] - 1] += phase * hopping

    return H_k


def compute_phase_factors(
    k_points: np.ndarray,
    R_vectors: list
) -> np.ndarray:
    """
    Pre-compute phase factors for all k-points and R vectors.

    Parameters
    ----------
    k_points : ndarray of shape (num_kpoints, 3)
        k-points in fractional coordinates
    R_vectors : list of tuples
        List of (R1, R2, R3) tuples

    Returns
    -------
    phase_factors : ndarray of shape (num_kpoints, num_R_vectors)
        Pre-computed phase factors e^(i 2π k·R)
    """
    k_points = np.atleast_2d(np.asarray(k_points, dtype=float))
    if k_points.shape[1] != 3:
        raise DimensionError(f"k_points must have shape (N, 3), got {k_points.shape}")
    if len(R_vectors) == 0:
        return np.zeros((len(k_points), 0), dtype=np.complex128)

    R_array = np.asarray(R_vectors, dtype=float)
    return np.exp(2j * np.pi * (k_points @ R_array.T))

"""
Eigenvalue Solver Module

This module contains functions for diagonalizing the Bloch Hamiltonian H(k)
at one or many k-points.
"""

import numpy as np
from scipy.linalg import eig, eigvals
from typing import Tuple, Optional, Union

from .exceptions import DimensionError
from .fourier import compute_hamiltonian, validate_kpoint


def solve_eigenproblem(
    H_k: np.ndarray,
    return_vectors: bool = False
) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    """
    Solve the eigenvalue problem H(k) C = C E.

    Uses the general scipy.linalg.eig rather than eigh, because H(k) is only
    Hermitian when the model's hoppings are real.

    Parameters
    ----------
    H_k : ndarray of shape (num_orbitals, num_orbitals)
        Hamiltonian matrix at k-point
    return_vectors : bool, optional
        Whether to compute eigenvectors as well (default: False)

    Returns
    -------
    eigenvalues : ndarray of shape (num_orbitals,)
        Real parts of the eigenvalues, sorted in ascending order
    eigenvectors : ndarray of shape (num_orbitals, num_orbitals)
        Only if return_vectors is True. Eigenvectors stored in columns,
        in the same order as the eigenvalues.

    Raises
    ------
    DimensionError
        If H_k is not a square matrix
    """
    H_k = np.asarray(H_k)
    if H_k.ndim != 2 or H_k.shape[0] != H_k.shape[1]:
        raise DimensionError(f"H_k must be a square matrix, got shape {H_k.shape}")

    if not return_vectors:
        return np.sort(np.real(eigvals(H_k)))

    eigenvalues, eigenvectors = eig(H_k)
    eigenvalues = np.real(eigenvalues)
    perm = np.argsort(eigenvalues, kind='stable')

    return eigenvalues[perm], eigenvectors[:, perm]


def calculate_eigen(
    model,
    k_point,
    return_vectors: bool = False
) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    """
    Calculate eigenvalues (and eigenvectors) of a model at a k-point.

    Parameters
    ----------
    model : TightBindingModel
        The tight-binding model
    k_point : array_like of shape (3,)
        k-point in fractional coordinates
    return_vectors : bool, optional
        Whether to return eigenvectors as well (default: False)

    Returns
    -------
    eigenvalues or (eigenvalues, eigenvectors)
        See solve_eigenproblem.

    Examples
    --------
    >>> values, vectors = calculate_eigen(graphene, [0.0, 0.0, 0.0], True)
    """
    k_point = validate_kpoint(k_point)
    H_k = compute_hamiltonian(model, k_point)
    return solve_eigenproblem(H_k, return_vectors)


def solve_kpoint(
    k_idx: int,
    k_point: np.ndarray,
    model,
    return_vectors: bool = True
) -> Tuple[int, np.ndarray, Optional[np.ndarray], np.ndarray]:
    """
    Assemble and diagonalize H(k) at one k-point.

    Returns
    -------
    tuple
        (k_idx, eigenvalues, eigenvectors or None, H_k). The index is passed
        through so pool results can be put back in order.
    """
    H_k = compute_hamiltonian(model, k_point)

    if not return_vectors:
        return k_idx, solve_eigenproblem(H_k), None, H_k

    eigenvalues, eigenvectors = solve_eigenproblem(H_k, return_vectors=True)
    return k_idx, eigenvalues, eigenvectors, H_k


def solve_all_kpoints_sequential(
    k_points: np.ndarray,
    model,
    return_vectors: bool = True
) -> Tuple[list, list, list]:
    """
    Solve a model at every row of k_points, one after the other.

    Returns
    -------
    eigenvalues_list, eigenvectors_list, H_k_list : list
        One entry per k-point; eigenvectors are None when not requested.
    """
    results = [
        solve_kpoint(k_idx, k_point, model, return_vectors)
        for k_idx, k_point in enumerate(k_points)
    ]

    eigenvalues_list = [r[1] for r in results]
    eigenvectors_list = [r[2] for r in results]
    H_k_list = [r[3] for r in results]

    return eigenvalues_list, eigenvectors_list, H_k_list


def solve_all_kpoints_parallel(
    k_points: np.ndarray,
    model,
    return_vectors: bool = True,
    num_processes: Optional[int] = None
) -> Tuple[list, list, list]:
    """
    Same as solve_all_kpoints_sequential, spread over a process pool.

    Every worker unpickles its own copy of the model. num_processes
    defaults to the number of CPUs (capped at the number of k-points).
    """
    import multiprocessing as mp
    from functools import partial

    if num_processes is None:
        num_processes = min(mp.cpu_count(), len(k_points))

    solve_func = partial(solve_kpoint, model=model, return_vectors=return_vectors)

    with mp.Pool(processes=num_processes) as pool:
        results = pool.starmap(solve_func, enumerate(k_points))

    results.sort(key=lambda r: r[0])

    eigenvalues_list = [r[1] for r in results]
    eigenvectors_list = [r[2] for r in results]
    H_k_list = [r[3] for r in results]

    return eigenvalues_list, eigenvectors_list, H_k_list

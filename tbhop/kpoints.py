"""
K-Point Module

This module contains functions for generating k-point grids and
piecewise-linear k-paths through high-symmetry points.
"""

import numpy as np
from typing import Tuple, List, Optional, Sequence

from .exceptions import DimensionError


def generate_kpoint_grid(k_grid: Tuple[int, int, int]) -> np.ndarray:
    """
    Generate a uniform k-point grid in fractional coordinates.

    The k-points are uniformly distributed in the first Brillouin zone
    using fractional coordinates: k = (i/nk1, j/nk2, k/nk3).

    Parameters
    ----------
    k_grid : tuple of 3 ints
        Dimensions of the k-point grid (nk1, nk2, nk3)

    Returns
    -------
    kpoints : ndarray of shape (num_kpoints, 3)
        Array of k-points in fractional coordinates

    Examples
    --------
    >>> kpoints = generate_kpoint_grid((2, 2, 2))
    >>> print(kpoints.shape)
    (8, 3)
    >>> print(kpoints[0])
    [0. 0. 0.]
    """
    if len(k_grid) != 3:
        raise DimensionError(f"k_grid must have 3 components, got {len(k_grid)}")
    nk1, nk2, nk3 = k_grid
    if min(nk1, nk2, nk3) < 1:
        raise ValueError(f"k_grid entries must be positive, got {k_grid}")

    kpoints = []
    for i in range(nk1):
        for j in range(nk2):
            for k in range(nk3):
                kpoints.append([i / nk1, j / nk2, k / nk3])

    return np.array(kpoints)


def fractional_to_cartesian(
    kpoints: np.ndarray,
    reciprocal_vectors: np.ndarray
) -> np.ndarray:
    """
    Convert fractional k-points to Cartesian coordinates.

    Parameters
    ----------
    kpoints : ndarray of shape (num_kpoints, 3) or (3,)
        k-points in fractional coordinates
    reciprocal_vectors : ndarray of shape (3, 3)
        Reciprocal lattice vectors stored in columns

    Returns
    -------
    ndarray
        k-points in Cartesian coordinates, same shape as the input
    """
    kpoints = np.asarray(kpoints, dtype=float)
    # k_cart = B @ k_frac for every row
    return kpoints @ np.asarray(reciprocal_vectors).T


def generate_kpath(
    nodes: Sequence[Sequence[float]],
    num_points: int = 50,
    reciprocal_vectors: Optional[np.ndarray] = None
) -> Tuple[np.ndarray, np.ndarray, List[int]]:
    """
    Generate a piecewise-linear path through high-symmetry k-points.

    Parameters
    ----------
    nodes : sequence of 3-vectors
        High-symmetry points in fractional coordinates, visited in order
    num_points : int, optional
        Number of k-points per segment, end point excluded (default: 50).
        The final node is always appended.
    reciprocal_vectors : ndarray of shape (3, 3), optional
        If given, path lengths are measured in Cartesian coordinates;
        otherwise in fractional coordinates.

    Returns
    -------
    kpoints : ndarray of shape (num_segments * num_points + 1, 3)
        k-points along the path in fractional coordinates
    distances : ndarray of shape (num_kpoints,)
        Cumulative path length at each k-point
    node_indices : list of int
        Index into kpoints of each node

    Examples
    --------
    >>> nodes = [[0, 0, 0], [0.5, 0, 0], [1/3, 1/3, 0], [0, 0, 0]]
    >>> kpoints, distances, ticks = generate_kpath(nodes, num_points=20)
    >>> ticks
    [0, 20, 40, 60]
    """
    nodes = np.asarray(nodes, dtype=float)
    if nodes.ndim != 2 or nodes.shape[1] != 3:
        raise DimensionError(f"nodes must have shape (N, 3), got {nodes.shape}")
    if len(nodes) < 2:
        raise ValueError("A k-path needs at least two nodes")
    if num_points < 1:
        raise ValueError(f"num_points must be positive, got {num_points}")

    segments = []
    node_indices = []
    for start, end in zip(nodes[:-1], nodes[1:]):
        node_indices.append(len(segments) * num_points)
        fractions = np.arange(num_points) / num_points
        segments.append(start + fractions[:, None] * (end - start))
    node_indices.append(len(segments) * num_points)

    kpoints = np.vstack(segments + [nodes[-1:]])

    if reciprocal_vectors is not None:
        steps = np.diff(fractional_to_cartesian(kpoints, reciprocal_vectors), axis=0)
    else:
        steps = np.diff(kpoints, axis=0)
    distances = np.concatenate([[0.0], np.cumsum(np.linalg.norm(steps, axis=1))])

    return kpoints, distances, node_indices

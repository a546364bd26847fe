"""
Supercell Module

This module contains functions that derive new models from an existing one:
supercell expansion and cluster truncation. The source model is never
modified; the result owns its own arrays and hopping table.
"""

import copy
import numpy as np
from typing import Sequence, Tuple

from .exceptions import DimensionError
from .hopping import set_hopping
from .model import TightBindingModel


def validate_ncells(ncells: Sequence[int]) -> Tuple[int, int, int]:
    """
    Check a supercell repetition vector.

    Raises
    ------
    DimensionError
        If ncells does not have exactly 3 entries
    ValueError
        If any entry is not a positive integer
    """
    ncells_array = np.asarray(ncells)
    if ncells_array.shape != (3,):
        raise DimensionError(
            f"ncells must have 3 components, got shape {ncells_array.shape}"
        )
    if not np.all(np.equal(np.mod(ncells_array, 1), 0)) or np.any(ncells_array < 1):
        raise ValueError(f"ncells must contain positive integers, got {ncells}")
    return tuple(int(x) for x in ncells_array)


def supercell_orbital_index(
    i: int, j: int, k: int, n: int,
    ncells: Tuple[int, int, int],
    num_orbitals: int
) -> int:
    """
    Label of orbital n of sub-cell (i, j, k) inside the supercell.

    Parameters
    ----------
    i, j, k : int
        0-based sub-cell indices, 0 <= i < ncells[0] etc.
    n : int
        1-based orbital label in the original cell
    ncells : tuple of 3 ints
        Supercell repetitions
    num_orbitals : int
        Number of orbitals of the original cell

    Returns
    -------
    int
        1-based orbital label in the supercell
    """
    n1, n2, _ = ncells
    return (i + j * n1 + k * n1 * n2) * num_orbitals + n


def supercell_index_to_subcell(
    index: int,
    ncells: Tuple[int, int, int],
    num_orbitals: int
) -> Tuple[int, int, int, int]:
    """
    Inverse of supercell_orbital_index.

    Returns
    -------
    tuple of 4 ints
        (i, j, k, n) with 0-based sub-cell indices and 1-based orbital label
    """
    n1, n2, _ = ncells
    cell, n = divmod(index - 1, num_orbitals)
    k = cell // (n1 * n2)
    remainder = cell % (n1 * n2)
    j = remainder // n1
    i = remainder % n1
    return i, j, k, n + 1


def make_supercell(model: TightBindingModel, ncells: Sequence[int]) -> TightBindingModel:
    """
    Create a supercell model from an original model.

    The supercell repeats the original cell ncells[0] x ncells[1] x ncells[2]
    times. Each original hopping is copied into every sub-cell, with the
    target sub-cell wrapped back into the supercell; the number of wraps
    becomes the supercell displacement of the new hopping.

    Parameters
    ----------
    model : TightBindingModel
        The original model (not modified)
    ncells : sequence of 3 ints
        Number of unit cells along each lattice vector

    Returns
    -------
    TightBindingModel
        The supercell model

    Raises
    ------
    DimensionError
        If ncells does not have 3 entries
    ValueError
        If any entry of ncells is not a positive integer

    Examples
    --------
    >>> sc = make_supercell(graphene, (2, 2, 1))
    >>> sc.num_orbitals
    8
    """
    ncells = validate_ncells(ncells)
    n1, n2, n3 = ncells
    num_orbitals = model.num_orbitals

    lattice_vectors = model.lattice_vectors * np.array(ncells, dtype=float)

    positions = np.zeros((3, num_orbitals * n1 * n2 * n3))
    for k in range(n3):
        for j in range(n2):
            for i in range(n1):
                for n in range(1, num_orbitals + 1):
                    column = supercell_orbital_index(i, j, k, n, ncells, num_orbitals) - 1
                    positions[:, column] = model.positions[:, n - 1] + (i, j, k)
    positions /= np.array(ncells, dtype=float).reshape(3, 1)

    supercell = TightBindingModel(lattice_vectors, positions)

    for k in range(n3):
        for j in range(n2):
            for i in range(n1):
                for label, hopping in model.hoppings.items():
                    n, m, R1, R2, R3 = label
                    # Floor division keeps negative displacements in the right supercell
                    target = (i + R1, j + R2, k + R3)
                    wrapped = (target[0] % n1, target[1] % n2, target[2] % n3)
                    R_super = (target[0] // n1, target[1] // n2, target[2] // n3)

                    set_hopping(
                        supercell,
                        supercell_orbital_index(i, j, k, n, ncells, num_orbitals),
                        supercell_orbital_index(*wrapped, m, ncells, num_orbitals),
                        R_super,
                        hopping
                    )

    return supercell


def make_cluster(model: TightBindingModel) -> TightBindingModel:
    """
    Create a cluster by cutting off all hoppings between cells.

    Parameters
    ----------
    model : TightBindingModel
        The original model (not modified)

    Returns
    -------
    TightBindingModel
        Deep copy of the model keeping only hoppings with R = (0, 0, 0)
    """
    cluster = copy.deepcopy(model)
    for label in list(cluster.hoppings):
        if label[2] != 0 or label[3] != 0 or label[4] != 0:
            del cluster.hoppings[label]
    return cluster

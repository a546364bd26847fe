"""
Hopping Module

This module contains the two in-place operations on a model's hopping
table: setting a hopping amplitude and inserting a magnetic field through
the Peierls substitution.
"""

import numbers
import numpy as np
from typing import Sequence, Tuple

from .exceptions import DimensionError, OrbitalIndexError


def validate_displacement(R: Sequence[int]) -> Tuple[int, int, int]:
    """
    Convert a unit-cell displacement to a tuple of 3 Python ints.

    Raises
    ------
    DimensionError
        If R does not have exactly 3 components
    """
    R_array = np.asarray(R)
    if R_array.shape != (3,):
        raise DimensionError(f"R must have 3 components, got shape {R_array.shape}")
    if not np.all(np.equal(np.mod(R_array, 1), 0)):
        raise DimensionError(f"R must contain integers, got {R}")
    return tuple(int(x) for x in R_array)


def set_hopping(model, n: int, m: int, R: Sequence[int], hopping: complex) -> None:
    """
    Set the hopping ⟨0n|H|Rm⟩ of a model.

    The partner entry ⟨0m|H|-Rn⟩ is written with the same value, so callers
    only provide one of each pair. Existing values at either key are
    overwritten (no accumulation).

    Parameters
    ----------
    model : TightBindingModel
        The model to modify
    n, m : int
        1-based orbital labels in ⟨0n|H|Rm⟩
    R : sequence of 3 ints
        Unit-cell label in ⟨0n|H|Rm⟩
    hopping : complex
        Value of ⟨0n|H|Rm⟩

    Raises
    ------
    OrbitalIndexError
        If n or m is not an integer in 1..num_orbitals
    DimensionError
        If R does not have 3 integer components

    Notes
    -----
    The partner is stored unconjugated. H(k) is Hermitian only when the
    hoppings are real.
    """
    for label in (n, m):
        if not isinstance(label, numbers.Integral) or not 1 <= label <= model.num_orbitals:
            raise OrbitalIndexError(
                f"No such orbit: {label} (model has {model.num_orbitals} orbitals)"
            )
    R1, R2, R3 = validate_displacement(R)

    model.hoppings[(int(n), int(m), R1, R2, R3)] = complex(hopping)
    model.hoppings[(int(m), int(n), -R1, -R2, -R3)] = complex(hopping)


def peierls_phase(
    position_n: np.ndarray,
    position_m: np.ndarray,
    B: float
) -> complex:
    """
    Landau-gauge Peierls phase for a bond between two Cartesian positions.

    phase = exp(i 2π B (y_n - y_m)(x_n + x_m) / 2)
    """
    return np.exp(
        1j * 2 * np.pi * B
        * (position_n[1] - position_m[1])
        * (position_n[0] + position_m[0]) / 2
    )


def add_magnetic_field(model, B: float) -> None:
    """
    Add a constant magnetic field along z to a model, in place.

    Every hopping is multiplied by a Landau-gauge Peierls phase computed from
    the Cartesian positions of its two orbitals in the home cell.

    Parameters
    ----------
    model : TightBindingModel
        The model to modify
    B : float
        Magnetic field along z, expressed as Be/h, so its unit is
        1/[length]^2. Since the electron charge is -e, positive B points
        along -z for an electron system.

    Notes
    -----
    The position of orbital m is taken in the home cell, not in the cell
    displaced by R.
    """
    cartesian = model.cartesian_positions()

    for label, hopping in model.hoppings.items():
        position_n = cartesian[:, label[0] - 1]
        position_m = cartesian[:, label[1] - 1]
        model.hoppings[label] = hopping * peierls_phase(position_n, position_m, B)

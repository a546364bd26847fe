"""
Preset tight-binding models.

This module provides ready-made models for:
- Graphene (honeycomb lattice, two orbitals)
- Square lattice (one orbital)
- Linear chain (one orbital)

Lower dimensional lattices carry a unit vacuum direction along z.
"""

import numpy as np

from .model import TightBindingModel


def graphene(t: float = -1.0, lattice_constant: float = 1.0) -> TightBindingModel:
    """
    Nearest-neighbour graphene.

    Geometry
    --------
    a1 = a * [1, 0, 0]
    a2 = a * [1/2, √3/2, 0]
    a3 = [0, 0, 1] (vacuum)

    Orbitals at fractional positions (1/3, 1/3, 0) and (2/3, 2/3, 0).
    At Γ the spectrum is [-3|t|, 3|t|].

    Parameters
    ----------
    t : float, optional
        Nearest-neighbour hopping (default: -1.0)
    lattice_constant : float, optional
        Lattice constant 'a' (default: 1.0)
    """
    a = lattice_constant
    lattice_vectors = np.array([
        [a, a / 2, 0.0],
        [0.0, a * np.sqrt(3) / 2, 0.0],
        [0.0, 0.0, 1.0],
    ])
    positions = np.array([
        [1 / 3, 2 / 3],
        [1 / 3, 2 / 3],
        [0.0, 0.0],
    ])

    model = TightBindingModel(lattice_vectors, positions)
    model.set_hopping(1, 2, (0, 0, 0), t)
    model.set_hopping(2, 1, (1, 0, 0), t)
    model.set_hopping(2, 1, (0, 1, 0), t)
    return model


def square_lattice(t: float = -1.0, lattice_constant: float = 1.0) -> TightBindingModel:
    """
    Single-orbital square lattice with nearest-neighbour hopping t.

    E(k) = 2t (cos 2πk1 + cos 2πk2)
    """
    lattice_vectors = np.diag([lattice_constant, lattice_constant, 1.0])
    model = TightBindingModel(lattice_vectors, [0.0, 0.0, 0.0])
    model.set_hopping(1, 1, (1, 0, 0), t)
    model.set_hopping(1, 1, (0, 1, 0), t)
    return model


def chain(t: float = -1.0, onsite: float = 0.0) -> TightBindingModel:
    """
    Single-orbital linear chain along a1.

    E(k) = onsite + 2t cos 2πk1
    """
    model = TightBindingModel(np.eye(3), [0.0, 0.0, 0.0])
    model.set_hopping(1, 1, (1, 0, 0), t)
    if onsite != 0.0:
        model.set_hopping(1, 1, (0, 0, 0), onsite)
    return model

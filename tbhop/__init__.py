"""
tbhop Package

A Python package for periodic tight-binding models: build a Hamiltonian
from hoppings between orbitals of a crystal lattice, transform the model
(supercells, clusters, magnetic fields) and compute its spectrum.

Main Components
---------------
TightBindingModel : class
    Lattice, orbital positions and the sparse hopping table
BandStructureEngine : class
    Sweeps a model over many k-points and collects the spectrum

Model Operations
----------------
set_hopping : function
    Set ⟨0n|H|Rm⟩ together with its (m, n, -R) partner
add_magnetic_field : function
    Insert a Landau-gauge Peierls phase into every hopping
make_supercell : function
    Repeat the unit cell and fold the hoppings
make_cluster : function
    Drop all hoppings between cells

Spectrum
--------
compute_hamiltonian : function
    Bloch Hamiltonian H(k)
calculate_eigen : function
    Sorted eigenvalues (and eigenvectors) at a k-point

Example
-------
>>> import numpy as np
>>> from tbhop import TightBindingModel
>>>
>>> lattice = np.array([[1.0, 0.5, 0.0],
...                     [0.0, np.sqrt(3) / 2, 0.0],
...                     [0.0, 0.0, 1.0]])
>>> positions = np.array([[1/3, 2/3], [1/3, 2/3], [0.0, 0.0]])
>>> graphene = TightBindingModel(lattice, positions)
>>> graphene.set_hopping(1, 2, [0, 0, 0], -1.0)
>>> graphene.set_hopping(2, 1, [1, 0, 0], -1.0)
>>> graphene.set_hopping(2, 1, [0, 1, 0], -1.0)
>>>
>>> values, vectors = graphene.eig([0.0, 0.0, 0.0], return_vectors=True)
>>> supercell = graphene.make_supercell([2, 2, 1])
"""

__version__ = "1.0.0"

# Exceptions
from .exceptions import (
    TightBindingError,
    DimensionError,
    OrbitalIndexError,
)

# Model
from .model import TightBindingModel, compute_reciprocal_vectors

# Model operations
from .hopping import set_hopping, add_magnetic_field
from .supercell import make_supercell, make_cluster

# Hamiltonian and spectrum
from .fourier import compute_hamiltonian, compute_phase_factors
from .solver import (
    solve_eigenproblem,
    calculate_eigen,
    solve_kpoint,
    solve_all_kpoints_sequential,
    solve_all_kpoints_parallel,
)

# K-point functions
from .kpoints import (
    generate_kpoint_grid,
    generate_kpath,
    fractional_to_cartesian,
)

# Main engine class
from .engine import BandStructureEngine

# Verification functions
from .verification import (
    is_hermitian,
    verify_hopping_symmetry,
    verify_hermiticity,
    verify_eigen_residual,
    verify_eigenvalue_sorting,
    verify_energy_range,
    run_all_verifications,
)

# Utility functions
from .utils import (
    group_hoppings_by_displacement,
    get_displacements,
    print_model_summary,
    print_calculation_info,
)

from . import presets

# Public API
__all__ = [
    # Exceptions
    'TightBindingError',
    'DimensionError',
    'OrbitalIndexError',

    # Model
    'TightBindingModel',
    'compute_reciprocal_vectors',

    # Operations
    'set_hopping',
    'add_magnetic_field',
    'make_supercell',
    'make_cluster',

    # Hamiltonian and spectrum
    'compute_hamiltonian',
    'compute_phase_factors',
    'solve_eigenproblem',
    'calculate_eigen',
    'solve_kpoint',
    'solve_all_kpoints_sequential',
    'solve_all_kpoints_parallel',

    # K-points
    'generate_kpoint_grid',
    'generate_kpath',
    'fractional_to_cartesian',

    # Engine
    'BandStructureEngine',

    # Verification
    'is_hermitian',
    'verify_hopping_symmetry',
    'verify_hermiticity',
    'verify_eigen_residual',
    'verify_eigenvalue_sorting',
    'verify_energy_range',
    'run_all_verifications',

    # Utils
    'group_hoppings_by_displacement',
    'get_displacements',
    'print_model_summary',
    'print_calculation_info',

    'presets',
]

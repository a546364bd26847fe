"""
Main Engine Module

This module contains the BandStructureEngine class that sweeps a
tight-binding model over a set of k-points and collects its spectrum.
"""

import numpy as np
from typing import Optional, Tuple

from .kpoints import generate_kpoint_grid
from .fourier import validate_kpoint
from .solver import solve_all_kpoints_sequential, solve_all_kpoints_parallel
from .verification import run_all_verifications, verify_hopping_symmetry
from .utils import print_calculation_info


class BandStructureEngine:
    """
    Computational engine for the spectrum of a tight-binding model.

    This class coordinates the workflow:
    1. K-point selection (explicit list or uniform grid)
    2. Hamiltonian assembly and diagonalization at every k-point
    3. Verification of results

    Attributes
    ----------
    model : TightBindingModel
        The model being solved (never modified)
    kpoints : ndarray of shape (num_kpoints, 3)
        k-points in fractional coordinates
    num_kpoints : int
        Total number of k-points
    num_orbitals : int
        Number of orbitals (bands)
    return_vectors : bool
        Whether eigenvectors are computed
    eigenvalues_list : list
        Computed eigenvalues for each k-point
    eigenvectors_list : list
        Computed eigenvectors for each k-point (None entries if disabled)
    H_k_list : list
        Hamiltonian matrices at each k-point

    Examples
    --------
    >>> kpoints, distances, ticks = generate_kpath(nodes, num_points=40)
    >>> engine = BandStructureEngine(graphene, kpoints=kpoints)
    >>> engine.solve_all_kpoints(parallel=False)
    >>> bands = engine.get_band_energies()
    """

    def __init__(
        self,
        model,
        kpoints: Optional[np.ndarray] = None,
        k_grid: Optional[Tuple[int, int, int]] = None,
        return_vectors: bool = True,
        verbose: bool = True
    ):
        """
        Initialize the engine.

        Parameters
        ----------
        model : TightBindingModel
            The tight-binding model
        kpoints : ndarray of shape (num_kpoints, 3), optional
            Explicit k-points in fractional coordinates
        k_grid : tuple of 3 ints, optional
            Dimensions of a uniform k-point grid
        return_vectors : bool, optional
            Compute eigenvectors as well as eigenvalues (default: True)
        verbose : bool, optional
            Print progress banners (default: True)

        Raises
        ------
        ValueError
            If not exactly one of kpoints and k_grid is given, or the
            k-point list is empty
        """
        if (kpoints is None) == (k_grid is None):
            raise ValueError("Provide exactly one of kpoints or k_grid")

        if k_grid is not None:
            kpoints = generate_kpoint_grid(k_grid)
        kpoints = np.atleast_2d(np.asarray(kpoints, dtype=float))
        if kpoints.size == 0:
            raise ValueError("No k-points given")
        for k_point in kpoints:
            validate_kpoint(k_point)

        self.model = model
        self.k_grid = k_grid
        self.kpoints = kpoints
        self.num_kpoints = len(kpoints)
        self.num_orbitals = model.num_orbitals
        self.return_vectors = return_vectors
        self.verbose = verbose

        # Storage for results (initialized as empty)
        self.eigenvalues_list = []
        self.eigenvectors_list = []
        self.H_k_list = []

        if self.verbose:
            self._print_init_info()

    def _print_init_info(self):
        """Print initialization information."""
        print("\n" + "=" * 70)
        print("Band Structure Engine Initialized")
        print("=" * 70)
        if self.k_grid is not None:
            print(f"K-grid: {self.k_grid}")
        print(f"Number of k-points: {self.num_kpoints}")
        print(f"Number of orbitals: {self.num_orbitals}")
        print(f"Number of hoppings: {len(self.model.hoppings)}")
        print(f"Eigenvectors: {'yes' if self.return_vectors else 'no'}")
        print("=" * 70)

    def solve_all_kpoints(
        self,
        parallel: bool = False,
        num_processes: Optional[int] = None
    ) -> None:
        """
        Assemble and diagonalize H(k) at all k-points.

        Parameters
        ----------
        parallel : bool, optional
            Use parallel processing (default: False)
        num_processes : int, optional
            Number of processes for parallel computation
            If None, uses all available CPUs
        """
        if self.verbose:
            print(f"\n{'=' * 70}")
            print(f"Solving Eigenvalue Problems at {self.num_kpoints} K-Points")
            print(f"{'=' * 70}")
            print_calculation_info(self.num_kpoints, self.num_orbitals, self.return_vectors)

        if parallel and self.num_kpoints > 1:
            if self.verbose:
                print("Mode: Parallel")
            results = solve_all_kpoints_parallel(
                self.kpoints, self.model, self.return_vectors, num_processes
            )
        else:
            if self.verbose:
                print("Mode: Sequential")
            results = solve_all_kpoints_sequential(
                self.kpoints, self.model, self.return_vectors
            )

        self.eigenvalues_list, self.eigenvectors_list, self.H_k_list = results

        if self.verbose:
            print("✓ Eigenvalue problems solved successfully")
            print(f"{'=' * 70}")

    def get_band_energies(self) -> np.ndarray:
        """
        Get the band structure as a single array.

        Returns
        -------
        ndarray of shape (num_kpoints, num_orbitals)
            Sorted eigenvalues at each k-point

        Raises
        ------
        RuntimeError
            If called before solve_all_kpoints()
        """
        if not self.eigenvalues_list:
            raise RuntimeError("No band structure available. Run solve_all_kpoints() first.")
        return np.array(self.eigenvalues_list)

    def get_band_range(self, band: int) -> Tuple[float, float]:
        """
        Energy range (E_min, E_max) of one band over all k-points.

        Parameters
        ----------
        band : int
            0-based band index (bands are ordered by energy)
        """
        bands = self.get_band_energies()
        if not 0 <= band < self.num_orbitals:
            raise IndexError(f"Band {band} out of range (0..{self.num_orbitals - 1})")
        return float(bands[:, band].min()), float(bands[:, band].max())

    def verify_results(self) -> dict:
        """
        Run all verification checks on the model and computed results.

        Returns
        -------
        dict
            Dictionary containing verification results
        """
        if not self.eigenvalues_list:
            raise RuntimeError("No results to verify. Run solve_all_kpoints() first.")

        if self.verbose:
            print(f"\n{'=' * 70}")
            print("Verification Checks")
            print(f"{'=' * 70}")

        symmetry_ok = verify_hopping_symmetry(self.model, verbose=self.verbose)

        results = run_all_verifications(
            self.eigenvalues_list,
            self.eigenvectors_list,
            self.H_k_list,
            verbose=self.verbose
        )
        results['hopping_symmetry'] = {'passed': symmetry_ok}

        if self.verbose:
            print(f"{'=' * 70}")

        return results

'''Orbital element sets with linear time terms
OrbitalElements class definition'''

import numpy as np
from .config import config


class OrbitalElements:
    """
    Six Keplerian elements, each varying linearly with the day-count.

    Every element is stored as a pair (term1, term2) and evaluated as
    ``term1 + term2 * d`` where ``d`` is the day-count since
    2000-01-01 12:00 UT. Rows follow the order N, i, w, a, e, M:

    ====  =========================================  =========
    row   element                                    unit
    ====  =========================================  =========
    N     longitude of the ascending node            degrees
    i     inclination to the ecliptic                degrees
    w     argument of perihelion                     degrees
    a     semi-major axis                            AU
    e     eccentricity                               -
    M     mean anomaly                               degrees
    ====  =========================================  =========

    OrbitalElements is immutable, extract terms using the properties or numpy
    methods and create a new instance to change.
    """
    # ========== CLASS CONSTANTS ==========
    NAMES = ('N', 'i', 'w', 'a', 'e', 'M')
    # rows holding angles in degrees
    _ANGLE_ROWS = np.array([True, True, True, False, False, True])

    # ========== CONSTRUCTION ==========
    def __init__(self, elements=None, validate=True, **kwargs):
        """
        Create an orbital element set.

        Can be called in two ways:

        1. Array-based:
        OrbitalElements([[48.3313, 3.24587e-5], [7.0047, 5.0e-8], ...])

        2. Named terms (missing rates default to zero):
        OrbitalElements(N1=48.3313, N2=3.24587e-5, i1=7.0047, w1=29.1241,
                        a1=0.387098, e1=0.205635, M1=168.6562, M2=4.0923344368)

        Parameters
        ----------
        elements : array-like, optional
            (6, 2) array of [term1, term2] rows in N, i, w, a, e, M order,
            or a flat 12-element array in the same order
        validate : bool, optional
            Whether to validate elements (default True)
        **kwargs : dict
            Named terms N1, N2, i1, i2, w1, w2, a1, a2, e1, e2, M1, M2
        """
        if elements is not None:
            # Array-based construction, flat input reshaped to rows
            terms = np.array(elements, dtype=float)
            if terms.size == 12:
                terms = terms.reshape(6, 2)
            self._terms = terms
        elif kwargs:
            self._terms = self._from_named_params(kwargs)
        else:
            raise ValueError(
                "Must provide either a (6, 2) elements array or named terms "
                "(N1, N2, i1, i2, w1, w2, a1, a2, e1, e2, M1, M2)"
            )
        # Ensure immutability of terms array
        self._terms.flags.writeable = False
        if validate:
            self._validate()

    @classmethod
    def static(cls, N, i, w, a, e, M):
        """
        Create an element set with all rates equal to zero.

        Parameters
        ----------
        N, i, w : float
            Node, inclination and argument of perihelion [degrees]
        a : float
            Semi-major axis [AU]
        e : float
            Eccentricity
        M : float
            Mean anomaly [degrees]
        """
        return cls([[N, 0.0], [i, 0.0], [w, 0.0], [a, 0.0], [e, 0.0], [M, 0.0]])

    # ========== VALIDATION ==========
    def _validate(self):
        """Check that the terms describe a bound elliptical orbit at epoch"""
        if self._terms.shape != (6, 2):
            raise ValueError(
                f"Orbital elements must have shape (6, 2), got {self._terms.shape}")
        if not np.all(np.isfinite(self._terms)):
            raise ValueError("Elements contain NaN or Inf")
        if self.a1 <= 0:
            raise ValueError(
                f"Semi-major axis must be positive, got a1={self.a1}")
        if self.e1 < 0 or self.e1 >= 1:
            raise ValueError(
                f"Elliptic orbit requires 0 <= e1 < 1, got e1={self.e1}")

    # ========== FACTORY METHODS ==========
    @classmethod
    def from_numpy(cls, array, validate=True):
        """
        Create list of OrbitalElements from NumPy array.

        Parameters
        ----------
        array : np.ndarray
            Array of shape (n_sets, 12) or (n_sets, 6, 2)
        validate: bool, optional, defaults to True

        Returns
        -------
        list of OrbitalElements
        """
        array = np.asarray(array, dtype=float)
        if array.ndim == 3 and array.shape[1:] == (6, 2):
            array = array.reshape(len(array), 12)
        if array.ndim != 2 or array.shape[1] != 12:
            raise ValueError(
                f"Array must have shape (n, 12) or (n, 6, 2), got {array.shape}")
        return [cls(row, validate=validate) for row in array]

    # ========== EVALUATION ==========
    def at(self, days):
        """
        Evaluate the six elements at a day-count.

        Parameters
        ----------
        days : float or array-like
            Day-count(s) since 2000-01-01 12:00 UT

        Returns
        -------
        tuple
            (N, i, w, a, e, M) with angles in radians. Each entry is a float
            for scalar input or an array matching ``days`` otherwise.
        """
        days = np.asarray(days, dtype=float)
        values = [self._terms[k, 0] + self._terms[k, 1] * days for k in range(6)]
        for k in range(6):
            if self._ANGLE_ROWS[k]:
                values[k] = np.radians(values[k])
        if days.ndim == 0:
            return tuple(float(v) for v in values)
        return tuple(values)

    def is_static(self) -> bool:
        """True if no element changes with time."""
        return not np.any(self._terms[:, 1])

    # ========== PROPERTY ACCESS ==========
    @property
    def terms(self) -> np.ndarray:
        """(6, 2) array of [term1, term2] rows (read-only)"""
        return self._terms

    @property
    def base(self) -> np.ndarray:
        """Element values at day 0"""
        return self._terms[:, 0]

    @property
    def rates(self) -> np.ndarray:
        """Element rates per day"""
        return self._terms[:, 1]

    @property
    def N1(self):
        return self._terms[0, 0]

    @property
    def N2(self):
        return self._terms[0, 1]

    @property
    def i1(self):
        return self._terms[1, 0]

    @property
    def i2(self):
        return self._terms[1, 1]

    @property
    def w1(self):
        return self._terms[2, 0]

    @property
    def w2(self):
        return self._terms[2, 1]

    @property
    def a1(self):
        return self._terms[3, 0]

    @property
    def a2(self):
        return self._terms[3, 1]

    @property
    def e1(self):
        return self._terms[4, 0]

    @property
    def e2(self):
        return self._terms[4, 1]

    @property
    def M1(self):
        return self._terms[5, 0]

    @property
    def M2(self):
        return self._terms[5, 1]

    # ========== BATCH OPERATIONS ==========
    class Batch:
        """
        Batch operations on collections of OrbitalElements.

        All methods accept a list of OrbitalElements.
        """

        @staticmethod
        def to_numpy(sets):
            """Stack element sets into an (n, 6, 2) array"""
            return np.array([s.terms for s in sets])

        @staticmethod
        def to_dataframe(sets, index=None):
            """
            Convert element sets to a pandas DataFrame.

            Parameters
            ----------
            sets : list of OrbitalElements
            index : list, optional
                Row labels (e.g. body names)

            Returns
            -------
            pd.DataFrame
                One row per set, columns N1, N2, i1, ..., M2
            """
            try:
                import pandas as pd
            except ImportError:
                raise ImportError("pandas required for to_dataframe()")

            if index is not None and len(index) != len(sets):
                raise ValueError(
                    f"Index length ({len(index)}) must match "
                    f"number of element sets ({len(sets)})"
                )
            columns = [f"{name}{k}" for name in OrbitalElements.NAMES for k in (1, 2)]
            data = np.array([s.terms.reshape(12) for s in sets])
            return pd.DataFrame(data, columns=columns, index=index)

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return 6

    def __getitem__(self, key):
        #Allow indexing like elements[0] -> [N1, N2]
        return self._terms[key]

    def __iter__(self):
        return iter(self._terms)

    def __repr__(self):
        return f"OrbitalElements({self._terms.tolist()})"

    def __str__(self):
        N, i, w, a, e, M = self._terms
        return (f"Orbital Elements (term1 + term2 * d):\n"
                f"  N = {N[0]:12.4f}° + {N[1]:.6e} d\n"
                f"  i = {i[0]:12.4f}° + {i[1]:.6e} d\n"
                f"  w = {w[0]:12.4f}° + {w[1]:.6e} d\n"
                f"  a = {a[0]:12.6f} AU + {a[1]:.6e} d\n"
                f"  e = {e[0]:12.6f} + {e[1]:.6e} d\n"
                f"  M = {M[0]:12.4f}° + {M[1]:.10f} d")

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, OrbitalElements):
            return False
        return np.allclose(self._terms, other._terms,
                           rtol=config.EQUALITY_RTOL,
                           atol=config.EQUALITY_ATOL)

    def __hash__(self):
        #Hash with rounding to match equality
        rounded = tuple(round(x, config.HASH_DECIMALS) for x in self._terms.flat)
        return hash(rounded)

    # ========== STATIC METHODS ==========
    @staticmethod
    def _from_named_params(kwargs):
        """
        Convert named terms to a (6, 2) array.

        Returns
        -------
        np.ndarray
            (6, 2) terms array
        """
        valid = {f"{name}{k}" for name in OrbitalElements.NAMES for k in (1, 2)}
        unknown = set(kwargs) - valid
        if unknown:
            raise ValueError(
                f"Unknown orbital element terms: {sorted(unknown)}\n"
                f"Valid terms: {sorted(valid)}"
            )
        required = [f"{name}1" for name in OrbitalElements.NAMES]
        missing = [k for k in required if k not in kwargs]
        if missing:
            raise ValueError(f"Missing base terms: {missing}")
        return np.array([[kwargs[f"{name}1"], kwargs.get(f"{name}2", 0.0)]
                         for name in OrbitalElements.NAMES], dtype=float)

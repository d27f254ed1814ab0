'''Orbital position solver
Kepler-orbit position functions and the PositionSolver class

Formulas follow Paul Schlyter, "How to compute planetary positions"
(http://www.stjarnhimlen.se/comp/ppcomp.html) and the ecliptic rotation from
David Colarusso's astro notes (http://www.davidcolarusso.com/astro/), with the
ecliptic north pole mapped to scene +y and the scene z axis negated.'''

import numpy as np
from typing import Optional
from .catalog import Body
from .config import config
from .orbital_elements import OrbitalElements
from .registry import BodyRegistry


def eccentric_anomaly(M, e):
    """
    First-order eccentric anomaly, E = M + e sin(M) (1 + e cos(M)).

    A single correction step, accurate enough for small eccentricities
    and for visualization.

    Parameters
    ----------
    M : float or np.ndarray
        Mean anomaly [rad]
    e : float or np.ndarray
        Eccentricity

    Returns
    -------
    float or np.ndarray
        Eccentric anomaly [rad]
    """
    return M + e * np.sin(M) * (1.0 + e * np.cos(M))


def orbital_position(elements: OrbitalElements, days):
    """
    Position of a body relative to its center of orbit.

    Parameters
    ----------
    elements : OrbitalElements
        Element set of the body
    days : float or array-like
        Day-count(s) since 2000-01-01 12:00 UT

    Returns
    -------
    np.ndarray
        Shape (3,) for scalar ``days``, (n, 3) otherwise [AU]. Components are
        scene x, y (ecliptic north) and z.
    """
    N, i, w, a, e, M = elements.at(days)
    E = eccentric_anomaly(M, e)

    # position in the orbital plane
    xv = a * (np.cos(E) - e)
    yv = a * (np.sqrt(1.0 - e * e) * np.sin(E))
    # true anomaly and distance
    v = np.arctan2(yv, xv)
    r = np.sqrt(xv * xv + yv * yv)

    xh = r * (np.cos(N) * np.cos(v + w)
              - np.sin(N) * np.sin(v + w) * np.cos(i))
    zh = -r * (np.sin(N) * np.cos(v + w)
               + np.cos(N) * np.sin(v + w) * np.cos(i))
    yh = r * (np.sin(w + v) * np.sin(i))
    return np.stack([xh, yh, zh], axis=-1)


def absolute_position(registry: BodyRegistry, body: Body, days,
                      au_scale: Optional[float] = None):
    """
    Position of a body in the frame of the primary, following the center chain.

    Stateless: centers are evaluated at the same day-count instead of being
    read from the registry states.

    Parameters
    ----------
    registry : BodyRegistry
    body : Body
        Orbiting body
    days : float or array-like
        Day-count(s)
    au_scale : float, optional
        Scene units per AU (default config.AU_SCALE)

    Returns
    -------
    np.ndarray
        Shape (3,) or (n, 3) [scene units]
    """
    if au_scale is None:
        au_scale = config.AU_SCALE
    params = registry.params(body)
    if params is None:
        raise ValueError(f"{body.name} is not an orbiting body in the registry")
    days = np.asarray(days, dtype=float)
    position = np.zeros(days.shape + (3,))
    while params is not None and not params.is_primary:
        position = position + orbital_position(params.elements, days) * au_scale
        params = registry.params(params.center)
    return position


class PositionSolver:
    """
    Recomputes body positions and rolls for the current day-count.

    Each body is placed at its center's current position plus its own orbital
    offset, so centers must be solved first in every pass; ``solve_all`` walks
    the registry in index order. The primary star stays where it is and only
    its roll advances.

    Parameters
    ----------
    registry : BodyRegistry
        Bodies, states and entity bindings
    au_scale : float, optional
        Scene units per AU (default config.AU_SCALE)
    """
    def __init__(self, registry: BodyRegistry, au_scale: Optional[float] = None):
        self._registry = registry
        self._au_scale = float(config.AU_SCALE if au_scale is None else au_scale)

    @property
    def au_scale(self) -> float:
        return self._au_scale

    def solve(self, body: Body, current_days: float, delta_days: float = 0.0):
        """
        Update one body's position and roll, then mirror them to its entity.

        Unregistered bodies and bodies whose center is unregistered are
        skipped.

        Parameters
        ----------
        body : Body
        current_days : float
            Day-count to evaluate the elements at
        delta_days : float, optional
            Simulated days since the previous step (roll advance)
        """
        params = self._registry.params(body)
        state = self._registry.state(body)
        if params is None or state is None:
            return

        if not params.is_primary:
            center = self._registry.state(params.center)
            if center is None:
                return
            offset = orbital_position(params.elements, current_days)
            state.x = center.x + offset[0] * self._au_scale
            state.y = center.y + offset[1] * self._au_scale
            state.z = center.z + offset[2] * self._au_scale

        state.roll = state.roll + delta_days / params.period * 360.0
        self._registry.mirror(body, position=True, roll=True)

    def solve_all(self, current_days: float, delta_days: float = 0.0):
        """Solve every orbiting body, centers before their satellites"""
        for body in self._registry.orbiting_bodies():
            self.solve(body, current_days, delta_days)

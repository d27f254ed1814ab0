'''Orbital body registry
BodyState and BodyRegistry class definitions'''

import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional
from .catalog import (Body, BodyParams, RingParams, default_catalog,
                      default_rings, default_cloud_layers)
from .utils import validation_error


@dataclass
class BodyState:
    """
    Mutable computed state of a body.

    Attributes
    ----------
    x, y, z : float
        Position [scene units]
    roll : float
        Axial rotation [degrees], unbounded
    tilt : float
        Axial tilt [degrees]
    radius : float
        Visual radius [scene units]
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    roll: float = 0.0
    tilt: float = 0.0
    radius: float = 0.0

    @property
    def position(self) -> np.ndarray:
        """Position vector [scene units]"""
        return np.array([self.x, self.y, self.z])

    def set_position(self, position):
        self.x, self.y, self.z = (float(c) for c in position)


class BodyRegistry:
    """
    Static parameters, mutable states and visual-entity bindings of all bodies.

    Orbiting bodies come from the catalog; dependents (ring systems and cloud
    layers) carry no orbital data and are attached to their parent planet.
    Iteration always follows the body index, so a center is visited before
    anything that orbits it.

    Parameters
    ----------
    catalog : dict of Body -> BodyParams, optional
        Orbiting bodies (default: built-in solar system)
    rings : dict of Body -> RingParams, optional
        Ring systems (default: Saturn and Uranus rings)
    cloud_layers : dict of Body -> Body, optional
        Cloud layers mapped to the planet they cover (default: Earth clouds)

    Raises
    ------
    ValueError
        If a center or parent is missing, self-referencing or out of order
        (warns instead when config.STRICT_VALIDATION is False)
    """
    # ========== CONSTRUCTION ==========
    def __init__(
        self,
        catalog: Optional[Dict[Body, BodyParams]] = None,
        rings: Optional[Dict[Body, RingParams]] = None,
        cloud_layers: Optional[Dict[Body, Body]] = None
    ):
        catalog = default_catalog() if catalog is None else dict(catalog)
        rings = default_rings() if rings is None else dict(rings)
        cloud_layers = default_cloud_layers() if cloud_layers is None \
            else dict(cloud_layers)

        self._params: Dict[Body, BodyParams] = {}
        self._rings: Dict[Body, RingParams] = {}
        self._parents: Dict[Body, Body] = {}
        self._states: Dict[Body, BodyState] = {}
        self._entities: Dict[Body, Any] = {}

        self._register_bodies(catalog)
        self._register_dependents(rings, cloud_layers)

    def _register_bodies(self, catalog):
        """Validate the center chain and create one state per body"""
        if Body.SOLAR_SYSTEM_VIEW in catalog:
            validation_error("SOLAR_SYSTEM_VIEW is a view reference, "
                             "not a catalog body")
        if not any(p.is_primary for p in catalog.values()):
            validation_error("Catalog has no primary body (center=None)")

        for body in sorted(catalog, key=lambda b: b.index):
            if body == Body.SOLAR_SYSTEM_VIEW:
                continue
            params = catalog[body]
            center = params.center
            if center is not None:
                if center == body:
                    validation_error(f"{body.name} cannot orbit itself")
                    continue
                if center not in catalog:
                    validation_error(
                        f"{body.name} orbits {center.name}, which is not "
                        f"in the catalog")
                    continue
                if center.index > body.index:
                    validation_error(
                        f"{body.name} orbits {center.name}, which comes later "
                        f"in the solve order")
                    continue
            self._params[body] = params
            self._states[body] = BodyState(tilt=params.tilt, radius=params.radius)

    def _register_dependents(self, rings, cloud_layers):
        """Attach ring systems and cloud layers to registered parents"""
        parents = {body: ring.parent for body, ring in rings.items()}
        parents.update(cloud_layers)
        for body in sorted(parents, key=lambda b: b.index):
            parent = parents[body]
            if body in self._params:
                validation_error(
                    f"{body.name} is both an orbiting body and a dependent")
                continue
            if parent not in self._params:
                validation_error(
                    f"{body.name} depends on {parent.name}, which is not "
                    f"registered")
                continue
            self._parents[body] = parent
            if body in rings:
                self._rings[body] = rings[body]
            parent_params = self._params[parent]
            self._states[body] = BodyState(tilt=parent_params.tilt,
                                           radius=parent_params.radius)

    # ========== LOOKUP ==========
    def params(self, body: Body) -> Optional[BodyParams]:
        """Catalog entry of an orbiting body (None for dependents/unknown)"""
        return self._params.get(body)

    def state(self, body: Body) -> Optional[BodyState]:
        """Mutable state of a registered body (None if unregistered)"""
        return self._states.get(body)

    def ring(self, body: Body) -> Optional[RingParams]:
        """Ring geometry of a ring system (None otherwise)"""
        return self._rings.get(body)

    def parent(self, body: Body) -> Optional[Body]:
        """Planet a dependent follows (None for orbiting bodies)"""
        return self._parents.get(body)

    def nominal_radius(self, body: Body) -> Optional[float]:
        """
        Catalog radius of a body; dependents report their parent's radius.

        Returns None for unregistered bodies.
        """
        params = self._params.get(body)
        if params is None:
            parent = self._parents.get(body)
            if parent is None:
                return None
            params = self._params[parent]
        return params.radius

    def orbiting_bodies(self) -> List[Body]:
        """Catalog bodies in solve order"""
        return sorted(self._params, key=lambda b: b.index)

    def dependents(self) -> List[Body]:
        """Ring systems and cloud layers in index order"""
        return sorted(self._parents, key=lambda b: b.index)

    def ring_systems(self) -> List[Body]:
        return sorted(self._rings, key=lambda b: b.index)

    def primary(self) -> Optional[Body]:
        """First body without a center"""
        for body in self.orbiting_bodies():
            if self._params[body].is_primary:
                return body
        return None

    # ========== ENTITY BINDINGS ==========
    def bind(self, body: Body, entity):
        """
        Attach a renderer-owned entity that mirrors a body's state.

        The entity receives the current state immediately.
        """
        body = Body.parse(body)
        if body not in self._states:
            validation_error(f"Cannot bind unregistered body {body.name}")
            return
        self._entities[body] = entity
        state = self._states[body]
        entity.x, entity.y, entity.z = state.x, state.y, state.z
        entity.roll = state.roll
        entity.tilt = state.tilt
        entity.r = state.radius

    def unbind(self, body: Body):
        """Detach a body's entity; unbound bodies are not mirrored"""
        self._entities.pop(Body.parse(body), None)

    def entity(self, body: Body):
        """Bound entity of a body (None if unbound)"""
        return self._entities.get(body)

    def is_bound(self, body: Body) -> bool:
        return body in self._entities

    def bound_bodies(self) -> List[Body]:
        return sorted(self._entities, key=lambda b: b.index)

    def mirror(self, body: Body, position=True, roll=True, tilt=False,
               radius=False):
        """
        Push selected state fields to the bound entity, if any.

        Parameters
        ----------
        body : Body
        position, roll, tilt, radius : bool
            Which fields to copy
        """
        entity = self._entities.get(body)
        if entity is None:
            return
        state = self._states[body]
        if position:
            entity.x, entity.y, entity.z = state.x, state.y, state.z
        if roll:
            entity.roll = state.roll
        if tilt:
            entity.tilt = state.tilt
        if radius:
            entity.r = state.radius

    # ========== SPECIAL METHODS ==========
    def __contains__(self, body) -> bool:
        return body in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[Body]:
        return iter(sorted(self._states, key=lambda b: b.index))

    def __repr__(self):
        return (f"BodyRegistry(bodies={len(self._params)}, "
                f"dependents={len(self._parents)}, "
                f"bound={len(self._entities)})")

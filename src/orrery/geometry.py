'''Derived geometry of ring systems and cloud layers
DerivedGeometryUpdater class definition'''

from typing import Dict, Optional
from .catalog import Body
from .config import config
from .registry import BodyRegistry
from .scale import ScaleController

# roll of a dependent = parent roll / divisor
RING_ROLL_DIVISOR = 10.0
CLOUD_ROLL_DIVISOR = 1.2
ROLL_DIVISORS: Dict[Body, float] = {
    Body.SATURN_RING: RING_ROLL_DIVISOR,
    Body.URANUS_RING: RING_ROLL_DIVISOR,
    Body.EARTH_CLOUD: CLOUD_ROLL_DIVISOR,
}

# ring radius = (inner + outer) / divisor
RING_RADIUS_DIVISOR = 1.75


class DerivedGeometryUpdater:
    """
    Places rings and cloud layers on their parent planet.

    Dependents copy the parent's position and tilt, rotate at a fixed fraction
    of the parent's roll and take a radius derived from the ring cache or the
    parent radius. Must run after the position pass and after any scale
    change.

    Parameters
    ----------
    registry : BodyRegistry
    scale : ScaleController
        Owner of the cached ring radii
    cloud_modifier : float, optional
        Cloud radius relative to the parent (default config.EARTH_CLOUD_MODIFIER)
    """
    def __init__(self, registry: BodyRegistry, scale: ScaleController,
                 cloud_modifier: Optional[float] = None):
        self._registry = registry
        self._scale = scale
        self._cloud_modifier = float(config.EARTH_CLOUD_MODIFIER
                                     if cloud_modifier is None else cloud_modifier)

    @property
    def cloud_modifier(self) -> float:
        return self._cloud_modifier

    def roll_divisor(self, body: Body) -> float:
        if body in ROLL_DIVISORS:
            return ROLL_DIVISORS[body]
        if self._registry.ring(body) is not None:
            return RING_ROLL_DIVISOR
        return CLOUD_ROLL_DIVISOR

    def update(self):
        """Recompute every dependent from its parent's current state"""
        for body in self._registry.dependents():
            self.update_dependent(body)

    def update_dependent(self, body: Body):
        """Recompute one ring system or cloud layer; unknown bodies are skipped"""
        parent = self._registry.parent(body)
        if parent is None:
            return
        source = self._registry.state(parent)
        target = self._registry.state(body)

        target.x, target.y, target.z = source.x, source.y, source.z
        target.tilt = source.tilt
        target.roll = source.roll / self.roll_divisor(body)

        ring = self._scale.ring_radii(body)
        if ring is not None:
            target.radius = (ring.inner + ring.outer) / RING_RADIUS_DIVISOR
        else:
            target.radius = source.radius * self._cloud_modifier

        self._registry.mirror(body, position=True, roll=True, tilt=True,
                              radius=True)

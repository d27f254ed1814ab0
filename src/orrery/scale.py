'''Visual scale and camera zoom limits
ScaleState, RingRadii and ScaleController class definitions'''

from dataclasses import dataclass
from typing import Dict, Optional
from .catalog import Body
from .config import config
from .registry import BodyRegistry


@dataclass
class ScaleState:
    """
    Global visual scale with an optional focus-mode floor.

    Attributes
    ----------
    baseline : float
        Last scale set outside focus mode
    effective : float
        Scale applied to bodies
    focus_mode : bool
        Sticky flag that keeps the floor active
    floor : float
        Minimum scale while focused
    """
    baseline: float = 1.0
    effective: float = 1.0
    focus_mode: bool = False
    floor: float = 20.0

    def update(self, scale: float, focused: bool = False) -> float:
        """
        Record a requested scale and recompute the effective scale.

        The baseline only follows unfocused requests. The floor applies when
        the request is at or below it and focus is active (sticky flag or
        this request).

        Returns
        -------
        float
            New effective scale
        """
        if not focused:
            self.baseline = scale
        if scale <= self.floor and (self.focus_mode or focused):
            self.effective = self.floor
        else:
            self.effective = self.baseline
        return self.effective


class RingRadii:
    """
    Cached inner and outer radius of a ring system.

    ``scale`` multiplies the cached values in place, so repeated calls
    compound; ``reset`` restores the unscaled radii.

    Parameters
    ----------
    inner, outer : float
        Unscaled radii [scene units]
    """
    def __init__(self, inner: float, outer: float):
        self._source = (float(inner), float(outer))
        self.inner, self.outer = self._source

    def scale(self, factor: float):
        self.inner = self.inner * factor
        self.outer = self.outer * factor

    def reset(self):
        self.inner, self.outer = self._source

    def __repr__(self):
        return f"RingRadii(inner={self.inner}, outer={self.outer})"


class ScaleController:
    """
    Applies the visual scale to body radii and derives camera zoom limits.

    Per-body tuning lives in lookup tables:

    - ``RADIUS_DIVISORS``: radius = nominal * scale / divisor (default 1)
    - ``ZOOM_CORRECTIONS``: zoom limit factor after the base limit (default 1)
    - ``DEFAULT_LIMIT_BODIES``: bodies that always use the camera default

    Orbiting-body radii are set from the initial scale on construction.

    Parameters
    ----------
    registry : BodyRegistry
    state : ScaleState, optional
        Initial scale state (default from config INITIAL_SCALE and
        FOCUSED_MINIMUM_SCALE)
    """
    # ========== CLASS CONSTANTS ==========
    RADIUS_DIVISORS: Dict[Body, float] = {
        Body.SUN: 80.0,
    }
    ZOOM_CORRECTIONS: Dict[Body, float] = {
        Body.MERCURY: 2.0,
        Body.JUPITER: 1.0 / 1.5,
        Body.PLUTO: 1.5,
    }
    DEFAULT_LIMIT_BODIES = frozenset({Body.SUN, Body.SOLAR_SYSTEM_VIEW})
    # base zoom limit in body radii
    ZOOM_RADII = 4.0
    # the primary's outer radius is its nominal radius over this
    PRIMARY_OUTER_DIVISOR = 100.0

    def __init__(self, registry: BodyRegistry, state: Optional[ScaleState] = None):
        self._registry = registry
        if state is None:
            state = ScaleState(baseline=config.INITIAL_SCALE,
                               effective=config.INITIAL_SCALE,
                               floor=config.FOCUSED_MINIMUM_SCALE)
        self._state = state
        self._default_zoom_limit = config.DEFAULT_ZOOM_LIMIT
        self._solar_distance = config.SOLAR_DISTANCE
        self._rings: Dict[Body, RingRadii] = {}
        for body in registry.ring_systems():
            ring = registry.ring(body)
            parent_radius = registry.params(ring.parent).radius
            self._rings[body] = RingRadii(parent_radius + ring.inner_offset,
                                          parent_radius + ring.outer_offset)
        # start at the initial scale; the ring cache is already unscaled
        self._resize_bodies()

    # ========== SCALE ==========
    def set_scale(self, scale: float, focused: bool = False) -> float:
        """Update the scale state; see ScaleState.update"""
        return self._state.update(scale, focused)

    def set_focus_mode(self, enabled: bool):
        """Set the sticky focus flag (takes effect on the next set_scale)"""
        self._state.focus_mode = bool(enabled)

    def apply_scale(self):
        """
        Rescale every registered body with the effective scale.

        Orbiting bodies get ``nominal * scale / RADIUS_DIVISORS``. Ring systems
        multiply their cached radii instead, compounding across calls. Cloud
        layers are left to the derived-geometry pass.
        """
        for ring in self._rings.values():
            ring.scale(self._state.effective)
        self._resize_bodies()

    def _resize_bodies(self):
        """Set orbiting-body radii from the effective scale (not cumulative)"""
        scaling = self._state.effective
        for body in self._registry.orbiting_bodies():
            params = self._registry.params(body)
            state = self._registry.state(body)
            state.radius = params.radius * scaling / self.RADIUS_DIVISORS.get(body, 1.0)
            self._registry.mirror(body, position=False, roll=False, radius=True)

    def reset_rings(self):
        """Restore all cached ring radii to their unscaled values"""
        for ring in self._rings.values():
            ring.reset()

    # ========== ZOOM ==========
    def zoom_limit(self, body: Body, camera_controller=None) -> float:
        """
        Closest camera distance allowed when focused on a body.

        Parameters
        ----------
        body : Body
        camera_controller : optional
            Supplies the default limit for the Sun and the whole-system view
            (falls back to config.DEFAULT_ZOOM_LIMIT)

        Returns
        -------
        float
            Zoom limit [scene units]; 0.0 for unregistered bodies
        """
        if body in self.DEFAULT_LIMIT_BODIES:
            if camera_controller is not None:
                return camera_controller.default_zoom_limit()
            return self._default_zoom_limit
        radius = self._registry.nominal_radius(body)
        if radius is None:
            return 0.0
        limit = self._state.effective * radius * self.ZOOM_RADII
        return limit * self.ZOOM_CORRECTIONS.get(body, 1.0)

    def outer_radius(self, body: Body) -> float:
        """
        Extent of the scene as seen from a body.

        The scene distance plus the body radius, plus the ring span for
        ringed planets; the primary star reports a fraction of its radius.
        """
        params = self._registry.params(body)
        if params is None:
            return float(self._solar_distance)
        if params.is_primary:
            return params.radius / self.PRIMARY_OUTER_DIVISOR
        outer = self._solar_distance + params.radius
        for ring_body in self._registry.ring_systems():
            ring = self._registry.ring(ring_body)
            if ring.parent == body:
                outer += ring.outer_offset
        return float(outer)

    # ========== PROPERTY ACCESS ==========
    @property
    def state(self) -> ScaleState:
        return self._state

    @property
    def effective_scale(self) -> float:
        return self._state.effective

    @property
    def baseline_scale(self) -> float:
        return self._state.baseline

    @property
    def focus_mode(self) -> bool:
        return self._state.focus_mode

    def ring_radii(self, body: Body) -> Optional[RingRadii]:
        return self._rings.get(body)

'''Orrery engine context
Orrery class definition'''

import numpy as np
import pandas as pd
from datetime import datetime
from typing import Dict, Optional
from .catalog import Body, BodyParams, RingParams
from .clock import SimulatedClock, TimeIntegrator
from .ephemeris import Ephemeris
from .geometry import DerivedGeometryUpdater
from .registry import BodyRegistry, BodyState
from .scale import ScaleController
from .solver import PositionSolver


class Orrery:
    """
    Time-integration and orbital-position engine of a solar-system view.

    One Orrery owns the registry, clock, scale state and camera bindings of a
    scene. The frame driver calls, once per frame::

        orrery.advance_time(reference, dt)
        orrery.recompute_all_positions()
        orrery.additional_calculation()

    or simply ``orrery.step(dt, reference)``. Results are mirrored to bound
    visual entities; entities are never read back except by
    ``world_position``.

    Parameters
    ----------
    catalog : dict of Body -> BodyParams, optional
        Orbiting bodies (default: built-in solar system)
    rings : dict of Body -> RingParams, optional
        Ring systems (default: Saturn and Uranus rings)
    cloud_layers : dict of Body -> Body, optional
        Cloud layers and the planet they cover (default: Earth clouds)
    start : datetime, optional
        Simulated UT start (default from config)
    camera : optional
        Object with ``position``, ``set_position`` and ``set_view_center``
    camera_controller : optional
        Object with zoom limit/speed accessors (see orrery.view)

    Notes
    -----
    Configuration values are read once, at construction. Body positions are
    solved for the start time before the constructor returns.
    """
    # ========== CLASS CONSTANTS ==========
    # zoom speed while focused on a body, relative to the default
    FOCUSED_ZOOM_SPEED_DIVISOR = 3.0

    # ========== CONSTRUCTION ==========
    def __init__(
        self,
        catalog: Optional[Dict[Body, BodyParams]] = None,
        rings: Optional[Dict[Body, RingParams]] = None,
        cloud_layers: Optional[Dict[Body, Body]] = None,
        start: Optional[datetime] = None,
        camera=None,
        camera_controller=None
    ):
        self._registry = BodyRegistry(catalog, rings, cloud_layers)
        self._integrator = TimeIntegrator(self._registry, SimulatedClock(start))
        self._solver = PositionSolver(self._registry)
        self._scale = ScaleController(self._registry)
        self._geometry = DerivedGeometryUpdater(self._registry, self._scale)
        self._camera = camera
        self._camera_controller = camera_controller
        self._delta_time = 0.0

        # place everything at the start time
        self._solver.solve_all(self.clock.current_days, 0.0)
        self._geometry.update()

    # ========== COLLABORATORS ==========
    def bind(self, body, entity):
        """Attach a visual entity that mirrors ``body``"""
        self._registry.bind(body, entity)

    def unbind(self, body):
        self._registry.unbind(body)

    def set_camera(self, camera):
        self._camera = camera

    def set_camera_controller(self, controller):
        self._camera_controller = controller

    # ========== TIME ==========
    def set_delta_time(self, dt: float):
        """Store the real frame time [s] used by the next advance_time()"""
        self._delta_time = float(dt)

    def advance_time(self, reference=Body.SOLAR_SYSTEM_VIEW,
                     dt: Optional[float] = None) -> float:
        """
        Advance simulated time by one frame.

        Parameters
        ----------
        reference : Body or str, optional
            Focused body choosing the rate (default whole-system view)
        dt : float, optional
            Real frame time [s]; defaults to the last set_delta_time() value

        Returns
        -------
        float
            Simulated days elapsed
        """
        if dt is not None:
            self.set_delta_time(dt)
        return self._integrator.advance(Body.parse(reference), self._delta_time)

    def recompute_all_positions(self):
        """Solve all orbiting bodies at the current day-count"""
        clock = self.clock
        self._solver.solve_all(clock.current_days, clock.delta_days)

    def solve_position(self, body):
        """Solve a single body at the current day-count"""
        clock = self.clock
        self._solver.solve(Body.parse(body), clock.current_days, clock.delta_days)

    def additional_calculation(self):
        """Place ring systems and cloud layers on their planets"""
        self._geometry.update()

    def step(self, dt: float, reference=Body.SOLAR_SYSTEM_VIEW) -> float:
        """
        Run one full frame: advance time, solve positions, derive geometry.

        Returns
        -------
        float
            Simulated days elapsed
        """
        delta_days = self.advance_time(reference, dt)
        self.recompute_all_positions()
        self.additional_calculation()
        return delta_days

    def current_simulated_time(self) -> datetime:
        return self.clock.time

    # ========== SPEED ==========
    def set_speed(self, days_per_second: float):
        """Set the base rate; negative rates are a validation error"""
        self._integrator.set_speed(days_per_second)

    @property
    def speed(self) -> float:
        """Base rate [simulated days per real second]"""
        return self._integrator.speed

    def toggle_burst(self) -> float:
        return self._integrator.burst.toggle()

    def reset_burst(self):
        self._integrator.burst.reset()

    def burst_multiplier(self) -> float:
        return self._integrator.burst.multiplier

    # ========== SCALE ==========
    def set_scale(self, scale: float, focused: bool = False) -> float:
        return self._scale.set_scale(scale, focused)

    def set_focus_mode(self, enabled: bool):
        self._scale.set_focus_mode(enabled)

    def apply_scale(self):
        self._scale.apply_scale()

    def change_scale(self, scale: float, focused: bool = False):
        """set_scale(), apply_scale() and a derived-geometry refresh"""
        self._scale.set_scale(scale, focused)
        self._scale.apply_scale()
        self._geometry.update()

    def outer_radius(self, body) -> float:
        return self._scale.outer_radius(Body.parse(body))

    # ========== CAMERA ==========
    def zoom_limit(self, body) -> float:
        """Closest camera distance for ``body`` at the current scale"""
        return self._scale.zoom_limit(Body.parse(body), self._camera_controller)

    def update_camera_zoom_limits(self, body):
        """
        Push the zoom limit and speed for ``body`` to the camera controller.

        The whole-system view restores the controller defaults. No-op without
        a controller or when the computed limit is not positive.
        """
        controller = self._camera_controller
        if controller is None:
            return
        body = Body.parse(body)
        if body == Body.SOLAR_SYSTEM_VIEW:
            controller.set_default_zoom_limit()
            controller.set_default_zoom_speed()
            return
        limit = self.zoom_limit(body)
        if limit <= 0:
            return
        controller.set_zoom_limit(limit)
        controller.set_zoom_speed(
            controller.default_zoom_speed() / self.FOCUSED_ZOOM_SPEED_DIVISOR)

    def update_view_center(self, body):
        """Point the camera at ``body`` (the primary for the whole-system view)"""
        body = Body.parse(body)
        if body == Body.SOLAR_SYSTEM_VIEW:
            body = self._registry.primary()
        state = self._registry.state(body)
        if self._camera is None or state is None:
            return
        self._camera.set_view_center(state.position)

    def world_position(self, body) -> np.ndarray:
        """
        World-space position of ``body``.

        Reads the bound entity's translation when there is one, the engine
        state otherwise. The whole-system view and unregistered bodies give
        the origin.
        """
        body = Body.parse(body)
        if body == Body.SOLAR_SYSTEM_VIEW:
            return np.zeros(3)
        entity = self._registry.entity(body)
        if entity is not None:
            return np.asarray(entity.translation, dtype=float)
        state = self._registry.state(body)
        if state is None:
            return np.zeros(3)
        return state.position

    def camera_relative_target_position(self, body) -> np.ndarray:
        """
        Camera placement at the zoom limit of ``body``.

        Moves along the camera-to-body ray by ``|distance - zoom_limit|``,
        starting from the current camera position.

        Returns
        -------
        np.ndarray
            Target camera position; the origin when there is no camera or the
            body is unregistered
        """
        body = Body.parse(body)
        state = self._registry.state(body)
        if self._camera is None or state is None:
            return np.zeros(3)
        camera_position = np.asarray(self._camera.position, dtype=float)
        on_target = state.position - camera_position
        distance = np.linalg.norm(on_target)
        if distance == 0:
            return camera_position

        limit = self.zoom_limit(body)
        need = distance - limit
        if need <= 0:
            need = limit - distance
        return on_target / distance * need + camera_position

    # ========== EPHEMERIS ==========
    def ephemeris(self, body, d0: Optional[float] = None,
                  d1: Optional[float] = None) -> Ephemeris:
        """
        Sample a body's path over a day-count range.

        Parameters
        ----------
        body : Body or str
        d0 : float, optional
            First day-count (default: current day-count)
        d1 : float, optional
            Last day-count (default: d0 plus one orbit of the body, from its
            mean-anomaly rate)
        """
        body = Body.parse(body)
        if d0 is None:
            d0 = self.clock.current_days
        if d1 is None:
            d1 = d0 + Ephemeris.orbit_days(self._registry, body)
        return Ephemeris(self._registry, body, d0, d1, self._solver.au_scale)

    # ========== PROPERTY ACCESS ==========
    @property
    def registry(self) -> BodyRegistry:
        return self._registry

    @property
    def clock(self) -> SimulatedClock:
        return self._integrator.clock

    @property
    def integrator(self) -> TimeIntegrator:
        return self._integrator

    @property
    def scale(self) -> ScaleController:
        return self._scale

    @property
    def camera(self):
        return self._camera

    @property
    def camera_controller(self):
        return self._camera_controller

    @property
    def delta_time(self) -> float:
        return self._delta_time

    def body_state(self, body) -> Optional[BodyState]:
        return self._registry.state(Body.parse(body))

    # ========== DIAGNOSTICS ==========
    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the state of every registered body.

        Returns
        -------
        pd.DataFrame
            Indexed by body name, columns x, y, z, roll, tilt, radius, bound
        """
        rows = []
        for body in self._registry:
            state = self._registry.state(body)
            rows.append({
                'body': body.label,
                'x': state.x,
                'y': state.y,
                'z': state.z,
                'roll': state.roll,
                'tilt': state.tilt,
                'radius': state.radius,
                'bound': self._registry.is_bound(body),
            })
        return pd.DataFrame(rows).set_index('body')

    def summary(self):
        """Print a summary of the engine state."""
        clock = self.clock
        print(f"Simulated time: {clock.time.isoformat()} "
              f"(day {clock.current_days:.6f}, last step {clock.delta_days:.6f} d)")
        print(f"Speed: {self.speed} d/s x burst {self.burst_multiplier()}")
        print(f"Scale: effective {self._scale.effective_scale}, "
              f"baseline {self._scale.baseline_scale}, "
              f"focus mode {'on' if self._scale.focus_mode else 'off'}")
        print(f"Bodies: {len(self._registry.orbiting_bodies())} orbiting, "
              f"{len(self._registry.dependents())} dependent, "
              f"{len(self._registry.bound_bodies())} bound")
        for body in self._registry:
            state = self._registry.state(body)
            print(f"  {body.label:<12} x={state.x:14.3f} y={state.y:14.3f} "
                  f"z={state.z:14.3f} roll={state.roll:12.3f}° "
                  f"r={state.radius:10.4f}")
        if self._camera is None:
            print("Camera: not bound")
        if self._camera_controller is None:
            print("Camera controller: not bound")

    def __repr__(self):
        return (f"Orrery(time={self.clock.time.isoformat()}, "
                f"bodies={len(self._registry)}, "
                f"scale={self._scale.effective_scale})")

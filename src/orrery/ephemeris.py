'''Ephemeris sampling
Ephemeris class definition'''

import numpy as np
import pandas as pd
from typing import Optional, Union
import plotly.graph_objects as go
from .catalog import Body
from .config import config
from .registry import BodyRegistry
from .solver import absolute_position


class Ephemeris:
    """
    Path of one body over a day-count range, with continuous-time access.

    Positions are evaluated in closed form from the orbital elements of the
    body and every center it orbits, so any day inside the range can be
    queried without stepping the engine.

    Attributes:
        registry: Registry the body belongs to
        body: Sampled body
        d0: First day-count
        d1: Last day-count
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, registry: BodyRegistry, body: Body, d0: float,
                 d1: float, au_scale: Optional[float] = None):
        if registry.params(body) is None:
            raise ValueError(f"{body.name} is not an orbiting body in the registry")
        if not d0 < d1:
            raise ValueError(f"d0 ({d0}) must be < d1 ({d1})")
        self._registry = registry
        self._body = body
        self._d0 = float(d0)
        self._d1 = float(d1)
        self._au_scale = float(config.AU_SCALE if au_scale is None else au_scale)

    @staticmethod
    def orbit_days(registry: BodyRegistry, body: Body) -> float:
        """
        Length of one orbit [days], from the mean-anomaly rate.

        Bodies without a mean-anomaly rate (the primary, static elements)
        fall back to their period.
        """
        params = registry.params(body)
        if params is None:
            raise ValueError(f"{body.name} is not an orbiting body in the registry")
        if params.elements is None or params.elements.M2 == 0:
            return params.period
        return 360.0 / abs(params.elements.M2)

    # ========== PROPERTY ACCESS ==========
    @property
    def registry(self) -> BodyRegistry:
        return self._registry

    @property
    def body(self) -> Body:
        return self._body

    @property
    def d0(self) -> float:
        return self._d0

    @property
    def d1(self) -> float:
        return self._d1

    @property
    def duration(self) -> float:
        """Sampled span [days]"""
        return self._d1 - self._d0

    # ========== EVALUATION ==========
    def position_at(self, days: float) -> np.ndarray:
        """
        Position at one day-count.

        Parameters:
            days: Day-count to query (must be in [d0, d1])

        Returns:
            Array of shape (3,) [scene units]
        """
        self._validate_day(days)
        return absolute_position(self._registry, self._body, float(days),
                                 self._au_scale)

    def evaluate(self, days: Union[float, np.ndarray, list]) -> np.ndarray:
        """
        Evaluate positions at one or more day-counts.

        Parameters:
            days: Single day-count or array of day-counts

        Returns:
            Array of shape (3,) if days is scalar,
            array of shape (n, 3) if days is array-like
        """
        if isinstance(days, (int, float)):
            return self.position_at(days)
        days = np.asarray(days, dtype=float)
        if days.size and (days.min() < self._d0 or days.max() > self._d1):
            raise ValueError(
                f"Days outside ephemeris bounds [{self._d0}, {self._d1}]"
            )
        return absolute_position(self._registry, self._body, days, self._au_scale)

    def sample(self, n_points: int = 100) -> np.ndarray:
        """
        Uniformly sample the path in time.

        Parameters:
            n_points: Number of points to sample (default: 100)

        Returns:
            Array of shape (n_points, 3)
        """
        if n_points < 2:
            raise ValueError("n_points must be at least 2, use .position_at()")
        return self.evaluate(self.get_days(n_points))

    def _validate_day(self, days: float):
        if not (self._d0 <= days <= self._d1):
            raise ValueError(
                f"Day {days} outside ephemeris bounds [{self._d0}, {self._d1}]"
            )

    def contains_day(self, days: float) -> bool:
        return self._d0 <= days <= self._d1

    def get_days(self, n_points: int = 100) -> np.ndarray:
        """Uniform day-count array spanning the ephemeris."""
        return np.linspace(self._d0, self._d1, n_points)

    def to_dataframe(self, days: Optional[np.ndarray] = None,
                     n_points: Optional[int] = None) -> pd.DataFrame:
        """
        Export the path to a pandas DataFrame.

        Parameters:
            days: Specific day-counts to evaluate. If None, uses uniform sampling.
            n_points: Number of uniform samples if days not provided
                      (default: config.DEFAULT_PLOT_POINTS)

        Returns:
            DataFrame with columns day, x, y, z
        """
        if days is None:
            if n_points is None:
                n_points = config.DEFAULT_PLOT_POINTS
            days = self.get_days(n_points)
        else:
            days = np.asarray(days, dtype=float)
        positions = self.evaluate(days)
        return pd.DataFrame({
            'day': days,
            'x': positions[:, 0],
            'y': positions[:, 1],
            'z': positions[:, 2],
        })

    # ========== SPECIAL METHODS ==========
    def __call__(self, days: float) -> np.ndarray:
        """Syntactic sugar for .position_at(days)."""
        return self.position_at(days)

    def __repr__(self):
        return (f"Ephemeris(body={self._body.name}, d0={self._d0}, "
                f"d1={self._d1}, duration={self.duration})")

    def __str__(self):
        return f"Ephemeris of {self._body.label}: day ∈ [{self._d0}, {self._d1}]"

    # ========== PLOTTING ==========
    def plot_3d(self, n_points: Optional[int] = None, show_center: bool = True,
                body_color: Optional[str] = None,
                traj_color: Optional[str] = None) -> go.Figure:
        """
        Create a 3D plot of the path with an optional marker at its center.

        Parameters:
            n_points: Number of samples (default: config.DEFAULT_PLOT_POINTS)
            show_center: Mark the center body at the mid-range day (default: True)
            body_color: Marker color (default: config.DEFAULT_BODY_COLOR)
            traj_color: Path color (default: config.DEFAULT_TRAJ_COLOR)

        Returns:
            Plotly Figure object
        """
        if n_points is None:
            n_points = config.DEFAULT_PLOT_POINTS
        if body_color is None:
            body_color = config.DEFAULT_BODY_COLOR
        if traj_color is None:
            traj_color = config.DEFAULT_TRAJ_COLOR

        positions = self.sample(n_points)
        fig = go.Figure()

        center = self._registry.params(self._body).center
        if show_center and center is not None:
            mid = 0.5 * (self._d0 + self._d1)
            center_position = absolute_position(self._registry, center, mid,
                                                self._au_scale)
            fig.add_trace(go.Scatter3d(
                x=[center_position[0]],
                y=[center_position[1]],
                z=[center_position[2]],
                mode='markers',
                marker=dict(color=body_color, size=6),
                name=center.label
            ))

        fig.add_trace(go.Scatter3d(
            x=positions[:, 0],
            y=positions[:, 1],
            z=positions[:, 2],
            mode='lines',
            line=dict(color=traj_color, width=3),
            name=self._body.label,
            hovertemplate='x: %{x:.1f}<br>y: %{y:.1f}<br>z: %{z:.1f}<extra></extra>'
        ))

        fig.update_layout(
            scene=dict(
                xaxis_title='X [scene units]',
                yaxis_title='Y [scene units]',
                zaxis_title='Z [scene units]',
                aspectmode='data'
            ),
            title=f'{self._body.label} path, day {self._d0:.1f} to {self._d1:.1f}',
            showlegend=True
        )
        return fig

    def add_to_plot(self, fig: go.Figure, n_points: Optional[int] = None,
                    color: str = 'blue', name: Optional[str] = None,
                    **kwargs) -> go.Figure:
        """
        Add this path to an existing Plotly figure.

        Parameters:
            fig: Existing Plotly Figure object
            n_points: Number of samples (default: config.DEFAULT_PLOT_POINTS)
            color: Line color (default: 'blue')
            name: Legend name (default: body label)
            **kwargs: Additional arguments passed to Scatter3d

        Returns:
            Updated Plotly Figure object (same object, modified in place)
        """
        if n_points is None:
            n_points = config.DEFAULT_PLOT_POINTS
        if name is None:
            name = self._body.label
        positions = self.sample(n_points)
        fig.add_trace(go.Scatter3d(
            x=positions[:, 0],
            y=positions[:, 1],
            z=positions[:, 2],
            mode='lines',
            line=dict(color=color, width=3),
            name=name,
            hovertemplate='x: %{x:.1f}<br>y: %{y:.1f}<br>z: %{z:.1f}<extra></extra>',
            **kwargs
        ))
        return fig

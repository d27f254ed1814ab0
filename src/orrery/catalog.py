"""
Solar System Body Catalog
=========================

Identifiers, static parameters and built-in constants for the bodies the
engine animates.

Orbital elements are taken from Paul Schlyter, "How to compute planetary
positions" (http://www.stjarnhimlen.se/comp/ppcomp.html), with Earth's
elements derived from the Sun's geocentric orbit. Pluto uses the JPL
approximate elements (Standish, "Keplerian Elements for Approximate Positions
of the Major Planets"), rates converted from per century to per day.

Radii are in scene units (thousands of km). Periods are rotation periods in
days; they drive both the axial roll and the per-body time rate.

Examples
--------
>>> from orrery.catalog import SOLAR_SYSTEM, Body
>>> SOLAR_SYSTEM[Body.EARTH].center
<Body.SUN: 0>
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional
from .orbital_elements import OrbitalElements


# define an enumerated list of bodies; values give the solve order
class Body(Enum):
    SUN = 0
    MERCURY = 1
    VENUS = 2
    EARTH = 3
    MARS = 4
    JUPITER = 5
    SATURN = 6
    URANUS = 7
    NEPTUNE = 8
    PLUTO = 9
    MOON = 10
    SATURN_RING = 11
    URANUS_RING = 12
    EARTH_CLOUD = 13
    SOLAR_SYSTEM_VIEW = 14

    @property
    def index(self) -> int:
        """Position of the body in the solve order"""
        return self.value

    @property
    def label(self) -> str:
        """Human-readable name"""
        return self.name.replace('_', ' ').title()

    @staticmethod
    def parse(body):
        """Convert string or enum to Body enum"""
        if isinstance(body, Body):
            return body
        elif isinstance(body, str):
            key = body.strip().upper().replace(' ', '_').replace('-', '_')
            if key in Body.__members__:
                return Body[key]
            raise ValueError(f"Unknown body '{body}'. "
                             f"Use: {[b.name.lower() for b in Body]}")
        else:
            raise TypeError(f"body must be Body or str, got {type(body)}")


@dataclass(frozen=True)
class BodyParams:
    """
    Immutable catalog entry for a celestial body.

    Attributes
    ----------
    name : str
        Display name
    elements : OrbitalElements or None
        Orbital elements relative to ``center``; None for the primary star
    period : float
        Rotation period [days]
    radius : float
        Nominal radius [scene units]
    tilt : float
        Axial tilt [degrees]
    center : Body or None
        Body this one orbits; None for the primary star
    """
    name: str
    elements: Optional[OrbitalElements]
    period: float
    radius: float
    tilt: float = 0.0
    center: Optional[Body] = None

    def __post_init__(self):
        #Validate parameters
        if self.period <= 0:
            raise ValueError(f"Period must be positive, got {self.period}")
        if self.radius <= 0:
            raise ValueError(f"Radius must be positive, got {self.radius}")
        if (self.elements is None) != (self.center is None):
            raise ValueError(
                f"{self.name}: elements and center must both be given "
                f"or both be None"
            )

    @property
    def is_primary(self) -> bool:
        """True for the body at the origin of the system"""
        return self.center is None


@dataclass(frozen=True)
class RingParams:
    """
    Immutable ring-system geometry.

    Inner and outer radii are offsets added to the parent's nominal radius.

    Attributes
    ----------
    parent : Body
        Planet carrying the rings
    inner_offset : float
        Inner edge beyond the planet surface [scene units]
    outer_offset : float
        Outer edge beyond the planet surface [scene units]
    """
    parent: Body
    inner_offset: float
    outer_offset: float

    def __post_init__(self):
        if self.inner_offset < 0:
            raise ValueError(
                f"Inner offset must be non-negative, got {self.inner_offset}")
        if self.outer_offset < self.inner_offset:
            raise ValueError(
                f"Outer offset ({self.outer_offset}) must not be smaller than "
                f"inner offset ({self.inner_offset})")


"""
Predefined solar system bodies
"""
SUN = BodyParams(
    name='Sun',
    elements=None,
    period=25.05,
    radius=694.439,
    tilt=63.87,
)

MERCURY = BodyParams(
    name='Mercury',
    elements=OrbitalElements(
        N1=48.3313, N2=3.24587e-5,
        i1=7.0047, i2=5.00e-8,
        w1=29.1241, w2=1.01444e-5,
        a1=0.387098,
        e1=0.205635, e2=5.59e-10,
        M1=168.6562, M2=4.0923344368),
    period=58.646,
    radius=2.433722,
    tilt=0.04,
    center=Body.SUN,
)

VENUS = BodyParams(
    name='Venus',
    elements=OrbitalElements(
        N1=76.6799, N2=2.46590e-5,
        i1=3.3946, i2=2.75e-8,
        w1=54.8910, w2=1.38374e-5,
        a1=0.723330,
        e1=0.006773, e2=-1.302e-9,
        M1=48.0052, M2=1.6021302244),
    period=243.0185,
    radius=6.046079,
    tilt=177.36,
    center=Body.SUN,
)

EARTH = BodyParams(
    name='Earth',
    elements=OrbitalElements(
        N1=0.0,
        i1=0.0,
        w1=102.9404, w2=4.70935e-5,
        a1=1.000000,
        e1=0.016709, e2=-1.151e-9,
        M1=356.0470, M2=0.9856002585),
    period=0.997,
    radius=6.371,
    tilt=23.44,
    center=Body.SUN,
)

MARS = BodyParams(
    name='Mars',
    elements=OrbitalElements(
        N1=49.5574, N2=2.11081e-5,
        i1=1.8497, i2=-1.78e-8,
        w1=286.5016, w2=2.92961e-5,
        a1=1.523688,
        e1=0.093405, e2=2.516e-9,
        M1=18.6021, M2=0.5240207766),
    period=1.026,
    radius=3.389372,
    tilt=25.19,
    center=Body.SUN,
)

JUPITER = BodyParams(
    name='Jupiter',
    elements=OrbitalElements(
        N1=100.4542, N2=2.76854e-5,
        i1=1.3030, i2=-1.557e-7,
        w1=273.8777, w2=1.64505e-5,
        a1=5.20256,
        e1=0.048498, e2=4.469e-9,
        M1=19.8950, M2=0.0830853001),
    period=0.4135,
    radius=69.911,
    tilt=3.13,
    center=Body.SUN,
)

SATURN = BodyParams(
    name='Saturn',
    elements=OrbitalElements(
        N1=113.6634, N2=2.38980e-5,
        i1=2.4886, i2=-1.081e-7,
        w1=339.3939, w2=2.97661e-5,
        a1=9.55475,
        e1=0.055546, e2=-9.499e-9,
        M1=316.9670, M2=0.0334442282),
    period=0.4396,
    radius=58.232,
    tilt=26.73,
    center=Body.SUN,
)

URANUS = BodyParams(
    name='Uranus',
    elements=OrbitalElements(
        N1=74.0005, N2=1.3978e-5,
        i1=0.7733, i2=1.9e-8,
        w1=96.6612, w2=3.0565e-5,
        a1=19.18171, a2=-1.55e-8,
        e1=0.047318, e2=7.45e-9,
        M1=142.5905, M2=0.011725806),
    period=0.71833,
    radius=25.362,
    tilt=97.77,
    center=Body.SUN,
)

NEPTUNE = BodyParams(
    name='Neptune',
    elements=OrbitalElements(
        N1=131.7806, N2=3.0173e-5,
        i1=1.7700, i2=-2.55e-7,
        w1=272.8461, w2=-6.027e-6,
        a1=30.05826, a2=3.313e-8,
        e1=0.008606, e2=2.15e-9,
        M1=260.2471, M2=0.005995147),
    period=0.6713,
    radius=24.622,
    tilt=28.32,
    center=Body.SUN,
)

PLUTO = BodyParams(
    name='Pluto',
    elements=OrbitalElements(
        N1=110.30393684, N2=-3.2402e-7,
        i1=17.14001206, i2=1.3191e-9,
        w1=113.76497945, w2=-7.8835e-7,
        a1=39.48211675, a2=-8.6505e-9,
        e1=0.24882730, e2=1.4155e-9,
        M1=14.86012204, M2=0.0039766854),
    period=6.387230,
    radius=1.1883,
    tilt=122.53,
    center=Body.SUN,
)

MOON = BodyParams(
    name='Moon',
    elements=OrbitalElements(
        N1=125.1228, N2=-0.0529538083,
        i1=5.1454,
        w1=318.0634, w2=0.1643573223,
        a1=0.002569555,
        e1=0.054900,
        M1=115.3654, M2=13.0649929509),
    period=27.321582,
    radius=1.737,
    tilt=6.68,
    center=Body.EARTH,
)

# Ring systems (radii beyond the planet surface)
SATURN_RINGS = RingParams(parent=Body.SATURN, inner_offset=6.630, outer_offset=120.700)
URANUS_RINGS = RingParams(parent=Body.URANUS, inner_offset=2.0, outer_offset=40.0)


SOLAR_SYSTEM: Dict[Body, BodyParams] = {
    Body.SUN: SUN,
    Body.MERCURY: MERCURY,
    Body.VENUS: VENUS,
    Body.EARTH: EARTH,
    Body.MARS: MARS,
    Body.JUPITER: JUPITER,
    Body.SATURN: SATURN,
    Body.URANUS: URANUS,
    Body.NEPTUNE: NEPTUNE,
    Body.PLUTO: PLUTO,
    Body.MOON: MOON,
}

RINGS: Dict[Body, RingParams] = {
    Body.SATURN_RING: SATURN_RINGS,
    Body.URANUS_RING: URANUS_RINGS,
}

# Cloud layers, keyed by layer, valued by the planet they cover
CLOUD_LAYERS: Dict[Body, Body] = {
    Body.EARTH_CLOUD: Body.EARTH,
}


def default_catalog() -> Dict[Body, BodyParams]:
    """Return a fresh copy of the built-in body catalog."""
    return dict(SOLAR_SYSTEM)


def default_rings() -> Dict[Body, RingParams]:
    """Return a fresh copy of the built-in ring catalog."""
    return dict(RINGS)


def default_cloud_layers() -> Dict[Body, Body]:
    """Return a fresh copy of the built-in cloud-layer table."""
    return dict(CLOUD_LAYERS)

import pandas as pd

from exoforge.base.types import ObjectKind


class Orbit:
    """
    Orbit around a primary body. Created empty when a slot is generated and
    filled in by the orbital attribute completion. Moon orbits also keep the
    MoonDistance category they were placed with in distance_category, which
    drives the inclination roll and the lookup of major moons. It is None for
    planets, disks and stars.
    """

    def __init__(
        self,
        primary_body_id,
        satellite_ids=None,
        zone_type=None,
        average_distance=0.0,
        average_distance_from_system_center=0.0,
        eccentricity=0.0,
        min_separation=None,
        max_separation=None,
        orbital_period=0.0,
        rotation=0.0,
        day_length=0.0,
        axial_tilt=0.0,
        inclination=0.0,
        distance_category=None,
    ) -> None:
        self.primary_body_id = primary_body_id
        self.satellite_ids = list(satellite_ids) if satellite_ids is not None else []
        self.zone_type = zone_type
        self.average_distance = average_distance
        self.average_distance_from_system_center = average_distance_from_system_center
        self.eccentricity = eccentricity
        self.min_separation = (
            average_distance if min_separation is None else min_separation
        )
        self.max_separation = (
            average_distance if max_separation is None else max_separation
        )
        # Days, negative rotations are retrograde
        self.orbital_period = orbital_period
        self.rotation = rotation
        self.day_length = day_length
        # Degrees
        self.axial_tilt = axial_tilt
        self.inclination = inclination
        # MoonDistance the orbit was drawn from, moons only
        self.distance_category = distance_category

    def __repr__(self):
        return f"{type(self).__name__} object\n{pd.DataFrame(self.dump_params(), index=[0])}"

    def dump_params(self):
        params = {
            "primary": self.primary_body_id,
            "zone": str(self.zone_type) if self.zone_type is not None else None,
            "a": self.average_distance,
            "a_center": self.average_distance_from_system_center,
            "e": self.eccentricity,
            "period": self.orbital_period,
            "rotation": self.rotation,
            "day": self.day_length,
            "tilt": self.axial_tilt,
            "inc": self.inclination,
        }
        return params

    def set_eccentricity(self, eccentricity):
        self.eccentricity = eccentricity
        self.min_separation = (1 - eccentricity) * self.average_distance
        self.max_separation = (1 + eccentricity) * self.average_distance


class OrbitalPoint:
    """
    One node of a star system: a star, a body, a disk or an empty point.
    Children are listed through `orbits` and linked by id, the objects
    themselves live in the system's flat list of points.
    """

    def __init__(self, point_id, own_orbit=None, obj=None, kind=ObjectKind.VOID, orbits=None) -> None:
        self.id = point_id
        self.own_orbit = own_orbit
        self.object = obj
        self.kind = kind
        self.orbits = list(orbits) if orbits is not None else []

    def __repr__(self):
        name = getattr(self.object, "name", None)
        return f"{type(self).__name__} {self.id}\t{self.kind}\t{name}"

    @property
    def distance(self):
        if self.own_orbit is None:
            return 0.0
        return self.own_orbit.average_distance

    @property
    def satellite_ids(self):
        return [sat_id for orbit in self.orbits for sat_id in orbit.satellite_ids]

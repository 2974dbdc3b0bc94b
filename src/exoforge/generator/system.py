"""
Content generation of a whole star system, star by star.
"""

import copy
import itertools
import logging

from exoforge.base.orbit import OrbitalPoint
from exoforge.base.star import Star
from exoforge.base.system import StarSystem
from exoforge.base.types import ObjectKind
from exoforge.exceptions import InvalidInputError
from exoforge.generator.dispatch import get_nearest_forbidden_distance, replace_stubs
from exoforge.generator.gas_giants import (
    generate_gas_giant_arrangement,
    generate_number_of_bodies,
    generate_proto_gas_giant_position,
    locate_proto_gas_giant,
    place_body_stubs,
    place_proto_gas_giant,
    proto_gas_giant_cost,
)
from exoforge.generator.harmonics import apply_tidal_heating
from exoforge.generator.moons import generate_moons
from exoforge.generator.orbits import (
    complete_orbital_period_and_eccentricity,
    complete_rotation_and_axis,
)
from exoforge.generator.slots import generate_orbits, generate_reference_orbit_radius
from exoforge.generator.world import generate_world
from exoforge.generator.zones import calculate_star_zones, collect_all_zones
from exoforge.settings import GenerationSettings
from exoforge.util.dice import GenerationContext

logger = logging.getLogger(__name__)


class SystemGenerator:
    """
    Generates the planets, moons, rings and belts of star systems. Each call
    is independent, the same settings and inputs always give the same
    system.
    """

    def __init__(self, settings=None) -> None:
        self.settings = settings if settings is not None else GenerationSettings()

    def __repr__(self):
        return f"{type(self).__name__}(seed={self.settings.seed!r})"

    def generate(self, stars, coord=(0, 0, 0), system_index=0, system_traits=()):
        """
        Generate the content of one system
        Args:
            stars (list):
                Star objects or star dicts, see Star
            coord (tuple):
                Coordinates of the system, part of every decision label
            system_index (int):
                Index of the system at its coordinates
            system_traits (list):
                System traits, e.g. Trait(SystemTraitKind.CARBON_RICH)
        Returns:
            StarSystem:
                The generated system
        """
        stars = prepare_stars(stars)
        system_traits = list(system_traits)
        for star in stars:
            calculate_star_zones(star, [other for other in stars if other is not star])
        all_zones = collect_all_zones(stars)

        context = GenerationContext(self.settings.seed, coord, system_index)
        allocate_id = itertools.count(max(star.id for star in stars) + 1).__next__
        points = {}
        star_points = []
        arrangements = {}
        for star in stars:
            star_orbits, arrangement = self.generate_star_content(
                context.for_star(star.id), star, all_zones, system_traits, points, allocate_id
            )
            arrangements[star.id] = arrangement
            star_points.append(
                OrbitalPoint(star.id, star.orbit, star, ObjectKind.STAR, orbits=star_orbits)
            )

        system = StarSystem(
            coord,
            system_index,
            star_points + [points[point_id] for point_id in sorted(points)],
            zones=all_zones,
            arrangements=arrangements,
            traits=system_traits,
        )
        logger.info(
            "System %s-%d: %d stars, %d bodies, %d disks",
            context.coord_str,
            system_index,
            len(stars),
            len(system.body_points),
            len(system.disks),
        )
        return system

    def generate_star_content(self, context, star, all_zones, system_traits, points, allocate_id):
        """
        Populate the orbits of one star
        Returns:
            tuple:
                (populated orbits of the star, gas giant arrangement)
        """
        system_settings = self.settings.system
        body_settings = self.settings.celestial_body

        bodies_left = generate_number_of_bodies(star, context, system_settings)
        arrangement = generate_gas_giant_arrangement(
            star, bodies_left, system_traits, context, system_settings
        )

        proto_orbit = None
        position = generate_proto_gas_giant_position(arrangement, star, context)
        if position is not None:
            proto_orbit = locate_proto_gas_giant(all_zones, star, star.id, position)
        if proto_orbit is not None:
            point_id = allocate_id()
            points[point_id] = place_proto_gas_giant(
                context, star, proto_orbit, point_id, body_settings
            )
            bodies_left -= proto_gas_giant_cost(arrangement)
            reference_radius = proto_orbit.average_distance
        else:
            reference_radius = generate_reference_orbit_radius(star, context, bodies_left)

        orbits = generate_orbits(all_zones, star, star.id, context, reference_radius)
        if proto_orbit is not None:
            orbits.append(proto_orbit)
            orbits.sort(key=lambda orbit: orbit.average_distance)

        bodies_left = place_body_stubs(
            context, star, orbits, points, arrangement, bodies_left, body_settings, allocate_id
        )
        replace_stubs(context, star, orbits, points, all_zones, bodies_left, body_settings)

        populated_orbits = [orbit for orbit in orbits if orbit.satellite_ids]
        planet_points = [
            points[point_id] for orbit in populated_orbits for point_id in orbit.satellite_ids
        ]
        for point in planet_points:
            complete_orbital_period_and_eccentricity(
                context,
                point,
                star.mass,
                arrangement,
                forbidden_distance=get_nearest_forbidden_distance(
                    all_zones, point.own_orbit.average_distance_from_system_center
                ),
            )

        moons_by_planet = {}
        for point in planet_points:
            if not point.kind.is_body:
                continue
            moon_points = generate_moons(
                context,
                star,
                point,
                body_settings,
                allocate_id,
                attempts=system_settings.moon_placement_attempts,
            )
            for moon_point in moon_points:
                points[moon_point.id] = moon_point
            self.complete_moons(context, star, point, moon_points, arrangement, system_traits)
            moons_by_planet[point.id] = moon_points

        for point in planet_points:
            complete_rotation_and_axis(
                context,
                point,
                star,
                arrangement,
                system_traits,
                moon_points=moons_by_planet.get(point.id, ()),
            )
        apply_tidal_heating(
            planet_points, are_moons=False, tolerance=body_settings.harmonics_tolerance
        )
        for point in planet_points:
            if point.kind.is_body and point.object.is_telluric:
                generate_world(
                    context,
                    point,
                    star,
                    system_traits,
                    body_settings,
                    moon_points=moons_by_planet.get(point.id, ()),
                )
        return populated_orbits, arrangement

    def complete_moons(self, context, star, planet_point, moon_points, arrangement, system_traits):
        """
        Orbits, tidal heating and world properties of the moons of a body
        """
        body_settings = self.settings.celestial_body
        planet = planet_point.object
        for moon_point in moon_points:
            complete_orbital_period_and_eccentricity(
                context, moon_point, planet.mass, arrangement, is_moon=True
            )
            complete_rotation_and_axis(
                context,
                moon_point,
                star,
                arrangement,
                system_traits,
                is_moon=True,
                primary_point=planet_point,
            )
        apply_tidal_heating(
            sorted(moon_points, key=lambda point: point.distance),
            are_moons=True, tolerance=body_settings.harmonics_tolerance
        )
        for moon_point in moon_points:
            if moon_point.kind.is_body and moon_point.object.is_telluric:
                generate_world(
                    context,
                    moon_point,
                    star,
                    system_traits,
                    body_settings,
                    is_moon=True,
                    distance_from_star=planet_point.own_orbit.average_distance,
                )


def prepare_stars(stars):
    """
    Star objects of a system, built from dicts where needed
    """
    # Generation writes zones and traits on the stars, callers keep theirs
    stars = [copy.deepcopy(star) if isinstance(star, Star) else Star(star) for star in stars]
    if not stars:
        raise InvalidInputError("A system needs at least one star")
    if len({star.id for star in stars}) != len(stars):
        raise InvalidInputError("Stars of a system need distinct ids")
    return stars

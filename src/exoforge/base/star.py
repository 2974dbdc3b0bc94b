import numpy as np

from exoforge.base.types import LuminosityClass, SpectralClass, StellarEvolution, ZoneType
from exoforge.exceptions import InvalidInputError


class Star:
    """
    The star of a system, as handed over by whatever generated it. Mass, radius
    and luminosity are in solar units, age in billions of years.
    """

    def __init__(self, star_dict):
        self.id = star_dict.get("id", 0)
        self.name = star_dict["name"]
        self.mass = star_dict["mass"]
        self.radius = star_dict["radius"]
        self.luminosity = star_dict["luminosity"]
        self.age = star_dict.get("age", 4.6)
        self.spectral_class = SpectralClass(star_dict.get("spectral_class", "G"))
        self.spectral_subtype = star_dict.get("spectral_subtype", 2)
        self.luminosity_class = LuminosityClass(star_dict.get("luminosity_class", "V"))
        self.population = StellarEvolution(star_dict.get("population", "Dwarf"))
        self.traits = list(star_dict.get("traits", []))
        # Own orbit around the system barycenter, binary members only
        self.orbit = star_dict.get("orbit")
        self.zones = []

        if self.mass <= 0:
            raise InvalidInputError(f"Star {self.name} has a non-positive mass")
        if self.radius < 0 or self.luminosity < 0:
            raise InvalidInputError(
                f"Star {self.name} has a negative radius or luminosity"
            )

    def __repr__(self):
        return f"{type(self).__name__} object\n{self.name}"

    @property
    def spectral_type(self):
        return f"{self.spectral_class}{self.spectral_subtype}{self.luminosity_class}"

    @property
    def distance_from_system_center(self):
        if self.orbit is None:
            return 0.0
        return self.orbit.average_distance_from_system_center

    @property
    def snow_line(self):
        outer_zone = self.get_zone(ZoneType.OUTER_ZONE)
        if outer_zone is not None:
            return outer_zone.start
        return 4.85 * np.sqrt(self.luminosity)

    @property
    def corona_end(self):
        corona = self.get_zone(ZoneType.CORONA)
        return corona.end if corona is not None else 0.0

    def get_zone(self, zone_type):
        """
        First zone of the given type, zones being sorted by start
        """
        for zone in self.zones:
            if zone.zone_type is zone_type:
                return zone
        return None

import pandas as pd

from exoforge.base.types import CelestialBodyComposition, CelestialBodySize
from exoforge.util.misc import EARTH_DENSITY


class TelluricDetails:
    """
    Composition and world properties of a solid body. Filled stage by stage
    by the world generator.
    """

    def __init__(self, body_type=CelestialBodyComposition.ROCKY, world_type=None, special_traits=None) -> None:
        self.body_type = body_type
        self.world_type = world_type
        self.special_traits = list(special_traits) if special_traits is not None else []
        self.core_heat = None
        self.magnetic_field = None
        # atm
        self.atmospheric_pressure = 0.0
        # List of (percentage, ChemicalComponent), highest first
        self.atmospheric_composition = []
        # Percentages of the surface
        self.hydrosphere = 0.0
        self.ice_over_water = 0.0
        self.ice_over_land = 0.0
        self.land_area = 100.0
        self.volcanism = 0.0
        self.tectonic_activity = 0.0
        self.humidity = 0.0
        # Surface temperature in K
        self.temperature = 0
        self.temperature_category = None
        self.climate = None

    def __repr__(self):
        return f"{type(self).__name__} object\n{pd.DataFrame(self.dump_params(), index=[0])}"

    def dump_params(self):
        params = {
            "body_type": str(self.body_type),
            "world_type": str(self.world_type),
            "core_heat": str(self.core_heat),
            "magnetic_field": str(self.magnetic_field),
            "pressure": self.atmospheric_pressure,
            "hydrosphere": self.hydrosphere,
            "ice_over_water": self.ice_over_water,
            "ice_over_land": self.ice_over_land,
            "land": self.land_area,
            "volcanism": self.volcanism,
            "tectonics": self.tectonic_activity,
            "humidity": self.humidity,
            "temperature": self.temperature,
            "climate": str(self.climate),
        }
        return params

    @property
    def surface_total(self):
        return self.hydrosphere + self.ice_over_water + self.ice_over_land + self.land_area


class GaseousDetails:
    def __init__(self, special_traits=None) -> None:
        self.body_type = CelestialBodyComposition.GASEOUS
        self.special_traits = list(special_traits) if special_traits is not None else []

    def __repr__(self):
        return f"{type(self).__name__}({[str(t) for t in self.special_traits]})"


class CelestialBody:
    """
    A planet or a moon. Mass is in Earth masses, radius in Earth radii,
    density in g/cm3, gravity in g and the blackbody temperature in K.
    """

    def __init__(
        self,
        orbital_point_id,
        name,
        mass=0.0,
        radius=0.0,
        density=0.0,
        blackbody_temperature=0,
        size=CelestialBodySize.PUNY,
        details=None,
        stub=False,
    ) -> None:
        self.stub = stub
        self.orbital_point_id = orbital_point_id
        self.name = name
        self.mass = mass
        self.radius = radius
        self.density = density
        self.blackbody_temperature = blackbody_temperature
        self.size = size
        self.details = details
        self.tidal_heating = 0
        self.solve_dependent_params()

    def __repr__(self):
        """
        Make dataframe with body attributes
        """
        p_df = pd.DataFrame(self.dump_params(), index=[0])
        return f"{type(self).__name__} object\n{p_df}"

    def dump_params(self):
        params = {
            "id": self.orbital_point_id,
            "name": self.name,
            "size": str(self.size),
            "mass": self.mass,
            "radius": self.radius,
            "density": self.density,
            "gravity": self.gravity,
            "bb_temp": self.blackbody_temperature,
            "tidal_heating": self.tidal_heating,
        }
        if isinstance(self.details, TelluricDetails):
            params["world_type"] = str(self.details.world_type)
        return params

    def solve_dependent_params(self):
        # Surface gravity relative to Earth's
        self.gravity = self.density / EARTH_DENSITY * self.radius

    @property
    def composition(self):
        return self.details.body_type if self.details is not None else None

    @property
    def is_telluric(self):
        return isinstance(self.details, TelluricDetails)

    @property
    def special_traits(self):
        return self.details.special_traits if self.details is not None else []

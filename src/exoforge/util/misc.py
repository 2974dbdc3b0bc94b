import astropy.constants as const
import astropy.units as u
import numpy as np

from exoforge.exceptions import InvalidInputError

# Conversion factors kept from the reference tables the zone and mass rules
# were tuned against
SOLAR_RADIUS_IN_AU = 4.6524726374 / 1000
EARTH_MASSES_PER_SOLAR_MASS = 333000.0

EARTH_RADIUS_IN_AU = (const.R_earth / const.au).decompose().value
EARTH_RADIUS_CM = const.R_earth.to(u.cm).value
EARTH_MASS_G = const.M_earth.to(u.g).value
EARTH_DENSITY = 5.513
EARTH_DIAMETER_IN_AU = 2 * EARTH_RADIUS_IN_AU
DAYS_PER_YEAR = 365.256


def solar_radii_to_au(radius):
    return radius * SOLAR_RADIUS_IN_AU


def earth_radii_to_au(radius):
    return radius * EARTH_RADIUS_IN_AU


def au_to_earth_diameters(distance):
    return distance / EARTH_DIAMETER_IN_AU


def earth_mass_to_solar_mass(mass):
    return mass / EARTH_MASSES_PER_SOLAR_MASS


def number_to_lowercase_letter(number):
    """
    0 -> "a", 1 -> "b", ... and the number itself past "z"
    """
    if number > 25:
        return str(number)
    return chr(97 + number)


def calculate_blackbody_temperature(luminosity, orbital_radius):
    """
    Equilibrium temperature of a body before any atmospheric correction
    Args:
        luminosity (float):
            Luminosity of the star in solar luminosities
        orbital_radius (float):
            Distance to the star in AU
    Returns:
        int:
            Blackbody temperature in Kelvin
    """
    if orbital_radius <= 0:
        raise InvalidInputError(
            f"Orbital radius should be greater than 0, got {orbital_radius}"
        )
    return int(round(278.0 * luminosity**0.25 / np.sqrt(orbital_radius)))


def calculate_roche_limit(primary_radius, primary_density, satellite_density):
    """
    Rigid-body Roche limit of a satellite around its primary
    Args:
        primary_radius (float):
            Radius of the primary in Earth radii
        primary_density (float):
            Density of the primary in g/cm3
        satellite_density (float):
            Density of the satellite in g/cm3
    Returns:
        float:
            Roche limit in AU
    """
    if satellite_density <= 0:
        raise InvalidInputError(
            f"Satellite density should be greater than 0, got {satellite_density}"
        )
    ratio = max(primary_density, 0.0) / satellite_density
    return earth_radii_to_au(2.44 * primary_radius * np.cbrt(ratio))


def calculate_hill_sphere_radius(distance, mass, primary_mass):
    """
    Radius inside which a body's gravity dominates over its primary's
    Args:
        distance (float):
            Distance between the body and its primary, any length unit
        mass (float):
            Mass of the body
        primary_mass (float):
            Mass of the primary, in the same unit as mass
    Returns:
        float:
            Hill sphere radius in the unit of distance
    """
    if primary_mass <= 0:
        raise InvalidInputError(
            f"Primary mass should be greater than 0, got {primary_mass}"
        )
    return distance * np.cbrt(max(mass, 0.0) / (3 * primary_mass))


def calculate_orbital_period(orbital_radius, mass1, mass2):
    """
    Keplerian period of a two-body orbit
    Args:
        orbital_radius (float):
            Semi-major axis in AU
        mass1 (float):
            Mass of the first body in solar masses
        mass2 (float):
            Mass of the second body in solar masses
    Returns:
        float:
            Orbital period in days
    """
    combined_mass = mass1 + mass2
    if combined_mass <= 0:
        raise InvalidInputError("Combined mass of an orbit should be positive")
    return float(np.sqrt(orbital_radius**3 / combined_mass) * DAYS_PER_YEAR)


def calculate_orbital_period_from_earth_masses(orbital_radius, mass1, mass2):
    return calculate_orbital_period(
        orbital_radius, earth_mass_to_solar_mass(mass1), earth_mass_to_solar_mass(mass2)
    )


def calculate_day_length(sidereal_period, rotation):
    """
    Length of the solar day from the orbital period and the sidereal rotation,
    both in days. Negative rotations are retrograde. Infinite when the body
    always shows the same face to what it orbits.
    """
    if rotation == 0 or np.isclose(sidereal_period, rotation):
        return np.inf
    return float(abs(sidereal_period * rotation / (sidereal_period - rotation)))

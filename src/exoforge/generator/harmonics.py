"""
Tidal heating from orbital resonances between siblings.
"""

import numpy as np

from exoforge.base.types import CelestialBodySize

DEFAULT_TOLERANCE = 0.03
MAX_RATIO_TERM = 7
# Each index step between two siblings weakens their resonance
DECAY_PER_STEP = 2.0 / 3.0
BACKWARD_WEIGHT = 0.25

SIZE_MULTIPLIERS = {
    CelestialBodySize.PUNY: 0.2,
    CelestialBodySize.TINY: 0.5,
    CelestialBodySize.SMALL: 1.0,
    CelestialBodySize.STANDARD: 1.5,
    CelestialBodySize.LARGE: 3.0,
    CelestialBodySize.GIANT: 4.0,
    CelestialBodySize.SUPERGIANT: 5.0,
    CelestialBodySize.HYPERGIANT: 6.0,
}


def evaluate_resonance(period1, period2, tolerance=DEFAULT_TOLERANCE):
    """
    Strength of the resonance between two periods. The ratio is matched
    against n/d for n and d from 1 to 7, numerators first, and the first
    match within tolerance gives (12 - n - d) / 2.
    Args:
        period1 (float):
            Period of the first body
        period2 (float):
            Period of the second body, same unit
        tolerance (float):
            Largest gap between the ratio and n/d still counted as resonant
    Returns:
        float:
            Resonance strength, 0 when nothing matches
    """
    if period2 == 0:
        return 0.0
    ratio = period1 / period2
    for numerator in range(1, MAX_RATIO_TERM + 1):
        for denominator in range(1, MAX_RATIO_TERM + 1):
            if abs(ratio - numerator / denominator) <= tolerance:
                return (12.0 - numerator - denominator) * 0.5
    return 0.0


def calculate_step_modifier(distance):
    return DECAY_PER_STEP ** (distance - 1)


def calculate_gravitational_harmonics(periods_and_multipliers, tolerance=DEFAULT_TOLERANCE):
    """
    Tidal heating of each body of an ordered list of siblings
    Args:
        periods_and_multipliers (list):
            (orbital period, size multiplier) per sibling, ordered by
            distance
        tolerance (float):
            Resonance tolerance
    Returns:
        list:
            Tidal heating per sibling, as int
    """
    harmonics = []
    for i, (current_period, _) in enumerate(periods_and_multipliers):
        forward = 0.0
        for j in range(i + 1, len(periods_and_multipliers)):
            next_period, multiplier = periods_and_multipliers[j]
            forward += (
                evaluate_resonance(next_period, current_period, tolerance)
                * calculate_step_modifier(j - i)
                * multiplier
            )
        backward = 0.0
        for j in range(i):
            previous_period, multiplier = periods_and_multipliers[j]
            backward += (
                evaluate_resonance(previous_period, current_period, tolerance)
                * BACKWARD_WEIGHT
                * calculate_step_modifier(i - j)
                * multiplier
            )
        # Halves round up
        harmonics.append(int(np.floor(forward + backward + 0.5)))
    return harmonics


def prepare_harmonics_array(points, are_moons):
    """
    (orbital period, multiplier) of each point. Moons weigh fully, planets
    at 0.3, and disks and points without orbit do not weigh at all.
    """
    distance_multiplier = 1.0 if are_moons else 0.3
    prepared = []
    for point in points:
        if point.own_orbit is None:
            prepared.append((0.0, 0.0))
            continue
        size_multiplier = SIZE_MULTIPLIERS[point.object.size] if point.kind.is_body else 0.0
        prepared.append(
            (point.own_orbit.orbital_period, distance_multiplier * size_multiplier)
        )
    return prepared


def apply_tidal_heating(points, are_moons, tolerance=DEFAULT_TOLERANCE):
    """
    Compute and store the tidal heating of every body of a sibling list
    """
    harmonics = calculate_gravitational_harmonics(
        prepare_harmonics_array(points, are_moons), tolerance
    )
    for point, tidal_heating in zip(points, harmonics):
        if point.kind.is_body:
            point.object.tidal_heating = tidal_heating
    return harmonics

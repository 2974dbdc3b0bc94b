"""
Chemical components found in atmospheres, oceans and rings, with the phase
data needed to decide what can be liquid or gaseous on a world.
"""

from enum import Enum

import astropy.constants as const
import astropy.units as u


class ChemicalComponent(Enum):
    HYDROGEN = "Hydrogen"
    HELIUM = "Helium"
    CARBON = "Carbon"
    NITROGEN = "Nitrogen"
    OXYGEN = "Oxygen"
    SILICON = "Silicon"
    MAGNESIUM = "Magnesium"
    IRON = "Iron"
    SULFUR = "Sulfur"
    SODIUM = "Sodium"
    POTASSIUM = "Potassium"
    CALCIUM = "Calcium"
    ALUMINUM = "Aluminum"
    PHOSPHORUS = "Phosphorus"
    CHLORINE = "Chlorine"
    ARGON = "Argon"
    TITANIUM = "Titanium"
    CHROMIUM = "Chromium"
    MANGANESE = "Manganese"
    NICKEL = "Nickel"
    WATER = "Water"
    CARBON_MONOXIDE = "Carbon Monoxide"
    CARBON_DIOXIDE = "Carbon Dioxide"
    METHANE = "Methane"
    AMMONIA = "Ammonia"
    HYDROGEN_SULFIDE = "Hydrogen Sulfide"
    SULFUR_DIOXIDE = "Sulfur Dioxide"
    HYDROXYL = "Hydroxyl"
    NITRIC_OXIDE = "Nitric Oxide"
    NITROGEN_DIOXIDE = "Nitrogen Dioxide"
    FORMALDEHYDE = "Formaldehyde"
    METHANOL = "Methanol"
    ETHYLENE = "Ethylene"
    ETHANE = "Ethane"
    ACETYLENE = "Acetylene"
    BENZENE = "Benzene"
    ACETONITRILE = "Acetonitrile"
    METHYLAMINE = "Methylamine"
    HYDROGEN_CYANIDE = "Hydrogen Cyanide"
    GLYCINE = "Glycine"
    SILICATES = "Silicates"
    POLYCYCLIC_AROMATIC_HYDROCARBONS = "Polycyclic Aromatic Hydrocarbons"

    def __str__(self):
        return self.value

    @property
    def molecular_weight_amu(self):
        return _PROPERTIES[self][0]

    @property
    def molecular_weight_kg(self):
        return self.molecular_weight_amu * AMU_KG

    @property
    def triple_point(self):
        """
        (temperature in K, pressure in atm), None when undefined
        """
        return _PROPERTIES[self][1]

    @property
    def boiling_point(self):
        return _PROPERTIES[self][2]

    def can_exist_as_liquid(self, temperature, pressure):
        triple_point = self.triple_point
        boiling_point = self.boiling_point
        if triple_point is None or boiling_point is None:
            return False
        triple_temperature, triple_pressure = triple_point
        return (
            triple_temperature < temperature < boiling_point
            and pressure > triple_pressure
        )

    def can_exist_as_gas(self, temperature, pressure):
        triple_point = self.triple_point
        if triple_point is None:
            return False
        triple_temperature, triple_pressure = triple_point
        boiling_point = self.boiling_point
        if boiling_point is None:
            # Sublimates
            return temperature > triple_temperature
        if temperature > boiling_point:
            return True
        return temperature > triple_temperature and pressure < triple_pressure


class ElementPresenceOccurrence(Enum):
    ABSENCE = "Absence"
    VERY_LOW = "Very Low Occurrence"
    LOW = "Low Occurrence"
    NORMAL = "Normal Occurrence"
    HIGH = "High Occurrence"
    VERY_HIGH = "Very High Occurrence"
    OMNIPRESENCE = "Omnipresence"

    @property
    def adjustment_factor(self):
        return _OCCURRENCE_FACTORS[self]


AMU_KG = const.u.to(u.kg).value

C = ChemicalComponent

# weight (amu), triple point (K, atm), boiling point (K),
# base liquid-majority likelihood, stability
_PROPERTIES = {
    C.HYDROGEN: (1.008, (13.8, 0.070), 20.28, 0.3, 0.7),
    C.HELIUM: (4.0026, (2.2, 0.0052), 4.22, 0.1, 1.0),
    C.CARBON: (12.01, None, None, 0.2, 0.9),
    C.NITROGEN: (14.007, (63.15, 0.1235), 77.36, 0.4, 0.9),
    C.OXYGEN: (16.00, (54.36, 0.0015), 90.20, 0.3, 0.8),
    C.SILICON: (28.0855, None, None, 0.1, 0.8),
    C.MAGNESIUM: (24.305, None, None, 0.1, 0.7),
    C.IRON: (55.845, None, None, 0.1, 0.7),
    C.SULFUR: (32.06, None, None, 0.3, 0.6),
    C.SODIUM: (22.99, None, None, 0.1, 0.5),
    C.POTASSIUM: (39.10, None, None, 0.1, 0.5),
    C.CALCIUM: (40.08, None, None, 0.1, 0.6),
    C.ALUMINUM: (26.98, None, None, 0.1, 0.7),
    C.PHOSPHORUS: (30.97, None, None, 0.2, 0.6),
    C.CHLORINE: (35.45, (172.2, 0.4), 239.11, 0.3, 0.6),
    C.ARGON: (39.95, (83.81, 0.687), 87.3, 0.1, 1.0),
    C.TITANIUM: (47.867, None, None, 0.1, 0.8),
    C.CHROMIUM: (51.996, None, None, 0.1, 0.7),
    C.MANGANESE: (54.938, None, None, 0.1, 0.7),
    C.NICKEL: (58.693, None, None, 0.1, 0.7),
    C.WATER: (18.015, (273.16, 0.00604), 373.16, 1.0, 1.0),
    C.CARBON_MONOXIDE: (28.01, (68.15, 0.00015), 82.9, 0.4, 0.5),
    C.CARBON_DIOXIDE: (44.01, (216.55, 5.11), 304.25, 0.5, 0.9),
    C.METHANE: (16.04, (90.67, 0.117), 111.66, 0.8, 0.8),
    C.AMMONIA: (17.031, (195.4, 0.060), 239.81, 0.6, 0.6),
    C.HYDROGEN_SULFIDE: (34.08, (187.61, 0.0276), 212.9, 0.3, 0.4),
    C.SULFUR_DIOXIDE: (64.066, (197.67, 0.0169), 263.05, 0.4, 0.5),
    C.HYDROXYL: (17.007, None, None, 0.1, 0.3),
    C.NITRIC_OXIDE: (30.006, (109.5, 0.00015), 121.36, 0.2, 0.4),
    # NO2 decomposes before boiling
    C.NITROGEN_DIOXIDE: (46.0055, (261.93, 0.001), None, 0.2, 0.4),
    C.FORMALDEHYDE: (30.03, (155.2, 0.016), 252.2, 0.2, 0.2),
    C.METHANOL: (32.04, (175.47, 0.08), 337.85, 0.4, 0.6),
    C.ETHYLENE: (28.05, (104.0, 0.00033), 169.42, 0.3, 0.6),
    C.ETHANE: (30.07, (89.89, 0.00014), 184.55, 0.4, 0.7),
    C.ACETYLENE: (26.04, (192.34, 0.0127), 189.34, 0.2, 0.5),
    C.BENZENE: (78.11, (278.68, 0.048), 353.25, 0.3, 0.7),
    C.ACETONITRILE: (41.05, (229.4, 0.042), 354.6, 0.2, 0.5),
    C.METHYLAMINE: (31.06, (175.8, 0.0014), 266.1, 0.2, 0.4),
    C.HYDROGEN_CYANIDE: (27.025, (260.8, 0.02), 299.2, 0.2, 0.3),
    C.GLYCINE: (75.07, None, None, 0.1, 0.8),
    C.SILICATES: (60.08, None, None, 0.1, 0.9),
    C.POLYCYCLIC_AROMATIC_HYDROCARBONS: (128.16, None, None, 0.2, 0.6),
}

_OCCURRENCE_FACTORS = {
    ElementPresenceOccurrence.ABSENCE: 0.0,
    ElementPresenceOccurrence.VERY_LOW: 0.2,
    ElementPresenceOccurrence.LOW: 0.5,
    ElementPresenceOccurrence.NORMAL: 1.0,
    ElementPresenceOccurrence.HIGH: 1.5,
    ElementPresenceOccurrence.VERY_HIGH: 2.0,
    ElementPresenceOccurrence.OMNIPRESENCE: 3.0,
}

NON_METALS_ELEMENTS = [C.HYDROGEN, C.HELIUM]
MOST_COMMON_ELEMENTS = list(ChemicalComponent)[:16] + [
    C.WATER,
    C.CARBON_MONOXIDE,
    C.CARBON_DIOXIDE,
    C.METHANE,
    C.AMMONIA,
    C.HYDROGEN_SULFIDE,
    C.SULFUR_DIOXIDE,
]
ALL_ELEMENTS = list(ChemicalComponent)


def components_liquid_at(temperature, pressure):
    """
    Components that can be liquid at the given temperature and pressure.

    Water wins alone whenever it qualifies. Otherwise every qualifying
    component is returned, and failing that the single component that would
    be liquid at its own triple-point pressure, picking the lowest such
    pressure.
    Args:
        temperature (float):
            Temperature in K
        pressure (float):
            Pressure in atm
    Returns:
        list:
            ChemicalComponent values, empty when nothing can be liquid
    """
    if C.WATER.can_exist_as_liquid(temperature, pressure):
        return [C.WATER]

    possible_liquids = []
    lowest = None
    for component in ChemicalComponent:
        if component.can_exist_as_liquid(temperature, pressure):
            possible_liquids.append(component)
        elif component.triple_point is not None:
            triple_pressure = component.triple_point[1]
            if component.can_exist_as_liquid(temperature, triple_pressure):
                if lowest is None or triple_pressure < lowest[1]:
                    lowest = (component, triple_pressure)

    if possible_liquids:
        return possible_liquids
    if lowest is not None:
        return [lowest[0]]
    return []


def liquid_majority_composition_likelihood(component, star_traits=()):
    """
    How likely a component is to make up most of a world's liquids, scaled by
    the star's unusual element presence traits
    """
    from exoforge.base.traits import StarTraitKind

    _, _, _, base_likelihood, stability = _PROPERTIES[component]
    likelihood = base_likelihood * stability
    for trait in star_traits:
        if trait.kind is StarTraitKind.UNUSUAL_ELEMENT_PRESENCE:
            peculiar_component, occurrence = trait.detail
            if peculiar_component is component:
                likelihood *= occurrence.adjustment_factor
    return likelihood


def generate_random_non_metal_element(roller):
    return NON_METALS_ELEMENTS[roller.roll(1, len(NON_METALS_ELEMENTS), -1)]


def generate_random_common_element(roller):
    return MOST_COMMON_ELEMENTS[roller.roll(1, len(MOST_COMMON_ELEMENTS), -1)]


def generate_random_element(roller):
    return ALL_ELEMENTS[roller.roll(1, len(ALL_ELEMENTS), -1)]

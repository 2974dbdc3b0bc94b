"""
Closed sets of categories used across a star system. Each enum's value is the
label shown in summaries.
"""

from enum import Enum, IntEnum


class ZoneType(Enum):
    CORONA = "Corona"
    INNER_LIMIT = "Inner Limit"
    INNER_ZONE = "Inner Zone"
    BIO_ZONE = "Bio Zone"
    OUTER_ZONE = "Outer Zone"
    FORBIDDEN_ZONE = "Forbidden Zone"

    def __str__(self):
        return self.value

    @property
    def priority(self):
        """
        Rank used when two zones overlap, the higher one keeps its span
        """
        return _ZONE_PRIORITIES[self]

    @property
    def can_hold_bodies(self):
        return self in (ZoneType.INNER_ZONE, ZoneType.BIO_ZONE, ZoneType.OUTER_ZONE)


_ZONE_PRIORITIES = {
    ZoneType.FORBIDDEN_ZONE: 6,
    ZoneType.CORONA: 5,
    ZoneType.INNER_LIMIT: 4,
    ZoneType.BIO_ZONE: 3,
    ZoneType.INNER_ZONE: 2,
    ZoneType.OUTER_ZONE: 1,
}


class GasGiantArrangement(Enum):
    NO_GAS_GIANT = "No Gas Giant"
    CONVENTIONAL = "Conventional Gas Giant"
    ECCENTRIC = "Eccentric Gas Giant"
    EPISTELLAR = "Epistellar Gas Giant"

    def __str__(self):
        return self.value


class CelestialBodyComposition(Enum):
    METALLIC = "Metallic"
    ROCKY = "Rocky"
    ICY = "Icy"
    GASEOUS = "Gaseous"

    def __str__(self):
        return self.value


class CelestialBodySize(IntEnum):
    PUNY = 0
    TINY = 1
    SMALL = 2
    STANDARD = 3
    LARGE = 4
    GIANT = 5
    SUPERGIANT = 6
    HYPERGIANT = 7

    def __str__(self):
        return self.name.capitalize()

    @property
    def is_giant(self):
        return self >= CelestialBodySize.GIANT

    def downsize(self, steps=1):
        return CelestialBodySize(max(self - steps, CelestialBodySize.PUNY))


class WorldType(Enum):
    ICE = "Ice Ball"
    DIRTY_SNOWBALL = "Dirty Snowball"
    ROCK = "Rock"
    HADEAN = "Hadean"
    AMMONIA = "Ammonia"
    OCEAN = "Ocean"
    TERRESTRIAL = "Terrestrial"
    GREENHOUSE = "Greenhouse"
    CHTHONIAN = "Chthonian"
    GEO_ACTIVE = "Geo Active"
    PROTO_WORLD = "Proto World"
    VOLATILES_GIANT = "Volatiles Giant"

    def __str__(self):
        return self.value


class CoreHeat(IntEnum):
    FROZEN = 0
    WARM = 1
    ACTIVE = 2
    INTENSE = 3

    def __str__(self):
        return self.name.capitalize()


class MagneticFieldStrength(IntEnum):
    NONE = 0
    WEAK = 1
    MODERATE = 2
    STRONG = 3
    VERY_STRONG = 4
    EXTREME = 5

    def __str__(self):
        return self.name.replace("_", " ").capitalize()


class VolcanicActivity(IntEnum):
    NONE = 0
    LIGHT = 1
    MODERATE = 2
    HEAVY = 3
    EXTREME = 4

    @classmethod
    def from_percentage(cls, volcanism):
        if volcanism <= 0.01:
            return cls.NONE
        if volcanism <= 4:
            return cls.LIGHT
        if volcanism <= 19:
            return cls.MODERATE
        if volcanism <= 54:
            return cls.HEAVY
        return cls.EXTREME


class TectonicActivity(IntEnum):
    NONE = 0
    LIGHT = 1
    MODERATE = 2
    HEAVY = 3
    EXTREME = 4

    @classmethod
    def from_percentage(cls, tectonics):
        if tectonics <= 0.01:
            return cls.NONE
        if tectonics <= 16:
            return cls.LIGHT
        if tectonics <= 32:
            return cls.MODERATE
        if tectonics <= 48:
            return cls.HEAVY
        return cls.EXTREME


class TemperatureCategory(IntEnum):
    FROZEN = 0
    VERY_COLD = 1
    COLD = 2
    CHILLY = 3
    COOL = 4
    IDEAL = 5
    WARM = 6
    TROPICAL = 7
    HOT = 8
    VERY_HOT = 9
    INFERNAL = 10

    def __str__(self):
        return self.name.replace("_", " ").capitalize()

    @classmethod
    def from_temperature(cls, temperature):
        # Upper bounds in K, exclusive
        for category, bound in zip(cls, _TEMPERATURE_BOUNDS):
            if temperature < bound:
                return category
        return cls.INFERNAL


_TEMPERATURE_BOUNDS = (244, 255, 266, 278, 289, 300, 311, 322, 333, 344)


class ClimateType(Enum):
    DEAD = "Dead"
    RIBBON = "Ribbon"
    OCEAN = "Ocean"
    ARCTIC = "Arctic"
    TUNDRA = "Tundra"
    TAIGA = "Taiga"
    STEPPE = "Steppe"
    TERRESTRIAL = "Terrestrial"
    DESERT = "Desert"
    SAVANNA = "Savanna"
    TROPICAL = "Tropical"
    JUNGLE = "Jungle"
    RAINFOREST = "Rainforest"
    MUD_BALL = "Mud Ball"

    def __str__(self):
        return self.value


class LifeLevel(IntEnum):
    NONE = 0
    UNICELLULAR = 1
    PLURICELLULAR = 2
    PLANT_LIKE = 3
    ANIMAL_LIKE = 4
    SENTIENT = 5


class MoonDistance(Enum):
    ANY = "Any"
    RING = "Ring"
    BEFORE_MAJOR = "Before Major"
    CLOSE = "Close"
    MAJOR_PLANET_CLOSE = "Major Planet Close"
    MAJOR_GIANT_CLOSE = "Major Giant Close"
    MEDIUM = "Medium"
    MEDIUM_OR_FAR = "Medium Or Far"
    FAR = "Far"


class DiskType(Enum):
    PROTOPLANETARY_DISK = "Protoplanetary Disk"
    RING = "Ring"
    BELT = "Belt"
    SHELL = "Shell"

    def __str__(self):
        return self.value


class BeltType(Enum):
    DUST = "Dust"
    METEOROID = "Meteoroid"
    ORE = "Ore"
    DEBRIS = "Debris"
    ASTEROID = "Asteroid"
    ASH = "Ash"
    FROST = "Frost"
    COMET = "Comet"
    GAS = "Gas"
    GAS_CLOUD = "Gas Cloud"

    def __str__(self):
        return self.value


class RingComposition(Enum):
    ICE = "Ice"
    ROCK = "Rock"
    METAL = "Metal"
    DUST = "Dust"

    def __str__(self):
        return self.value

    @property
    def density(self):
        return _RING_DENSITIES[self]


_RING_DENSITIES = {
    RingComposition.ICE: 1.1,
    RingComposition.ROCK: 3.0,
    RingComposition.METAL: 7.0,
    RingComposition.DUST: 2.5,
}


class RingLevel(IntEnum):
    UNNOTICEABLE = 0
    NOTICEABLE = 1
    VISIBLE = 2
    SPECTACULAR = 3

    @classmethod
    def from_moonlets(cls, moonlets):
        if moonlets < 4:
            return cls.UNNOTICEABLE
        if moonlets < 6:
            return cls.NOTICEABLE
        if moonlets < 10:
            return cls.VISIBLE
        return cls.SPECTACULAR


class SpectralClass(Enum):
    WR = "WR"
    O = "O"
    B = "B"
    A = "A"
    F = "F"
    G = "G"
    K = "K"
    M = "M"
    L = "L"
    T = "T"
    Y = "Y"
    DA = "DA"
    DB = "DB"
    DC = "DC"
    DO = "DO"
    DZ = "DZ"
    DQ = "DQ"
    DX = "DX"
    XNS = "XNS"
    XBH = "XBH"

    def __str__(self):
        return self.value

    @property
    def is_massive(self):
        return self in (SpectralClass.WR, SpectralClass.O, SpectralClass.B, SpectralClass.A)

    @property
    def is_brown_dwarf(self):
        return self in (SpectralClass.L, SpectralClass.T, SpectralClass.Y)

    @property
    def is_white_dwarf(self):
        return self.value.startswith("D")

    @property
    def is_remnant(self):
        return self in (SpectralClass.XNS, SpectralClass.XBH)


class LuminosityClass(Enum):
    O = "O"
    IA = "Ia"
    IB = "Ib"
    II = "II"
    III = "III"
    IV = "IV"
    V = "V"
    VI = "VI"
    VII = "VII"
    XNS = "XNS"

    def __str__(self):
        return self.value


class StellarEvolution(Enum):
    PALEODWARF = "Paleodwarf"
    SUBDWARF = "Subdwarf"
    DWARF = "Dwarf"
    SUPERDWARF = "Superdwarf"
    HYPERDWARF = "Hyperdwarf"

    def __str__(self):
        return self.value


class GasPresence(IntEnum):
    TRACE = 0
    MINOR = 1
    SIGNIFICANT = 2
    MAJOR = 3
    DOMINANT = 4

    @property
    def percentage_range(self):
        return _GAS_PRESENCE_RANGES[self]

    def upgraded(self):
        return GasPresence(min(self + 1, GasPresence.DOMINANT))


_GAS_PRESENCE_RANGES = {
    GasPresence.TRACE: (0.01, 0.5),
    GasPresence.MINOR: (0.5, 3.0),
    GasPresence.SIGNIFICANT: (3.0, 15.0),
    GasPresence.MAJOR: (15.0, 50.0),
    GasPresence.DOMINANT: (50.0, 90.0),
}


class ObjectKind(Enum):
    VOID = "Void"
    STAR = "Star"
    TELLURIC_BODY = "Telluric Body"
    ICY_BODY = "Icy Body"
    GASEOUS_BODY = "Gaseous Body"
    TELLURIC_DISK = "Telluric Disk"
    ICY_DISK = "Icy Disk"
    GASEOUS_DISK = "Gaseous Disk"
    SPACECRAFT = "Spacecraft"

    def __str__(self):
        return self.value

    @property
    def is_body(self):
        return self in (
            ObjectKind.TELLURIC_BODY,
            ObjectKind.ICY_BODY,
            ObjectKind.GASEOUS_BODY,
        )

    @property
    def is_disk(self):
        return self in (
            ObjectKind.TELLURIC_DISK,
            ObjectKind.ICY_DISK,
            ObjectKind.GASEOUS_DISK,
        )

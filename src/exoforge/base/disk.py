import pandas as pd

from exoforge.base.types import DiskType


class CelestialDisk:
    """
    Belts, rings, shells and protoplanetary disks. Rings carry their level and
    composition, belts their belt type.
    """

    def __init__(
        self,
        orbital_point_id,
        name,
        disk_type: DiskType,
        belt_type=None,
        ring_level=None,
        ring_composition=None,
        mass=0.0,
        density=0.0,
    ) -> None:
        self.orbital_point_id = orbital_point_id
        self.name = name
        self.disk_type = disk_type
        self.belt_type = belt_type
        self.ring_level = ring_level
        self.ring_composition = ring_composition
        # Earth masses, g/cm3
        self.mass = mass
        self.density = density

    def __repr__(self):
        return f"{type(self).__name__} object\n{pd.DataFrame(self.dump_params(), index=[0])}"

    def dump_params(self):
        params = {
            "id": self.orbital_point_id,
            "name": self.name,
            "disk_type": str(self.disk_type),
            "belt_type": str(self.belt_type) if self.belt_type is not None else None,
            "ring_level": self.ring_level.name if self.ring_level is not None else None,
            "ring_composition": (
                str(self.ring_composition) if self.ring_composition is not None else None
            ),
            "mass": self.mass,
        }
        return params

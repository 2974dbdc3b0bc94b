import numpy as np
import pandas as pd

from exoforge.base.types import ObjectKind


class StarSystem:
    """
    Class for a single generated system. Holds every orbital point in a flat
    list, stars first, linked to each other by id.
    """

    def __init__(self, coord, index, points, zones=None, arrangements=None, traits=None) -> None:
        self.coord = coord
        self.index = index
        self.points = points
        self.zones = zones if zones is not None else []
        # star id -> GasGiantArrangement
        self.arrangements = arrangements if arrangements is not None else {}
        self.traits = list(traits) if traits is not None else []
        self.body_cleanup()

    def __repr__(self):
        star_names = ", ".join(star.name for star in self.stars)
        return (
            f"{star_names}\tcoord:{self.coord}\tindex:{self.index}\n\n"
            f"Bodies:\n{self.get_p_df()}"
        )

    def body_cleanup(self):
        self._by_id = {point.id: point for point in self.points}
        # Sort the bodies in the system by distance to their primary
        distances = [point.distance for point in self.body_points]
        order = np.argsort(distances, kind="stable")
        self._sorted_bodies = np.array(self.body_points, dtype=object)[order].tolist()

    @property
    def stars(self):
        return [point.object for point in self.points if point.kind is ObjectKind.STAR]

    @property
    def body_points(self):
        return [point for point in self.points if point.kind.is_body]

    @property
    def bodies(self):
        return [point.object for point in self._sorted_bodies]

    @property
    def disks(self):
        return [point.object for point in self.points if point.kind.is_disk]

    def get_point(self, point_id):
        return self._by_id[point_id]

    def getpattr(self, attr):
        # Return list of every body's attribute value, e.g. all masses
        return [getattr(body, attr) for body in self.bodies]

    def get_p_df(self):
        patts = [
            "orbital_point_id",
            "name",
            "size",
            "mass",
            "radius",
            "density",
            "blackbody_temperature",
            "tidal_heating",
        ]
        p_df = pd.DataFrame()
        for att in patts:
            p_df[att] = self.getpattr(att)
        if len(p_df):
            p_df["size"] = p_df["size"].astype(str)
            p_df["distance"] = [point.distance for point in self._sorted_bodies]
            p_df["primary"] = [
                point.own_orbit.primary_body_id if point.own_orbit else None
                for point in self._sorted_bodies
            ]

        return p_df

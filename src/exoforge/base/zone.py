from exoforge.base.types import ZoneType


class StarZone:
    """
    Radial band around a star, in AU, with its own planet-formation rules
    """

    def __init__(self, start, end, zone_type: ZoneType) -> None:
        self.start = float(start)
        self.end = float(end)
        self.zone_type = zone_type

    def __repr__(self):
        return f"StarZone({self.zone_type}, {self.start:.4f}, {self.end:.4f})"

    def __eq__(self, other):
        if not isinstance(other, StarZone):
            return NotImplemented
        return (
            self.start == other.start
            and self.end == other.end
            and self.zone_type is other.zone_type
        )

    def __hash__(self):
        return hash((self.start, self.end, self.zone_type))

    def is_overlapping(self, other):
        return self.start < other.end and other.start < self.end

    def shifted(self, offset):
        return StarZone(self.start + offset, self.end + offset, self.zone_type)

    def subtract(self, other):
        """
        Parts of the zone left once another zone's span is removed, slivers
        with no width dropped
        """
        if not self.is_overlapping(other):
            return [StarZone(self.start, self.end, self.zone_type)]
        pieces = [
            StarZone(self.start, min(other.start, self.end), self.zone_type),
            StarZone(max(other.end, self.start), self.end, self.zone_type),
        ]
        return [piece for piece in pieces if piece.start < piece.end]

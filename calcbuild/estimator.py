"""
Wall estimator — rooms and unit prices in, quantities and costs out.

Pure math. No I/O, no rounding, no validation: inputs arrive already
normalized by the schemas (finite, >= 0). Results that overflow a float
(rooms near the float maximum) collapse to 0 like any other non-finite
number. Display rounding belongs to the exporters.
"""

from typing import Iterable

from .normalize import clamp_non_negative as _finite


class Estimator:
    """
    Turns a list of rectangular rooms into wall area, paint volume and costs.

    Waste margin is applied once to the summed net area, not per room.
    """

    MIN_COVERAGE = 0.0001  # m²/L floor, keeps paint volume finite at zero coverage

    def compute(self, wall_height: float, rooms: Iterable, wall_waste_percent: float,
                paint_coverage: float, paint_price: float, plaster_price: float,
                insulation_price: float) -> dict:
        """
        Compute the estimate for a set of rooms.

        Args:
            rooms: Room models (or anything with length/width/openings/name)

        Returns:
            {
                total_wall_area: float,   # m², waste included
                paint_volume: float,      # L
                paint_cost: float,
                plaster_cost: float,
                insulation_cost: float,
                total_cost: float,
                rooms: [{name, perimeter, gross_wall_area, net_wall_area}],
            }
        """
        breakdown = [self.room_area(room, wall_height) for room in rooms]
        total_wall_area = sum(r["net_wall_area"] for r in breakdown)
        total_wall_area = _finite(total_wall_area * (1 + wall_waste_percent / 100.0))

        paint_volume = _finite(total_wall_area / max(paint_coverage, self.MIN_COVERAGE))
        paint_cost = _finite(paint_volume * paint_price)
        plaster_cost = _finite(total_wall_area * plaster_price)
        insulation_cost = _finite(total_wall_area * insulation_price)

        return {
            "total_wall_area": total_wall_area,
            "paint_volume": paint_volume,
            "paint_cost": paint_cost,
            "plaster_cost": plaster_cost,
            "insulation_cost": insulation_cost,
            "total_cost": _finite(paint_cost + plaster_cost + insulation_cost),
            "rooms": breakdown,
        }

    def compute_project(self, project) -> dict:
        """Compute the estimate from a Project's global parameters and rooms."""
        return self.compute(
            wall_height=project.wall_height,
            rooms=project.rooms,
            wall_waste_percent=project.wall_waste,
            paint_coverage=project.paint_coverage,
            paint_price=project.paint_price,
            plaster_price=project.plaster_price,
            insulation_price=project.insulation_price,
        )

    def room_area(self, room, wall_height: float) -> dict:
        """Perimeter, gross and net wall area of one room. Openings never push it below 0."""
        perimeter = self.perimeter(room.length, room.width)
        gross = _finite(perimeter * wall_height)
        return {
            "name": room.name,
            "perimeter": perimeter,
            "gross_wall_area": gross,
            "net_wall_area": max(0.0, gross - room.openings),
        }

    def perimeter(self, length: float, width: float) -> float:
        return _finite(2.0 * (length + width))


def compute_estimate(project) -> dict:
    """Module-level shortcut for Estimator().compute_project(project)."""
    return Estimator().compute_project(project)

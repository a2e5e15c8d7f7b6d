"""Route group exports."""

from . import buses, exports, fleet, health, portal, routes, schools, students

__all__ = ["buses", "exports", "fleet", "health", "portal", "routes", "schools", "students"]

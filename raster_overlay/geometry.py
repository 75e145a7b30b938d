# region Imports
import math
from typing import Tuple
from .config import EARTH_R, WEB_SCALE_ZOOM0
# endregion

LonLat = Tuple[float, float]


# region Great-circle Distance
def distance_m(p1: LonLat, p2: LonLat) -> float:
    """Haversine distance between two (lon, lat) points in metres."""
    to_rad = math.pi / 180.0
    lat1, lat2 = p1[1] * to_rad, p2[1] * to_rad
    dlat = (p2[1] - p1[1]) * to_rad
    dlon = (p2[0] - p1[0]) * to_rad

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return EARTH_R * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{meters:.1f} m"
    return f"{meters / 1000:.2f} km"
# endregion

# region Map Scale
def scale_denominator(zoom: float) -> int:
    """Web-map scale 1:N at ``zoom``, rounded to one significant digit."""
    scale = WEB_SCALE_ZOOM0 / 2 ** zoom
    mag = 10 ** math.floor(math.log10(scale))
    return int(round(round(scale / mag) * mag))


def format_scale(zoom: float) -> str:
    # es-ES grouping, as shown on the map
    return "1:" + f"{scale_denominator(zoom):,}".replace(",", ".")
# endregion

# geo_utils.py
import math

EARTH_RADIUS_M = 6371000


def haversine_distance(lat1, lon1, lat2, lon2):
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi/2)**2 + math.cos(phi1)*math.cos(phi2)*math.sin(dlambda/2)**2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(a), math.sqrt(1-a))


def coordinate_bucket(lat, lon, precision=2):
    # 2 decimals is roughly a 1.1 km cell at the equator
    return f"{round(lat, precision):.{precision}f}:{round(lon, precision):.{precision}f}"


def ec_number(lat, lon):
    """Stable 1..99 index derived from a position, used in seaport zone labels."""
    a = abs(math.floor((lat + 90) * 1000))
    b = abs(math.floor((lon + 180) * 1000))
    return ((a ^ b) % 99) + 1


def point_in_polygon(lat, lon, polygon):
    """Even-odd ray cast; ``polygon`` is a sequence of (lat, lon) vertices."""
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        yi, xi = polygon[i]
        yj, xj = polygon[j]
        if (yi > lat) != (yj > lat) and lon < (xj - xi) * (lat - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def point_in_circle(lat, lon, center_lat, center_lon, radius_m):
    return haversine_distance(lat, lon, center_lat, center_lon) <= radius_m

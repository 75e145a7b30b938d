# region Imports
from typing import Iterable, Mapping
from .config import UTM_30N
from .projection import to_geographic
# endregion


# region Rows -> GeoJSON
def row_to_feature(row: Mapping, geom_key: str = "geom", src_crs: str = UTM_30N) -> dict:
    geom = row[geom_key]
    if geom.get("type") != "Point":
        raise ValueError(f"only Point geometries are supported, got {geom.get('type')!r}")
    x, y = geom["coordinates"][:2]
    lon, lat = to_geographic(float(x), float(y), src_crs)

    props = {k: v for k, v in row.items() if k != geom_key}
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": props,
    }


def rows_to_feature_collection(rows: Iterable[Mapping], geom_key: str = "geom", src_crs: str = UTM_30N) -> dict:
    """PostgREST rows with a UTM point column -> WGS84 FeatureCollection."""
    return {
        "type": "FeatureCollection",
        "features": [row_to_feature(r, geom_key, src_crs) for r in rows],
    }


def feature_bounds(fc: dict):
    """[[south, west], [north, east]] enclosing every point, for fitting the view."""
    lons = [f["geometry"]["coordinates"][0] for f in fc["features"]]
    lats = [f["geometry"]["coordinates"][1] for f in fc["features"]]
    if not lons:
        return None
    return [[min(lats), min(lons)], [max(lats), max(lons)]]
# endregion

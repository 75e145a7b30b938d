# config.py
import os

# region CRS
WGS84 = "EPSG:4326"
WEB_MERCATOR = "EPSG:3857"   # raster bounds
UTM_30N = "EPSG:25830"       # ETRS89 / UTM zone 30N (GRS80), vector points
# endregion

# region Rendering
HISTOGRAM_BINS = 30
LEGEND_STEP = 0.1
OVERLAY_OPACITY = 0.8

# Relative slack on the raster extent when resolving clicks, absorbs
# projection round-trip error at the exact corners
EDGE_TOL = 1e-9
# endregion

# region Geodesy
EARTH_R = 6_371_000.0  # mean radius (m), great-circle distances
WEB_SCALE_ZOOM0 = 591_657_600  # 1:N scale denominator at zoom 0
# endregion

# region Data backend (PostgREST / Supabase)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "http://localhost:54321").rstrip("/")
SUPABASE_API_KEY = os.environ.get("SUPABASE_API_KEY", "")
FETCH_TIMEOUT = float(os.environ.get("FETCH_TIMEOUT", "30"))
VECTOR_LIMIT = int(os.environ.get("VECTOR_LIMIT", "1000"))
DEFAULT_VECTOR_TABLE = "101puntos_25830"

# Optional JSON file replacing DEFAULT_LAYERS / DEFAULT_BOUNDS
RASTER_LAYERS_FILE = os.environ.get("RASTER_LAYERS_FILE")
# endregion

# region Server
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8081"))
# endregion

# region Default layers (Comunidad Valenciana, 2023-05-14)
_CV_BOUNDS_3857 = [
    [-170029.5724387232, 4557921.9614732563],
    [76681.0429848633, 4980761.9401388783],
]

DEFAULT_LAYERS = {
    "20230514_meantemperature_comvalenciana": {
        "title": "Temperatura (°C)",
        "unit": "°C",
        "type": "temperature",
    },
    "20230514_precipitation_comvalenciana": {
        "title": "Precipitación (l/m²)",
        "unit": "l/m²",
        "type": "precipitation",
    },
}

DEFAULT_BOUNDS = {
    "20230514_meantemperature_comvalenciana": _CV_BOUNDS_3857,
    "20230514_precipitation_comvalenciana": _CV_BOUNDS_3857,
}
# endregion

# app.py — Flask API around the raster overlay engine
# deps: pip install flask numpy pillow matplotlib pyproj requests

from __future__ import annotations
import logging
import time
from typing import Optional

from flask import Flask, request, jsonify, make_response

from . import fetch
from .colors import legend_gradient_css, legend_scale, legend_stops
from .config import DEFAULT_VECTOR_TABLE, HOST, OVERLAY_OPACITY, PORT
from .errors import EmptyDataError, FetchError, InvalidCoordinate, UnknownLayerError
from .geometry import distance_m, format_distance, format_scale, scale_denominator
from .layers import LayerRegistry
from .models import QueryStatus, RasterProduct
from .projection import cursor_readout
from .session import MeasureSession, RasterSession
from .vector import feature_bounds, rows_to_feature_collection
from .viz import encode_png, histogram_png

logger = logging.getLogger(__name__)


class NoActiveRaster(LookupError):
    pass


class BadArgument(ValueError):
    """A missing or non-numeric query-string argument."""


# region Serialisation
def product_meta(product: RasterProduct) -> dict:
    layer, stats = product.layer, product.stats
    return {
        "layer": layer.name,
        "title": layer.title,
        "unit": layer.unit,
        "type": layer.type.value,
        "width": product.grid.width,
        "height": product.grid.height,
        "stats": {
            "min": stats.min,
            "max": stats.max,
            "mean": stats.mean,
            "valid_count": stats.valid_count,
            "text": {k: f"{getattr(stats, k):.2f}" for k in ("min", "max", "mean")},
        },
        "histogram": [int(c) for c in product.histogram],
        "bounds_projected": [[layer.bounds.min_x, layer.bounds.min_y],
                             [layer.bounds.max_x, layer.bounds.max_y]],
        "crs": layer.bounds.crs,
        "bounds_latlng": product.geo_bounds.as_latlng(),
        "opacity": OVERLAY_OPACITY,
        "legend": {
            "title": layer.title,
            "gradient": legend_gradient_css(),
            "stops": [{"pct": pct, "rgb": list(rgb)} for pct, rgb in legend_stops()],
            "scale": legend_scale(stats.min, stats.max),
        },
        "image": "/raster/active/image.png",
        "histogram_image": "/raster/active/histogram.png",
    }


def _float_arg(name: str) -> float:
    raw = request.args.get(name)
    if raw is None:
        raise BadArgument(f"{name} required")
    try:
        return float(raw)
    except ValueError:
        raise BadArgument(f"{name} must be a number") from None


def _png(data: bytes):
    resp = make_response(data)
    resp.headers["Content-Type"] = "image/png"
    return resp
# endregion


def create_app(registry: Optional[LayerRegistry] = None, session: Optional[RasterSession] = None) -> Flask:
    app = Flask(__name__)
    registry = registry if registry is not None else LayerRegistry.default()
    session = session if session is not None else RasterSession()
    measurer = MeasureSession()
    app.config["LAYERS"] = registry
    app.config["SESSION"] = session
    app.config["MEASURE"] = measurer

    # ======= CORS =======
    @app.after_request
    def _cors(resp):
        resp.headers["Access-Control-Allow-Origin"]  = "*"
        resp.headers["Access-Control-Allow-Headers"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET,POST,DELETE,OPTIONS"
        return resp

    # ======= errors =======
    @app.errorhandler(UnknownLayerError)
    def _unknown_layer(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(NoActiveRaster)
    def _no_active(e):
        return jsonify({"error": "no active raster"}), 404

    @app.errorhandler(FetchError)
    def _fetch_failed(e):
        return jsonify({"error": str(e)}), 502

    @app.errorhandler(EmptyDataError)
    def _empty(e):
        return jsonify({"error": "Sin valores válidos", "detail": str(e)}), 422

    @app.errorhandler(InvalidCoordinate)
    def _bad_coord(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(BadArgument)
    def _bad_arg(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(500)
    def _internal(e):
        return jsonify({"error": "internal error"}), 500

    # ======= info =======
    @app.route("/", methods=["GET"])
    def root():
        return {
            "ok": True,
            "layers": "/layers",
            "load": "/raster/<name>/load (POST)",
            "active": "/raster/active",
            "point": "/raster/point?lon=&lat=",
            "vector": "/vector/<table>",
            "measure": "/measure?lon1=&lat1=&lon2=&lat2=",
            "measure_tool": "/measure/start|point|clear|stop (POST), /measure/state",
        }

    @app.route("/layers", methods=["GET"])
    def layers():
        return jsonify([
            {"name": l.name, "title": l.title, "unit": l.unit, "type": l.type.value}
            for l in registry
        ])

    # ======= raster =======
    @app.route("/raster/<name>/load", methods=["POST"])
    def raster_load(name):
        layer = registry.get(name)
        t0 = time.time()
        grid = fetch.fetch_raster(name)
        product = session.load(layer, grid)
        logger.info(
            f"Loaded {name}: {grid.width}x{grid.height}, "
            f"{product.stats.valid_count} valid cells ({time.time() - t0:.2f}s)"
        )
        return jsonify(product_meta(product))

    def _active() -> RasterProduct:
        product = session.product
        if product is None:
            raise NoActiveRaster()
        return product

    @app.route("/raster/active", methods=["GET"])
    def raster_active():
        return jsonify(product_meta(_active()))

    @app.route("/raster/active", methods=["DELETE"])
    def raster_clear():
        session.clear()
        return "", 204

    @app.route("/raster/active/image.png", methods=["GET"])
    def raster_image():
        return _png(encode_png(_active().image))

    @app.route("/raster/active/histogram.png", methods=["GET"])
    def raster_histogram():
        return _png(histogram_png(_active().histogram))

    @app.route("/raster/point", methods=["GET"])
    def raster_point():
        lon, lat = _float_arg("lon"), _float_arg("lat")
        hit = session.query(lon, lat)
        if hit is None:
            return "", 204
        product, result = hit
        logger.debug(f"Point query ({lon}, {lat}) -> {result}")
        if result.status is QueryStatus.OUT_OF_BOUNDS:
            return "", 204
        if result.status is QueryStatus.NO_DATA:
            return jsonify({"status": result.status.value, "text": "Sin datos", "unit": ""})
        return jsonify({
            "status": result.status.value,
            "value": result.value,
            "text": f"{result.value:.2f}",
            "unit": product.layer.title,
        })

    # ======= vector =======
    @app.route("/vector", methods=["GET"])
    @app.route("/vector/<table>", methods=["GET"])
    def vector(table=DEFAULT_VECTOR_TABLE):
        rows = fetch.fetch_vector_rows(table)
        try:
            fc = rows_to_feature_collection(rows)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Bad row in vector table {table}: {e}")
            raise FetchError(f"malformed vector row in {table}: {e}") from e
        fc["bbox_latlng"] = feature_bounds(fc)
        fc["name"] = table
        return jsonify(fc)

    # ======= tools =======
    @app.route("/measure", methods=["GET"])
    def measure():
        p1 = (_float_arg("lon1"), _float_arg("lat1"))
        p2 = (_float_arg("lon2"), _float_arg("lat2"))
        d = distance_m(p1, p2)
        return jsonify({"distance_m": d, "text": format_distance(d)})

    # interactive two-click tool, state kept server-side
    @app.route("/measure/state", methods=["GET"])
    def measure_state():
        return jsonify(measurer.state())

    @app.route("/measure/start", methods=["POST"])
    def measure_start():
        measurer.start()
        return jsonify(measurer.state())

    @app.route("/measure/point", methods=["POST"])
    def measure_point():
        lon, lat = _float_arg("lon"), _float_arg("lat")
        accepted = measurer.add_point(lon, lat)
        return jsonify({**measurer.state(), "accepted": accepted})

    @app.route("/measure/clear", methods=["POST"])
    def measure_clear():
        measurer.clear()
        return jsonify(measurer.state())

    @app.route("/measure/stop", methods=["POST"])
    def measure_stop():
        measurer.stop()
        return jsonify(measurer.state())

    @app.route("/scale", methods=["GET"])
    def scale():
        zoom = _float_arg("zoom")
        return jsonify({"zoom": zoom, "denominator": scale_denominator(zoom), "text": format_scale(zoom)})

    @app.route("/coords", methods=["GET"])
    def coords():
        lon, lat = _float_arg("lon"), _float_arg("lat")
        x, y = cursor_readout(lon, lat, request.args.get("projection", "4326"))
        return jsonify({"x": x, "y": y})

    return app


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    create_app().run(host=HOST, port=PORT, threaded=True)


if __name__ == "__main__":
    main()

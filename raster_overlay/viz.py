# region Imports
import io
import numpy as np
from matplotlib.figure import Figure
from PIL import Image

from .models import RasterImage
# endregion

HIST_BG = "#0d1117"
HIST_BAR = "#58a6ff"


# region PNG Encoding
def encode_png(image: RasterImage) -> bytes:
    """RGBA buffer -> PNG bytes, row 0 at the top."""
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(image.rgba), "RGBA").save(buf, "PNG")
    return buf.getvalue()
# endregion

# region Histogram Chart
def histogram_png(counts, width_px: int = 300, height_px: int = 80, dpi: int = 100) -> bytes:
    """
    Bar chart of histogram counts, tallest bar at full height.
    Mirrors the stats panel canvas: dark background, no axes.
    """
    counts = np.asarray(counts, dtype=np.float64)
    bins = len(counts)
    peak = counts.max() if counts.size and counts.max() > 0 else 1.0

    # standalone Figure, no pyplot state: safe to call from request threads
    fig = Figure(figsize=(width_px / dpi, height_px / dpi), dpi=dpi, facecolor=HIST_BG)
    ax = fig.add_subplot(111)
    ax.set_facecolor(HIST_BG)
    ax.bar(np.arange(bins), counts / peak, width=0.9, align="edge", color=HIST_BAR)
    ax.set_xlim(0, bins)
    ax.set_ylim(0, 1)
    ax.set_axis_off()
    fig.subplots_adjust(left=0, right=1, top=1, bottom=0)

    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=HIST_BG)
    return buf.getvalue()
# endregion

# region Imports
from .models import GeoBounds, ProjectedBounds
from .projection import to_geographic
# endregion


# region Bounds Mapping
def to_geo_bounds(proj_bounds: ProjectedBounds) -> GeoBounds:
    # min corner is south-west, max corner is north-east; swapping them
    # flips the overlay upside down
    south_west = to_geographic(proj_bounds.min_x, proj_bounds.min_y, proj_bounds.crs)
    north_east = to_geographic(proj_bounds.max_x, proj_bounds.max_y, proj_bounds.crs)
    return GeoBounds(south_west=south_west, north_east=north_east)
# endregion

"""Fixed constants for minutia density periodicity screening."""

# Decision Stage
PERIODICITY_THRESHOLD = 0.002  # Empirical; scores at or above are periodic
SCORE_DECIMALS = 5  # Precision of the reported score

# Low-Frequency Suppressor
DEFAULT_SUPPRESSION_RADIUS = 16  # Disk radius around DC, in grid cells

# Peak listing
DEFAULT_MAX_PEAKS = 5
PEAK_NEIGHBORHOOD_SIZE = 3  # Local maximum window

# Density grids
MIN_GRID_SIZE = 2  # Raised-sine window is undefined below this

# Input formats
TABLE_SUFFIXES = (".csv",)
RASTER_SUFFIXES = (".png",)
TABLE_COLUMNS = ("x", "y", "count")

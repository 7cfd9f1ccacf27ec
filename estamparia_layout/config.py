"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import math

# PIP3 modules
import PIL.Image


DPI = 150
CM_PER_INCH = 2.54
PIXELS_PER_CM = DPI / CM_PER_INCH
POINTS_PER_INCH = 72.0
POINTS_PER_PIXEL = POINTS_PER_INCH / DPI

# border offset in pixels, applied on every side of the grid
MARGIN = 20

FIXED_WIDTH_CM = 156.0
MAX_LENGTH_CM = 200.0

WARNING_PERCENT = 80.0
DANGER_PERCENT = 100.0

STATUS_NORMAL = "normal"
STATUS_WARNING = "warning"
STATUS_DANGER = "danger"

OUTPUT_NAME_TEMPLATE = "producao_tamanho_{key}.pdf"
PROGRESS_BAR_WIDTH = 20
RASTER_FORMAT = "PNG"
RASTER_MODE = "RGBA"
RESAMPLE_FILTER = PIL.Image.Resampling.LANCZOS


@dataclasses.dataclass(frozen=True)
class Preset:
	key: str
	size_cm: float
	qty_per_row: int
	rows_count: int


@dataclasses.dataclass(frozen=True)
class FabricSpec:
	fixed_width_cm: float
	max_length_cm: float


DEFAULT_FABRIC = FabricSpec(
	fixed_width_cm=FIXED_WIDTH_CM,
	max_length_cm=MAX_LENGTH_CM,
)


@dataclasses.dataclass
class ExportResult:
	output_path: str
	preset_key: str
	page_width_px: int
	page_height_px: int
	filled_rows: int
	placed_images: int
	reservation_cm: float
	usage_status: str


#============================================
def round_half_up(value: float) -> int:
	"""
	Round to the nearest integer, halves away from zero for positive values.

	Python's round() rounds halves to even; pixel geometry must not.

	Args:
		value: Value to round.

	Returns:
		Rounded integer.
	"""
	return int(math.floor(value + 0.5))


#============================================
def cm_to_px(value: float) -> int:
	"""
	Convert centimeters to whole print pixels.

	Args:
		value: Length in centimeters.

	Returns:
		Length in pixels at DPI.
	"""
	return round_half_up(value * PIXELS_PER_CM)


#============================================
def px_to_points(value: float) -> float:
	"""
	Convert print pixels to PDF points.

	Args:
		value: Length in pixels.

	Returns:
		Length in points.
	"""
	return value * POINTS_PER_PIXEL

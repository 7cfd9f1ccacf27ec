"""
Slot grid, placement geometry and fabric reservation.
"""

# Standard Library
import dataclasses

# local repo modules
import estamparia_layout as esl
import estamparia_layout.config
import estamparia_layout.resize


Preset = esl.config.Preset
FabricSpec = esl.config.FabricSpec
Raster = esl.resize.Raster

MARGIN = esl.config.MARGIN
PIXELS_PER_CM = esl.config.PIXELS_PER_CM


@dataclasses.dataclass(frozen=True)
class EmptySlot:
	pass


@dataclasses.dataclass(frozen=True)
class FilledSlot:
	raster: Raster
	label: str


SlotState = EmptySlot | FilledSlot

EMPTY = EmptySlot()


@dataclasses.dataclass(frozen=True)
class Slot:
	id: int
	state: SlotState = EMPTY

	@property
	def is_filled(self) -> bool:
		return isinstance(self.state, FilledSlot)


#============================================
def init_slots(preset: Preset) -> list[Slot]:
	"""
	Create one empty slot per row of a preset.

	Args:
		preset: Active preset.

	Returns:
		Slots with ids 1..rows_count.
	"""
	return [Slot(id=index + 1) for index in range(preset.rows_count)]


#============================================
def fill_slot(slot: Slot, raster: Raster) -> Slot:
	"""
	Return a filled copy of a slot.

	Args:
		slot: Slot to fill.
		raster: Resized raster for the row.

	Returns:
		New Slot with the same id.
	"""
	state = FilledSlot(raster=raster, label=raster.source_name)
	return Slot(id=slot.id, state=state)


#============================================
def filled_slots(slots: list[Slot]) -> list[Slot]:
	"""
	Select the slots that carry an image.
	"""
	return [slot for slot in slots if slot.is_filled]


#============================================
def side_px(preset: Preset) -> int:
	"""
	Pixel side of one printed unit.
	"""
	return esl.config.round_half_up(preset.size_cm * PIXELS_PER_CM)


#============================================
def placement(preset: Preset, row_index: int, col_index: int) -> tuple[int, int, int]:
	"""
	Compute the top-left pixel position of one unit.

	Offsets are rounded from the exact centimeter position so rounding
	error does not accumulate across the row.

	Args:
		preset: Active preset.
		row_index: 0-based row.
		col_index: 0-based column.

	Returns:
		Tuple of (x_px, y_px, side_px).
	"""
	if not 0 <= row_index < preset.rows_count:
		raise IndexError(f"row {row_index} outside 0..{preset.rows_count - 1}")
	if not 0 <= col_index < preset.qty_per_row:
		raise IndexError(f"column {col_index} outside 0..{preset.qty_per_row - 1}")
	x = esl.config.round_half_up(col_index * preset.size_cm * PIXELS_PER_CM) + MARGIN
	y = esl.config.round_half_up(row_index * preset.size_cm * PIXELS_PER_CM) + MARGIN
	return (x, y, side_px(preset))


#============================================
def reservation_cm(preset: Preset) -> float:
	"""
	Fabric length claimed by a preset.

	The full preset is reserved whatever the number of filled rows.

	Args:
		preset: Active preset.

	Returns:
		Reserved length in centimeters.
	"""
	return preset.rows_count * preset.size_cm


#============================================
def page_size_px(preset: Preset, fabric: FabricSpec) -> tuple[int, int]:
	"""
	Compute the output page size in pixels.

	Args:
		preset: Active preset.
		fabric: Fabric roll description.

	Returns:
		Tuple of (width_px, height_px).
	"""
	width = esl.config.cm_to_px(fabric.fixed_width_cm)
	height = esl.config.cm_to_px(reservation_cm(preset)) + 2 * MARGIN
	return (width, height)


#============================================
def row_overflow_px(preset: Preset, fabric: FabricSpec) -> int:
	"""
	Measure how far a full row extends past the page width.

	Args:
		preset: Active preset.
		fabric: Fabric roll description.

	Returns:
		Overflow in pixels, 0 when the row fits.
	"""
	width, _height = page_size_px(preset, fabric)
	x, _y, side = placement(preset, 0, preset.qty_per_row - 1)
	return max(0, x + side - width)


#============================================
def describe_preset(preset: Preset) -> str:
	"""
	Build the layout summary line for a preset.
	"""
	size = f"{preset.size_cm:g}"
	return (
		f"Tamanho {preset.key} ({size}x{size}cm) - "
		f"{preset.rows_count} filas de {preset.qty_per_row} imagens cada."
	)

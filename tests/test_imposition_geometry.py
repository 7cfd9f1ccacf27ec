import pytest

import estamparia_layout.config
import estamparia_layout.layout
import estamparia_layout.presets
import estamparia_layout.resize


FABRIC = estamparia_layout.config.DEFAULT_FABRIC
MARGIN = estamparia_layout.config.MARGIN
PRESET_KEYS = estamparia_layout.presets.preset_keys()


#============================================
def build_preset(key: str) -> estamparia_layout.config.Preset:
	"""
	Look up a catalog preset for tests.
	"""
	return estamparia_layout.presets.lookup(key)


#============================================
@pytest.mark.parametrize("key", PRESET_KEYS)
def test_init_slots_contiguous_ids(key: str) -> None:
	"""
	One empty slot per row, ids 1..rows_count.
	"""
	preset = build_preset(key)
	slots = estamparia_layout.layout.init_slots(preset)
	assert len(slots) == preset.rows_count
	assert [slot.id for slot in slots] == list(range(1, preset.rows_count + 1))
	assert not any(slot.is_filled for slot in slots)
	assert all(isinstance(slot.state, estamparia_layout.layout.EmptySlot) for slot in slots)


#============================================
@pytest.mark.parametrize(
	"key, side_px",
	[("P", 1152), ("M", 1447), ("G", 1831)],
)
def test_side_px_per_preset(key: str, side_px: int) -> None:
	"""
	Unit side is the rounded pixel size at 150 DPI.
	"""
	preset = build_preset(key)
	assert estamparia_layout.layout.side_px(preset) == side_px
	assert estamparia_layout.layout.side_px(preset) == estamparia_layout.resize.target_side_px(preset.size_cm)


#============================================
def test_placement_known_values() -> None:
	"""
	Offsets are rounded from the exact position, then shifted by the margin.
	"""
	preset = build_preset("M")
	assert estamparia_layout.layout.placement(preset, 0, 0) == (MARGIN, MARGIN, 1447)
	assert estamparia_layout.layout.placement(preset, 2, 0) == (MARGIN, 2894 + MARGIN, 1447)
	assert estamparia_layout.layout.placement(preset, 0, 5) == (7234 + MARGIN, MARGIN, 1447)


#============================================
@pytest.mark.parametrize("key", PRESET_KEYS)
def test_placement_matches_formula(key: str) -> None:
	"""
	Every slot position follows round(index * size * px_per_cm) + margin.
	"""
	preset = build_preset(key)
	step = preset.size_cm * estamparia_layout.config.PIXELS_PER_CM
	for row in range(preset.rows_count):
		for col in range(preset.qty_per_row):
			x, y, side = estamparia_layout.layout.placement(preset, row, col)
			assert abs(x - MARGIN - col * step) <= 0.5
			assert abs(y - MARGIN - row * step) <= 0.5
			assert side == estamparia_layout.layout.side_px(preset)


#============================================
@pytest.mark.parametrize("key", PRESET_KEYS)
def test_grid_boxes_non_overlapping(key: str) -> None:
	"""
	Adjacent units touch at most by one pixel of rounding.
	"""
	preset = build_preset(key)
	for col in range(preset.qty_per_row - 1):
		left_x, _y, side = estamparia_layout.layout.placement(preset, 0, col)
		right_x, _y, _side = estamparia_layout.layout.placement(preset, 0, col + 1)
		assert right_x >= left_x + side - 1

	for row in range(preset.rows_count - 1):
		_x, upper_y, side = estamparia_layout.layout.placement(preset, row, 0)
		_x, lower_y, _side = estamparia_layout.layout.placement(preset, row + 1, 0)
		assert lower_y >= upper_y + side - 1


#============================================
@pytest.mark.parametrize("key", PRESET_KEYS)
def test_rows_within_page_height(key: str) -> None:
	"""
	The last row ends inside the page with the bottom margin left over.
	"""
	preset = build_preset(key)
	_width, height = estamparia_layout.layout.page_size_px(preset, FABRIC)
	_x, y, side = estamparia_layout.layout.placement(preset, preset.rows_count - 1, 0)
	assert y + side <= height - MARGIN + 1


#============================================
def test_placement_rejects_out_of_range() -> None:
	"""
	Row and column indices are bounded by the preset.
	"""
	preset = build_preset("G")
	with pytest.raises(IndexError):
		estamparia_layout.layout.placement(preset, preset.rows_count, 0)
	with pytest.raises(IndexError):
		estamparia_layout.layout.placement(preset, 0, preset.qty_per_row)
	with pytest.raises(IndexError):
		estamparia_layout.layout.placement(preset, -1, 0)


#============================================
@pytest.mark.parametrize(
	"key, height_px",
	[("P", 11556), ("M", 11615), ("G", 11024)],
)
def test_page_size(key: str, height_px: int) -> None:
	"""
	Width is the fixed roll width; height covers every row plus margins.
	"""
	preset = build_preset(key)
	width, height = estamparia_layout.layout.page_size_px(preset, FABRIC)
	assert width == 9213
	assert height == height_px
	expected = estamparia_layout.config.round_half_up(
		preset.rows_count * preset.size_cm * 150 / 2.54
	) + 2 * MARGIN
	assert height == expected


#============================================
@pytest.mark.parametrize("key", PRESET_KEYS)
def test_reservation_ignores_fill_state(key: str) -> None:
	"""
	Reservation depends only on the preset.
	"""
	preset = build_preset(key)
	expected = preset.rows_count * preset.size_cm
	slots = estamparia_layout.layout.init_slots(preset)
	assert estamparia_layout.layout.reservation_cm(preset) == expected

	raster = estamparia_layout.resize.Raster(side_px=1, png_bytes=b"", source_name="a.png")
	slots[0] = estamparia_layout.layout.fill_slot(slots[0], raster)
	assert len(estamparia_layout.layout.filled_slots(slots)) == 1
	assert estamparia_layout.layout.reservation_cm(preset) == expected


#============================================
def test_fill_slot_keeps_id() -> None:
	"""
	Filling returns a new slot with the same id and the raster label.
	"""
	preset = build_preset("M")
	slot = estamparia_layout.layout.init_slots(preset)[4]
	raster = estamparia_layout.resize.Raster(side_px=1447, png_bytes=b"x", source_name="logo.png")
	filled = estamparia_layout.layout.fill_slot(slot, raster)
	assert filled.id == 5
	assert filled.is_filled
	assert filled.state.raster is raster
	assert filled.state.label == "logo.png"
	assert not slot.is_filled


#============================================
def test_row_overflow() -> None:
	"""
	Only the small preset runs past the roll width, by the margin.
	"""
	assert estamparia_layout.layout.row_overflow_px(build_preset("P"), FABRIC) == MARGIN
	assert estamparia_layout.layout.row_overflow_px(build_preset("M"), FABRIC) == 0
	assert estamparia_layout.layout.row_overflow_px(build_preset("G"), FABRIC) == 0


#============================================
def test_describe_preset() -> None:
	"""
	Summary line lists size, rows and copies.
	"""
	summary = estamparia_layout.layout.describe_preset(build_preset("M"))
	assert summary == "Tamanho M (24.5x24.5cm) - 8 filas de 6 imagens cada."
	summary = estamparia_layout.layout.describe_preset(build_preset("G"))
	assert summary == "Tamanho G (31x31cm) - 6 filas de 5 imagens cada."

"""
Composition of the single-page production PDF.
"""

# Standard Library
import io
import json
import os
import pathlib
import tempfile

# PIP3 modules
import pypdf
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import estamparia_layout as esl
import estamparia_layout.config
import estamparia_layout.errors
import estamparia_layout.layout
import estamparia_layout.usage


Preset = esl.config.Preset
FabricSpec = esl.config.FabricSpec
ExportResult = esl.config.ExportResult
Slot = esl.layout.Slot
FilledSlot = esl.layout.FilledSlot
UsageReport = esl.usage.UsageReport
CompositionError = esl.errors.CompositionError

POINTS_PER_PIXEL = esl.config.POINTS_PER_PIXEL
OUTPUT_NAME_TEMPLATE = esl.config.OUTPUT_NAME_TEMPLATE
PROGRESS_BAR_WIDTH = esl.config.PROGRESS_BAR_WIDTH
DOCUMENT_TITLE = "Producao de estampas"


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def default_file_name(preset_key: str) -> str:
	"""
	Default output file name for a preset.
	"""
	return OUTPUT_NAME_TEMPLATE.format(key=preset_key)


#============================================
def validate_slots(preset: Preset | None, slots: list[Slot]) -> None:
	"""
	Check that a document can be composed.

	Args:
		preset: Active preset or None.
		slots: Slot list for the preset.
	"""
	if preset is None:
		raise CompositionError("No preset selected")
	expected_ids = list(range(1, preset.rows_count + 1))
	slot_ids = [slot.id for slot in slots]
	if slot_ids != expected_ids:
		raise CompositionError(
			f"Slots {slot_ids} do not match preset {preset.key} rows 1..{preset.rows_count}"
		)
	if not esl.layout.filled_slots(slots):
		raise CompositionError("Every fila is empty; nothing to export")


#============================================
def draw_row(
	pdf: reportlab.pdfgen.canvas.Canvas,
	preset: Preset,
	slot: Slot,
	page_height_px: int,
) -> int:
	"""
	Draw every repeated copy of one filled row.

	Args:
		pdf: ReportLab canvas.
		preset: Active preset.
		slot: Filled slot for the row.
		page_height_px: Page height, for flipping to PDF coordinates.

	Returns:
		Number of images placed.
	"""
	state = slot.state
	if not isinstance(state, FilledSlot):
		return 0
	image_reader = reportlab.lib.utils.ImageReader(io.BytesIO(state.raster.png_bytes))
	placed = 0
	for col in range(preset.qty_per_row):
		x, y, side = esl.layout.placement(preset, slot.id - 1, col)
		# grid origin is top-left, PDF origin is bottom-left
		bottom = page_height_px - y - side
		pdf.drawImage(
			image_reader,
			x * POINTS_PER_PIXEL,
			bottom * POINTS_PER_PIXEL,
			width=side * POINTS_PER_PIXEL,
			height=side * POINTS_PER_PIXEL,
			mask="auto",
		)
		placed += 1
	return placed


#============================================
def compose_document(
	preset: Preset | None,
	slots: list[Slot],
	fabric: FabricSpec = esl.config.DEFAULT_FABRIC,
	verbose: bool = False,
) -> bytes:
	"""
	Compose the production page for a preset and its slots.

	Empty rows draw nothing but still count in the page height.

	Args:
		preset: Active preset.
		slots: Slot list for the preset.
		fabric: Fabric roll description.
		verbose: Print a progress bar per row.

	Returns:
		PDF bytes of a single page.
	"""
	validate_slots(preset, slots)
	width_px, height_px = esl.layout.page_size_px(preset, fabric)
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(
		buffer,
		pagesize=(width_px * POINTS_PER_PIXEL, height_px * POINTS_PER_PIXEL),
	)
	pdf.setTitle(DOCUMENT_TITLE)
	pdf.setSubject(esl.layout.describe_preset(preset))

	total = len(slots)
	for index, slot in enumerate(slots, start=1):
		draw_row(pdf, preset, slot, height_px)
		if verbose:
			print_progress("Filas", index, total)
	if verbose:
		print()

	pdf.showPage()
	pdf.save()
	return buffer.getvalue()


#============================================
def save_document(data: bytes, output_path: pathlib.Path) -> pathlib.Path:
	"""
	Write document bytes so the target is either complete or untouched.

	Args:
		data: PDF bytes.
		output_path: Destination path.

	Returns:
		Resolved output path.
	"""
	output_path = pathlib.Path(output_path)
	directory = output_path.parent
	directory.mkdir(parents=True, exist_ok=True)
	handle = tempfile.NamedTemporaryFile(
		dir=directory,
		prefix=f".{output_path.name}.",
		suffix=".tmp",
		delete=False,
	)
	temp_path = pathlib.Path(handle.name)
	try:
		with handle:
			handle.write(data)
		os.replace(temp_path, output_path)
	except BaseException:
		temp_path.unlink(missing_ok=True)
		raise
	return output_path


#============================================
def read_page_size_px(data: bytes) -> tuple[int, int]:
	"""
	Read the page size of a composed document back in pixels.

	Args:
		data: PDF bytes.

	Returns:
		Tuple of (width_px, height_px).
	"""
	reader = pypdf.PdfReader(io.BytesIO(data))
	if len(reader.pages) != 1:
		raise CompositionError(f"Expected a single page, found {len(reader.pages)}")
	box = reader.pages[0].mediabox
	width = esl.config.round_half_up(float(box.width) / POINTS_PER_PIXEL)
	height = esl.config.round_half_up(float(box.height) / POINTS_PER_PIXEL)
	return (width, height)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	result: ExportResult,
	preset: Preset,
	slots: list[Slot],
	usage: UsageReport,
) -> None:
	"""
	Write a manifest JSON file for an export.

	Args:
		manifest_path: Output path.
		result: Export result.
		preset: Exported preset.
		slots: Exported slots.
		usage: Usage report at export time.
	"""
	filas = []
	for slot in slots:
		entry = {"id": slot.id, "filled": slot.is_filled}
		if isinstance(slot.state, FilledSlot):
			entry["source"] = slot.state.label
			entry["side_px"] = slot.state.raster.side_px
		filas.append(entry)
	data = {
		"output": result.output_path,
		"preset": {
			"key": preset.key,
			"size_cm": preset.size_cm,
			"qty_per_row": preset.qty_per_row,
			"rows_count": preset.rows_count,
		},
		"page": {
			"width_px": result.page_width_px,
			"height_px": result.page_height_px,
			"dpi": esl.config.DPI,
			"margin_px": esl.config.MARGIN,
		},
		"filled_rows": result.filled_rows,
		"placed_images": result.placed_images,
		"usage": {
			"reservation_cm": usage.reservation_cm,
			"max_length_cm": usage.max_length_cm,
			"percentage": usage.percentage,
			"status": usage.status,
		},
		"filas": filas,
	}
	manifest_path = pathlib.Path(manifest_path)
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)

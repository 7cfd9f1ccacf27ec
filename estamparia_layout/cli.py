"""
CLI entry points for fabric roll layout.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# local repo modules
import estamparia_layout as esl
import estamparia_layout.config
import estamparia_layout.display
import estamparia_layout.errors
import estamparia_layout.layout
import estamparia_layout.presets
import estamparia_layout.render
import estamparia_layout.session


EstampariaError = esl.errors.EstampariaError
UploadError = esl.errors.UploadError
LayoutSession = esl.session.LayoutSession


#============================================
def parse_fila(value: str) -> tuple[int, pathlib.Path]:
	"""
	Parse a fila argument of the form ID:PATH.

	Args:
		value: Argument text.

	Returns:
		Tuple of (slot_id, image_path).
	"""
	slot_text, sep, path_text = value.partition(":")
	if not sep or not path_text:
		raise argparse.ArgumentTypeError(f"expected ID:PATH, got {value!r}")
	try:
		slot_id = int(slot_text)
	except ValueError:
		raise argparse.ArgumentTypeError(f"fila id must be an integer, got {slot_text!r}") from None
	return (slot_id, pathlib.Path(path_text))


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Lay out repeated print rows on a fabric roll PDF.")
	parser.add_argument(
		"-s", "--size", dest="size_key", required=True,
		choices=esl.presets.preset_keys(), help="Garment size preset.",
	)
	parser.add_argument(
		"-f", "--fila", dest="filas", action="append", type=parse_fila, default=[],
		metavar="ID:PATH",
		help="Image for one fila (repeatable). A fila whose image fails to load is reported and left empty; the other filas are still exported and the exit code is 1.",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=None, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-n", "--no-manifest", dest="write_manifest", action="store_false", help="Skip the manifest.")

	parser.set_defaults(write_manifest=True)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> tuple[esl.config.ExportResult, list[int]]:
	"""
	Select the preset, upload every fila and export the document.

	Upload failures stay local to their fila.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Tuple of (ExportResult, ids of filas that failed to upload).
	"""
	session = LayoutSession(display=esl.display.ConsoleDisplay())
	print("Fabric roll layout pipeline")
	preset = session.select_preset(args.size_key)

	output_path = args.output_path
	if output_path is None:
		output_path = esl.render.default_file_name(preset.key)
	output_path = pathlib.Path(output_path)
	print(f"Output PDF: {output_path}")

	overflow = esl.layout.row_overflow_px(preset, session.fabric)
	if overflow > 0:
		print(f"Warning: a full row extends {overflow}px past the roll width")

	start_time = time.perf_counter()
	resize_start = time.perf_counter()
	failed_ids: list[int] = []
	for slot_id, image_path in args.filas:
		try:
			session.upload_file(slot_id, image_path)
		except UploadError:
			# already reported through the display
			failed_ids.append(slot_id)
	resize_end = time.perf_counter()

	manifest_path = None
	if args.write_manifest:
		manifest_path = args.manifest_path
		if manifest_path is None:
			manifest_path = f"{output_path}.json"
		manifest_path = pathlib.Path(manifest_path)

	compose_start = time.perf_counter()
	result = session.export_to(output_path, manifest_path, verbose=True)
	compose_end = time.perf_counter()

	print(f"Page size: {result.page_width_px}x{result.page_height_px}px")
	print(f"Filas filled: {result.filled_rows}/{preset.rows_count}")
	print(f"Images placed: {result.placed_images}")
	if failed_ids:
		print(f"Filas failed: {', '.join(str(slot_id) for slot_id in failed_ids)}")
	if manifest_path is not None:
		print(f"Manifest written: {manifest_path}")
	total_time = time.perf_counter() - start_time
	print(
		"Timing: resize={:.2f}s compose={:.2f}s total={:.2f}s".format(
			resize_end - resize_start,
			compose_end - compose_start,
			total_time,
		)
	)
	return (result, failed_ids)


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.

	Returns:
		Process exit code.
	"""
	args = parse_args(argv)
	try:
		_result, failed_ids = run_pipeline(args)
	except (EstampariaError, OSError):
		# already reported through the display
		return 1
	if failed_ids:
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())

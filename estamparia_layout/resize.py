"""
Image decoding and square resizing for print rasters.
"""

# Standard Library
import asyncio
import base64
import dataclasses
import io
import pathlib

# PIP3 modules
import PIL.Image
import PIL.ImageOps

# local repo modules
import estamparia_layout as esl
import estamparia_layout.config
import estamparia_layout.errors


DecodeError = esl.errors.DecodeError
ImageReadError = esl.errors.ImageReadError

RASTER_FORMAT = esl.config.RASTER_FORMAT
RASTER_MODE = esl.config.RASTER_MODE
RESAMPLE_FILTER = esl.config.RESAMPLE_FILTER


@dataclasses.dataclass(frozen=True)
class Raster:
	side_px: int
	png_bytes: bytes
	source_name: str

	def open_image(self) -> PIL.Image.Image:
		"""
		Decode the stored PNG back into a Pillow image.
		"""
		return PIL.Image.open(io.BytesIO(self.png_bytes))

	def to_data_url(self) -> str:
		"""
		Encode the raster as a data URL for preview collaborators.
		"""
		encoded = base64.b64encode(self.png_bytes).decode("ascii")
		return f"data:image/png;base64,{encoded}"


#============================================
def target_side_px(target_size_cm: float) -> int:
	"""
	Compute the raster side for a physical size.

	Args:
		target_size_cm: Physical side length in centimeters.

	Returns:
		Side length in pixels at the print DPI.
	"""
	if target_size_cm <= 0:
		raise ValueError(f"target size must be positive, got {target_size_cm}")
	return esl.config.cm_to_px(target_size_cm)


#============================================
def scale_to_8bit(image: PIL.Image.Image) -> PIL.Image.Image:
	"""
	Bring 16-bit greyscale images into the 8-bit range.

	Pillow converts integer modes to RGBA by clipping, not scaling, so
	anything above 255 would print white.

	Args:
		image: Decoded image.

	Returns:
		Image in mode "L" for integer sources, otherwise unchanged.
	"""
	if not image.mode.startswith("I"):
		return image
	wide = image.convert("I")
	return wide.point(lambda value: value * (1.0 / 257.0)).convert("L")


#============================================
def decode_image(data: bytes) -> PIL.Image.Image:
	"""
	Decode image bytes fully into memory.

	Args:
		data: Encoded image bytes (PNG or JPEG).

	Returns:
		Decoded Pillow image in RGBA mode.
	"""
	if not data:
		raise DecodeError("empty image data")
	try:
		with PIL.Image.open(io.BytesIO(data)) as source:
			source.load()
			# camera orientation tag, applied the way browsers display it
			image = PIL.ImageOps.exif_transpose(source)
			image = scale_to_8bit(image)
			image = image.convert(RASTER_MODE)
	except PIL.Image.DecompressionBombError as error:
		raise DecodeError(f"image too large to decode: {error}") from error
	except (OSError, ValueError, SyntaxError) as error:
		# UnidentifiedImageError and truncated files are OSError subclasses
		raise DecodeError(f"failed to load image: {error}") from error
	return image


#============================================
def encode_png(image: PIL.Image.Image) -> bytes:
	"""
	Encode an image losslessly.

	Args:
		image: Pillow image.

	Returns:
		PNG bytes.
	"""
	buffer = io.BytesIO()
	image.save(buffer, format=RASTER_FORMAT)
	return buffer.getvalue()


#============================================
def resize_image(data: bytes, target_size_cm: float, source_name: str = "") -> Raster:
	"""
	Decode an uploaded image and stretch it into a square print raster.

	The source aspect ratio is not preserved: the image is scaled
	independently on each axis to fill the square.

	Args:
		data: Encoded image bytes.
		target_size_cm: Physical side of the printed unit.
		source_name: Original file name, kept for display.

	Returns:
		Raster with PNG bytes.
	"""
	side = target_side_px(target_size_cm)
	image = decode_image(data)
	if image.size != (side, side):
		image = image.resize((side, side), RESAMPLE_FILTER)
	png_bytes = encode_png(image)
	return Raster(side_px=side, png_bytes=png_bytes, source_name=source_name)


#============================================
def read_image_file(path: pathlib.Path) -> bytes:
	"""
	Read raw image bytes from disk.

	Args:
		path: Image path.

	Returns:
		File contents.
	"""
	path = pathlib.Path(path)
	try:
		return path.read_bytes()
	except OSError as error:
		raise ImageReadError(f"failed to read {path}: {error.strerror or error}") from error


#============================================
def resize_image_file(path: pathlib.Path, target_size_cm: float) -> Raster:
	"""
	Read and resize an image file.

	Args:
		path: Image path.
		target_size_cm: Physical side of the printed unit.

	Returns:
		Raster labelled with the file name.
	"""
	path = pathlib.Path(path)
	data = read_image_file(path)
	return resize_image(data, target_size_cm, path.name)


#============================================
async def resize_image_async(data: bytes, target_size_cm: float, source_name: str = "") -> Raster:
	"""
	Resize an image without blocking the event loop.

	Decoding and resampling run in a worker thread; awaiting the result
	is the only suspension point.

	Args:
		data: Encoded image bytes.
		target_size_cm: Physical side of the printed unit.
		source_name: Original file name, kept for display.

	Returns:
		Raster with PNG bytes.
	"""
	return await asyncio.to_thread(resize_image, data, target_size_cm, source_name)

"""
Exception types raised by the layout pipeline.
"""


class EstampariaError(Exception):
	"""
	Base class for every error the layout pipeline raises.
	"""


class ValidationError(EstampariaError):
	"""
	An action was requested in a state that does not allow it.
	"""


class UnknownPresetError(ValidationError, KeyError):
	"""
	A preset key outside the catalog was requested.
	"""

	def __str__(self) -> str:
		# KeyError quotes its message; keep the plain text
		return str(self.args[0]) if self.args else ""


class UploadError(EstampariaError):
	"""
	An uploaded image could not be turned into a raster.
	"""

	def __init__(self, message: str, slot_id: int | None = None) -> None:
		super().__init__(message)
		self.slot_id = slot_id

	def __str__(self) -> str:
		message = str(self.args[0]) if self.args else ""
		if self.slot_id is None:
			return message
		return f"fila {self.slot_id}: {message}"


class DecodeError(UploadError):
	"""
	The source bytes are not a decodable image.
	"""


class ImageReadError(UploadError, OSError):
	"""
	The source image could not be read.
	"""


class CompositionError(EstampariaError):
	"""
	The output document cannot be composed from the current state.
	"""

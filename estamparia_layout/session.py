"""
Layout session: active preset, slot list and the user actions on them.
"""

# Standard Library
import itertools
import pathlib
import threading

# local repo modules
import estamparia_layout as esl
import estamparia_layout.config
import estamparia_layout.display
import estamparia_layout.errors
import estamparia_layout.layout
import estamparia_layout.presets
import estamparia_layout.render
import estamparia_layout.resize
import estamparia_layout.usage


Preset = esl.config.Preset
FabricSpec = esl.config.FabricSpec
ExportResult = esl.config.ExportResult
Slot = esl.layout.Slot
Raster = esl.resize.Raster
UsageReport = esl.usage.UsageReport
Display = esl.display.Display

ValidationError = esl.errors.ValidationError
UploadError = esl.errors.UploadError
EstampariaError = esl.errors.EstampariaError

NO_PRESET_MESSAGE = "Por favor, selecione um tamanho de trabalho primeiro."
NO_IMAGES_MESSAGE = "Por favor, adicione pelo menos uma imagem a uma fila."
EXPORT_DONE_MESSAGE = "PDF gerado com sucesso!"


class LayoutSession:
	"""
	Single owner of the active preset and its slot list.

	Every mutation and every snapshot goes through one lock, so a slot
	is always either its old or its new value for any reader. Uploads
	take a ticket when they start; a result is applied only if it still
	holds the newest ticket for its slot and no preset change happened
	in between.
	"""

	def __init__(
		self,
		fabric: FabricSpec = esl.config.DEFAULT_FABRIC,
		display: Display | None = None,
	) -> None:
		self.fabric = fabric
		self.display = display if display is not None else Display()
		self._lock = threading.Lock()
		self._preset: Preset | None = None
		self._slots: list[Slot] = []
		self._generation = 0
		self._tickets = itertools.count(1)
		self._latest_ticket: dict[int, int] = {}

	#============================================
	@property
	def preset(self) -> Preset | None:
		with self._lock:
			return self._preset

	def snapshot(self) -> tuple[Preset | None, list[Slot]]:
		"""
		Consistent copy of the preset and slot list.
		"""
		with self._lock:
			return (self._preset, list(self._slots))

	def slots(self) -> list[Slot]:
		return self.snapshot()[1]

	def slot(self, slot_id: int) -> Slot:
		"""
		Look up one slot by id.

		Args:
			slot_id: 1-based row id.

		Returns:
			Current Slot value.
		"""
		with self._lock:
			self._check_slot_id(slot_id)
			return self._slots[slot_id - 1]

	def reservation_cm(self) -> float:
		preset = self.preset
		if preset is None:
			return 0.0
		return esl.layout.reservation_cm(preset)

	def usage(self) -> UsageReport:
		return esl.usage.classify(self.reservation_cm(), self.fabric)

	#============================================
	def select_preset(self, key: str) -> Preset:
		"""
		Activate a preset and replace the slot list with empty slots.

		Rasters uploaded for the previous preset are discarded.

		Args:
			key: Preset size key.

		Returns:
			The active Preset.
		"""
		try:
			preset = esl.presets.lookup(key)
		except ValidationError as error:
			self.display.alert(str(error))
			raise
		slots = esl.layout.init_slots(preset)
		with self._lock:
			self._preset = preset
			self._slots = slots
			self._generation += 1
			self._latest_ticket = {}
		self.display.show_layout(esl.layout.describe_preset(preset), list(slots))
		self.display.show_usage(self.usage())
		return preset

	#============================================
	def _check_slot_id(self, slot_id: int) -> None:
		if self._preset is None:
			raise ValidationError(NO_PRESET_MESSAGE)
		if not 1 <= slot_id <= len(self._slots):
			raise ValidationError(f"Fila {slot_id} não existe (1..{len(self._slots)})")

	def _begin_upload(self, slot_id: int) -> tuple[Preset, int, int]:
		try:
			with self._lock:
				self._check_slot_id(slot_id)
				ticket = next(self._tickets)
				self._latest_ticket[slot_id] = ticket
				return (self._preset, self._generation, ticket)
		except ValidationError as error:
			self.display.alert(str(error))
			raise

	def _finish_upload(self, slot_id: int, generation: int, ticket: int, raster: Raster) -> Slot | None:
		with self._lock:
			if generation != self._generation:
				return None
			if self._latest_ticket.get(slot_id) != ticket:
				return None
			slot = esl.layout.fill_slot(self._slots[slot_id - 1], raster)
			self._slots[slot_id - 1] = slot
		self.display.show_slot(slot)
		return slot

	def _upload_failed(self, slot_id: int, error: UploadError) -> UploadError:
		failure = type(error)(error.args[0], slot_id)
		self.display.alert(f"Erro ao processar imagem: {failure}")
		return failure

	#============================================
	def upload(self, slot_id: int, data: bytes, source_name: str = "") -> Slot | None:
		"""
		Resize an image and store it on one slot.

		Args:
			slot_id: 1-based row id.
			data: Encoded image bytes.
			source_name: Original file name.

		Returns:
			The filled Slot, or None when a newer upload or preset
			change superseded this one.
		"""
		preset, generation, ticket = self._begin_upload(slot_id)
		try:
			raster = esl.resize.resize_image(data, preset.size_cm, source_name)
		except UploadError as error:
			raise self._upload_failed(slot_id, error) from error
		return self._finish_upload(slot_id, generation, ticket, raster)

	async def upload_async(self, slot_id: int, data: bytes, source_name: str = "") -> Slot | None:
		"""
		Asynchronous form of upload(); the resize is the only await.
		"""
		preset, generation, ticket = self._begin_upload(slot_id)
		try:
			raster = await esl.resize.resize_image_async(data, preset.size_cm, source_name)
		except UploadError as error:
			raise self._upload_failed(slot_id, error) from error
		return self._finish_upload(slot_id, generation, ticket, raster)

	def upload_file(self, slot_id: int, path: pathlib.Path) -> Slot | None:
		"""
		Read an image file and upload it to one slot.

		Args:
			slot_id: 1-based row id.
			path: Image path.

		Returns:
			The filled Slot, or None when superseded.
		"""
		path = pathlib.Path(path)
		try:
			data = esl.resize.read_image_file(path)
		except UploadError as error:
			raise self._upload_failed(slot_id, error) from error
		return self.upload(slot_id, data, path.name)

	#============================================
	def export(self, verbose: bool = False) -> bytes:
		"""
		Compose the production document from a snapshot of the session.

		Args:
			verbose: Print composition progress.

		Returns:
			PDF bytes.
		"""
		preset, slots = self.snapshot()
		return self._compose(preset, slots, verbose)

	def _compose(self, preset: Preset | None, slots: list[Slot], verbose: bool) -> bytes:
		try:
			if preset is None:
				raise ValidationError(NO_PRESET_MESSAGE)
			if not esl.layout.filled_slots(slots):
				raise ValidationError(NO_IMAGES_MESSAGE)
			return esl.render.compose_document(preset, slots, self.fabric, verbose=verbose)
		except EstampariaError as error:
			self.display.alert(str(error))
			raise

	def export_to(
		self,
		output_path: pathlib.Path | None = None,
		manifest_path: pathlib.Path | None = None,
		verbose: bool = False,
	) -> ExportResult:
		"""
		Compose the document and write it to disk.

		Nothing is written when composition fails.

		Args:
			output_path: Destination; defaults to producao_tamanho_{key}.pdf.
			manifest_path: Optional manifest JSON path.
			verbose: Print composition progress.

		Returns:
			ExportResult describing the written document.
		"""
		preset, slots = self.snapshot()
		data = self._compose(preset, slots, verbose)
		if output_path is None:
			output_path = esl.render.default_file_name(preset.key)
		output_path = pathlib.Path(output_path)

		width_px, height_px = esl.layout.page_size_px(preset, self.fabric)
		filled = esl.layout.filled_slots(slots)
		usage = esl.usage.classify(esl.layout.reservation_cm(preset), self.fabric)
		result = ExportResult(
			output_path=str(output_path),
			preset_key=preset.key,
			page_width_px=width_px,
			page_height_px=height_px,
			filled_rows=len(filled),
			placed_images=len(filled) * preset.qty_per_row,
			reservation_cm=usage.reservation_cm,
			usage_status=usage.status,
		)
		# manifest first: a failed export leaves neither file behind
		try:
			if manifest_path is not None:
				esl.render.write_manifest(manifest_path, result, preset, slots, usage)
			try:
				esl.render.save_document(data, output_path)
			except OSError:
				if manifest_path is not None:
					pathlib.Path(manifest_path).unlink(missing_ok=True)
				raise
		except OSError as error:
			self.display.alert(f"Erro ao gerar PDF: {error}")
			raise
		self.display.notify(EXPORT_DONE_MESSAGE)
		return result

"""
Display collaborators for the layout session.
"""

# local repo modules
import estamparia_layout as esl
import estamparia_layout.layout
import estamparia_layout.usage


Slot = esl.layout.Slot
FilledSlot = esl.layout.FilledSlot
UsageReport = esl.usage.UsageReport


class Display:
	"""
	Capability interface the session reports to.

	The base class ignores every event, so it doubles as a silent display.
	"""

	def show_layout(self, summary: str, slots: list[Slot]) -> None:
		pass

	def show_usage(self, report: UsageReport) -> None:
		pass

	def show_slot(self, slot: Slot) -> None:
		pass

	def alert(self, message: str) -> None:
		pass

	def notify(self, message: str) -> None:
		pass


#============================================
def describe_slot(slot: Slot) -> str:
	"""
	One-line description of a slot.

	Args:
		slot: Slot to describe.

	Returns:
		Text such as "Fila 3: arte.png (1447px)".
	"""
	state = slot.state
	if isinstance(state, FilledSlot):
		return f"Fila {slot.id}: {state.label} ({state.raster.side_px}px)"
	return f"Fila {slot.id}: vazia"


class ConsoleDisplay(Display):
	"""
	Print session events to stdout.
	"""

	def show_layout(self, summary: str, slots: list[Slot]) -> None:
		print(summary)
		for slot in slots:
			print(f"  {describe_slot(slot)}")

	def show_usage(self, report: UsageReport) -> None:
		print(
			f"Uso de tecido: {report.summary_text()} "
			f"({report.percentage:.1f}%, {report.status})"
		)

	def show_slot(self, slot: Slot) -> None:
		print(describe_slot(slot))

	def alert(self, message: str) -> None:
		print(f"ERRO: {message}")

	def notify(self, message: str) -> None:
		print(message)

"""
Fabric usage classification.
"""

# Standard Library
import dataclasses

# local repo modules
import estamparia_layout as esl
import estamparia_layout.config


FabricSpec = esl.config.FabricSpec

WARNING_PERCENT = esl.config.WARNING_PERCENT
DANGER_PERCENT = esl.config.DANGER_PERCENT
STATUS_NORMAL = esl.config.STATUS_NORMAL
STATUS_WARNING = esl.config.STATUS_WARNING
STATUS_DANGER = esl.config.STATUS_DANGER


@dataclasses.dataclass(frozen=True)
class UsageReport:
	reservation_cm: float
	max_length_cm: float
	percentage: float
	fill_percentage: float
	status: str

	def summary_text(self) -> str:
		return f"{self.reservation_cm:.1f} / {self.max_length_cm:g} cm"


#============================================
def classify_percentage(percentage: float) -> str:
	"""
	Map a usage percentage to a status.

	Args:
		percentage: Reserved share of the maximum length, in percent.

	Returns:
		One of "normal", "warning" or "danger".
	"""
	if percentage > DANGER_PERCENT:
		return STATUS_DANGER
	if percentage > WARNING_PERCENT:
		return STATUS_WARNING
	return STATUS_NORMAL


#============================================
def classify(reservation_cm: float, fabric: FabricSpec) -> UsageReport:
	"""
	Classify a fabric reservation against the production limit.

	Args:
		reservation_cm: Reserved length in centimeters.
		fabric: Fabric roll description.

	Returns:
		UsageReport with raw and display percentages.
	"""
	if fabric.max_length_cm <= 0:
		raise ValueError(f"max length must be positive, got {fabric.max_length_cm}")
	percentage = reservation_cm / fabric.max_length_cm * 100.0
	fill_percentage = min(max(percentage, 0.0), 100.0)
	return UsageReport(
		reservation_cm=reservation_cm,
		max_length_cm=fabric.max_length_cm,
		percentage=percentage,
		fill_percentage=fill_percentage,
		status=classify_percentage(percentage),
	)

import pytest

import estamparia_layout.config
import estamparia_layout.layout
import estamparia_layout.presets
import estamparia_layout.usage


FABRIC = estamparia_layout.config.DEFAULT_FABRIC


#============================================
@pytest.mark.parametrize(
	"percentage, status",
	[
		(0.0, "normal"),
		(79.9999, "normal"),
		(80.0, "normal"),
		(80.0001, "warning"),
		(100.0, "warning"),
		(100.0001, "danger"),
		(250.0, "danger"),
	],
)
def test_threshold_boundaries(percentage: float, status: str) -> None:
	"""
	80 is still normal and 100 is still warning.
	"""
	assert estamparia_layout.usage.classify_percentage(percentage) == status


#============================================
def test_classify_exact_boundaries() -> None:
	"""
	Reservations landing exactly on a threshold classify inclusively.
	"""
	fabric = estamparia_layout.config.FabricSpec(fixed_width_cm=156.0, max_length_cm=200.0)
	assert estamparia_layout.usage.classify(160.0, fabric).status == "normal"
	assert estamparia_layout.usage.classify(200.0, fabric).status == "warning"
	assert estamparia_layout.usage.classify(200.0002, fabric).status == "danger"


#============================================
def test_scenario_medium_preset_warning() -> None:
	"""
	Size M reserves 196 cm, 98% of the 200 cm limit.
	"""
	preset = estamparia_layout.presets.lookup("M")
	report = estamparia_layout.usage.classify(estamparia_layout.layout.reservation_cm(preset), FABRIC)
	assert report.reservation_cm == pytest.approx(196.0)
	assert report.percentage == pytest.approx(98.0)
	assert report.fill_percentage == pytest.approx(98.0)
	assert report.status == "warning"
	assert report.summary_text() == "196.0 / 200 cm"


#============================================
@pytest.mark.parametrize("key, status", [("P", "warning"), ("M", "warning"), ("G", "warning")])
def test_catalog_statuses(key: str, status: str) -> None:
	"""
	Every catalog preset reserves between 80% and 100% of the limit.
	"""
	preset = estamparia_layout.presets.lookup(key)
	report = estamparia_layout.usage.classify(estamparia_layout.layout.reservation_cm(preset), FABRIC)
	assert report.status == status


#============================================
def test_fill_percentage_clamped() -> None:
	"""
	The displayed fill never leaves 0..100 while the raw value does.
	"""
	fabric = estamparia_layout.config.FabricSpec(fixed_width_cm=156.0, max_length_cm=100.0)
	over = estamparia_layout.usage.classify(150.0, fabric)
	assert over.percentage == pytest.approx(150.0)
	assert over.fill_percentage == 100.0
	assert over.status == "danger"

	empty = estamparia_layout.usage.classify(0.0, fabric)
	assert empty.percentage == 0.0
	assert empty.fill_percentage == 0.0
	assert empty.status == "normal"
	assert empty.summary_text() == "0.0 / 100 cm"


#============================================
def test_classify_is_pure() -> None:
	"""
	Repeated calls with the same inputs give equal reports.
	"""
	first = estamparia_layout.usage.classify(123.4, FABRIC)
	second = estamparia_layout.usage.classify(123.4, FABRIC)
	assert first == second


#============================================
def test_invalid_limit() -> None:
	"""
	A non-positive production limit is rejected.
	"""
	fabric = estamparia_layout.config.FabricSpec(fixed_width_cm=156.0, max_length_cm=0.0)
	with pytest.raises(ValueError):
		estamparia_layout.usage.classify(10.0, fabric)

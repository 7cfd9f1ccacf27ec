"""
Garment-size preset catalog.
"""

# local repo modules
import estamparia_layout as esl
import estamparia_layout.config
import estamparia_layout.errors


Preset = esl.config.Preset

PRESETS = {
	"P": Preset(key="P", size_cm=19.5, qty_per_row=8, rows_count=10),
	"M": Preset(key="M", size_cm=24.5, qty_per_row=6, rows_count=8),
	"G": Preset(key="G", size_cm=31.0, qty_per_row=5, rows_count=6),
}


#============================================
def preset_keys() -> list[str]:
	"""
	List the preset keys in catalog order.

	Returns:
		Preset keys.
	"""
	return list(PRESETS.keys())


#============================================
def lookup(key: str) -> Preset:
	"""
	Look up a preset by size key.

	Args:
		key: Size key such as "M".

	Returns:
		Matching Preset.
	"""
	preset = PRESETS.get(key)
	if preset is None:
		valid = ", ".join(preset_keys())
		raise esl.errors.UnknownPresetError(f"Unknown preset {key!r} (expected one of: {valid})")
	return preset

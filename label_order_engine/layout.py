"""
Text layout rules for the six variable slots.
"""

# Standard Library
import dataclasses

# local repo modules
import label_order_engine as loe
import label_order_engine.config
import label_order_engine.geometry
import label_order_engine.order


LabelSpec = loe.order.LabelSpec
Geometry = loe.geometry.Geometry

VARIABLE_SLOTS = loe.config.VARIABLE_SLOTS
TOP_SLOTS = loe.config.TOP_SLOTS
SUPPRESSED_SLOTS = loe.config.SUPPRESSED_SLOTS
SLOT_ANCHORS = loe.config.SLOT_ANCHORS
FONT_METRIC_FACTOR = loe.config.FONT_METRIC_FACTOR

MARKUP_ESCAPES = (
	("&", "&amp;"),
	("<", "&lt;"),
	(">", "&gt;"),
	('"', "&quot;"),
	("'", "&#39;"),
)


@dataclasses.dataclass(frozen=True)
class TextRun:
	slot: str
	text: str
	x: float
	y: float
	font_size: float
	anchor: str
	font_family: str
	pdf_font: str
	fill: str


#============================================
def escape_markup(value: str) -> str:
	"""
	Escape XML-significant characters for embedding in markup.

	Args:
		value: Raw text.

	Returns:
		Escaped text.
	"""
	text = value
	for char, entity in MARKUP_ESCAPES:
		text = text.replace(char, entity)
	return text


#============================================
def is_suppressed(size_id: str, slot: str) -> bool:
	"""
	Check whether a size variant has no room for a slot.
	"""
	return slot in SUPPRESSED_SLOTS.get(size_id, set())


#============================================
def default_font_size(slot: str) -> float:
	if slot in TOP_SLOTS:
		return loe.config.DEFAULT_TOP_FONT_SIZE
	return loe.config.DEFAULT_SIDE_FONT_SIZE


#============================================
def design_font_size(spec: LabelSpec, slot: str) -> float:
	"""
	Font size in design units: explicit override or slot default.

	Args:
		spec: Label specification.
		slot: Slot name.

	Returns:
		Unscaled font size.
	"""
	explicit = spec.font_sizes.get(slot)
	if explicit is not None:
		return explicit
	return default_font_size(slot)


#============================================
def layout(spec: LabelSpec, geometry: Geometry) -> list[TextRun]:
	"""
	Lay out the text runs of a label in slot order.

	Args:
		spec: Label specification.
		geometry: Resolved geometry for the same spec.

	Returns:
		TextRuns for every present, non-suppressed slot.
	"""
	runs: list[TextRun] = []
	for slot in VARIABLE_SLOTS:
		text = spec.text(slot)
		if not text:
			continue
		if is_suppressed(geometry.size_id, slot):
			continue
		x, y = geometry.positions[slot]
		runs.append(
			TextRun(
				slot=slot,
				text=text,
				x=x,
				y=y,
				font_size=design_font_size(spec, slot) * geometry.scale * FONT_METRIC_FACTOR,
				anchor=SLOT_ANCHORS[slot],
				font_family=spec.font.family,
				pdf_font=spec.font.pdf_font,
				fill=spec.color.text,
			)
		)
	return runs

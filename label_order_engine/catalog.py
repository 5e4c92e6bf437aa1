"""
Label stock reference data: sizes, color pairings and fonts.
"""

# Standard Library
import dataclasses

# local repo modules
import label_order_engine as loe
import label_order_engine.config


DEFAULT_SIZE_ID = loe.config.DEFAULT_SIZE_ID
DEFAULT_COLOR_ID = loe.config.DEFAULT_COLOR_ID
DEFAULT_FONT_NAME = loe.config.DEFAULT_FONT_NAME
DEFAULT_FONT_FAMILY = loe.config.DEFAULT_FONT_FAMILY
DEFAULT_PDF_FONT = loe.config.DEFAULT_PDF_FONT


@dataclasses.dataclass(frozen=True)
class LabelSize:
	id: str
	width: float
	height: float
	name: str
	dimensions: str


@dataclasses.dataclass(frozen=True)
class LabelColor:
	id: str
	name: str
	background: str
	text: str


@dataclasses.dataclass(frozen=True)
class Font:
	name: str
	family: str
	pdf_font: str = DEFAULT_PDF_FONT


SIZES = {
	size.id: size
	for size in (
		LabelSize("22mm", 118.0, 134.0, "22MM", "22mm x 25mm"),
		LabelSize("30mm-short", 160.0, 140.0, "30MM Short", "30mm x 26mm"),
		LabelSize("30mm-standard", 160.0, 182.0, "30MM Standard", "30mm x 34mm"),
		LabelSize("40mm-standard", 214.0, 243.0, "40MM Standard", "40mm x 45mm"),
	)
}

COLORS = {
	color.id: color
	for color in (
		LabelColor("green-white", "Green/White", "#1E7B34", "#FFFFFF"),
		LabelColor("white-black", "White/Black", "#FFFFFF", "#000000"),
		LabelColor("black-white", "Black/White", "#000000", "#FFFFFF"),
		LabelColor("red-white", "Red/White", "#C62828", "#FFFFFF"),
		LabelColor("blue-white", "Blue/White", "#1565C0", "#FFFFFF"),
		LabelColor("navy-white", "Navy/White", "#1A237E", "#FFFFFF"),
		LabelColor("yellow-black", "Yellow/Black", "#FDD835", "#000000"),
		LabelColor("orange-white", "Orange/White", "#EF6C00", "#FFFFFF"),
		LabelColor("purple-white", "Purple/White", "#6A1B9A", "#FFFFFF"),
		LabelColor("pink-white", "Pink/White", "#D81B60", "#FFFFFF"),
	)
}

FONTS = {
	font.name: font
	for font in (
		Font(DEFAULT_FONT_NAME, DEFAULT_FONT_FAMILY, "Helvetica"),
		Font("Arial", "Arial, sans-serif", "Helvetica"),
		Font("Helvetica", "Helvetica, sans-serif", "Helvetica"),
		Font("Verdana", "Verdana, sans-serif", "Helvetica"),
		Font("Times New Roman", "'Times New Roman', serif", "Times-Roman"),
		Font("Georgia", "Georgia, serif", "Times-Roman"),
		Font("Courier New", "'Courier New', monospace", "Courier"),
	)
}

DEFAULT_SIZE = SIZES[DEFAULT_SIZE_ID]
DEFAULT_COLOR = COLORS[DEFAULT_COLOR_ID]
DEFAULT_FONT = FONTS[DEFAULT_FONT_NAME]


#============================================
def get_size(size_id: str | None) -> LabelSize:
	"""
	Look up a label size, falling back to the standard box.

	Args:
		size_id: Size identifier such as "22mm".

	Returns:
		LabelSize.
	"""
	if size_id is None:
		return DEFAULT_SIZE
	return SIZES.get(size_id.strip().lower(), DEFAULT_SIZE)


#============================================
def get_color(color_id: str | None) -> LabelColor:
	"""
	Look up a color pairing, falling back to green/white.

	Args:
		color_id: Color identifier such as "white-black".

	Returns:
		LabelColor.
	"""
	if color_id is None:
		return DEFAULT_COLOR
	return COLORS.get(color_id.strip().lower(), DEFAULT_COLOR)


#============================================
def get_font(name: str | None, family: str | None = None) -> Font:
	"""
	Look up a font by display name.

	Unknown names keep their display name and get a generic
	sans-serif family; the PDF backend falls back to Helvetica.

	Args:
		name: Font display name.
		family: Optional explicit CSS family.

	Returns:
		Font.
	"""
	if name is None or not name.strip():
		return DEFAULT_FONT
	name = name.strip()
	font = FONTS.get(name)
	if font is None:
		font = Font(name, f"{name}, sans-serif", DEFAULT_PDF_FONT)
	if family:
		font = dataclasses.replace(font, family=family)
	return font


#============================================
def is_high_contrast(color: LabelColor) -> bool:
	"""
	Check whether a color pairing needs a visible outline.
	"""
	return color.id == loe.config.HIGH_CONTRAST_COLOR_ID

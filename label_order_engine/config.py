"""
Shared configuration and constants.
"""

import dataclasses


# Scene geometry, in unscaled design units.
RENDER_SCALE = 1.5
FONT_METRIC_FACTOR = 0.7
SMALL_SIZE_ID = "22mm"
SHORT_SIZE_ID = "30mm-short"
CUTOUT_RADIUS_SMALL = 24.0
CUTOUT_RADIUS_DEFAULT = 36.0
CUTOUT_CENTER_X_RATIO = 0.5
CUTOUT_CENTER_Y_RATIO = 0.68
ROUNDED_BORDER_RADIUS = 8.0
NOTCH_SIZE = 10.0
OUTLINE_WIDTH = 1.0
CUTOUT_STROKE_WIDTH = 1.0

VAR1_Y = 20.0
VAR2_Y = 38.0
VAR3_Y = 54.0
VAR4_GAP_ABOVE_CUTOUT = 16.0
FLANK_RAISE = 28.0
FLANK_OFFSET_SMALL = 28.0
FLANK_OFFSET_DEFAULT = 50.0

VARIABLE_SLOTS = ("var1", "var2", "var3", "var4", "var5", "var6")
TOP_SLOTS = ("var1", "var2", "var3")
DEFAULT_TOP_FONT_SIZE = 18.0
DEFAULT_SIDE_FONT_SIZE = 10.0
SUPPRESSED_SLOTS = {
	SMALL_SIZE_ID: {"var3"},
	SHORT_SIZE_ID: {"var2", "var3"},
}
SLOT_ANCHORS = {
	"var1": "middle",
	"var2": "middle",
	"var3": "middle",
	"var4": "middle",
	"var5": "end",
	"var6": "start",
}

# Order defaults.
DEFAULT_SIZE_ID = "30mm-standard"
DEFAULT_COLOR_ID = "green-white"
DEFAULT_FONT_NAME = "Calibri (Default)"
DEFAULT_FONT_FAMILY = "Calibri, sans-serif"
DEFAULT_PDF_FONT = "Helvetica"
HIGH_CONTRAST_COLOR_ID = "white-black"
CUTOUT_FILL = "#FFFFFF"
OUTLINE_COLOR = "#000000"
CORNER_STYLES = ("squared", "rounded")
DEFAULT_CORNERS = "squared"
NOTCH_STYLES = ("none", "top", "bottom", "left", "right", "all")
DEFAULT_NOTCH = "none"
NOTCH_DIRECTIONS = ("top", "bottom", "left", "right")
DEFAULT_QUANTITY = 1

# Tabular export.
EXPORT_HEADER = (
	"Size",
	"Color",
	"VAR1",
	"VAR2",
	"VAR3",
	"VAR4",
	"VAR5",
	"VAR6",
	"VAR1 Size",
	"VAR2 Size",
	"VAR3 Size",
	"VAR4 Size",
	"VAR5 Size",
	"VAR6 Size",
	"Font",
)
EXPORT_COLUMN_WIDTHS = (15, 12, 15, 15, 15, 15, 15, 15, 10, 10, 10, 10, 10, 10, 18)
EXPORT_SHEET_TITLE = "Labels"

# Summary documents.
SUMMARY_TITLE = "Saved Labels Summary"
DATE_FORMAT = "%B %d, %Y %I:%M %p UTC"
PAGE_WIDTH = 612.0
PAGE_HEIGHT = 792.0
PAGE_MARGIN = 50.0
PAGE_CONTENT_LIMIT = 720.0
PDF_SCENE_SCALE = 0.5
BLOCK_SPACING = 20.0
INFO_PANEL_GAP = 24.0
INFO_LINE_HEIGHT = 14.0
TITLE_FONT = "Helvetica-Bold"
BODY_FONT = "Helvetica"
TITLE_FONT_SIZE = 18.0
BODY_FONT_SIZE = 10.0
PROGRESS_BAR_WIDTH = 20


@dataclasses.dataclass(frozen=True)
class DocumentConfig:
	page_width: float = PAGE_WIDTH
	page_height: float = PAGE_HEIGHT
	margin: float = PAGE_MARGIN
	content_limit: float = PAGE_CONTENT_LIMIT
	scene_scale: float = PDF_SCENE_SCALE
	block_spacing: float = BLOCK_SPACING
	info_gap: float = INFO_PANEL_GAP
	line_height: float = INFO_LINE_HEIGHT


@dataclasses.dataclass(frozen=True)
class ArtifactOptions:
	csv: bool = True
	xlsx: bool = True
	html: bool = True
	pdf: bool = True


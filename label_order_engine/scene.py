"""
Renderer-agnostic label scenes.

A scene is an ordered tuple of draw objects in a y-down coordinate system
with the origin at the label's top-left corner. Backends walk the objects
in order and dispatch on `kind`.
"""

# Standard Library
import dataclasses

# local repo modules
import label_order_engine as loe
import label_order_engine.catalog
import label_order_engine.config
import label_order_engine.export
import label_order_engine.geometry
import label_order_engine.layout
import label_order_engine.order


LabelSpec = loe.order.LabelSpec
LabelColor = loe.catalog.LabelColor
Geometry = loe.geometry.Geometry
TextRun = loe.layout.TextRun

CUTOUT_FILL = loe.config.CUTOUT_FILL
OUTLINE_COLOR = loe.config.OUTLINE_COLOR
VARIABLE_SLOTS = loe.config.VARIABLE_SLOTS


@dataclasses.dataclass(frozen=True)
class DrawObject:
	kind: str
	role: str
	x: float
	y: float
	width: float = 0.0
	height: float = 0.0
	radius: float = 0.0
	fill: str = ""
	stroke: str = ""
	stroke_width: float = 0.0
	text: str = ""
	font_size: float = 0.0
	anchor: str = "start"
	font_family: str = ""
	pdf_font: str = ""


@dataclasses.dataclass(frozen=True)
class Scene:
	width: float
	height: float
	objects: tuple[DrawObject, ...]

	def objects_by_role(self, role: str) -> list[DrawObject]:
		return [obj for obj in self.objects if obj.role == role]


@dataclasses.dataclass(frozen=True)
class LabelSummary:
	size_name: str
	size_dimensions: str
	color_name: str
	font_name: str
	corners: str
	notch: str
	quantity: int
	variables: tuple[str, ...] = ()
	font_sizes: tuple[str, ...] = ()

	def as_dict(self) -> dict:
		"""
		Serialize for the delivery summary; position overrides are left out.
		"""
		data = {
			"size": self.size_name,
			"dimensions": self.size_dimensions,
			"color": self.color_name,
			"font": self.font_name,
			"corners": self.corners,
			"notch": self.notch,
			"quantity": self.quantity,
		}
		for slot, text in zip(VARIABLE_SLOTS, self.variables):
			data[slot] = text
		for slot, size in zip(VARIABLE_SLOTS, self.font_sizes):
			data[f"{slot}Size"] = size
		return data


@dataclasses.dataclass(frozen=True)
class RenderedLabel:
	scene: Scene
	summary: LabelSummary


#============================================
def render(geometry: Geometry, text_runs: list[TextRun], color: LabelColor) -> Scene:
	"""
	Build the ordered draw objects for one label.

	Order: background, cutout circle, notch squares, then text runs.
	The cutout is an overlaid circle rather than a mask.

	Args:
		geometry: Resolved label geometry.
		text_runs: Text runs from the layout rules.
		color: Label color pairing.

	Returns:
		Scene.
	"""
	high_contrast = loe.catalog.is_high_contrast(color)
	scale = geometry.scale
	objects: list[DrawObject] = []

	background_stroke = ""
	background_stroke_width = 0.0
	if high_contrast:
		background_stroke = OUTLINE_COLOR
		background_stroke_width = loe.config.OUTLINE_WIDTH * scale
	objects.append(
		DrawObject(
			kind="rect",
			role="background",
			x=0.0,
			y=0.0,
			width=geometry.width,
			height=geometry.height,
			radius=geometry.border_radius,
			fill=color.background,
			stroke=background_stroke,
			stroke_width=background_stroke_width,
		)
	)

	cutout_stroke = color.background
	if high_contrast:
		cutout_stroke = OUTLINE_COLOR
	cutout = geometry.cutout
	objects.append(
		DrawObject(
			kind="circle",
			role="cutout",
			x=cutout.cx,
			y=cutout.cy,
			radius=cutout.r,
			fill=CUTOUT_FILL,
			stroke=cutout_stroke,
			stroke_width=loe.config.CUTOUT_STROKE_WIDTH * scale,
		)
	)

	for square in geometry.notches:
		objects.append(
			DrawObject(
				kind="rect",
				role="notch",
				x=square.x,
				y=square.y,
				width=square.size,
				height=square.size,
				fill=CUTOUT_FILL,
			)
		)

	for run in text_runs:
		objects.append(
			DrawObject(
				kind="text",
				role=run.slot,
				x=run.x,
				y=run.y,
				fill=run.fill,
				text=run.text,
				font_size=run.font_size,
				anchor=run.anchor,
				font_family=run.font_family,
				pdf_font=run.pdf_font,
			)
		)

	return Scene(width=geometry.width, height=geometry.height, objects=tuple(objects))


#============================================
def summarize(spec: LabelSpec) -> LabelSummary:
	"""
	Build the info-panel and delivery metadata for a label.

	Variable text and sizes match the export row cells.
	"""
	row = loe.export.build_row(spec)
	slot_count = len(VARIABLE_SLOTS)
	return LabelSummary(
		size_name=spec.size.name,
		size_dimensions=spec.size.dimensions,
		color_name=spec.color.name,
		font_name=spec.font.name,
		corners=spec.corners,
		notch=spec.notch,
		quantity=spec.quantity,
		variables=row[2:2 + slot_count],
		font_sizes=row[2 + slot_count:2 + 2 * slot_count],
	)


#============================================
def render_label(spec: LabelSpec) -> RenderedLabel:
	"""
	Run geometry, layout and rendering for one label.

	Args:
		spec: Label specification.

	Returns:
		RenderedLabel with the scene and its summary.
	"""
	geometry = loe.geometry.resolve(spec)
	runs = loe.layout.layout(spec, geometry)
	scene = render(geometry, runs, spec.color)
	return RenderedLabel(scene=scene, summary=summarize(spec))

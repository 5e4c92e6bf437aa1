"""
Paginated backend: letter-size PDF summary of every label.
"""

# Standard Library
import dataclasses
import io

# PIP3 modules
import reportlab.pdfgen.canvas

# local repo modules
import label_order_engine as loe
import label_order_engine.config
import label_order_engine.order
import label_order_engine.scene
import label_order_engine.svg_output


Order = loe.order.Order
Scene = loe.scene.Scene
DrawObject = loe.scene.DrawObject
RenderedLabel = loe.scene.RenderedLabel
DocumentConfig = loe.config.DocumentConfig

TITLE_FONT = loe.config.TITLE_FONT
BODY_FONT = loe.config.BODY_FONT
TITLE_FONT_SIZE = loe.config.TITLE_FONT_SIZE
BODY_FONT_SIZE = loe.config.BODY_FONT_SIZE


@dataclasses.dataclass(frozen=True)
class Placement:
	page: int
	index: int
	y: float


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	if not value or not value.startswith("#") or len(value) != 7:
		return (0.0, 0.0, 0.0)
	red = int(value[1:3], 16) / 255.0
	green = int(value[3:5], 16) / 255.0
	blue = int(value[5:7], 16) / 255.0
	return (red, green, blue)


#============================================
def paginate(
	block_heights: list[float],
	first_top: float,
	config: DocumentConfig,
) -> list[Placement]:
	"""
	Assign blocks to pages top to bottom.

	A new page begins when the next block would pass the content limit.
	A block taller than a whole page still gets a page of its own.

	Args:
		block_heights: Heights of the blocks in order.
		first_top: Starting y offset on the first page (below the header).
		config: Document configuration.

	Returns:
		One Placement per block, with y measured from the page top.
	"""
	placements: list[Placement] = []
	page = 0
	cursor = first_top
	page_has_blocks = False
	for index, height in enumerate(block_heights):
		if page_has_blocks and cursor + height > config.content_limit:
			page += 1
			cursor = config.margin
			page_has_blocks = False
		placements.append(Placement(page=page, index=index, y=cursor))
		cursor += height + config.block_spacing
		page_has_blocks = True
	return placements


#============================================
def info_panel_height(config: DocumentConfig, line_count: int) -> float:
	return config.line_height * line_count


#============================================
def header_height(order: Order, config: DocumentConfig) -> float:
	lines = loe.svg_output.header_lines(order)
	return TITLE_FONT_SIZE + config.line_height * (len(lines) + 1)


#============================================
def draw_scene(
	pdf: reportlab.pdfgen.canvas.Canvas,
	scene: Scene,
	origin_x: float,
	top_y: float,
	scale: float,
	page_height: float,
) -> None:
	"""
	Draw a scene onto the canvas at a page position.

	Args:
		pdf: ReportLab canvas.
		scene: Label scene.
		origin_x: Left edge in points.
		top_y: Top edge measured from the page top.
		scale: Scene to point scale.
		page_height: Page height in points.
	"""

	def transform_x(value: float) -> float:
		return origin_x + value * scale

	def transform_y(value: float) -> float:
		return page_height - (top_y + value * scale)

	for obj in scene.objects:
		fill = parse_hex_color(obj.fill)
		pdf.setFillColorRGB(fill[0], fill[1], fill[2])
		stroke = 0
		if obj.stroke:
			stroke = 1
			stroke_color = parse_hex_color(obj.stroke)
			pdf.setStrokeColorRGB(stroke_color[0], stroke_color[1], stroke_color[2])
			pdf.setLineWidth(obj.stroke_width * scale)
		if obj.kind == "rect":
			x = transform_x(obj.x)
			y = transform_y(obj.y + obj.height)
			width = obj.width * scale
			height = obj.height * scale
			if obj.radius > 0:
				pdf.roundRect(x, y, width, height, obj.radius * scale, stroke=stroke, fill=1)
			else:
				pdf.rect(x, y, width, height, stroke=stroke, fill=1)
			continue
		if obj.kind == "circle":
			pdf.circle(
				transform_x(obj.x),
				transform_y(obj.y),
				obj.radius * scale,
				stroke=stroke,
				fill=1,
			)
			continue
		if obj.kind == "text":
			x = transform_x(obj.x)
			y = transform_y(obj.y)
			pdf.setFont(obj.pdf_font or BODY_FONT, obj.font_size * scale)
			if obj.anchor == "middle":
				pdf.drawCentredString(x, y, obj.text)
			elif obj.anchor == "end":
				pdf.drawRightString(x, y, obj.text)
			else:
				pdf.drawString(x, y, obj.text)
			continue
		raise ValueError(f"Unknown draw object kind: {obj.kind}")


#============================================
def draw_lines(
	pdf: reportlab.pdfgen.canvas.Canvas,
	lines: list[str],
	x: float,
	top_y: float,
	config: DocumentConfig,
	bold_first: bool = False,
) -> None:
	"""
	Draw plain text lines downward from a top offset.
	"""
	pdf.setFillColorRGB(0.0, 0.0, 0.0)
	for index, line in enumerate(lines):
		font = BODY_FONT
		if bold_first and index == 0:
			font = TITLE_FONT
		pdf.setFont(font, BODY_FONT_SIZE)
		baseline = config.page_height - (top_y + config.line_height * (index + 1))
		pdf.drawString(x, baseline, line)


#============================================
def build_summary_pdf(
	order: Order,
	labels: list[RenderedLabel],
	total_units: int,
	config: DocumentConfig | None = None,
) -> bytes:
	"""
	Build the paginated PDF summary.

	Args:
		order: Parsed order.
		labels: Rendered labels in order.
		total_units: Total physical unit count.
		config: Optional document configuration.

	Returns:
		PDF bytes.
	"""
	if config is None:
		config = DocumentConfig()

	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(
		buffer,
		pagesize=(config.page_width, config.page_height),
		invariant=1,
	)
	pdf.setTitle(f"{loe.config.SUMMARY_TITLE} {order.ref_id}")

	pdf.setFillColorRGB(0.0, 0.0, 0.0)
	pdf.setFont(TITLE_FONT, TITLE_FONT_SIZE)
	pdf.drawString(config.margin, config.page_height - config.margin - TITLE_FONT_SIZE, loe.config.SUMMARY_TITLE)
	draw_lines(
		pdf,
		loe.svg_output.header_lines(order),
		config.margin,
		config.margin + TITLE_FONT_SIZE,
		config,
	)

	blocks: list[list[str]] = []
	heights: list[float] = []
	for index, rendered in enumerate(labels, start=1):
		lines = loe.svg_output.info_lines(index, rendered)
		blocks.append(lines)
		heights.append(
			max(
				rendered.scene.height * config.scene_scale,
				info_panel_height(config, len(lines)),
			)
		)
	total_lines = [f"Total Units: {total_units}"]
	heights.append(info_panel_height(config, len(total_lines)))

	first_top = config.margin + header_height(order, config)
	placements = paginate(heights, first_top, config)
	current_page = 0
	for placement in placements:
		while placement.page > current_page:
			pdf.showPage()
			current_page += 1
		if placement.index == len(labels):
			draw_lines(pdf, total_lines, config.margin, placement.y, config, bold_first=True)
			continue
		rendered = labels[placement.index]
		draw_scene(
			pdf,
			rendered.scene,
			config.margin,
			placement.y,
			config.scene_scale,
			config.page_height,
		)
		info_x = config.margin + rendered.scene.width * config.scene_scale + config.info_gap
		draw_lines(pdf, blocks[placement.index], info_x, placement.y, config, bold_first=True)

	pdf.showPage()
	pdf.save()
	return buffer.getvalue()

"""
Markup backend: standalone SVG per label and the HTML summary page.
"""

# PIP3 modules
import svgwrite

# local repo modules
import label_order_engine as loe
import label_order_engine.config
import label_order_engine.layout
import label_order_engine.order
import label_order_engine.scene


Order = loe.order.Order
Scene = loe.scene.Scene
DrawObject = loe.scene.DrawObject
RenderedLabel = loe.scene.RenderedLabel

escape_markup = loe.layout.escape_markup

HTML_STYLE = (
	"body{font-family:Arial,sans-serif;margin:24px;color:#222}"
	".label{display:flex;align-items:flex-start;gap:24px;margin-bottom:24px}"
	".info{font-size:14px;line-height:1.5}"
	".total{font-weight:bold;margin-top:16px}"
)


#============================================
def add_draw_object(drawing: svgwrite.Drawing, obj: DrawObject) -> None:
	"""
	Append one draw object to an SVG drawing.

	Args:
		drawing: svgwrite drawing.
		obj: Scene draw object.
	"""
	stroke_args = {}
	if obj.stroke:
		stroke_args = {"stroke": obj.stroke, "stroke_width": obj.stroke_width}
	if obj.kind == "rect":
		corner_args = {}
		if obj.radius > 0:
			corner_args = {"rx": obj.radius, "ry": obj.radius}
		drawing.add(
			drawing.rect(
				insert=(obj.x, obj.y),
				size=(obj.width, obj.height),
				fill=obj.fill,
				**corner_args,
				**stroke_args,
			)
		)
		return
	if obj.kind == "circle":
		drawing.add(
			drawing.circle(
				center=(obj.x, obj.y),
				r=obj.radius,
				fill=obj.fill,
				**stroke_args,
			)
		)
		return
	if obj.kind == "text":
		drawing.add(
			drawing.text(
				obj.text,
				insert=(obj.x, obj.y),
				fill=obj.fill,
				font_size=obj.font_size,
				font_family=obj.font_family,
				text_anchor=obj.anchor,
			)
		)
		return
	raise ValueError(f"Unknown draw object kind: {obj.kind}")


#============================================
def scene_to_svg(scene: Scene, element_id: str | None = None) -> str:
	"""
	Serialize a scene as an SVG element.

	Args:
		scene: Label scene.
		element_id: Optional id attribute for embedding several labels.

	Returns:
		SVG markup without an XML declaration.
	"""
	extra = {}
	if element_id:
		extra["id"] = element_id
	drawing = svgwrite.Drawing(
		size=(scene.width, scene.height),
		viewBox=f"0 0 {scene.width} {scene.height}",
		debug=False,
		**extra,
	)
	for obj in scene.objects:
		add_draw_object(drawing, obj)
	return drawing.tostring()


#============================================
def info_lines(index: int, rendered: RenderedLabel) -> list[str]:
	"""
	Build the info-panel lines shown beside a label.

	Args:
		index: One-based label number.
		rendered: Rendered label.

	Returns:
		Plain text lines.
	"""
	summary = rendered.summary
	return [
		f"Label {index}",
		f"Size: {summary.size_name} ({summary.size_dimensions})",
		f"Color: {summary.color_name}",
		f"Font: {summary.font_name}",
		f"Corners: {summary.corners}",
		f"Notch: {summary.notch}",
		f"Quantity: {summary.quantity}",
	]


#============================================
def header_lines(order: Order) -> list[str]:
	lines = [
		f"Reference ID: {order.ref_id}",
		f"Date: {loe.order.format_date(order.submitted_at)}",
	]
	contact = loe.order.contact_line(order)
	if contact:
		lines.append(contact)
	return lines


#============================================
def build_summary_html(order: Order, labels: list[RenderedLabel], total_units: int) -> str:
	"""
	Build the HTML summary page with one inline SVG per label.

	Args:
		order: Parsed order.
		labels: Rendered labels in order.
		total_units: Total physical unit count.

	Returns:
		HTML document text.
	"""
	title = escape_markup(loe.config.SUMMARY_TITLE)
	parts = [
		"<!DOCTYPE html>",
		"<html>",
		"<head>",
		'<meta charset="utf-8">',
		f"<title>{title}</title>",
		f"<style>{HTML_STYLE}</style>",
		"</head>",
		"<body>",
		f"<h1>{title}</h1>",
	]
	for line in header_lines(order):
		parts.append(f"<p>{escape_markup(line)}</p>")

	for index, rendered in enumerate(labels, start=1):
		parts.append('<div class="label">')
		parts.append(scene_to_svg(rendered.scene, element_id=f"label-{index}"))
		parts.append('<div class="info">')
		lines = info_lines(index, rendered)
		parts.append(f"<strong>{escape_markup(lines[0])}</strong><br>")
		for line in lines[1:]:
			parts.append(f"{escape_markup(line)}<br>")
		parts.append("</div>")
		parts.append("</div>")

	parts.append(f'<p class="total">Total Units: {total_units}</p>')
	parts.append("</body>")
	parts.append("</html>")
	return "\n".join(parts)

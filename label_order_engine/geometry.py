"""
Label geometry: box, cutout, notches, corner radius and text anchors.

All values are computed in design units and scaled once at the end, so a
layout stays proportional whatever the render scale.
"""

# Standard Library
import dataclasses
import types

# local repo modules
import label_order_engine as loe
import label_order_engine.config
import label_order_engine.order


LabelSpec = loe.order.LabelSpec

RENDER_SCALE = loe.config.RENDER_SCALE
SMALL_SIZE_ID = loe.config.SMALL_SIZE_ID
NOTCH_SIZE = loe.config.NOTCH_SIZE
NOTCH_DIRECTIONS = loe.config.NOTCH_DIRECTIONS


@dataclasses.dataclass(frozen=True)
class Circle:
	cx: float
	cy: float
	r: float


@dataclasses.dataclass(frozen=True)
class Square:
	direction: str
	x: float
	y: float
	size: float


@dataclasses.dataclass(frozen=True)
class Geometry:
	size_id: str
	scale: float
	width: float
	height: float
	border_radius: float
	cutout: Circle
	notches: tuple[Square, ...]
	positions: types.MappingProxyType


#============================================
def cutout_radius(size_id: str) -> float:
	"""
	Cutout radius in design units for a size.
	"""
	if size_id == SMALL_SIZE_ID:
		return loe.config.CUTOUT_RADIUS_SMALL
	return loe.config.CUTOUT_RADIUS_DEFAULT


#============================================
def flank_offset(size_id: str) -> float:
	"""
	Horizontal distance of var5/var6 from the label center.
	"""
	if size_id == SMALL_SIZE_ID:
		return loe.config.FLANK_OFFSET_SMALL
	return loe.config.FLANK_OFFSET_DEFAULT


#============================================
def default_positions(size_id: str, width: float, cutout: Circle) -> dict[str, tuple[float, float]]:
	"""
	Compute default text anchors for all six slots.

	Args:
		size_id: Size identifier.
		width: Label width in design units.
		cutout: Cutout circle in design units.

	Returns:
		Mapping of slot name to (x, y) in design units.
	"""
	center_x = width / 2.0
	offset = flank_offset(size_id)
	flank_y = cutout.cy - loe.config.FLANK_RAISE
	return {
		"var1": (center_x, loe.config.VAR1_Y),
		"var2": (center_x, loe.config.VAR2_Y),
		"var3": (center_x, loe.config.VAR3_Y),
		"var4": (center_x, cutout.cy - cutout.r - loe.config.VAR4_GAP_ABOVE_CUTOUT),
		"var5": (center_x - offset, flank_y),
		"var6": (center_x + offset, flank_y),
	}


#============================================
def notch_squares(notch: str, cutout: Circle) -> list[Square]:
	"""
	Build notch squares centered on the cutout tangent points.

	Args:
		notch: Notch style ("none", "top", ..., "all").
		cutout: Cutout circle in design units.

	Returns:
		Squares in top, bottom, left, right order.
	"""
	if notch == "all":
		directions = NOTCH_DIRECTIONS
	elif notch in NOTCH_DIRECTIONS:
		directions = (notch,)
	else:
		return []

	tangents = {
		"top": (cutout.cx, cutout.cy - cutout.r),
		"bottom": (cutout.cx, cutout.cy + cutout.r),
		"left": (cutout.cx - cutout.r, cutout.cy),
		"right": (cutout.cx + cutout.r, cutout.cy),
	}
	half = NOTCH_SIZE / 2.0
	squares: list[Square] = []
	for direction in directions:
		point_x, point_y = tangents[direction]
		squares.append(Square(direction, point_x - half, point_y - half, NOTCH_SIZE))
	return squares


#============================================
def resolve(spec: LabelSpec, scale: float = RENDER_SCALE) -> Geometry:
	"""
	Resolve the absolute geometry of one label.

	Args:
		spec: Label specification.
		scale: Render scale applied to every linear dimension.

	Returns:
		Geometry in scaled units.
	"""
	size = spec.size
	width = size.width
	height = size.height
	radius = cutout_radius(size.id)
	cutout = Circle(
		width * loe.config.CUTOUT_CENTER_X_RATIO,
		height * loe.config.CUTOUT_CENTER_Y_RATIO,
		radius,
	)
	border_radius = 0.0
	if spec.corners == "rounded":
		border_radius = loe.config.ROUNDED_BORDER_RADIUS

	positions = default_positions(size.id, width, cutout)
	for slot, override in spec.positions.items():
		positions[slot] = (override.x, override.y)

	return Geometry(
		size_id=size.id,
		scale=scale,
		width=width * scale,
		height=height * scale,
		border_radius=border_radius * scale,
		cutout=Circle(cutout.cx * scale, cutout.cy * scale, cutout.r * scale),
		notches=tuple(
			Square(square.direction, square.x * scale, square.y * scale, square.size * scale)
			for square in notch_squares(spec.notch, cutout)
		),
		positions=types.MappingProxyType(
			{slot: (x * scale, y * scale) for slot, (x, y) in positions.items()}
		),
	)

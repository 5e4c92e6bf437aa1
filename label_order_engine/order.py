"""
Order payload model and parsing.
"""

# Standard Library
import dataclasses
import datetime
import math
import types

# PIP3 modules
import openpyxl.cell.cell

# local repo modules
import label_order_engine as loe
import label_order_engine.catalog
import label_order_engine.config


LabelSize = loe.catalog.LabelSize
LabelColor = loe.catalog.LabelColor
Font = loe.catalog.Font

VARIABLE_SLOTS = loe.config.VARIABLE_SLOTS
CORNER_STYLES = loe.config.CORNER_STYLES
DEFAULT_CORNERS = loe.config.DEFAULT_CORNERS
NOTCH_STYLES = loe.config.NOTCH_STYLES
DEFAULT_NOTCH = loe.config.DEFAULT_NOTCH
DEFAULT_QUANTITY = loe.config.DEFAULT_QUANTITY

# control characters that XML documents (XLSX, SVG) cannot hold
ILLEGAL_CHARACTERS_RE = openpyxl.cell.cell.ILLEGAL_CHARACTERS_RE


class ValidationError(ValueError):
	"""
	Raised when an order payload is missing required fields.
	"""


@dataclasses.dataclass(frozen=True)
class PositionOverride:
	x: float
	y: float


@dataclasses.dataclass(frozen=True)
class LabelSpec:
	size: LabelSize = loe.catalog.DEFAULT_SIZE
	color: LabelColor = loe.catalog.DEFAULT_COLOR
	font: Font = loe.catalog.DEFAULT_FONT
	corners: str = DEFAULT_CORNERS
	notch: str = DEFAULT_NOTCH
	variables: types.MappingProxyType = dataclasses.field(default_factory=lambda: types.MappingProxyType({}))
	font_sizes: types.MappingProxyType = dataclasses.field(default_factory=lambda: types.MappingProxyType({}))
	positions: types.MappingProxyType = dataclasses.field(default_factory=lambda: types.MappingProxyType({}))
	quantity: int = DEFAULT_QUANTITY

	def text(self, slot: str) -> str:
		"""
		Return the text for a slot, or an empty string when absent.
		"""
		return self.variables.get(slot, "")

	def has_text(self, slot: str) -> bool:
		return bool(self.text(slot))


@dataclasses.dataclass(frozen=True)
class Order:
	ref_id: str
	labels: tuple[LabelSpec, ...]
	contact_name: str = ""
	contact_email: str = ""
	submitted_at: datetime.datetime | None = None


#============================================
def _lookup_id(value, key: str) -> str | None:
	"""
	Read a reference id from either a plain string or an object.

	Args:
		value: Raw payload value.
		key: Key holding the id when value is a dict.

	Returns:
		Identifier string or None.
	"""
	if isinstance(value, dict):
		value = value.get(key)
	if value is None:
		return None
	text = str(value).strip()
	if not text:
		return None
	return text


#============================================
def parse_number(value) -> float | None:
	"""
	Parse a numeric payload value.

	Args:
		value: Raw payload value (number or numeric string).

	Returns:
		Float value, or None when absent, not numeric, or not finite.
	"""
	if value is None or isinstance(value, bool):
		return None
	if isinstance(value, (int, float)):
		number = float(value)
	else:
		text = str(value).strip()
		if not text:
			return None
		try:
			number = float(text)
		except ValueError:
			return None
	if not math.isfinite(number):
		return None
	return number


#============================================
def clean_text(value) -> str:
	"""
	Convert a payload value to text without XML-illegal control characters.
	"""
	if value is None:
		return ""
	return ILLEGAL_CHARACTERS_RE.sub("", str(value))


#============================================
def parse_quantity(value) -> int:
	"""
	Parse a label quantity, clamping to at least one.

	Args:
		value: Raw payload value.

	Returns:
		Quantity >= 1.
	"""
	number = parse_number(value)
	if number is None:
		return DEFAULT_QUANTITY
	quantity = int(number)
	if quantity < 1:
		return DEFAULT_QUANTITY
	return quantity


#============================================
def parse_positions(raw) -> dict[str, PositionOverride]:
	"""
	Parse per-variable position overrides.

	Only overrides with both coordinates numeric are kept.

	Args:
		raw: Mapping of slot name to {"x": ..., "y": ...}.

	Returns:
		Mapping of slot name to PositionOverride.
	"""
	positions: dict[str, PositionOverride] = {}
	if not isinstance(raw, dict):
		return positions
	for slot in VARIABLE_SLOTS:
		entry = raw.get(slot)
		if not isinstance(entry, dict):
			continue
		x_value = parse_number(entry.get("x"))
		y_value = parse_number(entry.get("y"))
		if x_value is None or y_value is None:
			continue
		positions[slot] = PositionOverride(x_value, y_value)
	return positions


#============================================
def parse_label(raw: dict) -> LabelSpec:
	"""
	Parse one label entry of an order payload.

	Missing or unknown values fall back to their documented defaults.

	Args:
		raw: Label dictionary from the payload.

	Returns:
		LabelSpec.
	"""
	if not isinstance(raw, dict):
		raw = {}

	size = loe.catalog.get_size(_lookup_id(raw.get("size"), "id"))
	color = loe.catalog.get_color(_lookup_id(raw.get("color"), "id"))
	font_value = raw.get("font")
	font_family = None
	if isinstance(font_value, dict):
		font_family = _lookup_id(font_value, "family")
	font = loe.catalog.get_font(_lookup_id(font_value, "name"), font_family)

	corners = str(raw.get("corners") or DEFAULT_CORNERS).strip().lower()
	if corners not in CORNER_STYLES:
		corners = DEFAULT_CORNERS
	notch = str(raw.get("notch") or DEFAULT_NOTCH).strip().lower()
	if notch not in NOTCH_STYLES:
		notch = DEFAULT_NOTCH

	variables: dict[str, str] = {}
	font_sizes: dict[str, float] = {}
	for slot in VARIABLE_SLOTS:
		text = clean_text(raw.get(slot))
		if not text:
			continue
		variables[slot] = text
		size_value = parse_number(raw.get(f"{slot}Size"))
		if size_value is not None and size_value > 0:
			font_sizes[slot] = size_value

	positions = parse_positions(raw.get("positions"))
	positions = {slot: pos for slot, pos in positions.items() if slot in variables}

	return LabelSpec(
		size=size,
		color=color,
		font=font,
		corners=corners,
		notch=notch,
		variables=types.MappingProxyType(variables),
		font_sizes=types.MappingProxyType(font_sizes),
		positions=types.MappingProxyType(positions),
		quantity=parse_quantity(raw.get("quantity")),
	)


#============================================
def parse_order(payload, submitted_at: datetime.datetime | None = None) -> Order:
	"""
	Validate and parse an order payload.

	Args:
		payload: Decoded JSON object.
		submitted_at: Submission time; defaults to now in UTC.

	Returns:
		Order.

	Raises:
		ValidationError: When refId is missing or labels is empty.
	"""
	if not isinstance(payload, dict):
		raise ValidationError("Missing required fields: refId and labels")
	ref_id = clean_text(payload.get("refId")).strip()
	labels = payload.get("labels")
	if not ref_id or not isinstance(labels, list) or not labels:
		raise ValidationError("Missing required fields: refId and labels")

	if submitted_at is None:
		submitted_at = datetime.datetime.now(datetime.timezone.utc)

	return Order(
		ref_id=ref_id,
		labels=tuple(parse_label(entry) for entry in labels),
		contact_name=clean_text(payload.get("contactName")).strip(),
		contact_email=clean_text(payload.get("contactEmail")).strip(),
		submitted_at=submitted_at,
	)


#============================================
def format_date(moment: datetime.datetime | None) -> str:
	"""
	Format a submission timestamp for document headers.
	"""
	if moment is None:
		return ""
	if moment.tzinfo is not None:
		moment = moment.astimezone(datetime.timezone.utc)
	return moment.strftime(loe.config.DATE_FORMAT)


#============================================
def contact_line(order: Order) -> str:
	"""
	Build the "Contact: name (email)" header line.

	Args:
		order: Parsed order.

	Returns:
		Contact line, or an empty string when no contact was given.
	"""
	if order.contact_name and order.contact_email:
		return f"Contact: {order.contact_name} ({order.contact_email})"
	if order.contact_name or order.contact_email:
		return f"Contact: {order.contact_name or order.contact_email}"
	return ""

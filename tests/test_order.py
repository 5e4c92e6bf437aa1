import datetime

import pytest

import label_order_engine.order

order = label_order_engine.order


#============================================
@pytest.mark.parametrize(
	"payload",
	[
		None,
		[],
		{"labels": [{"var1": "x"}]},
		{"refId": "   ", "labels": [{"var1": "x"}]},
		{"refId": "R1"},
		{"refId": "R1", "labels": []},
		{"refId": "R1", "labels": "not a list"},
	],
)
def test_missing_required_fields(payload) -> None:
	"""
	Missing refId or an empty label list fails validation.
	"""
	with pytest.raises(order.ValidationError):
		order.parse_order(payload)


#============================================
def test_parse_defaults() -> None:
	"""
	A bare label resolves every documented default.
	"""
	spec = order.parse_label({})
	assert spec.size.id == "30mm-standard"
	assert spec.color.id == "green-white"
	assert spec.font.name == "Calibri (Default)"
	assert spec.font.family == "Calibri, sans-serif"
	assert spec.corners == "squared"
	assert spec.notch == "none"
	assert spec.quantity == 1
	assert spec.variables == {}


#============================================
def test_object_references_and_unknown_font() -> None:
	"""
	Sizes and colors may arrive as objects; unknown fonts keep their name.
	"""
	spec = order.parse_label(
		{
			"size": {"id": "22mm", "name": "22MM"},
			"color": {"id": "black-white"},
			"font": {"name": "Futura", "family": "Futura, sans-serif"},
		}
	)
	assert spec.size.id == "22mm"
	assert spec.color.name == "Black/White"
	assert spec.font.name == "Futura"
	assert spec.font.family == "Futura, sans-serif"
	assert spec.font.pdf_font == "Helvetica"


#============================================
@pytest.mark.parametrize(
	"raw, expected",
	[
		(None, 1),
		(0, 1),
		(-4, 1),
		("3", 3),
		(2.9, 2),
		("abc", 1),
		(float("inf"), 1),
		(True, 1),
		(12, 12),
	],
)
def test_quantity_clamps_to_one(raw, expected: int) -> None:
	"""
	Quantities are integers of at least one.
	"""
	assert order.parse_quantity(raw) == expected


#============================================
def test_invalid_styles_fall_back() -> None:
	"""
	Unknown corner and notch values use the defaults.
	"""
	spec = order.parse_label({"corners": "wavy", "notch": "diagonal"})
	assert spec.corners == "squared"
	assert spec.notch == "none"
	spec = order.parse_label({"corners": "ROUNDED", "notch": "All"})
	assert spec.corners == "rounded"
	assert spec.notch == "all"


#============================================
def test_sizes_and_positions_require_text() -> None:
	"""
	Size and position overrides of absent variables are dropped.
	"""
	spec = order.parse_label(
		{
			"var1": "x",
			"var1Size": "bogus",
			"var2Size": 30,
			"positions": {"var1": {"x": 1, "y": 2}, "var2": {"x": 3, "y": 4}},
		}
	)
	assert spec.font_sizes == {}
	assert list(spec.positions) == ["var1"]
	assert spec.positions["var1"] == order.PositionOverride(1.0, 2.0)


#============================================
def test_numeric_variable_values_become_text() -> None:
	"""
	Non-string variable values are exported as text.
	"""
	spec = order.parse_label({"var1": 42})
	assert spec.text("var1") == "42"


#============================================
def test_header_helpers() -> None:
	"""
	Contact line and date formatting for document headers.
	"""
	moment = datetime.datetime(2024, 3, 5, 14, 30, tzinfo=datetime.timezone.utc)
	parsed = order.parse_order(
		{"refId": "R1", "contactName": "Jo", "contactEmail": "jo@x.io", "labels": [{}]},
		moment,
	)
	assert order.contact_line(parsed) == "Contact: Jo (jo@x.io)"
	assert order.format_date(parsed.submitted_at) == "March 05, 2024 02:30 PM UTC"
	anonymous = order.parse_order({"refId": "R2", "labels": [{}]}, moment)
	assert order.contact_line(anonymous) == ""
	email_only = order.parse_order({"refId": "R3", "contactEmail": "a@b.c", "labels": [{}]}, moment)
	assert order.contact_line(email_only) == "Contact: a@b.c"


#============================================
@pytest.mark.parametrize("raw", ["inf", "-inf", "nan", float("inf"), float("nan")])
def test_non_finite_numbers_are_ignored(raw) -> None:
	"""
	Non-finite sizes and coordinates fall back to the defaults.
	"""
	assert order.parse_number(raw) is None
	spec = order.parse_label(
		{"var1": "A", "var1Size": raw, "positions": {"var1": {"x": raw, "y": 3}}}
	)
	assert spec.font_sizes == {}
	assert spec.positions == {}


#============================================
def test_control_characters_are_stripped() -> None:
	"""
	XML-illegal control characters are removed from text fields.
	"""
	parsed = order.parse_order(
		{"refId": "R\x001", "contactName": "J\x0bo", "labels": [{"var1": "A\x07B", "var2": "\x1b"}]}
	)
	assert parsed.ref_id == "R1"
	assert parsed.contact_name == "Jo"
	spec = parsed.labels[0]
	assert spec.text("var1") == "AB"
	assert not spec.has_text("var2")
	assert order.clean_text("tab\tand\nnewline") == "tab\tand\nnewline"


#============================================
def test_parsed_label_maps_are_read_only() -> None:
	"""
	Variables, sizes and positions cannot be changed after parsing.
	"""
	spec = order.parse_label({"var1": "A", "var1Size": 20, "positions": {"var1": {"x": 1, "y": 2}}})
	with pytest.raises(TypeError):
		spec.variables["var2"] = "B"
	with pytest.raises(TypeError):
		spec.font_sizes["var1"] = 30
	with pytest.raises(TypeError):
		spec.positions["var1"] = order.PositionOverride(0, 0)

"""
Row expansion and tabular export (CSV and XLSX).
"""

# Standard Library
import csv
import io

# PIP3 modules
import openpyxl
import openpyxl.styles
import openpyxl.utils

# local repo modules
import label_order_engine as loe
import label_order_engine.config
import label_order_engine.layout
import label_order_engine.order


LabelSpec = loe.order.LabelSpec
Order = loe.order.Order

VARIABLE_SLOTS = loe.config.VARIABLE_SLOTS
EXPORT_HEADER = loe.config.EXPORT_HEADER
EXPORT_COLUMN_WIDTHS = loe.config.EXPORT_COLUMN_WIDTHS

ExportRow = tuple[str, ...]


#============================================
def format_number(value: float) -> str:
	"""
	Format a font size without a trailing ".0".

	Args:
		value: Numeric value.

	Returns:
		String such as "18" or "14.5".
	"""
	if float(value).is_integer():
		return str(int(value))
	return str(value)


#============================================
def build_row(spec: LabelSpec) -> ExportRow:
	"""
	Build the 15-cell export row for one label.

	Args:
		spec: Label specification.

	Returns:
		Row of size name, color name, six values, six sizes, font name.
	"""
	values = [spec.text(slot) for slot in VARIABLE_SLOTS]
	sizes = []
	for slot in VARIABLE_SLOTS:
		if not spec.has_text(slot):
			sizes.append("")
			continue
		sizes.append(format_number(loe.layout.design_font_size(spec, slot)))
	return (spec.size.name, spec.color.name, *values, *sizes, spec.font.name)


#============================================
def expand(labels) -> tuple[list[ExportRow], int]:
	"""
	Expand labels into one row per physical unit.

	Args:
		labels: LabelSpecs in order.

	Returns:
		Tuple of (rows, total unit count).
	"""
	rows: list[ExportRow] = []
	total = 0
	for spec in labels:
		row = build_row(spec)
		for _ in range(spec.quantity):
			rows.append(row)
		total += spec.quantity
	return (rows, total)


#============================================
def reference_line(order: Order) -> str:
	return f"Reference ID: {order.ref_id}"


#============================================
def build_csv(order: Order, rows: list[ExportRow]) -> str:
	"""
	Serialize rows as CSV with every cell quoted.

	Args:
		order: Parsed order.
		rows: Expanded export rows.

	Returns:
		CSV text joined with newlines.
	"""
	buffer = io.StringIO()
	writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
	writer.writerow([reference_line(order)])
	writer.writerow(EXPORT_HEADER)
	writer.writerows(rows)
	text = buffer.getvalue()
	if text.endswith("\n"):
		text = text[:-1]
	return text


#============================================
def append_text_row(sheet, values) -> None:
	"""
	Append a row whose cells are stored as literal strings.

	openpyxl treats text starting with "=" as a formula unless the cell
	is typed as a string.

	Args:
		sheet: Worksheet to append to.
		values: Cell text values.
	"""
	sheet.append(list(values))
	for cell in sheet[sheet.max_row]:
		if cell.value is not None:
			cell.data_type = "s"


#============================================
def build_xlsx(order: Order, rows: list[ExportRow]) -> bytes:
	"""
	Build an XLSX workbook with the same sections as the CSV.

	Args:
		order: Parsed order.
		rows: Expanded export rows.

	Returns:
		Workbook bytes.
	"""
	workbook = openpyxl.Workbook()
	sheet = workbook.active
	sheet.title = loe.config.EXPORT_SHEET_TITLE
	append_text_row(sheet, [reference_line(order)])
	sheet.append(list(EXPORT_HEADER))
	bold = openpyxl.styles.Font(bold=True)
	for cell in sheet[2]:
		cell.font = bold
	for row in rows:
		append_text_row(sheet, row)
	for index, width in enumerate(EXPORT_COLUMN_WIDTHS, start=1):
		letter = openpyxl.utils.get_column_letter(index)
		sheet.column_dimensions[letter].width = width

	buffer = io.BytesIO()
	workbook.save(buffer)
	return buffer.getvalue()

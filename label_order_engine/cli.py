"""
CLI entry point: order JSON file to export and summary artifacts.
"""

# Standard Library
import argparse
import json
import pathlib
import time

# local repo modules
import label_order_engine as loe
import label_order_engine.config
import label_order_engine.delivery
import label_order_engine.order
import label_order_engine.pipeline
import label_order_engine.svg_output


ArtifactOptions = loe.config.ArtifactOptions
PROGRESS_BAR_WIDTH = loe.config.PROGRESS_BAR_WIDTH


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def build_options(args: argparse.Namespace) -> ArtifactOptions:
	"""
	Build artifact options from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		ArtifactOptions.
	"""
	return ArtifactOptions(
		csv=True,
		xlsx=args.xlsx,
		html=args.html,
		pdf=args.pdf,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list; defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render a custom label order into export and summary files.")
	parser.add_argument("-i", "--input", dest="input_path", required=True, help="Order payload JSON path.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output-dir", dest="output_dir", required=True, help="Output directory.")
	output_group.add_argument("-s", "--svg-dir", dest="svg_dir", default=None, help="Also write one SVG per label here.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-x", "--xlsx", dest="xlsx", action="store_true", help="Write the XLSX export.")
	behavior_group.add_argument("-X", "--no-xlsx", dest="xlsx", action="store_false", help="Skip the XLSX export.")
	behavior_group.add_argument("-t", "--html", dest="html", action="store_true", help="Write the HTML summary.")
	behavior_group.add_argument("-T", "--no-html", dest="html", action="store_false", help="Skip the HTML summary.")
	behavior_group.add_argument("-p", "--pdf", dest="pdf", action="store_true", help="Write the PDF summary.")
	behavior_group.add_argument("-P", "--no-pdf", dest="pdf", action="store_false", help="Skip the PDF summary.")
	behavior_group.add_argument("-w", "--workers", dest="workers", type=int, default=1, help="Render threads.")

	parser.set_defaults(
		xlsx=True,
		html=True,
		pdf=True,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def write_label_svgs(result: "loe.pipeline.OrderResult", svg_dir: pathlib.Path) -> list[pathlib.Path]:
	"""
	Write one standalone SVG file per label.

	Args:
		result: Engine output.
		svg_dir: Output directory.

	Returns:
		Written paths in label order.
	"""
	svg_dir.mkdir(parents=True, exist_ok=True)
	stem = loe.delivery.sanitize_token(result.order.ref_id)
	paths: list[pathlib.Path] = []
	total = len(result.labels)
	for index, rendered in enumerate(result.labels, start=1):
		path = svg_dir / f"{stem}_label_{index:03d}.svg"
		path.write_text(loe.svg_output.scene_to_svg(rendered.scene), encoding="utf-8")
		paths.append(path)
		print_progress("SVG", index, total)
	if total > 0:
		print()
	return paths


#============================================
def run_pipeline(args: argparse.Namespace) -> "loe.pipeline.OrderResult":
	"""
	Run the full pipeline from order JSON to output files.

	Args:
		args: Parsed argparse namespace.

	Returns:
		OrderResult.
	"""
	print("Label order pipeline")
	print(f"Input: {args.input_path}")
	print(f"Output directory: {args.output_dir}")
	print(f"XLSX: {args.xlsx}")
	print(f"HTML: {args.html}")
	print(f"PDF: {args.pdf}")

	start_time = time.perf_counter()
	input_path = pathlib.Path(args.input_path)
	payload = json.loads(input_path.read_text(encoding="utf-8"))
	order = loe.order.parse_order(payload)
	print(f"Reference ID: {order.ref_id}")
	print(f"Labels: {len(order.labels)}")

	result = loe.pipeline.process_order(order, build_options(args), workers=args.workers)
	print(f"Rows: {len(result.rows)}")
	print(f"Total units: {result.total_units}")

	output_dir = pathlib.Path(args.output_dir)
	output_dir.mkdir(parents=True, exist_ok=True)
	for artifact in result.artifacts:
		path = output_dir / artifact.filename
		path.write_bytes(artifact.data)
		print(f"Written: {path}")

	if args.svg_dir:
		paths = write_label_svgs(result, pathlib.Path(args.svg_dir))
		print(f"SVG files written: {len(paths)}")

	total_time = time.perf_counter() - start_time
	print(f"Timing: total={total_time:.2f}s")
	return result


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)

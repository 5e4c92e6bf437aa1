import json

import label_order_engine.cli

cli = label_order_engine.cli


#============================================
def test_parse_args_defaults() -> None:
	"""
	All artifacts are enabled unless switched off.
	"""
	args = cli.parse_args(["-i", "order.json", "-o", "out"])
	assert args.xlsx and args.html and args.pdf
	assert args.svg_dir is None
	assert args.workers == 1
	args = cli.parse_args(["-i", "order.json", "-o", "out", "-X", "-P", "-w", "3"])
	options = cli.build_options(args)
	assert options.csv and options.html
	assert not options.xlsx
	assert not options.pdf
	assert args.workers == 3


#============================================
def test_run_pipeline_writes_files(tmp_path, mixed_payload: dict) -> None:
	"""
	The CLI writes every artifact plus one SVG per label.
	"""
	input_path = tmp_path / "order.json"
	input_path.write_text(json.dumps(mixed_payload), encoding="utf-8")
	out_dir = tmp_path / "out"
	svg_dir = tmp_path / "svg"
	args = cli.parse_args(["-i", str(input_path), "-o", str(out_dir), "-s", str(svg_dir), "-T"])
	result = cli.run_pipeline(args)
	assert result.total_units == 7
	assert sorted(path.name for path in out_dir.iterdir()) == [
		"ORD-2002.csv",
		"ORD-2002.pdf",
		"ORD-2002.xlsx",
	]
	assert sorted(path.name for path in svg_dir.iterdir()) == [
		"ORD-2002_label_001.svg",
		"ORD-2002_label_002.svg",
		"ORD-2002_label_003.svg",
	]
	csv_text = (out_dir / "ORD-2002.csv").read_text(encoding="utf-8")
	assert csv_text.startswith('"Reference ID: ORD-2002"\n')
	assert len(csv_text.split("\n")) == 9

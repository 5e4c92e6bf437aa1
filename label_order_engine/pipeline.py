"""
Order processing: run the engine, assemble artifacts, hand off delivery.
"""

# Standard Library
import concurrent.futures
import dataclasses
import datetime
import logging

# local repo modules
import label_order_engine as loe
import label_order_engine.config
import label_order_engine.delivery
import label_order_engine.export
import label_order_engine.order
import label_order_engine.pdf_output
import label_order_engine.scene
import label_order_engine.settings
import label_order_engine.svg_output


Order = loe.order.Order
RenderedLabel = loe.scene.RenderedLabel
Artifact = loe.delivery.Artifact
ArtifactOptions = loe.config.ArtifactOptions
Settings = loe.settings.Settings

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class OrderResult:
	order: Order
	rows: list[tuple[str, ...]]
	total_units: int
	labels: list[RenderedLabel]
	artifacts: list[Artifact]


#============================================
def render_labels(order: Order, workers: int = 1) -> list[RenderedLabel]:
	"""
	Render every label of an order, preserving label order.

	Args:
		order: Parsed order.
		workers: Thread count; 1 renders inline.

	Returns:
		RenderedLabels in label order.
	"""
	if workers <= 1 or len(order.labels) <= 1:
		return [loe.scene.render_label(spec) for spec in order.labels]
	with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
		return list(executor.map(loe.scene.render_label, order.labels))


#============================================
def build_artifacts(
	order: Order,
	rows: list[tuple[str, ...]],
	labels: list[RenderedLabel],
	total_units: int,
	options: ArtifactOptions,
) -> list[Artifact]:
	"""
	Serialize rows and scenes with the enabled output backends.

	Args:
		order: Parsed order.
		rows: Expanded export rows.
		labels: Rendered labels.
		total_units: Total physical unit count.
		options: Which artifacts to build.

	Returns:
		Artifacts in csv, xlsx, html, pdf order.
	"""
	stem = loe.delivery.sanitize_token(order.ref_id)
	artifacts: list[Artifact] = []
	if options.csv:
		text = loe.export.build_csv(order, rows)
		artifacts.append(Artifact("csv", f"{stem}.csv", "text/csv", text.encode("utf-8")))
	if options.xlsx:
		data = loe.export.build_xlsx(order, rows)
		artifacts.append(Artifact("xlsx", f"{stem}.xlsx", XLSX_CONTENT_TYPE, data))
	if options.html:
		html = loe.svg_output.build_summary_html(order, labels, total_units)
		artifacts.append(Artifact("html", f"{stem}.html", "text/html", html.encode("utf-8")))
	if options.pdf:
		data = loe.pdf_output.build_summary_pdf(order, labels, total_units)
		artifacts.append(Artifact("pdf", f"{stem}.pdf", "application/pdf", data))
	return artifacts


#============================================
def process_order(
	order: Order,
	options: ArtifactOptions | None = None,
	workers: int = 1,
) -> OrderResult:
	"""
	Run row expansion and rendering, then build artifacts.

	Args:
		order: Parsed order.
		options: Which artifacts to build; all by default.
		workers: Render thread count.

	Returns:
		OrderResult.
	"""
	if options is None:
		options = ArtifactOptions()
	rows, total_units = loe.export.expand(order.labels)
	labels = render_labels(order, workers)
	artifacts = build_artifacts(order, rows, labels, total_units, options)
	return OrderResult(
		order=order,
		rows=rows,
		total_units=total_units,
		labels=labels,
		artifacts=artifacts,
	)


#============================================
def deliver(result: OrderResult, settings: Settings) -> dict:
	"""
	Store artifacts and notify the webhook; never raises on delivery failure.

	Args:
		result: Engine output.
		settings: Service settings.

	Returns:
		The delivery summary that was (or would have been) posted.
	"""
	order = result.order
	urls = None
	try:
		storage = loe.delivery.get_storage(settings)
	except loe.delivery.DeliveryError as error:
		logger.warning(f"[Delivery] Storage unavailable for {order.ref_id}: {error}")
		storage = None
	if storage is not None:
		urls = loe.delivery.store_artifacts(
			storage,
			order,
			result.artifacts,
			settings.url_expires_seconds,
		)
	files = loe.delivery.describe_files(result.artifacts, urls)
	summary = loe.delivery.build_delivery_summary(order, result.labels, result.total_units, files)
	if settings.webhook_url:
		loe.delivery.send_webhook(settings.webhook_url, summary, settings.webhook_timeout)
	else:
		logger.info(f"[Delivery] No webhook configured; skipping delivery for {order.ref_id}")
	return summary


#============================================
def submit_order(
	payload,
	settings: Settings,
	submitted_at: datetime.datetime | None = None,
) -> OrderResult:
	"""
	Validate, process and deliver one order payload.

	Args:
		payload: Decoded JSON payload.
		settings: Service settings.
		submitted_at: Optional fixed submission time.

	Returns:
		OrderResult.

	Raises:
		ValidationError: When required fields are missing.
	"""
	order = loe.order.parse_order(payload, submitted_at)
	result = process_order(order, workers=settings.render_workers)
	logger.info(
		f"[Orders] {order.ref_id}: {len(order.labels)} labels, {result.total_units} units"
	)
	deliver(result, settings)
	return result

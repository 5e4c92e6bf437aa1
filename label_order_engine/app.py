"""
Flask app exposing the label order submission endpoint.
"""

# Standard Library
import datetime
import json
import logging
import sys
import uuid

# PIP3 modules
import flask

# local repo modules
import label_order_engine as loe
import label_order_engine.order
import label_order_engine.pipeline
import label_order_engine.settings


Settings = loe.settings.Settings
ValidationError = loe.order.ValidationError

SUBMIT_PATHS = ("/", "/api/submit-labels")
ALLOWED_METHODS = "POST, OPTIONS"


class JSONFormatter(logging.Formatter):
	"""
	Formatter to output logs in JSON format.
	Includes request details when a Flask request is active.
	"""

	def format(self, record):
		log_record = {
			"timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
			"level": record.levelname,
			"message": record.getMessage(),
			"logger": record.name,
			"module": record.module,
			"lineno": record.lineno,
		}
		if record.exc_info:
			log_record["exception"] = self.formatException(record.exc_info)
		if flask.has_request_context():
			log_record["method"] = flask.request.method
			log_record["path"] = flask.request.path
			if hasattr(flask.g, "request_id"):
				log_record["request_id"] = flask.g.request_id
		return json.dumps(log_record)


#============================================
def setup_logger(app: flask.Flask) -> None:
	"""
	Send app and engine logs to stdout as JSON lines.
	"""
	handler = logging.StreamHandler(sys.stdout)
	handler.setFormatter(JSONFormatter())
	app.logger.handlers.clear()
	app.logger.addHandler(handler)
	app.logger.setLevel(logging.INFO)
	engine_logger = logging.getLogger("label_order_engine")
	engine_logger.handlers = [handler]
	engine_logger.setLevel(logging.INFO)

	@app.before_request
	def add_request_id():
		flask.g.request_id = flask.request.headers.get("X-Request-Id", str(uuid.uuid4()))


#============================================
def create_app(settings: Settings | None = None, test_config: dict | None = None) -> flask.Flask:
	"""
	Build the Flask app.

	Args:
		settings: Service settings; read from the environment when None.
		test_config: Optional Flask config overrides.

	Returns:
		Flask app.
	"""
	app = flask.Flask(__name__)
	if test_config:
		app.config.update(test_config)
	if settings is None:
		settings = loe.settings.load_settings()
	app.config["LABEL_SETTINGS"] = settings
	setup_logger(app)

	@app.after_request
	def add_cors_headers(response):
		response.headers["Access-Control-Allow-Origin"] = settings.allowed_origin
		response.headers["Access-Control-Allow-Headers"] = "Content-Type"
		response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
		return response

	def submit_labels():
		if flask.request.method == "OPTIONS":
			return ("", 204)
		if flask.request.method != "POST":
			return (flask.jsonify({"error": "Method not allowed"}), 405)
		payload = flask.request.get_json(silent=True)
		try:
			result = loe.pipeline.submit_order(payload, app.config["LABEL_SETTINGS"])
		except ValidationError as error:
			return (flask.jsonify({"error": str(error)}), 400)
		except Exception:
			app.logger.exception("[Orders] Unhandled error while processing order")
			return (flask.jsonify({"error": "Internal server error"}), 500)
		return (
			flask.jsonify(
				{
					"success": True,
					"refId": result.order.ref_id,
					"totalLabels": result.total_units,
				}
			),
			200,
		)

	for index, path in enumerate(SUBMIT_PATHS):
		app.add_url_rule(
			path,
			endpoint=f"submit_labels_{index}",
			view_func=submit_labels,
			methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
			provide_automatic_options=False,
		)

	return app


#============================================
def main() -> None:
	"""
	Run the development server.
	"""
	app = create_app()
	app.run(host="0.0.0.0", port=5000)

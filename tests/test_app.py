import pytest

import label_order_engine.app
import label_order_engine.pipeline
import label_order_engine.settings

app_module = label_order_engine.app
pipeline = label_order_engine.pipeline
settings = label_order_engine.settings


#============================================
@pytest.fixture
def client():
	"""
	Flask test client with storage and webhook disabled.
	"""
	app = app_module.create_app(settings=settings.Settings(), test_config={"TESTING": True})
	return app.test_client()


#============================================
@pytest.mark.parametrize("path", ["/api/submit-labels", "/"])
def test_submit_success(client, acme_payload: dict, path: str) -> None:
	"""
	A valid order returns success, the reference, and the unit total.
	"""
	response = client.post(path, json=acme_payload)
	assert response.status_code == 200
	assert response.get_json() == {"success": True, "refId": "ORD-1001", "totalLabels": 3}
	assert response.headers["Access-Control-Allow-Origin"] == "*"


#============================================
def test_submit_missing_fields(client) -> None:
	"""
	Orders without refId or labels are rejected with 400.
	"""
	response = client.post("/api/submit-labels", json={"refId": "R1", "labels": []})
	assert response.status_code == 400
	assert response.get_json() == {"error": "Missing required fields: refId and labels"}
	response = client.post("/api/submit-labels", data="not json", content_type="text/plain")
	assert response.status_code == 400


#============================================
def test_preflight_returns_empty_204(client) -> None:
	"""
	OPTIONS answers the CORS preflight with no body.
	"""
	response = client.options("/api/submit-labels")
	assert response.status_code == 204
	assert response.data == b""
	assert "POST" in response.headers["Access-Control-Allow-Methods"]


#============================================
@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_other_methods_not_allowed(client, method: str) -> None:
	"""
	Anything but POST and OPTIONS gets 405.
	"""
	response = getattr(client, method)("/api/submit-labels")
	assert response.status_code == 405
	assert response.get_json() == {"error": "Method not allowed"}


#============================================
def test_unexpected_error_returns_500(client, monkeypatch, acme_payload: dict) -> None:
	"""
	Engine failures surface as a generic 500.
	"""

	def explode(payload, service_settings, submitted_at=None):
		raise RuntimeError("boom")

	monkeypatch.setattr(pipeline, "submit_order", explode)
	response = client.post("/api/submit-labels", json=acme_payload)
	assert response.status_code == 500
	assert response.get_json() == {"error": "Internal server error"}

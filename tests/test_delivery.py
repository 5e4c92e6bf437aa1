import base64

import pytest
import requests

import label_order_engine.delivery
import label_order_engine.order
import label_order_engine.pipeline
import label_order_engine.settings

delivery = label_order_engine.delivery
order = label_order_engine.order
pipeline = label_order_engine.pipeline
settings = label_order_engine.settings


class FakeResponse:
	def __init__(self, status_code: int):
		self.status_code = status_code

	def raise_for_status(self) -> None:
		if self.status_code >= 400:
			raise requests.HTTPError(f"{self.status_code} error")


#============================================
def test_local_storage_writes_and_links(tmp_path) -> None:
	"""
	Local storage writes under its base directory and returns public URLs.
	"""
	storage = delivery.LocalStorage(str(tmp_path), "http://files.test/artifacts/")
	key = storage.put_file(b"data", "orders/ORD-1/ORD-1.csv", "text/csv")
	assert (tmp_path / "orders" / "ORD-1" / "ORD-1.csv").read_bytes() == b"data"
	assert storage.get_url(key) == "http://files.test/artifacts/orders/ORD-1/ORD-1.csv"


#============================================
def test_local_storage_rejects_traversal(tmp_path) -> None:
	"""
	Keys that climb out of the base directory are refused.
	"""
	storage = delivery.LocalStorage(str(tmp_path / "base"), "http://files.test")
	with pytest.raises(delivery.DeliveryError):
		storage.put_file(b"x", "../escape.txt", "text/plain")


#============================================
@pytest.mark.parametrize(
	"raw, expected",
	[
		("ORD-1001", "ORD-1001"),
		("a b/c", "a_b_c"),
		("../..", "order"),
		("", "order"),
	],
)
def test_sanitize_token(raw: str, expected: str) -> None:
	"""
	Reference ids become safe filename stems.
	"""
	assert delivery.sanitize_token(raw) == expected


#============================================
def test_get_storage_selects_backend(tmp_path) -> None:
	"""
	The backend follows the storage setting.
	"""
	assert delivery.get_storage(settings.Settings()) is None
	local = delivery.get_storage(
		settings.Settings(storage_backend="local", local_storage_dir=str(tmp_path))
	)
	assert isinstance(local, delivery.LocalStorage)


#============================================
def test_describe_files_prefers_urls() -> None:
	"""
	Stored artifacts are linked; the rest are inlined as base64.
	"""
	artifacts = [
		delivery.Artifact("csv", "a.csv", "text/csv", b"a,b"),
		delivery.Artifact("pdf", "a.pdf", "application/pdf", b"%PDF"),
	]
	files = delivery.describe_files(artifacts, {"csv": "http://x/a.csv"})
	assert files["csv"] == {"filename": "a.csv", "contentType": "text/csv", "url": "http://x/a.csv"}
	assert base64.b64decode(files["pdf"]["base64"]) == b"%PDF"
	inline = delivery.describe_files(artifacts, None)
	assert "url" not in inline["csv"]


#============================================
def test_delivery_summary_omits_positions(mixed_payload: dict, submitted_at) -> None:
	"""
	The summary lists label metadata and totals without layout overrides.
	"""
	parsed = order.parse_order(mixed_payload, submitted_at)
	result = pipeline.process_order(parsed)
	summary = delivery.build_delivery_summary(parsed, result.labels, result.total_units, {})
	assert summary["refId"] == "ORD-2002"
	assert summary["contactName"] == "Sam Lee"
	assert summary["totalLabels"] == 7
	assert summary["labelCount"] == 3
	assert summary["timestamp"] == "2024-03-05T14:30:00+00:00"
	assert [label["quantity"] for label in summary["labels"]] == [2, 1, 4]
	short = summary["labels"][1]
	assert short["var1"] == "SHORT"
	assert short["var2"] == "GONE"
	assert short["var4"] == "ABOVE"
	assert short["var1Size"] == "18"
	assert short["var4Size"] == "12"
	assert short["var3"] == ""
	assert short["var3Size"] == ""
	assert summary["labels"][2]["var1"] == "ONE"
	assert all("positions" not in label for label in summary["labels"])
	assert "positions" not in repr(summary)


#============================================
def test_send_webhook_reports_status(monkeypatch) -> None:
	"""
	A rejected or unreachable webhook returns False instead of raising.
	"""
	calls = []

	def fake_post(url, json=None, timeout=None):
		calls.append((url, json, timeout))
		return FakeResponse(200)

	monkeypatch.setattr(requests, "post", fake_post)
	assert delivery.send_webhook("http://hook.test", {"refId": "R1"}, 5.0) is True
	assert calls == [("http://hook.test", {"refId": "R1"}, 5.0)]

	monkeypatch.setattr(requests, "post", lambda url, json=None, timeout=None: FakeResponse(502))
	assert delivery.send_webhook("http://hook.test", {"refId": "R1"}, 5.0) is False

	def refuse(url, json=None, timeout=None):
		raise requests.ConnectionError("refused")

	monkeypatch.setattr(requests, "post", refuse)
	assert delivery.send_webhook("http://hook.test", {"refId": "R1"}, 5.0) is False

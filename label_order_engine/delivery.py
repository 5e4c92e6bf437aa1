"""
Artifact storage and webhook delivery.

Everything here runs after the engine output is complete. Failures are
logged and never change the result returned to the caller.
"""

# Standard Library
import base64
import dataclasses
import logging
import os

# PIP3 modules
import boto3
import requests

# local repo modules
import label_order_engine as loe
import label_order_engine.order
import label_order_engine.scene
import label_order_engine.settings


Order = loe.order.Order
RenderedLabel = loe.scene.RenderedLabel
Settings = loe.settings.Settings

logger = logging.getLogger(__name__)


class DeliveryError(RuntimeError):
	"""
	Raised when an artifact upload or webhook call fails.
	"""


@dataclasses.dataclass(frozen=True)
class Artifact:
	kind: str
	filename: str
	content_type: str
	data: bytes


class StorageBackend:
	def put_file(self, data: bytes, key: str, content_type: str) -> str:
		raise NotImplementedError

	def get_url(self, key: str, expires_seconds: int = 3600) -> str:
		raise NotImplementedError


class LocalStorage(StorageBackend):
	def __init__(self, base_dir: str, base_url: str):
		self.base_dir = base_dir
		self.base_url = base_url.rstrip("/")

	def _get_abs_path(self, key: str) -> str:
		abs_base = os.path.abspath(self.base_dir)
		abs_path = os.path.abspath(os.path.join(abs_base, key))
		if not abs_path.startswith(abs_base + os.sep):
			raise DeliveryError(f"Storage key escapes base directory: {key}")
		return abs_path

	def put_file(self, data: bytes, key: str, content_type: str) -> str:
		abs_path = self._get_abs_path(key)
		try:
			os.makedirs(os.path.dirname(abs_path), exist_ok=True)
			with open(abs_path, "wb") as handle:
				handle.write(data)
		except OSError as error:
			raise DeliveryError(f"Local write failed for {key}: {error}") from error
		return key

	def get_url(self, key: str, expires_seconds: int = 3600) -> str:
		return f"{self.base_url}/{key}"


class S3Storage(StorageBackend):
	def __init__(self, bucket_name, region, access_key, secret_key, prefix=""):
		try:
			self.s3 = boto3.client(
				"s3",
				region_name=region,
				aws_access_key_id=access_key,
				aws_secret_access_key=secret_key,
			)
		except Exception as error:
			raise DeliveryError(f"S3 client setup failed: {error}") from error
		self.bucket = bucket_name
		self.prefix = prefix

	def _get_s3_key(self, key: str) -> str:
		if self.prefix:
			return f"{self.prefix.rstrip('/')}/{key.lstrip('/')}"
		return key

	def put_file(self, data: bytes, key: str, content_type: str) -> str:
		try:
			self.s3.put_object(
				Bucket=self.bucket,
				Key=self._get_s3_key(key),
				Body=data,
				ContentType=content_type,
			)
		except Exception as error:
			raise DeliveryError(f"S3 upload failed for {key}: {error}") from error
		return key

	def get_url(self, key: str, expires_seconds: int = 3600) -> str:
		try:
			return self.s3.generate_presigned_url(
				"get_object",
				Params={"Bucket": self.bucket, "Key": self._get_s3_key(key)},
				ExpiresIn=expires_seconds,
			)
		except Exception as error:
			raise DeliveryError(f"Presigning failed for {key}: {error}") from error


#============================================
def get_storage(settings: Settings) -> StorageBackend | None:
	"""
	Return the configured storage backend, or None when disabled.
	"""
	if settings.storage_backend == "s3":
		if not settings.aws_access_key_id or not settings.aws_secret_access_key:
			logger.warning("[Storage] S3 backend selected but AWS credentials missing from environment.")
		return S3Storage(
			settings.s3_bucket,
			settings.s3_region,
			settings.aws_access_key_id,
			settings.aws_secret_access_key,
			prefix=settings.s3_prefix,
		)
	if settings.storage_backend == "local":
		return LocalStorage(settings.local_storage_dir, settings.public_base_url)
	return None


#============================================
def sanitize_token(value: str) -> str:
	"""
	Sanitize a string for storage keys and filenames.

	Args:
		value: Input string.

	Returns:
		Sanitized string.
	"""
	result: list[str] = []
	for char in value:
		if char.isalnum() or char in "-_":
			result.append(char)
		else:
			result.append("_")
	sanitized = "".join(result).strip("_")
	if not sanitized:
		return "order"
	return sanitized


#============================================
def artifact_key(order: Order, artifact: Artifact) -> str:
	return f"orders/{sanitize_token(order.ref_id)}/{artifact.filename}"


#============================================
def store_artifacts(
	storage: StorageBackend,
	order: Order,
	artifacts: list[Artifact],
	expires_seconds: int,
) -> dict[str, str]:
	"""
	Upload artifacts and collect their URLs.

	A failed upload is logged and left out of the result.

	Args:
		storage: Storage backend.
		order: Parsed order.
		artifacts: Artifacts to upload.
		expires_seconds: Lifetime of generated links.

	Returns:
		Mapping of artifact kind to URL.
	"""
	urls: dict[str, str] = {}
	for artifact in artifacts:
		key = artifact_key(order, artifact)
		try:
			storage.put_file(artifact.data, key, artifact.content_type)
			urls[artifact.kind] = storage.get_url(key, expires_seconds)
		except DeliveryError as error:
			logger.warning(f"[Delivery] Storage failed for {order.ref_id} {artifact.kind}: {error}")
	return urls


#============================================
def describe_files(artifacts: list[Artifact], urls: dict[str, str] | None) -> dict[str, dict]:
	"""
	Describe artifacts for the delivery summary.

	Stored artifacts are linked by URL; the rest are embedded as base64.

	Args:
		artifacts: Generated artifacts.
		urls: Stored URLs by kind, or None when storage is disabled.

	Returns:
		Mapping of artifact kind to a file description.
	"""
	files: dict[str, dict] = {}
	for artifact in artifacts:
		entry = {"filename": artifact.filename, "contentType": artifact.content_type}
		if urls is not None and artifact.kind in urls:
			entry["url"] = urls[artifact.kind]
		else:
			entry["base64"] = base64.b64encode(artifact.data).decode("ascii")
		files[artifact.kind] = entry
	return files


#============================================
def build_delivery_summary(
	order: Order,
	labels: list[RenderedLabel],
	total_units: int,
	files: dict[str, dict],
) -> dict:
	"""
	Build the JSON summary handed to the delivery webhook.

	Position overrides are not included.

	Args:
		order: Parsed order.
		labels: Rendered labels in order.
		total_units: Total physical unit count.
		files: File descriptions from describe_files.

	Returns:
		JSON-serializable dict.
	"""
	timestamp = ""
	if order.submitted_at is not None:
		timestamp = order.submitted_at.isoformat()
	return {
		"refId": order.ref_id,
		"contactName": order.contact_name,
		"contactEmail": order.contact_email,
		"timestamp": timestamp,
		"date": loe.order.format_date(order.submitted_at),
		"totalLabels": total_units,
		"labelCount": len(labels),
		"labels": [rendered.summary.as_dict() for rendered in labels],
		"files": files,
	}


#============================================
def send_webhook(url: str, summary: dict, timeout: float) -> bool:
	"""
	Post the delivery summary to the automation webhook.

	Args:
		url: Webhook URL.
		summary: Delivery summary.
		timeout: Request timeout in seconds.

	Returns:
		True when the webhook accepted the summary.
	"""
	try:
		response = requests.post(url, json=summary, timeout=timeout)
		response.raise_for_status()
	except requests.RequestException as error:
		logger.warning(f"[Delivery] Webhook failed for {summary.get('refId')}: {error}")
		return False
	logger.info(f"[Delivery] Webhook accepted {summary.get('refId')} ({response.status_code})")
	return True

"""
Service settings read from the environment.

A `.env` file in the working directory is loaded for local runs; real
environment variables always win.
"""

# Standard Library
import dataclasses
import logging
import math
import os

# PIP3 modules
import dotenv


logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("none", "local", "s3")


@dataclasses.dataclass(frozen=True)
class Settings:
	storage_backend: str = "none"
	local_storage_dir: str = "instance/artifacts"
	public_base_url: str = "http://localhost:5000/artifacts"
	s3_bucket: str = ""
	s3_region: str = "us-east-1"
	s3_prefix: str = ""
	aws_access_key_id: str | None = None
	aws_secret_access_key: str | None = None
	webhook_url: str = ""
	webhook_timeout: float = 10.0
	url_expires_seconds: int = 7 * 24 * 3600
	render_workers: int = 1
	allowed_origin: str = "*"


#============================================
def get_env_str(name: str, default: str | None = None) -> str | None:
	"""
	Read an environment variable, treating blank values as unset.

	Args:
		name: Environment variable name.
		default: Value returned when unset or blank.

	Returns:
		Stripped value or default.
	"""
	value = os.getenv(name)
	if value is None:
		return default
	value = value.strip()
	if not value:
		return default
	return value


#============================================
def get_env_number(name: str, default: float) -> float:
	value = get_env_str(name)
	if value is None:
		return default
	try:
		number = float(value)
	except ValueError:
		logger.warning(f"[Settings] Ignoring non-numeric {name}={value!r}")
		return default
	if not math.isfinite(number):
		logger.warning(f"[Settings] Ignoring non-finite {name}={value!r}")
		return default
	return number


#============================================
def load_settings(load_dotenv: bool = True) -> Settings:
	"""
	Build Settings from environment variables.

	Args:
		load_dotenv: Whether to read a local .env file first.

	Returns:
		Settings.
	"""
	if load_dotenv:
		dotenv.load_dotenv(override=False)

	defaults = Settings()
	backend = (get_env_str("STORAGE_BACKEND", defaults.storage_backend) or "none").lower()
	if backend not in STORAGE_BACKENDS:
		logger.warning(f"[Settings] Unknown STORAGE_BACKEND {backend!r}; storage disabled")
		backend = "none"

	return Settings(
		storage_backend=backend,
		local_storage_dir=get_env_str("LOCAL_STORAGE_DIR", defaults.local_storage_dir),
		public_base_url=get_env_str("PUBLIC_BASE_URL", defaults.public_base_url).rstrip("/"),
		s3_bucket=get_env_str("S3_BUCKET", defaults.s3_bucket),
		s3_region=get_env_str("S3_REGION", defaults.s3_region),
		s3_prefix=get_env_str("S3_PREFIX", defaults.s3_prefix),
		aws_access_key_id=get_env_str("AWS_ACCESS_KEY_ID"),
		aws_secret_access_key=get_env_str("AWS_SECRET_ACCESS_KEY"),
		webhook_url=get_env_str("WEBHOOK_URL", defaults.webhook_url),
		webhook_timeout=get_env_number("WEBHOOK_TIMEOUT", defaults.webhook_timeout),
		url_expires_seconds=int(get_env_number("URL_EXPIRES_SECONDS", defaults.url_expires_seconds)),
		render_workers=max(1, int(get_env_number("RENDER_WORKERS", defaults.render_workers))),
		allowed_origin=get_env_str("ALLOWED_ORIGIN", defaults.allowed_origin),
	)

import label_order_engine.settings

settings = label_order_engine.settings


#============================================
def test_load_settings_from_environment(monkeypatch) -> None:
	"""
	Environment variables override defaults; blanks count as unset.
	"""
	monkeypatch.setenv("STORAGE_BACKEND", "LOCAL")
	monkeypatch.setenv("PUBLIC_BASE_URL", "https://cdn.test/files/")
	monkeypatch.setenv("WEBHOOK_URL", "   ")
	monkeypatch.setenv("RENDER_WORKERS", "4")
	monkeypatch.setenv("WEBHOOK_TIMEOUT", "soon")
	loaded = settings.load_settings(load_dotenv=False)
	assert loaded.storage_backend == "local"
	assert loaded.public_base_url == "https://cdn.test/files"
	assert loaded.webhook_url == ""
	assert loaded.render_workers == 4
	assert loaded.webhook_timeout == 10.0


#============================================
def test_unknown_backend_disables_storage(monkeypatch) -> None:
	"""
	An unrecognized storage backend falls back to none.
	"""
	monkeypatch.setenv("STORAGE_BACKEND", "ftp")
	monkeypatch.setenv("RENDER_WORKERS", "0")
	loaded = settings.load_settings(load_dotenv=False)
	assert loaded.storage_backend == "none"
	assert loaded.render_workers == 1


#============================================
def test_non_finite_numbers_use_defaults(monkeypatch) -> None:
	"""
	nan and inf values are ignored instead of failing startup.
	"""
	monkeypatch.setenv("URL_EXPIRES_SECONDS", "nan")
	monkeypatch.setenv("RENDER_WORKERS", "inf")
	monkeypatch.setenv("WEBHOOK_TIMEOUT", "-inf")
	loaded = settings.load_settings(load_dotenv=False)
	assert loaded.url_expires_seconds == 7 * 24 * 3600
	assert loaded.render_workers == 1
	assert loaded.webhook_timeout == 10.0

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from lexifeed import config_manager as cfg
from lexifeed import logging_manager as log_mgr
from lexifeed.errors import TranslationUnavailableError
from lexifeed.translation import LookupData, TranslationGateway, WordLookupService
from lexifeed.webapi.application import TRANSLATION_UNAVAILABLE_DETAIL, create_app
from lexifeed.webapi.dependencies import (
    get_settings,
    get_translation_gateway,
    get_word_lookup_service,
    reset_dependencies,
)

pytestmark = pytest.mark.webapi


@pytest.fixture
def gateway():
    fake = Mock(spec=TranslationGateway)
    fake.translate = AsyncMock(return_value="привет")
    fake.get_variants = AsyncMock(return_value=["привет", "здравствуйте"])
    fake.cache_stats.return_value = {"size": 0, "max_size": 2000, "hits": 0, "misses": 0}
    return fake


@pytest.fixture
def client(gateway):
    lookup = Mock(spec=WordLookupService)
    lookup.lookup = AsyncMock(
        return_value=LookupData(word="run", translation="бежать", translations=["бежать"])
    )
    app = create_app()
    app.dependency_overrides[get_translation_gateway] = lambda: gateway
    app.dependency_overrides[get_word_lookup_service] = lambda: lookup
    with TestClient(app) as test_client:
        yield test_client


def test_translate_endpoint(client, gateway):
    response = client.post(
        "/api/translation/translate",
        json={"text": "hello", "source_lang": "EN", "target_lang": "ru"},
    )

    assert response.status_code == 200
    assert response.json() == {"translation": "привет", "source_lang": "en", "target_lang": "ru"}
    gateway.translate.assert_awaited_once_with("hello", "en", "ru")


def test_variants_endpoint(client, gateway):
    response = client.post(
        "/api/translation/variants", json={"text": "hello", "max_variants": 2}
    )

    assert response.status_code == 200
    assert response.json() == {"variants": ["привет", "здравствуйте"]}
    gateway.get_variants.assert_awaited_once_with("hello", "en", "ru", max_variants=2)


def test_variants_default_limit_comes_from_settings(client, gateway):
    client.app.dependency_overrides[get_settings] = lambda: cfg.LexifeedSettings(max_variants=3)

    response = client.post("/api/translation/variants", json={"text": "hello"})

    assert response.status_code == 200
    gateway.get_variants.assert_awaited_once_with("hello", "en", "ru", max_variants=3)


def test_unavailable_translation_maps_to_503(client, gateway):
    gateway.translate.side_effect = TranslationUnavailableError()

    response = client.post("/api/translation/translate", json={"text": "hello"})

    assert response.status_code == 503
    assert response.json() == {"detail": TRANSLATION_UNAVAILABLE_DETAIL}


def test_lookup_endpoint(client):
    response = client.get("/api/translation/lookup", params={"word": "run"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["translation"] == "бежать"
    assert payload["audio_url"] is None


def test_lookup_requires_word(client):
    assert client.get("/api/translation/lookup").status_code == 422


def test_health_reports_cache_and_index(client, gateway, forms_asset, forms_data_dir):
    from lexifeed.vocabulary import FormIndexStore
    from lexifeed.webapi.dependencies import get_form_index_store

    store = FormIndexStore(data_dir=forms_data_dir, asset_path=forms_asset)
    client.app.dependency_overrides[get_form_index_store] = lambda: store

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "forms_index_ready": False,
        "translation_cache": {"size": 0, "max_size": 2000, "hits": 0, "misses": 0},
    }


class _RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []
        self.addFilter(log_mgr.LogContextFilter())

    def emit(self, record):
        self.records.append(record)


def test_request_id_is_echoed_and_bound_to_logs(client, gateway):
    gateway.translate.side_effect = TranslationUnavailableError()
    handler = _RecordingHandler()
    logger = log_mgr.get_logger()
    logger.addHandler(handler)
    try:
        response = client.post(
            "/api/translation/translate",
            json={"text": "hello"},
            headers={"X-Request-ID": "req-42"},
        )
    finally:
        logger.removeHandler(handler)

    assert response.status_code == 503
    assert response.headers["X-Request-ID"] == "req-42"
    unavailable = [
        record
        for record in handler.records
        if getattr(record, "event", None) == "webapi.translation.unavailable"
    ]
    assert unavailable and unavailable[0].request_id == "req-42"


def test_request_id_is_generated_when_missing(client):
    response = client.get("/api/translation/lookup", params={"word": "run"})

    request_id = response.headers["X-Request-ID"]
    assert len(request_id) == 32
    int(request_id, 16)


def test_create_app_applies_debug_setting(monkeypatch):
    monkeypatch.setenv("LEXIFEED_DEBUG", "true")
    reset_dependencies()
    try:
        create_app()
        assert log_mgr.get_logger().level == logging.DEBUG
    finally:
        reset_dependencies()
        log_mgr.configure_logging_level(debug_enabled=False)

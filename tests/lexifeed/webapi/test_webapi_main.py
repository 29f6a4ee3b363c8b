from unittest.mock import patch

import pytest

from lexifeed import config_manager as cfg
from lexifeed.webapi import __main__ as webapi_main

pytestmark = pytest.mark.webapi


def test_parser_defaults_follow_settings():
    settings = cfg.LexifeedSettings(api_host="127.0.0.1", api_port=9100, debug=True)

    args = webapi_main.build_parser(settings).parse_args([])

    assert (args.host, args.port, args.log_level, args.reload) == ("127.0.0.1", 9100, "debug", False)


def test_environment_port_reaches_parser(monkeypatch):
    monkeypatch.setenv("LEXIFEED_API_PORT", "9200")

    args = webapi_main.build_parser().parse_args([])

    assert args.port == 9200
    assert args.log_level == "info"


def test_main_runs_app_factory_with_flag_overrides():
    with patch.object(webapi_main.uvicorn, "run") as run:
        webapi_main.main(["--port", "9300", "--reload"])

    run.assert_called_once_with(
        "lexifeed.webapi.application:create_app",
        host="0.0.0.0",
        port=9300,
        reload=True,
        log_level="info",
        factory=True,
    )

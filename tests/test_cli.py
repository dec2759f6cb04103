"""Tests for the command line entry point."""

import os
from unittest.mock import MagicMock, patch

import pytest
import respx
from httpx import Response
from prometheus_client import CollectorRegistry

from json_exporter.cli import build_client, build_parser, build_registry, load_settings, main
from json_exporter.core.errors import ConfigurationError, ExitCode

BASE_URL = "http://es.example.com:9200"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("JSON_EXPORTER_"):
            monkeypatch.delenv(key)


class TestParser:
    """Tests for flag parsing."""

    def test_unset_flags_are_none(self):
        args = build_parser().parse_args([])
        assert all(value is None for value in vars(args).values())

    def test_repeated_query_paths(self):
        args = build_parser().parse_args(["--query-path", "/a", "--query-path", "/b"])
        assert args.query_paths == ["/a", "/b"]

    def test_dotted_flags(self):
        args = build_parser().parse_args(
            ["--es.uri", BASE_URL, "--es.timeout", "3", "--web.listen-address", ":9200", "--es.ssl-skip-verify"]
        )
        assert args.uri == BASE_URL
        assert args.timeout == 3.0
        assert args.listen_address == ":9200"
        assert args.insecure_skip_verify is True


class TestLoadSettings:
    """Tests for merging flags over environment settings."""

    def test_flags_override_env(self, monkeypatch):
        monkeypatch.setenv("JSON_EXPORTER_NAMESPACE", "fromenv")
        monkeypatch.setenv("JSON_EXPORTER_URI", "http://env:9200")
        args = build_parser().parse_args(["--namespace", "fromflag"])
        settings = load_settings(args)
        assert settings.namespace == "fromflag"
        assert settings.uri == "http://env:9200"

    def test_invalid_flag_value_rejected(self):
        args = build_parser().parse_args(["--query-path", "no-slash"])
        with pytest.raises(ConfigurationError):
            load_settings(args)


class TestBuildRegistry:
    """Tests for wiring collectors into a registry."""

    def test_one_collector_per_path(self):
        args = build_parser().parse_args(
            ["--es.uri", BASE_URL, "--query-path", "/_cluster/health", "--query-path", "/_nodes/stats"]
        )
        settings = load_settings(args)

        with respx.mock:
            respx.get(f"{BASE_URL}/").mock(return_value=Response(200, json={"cluster_name": "prod"}))
            respx.get(f"{BASE_URL}/_cluster/health").mock(return_value=Response(200, json={"active_shards": 4}))
            respx.get(f"{BASE_URL}/_nodes/stats").mock(return_value=Response(200, json={"_nodes": {"total": 2}}))

            with build_client(settings) as client:
                registry = build_registry(settings, client)
                assert isinstance(registry, CollectorRegistry)
                assert registry.get_sample_value(
                    "elasticsearch_cluster_health_active_shards", {"cluster": "prod"}
                ) == 4.0
                assert registry.get_sample_value(
                    "elasticsearch_nodes_stats_nodes_total", {"cluster": "prod"}
                ) == 2.0


class TestMain:
    """Tests for main()."""

    def test_configuration_error_exit_code(self):
        assert main(["--es.uri", "ftp://nowhere"]) == ExitCode.CONFIG_ERROR

    def test_serves_registry(self):
        with respx.mock:
            respx.get(f"{BASE_URL}/").mock(return_value=Response(200, json={"cluster_name": "prod"}))
            with patch("json_exporter.cli.serve") as serve, patch("json_exporter.cli.configure_logging"):
                result = main(["--es.uri", BASE_URL, "--web.listen-address", ":9999"])

        assert result == ExitCode.SUCCESS
        registry, address = serve.call_args.args
        assert isinstance(registry, CollectorRegistry)
        assert address == ":9999"

    def test_keyboard_interrupt_exit_code(self):
        with respx.mock:
            respx.get(f"{BASE_URL}/").mock(return_value=Response(200, json={}))
            serve = MagicMock(side_effect=KeyboardInterrupt)
            with patch("json_exporter.cli.serve", serve), patch("json_exporter.cli.configure_logging"):
                assert main(["--es.uri", BASE_URL]) == 130

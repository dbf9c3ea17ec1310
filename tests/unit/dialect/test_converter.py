"""Unit tests for HttpDialectConverter dispatch and fallback."""

import threading
from unittest.mock import MagicMock

import pytest

from src.config.settings import DialectConverterSettings
from src.config.sql_dialects import SUPPORTED_DIALECTS, Dialect
from src.dialect.converter import HttpDialectConverter
from src.dialect.models import ConversionRequest, SessionContext
from src.utils import metrics

SQL = "select `a`, b from t where c = 'x'  limit 10"


class FakeService:
    """Records calls and answers per URL."""

    def __init__(self, answers=None, default=None):
        self.answers = answers or {}
        self.default = default
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, url, request):
        with self._lock:
            self.calls.append((url, request))
        return self.answers.get(url, self.default)


def make_converter(services="", override="", service=None):
    service = service if service is not None else FakeService()
    converter = HttpDialectConverter(
        settings=DialectConverterSettings(services=services, service_url=""),
        convert_call=service,
        override_url_provider=lambda: override,
    )
    return converter, service


def pool_url(endpoint):
    return f"http://{endpoint}/api/v1/convert"


class TestDialectRegistry:
    def test_accept_dialects_returns_same_immutable_set(self):
        converter, _ = make_converter()

        assert converter.accept_dialects() is converter.accept_dialects()
        assert converter.accept_dialects() == SUPPORTED_DIALECTS
        assert Dialect.PRESTO in converter.accept_dialects()
        assert Dialect.DORIS not in converter.accept_dialects()

    def test_plugin_info(self):
        converter, _ = make_converter()

        assert converter.plugin_info.name == "__builtin_SqlDialectConverter"
        assert converter.plugin_info.type == "DIALECT"
        assert converter.plugin_info.version == "2.1.0"


class TestNothingConfigured:
    @pytest.mark.parametrize("sql", ["", "select 1", SQL])
    def test_returns_none_without_calling_service(self, sql):
        converter, service = make_converter()

        assert converter.convert(sql, "presto") is None
        assert service.calls == []


class TestFixedEndpoint:
    URL = "http://override:5001/api/v1/convert"

    def test_returns_translation(self):
        converter, service = make_converter(
            override=self.URL, service=FakeService(default="X")
        )

        assert converter.convert(SQL, "presto", case_sensitive=True) == "X"
        assert service.calls == [
            (self.URL, ConversionRequest(SQL, "presto", case_sensitive=True))
        ]

    @pytest.mark.parametrize("answer", [None, ""])
    def test_returns_original_sql_on_empty_result(self, answer):
        converter, service = make_converter(
            override=self.URL, service=FakeService(default=answer)
        )

        assert converter.convert(SQL, "hive") == SQL
        assert len(service.calls) == 1

    def test_override_takes_precedence_and_does_not_fall_back_to_pool(self):
        service = FakeService(answers={pool_url("a:1"): "from pool"})
        converter, _ = make_converter(
            services="a:1;b:2", override=self.URL, service=service
        )

        assert converter.convert(SQL, "trino") == SQL
        assert [url for url, _ in service.calls] == [self.URL]
        assert converter.cursor.value == 0

    def test_pool_flag_does_not_affect_override(self):
        converter, _ = make_converter(
            override=self.URL, service=FakeService(default="X")
        )

        assert converter.convert(SQL, "presto", enable_pool=False) == "X"

    def test_override_is_read_on_every_request(self):
        current = {"url": ""}
        service = FakeService(default="X")
        converter = HttpDialectConverter(
            settings=DialectConverterSettings(services="", service_url=""),
            convert_call=service,
            override_url_provider=lambda: current["url"],
        )

        assert converter.convert(SQL, "presto") is None
        current["url"] = self.URL
        assert converter.convert(SQL, "presto") == "X"


class TestPoolEndpoints:
    def test_last_endpoint_succeeds_after_trying_others(self):
        endpoints = ["a:1", "b:2", "c:3"]
        service = FakeService(answers={pool_url("c:3"): "Y"})
        converter, _ = make_converter(services=";".join(endpoints), service=service)

        assert converter.convert(SQL, "spark") == "Y"
        assert [url for url, _ in service.calls] == [pool_url(e) for e in endpoints]

    def test_all_empty_returns_original_after_exactly_n_attempts(self):
        converter, service = make_converter(
            services="a:1;b:2;c:3;d:4", service=FakeService(default="")
        )

        assert converter.convert(SQL, "postgres") == SQL
        assert len(service.calls) == 4
        assert len({url for url, _ in service.calls}) == 4
        assert converter.cursor.value == 4

    def test_stops_at_first_success(self):
        service = FakeService(default="Z")
        converter, _ = make_converter(services="a:1;b:2;c:3", service=service)

        assert converter.convert(SQL, "clickhouse") == "Z"
        assert len(service.calls) == 1

    def test_rotation_spreads_successive_calls(self):
        service = FakeService(default="Z")
        converter, _ = make_converter(services="a:1;b:2;c:3", service=service)

        for _ in range(4):
            converter.convert(SQL, "presto")

        assert [url for url, _ in service.calls] == [
            pool_url("a:1"),
            pool_url("b:2"),
            pool_url("c:3"),
            pool_url("a:1"),
        ]

    def test_cursor_advances_across_failed_requests(self):
        service = FakeService(answers={pool_url("a:1"): "ok"})
        converter, _ = make_converter(services="a:1;b:2", service=service)

        assert converter.convert(SQL, "presto") == "ok"  # a:1
        assert converter.convert(SQL, "presto") == "ok"  # b:2 fails, then a:1
        assert [url for url, _ in service.calls] == [
            pool_url("a:1"),
            pool_url("b:2"),
            pool_url("a:1"),
        ]

    def test_pool_disabled_returns_original_without_calls(self):
        converter, service = make_converter(
            services="a:1;b:2", service=FakeService(default="Z")
        )

        assert converter.convert(SQL, "presto", enable_pool=False) == SQL
        assert service.calls == []
        assert converter.cursor.value == 0

    def test_single_endpoint_pool(self):
        converter, service = make_converter(
            services="only:1", service=FakeService(default=None)
        )

        assert converter.convert(SQL, "hive") == SQL
        assert [url for url, _ in service.calls] == [pool_url("only:1")]

    def test_refresh_endpoints_replaces_pool(self):
        service = FakeService(default=None)
        converter, _ = make_converter(services="a:1", service=service)

        converter.refresh_endpoints("x:9;y:9")

        assert converter.endpoints == ("x:9", "y:9")
        converter.convert(SQL, "presto")
        assert {url for url, _ in service.calls} == {pool_url("x:9"), pool_url("y:9")}

        converter.refresh_endpoints("")
        assert converter.convert(SQL, "presto") is None

    @pytest.mark.parametrize("size", [1, 2, 5])
    def test_concurrent_conversions_stay_in_range(self, size):
        endpoints = [f"h{i}:1" for i in range(size)]
        service = FakeService(default=None)
        converter, _ = make_converter(services=";".join(endpoints), service=service)
        results = []
        errors = []

        def worker():
            try:
                for _ in range(50):
                    results.append(converter.convert(SQL, "presto"))
            except Exception as exc:  # pragma: no cover - reported below
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert results == [SQL] * 400
        assert len(service.calls) == 400 * size
        assert {url for url, _ in service.calls} <= {pool_url(e) for e in endpoints}


class TestSessionEntryPoints:
    def test_convert_sql_uses_session_values(self):
        service = FakeService(default="X")
        converter, _ = make_converter(services="a:1", service=service)
        session = SessionContext(
            sql_dialect="trino",
            case_sensitive=True,
            enable_multi_dialect_convert_service=True,
        )

        assert converter.convert_sql(SQL, session) == "X"
        assert service.calls[0][1] == ConversionRequest(SQL, "trino", True)

    def test_convert_sql_respects_session_pool_flag(self):
        converter, service = make_converter(
            services="a:1", service=FakeService(default="X")
        )
        session = SessionContext(
            sql_dialect="presto", enable_multi_dialect_convert_service=False
        )

        assert converter.convert_sql(SQL, session) == SQL
        assert service.calls == []

    @pytest.mark.parametrize("sql", ["", "select 1", SQL])
    def test_parse_sql_with_dialect_returns_none(self, sql):
        converter, service = make_converter(
            services="a:1", override="http://o/api", service=FakeService(default="X")
        )

        assert converter.parse_sql_with_dialect(sql, SessionContext("presto")) is None
        assert service.calls == []


def test_close_releases_default_http_client():
    converter = HttpDialectConverter(
        settings=DialectConverterSettings(services="a:1", service_url=""),
        override_url_provider=lambda: "",
    )
    converter._client.client = MagicMock()

    converter.close()

    converter._client.client.close.assert_called_once()


def test_conversions_are_counted_by_mode_and_outcome():
    metrics.get_registry().reset()
    converter, _ = make_converter(services="a:1", service=FakeService(default=None))

    converter.convert(SQL, "presto")

    fallback = metrics.counter(
        "dialect_conversion_total",
        "",
        labels={"mode": "pool", "outcome": "fallback"},
    )
    assert fallback.get() == 1
    assert metrics.CONVERSION_LATENCY_SECONDS.count >= 1


def test_attempts_are_counted_per_configured_endpoint_not_per_url():
    metrics.get_registry().reset()
    service = FakeService(answers={pool_url("b:2"): "ok"})
    converter, _ = make_converter(services="a:1;b:2", service=service)
    override = {"url": ""}
    converter._override_url_provider = lambda: override["url"]

    converter.convert(SQL, "presto")
    for i in range(3):
        override["url"] = f"http://override-{i}/api/v1/convert"
        converter.convert(SQL, "presto")

    def attempts(endpoint, outcome):
        return metrics.counter(
            "dialect_conversion_attempt_total",
            "",
            labels={"endpoint": endpoint, "outcome": outcome},
        ).get()

    assert attempts("a:1", "empty") == 1
    assert attempts("b:2", "converted") == 1
    assert attempts("override", "empty") == 3
    assert "override-0" not in metrics.get_registry().export_prometheus()

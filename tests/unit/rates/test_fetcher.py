"""Unit tests for RapidAPIRateFetcher using httpx.MockTransport."""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from zipsalestax.core.exceptions import (
    AuthError,
    MalformedResponse,
    MissingCredentials,
    MissingRateField,
    NetworkError,
    OutOfRange,
    UpstreamError,
)
from zipsalestax.models.settings import ResolverConfig
from zipsalestax.rates.fetcher import (
    RapidAPIRateFetcher,
    build_url,
    extract_raw_rate,
    to_percentage,
)

CONFIG = ResolverConfig(
    api_key="test-key",
    api_host="u-s-a-sales-taxes-per-zip-code.p.rapidapi.com",
    endpoint_path="/{zip}",
)


def _fetcher(handler) -> RapidAPIRateFetcher:
    return RapidAPIRateFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))


def _json(payload, status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=payload)
    return handler


# ---------- pure helpers ----------

class TestToPercentage:
    def test_fraction_scaled(self):
        assert to_percentage(0.0825) == 8.25

    def test_percentage_kept(self):
        assert to_percentage(8.25) == 8.25

    def test_one_is_read_as_a_fraction(self):
        with pytest.raises(OutOfRange):
            to_percentage(1.0)

    def test_zero_accepted(self):
        assert to_percentage(0.0) == 0.0

    def test_upper_bound_inclusive(self):
        assert to_percentage(25.0) == 25.0

    def test_above_range_rejected(self):
        with pytest.raises(OutOfRange) as exc_info:
            to_percentage(30.0)
        assert exc_info.value.percent == 30.0

    def test_negative_rejected(self):
        with pytest.raises(OutOfRange):
            to_percentage(-0.01)

    def test_rounded_to_four_places(self):
        assert to_percentage(0.08253333) == 8.2533


class TestExtractRawRate:
    def test_combined_rate_wins(self):
        assert extract_raw_rate({"estimated_combined_rate": 0.0825, "state_rate": 0.0625}) == 0.0825

    def test_combined_numeric_string(self):
        assert extract_raw_rate({"estimated_combined_rate": "0.0825"}) == 0.0825

    def test_components_summed(self):
        assert extract_raw_rate({"state_rate": 5.0, "estimated_county_rate": 1.0}) == 6.0

    def test_non_numeric_combined_falls_back_to_components(self):
        payload = {"estimated_combined_rate": "n/a", "state_rate": 0.0625, "estimated_city_rate": 0.02}
        assert extract_raw_rate(payload) == pytest.approx(0.0825)

    def test_booleans_are_not_rates(self):
        with pytest.raises(MissingRateField):
            extract_raw_rate({"estimated_combined_rate": True})

    @pytest.mark.parametrize("value", ["1_000", "0x1A", "nan", "inf", "8.25%", ""])
    def test_loose_numeric_strings_rejected(self, value):
        with pytest.raises(MissingRateField):
            extract_raw_rate({"estimated_combined_rate": value})

    @pytest.mark.parametrize("value, expected", [(" 0.0825 ", 0.0825), ("8.", 8.0), (".5", 0.5), ("1e-2", 0.01)])
    def test_decimal_and_exponent_strings_accepted(self, value, expected):
        assert extract_raw_rate({"estimated_combined_rate": value}) == expected

    def test_missing_fields_reports_keys(self):
        with pytest.raises(MissingRateField) as exc_info:
            extract_raw_rate({"zip": "78641", "region": "TX"})
        assert exc_info.value.keys == ["zip", "region"]


class TestBuildUrl:
    def test_substitutes_zip(self):
        assert build_url("api.example.com", "/{zip}", "78641") == "https://api.example.com/78641"

    def test_adds_leading_slash(self):
        assert build_url("api.example.com", "rates/{zip}", "78641") == "https://api.example.com/rates/78641"

    def test_empty_path(self):
        assert build_url("api.example.com", "", "78641") == "https://api.example.com/"

    def test_query_template(self):
        url = build_url("api.example.com", "/lookup?zip={zip}", "78641")
        assert url == "https://api.example.com/lookup?zip=78641"


# ---------- fetch ----------

class TestFetch:
    def test_sends_auth_headers_to_configured_host(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"estimated_combined_rate": 0.0825})

        assert _fetcher(handler).fetch("78641", CONFIG) == 8.25
        request = seen[0]
        assert str(request.url) == "https://u-s-a-sales-taxes-per-zip-code.p.rapidapi.com/78641"
        assert request.headers["X-RapidAPI-Key"] == "test-key"
        assert request.headers["X-RapidAPI-Host"] == CONFIG.api_host
        assert request.headers["Accept"] == "application/json"

    def test_component_sum_as_percentages(self):
        fetcher = _fetcher(_json({"state_rate": 5.0, "estimated_county_rate": 1.0}))
        assert fetcher.fetch("78641", CONFIG) == 6.0

    def test_already_percentage(self):
        assert _fetcher(_json({"estimated_combined_rate": 8.25})).fetch("78641", CONFIG) == 8.25

    def test_zero_rate(self):
        assert _fetcher(_json({"estimated_combined_rate": 0})).fetch("97201", CONFIG) == 0.0

    def test_missing_key_makes_no_request(self):
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={})

        with pytest.raises(MissingCredentials):
            _fetcher(handler).fetch("78641", CONFIG.model_copy(update={"api_key": "  "}))
        assert calls == []

    def test_missing_host(self):
        with pytest.raises(MissingCredentials):
            _fetcher(_json({})).fetch("78641", CONFIG.model_copy(update={"api_host": ""}))

    def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(NetworkError) as exc_info:
            _fetcher(handler).fetch("78641", CONFIG)
        assert "timed out" in str(exc_info.value)

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_errors(self, status):
        with pytest.raises(AuthError) as exc_info:
            _fetcher(_json({"message": "nope"}, status)).fetch("78641", CONFIG)
        assert exc_info.value.status_code == status

    def test_upstream_error_truncates_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="x" * 1000)

        with pytest.raises(UpstreamError) as exc_info:
            _fetcher(handler).fetch("78641", CONFIG)
        assert exc_info.value.status_code == 500
        assert len(exc_info.value.body) == 400

    def test_redirect_status_is_upstream_error(self):
        with pytest.raises(UpstreamError):
            _fetcher(_json({}, 304)).fetch("78641", CONFIG)

    def test_non_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(MalformedResponse):
            _fetcher(handler).fetch("78641", CONFIG)

    def test_json_array_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps([0.0825]).encode())

        with pytest.raises(MalformedResponse):
            _fetcher(handler).fetch("78641", CONFIG)

    def test_out_of_range(self):
        with pytest.raises(OutOfRange):
            _fetcher(_json({"estimated_combined_rate": 30.0})).fetch("78641", CONFIG)


class TestRequestSetupFailures:
    def test_non_ascii_key_is_network_error(self):
        config = CONFIG.model_copy(update={"api_key": "k\u00e9y"})
        with pytest.raises(NetworkError):
            _fetcher(_json({"estimated_combined_rate": 0.0825})).fetch("78641", config)

    @pytest.mark.parametrize("error", [
        httpx.InvalidURL("Invalid URL"),
        httpx.ReadError("connection reset"),
        httpx.TooManyRedirects("redirect loop"),
    ])
    def test_client_errors_are_network_errors(self, error):
        def handler(request: httpx.Request) -> httpx.Response:
            raise error

        with pytest.raises(NetworkError):
            _fetcher(handler).fetch("78641", CONFIG)


class TestDebugLogging:
    def test_failure_logged_when_debug_enabled(self, caplog):
        config = CONFIG.model_copy(update={"debug_log": True})
        with caplog.at_level(logging.ERROR, logger="zipsalestax.rates.fetcher"):
            with pytest.raises(AuthError):
                _fetcher(_json({}, 403)).fetch("78641", config)
        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert "HTTP 403" in record.getMessage()
        assert record.source == "simple-sales-taxes"

    def test_silent_when_debug_disabled(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="zipsalestax.rates.fetcher"):
            with pytest.raises(AuthError):
                _fetcher(_json({}, 401)).fetch("78641", CONFIG)
        assert caplog.records == []

"""Unit tests for the archive.is response parsers."""

from __future__ import annotations

from datetime import datetime, timezone

from adapters.archive_parsing import (
    extract_og_url,
    extract_quoted_after,
    extract_submit_id,
    is_server_error,
    parse_capture_date,
    parse_refresh,
)
from tests.fakes import LANDING_HTML, LANDING_TOKEN


class TestExtractSubmitId:
    def test_simple_marker(self) -> None:
        assert extract_submit_id('<input name="submitid" value="ABC123">') == "ABC123"

    def test_landing_page(self) -> None:
        assert extract_submit_id(LANDING_HTML) == LANDING_TOKEN

    def test_last_marker_wins(self) -> None:
        html = (
            '<input name="submitid" value="OLD"/>'
            '<input type="hidden" name="submitid" value="NEW"/>'
        )
        assert extract_submit_id(html) == "NEW"

    def test_missing_marker(self) -> None:
        assert extract_submit_id('<input name="other" value="ABC123">') is None

    def test_marker_without_value(self) -> None:
        assert extract_submit_id('<input name="submitid">') is None

    def test_unterminated_value(self) -> None:
        assert extract_submit_id('<input name="submitid" value="ABC') is None


class TestExtractOgUrl:
    def test_meta_tag(self) -> None:
        html = '<head><meta property="og:url" content="http://archive.example/xyz"></head>'
        assert extract_og_url(html) == "http://archive.example/xyz"

    def test_extra_attributes_between(self) -> None:
        html = '<meta property="og:url" itemprop="url" content="https://archive.is/AbCd">'
        assert extract_og_url(html) == "https://archive.is/AbCd"

    def test_absent(self) -> None:
        assert extract_og_url("<html><body>nothing here</body></html>") is None

    def test_empty_content(self) -> None:
        assert extract_og_url('<meta property="og:url" content="">') is None

    def test_generic_helper_requires_marker(self) -> None:
        assert extract_quoted_after('value="x"', marker="name=", attribute="value") is None


class TestServerError:
    def test_marker_at_start(self) -> None:
        assert is_server_error("<h1>Server Error</h1><p>try later</p>") is True

    def test_leading_whitespace(self) -> None:
        assert is_server_error("\n  <h1>Server Error</h1>") is True

    def test_marker_elsewhere(self) -> None:
        assert is_server_error("<p>ok</p><h1>Server Error</h1>") is False


class TestParseRefresh:
    def test_equals_form(self) -> None:
        assert parse_refresh("0=http://archive.example/abc") == "http://archive.example/abc"

    def test_url_form(self) -> None:
        assert parse_refresh("0;url=https://archive.is/wip/AbCd") == "https://archive.is/wip/AbCd"

    def test_keeps_later_equals(self) -> None:
        assert parse_refresh("0;url=https://archive.is/x?a=1") == "https://archive.is/x?a=1"

    def test_no_equals(self) -> None:
        assert parse_refresh("5") is None


class TestParseCaptureDate:
    def test_rfc1123(self) -> None:
        assert parse_capture_date("Sun, 07 Oct 2018 16:51:57 GMT") == datetime(
            2018, 10, 7, 16, 51, 57, tzinfo=timezone.utc
        )

    def test_space_padded_day(self) -> None:
        assert parse_capture_date("Sun,  7 Oct 2018 16:51:57 GMT") == datetime(
            2018, 10, 7, 16, 51, 57, tzinfo=timezone.utc
        )

    def test_missing(self) -> None:
        assert parse_capture_date(None) is None

    def test_unparsable(self) -> None:
        assert parse_capture_date("yesterday") is None

"""Unit tests for TimeGate header parsing in memento_resolver/tools/memento_tool.py.

Covers one case per header shape:
  - Location only
  - Link with a rel="last memento" entry
  - Link without "last memento" (heuristic scan from the end)
  - malformed or absent headers
plus memento timestamp parsing.
"""

from datetime import datetime, timezone

import httpx

from memento_resolver.tools.memento_tool import (
    extract_link_url,
    find_last_memento,
    find_memento_heuristic,
    find_memento_url,
    link_relation,
    parse_memento_datetime,
    split_link_header,
    timestamp_from_memento_url,
)

IA_LINK_HEADER = (
    '<https://x.test/>; rel="original", '
    '<https://web.archive.org/web/timemap/link/https://x.test/>; rel="timemap"; type="application/link-format", '
    '<https://web.archive.org/web/20010101000000/https://x.test/>; rel="first memento"; datetime="Mon, 01 Jan 2001 00:00:00 GMT", '
    '<https://web.archive.org/web/20230615120000/https://x.test/>; rel="last memento"; datetime="Thu, 15 Jun 2023 12:00:00 GMT"'
)


# ---------------------------------------------------------------------------
# 1. Link header primitives
# ---------------------------------------------------------------------------
class TestLinkPrimitives:
    def test_split_drops_empty_entries(self) -> None:
        assert split_link_header("<a>; rel=x, ,<b>; rel=y") == ["<a>; rel=x", "<b>; rel=y"]

    def test_extract_url_between_brackets(self) -> None:
        assert extract_link_url('<https://a.test/1>; rel="memento"') == "https://a.test/1"

    def test_extract_url_without_brackets_is_none(self) -> None:
        assert extract_link_url('rel="memento"') is None
        assert extract_link_url("<https://a.test/unterminated") is None

    def test_link_relation_normalizes_quotes_and_case(self) -> None:
        assert link_relation('<u>; rel="Last  Memento"; datetime="x"') == "last memento"
        assert link_relation("<u>; rel=memento") == "memento"
        assert link_relation("<u>; type=text/html") is None


# ---------------------------------------------------------------------------
# 2. Location header
# ---------------------------------------------------------------------------
class TestLocationHeader:
    def test_location_used_verbatim(self) -> None:
        headers = httpx.Headers({"Location": "https://a.example/web/20230615120000/https://x.test"})
        assert find_memento_url(headers) == "https://a.example/web/20230615120000/https://x.test"

    def test_location_takes_precedence_over_link(self) -> None:
        headers = httpx.Headers({"Location": "https://loc.test/1", "Link": IA_LINK_HEADER})
        assert find_memento_url(headers) == "https://loc.test/1"


# ---------------------------------------------------------------------------
# 3. Link header with rel="last memento"
# ---------------------------------------------------------------------------
class TestLastMementoLink:
    def test_picks_last_memento_entry_only(self) -> None:
        headers = httpx.Headers({"Link": IA_LINK_HEADER})
        assert find_memento_url(headers) == "https://web.archive.org/web/20230615120000/https://x.test/"

    def test_last_memento_wins_over_later_memento_entries(self) -> None:
        entries = split_link_header(
            '<https://m.test/last>; rel="last memento", <https://m.test/other>; rel="memento"'
        )
        assert find_last_memento(entries) == "https://m.test/last"


# ---------------------------------------------------------------------------
# 4. Link header without "last memento"
# ---------------------------------------------------------------------------
class TestMementoHeuristic:
    def test_scans_from_the_end(self) -> None:
        link = (
            '<https://m.test/first>; rel="first memento", '
            '<https://m.test/second>; rel="memento", '
            '<https://m.test/>; rel="original"'
        )
        headers = httpx.Headers({"Link": link})
        assert find_memento_url(headers) == "https://m.test/second"

    def test_skips_matching_entries_without_url(self) -> None:
        entries = ['<https://m.test/1>; rel="memento"', 'memento fragment without url']
        assert find_memento_heuristic(entries) == "https://m.test/1"


# ---------------------------------------------------------------------------
# 5. Malformed or absent headers
# ---------------------------------------------------------------------------
class TestMissingHeaders:
    def test_no_headers(self) -> None:
        assert find_memento_url(httpx.Headers({})) is None

    def test_link_without_any_memento(self) -> None:
        headers = httpx.Headers({"Link": '<https://x.test/>; rel="original"'})
        assert find_memento_url(headers) is None

    def test_empty_location_falls_through_to_link(self) -> None:
        headers = httpx.Headers({"Location": "", "Link": '<https://m.test/9>; rel="last memento"'})
        assert find_memento_url(headers) == "https://m.test/9"


# ---------------------------------------------------------------------------
# 6. Memento timestamps
# ---------------------------------------------------------------------------
class TestMementoTimestamps:
    def test_parse_full_timestamp(self) -> None:
        parsed = parse_memento_datetime("20230615120000")
        assert parsed == datetime(2023, 6, 15, 12, 0, 0, tzinfo=timezone.utc)

    def test_month_is_one_based(self) -> None:
        parsed = parse_memento_datetime("20240131235958")
        assert (parsed.year, parsed.month, parsed.day) == (2024, 1, 31)
        assert (parsed.hour, parsed.minute, parsed.second) == (23, 59, 58)

    def test_invalid_calendar_values_are_none(self) -> None:
        assert parse_memento_datetime("20231315120000") is None
        assert parse_memento_datetime("20230230000000") is None

    def test_wrong_length_is_none(self) -> None:
        assert parse_memento_datetime("2023061512") is None
        assert parse_memento_datetime("2023O615120000") is None

    def test_timestamp_from_url(self) -> None:
        url = "https://a.example/web/20230615120000/https://x.test"
        assert timestamp_from_memento_url(url) == datetime(2023, 6, 15, 12, tzinfo=timezone.utc)

    def test_timestamp_from_url_with_modifier(self) -> None:
        url = "https://web.archive.org/web/20190102030405id_/https://x.test/"
        assert timestamp_from_memento_url(url) == datetime(2019, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_url_without_timestamp(self) -> None:
        assert timestamp_from_memento_url("https://archive.today/abc123") is None

    def test_longer_digit_runs_are_not_timestamps(self) -> None:
        assert timestamp_from_memento_url("https://a.test/id/1234567890123456") is None

"""
Tests for vendor order listings.

Tests: pagination clamping, ordering, scope, soft-delete exclusion, search,
date ranges and the "today" window.
"""
import time
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from services import order_service
from services.order_service import normalize_pagination, todays_window


class TestNormalizePagination:
    """Lenient page/limit parsing."""

    @pytest.mark.unit
    def test_defaults(self):
        assert normalize_pagination() == (1, 10)

    @pytest.mark.unit
    @pytest.mark.parametrize("page", [0, -5, "0", "abc", None, ""])
    def test_bad_page_becomes_one(self, page):
        assert normalize_pagination(page, 10)[0] == 1

    @pytest.mark.unit
    def test_limit_clamped(self):
        assert normalize_pagination(1, 1000) == (1, 100)
        assert normalize_pagination(1, 0) == (1, 1)
        assert normalize_pagination(1, -3) == (1, 1)

    @pytest.mark.unit
    def test_non_numeric_limit_uses_default(self):
        assert normalize_pagination("2", "lots") == (2, 10)

    @pytest.mark.unit
    def test_numeric_strings(self):
        assert normalize_pagination("3", "25") == (3, 25)
        assert normalize_pagination("2.7", "5.9") == (2, 5)

    @pytest.mark.unit
    def test_huge_page_keeps_offset_in_64_bits(self):
        page, limit = normalize_pagination("99999999999999999999", 10)
        assert limit == 10
        assert (page - 1) * limit <= 2**63 - 1
        assert page > 1

    @pytest.mark.unit
    def test_infinite_page_uses_default(self):
        assert normalize_pagination("inf", 10) == (1, 10)


class TestTodaysWindow:

    @pytest.mark.unit
    def test_utc_window(self):
        now = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)
        start, end = todays_window(now, timezone.utc)
        assert start == datetime(2026, 10, 19, 0, 0, 0)
        assert end == datetime(2026, 10, 19, 23, 59, 59, 999999)

    @pytest.mark.unit
    def test_offset_zone_is_converted_to_utc(self):
        """Lagos (UTC+1) midnight is 23:00 UTC the previous day."""
        lagos = timezone(timedelta(hours=1))
        now = datetime(2026, 10, 19, 0, 30, tzinfo=lagos)
        start, end = todays_window(now, lagos)
        assert start == datetime(2026, 10, 18, 23, 0, 0)
        assert end == datetime(2026, 10, 19, 22, 59, 59, 999999)

    @pytest.mark.unit
    def test_dst_end_day_in_named_zone(self):
        """New York falls back on 2026-11-01: midnight is EDT, end of day is EST."""
        now = datetime(2026, 11, 1, 15, 0, tzinfo=timezone.utc)
        start, end = todays_window(now, ZoneInfo("America/New_York"))
        assert start == datetime(2026, 11, 1, 4, 0, 0)
        assert end == datetime(2026, 11, 2, 4, 59, 59, 999999)

    @pytest.mark.unit
    @pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
    def test_dst_end_day_in_server_local_zone(self, monkeypatch):
        monkeypatch.setenv("TZ", "America/New_York")
        time.tzset()
        try:
            now = datetime(2026, 11, 1, 15, 0, tzinfo=timezone.utc)
            start, end = todays_window(now, None)
        finally:
            monkeypatch.undo()
            time.tzset()
        assert start == datetime(2026, 11, 1, 4, 0, 0)
        assert end == datetime(2026, 11, 2, 4, 59, 59, 999999)


@pytest.mark.asyncio
async def test_page_two_of_twenty_five(db_session, open_vendor, make_order):
    base = datetime(2026, 10, 1, 12, 0)
    for i in range(25):
        await make_order(open_vendor, created_at=base + timedelta(minutes=i), order_id=f"ST-RANK{i:07d}")

    result = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id, page=2, limit=10)

    assert result["total"] == 25
    assert result["total_pages"] == 3
    assert result["page"] == 2
    assert result["limit"] == 10
    # Newest first: ranks 11..20 are minutes 14 down to 5
    assert [o.order_id for o in result["orders"]] == [f"ST-RANK{i:07d}" for i in range(14, 4, -1)]


@pytest.mark.asyncio
async def test_out_of_range_pagination_matches_clamped(db_session, open_vendor, make_order):
    base = datetime(2026, 10, 1, 12, 0)
    for i in range(3):
        await make_order(open_vendor, created_at=base + timedelta(minutes=i))

    page_zero = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id, page=0, limit=0)
    page_one = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id, page=1, limit=1)
    assert [o.id for o in page_zero["orders"]] == [o.id for o in page_one["orders"]]
    assert page_zero["limit"] == 1
    assert page_zero["total_pages"] == 3

    huge = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id, page=-5, limit=1000)
    assert huge["page"] == 1
    assert huge["limit"] == 100
    assert len(huge["orders"]) == 3


@pytest.mark.asyncio
async def test_empty_result(db_session, open_vendor):
    result = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id)
    assert result == {"orders": [], "total": 0, "page": 1, "limit": 10, "total_pages": 0}


@pytest.mark.asyncio
async def test_scope_and_soft_delete(db_session, open_vendor, closed_vendor, make_order):
    when = datetime(2026, 10, 1, 9, 0)
    mine = await make_order(open_vendor, created_at=when)
    await make_order(open_vendor, created_at=when, is_deleted=True)
    await make_order(closed_vendor, created_at=when)

    result = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id)
    assert [o.id for o in result["orders"]] == [mine.id]
    assert result["total"] == 1

    # Soft-deleted rows are excluded from total as well, on every page
    result = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id, page=5)
    assert result["orders"] == []
    assert result["total"] == 1


@pytest.mark.asyncio
async def test_search_matches_name_phone_or_order_id(db_session, open_vendor, make_order):
    when = datetime(2026, 10, 1, 9, 0)
    by_name = await make_order(open_vendor, created_at=when, customer_name="Chioma Eze")
    by_phone = await make_order(open_vendor, created_at=when, phone_number="08129998877")
    by_code = await make_order(open_vendor, created_at=when, order_id="ST-abcXYZ123456")
    await make_order(open_vendor, created_at=when, customer_name="Tunde Bello", phone_number="0700")

    async def search(term):
        result = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id, search=term)
        return {o.id for o in result["orders"]}, result["total"]

    assert await search("  chioma ") == ({by_name.id}, 1)
    assert await search("99988") == ({by_phone.id}, 1)
    assert await search("abcxyz") == ({by_code.id}, 1)


@pytest.mark.asyncio
async def test_blank_search_is_ignored(db_session, open_vendor, make_order):
    when = datetime(2026, 10, 1, 9, 0)
    for _ in range(2):
        await make_order(open_vendor, created_at=when)

    result = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id, search="   ")
    assert result["total"] == 2


@pytest.mark.asyncio
async def test_search_is_literal(db_session, open_vendor, make_order):
    """LIKE wildcards in the term match themselves only."""
    when = datetime(2026, 10, 1, 9, 0)
    await make_order(open_vendor, created_at=when, customer_name="Ada Obi")

    result = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id, search="%")
    assert result["total"] == 0
    result = await order_service.find_all_vendor_orders(db_session, vendor_id=open_vendor.id, search="A_a")
    assert result["total"] == 0


@pytest.mark.asyncio
async def test_search_folds_non_ascii_case(db_session, open_vendor, make_order):
    when = datetime(2026, 10, 1, 9, 0)
    hit = await make_order(open_vendor, created_at=when, customer_name="ÉMILE Ọlá")
    await make_order(open_vendor, created_at=when, customer_name="Emile Ade")

    for term in ("émile", "ÉMILE", "ọlá"):
        result = await order_service.find_all_vendor_orders(
            db_session, vendor_id=open_vendor.id, search=term
        )
        assert [o.id for o in result["orders"]] == [hit.id], term
        assert result["total"] == 1


@pytest.mark.asyncio
async def test_date_range_is_inclusive(db_session, open_vendor, make_order):
    start = datetime(2026, 10, 5, 0, 0)
    end = datetime(2026, 10, 6, 23, 59, 59)
    inside_start = await make_order(open_vendor, created_at=start)
    inside_end = await make_order(open_vendor, created_at=end)
    await make_order(open_vendor, created_at=start - timedelta(seconds=1))
    await make_order(open_vendor, created_at=end + timedelta(seconds=1))

    result = await order_service.find_all_vendor_orders(
        db_session, vendor_id=open_vendor.id, start_date=start, end_date=end
    )
    assert {o.id for o in result["orders"]} == {inside_start.id, inside_end.id}
    assert result["total"] == 2


@pytest.mark.asyncio
async def test_single_date_bound_is_ignored(db_session, open_vendor, make_order):
    await make_order(open_vendor, created_at=datetime(2026, 1, 1))
    await make_order(open_vendor, created_at=datetime(2026, 12, 1))

    only_start = await order_service.find_all_vendor_orders(
        db_session, vendor_id=open_vendor.id, start_date=datetime(2026, 6, 1)
    )
    only_end = await order_service.find_all_vendor_orders(
        db_session, vendor_id=open_vendor.id, end_date=datetime(2026, 6, 1)
    )
    assert only_start["total"] == 2
    assert only_end["total"] == 2


@pytest.mark.asyncio
async def test_todays_orders_window(db_session, open_vendor, closed_vendor, make_order):
    now = datetime(2026, 10, 19, 14, 0, tzinfo=timezone.utc)
    morning = await make_order(open_vendor, created_at=datetime(2026, 10, 19, 0, 0, 0))
    late = await make_order(open_vendor, created_at=datetime(2026, 10, 19, 23, 59, 59, 999000))
    await make_order(open_vendor, created_at=datetime(2026, 10, 18, 23, 59, 59))
    await make_order(open_vendor, created_at=datetime(2026, 10, 20, 0, 0, 0))
    await make_order(open_vendor, created_at=datetime(2026, 10, 19, 12, 0), is_deleted=True)
    await make_order(closed_vendor, created_at=datetime(2026, 10, 19, 12, 0))

    result = await order_service.get_todays_vendor_orders(
        db_session, vendor_id=open_vendor.id, now=now, tz=timezone.utc
    )
    assert [o.id for o in result["orders"]] == [late.id, morning.id]
    assert result["total"] == 2
    assert result["total_pages"] == 1


@pytest.mark.asyncio
async def test_todays_orders_with_search(db_session, open_vendor, make_order):
    now = datetime(2026, 10, 19, 14, 0, tzinfo=timezone.utc)
    hit = await make_order(open_vendor, created_at=datetime(2026, 10, 19, 10, 0), customer_name="Kemi Ade")
    await make_order(open_vendor, created_at=datetime(2026, 10, 19, 11, 0), customer_name="Bola Ade")
    await make_order(open_vendor, created_at=datetime(2026, 10, 18, 10, 0), customer_name="Kemi Ade")

    result = await order_service.get_todays_vendor_orders(
        db_session, vendor_id=open_vendor.id, search="KEMI", now=now, tz=timezone.utc
    )
    assert [o.id for o in result["orders"]] == [hit.id]

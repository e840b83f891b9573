"""CheapShark fetcher: normalization, retry budget and failure handling."""

import httpx
import pytest

from scrapers.base import Deal, FetchStatus
from scrapers.cheapshark import FETCH_ERROR_MESSAGE, normalize_deals
from tests.conftest import make_deal, make_record


def _always_fail(request):
    return httpx.Response(503, json={"error": "unavailable"})


def _connection_refused(request):
    raise httpx.ConnectError("connection refused", request=request)


@pytest.mark.asyncio
async def test_fetch_keeps_only_steam_and_gog(scraper_for):
    records = [
        make_record("1", store_id="1"),
        make_record("2", store_id="2"),
        make_record("3", store_id="7"),
        make_record("4", store_id="11"),
        make_record("5", store_id="1"),
    ]
    scraper, transport = scraper_for(lambda request: httpx.Response(200, json=records))

    result = await scraper.fetch("Portal")

    assert result.status is FetchStatus.OK
    assert [deal.game_id for deal in result.deals] == ["1", "3", "5"]
    assert result.raw_count == 5
    assert result.attempts == 1
    assert not result.no_results


@pytest.mark.asyncio
async def test_fetch_sends_title_query(scraper_for):
    scraper, transport = scraper_for(lambda request: httpx.Response(200, json=[]))

    await scraper.fetch("Half-Life 2")

    request = transport.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/1.0/deals"
    assert request.url.params["title"] == "Half-Life 2"


@pytest.mark.asyncio
async def test_empty_response_is_no_results(scraper_for):
    scraper, _ = scraper_for(lambda request: httpx.Response(200, json=[]))

    result = await scraper.fetch("Zzzznotagame")

    assert result.status is FetchStatus.NO_RESULTS
    assert result.deals == []
    assert result.error is None
    assert result.raw_count == 0


@pytest.mark.asyncio
async def test_only_unsupported_stores_is_no_results(scraper_for):
    records = [make_record("1", store_id="2"), make_record("2", store_id="25")]
    scraper, _ = scraper_for(lambda request: httpx.Response(200, json=records))

    result = await scraper.fetch("Portal")

    assert result.status is FetchStatus.NO_RESULTS
    assert result.raw_count == 2
    assert result.error is None


@pytest.mark.asyncio
@pytest.mark.parametrize("retries, attempts", [(0, 1), (1, 2), (3, 4)])
async def test_retry_budget(scraper_for, retries, attempts):
    scraper, transport = scraper_for(_always_fail)

    result = await scraper.fetch("Portal", retries=retries)

    assert result.status is FetchStatus.ERROR
    assert result.error == FETCH_ERROR_MESSAGE
    assert result.attempts == attempts
    assert len(transport.requests) == attempts


@pytest.mark.asyncio
async def test_default_retry_budget_is_three(scraper_for):
    scraper, transport = scraper_for(_connection_refused)

    result = await scraper.fetch("Portal")

    assert result.status is FetchStatus.ERROR
    assert len(transport.requests) == 4


@pytest.mark.asyncio
async def test_recovers_after_transient_failures(scraper_for):
    responses = iter([
        httpx.Response(500),
        httpx.Response(502),
        httpx.Response(200, json=[make_record("9", store_id="7")]),
    ])
    scraper, transport = scraper_for(lambda request: next(responses))

    result = await scraper.fetch("Portal", retries=3)

    assert result.status is FetchStatus.OK
    assert result.attempts == 3
    assert [request.url.params["title"] for request in transport.requests] == ["Portal"] * 3


@pytest.mark.asyncio
async def test_undecodable_body_is_not_retried(scraper_for):
    scraper, transport = scraper_for(lambda request: httpx.Response(200, text="<html>oops</html>"))

    result = await scraper.fetch("Portal", retries=3)

    assert result.status is FetchStatus.ERROR
    assert result.error == FETCH_ERROR_MESSAGE
    assert len(transport.requests) == 1


@pytest.mark.asyncio
async def test_non_list_body_is_an_error(scraper_for):
    scraper, transport = scraper_for(lambda request: httpx.Response(200, json={"error": "bad"}))

    result = await scraper.fetch("Portal")

    assert result.status is FetchStatus.ERROR
    assert len(transport.requests) == 1


@pytest.mark.asyncio
async def test_backoff_between_attempts(scraper_for, monkeypatch):
    ranges = []

    def fake_uniform(low, high):
        ranges.append((low, high))
        return 0.0

    monkeypatch.setattr("scrapers.cheapshark.random.uniform", fake_uniform)
    scraper, _ = scraper_for(_always_fail)
    scraper.retry_backoff = 0.5

    await scraper.fetch("Portal", retries=2)

    assert ranges == [(0, 0.5), (0, 0.5)]


def test_normalize_deals_preserves_order():
    deals = [make_deal("a", store_id="7"), make_deal("b", store_id="3"), make_deal("c", store_id="1")]
    assert [deal.game_id for deal in normalize_deals(deals)] == ["a", "c"]


def test_deal_from_api_decodes_strings():
    deal = Deal.from_api(make_record("42", sale=4.99, normal=19.99, savings=75.037519))

    assert deal.game_id == "42"
    assert deal.sale_price == pytest.approx(4.99)
    assert deal.normal_price == pytest.approx(19.99)
    assert deal.is_on_sale is True
    assert deal.savings == pytest.approx(75.037519)


def test_deal_from_api_tolerates_missing_fields():
    deal = Deal.from_api({"gameID": "1", "salePrice": "n/a", "normalPrice": "10"})

    assert deal.title == ""
    assert deal.sale_price == 0.0
    assert deal.is_on_sale is True
    assert deal.thumb is None


def test_deal_to_dict_keeps_unmodeled_fields():
    record = make_record("7", store_id="7")
    data = Deal.from_api(record).to_dict()

    assert data["dealID"] == record["dealID"]
    assert data["internalName"] == record["internalName"]
    assert data["gameID"] == "7"
    assert data["isOnSale"] == "1"
    assert data["salePrice"] == record["salePrice"]


def test_deal_to_dict_fills_missing_modeled_fields():
    data = Deal.from_api({"gameID": "7", "storeID": "1", "salePrice": 5, "normalPrice": 10}).to_dict()

    assert data["isOnSale"] is True
    assert data["title"] == ""
    assert data["savings"] == 0.0
    assert data["thumb"] is None

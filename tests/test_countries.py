import pytest
import requests

from trailblazer.tools.countries import COUNTRY_PLACEHOLDER, CountriesClient, prepare_country_details
from trailblazer.utils.exceptions import BadRequestError, ExternalServiceError, NotFoundError

from tests.helpers import FakeResponse, FakeSession

FRANCE_RECORD = {
    "name": {"common": "France", "official": "French Republic"},
    "capital": ["Paris"],
    "currencies": {"EUR": {"name": "Euro", "symbol": "€"}},
    "languages": {"fra": "French"},
    "region": "Europe",
    "subregion": "Western Europe",
    "population": 67391582,
    "timezones": ["UTC-10:00", "UTC+01:00"],
    "flags": {"png": "https://flagcdn.com/w320/fr.png", "svg": "https://flagcdn.com/fr.svg"},
    "maps": {"googleMaps": "https://goo.gl/maps/g7QxxSFsWyTPKuzd7"},
    "car": {"signs": ["F"], "side": "right"},
    "startOfWeek": "monday",
    "independent": True,
    "unMember": True,
    "altSpellings": ["FR", "French Republic"],
    "borders": ["AND", "BEL", "DEU", "ITA", "LUX", "MCO", "ESP", "CHE"],
}

FRENCH_POLYNESIA = {"name": {"common": "French Polynesia", "official": "French Polynesia"}}


def make_client(response=None, error=None):
    session = FakeSession(response, error)
    return CountriesClient("https://restcountries.com/v3.1/", timeout=5, session=session), session


def test_prepare_country_details():
    assert prepare_country_details(FRANCE_RECORD) == {
        "common_name": "France",
        "official_name": "French Republic",
        "capital_city": "Paris",
        "currencies": "Euro (€)",
        "languages": "French",
        "region": "Europe",
        "subregion": "Western Europe",
        "population": 67391582,
        "timezones": "UTC-10:00, UTC+01:00",
        "flag": "https://flagcdn.com/fr.svg",
        "google_maps": "https://goo.gl/maps/g7QxxSFsWyTPKuzd7",
        "car_side": "right",
        "car_signs": "F",
        "start_of_week": "monday",
        "independent": True,
        "un_member": True,
        "alt_spellings": "FR, French Republic",
        "borders": "AND, BEL, DEU, ITA, LUX, MCO, ESP, CHE",
    }


def test_prepare_country_details_with_sparse_record():
    details = prepare_country_details({"name": {"common": "Antarctica"}})
    assert details["common_name"] == "Antarctica"
    assert details["capital_city"] is None
    assert details["currencies"] is None
    assert details["population"] == 0
    assert details["independent"] is False
    assert details["borders"] is None


def test_prepare_country_details_joins_multiple_values():
    details = prepare_country_details({
        "currencies": {"CHF": {"name": "Swiss franc", "symbol": "Fr."}},
        "languages": {"fra": "French", "gsw": "Swiss German"},
    })
    assert details["currencies"] == "Swiss franc (Fr.)"
    assert details["languages"] == "French, Swiss German"


async def test_lookup_picks_exact_match():
    client, session = make_client(FakeResponse(200, [FRENCH_POLYNESIA, FRANCE_RECORD]))
    details = await client.lookup("france")
    assert details["common_name"] == "France"
    assert session.calls[0]["url"] == "https://restcountries.com/v3.1/name/france"
    assert session.calls[0]["timeout"] == 5


async def test_lookup_quotes_the_name():
    client, session = make_client(FakeResponse(200, [{"name": {"common": "United States"}}]))
    await client.lookup("United States")
    assert session.calls[0]["url"].endswith("/name/United%20States")


async def test_lookup_without_exact_match():
    client, _ = make_client(FakeResponse(200, [FRENCH_POLYNESIA]))
    with pytest.raises(NotFoundError) as exc_info:
        await client.lookup("French")
    assert exc_info.value.message == 'No exact match found for "French".'


async def test_lookup_unknown_country():
    client, _ = make_client(FakeResponse(404, {"status": 404, "message": "Not Found"}))
    with pytest.raises(NotFoundError):
        await client.lookup("Atlantis")


async def test_lookup_blank_name_makes_no_call():
    client, session = make_client()
    with pytest.raises(BadRequestError):
        await client.lookup("  ")
    assert session.calls == []


async def test_lookup_transport_failure():
    client, _ = make_client(error=requests.exceptions.ConnectionError("refused"))
    with pytest.raises(ExternalServiceError):
        await client.lookup("France")


async def test_lookup_server_error():
    client, _ = make_client(FakeResponse(500, text="boom"))
    with pytest.raises(ExternalServiceError) as exc_info:
        await client.lookup("France")
    assert "HTTP 500" in exc_info.value.message


async def test_lookup_safely_success():
    client, _ = make_client(FakeResponse(200, [FRANCE_RECORD]))
    result = await client.lookup_safely("France")
    assert result.ok
    assert result.payload["capital_city"] == "Paris"
    assert result.error is None


async def test_lookup_safely_returns_placeholder():
    client, _ = make_client(FakeResponse(404))
    result = await client.lookup_safely("Atlantis")
    assert not result.ok
    assert result.payload == COUNTRY_PLACEHOLDER
    assert result.error


async def test_lookup_safely_on_timeout():
    client, _ = make_client(error=requests.exceptions.Timeout())
    result = await client.lookup_safely("France")
    assert result.payload == {"message": "Destination details unavailable."}


async def test_lookup_safely_on_non_list_body():
    client, _ = make_client(FakeResponse(200, {"status": 200, "message": "maintenance"}))
    result = await client.lookup_safely("France")
    assert not result.ok
    assert result.payload == COUNTRY_PLACEHOLDER
    assert "unexpected payload" in result.error


async def test_lookup_rejects_non_list_body():
    client, _ = make_client(FakeResponse(200, {"status": 200, "message": "maintenance"}))
    with pytest.raises(ExternalServiceError):
        await client.lookup("France")


async def test_lookup_safely_on_list_of_non_objects():
    client, _ = make_client(FakeResponse(200, ["France"]))
    result = await client.lookup_safely("France")
    assert result.payload == COUNTRY_PLACEHOLDER


async def test_lookup_safely_on_malformed_record():
    client, _ = make_client(FakeResponse(200, [{"name": {"common": "France"}, "currencies": ["EUR"]}]))
    result = await client.lookup_safely("France")
    assert not result.ok
    assert result.payload == COUNTRY_PLACEHOLDER
    assert "malformed record" in result.error


async def test_lookup_skips_records_without_a_name():
    client, _ = make_client(FakeResponse(200, [{"name": "France"}, FRANCE_RECORD]))
    assert (await client.lookup("France"))["common_name"] == "France"


async def test_search_countries():
    client, _ = make_client(FakeResponse(200, [FRANCE_RECORD, FRENCH_POLYNESIA, FRANCE_RECORD]))
    assert await client.search_countries("fr") == ["France", "French Polynesia"]


async def test_search_countries_limit():
    client, _ = make_client(FakeResponse(200, [FRANCE_RECORD, FRENCH_POLYNESIA]))
    assert await client.search_countries("fr", limit=1) == ["France"]


async def test_search_countries_no_match():
    client, _ = make_client(FakeResponse(404))
    assert await client.search_countries("zzz") == []


async def test_search_countries_non_list_body():
    client, _ = make_client(FakeResponse(200, {"message": "maintenance"}))
    with pytest.raises(ExternalServiceError):
        await client.search_countries("fr")


async def test_search_countries_blank_query():
    client, _ = make_client()
    with pytest.raises(BadRequestError):
        await client.search_countries("")


def test_close_closes_session():
    client, session = make_client()
    client.close()
    assert session.closed

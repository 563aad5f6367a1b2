import pytest
import requests
import responses
from responses import matchers

from catalog_search.clients.sheets import SheetsClient, parse_query_response, parse_worksheet_feed
from catalog_search.exceptions import EmptyResultError, NetworkError, ParseError
from catalog_search.models import CatalogEntry

QUERY_URL = "https://docs.google.com/spreadsheets/d/SHEET/gviz/tq"
FEED_URL = "https://spreadsheets.google.com/feeds/worksheets/SHEET/public/basic"


@pytest.fixture()
def client() -> SheetsClient:
    return SheetsClient("SHEET", session=requests.Session(), timeout=1.0)


def test_parse_query_response_trims_and_drops_untitled_rows(query_body):
    body = query_body(
        [
            ("  Nasi Goreng ", " Pedas  "),
            (None, "orphan info"),
            ("", "blank title"),
            ("Es Teh", None),
        ]
    )

    entries = parse_query_response(body)

    assert entries == [
        CatalogEntry(title="Nasi Goreng", info="Pedas"),
        CatalogEntry(title="Es Teh", info=""),
    ]


def test_parse_query_response_reads_only_first_two_cells(query_body):
    body = query_body([{"c": [{"v": "Menu"}, {"v": "Info"}, {"v": "ignored"}]}, {"c": [{"v": 12.0}]}])

    entries = parse_query_response(body)

    assert entries == [CatalogEntry(title="Menu", info="Info"), CatalogEntry(title="12", info="")]


def test_parse_query_response_requires_envelope():
    with pytest.raises(ParseError):
        parse_query_response('{"table": {"rows": []}}')


def test_parse_query_response_rejects_malformed_json():
    body = "/*O_o*/\ngoogle.visualization.Query.setResponse({not json);"

    with pytest.raises(ParseError):
        parse_query_response(body)


def test_parse_query_response_rejects_rows_without_cells(query_body):
    with pytest.raises(ParseError):
        parse_query_response(query_body([{"x": []}]))


def test_parse_query_response_without_titles_is_empty(query_body):
    with pytest.raises(EmptyResultError):
        parse_query_response(query_body([(None, "only info")]))

    with pytest.raises(EmptyResultError):
        parse_query_response(query_body([]))


def test_parse_worksheet_feed_lists_titles():
    payload = {"feed": {"entry": [{"title": {"$t": "Menu"}}, {"title": {"$t": "Arsip"}}]}}

    assert parse_worksheet_feed(payload) == ["Menu", "Arsip"]


def test_parse_worksheet_feed_without_entries_is_empty():
    with pytest.raises(EmptyResultError):
        parse_worksheet_feed({"feed": {}})


def test_parse_worksheet_feed_skips_entries_without_title():
    payload = {"feed": {"entry": [{"title": {"$t": "Menu"}}, {}, {"title": "Arsip"}, "junk"]}}

    assert parse_worksheet_feed(payload) == ["Menu"]


@pytest.mark.parametrize(
    "entries",
    [[{"title": "Sheet1"}], [{"title": None}, {}], {"title": {"$t": "Menu"}}],
)
def test_parse_worksheet_feed_without_titled_entries_is_malformed(entries):
    with pytest.raises(ParseError):
        parse_worksheet_feed({"feed": {"entry": entries}})


@responses.activate
def test_fetch_by_gid_sends_default_view_query(client, query_body):
    responses.add(
        responses.GET,
        QUERY_URL,
        body=query_body([("Nasi Goreng", "Pedas")]),
        status=200,
        match=[matchers.query_param_matcher({"tqx": "out:json", "gid": "0"})],
    )

    entries = client.fetch_by_gid(0)

    assert entries == [CatalogEntry(title="Nasi Goreng", info="Pedas")]


@responses.activate
def test_fetch_by_name_sends_sheet_name(client, query_body):
    responses.add(
        responses.GET,
        QUERY_URL,
        body=query_body([("Soto", "Kuah")]),
        status=200,
        match=[matchers.query_param_matcher({"tqx": "out:json", "sheet": "Menu Harian"})],
    )

    assert client.fetch_by_name("Menu Harian") == [CatalogEntry(title="Soto", info="Kuah")]


@responses.activate
def test_non_success_status_raises_network_error(client):
    responses.add(responses.GET, QUERY_URL, body="Server exploded", status=500)

    with pytest.raises(NetworkError) as excinfo:
        client.fetch_by_gid(0)

    assert excinfo.value.status == 500
    assert "Server exploded" in str(excinfo.value)


@responses.activate
def test_connection_failure_raises_network_error(client):
    responses.add(responses.GET, QUERY_URL, body=requests.ConnectionError("offline"))

    with pytest.raises(NetworkError) as excinfo:
        client.fetch_by_gid(0)

    assert excinfo.value.status is None


@responses.activate
def test_list_worksheets_reads_feed(client):
    responses.add(
        responses.GET,
        FEED_URL,
        json={"feed": {"entry": [{"title": {"$t": "REPORTAN"}}]}},
        status=200,
        match=[matchers.query_param_matcher({"alt": "json"})],
    )

    assert client.list_worksheets() == ["REPORTAN"]


@responses.activate
def test_list_worksheets_rejects_non_json(client):
    responses.add(responses.GET, FEED_URL, body="<html>login</html>", status=200)

    with pytest.raises(ParseError):
        client.list_worksheets()


@responses.activate
def test_user_agent_override_stays_with_its_client(query_body):
    responses.add(responses.GET, QUERY_URL, body=query_body([("Menu", "")]), status=200)
    session = requests.Session()
    custom = SheetsClient("SHEET", session=session, user_agent="kiosk/1.0")
    plain = SheetsClient("SHEET", session=session)
    session_agent = session.headers["User-Agent"]

    custom.fetch_by_gid(0)
    plain.fetch_by_gid(0)

    assert responses.calls[0].request.headers["User-Agent"] == "kiosk/1.0"
    assert responses.calls[1].request.headers["User-Agent"] == session_agent
    assert session.headers["User-Agent"] == session_agent != "kiosk/1.0"

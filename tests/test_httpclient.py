import xml.etree.ElementTree as ET

import pytest
import requests
import responses
from requests.adapters import HTTPAdapter

from dokit.httpclient import (
    HTTPRequestError,
    code_is_200,
    json_extractor,
    new_http_client,
    raw_extractor,
    send_http_request,
    xml_extractor,
)

LINK = "https://example.com/hp/api/model"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add(responses.GET, LINK, json={"BgQuality": 50}, headers={"X-Test": "yes"})
        yield rsps


class ResultWithHeader:
    def __init__(self, BgQuality):
        self.bg_quality = BgQuality
        self.headers = None

    def extract(self, headers):
        self.headers = headers


class ResultCheck:
    def __init__(self, BgQuality):
        self.bg_quality = BgQuality

    def check(self):
        if self.bg_quality == 50:
            raise ValueError("bad BgQuality")


def test_code_is_200():
    code_is_200(200)
    with pytest.raises(HTTPRequestError, match="bad http code: 404"):
        code_is_200(404)


def test_extractors():
    assert raw_extractor(b"abc") == b"abc"
    assert json_extractor(b'{"BgQuality": 50}') == {"BgQuality": 50}
    root = xml_extractor(b"<r><a>1</a></r>")
    assert root.find("a").text == "1"
    with pytest.raises(ET.ParseError):
        xml_extractor(b"<r>")


def test_new_http_client_defaults():
    client = new_http_client()
    assert client.timeout == 10.0
    assert client.verify is True


def test_new_http_client_options():
    adapter = HTTPAdapter()
    client = new_http_client(timeout=2, skip_verify=True, adapter=adapter)
    assert client.timeout == 2
    assert client.verify is False
    assert client.get_adapter("https://example.com/") is adapter


@pytest.mark.parametrize(
    "checker, extractor",
    [(code_is_200, json_extractor), (None, None)],
)
def test_send_json(mocked, checker, extractor):
    result = send_http_request(None, "GET", LINK, None, None, checker, extractor)
    assert result == {"BgQuality": 50}


def test_send_with_own_client(mocked):
    client = new_http_client(timeout=2, skip_verify=True)
    result = send_http_request(client, "GET", LINK)
    assert result == {"BgQuality": 50}


def test_send_header(mocked):
    agent = "Mozilla/5.0 test"
    result = send_http_request(
        None, "GET", LINK, header={"User-Agent": [agent], "X-Multi": ["a", "b"]}
    )
    assert result["BgQuality"] == 50
    sent = mocked.calls[0].request.headers
    assert sent["User-Agent"] == agent
    assert sent["X-Multi"] == "b"


def test_send_raw(mocked):
    data = send_http_request(None, "GET", LINK, extract_result=raw_extractor)
    assert b"BgQuality" in data


def test_send_response_header(mocked):
    result = send_http_request(
        None, "GET", LINK, extract_result=lambda data: ResultWithHeader(**json_extractor(data))
    )
    assert result.bg_quality == 50
    assert result.headers["X-Test"] == "yes"


def test_send_check_result(mocked):
    with pytest.raises(ValueError, match="^bad BgQuality$"):
        send_http_request(
            None, "GET", LINK, extract_result=lambda data: ResultCheck(**json_extractor(data))
        )


def test_send_bad_code():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, LINK, body="oops", status=500)
        with pytest.raises(HTTPRequestError, match="check code failed: bad http code: 500, data: oops"):
            send_http_request(None, "GET", LINK)


def test_send_bad_json():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, LINK, body="not json")
        with pytest.raises(HTTPRequestError, match="extract result failed"):
            send_http_request(None, "GET", LINK)


@pytest.mark.parametrize("method, link", [("", LINK), ("GET", "")])
def test_send_bad_param(method, link):
    with pytest.raises(HTTPRequestError, match="method or link is empty"):
        send_http_request(None, method, link)


def test_send_connection_error():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, LINK, body=requests.ConnectionError("down"))
        with pytest.raises(requests.ConnectionError):
            send_http_request(None, "GET", LINK)
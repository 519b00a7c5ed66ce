from unittest.mock import Mock

import pytest
import requests
import urllib3

from linkscout.exceptions import HttpFetchError
from linkscout.services.http_service import HttpService


def _client(status=200, text="", headers=None):
    client = Mock()
    client.return_value.status_code = status
    client.return_value.text = text
    client.return_value.headers = headers if headers is not None else {}
    return client


def test_get_returns_body_and_content_type():
    client = _client(200, "<html>hi</html>", {"Content-Type": "text/html; charset=utf-8"})
    http = HttpService(user_agent="TestAgent", http_client=client)
    response = http.get("http://example.com")
    assert response.status_code == 200
    assert response.text == "<html>hi</html>"
    assert response.content_type == "text/html; charset=utf-8"


def test_request_sends_user_agent_and_follows_redirects():
    client = _client()
    http = HttpService(user_agent="TestAgent", http_client=client, timeout=3)
    http.get("http://example.com")
    args, kwargs = client.call_args
    assert args == ("GET", "http://example.com")
    assert kwargs["headers"] == {"User-Agent": "TestAgent"}
    assert kwargs["timeout"] == 3
    assert kwargs["allow_redirects"] is True
    assert kwargs["stream"] is False


def test_head_streams_and_skips_body():
    client = _client(204, "should not be read")
    http = HttpService(user_agent="TestAgent", http_client=client)
    response = http.head("http://example.com")
    assert client.call_args[0][0] == "HEAD"
    assert client.call_args[1]["stream"] is True
    assert response.status_code == 204
    assert response.text == ""
    client.return_value.close.assert_called_once()


def test_get_without_body_streams():
    client = _client(200)
    http = HttpService(user_agent="TestAgent", http_client=client)
    response = http.get("http://example.com", read_body=False)
    assert client.call_args[1]["stream"] is True
    assert response.text == ""


def test_fetch_wraps_requests_exception():
    client = Mock(side_effect=requests.exceptions.ConnectionError("refused"))
    http = HttpService(user_agent="TestAgent", http_client=client)

    with pytest.raises(HttpFetchError) as e:
        http.get("http://example.com")
    assert "http://example.com" in str(e.value)
    assert isinstance(e.value.original, requests.exceptions.ConnectionError)


def test_fetch_missing_content_type():
    http = HttpService(user_agent="TestAgent", http_client=_client(200, "data", {}))
    assert http.get("http://example.com").content_type is None


def test_fetch_bubbles_unexpected_exceptions():
    """Non-requests exceptions are bugs, not transport failures."""
    client = Mock()
    client.return_value.status_code = 200
    client.return_value.headers.get.side_effect = RuntimeError("Real bug in headers.get()")
    http = HttpService(user_agent="TestAgent", http_client=client)

    with pytest.raises(RuntimeError, match="Real bug"):
        http.get("http://example.com")


def test_fetch_wraps_rejected_host():
    client = Mock(side_effect=urllib3.exceptions.LocationParseError("a" * 70 + ".com"))
    http = HttpService(user_agent="TestAgent", http_client=client)

    with pytest.raises(HttpFetchError) as e:
        http.head("http://" + "a" * 70 + ".com/")
    assert isinstance(e.value.original, urllib3.exceptions.LocationParseError)

from unittest.mock import MagicMock

import pytest
import requests

from clients.github_client import (
    GithubAuthError,
    GithubClient,
    HttpStatusError,
    MissingCredentialError,
    NetworkError,
    ParseError,
)
from configs.config import Config


def make_response(status_code=200, text="", json_data=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


def release(tag, published="2025-01-01T00:00:00Z", **extra):
    data = {"tag_name": tag, "published_at": published, "body": "* Added x", "prerelease": False}
    data.update(extra)
    return data


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    s.headers = {}
    return s


def test_fetch_text_returns_body(session):
    session.get.return_value = make_response(text="Total Regions : 6")
    client = GithubClient(token="t", session=session)
    assert client.fetch_text("https://example.com/README.md") == "Total Regions : 6"
    assert session.headers["User-Agent"] == Config.USER_AGENT


def test_non_200_raises_http_status_error_with_snippet(session):
    session.get.return_value = make_response(status_code=404, text="Not Found")
    client = GithubClient(token="t", session=session)
    with pytest.raises(HttpStatusError) as exc:
        client.fetch_text("https://example.com/missing")
    assert exc.value.status_code == 404
    assert exc.value.body == "Not Found"
    assert "404" in str(exc.value)


def test_connection_failure_raises_network_error(session):
    session.get.side_effect = requests.ConnectionError("refused")
    client = GithubClient(token="t", session=session)
    with pytest.raises(NetworkError) as exc:
        client.fetch_text("https://example.com/")
    assert exc.value.code == "NETWORK"


def test_timeout_is_a_network_error_with_timeout_code(session):
    session.get.side_effect = requests.Timeout("slow")
    client = GithubClient(token="t", session=session)
    with pytest.raises(NetworkError) as exc:
        client.fetch_text("https://example.com/")
    assert exc.value.code == "TIMEOUT"


def test_list_releases_requires_token_before_any_request(session, monkeypatch):
    monkeypatch.setattr(Config, "GITHUB_TOKEN", None)
    client = GithubClient(session=session)
    with pytest.raises(MissingCredentialError):
        client.list_releases("o", "r")
    session.get.assert_not_called()


def test_list_releases_sends_auth_and_paginates(session, monkeypatch):
    monkeypatch.setattr(Config, "RELEASES_PER_PAGE", 2)
    session.get.side_effect = [
        make_response(json_data=[release("v3"), release("v2")]),
        make_response(json_data=[release("v1")]),
    ]
    client = GithubClient(token="secret", session=session)
    releases = client.list_releases("dr5hn", "countries-states-cities-database")

    assert [r["tag_name"] for r in releases] == ["v3", "v2", "v1"]
    assert session.get.call_count == 2
    url = session.get.call_args_list[0].args[0]
    assert url == f"{Config.GITHUB_API_URL}/repos/dr5hn/countries-states-cities-database/releases"
    kwargs = session.get.call_args_list[1].kwargs
    assert kwargs["headers"]["Authorization"] == "token secret"
    assert kwargs["params"] == {"page": 2, "per_page": 2}


def test_list_releases_stops_at_max_pages(session, monkeypatch):
    monkeypatch.setattr(Config, "RELEASES_PER_PAGE", 1)
    monkeypatch.setattr(Config, "RELEASES_MAX_PAGES", 2)
    session.get.side_effect = [
        make_response(json_data=[release("v3")]),
        make_response(json_data=[release("v2")]),
        make_response(json_data=[release("v1")]),
    ]
    client = GithubClient(token="t", session=session)
    assert len(client.list_releases("o", "r")) == 2
    assert session.get.call_count == 2


def test_unauthorized_raises_auth_error(session):
    session.get.return_value = make_response(status_code=401, text='{"message": "Bad credentials"}')
    client = GithubClient(token="bad", session=session)
    with pytest.raises(GithubAuthError) as exc:
        client.list_releases("o", "r")
    assert exc.value.status_code == 401
    assert exc.value.code == "UNAUTHORIZED"
    assert isinstance(exc.value, HttpStatusError)


def test_malformed_json_raises_parse_error(session):
    session.get.return_value = make_response(json_error=ValueError("Expecting value"))
    client = GithubClient(token="t", session=session)
    with pytest.raises(ParseError):
        client.list_releases("o", "r")


def test_non_list_payload_raises_parse_error(session):
    session.get.return_value = make_response(json_data={"message": "oops"})
    client = GithubClient(token="t", session=session)
    with pytest.raises(ParseError):
        client.list_releases("o", "r")


def test_fetch_releases_validates_and_skips_drafts(session):
    session.get.return_value = make_response(json_data=[
        release("v2", prerelease=True, assets=[]),
        release("draft", published=None),
        release("v1", body=None),
    ])
    client = GithubClient(token="t", session=session)
    releases = client.fetch_releases("o", "r")
    assert [r.tag_name for r in releases] == ["v2", "v1"]
    assert releases[0].prerelease is True
    assert releases[1].body is None
    assert releases[1].published_at.year == 2025


def test_fetch_releases_rejects_malformed_entry(session):
    session.get.return_value = make_response(json_data=[{"published_at": "2025-01-01T00:00:00Z"}])
    client = GithubClient(token="t", session=session)
    with pytest.raises(ParseError):
        client.fetch_releases("o", "r")

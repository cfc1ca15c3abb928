import pytest
import requests
from unittest.mock import MagicMock, patch

from api.scrape_creators_client import (
    ScrapeCreatorsClient,
    build_hashtag_params,
    build_profile_params,
    make_http_request,
)


def _fake_response(status_code=200, json_body=None, text='', content_type='application/json'):
    response = MagicMock()
    response.status_code = status_code
    response.reason = 'OK' if status_code < 400 else 'Error'
    response.headers = {'Content-Type': content_type}
    response.text = text
    response.json.return_value = json_body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


def test_client_requires_api_key():
    with pytest.raises(ValueError):
        ScrapeCreatorsClient(None)
    with pytest.raises(ValueError):
        ScrapeCreatorsClient('')


def test_build_profile_params_defaults():
    assert build_profile_params('@creator') == {'handle': 'creator'}


def test_build_profile_params_strips_whitespace_then_single_marker():
    assert build_profile_params(' @creator ') == {'handle': 'creator'}
    assert build_profile_params('@@creator') == {'handle': '@creator'}


def test_build_profile_params_all_options():
    params = build_profile_params('creator', max_cursor='abc', sort_by='popular', trim=True)

    assert params == {'handle': 'creator', 'max_cursor': 'abc', 'sort_by': 'popular', 'trim': 'true'}


def test_build_profile_params_skips_falsy_cursor():
    assert 'max_cursor' not in build_profile_params('creator', max_cursor=0)
    assert 'max_cursor' not in build_profile_params('creator', max_cursor='')


def test_build_profile_params_rejects_unknown_sort_order():
    with pytest.raises(ValueError):
        build_profile_params('creator', sort_by='oldest')


def test_build_hashtag_params_strips_single_marker():
    assert build_hashtag_params('#fyp') == {'hashtag': 'fyp'}
    assert build_hashtag_params('##fyp') == {'hashtag': '#fyp'}
    assert build_hashtag_params('fyp') == {'hashtag': 'fyp'}


def test_build_hashtag_params_all_options():
    params = build_hashtag_params('fyp', cursor=7, region='ID', trim=False)

    assert params == {'hashtag': 'fyp', 'region': 'ID', 'cursor': '7', 'trim': 'false'}


def test_build_hashtag_params_keeps_zero_cursor():
    assert build_hashtag_params('fyp', cursor=0)['cursor'] == '0'


@pytest.mark.asyncio
async def test_fetch_profile_videos_builds_correct_request(monkeypatch):
    captured = {}

    async def fake_make_http_request(options):
        captured.update(options)
        return {"status": 200, "statusText": "OK", "headers": {}, "data": {"aweme_list": [], "max_cursor": None}}

    monkeypatch.setattr('api.scrape_creators_client.make_http_request', fake_make_http_request)

    client = ScrapeCreatorsClient('test-key')
    data = await client.fetch_profile_videos('@creator', max_cursor='abc', sort_by='latest')

    assert captured['method'] == 'GET'
    assert captured['url'] == 'https://api.scrapecreators.com/v3/tiktok/profile/videos'
    assert captured['params'] == {'handle': 'creator', 'max_cursor': 'abc', 'sort_by': 'latest'}
    assert captured['headers'] == {'x-api-key': 'test-key'}
    assert data == {"aweme_list": [], "max_cursor": None}


@pytest.mark.asyncio
async def test_search_by_hashtag_builds_correct_request(monkeypatch):
    captured = {}

    async def fake_make_http_request(options):
        captured.update(options)
        return {"status": 200, "statusText": "OK", "headers": {}, "data": {"aweme_list": [], "has_more": 0}}

    monkeypatch.setattr('api.scrape_creators_client.make_http_request', fake_make_http_request)

    client = ScrapeCreatorsClient('test-key')
    await client.search_by_hashtag('#fyp', cursor=7, region='ID', trim=True)

    assert captured['url'] == 'https://api.scrapecreators.com/v1/tiktok/search/hashtag'
    assert captured['params'] == {'hashtag': 'fyp', 'region': 'ID', 'cursor': '7', 'trim': 'true'}
    assert captured['headers'] == {'x-api-key': 'test-key'}


@pytest.mark.asyncio
async def test_fetch_propagates_http_errors(monkeypatch):
    async def failing_make_http_request(options):
        raise requests.exceptions.HTTPError("401 Unauthorized")

    monkeypatch.setattr('api.scrape_creators_client.make_http_request', failing_make_http_request)

    client = ScrapeCreatorsClient('bad-key')
    with pytest.raises(requests.exceptions.HTTPError):
        await client.fetch_profile_videos('creator')


@pytest.mark.asyncio
@patch('requests.request')
async def test_make_http_request_parses_json(mock_request):
    mock_request.return_value = _fake_response(json_body={"aweme_list": [], "max_cursor": "abc"})

    response = await make_http_request({
        'method': 'GET',
        'url': 'https://api.scrapecreators.com/v3/tiktok/profile/videos',
        'params': {'handle': 'creator'},
        'headers': {'x-api-key': 'k'},
    })

    assert response['status'] == 200
    assert response['data'] == {"aweme_list": [], "max_cursor": "abc"}
    _, kwargs = mock_request.call_args
    assert kwargs['params'] == {'handle': 'creator'}
    assert kwargs['headers'] == {'x-api-key': 'k'}
    assert kwargs['timeout'] == 30


@pytest.mark.asyncio
@patch('requests.request')
async def test_make_http_request_wraps_non_json_body(mock_request):
    mock_request.return_value = _fake_response(text='<html>maintenance</html>', content_type='text/html')

    response = await make_http_request({'url': 'https://api.scrapecreators.com/x'})

    assert response['data']['error'] == 'Non-JSON response'
    assert response['data']['statusCode'] == 200


@pytest.mark.asyncio
@patch('requests.request')
async def test_make_http_request_raises_on_error_status(mock_request):
    mock_request.return_value = _fake_response(status_code=500, text='upstream failure')

    with pytest.raises(requests.exceptions.HTTPError):
        await make_http_request({'url': 'https://api.scrapecreators.com/x'})


@pytest.mark.asyncio
@patch('requests.request')
async def test_make_http_request_raises_on_connection_error(mock_request):
    mock_request.side_effect = requests.exceptions.ConnectionError("connection refused")

    with pytest.raises(requests.exceptions.ConnectionError):
        await make_http_request({'url': 'https://api.scrapecreators.com/x'})

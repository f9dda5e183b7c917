"""Tests for the parser service client."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from scmviz import SchemeParserClient, ParserServiceSettings, ParsingMode, SchemeVizServiceError


@pytest.fixture
def settings():
    """Settings for a fake parser service."""
    return ParserServiceSettings(host='parser.test:8000', endpoint='parse', timeout=7)


@pytest.fixture
def mock_session():
    """
    Patch aiohttp so that posts return a configurable response.

    Yields the (session, response) mocks.
    """
    response = MagicMock()
    response.status = 200
    response.json = AsyncMock(return_value=[])
    response.text = AsyncMock(return_value='')

    session = MagicMock()
    session.post.return_value.__aenter__.return_value = response

    with patch('scmviz.scmviz_client.aiohttp.ClientSession') as mock_session_cls, \
            patch('scmviz.scmviz_client.aiohttp.TCPConnector'):
        mock_session_cls.return_value.__aenter__.return_value = session
        yield session, response


class TestSchemeParserClient:
    """Test requests made by the client and how failures are reported."""

    def test_posts_mode_and_code(self, settings, mock_session):
        """The request body carries the mode string and the source text."""
        session, response = mock_session
        response.json.return_value = [{"type": "ScmNil"}]

        client = SchemeParserClient(settings)
        result = asyncio.run(client.fetch('(define x 1)', ParsingMode.TAG_PARSER))

        assert result == [{"type": "ScmNil"}]
        args, kwargs = session.post.call_args
        assert args[0] == 'http://parser.test:8000/parse'
        assert kwargs['json'] == {'mode': 'TAG_PARSER', 'code': '(define x 1)'}
        assert kwargs['headers'] == {'Content-Type': 'application/json'}
        assert kwargs['timeout'].total == 7

    def test_error_status(self, settings, mock_session):
        """Non-200 responses raise a service error with the status."""
        _session, response = mock_session
        response.status = 400
        response.text.return_value = 'Exception: unbalanced parenthesis'

        client = SchemeParserClient(settings)
        with pytest.raises(SchemeVizServiceError) as exc_info:
            asyncio.run(client.fetch('(', ParsingMode.READER))

        assert exc_info.value.status == 400
        assert 'unbalanced parenthesis' in str(exc_info.value)

    def test_invalid_json_body(self, settings, mock_session):
        """A body that is not JSON raises a service error."""
        _session, response = mock_session
        response.json.side_effect = json.JSONDecodeError('Expecting value', '<html>', 0)

        client = SchemeParserClient(settings)
        with pytest.raises(SchemeVizServiceError, match='not valid JSON'):
            asyncio.run(client.fetch('1', ParsingMode.READER))

    def test_undecodable_body(self, settings, mock_session):
        """A body that is not valid UTF-8 raises a service error."""
        _session, response = mock_session
        response.json.side_effect = UnicodeDecodeError('utf-8', b'\xff', 0, 1, 'invalid start byte')

        client = SchemeParserClient(settings)
        with pytest.raises(SchemeVizServiceError, match='not valid JSON') as exc_info:
            asyncio.run(client.fetch('1', ParsingMode.READER))

        assert exc_info.value.status == 200

    def test_connection_error(self, settings, mock_session):
        """Transport failures raise a service error naming the URL."""
        session, _response = mock_session
        session.post.side_effect = aiohttp.ClientError('connection refused')

        client = SchemeParserClient(settings)
        with pytest.raises(SchemeVizServiceError) as exc_info:
            asyncio.run(client.fetch('1', ParsingMode.READER))

        assert exc_info.value.status is None
        assert 'http://parser.test:8000/parse' in str(exc_info.value)

    def test_timeout(self, settings, mock_session):
        """Timeouts raise a service error."""
        session, _response = mock_session
        session.post.side_effect = asyncio.TimeoutError()

        client = SchemeParserClient(settings)
        with pytest.raises(SchemeVizServiceError, match='timed out'):
            asyncio.run(client.fetch('1', ParsingMode.SEMANTIC_ANALYZER))

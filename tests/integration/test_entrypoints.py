"""
Integration tests for the Cloud Functions entry points.

The entry module performs the cold start against the global catalog populated
by the sample functions, with the routing function selected by the test
environment.
"""

import importlib
import json
from unittest.mock import Mock, patch

import pytest

from function_adapter.catalog import ROUTER_NAME
from function_adapter.converters import StdlibJsonMapper
from function_adapter.exceptions import FunctionNotFoundError, MessageConversionError


@pytest.fixture
def main():
    """Entry module, imported after the test environment is in place."""
    return importlib.import_module('gcp_function.main')


@pytest.fixture
def mock_invoker():
    invoker = Mock()
    invoker.context.json_mapper = StdlibJsonMapper()
    with patch('gcp_function.main.invoker', invoker):
        yield invoker


class TestHttpEntryPoint:
    """Test cases for the HTTP trigger."""

    def test_cold_start_selects_router(self, main):
        assert main.invoker.function_name == ROUTER_NAME

    def test_routed_function(self, main, make_request):
        request = make_request(data=b'hello', headers={'Function-Definition': 'uppercase'})

        response = main.handle_http(request)

        assert response.status_code == 200
        assert response.get_data() == b'HELLO'

    def test_routed_composition(self, main, make_request):
        request = make_request(data=b'abc', headers={'Function-Definition': 'uppercase|reverse'})

        response = main.handle_http(request)

        assert response.get_data() == b'CBA'

    def test_greeting_status_and_headers(self, main, make_request):
        request = make_request(
            data=b'{"name":"Ada"}',
            headers={'Function-Definition': 'greet'},
            content_type='application/json',
        )

        response = main.handle_http(request)

        assert response.status_code == 201
        assert response.headers['X-Greeted'] == 'Ada'
        assert json.loads(response.get_data()) == {'greeting': 'Hello Ada'}

    def test_invalid_greeting_rejected(self, main, make_request):
        request = make_request(data=b'{"name":""}', headers={'Function-Definition': 'greet'})

        with pytest.raises(MessageConversionError) as exc_info:
            main.handle_http(request)

        assert 'greet' in str(exc_info.value)

    def test_publisher_output(self, main, make_request):
        response = main.handle_http(make_request(headers={'Function-Definition': 'countdown'}))

        assert response.get_data() == b'[3,2,1]'

    def test_missing_route_fails(self, main, make_request):
        with pytest.raises(FunctionNotFoundError):
            main.handle_http(make_request(data=b'abc'))


class TestBackgroundEntryPoints:
    """Test cases for the background and CloudEvent triggers."""

    def test_router_cannot_route_background_events(self, main):
        with pytest.raises(FunctionNotFoundError):
            main.handle_event({'message': 'hi'}, {'eventId': '1'})

    def test_event_data_passed_as_json(self, main, mock_invoker):
        context = {'eventId': '1'}

        main.handle_event({'message': 'hi'}, context)

        mock_invoker.accept.assert_called_once_with('{"message":"hi"}', context)

    @pytest.mark.parametrize('data, expected', [
        ('plain', 'plain'),
        (b'raw bytes', 'raw bytes'),
        (b'\xff\x00bin', '\ufffd\x00bin'),
        ([1, 2], '[1,2]'),
    ])
    def test_event_data_to_text(self, main, mock_invoker, data, expected):
        main.handle_event(data, None)

        mock_invoker.accept.assert_called_once_with(expected, None)

    def test_cloud_event_attributes_become_context(self, main, mock_invoker):
        attributes = {'id': 'ce-1', 'type': 'google.cloud.pubsub.topic.v1.messagePublished'}
        cloud_event = Mock(data={'message': {'data': 'aGk='}})
        cloud_event.get_attributes.return_value = attributes

        main.handle_cloud_event(cloud_event)

        mock_invoker.accept.assert_called_once_with('{"message":{"data":"aGk="}}', attributes)

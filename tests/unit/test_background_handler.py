"""
Unit tests for the background (event) invocation handler.
"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from function_adapter.exceptions import FunctionNotFoundError, MessageConversionError
from function_adapter.handlers.background_handler import handle_background


class TestHandleBackground:
    """Test cases for handle_background."""

    def test_message_carries_event_context(self, build_context, recorder, event_context):
        handle_background(build_context('capture'), 'hello', event_context)

        assert len(recorder.calls) == 1
        message = recorder.calls[0]
        assert message.payload == 'hello'
        assert message.headers == {'gcf_context': event_context}
        assert message.headers['gcf_context'] is event_context

    def test_event_context_object_attached_verbatim(self, build_context, recorder):
        context = SimpleNamespace(event_id='42', resource='projects/p/topics/t')

        handle_background(build_context('capture'), '{}', context)

        assert recorder.calls[0].headers['gcf_context'] is context

    def test_no_input_function_receives_no_message(self, build_context, recorder, event_context):
        handle_background(build_context('hello'), 'ignored', event_context)

        assert recorder.calls == [None]

    def test_result_logged_and_dropped(self, build_context, event_context):
        with patch('function_adapter.handlers.background_handler.logger') as mock_logger:
            result = handle_background(build_context('uppercase'), 'hello', event_context)

        assert result is None
        mock_logger.info.assert_called_once_with('Dropping background function result: HELLO')

    def test_consumer_result_not_logged(self, build_context, recorder, event_context):
        with patch('function_adapter.handlers.background_handler.logger') as mock_logger:
            handle_background(build_context('consume'), 'hello', event_context)

        assert recorder.calls == ['hello']
        mock_logger.info.assert_not_called()

    def test_publisher_result_serialized_for_log(self, build_context, event_context):
        with patch('function_adapter.handlers.background_handler.logger') as mock_logger:
            handle_background(build_context('countdown'), '', event_context)

        mock_logger.info.assert_called_once_with('Dropping background function result: [3,2,1]')

    @pytest.mark.parametrize('context, expected', [
        ({'eventId': '123'}, '123'),
        ({'id': 'cloud-event-1'}, 'cloud-event-1'),
        (SimpleNamespace(event_id='42'), '42'),
        ({}, None),
    ])
    def test_event_id_used_as_correlation_id(self, build_context, context, expected):
        with patch('function_adapter.handlers.background_handler.logger') as mock_logger:
            handle_background(build_context('consume'), 'hello', context)

        mock_logger.set_correlation_id.assert_called_once_with(expected)

    def test_router_without_route_fails(self, build_context, event_context):
        with pytest.raises(FunctionNotFoundError):
            handle_background(build_context(''), 'hello', event_context)

    def test_conversion_errors_propagate(self, build_context, event_context):
        with pytest.raises(MessageConversionError):
            handle_background(build_context('move'), 'not json', event_context)

"""Unit tests for the runtime-checkable protocols."""

from matrix_api_client.api import GetAliasRequest, SyncEventsRequest, WhoAmIRequest
from matrix_api_client.protocols import EndpointProtocol, TransportProtocol
from matrix_api_client.transport import HttpxTransport
from matrix_api_client.types.http import HttpRequest, HttpResponse

from .conftest import RecordingTransport


class TestTransportProtocol:
    """Tests for TransportProtocol structural checks."""

    def test_httpx_transport_satisfies_protocol(self):
        assert isinstance(HttpxTransport(), TransportProtocol)

    def test_recording_double_satisfies_protocol(self):
        """No inheritance is needed to be a transport."""
        assert isinstance(RecordingTransport(), TransportProtocol)

    def test_object_without_call_is_rejected(self):
        class NotATransport:
            async def send(self, request: HttpRequest) -> HttpResponse:
                return HttpResponse(200)

        assert not isinstance(NotATransport(), TransportProtocol)


class TestEndpointProtocol:
    """Tests for EndpointProtocol structural checks."""

    def test_bundled_endpoints_satisfy_protocol(self):
        for request in (
            WhoAmIRequest(),
            GetAliasRequest(room_alias="#room:example.org"),
            SyncEventsRequest(),
        ):
            assert isinstance(request, EndpointProtocol)

    def test_plain_object_is_rejected(self):
        assert not isinstance(object(), EndpointProtocol)

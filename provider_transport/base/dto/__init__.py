"""Data transfer objects for the transport layer."""

from .credentials import Credentials
from .dispatch_result import Delivered, DispatchResult, TransportFailure, UpstreamResponse
from .provider_config import ProviderConfig
from .request_descriptor import EVENT_STREAM, RequestDescriptor, normalize_headers
from .response_descriptor import Body, BufferedBody, ResponseDescriptor, StreamingBody
from .transport_settings import TransportSettings

__all__ = [
    "Body",
    "BufferedBody",
    "Credentials",
    "Delivered",
    "DispatchResult",
    "EVENT_STREAM",
    "ProviderConfig",
    "RequestDescriptor",
    "ResponseDescriptor",
    "StreamingBody",
    "TransportFailure",
    "TransportSettings",
    "UpstreamResponse",
    "normalize_headers",
]

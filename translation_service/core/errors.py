class UpstreamError(Exception):
    """Base class for failures talking to the upstream translation API."""


class RequestConstructionError(UpstreamError):
    pass


class UpstreamTransportError(UpstreamError):
    pass


class DecodingError(UpstreamError):
    pass

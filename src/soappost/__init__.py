from .http.client.async_poster import AsyncSoapPoster, post_async
from .http.client.poster import SoapPoster, post
from .http.client.result import PostResult
from .http.errors import TransportSetupError
from .util.logging import configure_logging
from .util.serialize import make_envelope, message_to_string
from .util.streams import copy_stream

__all__ = [
    'post',
    'post_async',
    'SoapPoster',
    'AsyncSoapPoster',
    'PostResult',
    'TransportSetupError',
    'copy_stream',
    'make_envelope',
    'message_to_string',
    'configure_logging',
]

from .decoding import decode_envelope, decode_response
from .encoding import FILE_MARKER, FilePayload, Parameter, Scalar, encode_request, from_marked_parameters
from .envelope import ApiErrorDetail, Response
from .timestamps import Timestamp, parse_timestamp
from .xmlbind import XmlAttribute, XmlText

__all__ = [
    "encode_request",
    "from_marked_parameters",
    "Scalar",
    "FilePayload",
    "Parameter",
    "FILE_MARKER",
    "decode_response",
    "decode_envelope",
    "Response",
    "ApiErrorDetail",
    "XmlAttribute",
    "XmlText",
    "Timestamp",
    "parse_timestamp",
]

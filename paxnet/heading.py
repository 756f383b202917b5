"""HTTP heading maps: well-known keys, typed lookups and field parsers.

A heading is a plain ``dict`` mapping header names (and the pseudo keys
``Method``, ``Resource``, ``Version``, ``Status`` and ``Message`` for the
start line) to their string values.
"""

from __future__ import annotations

from typing import Dict, Mapping, Tuple

Heading = Dict[str, str]

CRLF = "\r\n"
SPACE = " "
COLON = ":"

HTTP_METHOD = "Method"
HTTP_METHOD_GET = "GET"
HTTP_METHOD_HEAD = "HEAD"
HTTP_METHOD_POST = "POST"
HTTP_METHOD_PUT = "PUT"
HTTP_METHOD_DELETE = "DELETE"
HTTP_METHOD_CONNECT = "CONNECT"
HTTP_METHOD_OPTIONS = "OPTIONS"
HTTP_METHOD_TRACE = "TRACE"
HTTP_METHOD_PATCH = "PATCH"

HTTP_RESOURCE = "Resource"

HTTP_VERSION = "Version"
HTTP_VERSION_1_1 = "HTTP/1.1"

HTTP_STATUS = "Status"
HTTP_STATUS_OK = "200"
HTTP_STATUS_BAD_REQUEST = "400"
HTTP_STATUS_METHOD_NOT_ALLOWED = "405"
HTTP_STATUS_I_AM_A_TEAPOT = "418"
HTTP_STATUS_UNPROCESSABLE_CONTENT = "422"

HTTP_MESSAGE = "Message"
HTTP_MESSAGE_OK = "OK"
HTTP_MESSAGE_BAD_REQUEST = "Bad Request"
HTTP_MESSAGE_METHOD_NOT_ALLOWED = "Method Not Allowed"
HTTP_MESSAGE_I_AM_A_TEAPOT = "I'm a teapot"
HTTP_MESSAGE_UNPROCESSABLE_CONTENT = "Unprocessable Content"

HTTP_HEADER_CONTENT_TYPE = "Content-Type"
HTTP_HEADER_CONTENT_DISP = "Content-Disposition"
HTTP_HEADER_CONTENT_LENGTH = "Content-Length"
HTTP_HEADER_TRANSFER_ENCODING = "Transfer-Encoding"
HTTP_HEADER_TRANSFER_ENCODING_CHUNKED = "chunked"

MIME_TEXT_HTML = "text/html"
MIME_TEXT_JAVASCRIPT = "text/javascript"
MIME_TEXT_CSS = "text/css"
MIME_TEXT_CSV = "text/csv"
MIME_IMAGE_VND_MICROSOFT_ICON = "image/vnd.microsoft.icon"
MIME_APPLICATION_FORM_URL_ENCODED = "application/x-www-form-urlencoded"
MIME_APPLICATION_JSON = "application/json"
MIME_MULTIPART_FORM_DATA = "multipart/form-data"

_HASH_PRIME = 31
_HASH_MODULO = 1_000_000_001
_WORD_MASK = (1 << 64) - 1


def http_hash(key: str | bytes) -> int:
    """Polynomial rolling hash of ``key`` over its bytes, modulo 10**9 + 1.

    Arithmetic wraps at 64 bits, as unsigned machine words do.
    """
    data = key.encode("utf-8") if isinstance(key, str) else key
    power = 1
    result = 0
    for byte in data:
        term = ((byte - ord("a") + 1) * power) & _WORD_MASK
        result = ((result + term) & _WORD_MASK) % _HASH_MODULO
        power = (power * _HASH_PRIME) % _HASH_MODULO
    return result


def _parse_unsigned(text: str, default: int) -> int:
    if not text or not (text.isascii() and text.isdigit()):
        return default
    value = int(text)
    return value if value <= _WORD_MASK else default


def get_method(heading: Mapping[str, str], default: str = "") -> str:
    return heading.get(HTTP_METHOD, default)


def get_resource(heading: Mapping[str, str], default: str = "") -> str:
    return heading.get(HTTP_RESOURCE, default)


def get_version(heading: Mapping[str, str], default: str = "") -> str:
    return heading.get(HTTP_VERSION, default)


def get_status(heading: Mapping[str, str], default: int = 0) -> int:
    """Return the status code as a number, or ``default`` if absent or not decimal."""
    if HTTP_STATUS not in heading:
        return default
    return _parse_unsigned(heading[HTTP_STATUS], default)


def get_message(heading: Mapping[str, str], default: str = "") -> str:
    return heading.get(HTTP_MESSAGE, default)


def get_content_type(heading: Mapping[str, str], default: str = "") -> str:
    return heading.get(HTTP_HEADER_CONTENT_TYPE, default)


def get_content_length(heading: Mapping[str, str], default: int = 0) -> int:
    """Return Content-Length as a number, or ``default`` if absent or not decimal."""
    if HTTP_HEADER_CONTENT_LENGTH not in heading:
        return default
    return _parse_unsigned(heading[HTTP_HEADER_CONTENT_LENGTH], default)


def _parse_pairs(text: str, separator: str, assign: str) -> Heading:
    result: Heading = {}
    while text:
        pair, _, text = text.partition(separator)
        key, _, value = pair.partition(assign)
        result[key.strip()] = value.strip()
    return result


def _split_head(string: str, separator: str, pair_separator: str) -> Tuple[str, Heading]:
    left, _, right = string.partition(separator)
    return left.strip(), _parse_pairs(right.strip(), pair_separator, "=")


def parse_resource(string: str) -> Tuple[str, Heading]:
    """Split ``/path?a=1&b=2`` into the path and its query parameters."""
    return _split_head(string, "?", "&")


def parse_content_type(string: str) -> Tuple[str, Heading]:
    """Split ``type/sub; k=v; ...`` into the media type and its parameters."""
    return _split_head(string, ";", ";")


def parse_content_disposition(string: str) -> Tuple[str, Heading]:
    """Split ``form-data; k=v; ...`` into the disposition and its parameters."""
    return _split_head(string, ";", ";")


def parse_multipart(string: str) -> Tuple[str, Heading]:
    """Split one multipart part into its body and its header lines."""
    left, _, right = string.partition("\r\n\r\n")
    headers = _parse_pairs(left.strip(), "\r\n", ":")
    return right.strip(), headers


def parse_url_encoded(string: str) -> Heading:
    """Parse ``a=1&b=2`` into a mapping; values are not percent-decoded."""
    return _parse_pairs(string, "&", "=")
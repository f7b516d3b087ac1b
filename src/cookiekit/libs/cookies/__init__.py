"""
Cookie jar primitives: parsing, storage, merging, persistence and rendering.
"""

__all__ = [
    "CookieJar",
    "CookieError",
    "DateParseError",
    "DecodeError",
    "EncodeError",
    "FileOpenError",
    "ParseError",
    "decode_netscape",
    "encode_netscape",
    "is_secure_scheme",
    "load_netscape",
    "merge",
    "parse_cookies",
    "parse_set_cookie",
    "render_cookie_header",
    "save_netscape",
]

from .errors import (
    CookieError,
    DateParseError,
    DecodeError,
    EncodeError,
    FileOpenError,
    ParseError,
)
from .header import is_secure_scheme, render_cookie_header
from .jar import CookieJar
from .merge import merge
from .netscape import decode_netscape, encode_netscape, load_netscape, save_netscape
from .parser import parse_cookies, parse_set_cookie

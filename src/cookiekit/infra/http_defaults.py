"""
Default HTTP headers and user-agent settings used by the session backends.
"""

from cookiekit.version import __version__

# -----------------------------------------------------------------------------
# Default preferences & headers
# -----------------------------------------------------------------------------

DEFAULT_USER_AGENT = f"cookiekit/{__version__}"

DEFAULT_ACCEPT = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
)

DEFAULT_USER_HEADERS = {
    "Accept": DEFAULT_ACCEPT,
    "Accept-Encoding": "gzip, deflate",
    "User-Agent": DEFAULT_USER_AGENT,
}

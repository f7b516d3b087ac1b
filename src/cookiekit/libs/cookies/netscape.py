"""
Netscape HTTP Cookie File encoding, as read and written by curl and wget.

Each record is one line of seven tab-separated fields::

    domain  flag  path  secure  expires  name  value

``flag`` is ``TRUE`` when the domain was set explicitly, ``expires`` is the
expiry in Unix seconds with ``0`` meaning a session cookie.
"""

from __future__ import annotations

__all__ = [
    "FILE_HEADER",
    "encode_netscape",
    "decode_netscape",
    "save_netscape",
    "load_netscape",
]

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from cookiekit.schemas import CookieRecord

from .dates import from_epoch, to_epoch
from .errors import DecodeError, EncodeError, FileOpenError
from .jar import CookieJar

logger = logging.getLogger(__name__)

FILE_HEADER = (
    "# Netscape HTTP Cookie File\n"
    "# https://curl.se/docs/http-cookies.html\n"
    "# This file was generated by cookiekit! Edit at your own risk.\n\n"
)

FIELD_COUNT = 7
_TABS = re.compile(r"\t+")
_LINE_BREAKERS = re.compile(r"[\t\r\n]")


def _bool_field(flag: bool) -> str:
    return "TRUE" if flag else "FALSE"


def encode_line(record: CookieRecord, default_domain: str = "") -> str:
    fields = [
        record.domain or default_domain,
        _bool_field(bool(record.domain)),
        record.path,
        _bool_field(record.secure),
        str(to_epoch(record.expires)),
        record.name,
        record.value,
    ]
    if any(_LINE_BREAKERS.search(field) for field in fields):
        raise EncodeError(f"Cookie {record.name!r} has a tab or line break in a field")
    return "\t".join(fields) + "\n"


def encode_netscape(records: Iterable[CookieRecord], default_domain: str = "") -> str:
    """Encode records as Netscape cookie-file lines, without the file header.

    Args:
        records: Records to encode, in order.
        default_domain: Written in place of an empty domain. The ``flag``
            field still reports ``FALSE`` for such records.

    Raises:
        EncodeError: If a field contains a tab or a line break.
    """
    return "".join(encode_line(r, default_domain) for r in records)


def _split_fields(line: str) -> list[str]:
    fields = line.split("\t")
    if len(fields) == FIELD_COUNT:
        return fields
    # hand-edited files may pad columns with several tabs
    return _TABS.split(line.strip("\t"))


def decode_line(line: str, lineno: int = 0) -> CookieRecord:
    fields = _split_fields(line)
    if len(fields) < FIELD_COUNT or not fields[5]:
        raise DecodeError(lineno, line)
    try:
        expires = from_epoch(int(fields[4]))
    except (ValueError, OverflowError, OSError) as e:
        msg = f"Invalid expiry on line {lineno}: {fields[4]!r}"
        raise DecodeError(lineno, line, msg) from e
    return CookieRecord(
        name=fields[5],
        value=fields[6],
        domain=fields[0],
        path=fields[2],
        expires=expires,
        secure=fields[3] == "TRUE",
    )


def decode_netscape(text: str) -> list[CookieRecord]:
    """Decode the records of a Netscape cookie file.

    Blank lines and lines starting with ``#`` are skipped. A line that splits
    into exactly seven fields is read as is, so empty fields survive; any
    other line has its runs of tabs collapsed first.

    Args:
        text: Whole file content.

    Returns:
        The decoded records in file order.

    Raises:
        DecodeError: If any line has fewer than seven fields or an expiry
            that is not a representable Unix time.
    """
    records: list[CookieRecord] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip(" \r\n")
        if not line.strip() or line.startswith("#"):
            continue
        records.append(decode_line(line, lineno))
    return records


def save_netscape(
    jar: Iterable[CookieRecord],
    path: str | Path,
    *,
    default_domain: str = "",
    overwrite: bool = False,
) -> None:
    """Write records to a Netscape cookie file.

    A new or empty file first receives :data:`FILE_HEADER`; otherwise the
    records are appended to the existing content.

    Args:
        jar: Records to write.
        path: Destination file. Parent directories are created.
        default_domain: Written in place of empty domains.
        overwrite: Truncate the file instead of appending.

    Raises:
        EncodeError: If a record cannot be encoded; the file is untouched.
        FileOpenError: If the file cannot be created or written.
    """
    target = Path(path).expanduser()
    body = encode_netscape(jar, default_domain)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        mode = "w" if overwrite else "a"
        with target.open(mode, encoding="utf-8", newline="\n") as f:
            if f.tell() == 0:
                f.write(FILE_HEADER)
            f.write(body)
    except OSError as e:
        msg = f"Cannot write cookie file {target}: {e.strerror or e}"
        raise FileOpenError(e.errno, msg) from e

    logger.info("Saved cookies to %s", target)


def load_netscape(jar: CookieJar, path: str | Path) -> int:
    """Append the records of a Netscape cookie file to ``jar``.

    The whole file is decoded before anything is appended, so a malformed
    line leaves ``jar`` untouched.

    Args:
        jar: Destination jar. No merging takes place.
        path: Source file.

    Returns:
        The number of records appended.

    Raises:
        FileOpenError: If the file cannot be opened.
        DecodeError: If the file contains a malformed line or is not
            valid UTF-8.
    """
    source = Path(path).expanduser()
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Cannot read cookie file {source}: {e.strerror or e}"
        raise FileOpenError(e.errno, msg) from e
    except UnicodeDecodeError as e:
        msg = f"Cookie file {source} is not valid UTF-8: {e.reason}"
        raise DecodeError(0, "", msg) from e

    records = decode_netscape(text)
    jar.extend(records)
    logger.debug("Loaded %d cookie(s) from %s", len(records), source)
    return len(records)

"""
encoding.py: helpers for option values that may be supplied base64-encoded
"""
import base64
import logging
import re

logger = logging.getLogger(__name__)

_LINE_BREAKS = str.maketrans("", "", "\r\n")

# Padding only at the very end, whole groups of four characters
_PADDED_BASE64 = re.compile(r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?")


def decode_maybe_base64(value: str) -> str:
    """
    decode_maybe_base64: returns the decoded text when value is valid
    standard (padded) base64, otherwise returns value unchanged.

    Line breaks inside the value are ignored. A plain-text value that happens
    to be valid base64 is decoded as well; there is no way to tell the two
    apart.
    """
    if value == "":
        return value
    stripped = value.translate(_LINE_BREAKS)
    if not _PADDED_BASE64.fullmatch(stripped):
        logger.debug("Value is not base64, keeping it verbatim")
        return value
    try:
        decoded = base64.b64decode(stripped, validate=True)
    except ValueError:
        logger.debug("Value is not base64, keeping it verbatim")
        return value
    return decoded.decode("utf-8", errors="replace")

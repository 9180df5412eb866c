"""
Pagination token codec for the liked-you queries.

A token is an opaque string carrying the offset of the next page. The empty
token means "first page" on input and "no more results" on output.

Offsets are not cursor-stable: a decision written or deleted between two page
requests shifts every later row, so a client paging through results while they
change may see a liker twice or miss one. Callers that need stable paging must
re-query from the first page.
"""
from domain.exceptions import ValidationError

DEFAULT_LIMIT = 20

# largest offset a signed 64-bit OFFSET bind accepts
MAX_OFFSET = 2**63 - 1


def encode_token(offset: int) -> str:
    """Encode a resume offset as a pagination token."""
    if offset < 0:
        raise ValueError("offset must be non-negative")
    return str(offset)


def decode_token(token: str) -> int:
    """
    Decode a pagination token into an offset.

    Args:
        token: Token from a previous response, or "" / None for the first page

    Returns:
        Offset of the first row to return

    Raises:
        ValidationError: If the token is not a non-negative decimal integer
            no larger than MAX_OFFSET
    """
    if not token:
        return 0
    if not (token.isascii() and token.isdigit()) or len(token) > len(str(MAX_OFFSET)):
        raise ValidationError(f"invalid pagination token: {_preview(token)}")
    offset = int(token)
    if offset > MAX_OFFSET:
        raise ValidationError(f"invalid pagination token: {_preview(token)}")
    return offset


def _preview(token: str, width: int = 32) -> str:
    if len(token) <= width:
        return repr(token)
    return f"{token[:width]!r}... ({len(token)} chars)"


def next_token(offset: int, returned: int, limit: int = DEFAULT_LIMIT) -> str:
    """Token for the page after ``offset``; empty unless the page came back full."""
    if returned == limit:
        return encode_token(offset + limit)
    return ""

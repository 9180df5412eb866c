from .pagination import DEFAULT_LIMIT, MAX_OFFSET, decode_token, encode_token, next_token

__all__ = ["DEFAULT_LIMIT", "MAX_OFFSET", "decode_token", "encode_token", "next_token"]

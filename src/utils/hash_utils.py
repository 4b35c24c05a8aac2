"""
Non-cryptographic string hashing used for cache keys.
"""


def rolling_hash(text: str) -> str:
    """
    31-multiplier rolling hash over UTF-16 code units, wrapped to a signed
    32-bit integer and returned as a decimal string.

    Matches the hash the browser extension uses, so keys agree across
    implementations.
    """
    value = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return str(value)


def make_cache_key(prefix: str, content: str, key_chars: int = 200) -> str:
    """Cache key for an endpoint: '<prefix>_<hash of first key_chars chars>'."""
    return f"{prefix}_{rolling_hash(content[:key_chars])}"

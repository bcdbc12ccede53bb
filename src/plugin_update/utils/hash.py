import hashlib


def sha1_hex(text: str) -> str:
    """
    returns the sha1 hex digest of a string.

    used to name temporary download files after their source url; it says
    nothing about the downloaded content.
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    return hashlib.sha1(text.encode("utf-8")).hexdigest()

"""Key normalization applied to every key before it reaches the store."""


def normalize_key(key: str, case_sensitive: bool) -> str:
    if case_sensitive:
        return key
    # str.lower() is locale independent and idempotent
    return key.lower()

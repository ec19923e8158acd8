"""Tell stored site documents apart from binary files."""

# Control bytes other than tab, newline, form feed and carriage return
_CONTROL_BYTES = bytes(b for b in range(32) if b not in (9, 10, 12, 13))


def is_binary_content(content: bytes, sample_size: int = 8192, threshold: float = 0.3) -> bool:
    """True when the start of ``content`` holds a NUL or mostly control bytes."""
    sample = content[:sample_size]
    if not sample:
        return False
    if b"\x00" in sample:
        return True
    control = sum(sample.count(byte) for byte in _CONTROL_BYTES)
    return control / len(sample) > threshold

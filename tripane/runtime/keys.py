"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing for arrows, paging and home/end keys.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\x15": "CTRL_U",
    b"\x04": "CTRL_D",
    b"\x02": "CTRL_B",
    b"\x06": "CTRL_F",
    b"\x0c": "CTRL_L",
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS = {
    "1": "HOME",
    "7": "HOME",
    "4": "END",
    "8": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, first: bytes) -> bytes:
    lead = first[0]
    if lead >= 0xF0:
        extra = 3
    elif lead >= 0xE0:
        extra = 2
    elif lead >= 0xC0:
        extra = 1
    else:
        extra = 0
    data = first
    for _ in range(extra):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when ``timeout_ms`` expires."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    named = _CONTROL_KEYS.get(ch)
    if named is not None:
        return named

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch).decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    final = _CSI_FINAL_KEYS.get(seq)
    if final is not None:
        return final
    if seq.isdigit():
        digits = seq.decode("ascii")
        while True:
            part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return "ESC"
            if part == b"~":
                return _CSI_TILDE_KEYS.get(digits, "ESC")
            if not part.isdigit() or len(digits) > 4:
                return "ESC"
            digits += part.decode("ascii")
    return "ESC"


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "read_key"]

from __future__ import annotations

import os
import string

from .constants import FILENAME_LEN

DELIMITER = "/"


def normalize_path(path: str, max_len: int, sep: str = os.sep) -> str:
    """Rewrite a transfer path into a local one.

    Only the first ``max_len - 1`` characters are considered; anything after
    that is dropped without complaint. ``/`` becomes ``sep`` and ``:``
    becomes ``.``. ``%`` escapes the next character, which is copied as is;
    ``%`` followed by two hex digits is decoded to that character instead,
    so ``%25`` yields ``%``.
    """
    window = path[: max(0, max_len - 1)]
    out: list[str] = []
    i = 0
    while i < len(window):
        ch = window[i]
        if ch == "/":
            out.append(sep)
        elif ch == ":":
            out.append(".")
        elif ch == "%":
            hexpair = window[i + 1 : i + 3]
            if len(hexpair) == 2 and all(c in string.hexdigits for c in hexpair):
                out.append(chr(int(hexpair, 16)))
                i += 2
            elif i + 1 < len(window):
                out.append(window[i + 1])
                i += 1
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def extract_filename(path: str) -> str:
    # characters are assumed to be single byte on the wire
    return path.rsplit(DELIMITER, 1)[-1][:FILENAME_LEN]


def is_valid_filename(name: str) -> bool:
    return name not in ("", ".", "..")

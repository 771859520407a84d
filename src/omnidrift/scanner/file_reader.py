# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Default file reader used by scanner workers."""

from __future__ import annotations

from pathlib import Path


class LocalFileReader:
    """Read UTF-8 text from the local filesystem.

    Decoding is strict: a file that is not valid UTF-8 raises
    ``UnicodeDecodeError`` and is reported as a ``read_error``.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding=self.encoding)


__all__ = ["LocalFileReader"]

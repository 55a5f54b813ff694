from __future__ import annotations

HEADER_FORMAT = "!II20sB3x"  # magic, file_size, file_name, terminator, reserved
HEADER_SIZE = 32

MAGIC_SEND = 0x53454E44  # "SEND"
MAGIC_RCVD = 0x52435644  # "RCVD"

FILENAME_LEN = 20
BLOCK_SIZE = 1024
MAX_FILE_SIZE = 0x7FFFFFFF
MAX_PATH_LEN = 4096

DEFAULT_TIMEOUT_S: float | None = None

"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Size and throughput formatting for read buffers and scan statistics.
"""
import re

# Binary multipliers; the short form is an alias of the long one
_UNIT_FACTORS = {
    "B": 1,
    "K": 1024, "KB": 1024,
    "M": 1024 ** 2, "MB": 1024 ** 2,
    "G": 1024 ** 3, "GB": 1024 ** 3,
}

_SIZE_PATTERN = re.compile(r"^(?P<sign>-?)(?P<number>\d+(?:\.\d+)?|\.\d+)\s*(?P<unit>[A-Z]*)$")

_DISPLAY_UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]

# Largest read buffer a scan accepts per file
MAX_CHUNK_SIZE = 1024 ** 3


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: float) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"

        for unit in _DISPLAY_UNITS:
            if size_bytes < 1024:
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports formats: '4K', '64KB', '1.5MB', '4096'.
        Raises ValueError for negative sizes or invalid formats.
        """
        normalized = size_str.strip().upper()
        match = _SIZE_PATTERN.match(normalized)
        if not match or match.group("unit") not in ("", *_UNIT_FACTORS):
            raise ValueError(
                f"Invalid size format: '{size_str.strip()}'. "
                f"Supported formats: 4096, 4K, 64KB, 1MB, etc."
            )
        if match.group("sign"):
            raise ValueError(f"Negative size not allowed: '{normalized}'")

        number = match.group("number")
        factor = _UNIT_FACTORS.get(match.group("unit"), 1)
        if not match.group("unit") and "." in number:
            raise ValueError(f"Fractional byte count not allowed: '{normalized}'")
        return int(float(number) * factor)

    @staticmethod
    def parse_chunk_size(size_str: str) -> int:
        """
        Parse a per-file read buffer size.
        Must be at least one byte and no larger than MAX_CHUNK_SIZE.
        """
        chunk_size = ConvertUtils.human_to_bytes(size_str)
        if chunk_size < 1:
            raise ValueError("Chunk size must be at least 1 byte")
        if chunk_size > MAX_CHUNK_SIZE:
            raise ValueError(
                f"Chunk size too large: {ConvertUtils.bytes_to_human(chunk_size)} "
                f"(maximum {ConvertUtils.bytes_to_human(MAX_CHUNK_SIZE)})"
            )
        return chunk_size

    @staticmethod
    def throughput_to_human(size_bytes: int, seconds: float) -> str:
        """Hashing rate such as '12.50MB/s'; '-' when no time has elapsed."""
        if seconds <= 0:
            return "-"
        return f"{ConvertUtils.bytes_to_human(size_bytes / seconds)}/s"

    @staticmethod
    def is_valid_size_format(size_str: str) -> bool:
        """
        Check if the input string has a valid size format.
        """
        try:
            ConvertUtils.human_to_bytes(size_str)
            return True
        except ValueError:
            return False

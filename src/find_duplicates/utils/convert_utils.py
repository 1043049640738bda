"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import time
from typing import Optional, Sequence, Tuple

LISTING_RECENT_DAYS = 182


class ConvertUtils:
    DECIMAL_UNITS = ["kB", "MB", "GB", "TB", "PB", "EB"]
    BINARY_UNITS = ["KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]

    @staticmethod
    def format_size_decimal(size_bytes: int) -> str:
        """
        Convert bytes to a power-of-1000 string (e.g., 200 B, 1.5 kB, 12.35 MB).
        """
        return ConvertUtils._format_size(size_bytes, 1000, ConvertUtils.DECIMAL_UNITS)

    @staticmethod
    def format_size_binary(size_bytes: int) -> str:
        """
        Convert bytes to a power-of-1024 string (e.g., 512 B, 1.5 KiB, 3.2 MiB).
        """
        return ConvertUtils._format_size(size_bytes, 1024, ConvertUtils.BINARY_UNITS)

    @staticmethod
    def _format_size(size_bytes: int, base: int, units: Sequence[str]) -> str:
        if size_bytes < 0:
            raise ValueError(f"Negative size not allowed: {size_bytes}")
        if size_bytes < base:
            return f"{size_bytes} B"

        value = float(size_bytes)
        index = -1
        while value >= base and index < len(units) - 1:
            value /= base
            index += 1

        # Rounded to two decimals a value may reach the next unit (999999 B is 1000.00 kB)
        if round(value, 2) >= base and index < len(units) - 1:
            value /= base
            index += 1
        unit = units[index]

        # Two decimals at most, trailing zeros trimmed
        text = f"{value:.2f}".rstrip("0").rstrip(".")
        return f"{text} {unit}"

    @staticmethod
    def human_num_decimal(num: int) -> str:
        """Compact power-of-1000 number: 999 -> '999.0', 1500 -> '1.5K'."""
        return ConvertUtils._human_num(num, 1000.0, ("", "K", "M", "G", "T", "P"))

    @staticmethod
    def human_num_binary(num: int) -> str:
        """Compact power-of-1024 number: 1536 -> '1.5Ki'."""
        return ConvertUtils._human_num(num, 1024.0, ("", "Ki", "Mi", "Gi", "Ti", "Pi"))

    @staticmethod
    def _human_num(num: int, base: float, powers: Tuple[str, ...]) -> str:
        value = float(num)
        power_index = 0
        while value >= base and power_index < len(powers) - 1:
            value /= base
            power_index += 1
        return f"{value:.1f}{powers[power_index]}"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports formats: '1.5GB', '2048KB', '1000', '1K', '1M', '1G', etc.
        Raises ValueError for negative sizes or invalid formats.
        """
        size_str = size_str.strip().upper()

        # Define units with both full (KB) and short (K) forms
        units = {
            'PB': 1024 ** 5, 'P': 1024 ** 5,
            'TB': 1024 ** 4, 'T': 1024 ** 4,
            'GB': 1024 ** 3, 'G': 1024 ** 3,
            'MB': 1024 ** 2, 'M': 1024 ** 2,
            'KB': 1024, 'K': 1024,
            'B': 1,
        }

        # Check for unit suffix (longest first to avoid 'KB' matching as 'K' + 'B')
        for unit in sorted(units.keys(), key=len, reverse=True):
            if size_str.endswith(unit):
                value_str = size_str[:-len(unit)].strip()
                try:
                    value = float(value_str)
                except ValueError:
                    raise ValueError(f"Invalid numeric value in size: '{value_str}'")

                if value < 0:
                    raise ValueError(f"Negative size not allowed: '{size_str}'")
                return int(value * units[unit])

        # No unit specified, treat as bytes
        try:
            value = int(size_str)
        except ValueError:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 1.5GB, 2048KB, 1000, 1K, 1M, etc."
            )

        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")
        return value

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

    @staticmethod
    def timestamp_to_human(timestamp: float, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        """
        Convert a Unix timestamp to a human-readable string.
        Uses local time by default.
        """
        try:
            return time.strftime(fmt, time.localtime(timestamp))
        except (OverflowError, OSError, ValueError):
            return "Invalid timestamp"

    @staticmethod
    def timestamp_to_listing(timestamp: float, now: Optional[float] = None) -> str:
        """
        Short date like `ls -l`: 'Mar  5' for recent files, 'Mar  5 2021' for older ones.
        """
        if now is None:
            now = time.time()
        if now - timestamp > LISTING_RECENT_DAYS * 24 * 3600:
            return ConvertUtils.timestamp_to_human(timestamp, "%b %e %Y")
        return ConvertUtils.timestamp_to_human(timestamp, "%b %e")

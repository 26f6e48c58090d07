"""Helper utilities (size conversion)."""

from .convert_utils import ConvertUtils

__all__ = ["ConvertUtils"]

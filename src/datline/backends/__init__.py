"""Backends for documentation output generated from line definitions (RST, etc.)."""

from .rtd_generator import RtdMode, generate_rtd, save_rtd_file

__all__ = ["RtdMode", "generate_rtd", "save_rtd_file"]

"""Parsing of declared searchable metadata."""

from .configuration_parser import ConfigurationParser

__all__ = ["ConfigurationParser"]

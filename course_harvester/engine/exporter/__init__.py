"""Exporter implementations."""

from .base import BaseExporter
from .json_exporter import JsonDocumentExporter

__all__ = ["BaseExporter", "JsonDocumentExporter"]

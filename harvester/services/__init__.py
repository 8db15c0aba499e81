"""Services built on top of the harvest pipeline."""

from harvester.services.output_formatter import OutputFormatter

__all__ = ["OutputFormatter"]

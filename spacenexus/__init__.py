"""Space Nexus blog aggregator."""

__version__ = "0.1.0"

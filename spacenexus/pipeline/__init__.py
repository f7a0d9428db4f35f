"""Blog aggregation pipeline."""

from .orchestrator import BlogPipeline, FetchSummary, print_fetch_summary

__all__ = ["BlogPipeline", "FetchSummary", "print_fetch_summary"]

"""Proposal Desk — proposal pricing, Markdown rendering and PDF export."""

__version__ = "0.1.0"

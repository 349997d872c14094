"""
Live trading-pair spread monitor.

Merges pair identities with volatile price summaries, derives spread and
RAG risk status per pair, and keeps the merged dataset fresh on a timer.
"""

__version__ = "1.0.0"

"""
Application layer.

Services orchestrating the core components (chat, ingestion, analytics)
and adapters that persist chat state through the database boundary.
"""

"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, vector store,
embedding and language-model providers). Each collaborator is reached
through a small protocol so tests can substitute fakes.
"""

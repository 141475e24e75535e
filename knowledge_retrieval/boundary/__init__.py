"""
Boundary layer for external system integrations.

Handles all interactions with external systems (PostgreSQL, Gemini embeddings).
Provides adapters and clients for infrastructure dependencies.
"""

"""
Agent-facing surface of the retrieval engine.
"""

"""
Travel events backend.

Small FastAPI service for browsing, creating and accepting/declining events.
"""

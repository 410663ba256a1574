"""Pydantic models for contracts, collections, rules and assertions."""

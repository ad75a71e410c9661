"""Pydantic output schemas."""

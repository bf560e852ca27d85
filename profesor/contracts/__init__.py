"""Typed shapes for JSON payloads and OpenAI-format chat messages."""

"""Pydantic schemas: gateway webhook payloads and the in-progress visit record."""

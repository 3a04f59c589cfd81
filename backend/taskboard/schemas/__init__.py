"""Schemas — Pydantic models validating command field sets before they reach the services."""

"""Pydantic Schemas — request/response contracts for API endpoints."""

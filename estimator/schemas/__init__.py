"""Pydantic schemas for request/response validation."""

from estimator.schemas.token import Token, TokenPayload

__all__ = ["Token", "TokenPayload"]

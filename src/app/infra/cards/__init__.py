"""Parsers de card."""

from app.infra.cards.pydantic_card_parser import PydanticCardParser

__all__ = ["PydanticCardParser"]

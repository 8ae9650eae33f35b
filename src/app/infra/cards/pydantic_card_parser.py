"""Parser de AppletCard baseado no schema pydantic do domínio."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.domain.card import AppletCard
from utils.errors import CardParseError

logger = logging.getLogger(__name__)


class PydanticCardParser:
    """Valida o payload contra AppletCard; elementos visuais ficam opacos."""

    def parse(self, payload: dict[str, Any]) -> AppletCard:
        try:
            return AppletCard.model_validate(payload)
        except PydanticValidationError as exc:
            logger.warning(
                "card_parse_failed",
                extra={"error_count": exc.error_count()},
            )
            raise CardParseError(f"Invalid card payload: {exc.error_count()} error(s)") from exc

"""Settings do executor de ações do applet.

Centraliza limites de tentativas, backoff padrão e dimensões do prompt
de login para que testes e hosts diferentes possam ajustá-los via env.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAXIMUM_REQUEST_ATTEMPTS = 3
DEFAULT_TIME_BETWEEN_ATTEMPTS_MS = 3000
DEFAULT_AUTH_PROMPT_WIDTH = 400
DEFAULT_AUTH_PROMPT_HEIGHT = 600


class AppletSettings(BaseModel):
    """Configurações do applet e da sequência de invocação."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    maximum_request_attempts: int = Field(
        default=DEFAULT_MAXIMUM_REQUEST_ATTEMPTS,
        ge=1,
        description="Número máximo de envios por sequência de invocação.",
    )
    default_time_between_attempts_ms: int = Field(
        default=DEFAULT_TIME_BETWEEN_ATTEMPTS_MS,
        ge=0,
        description="Espera entre tentativas quando nenhum hook decide o retry.",
    )
    auth_prompt_width: int = Field(default=DEFAULT_AUTH_PROMPT_WIDTH, ge=1)
    auth_prompt_height: int = Field(default=DEFAULT_AUTH_PROMPT_HEIGHT, ge=1)
    log_level: str = Field(default="INFO")

    def validate_settings(self) -> list[str]:
        """Valida combinações que o pydantic não cobre.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if self.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")
        return errors


def _load_applet_from_env() -> AppletSettings:
    """Carrega AppletSettings a partir de variáveis de ambiente."""
    return AppletSettings(
        maximum_request_attempts=int(
            os.getenv("APPLET_MAX_REQUEST_ATTEMPTS", str(DEFAULT_MAXIMUM_REQUEST_ATTEMPTS))
        ),
        default_time_between_attempts_ms=int(
            os.getenv("APPLET_RETRY_DELAY_MS", str(DEFAULT_TIME_BETWEEN_ATTEMPTS_MS))
        ),
        auth_prompt_width=int(
            os.getenv("APPLET_AUTH_PROMPT_WIDTH", str(DEFAULT_AUTH_PROMPT_WIDTH))
        ),
        auth_prompt_height=int(
            os.getenv("APPLET_AUTH_PROMPT_HEIGHT", str(DEFAULT_AUTH_PROMPT_HEIGHT))
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache(maxsize=1)
def get_applet_settings() -> AppletSettings:
    """Retorna instância cacheada de AppletSettings."""
    return _load_applet_from_env()


__all__ = ["AppletSettings", "get_applet_settings"]

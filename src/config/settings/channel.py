"""Settings do channel adapter HTTP."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class ChannelSettings:
    """Configurações do canal HTTP.

    Attributes:
        endpoint_url: URL que recebe as activities de invocação
        timeout_seconds: Timeout de cada POST
        auth_token: Bearer token opcional enviado ao canal
        verify_ssl: Validação de certificado TLS
    """

    endpoint_url: str = ""
    timeout_seconds: float = 30.0
    auth_token: str = ""
    verify_ssl: bool = True

    @property
    def is_configured(self) -> bool:
        """Retorna True se há endpoint definido."""
        return bool(self.endpoint_url.strip())

    def validate(self) -> list[str]:
        """Valida configurações do canal.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if self.endpoint_url and not self.endpoint_url.startswith(("http://", "https://")):
            errors.append(f"CHANNEL_ENDPOINT_URL inválida: {self.endpoint_url}")

        if self.timeout_seconds <= 0:
            errors.append("CHANNEL_TIMEOUT_SECONDS deve ser positivo")

        return errors


def _load_channel_from_env() -> ChannelSettings:
    """Carrega ChannelSettings de variáveis de ambiente."""
    return ChannelSettings(
        endpoint_url=os.getenv("CHANNEL_ENDPOINT_URL", ""),
        timeout_seconds=float(os.getenv("CHANNEL_TIMEOUT_SECONDS", "30")),
        auth_token=os.getenv("CHANNEL_AUTH_TOKEN", ""),
        verify_ssl=os.getenv("CHANNEL_VERIFY_SSL", "true").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_channel_settings() -> ChannelSettings:
    """Retorna instância cacheada de ChannelSettings."""
    return _load_channel_from_env()

"""Bootstrap do applet — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, create_applet

    initialize_app()
    applet = create_applet(host)
    applet.set_card(card_payload)
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from app.infra.cards import PydanticCardParser
from app.infra.channel import create_http_channel_adapter
from app.observability import get_correlation_id, get_invocation_context
from app.services.applet import AdaptiveApplet
from config.logging import configure_logging
from config.settings import get_applet_settings, get_channel_settings

if TYPE_CHECKING:
    from app.protocols.card_parser import CardParserProtocol
    from app.protocols.channel_adapter import ChannelAdapterProtocol
    from app.protocols.hooks import AppletHooksProtocol
    from app.protocols.render_host import RenderHostProtocol
    from app.protocols.template_engine import TemplateEngineProtocol
    from config.settings import AppletSettings

SERVICE_NAME = "adaptive_applet"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging JSON estruturado com correlação por sequência."""
    configure_logging(
        level=get_applet_settings().log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
        invocation_context_getter=get_invocation_context,
    )


def validate_runtime_settings() -> list[str]:
    """Valida settings no startup.

    Em `staging`/`production` falha rápido; em desenvolvimento apenas
    registra os problemas.

    Returns:
        Lista de erros encontrados (vazia = OK).
    """
    environment = os.getenv("ENVIRONMENT", "development").lower()
    errors: list[str] = []
    errors.extend(f"applet: {error}" for error in get_applet_settings().validate_settings())
    errors.extend(f"channel: {error}" for error in get_channel_settings().validate())

    if not errors:
        logger.info("settings_validated", extra={"component": "bootstrap", "result": "ok"})
        return errors

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
    return errors


def create_applet(
    host: RenderHostProtocol,
    *,
    channel_adapter: ChannelAdapterProtocol | None = None,
    hooks: AppletHooksProtocol | None = None,
    parser: CardParserProtocol | None = None,
    template_engine: TemplateEngineProtocol | None = None,
    settings: AppletSettings | None = None,
) -> AdaptiveApplet:
    """Cria um AdaptiveApplet com as dependências padrão.

    Sem channel_adapter explícito, usa o canal HTTP quando
    CHANNEL_ENDPOINT_URL está configurada.
    """
    if channel_adapter is None:
        channel_settings = get_channel_settings()
        if channel_settings.is_configured:
            channel_adapter = create_http_channel_adapter(channel_settings)

    return AdaptiveApplet(
        host,
        parser or PydanticCardParser(),
        channel_adapter=channel_adapter,
        hooks=hooks,
        template_engine=template_engine,
        settings=settings or get_applet_settings(),
    )


__all__ = [
    "SERVICE_NAME",
    "create_applet",
    "initialize_app",
    "validate_runtime_settings",
]

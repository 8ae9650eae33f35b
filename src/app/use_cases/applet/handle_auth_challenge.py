"""Tratamento do desafio de autenticação (Activity.InvocationError.Unauthorized)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.domain.geometry import PopupGeometry
from config.settings.applet import DEFAULT_AUTH_PROMPT_HEIGHT, DEFAULT_AUTH_PROMPT_WIDTH
from utils.errors import ValidationError

if TYPE_CHECKING:
    from app.protocols.render_host import RenderHostProtocol

logger = logging.getLogger(__name__)

LOGIN_POPUP_NAME = "Login"

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def parse_login_url(value: Any) -> AnyUrl:
    """Valida loginUrl como URL absoluta.

    Raises:
        ValidationError: Valor ausente, não-string ou URL malformada.
    """
    if not isinstance(value, str):
        raise ValidationError("Invalid loginUrl: value must be a string")
    try:
        return _URL_ADAPTER.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid loginUrl: {value}") from exc


class AuthChallengeHandler:
    """Abre o prompt de login centralizado sobre a janela hospedeira.

    Fire-and-forget: não retoma a invocação original; a conclusão do
    login chega como uma nova ação do usuário.
    """

    def __init__(
        self,
        host: RenderHostProtocol,
        prompt_width: int = DEFAULT_AUTH_PROMPT_WIDTH,
        prompt_height: int = DEFAULT_AUTH_PROMPT_HEIGHT,
    ) -> None:
        self._host = host
        self._prompt_width = prompt_width
        self._prompt_height = prompt_height

    def handle(self, login_url: Any) -> PopupGeometry:
        """Valida a URL e abre o popup de login.

        Returns:
            Geometria usada no popup

        Raises:
            ValidationError: loginUrl malformada (nenhum popup é aberto).
        """
        try:
            url = parse_login_url(login_url)
        except ValidationError:
            logger.error("auth_login_url_invalid")
            raise

        geometry = PopupGeometry.centered_in(
            self._host.window_geometry(),
            self._prompt_width,
            self._prompt_height,
        )
        logger.info(
            "auth_login_required",
            extra={"login_host": url.host, "popup_features": geometry.to_features()},
        )
        self._host.open_popup(str(url), LOGIN_POPUP_NAME, geometry)
        return geometry

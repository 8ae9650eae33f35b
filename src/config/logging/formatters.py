"""Formatters de logging estruturado.

Todo log do applet sai em JSON com os campos de REQUIRED_LOG_FIELDS.
O conteúdo de cards e respostas do canal nunca entra nos logs.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "invocation_context",
        "service",
    }
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-19 10:30:00,120",
            "level": "INFO",
            "logger": "app.use_cases.execute_activity",
            "message": "activity_retry_scheduled",
            "correlation_id": "3f0c...",
            "invocation_context": "AutoRefresh",
            "service": "adaptive_applet",
            "delay_ms": 3000
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )

"""Extracción del teléfono embebido en identificadores de WhatsApp."""

import re

_PHONE_PREFIX = re.compile(r"^([0-9]+)@")


def extract_phone_number(identifier: str | None) -> str:
    """Devuelve los dígitos antes de ``@`` (``"5511999999999@s.whatsapp.net"``).

    Nunca falla: identificadores vacíos o sin el patrón regresan ``""``.
    """
    if not identifier or not isinstance(identifier, str):
        return ""
    match = _PHONE_PREFIX.match(identifier)
    return match.group(1) if match else ""

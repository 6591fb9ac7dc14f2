"""Modelos de las vistas de conversación, contacto, instancia y mensaje."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

MessageDirection = Literal["inbound", "outbound"]


class ConversationView(BaseModel):
    """Conversación multicanal tal como la ve el resto de la API."""

    id: str
    company_id: str | None = None
    contact_id: str | None = None
    external_id: str | None = None
    title: str | None = None
    status: str | None = None
    whatsapp_instance_id: str | None = None
    last_message_at: datetime | None = None


class ContactView(BaseModel):
    id: str
    name: str = ""
    first_name: str | None = None
    last_name: str | None = None
    phone: str = ""
    whatsapp_phone: str = ""
    email: str | None = None
    company_name: str | None = None


class InstanceConfig(BaseModel):
    """Conexión a una instancia del proveedor de WhatsApp (Evolution API)."""

    id: str
    name: str
    phone_number: str = ""
    server_url: str
    api_key: str = Field(repr=False)
    status: Literal["connected"] = "connected"


class ConversationData(BaseModel):
    conversation: ConversationView
    contact: ContactView
    instance: InstanceConfig


class MessageRecord(BaseModel):
    """Fila a insertar en la tabla `messages`."""

    conversation_id: str
    direction: MessageDirection
    message_type: str
    content: str | None = None
    sent_by_ai: bool = False
    status: str = "sent"
    sent_at: datetime
    external_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class SavedMessage(BaseModel):
    """Resultado de persistir un mensaje.

    ``conversation_updated`` queda en ``False`` cuando el mensaje se guardó
    pero no se pudo actualizar ``last_message_at``; ``warning`` trae el error.
    """

    message_id: str
    conversation_updated: bool = True
    warning: str | None = None

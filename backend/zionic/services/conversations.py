"""Armado del contexto de una conversación de WhatsApp (conversación, contacto, instancia)."""

from __future__ import annotations

from typing import Any

from zionic.core.config import Settings
from zionic.core.logging import get_logger, log_event
from zionic.models.conversation import ContactView, ConversationData, ConversationView
from zionic.services.instances import MISSING_API_KEY_ERROR, build_instance_config
from zionic.services.phone import extract_phone_number
from zionic.services.result import Result
from zionic.services.supabase import RecordNotFoundError, StorageError, SupabaseStore

logger = get_logger(__name__)

CONVERSATION_NOT_FOUND = "conversation not found or inaccessible"
INSTANCE_NOT_FOUND = "WhatsApp instance not found"

CONVERSATION_SELECT = (
    "id,company_id,contact_id,external_id,title,status,whatsapp_instance_id,last_message_at,"
    "contacts!inner(id,first_name,last_name,full_name,phone,email,company_name)"
)
INSTANCE_SELECT = "id,name,phone_number"


def _optional_str(value: Any) -> str | None:
    # Las llaves pueden llegar como bigint según el esquema
    return None if value is None else str(value)


def _display_name(contact: dict[str, Any]) -> str:
    full_name = (contact.get("full_name") or "").strip()
    if full_name:
        return full_name
    first = contact.get("first_name") or ""
    last = contact.get("last_name") or ""
    return f"{first} {last}".strip()


def _contact_row(row: dict[str, Any]) -> dict[str, Any]:
    # PostgREST embebe relaciones muchos-a-uno como objeto, pero toleramos lista
    contact = row.get("contacts") or {}
    if isinstance(contact, list):
        contact = contact[0] if contact else {}
    return contact


def _build_contact(contact: dict[str, Any], whatsapp_phone: str) -> ContactView:
    return ContactView(
        id=str(contact.get("id") or ""),
        name=_display_name(contact),
        first_name=contact.get("first_name"),
        last_name=contact.get("last_name"),
        phone=contact.get("phone") or whatsapp_phone,
        whatsapp_phone=whatsapp_phone,
        email=contact.get("email"),
        company_name=contact.get("company_name"),
    )


async def get_conversation_data(
    conversation_id: str,
    company_id: str,
    store: SupabaseStore,
    *,
    config: Settings,
) -> Result[ConversationData]:
    """Recupera conversación, contacto e instancia para una empresa.

    El filtro por ``company_id`` es el único control de acceso aplicado aquí;
    cualquier autorización adicional es responsabilidad de quien llama.
    Nunca lanza excepciones: todo error se devuelve como ``Result`` fallido.
    """
    if not config.evolution_api_key:
        logger.error("conversation.config_missing", extra={"conversation_id": conversation_id})
        return Result.failure(MISSING_API_KEY_ERROR, "configuration")

    try:
        try:
            row = await store.fetch_single(
                "conversations",
                select=CONVERSATION_SELECT,
                filters={"id": conversation_id, "company_id": company_id},
            )
        except StorageError as exc:
            code = "not_found" if isinstance(exc, RecordNotFoundError) else "storage"
            logger.warning(
                "conversation.not_found",
                extra={
                    "conversation_id": conversation_id,
                    "company_id": company_id,
                    "error": str(exc),
                },
            )
            return Result.failure(CONVERSATION_NOT_FOUND, code, details=str(exc))

        instance_id = row.get("whatsapp_instance_id")
        try:
            if not instance_id:
                raise RecordNotFoundError("Conversation has no whatsapp_instance_id")
            instance_row = await store.fetch_single(
                "whatsapp_instances",
                select=INSTANCE_SELECT,
                filters={"id": instance_id},
            )
        except StorageError as exc:
            code = "not_found" if isinstance(exc, RecordNotFoundError) else "storage"
            logger.warning(
                "conversation.instance_not_found",
                extra={
                    "conversation_id": conversation_id,
                    "instance_id": instance_id,
                    "error": str(exc),
                },
            )
            return Result.failure(INSTANCE_NOT_FOUND, code, details=str(exc))

        whatsapp_phone = extract_phone_number(row.get("external_id"))
        instance = build_instance_config(instance_row, config=config)
        if not instance.ok:
            return instance

        data = ConversationData(
            conversation=ConversationView(
                id=str(row["id"]),
                company_id=_optional_str(row.get("company_id")),
                contact_id=_optional_str(row.get("contact_id")),
                external_id=row.get("external_id"),
                title=row.get("title"),
                status=row.get("status"),
                whatsapp_instance_id=str(instance_id),
                last_message_at=row.get("last_message_at"),
            ),
            contact=_build_contact(_contact_row(row), whatsapp_phone),
            instance=instance.value,
        )
    except Exception as exc:
        logger.exception(
            "conversation.lookup_failed", extra={"conversation_id": conversation_id}
        )
        return Result.failure(str(exc) or exc.__class__.__name__, "unexpected")

    log_event(
        logger,
        "conversation.loaded",
        conversation_id=conversation_id,
        instance_id=data.instance.id,
        has_whatsapp_phone=bool(whatsapp_phone),
    )
    return Result.success(data)

"""Persistencia de mensajes de conversación en Supabase."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from zionic.core.logging import get_logger, log_event
from zionic.models.conversation import MessageRecord, SavedMessage
from zionic.services.result import Result
from zionic.services.supabase import StorageError, SupabaseStore

logger = get_logger(__name__)


def build_message_metadata(
    attachment: dict[str, Any] | None, *, sent_via_agent: bool = False
) -> dict[str, Any]:
    """``{"attachment": ...}`` con adjunto, ``{"sent_via": "conversation_api"}`` sin él.

    ``sent_via_agent`` se agrega encima de cualquiera de los dos casos.
    """
    metadata: dict[str, Any] = (
        {"attachment": attachment} if attachment is not None else {"sent_via": "conversation_api"}
    )
    if sent_via_agent:
        metadata["sent_via_agent"] = True
    return metadata


async def save_message_to_database(
    conversation_id: str,
    direction: str,
    message_type: str,
    content: str | None,
    attachment: dict[str, Any] | None,
    sent_by_ai: bool,
    external_id: str | None,
    store: SupabaseStore,
    sent_via_agent: bool = False,
) -> Result[SavedMessage]:
    """Inserta el mensaje y actualiza ``last_message_at`` de la conversación.

    Las dos escrituras no son atómicas. Si la actualización de la conversación
    falla el resultado sigue siendo exitoso (el mensaje ya existe) pero se
    reporta con ``conversation_updated=False``.
    """
    now = datetime.now(timezone.utc)
    try:
        record = MessageRecord(
            conversation_id=conversation_id,
            direction=direction,
            message_type=message_type,
            content=content,
            sent_by_ai=sent_by_ai,
            sent_at=now,
            external_id=external_id,
            metadata=build_message_metadata(attachment, sent_via_agent=sent_via_agent),
        )
    except ValidationError as exc:
        logger.warning(
            "message.invalid", extra={"conversation_id": conversation_id, "error": str(exc)}
        )
        return Result.failure("invalid message", "validation", details=str(exc))

    try:
        inserted = await store.insert("messages", record.model_dump(mode="json"))
    except StorageError as exc:
        logger.error(
            "message.insert_failed",
            extra={"conversation_id": conversation_id, "error": str(exc)},
        )
        return Result.failure(str(exc), "storage")
    except Exception as exc:
        logger.exception("message.insert_failed", extra={"conversation_id": conversation_id})
        return Result.failure(str(exc) or exc.__class__.__name__, "unexpected")

    if inserted.get("id") in (None, ""):
        logger.error("message.insert_without_id", extra={"conversation_id": conversation_id})
        return Result.failure("message inserted without id", "storage")

    message_id = str(inserted["id"])
    saved = SavedMessage(message_id=message_id)
    try:
        updated = await store.update(
            "conversations",
            {"last_message_at": now.isoformat()},
            filters={"id": conversation_id},
        )
        if not updated:
            raise StorageError("conversation not updated")
    except Exception as exc:
        saved.conversation_updated = False
        saved.warning = str(exc) or exc.__class__.__name__
        logger.warning(
            "message.conversation_touch_failed",
            extra={
                "conversation_id": conversation_id,
                "message_id": message_id,
                "error": saved.warning,
            },
        )

    log_event(
        logger,
        "message.saved",
        conversation_id=conversation_id,
        message_id=message_id,
        direction=record.direction,
        message_type=message_type,
    )
    return Result.success(saved)

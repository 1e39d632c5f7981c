from typing import Any, Dict

from models.message_model import conversation_id_for

def message_doc_to_record(message_doc: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a `messages` document into a dict MessageResponse accepts.

    Legacy documents written without a conversation id get the canonical
    id of their participant pair. Missing fields are left missing so the
    aggregator can drop the record.
    """
    record = dict(message_doc)
    if "_id" in record:
        record["id"] = str(record.pop("_id"))

    sender_id = record.get("sender_id")
    receiver_id = record.get("receiver_id")
    if not record.get("conversation_id") and sender_id and receiver_id:
        record["conversation_id"] = conversation_id_for(sender_id, receiver_id)

    # "read" is an older spelling of the flag
    if "is_read" not in record and "read" in record:
        record["is_read"] = record.pop("read")
    if record.get("is_read") is None:
        record["is_read"] = False

    return record

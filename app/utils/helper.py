from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

def utc_now() -> str:
    return format_timestamp(datetime.now(timezone.utc))

def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)

def matches_search(entry: dict, query: str) -> bool:
    """Case-insensitive match on name, plain substring match on the phone number."""
    if not query:
        return True

    name = (entry.get("name") or "").lower()
    phone = entry.get("phone_number") or ""

    return query.lower() in name or query in phone

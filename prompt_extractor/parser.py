import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .models import ExtractedConversation, Prompt

CONVERSATIONS_KEY = "conversations"
CONVERSATION_HINT_KEYS = ("title", "id", "messages", "name")

MESSAGE_KEYS = ("messages", "message_tree", "turns")
MESSAGE_HINT_KEYS = ("role", "sender", "content")

ROLE_KEYS = ("role", "sender", "author")
USER_ROLES = ("human", "user")

TIMESTAMP_KEYS = ("created_at", "timestamp", "time")

UNTITLED = "Untitled Conversation"
UNKNOWN = "unknown"


class StructureNotRecognizedError(ValueError):
    """Raised when no conversation list can be found in the document"""

    def __init__(self, message: str = None):
        super().__init__(
            message
            or "Could not find conversations in the file. "
            "Try running with the --debug option to analyze the structure."
        )


def _present(value: Any) -> bool:
    """Export fields count as missing only when null, false, zero or an empty string"""
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0
    return value != ""


def _first(record: dict, keys) -> Any:
    """Return the first present value among keys, or None"""
    for key in keys:
        value = record.get(key)
        if _present(value):
            return value
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _dump(record: Any) -> str:
    """Last resort: the whole structure as JSON text"""
    return json.dumps(record, ensure_ascii=False)


def _looks_like(items: Any, hint_keys) -> bool:
    """True for a non-empty list whose first element is a dict carrying a hint key"""
    if not isinstance(items, list) or not items:
        return False
    first = items[0]
    return isinstance(first, dict) and _first(first, hint_keys) is not None


def find_conversations(document: Any) -> Tuple[List, Optional[str]]:
    """
    Locate the conversation list inside an export document

    Args:
        document: Parsed JSON document

    Returns:
        Tuple of (conversations, key) where key names the property found by the
        fallback scan, or None when a known shape matched

    Raises:
        StructureNotRecognizedError: If no conversation list could be found
    """
    if isinstance(document, dict):
        conversations = document.get(CONVERSATIONS_KEY)
        if isinstance(conversations, list) and conversations:
            return conversations, None

    if isinstance(document, list):
        if document:
            return document, None
        raise StructureNotRecognizedError()

    if isinstance(document, dict):
        for key, value in document.items():
            if _looks_like(value, CONVERSATION_HINT_KEYS):
                return value, key

    raise StructureNotRecognizedError()


def locate_conversations(document: Any) -> List:
    """Locate the conversation list inside an export document"""
    conversations, _ = find_conversations(document)
    return conversations


def locate_messages(conversation: dict) -> List:
    """Find the message list of a conversation, or an empty list"""
    for key in MESSAGE_KEYS:
        if isinstance(conversation.get(key), list):
            return conversation[key]

    for value in conversation.values():
        if _looks_like(value, MESSAGE_HINT_KEYS):
            return value

    return []


def is_user_message(message: dict) -> bool:
    """A message is a prompt when one of its role fields is exactly 'human' or 'user'"""
    return any(message.get(key) in USER_ROLES for key in ROLE_KEYS)


def _content_part(part: Any) -> str:
    if isinstance(part, str):
        return part
    if isinstance(part, dict):
        value = _first(part, ("text", "value"))
        if value is not None:
            return _as_text(value)
    return _dump(part)


def extract_content(message: dict) -> str:
    """
    Extract the textual content of a message

    Handles plain strings, lists of content parts, top-level text/value fields
    and nested message fields. Falls back to dumping the whole message.
    """
    content = message.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "\n".join(_content_part(part) for part in content)

    for key in ("text", "value"):
        if _present(message.get(key)):
            return _as_text(message[key])

    nested = message.get("message")
    if _present(nested):
        return _as_text(nested)

    return _dump(message)


def extract_timestamp(message: dict) -> str:
    value = _first(message, TIMESTAMP_KEYS)
    return UNKNOWN if value is None else _as_text(value)


def extract_prompts(messages: List) -> List[Prompt]:
    """Return prompts for all user-authored messages, in source order"""
    return [
        Prompt(timestamp=extract_timestamp(message), content=extract_content(message))
        for message in messages
        if isinstance(message, dict) and is_user_message(message)
    ]


def _today() -> date:
    return datetime.now(timezone.utc).date()


def parse_date(value: Any, today: Optional[date] = None) -> str:
    """
    Convert a creation timestamp into a YYYY-MM-DD string

    Accepts ISO-8601 strings and Unix timestamps (seconds, or milliseconds for
    large values). Anything else yields today's date.
    """
    fallback = (today or _today()).isoformat()
    if isinstance(value, bool) or not value:
        return fallback

    try:
        if isinstance(value, (int, float)):
            seconds = value / 1000 if value > 1e11 else value
            return datetime.fromtimestamp(seconds, tz=timezone.utc).date().isoformat()
        if isinstance(value, str):
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(timezone.utc)
            return parsed.date().isoformat()
    except (ValueError, OverflowError, OSError):
        return fallback

    return fallback


def normalize_conversation(conversation: dict, today: Optional[date] = None) -> ExtractedConversation:
    """Normalize a single conversation record, never failing"""
    title = _first(conversation, ("title", "name"))
    conversation_id = _first(conversation, ("id", "uuid"))
    created = _first(conversation, ("created_at", "create_time"))

    return ExtractedConversation(
        title=UNTITLED if title is None else _as_text(title),
        id=UNKNOWN if conversation_id is None else _as_text(conversation_id),
        date=parse_date(created, today),
        prompts=extract_prompts(locate_messages(conversation)),
    )


class PromptExtractor:
    """Extracts user prompts from a conversation export of unknown shape"""

    def __init__(self, today: Optional[date] = None):
        self.today = today
        self.found_in: Optional[str] = None
        self.scanned = 0

    def load(self, export_path: Path) -> Any:
        """Read and parse the export file"""
        with open(export_path, encoding="utf-8") as f:
            try:
                return json.load(f)
            except RecursionError as e:
                raise ValueError("JSON document is nested too deeply to parse") from e

    def extract(self, document: Any) -> List[ExtractedConversation]:
        """
        Extract prompts from a parsed export document

        Args:
            document: Parsed JSON document

        Returns:
            Conversations that contain at least one prompt, in source order
        """
        conversations, self.found_in = find_conversations(document)
        self.scanned = len(conversations)

        extracted = []
        for conv_data in conversations:
            if not isinstance(conv_data, dict):
                continue
            conversation = normalize_conversation(conv_data, self.today)
            if conversation.prompts:
                extracted.append(conversation)

        return extracted

    def parse(self, export_path: Path) -> List[ExtractedConversation]:
        """Load an export file and extract its prompts"""
        return self.extract(self.load(export_path))

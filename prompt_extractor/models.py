from typing import List

from pydantic import BaseModel, Field


class Prompt(BaseModel):
    """A single user-authored message"""

    timestamp: str = "unknown"
    content: str


class ExtractedConversation(BaseModel):
    """A conversation reduced to its metadata and user prompts"""

    title: str = "Untitled Conversation"
    id: str = "unknown"
    date: str  # YYYY-MM-DD
    prompts: List[Prompt] = Field(default_factory=list)

    def prompt_count(self) -> int:
        """Number of prompts extracted from this conversation"""
        return len(self.prompts)

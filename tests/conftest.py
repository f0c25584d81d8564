"""Shared pytest fixtures for the prompt extractor test suite."""

import json
from datetime import date
from pathlib import Path

import pytest


@pytest.fixture()
def today() -> date:
    return date(2025, 6, 1)


@pytest.fixture()
def claude_export() -> list:
    """A Claude-style export: bare array, messages under chat_messages"""
    return [
        {
            "uuid": "conv-1",
            "name": "Refactoring help",
            "created_at": "2024-03-01T12:00:00.000Z",
            "chat_messages": [
                {
                    "sender": "human",
                    "text": "How do I split this function?",
                    "content": [{"type": "text", "text": "How do I split this function?"}],
                    "created_at": "2024-03-01T12:00:01Z",
                },
                {
                    "sender": "assistant",
                    "text": "Start by extracting the loop.",
                    "created_at": "2024-03-01T12:00:05Z",
                },
                {
                    "sender": "human",
                    "text": "Thanks",
                    "created_at": "2024-03-01T12:01:00Z",
                },
            ],
        },
        {
            "uuid": "conv-2",
            "name": "Empty chat",
            "created_at": "2024-03-02T08:00:00Z",
            "chat_messages": [],
        },
    ]


@pytest.fixture()
def wrapped_export() -> dict:
    """An export with a canonical conversations key"""
    return {
        "conversations": [
            {
                "id": "a",
                "title": "First",
                "created_at": "2024-01-15T10:30:00Z",
                "messages": [
                    {"role": "user", "content": "hi"},
                    {"role": "assistant", "content": "hello"},
                    {"role": "user", "content": [{"text": "a"}, "b"], "timestamp": "t1"},
                ],
            },
            {
                "id": "b",
                "title": "Second",
                "messages": [{"role": "assistant", "content": "only me"}],
            },
        ]
    }


@pytest.fixture()
def write_export(tmp_path: Path):
    """Write a document to conversations.json in a temporary directory"""

    def _write(document, name: str = "conversations.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write

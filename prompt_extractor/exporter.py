import json
from pathlib import Path
from typing import List

from .models import ExtractedConversation

CSV_HEADER = "Conversation Title,Conversation ID,Date,Prompt"


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


class PromptExporter:
    """Writes extracted prompts as JSON and CSV"""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def generate_json(self, conversations: List[ExtractedConversation]) -> str:
        """Serialize conversations to a pretty-printed JSON array"""
        return json.dumps(
            [conv.model_dump() for conv in conversations],
            indent=self.indent,
            ensure_ascii=False,
        )

    def generate_csv(self, conversations: List[ExtractedConversation]) -> str:
        """
        Build a CSV document with one row per prompt

        Every field is quoted and embedded quotes are doubled. Newlines inside
        a prompt are kept as-is within the quoted field.
        """
        lines = [CSV_HEADER]
        for conv in conversations:
            for prompt in conv.prompts:
                lines.append(
                    ",".join(
                        _quote(value)
                        for value in (conv.title, conv.id, conv.date, prompt.content)
                    )
                )
        return "\n".join(lines)

    def save(
        self,
        conversations: List[ExtractedConversation],
        json_path: Path,
        csv_path: Path,
    ) -> None:
        """
        Write both output files

        Args:
            conversations: Extracted conversations to write
            json_path: Destination of the JSON output
            csv_path: Destination of the CSV output
        """
        json_path.parent.mkdir(parents=True, exist_ok=True)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        json_path.write_text(self.generate_json(conversations), encoding="utf-8")
        csv_path.write_text(self.generate_csv(conversations), encoding="utf-8")

    @staticmethod
    def load_json(json_path: Path) -> List[ExtractedConversation]:
        """Read a previously written JSON output back into models"""
        with open(json_path, encoding="utf-8") as f:
            data = json.load(f)
        return [ExtractedConversation(**conv) for conv in data]

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ConfigManager
from .debug import describe_structure
from .exporter import PromptExporter
from .parser import PromptExtractor, StructureNotRecognizedError

app = typer.Typer(help="Prompt Extractor - Pull your prompts out of conversation exports")
console = Console()
err_console = Console(stderr=True)


def _fail(message: str, input_path: Path) -> NoReturn:
    """Report a fatal error with a hint to inspect the file, then exit"""
    err_console.print(f"[red]* Error processing {escape(input_path.name)}: {escape(message)}[/red]")
    err_console.print("[yellow]Try running with --debug to understand the file structure:[/yellow]")
    err_console.print(f"  extract-prompts {escape(str(input_path))} --debug")
    raise typer.Exit(1)


@app.command()
def extract(
    input_path: Path = typer.Argument(..., help="Path to the conversations.json export"),
    debug: bool = typer.Option(
        False, "--debug", help="Print the file structure instead of extracting"
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for extracted_prompts.json/.csv (default: next to the input)",
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="JSON file with output settings"
    ),
):
    """Extract user prompts from a conversation export into JSON and CSV"""

    if not input_path.exists():
        _fail(f"Export file not found: {input_path}", input_path)

    config = ConfigManager(config_file).load()
    extractor = PromptExtractor()

    try:
        document = extractor.load(input_path)
    except (OSError, ValueError) as e:
        _fail(str(e), input_path)

    if debug:
        for line in describe_structure(document):
            console.print(escape(line), highlight=False)
        raise typer.Exit(0)

    try:
        conversations = extractor.extract(document)
    except StructureNotRecognizedError as e:
        _fail(str(e), input_path)

    if extractor.found_in:
        console.print(f"[dim]Found conversations in '{escape(extractor.found_in)}' property[/dim]")

    json_path, csv_path = config.output_paths(input_path, output_dir)
    PromptExporter(indent=config.json_indent).save(conversations, json_path, csv_path)

    prompt_total = sum(conv.prompt_count() for conv in conversations)

    console.print("\n[green]* Extraction complete![/green]\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Status", style="dim")
    table.add_column("Count", justify="right")

    table.add_row("Conversations scanned", str(extractor.scanned))
    table.add_row("Conversations with prompts", f"[green]{len(conversations)}[/green]")
    table.add_row("Prompts extracted", f"[green]{prompt_total}[/green]")

    console.print(table)
    console.print(f"\n[dim]JSON saved to: {escape(str(json_path))}[/dim]")
    console.print(f"[dim]CSV saved to: {escape(str(csv_path))}[/dim]")


def main():
    app()


if __name__ == "__main__":
    main()

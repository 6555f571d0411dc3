#!/usr/bin/env python3
"""
Chat Tester Script

Runs sample messages through the context assembler and the model.

Usage:
    # Run all sample messages (assembly only)
    python scripts/try_chat.py --dry-run

    # Send one message with a document loaded
    python scripts/try_chat.py --message "Summarize it" --document syllabus.pdf

    # Interactive mode (keeps conversation history)
    python scripts/try_chat.py --interactive
"""

import sys
import asyncio
import argparse
import mimetypes
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.panel import Panel
from rich.markdown import Markdown
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from config.settings import get_settings
from src.context.assembler import ContextAssembler, ChatMessage
from src.documents.loader import DocumentLoader, DocumentError
from src.llm.claude import ClaudeClient, ModelClientError
from src.news.fetcher import NewsFetcher

console = Console()


# Sample messages with the context they should trigger
SAMPLE_MESSAGES = [
    {"message": "What time is it?", "expected": ["datetime"]},
    {"message": "What is today's date?", "expected": ["datetime"]},
    {"message": "Any breaking news on campus housing?", "expected": ["news"]},
    {"message": "Show me the latest headlines", "expected": ["news"]},
    {"message": "What are the current events today?", "expected": ["datetime", "news"]},
    {"message": "Summarize it", "expected": []},
    {"message": "How do I register for classes?", "expected": []},
]


def main():
    parser = argparse.ArgumentParser(description="Try Campus Connect chat messages")
    parser.add_argument("--message", help="Send a specific message")
    parser.add_argument("--document", help="Load a PDF, TXT or DOCX file as document context")
    parser.add_argument("--interactive", "-i", action="store_true", help="Interactive mode")
    parser.add_argument("--dry-run", action="store_true", help="Print the assembled prompt, skip the model")

    args = parser.parse_args()

    console.print("\n[bold]Campus Connect - Chat Tester[/bold]\n")

    settings = get_settings()

    document_text = None
    if args.document:
        document_text = load_document(Path(args.document), DocumentLoader(settings))

    assembler = ContextAssembler(settings, news_fetcher=NewsFetcher(settings))
    llm = ClaudeClient(settings) if not args.dry_run else None

    if llm and not llm.is_configured:
        console.print("[yellow]ANTHROPIC_API_KEY not set, running in dry-run mode.[/]\n")
        llm = None

    if args.interactive:
        interactive_mode(assembler, llm, document_text)
    elif args.message:
        send_message(args.message, [], assembler, llm, document_text)
    else:
        run_samples(assembler, document_text)


def load_document(path: Path, loader: DocumentLoader):
    """Load a local file the same way the upload endpoint does"""
    if not path.exists():
        console.print(f"[red]File not found: {path}[/]")
        sys.exit(1)

    content_type, _ = mimetypes.guess_type(str(path))

    try:
        text = loader.load(path.read_bytes(), content_type or "")
    except DocumentError as e:
        console.print(f"[red]Could not load document: {e}[/]")
        sys.exit(1)

    console.print(f"Loaded document: {path.name} ({len(text)} chars)\n")
    return text


def send_message(message: str, history, assembler, llm, document_text):
    """Assemble one message and optionally send it"""
    console.print(Panel(message, title="Message", border_style="blue"))

    packet = asyncio.run(assembler.assemble(message, history, document_text))

    console.print(f"\n[bold]Context:[/] {[b.source.value for b in packet.blocks] or 'none'}")
    console.print(f"[bold]Parts:[/] {[p.role for p in packet.parts]}")

    if not llm:
        console.print(Panel(packet.to_prompt(), title="Assembled Prompt", border_style="yellow"))
        return None

    console.print(f"\n[bold]Generating Response...[/]")
    try:
        response = llm.generate(packet)
    except ModelClientError as e:
        console.print(f"[red]✗ {e}[/]")
        return None

    console.print(Panel(Markdown(response), title="Response", border_style="green"))
    return response


def run_samples(assembler, document_text):
    """Check which context each sample message triggers"""
    console.print(f"[bold]Running {len(SAMPLE_MESSAGES)} sample messages...[/]\n")

    passed = 0

    for i, sample in enumerate(SAMPLE_MESSAGES, 1):
        message = sample["message"]
        console.print(f"[dim]Sample {i}/{len(SAMPLE_MESSAGES)}:[/] {message}")

        packet = asyncio.run(assembler.assemble(message, [], document_text))
        sources = [s.value for s in packet.intent.sources]

        ok = sources == sample["expected"]
        passed += ok
        color = "green" if ok else "red"
        console.print(f"  [{color}]{'✓' if ok else '✗'}[/] Context: {sources or 'none'}")

    console.print(f"\n[bold]Results: {passed}/{len(SAMPLE_MESSAGES)} matched[/]")


def interactive_mode(assembler, llm, document_text):
    """Interactive chat mode"""
    console.print("[bold]Interactive Mode[/] - Type 'quit' to exit\n")

    history = []

    while True:
        try:
            message = console.input("[bold blue]You>[/] ")

            if message.lower() in ['quit', 'exit', 'q']:
                break

            if not message.strip():
                continue

            response = send_message(message, history, assembler, llm, document_text)

            history.append(ChatMessage(sender="user", content=message))
            if response:
                history.append(ChatMessage(sender="assistant", content=response))

        except KeyboardInterrupt:
            console.print("\n")
            break

    console.print("Goodbye!")


if __name__ == "__main__":
    main()

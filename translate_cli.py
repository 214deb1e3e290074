#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Translation Hub CLI - translate text and documents from the command line

Usage:
    python translate_cli.py text "Hello world" --target-lang vi
    python translate_cli.py document report.docx --target-lang vi --output-dir output
    python translate_cli.py check-keys
"""

import sys
import asyncio
import argparse
from pathlib import Path
from typing import Optional, List

from config.settings import ConfigurationError, load_settings
from core.file_io import DirectorySink, LocalFileReader
from core.models import JobState, TranslationRequest
from core.orchestrator import TranslationOrchestrator
from providers import ChatTranslator, DocumentTranslator


def build_orchestrator(settings, sink=None) -> TranslationOrchestrator:
    return TranslationOrchestrator(
        settings,
        ChatTranslator(settings),
        DocumentTranslator(settings),
        file_reader=LocalFileReader(),
        sink=sink or DirectorySink(Path("output")),
        progress_callback=print_progress,
    )


def print_progress(state: JobState, message: str) -> None:
    print(f"   [{state.value}] {message}")


async def _close(orchestrator: TranslationOrchestrator) -> None:
    await orchestrator.chat_translator.aclose()
    await orchestrator.document_translator.aclose()


def cmd_text(args, settings) -> int:
    """Translate a text snippet (argument or stdin)"""
    text = args.text if args.text is not None else sys.stdin.read()
    orchestrator = build_orchestrator(settings)

    async def run():
        try:
            return await orchestrator.translate_text(
                TranslationRequest(text, args.source_lang, args.target_lang)
            )
        finally:
            await _close(orchestrator)

    result = asyncio.run(run())
    if not result.is_ok:
        print(f"❌ {result.error_kind.value}: {result.message}", file=sys.stderr)
        return 1
    print(result.text)
    return 0


def cmd_document(args, settings) -> int:
    """Translate a document file into the output directory"""
    input_file = Path(args.input).resolve()
    if not input_file.exists():
        print(f"❌ Input file not found: {input_file}")
        return 1

    sink = DirectorySink(Path(args.output_dir))
    orchestrator = build_orchestrator(settings, sink)

    async def run():
        try:
            return await orchestrator.submit_document(
                input_file.name,
                input_file.stat().st_size,
                args.source_lang,
                args.target_lang,
                source=input_file,
            )
        finally:
            await _close(orchestrator)

    print(f"📄 Translating {input_file.name}: {args.source_lang} → {args.target_lang}")
    outcome = asyncio.run(run())
    if not outcome.delivered:
        print(f"❌ {outcome.error_kind.value}: {outcome.message}", file=sys.stderr)
        return 1

    via = "text fallback" if outcome.used_fallback else "document provider"
    print(f"✅ Saved {sink.written[-1]} ({outcome.artifact.size} bytes, via {via})")
    return 0


def cmd_check_keys(args, settings) -> int:
    """Report each credential independently"""
    for name, status in settings.credential_report().items():
        if status.valid:
            mark = "✅ valid"
        elif status.exists:
            mark = "⚠️  too short"
        else:
            mark = "❌ missing"
        print(f"   {name:<12} {mark}")
    return 0 if settings.credential_report()["openrouter"].valid else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Translation Hub - text and document translation",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Text command
    text_parser = subparsers.add_parser('text', help='Translate text')
    text_parser.add_argument('text', nargs='?', help='Text to translate (default: read stdin)')
    text_parser.add_argument('--source-lang', default='auto', help='Source language (default: auto)')
    text_parser.add_argument('--target-lang', default='vi', help='Target language (default: vi)')

    # Document command
    document_parser = subparsers.add_parser('document', help='Translate a document')
    document_parser.add_argument('input', help='Input file (.txt .docx .doc .pdf .pptx .ppt .html)')
    document_parser.add_argument('--source-lang', default='auto', help='Source language (default: auto)')
    document_parser.add_argument('--target-lang', default='vi', help='Target language (default: vi)')
    document_parser.add_argument('--output-dir', '-o', default='output', help='Output directory (default: output)')

    # Check-keys command
    subparsers.add_parser('check-keys', help='Show API key status')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = load_settings()

    if args.command != 'check-keys':
        try:
            settings.require_primary_credential()
        except ConfigurationError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1

    # Route to command handlers
    commands = {
        'text': cmd_text,
        'document': cmd_document,
        'check-keys': cmd_check_keys,
    }
    return commands[args.command](args, settings)


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python
"""Ask questions about a remote PDF from the command line.

Usage:
    python scripts/ask.py URL -q "What is the grace period?"
    python scripts/ask.py URL -q "Q1" -q "Q2" --top-k 5
    python scripts/ask.py URL --questions-file questions.txt
"""
import argparse
import asyncio
import sys
from pathlib import Path
from datetime import datetime

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from docqa import config
from docqa.errors import DocQAError
from docqa.pipeline import DocumentQAPipeline
from docqa.rag.chunker import WordChunker
import structlog

logger = structlog.get_logger()


def load_questions(args) -> list:
    questions = list(args.question or [])
    if args.questions_file:
        lines = args.questions_file.read_text(encoding="utf-8").splitlines()
        questions.extend(line.strip() for line in lines if line.strip())
    return questions


def print_results(results, elapsed_seconds: float):
    print(f"\n{'=' * 60}")
    print(f"  Answers")
    print(f"{'=' * 60}\n")

    for i, result in enumerate(results, 1):
        marker = "✅" if result.success else "❌"
        print(f"{marker} Q{i}: {result.question}")
        print(f"   {result.text}\n")

    failed = sum(1 for r in results if not r.success)
    print(f"{'=' * 60}")
    print(f"  ❓ Questions:  {len(results)}")
    print(f"  ❌ Failed:     {failed}")
    print(f"  ⏱️  Elapsed:    {elapsed_seconds:.1f}s")
    print(f"{'=' * 60}\n")


async def main():
    """Main entry point for the ask script."""
    parser = argparse.ArgumentParser(
        description="Answer questions about a PDF document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/ask.py https://example.com/policy.pdf -q "What is covered?"
  python scripts/ask.py https://example.com/policy.pdf --questions-file qs.txt
        """,
    )

    parser.add_argument("url", help="URL of the PDF document")

    parser.add_argument(
        "--question",
        "-q",
        action="append",
        help="Question to ask (repeatable)",
    )

    parser.add_argument(
        "--questions-file",
        type=Path,
        default=None,
        help="File with one question per line",
    )

    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help=f"Chunks used per answer (default: {config.RETRIEVAL_TOP_K})",
    )

    parser.add_argument(
        "--max-words",
        type=int,
        default=None,
        help=f"Words per chunk (default: {config.CHUNK_MAX_WORDS})",
    )

    args = parser.parse_args()
    questions = load_questions(args)

    if not questions:
        parser.error("provide at least one --question or --questions-file")

    print("\n📋 Configuration:")
    print(f"   Document:         {args.url}")
    print(f"   Embedding model:  {config.EMBEDDING_MODEL}")
    print(f"   Answer model:     {config.ANSWER_MODEL}")
    print(f"   Chunk size:       {args.max_words or config.CHUNK_MAX_WORDS} words")
    print(f"   Top-K retrieval:  {args.top_k or config.RETRIEVAL_TOP_K}")

    start_time = datetime.now()

    try:
        pipeline = DocumentQAPipeline(
            chunker=WordChunker(max_words=args.max_words),
            top_k=args.top_k,
        )
        results = await pipeline.run(args.url, questions)

    except KeyboardInterrupt:
        print("\n\n⚠️  Cancelled by user.\n")
        sys.exit(1)

    except DocQAError as e:
        print(f"\n❌ Error ({e.status_code}): {e.message}\n")
        sys.exit(1)

    except Exception as e:
        print(f"\n❌ Error: {e}\n")
        logger.error("ask_script_failed", error=str(e), error_type=type(e).__name__)
        sys.exit(1)

    print_results(results, (datetime.now() - start_time).total_seconds())

    if any(not r.success for r in results):
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())

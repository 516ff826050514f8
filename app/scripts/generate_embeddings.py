"""
Generate profile embeddings from the command line.

Usage:
    stuntpitch-embeddings                      # embed up to 5 profiles
    stuntpitch-embeddings --batch=10           # embed up to 10 profiles
    stuntpitch-embeddings --batch=5 --limit=50 # 50 profiles in chunks of 5
    stuntpitch-embeddings --profile=<id>       # (re)embed one profile
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

import structlog

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.domain.entities.embedding import BatchReport, EmbeddingJobRequest, EmbeddingStatus
from app.domain.exceptions import DomainException
from app.infrastructure.providers.ai_provider import get_embedding_service, reset_ai_services
from app.infrastructure.providers.database_provider import reset_database_service

logger = structlog.get_logger(__name__)

BANNER = (
    "Starting embedding generation...",
    "Make sure you have:",
    "   - OPENAI_API_KEY set in your environment",
    "   - the pgvector extension enabled in Supabase",
    "   - the profiles.content_embedding column created",
    "",
)


def build_parser(default_batch_size: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stuntpitch-embeddings",
        description="Generate semantic embeddings for StuntPitch performer profiles",
    )
    parser.add_argument("--profile", default=None, help="Generate the embedding for this profile ID only")
    parser.add_argument(
        "--batch",
        type=int,
        default=default_batch_size,
        help=f"Profiles per chunk (default: {default_batch_size})",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum profiles to process in this run (default: the batch size)",
    )
    return parser


def _print_report(report: BatchReport) -> None:
    print(
        f"Processed {report.selected} profile(s): "
        f"{report.succeeded} succeeded, {report.failed} failed, {report.skipped} skipped"
    )
    for failure in report.failures:
        print(f"   - {failure.profile_id}: {failure.error}")


async def _run(job: EmbeddingJobRequest) -> None:
    try:
        service = await get_embedding_service()
        if job.is_single:
            print(f"Generating embedding for specific profile: {job.profile_id}")
        else:
            print(f"Generating embeddings for all profiles (batch size: {job.batch_size})")
            print("This may take several minutes...")

        outcome = await service.run(job)

        if isinstance(outcome, BatchReport):
            _print_report(outcome)
            if outcome.all_succeeded:
                print("All embeddings generated successfully!")
            else:
                print(f"Embeddings generated with {outcome.failed} failure(s).")
        elif outcome.status == EmbeddingStatus.SKIPPED:
            print(f"Profile {outcome.profile_id} has no content to embed; nothing stored.")
        else:
            print("Embedding generated successfully!")
    finally:
        await reset_ai_services()
        await reset_database_service()


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    configure_logging(settings)

    args = build_parser(settings.DEFAULT_CLI_BATCH_SIZE).parse_args(argv)

    for line in BANNER:
        print(line)

    try:
        job = EmbeddingJobRequest(
            profile_id=args.profile,
            batch_size=args.batch,
            max_profiles=args.limit,
        )
        asyncio.run(_run(job))
    except DomainException as e:
        logger.error("Embedding generation failed", error_type=type(e).__name__, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error("Unexpected error during embedding generation", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

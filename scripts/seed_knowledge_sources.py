#!/usr/bin/env python3
"""
Script to seed the knowledge_sources table with sample Re:cinq content.

Usage:
    python -m scripts.seed_knowledge_sources
    python -m scripts.seed_knowledge_sources --dry-run

Requires the DB_* environment variables (or DB_URL) and an up-to-date schema
(``alembic upgrade head``).
"""

import argparse
import asyncio

from src.db.config import get_db_settings
from src.db.database import close_db, get_async_session_local, init_db
from src.db.knowledge_sources.repository import KnowledgeSourceRepository

SAMPLE_SOURCES = [
    {
        "title": "Re:cinq - About",
        "url": "https://re-cinq.com/",
        "content": (
            "Re:cinq helps businesses integrate AI and Cloud Native technologies. "
            "The company guides organisations through the transition from Cloud "
            "Native to AI Native, combining platform engineering with practical "
            "AI adoption."
        ),
    },
    {
        "title": "Re:cinq - Services",
        "url": "https://re-cinq.com/services",
        "content": (
            "Re:cinq offers three main services: Build Foundation, Accelerate "
            "Software Delivery, and Drive Strategic Growth. Build Foundation sets "
            "up secure, scalable cloud platforms. Accelerate Software Delivery "
            "improves developer experience and delivery pipelines. Drive Strategic "
            "Growth aligns AI initiatives with business goals."
        ),
    },
    {
        "title": "Re:cinq - AI Native Transformation",
        "url": "https://re-cinq.com/ai-native",
        "content": (
            "Re:cinq helps with AI Native transformation by assessing readiness, "
            "building the data and platform foundations AI workloads need, and "
            "embedding AI into products and engineering workflows step by step."
        ),
    },
    {
        "title": "Waves of Innovation",
        "url": "https://re-cinq.com/waves-of-innovation",
        "content": (
            "Waves of Innovation is the Re:cinq community for people navigating "
            "Cloud Native and AI Native change. It includes a newsletter, a "
            "podcast, and a library of resources and events."
        ),
    },
]


async def seed_knowledge_sources(dry_run: bool = False, create_tables: bool = False) -> None:
    settings = get_db_settings()
    print(f"🌱 Seeding knowledge_sources on {settings.host or 'DB_URL'}")
    print(f"🔍 Dry run: {dry_run}")
    print()

    if dry_run:
        for source in SAMPLE_SOURCES:
            print(f"  • {source['title']} ({source['url']})")
        print()
        print("🔍 Dry run complete - no data was written")
        return

    success_count = 0
    try:
        if create_tables:
            await init_db()

        session_local = get_async_session_local()
        async with session_local() as session:
            repository = KnowledgeSourceRepository(session)
            for source in SAMPLE_SOURCES:
                created = await repository.create_source(
                    title=source["title"],
                    content=source["content"],
                    url=source["url"],
                )
                print(f"  • {created.title} ({created.id})")
                success_count += 1
            await session.commit()
    finally:
        await close_db()

    print()
    print(f"🎉 Seeding complete! {success_count} knowledge sources added")


def main():
    parser = argparse.ArgumentParser(description="Seed knowledge_sources with sample data")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be done without making changes")
    parser.add_argument("--create-tables", action="store_true", help="Create missing tables first (local development only; use alembic elsewhere)")

    args = parser.parse_args()

    print("🚀 Knowledge Source Seeder")
    print("=" * 40)

    try:
        asyncio.run(seed_knowledge_sources(dry_run=args.dry_run, create_tables=args.create_tables))
    except Exception as e:
        print(f"💥 Error: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()

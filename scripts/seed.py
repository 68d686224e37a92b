"""Reset the database and load demo listings, articles and comments."""
import argparse
import asyncio
import random
import time

from app.database import Base, async_session, engine
from app.models import Article, ArticleComment, Listing, ListingComment

LISTINGS = [
    {
        "name": "MacBook Pro 14",
        "description": "M2 Pro, 16GB, 512GB. Light scratches from daily use.",
        "price": 2200000,
        "tags": ["laptop", "apple", "used"],
    },
    {
        "name": "Gaming mouse",
        "description": "Ultralight, crisp clicks, barely used.",
        "price": 45000,
        "tags": ["peripherals"],
    },
]

ARTICLES = [
    {"title": "First post", "content": "Hello everyone. The free board is open!"},
    {"title": "A question", "content": "Any tips for deploying a Python API?"},
]

LISTING_COMMENTS = [
    "Is the price negotiable?",
    "Interested. Can we meet in person?",
    "How worn is it?",
]
ARTICLE_COMMENTS = ["Welcome!", "Try a managed Postgres and a container host."]

WORDS = ["laptop", "phone", "desk", "chair", "camera", "bike", "lamp", "used", "new", "boxed"]


async def seed(extra: int = 0):
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        listings = [Listing(**data, images=[]) for data in LISTINGS]
        for i in range(extra):
            words = random.sample(WORDS, k=3)
            listings.append(
                Listing(
                    name=f"{words[0].title()} #{i}",
                    description=f"{' '.join(words)} in good condition",
                    price=random.randint(0, 500) * 1000,
                    tags=words[1:],
                    images=[],
                )
            )
        session.add_all(listings)

        articles = [Article(**data) for data in ARTICLES]
        session.add_all(articles)
        await session.flush()

        session.add_all(
            [
                ListingComment(content=LISTING_COMMENTS[0], listing_id=listings[0].id),
                ListingComment(content=LISTING_COMMENTS[1], listing_id=listings[0].id),
                ListingComment(content=LISTING_COMMENTS[2], listing_id=listings[1].id),
                ArticleComment(content=ARTICLE_COMMENTS[0], article_id=articles[0].id),
                ArticleComment(content=ARTICLE_COMMENTS[1], article_id=articles[1].id),
            ]
        )
        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"Seeded {len(listings)} listings, {len(articles)} articles in {elapsed:.2f}s")


def main():
    parser = argparse.ArgumentParser(description="Seed the market/board database")
    parser.add_argument("--extra", type=int, default=0, help="Generate this many extra random listings")
    args = parser.parse_args()
    asyncio.run(seed(extra=args.extra))


if __name__ == "__main__":
    main()

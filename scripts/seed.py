"""Database seeder: a small category tree with articles under each node."""
import asyncio
import argparse
import random
import time
from app.database import engine, async_session, Base
from app.resources import ARTICLE, CATEGORY
from app.services.resource_model import HierarchicalResourceModel
from app.store import DocumentStore

ROOTS = ["Breakfast", "Lunch", "Dinner", "Desserts"]
DISHES = ["Cheese sandwich", "Burger", "Hot dog", "Pancakes", "Omelette",
          "Soup", "Salad", "Risotto", "Pie", "Ice cream"]

async def seed(small: bool = False):
    children_per_root = 2 if small else 5
    articles_per_category = 3 if small else 50

    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        categories = HierarchicalResourceModel(CATEGORY, DocumentStore(session, CATEGORY.model))
        articles = HierarchicalResourceModel(ARTICLE, DocumentStore(session, ARTICLE.model))

        nodes = []
        for name in ROOTS:
            root = await categories.create({"name": name, "parent": None})
            nodes.append(root)
            for i in range(children_per_root):
                nodes.append(await categories.create({"name": f"{name} {i}", "parent": root.id}))
        print(f"  Created {len(nodes)} categories")

        total = 0
        for node in nodes:
            for i in range(articles_per_category):
                await articles.create({
                    "name": f"{random.choice(DISHES)} #{i}",
                    "category_id": node.id,
                    "text": f"How to cook it, variant {i}.",
                    "description": None if i % 3 else f"Filed under {node.name}",
                })
                total += 1
        print(f"  Created {total} articles")

        await session.commit()

    print(f"Seeding complete in {time.perf_counter() - start:.1f}s")

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--small", action="store_true", help="Seed a small dataset")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))

import asyncio
import sys

from db.client import create_pool, close_pool
from db.config import DatabaseConfig


async def main(workflow_name: str):
    """Main entry point for running workflows with an owned connection pool."""
    pool = await create_pool(DatabaseConfig.from_env())
    try:
        if workflow_name == "list_hotels":
            from services.hotels.repo import HotelRepo
            from services.hotels.service import Service
            from workflows.list_hotels import format_hotel

            hotels = await Service(HotelRepo(pool)).list()
            for hotel in hotels:
                print(format_hotel(hotel))
        else:
            print(f"Unknown workflow: {workflow_name}")
            sys.exit(1)
    finally:
        await close_pool(pool)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python main.py <workflow_name>")
        sys.exit(1)

    workflow_name = sys.argv[1]
    asyncio.run(main(workflow_name))

#!/usr/bin/env python3
"""
Database Reset Script
Clear users and reservations

Features:
1. Create missing tables
2. Delete every reservation and user, restart reservation ids at 1

Notes:
- Flights are kept; to (re)load them run `python -m scripts.seed_flights`
"""

import asyncio

from src.platform.config.di import container
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger


async def reset_database() -> None:
    await create_db_and_tables()
    await container.clear_tables_use_case().execute()
    Logger.base.info('🧹 [RESET] Users and reservations cleared, rid restarts at 1')


async def main() -> None:
    try:
        await reset_database()
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())

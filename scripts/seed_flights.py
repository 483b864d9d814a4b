#!/usr/bin/env python3
"""
Flight Seed Script
Load the flights reference table from a CSV file

Usage:
    python -m scripts.seed_flights [path/to/flights.csv]

Accepted layouts:
1. A header row naming at least fid, day_of_month, carrier_id, flight_num,
   origin_city, dest_city, actual_time, capacity, price (canceled optional)
2. The headerless 18-column flights dataset export

Existing rows with the same fid are replaced.
"""

import asyncio
import csv
import sys
from pathlib import Path
from typing import Iterator

from sqlalchemy import delete

from src.platform.constant.path import FLIGHTS_CSV_PATH
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_session_maker,
)
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.driven_adapter.model.flight_model import FlightModel


REQUIRED_COLUMNS = (
    'fid',
    'day_of_month',
    'carrier_id',
    'flight_num',
    'origin_city',
    'dest_city',
    'actual_time',
    'capacity',
    'price',
)

# Column order of the headerless dataset export
DATASET_COLUMNS = (
    'fid',
    'month_id',
    'day_of_month',
    'day_of_week_id',
    'carrier_id',
    'flight_num',
    'origin_city',
    'origin_state',
    'dest_city',
    'dest_state',
    'departure_delay',
    'taxi_out',
    'arrival_delay',
    'canceled',
    'actual_time',
    'distance',
    'capacity',
    'price',
)

BATCH_SIZE = 1000


def _int(value: str | None) -> int:
    # The dataset leaves actual_time empty for canceled flights
    return int(float(value)) if value else 0


def read_flights(csv_path: Path) -> Iterator[FlightModel]:
    with csv_path.open(newline='', encoding='utf-8') as f:
        first_line = f.readline()
        f.seek(0)
        has_header = not first_line.split(',', 1)[0].strip().isdigit()
        reader = csv.DictReader(f, fieldnames=None if has_header else DATASET_COLUMNS)

        missing = [col for col in REQUIRED_COLUMNS if col not in (reader.fieldnames or ())]
        if missing:
            raise ValueError(f'{csv_path} is missing columns: {", ".join(missing)}')

        for row in reader:
            yield FlightModel(
                fid=_int(row['fid']),
                day_of_month=_int(row['day_of_month']),
                carrier_id=row['carrier_id'].strip(),
                flight_num=row['flight_num'].strip(),
                origin_city=row['origin_city'].strip(),
                dest_city=row['dest_city'].strip(),
                actual_time=_int(row['actual_time']),
                capacity=_int(row['capacity']),
                price=_int(row['price']),
                canceled=_int(row.get('canceled')) != 0,
            )


async def seed_flights(csv_path: Path = FLIGHTS_CSV_PATH) -> int:
    """Insert or replace every flight in ``csv_path``; returns the row count."""
    await create_db_and_tables()

    count = 0
    batch: list[FlightModel] = []
    session_maker = get_session_maker()
    async with session_maker() as session:
        for flight in read_flights(csv_path):
            batch.append(flight)
            if len(batch) >= BATCH_SIZE:
                count += await _write_batch(session, batch)
                batch = []
        if batch:
            count += await _write_batch(session, batch)
        await session.commit()

    Logger.base.info(f'✈️  [SEED] Loaded {count} flights from {csv_path}')
    return count


async def _write_batch(session, batch: list[FlightModel]) -> int:
    await session.execute(delete(FlightModel).where(FlightModel.fid.in_([f.fid for f in batch])))
    session.add_all(batch)
    await session.flush()
    return len(batch)


async def main(argv: list[str]) -> None:
    csv_path = Path(argv[0]) if argv else FLIGHTS_CSV_PATH
    try:
        await seed_flights(csv_path)
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main(sys.argv[1:]))

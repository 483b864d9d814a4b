from pathlib import Path


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Log directory
LOG_DIR = BASE_DIR / 'logs'

# Default flights CSV used by scripts/seed_flights.py
FLIGHTS_CSV_PATH = BASE_DIR / 'data' / 'flights.csv'

from pathlib import Path

from catering.utilities.config import DATA_DIR

# Centralized data file names (single source of truth)
SUBSCRIPTIONS_FILENAME = 'subscriptions.json'
TESTIMONIALS_FILENAME = 'testimonials.json'
ACCOUNTS_FILENAME = 'accounts.json'


def data_file(filename: str, data_dir: Path = None) -> Path:
    return Path(data_dir or DATA_DIR) / filename


__all__ = ['DATA_DIR', 'SUBSCRIPTIONS_FILENAME', 'TESTIMONIALS_FILENAME', 'ACCOUNTS_FILENAME', 'data_file']

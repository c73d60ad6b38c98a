# settings.py
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / '.env')


def _path_from_env(name, default):
    """Relative paths are taken from the project directory, not the working directory."""
    path = Path(os.environ.get(name) or default)
    return path if path.is_absolute() else BASE_DIR / path


class Config:
    """
    Process configuration shared by the viewer and the records service.
    Values come from the environment (or a local .env file).
    """

    # --- Records service ---
    PORT = int(os.environ.get('PORT', 3000))
    SPREADSHEET_ID = os.environ.get('SPREADSHEET_ID')
    SHEET_NAME = os.environ.get('SHEET_NAME', 'DadosExames')
    # Service-account JSON, serialized as a single string
    GOOGLE_CREDENTIALS = os.environ.get('GOOGLE_CREDENTIALS')
    TAXONOMY_FILE = _path_from_env('TAXONOMY_FILE', 'config.json')

    # --- Viewer ---
    VIEWER_PORT = int(os.environ.get('VIEWER_PORT', 3000))
    VIEWER_DATA_DIR = _path_from_env('VIEWER_DATA_DIR', 'data')
    VIEWER_PUBLIC_DIR = _path_from_env('VIEWER_PUBLIC_DIR', 'public')

    # --- Logging ---
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
    LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def configure_logging(level=None):
    logging.basicConfig(level=level or Config.LOG_LEVEL, format=Config.LOG_FORMAT)

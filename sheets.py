# sheets.py
"""Google Sheets access for the exam records service.

The spreadsheet is the only store. Every call authenticates, reads or
appends, and returns; nothing is cached here.
"""
import json
import logging

import gspread
from google.oauth2.service_account import Credentials

from settings import Config

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/spreadsheets']
READ_RANGE = 'A2:M'
WRITE_RANGE = 'A2:M'


class SheetsConfigError(RuntimeError):
    """Raised when the spreadsheet id or the service-account credential is missing."""


def get_auth_client(credentials_json=None):
    """Return an authorized gspread client built from the service-account blob."""
    blob = credentials_json if credentials_json is not None else Config.GOOGLE_CREDENTIALS
    try:
        if not blob:
            raise SheetsConfigError('GOOGLE_CREDENTIALS is not set')
        info = json.loads(blob) if isinstance(blob, str) else dict(blob)
        creds = Credentials.from_service_account_info(info, scopes=SCOPES)
        return gspread.authorize(creds)
    except Exception as e:
        logger.error('sheets auth failed: %s', e.__class__.__name__)
        raise


def get_worksheet(client):
    if not Config.SPREADSHEET_ID:
        raise SheetsConfigError('SPREADSHEET_ID is not set')
    return client.open_by_key(Config.SPREADSHEET_ID).worksheet(Config.SHEET_NAME)


def get_sheet_data(client, cell_range=READ_RANGE):
    try:
        values = get_worksheet(client).get(cell_range)
    except Exception as e:
        logger.error('sheets read failed (%s!%s): %s', Config.SHEET_NAME, cell_range, e.__class__.__name__)
        raise
    return [list(row) for row in values or []]


def append_row(client, row):
    try:
        get_worksheet(client).append_row(
            row,
            value_input_option='USER_ENTERED',
            table_range=WRITE_RANGE,
        )
    except Exception as e:
        logger.error('sheets append failed (%s): %s', Config.SHEET_NAME, e.__class__.__name__)
        raise

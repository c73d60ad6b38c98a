import pytest

import app as records_service
import sheets
import viewer
from fakes import FakeClient, FakeWorksheet
from settings import Config


@pytest.fixture
def worksheet():
    return FakeWorksheet()


@pytest.fixture
def sheets_client(monkeypatch, worksheet):
    """Route every sheets call to an in-memory worksheet."""
    monkeypatch.setattr(Config, 'SPREADSHEET_ID', 'planilha-teste')
    monkeypatch.setattr(Config, 'SHEET_NAME', 'DadosExames')
    fake = FakeClient(worksheet)
    monkeypatch.setattr(sheets, 'get_auth_client', lambda *a, **kw: fake)
    return fake


@pytest.fixture
def records_app():
    records_service.app.config['TESTING'] = True
    return records_service.app


@pytest.fixture
def client(records_app):
    return records_app.test_client()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(viewer, 'DATA_DIR', tmp_path)
    return tmp_path


@pytest.fixture
def viewer_client():
    viewer.app.config['TESTING'] = True
    return viewer.app.test_client()

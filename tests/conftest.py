"""Shared pytest fixtures for moneytrack tests."""

from datetime import date
from types import SimpleNamespace

import pytest
from click.testing import CliRunner

from moneytrack.domain.ledger import LedgerService
from moneytrack.sheets.csv_store import CSVSheetStore
from moneytrack.sheets.sqlalchemy_store import SQLAlchemySheetStore


TODAY = date(2024, 3, 15)

SAMPLE_SHEET = (
    "Date,Type,Amount,Category,Description\n"
    "10-01-2024,Expense,1200,Food,groceries\n"
    "12-01-2024,Expense,300,Food,dinner\n"
    "20-02-2024,Expense,150,Transport,bus pass\n"
    "01-03-2024,Income,50000,Salary,march salary\n"
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep user settings and API keys out of tests."""
    for name in (
        "OPENROUTER_API_KEY",
        "MONEYTRACK_LLM_MODEL",
        "MONEYTRACK_LLM_BASE_URL",
        "MONEYTRACK_LLM_TIMEOUT",
        "MONEYTRACK_SHEET_PATH",
        "MONEYTRACK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MONEYTRACK_CONFIG_PATH", str(tmp_path / "default-config.json"))


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def sheet_path(tmp_path):
    """Path to a CSV sheet that does not exist yet."""
    return tmp_path / "ledger.csv"


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


@pytest.fixture
def write_sheet(sheet_path):
    """Write CSV text to the sheet path and return the path."""

    def _write(content: str):
        sheet_path.write_text(content, encoding="utf-8")
        return sheet_path

    return _write


@pytest.fixture
def sample_sheet(write_sheet):
    """CSV sheet with a few income and expense rows."""
    return write_sheet(SAMPLE_SHEET)


@pytest.fixture
def csv_store(sheet_path):
    return CSVSheetStore(str(sheet_path))


@pytest.fixture
def sqlite_store(tmp_path):
    """SQLAlchemy sheet store on a temporary SQLite database."""
    store = SQLAlchemySheetStore(f"sqlite:///{tmp_path / 'ledger.db'}")
    yield store
    store.disconnect()


@pytest.fixture
def ledger(csv_store):
    """LedgerService over an empty CSV sheet with the default configuration."""
    return LedgerService(csv_store)


@pytest.fixture
def sample_ledger(sample_sheet, csv_store):
    """LedgerService over the sample sheet."""
    return LedgerService(csv_store)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    return CliRunner()


class StubExtractor:
    """Extractor returning canned records, or raising a canned error."""

    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.calls = []

    def extract(self, text, schema_hint):
        self.calls.append((text, schema_hint))
        if self.error is not None:
            raise self.error
        return self.records


class StubCompletions:
    """Stand-in for ``client.chat.completions`` of the openai SDK."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def stub_extractor():
    return StubExtractor


@pytest.fixture
def chat_client():
    """Build an object shaped like ``openai.OpenAI`` answering with ``content``."""

    def _client(content=None, error=None):
        completions = StubCompletions(content=content, error=error)
        return SimpleNamespace(chat=SimpleNamespace(completions=completions))

    return _client

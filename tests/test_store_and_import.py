import json
from pathlib import Path

import pytest

from splitcast_core.domain.models import AppState, PaymentMode
from splitcast_core.io import config as config_io
from splitcast_core.io.ledger import load_records_csv
from splitcast_core.io.store import RECORDS_KEY, THEME_KEY, load_state, save_state
from splitcast_core.services.records import build_record

FIXTURE = Path(__file__).parent / "data" / "ledger.csv"


def test_missing_store_is_empty_dark_state(tmp_path: Path):
    state = load_state(tmp_path / "nope.json")
    assert state.records == []
    assert state.dark_mode is True


def test_save_and_load_keeps_order_and_theme(tmp_path: Path):
    path = tmp_path / "store.json"
    records = [
        build_record("TV", 3000, "2026-05-05", "installment", 10, "Lazer"),
        build_record("Pão", 8.5, "2026-05-06", "cash", None, "Alimentação"),
    ]
    save_state(path, AppState(records=records, dark_mode=False))

    raw = json.loads(path.read_text())
    assert set(raw) == {RECORDS_KEY, THEME_KEY}
    assert raw[THEME_KEY] == "light"
    blob = json.loads(raw[RECORDS_KEY])
    assert blob[0]["type"] == "INSTALLMENT"
    assert blob[0]["installmentsCount"] == 10

    loaded = load_state(path)
    assert loaded.records == records
    assert loaded.dark_mode is False


def test_corrupt_store_raises(tmp_path: Path):
    path = tmp_path / "store.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        load_state(path)


def test_import_csv_fixture():
    records = load_records_csv(FIXTURE)
    assert len(records) == 5
    modes = {r.description: r.payment_mode for r in records}
    assert modes["Notebook"] is PaymentMode.INSTALLMENT
    assert modes["Mercado"] is PaymentMode.CASH
    notebook = next(r for r in records if r.description == "Notebook")
    assert notebook.installment_count == 10


def test_import_csv_missing_columns(tmp_path: Path):
    path = tmp_path / "bad.csv"
    path.write_text("description,amount\nx,1\n")
    with pytest.raises(ValueError):
        load_records_csv(path)


def test_import_csv_bad_row_names_the_row(tmp_path: Path):
    path = tmp_path / "bad.csv"
    path.write_text("description,amount,date,category,payment_mode,installments\nTV,100,2026-01-01,Lazer,installment,1\n")
    with pytest.raises(ValueError, match="Row 2"):
        load_records_csv(path)


def test_import_csv_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_records_csv(tmp_path / "missing.csv")


def test_config_file_and_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("SPLITCAST_STORE", str(tmp_path / "env_store.json"))
    monkeypatch.setenv("SPLITCAST_LOCALE", "en-US")
    default = config_io.default_app_config()
    assert default.store_path == tmp_path / "env_store.json"
    assert default.currency_symbol == "$"

    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text(json.dumps({"store_path": str(tmp_path / "s.json"), "locale": "pt-BR"}))
    cfg = config_io.load_app_config(cfg_path)
    assert cfg.store_path == tmp_path / "s.json"
    assert cfg.locale == "pt-BR"
    assert cfg.currency_symbol == "R$"

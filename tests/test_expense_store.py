import csv

import pytest

from storage.expense_store import CSV_HEADERS, ExpenseStore, ExpenseStoreError


def test_load_creates_file_with_headers(expenses_csv):
    store = ExpenseStore(expenses_csv)
    assert store.load() == []
    assert expenses_csv.read_text(encoding="utf-8") == "id,date,type,amount,comment\n"


def test_ensure_exists_keeps_existing_file(expenses_csv):
    store = ExpenseStore(expenses_csv)
    assert store.ensure_exists() is True
    assert store.ensure_exists() is False


def test_save_then_load(expenses_csv):
    store = ExpenseStore(expenses_csv)
    store.save([
        {"id": "a", "date": "01-02-2023", "type": "Food", "amount": 45.5, "comment": "weekly shop"},
        {"id": "b", "date": "02-02-2023", "type": "Fuel", "amount": 60.0, "comment": ""},
    ])
    assert store.load() == [
        {"id": "a", "date": "01-02-2023", "type": "Food", "amount": 45.5, "comment": "weekly shop"},
        {"id": "b", "date": "02-02-2023", "type": "Fuel", "amount": 60.0, "comment": ""},
    ]


def test_load_trims_values_and_defaults_comment(expenses_csv):
    expenses_csv.parent.mkdir(parents=True)
    expenses_csv.write_text(
        "id, date ,type,amount\n x1 , 01-02-2023 ,Food, 12.30 \n",
        encoding="utf-8",
    )
    assert ExpenseStore(expenses_csv).load() == [
        {"id": "x1", "date": "01-02-2023", "type": "Food", "amount": 12.3, "comment": ""}
    ]


def test_load_keeps_row_with_bad_amount(expenses_csv):
    expenses_csv.parent.mkdir(parents=True)
    expenses_csv.write_text("id,date,type,amount,comment\nx1,01-02-2023,Food,abc,\n", encoding="utf-8")
    assert ExpenseStore(expenses_csv).load()[0]["amount"] is None


def test_save_writes_header_order_and_ignores_extra_keys(expenses_csv):
    store = ExpenseStore(expenses_csv)
    store.save([{"comment": "c", "amount": 1.0, "type": "t", "date": "d", "id": "i", "extra": 1}])
    lines = expenses_csv.read_text(encoding="utf-8").splitlines()
    assert lines[0] == ",".join(CSV_HEADERS)
    assert lines[1] == "i,d,t,1.0,c"


def test_save_empty_list_keeps_header(expenses_csv):
    store = ExpenseStore(expenses_csv)
    store.save([])
    assert expenses_csv.read_text(encoding="utf-8") == "id,date,type,amount,comment\n"


def test_save_leaves_no_temporary_files(expenses_csv):
    store = ExpenseStore(expenses_csv)
    store.save([{"id": "a", "date": "d", "type": "t", "amount": 1.0, "comment": ""}])
    store.save([{"id": "b", "date": "d", "type": "t", "amount": 2.0, "comment": ""}])
    assert [p.name for p in expenses_csv.parent.iterdir()] == ["expenses.csv"]
    assert [expense["id"] for expense in store.load()] == ["b"]


def test_failed_save_keeps_previous_contents(expenses_csv, monkeypatch):
    store = ExpenseStore(expenses_csv)
    store.save([{"id": "a", "date": "d", "type": "t", "amount": 1.0, "comment": ""}])
    before = expenses_csv.read_text(encoding="utf-8")

    def fail_midway(self, rows):
        raise OSError("no space left on device")

    monkeypatch.setattr(csv.DictWriter, "writerows", fail_midway)
    with pytest.raises(ExpenseStoreError):
        store.save([{"id": "b", "date": "d", "type": "t", "amount": 2.0, "comment": ""}])

    assert expenses_csv.read_text(encoding="utf-8") == before
    assert [p.name for p in expenses_csv.parent.iterdir()] == ["expenses.csv"]


def test_unreadable_path_raises(tmp_path):
    # A directory where the file should be
    path = tmp_path / "expenses.csv"
    path.mkdir()
    with pytest.raises(ExpenseStoreError):
        ExpenseStore(path).load()
    with pytest.raises(ExpenseStoreError):
        ExpenseStore(path).save([])

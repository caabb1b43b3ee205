import json
from datetime import date

import pytest

from harvest.loader import load_holdings
from harvest.validation import HoldingValidationError

CSV = """id,name,ticker,quantity,buy_price,current_price,buy_date
s1,Infosys,infy,100,1400,1720,2023-01-15
,Wipro,WIPRO,200,450.50,385,2025-10-15
"""


def test_load_csv(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_text(CSV, encoding="utf-8")

    holdings = load_holdings(path)

    assert [h.ticker for h in holdings] == ["INFY", "WIPRO"]
    infy, wipro = holdings
    assert infy.id == "s1"
    assert infy.quantity == 100 and isinstance(infy.quantity, int)
    assert infy.buy_price == 1400.0 and isinstance(infy.buy_price, float)
    assert infy.buy_date == "2023-01-15"
    assert wipro.id == "holding_2"
    assert wipro.buy_price == 450.5


def test_load_json_with_web_app_field_names(tmp_path):
    path = tmp_path / "stocks.json"
    path.write_text(json.dumps([
        {"id": "stock_7", "stockName": "Paytm", "tickerSymbol": "PAYTM",
         "quantity": 300, "buyPrice": 880, "currentPrice": 720.25,
         "buyDate": "2025-11-01T00:00:00.000Z"},
    ]), encoding="utf-8")

    (paytm,) = load_holdings(path)
    assert paytm.name == "Paytm"
    assert paytm.ticker == "PAYTM"
    assert paytm.quantity == 300
    assert paytm.current_price == 720.25
    assert paytm.buy_date == "2025-11-01T00:00:00.000Z"


def test_empty_files_load_as_no_holdings(tmp_path):
    csv_path = tmp_path / "empty.csv"
    csv_path.write_text("id,name,ticker,quantity,buy_price,current_price,buy_date\n")
    json_path = tmp_path / "empty.json"
    json_path.write_text("[]")

    assert load_holdings(csv_path) == []
    assert load_holdings(json_path) == []


def test_every_bad_row_reported(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text(
        "name,ticker,quantity,buy_price,current_price,buy_date\n"
        "Infosys,INFY,0,1400,1720,2023-01-15\n"
        "Wipro,WIPRO,10,abc,385,2025-10-15\n"
        "TCS,TCS,5,3100,3480,15/03/2023\n"
        "HDFC Bank,HDFCBANK,5,1500,1630,2024-05-10\n",
        encoding="utf-8",
    )
    with pytest.raises(HoldingValidationError) as exc:
        load_holdings(path)

    errors = exc.value.errors
    assert len(errors) == 3
    assert errors[0].startswith("Row 1 (INFY)")
    assert errors[1].startswith("Row 2 (WIPRO)")
    assert errors[2].startswith("Row 3 (TCS)")


def test_buy_date_after_as_of_rejected(tmp_path):
    path = tmp_path / "future.csv"
    path.write_text(
        "name,ticker,quantity,buy_price,current_price,buy_date\n"
        "Infosys,INFY,1,1400,1720,2026-06-01\n",
        encoding="utf-8",
    )
    with pytest.raises(HoldingValidationError):
        load_holdings(path, as_of=date(2026, 3, 31))
    assert len(load_holdings(path)) == 1


def test_missing_columns(tmp_path):
    path = tmp_path / "partial.csv"
    path.write_text("name,ticker\nInfosys,INFY\n", encoding="utf-8")
    with pytest.raises(HoldingValidationError, match="missing column"):
        load_holdings(path)


def test_unsupported_extension(tmp_path):
    path = tmp_path / "holdings.xlsx"
    path.write_bytes(b"")
    with pytest.raises(ValueError, match="Unsupported"):
        load_holdings(path)

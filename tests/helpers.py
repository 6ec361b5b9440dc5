import copy
import json
from pathlib import Path

from rflow.schema import Asset, FinancialSettings, IncomeStream

SAMPLE_PATH = Path(__file__).resolve().parent.parent / "sample_scenarios.json"


def write_scenarios(tmp_path: Path, data: dict, filename: str = "scenarios.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone_data(data: dict) -> dict:
    return copy.deepcopy(data)


def make_settings(**overrides) -> FinancialSettings:
    values = {
        "current_age": 65,
        "retirement_age": 65,
        "planning_horizon": 66,
        "monthly_spending": 0.0,
        "inflation_rate": 0.0,
    }
    values.update(overrides)
    return FinancialSettings(**values)


def make_asset(asset_id: str = "a1", **overrides) -> Asset:
    values = {
        "id": asset_id,
        "name": f"Asset {asset_id}",
        "balance": 0.0,
        "contribution": 0.0,
        "return_rate": 0.0,
        "category": "taxable_brokerage",
    }
    values.update(overrides)
    return Asset(**values)


def make_stream(stream_id: str = "s1", **overrides) -> IncomeStream:
    values = {
        "id": stream_id,
        "name": f"Income {stream_id}",
        "monthly_amount": 0.0,
        "start_age": 0,
        "end_age": 120,
        "growth_rate": 0.0,
    }
    values.update(overrides)
    return IncomeStream(**values)

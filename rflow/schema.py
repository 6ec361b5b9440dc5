"""Scenario schema dataclasses and JSON loading."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any

SCHEMA_VERSION = 1

ASSET_CATEGORY_LABELS = {
    "tax_deferred": "401(k)/403(b)",
    "tax_free": "Roth IRA",
    "taxable_brokerage": "Taxable Brokerage",
    "cash": "Cash/Savings",
}


class SchemaError(ValueError):
    """Raised when raw JSON cannot be parsed into schema objects."""


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{path}: expected object")
    return value


def _expect_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise SchemaError(f"{path}: expected array")
    return value


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaError(f"{path}.{key}: missing required field")
    return data[key]


def _optional(data: dict[str, Any], key: str, default: Any = None) -> Any:
    return data.get(key, default)


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool):
        raise SchemaError(f"{path}: expected number")
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        raise SchemaError(f"{path}: expected number") from None


def _string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise SchemaError(f"{path}: expected string")
    return value


def _integer(value: Any, path: str) -> int:
    number = _number(value, path)
    if not number.is_integer():
        raise SchemaError(f"{path}: expected whole number")
    return int(number)


@dataclass(slots=True)
class Asset:
    id: str
    name: str
    balance: float
    contribution: float
    return_rate: float
    category: str

    @property
    def category_label(self) -> str:
        return ASSET_CATEGORY_LABELS.get(self.category, self.category)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "Asset":
        return cls(
            id=str(_require(data, "id", path)),
            name=_string(_require(data, "name", path), f"{path}.name"),
            balance=_number(_require(data, "balance", path), f"{path}.balance"),
            contribution=_number(_optional(data, "contribution", 0.0), f"{path}.contribution"),
            return_rate=_number(_require(data, "return_rate", path), f"{path}.return_rate"),
            category=_string(_require(data, "category", path), f"{path}.category"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "balance": self.balance,
            "contribution": self.contribution,
            "return_rate": self.return_rate,
            "category": self.category,
        }


@dataclass(slots=True)
class IncomeStream:
    id: str
    name: str
    monthly_amount: float
    start_age: int
    end_age: int
    growth_rate: float
    is_taxable: bool = True
    color: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "IncomeStream":
        return cls(
            id=str(_require(data, "id", path)),
            name=_string(_require(data, "name", path), f"{path}.name"),
            monthly_amount=_number(_require(data, "monthly_amount", path), f"{path}.monthly_amount"),
            start_age=_integer(_require(data, "start_age", path), f"{path}.start_age"),
            end_age=_integer(_require(data, "end_age", path), f"{path}.end_age"),
            growth_rate=_number(_optional(data, "growth_rate", 0.0), f"{path}.growth_rate"),
            is_taxable=bool(_optional(data, "is_taxable", True)),
            color=_optional(data, "color"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "monthly_amount": self.monthly_amount,
            "start_age": self.start_age,
            "end_age": self.end_age,
            "growth_rate": self.growth_rate,
            "is_taxable": self.is_taxable,
            "color": self.color,
        }


@dataclass(slots=True)
class FinancialSettings:
    current_age: int
    retirement_age: int
    planning_horizon: int
    monthly_spending: float
    inflation_rate: float
    # Each asset carries its own return rate; the engine does not read this.
    pre_retirement_return: float = 7.0

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "settings") -> "FinancialSettings":
        return cls(
            current_age=_integer(_require(data, "current_age", path), f"{path}.current_age"),
            retirement_age=_integer(_require(data, "retirement_age", path), f"{path}.retirement_age"),
            planning_horizon=_integer(_require(data, "planning_horizon", path), f"{path}.planning_horizon"),
            monthly_spending=_number(_require(data, "monthly_spending", path), f"{path}.monthly_spending"),
            inflation_rate=_number(_require(data, "inflation_rate", path), f"{path}.inflation_rate"),
            pre_retirement_return=_number(
                _optional(data, "pre_retirement_return", 7.0), f"{path}.pre_retirement_return"
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_age": self.current_age,
            "retirement_age": self.retirement_age,
            "planning_horizon": self.planning_horizon,
            "monthly_spending": self.monthly_spending,
            "inflation_rate": self.inflation_rate,
            "pre_retirement_return": self.pre_retirement_return,
        }


@dataclass(slots=True)
class Scenario:
    id: str
    name: str
    settings: FinancialSettings
    assets: list[Asset] = field(default_factory=list)
    income_streams: list[IncomeStream] = field(default_factory=list)
    created_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "Scenario":
        return cls(
            id=str(_require(data, "id", path)),
            name=_string(_require(data, "name", path), f"{path}.name"),
            settings=FinancialSettings.from_dict(
                _expect_dict(_require(data, "settings", path), f"{path}.settings"),
                f"{path}.settings",
            ),
            assets=[
                Asset.from_dict(_expect_dict(item, f"{path}.assets[{idx}]"), f"{path}.assets[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "assets", []), f"{path}.assets"))
            ],
            income_streams=[
                IncomeStream.from_dict(
                    _expect_dict(item, f"{path}.income_streams[{idx}]"),
                    f"{path}.income_streams[{idx}]",
                )
                for idx, item in enumerate(
                    _expect_list(_optional(data, "income_streams", []), f"{path}.income_streams")
                )
            ],
            created_at=_optional(data, "created_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at,
            "settings": self.settings.to_dict(),
            "assets": [asset.to_dict() for asset in self.assets],
            "income_streams": [stream.to_dict() for stream in self.income_streams],
        }


@dataclass(slots=True)
class ScenarioFile:
    version: int
    scenarios: list[Scenario]
    active_scenario_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScenarioFile":
        active = _optional(data, "active_scenario_id")
        return cls(
            version=_integer(_optional(data, "version", SCHEMA_VERSION), "version"),
            scenarios=[
                Scenario.from_dict(_expect_dict(item, f"scenarios[{idx}]"), f"scenarios[{idx}]")
                for idx, item in enumerate(_expect_list(_require(data, "scenarios", "file"), "scenarios"))
            ],
            active_scenario_id=str(active) if active is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "active_scenario_id": self.active_scenario_id,
            "scenarios": [scenario.to_dict() for scenario in self.scenarios],
        }


def load_scenarios(path: str | Path) -> ScenarioFile:
    """Load a scenario JSON document into strongly-typed dataclasses."""
    source = Path(path)
    raw = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SchemaError("file: root must be a JSON object")
    return ScenarioFile.from_dict(raw)


def save_scenarios(path: str | Path, scenario_file: ScenarioFile) -> None:
    Path(path).write_text(json.dumps(scenario_file.to_dict(), indent=2) + "\n", encoding="utf-8")

"""Semantic and cross-reference validation for scenarios."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .engine import SHORTAGE_LABEL, WITHDRAWAL_LABEL
from .schema import ASSET_CATEGORY_LABELS, SCHEMA_VERSION, Scenario, ScenarioFile

RESERVED_INCOME_NAMES = {WITHDRAWAL_LABEL, SHORTAGE_LABEL}


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def extend(self, other: "ValidationResult") -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


def _check_enum(result: ValidationResult, path: str, value: str, allowed: Iterable[str]) -> None:
    allowed_set = set(allowed)
    if value not in allowed_set:
        expected = ", ".join(sorted(allowed_set))
        result.errors.append(f"{path}: '{value}' is not valid; expected one of [{expected}]")


def _check_rate(result: ValidationResult, path: str, value: float) -> None:
    if value <= -100:
        result.errors.append(f"{path}: must be > -100")


def _check_unique_ids(result: ValidationResult, base: str, ids: list[str]) -> None:
    seen: set[str] = set()
    for idx, item_id in enumerate(ids):
        if item_id in seen:
            result.errors.append(f"{base}[{idx}].id: duplicate id '{item_id}'")
        seen.add(item_id)


def validate_scenario(scenario: Scenario, path: str = "scenario") -> ValidationResult:
    result = ValidationResult()
    settings = scenario.settings
    base = f"{path}.settings"

    if settings.current_age < 0:
        result.errors.append(f"{base}.current_age: must be >= 0")
    if settings.planning_horizon < settings.current_age:
        result.errors.append(f"{base}.planning_horizon: must be >= current_age")
    if settings.retirement_age > settings.planning_horizon:
        result.warnings.append(f"{base}.retirement_age: after planning_horizon; no retirement years are simulated")
    if settings.monthly_spending < 0:
        result.errors.append(f"{base}.monthly_spending: must be >= 0")
    _check_rate(result, f"{base}.inflation_rate", settings.inflation_rate)

    for idx, asset in enumerate(scenario.assets):
        asset_base = f"{path}.assets[{idx}]"
        _check_enum(result, f"{asset_base}.category", asset.category, ASSET_CATEGORY_LABELS)
        _check_rate(result, f"{asset_base}.return_rate", asset.return_rate)
        if asset.balance < 0:
            result.warnings.append(f"{asset_base}.balance: negative balance will not recover through growth")
        if asset.contribution < 0:
            result.warnings.append(f"{asset_base}.contribution: negative contribution reduces the balance each year")
    _check_unique_ids(result, f"{path}.assets", [asset.id for asset in scenario.assets])

    names_seen: set[str] = set()
    for idx, stream in enumerate(scenario.income_streams):
        stream_base = f"{path}.income_streams[{idx}]"
        if stream.start_age > stream.end_age:
            result.errors.append(f"{stream_base}.start_age/{stream_base}.end_age: start_age must be <= end_age")
        elif stream.end_age < settings.current_age or stream.start_age > settings.planning_horizon:
            result.warnings.append(f"{stream_base}: never active between current_age and planning_horizon")
        _check_rate(result, f"{stream_base}.growth_rate", stream.growth_rate)
        if stream.monthly_amount < 0:
            result.warnings.append(f"{stream_base}.monthly_amount: negative income is treated as an expense")
        if stream.name in RESERVED_INCOME_NAMES:
            result.warnings.append(f"{stream_base}.name: '{stream.name}' is a reserved breakdown label")
        elif stream.name in names_seen:
            result.warnings.append(f"{stream_base}.name: duplicate name '{stream.name}' shares a breakdown entry")
        names_seen.add(stream.name)
    _check_unique_ids(result, f"{path}.income_streams", [stream.id for stream in scenario.income_streams])

    return result


def validate_scenario_file(scenario_file: ScenarioFile) -> ValidationResult:
    result = ValidationResult()
    if scenario_file.version != SCHEMA_VERSION:
        result.errors.append(f"version: {scenario_file.version} is not supported; expected {SCHEMA_VERSION}")
    if not scenario_file.scenarios:
        result.warnings.append("scenarios: file contains no scenarios")

    _check_unique_ids(result, "scenarios", [scenario.id for scenario in scenario_file.scenarios])

    ids = {scenario.id for scenario in scenario_file.scenarios}
    active = scenario_file.active_scenario_id
    if active is not None and active not in ids:
        result.errors.append(f"active_scenario_id: '{active}' does not match any scenario id")

    for idx, scenario in enumerate(scenario_file.scenarios):
        result.extend(validate_scenario(scenario, f"scenarios[{idx}]"))
    return result

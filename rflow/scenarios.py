"""Scenario collection management: lookup, clone, delete, activate."""

from __future__ import annotations

import copy
from datetime import UTC, datetime
import uuid

from .schema import Scenario, ScenarioFile


def new_scenario_id() -> str:
    return uuid.uuid4().hex[:12]


def _timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


def get_scenario(scenario_file: ScenarioFile, scenario_id: str) -> Scenario:
    for scenario in scenario_file.scenarios:
        if scenario.id == scenario_id:
            return scenario
    raise KeyError(f"unknown scenario id: {scenario_id}")


def active_scenario(scenario_file: ScenarioFile) -> Scenario | None:
    """Return the active scenario, or the first one when no active id is set."""
    if scenario_file.active_scenario_id is not None:
        return get_scenario(scenario_file, scenario_file.active_scenario_id)
    return scenario_file.scenarios[0] if scenario_file.scenarios else None


def set_active(scenario_file: ScenarioFile, scenario_id: str) -> None:
    get_scenario(scenario_file, scenario_id)
    scenario_file.active_scenario_id = scenario_id


def add_scenario(scenario_file: ScenarioFile, scenario: Scenario, *, activate: bool = False) -> Scenario:
    if any(existing.id == scenario.id for existing in scenario_file.scenarios):
        raise ValueError(f"duplicate scenario id: {scenario.id}")
    if scenario.created_at is None:
        scenario.created_at = _timestamp()
    scenario_file.scenarios.append(scenario)
    if activate or scenario_file.active_scenario_id is None:
        scenario_file.active_scenario_id = scenario.id
    return scenario


def clone_scenario(scenario_file: ScenarioFile, scenario_id: str, name: str | None = None) -> Scenario:
    source = get_scenario(scenario_file, scenario_id)
    clone = copy.deepcopy(source)
    clone.id = new_scenario_id()
    clone.name = name or f"{source.name} (Copy)"
    clone.created_at = _timestamp()
    scenario_file.scenarios.append(clone)
    return clone


def delete_scenario(scenario_file: ScenarioFile, scenario_id: str) -> Scenario:
    removed = get_scenario(scenario_file, scenario_id)
    scenario_file.scenarios.remove(removed)
    if scenario_file.active_scenario_id == scenario_id:
        scenario_file.active_scenario_id = scenario_file.scenarios[0].id if scenario_file.scenarios else None
    return removed

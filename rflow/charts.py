"""Chart payload generation for report rendering."""

from __future__ import annotations

from .engine import SHORTAGE_LABEL, SimulationResult
from .schema import Scenario


def breakdown_keys(result: SimulationResult) -> list[str]:
    """Union of breakdown labels in first-seen order, with the shortage label last."""
    keys: list[str] = []
    for row in result.data:
        for name in row.breakdown:
            if name not in keys:
                keys.append(name)
    if SHORTAGE_LABEL in keys:
        keys.remove(SHORTAGE_LABEL)
        keys.append(SHORTAGE_LABEL)
    return keys


def _income_stacks(result: SimulationResult) -> dict[str, list[int]]:
    return {name: [row.breakdown.get(name, 0) for row in result.data] for name in breakdown_keys(result)}


def _stacked_by_asset(scenario: Scenario, result: SimulationResult) -> dict[str, dict[str, object]]:
    # Keyed by id; display names may repeat across accounts.
    stacks: dict[str, dict[str, object]] = {}
    for asset in scenario.assets:
        stacks[asset.id] = {
            "label": asset.name,
            "values": [row.asset_balances.get(asset.id, 0) for row in result.data],
        }
    return stacks


def build_chart_payload(scenario: Scenario, result: SimulationResult) -> dict[str, object]:
    return {
        "ages": [row.age for row in result.data],
        "years": [row.year for row in result.data],
        "portfolioBalance": [row.portfolio_balance for row in result.data],
        "expenses": [row.expenses for row in result.data],
        "shortfall": [row.shortfall for row in result.data],
        "incomeSources": _income_stacks(result),
        "assetBalances": _stacked_by_asset(scenario, result),
        "retirementAge": scenario.settings.retirement_age,
    }

"""Core year-by-year deterministic simulation engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import math
from typing import Sequence

from .schema import Asset, FinancialSettings, IncomeStream

WITHDRAWAL_LABEL = "Portfolio Withdrawals"
SHORTAGE_LABEL = "Income Shortage"

LINE_INCOME = "income"
LINE_WITHDRAWAL = "withdrawal"
LINE_SHORTAGE = "shortage"
_LINE_ORDER = {LINE_INCOME: 0, LINE_WITHDRAWAL: 1, LINE_SHORTAGE: 2}


@dataclass(slots=True)
class BreakdownLine:
    kind: str
    label: str
    amount: float


@dataclass(slots=True)
class YearData:
    age: int
    year: int
    expenses: int
    total_income: int
    portfolio_balance: int
    shortfall: int
    withdrawals: int
    breakdown: dict[str, int]
    asset_balances: dict[str, int]


@dataclass(slots=True)
class SimulationResult:
    success: bool
    depletion_age: int | None
    final_balance: float
    data: list[YearData]


@dataclass(slots=True)
class _AssetState:
    id: str
    balance: float
    contribution: float
    return_rate: float


def round_currency(value: float) -> int | float:
    """Round half up to a whole currency unit (0.5 -> 1, -0.5 -> 0).

    Infinities and NaN are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def _compound(rate: float, years: int) -> float:
    base = 1 + rate / 100
    try:
        return base**years
    except OverflowError:
        return math.copysign(math.inf, base) if years % 2 else math.inf


def _flatten_breakdown(lines: list[BreakdownLine]) -> dict[str, int]:
    breakdown: dict[str, int] = {}
    for line in sorted(lines, key=lambda item: _LINE_ORDER[item.kind]):
        breakdown[line.label] = round_currency(line.amount)
    return breakdown


def _income_lines(income_streams: Sequence[IncomeStream], age: int, year_index: int) -> list[BreakdownLine]:
    lines: list[BreakdownLine] = []
    for stream in income_streams:
        if not (stream.start_age <= age <= stream.end_age):
            continue
        # COLA compounds from the first simulated year, not from start_age.
        multiplier = _compound(stream.growth_rate, year_index)
        lines.append(BreakdownLine(LINE_INCOME, stream.name, stream.monthly_amount * 12 * multiplier))
    return lines


def _grow_and_fund(states: list[_AssetState], is_retired: bool, inflation_multiplier: float) -> None:
    for state in states:
        # Growth is computed on the balance before this year's contribution.
        state.balance += state.balance * (state.return_rate / 100)
        if not is_retired:
            state.balance += state.contribution * inflation_multiplier


def _draw_down(states: list[_AssetState], withdrawal_needed: float) -> tuple[float, float]:
    """Withdraw proportionally from all assets. Returns (withdrawn, shortage)."""
    if withdrawal_needed <= 0:
        return 0.0, 0.0

    total_available = sum(state.balance for state in states)
    if total_available <= 0:
        return 0.0, withdrawal_needed

    if total_available >= withdrawal_needed:
        for state in states:
            share = state.balance / total_available
            state.balance -= withdrawal_needed * share
        return withdrawal_needed, 0.0

    for state in states:
        state.balance = 0.0
    return total_available, withdrawal_needed - total_available


def run_simulation(
    settings: FinancialSettings,
    assets: Sequence[Asset],
    income_streams: Sequence[IncomeStream],
    *,
    start_year: int | None = None,
) -> SimulationResult:
    """Project the portfolio one year at a time from current age to planning horizon.

    The caller's assets are copied into private working state before the loop, so
    inputs are never mutated. Monetary fields in each ``YearData`` are rounded to
    whole units; ``final_balance`` keeps full precision.
    """
    if start_year is None:
        start_year = datetime.now().year

    states = [
        _AssetState(id=asset.id, balance=asset.balance, contribution=asset.contribution, return_rate=asset.return_rate)
        for asset in assets
    ]
    streams = list(income_streams)
    portfolio_balance = sum(state.balance for state in states)
    depletion_age: int | None = None
    data: list[YearData] = []

    years_to_run = settings.planning_horizon - settings.current_age + 1
    for year_index in range(max(0, years_to_run)):
        age = settings.current_age + year_index
        is_retired = age >= settings.retirement_age

        inflation_multiplier = _compound(settings.inflation_rate, year_index)
        required_expense = settings.monthly_spending * 12 * inflation_multiplier

        lines = _income_lines(streams, age, year_index)
        fixed_income = sum(line.amount for line in lines)

        _grow_and_fund(states, is_retired, inflation_multiplier)

        withdrawal_needed = 0.0
        if is_retired:
            withdrawal_needed = max(required_expense - fixed_income, 0.0)

        withdrawn, shortage = _draw_down(states, withdrawal_needed)
        if shortage > 0 and depletion_age is None:
            depletion_age = age

        lines.append(BreakdownLine(LINE_WITHDRAWAL, WITHDRAWAL_LABEL, withdrawn))
        if shortage > 0:
            lines.append(BreakdownLine(LINE_SHORTAGE, SHORTAGE_LABEL, shortage))

        portfolio_balance = sum(state.balance for state in states)
        data.append(
            YearData(
                age=age,
                year=start_year + year_index,
                expenses=round_currency(required_expense),
                total_income=round_currency(fixed_income + withdrawn),
                portfolio_balance=round_currency(portfolio_balance),
                shortfall=round_currency(shortage),
                withdrawals=round_currency(withdrawn),
                breakdown=_flatten_breakdown(lines),
                asset_balances={state.id: round_currency(state.balance) for state in states},
            )
        )

    return SimulationResult(
        success=depletion_age is None,
        depletion_age=depletion_age,
        final_balance=portfolio_balance,
        data=data,
    )

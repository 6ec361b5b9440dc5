"""HTML report and text summary generation."""

from __future__ import annotations

from dataclasses import asdict
from datetime import UTC, datetime
import hashlib
import html
import json
from pathlib import Path

from .charts import breakdown_keys, build_chart_payload
from .engine import SimulationResult
from .schema import Scenario
from .templates import render_html_document
from .validate import validate_scenario


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _millions(value: float) -> str:
    return f"${value / 1_000_000:,.2f}M"


def verdict(scenario: Scenario, result: SimulationResult) -> tuple[str, str]:
    if result.success:
        return "On Track", f"Funds last beyond age {scenario.settings.planning_horizon}"
    return "Shortfall", f"Funds depleted at age {result.depletion_age}"


def _dashboard_cards(scenario: Scenario, result: SimulationResult) -> str:
    settings = scenario.settings
    status, note = verdict(scenario, result)
    cards = [
        ("ok" if result.success else "warn", "Projected Success", status, note),
        ("", f"Final Balance (Age {settings.planning_horizon})", _millions(result.final_balance), "In future dollars"),
        ("", "Retirement Income Need", f"{_money(settings.monthly_spending)}/mo", "Today's dollars"),
        ("", "Retirement Age", str(settings.retirement_age), f"Current age {settings.current_age}"),
    ]
    return "".join(
        f'<div class="card {css}"><div class="k">{html.escape(k)}</div>'
        f'<div class="v">{html.escape(v)}</div><div class="n">{html.escape(n)}</div></div>'
        for css, k, v, n in cards
    )


def _row_class(scenario: Scenario, shortfall: int, age: int) -> str:
    classes = []
    if shortfall > 0:
        classes.append("shortfall")
    if age == scenario.settings.retirement_age:
        classes.append("retirement")
    return " ".join(classes)


def _annual_table(scenario: Scenario, result: SimulationResult) -> str:
    rows: list[str] = []
    for row in result.data:
        note = "Shortfall" if row.shortfall > 0 else ("Retirement" if row.age == scenario.settings.retirement_age else "")
        rows.append(
            f'<tr class="{_row_class(scenario, row.shortfall, row.age)}">'
            + f"<td>{row.age}</td>"
            + f"<td>{row.year}</td>"
            + f"<td>{_money(row.expenses)}</td>"
            + f"<td>{_money(row.total_income)}</td>"
            + f"<td>{_money(row.withdrawals)}</td>"
            + f"<td>{_money(row.shortfall)}</td>"
            + f"<td>{_money(row.portfolio_balance)}</td>"
            + f"<td>{html.escape(note)}</td>"
            + "</tr>"
        )
    return (
        "<table><thead><tr>"
        "<th>Age</th><th>Year</th><th>Expenses</th><th>Total Income</th><th>Withdrawals</th><th>Shortfall</th><th>Portfolio</th><th>Notes</th>"
        "</tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
    )


def _income_table(scenario: Scenario, result: SimulationResult) -> str:
    keys = breakdown_keys(result)
    header = "".join(f"<th>{html.escape(key)}</th>" for key in keys)
    rows: list[str] = []
    for row in result.data:
        cells = "".join(f"<td>{_money(row.breakdown.get(key, 0))}</td>" for key in keys)
        rows.append(f'<tr class="{_row_class(scenario, row.shortfall, row.age)}"><td>{row.age}</td>{cells}</tr>')
    return "<table><thead><tr><th>Age</th>" + header + "</tr></thead><tbody>" + "".join(rows) + "</tbody></table>"


def _asset_table(scenario: Scenario, result: SimulationResult) -> str:
    header = "".join(
        f'<th title="{html.escape(asset.category_label, quote=True)}">{html.escape(asset.name)}</th>'
        for asset in scenario.assets
    )
    rows: list[str] = []
    for row in result.data:
        cells = "".join(f"<td>{_money(row.asset_balances.get(asset.id, 0))}</td>" for asset in scenario.assets)
        rows.append(f"<tr><td>{row.age}</td>{cells}<td>{_money(row.portfolio_balance)}</td></tr>")
    return (
        "<table><thead><tr><th>Age</th>"
        + header
        + "<th>Total</th></tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
    )


def _validation_panel(scenario: Scenario) -> str:
    validation = validate_scenario(scenario)
    rows = [f'<tr class="shortfall"><td>Error</td><td>{html.escape(msg)}</td></tr>' for msg in validation.errors]
    rows += [f"<tr><td>Warning</td><td>{html.escape(msg)}</td></tr>" for msg in validation.warnings]
    if not rows:
        return '<p class="subtle">Plan Validation: no issues found.</p>'
    return (
        "<h3>Plan Validation</h3><table><thead><tr><th>Level</th><th>Message</th></tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
    )


def _advisor_panel(advice: str | None) -> str:
    if advice is None:
        return '<p class="subtle">No advisor assessment requested. Run with --advise to include one.</p>'
    return f'<h3>Advisor Assessment</h3><div class="advice">{html.escape(advice)}</div>'


def _report_payload(scenario: Scenario, result: SimulationResult) -> dict[str, object]:
    return {
        "scenario": scenario.name,
        "success": result.success,
        "depletion_age": result.depletion_age,
        "final_balance": result.final_balance,
        "data": [asdict(row) for row in result.data],
        "charts": build_chart_payload(scenario, result),
    }


def render_report(scenario: Scenario, result: SimulationResult, source_path: str, advice: str | None = None) -> str:
    payload = _report_payload(scenario, result)

    source_hash = hashlib.sha256(Path(source_path).read_bytes()).hexdigest()[:12]
    title = f"RetireFlow Report - {html.escape(scenario.name)}"
    timestamp = datetime.now(UTC).isoformat(timespec="seconds")
    subtitle = f"Scenario: {html.escape(scenario.id)} | Generated: {timestamp} | File hash: {source_hash}"

    # Keep "</script>" inside string values from closing the inline script.
    payload_json = json.dumps(payload).replace("</", "<\\/")
    return render_html_document(
        title=title,
        subtitle=subtitle,
        dashboard_cards=_dashboard_cards(scenario, result),
        annual_table=_annual_table(scenario, result),
        income_table=_income_table(scenario, result),
        asset_table=_asset_table(scenario, result),
        validation_table=_validation_panel(scenario),
        advisor_panel=_advisor_panel(advice),
        payload_json=payload_json,
    )


def render_summary(scenario: Scenario, result: SimulationResult) -> str:
    settings = scenario.settings
    status, note = verdict(scenario, result)
    lines = [
        f"Scenario: {scenario.name}",
        f"Ages: {settings.current_age}-{settings.planning_horizon} ({len(result.data)} years)",
        f"Status: {status} ({note})",
        f"Final balance: {_money(result.final_balance)}",
    ]
    shortfall_total = sum(row.shortfall for row in result.data)
    if shortfall_total > 0:
        lines.append(f"Total shortfall: {_money(shortfall_total)}")
    return "\n".join(lines)


def write_report(path: str | Path, html_content: str) -> None:
    Path(path).write_text(html_content, encoding="utf-8")

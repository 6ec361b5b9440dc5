import json
import re

from tests.helpers import SAMPLE_PATH, clone_data, write_scenarios
from rflow.__main__ import main
from rflow.charts import breakdown_keys, build_chart_payload
from rflow.engine import SHORTAGE_LABEL, WITHDRAWAL_LABEL, run_simulation
from rflow.report import render_report, render_summary
from rflow.schema import load_scenarios


def _short_plan(sample_store_dict: dict) -> dict:
    data = clone_data(sample_store_dict)
    base = data["scenarios"][0]
    base["settings"].update(
        {"current_age": 64, "retirement_age": 65, "planning_horizon": 68, "monthly_spending": 1000, "inflation_rate": 0}
    )
    base["assets"] = [
        {"id": "cash", "name": "Cash", "balance": 20000, "contribution": 0, "return_rate": 0, "category": "cash"}
    ]
    base["income_streams"] = [
        {"id": "p", "name": "Pension", "monthly_amount": 100, "start_age": 66, "end_age": 68, "growth_rate": 0}
    ]
    return data


def test_breakdown_keys_put_shortage_last(tmp_path, sample_store_dict):
    path = write_scenarios(tmp_path, _short_plan(sample_store_dict))
    scenario = load_scenarios(path).scenarios[0]
    result = run_simulation(scenario.settings, scenario.assets, scenario.income_streams, start_year=2026)

    assert breakdown_keys(result) == [WITHDRAWAL_LABEL, "Pension", SHORTAGE_LABEL]


def test_chart_payload_fills_missing_years_with_zero(tmp_path, sample_store_dict):
    path = write_scenarios(tmp_path, _short_plan(sample_store_dict))
    scenario = load_scenarios(path).scenarios[0]
    result = run_simulation(scenario.settings, scenario.assets, scenario.income_streams, start_year=2026)

    payload = build_chart_payload(scenario, result)

    assert payload["ages"] == [64, 65, 66, 67, 68]
    assert payload["years"] == [2026, 2027, 2028, 2029, 2030]
    assert payload["incomeSources"]["Pension"] == [0, 0, 1200, 1200, 1200]
    assert payload["incomeSources"][SHORTAGE_LABEL] == [0, 0, 2800, 10800, 10800]
    assert payload["assetBalances"] == {"cash": {"label": "Cash", "values": [20000, 8000, 0, 0, 0]}}
    assert payload["retirementAge"] == 65


def test_asset_stacks_keep_accounts_with_the_same_name(tmp_path, sample_store_dict):
    data = _short_plan(sample_store_dict)
    data["scenarios"][0]["assets"] = [
        {"id": "ira1", "name": "IRA", "balance": 100, "contribution": 0, "return_rate": 0, "category": "tax_free"},
        {"id": "ira2", "name": "IRA", "balance": 300, "contribution": 0, "return_rate": 0, "category": "tax_free"},
    ]
    data["scenarios"][0]["settings"].update({"planning_horizon": 64})
    path = write_scenarios(tmp_path, data)
    scenario = load_scenarios(path).scenarios[0]
    result = run_simulation(scenario.settings, scenario.assets, scenario.income_streams, start_year=2026)

    payload = build_chart_payload(scenario, result)

    assert payload["assetBalances"] == {
        "ira1": {"label": "IRA", "values": [100]},
        "ira2": {"label": "IRA", "values": [300]},
    }


def test_report_html_includes_required_sections(tmp_path):
    output_path = tmp_path / "report.html"
    code = main([str(SAMPLE_PATH), "-o", str(output_path)])

    assert code == 0
    text = output_path.read_text(encoding="utf-8")

    for label in ("Dashboard", "Income Sources", "Tables", "Assets", "Validation", "Advisor"):
        assert label in text
    assert 'id="chart-income-balance"' in text
    assert 'id="chart-asset-stack"' in text
    assert 'id="tab-advisor"' in text
    assert "Projected Success" in text
    assert "On Track" in text
    assert "Retirement Income Need" in text
    assert "$6,000/mo" in text
    assert "File hash:" in text

    # Self-contained output: no remote script/style references.
    assert "https://" not in text
    assert "http://" not in text


def test_report_payload_matches_simulation(tmp_path):
    scenario_file = load_scenarios(SAMPLE_PATH)
    scenario = scenario_file.scenarios[0]
    result = run_simulation(scenario.settings, scenario.assets, scenario.income_streams, start_year=2026)

    text = render_report(scenario, result, source_path=str(SAMPLE_PATH))

    match = re.search(r"const payload = (\{.*?\});\n", text, re.DOTALL)
    assert match is not None
    payload = json.loads(match.group(1).replace("<\\/", "</"))
    assert payload["success"] == result.success
    assert len(payload["data"]) == len(result.data)
    assert payload["data"][0]["breakdown"] == result.data[0].breakdown


def test_shortfall_years_are_highlighted(tmp_path, sample_store_dict):
    path = write_scenarios(tmp_path, _short_plan(sample_store_dict))
    scenario = load_scenarios(path).scenarios[0]
    result = run_simulation(scenario.settings, scenario.assets, scenario.income_streams, start_year=2026)

    text = render_report(scenario, result, source_path=str(path))

    assert text.count('<tr class="shortfall">') >= 2
    assert "Funds depleted at age 66" in text


def test_advice_is_escaped_into_report(tmp_path):
    scenario = load_scenarios(SAMPLE_PATH).scenarios[0]
    result = run_simulation(scenario.settings, scenario.assets, scenario.income_streams, start_year=2026)

    text = render_report(scenario, result, source_path=str(SAMPLE_PATH), advice="<b>On Track</b>")

    assert "&lt;b&gt;On Track&lt;/b&gt;" in text
    assert "Advisor Assessment" in text


def test_summary_reports_depletion(tmp_path, sample_store_dict):
    path = write_scenarios(tmp_path, _short_plan(sample_store_dict))
    scenario = load_scenarios(path).scenarios[0]
    result = run_simulation(scenario.settings, scenario.assets, scenario.income_streams, start_year=2026)

    summary = render_summary(scenario, result)

    assert "Status: Shortfall (Funds depleted at age 66)" in summary
    assert "Ages: 64-68 (5 years)" in summary
    assert "Total shortfall: $24,400" in summary

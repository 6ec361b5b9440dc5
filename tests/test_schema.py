import json

import pytest

from tests.helpers import SAMPLE_PATH, clone_data, write_scenarios
from rflow.schema import SchemaError, load_scenarios, save_scenarios


def test_sample_file_loads():
    scenario_file = load_scenarios(SAMPLE_PATH)

    assert scenario_file.version == 1
    assert scenario_file.active_scenario_id == "base"
    base = scenario_file.scenarios[0]
    assert base.settings.current_age == 40
    assert base.assets[0].category_label == "401(k)/403(b)"
    assert base.income_streams[0].start_age == 67


def test_load_rejects_non_object_root(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(SchemaError, match="file: root must be a JSON object"):
        load_scenarios(path)


def test_load_requires_scenarios(tmp_path):
    path = write_scenarios(tmp_path, {"version": 1})

    with pytest.raises(SchemaError, match=r"file\.scenarios: missing required field"):
        load_scenarios(path)


def test_load_requires_settings_fields(tmp_path, sample_store_dict):
    data = clone_data(sample_store_dict)
    del data["scenarios"][0]["settings"]["current_age"]
    path = write_scenarios(tmp_path, data)

    with pytest.raises(SchemaError, match=r"scenarios\[0\]\.settings\.current_age: missing required field"):
        load_scenarios(path)


def test_load_rejects_wrong_collection_types(tmp_path, sample_store_dict):
    data = clone_data(sample_store_dict)
    data["scenarios"][1]["assets"] = {}
    path = write_scenarios(tmp_path, data)

    with pytest.raises(SchemaError, match=r"scenarios\[1\]\.assets: expected array"):
        load_scenarios(path)


def test_load_rejects_non_numeric_amount(tmp_path, sample_store_dict):
    data = clone_data(sample_store_dict)
    data["scenarios"][0]["assets"][0]["balance"] = "lots"
    path = write_scenarios(tmp_path, data)

    with pytest.raises(SchemaError, match=r"scenarios\[0\]\.assets\[0\]\.balance: expected number"):
        load_scenarios(path)


@pytest.mark.parametrize(
    ("section", "key"),
    [("assets", "category"), ("assets", "name"), ("income_streams", "name")],
)
def test_load_rejects_non_string_labels(tmp_path, sample_store_dict, section, key):
    data = clone_data(sample_store_dict)
    data["scenarios"][0][section][0][key] = ["tax_free"]
    path = write_scenarios(tmp_path, data)

    with pytest.raises(SchemaError, match=rf"scenarios\[0\]\.{section}\[0\]\.{key}: expected string"):
        load_scenarios(path)


def test_load_rejects_fractional_age(tmp_path, sample_store_dict):
    data = clone_data(sample_store_dict)
    data["scenarios"][0]["income_streams"][0]["start_age"] = 66.5
    path = write_scenarios(tmp_path, data)

    with pytest.raises(SchemaError, match=r"income_streams\[0\]\.start_age: expected whole number"):
        load_scenarios(path)


def test_optional_fields_take_defaults(tmp_path, sample_store_dict):
    data = clone_data(sample_store_dict)
    data.pop("version")
    data.pop("active_scenario_id")
    stream = data["scenarios"][0]["income_streams"][0]
    stream.pop("color")
    stream.pop("is_taxable")
    data["scenarios"][0]["settings"].pop("pre_retirement_return")
    data["scenarios"][0]["assets"][0].pop("contribution")
    path = write_scenarios(tmp_path, data)

    scenario_file = load_scenarios(path)

    scenario = scenario_file.scenarios[0]
    assert scenario_file.version == 1
    assert scenario_file.active_scenario_id is None
    assert scenario.income_streams[0].color is None
    assert scenario.income_streams[0].is_taxable is True
    assert scenario.settings.pre_retirement_return == 7.0
    assert scenario.assets[0].contribution == 0.0


def test_save_and_reload_preserves_inputs(tmp_path):
    original = load_scenarios(SAMPLE_PATH)
    path = tmp_path / "saved.json"

    save_scenarios(path, original)
    reloaded = load_scenarios(path)

    assert reloaded == original
    assert json.loads(path.read_text(encoding="utf-8"))["active_scenario_id"] == "base"

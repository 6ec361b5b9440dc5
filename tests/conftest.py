import json

import pytest

from tests.helpers import SAMPLE_PATH


@pytest.fixture
def sample_store_dict() -> dict:
    return json.loads(SAMPLE_PATH.read_text(encoding="utf-8"))

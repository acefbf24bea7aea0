import copy
import json
from pathlib import Path
from typing import Any, Dict

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def match_sample() -> Dict[str, Any]:
    with (FIXTURES / "match_sample.json").open("r", encoding="utf-8") as f:
        return copy.deepcopy(json.load(f))

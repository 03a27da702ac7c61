# osrm_client/tests/conftest.py
import os
import sys
from typing import Any, Dict, List

import pytest

# Make the project root importable so `osrm_client.*` resolves without an install
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from osrm_client.models.requests import OSRMCoordinate, OSRMRequest  # noqa: E402
from data_samples import BERLIN  # noqa: E402

BASE_URL = "http://osrm.test"


def make_coords(points: List[Dict[str, float]] = BERLIN, **per_index: Dict[str, Any]):
    """
    Build OSRMCoordinates; per_index maps "c<i>" to extra fields for coordinate i,
    e.g. make_coords(c1={"radius": 50}).
    """
    out = []
    for i, p in enumerate(points):
        extra = per_index.get(f"c{i}", {})
        out.append(OSRMCoordinate(lat=p["lat"], lon=p["lon"], **extra))
    return out


@pytest.fixture
def coords():
    return make_coords()


@pytest.fixture
def make_request():
    def _make(**kwargs) -> OSRMRequest:
        kwargs.setdefault("coordinates", make_coords())
        return OSRMRequest(**kwargs)

    return _make


@pytest.fixture(scope="session")
def base_url():
    return BASE_URL


@pytest.fixture(autouse=True)
def _reset_global_respx_router():
    # `@respx.mock(...)` with arguments creates a separate router, but `respx.get`
    # registers on the global one; drop those leftover routes between tests.
    import respx

    yield
    respx.mock.clear()
    respx.mock.reset()

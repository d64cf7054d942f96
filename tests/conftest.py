import pathlib
import sys

import pytest

# Ensure project root is in sys.path
repo_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from orgstack.core.units import OrgUnit, UnitType  # noqa: E402


@pytest.fixture
def make_unit():
    """
    Factory for OrgUnits in a single test chart.
    """

    def _make(unit_id, name=None, pid="", unit_type=UnitType.AREA, **overrides):
        fields = {
            "id": unit_id,
            "client_id": "client01",
            "chart_id": "chart01",
            "pid": pid,
            "name": name or f"Unit {unit_id}",
            "code": f"code-{unit_id}",
            "type": unit_type,
            "tags": (unit_type,),
        }
        fields.update(overrides)
        return OrgUnit(**fields)

    return _make


@pytest.fixture
def unit_a(make_unit):
    return make_unit("1", name="Root", unit_type=UnitType.ROOT)


@pytest.fixture
def unit_b(make_unit):
    return make_unit("2", name="Sub Root", pid="1", unit_type=UnitType.SUB_ROOT)


@pytest.fixture
def unit_c(make_unit):
    return make_unit("3", name="Area 1", pid="2")


@pytest.fixture
def samples_dir():
    return repo_root / "samples"

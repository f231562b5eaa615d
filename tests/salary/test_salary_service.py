from datetime import date

import pytest

from src.tailor_payroll.tailor_payroll.core.exceptions import ConfigurationError, ValidationError
from src.tailor_payroll.tailor_payroll.salary.service import SalaryStructureService
from tests.fakes import InMemorySalaryStructures, make_structure


def test_register_valid_structure():
    repo = InMemorySalaryStructures()
    service = SalaryStructureService(repo)

    structure_id = service.register(make_structure("E9"))

    assert service.require_active("E9").salary_structure_id == structure_id


@pytest.mark.parametrize(
    "overrides",
    [
        {"base_salary": 0},
        {"hourly_rate": -1},
        {"standard_hours": 25},
        {"overtime_rate": 0.5},
        {"weekend_rate": 6},
        {"holiday_rate": 0},
        {"effective_to": date(2023, 12, 31)},
    ],
)
def test_register_rejects_invalid_policy(overrides):
    repo = InMemorySalaryStructures()

    with pytest.raises(ValidationError):
        SalaryStructureService(repo).register(make_structure(**overrides))

    assert repo.by_employee == {}


def test_require_active_without_structure():
    with pytest.raises(ConfigurationError):
        SalaryStructureService(InMemorySalaryStructures()).require_active("E1")


def test_inactive_structure_is_not_active():
    repo = InMemorySalaryStructures([make_structure(is_active=False)])

    with pytest.raises(ConfigurationError):
        SalaryStructureService(repo).require_active("E1")

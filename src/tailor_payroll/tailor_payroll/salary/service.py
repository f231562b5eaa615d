from __future__ import annotations

import logging

from ..common.validators import require_non_empty, require_positive, require_range
from ..core.exceptions import ConfigurationError, ValidationError
from .model import SalaryStructure
from .repository import SalaryStructureRepository

logger = logging.getLogger(__name__)


def validate_salary_structure(structure: SalaryStructure) -> SalaryStructure:
    require_non_empty(structure.employee_id, "Employee")
    require_non_empty(structure.name, "Name")
    require_positive(structure.base_salary, "Base salary")
    require_positive(structure.hourly_rate, "Hourly rate")
    require_range(structure.standard_hours, "Standard hours", 1, 24)
    require_range(structure.overtime_rate, "Overtime rate", 1, 5)
    require_range(structure.weekend_rate, "Weekend rate", 1, 5)
    require_range(structure.holiday_rate, "Holiday rate", 1, 5)
    if structure.effective_to is not None and structure.effective_to < structure.effective_from:
        raise ValidationError("Effective to must not be before effective from")
    return structure


class SalaryStructureService:
    def __init__(self, structures: SalaryStructureRepository):
        self._structures = structures

    def register(self, structure: SalaryStructure) -> int:
        validate_salary_structure(structure)
        structure_id = self._structures.create(structure)
        logger.info("salary structure %s registered for employee %s", structure_id, structure.employee_id)
        return structure_id

    def require_active(self, employee_id: str) -> SalaryStructure:
        structure = self._structures.get_active_for_employee(employee_id)
        if not structure:
            raise ConfigurationError(f"No salary structure found for employee: {employee_id}")
        return structure

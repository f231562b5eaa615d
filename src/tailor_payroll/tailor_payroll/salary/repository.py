from __future__ import annotations

from typing import Optional, Protocol

from .model import SalaryStructure


class SalaryStructureRepository(Protocol):
    def get_active_for_employee(self, employee_id: str) -> Optional[SalaryStructure]:
        raise NotImplementedError

    def create(self, structure: SalaryStructure) -> int:
        raise NotImplementedError

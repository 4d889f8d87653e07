"""Domain layer package exposing pure business abstractions."""

from . import entities
from . import repositories
from . import services
from .value_objects import EmployeeId, RoleId, TenantId

__all__ = [
    "entities",
    "repositories",
    "services",
    "EmployeeId",
    "RoleId",
    "TenantId",
]

"""Investment repositories — abstract contract plus memory and SQLite backends."""

from investctl.infrastructure.repositories.base import InvestmentRepository
from investctl.infrastructure.repositories.factory import create_repository
from investctl.infrastructure.repositories.memory import InMemoryInvestmentRepository
from investctl.infrastructure.repositories.sql import SqlInvestmentRepository

__all__ = [
    "InMemoryInvestmentRepository",
    "InvestmentRepository",
    "SqlInvestmentRepository",
    "create_repository",
]

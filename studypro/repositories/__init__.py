from studypro.repositories.base import Repository
from studypro.repositories.sql import SqlRepository

__all__ = ["Repository", "SqlRepository"]

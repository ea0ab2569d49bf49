from .base import BaseProvider
from .credentials import TokenFileCredentials
from .sheets import GoogleSheetsProvider

__all__ = [
    "BaseProvider",
    "GoogleSheetsProvider",
    "TokenFileCredentials",
]

from abc import ABC, abstractmethod
from typing import Any, List


class BaseProvider(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    async def query(self) -> List[List[Any]]:
        """Return raw rows of (shortcut, destination, ...) cells.

        Raises ProviderError on any failure to produce rows.
        """
        pass

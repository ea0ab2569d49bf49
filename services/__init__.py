from .cache import ShortcutCache
from .resolver import PathResolver

__all__ = ["ShortcutCache", "PathResolver"]

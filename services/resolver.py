import logging
from typing import Iterable, List, Optional, Tuple
from urllib.parse import SplitResult, parse_qsl, quote, urlencode, urlunsplit

from .cache import ShortcutCache

# Characters left unescaped when re-appending decoded path segments
PATH_SAFE = "/:@!$&'()*+,;=-._~"


def build_redirect(base: SplitResult, add_path: str, query: Iterable[Tuple[str, str]]) -> str:
    path = base.path
    if add_path:
        if not path.endswith("/"):
            path += "/"
        path += quote(add_path, safe=PATH_SAFE)
    params = parse_qsl(base.query, keep_blank_values=True) + list(query)
    # Keys sorted, values for a repeated key keep their order
    params.sort(key=lambda kv: kv[0])
    return urlunsplit(base._replace(path=path, query=urlencode(params)))


class PathResolver:
    def __init__(self, cache: ShortcutCache):
        self._cache = cache
        self._log = logging.getLogger(__name__)

    async def resolve(self, path: str, query: Iterable[Tuple[str, str]] = ()) -> Optional[str]:
        """Return the redirect target for the decoded ``path``, or None when no shortcut matches.

        Tries the deepest shortcut first ("a/b/c", then "a/b", then "a"); the
        segments left over are appended to the destination path and the request
        query is merged into the destination query. The cache is refreshed at
        most once per call. Provider errors propagate.
        """
        mapping = await self._cache.current()
        if path.startswith("/"):
            path = path[1:]
        segments: List[str] = path.split("/")
        discard: List[str] = []
        while segments:
            shortcut = "/".join(segments)
            base = mapping.get(shortcut.lower())
            if base is not None:
                self._log.debug("Matched shortcut=%r suffix=%r", shortcut, discard)
                return build_redirect(base, "/".join(discard), query)
            discard.insert(0, segments.pop())
        return None

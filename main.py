from dotenv import load_dotenv
load_dotenv()

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from schemas import HealthResponse, RedirectOutcome, Settings
from providers import GoogleSheetsProvider, TokenFileCredentials
from services import PathResolver, ShortcutCache
from services.config import load_settings
from services.errors import RedirectorError

log = logging.getLogger("redirector")

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def build_cache(settings: Settings) -> ShortcutCache:
    provider = GoogleSheetsProvider(
        sheet_id=settings.google_sheet_id,
        sheet_name=settings.sheet_name,
        api_key=settings.google_sheets_api_key,
        credentials=TokenFileCredentials(settings.google_token_file),
        timeout=settings.provider_timeout_seconds,
    )
    return ShortcutCache(
        provider,
        ttl_seconds=settings.cache_ttl_seconds,
        timeout_seconds=settings.provider_timeout_seconds,
    )


def render_outcome(outcome: RedirectOutcome) -> Response:
    if outcome.status == "found":
        return RedirectResponse(outcome.location, status_code=301)
    if outcome.status == "not_found":
        return PlainTextResponse("shortcut not found", status_code=404)
    return PlainTextResponse(f"failed to find redirect: {outcome.detail}", status_code=500)


def create_app(cache: ShortcutCache, health_path: Optional[str] = None) -> FastAPI:
    """Build the redirect app.

    Every path belongs to the shortcut namespace. ``health_path`` mounts a GET
    health route in front of it and is off unless configured.
    """
    app = FastAPI()
    app.state.cache = cache
    resolver = PathResolver(cache)

    if health_path:
        @app.get(health_path, response_model=HealthResponse)
        async def health():
            return HealthResponse(status="ok", shortcuts=cache.size, last_refresh_age=cache.last_refresh_age)

    @app.api_route("/{path:path}", methods=ALL_METHODS)
    async def redirect(request: Request, path: str):
        # path is the decoded route path; request.url would re-split on an encoded "?" or "#"
        try:
            location = await resolver.resolve(path, request.query_params.multi_items())
        except RedirectorError as e:
            log.error("Failed to find redirect for %r: %s", path, e)
            outcome = RedirectOutcome.error(str(e))
        else:
            if location is None:
                outcome = RedirectOutcome.not_found()
            else:
                log.info("redirecting=%r to=%r", str(request.url), location)
                outcome = RedirectOutcome.found(location)
        return render_outcome(outcome)

    return app


settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
app = create_app(build_cache(settings), health_path=settings.health_path)

if __name__ == "__main__":
    import uvicorn
    log.info("Starting server at %s:%d", settings.listen_addr, settings.port)
    uvicorn.run(app, host=settings.listen_addr, port=settings.port)

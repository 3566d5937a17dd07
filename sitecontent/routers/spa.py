"""Single-page-app fallback: every non-API GET gets a static file or the shell."""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, Response

from sitecontent.config import Settings
from sitecontent.dependencies import get_settings
from sitecontent.routers.common import error_response

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)

API_PREFIX = "api"
SHELL_DOCUMENT = "index.html"


def _static_asset(static_root: Path, full_path: str) -> Optional[Path]:
    """Return the file *full_path* names inside *static_root*, or *None*.

    Only files inside the build directory are ever served.  Paths the
    filesystem cannot represent (e.g. embedded NUL bytes) are client routes.
    """
    try:
        candidate = (static_root / full_path).resolve()
        if candidate.is_relative_to(static_root) and candidate.is_file():
            return candidate
    except (ValueError, OSError) as exc:
        logger.info("Unresolvable static path %r treated as a client route: %s", full_path, exc)
    return None


@router.get("/{full_path:path}")
def spa_fallback(full_path: str, settings: Settings = Depends(get_settings)) -> Response:
    if full_path == API_PREFIX or full_path.startswith(API_PREFIX + "/"):
        return error_response(404, "Not found")

    static_root = Path(settings.static_dir).resolve()
    if full_path:
        asset = _static_asset(static_root, full_path)
        if asset is not None:
            return FileResponse(asset)

    shell = static_root / SHELL_DOCUMENT
    if not shell.is_file():
        logger.error("SPA shell %s is missing", shell)
        return error_response(404, "Not found")
    return FileResponse(shell, media_type="text/html")

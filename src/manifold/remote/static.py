"""Front-end bundle serving with index.html fallback for client-side routes"""

from pathlib import Path
from typing import Optional

from fastapi.responses import FileResponse, HTMLResponse, Response


INDEX_FILE = "index.html"

PLACEHOLDER_HTML = """\
<!doctype html>
<html>
  <head><title>Manifold</title></head>
  <body>
    <h1>Front-end bundle not available</h1>
    <p>Build the builder UI and point the server at its output directory.</p>
  </body>
</html>
"""


def bundle_response(frontend_dir: Optional[Path], requested: str) -> Response:
    """Return the requested bundle file, the bundle's index.html, or a 503 placeholder."""
    if frontend_dir is None or not (frontend_dir / INDEX_FILE).is_file():
        return HTMLResponse(content=PLACEHOLDER_HTML, status_code=503)

    root = frontend_dir.resolve()
    candidate = (root / requested).resolve()
    if requested and candidate.is_relative_to(root) and candidate.is_file():
        return FileResponse(str(candidate))
    return FileResponse(str(root / INDEX_FILE))

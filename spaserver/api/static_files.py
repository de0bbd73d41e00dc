"""Static file serving for the single page application bundle."""

import os

from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

WASM_MEDIA_TYPE = "application/wasm"


class SpaStaticFiles(StaticFiles):
    """Starlette static files handler that always labels `.wasm` correctly.

    Browsers refuse to stream-compile WebAssembly unless the response is
    served as `application/wasm`, whatever the platform mime table says.
    """

    def file_response(
        self,
        full_path: str | os.PathLike[str],
        stat_result: os.stat_result,
        scope: Scope,
        status_code: int = 200,
    ) -> Response:
        """Build the file response and force the wasm content type.

        Args:
            full_path: Resolved file path on disk.
            stat_result: File stat data used for validators.
            scope: HTTP connection scope.
            status_code: Response status code.

        Returns:
            Response: File or not-modified response.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        response = super().file_response(full_path, stat_result, scope, status_code)
        if os.fspath(full_path).endswith(".wasm"):
            response.headers["content-type"] = WASM_MEDIA_TYPE
        return response

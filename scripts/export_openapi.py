from __future__ import annotations

import json
import sys
from pathlib import Path

from fastapi import FastAPI
from src.api.main import app as api_app


def export_openapi(app: FastAPI, destination: Path) -> None:
    """Persist the OpenAPI schema to the given destination."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(app.openapi(), indent=2, sort_keys=True))


def main(argv: list[str]) -> None:
    output = Path(argv[0]) if argv else Path("docs/api/openapi.json")
    export_openapi(api_app, output)


if __name__ == "__main__":
    main(sys.argv[1:])

"""
Utility script to generate and write the OpenAPI schema for the FastAPI app.

This script builds the application through create_app and serializes its
OpenAPI schema to a JSON file so that API clients and documentation tools can
consume a stable document without running the server.

Usage:
    python -m task_tracker.generate_openapi [output_path]

Notes:
- The script ensures every tag from openapi_tags is present in the schema.
- Default output path is interfaces/openapi.json under the working directory.
"""
from __future__ import annotations

import json
import os
import sys
from typing import Any, Dict, List, Optional

from fastapi import FastAPI

from .main import create_app, openapi_tags

DEFAULT_OUTPUT = os.path.join("interfaces", "openapi.json")


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Ensure the OpenAPI schema contains the expected tags metadata. Existing
    tag definitions are kept; only missing ones are appended.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


# PUBLIC_INTERFACE
def generate_openapi(out_path: str = DEFAULT_OUTPUT, app: Optional[FastAPI] = None) -> str:
    """
    Write the OpenAPI schema of `app` (a freshly created one by default) to
    out_path, creating directories as needed, and return the written path.
    """
    app = app or create_app()
    schema = app.openapi()
    _ensure_tags(schema)

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    return out_path


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    out_path = generate_openapi(args[0] if args else DEFAULT_OUTPUT)
    print(f"Wrote OpenAPI schema to: {out_path}")


if __name__ == "__main__":
    main()

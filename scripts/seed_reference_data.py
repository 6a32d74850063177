"""Seed departments, categories and intake tokens from a JSON file.

Usage:
    uv run python -m scripts.seed_reference_data [path/to/seed-data.json]

Default path: docs/seed-data.json (relative to project root). Existing
departments and categories (matched by name) are kept; tokens are always
created new and their secrets printed.

File format:
    {
      "departments": ["Einkauf", "Lager"],
      "categories": [{"name": "Wareneingang", "notes_required": false}],
      "tokens": [{"label": "Lager Nord", "email": null, "departments": ["Lager"]}]
    }
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from app.application.services.reference_data_service import ReferenceDataService
from app.core.config import get_settings
from app.domain.exceptions import DuplicateResourceException, IntakeException
from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.persistence.repositories import (
    CategoryRepository,
    DepartmentRepository,
    TokenRepository,
)


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


async def _seed(service: ReferenceDataService, data: dict[str, Any]) -> None:
    for name in data.get("departments", []):
        try:
            await service.create_department(name)
            print(f"department  + {name}")
        except DuplicateResourceException:
            print(f"department  = {name}")

    for item in data.get("categories", []):
        try:
            await service.create_category(
                item["name"], notes_required=bool(item.get("notes_required", False))
            )
            print(f"category    + {item['name']}")
        except DuplicateResourceException:
            print(f"category    = {item['name']}")

    departments = {d.name: d.id for d in await service.list_departments()}
    for item in data.get("tokens", []):
        ids = [departments[n] for n in item.get("departments", []) if n in departments]
        token = await service.create_token(
            label=item.get("label"), email=item.get("email"), department_ids=ids
        )
        print(f"token       + {token.display}")


async def main() -> None:
    load_dotenv(_project_root() / ".env")
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else _project_root() / "docs" / "seed-data.json"
    if not path.is_file():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    data = _load(path)

    get_settings()
    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            async with session.begin():
                service = ReferenceDataService(
                    DepartmentRepository(session),
                    CategoryRepository(session),
                    TokenRepository(session),
                )
                await _seed(service, data)
    except IntakeException as e:
        print(f"Seeding failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())

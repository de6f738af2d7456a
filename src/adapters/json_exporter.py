"""Exportación JSON del envelope de consulta.

Por qué JSON:
- Interoperabilidad con otros sistemas que consumen el `requestId`/`source`.
- Permite guardar evidencia de la consulta sin depender de la terminal.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import LookupResponse


def export_envelope_json(*, response: LookupResponse, output_path: Path) -> Path:
    """Exporta el body del `LookupResponse` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(response.body, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path

"""Configuración de pytest para cpf-resolver."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

# Agrega src/ al PYTHONPATH para imports absolutos (core, adapters, cli)
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from core.config import AppSettings  # noqa: E402



@pytest.fixture
def settings() -> AppSettings:
    """Settings aislados del entorno/.env del desarrollador."""
    return AppSettings(
        _env_file=None,
        http_timeout_seconds=2.0,
        cpfhub_base_url="https://cpfhub.test",
        cpfhub_api_key="test-key",
        receita_base_url="https://receita.test",
        mte_url="http://mte.test/pnpepesquisas.asp",
        mte_cookie="ASPSESSIONID=abc",
        mte_host="mte.test",
    )


@pytest.fixture
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Fabrica un AsyncClient con transporte mockeado."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory

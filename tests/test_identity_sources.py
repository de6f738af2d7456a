"""Tests de los proveedores concretos (CPFHub, Receita, MTE) con HTTP mockeado."""

from __future__ import annotations

import random

import httpx
import pytest

from adapters.identity_sources import CPFHubProvider, MTEPortalProvider, ReceitaCPFProvider
from adapters.identity_sources.mte import CONTENT_TYPE, parse_portal_text
from core.domain.models import DECLARATION, SITUACAO, STATUS

VALID_CPF = "52998224725"

USER_BIRTH_DATE = "20/05/1990"


class TestCPFHubProvider:
    @pytest.mark.asyncio
    async def test_success_builds_canonical_record(self, settings, mock_client) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {
                        "name": "JOÃO DA SILVA",
                        "birthDate": "15/03/1985",
                        "gender": "M",
                        "day": 15,
                        "month": 3,
                        "year": 1985,
                    },
                },
            )

        async with mock_client(handler) as client:
            result = await CPFHubProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.ok
        record = result.record
        assert record is not None
        assert record.name == "João Da Silva"
        assert record.birth_date == "15/03/1985"
        assert record.mother_name == ""
        assert record.gender == "M"
        assert (record.day, record.month, record.year) == (15, 3, 1985)
        assert record.source == "CPFHub.io API"
        assert (record.situacao, record.status, record.declaration) == (SITUACAO, STATUS, DECLARATION)

        assert seen[0].method == "GET"
        assert seen[0].url.path == f"/cpf/{VALID_CPF}"
        assert seen[0].headers["x-api-key"] == "test-key"

    @pytest.mark.asyncio
    async def test_missing_optional_fields_use_defaults(self, settings, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True, "data": {"name": "ana souza"}})

        async with mock_client(handler) as client:
            result = await CPFHubProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.record is not None
        assert result.record.birth_date == USER_BIRTH_DATE
        assert result.record.gender == "N"
        assert result.record.day is None

    @pytest.mark.asyncio
    async def test_success_flag_false_fails(self, settings, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": False, "data": {"name": "x"}})

        async with mock_client(handler) as client:
            result = await CPFHubProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert not result.ok
        assert result.reason == "no_data"

    @pytest.mark.asyncio
    async def test_http_error_status_fails(self, settings, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "unauthorized"})

        async with mock_client(handler) as client:
            result = await CPFHubProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.reason == "http_401"

    @pytest.mark.asyncio
    async def test_empty_name_fails(self, settings, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True, "data": {"name": ""}})

        async with mock_client(handler) as client:
            result = await CPFHubProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.reason == "missing_name"

    @pytest.mark.asyncio
    async def test_without_api_key_does_not_call_http(self, settings, mock_client) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={})

        no_key = settings.model_copy(update={"cpfhub_api_key": None})
        async with mock_client(handler) as client:
            result = await CPFHubProvider(no_key).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.reason == "not_configured"
        assert calls == []

    @pytest.mark.asyncio
    async def test_invalid_json_fails(self, settings, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        async with mock_client(handler) as client:
            result = await CPFHubProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.reason == "malformed_payload"


class TestReceitaCPFProvider:
    @pytest.mark.asyncio
    async def test_success_uses_first_entry(self, settings, mock_client) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=[
                    {"NOME": "MARIA DE SOUZA", "DATA_NASCIMENTO": "1980-12-01", "NOME_MAE": "ANA DE SOUZA"},
                    {"NOME": "OUTRA PESSOA"},
                ],
            )

        async with mock_client(handler) as client:
            result = await ReceitaCPFProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        record = result.record
        assert record is not None
        assert record.name == "Maria De Souza"
        assert record.birth_date == "01/12/1980"
        assert record.mother_name == "Ana De Souza"
        assert record.source == "GitHub API"
        assert record.gender is None

        assert seen[0].url.path == f"/cpf/{VALID_CPF}/"
        assert seen[0].url.params["format"] == "json"

    @pytest.mark.asyncio
    async def test_missing_birth_date_falls_back_to_user_input(self, settings, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"NOME": "MARIA DE SOUZA"}])

        async with mock_client(handler) as client:
            result = await ReceitaCPFProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.record is not None
        assert result.record.birth_date == USER_BIRTH_DATE
        assert result.record.mother_name == ""

    @pytest.mark.asyncio
    async def test_empty_list_is_not_found(self, settings, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[])

        async with mock_client(handler) as client:
            result = await ReceitaCPFProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.reason == "not_found"

    @pytest.mark.asyncio
    async def test_network_error_fails(self, settings, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_client(handler) as client:
            result = await ReceitaCPFProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.reason == "network_error:ConnectError"

    @pytest.mark.asyncio
    async def test_transport_timeout_fails(self, settings, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        async with mock_client(handler) as client:
            result = await ReceitaCPFProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.reason == "timeout"


PORTAL_BODY = (
    'parent.preencheCampos(NOPESSOAFISICA="JOSE CARLOS PEREIRA ", '
    "DTNASCIMENTO='10/10/1970', NOMAE=\"LUCIA PEREIRA\");"
)


class TestMTEPortalProvider:
    @pytest.mark.asyncio
    async def test_success_parses_text_body(self, settings, mock_client) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text=PORTAL_BODY)

        provider = MTEPortalProvider(settings, rng=random.Random(7))
        async with mock_client(handler) as client:
            result = await provider.lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        record = result.record
        assert record is not None
        assert record.name == "Jose Carlos Pereira"
        assert record.birth_date == "10/10/1970"
        assert record.mother_name == "Lucia Pereira"
        assert record.source == "MTE API"

        request = seen[0]
        expected_token = random.Random(7).random()
        assert request.method == "POST"
        assert request.content.decode() == f"acao=consultar%20cpf&cpf={VALID_CPF}&nocache={expected_token}"
        assert request.headers["cookie"] == "ASPSESSIONID=abc"
        assert request.headers["content-type"] == CONTENT_TYPE
        assert request.headers["host"] == "mte.test"

    @pytest.mark.asyncio
    async def test_missing_birth_date_is_not_found(self, settings, mock_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="NOPESSOAFISICA='JOSE'")

        async with mock_client(handler) as client:
            result = await MTEPortalProvider(settings).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.reason == "not_found"

    @pytest.mark.asyncio
    async def test_without_url_is_skipped(self, settings, mock_client) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, text=PORTAL_BODY)

        no_url = settings.model_copy(update={"mte_url": None})
        async with mock_client(handler) as client:
            result = await MTEPortalProvider(no_url).lookup(VALID_CPF, birth_date=USER_BIRTH_DATE, client=client)

        assert result.reason == "not_configured"
        assert calls == []


def test_parse_portal_text_normalizes_quotes() -> None:
    assert parse_portal_text(PORTAL_BODY) == ("JOSE CARLOS PEREIRA", "10/10/1970", "LUCIA PEREIRA")


def test_parse_portal_text_without_tokens() -> None:
    assert parse_portal_text("CPF inexistente") == ("", "", "")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("provider_factory", "update"),
    [
        (lambda s: MTEPortalProvider(s), {"mte_url": "http://[::1"}),
        (lambda s: CPFHubProvider(s), {"cpfhub_base_url": "http://[::1"}),
        (lambda s: ReceitaCPFProvider(s), {"receita_base_url": "http://[::1"}),
    ],
)
async def test_invalid_configured_url_is_a_failure(settings, mock_client, provider_factory, update) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    async with mock_client(handler) as client:
        result = await provider_factory(settings.model_copy(update=update)).lookup(
            VALID_CPF, birth_date=USER_BIRTH_DATE, client=client
        )

    assert not result.ok
    assert result.reason == "invalid_url"
    assert calls == []

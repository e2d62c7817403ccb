"""
Integration tests for work order receivable generation.

These tests verify:
1. Preview computes the plan and the form defaults
2. Generate writes the movement, receivables and work order update in order
3. Validation refusals list every failed rule
4. Partial writes are reported, not rolled back
"""

import pytest
from httpx import AsyncClient

from tests.integration.conftest import InMemoryEntityStore


VALID_BODY = {
    "bank_account_id": "conta-1",
    "chart_of_accounts_id": "plano-receita",
    "competencia": "2024-01",
}


# =============================================================================
# Preview Tests
# =============================================================================

class TestReceivablesPreview:
    """Tests for GET /v1/work-orders/{id}/receivables/preview."""

    @pytest.mark.asyncio
    async def test_installment_condition_splits_total(self, client: AsyncClient):
        response = await client.get("/v1/work-orders/os-1/receivables/preview")

        assert response.status_code == 200
        data = response.json()

        installments = data["plan"]["installments"]
        assert [i["amount_cents"] for i in installments] == [33333, 33333, 33334]
        assert [i["due_date"] for i in installments] == [
            "2024-02-14",
            "2024-03-14",
            "2024-04-14",
        ]
        assert [i["sequence_number"] for i in installments] == [1, 2, 3]
        assert all(i["status"] == "pendente" for i in installments)
        assert data["plan"]["payment_condition_id"] == "cond-3x"

    @pytest.mark.asyncio
    async def test_form_defaults(self, client: AsyncClient):
        response = await client.get("/v1/work-orders/os-1/receivables/preview")
        data = response.json()

        assert data["work_order_number"] == "OS-0001"
        assert data["total_cents"] == 100000
        assert data["bank_account_id"] == "conta-1"
        assert data["chart_of_accounts_id"] == "plano-receita"
        assert data["competencia"] == "2024-01"
        assert data["note"] == "Receita da OS OS-0001"
        assert data["payment_condition"]["kind"] == "parcelado"
        assert data["warnings"] == []

    @pytest.mark.asyncio
    async def test_no_condition_gives_single_installment_on_opening_date(
        self,
        client: AsyncClient,
    ):
        response = await client.get("/v1/work-orders/os-2/receivables/preview")

        data = response.json()
        assert data["payment_condition"] is None
        assert data["plan"]["installments"] == [
            {
                "sequence_number": 1,
                "due_date": "2024-03-10",
                "amount_cents": 25050,
                "status": "pendente",
            }
        ]

    @pytest.mark.asyncio
    async def test_unknown_condition_degrades_with_warning(self, client: AsyncClient):
        response = await client.get("/v1/work-orders/os-3/receivables/preview")

        data = response.json()
        assert len(data["plan"]["installments"]) == 1
        assert data["plan"]["installments"][0]["due_date"] == "2024-05-02"
        assert data["plan"]["installments"][0]["amount_cents"] == 10000
        assert len(data["warnings"]) == 1
        assert "cond-removed" in data["warnings"][0]

    @pytest.mark.asyncio
    async def test_deferred_condition_shifts_first_due_date(self, client: AsyncClient):
        response = await client.get("/v1/work-orders/os-4/receivables/preview")

        installments = response.json()["plan"]["installments"]
        assert len(installments) == 1
        assert installments[0]["due_date"] == "2024-02-28"

    @pytest.mark.asyncio
    async def test_missing_configuration_leaves_defaults_empty(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        store.records["Configuracoes"] = []
        store.records["ContaBancaria"] = []

        response = await client.get("/v1/work-orders/os-1/receivables/preview")

        data = response.json()
        assert data["bank_account_id"] is None
        assert data["chart_of_accounts_id"] is None

    @pytest.mark.asyncio
    async def test_unknown_work_order_returns_404(self, client: AsyncClient):
        response = await client.get("/v1/work-orders/os-missing/receivables/preview")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "WORK_ORDER_NOT_FOUND"
        assert "request_id" in data

    @pytest.mark.asyncio
    async def test_store_failure_returns_503(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        store.fail_reads = True

        response = await client.get("/v1/work-orders/os-1/receivables/preview")

        assert response.status_code == 503
        assert response.json()["error"] == "ENTITY_STORE_ERROR"

    @pytest.mark.asyncio
    async def test_preview_writes_nothing(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        await client.get("/v1/work-orders/os-1/receivables/preview")

        assert store.writes() == []


# =============================================================================
# Generation Tests
# =============================================================================

class TestReceivablesGeneration:
    """Tests for POST /v1/work-orders/{id}/receivables."""

    @pytest.mark.asyncio
    async def test_generate_from_computed_plan(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        response = await client.post("/v1/work-orders/os-1/receivables", json=VALID_BODY)

        assert response.status_code == 201
        data = response.json()
        assert data["child_count"] == 3
        assert data["total_cents"] == 100000
        assert data["source_id"] == "os-1"
        assert data["parent_id"] == store.created["MovimentacaoFinanceira"][0]["id"]
        assert data["child_ids"] == [r["id"] for r in store.created["ContasReceber"]]

    @pytest.mark.asyncio
    async def test_parent_written_before_children_and_source_updated_last(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        await client.post("/v1/work-orders/os-1/receivables", json=VALID_BODY)

        writes = store.writes()
        assert [(w[0], w[1]) for w in writes] == [
            ("create", "MovimentacaoFinanceira"),
            ("create", "ContasReceber"),
            ("create", "ContasReceber"),
            ("create", "ContasReceber"),
            ("update", "OrdemServico"),
        ]

        parent_id = store.created["MovimentacaoFinanceira"][0]["id"]
        _, _, work_order_id, patch = writes[-1]
        assert work_order_id == "os-1"
        assert patch == {"financeiro_gerado": True, "movimentacao_financeira_id": parent_id}

    @pytest.mark.asyncio
    async def test_movement_record_shape(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        await client.post("/v1/work-orders/os-1/receivables", json=VALID_BODY)

        movement = store.created["MovimentacaoFinanceira"][0]
        assert movement["tipo_movimentacao"] == "credito"
        assert movement["numero_documento"] == "OS-0001"
        assert movement["contato_tipo"] == "cliente"
        assert movement["contato_id"] == "cli-1"
        assert movement["data_faturamento"] == "2024-01-15"
        assert movement["data_vencimento"] == "2024-02-14"
        assert movement["competencia"] == "2024-01"
        assert movement["historico"] == "Receita da OS OS-0001"
        assert movement["forma_pagamento_id"] == "forma-boleto"
        assert movement["condicao_pagamento_id"] == "cond-3x"
        assert movement["conta_bancaria_id"] == "conta-1"
        assert movement["origem"] == "os"
        assert movement["os_id"] == "os-1"
        assert movement["valor_total"] == 1000.0
        assert movement["status"] == "pendente"
        assert [p["valor"] for p in movement["parcelas"]] == [333.33, 333.33, 333.34]
        assert movement["planos_contas"] == [
            {
                "plano_contas_id": "plano-receita",
                "valor": 1000.0,
                "tipo": "credito",
                "observacao": "",
            }
        ]

    @pytest.mark.asyncio
    async def test_receivable_record_shape(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        await client.post("/v1/work-orders/os-1/receivables", json=VALID_BODY)

        parent_id = store.created["MovimentacaoFinanceira"][0]["id"]
        receivables = store.created["ContasReceber"]

        assert [r["descricao"] for r in receivables] == [
            "OS-0001 - Parcela 1/3",
            "OS-0001 - Parcela 2/3",
            "OS-0001 - Parcela 3/3",
        ]
        first = receivables[0]
        assert first["numero_documento"] == "OS-0001"
        assert first["data_vencimento"] == "2024-02-14"
        assert first["valor_original"] == 333.33
        assert first["status"] == "pendente"
        assert first["cliente_id"] == "cli-1"
        assert first["competencia"] == "2024-01"
        assert first["plano_contas_id"] == "plano-receita"
        assert first["observacoes"] == "Gerado da OS OS-0001\nReceita da OS OS-0001"
        assert all(r["movimentacao_financeira_id"] == parent_id for r in receivables)

    @pytest.mark.asyncio
    async def test_non_customer_contact_has_no_cliente_id(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        body = {**VALID_BODY, "competencia": "2024-03", "note": "Serviço terceirizado"}
        response = await client.post("/v1/work-orders/os-2/receivables", json=body)

        assert response.status_code == 201
        receivable = store.created["ContasReceber"][0]
        assert receivable["cliente_id"] is None
        assert receivable["observacoes"] == "Gerado da OS OS-0002\nServiço terceirizado"
        assert store.created["MovimentacaoFinanceira"][0]["historico"] == "Serviço terceirizado"

    @pytest.mark.asyncio
    async def test_edited_installments_are_written_as_sent(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        body = {
            **VALID_BODY,
            "installments": [
                {"sequence_number": 2, "due_date": "2024-03-01", "amount_cents": 40000},
                {"sequence_number": 1, "due_date": "2024-02-01", "amount_cents": 50000},
            ],
        }

        response = await client.post("/v1/work-orders/os-1/receivables", json=body)

        assert response.status_code == 201
        assert response.json()["total_cents"] == 90000

        movement = store.created["MovimentacaoFinanceira"][0]
        assert movement["valor_total"] == 900.0
        assert movement["data_vencimento"] == "2024-02-01"

        receivables = store.created["ContasReceber"]
        assert [r["descricao"] for r in receivables] == [
            "OS-0001 - Parcela 1/2",
            "OS-0001 - Parcela 2/2",
        ]
        assert [r["valor_original"] for r in receivables] == [500.0, 400.0]

    @pytest.mark.asyncio
    async def test_double_submission_writes_twice(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        await client.post("/v1/work-orders/os-1/receivables", json=VALID_BODY)
        await client.post("/v1/work-orders/os-1/receivables", json=VALID_BODY)

        assert len(store.created["MovimentacaoFinanceira"]) == 2
        assert len(store.created["ContasReceber"]) == 6


# =============================================================================
# Validation Tests
# =============================================================================

class TestReceivablesValidation:
    """Tests for refused generation requests."""

    @pytest.mark.asyncio
    async def test_missing_fields_list_every_rule(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        response = await client.post("/v1/work-orders/os-1/receivables", json={})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "GENERATION_REFUSED"
        assert data["details"] == [
            "bank_account_id is required",
            "chart_of_accounts_id is required",
            "competencia is required",
        ]
        assert store.writes() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("competencia", ["2024-13", "2024-1", "01/2024", "2024-00"])
    async def test_malformed_competencia_is_refused(
        self,
        client: AsyncClient,
        competencia: str,
    ):
        body = {**VALID_BODY, "competencia": competencia}
        response = await client.post("/v1/work-orders/os-1/receivables", json=body)

        assert response.status_code == 400
        assert response.json()["details"] == ["competencia must be in YYYY-MM format"]

    @pytest.mark.asyncio
    async def test_empty_installment_list_is_refused(self, client: AsyncClient):
        body = {**VALID_BODY, "installments": []}
        response = await client.post("/v1/work-orders/os-1/receivables", json=body)

        assert response.status_code == 400
        assert response.json()["details"] == ["at least one installment is required"]

    @pytest.mark.asyncio
    async def test_installment_without_due_date_is_refused(self, client: AsyncClient):
        body = {
            **VALID_BODY,
            "installments": [{"sequence_number": 1, "amount_cents": 1000}],
        }
        response = await client.post("/v1/work-orders/os-1/receivables", json=body)

        assert response.status_code == 400
        assert response.json()["details"] == ["installment 1 has no due date"]

    @pytest.mark.asyncio
    async def test_repeated_installment_number_is_refused(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        body = {
            **VALID_BODY,
            "installments": [
                {"sequence_number": 1, "due_date": "2024-02-14", "amount_cents": 50000},
                {"sequence_number": 1, "due_date": "2024-03-14", "amount_cents": 50000},
            ],
        }
        response = await client.post("/v1/work-orders/os-1/receivables", json=body)

        assert response.status_code == 400
        assert response.json()["details"] == ["installment number 1 is used more than once"]
        assert store.writes() == []

    @pytest.mark.asyncio
    async def test_unknown_work_order_returns_404(self, client: AsyncClient):
        response = await client.post(
            "/v1/work-orders/os-missing/receivables",
            json=VALID_BODY,
        )

        assert response.status_code == 404


# =============================================================================
# Partial Write Tests
# =============================================================================

class TestReceivablesPartialWrite:
    """Tests for failures part way through the write sequence."""

    @pytest.mark.asyncio
    async def test_child_failure_reports_partial_state(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        store.fail_create_after["ContasReceber"] = 1

        response = await client.post("/v1/work-orders/os-1/receivables", json=VALID_BODY)

        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "LEDGER_WRITE_FAILED"
        assert data["parent_id"] == store.created["MovimentacaoFinanceira"][0]["id"]
        assert data["created_ids"] == [store.created["ContasReceber"][0]["id"]]

        # Nothing is rolled back and the work order is not marked
        assert len(store.created["MovimentacaoFinanceira"]) == 1
        assert not any(call[0] == "update" for call in store.calls)

    @pytest.mark.asyncio
    async def test_movement_failure_writes_nothing(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        store.fail_create_after["MovimentacaoFinanceira"] = 0

        response = await client.post("/v1/work-orders/os-1/receivables", json=VALID_BODY)

        assert response.status_code == 503
        assert "ContasReceber" not in store.created

    @pytest.mark.asyncio
    async def test_work_order_update_failure_keeps_receivables(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        store.fail_updates = True

        response = await client.post("/v1/work-orders/os-1/receivables", json=VALID_BODY)

        assert response.status_code == 502
        data = response.json()
        assert len(data["created_ids"]) == 3
        assert len(store.created["ContasReceber"]) == 3

    @pytest.mark.asyncio
    async def test_movement_without_id_is_reported_as_partial_write(
        self,
        client: AsyncClient,
        store: InMemoryEntityStore,
    ):
        store.omit_id_for.add("MovimentacaoFinanceira")

        response = await client.post("/v1/work-orders/os-1/receivables", json=VALID_BODY)

        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "LEDGER_WRITE_FAILED"
        assert data["parent_id"] is None
        assert data["created_ids"] == []
        assert len(store.created["MovimentacaoFinanceira"]) == 1
        assert "ContasReceber" not in store.created

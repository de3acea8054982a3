"""API resource tests."""

from uuid import uuid4

import pytest
from falcon.testing import TestClient

from tests.api.conftest import as_user
from tests.conftest import ADMIN, ANA, BRUNO, grant, seed_project, stored_values


@pytest.fixture
def payroll(fake_uow):
    """Project with Nome/Salario and ANA attached; Salario hidden for BRUNO."""
    pid = seed_project(fake_uow, ["Nome", "Salario"], [["Ana", "5000"]], [ANA, BRUNO])
    grant(fake_uow, pid, BRUNO, Salario="HIDDEN")
    return pid


class TestAuth:
    def test_anonymous_request_is_unauthorized(self, client: TestClient, payroll) -> None:
        result = client.simulate_get(f"/v1/projects/{payroll}/sheet")
        assert result.status_code == 401
        assert result.json == {"error": "Unauthorized"}

    def test_invalid_project_id(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/projects/not-a-uuid/sheet", headers=as_user(ADMIN))
        assert result.status_code == 400


class TestProjects:
    def test_admin_creates_project(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/projects",
            json={"name": "Folha", "description": "Pagamentos"},
            headers=as_user(ADMIN),
        )
        assert result.status_code == 201
        assert result.json["name"] == "Folha"
        assert result.json["created_by"] == ADMIN.id

    def test_collaborator_cannot_create_project(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/projects", json={"name": "x"}, headers=as_user(ANA))
        assert result.status_code == 403

    def test_missing_name(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/projects", json={}, headers=as_user(ADMIN))
        assert result.status_code == 400

    def test_get_project_with_stats(self, client: TestClient, payroll) -> None:
        result = client.simulate_get(f"/v1/projects/{payroll}", headers=as_user(ANA))
        assert result.status_code == 200
        assert result.json["stats"] == {
            "total_rows": 1,
            "total_columns": 2,
            "total_collaborators": 2,
        }

    def test_unknown_project(self, client: TestClient) -> None:
        result = client.simulate_get(f"/v1/projects/{uuid4()}", headers=as_user(ADMIN))
        assert result.status_code == 404

    def test_my_projects(self, client: TestClient, payroll) -> None:
        result = client.simulate_get("/v1/projects/mine", headers=as_user(ANA))
        assert result.status_code == 200
        assert [p["id"] for p in result.json["items"]] == [str(payroll)]


class TestCollaborators:
    def test_add_list_remove(self, client: TestClient, fake_uow) -> None:
        pid = seed_project(fake_uow, ["Nome"], [])
        fake_uow.users._by_id[ANA.id] = ANA
        base = f"/v1/projects/{pid}/collaborators"

        added = client.simulate_post(
            base, json={"user_id": ANA.id, "role": "TESTER"}, headers=as_user(ADMIN)
        )
        duplicate = client.simulate_post(base, json={"user_id": ANA.id}, headers=as_user(ADMIN))
        listed = client.simulate_get(base, headers=as_user(ADMIN))
        removed = client.simulate_delete(f"{base}/{ANA.id}", headers=as_user(ADMIN))

        assert added.status_code == 201
        assert added.json["role"] == "TESTER"
        assert duplicate.status_code == 409
        assert [c["user_id"] for c in listed.json["items"]] == [ANA.id]
        assert removed.status_code == 204
        assert fake_uow.collaborators._by_key == {}

    def test_collaborators_are_admin_only(self, client: TestClient, payroll) -> None:
        result = client.simulate_get(
            f"/v1/projects/{payroll}/collaborators", headers=as_user(ANA)
        )
        assert result.status_code == 403


class TestSheet:
    def test_collaborator_view_omits_hidden_columns(self, client: TestClient, payroll) -> None:
        result = client.simulate_get(f"/v1/projects/{payroll}/sheet", headers=as_user(BRUNO))

        assert result.status_code == 200
        assert [c["name"] for c in result.json["columns"]] == ["Nome"]
        assert result.json["rows"] == [["Ana"]]
        assert result.json["access"] == [
            {"column_name": "Nome", "access_level": "READ_ONLY"},
            {"column_name": "Salario", "access_level": "HIDDEN"},
        ]

    def test_read_only_cell_is_not_overwritten(
        self, client: TestClient, fake_uow, payroll
    ) -> None:
        result = client.simulate_put(
            f"/v1/projects/{payroll}/sheet",
            json={"columns": ["Nome", "Salario"], "rows": [["Ana", "9999"]]},
            headers=as_user(ANA),
        )

        assert result.status_code == 200
        assert result.json["rows"] == [["Ana", "5000"]]
        assert result.json["rejected_cells"] == 1
        assert stored_values(fake_uow, payroll) == [{"Nome": "Ana", "Salario": "5000"}]

    def test_visible_columns_only_with_object_rows(
        self, client: TestClient, fake_uow, payroll
    ) -> None:
        grant(fake_uow, payroll, BRUNO, Nome="READ_WRITE", Salario="HIDDEN")

        result = client.simulate_put(
            f"/v1/projects/{payroll}/sheet",
            json={"columns": [{"name": "Nome"}], "rows": [{"Nome": "Ana Maria"}]},
            headers=as_user(BRUNO),
        )

        assert result.status_code == 200
        assert result.json["rows"] == [["Ana Maria"]]
        assert stored_values(fake_uow, payroll) == [{"Nome": "Ana Maria", "Salario": "5000"}]

    def test_collaborator_cannot_add_columns(self, client: TestClient, payroll) -> None:
        result = client.simulate_put(
            f"/v1/projects/{payroll}/sheet",
            json={"columns": ["Nome", "Salario", "Bonus"], "rows": []},
            headers=as_user(ANA),
        )
        assert result.status_code == 400
        assert "administrators" in result.json["error"]

    @pytest.mark.parametrize("body", [{"columns": ["Nome"]}, {"columns": "Nome", "rows": []}])
    def test_malformed_body(self, client: TestClient, payroll, body) -> None:
        result = client.simulate_put(
            f"/v1/projects/{payroll}/sheet", json=body, headers=as_user(ADMIN)
        )
        assert result.status_code == 400

    def test_non_member_is_forbidden(self, client: TestClient, fake_uow) -> None:
        pid = seed_project(fake_uow, ["Nome"], [["Ana"]])
        result = client.simulate_get(f"/v1/projects/{pid}/sheet", headers=as_user(ANA))
        assert result.status_code == 403


class TestImport:
    def test_text_csv_body(self, client: TestClient, fake_uow, payroll) -> None:
        result = client.simulate_post(
            f"/v1/projects/{payroll}/sheet/import",
            body=b"Nome,Cargo\nAna,Dev\nBia,QA\n",
            headers={**as_user(ADMIN), "Content-Type": "text/csv"},
        )

        assert result.status_code == 200
        assert [c["name"] for c in result.json["columns"]] == ["Nome", "Cargo"]
        assert result.json["skipped_rows"] == 0
        record = fake_uow.permissions._by_key[(payroll, BRUNO.id)]
        assert record.permissions == []

    def test_multipart_file_part(self, client: TestClient, payroll) -> None:
        boundary = "colguardboundary"
        body = (
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="file"; filename="dados.csv"\r\n'
            "Content-Type: text/csv\r\n\r\n"
            "Nome,Setor\nAna,TI\nBia,RH\n\r\n"
            f"--{boundary}--\r\n"
        ).encode()

        result = client.simulate_post(
            f"/v1/projects/{payroll}/sheet/import",
            body=body,
            headers={
                **as_user(ADMIN),
                "Content-Type": f"multipart/form-data; boundary={boundary}",
            },
        )

        assert result.status_code == 200
        assert result.json["rows"] == [["Ana", "TI"], ["Bia", "RH"]]

    def test_oversized_file(self, client: TestClient, payroll) -> None:
        result = client.simulate_post(
            f"/v1/projects/{payroll}/sheet/import",
            body=b"Nome\n" + b"x" * 2048,
            headers={**as_user(ADMIN), "Content-Type": "text/csv"},
        )
        assert result.status_code == 400

    def test_import_is_admin_only(self, client: TestClient, payroll) -> None:
        result = client.simulate_post(
            f"/v1/projects/{payroll}/sheet/import",
            body=b"Nome\nAna\n",
            headers={**as_user(ANA), "Content-Type": "text/csv"},
        )
        assert result.status_code == 403


class TestColumns:
    def test_add_and_remove_column(self, client: TestClient, fake_uow, payroll) -> None:
        grant(fake_uow, payroll, ANA, Salario="READ_WRITE", Cargo="READ_WRITE")
        base = f"/v1/projects/{payroll}/columns"

        added = client.simulate_post(
            base, json={"name": "Cargo", "data_kind": "text"}, headers=as_user(ADMIN)
        )
        removed = client.simulate_delete(f"{base}/Salario", headers=as_user(ADMIN))
        missing = client.simulate_delete(f"{base}/Salario", headers=as_user(ADMIN))

        assert added.status_code == 201
        assert added.json["rows"] == [["Ana", "5000", ""]]
        assert removed.status_code == 200
        assert [c["name"] for c in removed.json["columns"]] == ["Nome", "Cargo"]
        assert missing.status_code == 404
        record = fake_uow.permissions._by_key[(payroll, ANA.id)]
        assert record.as_mapping() == {"Cargo": "READ_WRITE"}

    def test_duplicate_column(self, client: TestClient, payroll) -> None:
        result = client.simulate_post(
            f"/v1/projects/{payroll}/columns", json={"name": "Nome"}, headers=as_user(ADMIN)
        )
        assert result.status_code == 409


class TestPermissions:
    def test_admin_sets_and_reads_permissions(self, client: TestClient, payroll) -> None:
        url = f"/v1/projects/{payroll}/permissions/{ANA.id}"

        before = client.simulate_get(url, headers=as_user(ADMIN))
        saved = client.simulate_put(
            url,
            json={"permissions": [{"column_name": "Salario", "access_level": "READ_WRITE"}]},
            headers=as_user(ADMIN),
        )
        after = client.simulate_get(url, headers=as_user(ANA))

        assert before.json["permissions"] == [
            {"column_name": "Nome", "access_level": "READ_ONLY"},
            {"column_name": "Salario", "access_level": "READ_ONLY"},
        ]
        assert saved.status_code == 200
        assert after.status_code == 200
        assert after.json == {
            "collaborator_id": ANA.id,
            "permissions": [
                {"column_name": "Nome", "access_level": "READ_ONLY"},
                {"column_name": "Salario", "access_level": "READ_WRITE"},
            ],
        }

    def test_invalid_entry_rejects_whole_batch(
        self, client: TestClient, fake_uow, payroll
    ) -> None:
        result = client.simulate_put(
            f"/v1/projects/{payroll}/permissions/{BRUNO.id}",
            json={
                "permissions": [
                    {"column_name": "Nome", "access_level": "READ_WRITE"},
                    {"column_name": "Salario", "access_level": "SUPER"},
                ]
            },
            headers=as_user(ADMIN),
        )

        assert result.status_code == 400
        record = fake_uow.permissions._by_key[(payroll, BRUNO.id)]
        assert record.as_mapping() == {"Salario": "HIDDEN"}

    @pytest.mark.parametrize("body", [{}, {"permissions": "READ_WRITE"}, {"permissions": [1]}])
    def test_malformed_body(self, client: TestClient, payroll, body) -> None:
        result = client.simulate_put(
            f"/v1/projects/{payroll}/permissions/{ANA.id}", json=body, headers=as_user(ADMIN)
        )
        assert result.status_code == 400

    def test_collaborators_cannot_read_each_other(self, client: TestClient, payroll) -> None:
        result = client.simulate_get(
            f"/v1/projects/{payroll}/permissions/{BRUNO.id}", headers=as_user(ANA)
        )
        assert result.status_code == 403

    def test_collaborators_cannot_write_permissions(self, client: TestClient, payroll) -> None:
        result = client.simulate_put(
            f"/v1/projects/{payroll}/permissions/{ANA.id}",
            json={"permissions": [{"column_name": "Salario", "access_level": "READ_WRITE"}]},
            headers=as_user(ANA),
        )
        assert result.status_code == 403

    def test_unknown_collaborator(self, client: TestClient, payroll) -> None:
        result = client.simulate_get(
            f"/v1/projects/{payroll}/permissions/ghost", headers=as_user(ADMIN)
        )
        assert result.status_code == 404

    def test_project_overview(self, client: TestClient, payroll) -> None:
        result = client.simulate_get(f"/v1/projects/{payroll}/permissions", headers=as_user(ADMIN))

        assert result.status_code == 200
        assert [c["name"] for c in result.json["columns"]] == ["Nome", "Salario"]
        bruno = next(i for i in result.json["items"] if i["user_id"] == BRUNO.id)
        assert bruno["permissions"][1] == {"column_name": "Salario", "access_level": "HIDDEN"}

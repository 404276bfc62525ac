"""Unit tests for the admin-authz CLI.

Tests cover:
- create-model: store creation, model write, KEY=VALUE output
- admin add/remove: superuser tuple writes
- Error reporting and exit codes

Architecture:
- main() invoked in-process with argv lists
- pytest-httpx intercepts OpenFGA calls
"""

import json

import pytest

from admin_authz.cli.main import EXIT_FAILURE, EXIT_SUCCESS, main

API_URL = "http://openfga.test:8080"
STORE = "01HSTORE"
MODEL = "01HMODEL"


def admin_key(user: str) -> dict[str, str]:
    return {"user": f"user:{user}", "relation": "admin", "object": "privileged:superuser"}


@pytest.mark.unit
class TestCreateModelCommand:
    """admin-authz create-model."""

    def test_creates_store_and_writes_model(self, httpx_mock, capsys):
        httpx_mock.add_response(method="POST", url=f"{API_URL}/stores", json={"id": STORE})
        httpx_mock.add_response(
            method="POST",
            url=f"{API_URL}/stores/{STORE}/authorization-models",
            json={"authorization_model_id": MODEL},
        )

        exit_code = main(["create-model", "--api-url", API_URL, "--store-name", "ui"])

        assert exit_code == EXIT_SUCCESS
        assert capsys.readouterr().out.splitlines() == [
            f"OPENFGA_STORE_ID={STORE}",
            f"OPENFGA_AUTHORIZATION_MODEL_ID={MODEL}",
        ]
        create_store = httpx_mock.get_requests()[0]
        assert json.loads(create_store.content) == {"name": "ui"}

    def test_reuses_existing_store(self, httpx_mock, capsys):
        httpx_mock.add_response(
            method="POST",
            url=f"{API_URL}/stores/{STORE}/authorization-models",
            json={"authorization_model_id": MODEL},
        )

        exit_code = main(
            ["create-model", "--api-url", API_URL, "--store-id", STORE, "--api-token", "t"]
        )

        assert exit_code == EXIT_SUCCESS
        assert f"OPENFGA_STORE_ID={STORE}" in capsys.readouterr().out
        assert httpx_mock.get_request().headers["Authorization"] == "Bearer t"

    def test_rejected_model_exits_with_failure(self, httpx_mock, capsys):
        httpx_mock.add_response(
            method="POST",
            url=f"{API_URL}/stores/{STORE}/authorization-models",
            status_code=400,
            json={"code": "invalid_authorization_model"},
        )

        exit_code = main(["create-model", "--api-url", API_URL, "--store-id", STORE])

        captured = capsys.readouterr()
        assert exit_code == EXIT_FAILURE
        assert captured.out == ""
        assert (
            "Error: Failed to write authorization model: model_invalid: "
            "OpenFGA rejected the authorization model"
        ) in captured.err

    def test_empty_api_url(self, capsys):
        exit_code = main(["create-model", "--api-url", " "])

        assert exit_code == EXIT_FAILURE
        assert "Error: --api-url is required" in capsys.readouterr().err


@pytest.mark.unit
class TestAdminCommands:
    """admin-authz admin add|remove."""

    def test_add_writes_superuser_tuple(self, httpx_mock, capsys):
        httpx_mock.add_response(
            method="POST", url=f"{API_URL}/stores/{STORE}/write", json={}
        )

        exit_code = main(
            ["admin", "add", "--api-url", API_URL, "--store-id", STORE, "--user", "alice"]
        )

        assert exit_code == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "Added admin alice"
        assert json.loads(httpx_mock.get_request().content) == {
            "writes": {"tuple_keys": [admin_key("alice")]}
        }

    def test_remove_deletes_superuser_tuple_with_model_id(self, httpx_mock, capsys):
        httpx_mock.add_response(
            method="POST", url=f"{API_URL}/stores/{STORE}/write", json={}
        )

        exit_code = main(
            [
                "admin",
                "remove",
                "--api-url",
                API_URL,
                "--store-id",
                STORE,
                "--model-id",
                MODEL,
                "--user",
                "alice",
            ]
        )

        assert exit_code == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "Removed admin alice"
        assert json.loads(httpx_mock.get_request().content) == {
            "deletes": {"tuple_keys": [admin_key("alice")]},
            "authorization_model_id": MODEL,
        }

    def test_add_existing_admin_fails(self, httpx_mock, capsys):
        httpx_mock.add_response(
            method="POST",
            url=f"{API_URL}/stores/{STORE}/write",
            status_code=400,
            json={"code": "write_failed_due_to_invalid_input"},
        )

        exit_code = main(
            ["admin", "add", "--api-url", API_URL, "--store-id", STORE, "--user", "alice"]
        )

        captured = capsys.readouterr()
        assert exit_code == EXIT_FAILURE
        assert "Error: Failed to add admin alice: tuple_invalid" in captured.err
        assert "Added admin" not in captured.out

    def test_blank_user_is_rejected(self, capsys):
        exit_code = main(
            ["admin", "add", "--api-url", API_URL, "--store-id", STORE, "--user", "  "]
        )

        assert exit_code == EXIT_FAILURE
        assert "Error: --user must not be empty" in capsys.readouterr().err

    def test_store_id_is_required(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["admin", "add", "--api-url", API_URL, "--user", "alice"])

        assert exc_info.value.code == 2


@pytest.mark.unit
class TestUsage:
    """Argument handling without a command."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_FAILURE
        assert "usage: admin-authz" in capsys.readouterr().out

    def test_admin_without_action_prints_help(self, capsys):
        assert main(["admin"]) == EXIT_FAILURE

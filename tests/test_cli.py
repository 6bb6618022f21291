"""Command-line tests: argument handling, output and exit codes."""
import textwrap

import pytest
import yaml

from digit.cli import main
from digit.config.settings import CLIConfig
from tests.conftest import SERVER, make_jwt

TOKEN_PATH = "/keycloak/realms/ACME/protocol/openid-connect/token"


@pytest.fixture()
def configured(valid_token):
    """Store a server URL and a valid token, as 'digit config set' would."""
    CLIConfig(server=SERVER, jwt_token=valid_token).save()
    return valid_token


def run(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


def test_no_command_prints_help_and_fails(capsys):
    assert run([]) == 1
    assert "usage: digit" in capsys.readouterr().out


def test_create_workflow_rejects_file_and_default(capsys):
    assert run(["create-workflow", "--file", "wf.yaml", "--default", "--code", "PGR"]) == 2
    assert "cannot use both --file and --default" in capsys.readouterr().err


def test_create_workflow_default_requires_code(capsys):
    assert run(["create-workflow", "--default"]) == 2
    assert "--code flag is required" in capsys.readouterr().err


def test_config_set_stores_token_and_credentials(http, capsys, isolated_home):
    token = make_jwt()
    http.add("POST", TOKEN_PATH, {"access_token": token})

    main([
        "config", "set",
        "--server", SERVER,
        "--account", "ACME",
        "--client-id", "auth-server",
        "--client-secret", "changeme",
        "--username", "admin",
        "--password", "admin-pass",
    ])

    saved = yaml.safe_load((isolated_home / "config.yaml").read_text())
    assert saved["server"] == SERVER
    assert saved["jwt_token"] == token
    assert saved["auth_config"]["realm"] == "ACME"
    out = capsys.readouterr().out
    assert f"Server URL: {SERVER}" in out
    assert f"JWT Token: {token[:50]}..." in out


def test_config_set_requires_every_credential(capsys):
    assert run(["config", "set", "--server", SERVER]) == 2
    assert "missing: --account" in capsys.readouterr().err


def test_get_contexts_marks_current(tmp_path, capsys):
    path = tmp_path / "contexts.yaml"
    path.write_text(textwrap.dedent("""
        apiVersion: v1
        kind: Config
        current-context: staging
        contexts:
          - name: local
            context: {server: "http://localhost:8080"}
          - name: staging
            context: {server: "https://staging.example.org"}
    """))

    main(["config", "get-contexts", "--file", str(path)])

    out = capsys.readouterr().out
    assert "* staging (current)" in out
    assert "  local" in out


def test_create_process_sends_tenant_header(configured, http, capsys, isolated_home):
    http.add("POST", "/workflow/v1/process", {"id": "p1", "code": "PGR"}, status_code=201)

    main(["create-process", "--name", "PGR", "--code", "PGR", "--sla", "3600"])

    call = http.calls[0]
    assert call.kwargs["headers"]["Authorization"] == f"Bearer {configured}"
    assert call.kwargs["headers"]["X-Tenant-ID"] == "ACME"
    assert call.kwargs["json"]["sla"] == 3600
    assert '"id": "p1"' in capsys.readouterr().out
    assert sorted(p.name for p in isolated_home.iterdir()) == ["config.yaml"]


def test_create_workflow_default_end_to_end(configured, http, capsys):
    http.add("POST", "/workflow/v1/process", {"id": "p1"})
    for i in range(8):
        http.add("POST", "/workflow/v1/process/p1/state", {"id": f"s{i}"})
    http.add("POST", "/action", {"id": "a1"})

    main(["create-workflow", "--default", "--code", "PGR"])

    captured = capsys.readouterr()
    assert "🎉 Workflow created successfully!" in captured.out
    assert "Process ID: p1" in captured.out
    assert "States: 8" in captured.out
    assert "Actions: 10" in captured.out
    assert "✓ Process created with ID: p1" in captured.err
    assert len(http.calls_to("POST", "/action")) == 10


def test_partial_workflow_reports_created_ids(configured, http, capsys):
    http.add("POST", "/workflow/v1/process", {"id": "p1"})
    for i in range(8):
        http.add("POST", "/workflow/v1/process/p1/state", {"id": f"s{i}"})
    http.add("POST", "/action", text="role not found", status_code=400)

    assert run(["create-workflow", "--default", "--code", "PGR"]) == 1

    err = capsys.readouterr().err
    assert "Partially created process p1; remove it manually" in err
    assert "States already created: INIT=s0" in err
    assert "[create-workflow] Error: failed to create action" in err


def test_create_workflow_from_file_with_unknown_state(configured, http, tmp_path, capsys):
    path = tmp_path / "wf.yaml"
    path.write_text(textwrap.dedent("""
        workflow:
          process: {name: Trade License, code: TL}
          states:
            - {code: A, name: Applied, isInitial: true}
          actions:
            - {name: GO, currentState: A, nextState: Z}
    """))

    assert run(["create-workflow", "--file", str(path)]) == 1
    assert "[create-workflow] Error: state not found: Z" in capsys.readouterr().err
    assert http.calls == []


def test_missing_token_exits_with_hint(capsys):
    CLIConfig(server=SERVER).save()
    assert run(["delete-process", "--code", "PGR"]) == 1
    assert "[delete-process] Error: no JWT token found" in capsys.readouterr().err


def test_missing_server_exits(capsys):
    assert run(["search-process-definition", "--id", "p1"]) == 1
    assert "no server URL configured" in capsys.readouterr().err


def test_remote_error_exits_nonzero(configured, http, capsys):
    http.add("DELETE", "/workflow/v1/process", text="process not found", status_code=404)
    assert run(["delete-process", "--code", "PGR"]) == 1
    assert "[404]" in capsys.readouterr().err


def test_pinned_token_overrides_config(http, expired_token):
    CLIConfig(server=SERVER, jwt_token="stale").save()
    http.add("GET", "/workflow/v1/process/definition", {"id": "p1"})

    main(["search-process-definition", "--id", "p1", "--jwt-token", expired_token])

    assert http.calls[0].kwargs["headers"]["Authorization"] == f"Bearer {expired_token}"


def test_registry_data_rejects_invalid_json(configured, capsys):
    assert run(["create-registry-data", "--schema-code", "license-registry", "--data", "{oops"]) == 2
    assert "--data must be valid JSON" in capsys.readouterr().err


def test_registry_commands_default_to_local_server(configured, http):
    http.add("GET", "/registry/v1/schema/license-registry", {"schemaCode": "license-registry"})
    CLIConfig(jwt_token=configured).save()

    main(["search-registry-schema", "--schema-code", "license-registry"])

    assert http.calls[0].url == "http://localhost:8085/registry/v1/schema/license-registry"


def test_update_user_requires_a_field(configured, capsys):
    assert run(["update-user", "--username", "bob"]) == 2
    assert "at least one field to update is required" in capsys.readouterr().err


def test_unknown_command_is_rejected(capsys):
    assert run(["audit", "verify"]) == 2
    assert "invalid choice" in capsys.readouterr().err

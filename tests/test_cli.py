"""
Tests para los comandos de backend/run.py
"""
import pytest


@pytest.fixture()
def cli_app():
    from backend.run import app as run_app
    return run_app


def test_format_plate_prints_normalized_value(cli_app):
    runner = cli_app.test_cli_runner()
    result = runner.invoke(args=["format-plate", "ab-12-cd", "1abc23", "xyz"])

    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines[0] == "ab-12-cd -> AB-12-CD (LL-DD-LL)"
    assert lines[1] == "1abc23 -> 1-ABC-23 (D-LLL-DD)"
    assert lines[2] == "xyz -> XYZ (sin formato)"


def test_format_plate_requires_argument(cli_app):
    runner = cli_app.test_cli_runner()
    result = runner.invoke(args=["format-plate"])
    assert result.exit_code != 0


def test_check_config_hides_credential(cli_app):
    cli_app.config["MAIL_PASSWORD"] = "SG.super-secret"
    runner = cli_app.test_cli_runner()
    result = runner.invoke(args=["check-config"])

    assert result.exit_code == 0
    assert "Destinatarios:" in result.output
    assert "Credencial configurada: sí" in result.output
    assert "SG.super-secret" not in result.output

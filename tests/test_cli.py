from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from gtmpl.cli import cli as gtmpl_cli
from gtmpl.templates import registry


def test_template_get(home: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["template", "get", "python"])
    assert result.exit_code == 0, result.output
    assert (
        result.output.strip()
        == "https://github.com/getgauge/template-python/releases/latest/download/python.zip"
    )


def test_startup_writes_template_properties(home: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["template", "names"])
    assert result.exit_code == 0, result.output
    assert result.output.split() == ["dotnet", "java", "js", "python", "ruby", "ts"]
    assert registry.properties_path(home).read_text().startswith("# Version ")


def test_startup_recovers_from_undecodable_properties(home: Path) -> None:
    path = registry.properties_path(home)
    path.parent.mkdir(parents=True)
    path.write_bytes(b"# Version 0.0.1\n\xff\xfe = bad\n")
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["template", "names"])
    assert result.exit_code == 0, result.output
    assert "java" in result.output.split()
    assert path.read_text().startswith("# Version ")


def test_template_get_unknown_suggests(home: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["template", "get", "pyhton"])
    assert result.exit_code == 1
    assert "cannot find a Gauge template 'pyhton'" in result.output
    assert "python" in result.output


def test_template_add_then_list(home: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        gtmpl_cli, ["template", "add", "kotlin", "https://example.com/kotlin.zip"]
    )
    assert result.exit_code == 0, result.output

    result = runner.invoke(gtmpl_cli, ["template", "list", "--machine-readable"])
    assert result.exit_code == 0, result.output
    listed = {item["key"]: item["value"] for item in json.loads(result.output)}
    assert listed["kotlin"] == "https://example.com/kotlin.zip"
    assert "java" in listed


def test_template_add_invalid_location(home: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["template", "add", "kotlin", "not-a-url"])
    assert result.exit_code == 1
    assert "Failed to add template 'kotlin'" in result.output


def test_template_list_table(home: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["template", "list"])
    assert result.exit_code == 0, result.output
    assert "Template Name" in result.output
    assert "template-dotnet" in result.output


def test_config_set_and_get(home: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["config", "allow_insecure_download", "true"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "true"

    result = runner.invoke(gtmpl_cli, ["config", "allow_insecure_download"])
    assert result.output.strip() == "true"


def test_config_rejects_bad_value(home: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["config", "allow_insecure_download", "sometimes"])
    assert result.exit_code == 1


def test_init_from_zip(home: Path, project: Path, template_zip) -> None:
    # A non-empty plugin dir marks the java runner as installed
    (home / "plugins" / "java").mkdir(parents=True)
    (home / "plugins" / "java" / "java.json").write_text("{}")

    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["init", "--zip", str(template_zip())])
    assert result.exit_code == 0, result.output
    assert "Successfully initialized the project." in result.output
    assert (project / "specs" / "example.spec").is_file()
    assert not (project / "metadata.json").exists()


def test_init_in_existing_project_fails(home: Path, project: Path, template_zip) -> None:
    (project / "manifest.json").write_text(json.dumps({"Language": "python"}))
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["init", "--zip", str(template_zip())])
    assert result.exit_code == 1
    assert "already a Gauge Project" in result.output


def test_init_insecure_url_fails(home: Path, project: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["init", "--url", "http://example.com/java.zip"])
    assert result.exit_code == 1
    assert "allow_insecure_download" in result.output


def test_init_requires_one_source(home: Path, project: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(gtmpl_cli, ["init"])
    assert result.exit_code == 2
    result = runner.invoke(gtmpl_cli, ["init", "java", "--url", "https://example.com/x.zip"])
    assert result.exit_code == 2

"""Tests des commandes devispack-preview et devispack-detect."""

import json

import pytest

from devispack.cli import detect, preview
from devispack.templates import get_default_template


@pytest.fixture
def template_file(tmp_path):
    template = get_default_template("Classique Professionnel")
    path = tmp_path / "template.json"
    path.write_text(template.model_dump_json(by_alias=True), encoding="utf-8")
    return path


class TestPreview:
    """Tests de la commande d'aperçu."""

    def test_writes_html_to_stdout(self, template_file, capsys) -> None:
        assert preview([str(template_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("<!DOCTYPE html>")
        assert "Client SPRL" in out

    def test_uses_given_data_and_locale(self, template_file, tmp_path, capsys) -> None:
        data = tmp_path / "data.json"
        data.write_text(json.dumps({"client_name": "Atelier Favre", "total": 1500}))
        assert preview([str(template_file), str(data), "--locale", "fr-CH"]) == 0
        out = capsys.readouterr().out
        assert 'lang="fr-CH"' in out
        assert "Atelier Favre" in out

    def test_writes_output_file(self, template_file, tmp_path, capsys) -> None:
        output = tmp_path / "devis.html"
        assert preview([str(template_file), "-o", str(output)]) == 0
        assert output.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
        assert "fr-BE" in capsys.readouterr().err

    def test_missing_template_file(self, tmp_path, capsys) -> None:
        assert preview([str(tmp_path / "absent.json")]) == 1
        assert "Lecture impossible" in capsys.readouterr().err

    def test_invalid_template(self, tmp_path, capsys) -> None:
        path = tmp_path / "template.json"
        path.write_text(json.dumps({"blocks": []}))
        assert preview([str(path)]) == 1
        assert "Template invalide" in capsys.readouterr().err

    def test_data_must_be_an_object(self, template_file, tmp_path, capsys) -> None:
        data = tmp_path / "data.json"
        data.write_text("[1, 2]")
        assert preview([str(template_file), str(data)]) == 1
        assert "objet JSON" in capsys.readouterr().err


class TestDetect:
    """Tests de la commande de détection."""

    def test_vat_number(self, capsys) -> None:
        assert detect(["--vat", "CHE-123.456.789"]) == 0
        assert capsys.readouterr().out.startswith("fr-CH\t")

    def test_default_is_belgian(self, capsys) -> None:
        assert detect([]) == 0
        out = capsys.readouterr().out
        assert out.startswith("fr-BE\t")
        assert "EUR" in out

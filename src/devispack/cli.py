"""Points d'entrée CLI pour devispack.

Usage:
    devispack-preview template.json [data.json] [--locale fr-FR] [-o devis.html]
    devispack-detect [--vat BE0123456789] [--postal-code 1000] [--country BE] [--browser fr-BE]
"""

import argparse
import json
import sys

from pydantic import ValidationError

from devispack.locales.detection import detect_locale
from devispack.locales.registry import get_locale_pack
from devispack.models.template import DocumentTemplate
from devispack.templates.renderer import HTMLRenderer
from devispack.templates.variables import example_data


def _load_json(path: str) -> object:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def preview(argv: list[str] | None = None) -> int:
    """Point d'entrée pour la commande `devispack-preview`."""
    parser = argparse.ArgumentParser(
        prog="devispack-preview",
        description="Rend un template de document en HTML.",
    )
    parser.add_argument("template", help="Fichier JSON du template")
    parser.add_argument(
        "data",
        nargs="?",
        help="Fichier JSON des données (exemples du catalogue si absent)",
    )
    parser.add_argument("--locale", help="Locale : fr-BE, fr-FR ou fr-CH")
    parser.add_argument("-o", "--output", help="Fichier HTML de sortie (sinon stdout)")
    args = parser.parse_args(argv)

    try:
        template = DocumentTemplate.model_validate(_load_json(args.template))
        data = _load_json(args.data) if args.data else example_data()
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Lecture impossible : {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"Template invalide : {exc}", file=sys.stderr)
        return 1

    if not isinstance(data, dict):
        print("Les données doivent être un objet JSON.", file=sys.stderr)
        return 1

    result = HTMLRenderer().render(template, data, locale=args.locale)
    if args.output:
        result.save(args.output)
        print(f"Aperçu ({result.locale}) enregistré dans {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(result.html)
    return 0


def detect(argv: list[str] | None = None) -> int:
    """Point d'entrée pour la commande `devispack-detect`."""
    parser = argparse.ArgumentParser(
        prog="devispack-detect",
        description="Détecte la locale d'un client à partir d'indices.",
    )
    parser.add_argument("--vat", help="Numéro de TVA ou IDE")
    parser.add_argument("--postal-code", help="Code postal")
    parser.add_argument("--country", help="Pays (code ou nom)")
    parser.add_argument("--browser", help="En-tête Accept-Language")
    args = parser.parse_args(argv)

    code = detect_locale(
        vat_number=args.vat,
        postal_code=args.postal_code,
        country=args.country,
        browser_locale=args.browser,
    )
    pack = get_locale_pack(code)
    print(f"{code.value}\t{pack.flag} {pack.name}\t{pack.currency.code}\tTVA {pack.tax.standard} %")
    return 0


if __name__ == "__main__":
    sys.exit(preview())

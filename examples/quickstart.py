"""Quickstart example for i18nstore.

Writes a small resource tree to a temporary directory, loads it with a
Translator and resolves keys through the language and namespace fallback
chains.
"""

import json
import tempfile
from pathlib import Path

from i18nstore import Translator, TranslatorConfig

RESOURCES = {
    "locales/en/default.json": {"greeting": "Hello", "name": {"first": "Ada"}},
    "locales/en/errors.json": {"required": "This field is required"},
    "locales/fr/default.json": {"greeting": "Bonjour"},
    "locales/fr/errors.json": {"required": "Ce champ est obligatoire"},
}

with tempfile.TemporaryDirectory() as tmp:
    for relative, content in RESOURCES.items():
        path = Path(tmp, relative)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(content, ensure_ascii=False), encoding="utf-8")

    translator = Translator(TranslatorConfig(base_dir=tmp))

    # Example 1: Requested language, then fallback
    print("=" * 50)
    print("Example 1: Language Fallback")
    print("=" * 50)
    print("English:", translator.translate("greeting", lang="en"))
    # Output: English: Hello
    print("French (Canada):", translator.translate("greeting", lang="fr-CA"))
    # Output: French (Canada): Bonjour
    print("Default fallback:", translator.translate("greeting"))
    # Output: Default fallback: Hello

    # Example 2: Namespaces
    print("\n" + "=" * 50)
    print("Example 2: Namespaces")
    print("=" * 50)
    print(translator.translate("required", lang="fr", namespace="errors"))
    # Output: Ce champ est obligatoire

    # Example 3: Nested keys and missing keys
    print("\n" + "=" * 50)
    print("Example 3: Nested and Missing Keys")
    print("=" * 50)
    print(translator.translate("name.first", lang="fr"))
    # Output: Ada (from the en fallback)
    print(translator.translate(["title.short", "title"]))
    # Output: title.short
    print(translator.translate("title", default="Untitled"))
    # Output: Untitled

    # Example 4: Candidate chains
    print("\n" + "=" * 50)
    print("Example 4: Candidate Chains")
    print("=" * 50)
    print(translator.get_languages(["en-GB", "en-US"]))
    # Output: ['en-GB', 'en', 'en-US']
    print(translator.get_namespaces("errors"))
    # Output: ['errors', 'default']

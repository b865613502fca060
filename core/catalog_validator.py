"""Batch validation of the _data directory.

Site catalogs are checked entry by entry for required and supported fields,
known availability values and language codes, and alphabetical order.
Translation files must hold exactly the supported keys, in order. The first
violation stops the run with its exit code.
"""
import json
import re
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import List

class ExitCode(IntEnum):
    SUCCESS = 0
    PARSE_FAILED = 1
    UNSORTED = 2
    MISSING_URL = 3
    MISSING_AVAILABILITY = 4
    MISSING_DOMAINS = 5
    MISSING_LANGUAGE_KEYS = 6
    MISSING_NAME = 7
    UNEXPECTED_AVAILABILITY = 8
    UNEXPECTED_LANGUAGE = 9
    UNEXPECTED_LANGUAGE_KEY = 10
    UNSUPPORTED_FIELD = 11
    UNEXPECTED_NOTES = 12

class CatalogValidationError(Exception):
    def __init__(self, exit_code: ExitCode, message: str):
        super().__init__(message)
        self.exit_code = exit_code
        self.message = message

@dataclass(frozen=True)
class ValidationRules:
    availability_values: List[str]
    entry_keys: List[str]
    language_keys: List[str]
    languages: List[str]

    @classmethod
    def from_settings(cls, settings, languages):
        return cls(
            availability_values=list(settings.availability_values),
            entry_keys=list(settings.entry_keys),
            language_keys=list(settings.language_keys),
            languages=list(languages),
        )

def supported_languages(translations_dir) -> List[str]:
    """Language codes, one per translation file."""
    return sorted(path.stem for path in Path(translations_dir).glob("*.json"))

def transformed_name(entry) -> str:
    """Sort key of a site entry: lower-cased, without a leading 'the'."""
    return re.sub(r"^the\s+", "", str(entry["name"]).lower())

def _check_accepted_keys(entry, rules):
    for key in entry:
        if key.startswith("url_") or key.startswith("notes_"):
            continue
        if key not in rules.entry_keys:
            raise CatalogValidationError(
                ExitCode.UNSUPPORTED_FIELD,
                f"Entry '{entry['name']}' has unsupported field: '{key}'.\n"
                f"Use one of the supported fields:\n\t{rules.entry_keys}",
            )

def _require_field(entry, field, exit_code):
    if field not in entry:
        raise CatalogValidationError(exit_code, f"Entry '{entry['name']}' has no '{field}' field")

def _check_localized(entry, prefix, exit_code, label, rules):
    for key in entry:
        if key.startswith(prefix) and key[len(prefix):] not in rules.languages:
            raise CatalogValidationError(
                exit_code,
                f"Entry '{entry['name']}' has unrecognized {label}: '{key}'.\n"
                f"Use one of the supported languages:\n\t{rules.languages}",
            )

def validate_site_entry(entry, index, rules: ValidationRules):
    if not isinstance(entry, dict) or "name" not in entry:
        raise CatalogValidationError(ExitCode.MISSING_NAME, f"Entry {index} has no 'name' field")
    _check_accepted_keys(entry, rules)
    _require_field(entry, "availability", ExitCode.MISSING_AVAILABILITY)
    _require_field(entry, "names", ExitCode.MISSING_DOMAINS)
    availability = entry["availability"]
    if availability not in rules.availability_values:
        raise CatalogValidationError(
            ExitCode.UNEXPECTED_AVAILABILITY,
            f"Entry '{entry['name']}' has unexpected 'availability' field: '{availability}'.\n"
            f"Use one of the supported availability values:\n\t{rules.availability_values}",
        )
    _check_localized(entry, "url_", ExitCode.UNEXPECTED_LANGUAGE, "language code", rules)
    _check_localized(entry, "notes_", ExitCode.UNEXPECTED_NOTES, "notes code", rules)

def _check_order(path, previous, current):
    if previous > current:
        raise CatalogValidationError(
            ExitCode.UNSORTED,
            f"Sorting error in {path}\n"
            f"Keys must be in alphanumeric order. {previous} needs to come after {current}",
        )

def validate_sites(data, path, rules: ValidationRules):
    if not isinstance(data, list):
        raise CatalogValidationError(ExitCode.PARSE_FAILED, f"{path}: expected a JSON array of site entries")
    previous = None
    for index, entry in enumerate(data):
        validate_site_entry(entry, index, rules)
        name = transformed_name(entry)
        if previous is not None:
            _check_order(path, previous, name)
        previous = name

def validate_translation(data, path, rules: ValidationRules):
    if not isinstance(data, dict):
        raise CatalogValidationError(ExitCode.PARSE_FAILED, f"{path}: expected a JSON object of translations")
    keys = []
    for key in data:
        if key not in rules.language_keys:
            raise CatalogValidationError(ExitCode.UNEXPECTED_LANGUAGE_KEY, f"Invalid key '{key}' for file '{path}'")
        if keys:
            _check_order(path, keys[-1], key)
        keys.append(key)
    if keys != list(rules.language_keys):
        missing = [key for key in rules.language_keys if key not in keys]
        raise CatalogValidationError(
            ExitCode.MISSING_LANGUAGE_KEYS,
            f"Missing language keys in '{path}': '{missing}'",
        )

def validate_file(path, rules: ValidationRules):
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogValidationError(ExitCode.PARSE_FAILED, f"JSON parsing error encountered in {path}: {e}") from e
    if "sites.json" in path.name:
        validate_sites(data, path, rules)
    else:
        validate_translation(data, path, rules)

def validate_data_dir(data_dir, rules: ValidationRules):
    """Validate every file below data_dir; returns the number of files checked."""
    files = sorted(path for path in Path(data_dir).rglob("*") if path.is_file())
    for path in files:
        validate_file(path, rules)
    return len(files)

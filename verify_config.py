#!/usr/bin/env python3
"""Simple script to verify config.example.yaml structure without importing tuneit."""

from pathlib import Path

import yaml

MAPPING_KEYS = ("currency_symbols", "currency_words", "display_symbols", "period_keywords")
LIST_KEYS = ("currency_codes", "missing_value_labels")


def verify_config_structure(config_file: Path = Path("config.example.yaml")) -> bool:
    """Verify config.example.yaml has the expected structure."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        print(f"✗ Failed to parse {config_file}: {e}")
        return False

    errors = []

    if not isinstance(config, dict):
        errors.append("Top level must be a mapping")
        config = {}

    salary = config.get("salary", {})
    if not isinstance(salary, dict):
        errors.append("'salary' must be a dictionary")
        salary = {}

    for key in MAPPING_KEYS:
        if key in salary and not isinstance(salary[key], dict):
            errors.append(f"'salary.{key}' must be a dictionary")
    for key in LIST_KEYS:
        if key in salary and not isinstance(salary[key], list):
            errors.append(f"'salary.{key}' must be a list")

    # Every mapped code must be listed in currency_codes
    codes = {str(code).upper() for code in salary.get("currency_codes") or []}
    if codes:
        mapped = list((salary.get("currency_symbols") or {}).values())
        mapped += list((salary.get("currency_words") or {}).values())
        mapped += list((salary.get("display_symbols") or {}).keys())
        for code in sorted({str(code).upper() for code in mapped} - codes):
            errors.append(f"Currency code {code} is mapped but missing from currency_codes")

    for period, keywords in (salary.get("period_keywords") or {}).items():
        if not isinstance(keywords, list):
            errors.append(f"'salary.period_keywords.{period}' must be a list")

    logging_config = config.get("logging", {})
    if not isinstance(logging_config, dict):
        errors.append("'logging' must be a dictionary")
    elif logging_config.get("format", "key-value") not in ("json", "key-value"):
        errors.append("'logging.format' must be 'json' or 'key-value'")

    if errors:
        print(f"✗ {config_file} validation failed:")
        for error in errors:
            print(f"  - {error}")
        return False

    print(f"✓ {config_file} structure is valid")
    print(f"  - {len(salary.get('currency_symbols') or {})} currency symbols")
    print(f"  - {len(codes)} currency codes")
    print(f"  - {len(salary.get('period_keywords') or {})} pay periods")
    return True


if __name__ == "__main__":
    import sys
    success = verify_config_structure()
    sys.exit(0 if success else 1)

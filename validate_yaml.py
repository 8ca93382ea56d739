#!/usr/bin/env python3
"""Validate vehicle YAML files against the schema."""
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from jsonschema import validate, ValidationError


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def check_category_refs(data: dict) -> list[str]:
    """Report service categoryId values missing from the categories catalog."""
    known = {str(key) for key in (data.get("categories") or {})}
    errors = []
    for i, service in enumerate(data.get("services") or []):
        category_id = service.get("categoryId")
        if category_id is not None and str(category_id) not in known:
            errors.append(f"Unknown categoryId {category_id!r} at path: services.{i}")
    return errors


def validate_vehicle_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single vehicle YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data, schema=schema)
        errors.extend(check_category_refs(data))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv: Optional[List[str]] = None):
    """Validate all vehicle YAML files in a directory (default: vehicles/)."""
    argv = sys.argv[1:] if argv is None else argv
    schema = load_schema()
    vehicles_dir = Path(argv[0]) if argv else Path(__file__).parent / "vehicles"

    if not vehicles_dir.exists():
        print(f"Error: vehicles directory not found: {vehicles_dir}")
        return 1

    yaml_files = list(vehicles_dir.glob("*.yaml")) + list(vehicles_dir.glob("*.yml"))

    if not yaml_files:
        print(f"Warning: No YAML files found in {vehicles_dir}")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = validate_vehicle_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())

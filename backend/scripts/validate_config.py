"""
Script to validate a checklist config and print what counts toward progress
Run: python -m scripts.validate_config [path/to/config.json]
Without a path the stored (or default) config is checked.
"""
import json
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from handover.domain.enums import ChecklistKind
from handover.domain.errors import ConfigValidationError
from handover.engine.field_flattener import FieldFlattener
from handover.repositories.settings_repo import SettingsRepository
from handover.services.config_service import ConfigService


def describe(config, catalog_ids):
    flattener = FieldFlattener()

    for kind in ChecklistKind:
        fields = flattener.flatten(config.fields_for(kind))
        required = [f for f in fields if f.is_required]

        print("=" * 60)
        print(f"{kind.value.upper()} CHECKLIST: {len(fields)} fields, {len(required)} count toward progress")
        print("=" * 60)

        for field in fields:
            mark = "*" if field.is_required else "o"
            extras = []
            if field.field.uses_integrations:
                extras.append("integrations")
            if field.field.has_version:
                extras.append("versioned")
            if field.field.has_status:
                extras.append("status")
            suffix = f"  [{', '.join(extras)}]" if extras else ""
            print(f"   {mark} {field.path} ({field.type.value}){suffix}")

        empty_groups = [f.id for f in config.fields_for(kind) if f.is_group and not f.fields]
        if empty_groups:
            print(f"   ! groups without sub-fields: {', '.join(empty_groups)}")
        print()

    print(f"Integrations catalog: {len(catalog_ids)} entries")


def main():
    settings_repo = SettingsRepository()
    service = ConfigService(settings_repo)

    if len(sys.argv) > 1:
        with open(sys.argv[1], encoding="utf-8") as fh:
            raw = json.load(fh)
        try:
            config = service.validate_config(raw)
        except ConfigValidationError as e:
            print(f"[FAIL] {e.message} {e.details or ''}")
            sys.exit(1)
        print(f"[OK] {sys.argv[1]} is a valid config (version {config.version})\n")
    else:
        config = service.get_config()
        print(f"Checking active config (version {config.version})\n")

    describe(config, [i.id for i in service.get_integrations()])


if __name__ == "__main__":
    main()

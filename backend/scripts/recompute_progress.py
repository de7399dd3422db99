"""
Recompute stored progress for every project against the active config.
Run after editing the checklist config so list views stop showing stale
percentages.
Run: python -m scripts.recompute_progress [--dry-run]
"""
import argparse
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from handover.repositories.project_repo import ProjectRepository
from handover.repositories.settings_repo import SettingsRepository
from handover.services.progress_service import ProgressService


def main():
    parser = argparse.ArgumentParser(description="Recompute project progress")
    parser.add_argument("--dry-run", action="store_true", help="Print changes without writing them")
    args = parser.parse_args()

    service = ProgressService(ProjectRepository(), SettingsRepository())

    if not args.dry_run:
        count = service.refresh_all()
        print(f"[OK] Refreshed progress for {count} projects")
        return

    config = service.settings_repo.get_checklist_config()
    catalog = service.settings_repo.get_integrations()
    changed = 0
    for project in service.project_repo.list_all():
        stored = project.get("progress") or {}
        fresh = service.compute_progress(project, config, catalog).model_dump()
        if stored != fresh:
            changed += 1
            print(f"{project['project_id']}: {stored} -> {fresh}")
    print(f"{changed} projects would change")


if __name__ == "__main__":
    main()

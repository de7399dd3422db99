"""
Seed Data Script - Stores the default checklist config, the integrations
catalog and a sample project for local testing
Run: python -m scripts.seed_data
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from handover.config.defaults import DEFAULT_CHECKLIST_CONFIG
from handover.domain.enums import ChecklistKind
from handover.domain.models import ChecklistConfig
from handover.repositories.mongo_client import SETTINGS, get_collection, create_indexes
from handover.repositories.settings_repo import SettingsRepository
from handover.services.project_service import ProjectService
from handover.services.progress_service import ProgressService


def seed_settings(settings_repo: SettingsRepository):
    """Store the default config and the bundled integrations unless already present"""
    settings_col = get_collection(SETTINGS)

    if settings_col.count_documents({"setting_id": "checklist"}) == 0:
        settings_repo.save_checklist_config(ChecklistConfig.model_validate(DEFAULT_CHECKLIST_CONFIG))
        print("Stored default checklist config")
    else:
        print("Checklist config already stored. Skipping.")

    if settings_col.count_documents({"setting_id": "integrations"}) == 0:
        integrations = settings_repo.get_integrations()
        if integrations:
            settings_repo.save_integrations(integrations)
            print(f"Stored {len(integrations)} integrations")
        else:
            print("No integrations seed file found. Skipping.")
    else:
        print("Integrations already stored. Skipping.")


def create_sample_project(settings_repo: SettingsRepository):
    """Create a sample project with a partly filled sales checklist"""
    if get_collection("projects").count_documents({}) > 0:
        print("Database already has projects. Skipping sample project.")
        return

    project_service = ProjectService(settings_repo=settings_repo)
    project = project_service.create_project({
        "brand_name": "Sample Brand",
        "store_url_myshopify": "sample-brand.myshopify.com",
        "store_public_url": "https://sample-brand.example",
        "release_type": "fresh",
        "poc": {"name": "Alex Doe", "email": "alex@sample-brand.example"},
    })

    integration_ids = [i.id for i in settings_repo.get_integrations()[:2]]
    sales = {
        "brandName": "Sample Brand",
        "storeUrlMyShopify": "sample-brand.myshopify.com",
        "releaseType": "Fresh",
        "integrations": {"integrations": integration_ids},
    }
    snapshot = ProgressService(project_service.project_repo, settings_repo).save_checklist(
        project["project_id"], ChecklistKind.SALES, sales
    )
    print(f"Created project: {project['project_id']} (sales {snapshot.sales_completion}%)")


def main():
    print("=== Seeding database ===")
    print("-" * 40)
    
    # Create indexes first
    create_indexes()
    
    settings_repo = SettingsRepository()
    seed_settings(settings_repo)
    create_sample_project(settings_repo)
    
    print("-" * 40)
    print("Done!")


if __name__ == "__main__":
    main()

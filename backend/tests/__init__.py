"""
Handover Ops test suite

    conftest.py              sample checklist config, catalog, in-memory repositories
    unit/test_engine/        flattener, evaluator, gate, aggregator, reconciler, report
    unit/test_services/      services over the in-memory repositories
    unit/test_repositories/  repositories over fake pymongo collections
    integration/test_api/    routes through FastAPI's TestClient

Run from the repository root with `pytest`; no MongoDB instance is needed.
"""

"""API endpoint tests (TestClient with overridden services)"""

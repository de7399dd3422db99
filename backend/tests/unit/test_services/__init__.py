"""Service layer tests (in-memory repositories)"""

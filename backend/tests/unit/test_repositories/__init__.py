"""Repository tests (fake pymongo collections)"""

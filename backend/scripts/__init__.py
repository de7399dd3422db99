"""
Backend Scripts Module

Maintenance scripts for the handover database.

Available scripts:
    - seed_data.py: Stores the default config, integrations and a sample project
    - recompute_progress.py: Refreshes stored progress after a config change
    - validate_config.py: Validates a config file and lists counted fields
    
Usage:
    python -m scripts.seed_data
"""

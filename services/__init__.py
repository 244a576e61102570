"""
services/ - Business Logic Layer
================================
CRUD orchestration per record kind, the pure derived views (views.py,
stats.py) and the AI / calendar integrations. Handlers call services;
services call repositories.
"""

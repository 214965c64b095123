"""Infrastructure layer: workspace, platform state store, and templates.

This layer depends on stdlib and third-party libs (SQLAlchemy, Jinja2).
It must never import from services, commands, or output.
The service layer bridges between domain models and infrastructure.
"""

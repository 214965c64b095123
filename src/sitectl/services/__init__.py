"""Service layer: business logic returning ServiceResult.

Services may import from domain, config, plugins, and infrastructure.
They must never import from commands or output.
"""

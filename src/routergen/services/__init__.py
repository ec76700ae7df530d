"""Service layer — pipeline stages and the ServiceResult contract.

Services may import from domain, config, and infrastructure layers.
They must never import from commands or output.
"""

"""Intern Portal package.

Feature modules (profiles, storage, presentations) follow the same layering:
plain dataclass models, Protocol repositories, services, and a thin Flask
controller layer on top.
"""

"""Domain layer for otjlog application.

Services are imported from their modules (e.g. ``otjlog.domain.journal``)
so that the store layer can import entities without loading services.
"""

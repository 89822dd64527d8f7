"""Domain layer for bankdedupe.

Services live in their own modules (``bankdedupe.domain.dedupe`` and
friends); nothing is imported here so the database layer can import
``bankdedupe.domain.entities`` without pulling the services in.
"""

"""Training session lifecycle service; one product per session."""
from __future__ import annotations

from catalog.db import models, schemas
from catalog.services.orchestrator import FieldTarget, LifecycleOrchestrator


class TrainingSessionService(LifecycleOrchestrator):
    model = models.TrainingSession
    entity_section = "training_session"
    entity_create_fields = frozenset({"name", "short_description", "duration_minutes", "format"})
    update_fields = {
        "name": FieldTarget("training_session", "name"),
        "short_description": FieldTarget("training_session", "short_description"),
        "long_description": FieldTarget("training_session", "long_description"),
        "duration_minutes": FieldTarget("training_session", "duration_minutes"),
        "format": FieldTarget("training_session", "format"),
        "tags": FieldTarget("training_session", "tags"),
        "price": FieldTarget("product", "price"),
    }

    create_schema = schemas.TrainingSessionCreate
    update_schema = schemas.TrainingSessionUpdate
    record_schema = schemas.TrainingSession
    details_schema = schemas.TrainingSessionDetails
    create_result_schema = schemas.TrainingSessionCreateResult

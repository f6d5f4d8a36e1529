"""Physical good lifecycle service; one product per good."""
from __future__ import annotations

from catalog.db import models, schemas
from catalog.services.orchestrator import FieldTarget, LifecycleOrchestrator


class PhysicalGoodService(LifecycleOrchestrator):
    model = models.PhysicalGood
    entity_section = "physical_good"
    entity_create_fields = frozenset({"name", "short_description", "amount", "shipping_required"})
    update_fields = {
        "name": FieldTarget("physical_good", "name"),
        "short_description": FieldTarget("physical_good", "short_description"),
        "long_description": FieldTarget("physical_good", "long_description"),
        "amount": FieldTarget("physical_good", "amount"),
        "shipping_required": FieldTarget("physical_good", "shipping_required"),
        "tags": FieldTarget("physical_good", "tags"),
        "price": FieldTarget("product", "price"),
    }

    create_schema = schemas.PhysicalGoodCreate
    update_schema = schemas.PhysicalGoodUpdate
    record_schema = schemas.PhysicalGood
    details_schema = schemas.PhysicalGoodDetails
    create_result_schema = schemas.PhysicalGoodCreateResult

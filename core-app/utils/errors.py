"""
Error taxonomy for domain operations.

Every error carries the HTTP status the API layer answers with, so routes can
let them propagate to the handlers in ``utils.error_handlers``.
"""
from typing import Optional


class InventoryError(Exception):
    """Base class for all domain errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {'error': self.message}


class ValidationError(InventoryError):
    """Input or enum value rejected."""

    status_code = 400

    def __init__(self, message: str, fields: Optional[dict] = None):
        super().__init__(message)
        self.fields = fields or {}

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.fields:
            data['fields'] = self.fields
        return data


class EntityNotFound(InventoryError):
    """A lookup failed before anything was mutated."""

    status_code = 404

    def __init__(self, entity: str, entity_id):
        super().__init__(f'{entity} {entity_id} not found')
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransition(InventoryError):
    """A lifecycle precondition does not hold."""

    status_code = 409


class EntityInUse(InventoryError):
    """Delete refused because other rows still reference the entity."""

    status_code = 409


class StoreError(InventoryError):
    """A store operation failed."""

    status_code = 500


class WorkflowAborted(StoreError):
    """A store error hit a multi-step workflow; all of its writes were rolled back."""

    def __init__(self, workflow: str, cause: Optional[BaseException] = None):
        super().__init__(f'{workflow} failed and was rolled back')
        self.workflow = workflow
        self.cause = cause

"""
Bulk Action Service - SEB Server Admin Backend

Runs bulk actions through the registered supports and collects the outcome
into an EntityProcessingReport.

Features:
- Source validation, rejected sources are reported as errors
- Dependency collection up to a fixed point
- Ordered processing, one savepoint per entity
- One activity log entry per processed entity

Author: SEB Server Development Team
Version: 1.0.0
"""

import logging
from typing import List

from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from core.accounts.activity import UserActivityLogService, serialize_entity
from core.entities import EntityKey, EntityProcessingReport, EntityType, ErrorEntry
from core.exceptions import APIMessageException, ErrorMessage

from .actions import (
    PROCESSING_ORDER,
    BulkAction,
    BulkActionType,
    get_bulk_action_support,
    get_bulk_action_supports,
)

logger = logging.getLogger(__name__)


class BulkActionService:
    def __init__(self, user):
        self.user = user
        self.activity_log = UserActivityLogService(user)

    def create_report(self, bulk_action: BulkAction) -> EntityProcessingReport:
        """
        Processes the bulk action and returns its report.

        Args:
            bulk_action: Action with its source keys

        Returns:
            EntityProcessingReport with sources, processed keys and errors
        """
        self._validate_sources(bulk_action)
        if bulk_action.type is not BulkActionType.ACTIVATE:
            self._collect_dependencies(bulk_action)

        for entity_type in self._processing_types(bulk_action):
            for key in bulk_action.keys_of_type(entity_type):
                self._process_key(bulk_action, key)

        logger.info(
            "Bulk action %s on %s by %s: %d processed, %d errors",
            bulk_action.type.name,
            bulk_action.source_entity_type,
            getattr(self.user, "username", None),
            len(bulk_action.results),
            len(bulk_action.errors),
        )
        return EntityProcessingReport(
            source=set(bulk_action.sources),
            results=set(bulk_action.results),
            errors=list(bulk_action.errors),
        )

    def _validate_sources(self, bulk_action: BulkAction) -> None:
        for key in sorted(bulk_action.sources, key=lambda k: k.model_id):
            support = get_bulk_action_support(key.entity_type)
            if support is None or bulk_action.type not in support.supported_actions:
                bulk_action.rejected.add(key)
                bulk_action.errors.append(
                    ErrorEntry(
                        key,
                        ErrorMessage.UNSUPPORTED_OPERATION.of(
                            f"Bulk action {bulk_action.type.name} not supported for {key.entity_type}"
                        ),
                    )
                )
                continue
            try:
                support.validate(bulk_action.type, key, self.user)
            except APIMessageException as error:
                bulk_action.rejected.add(key)
                bulk_action.errors.append(ErrorEntry(key, error.messages[0]))

    def _collect_dependencies(self, bulk_action: BulkAction) -> None:
        while True:
            found = set()
            for support in get_bulk_action_supports():
                if bulk_action.type in support.supported_actions:
                    found |= support.get_dependencies(bulk_action)
            new_keys = found - bulk_action.all_keys - bulk_action.rejected
            if not new_keys:
                return
            bulk_action.dependencies |= new_keys

    @staticmethod
    def _processing_types(bulk_action: BulkAction) -> List[EntityType]:
        order = list(PROCESSING_ORDER[bulk_action.type])
        for key in bulk_action.all_keys:
            if key.entity_type not in order:
                order.append(key.entity_type)
        return order

    def _process_key(self, bulk_action: BulkAction, key: EntityKey) -> None:
        support = get_bulk_action_support(key.entity_type)
        try:
            with transaction.atomic():
                message = None
                if bulk_action.type is BulkActionType.HARD_DELETE:
                    entity = support.load(key)
                    if entity is not None:
                        message = serialize_entity(entity)
                entity = support.process(bulk_action.type, key, self.user)
                if entity is not None:
                    message = serialize_entity(entity)
                self.activity_log.log_key(bulk_action.type.activity_type, key, message)
            bulk_action.results.add(key)
        except APIMessageException as error:
            bulk_action.errors.append(ErrorEntry(key, error.messages[0]))
        except ObjectDoesNotExist as error:
            bulk_action.errors.append(
                ErrorEntry(key, ErrorMessage.RESOURCE_NOT_FOUND.of(str(error), key.model_id))
            )
        except (IntegrityError, ProtectedError) as error:
            logger.warning("Bulk action %s failed for %s: %s", bulk_action.type.name, key, error)
            bulk_action.errors.append(
                ErrorEntry(key, ErrorMessage.INTEGRITY_VALIDATION.of(str(error), key.model_id))
            )

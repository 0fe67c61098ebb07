"""Negative keyword writes."""

import logging
from collections.abc import Iterable

from crossnegatives.core.exceptions import APIError
from crossnegatives.data_providers.base import AdsPlatform
from crossnegatives.models.entity import Entity
from crossnegatives.models.record import RunContext, WriteFailure

logger = logging.getLogger(__name__)


class NegativeWriter:
    """Write negative keywords to entities, one call per keyword.

    A refused keyword is logged and recorded on the run context; the
    remaining keywords are still attempted.
    """

    def __init__(self, platform: AdsPlatform, dry_run: bool = False):
        self.platform = platform
        self.dry_run = dry_run

    def apply(
        self, context: RunContext, entity: Entity, literals: Iterable[str]
    ) -> int:
        """Add each literal to ``entity`` as a negative keyword.

        Returns:
            Number of negatives added (or that would be added in a dry run)
        """
        added = 0
        for literal in literals:
            context.attempted += 1
            extra = {
                "run_id": context.run_id,
                "entity": entity.descriptor,
                "negative_keyword": literal,
            }

            if self.dry_run:
                logger.info(
                    f"[DRY RUN] Would add {literal} to {entity.descriptor}", extra=extra
                )
            else:
                try:
                    self.platform.add_negative_keyword(entity, literal)
                except APIError as e:
                    logger.warning(
                        f"Could not add {literal} to {entity.descriptor}: {e}",
                        extra=extra,
                    )
                    context.failures.append(
                        WriteFailure(
                            literal=literal, entity=entity.descriptor, error=str(e)
                        )
                    )
                    continue
                logger.info(f"Added {literal} to {entity.descriptor}", extra=extra)

            context.record.add(literal, entity.descriptor)
            added += 1

        return added

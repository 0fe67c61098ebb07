"""Cross-negative propagation.

Every eligible entity's top keywords are added as negatives to each of its
siblings: all other eligible campaigns at campaign level, or the other ad
groups of the same campaign at ad group level. The number of writes grows
with n * (n - 1) for n siblings, bounded only by ``max_negative_keywords``
and the campaign filters.
"""

import logging
from collections.abc import Sequence
from contextlib import nullcontext

from crossnegatives.core.config import Settings
from crossnegatives.data_providers.base import AdsPlatform
from crossnegatives.logging.handlers import capture_run_log
from crossnegatives.models.base import utc_now
from crossnegatives.models.entity import Campaign, Entity
from crossnegatives.models.keyword import Keyword
from crossnegatives.models.record import RunContext
from crossnegatives.propagation.extractor import extract_keywords
from crossnegatives.propagation.formatter import format_negative_keyword
from crossnegatives.propagation.selector import (
    CampaignFilter,
    select_ad_groups,
    select_campaigns,
)
from crossnegatives.propagation.writer import NegativeWriter
from crossnegatives.reporting.exporter import ReportExporter, build_email_body
from crossnegatives.reporting.mailer import SmtpMailer

logger = logging.getLogger(__name__)

# (entity, formatted negatives taken from it)
SourceSet = tuple[Entity, list[str]]


class CrossNegativePropagator:
    """Run one cross-negative batch against an advertising platform."""

    def __init__(
        self,
        platform: AdsPlatform,
        settings: Settings,
        writer: NegativeWriter | None = None,
        exporter: ReportExporter | None = None,
        mailer: SmtpMailer | None = None,
    ):
        self.platform = platform
        self.settings = settings
        self.config = settings.propagator
        self.writer = writer or NegativeWriter(platform, dry_run=self.config.dry_run)
        self.campaign_filter = CampaignFilter.from_lists(
            self.config.include_campaigns, self.config.exclude_campaigns
        )

        report = settings.report
        self.exporter = exporter
        self.mailer = mailer
        if report.spreadsheet_export:
            self.exporter = exporter or ReportExporter(
                output_dir=report.output_dir,
                template_path=report.template_path,
                editors=report.email_list,
            )
            self.mailer = mailer or SmtpMailer(settings.email)

    def run(self) -> RunContext:
        """Apply cross negatives and publish the report when enabled.

        Raises:
            EmailDeliveryError: If the report email cannot be sent; negatives
                written before that point stay in place
        """
        context = RunContext(dry_run=self.writer.dry_run)
        capture = (
            capture_run_log(context.log_lines)
            if self.settings.report.logging_enabled
            else nullcontext()
        )

        with capture:
            logger.info(
                f"Starting cross negatives run {context.run_id}"
                + (" (dry run)" if context.dry_run else ""),
                extra={"run_id": context.run_id},
            )
            campaigns = select_campaigns(self.platform, self.campaign_filter)

            if self.config.campaign_level:
                self.propagate_campaigns(context, campaigns)

            if self.config.ad_group_level:
                for campaign in campaigns:
                    self.propagate_ad_groups(context, campaign)

            context.finished_at = utc_now()
            logger.info(
                f"Finished: {context.added} negatives added, "
                f"{context.failed} failed, {context.skipped} keywords skipped",
                extra={"run_id": context.run_id},
            )

        if self.settings.report.spreadsheet_export:
            self.publish_report(context)

        return context

    def propagate_campaigns(
        self, context: RunContext, campaigns: Sequence[Campaign]
    ) -> None:
        """Cross-apply keywords between all eligible campaigns."""
        sources = [self._source_set(context, campaign) for campaign in campaigns]
        self._cross_apply(context, sources)

    def propagate_ad_groups(self, context: RunContext, campaign: Campaign) -> None:
        """Cross-apply keywords between the ad groups of one campaign."""
        ad_groups = select_ad_groups(self.platform, campaign)
        sources = [self._source_set(context, ad_group) for ad_group in ad_groups]
        self._cross_apply(context, sources)

    def _source_set(self, context: RunContext, entity: Entity) -> SourceSet:
        keywords = extract_keywords(
            self.platform, entity, self.config.max_negative_keywords
        )
        return entity, self._format(context, keywords)

    def _format(self, context: RunContext, keywords: Sequence[Keyword]) -> list[str]:
        literals: list[str] = []
        for keyword in keywords:
            literal = format_negative_keyword(
                keyword, self.config.use_original_match_type
            )
            if literal is None:
                context.skipped += 1
            elif literal not in literals:
                literals.append(literal)
        return literals

    def _cross_apply(self, context: RunContext, sources: list[SourceSet]) -> None:
        targets = [entity for entity, _ in sources]
        planned = sum(len(literals) for _, literals in sources) * max(
            len(targets) - 1, 0
        )
        logger.info(
            f"Cross-applying between {len(targets)} entities: {planned} negatives planned",
            extra={"run_id": context.run_id},
        )
        if planned > self.config.operation_warning_threshold:
            logger.warning(
                f"{planned} planned negative writes exceed the threshold of "
                f"{self.config.operation_warning_threshold}; consider lowering "
                "max_negative_keywords or narrowing the campaign filters",
                extra={"run_id": context.run_id},
            )

        for source, literals in sources:
            if not literals:
                continue
            for target in targets:
                if target is source:
                    continue
                self.writer.apply(context, target, literals)

    def publish_report(self, context: RunContext) -> None:
        """Export the workbook and email it with the run log."""
        report = self.settings.report
        path = self.exporter.export(context)
        context.report_url = path.resolve().as_uri()

        self.mailer.send(
            report.email_list,
            report.email_subject,
            build_email_body(context),
            attachments=[path],
        )

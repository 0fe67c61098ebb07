"""Run report export and delivery."""

from crossnegatives.reporting.exporter import (
    ReportExporter,
    build_email_body,
    build_report_rows,
)
from crossnegatives.reporting.mailer import SmtpMailer

__all__ = [
    "ReportExporter",
    "SmtpMailer",
    "build_email_body",
    "build_report_rows",
]

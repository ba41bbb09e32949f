"""Print one of the enrollment reports."""
from __future__ import annotations

import csv
import logging

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from enrollments.reports import REPORTS

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Run an enrollment report and print its rows"

    def add_arguments(self, parser):
        parser.add_argument("report", choices=sorted(REPORTS), help="Report to run")
        parser.add_argument(
            "--semester",
            default=None,
            help="Semester label for complete-enrollments (default: ENROLLMENT_DEFAULT_SEMESTER)",
        )
        parser.add_argument("--limit", type=int, default=None, help="Row limit for course-rankings")
        parser.add_argument("--csv", action="store_true", help="Write rows as CSV instead of one dict per line")

    def handle(self, *args, **options):
        name = options["report"]
        kwargs = {}
        if name == "complete-enrollments":
            kwargs["semester"] = options["semester"] or settings.ENROLLMENT_DEFAULT_SEMESTER
        elif name == "course-rankings":
            if options["limit"] is not None and options["limit"] < 1:
                raise CommandError("--limit must be a positive integer")
            kwargs["limit"] = options["limit"]

        # one snapshot for the whole report
        with transaction.atomic():
            rows = [dict(row) for row in REPORTS[name](**kwargs)]
        logger.debug("Report %s returned %d rows", name, len(rows))

        if not rows:
            self.stdout.write("No rows.")
            return

        if options["csv"]:
            writer = csv.DictWriter(self.stdout, fieldnames=list(rows[0].keys()), lineterminator="\n")
            writer.writeheader()
            writer.writerows(rows)
            return

        for row in rows:
            self.stdout.write(str(row))

"""Load the sample students, courses and enrollments."""
from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError
from django.db import IntegrityError

from enrollments.seed import load_sample_data


class Command(BaseCommand):
    help = "Seed the sample students, courses and enrollments used by the reports"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete every student, course and enrollment before loading",
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING("Loading sample enrollment data..."))
        try:
            counts = load_sample_data(reset=options["reset"])
        except IntegrityError as exc:
            raise CommandError(f"Sample data conflicts with existing rows: {exc}") from exc

        for table_name, count in counts.items():
            self.stdout.write(f"  {table_name}: {count}")
        self.stdout.write(self.style.SUCCESS("Sample data ready."))

from django.core.management.base import BaseCommand

from images.references import recount_references


class Command(BaseCommand):
    help = "Recompute image reference counts from the current announcement contents."

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only report drifted counts, do not write them",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        drifted = recount_references(dry_run=dry_run)

        for image, stored, actual in drifted:
            self.stdout.write(f"{image.url}: {stored} -> {actual}")

        if not drifted:
            self.stdout.write(self.style.SUCCESS("All image reference counts are correct"))
        elif dry_run:
            self.stdout.write(self.style.WARNING(f"{len(drifted)} image(s) would be corrected"))
        else:
            self.stdout.write(self.style.SUCCESS(f"Corrected {len(drifted)} image(s)"))

"""Management command to create a QR batch with its codes."""

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from pointman.conf import pointman_settings
from pointman.models import QRBatch, QRCode, QRFormat


class Command(BaseCommand):
    help = "Create a QR batch with COUNT single-use codes"

    def add_arguments(self, parser):
        parser.add_argument("--batch-id", required=True)
        parser.add_argument("--points", type=int, required=True)
        parser.add_argument("--count", type=int, required=True)
        parser.add_argument("--url", default="")
        parser.add_argument("--format", default=QRFormat.PNG, choices=QRFormat.values)
        parser.add_argument("--size", default="200x200")
        parser.add_argument(
            "--inactive",
            action="store_true",
            help="Create the batch disabled for redemption",
        )

    def handle(self, *args, **options):
        if options["points"] <= 0:
            raise CommandError("--points must be positive")
        if options["count"] <= 0:
            raise CommandError("--count must be positive")

        batch_id = options["batch_id"].strip()
        if QRBatch.objects.filter(batch_id=batch_id).exists():
            raise CommandError(f"Batch {batch_id!r} already exists")

        batch = QRBatch(
            batch_id=batch_id,
            points=options["points"],
            url=options["url"],
            format=options["format"],
            size=options["size"],
            is_active=not options["inactive"],
        )
        try:
            batch.full_clean()
        except ValidationError as exc:
            raise CommandError(exc.messages[0])

        prefix = pointman_settings.QR_ID_PREFIX
        with transaction.atomic():
            batch.save()
            QRCode.objects.bulk_create(
                QRCode(
                    batch=batch,
                    qr_id=f"{prefix}-{i:06d}",
                    position=i,
                    qr_code_url=f"qr/{batch_id}/{prefix}-{i:06d}.{batch.format}",
                )
                for i in range(1, options["count"] + 1)
            )

        self.stdout.write(
            self.style.SUCCESS(
                f"Created batch {batch_id} with {options['count']} codes "
                f"({options['points']} points each)."
            )
        )

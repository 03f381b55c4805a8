# Generated migration for Customer, QRBatch, QRCode, Scheme and PointTransaction

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import pointman.models.batch


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=200, verbose_name="name")),
                ("city", models.CharField(max_length=100, verbose_name="city")),
                (
                    "username",
                    models.CharField(max_length=150, unique=True, verbose_name="username"),
                ),
                (
                    "phone",
                    models.CharField(
                        max_length=10,
                        unique=True,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^[0-9]{10}$",
                                "Please enter a valid 10-digit phone number",
                            )
                        ],
                        verbose_name="phone",
                    ),
                ),
                (
                    "email",
                    models.EmailField(
                        blank=True,
                        max_length=254,
                        null=True,
                        unique=True,
                        verbose_name="email",
                    ),
                ),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                (
                    "points",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Redeemable points balance",
                        verbose_name="points",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True, db_index=True, verbose_name="created at"
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "customer",
                "verbose_name_plural": "customers",
                "ordering": ["username"],
            },
        ),
        migrations.CreateModel(
            name="QRBatch",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "batch_id",
                    models.CharField(max_length=100, unique=True, verbose_name="batch id"),
                ),
                (
                    "points",
                    models.PositiveIntegerField(
                        help_text="Point value printed on every code of the batch",
                        verbose_name="points",
                    ),
                ),
                ("url", models.CharField(blank=True, max_length=500, verbose_name="url")),
                (
                    "format",
                    models.CharField(
                        choices=[
                            ("png", "PNG"),
                            ("jpg", "JPG"),
                            ("jpeg", "JPEG"),
                            ("svg", "SVG"),
                        ],
                        default="png",
                        max_length=4,
                        verbose_name="format",
                    ),
                ),
                (
                    "size",
                    models.CharField(
                        default="200x200",
                        max_length=20,
                        validators=[pointman.models.batch.validate_square_size],
                        verbose_name="size",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        db_index=True,
                        default=True,
                        help_text="Codes of inactive batches cannot be redeemed",
                        verbose_name="active",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "QR batch",
                "verbose_name_plural": "QR batches",
                "db_table": "pointman_qr_batch",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="QRCode",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("qr_id", models.CharField(max_length=100, verbose_name="QR id")),
                ("position", models.PositiveIntegerField(default=0, verbose_name="position")),
                (
                    "qr_code_url",
                    models.CharField(
                        help_text="Reference to the rendered QR asset",
                        max_length=500,
                        verbose_name="QR image",
                    ),
                ),
                ("is_scanned", models.BooleanField(default=False, verbose_name="scanned")),
                (
                    "scanned_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="scanned at"),
                ),
                (
                    "batch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="codes",
                        to="pointman.qrbatch",
                        verbose_name="batch",
                    ),
                ),
                (
                    "scanned_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="scanned_codes",
                        to="pointman.customer",
                        verbose_name="scanned by",
                    ),
                ),
            ],
            options={
                "verbose_name": "QR code",
                "verbose_name_plural": "QR codes",
                "db_table": "pointman_qr_code",
                "ordering": ["batch", "position"],
            },
        ),
        migrations.CreateModel(
            name="Scheme",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("title", models.CharField(max_length=200, verbose_name="title")),
                (
                    "description",
                    models.TextField(max_length=1000, verbose_name="description"),
                ),
                (
                    "image",
                    models.CharField(
                        blank=True,
                        max_length=500,
                        validators=[
                            django.core.validators.RegexValidator(
                                "(?i)^(https?://|/|\\./|\\.\\./).*\\.(jpg|jpeg|png|gif|webp)$",
                                "Invalid image URL or path format",
                            )
                        ],
                        verbose_name="image",
                    ),
                ),
                (
                    "points_required",
                    models.PositiveIntegerField(verbose_name="points required"),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True, db_index=True, verbose_name="created at"
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "scheme",
                "verbose_name_plural": "schemes",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="PointTransaction",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "transaction_type",
                    models.CharField(
                        choices=[("scan", "QR scan"), ("adjust", "Adjustment")],
                        max_length=20,
                        verbose_name="type",
                    ),
                ),
                (
                    "points",
                    models.IntegerField(
                        help_text="Signed change applied to the balance",
                        verbose_name="points",
                    ),
                ),
                ("balance_after", models.PositiveIntegerField(verbose_name="balance after")),
                ("description", models.CharField(max_length=200, verbose_name="description")),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        help_text="External reference (e.g. qr:BATCH/QRID)",
                        max_length=200,
                        verbose_name="reference",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True, db_index=True, verbose_name="created at"
                    ),
                ),
                (
                    "created_by",
                    models.CharField(blank=True, max_length=150, verbose_name="created by"),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="point_transactions",
                        to="pointman.customer",
                        verbose_name="customer",
                    ),
                ),
            ],
            options={
                "verbose_name": "point transaction",
                "verbose_name_plural": "point transactions",
                "db_table": "pointman_point_transaction",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.AddConstraint(
            model_name="qrcode",
            constraint=models.UniqueConstraint(
                fields=("batch", "qr_id"),
                name="pointman_unique_qr_id_per_batch",
            ),
        ),
        migrations.AddIndex(
            model_name="pointtransaction",
            index=models.Index(
                fields=["customer", "-created_at"],
                name="pointman_tx_cust_created_idx",
            ),
        ),
    ]

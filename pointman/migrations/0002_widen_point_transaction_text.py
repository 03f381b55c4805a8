# Ledger text must fit "QR scan <batch_id>/<qr_id>" with 100-character ids

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("pointman", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="pointtransaction",
            name="description",
            field=models.CharField(max_length=210, verbose_name="description"),
        ),
        migrations.AlterField(
            model_name="pointtransaction",
            name="reference",
            field=models.CharField(
                blank=True,
                help_text="External reference (e.g. qr:BATCH/QRID)",
                max_length=210,
                verbose_name="reference",
            ),
        ),
    ]

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CachedResponse",
            fields=[
                ("identity_hash", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("identity", models.TextField()),
                ("url", models.TextField(blank=True, default="")),
                ("request_body", models.JSONField(blank=True, null=True)),
                ("response_payload", models.JSONField()),
                ("saved_at", models.DateTimeField(db_index=True)),
            ],
            options={
                "verbose_name": "cached response",
                "ordering": ["-saved_at"],
            },
        ),
    ]

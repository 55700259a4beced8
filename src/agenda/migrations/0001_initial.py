import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Meeting",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("title", models.CharField(max_length=200, verbose_name="titre")),
                ("description", models.TextField(blank=True, default="", verbose_name="description")),
                ("meeting_date", models.DateField(db_index=True, verbose_name="date")),
                (
                    "responsible_employee",
                    models.CharField(blank=True, default="", max_length=200, verbose_name="responsable"),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="cree par",
                    ),
                ),
            ],
            options={
                "verbose_name": "reunion",
                "verbose_name_plural": "reunions",
                "ordering": ["meeting_date"],
            },
        ),
        migrations.CreateModel(
            name="MarketingPoster",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("title", models.CharField(max_length=200, verbose_name="titre")),
                ("poster_date", models.DateField(db_index=True, verbose_name="date de publication")),
                ("file_url", models.URLField(blank=True, default="", max_length=500, verbose_name="fichier")),
                (
                    "file_name",
                    models.CharField(blank=True, default="", max_length=255, verbose_name="nom du fichier"),
                ),
                ("file_size", models.PositiveIntegerField(blank=True, null=True, verbose_name="taille (octets)")),
                (
                    "uploaded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="televerse par",
                    ),
                ),
            ],
            options={
                "verbose_name": "affiche marketing",
                "verbose_name_plural": "affiches marketing",
                "ordering": ["poster_date"],
            },
        ),
    ]

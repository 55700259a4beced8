import uuid
from decimal import Decimal

import django.core.validators
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
            name="Client",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("code", models.CharField(max_length=30, unique=True, verbose_name="code client")),
                ("name", models.CharField(max_length=200, verbose_name="nom")),
                ("phone", models.CharField(blank=True, default="", max_length=30, verbose_name="telephone")),
                ("email", models.EmailField(blank=True, default="", max_length=254, verbose_name="e-mail")),
                (
                    "national_id",
                    models.CharField(blank=True, default="", max_length=30, verbose_name="numero d'identite"),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Actif"),
                            ("late", "En retard"),
                            ("suspended", "Suspendu"),
                            ("inactive", "Inactif"),
                        ],
                        db_index=True,
                        default="active",
                        max_length=10,
                        verbose_name="statut",
                    ),
                ),
                ("notes", models.TextField(blank=True, default="", verbose_name="notes")),
                (
                    "assigned_to",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="assigned_clients",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="conseiller",
                    ),
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
                "verbose_name": "client",
                "verbose_name_plural": "clients",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ClientDeposit",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("deposit_number", models.CharField(max_length=30, unique=True, verbose_name="numero de contrat")),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=15,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                        verbose_name="montant",
                    ),
                ),
                ("deposit_date", models.DateField(db_index=True, verbose_name="date du depot")),
                (
                    "profit_rate",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=5,
                        verbose_name="taux de rendement (%)",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Actif"),
                            ("completed", "Termine"),
                            ("cancelled", "Annule"),
                            ("withdrawn", "Retire"),
                        ],
                        db_index=True,
                        default="active",
                        max_length=10,
                        verbose_name="statut",
                    ),
                ),
                ("notes", models.TextField(blank=True, default="", verbose_name="notes")),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="deposits",
                        to="clients.client",
                        verbose_name="client",
                    ),
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
                "verbose_name": "depot",
                "verbose_name_plural": "depots",
                "ordering": ["-deposit_date"],
            },
        ),
        migrations.CreateModel(
            name="WithdrawalSchedule",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("due_date", models.DateField(db_index=True, verbose_name="date d'echeance")),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=15,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                        verbose_name="montant",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("upcoming", "A venir"),
                            ("completed", "Effectue"),
                            ("overdue", "En retard"),
                        ],
                        db_index=True,
                        default="upcoming",
                        max_length=10,
                        verbose_name="statut",
                    ),
                ),
                ("completed_date", models.DateField(blank=True, null=True, verbose_name="date de paiement")),
                ("notes", models.TextField(blank=True, default="", verbose_name="notes")),
                (
                    "deposit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="withdrawal_schedules",
                        to="clients.clientdeposit",
                        verbose_name="depot",
                    ),
                ),
            ],
            options={
                "verbose_name": "echeance de retrait",
                "verbose_name_plural": "echeances de retrait",
                "ordering": ["due_date"],
            },
        ),
    ]

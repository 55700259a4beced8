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
            name="EmployeeTarget",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                (
                    "month",
                    models.CharField(
                        db_index=True,
                        max_length=7,
                        validators=[
                            django.core.validators.RegexValidator(
                                message="Le mois doit etre au format AAAA-MM.",
                                regex="^\\d{4}-(0[1-9]|1[0-2])$",
                            )
                        ],
                        verbose_name="mois",
                    ),
                ),
                (
                    "target_type",
                    models.CharField(
                        choices=[
                            ("calls", "Appels"),
                            ("clients", "Nouveaux clients"),
                            ("deposits", "Depots"),
                            ("amount", "Montant investi"),
                        ],
                        max_length=10,
                        verbose_name="type d'objectif",
                    ),
                ),
                (
                    "target_value",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=15,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="valeur cible",
                    ),
                ),
                (
                    "current_value",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=15,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="valeur actuelle",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "En attente"),
                            ("in_progress", "En cours"),
                            ("achieved", "Atteint"),
                        ],
                        db_index=True,
                        default="pending",
                        editable=False,
                        max_length=12,
                        verbose_name="statut",
                    ),
                ),
                ("notes", models.TextField(blank=True, default="", verbose_name="notes")),
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
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="targets",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="employe",
                    ),
                ),
            ],
            options={
                "verbose_name": "objectif employe",
                "verbose_name_plural": "objectifs employes",
                "ordering": ["-month", "employee"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("employee", "target_type", "month"),
                        name="uniq_employee_target_month",
                    ),
                ],
            },
        ),
    ]

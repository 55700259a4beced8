from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator, RegexValidator
from django.db import models

from core.models import TimeStampedModel

from .engine import compute_target_status, progress_percent

period_validator = RegexValidator(
    regex=r"^\d{4}-(0[1-9]|1[0-2])$",
    message="Le mois doit etre au format AAAA-MM.",
)


class EmployeeTarget(TimeStampedModel):
    """Monthly objective assigned to an employee."""

    class TargetType(models.TextChoices):
        CALLS = "calls", "Appels"
        CLIENTS = "clients", "Nouveaux clients"
        DEPOSITS = "deposits", "Depots"
        AMOUNT = "amount", "Montant investi"

    class Status(models.TextChoices):
        PENDING = "pending", "En attente"
        IN_PROGRESS = "in_progress", "En cours"
        ACHIEVED = "achieved", "Atteint"

    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="targets",
        verbose_name="employe",
    )
    month = models.CharField("mois", max_length=7, validators=[period_validator], db_index=True)
    target_type = models.CharField("type d'objectif", max_length=10, choices=TargetType.choices)
    target_value = models.DecimalField(
        "valeur cible",
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    current_value = models.DecimalField(
        "valeur actuelle",
        max_digits=15,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    status = models.CharField(
        "statut",
        max_length=12,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
        editable=False,
    )
    notes = models.TextField("notes", blank=True, default="")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="cree par",
    )

    class Meta:
        verbose_name = "objectif employe"
        verbose_name_plural = "objectifs employes"
        ordering = ["-month", "employee"]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "target_type", "month"],
                name="uniq_employee_target_month",
            ),
        ]

    def __str__(self):
        return f"{self.employee} - {self.get_target_type_display()} {self.month}"

    def save(self, *args, **kwargs):
        self.status = compute_target_status(self.current_value, self.target_value)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "status" not in update_fields:
            kwargs["update_fields"] = [*update_fields, "status"]
        super().save(*args, **kwargs)

    @property
    def progress(self):
        return progress_percent(self.current_value, self.target_value)

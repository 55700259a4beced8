from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import TimeStampedModel


class EmployeeCommission(TimeStampedModel):
    """Commission owed to an employee for one month of client investments."""

    class Status(models.TextChoices):
        PENDING = "pending", "En attente"
        APPROVED = "approved", "Approuvee"
        PAID = "paid", "Payee"
        CANCELLED = "cancelled", "Annulee"

    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="commissions",
        verbose_name="employe",
    )
    period_month = models.PositiveSmallIntegerField(
        "mois",
        validators=[MinValueValidator(1), MaxValueValidator(12)],
    )
    period_year = models.PositiveSmallIntegerField("annee", validators=[MinValueValidator(2000)])
    total_clients = models.PositiveIntegerField("nombre de clients", default=0)
    total_investments = models.DecimalField(
        "total investi",
        max_digits=15,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    commission_rate = models.DecimalField(
        "taux (%)",
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    commission_amount = models.DecimalField(
        "montant de la commission",
        max_digits=15,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    status = models.CharField(
        "statut",
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="approuvee par",
    )
    approved_at = models.DateTimeField("approuvee le", null=True, blank=True)
    paid_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="payee par",
    )
    paid_at = models.DateTimeField("payee le", null=True, blank=True)
    notes = models.TextField("notes", blank=True, default="")

    class Meta:
        verbose_name = "commission"
        verbose_name_plural = "commissions"
        ordering = ["-period_year", "-period_month"]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "period_month", "period_year"],
                name="uniq_employee_commission_period",
            ),
        ]

    def __str__(self):
        return f"{self.employee} - {self.period_month:02d}/{self.period_year}"

    @property
    def period(self) -> str:
        return f"{self.period_year}-{self.period_month:02d}"

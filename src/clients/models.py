from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from core.models import TimeStampedModel


class Client(TimeStampedModel):
    """An investor followed by the back office."""

    class Status(models.TextChoices):
        ACTIVE = "active", "Actif"
        LATE = "late", "En retard"
        SUSPENDED = "suspended", "Suspendu"
        INACTIVE = "inactive", "Inactif"

    code = models.CharField("code client", max_length=30, unique=True)
    name = models.CharField("nom", max_length=200)
    phone = models.CharField("telephone", max_length=30, blank=True, default="")
    email = models.EmailField("e-mail", blank=True, default="")
    national_id = models.CharField("numero d'identite", max_length=30, blank=True, default="")
    status = models.CharField(
        "statut",
        max_length=10,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_clients",
        verbose_name="conseiller",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="cree par",
    )
    notes = models.TextField("notes", blank=True, default="")

    class Meta:
        verbose_name = "client"
        verbose_name_plural = "clients"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} ({self.code})"


class ClientDeposit(TimeStampedModel):
    """A sum invested by a client; profits are paid out through withdrawal schedules."""

    class Status(models.TextChoices):
        ACTIVE = "active", "Actif"
        COMPLETED = "completed", "Termine"
        CANCELLED = "cancelled", "Annule"
        WITHDRAWN = "withdrawn", "Retire"

    client = models.ForeignKey(
        Client,
        on_delete=models.CASCADE,
        related_name="deposits",
        verbose_name="client",
    )
    deposit_number = models.CharField("numero de contrat", max_length=30, unique=True)
    amount = models.DecimalField(
        "montant",
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    deposit_date = models.DateField("date du depot", db_index=True)
    profit_rate = models.DecimalField(
        "taux de rendement (%)",
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    status = models.CharField(
        "statut",
        max_length=10,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="cree par",
    )
    notes = models.TextField("notes", blank=True, default="")

    class Meta:
        verbose_name = "depot"
        verbose_name_plural = "depots"
        ordering = ["-deposit_date"]

    def __str__(self):
        return f"{self.deposit_number} - {self.amount}"


class WithdrawalSchedule(TimeStampedModel):
    """A payout due to the client on a given date, drawn from one deposit."""

    class Status(models.TextChoices):
        UPCOMING = "upcoming", "A venir"
        COMPLETED = "completed", "Effectue"
        OVERDUE = "overdue", "En retard"

    deposit = models.ForeignKey(
        ClientDeposit,
        on_delete=models.CASCADE,
        related_name="withdrawal_schedules",
        verbose_name="depot",
    )
    due_date = models.DateField("date d'echeance", db_index=True)
    amount = models.DecimalField(
        "montant",
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    status = models.CharField(
        "statut",
        max_length=10,
        choices=Status.choices,
        default=Status.UPCOMING,
        db_index=True,
    )
    completed_date = models.DateField("date de paiement", null=True, blank=True)
    notes = models.TextField("notes", blank=True, default="")

    class Meta:
        verbose_name = "echeance de retrait"
        verbose_name_plural = "echeances de retrait"
        ordering = ["due_date"]

    def __str__(self):
        return f"{self.deposit.deposit_number} - {self.due_date}"

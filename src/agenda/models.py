from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class Meeting(TimeStampedModel):
    """Internal or client meeting shown on the financial calendar."""

    title = models.CharField("titre", max_length=200)
    description = models.TextField("description", blank=True, default="")
    meeting_date = models.DateField("date", db_index=True)
    responsible_employee = models.CharField("responsable", max_length=200, blank=True, default="")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="cree par",
    )

    class Meta:
        verbose_name = "reunion"
        verbose_name_plural = "reunions"
        ordering = ["meeting_date"]

    def __str__(self):
        return f"{self.title} ({self.meeting_date})"


class MarketingPoster(TimeStampedModel):
    """Marketing material scheduled for publication on a given day."""

    title = models.CharField("titre", max_length=200)
    poster_date = models.DateField("date de publication", db_index=True)
    file_url = models.URLField("fichier", max_length=500, blank=True, default="")
    file_name = models.CharField("nom du fichier", max_length=255, blank=True, default="")
    file_size = models.PositiveIntegerField("taille (octets)", null=True, blank=True)
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="televerse par",
    )

    class Meta:
        verbose_name = "affiche marketing"
        verbose_name_plural = "affiches marketing"
        ordering = ["poster_date"]

    def __str__(self):
        return self.title

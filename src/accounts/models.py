import uuid

from django.conf import settings
from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Custom manager for the User model that uses email as the unique identifier."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("L'adresse e-mail est obligatoire.")
        email = self.normalize_email(email)
        extra_fields.setdefault("is_active", True)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("department", User.Department.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Le superutilisateur doit avoir is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Le superutilisateur doit avoir is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Employee account and profile.

    Uses email as the unique identifier. ``date_joined`` is the moment the
    employee profile was created and is what the dashboard compares against
    when computing head-count growth.
    """

    class Department(models.TextChoices):
        ADMIN = "admin", "Administration"
        HR = "hr", "Ressources humaines"
        TELE_SALES = "tele_sales", "Televente"
        FINANCE = "finance", "Finance"
        SUPPORT = "support", "Support"

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        "adresse e-mail",
        unique=True,
        error_messages={
            "unique": "Un utilisateur avec cette adresse e-mail existe deja.",
        },
    )
    first_name = models.CharField("prenom", max_length=150)
    last_name = models.CharField("nom", max_length=150)
    phone = models.CharField("telephone", max_length=30, blank=True, default="")
    department = models.CharField(
        "departement",
        max_length=20,
        choices=Department.choices,
        blank=True,
        default="",
    )
    employee_code = models.CharField(
        "matricule",
        max_length=30,
        unique=True,
        null=True,
        blank=True,
    )
    avatar_url = models.URLField("avatar", blank=True, default="")
    is_active = models.BooleanField("actif", default=True, db_index=True)
    is_staff = models.BooleanField("membre du personnel", default=False)
    date_joined = models.DateTimeField("date d'inscription", default=timezone.now, db_index=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["first_name", "last_name"]

    class Meta:
        verbose_name = "employe"
        verbose_name_plural = "employes"
        ordering = ["last_name", "first_name"]

    def __str__(self):
        return self.get_full_name() or self.email

    def get_full_name(self):
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name

    def get_short_name(self):
        return self.first_name

    # ------------------------------------------------------------------
    # Role helpers
    # ------------------------------------------------------------------

    @property
    def role_codes(self) -> frozenset:
        return frozenset(self.roles.values_list("role", flat=True))

    def has_role(self, *roles) -> bool:
        return self.roles.filter(role__in=roles).exists()

    @property
    def is_admin(self) -> bool:
        return self.is_superuser or self.has_role(UserRole.Role.SUPER_ADMIN, UserRole.Role.ADMIN)


class UserRole(models.Model):
    """Role granted to an employee; kept apart from the profile so it can be audited."""

    class Role(models.TextChoices):
        SUPER_ADMIN = "super_admin", "Super administrateur"
        ADMIN = "admin", "Administrateur"
        HR_MANAGER = "hr_manager", "Responsable RH"
        HR_OFFICER = "hr_officer", "Charge RH"
        TELE_SALES = "tele_sales", "Televendeur"
        ACCOUNTANT = "accountant", "Comptable"
        SUPPORT = "support", "Support"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="roles",
        verbose_name="employe",
    )
    role = models.CharField("role", max_length=20, choices=Role.choices, db_index=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="attribue par",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "role employe"
        verbose_name_plural = "roles employes"
        constraints = [
            models.UniqueConstraint(fields=["user", "role"], name="uniq_user_role"),
        ]

    def __str__(self):
        return f"{self.user} - {self.get_role_display()}"


ADMIN_ROLES = frozenset({UserRole.Role.SUPER_ADMIN.value, UserRole.Role.ADMIN.value})

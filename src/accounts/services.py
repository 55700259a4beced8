"""Service functions for employee accounts."""
import logging

from django.db import IntegrityError, transaction

from core.errors import ApiError

from .models import User, UserRole

logger = logging.getLogger("investdesk")


def create_employee(
    *,
    email,
    password,
    first_name,
    last_name,
    roles,
    actor=None,
    **profile_fields,
) -> User:
    """Create an employee account, its profile data and its roles in one transaction.

    Parameters
    ----------
    email, password, first_name, last_name : str
        Login and identity of the new employee.
    roles : iterable of str
        ``UserRole.Role`` values to grant; at least one is required.
    actor : User, optional
        Employee performing the creation, stored as ``created_by`` on roles.
    **profile_fields
        Extra ``User`` fields (phone, department, employee_code, avatar_url).

    Returns
    -------
    User
        The created employee. If any step fails nothing is persisted.
    """
    role_values = list(dict.fromkeys(str(role) for role in roles))
    if not role_values:
        raise ApiError("Au moins un role est obligatoire.", code="23502")
    unknown = set(role_values) - set(UserRole.Role.values)
    if unknown:
        raise ApiError(
            "Role inconnu.",
            code="23514",
            details={"roles": sorted(unknown)},
        )
    if User.objects.filter(email__iexact=email).exists():
        raise ApiError("Un utilisateur avec cette adresse e-mail existe deja.", code="23505", status_code=409)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                **profile_fields,
            )
            UserRole.objects.bulk_create(
                [UserRole(user=user, role=role, created_by=actor) for role in role_values]
            )
    except IntegrityError as exc:
        logger.warning("Employee creation rolled back for %s: %s", email, exc)
        raise ApiError.from_database_error(exc) from exc

    logger.info(
        "Employee %s created by %s with roles %s",
        user.email,
        getattr(actor, "email", None),
        ",".join(role_values),
    )
    return user


def attach_employee_details(entries, key="employee_id"):
    """Add ``name``, ``email`` and ``avatar_url`` to ranking entries, in place.

    Entries whose employee no longer exists are dropped.
    """
    employees = User.objects.in_bulk([entry[key] for entry in entries])
    result = []
    for entry in entries:
        employee = employees.get(entry[key])
        if employee is None:
            continue
        entry.update(
            {
                "name": employee.get_full_name() or employee.email,
                "email": employee.email,
                "avatar_url": employee.avatar_url,
            }
        )
        result.append(entry)
    return result

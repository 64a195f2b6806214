"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models

from directory.domain.value_objects import Role


class UserProfile(models.Model):
    """Persistence model for a provisioned user, keyed by subject id."""

    ROLE_CHOICES = [(role.value, role.name.title()) for role in Role]

    subject_id = models.CharField(primary_key=True, max_length=128)
    email = models.CharField(max_length=254)
    role = models.CharField(max_length=32, choices=ROLE_CHOICES, default=Role.SUBMITTER.value)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.email


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField()
    owner_id = models.CharField(max_length=128)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner_id", "-created_at"], name="event_owner_created_idx"),
            models.Index(fields=["title"], name="event_title_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Attendance(models.Model):
    """One member of a user's attendance history.

    ``event_id`` is not a foreign key; history entries may outlive the event
    they reference.
    """

    user = models.ForeignKey(UserProfile, on_delete=models.CASCADE, related_name="attendances")
    event_id = models.UUIDField()
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["joined_at", "id"]
        constraints = [
            models.UniqueConstraint(fields=["user", "event_id"], name="unique_attendance"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} -> {self.event_id}"

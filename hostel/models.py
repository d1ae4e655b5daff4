"""
Database models for the hostel backend.

The hostel is laid out as floors holding rooms; a student occupies a
room through a :class:`Booking`.  Everything a student submits (room
change, complaint, feedback, laundry, late entry, leave) is stored as
its own request row carrying the submitter and a snapshot of their
display name, so the admin console can render lists without joins.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class User(AbstractUser):
    """Custom user model with a hostel role.

    The email address is the login identifier and is also stored as the
    username.  The display name lives in ``first_name``.
    """
    ROLE_STUDENT = 'student'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_STUDENT, 'Student'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_STUDENT, db_index=True)

    @property
    def display_name(self) -> str:
        return self.get_full_name() or self.email or self.username

    @property
    def is_hostel_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Floor(models.Model):
    """One floor of the hostel (e.g. ``floor-3``)."""
    id = models.CharField(max_length=20, primary_key=True)
    floor_number = models.PositiveIntegerField(unique=True)
    name = models.CharField(max_length=50)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['floor_number']

    def __str__(self) -> str:
        return self.name


class Room(models.Model):
    """A room on a floor.  ``number`` is global across the hostel."""
    STATUS_AVAILABLE = 'Available'
    STATUS_PARTIAL = 'Partial'
    STATUS_FULL = 'Full'
    STATUS_MAINTENANCE = 'Maintenance'

    id = models.CharField(max_length=20, primary_key=True)
    floor = models.ForeignKey(Floor, on_delete=models.CASCADE, related_name='rooms')
    number = models.PositiveIntegerField(unique=True)
    name = models.CharField(max_length=50)
    capacity = models.PositiveSmallIntegerField(default=3)
    maintenance = models.BooleanField(default=False)

    class Meta:
        ordering = ['number']

    def __str__(self) -> str:
        return f"{self.name} ({self.floor_id})"


class Booking(models.Model):
    """A student's occupancy of a room.  One booking per user."""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='booking')
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name='bookings')
    full_name = models.CharField(max_length=120)
    student_id = models.CharField(max_length=50)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def summary(self) -> dict:
        return {
            'floorId': self.room.floor_id,
            'roomId': self.room_id,
            'roomName': self.room.name,
            'floorNumber': self.room.floor.floor_number,
        }

    def __str__(self) -> str:
        return f"{self.full_name} -> {self.room_id}"


class Submission(models.Model):
    """Fields shared by everything a student submits."""
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='+')
    user_name = models.CharField(max_length=150)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        abstract = True
        ordering = ['-created_at', '-id']


class DecidedRequest(Submission):
    """A submission an admin approves or rejects."""
    STATUS_PENDING = 'Pending'
    STATUS_APPROVED = 'Approved'
    STATUS_REJECTED = 'Rejected'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
    ]
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    decided_at = models.DateTimeField(null=True, blank=True)
    decided_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')

    class Meta(Submission.Meta):
        abstract = True


class RoomChangeRequest(DecidedRequest):
    current_room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name='+')
    preferred_room = models.ForeignKey(Room, null=True, blank=True, on_delete=models.PROTECT, related_name='+')
    reason = models.TextField()

    class Meta(DecidedRequest.Meta):
        indexes = [models.Index(fields=['status', 'created_at'])]

    def __str__(self) -> str:
        return f"RoomChange#{self.id} {self.user_name} ({self.status})"


class Complaint(Submission):
    CATEGORY_CHOICES = [
        ('Room Maintenance', 'Room Maintenance'),
        ('Mess/Food Quality', 'Mess/Food Quality'),
        ('Cleanliness', 'Cleanliness'),
        ('Noise Complaint', 'Noise Complaint'),
        ('Staff Behavior', 'Staff Behavior'),
        ('Other', 'Other'),
    ]
    STATUS_PENDING = 'Pending'
    STATUS_RESOLVED = 'Resolved'
    STATUS_CHOICES = [(STATUS_PENDING, 'Pending'), (STATUS_RESOLVED, 'Resolved')]

    category = models.CharField(max_length=40, choices=CATEGORY_CHOICES)
    description = models.TextField()
    location = models.ForeignKey(Room, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    resolved_at = models.DateTimeField(null=True, blank=True)

    def __str__(self) -> str:
        return f"{self.category} by {self.user_name}"


class Feedback(Submission):
    CATEGORY_CHOICES = [
        ('Overall Experience', 'Overall Experience'),
        ('Room Quality', 'Room Quality'),
        ('Mess & Food', 'Mess & Food'),
        ('Staff & Service', 'Staff & Service'),
        ('Facilities', 'Facilities'),
        ('Other', 'Other'),
    ]
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    category = models.CharField(max_length=40, choices=CATEGORY_CHOICES)
    comment = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"{self.rating}* {self.category} by {self.user_name}"


class LaundryRequest(Submission):
    STATUS_PENDING = 'Pending'
    STATUS_PROCESSING = 'Processing'
    STATUS_COMPLETED = 'Completed'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PROCESSING, 'Processing'),
        (STATUS_COMPLETED, 'Completed'),
    ]
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name='+')
    number_of_clothes = models.PositiveIntegerField()
    laundry_number = models.CharField(max_length=50)
    bag_number = models.CharField(max_length=50)
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Laundry#{self.id} bag {self.bag_number} ({self.status})"


class LateEntryRequest(DecidedRequest):
    departure_time = models.DateTimeField()
    expected_return_time = models.DateTimeField()
    reason = models.TextField()

    def __str__(self) -> str:
        return f"LateEntry#{self.id} {self.user_name} ({self.status})"


class LeaveRequest(DecidedRequest):
    departure_datetime = models.DateTimeField()
    return_datetime = models.DateTimeField()
    place_of_visit = models.CharField(max_length=255)
    reason = models.TextField()

    def __str__(self) -> str:
        return f"Leave#{self.id} {self.user_name} ({self.status})"


class StudentDetails(models.Model):
    """Contact and guardian information kept by each student."""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='details')
    full_name = models.CharField(max_length=120, blank=True)
    phone_number = models.CharField(max_length=32, blank=True)
    home_address = models.TextField(blank=True)
    father_name = models.CharField(max_length=120, blank=True)
    father_mobile = models.CharField(max_length=32, blank=True)
    mother_name = models.CharField(max_length=120, blank=True)
    mother_mobile = models.CharField(max_length=32, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.full_name or str(self.user)


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at']),
            models.Index(fields=['object_type', 'object_id', 'created_at']),
        ]

    def __str__(self):
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"

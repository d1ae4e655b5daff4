"""
Django admin registrations for the hostel models, so staff can inspect
and correct data under ``/admin/``.
"""
from django.contrib import admin

from .models import (
    AuditEvent,
    Booking,
    Complaint,
    Feedback,
    Floor,
    LateEntryRequest,
    LaundryRequest,
    LeaveRequest,
    Room,
    RoomChangeRequest,
    StudentDetails,
    User,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'first_name', 'role', 'is_active', 'is_staff')
    list_filter = ('role', 'is_active')
    search_fields = ('username', 'email', 'first_name')


@admin.register(Floor)
class FloorAdmin(admin.ModelAdmin):
    list_display = ('id', 'floor_number', 'name')


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'floor', 'capacity', 'maintenance')
    list_filter = ('floor', 'maintenance')
    search_fields = ('id', 'name')


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'student_id', 'room', 'user', 'created_at')
    search_fields = ('full_name', 'student_id', 'user__username')
    list_select_related = ('room', 'user')


@admin.register(RoomChangeRequest)
class RoomChangeRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'user_name', 'current_room', 'preferred_room', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('user_name', 'reason')


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ('id', 'user_name', 'category', 'status', 'created_at')
    list_filter = ('category', 'status')
    search_fields = ('user_name', 'description')


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ('id', 'user_name', 'rating', 'category', 'created_at')
    list_filter = ('rating', 'category')


@admin.register(LaundryRequest)
class LaundryRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'user_name', 'room', 'bag_number', 'number_of_clothes', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('user_name', 'bag_number', 'laundry_number')


@admin.register(LateEntryRequest)
class LateEntryRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'user_name', 'departure_time', 'expected_return_time', 'status')
    list_filter = ('status',)


@admin.register(LeaveRequest)
class LeaveRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'user_name', 'place_of_visit', 'departure_datetime', 'return_datetime', 'status')
    list_filter = ('status',)


@admin.register(StudentDetails)
class StudentDetailsAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'user', 'phone_number', 'updated_at')
    search_fields = ('full_name', 'user__username', 'phone_number')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action',)
    search_fields = ('object_id', 'user__username')

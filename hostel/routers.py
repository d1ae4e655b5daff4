"""
URL mappings for the hostel backend API.

Student endpoints live under ``/api/``, the admin console under
``/api/admin/``.  Trailing slashes are deliberately omitted.
"""
from django.urls import path, include

from .auth_views import jwt_refresh_view, login_view, logout_view, me_view, register_view
from .views import bookings, complaints, feedback, health, hostel, laundry, passes, room_change
from .views.dashboard import admin_dashboard_view, dashboard_view
from .views.students import personal_details_view, student_records_view


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Authentication
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    path('api/auth/me', me_view, name='me_view'),
    # Floors and rooms
    path('api/hostel/seed', hostel.seed_view, name='hostel_seed'),
    path('api/hostel/floors', hostel.floors_view, name='hostel_floors'),
    path('api/hostel/summary', hostel.summary_view, name='hostel_summary'),
    path('api/hostel/rooms/maintenance', hostel.maintenance_view, name='hostel_maintenance'),
    # Booking
    path('api/bookings', bookings.book_view, name='book_room'),
    path('api/bookings/me', bookings.my_booking_view, name='my_booking'),
    # Room change
    path('api/room-change', room_change.submit_view, name='room_change_submit'),
    path('api/room-change/mine', room_change.mine_view, name='room_change_mine'),
    path('api/admin/room-change', room_change.admin_list_view, name='admin_room_change_list'),
    path('api/admin/room-change/<int:request_id>/approve', room_change.approve_view, name='admin_room_change_approve'),
    path('api/admin/room-change/<int:request_id>/reject', room_change.reject_view, name='admin_room_change_reject'),
    # Complaints
    path('api/complaints', complaints.submit_view, name='complaint_submit'),
    path('api/complaints/mine', complaints.mine_view, name='complaint_mine'),
    path('api/admin/complaints', complaints.admin_list_view, name='admin_complaint_list'),
    path('api/admin/complaints/<int:complaint_id>/resolve', complaints.resolve_view, name='admin_complaint_resolve'),
    # Feedback
    path('api/feedback', feedback.submit_view, name='feedback_submit'),
    path('api/admin/feedback', feedback.admin_list_view, name='admin_feedback_list'),
    # Laundry
    path('api/laundry', laundry.submit_view, name='laundry_submit'),
    path('api/laundry/mine', laundry.mine_view, name='laundry_mine'),
    path('api/admin/laundry', laundry.admin_list_view, name='admin_laundry_list'),
    path('api/admin/laundry/<int:request_id>/status', laundry.status_view, name='admin_laundry_status'),
    # Late entry
    path('api/late-entry', passes.late_entry_submit, name='late_entry_submit'),
    path('api/late-entry/mine', passes.late_entry_mine, name='late_entry_mine'),
    path('api/admin/late-entry', passes.late_entry_admin_list, name='admin_late_entry_list'),
    path('api/admin/late-entry/<int:request_id>/approve', passes.late_entry_approve, name='admin_late_entry_approve'),
    path('api/admin/late-entry/<int:request_id>/reject', passes.late_entry_reject, name='admin_late_entry_reject'),
    # Leave
    path('api/leave', passes.leave_submit, name='leave_submit'),
    path('api/leave/mine', passes.leave_mine, name='leave_mine'),
    path('api/admin/leave', passes.leave_admin_list, name='admin_leave_list'),
    path('api/admin/leave/<int:request_id>/approve', passes.leave_approve, name='admin_leave_approve'),
    path('api/admin/leave/<int:request_id>/reject', passes.leave_reject, name='admin_leave_reject'),
    # Students
    path('api/personal-details', personal_details_view, name='personal_details'),
    path('api/admin/students', student_records_view, name='admin_students'),
    # Dashboards
    path('api/dashboard', dashboard_view, name='dashboard'),
    path('api/admin/dashboard', admin_dashboard_view, name='admin_dashboard'),
]

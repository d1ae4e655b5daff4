"""Hostel application for HostelInsight.

This package contains the models, services, views and route
registrations behind the student self-service API and the admin
console.
"""

"""Zen Den Tracker package.

Check-in/check-out tracking for the school counseling room, organized by
feature modules (visits, dashboard, exports, staff) with a thin Flask
controller layer over service/repository layers.
"""

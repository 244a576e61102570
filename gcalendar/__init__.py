"""
gcalendar/ - Google Calendar Integration
========================================
Credential loading and event calls against the Google Calendar v3 API.
"""

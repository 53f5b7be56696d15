"""Services module.

This module provides the service layer architecture:
- exceptions: Custom service exceptions
- journey_plans: Journey plan storage, numbering and management
- auth: Password hashing, session tokens and user accounts
- activity_log_service: Best-effort audit trail
- options_service: Reference data for the journey plan form
"""

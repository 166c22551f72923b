"""
Use Cases

Organized into domain folders:
- auth/: Signup, login, caller resolution, password reset
- invitations/: Invitation lifecycle
- organizations/: Organization profile and members
- audit/: Audit log listing
- admin/: Platform administration

Import from subdirectories.
"""

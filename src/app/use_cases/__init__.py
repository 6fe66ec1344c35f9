"""
Use Cases

Organized into domain folders:
- users/: Profiles
- groups/: Groups and membership
- invitations/: Invitations and invite links
- statuses/: Availability statuses

Import from subdirectories for better organization.
"""

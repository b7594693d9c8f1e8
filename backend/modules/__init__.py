"""
Feature modules for the IOU backend.

- users: accounts, phone + PIN credentials
- auth: signed session tokens and the login routes
- ious: IOU lifecycle, sharing, archives, contacts, phone linking
- notifications: per-user in-app notifications
- ratelimit: Redis sliding window limits
- uploads: image uploads to object storage

Each module exposes Protocols in interfaces.py and depends on other
modules only through them.
"""

"""
Event lifecycle package.

* ``models``      – ``Event`` ORM model, status and filter enums.
* ``repository``  – query shapes and ordering rules.
* ``service``     – request validation, the status policy and the
  attachment-then-insert ordering used on creation.
* ``errors``      – error taxonomy shared with the API layer.
"""

"""Users bounded context.

CRUD management of user accounts, dispatched through the mediator
pipeline and stored in an in-memory repository.
"""

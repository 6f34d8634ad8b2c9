"""Service layer — operations over one dashboard workspace.

Every public method returns a :class:`~opsdash.services.result.ServiceResult`.
"""

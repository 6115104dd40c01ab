# gradebook/api/dependencies/owner.py
import uuid

from fastapi import Header


def get_owner_id(owner_id: uuid.UUID = Header(..., alias="X-Owner-Id")) -> uuid.UUID:
    """
    Owner scope for the request. Authentication happens upstream; the
    authenticated teacher id arrives in the X-Owner-Id header.
    """
    return owner_id

from artgallery.db.database import get_session, init_db
from artgallery.db.operations import (
    delete_state_record,
    get_state_record,
    put_state_record,
)

__all__ = [
    "delete_state_record",
    "get_session",
    "get_state_record",
    "init_db",
    "put_state_record",
]

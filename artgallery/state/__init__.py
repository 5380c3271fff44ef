from artgallery.state.codec import CART_KEY, DARK_MODE_KEY, FAVORITES_KEY, CorruptStateError
from artgallery.state.container import ContainerStatus, SessionState
from artgallery.state.storage import MemoryStateStorage, SqlStateStorage, StateStorage

__all__ = [
    "CART_KEY",
    "DARK_MODE_KEY",
    "FAVORITES_KEY",
    "ContainerStatus",
    "CorruptStateError",
    "MemoryStateStorage",
    "SessionState",
    "SqlStateStorage",
    "StateStorage",
]

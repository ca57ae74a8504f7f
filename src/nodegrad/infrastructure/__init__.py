from ._payload import clone_value, is_payload, ones_like, payload_size, zeros_like

__all__ = [
    "clone_value",
    "is_payload",
    "ones_like",
    "payload_size",
    "zeros_like",
]

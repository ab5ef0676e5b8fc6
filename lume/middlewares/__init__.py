from .access import handlers as access_handlers
from .artifacts import handlers as artifact_handlers

__all__ = ['handlers']


add_handlers = (
    access_handlers,
    artifact_handlers,
)
handlers = {}
for add_handler in add_handlers:
    for key, value in add_handler.items():
        handlers[key] = value
